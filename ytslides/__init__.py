"""Validate YouTube URLs, check availability and download videos with yt-dlp, and track processing sessions."""

__version__ = "0.1.0"