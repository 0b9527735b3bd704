"""Validation of YouTube URLs and extraction of video IDs."""

from __future__ import annotations

import re

from ytslides.errors import InvalidUrl
from ytslides.messages import VideoUrlValidated

_VIDEO_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]{10,12}")

_YOUTUBE_PREFIXES = (
    "https://www.youtube.com/",
    "https://youtube.com/",
    "https://m.youtube.com/",
    "https://music.youtube.com/",
    "https://youtu.be/",
)

# Markers searched for in order, with the character that ends the ID after each.
_ID_MARKERS = (
    ("v=", "&"),
    ("youtu.be/", "?"),
    ("/embed/", "?"),
    ("/shorts/", "?"),
    ("/v/", "?"),
)


def validate_video_url(url: str) -> VideoUrlValidated:
    """Validate a YouTube URL and return the event carrying its video ID.

    Raises InvalidUrl if the URL is empty, not a YouTube URL, or holds no
    well-formed video ID.
    """
    if not url:
        raise InvalidUrl("URL is empty")
    if not is_valid_youtube_url(url):
        raise InvalidUrl(f"Not a valid YouTube URL: {url}")

    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidUrl("Could not extract video ID from URL")

    validate_video_id_format(video_id)
    return VideoUrlValidated(url=url, video_id=video_id)


def extract_video_id(url: str) -> str:
    """Return the video ID found in a URL, or an empty string if there is none."""
    for marker, terminator in _ID_MARKERS:
        if marker in url:
            return url.split(marker)[1].split(terminator)[0]
    return ""


def is_valid_youtube_url(url: str) -> bool:
    """Return True if the URL starts with a recognised HTTPS YouTube prefix."""
    return url.startswith(_YOUTUBE_PREFIXES)


def validate_video_id_format(video_id: str) -> None:
    """Raise InvalidUrl unless the video ID is 10-12 URL-safe characters."""
    if not video_id:
        raise InvalidUrl("Video ID is empty")

    length = len(video_id.encode("utf-8"))
    if length < 10 or length > 12:
        raise InvalidUrl(
            f"Video ID has invalid length: {length} (expected 10-12 characters)"
        )

    if not _VIDEO_ID_PATTERN.fullmatch(video_id):
        raise InvalidUrl(f"Video ID has invalid format: {video_id}")