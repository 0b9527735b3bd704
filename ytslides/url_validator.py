"""Structured validation of YouTube URLs."""

from __future__ import annotations

from urllib.parse import SplitResult, parse_qsl, urlsplit

from ytslides.errors import InvalidUrl
from ytslides.urls import validate_video_id_format as _validate_video_id_format

_YOUTUBE_HOSTS = frozenset(
    {"www.youtube.com", "youtube.com", "youtu.be", "m.youtube.com", "music.youtube.com"}
)
_PATH_PREFIXES = frozenset({"embed", "shorts", "v"})


def _split(url: str | SplitResult) -> SplitResult:
    if isinstance(url, SplitResult):
        return url
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidUrl(f"Invalid URL format: {exc}") from exc
    if not parts.scheme:
        raise InvalidUrl("Invalid URL format: relative URL without a base")
    return parts


def _host(parts: SplitResult) -> str:
    try:
        return parts.hostname or ""
    except ValueError:
        return ""


class UrlValidator:
    """Validates YouTube URLs by parsing them and extracts their video IDs."""

    def validate_and_extract(self, url: str) -> tuple[str, str]:
        """Return the URL and its video ID; raise InvalidUrl if it is not usable."""
        if not url:
            raise InvalidUrl("URL is empty")

        parts = _split(url)
        if not self.is_youtube_url(parts):
            raise InvalidUrl(f"Not a valid YouTube URL: {url}")

        video_id = self.extract_video_id(parts)
        self.validate_video_id_format(video_id)
        return url, video_id

    def is_youtube_url(self, url: str | SplitResult) -> bool:
        """Return True if the URL's host is one of YouTube's hosts."""
        try:
            parts = _split(url)
        except InvalidUrl:
            return False
        return _host(parts) in _YOUTUBE_HOSTS

    def extract_video_id(self, url: str | SplitResult) -> str:
        """Return the video ID held in the URL; raise InvalidUrl if there is none."""
        parts = _split(url)

        if _host(parts) == "youtu.be":
            video_id = parts.path.lstrip("/")
            if not video_id:
                raise InvalidUrl("No video ID found in URL")
            return video_id.split("?")[0]

        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            if key == "v":
                return value

        segments = [segment for segment in parts.path.split("/") if segment]
        if len(segments) >= 2 and segments[0] in _PATH_PREFIXES:
            return segments[1]

        raise InvalidUrl("Could not extract video ID from URL")

    def validate_video_id_format(self, video_id: str) -> None:
        """Raise InvalidUrl unless the video ID is 10-12 URL-safe characters."""
        _validate_video_id_format(video_id)