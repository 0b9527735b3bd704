"""Commands and events exchanged within the video workflow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DownloadVideoCommand:
    """Request to download a video."""

    video_id: str


@dataclass(frozen=True)
class ValidateUrlCommand:
    """Request to validate a YouTube URL."""

    url: str


@dataclass(frozen=True)
class VerifyAvailabilityCommand:
    """Request to verify that a video can be accessed."""

    video_id: str
    url: str


@dataclass(frozen=True)
class HandleTimeoutCommand:
    """Request to handle a network timeout during an operation."""

    video_id: str
    operation: str
    timeout_secs: int
    retry_attempt: int


@dataclass(frozen=True)
class VideoUrlValidated:
    """A YouTube URL was validated and its video ID extracted."""

    url: str
    video_id: str


@dataclass(frozen=True)
class VideoAvailabilityVerified:
    """A video was found to be available."""

    video_id: str
    title: str
    duration: int
    width: int
    height: int
    uploader: str
    upload_date: str
    age_limit: int = 0


@dataclass(frozen=True)
class VideoDownloaded:
    """A video file was downloaded."""

    video_id: str
    path: str
    duration_sec: int
    width: int
    height: int
    file_size: int


@dataclass(frozen=True)
class NetworkTimeoutOccurred:
    """A network operation timed out and may be retried."""

    video_id: str
    operation: str
    timeout_secs: int
    retry_attempt: int
    max_retries: int


@dataclass(frozen=True)
class DownloadRetryInitiated:
    """A download retry has been scheduled."""

    video_id: str
    attempt: int
    backoff_secs: int