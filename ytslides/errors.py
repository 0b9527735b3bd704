"""Errors raised while validating, downloading and processing videos."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for every error the extractor reports."""

    hint: str = ""

    def user_message(self) -> str:
        """Return a message suitable for showing to the person running the tool."""
        text = str(self)
        return f"{text}. {self.hint}" if self.hint else text


class _DetailedError(ExtractionError):
    """An error carrying a free-form detail message."""

    prefix: str = "Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.prefix}: {message}")


class InvalidUrl(_DetailedError):
    """The given URL is not a usable YouTube video URL."""

    prefix = "Invalid URL"
    hint = "Check that the link points to a single YouTube video."


class InvalidConfig(_DetailedError):
    """A configuration value or state transition is not allowed."""

    prefix = "Invalid configuration"


class DownloadFailed(ExtractionError):
    """The video download did not succeed."""

    hint = "Check your network connection and try again."

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Download failed (exit code {code}): {message}")


class NetworkTimeout(ExtractionError):
    """A network operation took longer than allowed."""

    hint = "The network may be slow; try again later."

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Network operation timed out after {timeout:g} seconds")


class VideoTooLong(ExtractionError):
    """The video exceeds the configured maximum duration."""

    hint = "Choose a shorter video or raise the duration limit."

    def __init__(self, duration: int, max_duration: int) -> None:
        self.duration = duration
        self.max_duration = max_duration
        super().__init__(
            f"Video is too long: {duration} seconds (maximum: {max_duration} seconds)"
        )


class VideoPrivate(ExtractionError):
    """The video is private."""

    hint = "Only public or unlisted videos can be processed."

    def __init__(self) -> None:
        super().__init__("Video is private")


class VideoDeleted(ExtractionError):
    """The video was removed or never existed."""

    def __init__(self) -> None:
        super().__init__("Video has been deleted or does not exist")


class VideoAgeRestricted(ExtractionError):
    """The video requires age verification."""

    hint = "Age-restricted videos cannot be downloaded without signing in."

    def __init__(self) -> None:
        super().__init__("Video is age-restricted")


class VideoRegionLocked(ExtractionError):
    """The video is blocked in the current region."""

    def __init__(self) -> None:
        super().__init__("Video is region-locked and not available in your country")


class VideoUnavailable(ExtractionError):
    """The video cannot be accessed for an unspecified reason."""

    def __init__(self, video_id: str | None = None) -> None:
        self.video_id = video_id
        super().__init__(f"Video unavailable: {video_id if video_id else 'unknown'}")


class ExternalDependencyUnavailable(_DetailedError):
    """A required external program is missing or failed to run."""

    prefix = "External dependency unavailable"
    hint = "Install yt-dlp and ffmpeg and make sure they are on PATH."


class FileSystemError(_DetailedError):
    """A file or directory operation failed."""

    prefix = "File system error"


class InternalError(_DetailedError):
    """An unexpected internal failure."""

    prefix = "Internal error"


class SessionNotFound(ExtractionError):
    """No session exists with the given identifier."""

    def __init__(self, session_id: object) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class SessionRecoveryFailed(_DetailedError):
    """A persisted session could not be restored."""

    prefix = "Session recovery failed"


class OutputDirectoryNotFound(ExtractionError):
    """The output directory does not exist and could not be created."""

    hint = "Check that the output path is writable."

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Output directory not found: {path}")