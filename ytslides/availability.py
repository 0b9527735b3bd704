"""Checking that a YouTube video can be accessed, using yt-dlp."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

from ytslides.errors import (
    ExternalDependencyUnavailable,
    ExtractionError,
    InternalError,
    InvalidUrl,
    NetworkTimeout,
    VideoAgeRestricted,
    VideoDeleted,
    VideoPrivate,
    VideoRegionLocked,
    VideoTooLong,
    VideoUnavailable,
)

_YTDLP = "yt-dlp"
_VERSION_TIMEOUT = 2.0


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"field `{key}` must be a non-negative integer")
    elif not isinstance(value, kind):
        raise ValueError(f"field `{key}` must be of type {kind.__name__}")
    return value


@dataclass(frozen=True)
class VideoMetadata:
    """Metadata reported for a video."""

    title: str
    duration: int
    width: int
    height: int
    uploader: str
    upload_date: str
    view_count: int | None = None
    age_limit: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VideoMetadata:
        """Build metadata from a yt-dlp JSON object; raise ValueError if malformed."""
        if not isinstance(data, Mapping):
            raise ValueError("metadata must be a JSON object")
        view_count = data.get("view_count")
        if view_count is not None:
            view_count = _require(data, "view_count", int)
        age_limit = data.get("age_limit")
        age_limit = 0 if age_limit is None else _require(data, "age_limit", int)
        return cls(
            title=_require(data, "title", str),
            duration=_require(data, "duration", int),
            width=_require(data, "width", int),
            height=_require(data, "height", int),
            uploader=_require(data, "uploader", str),
            upload_date=_require(data, "upload_date", str),
            view_count=view_count,
            age_limit=age_limit,
        )


@dataclass(frozen=True)
class AvailabilityStatus:
    """Whether a video can be downloaded, and if not, why."""

    kind: str
    reason: str | None = None

    AVAILABLE: ClassVar[AvailabilityStatus]
    PRIVATE: ClassVar[AvailabilityStatus]
    DELETED: ClassVar[AvailabilityStatus]
    AGE_RESTRICTED: ClassVar[AvailabilityStatus]
    REGION_LOCKED: ClassVar[AvailabilityStatus]

    @classmethod
    def unavailable(cls, reason: str) -> AvailabilityStatus:
        """Status for a video that is unavailable for some other reason."""
        return cls("unavailable", reason)

    def __str__(self) -> str:
        return f"{self.kind}: {self.reason}" if self.reason is not None else self.kind


AvailabilityStatus.AVAILABLE = AvailabilityStatus("available")
AvailabilityStatus.PRIVATE = AvailabilityStatus("private")
AvailabilityStatus.DELETED = AvailabilityStatus("deleted")
AvailabilityStatus.AGE_RESTRICTED = AvailabilityStatus("age_restricted")
AvailabilityStatus.REGION_LOCKED = AvailabilityStatus("region_locked")


@dataclass(frozen=True)
class AvailabilityCheckerConfig:
    """Limits applied when checking availability.

    A duration limit of 0 means no limit.
    """

    timeout: float = 5.0
    max_duration: int = 4 * 60 * 60
    min_duration: int = 0


def _classify_stderr(stderr: str) -> ExtractionError:
    text = stderr.lower()
    if "private video" in text:
        return VideoPrivate()
    if any(word in text for word in ("deleted", "unavailable", "not found")):
        return VideoDeleted()
    if any(word in text for word in ("age", "sign in", "age-gate")):
        return VideoAgeRestricted()
    if any(word in text for word in ("region", "geo", "country")):
        return VideoRegionLocked()
    return VideoUnavailable()


async def _run(args: list[str], timeout: float) -> tuple[int, bytes, bytes]:
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ExternalDependencyUnavailable(f"yt-dlp execution failed: {exc}") from exc
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
        raise NetworkTimeout(timeout) from None
    return process.returncode, stdout, stderr


class AvailabilityChecker:
    """Verifies with yt-dlp that a video is available and fetches its metadata."""

    def __init__(self, config: AvailabilityCheckerConfig | None = None) -> None:
        self.config = config if config is not None else AvailabilityCheckerConfig()

    async def check_availability(self, video_id: str, url: str) -> VideoMetadata:
        """Return the video's metadata, raising if it cannot be processed."""
        metadata = await self._fetch_metadata(url)
        config = self.config

        if config.max_duration > 0 and metadata.duration > config.max_duration:
            raise VideoTooLong(metadata.duration, config.max_duration)
        if config.min_duration > 0 and metadata.duration < config.min_duration:
            raise InvalidUrl(
                f"Video is too short: {metadata.duration} seconds "
                f"(minimum: {config.min_duration} seconds)"
            )
        if metadata.age_limit > 0:
            raise VideoAgeRestricted()
        return metadata

    async def check_status(self, video_id: str, url: str) -> AvailabilityStatus:
        """Return the availability status, never raising for an unavailable video."""
        try:
            metadata = await self._fetch_metadata(url)
        except ExtractionError as exc:
            message = str(exc).lower()
            if "private" in message:
                return AvailabilityStatus.PRIVATE
            if any(w in message for w in ("deleted", "not found", "unavailable")):
                return AvailabilityStatus.DELETED
            if "age" in message or "sign in" in message:
                return AvailabilityStatus.AGE_RESTRICTED
            if "region" in message or "country" in message:
                return AvailabilityStatus.REGION_LOCKED
            return AvailabilityStatus.unavailable(message)
        if metadata.age_limit > 0:
            return AvailabilityStatus.AGE_RESTRICTED
        return AvailabilityStatus.AVAILABLE

    async def check_ytdlp_available(self) -> None:
        """Raise unless yt-dlp can be run."""
        returncode, _, _ = await _run([_YTDLP, "--version"], _VERSION_TIMEOUT)
        if returncode != 0:
            raise ExternalDependencyUnavailable("yt-dlp is not installed or not working")

    async def _fetch_metadata(self, url: str) -> VideoMetadata:
        returncode, stdout, stderr = await _run(
            [_YTDLP, "--dump-json", "--no-playlist", "--no-warnings", url],
            self.config.timeout,
        )
        if returncode != 0:
            raise _classify_stderr(stderr.decode("utf-8", errors="replace"))
        try:
            data = json.loads(stdout.decode("utf-8", errors="replace"))
            return VideoMetadata.from_dict(data)
        except ValueError as exc:
            raise InternalError(f"Failed to parse yt-dlp JSON output: {exc}") from exc


def _default_metadata() -> VideoMetadata:
    return VideoMetadata(
        title="Test Video",
        duration=180,
        width=1920,
        height=1080,
        uploader="Test Channel",
        upload_date="20240101",
        view_count=1000,
        age_limit=0,
    )


@dataclass
class MockAvailabilityChecker:
    """Stand-in checker holding a canned outcome."""

    available: bool = True
    metadata: VideoMetadata | None = field(default_factory=_default_metadata)
    error: ExtractionError | None = None