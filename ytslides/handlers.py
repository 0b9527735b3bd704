"""Handlers that turn video workflow commands into events."""

from __future__ import annotations

import random

from ytslides.errors import DownloadFailed, NetworkTimeout
from ytslides.messages import (
    DownloadRetryInitiated,
    DownloadVideoCommand,
    HandleTimeoutCommand,
    NetworkTimeoutOccurred,
    ValidateUrlCommand,
    VerifyAvailabilityCommand,
    VideoAvailabilityVerified,
    VideoDownloaded,
    VideoUrlValidated,
)
from ytslides.urls import validate_video_url

_JITTER_FRACTION = 0.1


def handle_download_video(
    command: DownloadVideoCommand, output_path: str, duration_sec: int
) -> VideoDownloaded:
    """Return the event for a video downloaded into output_path.

    Raises DownloadFailed if output_path is empty.
    """
    if not output_path:
        raise DownloadFailed(0, "Output path is empty")

    return VideoDownloaded(
        video_id=command.video_id,
        path=f"{output_path}/{command.video_id}.mp4",
        duration_sec=duration_sec,
        width=0,
        height=0,
        file_size=0,
    )


def handle_validate_url(command: ValidateUrlCommand) -> VideoUrlValidated:
    """Validate the command's URL; raise InvalidUrl if it is not usable."""
    return validate_video_url(command.url)


def handle_verify_availability(
    command: VerifyAvailabilityCommand, metadata
) -> VideoAvailabilityVerified:
    """Return the availability event built from the fetched metadata."""
    return VideoAvailabilityVerified(
        video_id=command.video_id,
        title=metadata.title,
        duration=metadata.duration,
        width=metadata.width,
        height=metadata.height,
        uploader=metadata.uploader,
        upload_date=metadata.upload_date,
        age_limit=metadata.age_limit,
    )


def handle_timeout(command: HandleTimeoutCommand, max_retries: int) -> NetworkTimeoutOccurred:
    """Return the timeout event, or raise NetworkTimeout once retries are exhausted."""
    if command.retry_attempt >= max_retries:
        raise NetworkTimeout(command.timeout_secs)

    return NetworkTimeoutOccurred(
        video_id=command.video_id,
        operation=command.operation,
        timeout_secs=command.timeout_secs,
        retry_attempt=command.retry_attempt,
        max_retries=max_retries,
    )


def calculate_backoff(attempt: int, initial_backoff: float, max_backoff: float) -> float:
    """Return the exponential backoff in seconds for a 0-indexed retry attempt.

    The delay doubles with each attempt, is capped at max_backoff, and gets up
    to 10% random jitter added on top.
    """
    backoff = min(initial_backoff * 2.0**attempt, max_backoff)
    jitter = backoff * _JITTER_FRACTION
    return backoff + random.random() * jitter


def create_retry_event(video_id: str, attempt: int, backoff_secs: int) -> DownloadRetryInitiated:
    """Return the event announcing a scheduled download retry."""
    return DownloadRetryInitiated(video_id=video_id, attempt=attempt, backoff_secs=backoff_secs)