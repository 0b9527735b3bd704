import uuid
from types import SimpleNamespace

import pytest

from ytslides.errors import DownloadFailed, InvalidUrl, NetworkTimeout
from ytslides.handlers import (
    calculate_backoff,
    create_retry_event,
    handle_download_video,
    handle_timeout,
    handle_validate_url,
    handle_verify_availability,
)
from ytslides.messages import (
    DownloadVideoCommand,
    HandleTimeoutCommand,
    ValidateUrlCommand,
    VerifyAvailabilityCommand,
)


def _new_id() -> str:
    return str(uuid.uuid4())


def test_handle_download_video_success():
    video_id = _new_id()
    event = handle_download_video(DownloadVideoCommand(video_id=video_id), "/tmp", 180)
    assert "/tmp/" in event.path
    assert event.path == f"/tmp/{video_id}.mp4"
    assert event.duration_sec == 180
    assert event.video_id == video_id
    assert (event.width, event.height, event.file_size) == (0, 0, 0)


def test_handle_download_video_empty_path():
    with pytest.raises(DownloadFailed) as info:
        handle_download_video(DownloadVideoCommand(video_id=_new_id()), "", 0)
    assert info.value.code == 0
    assert info.value.message == "Output path is empty"


def test_handle_validate_url_success():
    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    event = handle_validate_url(ValidateUrlCommand(url=url))
    assert event.url == url
    assert event.video_id == "dQw4w9WgXcQ"


def test_handle_validate_url_invalid():
    with pytest.raises(InvalidUrl):
        handle_validate_url(ValidateUrlCommand(url="https://example.com/video"))


def test_handle_verify_availability():
    video_id = _new_id()
    command = VerifyAvailabilityCommand(
        video_id=video_id, url="https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    )
    metadata = SimpleNamespace(
        title="Test Video",
        duration=180,
        width=1920,
        height=1080,
        uploader="Test Channel",
        upload_date="20240101",
        view_count=1000,
        age_limit=0,
    )
    event = handle_verify_availability(command, metadata)
    assert event.video_id == video_id
    assert event.title == "Test Video"
    assert event.duration == 180
    assert event.width == 1920
    assert event.height == 1080
    assert event.uploader == "Test Channel"
    assert event.upload_date == "20240101"
    assert event.age_limit == 0


def test_handle_timeout_within_retries():
    command = HandleTimeoutCommand(
        video_id=_new_id(), operation="download", timeout_secs=60, retry_attempt=1
    )
    event = handle_timeout(command, 3)
    assert event.operation == "download"
    assert event.timeout_secs == 60
    assert event.retry_attempt == 1
    assert event.max_retries == 3


def test_handle_timeout_exhausted():
    command = HandleTimeoutCommand(
        video_id=_new_id(), operation="download", timeout_secs=60, retry_attempt=3
    )
    with pytest.raises(NetworkTimeout) as info:
        handle_timeout(command, 3)
    assert info.value.timeout == 60


@pytest.mark.parametrize("attempt, low, high", [(0, 1, 2), (1, 2, 3), (2, 4, 5)])
def test_calculate_backoff(attempt, low, high):
    backoff = calculate_backoff(attempt, 1.0, 30.0)
    assert low <= backoff < high


def test_calculate_backoff_max():
    backoff = calculate_backoff(10, 10.0, 20.0)
    assert 20 <= backoff < 25


def test_calculate_backoff_jitter_bounded():
    for _ in range(50):
        backoff = calculate_backoff(3, 1.0, 100.0)
        assert 8.0 <= backoff <= 8.8


def test_create_retry_event():
    video_id = _new_id()
    event = create_retry_event(video_id, 2, 4)
    assert event.video_id == video_id
    assert event.attempt == 2
    assert event.backoff_secs == 4