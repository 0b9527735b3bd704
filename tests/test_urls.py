import pytest

from ytslides.errors import InvalidUrl
from ytslides.urls import (
    extract_video_id,
    is_valid_youtube_url,
    validate_video_id_format,
    validate_video_url,
)


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s",
    ],
)
def test_validate_valid_urls(url):
    event = validate_video_url(url)
    assert event.url == url
    assert event.video_id == "dQw4w9WgXcQ"


def test_validate_invalid_url():
    with pytest.raises(InvalidUrl):
        validate_video_url("https://example.com/video")


def test_validate_empty_url():
    with pytest.raises(InvalidUrl):
        validate_video_url("")


def test_validate_invalid_video_id_format():
    with pytest.raises(InvalidUrl):
        validate_video_url("https://www.youtube.com/watch?v=invalid@id")


def test_validate_url_without_id():
    with pytest.raises(InvalidUrl, match="Could not extract video ID"):
        validate_video_url("https://www.youtube.com/watch")


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s",
    ],
)
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


def test_extract_video_id_none_found():
    assert extract_video_id("https://example.com/video") == ""


def test_is_valid_youtube_url():
    assert is_valid_youtube_url("https://www.youtube.com/watch?v=test")
    assert is_valid_youtube_url("https://youtube.com/watch?v=test")
    assert is_valid_youtube_url("https://m.youtube.com/watch?v=test")
    assert is_valid_youtube_url("https://music.youtube.com/watch?v=test")
    assert is_valid_youtube_url("https://youtu.be/test")
    assert not is_valid_youtube_url("https://example.com/video")
    assert not is_valid_youtube_url("http://www.youtube.com/watch?v=test")


@pytest.mark.parametrize("video_id", ["dQw4w9WgXcQ", "abcdefghijk", "ABC123-xyz_1"])
def test_validate_video_id_format_valid(video_id):
    assert validate_video_id_format(video_id) is None


@pytest.mark.parametrize(
    "video_id", ["", "short", "this_is_way_too_long_id", "invalid@chars!"]
)
def test_validate_video_id_format_invalid(video_id):
    with pytest.raises(InvalidUrl):
        validate_video_id_format(video_id)


def test_validate_video_id_format_length_message():
    with pytest.raises(InvalidUrl, match="invalid length: 5"):
        validate_video_id_format("short")