import asyncio

import pytest

from ytslides.downloader import VideoDownloader
from ytslides.errors import DownloadFailed, ExternalDependencyUnavailable
from ytslides.messages import DownloadVideoCommand

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
VIDEO_ID = "dQw4w9WgXcQ"


class _FakeProcess:
    def __init__(self, returncode, stderr):
        self.returncode = returncode
        self._stderr = stderr

    async def communicate(self):
        return b"", self._stderr


def _install(monkeypatch, returncode=0, stderr=b""):
    calls = []

    async def fake_exec(*args, **kwargs):
        calls.append(args)
        return _FakeProcess(returncode, stderr)

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)
    return calls


@pytest.mark.asyncio
async def test_download_success(monkeypatch, tmp_path):
    calls = _install(monkeypatch)
    output_dir = str(tmp_path / "videos")
    event = await VideoDownloader().download_video(
        DownloadVideoCommand(video_id=VIDEO_ID), URL, output_dir
    )
    assert event.path == f"{output_dir}/{VIDEO_ID}.mp4"
    assert event.video_id == VIDEO_ID
    assert event.width == 1920
    assert event.height == 1080
    assert event.duration_sec == 0
    assert event.file_size == 0
    assert (tmp_path / "videos").is_dir()


@pytest.mark.asyncio
async def test_download_invokes_ytdlp(monkeypatch, tmp_path):
    calls = _install(monkeypatch)
    output_dir = str(tmp_path)
    await VideoDownloader().download_video(
        DownloadVideoCommand(video_id=VIDEO_ID), URL, output_dir
    )
    assert calls == [
        (
            "yt-dlp",
            "-f",
            "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best",
            "-o",
            f"{output_dir}/{VIDEO_ID}.mp4",
            URL,
        )
    ]


@pytest.mark.asyncio
async def test_download_failure_reports_stderr(monkeypatch, tmp_path):
    _install(monkeypatch, returncode=1, stderr=b"ERROR: boom")
    with pytest.raises(DownloadFailed) as excinfo:
        await VideoDownloader().download_video(
            DownloadVideoCommand(video_id=VIDEO_ID), URL, str(tmp_path)
        )
    assert excinfo.value.code == 0
    assert excinfo.value.message == "ERROR: boom"


@pytest.mark.asyncio
async def test_download_missing_binary(monkeypatch, tmp_path):
    async def fake_exec(*args, **kwargs):
        raise FileNotFoundError("yt-dlp")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)
    with pytest.raises(ExternalDependencyUnavailable):
        await VideoDownloader().download_video(
            DownloadVideoCommand(video_id=VIDEO_ID), URL, str(tmp_path)
        )