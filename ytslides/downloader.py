"""Downloading YouTube videos with yt-dlp."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ytslides.errors import DownloadFailed, ExternalDependencyUnavailable, FileSystemError
from ytslides.messages import DownloadVideoCommand, VideoDownloaded

_FORMAT = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"


class VideoDownloader:
    """Downloads videos into an output directory using yt-dlp."""

    async def download_video(
        self, command: DownloadVideoCommand, url: str, output_dir: str
    ) -> VideoDownloaded:
        """Download the video at url to <output_dir>/<video_id>.mp4."""
        video_path = f"{output_dir}/{command.video_id}.mp4"

        try:
            Path(video_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(f"Failed to create output directory: {exc}") from exc

        try:
            process = await asyncio.create_subprocess_exec(
                "yt-dlp",
                "-f",
                _FORMAT,
                "-o",
                video_path,
                url,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate()
        except OSError as exc:
            raise ExternalDependencyUnavailable(f"yt-dlp execution failed: {exc}") from exc

        if process.returncode != 0:
            raise DownloadFailed(0, stderr.decode("utf-8", errors="replace"))

        return VideoDownloaded(
            video_id=command.video_id,
            path=video_path,
            duration_sec=0,
            width=1920,
            height=1080,
            file_size=0,
        )