# ytslides

Building blocks for a tool that pulls slides out of YouTube videos:

- **URL handling** (`ytslides.urls`, `ytslides.url_validator`): accepts watch, `youtu.be`, embed, shorts and `/v/` URLs and extracts the video ID. The ID must be 10 to 12 characters from `a-z`, `A-Z`, `0-9`, `_` and `-`.
- **Availability checks** (`ytslides.availability`): runs `yt-dlp --dump-json` and turns its output into `VideoMetadata`. Private, deleted, age-restricted, region-locked and over-long videos are reported as errors.
- **Downloading** (`ytslides.downloader`): fetches a video to `<output_dir>/<video_id>.mp4` with `yt-dlp`.
- **Workflow handlers** (`ytslides.handlers`): turn the commands in `ytslides.messages` into events. This includes timeout handling and exponential backoff with jitter.
- **Processing sessions** (`ytslides.session`): tracks each session's state, progress and metadata. Sessions can be saved to JSON and recovered from it.

Availability checks and downloads start the `yt-dlp` executable, so it must be installed and on your `PATH`. Everything else uses only the standard library.

## Installation

```
pip install ytslides
```

## Validating URLs

```python
from ytslides.errors import InvalidUrl
from ytslides.urls import extract_video_id, validate_video_url

event = validate_video_url("https://youtu.be/dQw4w9WgXcQ")
print(event.url, event.video_id)           # video_id == "dQw4w9WgXcQ"

print(extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s"))  # dQw4w9WgXcQ

try:
    validate_video_url("https://example.com/video")
except InvalidUrl as exc:
    print(exc.user_message())
```

`validate_video_url` accepts only URLs that start with `https://` followed by `www.youtube.com/`, `youtube.com/`, `m.youtube.com/`, `music.youtube.com/` or `youtu.be/`.

`ytslides.url_validator.UrlValidator` does the same job by parsing the URL. It matches on the host name, the `v` query parameter and the path segments:

```python
from ytslides.url_validator import UrlValidator

url, video_id = UrlValidator().validate_and_extract("https://m.youtube.com/watch?v=dQw4w9WgXcQ")
```

## Checking availability and downloading

```python
import asyncio

from ytslides.availability import AvailabilityChecker, AvailabilityCheckerConfig
from ytslides.downloader import VideoDownloader
from ytslides.messages import DownloadVideoCommand
from ytslides.urls import validate_video_url


async def fetch(url: str) -> None:
    validated = validate_video_url(url)
    checker = AvailabilityChecker(AvailabilityCheckerConfig(max_duration=3600))
    metadata = await checker.check_availability(validated.video_id, url)
    print(metadata.title, metadata.duration)

    downloaded = await VideoDownloader().download_video(
        DownloadVideoCommand(video_id=validated.video_id), url, "downloads"
    )
    print(downloaded.path)


asyncio.run(fetch("https://www.youtube.com/watch?v=dQw4w9WgXcQ"))
```

`AvailabilityCheckerConfig` defaults to a 5-second timeout, a 4-hour maximum duration and no minimum. A limit of `0` means no limit. `check_status` returns an `AvailabilityStatus` (`AVAILABLE`, `PRIVATE`, `DELETED`, `AGE_RESTRICTED`, `REGION_LOCKED`, or `AvailabilityStatus.unavailable(reason)`) and does not raise for an unavailable video. `check_ytdlp_available` raises if `yt-dlp --version` fails.

## Timeouts and retries

```python
from ytslides.handlers import calculate_backoff, handle_timeout
from ytslides.messages import HandleTimeoutCommand

delay = calculate_backoff(2, 1.0, 30.0)  # 4 seconds plus up to 10% jitter

event = handle_timeout(
    HandleTimeoutCommand(video_id="dQw4w9WgXcQ", operation="download", timeout_secs=60, retry_attempt=1),
    max_retries=3,
)
```

`handle_timeout` raises `NetworkTimeout` once `retry_attempt` reaches `max_retries`.

## Sessions

```python
from ytslides.session import SessionManager

manager = SessionManager()
session_id = manager.create_session(
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ", {"frame_interval_secs": 5}
)
manager.update_session(session_id, lambda s: s.start_processing())
manager.persist_session(session_id, "state/session.json")

restored = manager.recover_session("state/session.json")
print(restored.state, restored.progress.percentage)
```

The session configuration is a plain JSON-serialisable mapping, stored as given. Sessions move from `Created` to `Processing` and then to `Completed` or `Failed`. A transition that is not allowed raises `InvalidConfig`. `get_session` returns a copy. To change a stored session, use `update_session`.

## Errors

Every failure raises a subclass of `ytslides.errors.ExtractionError`. Its `user_message()` method returns text you can show to the user, with a hint where one applies.

## What this package does not do

There is no command-line program. The package does not pull frames out of videos, compare them, find unique slides, or write reports. It provides URL validation, availability checks, downloading, retry helpers and session tracking that such a tool would be built on.