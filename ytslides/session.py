"""Processing sessions: state tracking, progress, persistence and recovery."""

from __future__ import annotations

import copy
import json
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from ytslides.errors import (
    InternalError,
    InvalidConfig,
    OutputDirectoryNotFound,
    SessionNotFound,
    SessionRecoveryFailed,
)

logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


class SessionState(str, Enum):
    """Lifecycle state of a processing session."""

    CREATED = "Created"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"

    def __str__(self) -> str:
        return self.value

    def is_terminal(self) -> bool:
        """Return True if the session has finished, successfully or not."""
        return self in (SessionState.COMPLETED, SessionState.FAILED)

    def can_start(self) -> bool:
        """Return True if the session can be started."""
        return self is SessionState.CREATED

    def can_process(self) -> bool:
        """Return True if the session can move to processing."""
        return self is SessionState.CREATED

    def can_complete(self) -> bool:
        """Return True if the session can be marked as completed."""
        return self is SessionState.PROCESSING

    def can_fail(self) -> bool:
        """Return True if the session can be marked as failed."""
        return self in (SessionState.CREATED, SessionState.PROCESSING)


@dataclass
class SessionProgress:
    """Progress of the current processing stage."""

    stage: str = "Initializing"
    total: int = 0
    processed: int = 0
    percentage: float = 0.0
    message: str | None = None

    def update(self, processed: int, message: str | None = None) -> None:
        """Record the number of processed items and recompute the percentage."""
        self.processed = processed
        self.percentage = min(processed / self.total, 1.0) if self.total > 0 else 0.0
        self.message = message

    def increment(self) -> None:
        """Count one more processed item, clearing the message."""
        self.update(self.processed + 1, None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "percentage": self.percentage,
            "processed": self.processed,
            "total": self.total,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionProgress:
        return cls(
            stage=_field(data, "stage", str),
            total=_field(data, "total", int),
            processed=_field(data, "processed", int),
            percentage=float(_field(data, "percentage", (int, float))),
            message=_optional(data, "message", str),
        )


def _field(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if isinstance(value, bool) and kind is not bool or not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`")
    if kind is int and value < 0:
        raise ValueError(f"field `{key}` must be non-negative")
    return value


def _optional(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if data.get(key) is None:
        return None
    return _field(data, key, kind)


@dataclass
class ProcessingSession:
    """A single extraction session with its configuration, state and progress."""

    youtube_url: str
    config: dict[str, Any]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: SessionState = SessionState.CREATED
    created_at: int = field(default_factory=_now)
    completed_at: int | None = None
    progress: SessionProgress = field(default_factory=SessionProgress)
    error_message: str | None = None
    unique_slides: int = 0
    frames_processed: int = 0
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, youtube_url: str, config: Mapping[str, Any]) -> ProcessingSession:
        """Create a new session in the Created state with a fresh ID."""
        session = cls(youtube_url=youtube_url, config=dict(config))
        logger.info("Created new session: %s", session.id)
        return session

    def start_processing(self) -> None:
        """Move the session to Processing; raise InvalidConfig if not allowed."""
        if not self.state.can_process():
            raise InvalidConfig(f"Cannot start processing session in state: {self.state}")
        self.state = SessionState.PROCESSING
        self.progress.stage = "Processing"
        logger.info("Session %s started processing", self.id)

    def complete(self) -> None:
        """Mark the session completed; raise InvalidConfig if not processing."""
        if not self.state.can_complete():
            raise InvalidConfig(f"Cannot complete session in state: {self.state}")
        self.state = SessionState.COMPLETED
        self.completed_at = _now()
        self.progress.stage = "Completed"
        self.progress.percentage = 1.0
        logger.info("Session %s completed successfully", self.id)

    def fail(self, error_message: str) -> None:
        """Mark the session failed; raise InvalidConfig if it already finished."""
        if not self.state.can_fail():
            raise InvalidConfig(f"Cannot fail session in state: {self.state}")
        self.state = SessionState.FAILED
        self.error_message = error_message
        self.completed_at = _now()
        logger.error("Session %s failed: %s", self.id, error_message)

    def update_progress(
        self, stage: str, processed: int, total: int, message: str | None = None
    ) -> None:
        """Set the current stage and its progress."""
        self.progress.stage = stage
        self.progress.total = total
        self.progress.update(processed, message)

    def set_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str) -> str | None:
        return self.metadata.get(key)

    def duration(self) -> int:
        """Seconds from creation to completion, or to now if still active."""
        end = self.completed_at if self.completed_at is not None else _now()
        return max(0, end - self.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "youtube_url": self.youtube_url,
            "config": self.config,
            "state": self.state.value,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
            "progress": self.progress.to_dict(),
            "error_message": self.error_message,
            "unique_slides": self.unique_slides,
            "frames_processed": self.frames_processed,
            "metadata": self.metadata,
        }

    def to_json(self) -> str:
        """Serialize the session to JSON; raise InternalError on failure."""
        try:
            return json.dumps(self.to_dict())
        except (TypeError, ValueError) as exc:
            raise InternalError(f"Failed to serialize session: {exc}") from exc

    @classmethod
    def from_json(cls, text: str) -> ProcessingSession:
        """Rebuild a session from JSON; raise InternalError if it is malformed."""
        try:
            data = json.loads(text)
            metadata = _field(data, "metadata", dict)
            if not all(isinstance(k, str) and isinstance(v, str) for k, v in metadata.items()):
                raise ValueError("invalid type for field `metadata`")
            return cls(
                id=_field(data, "id", str),
                youtube_url=_field(data, "youtube_url", str),
                config=_field(data, "config", dict),
                state=SessionState(_field(data, "state", str)),
                created_at=_field(data, "created_at", int),
                completed_at=_optional(data, "completed_at", int),
                progress=SessionProgress.from_dict(_field(data, "progress", dict)),
                error_message=_optional(data, "error_message", str),
                unique_slides=_field(data, "unique_slides", int),
                frames_processed=_field(data, "frames_processed", int),
                metadata=dict(metadata),
            )
        except ValueError as exc:
            raise InternalError(f"Failed to deserialize session: {exc}") from exc


class SessionManager:
    """Thread-safe registry of processing sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, ProcessingSession] = {}
        self._lock = threading.RLock()

    def create_session(self, youtube_url: str, config: Mapping[str, Any]) -> str:
        """Create and register a session, returning its ID."""
        session = ProcessingSession.create(youtube_url, config)
        with self._lock:
            self._sessions[session.id] = session
        return session.id

    def get_session(self, session_id: str) -> ProcessingSession:
        """Return a copy of the session; raise SessionNotFound if unknown."""
        with self._lock:
            try:
                return copy.deepcopy(self._sessions[session_id])
            except KeyError:
                raise SessionNotFound(session_id) from None

    def update_session(
        self, session_id: str, update_fn: Callable[[ProcessingSession], None]
    ) -> None:
        """Apply update_fn to the stored session under the lock."""
        with self._lock:
            try:
                session = self._sessions[session_id]
            except KeyError:
                raise SessionNotFound(session_id) from None
            update_fn(session)

    def remove_session(self, session_id: str) -> ProcessingSession:
        """Remove and return the session; raise SessionNotFound if unknown."""
        with self._lock:
            try:
                return self._sessions.pop(session_id)
            except KeyError:
                raise SessionNotFound(session_id) from None

    def list_sessions(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def persist_session(self, session_id: str, path: str | Path) -> None:
        """Write the session as JSON to path, creating parent directories."""
        text = self.get_session(session_id).to_json()
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            raise OutputDirectoryNotFound(str(target.parent)) from None
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise InternalError(f"Failed to write session file: {exc}") from exc

    def recover_session(self, path: str | Path) -> ProcessingSession:
        """Load a session from path and register it with the manager."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SessionRecoveryFailed(f"Failed to read session file: {exc}") from exc
        session = ProcessingSession.from_json(text)
        with self._lock:
            self._sessions[session.id] = copy.deepcopy(session)
        return session