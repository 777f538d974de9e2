"""Session repositories supplying raw assessment records.

Records are read-only to the reporting core.
"""

import json
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)

AssessmentRecord = Mapping[str, Any]

SESSION_ID_KEY = "session_id"
ASSESSMENT_ID_KEY = "assessment_id"


class SessionRepository(Protocol):
    """Source of assessment records keyed by session id."""

    def find_by_id(self, session_id: str) -> AssessmentRecord | None: ...

    def list_all(self) -> list[AssessmentRecord]: ...


class InMemorySessionRepository:
    """Repository over an already-loaded list of records."""

    def __init__(self, records: Iterable[AssessmentRecord] = ()):
        self._records = [r for r in records if isinstance(r, Mapping)]

    def find_by_id(self, session_id: str) -> AssessmentRecord | None:
        return next(
            (r for r in self._records if r.get(SESSION_ID_KEY) == session_id),
            None,
        )

    def list_all(self) -> list[AssessmentRecord]:
        return list(self._records)


class JsonFileSessionRepository:
    """Repository loading a JSON array of records from disk on first use."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._delegate: InMemorySessionRepository | None = None
        self._lock = threading.Lock()

    def _load(self) -> InMemorySessionRepository:
        with self._lock:
            if self._delegate is None:
                self._delegate = InMemorySessionRepository(self._read_records())
            return self._delegate

    def _read_records(self) -> list[AssessmentRecord]:
        if not self.path.exists():
            logger.warning("session_source_missing", path=str(self.path))
            return []

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if isinstance(data, Mapping):
            # Also accept {"sessions": [...]}
            data = data.get("sessions", [])
        if not isinstance(data, list):
            raise ValueError(f"Session source {self.path} must contain a JSON array")

        logger.info("session_source_loaded", path=str(self.path), sessions=len(data))
        return data

    def find_by_id(self, session_id: str) -> AssessmentRecord | None:
        return self._load().find_by_id(session_id)

    def list_all(self) -> list[AssessmentRecord]:
        return self._load().list_all()
