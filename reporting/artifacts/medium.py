"""Durable byte stores for generated report artifacts.

Artifacts are append-only: a name is written once and never rewritten.
"""

import os
import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)

# Prefix of in-flight temp files, never listed
TEMP_PREFIX = ".tmp-"


class ArtifactMedium(Protocol):
    """Storage backend used by ArtifactStore."""

    def write(self, name: str, data: bytes) -> None:
        """Write a new artifact. Raises FileExistsError if the name is taken."""
        ...

    def list(self) -> list[tuple[str, datetime]]:
        """List (name, created_at) for all persisted artifacts."""
        ...

    def exists(self, name: str) -> bool: ...

    def created_at(self, name: str) -> datetime | None:
        """Creation time of one artifact, or None if it does not exist."""
        ...

    def path_for(self, name: str) -> str: ...


def validate_name(name: str) -> None:
    """Reject names that could escape the medium's namespace."""
    if (
        not name
        or name.startswith(".")
        or "/" in name
        or "\\" in name
        or os.sep in name
        or "\x00" in name
    ):
        raise ValueError(f"Invalid artifact name: {name!r}")


def _mtime(stat: os.stat_result) -> datetime:
    return datetime.fromtimestamp(stat.st_mtime_ns / 1_000_000_000, tz=UTC)


class LocalArtifactMedium:
    """Artifact medium backed by a local directory."""

    def __init__(self, base_path: Path | str):
        """
        Initialize the medium.

        Args:
            base_path: Directory holding artifacts. Created on first write.
        """
        self.base_path = Path(base_path)

    def path_for(self, name: str) -> str:
        return str(self.base_path / name)

    def exists(self, name: str) -> bool:
        validate_name(name)
        return (self.base_path / name).is_file()

    def created_at(self, name: str) -> datetime | None:
        validate_name(name)
        path = self.base_path / name
        try:
            stat = path.stat()
        except FileNotFoundError:
            return None
        if not path.is_file():
            return None
        return _mtime(stat)

    def write(self, name: str, data: bytes) -> None:
        """
        Write an artifact atomically and create-only.

        Bytes go to a hidden temp file that is then hard-linked into place,
        so concurrent readers see either nothing or the complete file, and an
        existing name is never replaced.
        """
        validate_name(name)
        self.base_path.mkdir(parents=True, exist_ok=True)

        target = self.base_path / name
        temp = self.base_path / f"{TEMP_PREFIX}{uuid.uuid4().hex}"
        try:
            with open(temp, "xb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.link(temp, target)
        finally:
            temp.unlink(missing_ok=True)

    def list(self) -> list[tuple[str, datetime]]:
        """List artifacts with their modification time from the filesystem."""
        if not self.base_path.is_dir():
            return []

        entries: list[tuple[str, datetime]] = []
        for path in self.base_path.iterdir():
            if path.name.startswith(TEMP_PREFIX) or path.name.startswith("."):
                continue
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            if not path.is_file():
                continue
            entries.append((path.name, _mtime(stat)))
        return entries


class InMemoryArtifactMedium:
    """Artifact medium kept in process memory."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))
        self._items: dict[str, tuple[bytes, datetime]] = {}
        self._lock = threading.Lock()

    def path_for(self, name: str) -> str:
        return f"memory://{name}"

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._items

    def write(self, name: str, data: bytes) -> None:
        validate_name(name)
        with self._lock:
            if name in self._items:
                raise FileExistsError(name)
            self._items[name] = (bytes(data), self._clock())

    def created_at(self, name: str) -> datetime | None:
        with self._lock:
            item = self._items.get(name)
        return item[1] if item else None

    def list(self) -> list[tuple[str, datetime]]:
        with self._lock:
            return [(name, created) for name, (_, created) in self._items.items()]
