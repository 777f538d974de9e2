"""Artifact naming, persistence and listing."""

from dataclasses import dataclass
from datetime import datetime

import structlog

from api.config import ARTIFACT_PREFIX
from api.exceptions import ArtifactPersistError
from reporting.artifacts.medium import ArtifactMedium

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A persisted report artifact."""

    filename: str
    path: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "filename": self.filename,
            "path": self.path,
            "created_at": self.created_at.isoformat(),
        }


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return int(moment.timestamp() * 1000)


def sort_newest_first(artifacts: list[Artifact]) -> list[Artifact]:
    """Order by created_at descending, ties broken by filename descending."""
    return sorted(artifacts, key=lambda a: (a.created_at, a.filename), reverse=True)


class ArtifactStore:
    """Names, persists and lists report artifacts on a medium."""

    def __init__(self, medium: ArtifactMedium, extension: str = "pdf"):
        self.medium = medium
        self.extension = extension.lstrip(".")

    def name_artifact(self, session_id: str, now: datetime) -> str:
        """
        Build the artifact filename for a session.

        Calls at least 1 ms apart never collide; two calls for the same
        session within the same millisecond produce the same name.
        """
        return f"{ARTIFACT_PREFIX}-{session_id}-{epoch_millis(now)}.{self.extension}"

    def persist(self, filename: str, data: bytes) -> Artifact:
        """
        Write an artifact once.

        Raises:
            ArtifactPersistError: If the name is invalid, already taken, or
                the write fails
        """
        try:
            if self.medium.exists(filename):
                raise ArtifactPersistError(filename, "artifact already exists")
            self.medium.write(filename, data)
        except FileExistsError as e:
            raise ArtifactPersistError(filename, "artifact already exists") from e
        except (OSError, ValueError) as e:
            raise ArtifactPersistError(filename, str(e)) from e

        artifact = self.locate(filename)
        if artifact is None:
            raise ArtifactPersistError(filename, "artifact not visible after write")

        logger.info("artifact_persisted", filename=filename, size=len(data))
        return artifact

    def list(self) -> list[Artifact]:
        """List all artifacts, newest first. Missing or empty store yields []."""
        try:
            entries = self.medium.list()
        except FileNotFoundError:
            return []

        artifacts = [
            Artifact(filename=name, path=self.medium.path_for(name), created_at=created_at)
            for name, created_at in entries
        ]
        return sort_newest_first(artifacts)

    def locate(self, filename: str) -> Artifact | None:
        """Find a single artifact by filename without listing the store."""
        try:
            created_at = self.medium.created_at(filename)
        except ValueError:
            return None
        if created_at is None:
            return None
        return Artifact(filename=filename, path=self.medium.path_for(filename), created_at=created_at)
