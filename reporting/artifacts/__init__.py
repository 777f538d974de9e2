"""Report artifact persistence."""

from reporting.artifacts.medium import (
    ArtifactMedium,
    InMemoryArtifactMedium,
    LocalArtifactMedium,
)
from reporting.artifacts.store import Artifact, ArtifactStore

__all__ = [
    "Artifact",
    "ArtifactMedium",
    "ArtifactStore",
    "InMemoryArtifactMedium",
    "LocalArtifactMedium",
]
