"""Collaborators supplying assessment records and report configurations."""

from reporting.sources.registry import ConfigRegistry, JsonConfigRegistry
from reporting.sources.sessions import (
    InMemorySessionRepository,
    JsonFileSessionRepository,
    SessionRepository,
)

__all__ = [
    "ConfigRegistry",
    "JsonConfigRegistry",
    "SessionRepository",
    "InMemorySessionRepository",
    "JsonFileSessionRepository",
]
