"""Report generation pipeline.

Single entry point for generating, previewing and listing reports. Every
caller (HTTP router, scripts, tests) goes through ReportGenerator.

    record + config -> assemble -> render -> persist
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import structlog

from api.exceptions import ConfigNotFoundError, SessionNotFoundError
from reporting.artifacts.store import Artifact, ArtifactStore
from reporting.render.html import DocumentRenderer
from reporting.reports.assembler import ReportAssembler
from reporting.reports.config import ReportConfig
from reporting.reports.contract import ReportDocument
from reporting.sources.registry import ConfigRegistry
from reporting.sources.sessions import (
    ASSESSMENT_ID_KEY,
    SESSION_ID_KEY,
    AssessmentRecord,
    SessionRepository,
)

logger = structlog.get_logger(__name__)

UNKNOWN_ASSESSMENT = "Unknown Assessment"

# Record keys surfaced in session summaries
SUMMARY_KEYS = ("timestamp", "accuracy", "gender", "height", "weight")


@dataclass(frozen=True)
class SessionSummary:
    """Listing entry for one stored session."""

    session_id: str
    assessment_id: str | None
    assessment_name: str
    timestamp: Any = None
    accuracy: Any = None
    gender: Any = None
    height: Any = None
    weight: Any = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "session_id": self.session_id,
            "assessment_id": self.assessment_id,
            "assessment_name": self.assessment_name,
            "timestamp": self.timestamp,
            "accuracy": self.accuracy,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class SessionDetail:
    """A session record with its configuration, if one is registered."""

    session: AssessmentRecord
    config: ReportConfig | None

    @property
    def config_available(self) -> bool:
        return self.config is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "session": dict(self.session),
            "config": self.config.to_dict() if self.config else None,
            "config_available": self.config_available,
        }


@dataclass(frozen=True)
class ConfigSummary:
    """Size overview of a registered report configuration."""

    assessment_id: str
    name: str
    sections_count: int
    total_fields: int

    @classmethod
    def from_config(cls, assessment_id: str, config: ReportConfig) -> "ConfigSummary":
        return cls(
            assessment_id=assessment_id,
            name=config.name,
            sections_count=len(config.sections),
            total_fields=config.total_fields,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "assessment_id": self.assessment_id,
            "name": self.name,
            "sections_count": self.sections_count,
            "total_fields": self.total_fields,
        }


class ReportGenerator:
    """Generates report artifacts for stored assessment sessions."""

    def __init__(
        self,
        sessions: SessionRepository,
        configs: ConfigRegistry,
        renderer: DocumentRenderer,
        store: ArtifactStore,
        assembler: ReportAssembler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.sessions = sessions
        self.configs = configs
        self.renderer = renderer
        self.store = store
        self.assembler = assembler or ReportAssembler()
        self.clock = clock or (lambda: datetime.now(UTC))

    def _config_for(self, assessment_id: Any) -> ReportConfig | None:
        """Configuration for a record's assessment id; non-string ids have none."""
        if not isinstance(assessment_id, str):
            return None
        return self.configs.get(assessment_id)

    def _resolve(self, session_id: str) -> tuple[AssessmentRecord, ReportConfig]:
        """Look up a session's record and configuration."""
        record = self.sessions.find_by_id(session_id)
        if record is None:
            raise SessionNotFoundError(session_id)

        assessment_id = record.get(ASSESSMENT_ID_KEY)
        config = self._config_for(assessment_id)
        if config is None:
            raise ConfigNotFoundError(assessment_id)

        return record, config

    def preview_assembly(self, session_id: str) -> ReportDocument:
        """
        Assemble a session's report without rendering or persisting it.

        Raises:
            SessionNotFoundError: No record for the session
            ConfigNotFoundError: No configuration for the record's assessment type
        """
        record, config = self._resolve(session_id)
        return self.assembler.assemble(record, config, session_id=session_id, now=self.clock())

    async def generate(self, session_id: str) -> Artifact:
        """
        Assemble, render and persist a report for a session.

        Raises:
            SessionNotFoundError: No record for the session
            ConfigNotFoundError: No configuration for the record's assessment type
            RenderError: The renderer failed
            ArtifactPersistError: The artifact could not be written
        """
        log = logger.bind(session_id=session_id)

        record, config = self._resolve(session_id)
        now = self.clock()
        document = self.assembler.assemble(record, config, session_id=session_id, now=now)

        data = await self.renderer.render(document)

        filename = self.store.name_artifact(session_id, now)
        artifact = self.store.persist(filename, data)

        log.info(
            "report_generated",
            assessment=config.name,
            filename=artifact.filename,
            size=len(data),
        )
        return artifact

    def list_artifacts(self) -> list[Artifact]:
        """List generated artifacts, newest first."""
        return self.store.list()

    def list_sessions(self) -> list[SessionSummary]:
        """Summarize every stored session with its assessment name."""
        summaries = []
        for record in self.sessions.list_all():
            assessment_id = record.get(ASSESSMENT_ID_KEY)
            config = self._config_for(assessment_id)
            summaries.append(
                SessionSummary(
                    session_id=str(record.get(SESSION_ID_KEY)),
                    assessment_id=str(assessment_id) if assessment_id is not None else None,
                    assessment_name=config.name if config else UNKNOWN_ASSESSMENT,
                    **{key: record.get(key) for key in SUMMARY_KEYS},
                )
            )
        return summaries

    def get_session(self, session_id: str) -> SessionDetail:
        """
        Get a session record and its configuration, if registered.

        Raises:
            SessionNotFoundError: No record for the session
        """
        record = self.sessions.find_by_id(session_id)
        if record is None:
            raise SessionNotFoundError(session_id)

        assessment_id = record.get(ASSESSMENT_ID_KEY)
        config = self._config_for(assessment_id)
        return SessionDetail(session=record, config=config)

    def get_config(self, assessment_id: str) -> ReportConfig:
        """
        Get a registered configuration.

        Raises:
            ConfigNotFoundError: No configuration for the assessment id
        """
        config = self.configs.get(assessment_id)
        if config is None:
            raise ConfigNotFoundError(assessment_id)
        return config

    def summarize_configs(self) -> list[ConfigSummary]:
        """Summarize every registered configuration."""
        return [
            ConfigSummary.from_config(assessment_id, config)
            for assessment_id, config in self.configs.items()
        ]
