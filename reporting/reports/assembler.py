"""Report assembler for assessment records.

Walks a report configuration's sections and fields, extracts each field's
raw value from the record and produces an immutable ReportDocument.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import structlog

from reporting.extraction.jsonpath import PathExtractor
from reporting.reports.config import ReportConfig, SectionSpec, load_report_config
from reporting.reports.contract import ExtractedField, ReportDocument, ReportSection

logger = structlog.get_logger(__name__)

# Record key holding the session identifier
SESSION_ID_KEY = "session_id"


class ReportAssembler:
    """Assembles an assessment record into a report document."""

    def __init__(self, extractor: PathExtractor | None = None):
        self.extractor = extractor or PathExtractor()

    def assemble(
        self,
        record: Any,
        config: ReportConfig | Mapping[str, Any],
        *,
        session_id: str | None = None,
        now: datetime | None = None,
    ) -> ReportDocument:
        """
        Assemble a report document from a record and configuration.

        Args:
            record: JSON-like assessment record (read only)
            config: Report configuration or raw configuration mapping
            session_id: Session identifier, defaults to the record's session_id
            now: Generation timestamp, defaults to the current UTC time

        Returns:
            ReportDocument with one section per enabled config section

        Raises:
            ConfigValidationError: If the configuration is malformed
        """
        report_config = load_report_config(config)

        if session_id is None and isinstance(record, Mapping):
            raw_id = record.get(SESSION_ID_KEY)
            session_id = str(raw_id) if raw_id is not None else None

        sections = tuple(
            self._build_section(record, section)
            for section in report_config.sections
            if section.enabled
        )

        document = ReportDocument(
            assessment_name=report_config.name,
            session_id=session_id,
            generated_at=now or datetime.now(UTC),
            sections=sections,
        )

        logger.info(
            "report_assembled",
            assessment=report_config.name,
            session_id=session_id,
            sections=document.section_ids(),
            fields=document.field_count,
            unresolved=document.unresolved_count,
        )
        return document

    def _build_section(self, record: Any, section: SectionSpec) -> ReportSection:
        """Extract every field of one section."""
        fields = tuple(
            ExtractedField(
                label=spec.label,
                value=self.extractor.extract(record, spec.path),
                format=spec.format,
                unit=spec.unit,
                classification=spec.classification,
            )
            for spec in section.fields
        )
        return ReportSection(id=section.id, title=section.title, fields=fields)


def assemble_report(
    record: Any,
    config: ReportConfig | Mapping[str, Any],
    session_id: str | None = None,
    now: datetime | None = None,
) -> ReportDocument:
    """Convenience function to assemble a report with the default extractor."""
    return ReportAssembler().assemble(record, config, session_id=session_id, now=now)
