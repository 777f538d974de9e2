"""Report configuration registry keyed by assessment type."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import structlog

from api.exceptions import ConfigValidationError
from reporting.reports.config import ReportConfig, load_report_config

logger = structlog.get_logger(__name__)

DEFAULT_CONFIGS_PATH = Path(__file__).parent / "default_configs.json"


class ConfigRegistry(Protocol):
    """Lookup of report configurations by assessment id."""

    def get(self, assessment_id: str) -> ReportConfig | None: ...

    def items(self) -> list[tuple[str, ReportConfig]]: ...


class JsonConfigRegistry:
    """Registry of validated report configurations."""

    def __init__(self, configs: Mapping[str, ReportConfig | Mapping[str, Any]]):
        self._configs: dict[str, ReportConfig] = {}
        for assessment_id, raw in configs.items():
            try:
                self._configs[assessment_id] = load_report_config(raw)
            except ConfigValidationError as e:
                raise ConfigValidationError(
                    f"Configuration '{assessment_id}': {e.message}",
                    field=e.details.get("field"),
                ) from e

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "JsonConfigRegistry":
        """
        Load configurations from a JSON object keyed by assessment id.

        Args:
            path: JSON file; the bundled defaults are used when None
        """
        source = Path(path) if path is not None else DEFAULT_CONFIGS_PATH
        data = json.loads(source.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ConfigValidationError(f"Configuration file {source} must contain a JSON object")

        registry = cls(data)
        logger.info("report_configs_loaded", path=str(source), configs=len(registry))
        return registry

    def __len__(self) -> int:
        return len(self._configs)

    def get(self, assessment_id: str) -> ReportConfig | None:
        # Records may carry any JSON value under assessment_id
        if not isinstance(assessment_id, str):
            return None
        return self._configs.get(assessment_id)

    def items(self) -> list[tuple[str, ReportConfig]]:
        return list(self._configs.items())
