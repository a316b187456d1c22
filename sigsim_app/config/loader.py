"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    GatingParams,
    ResolutionParams,
    ScoringParams,
    SimulationParams,
    get_default_config,
)
from .knowledge import KnowledgeBase, get_default_knowledge_base
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            content = yaml.safe_load(f)

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"{filename} must contain a mapping at the top level",
                source=str(path)
            )
        return content

    def load_settings(self) -> dict[str, Any]:
        """Load settings.yaml parameter overrides."""
        return self._read_yaml("settings.yaml")

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Merge, validate and materialize the configuration.

        Raises:
            ConfigurationError: a merged value fails validation or names an unknown field
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            self._raise_invalid("Invalid configuration", errors, "settings")

        try:
            return DefaultConfig(
                scoring=ScoringParams(**merged["scoring"]),
                resolution=ResolutionParams(**merged["resolution"]),
                gating=GatingParams(**merged["gating"]),
                simulation=SimulationParams(**merged["simulation"]),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration field: {e}", source="settings") from e

    def load_knowledge_base(self, overrides: Optional[dict[str, Any]] = None) -> KnowledgeBase:
        """
        Load the knowledge base with knowledge.yaml and per-call overrides applied.

        Raises:
            ConfigurationError: an overridden table entry fails validation
        """
        tables = get_default_knowledge_base().to_dict()

        tables = self._deep_merge(tables, self._read_yaml("knowledge.yaml"))

        if overrides:
            tables = self._deep_merge(tables, overrides)

        errors = ConfigValidator.validate_knowledge_tables(tables)
        if errors:
            self._raise_invalid("Invalid knowledge base", errors, "knowledge")

        return KnowledgeBase.from_dict(tables)

    def _raise_invalid(self, message: str, errors: list, source: str) -> None:
        error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
        logger.error(message, source=source, errors=error_msgs)
        raise ConfigurationError(
            f"{message}: {'; '.join(error_msgs)}",
            errors=errors,
            source=source
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
