"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from sigsim_app.config.defaults import get_default_config
from sigsim_app.config.knowledge import get_default_knowledge_base
from sigsim_app.config.loader import ConfigLoader
from sigsim_app.config.validation import ConfigValidator
from sigsim_app.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration carries the documented constants."""
        config = get_default_config()
        assert config.scoring.breakout_bonus == 35
        assert config.scoring.risk_factor_penalty == 10.0
        assert config.scoring.max_reasoning_lines == 4
        assert config.resolution.against_structure_factor == 0.4
        assert config.resolution.high_impact_news_factor == 0.6
        assert config.gating.min_confidence == 85.0
        assert config.simulation.cooldown_seconds == 5.0
        assert config.simulation.auto_interval_seconds == 61.0


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_missing_config_dir_gives_defaults(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path / "absent")
        assert loader.build_config() == get_default_config()

    def test_merge_config_with_overrides(self, tmp_path) -> None:
        """Test config merging with per-call overrides."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config({"scoring": {"rsi_bonus": 20}})

        assert config["scoring"]["rsi_bonus"] == 20
        # Other defaults should remain
        assert config["scoring"]["stoch_bonus"] == 15
        assert config["gating"]["strategy"] == "sureshot"

    def test_settings_file_overrides_defaults(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text(
            "simulation:\n  cooldown_seconds: 2.5\ngating:\n  min_confidence: 90\n"
        )
        config = ConfigLoader.create(tmp_path).build_config()

        assert config.simulation.cooldown_seconds == 2.5
        assert config.gating.min_confidence == 90
        assert config.simulation.resolution_delay_seconds == 60.0

    def test_call_overrides_beat_settings_file(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text("scoring:\n  macd_bonus: 12\n")
        config = ConfigLoader.create(tmp_path).build_config({"scoring": {"macd_bonus": 8}})
        assert config.scoring.macd_bonus == 8

    def test_empty_settings_file(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).build_config() == get_default_config()

    def test_invalid_value_raises(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text("scoring:\n  rsi_bonus: -5\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).build_config()

        assert exc_info.value.source == "settings"
        assert [err.field for err in exc_info.value.errors] == ["rsi_bonus"]
        assert exc_info.value.recoverable is False

    def test_unknown_field_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).build_config({"simulation": {"warp_factor": 9}})

    def test_non_mapping_file_raises(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text("- one\n- two\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_settings()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_defaults_are_valid(self) -> None:
        merged = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(merged) == []

    def test_invalid_threshold(self) -> None:
        errors = ConfigValidator.validate_scoring_params({"rsi_overbought": 120})
        assert len(errors) == 1
        assert errors[0].field == "rsi_overbought"
        assert errors[0].value == 120

    def test_confidence_bounds_order(self) -> None:
        errors = ConfigValidator.validate_scoring_params(
            {"min_confidence": 90, "max_confidence": 60}
        )
        assert [err.field for err in errors] == ["min_confidence"]

    def test_bool_is_not_a_number(self) -> None:
        errors = ConfigValidator.validate_scoring_params({"macd_bonus": True})
        assert errors[0].field == "macd_bonus"

    def test_reasoning_line_cap_must_be_positive(self) -> None:
        errors = ConfigValidator.validate_scoring_params({"max_reasoning_lines": 0})
        assert errors[0].field == "max_reasoning_lines"

    def test_resolution_factor_range(self) -> None:
        errors = ConfigValidator.validate_resolution_params({"against_structure_factor": 1.5})
        assert errors[0].field == "against_structure_factor"

    def test_gating_params(self) -> None:
        errors = ConfigValidator.validate_gating_params({
            "min_confidence": 85,
            "reject_on_risk_factors": "yes",
            "risk_profile": "reckless",
        })
        assert {err.field for err in errors} == {"reject_on_risk_factors", "risk_profile"}

    def test_simulation_params(self) -> None:
        errors = ConfigValidator.validate_simulation_params({
            "market_update_seconds": 0,
            "cooldown_seconds": 0,
            "activity_log_size": 10.5,
        })
        assert {err.field for err in errors} == {"market_update_seconds", "activity_log_size"}


class TestKnowledgeTableValidation:
    """Knowledge overrides that would leave the engine unusable are rejected up front."""

    def _fields(self, exc_info) -> set:
        return {err.field for err in exc_info.value.errors}

    def test_defaults_are_valid(self) -> None:
        tables = get_default_knowledge_base().to_dict()
        assert ConfigValidator.validate_knowledge_tables(tables) == []

    def test_news_event_without_name(self, tmp_path) -> None:
        (tmp_path / "knowledge.yaml").write_text(
            "news_events:\n  Brexit:\n    impact: High\n"
        )
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base()
        assert self._fields(exc_info) == {"news_events.Brexit.name"}

    def test_strategy_without_description(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base(
                {"strategies": {"scalper": {"name": "SCALPER"}}}
            )
        assert self._fields(exc_info) == {"strategies.scalper.description"}

    def test_condition_without_name(self, tmp_path) -> None:
        conditions = [{"description": "Quiet tape", "factor": 1.0}]
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base({"conditions": conditions})
        assert self._fields(exc_info) == {"conditions[0].name"}

    def test_empty_conditions(self, tmp_path) -> None:
        (tmp_path / "knowledge.yaml").write_text("conditions: []\n")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base()
        assert self._fields(exc_info) == {"conditions"}

    def test_empty_pair_list(self, tmp_path) -> None:
        (tmp_path / "knowledge.yaml").write_text("pairs:\n  forex: []\n")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base()
        assert self._fields(exc_info) == {"pairs.forex"}

    def test_engine_refuses_empty_pair_list(self, tmp_path) -> None:
        from sigsim_app.engine import SignalSimulationEngine

        (tmp_path / "knowledge.yaml").write_text("pairs:\n  forex: []\n")
        with pytest.raises(ConfigurationError):
            SignalSimulationEngine(config_dir=tmp_path)

    def test_win_rate_row_needs_every_risk_profile(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_knowledge_base(
                {"win_rates": {"scalper": {"balanced": 0.7}}}
            )
        assert self._fields(exc_info) == {"win_rates.scalper"}
        assert "conservative" in exc_info.value.errors[0].message
        assert "aggressive" in exc_info.value.errors[0].message

    @pytest.mark.parametrize("table", ["patterns", "sentiments", "structures", "news_events"])
    def test_tables_must_not_be_empty(self, table) -> None:
        tables = get_default_knowledge_base().to_dict()
        tables[table] = {}
        errors = ConfigValidator.validate_knowledge_tables(tables)
        assert [err.field for err in errors] == [table]

    def test_wrong_table_shape(self) -> None:
        tables = get_default_knowledge_base().to_dict()
        tables["patterns"] = ["Doji", "Hammer"]
        errors = ConfigValidator.validate_knowledge_tables(tables)
        assert [err.field for err in errors] == ["patterns"]
