"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..models.indicators import NewsImpact, PatternType, RiskProfile


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _mapping(tables: dict[str, Any], name: str) -> dict[str, Any]:
    value = tables.get(name)
    return value if isinstance(value, dict) else {}


def _missing_text_fields(
    prefix: str,
    entry: Any,
    fields: tuple[str, ...]
) -> list[ValidationError]:
    if not isinstance(entry, dict):
        return [ValidationError(field=prefix, message="Must be a mapping", value=entry)]
    return [
        ValidationError(field=f"{prefix}.{name}", message="Must be a non-empty string",
                        value=entry.get(name))
        for name in fields
        if not isinstance(entry.get(name), str) or not entry.get(name)
    ]


class ConfigValidator:
    """Validates configuration parameters and knowledge-base tables."""

    @staticmethod
    def validate_scoring_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate scoring parameters."""
        errors = []

        # Bonuses are non-negative points
        for name in ("support_bonus", "resistance_bonus", "breakout_bonus",
                     "breakdown_bonus", "rsi_bonus", "stoch_bonus", "macd_bonus"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        # Oscillator thresholds live on the 0-100 scale
        for name in ("rsi_oversold", "rsi_overbought", "stoch_oversold", "stoch_overbought"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        # Risk multipliers
        for name in ("aggressive_multiplier", "balanced_multiplier", "conservative_multiplier"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        # Validate risk_factor_penalty
        if "risk_factor_penalty" in params:
            value = params["risk_factor_penalty"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="risk_factor_penalty",
                    message="Must be a non-negative number",
                    value=value
                ))

        # Validate confidence bounds
        low = params.get("min_confidence")
        high = params.get("max_confidence")
        for name, value in (("min_confidence", low), ("max_confidence", high)):
            if value is not None and (not _is_number(value) or value < 0 or value > 100):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a number between 0 and 100",
                    value=value
                ))
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                field="min_confidence",
                message="Must not exceed max_confidence",
                value=low
            ))

        # Validate max_reasoning_lines
        if "max_reasoning_lines" in params:
            value = params["max_reasoning_lines"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="max_reasoning_lines",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_resolution_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate resolution penalty factors."""
        errors = []

        for name in ("against_structure_factor", "high_impact_news_factor"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 1",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_gating_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sure-shot gate parameters."""
        errors = []

        if "min_confidence" in params:
            value = params["min_confidence"]
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field="min_confidence",
                    message="Must be a number between 0 and 100",
                    value=value
                ))

        if "reject_on_risk_factors" in params:
            value = params["reject_on_risk_factors"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="reject_on_risk_factors",
                    message="Must be a boolean",
                    value=value
                ))

        if "risk_profile" in params:
            value = params["risk_profile"]
            if value not in {profile.value for profile in RiskProfile}:
                errors.append(ValidationError(
                    field="risk_profile",
                    message="Must be one of conservative, balanced, aggressive",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_simulation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate orchestration timing parameters."""
        errors = []

        for name in ("market_update_seconds", "resolution_delay_seconds", "auto_interval_seconds"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        if "cooldown_seconds" in params:
            value = params["cooldown_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="cooldown_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "activity_log_size" in params:
            value = params["activity_log_size"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="activity_log_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_knowledge_tables(tables: dict[str, Any]) -> list[ValidationError]:
        """Validate knowledge-base tables in plain-dict form."""
        errors = []
        pattern_types = {t.value for t in PatternType}
        impacts = {i.value for i in NewsImpact}
        profiles = [p.value for p in RiskProfile]

        # The simulator samples from these, so none may be empty
        for table, kind in (("patterns", dict), ("sentiments", dict), ("structures", dict),
                            ("news_events", dict), ("conditions", list)):
            value = tables.get(table)
            if not isinstance(value, kind) or not value:
                errors.append(ValidationError(
                    field=table,
                    message="Must be a non-empty table",
                    value=value
                ))

        for name, entry in _mapping(tables, "patterns").items():
            if not isinstance(entry, dict) or entry.get("type") not in pattern_types:
                errors.append(ValidationError(
                    field=f"patterns.{name}.type",
                    message="Must be one of BULLISH, BEARISH, NEUTRAL",
                    value=entry.get("type") if isinstance(entry, dict) else entry
                ))
                continue
            score = entry.get("score")
            if not isinstance(score, int) or isinstance(score, bool) or score < 0:
                errors.append(ValidationError(
                    field=f"patterns.{name}.score",
                    message="Must be a non-negative integer",
                    value=score
                ))

        for name, entry in _mapping(tables, "sentiments").items():
            for bias in ("call_bias", "put_bias"):
                value = entry.get(bias) if isinstance(entry, dict) else None
                if not isinstance(value, int) or isinstance(value, bool):
                    errors.append(ValidationError(
                        field=f"sentiments.{name}.{bias}",
                        message="Must be an integer",
                        value=value
                    ))

        for strategy, rates in _mapping(tables, "win_rates").items():
            if not isinstance(rates, dict):
                errors.append(ValidationError(
                    field=f"win_rates.{strategy}",
                    message="Must map risk profiles to rates",
                    value=rates
                ))
                continue
            missing = [profile for profile in profiles if profile not in rates]
            if missing:
                errors.append(ValidationError(
                    field=f"win_rates.{strategy}",
                    message=f"Missing rates for {', '.join(missing)}",
                    value=sorted(rates)
                ))
            for profile, value in rates.items():
                if not _is_number(value) or value <= 0 or value >= 1:
                    errors.append(ValidationError(
                        field=f"win_rates.{strategy}.{profile}",
                        message="Must be a number strictly between 0 and 1",
                        value=value
                    ))

        for key, entry in _mapping(tables, "strategies").items():
            errors.extend(_missing_text_fields(f"strategies.{key}", entry, ("name", "description")))

        for key, entry in _mapping(tables, "news_events").items():
            errors.extend(_missing_text_fields(f"news_events.{key}", entry, ("name",)))
            impact = entry.get("impact") if isinstance(entry, dict) else None
            if impact not in impacts:
                errors.append(ValidationError(
                    field=f"news_events.{key}.impact",
                    message="Must be one of Low, Medium, High",
                    value=impact
                ))

        conditions = tables.get("conditions")
        if not isinstance(conditions, list):
            conditions = []
        for index, entry in enumerate(conditions):
            errors.extend(_missing_text_fields(
                f"conditions[{index}]", entry, ("name", "description")
            ))
            factor = entry.get("factor") if isinstance(entry, dict) else None
            if not _is_number(factor) or factor <= 0 or factor > 1.1:
                errors.append(ValidationError(
                    field=f"conditions[{index}].factor",
                    message="Must be a number in (0, 1.1]",
                    value=factor
                ))

        for market_type, pairs in _mapping(tables, "pairs").items():
            if not isinstance(pairs, list) or not pairs:
                errors.append(ValidationError(
                    field=f"pairs.{market_type}",
                    message="Must be a non-empty list of pairs",
                    value=pairs
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "scoring" in config:
            errors.extend(ConfigValidator.validate_scoring_params(config["scoring"]))

        if "resolution" in config:
            errors.extend(ConfigValidator.validate_resolution_params(config["resolution"]))

        if "gating" in config:
            errors.extend(ConfigValidator.validate_gating_params(config["gating"]))

        if "simulation" in config:
            errors.extend(ConfigValidator.validate_simulation_params(config["simulation"]))

        return errors
