"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError


# Emotions offered by the journal's trade form.
KNOWN_EMOTIONS = [
    "FOMO",
    "REVENGE",
    "TILT",
    "OVERRISK",
    "PATIENCE",
    "REGRET",
    "DISCIPLINE",
    "CONFIDENT",
    "ANXIOUS",
    "NEUTRAL",
]


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class AggregationConfig(BaseModel):
    leaning_threshold: float = 15.0  # |leaning %| above this is directional
    full_mark_scale: float = 1.2  # Radar ceiling = max(1, trades) * scale


class ScoringConfig(BaseModel):
    """Emotion categories and weights for the discipline/tilt score."""

    positive_emotions: list[str] = Field(
        default_factory=lambda: ["DISCIPLINE", "CONFIDENCE", "PATIENCE"]
    )
    negative_emotions: list[str] = Field(
        default_factory=lambda: ["TILT", "REVENGE", "IMPATIENCE"]
    )
    neutral_emotions: list[str] = Field(
        default_factory=lambda: ["NEUTRAL", "ANALYTICAL"]
    )
    positive_weight: float = 2.0
    neutral_weight: float = 1.0
    negative_weight: float = 1.5
    default_score: float = 50.0  # Discipline level when nothing can be scored
    decimals: int = 2

    @model_validator(mode="after")
    def categories_must_not_overlap(self) -> "ScoringConfig":
        seen: dict[str, str] = {}
        for name, tags in (
            ("positive", self.positive_emotions),
            ("negative", self.negative_emotions),
            ("neutral", self.neutral_emotions),
        ):
            for tag in tags:
                key = tag.upper()
                if key in seen and seen[key] != name:
                    raise ValueError(
                        f"Emotion '{key}' is listed as both {seen[key]} and {name}"
                    )
                seen[key] = name
        return self


class ValidationConfig(BaseModel):
    enabled: bool = True
    complement_tolerance: float = 0.01  # |discipline + tilt - 100|
    min_psychological_stability_index: float = 20.0
    max_calculation_time_ms: float = 2000.0
    max_memory_usage_bytes: int = 50 * 1024 * 1024  # 50MB
    enable_auto_correction: bool = True
    log_validation_failures: bool = False
    strict_mode: bool = False  # Low stability index becomes an error
    known_emotions: list[str] = Field(default_factory=lambda: list(KNOWN_EMOTIONS))


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "TRADE_PSYCH_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: The file is not valid TOML or the values fail
            validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
