"""
Runtime settings for Sprout.

Settings are an explicit, immutable object handed to the engines and
the web layer. They come from a YAML file (``--config`` or
``$SPROUT_CONFIG``) or fall back to the defaults below.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.models import BandBasis

CONFIG_ENV_VAR = "SPROUT_CONFIG"


class GrowthSettings(BaseModel):
    """Tunable constants of the recommendation and assessment rules."""
    model_config = ConfigDict(frozen=True)

    # Average weeks per month, used to turn monthly gains into weekly ones
    weeks_per_month: float = Field(4.3, gt=0)

    # +/- share around the expected gain that still counts as acceptable
    gain_tolerance: float = Field(0.15, ge=0, lt=1)

    # +/- share around the WHO median for expected absolute values
    weight_range_tolerance: float = Field(0.10, ge=0, lt=1)
    length_range_tolerance: float = Field(0.05, ge=0, lt=1)

    band_basis: BandBasis = BandBasis.MIXED

    # Percent difference from the newborn median: (notable, significant)
    birth_comparison_thresholds: tuple[float, float] = (5.0, 15.0)

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_thresholds(self) -> "GrowthSettings":
        notable, significant = self.birth_comparison_thresholds
        if not 0 <= notable <= significant:
            raise ValueError("birth_comparison_thresholds must satisfy 0 <= notable <= significant")
        return self


DEFAULT_SETTINGS = GrowthSettings()


def load_settings(path: str | Path | None = None) -> GrowthSettings:
    """
    Load settings from YAML.

    Args:
        path: Settings file. Defaults to ``$SPROUT_CONFIG`` when unset.

    Returns:
        GrowthSettings, or the defaults when no file is configured
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return DEFAULT_SETTINGS

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{config_path.name} must contain a mapping of settings")

    return GrowthSettings(**data)
