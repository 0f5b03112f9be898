"""
Tests for numeric helpers and runtime settings.
"""

import math
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


class TestParseOrZero:
    """Lenient numeric coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (None, 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (-math.inf, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        ("12.5kg", 12.5),
        ("  -3", -3.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("1e999", 0.0),
        (10 ** 400, 0.0),
        (7, 7.0),
        ([1, 2], 0.0),
    ])
    def test_coercion(self, raw, expected):
        from src.units import parse_or_zero

        assert parse_or_zero(raw) == expected


class TestRounding:
    """Half-up rounding and clamping."""

    def test_half_up(self):
        from src.units import round_half_up

        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(12.5) == 13
        assert round_half_up(0.49) == 0

    def test_non_finite_rounds_to_zero(self):
        from src.units import round_half_up, round_to

        assert round_half_up(math.inf) == 0
        assert round_half_up(-math.inf) == 0
        assert round_half_up(math.nan) == 0
        assert round_to(1e308, 1) == 0

    def test_round_to(self):
        from src.units import round_to

        assert round_to(18.75, 1) == 18.8
        assert round_to(-6.25, 1) == -6.2

    def test_clamp_percentage(self):
        from src.units import clamp_percentage

        assert clamp_percentage(math.inf) == 100
        assert clamp_percentage(-math.inf) == 0
        assert clamp_percentage(math.nan) == 0
        assert clamp_percentage(99.5) == 100

    def test_format_number(self):
        from src.units import format_number

        assert format_number(2.0) == "2"
        assert format_number(3.7) == "3.7"
        assert format_number(0) == "0"


class TestUnits:
    """Unit conversion."""

    def test_convert(self):
        from src.models import MeasurementUnit
        from src.units import convert

        assert convert(1.2, MeasurementUnit.KILOGRAMS, MeasurementUnit.GRAMS) == pytest.approx(1200)
        assert convert(600, MeasurementUnit.MILLIMETERS, MeasurementUnit.CENTIMETERS) == pytest.approx(60)

    def test_overflowing_conversion_is_zero(self):
        from src.models import MeasurementUnit
        from src.units import convert

        assert convert(1e306, MeasurementUnit.KILOGRAMS, MeasurementUnit.GRAMS) == 0

    def test_mass_and_length_do_not_mix(self):
        from src.models import MeasurementUnit
        from src.units import convert

        with pytest.raises(ValueError):
            convert(1, MeasurementUnit.KILOGRAMS, MeasurementUnit.CENTIMETERS)

    def test_missing_measurement(self):
        from src.models import MeasurementUnit
        from src.units import measurement_value

        assert measurement_value(None, MeasurementUnit.GRAMS) == 0


class TestSettings:
    """Settings loading."""

    def test_defaults(self, monkeypatch):
        from src.config import DEFAULT_SETTINGS, load_settings
        from src.models import BandBasis

        monkeypatch.delenv("SPROUT_CONFIG", raising=False)
        settings = load_settings()

        assert settings is DEFAULT_SETTINGS
        assert settings.weeks_per_month == 4.3
        assert settings.gain_tolerance == 0.15
        assert settings.band_basis == BandBasis.MIXED

    def test_yaml_file(self, tmp_path):
        from src.config import load_settings
        from src.models import BandBasis

        path = tmp_path / "sprout.yaml"
        path.write_text("band_basis: weekly\ngain_tolerance: 0.1\nlog_level: DEBUG\n")
        settings = load_settings(path)

        assert settings.band_basis == BandBasis.WEEKLY
        assert settings.gain_tolerance == 0.1
        assert settings.log_level == "DEBUG"

    def test_env_var(self, tmp_path, monkeypatch):
        from src.config import load_settings

        path = tmp_path / "sprout.yaml"
        path.write_text("weeks_per_month: 4.0\n")
        monkeypatch.setenv("SPROUT_CONFIG", str(path))

        assert load_settings().weeks_per_month == 4.0

    def test_empty_file_gives_defaults(self, tmp_path):
        from src.config import load_settings

        path = tmp_path / "sprout.yaml"
        path.write_text("")

        assert load_settings(path).gain_tolerance == 0.15

    def test_missing_file(self, tmp_path):
        from src.config import load_settings

        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_non_mapping(self, tmp_path):
        from src.config import load_settings

        path = tmp_path / "sprout.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            load_settings(path)

    def test_invalid_values(self):
        from pydantic import ValidationError
        from src.config import GrowthSettings

        with pytest.raises(ValidationError):
            GrowthSettings(birth_comparison_thresholds=(20, 10))
        with pytest.raises(ValidationError):
            GrowthSettings(gain_tolerance=1.5)
        with pytest.raises(ValidationError):
            GrowthSettings(weeks_per_month=0)

    def test_log_level(self):
        from pydantic import ValidationError
        from src.config import GrowthSettings

        assert GrowthSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            GrowthSettings(log_level="LOUD")

    def test_settings_are_immutable(self):
        from pydantic import ValidationError
        from src.config import GrowthSettings

        settings = GrowthSettings()
        with pytest.raises(ValidationError):
            settings.gain_tolerance = 0.2
