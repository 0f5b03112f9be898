"""
Numeric helpers shared by the growth engines.

Every value that reaches the calculation core goes through
``parse_or_zero`` first: missing or malformed input becomes 0 rather
than an exception, so a screen with an unrecorded measurement still
renders "0%".
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from src.models.growth import Measurement, MeasurementUnit, Metric

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a lenient form parser reads "12.5kg"
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Multiplier from each unit to the base unit of its dimension (g, mm)
_TO_BASE: dict[MeasurementUnit, float] = {
    MeasurementUnit.GRAMS: 1.0,
    MeasurementUnit.KILOGRAMS: 1000.0,
    MeasurementUnit.MILLIMETERS: 1.0,
    MeasurementUnit.CENTIMETERS: 10.0,
}

_MASS_UNITS = {MeasurementUnit.GRAMS, MeasurementUnit.KILOGRAMS}


def parse_or_zero(value: Any) -> float:
    """
    Coerce any input to a finite float, falling back to 0.

    Accepts ints, floats, numeric strings (including a trailing unit
    suffix) and ``None``. NaN and infinities are treated as missing.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, float):
        result = value
    elif isinstance(value, int):
        try:
            result = float(value)
        except OverflowError:
            logger.debug("Integer %r is too large for a float, using 0", value)
            return 0.0
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            logger.debug("Could not parse %r as a number, using 0", value)
            return 0.0
        result = float(match.group(0))
    else:
        try:
            result = float(value)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Could not coerce %r to a number, using 0", value)
            return 0.0

    if not math.isfinite(result):
        logger.debug("Non-finite input %r replaced with 0", value)
        return 0.0
    return result


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    Non-finite values (an intermediate that overflowed, or NaN) become 0.
    """
    if not math.isfinite(value):
        logger.debug("Non-finite value %r rounded to 0", value)
        return 0
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int) -> float:
    """Half-up rounding to a fixed number of decimal places."""
    factor = 10 ** places
    return round_half_up(value * factor) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_percentage(raw: float) -> int:
    """
    Clamp a raw percentage to [0, 100] and round it.

    Clamping happens before rounding so overflowed intermediates
    (infinities from extreme inputs) still land on a bound.
    """
    if math.isnan(raw):
        return 0
    return round_half_up(clamp(raw, 0.0, 100.0))


def format_number(value: float) -> str:
    """Render 2.0 as "2" and 3.7 as "3.7"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def standard_unit(metric: Metric) -> MeasurementUnit:
    """Unit the WHO reference table is expressed in for a metric."""
    return MeasurementUnit.KILOGRAMS if metric == Metric.WEIGHT else MeasurementUnit.CENTIMETERS


def gain_unit(metric: Metric) -> MeasurementUnit:
    """Unit gains are reported in (grams for weight, millimeters for lengths)."""
    return MeasurementUnit.GRAMS if metric == Metric.WEIGHT else MeasurementUnit.MILLIMETERS


def convert(value: Any, from_unit: MeasurementUnit, to_unit: MeasurementUnit) -> float:
    """
    Convert a value between units of the same dimension.

    Mass and length never convert into each other; asking for that is a
    programming error rather than bad user input, so it raises.
    """
    if (from_unit in _MASS_UNITS) != (to_unit in _MASS_UNITS):
        raise ValueError(f"Cannot convert {from_unit.value} to {to_unit.value}")
    if from_unit == to_unit:
        return parse_or_zero(value)
    result = parse_or_zero(value) * _TO_BASE[from_unit] / _TO_BASE[to_unit]
    if not math.isfinite(result):
        logger.debug("%r %s overflows in %s, using 0", value, from_unit.value, to_unit.value)
        return 0.0
    return result


def measurement_value(
    measurement: Measurement | None,
    unit: MeasurementUnit,
) -> float:
    """Value of an optional measurement in the requested unit, 0 when missing."""
    if measurement is None:
        return 0.0
    return convert(measurement.value, measurement.unit, unit)
