"""
Progress calculations.

Two distinct conventions coexist and are kept apart on purpose:

- progress toward a gain target: how much of ``birth -> birth + gain``
  the child has covered;
- progress relative to the standard: the current value as a share of
  the WHO median at the child's current age.

Both return whole percentages clamped to 0-100 and never raise; inputs
go through ``parse_or_zero`` first.
"""

from __future__ import annotations

import logging
from typing import Any

from knowledge.growth import lookup
from src.models import (
    GrowthStatus,
    MeasurementUnit,
    Metric,
    ProgressBand,
    ProgressResult,
)
from src.units import (
    clamp_percentage,
    convert,
    parse_or_zero,
    round_half_up,
    standard_unit,
)

logger = logging.getLogger(__name__)


def calculate_progress(
    birth_value: Any,
    current_value: Any,
    target_gain: Any,
    ceiling: Any = None,
) -> ProgressResult:
    """
    Progress from the birth value toward ``birth + target_gain``.

    Args:
        birth_value: Value at birth
        current_value: Current cumulative value (same unit as birth)
        target_gain: Gain expected on top of the birth value
        ceiling: Optional cap on the total target; a current value at or
            above it counts as complete

    Returns:
        ProgressResult with the percentage and the figures behind it
    """
    birth = parse_or_zero(birth_value)
    current = parse_or_zero(current_value)
    total_target = birth + parse_or_zero(target_gain)

    cap = parse_or_zero(ceiling) if ceiling is not None else None
    if cap is not None and cap > 0:
        total_target = min(total_target, cap)

    expected = total_target - birth
    actual = current - birth

    if birth >= total_target:
        # Zero or negative target gain: nothing left to achieve
        percentage = 100
    elif cap is not None and cap > 0 and current >= cap:
        percentage = 100
    else:
        percentage = clamp_percentage(100 * actual / expected)

    return ProgressResult(
        percentage=percentage,
        current_total=current,
        target=total_target,
        birth_value=birth,
        expected_growth=expected,
        actual_growth=actual,
    )


def progress_toward_target(birth_value: Any, current_value: Any, target_gain: Any) -> int:
    """Percentage (0-100) of the target gain achieved since birth."""
    return calculate_progress(birth_value, current_value, target_gain).percentage


def progress_relative_to_standard(
    current_value: Any,
    age_months: Any,
    sex: Any,
    metric: Metric | str,
    unit: MeasurementUnit | str | None = None,
) -> int:
    """
    Current value as a percentage (0-100) of the WHO median at this age.

    Args:
        current_value: Measured value
        age_months: Child's age in months
        sex: "male" or "female"
        metric: weight, height or head_circ
        unit: Unit of ``current_value``; defaults to the standard's own
            unit (kg for weight, cm for lengths)

    Returns:
        100 means exactly at the median; values above it are capped.
    """
    try:
        metric = Metric(metric)
    except ValueError:
        logger.warning("Unknown metric %r, reporting 0", metric)
        return 0

    target_unit = standard_unit(metric)
    try:
        source_unit = MeasurementUnit(unit) if unit is not None else target_unit
    except ValueError:
        logger.warning("Unknown unit %r, reading the value as %s", unit, target_unit.value)
        source_unit = target_unit

    if source_unit.is_mass != target_unit.is_mass:
        logger.warning(
            "Unit %s does not fit %s, reading the value as %s",
            source_unit.value, metric.value, target_unit.value,
        )
        source_unit = target_unit

    value = convert(current_value, source_unit, target_unit)
    standard = lookup(age_months, sex).value(metric)

    if standard == 0:
        return clamp_percentage(value)
    return clamp_percentage(100 * value / standard)


def gain_percentage(actual_gain: Any, minimum_gain: Any) -> int:
    """Share of the minimum recommended gain achieved; 100 when no minimum."""
    actual = parse_or_zero(actual_gain)
    minimum = parse_or_zero(minimum_gain)
    if minimum == 0:
        return 100
    return clamp_percentage(100 * actual / minimum)


def gain_difference_percentage(actual_gain: Any, minimum_gain: Any) -> int:
    """Signed percent above (+) or below (-) the minimum recommended gain."""
    actual = parse_or_zero(actual_gain)
    minimum = parse_or_zero(minimum_gain)
    if minimum == 0:
        return 0
    return round_half_up(100 * (actual - minimum) / minimum)


def format_signed_percentage(percentage: int) -> str:
    return f"+{percentage}%" if percentage >= 0 else f"{percentage}%"


def growth_status(percentage: Any) -> GrowthStatus:
    """Qualitative label for a progress percentage."""
    value = parse_or_zero(percentage)
    if value < 50:
        return GrowthStatus.BELOW_TARGET
    elif value < 80:
        return GrowthStatus.APPROACHING_TARGET
    elif value <= 100:
        return GrowthStatus.ON_TARGET
    else:
        return GrowthStatus.EXCEEDING_TARGET


def progress_band(percentage: Any) -> ProgressBand:
    """Coarse band used to colour progress bars."""
    value = parse_or_zero(percentage)
    if value >= 85:
        return ProgressBand.ON_TRACK
    elif value >= 50:
        return ProgressBand.PROGRESSING
    else:
        return ProgressBand.NEEDS_ATTENTION
