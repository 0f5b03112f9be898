"""
Growth recommendations for a child's age and sex.
"""

from __future__ import annotations

from typing import Any

from knowledge.growth import expected_monthly_growth, get_age_group_label, lookup
from src.config import DEFAULT_SETTINGS, GrowthSettings
from src.models import (
    BandBasis,
    ExpectedGrowth,
    GainRange,
    MeasurementUnit,
    RecommendationBundle,
    Sex,
    ValueRange,
)
from src.units import format_number, parse_or_zero, round_half_up, round_to


def _factors(tolerance: float) -> tuple[float, float]:
    # Snap 1 - 0.15 to the double nearest 0.85
    return round(1 - tolerance, 10), round(1 + tolerance, 10)


def _band(expected: int, tolerance: float) -> tuple[int, int]:
    low, high = _factors(tolerance)
    return round_half_up(expected * low), round_half_up(expected * high)


def _length_range(value_cm: float, tolerance: float) -> ValueRange:
    low, high = _factors(tolerance)
    return ValueRange(
        min=round_half_up(value_cm * low),
        max=round_half_up(value_cm * high),
        unit=MeasurementUnit.CENTIMETERS,
    )


def build_recommendations(
    age_months: Any,
    sex: Any,
    settings: GrowthSettings | None = None,
) -> RecommendationBundle:
    """
    Build the recommendation bundle shown alongside a child's growth.

    Args:
        age_months: Child's age in months
        sex: "male" or "female"
        settings: Tolerances and band basis; defaults apply when omitted

    Returns:
        RecommendationBundle with gain bands, expected value ranges and
        display strings
    """
    settings = settings or DEFAULT_SETTINGS
    age = parse_or_zero(age_months)
    sex = Sex.parse(sex)

    who_standard = lookup(age, sex)
    monthly = expected_monthly_growth(age, sex)
    weekly = ExpectedGrowth(
        weight=round_half_up(monthly.weight / settings.weeks_per_month),
        height=round_half_up(monthly.height / settings.weeks_per_month),
        head_circ=round_half_up(monthly.head_circ / settings.weeks_per_month),
    )

    # Weight bands come from the weekly figure and length bands from the
    # monthly one unless the settings pick a single basis
    tolerance = settings.gain_tolerance
    if settings.band_basis == BandBasis.WEEKLY:
        weight_basis, length_basis, length_period = weekly, weekly, "week"
    elif settings.band_basis == BandBasis.MONTHLY:
        weight_basis, length_basis, length_period = monthly, monthly, "month"
    else:
        weight_basis, length_basis, length_period = weekly, monthly, "month"
    weight_period = "month" if settings.band_basis == BandBasis.MONTHLY else "week"

    weight_min, weight_max = _band(weight_basis.weight, tolerance)
    height_min, height_max = _band(length_basis.height, tolerance)
    head_min, head_max = _band(length_basis.head_circ, tolerance)

    weight_low, weight_high = _factors(settings.weight_range_tolerance)
    expected_weight = ValueRange(
        min=round_to(who_standard.weight_kg * weight_low, 1),
        max=round_to(who_standard.weight_kg * weight_high, 1),
        unit=MeasurementUnit.KILOGRAMS,
    )

    _, upper_factor = _factors(tolerance)
    height_text = (
        f"{format_number(monthly.height / 10)}-"
        f"{format_number(round_half_up(monthly.height * upper_factor) / 10)} cm"
    )
    head_text = (
        f"{format_number(monthly.head_circ / 10)}-"
        f"{format_number(round_half_up(monthly.head_circ * upper_factor) / 10)} cm"
    )

    return RecommendationBundle(
        age_group=get_age_group_label(age),
        exact_age=age,
        sex=sex,
        who_standard=who_standard,
        expected_monthly=monthly,
        expected_weekly=weekly,
        weight_gain=GainRange(
            min=weight_min, max=weight_max, unit=MeasurementUnit.GRAMS, period=weight_period
        ),
        height_gain=GainRange(
            min=height_min, max=height_max, unit=MeasurementUnit.MILLIMETERS, period=length_period
        ),
        head_circ_gain=GainRange(
            min=head_min, max=head_max, unit=MeasurementUnit.MILLIMETERS, period=length_period
        ),
        expected_weight=expected_weight,
        expected_height=_length_range(who_standard.height_cm, settings.length_range_tolerance),
        expected_head_circ=_length_range(who_standard.head_circ_cm, settings.length_range_tolerance),
        weight_gain_per_week=f"{weight_min}-{weight_max} grams",
        height_gain_per_month=height_text,
        head_circ_gain_per_month=head_text,
    )
