"""
WHO infant growth standards (simplified) and the lookups built on them.

A 13-point subset of the WHO Child Growth Standards medians, one sample
per month from birth to 12 months, for weight (kg), length (cm) and head
circumference (cm).

Values between tabulated ages are linearly interpolated:

    value = lower + (upper - lower) * (age - lower_age) / (upper_age - lower_age)

Ages past 12 months reuse the 12-month row; the table stops at one year
and is not extrapolated. This is a consumer-app approximation, not a
percentile/z-score growth chart.

Reference: https://www.who.int/tools/child-growth-standards
"""

from __future__ import annotations

import logging
from typing import Any

from src.models import ExpectedGrowth, GrowthStandardRow, Sex
from src.units import parse_or_zero, round_half_up

logger = logging.getLogger(__name__)

MIN_AGE_MONTHS = 0
MAX_AGE_MONTHS = 12

# Format: age_months -> (weight_kg, height_cm, head_circ_cm)

# Boys, 0-12 months
WHO_INFANT_MALE: dict[int, tuple[float, float, float]] = {
    0: (3.3, 49.9, 34.5),
    1: (4.5, 54.7, 37.1),
    2: (5.6, 58.4, 39.1),
    3: (6.4, 61.4, 40.5),
    4: (7.0, 63.9, 41.7),
    5: (7.5, 65.9, 42.5),
    6: (7.9, 67.6, 43.2),
    7: (8.3, 69.2, 43.8),
    8: (8.6, 70.6, 44.3),
    9: (8.9, 72.0, 44.7),
    10: (9.2, 73.3, 45.2),
    11: (9.4, 74.5, 45.6),
    12: (9.6, 75.7, 46.0),
}

# Girls, 0-12 months
WHO_INFANT_FEMALE: dict[int, tuple[float, float, float]] = {
    0: (3.2, 49.1, 33.9),
    1: (4.2, 53.7, 36.0),
    2: (5.1, 57.1, 37.9),
    3: (5.8, 59.8, 39.3),
    4: (6.4, 62.1, 40.5),
    5: (6.9, 64.0, 41.3),
    6: (7.3, 65.7, 42.0),
    7: (7.6, 67.3, 42.6),
    8: (7.9, 68.7, 43.1),
    9: (8.2, 70.1, 43.6),
    10: (8.5, 71.5, 44.0),
    11: (8.7, 72.8, 44.4),
    12: (8.9, 74.0, 44.8),
}


def _table_for(sex: Any) -> dict[int, tuple[float, float, float]]:
    return WHO_INFANT_FEMALE if Sex.parse(sex) == Sex.FEMALE else WHO_INFANT_MALE


def _row(age: float, values: tuple[float, float, float]) -> GrowthStandardRow:
    weight, height, head_circ = values
    return GrowthStandardRow(age_months=age, weight_kg=weight, height_cm=height, head_circ_cm=head_circ)


def _interpolate_row(
    age_months: float,
    table: dict[int, tuple[float, float, float]],
) -> GrowthStandardRow:
    """
    Exact row or linear interpolation between the bracketing rows.

    Falls back to whichever bracket exists, then to the first row, so a
    sparse or truncated table still yields a row.
    """
    if not table:
        logger.warning("Empty growth standards table, returning zeros for age %s", age_months)
        return _row(age_months, (0.0, 0.0, 0.0))

    # Exact match
    if age_months in table:
        return _row(age_months, table[age_months])

    ages = sorted(table.keys())
    lower = [a for a in ages if a < age_months]
    upper = [a for a in ages if a > age_months]

    if lower and upper:
        lower_age, upper_age = lower[-1], upper[0]
        t = (age_months - lower_age) / (upper_age - lower_age)
        w1, h1, c1 = table[lower_age]
        w2, h2, c2 = table[upper_age]
        return _row(
            age_months,
            (
                w1 + (w2 - w1) * t,
                h1 + (h2 - h1) * t,
                c1 + (c2 - c1) * t,
            ),
        )

    # No bracket on one side
    fallback_age = lower[-1] if lower else (upper[0] if upper else ages[0])
    logger.debug("No bracketing rows for age %s, using row for age %s", age_months, fallback_age)
    return _row(fallback_age, table[fallback_age])


def lookup(age_months: Any, sex: Any) -> GrowthStandardRow:
    """
    WHO standard row for an age and sex.

    Args:
        age_months: Age in months; malformed input counts as 0
        sex: "male" or "female" (anything else uses the male table)

    Returns:
        The tabulated row for whole months, an interpolated row otherwise.
        Ages outside 0-12 are clamped to the nearest end of the table.
    """
    age = parse_or_zero(age_months)
    capped = min(max(age, MIN_AGE_MONTHS), MAX_AGE_MONTHS)
    if capped != age:
        logger.debug("Age %s months outside the standards table, using %s", age, capped)
    return _interpolate_row(capped, _table_for(sex))


def standards_table(sex: Any) -> list[GrowthStandardRow]:
    """All tabulated rows for a sex, youngest first."""
    table = _table_for(sex)
    return [_row(age, table[age]) for age in sorted(table)]


def expected_monthly_growth(age_months: Any, sex: Any) -> ExpectedGrowth:
    """
    Expected gain over the month ending at ``age_months``.

    The difference between the standard at the age and one month
    earlier, in grams (weight) and millimeters (height, head
    circumference). At birth both lookups hit the newborn row, so the
    result is zero.
    """
    age = parse_or_zero(age_months)
    current = lookup(age, sex)
    previous = lookup(max(0, age - 1), sex)

    return ExpectedGrowth(
        weight=round_half_up((current.weight_kg - previous.weight_kg) * 1000),
        height=round_half_up((current.height_cm - previous.height_cm) * 10),
        head_circ=round_half_up((current.head_circ_cm - previous.head_circ_cm) * 10),
    )


def get_age_group_label(age_months: Any) -> str:
    """Coarse age group shown next to recommendations."""
    age = parse_or_zero(age_months)
    if age <= 3:
        return "0-3 months"
    elif age <= 12:
        return "4-12 months"
    else:
        return "Over 12 months"
