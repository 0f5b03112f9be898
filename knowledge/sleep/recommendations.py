"""
Daily sleep recommendations by age.
"""

from __future__ import annotations

from typing import Any

from src.models import SleepRecommendation
from src.units import parse_or_zero

# Format: (upper age bound in months, inclusive; label; min, max, nap, night hours)
SLEEP_BY_AGE: list[tuple[float, str, int, int, int, int]] = [
    (3, "Newborn (0-3 months)", 14, 17, 8, 8),
    (12, "Infant (4-12 months)", 12, 16, 4, 10),
    (24, "Toddler (1-2 years)", 11, 14, 2, 11),
    (60, "Preschooler (3-5 years)", 10, 13, 1, 11),
]

SCHOOL_AGE = ("School-age (6-12 years)", 9, 12, 0, 10)


def get_sleep_recommendation(age_months: Any) -> SleepRecommendation:
    """Recommended total, nap and night sleep hours for an age."""
    age = parse_or_zero(age_months)

    # Under 4 months counts as newborn, including fractional ages like 3.5
    if age < 4:
        _, label, low, high, nap, night = SLEEP_BY_AGE[0]
    else:
        for upper, label, low, high, nap, night in SLEEP_BY_AGE[1:]:
            if age <= upper:
                break
        else:
            label, low, high, nap, night = SCHOOL_AGE

    return SleepRecommendation(
        age_group=label,
        min_hours=low,
        max_hours=high,
        recommended_nap_hours=nap,
        recommended_night_hours=night,
    )
