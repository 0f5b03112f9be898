"""
Growth standards lookups.
"""

from .who_infant import (
    lookup,
    standards_table,
    expected_monthly_growth,
    get_age_group_label,
    WHO_INFANT_MALE,
    WHO_INFANT_FEMALE,
    MIN_AGE_MONTHS,
    MAX_AGE_MONTHS,
)

__all__ = [
    "lookup",
    "standards_table",
    "expected_monthly_growth",
    "get_age_group_label",
    "WHO_INFANT_MALE",
    "WHO_INFANT_FEMALE",
    "MIN_AGE_MONTHS",
    "MAX_AGE_MONTHS",
]
