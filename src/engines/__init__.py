"""
Growth calculation engines.
"""

from .progress import (
    calculate_progress,
    progress_toward_target,
    progress_relative_to_standard,
    gain_percentage,
    gain_difference_percentage,
    format_signed_percentage,
    growth_status,
    progress_band,
)
from .recommendations import build_recommendations
from .assessment import GrowthAssessor, assess_growth

__all__ = [
    "calculate_progress",
    "progress_toward_target",
    "progress_relative_to_standard",
    "gain_percentage",
    "gain_difference_percentage",
    "format_signed_percentage",
    "growth_status",
    "progress_band",
    "build_recommendations",
    "GrowthAssessor",
    "assess_growth",
]
