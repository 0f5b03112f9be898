"""
Sleep guidance.
"""

from .recommendations import get_sleep_recommendation, SLEEP_BY_AGE

__all__ = [
    "get_sleep_recommendation",
    "SLEEP_BY_AGE",
]
