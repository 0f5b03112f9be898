"""
Data models for Sprout.
"""

from .growth import (
    Sex,
    Metric,
    MeasurementUnit,
    GrowthStatus,
    ProgressBand,
    BandBasis,
    GrowthStandardRow,
    Measurement,
    GrowthEntry,
    GrowthRecord,
    ExpectedGrowth,
    ProgressResult,
    GainRange,
    ValueRange,
    RecommendationBundle,
    BirthComparison,
    MetricAssessment,
    GrowthAssessment,
    SleepRecommendation,
)

__all__ = [
    "Sex",
    "Metric",
    "MeasurementUnit",
    "GrowthStatus",
    "ProgressBand",
    "BandBasis",
    "GrowthStandardRow",
    "Measurement",
    "GrowthEntry",
    "GrowthRecord",
    "ExpectedGrowth",
    "ProgressResult",
    "GainRange",
    "ValueRange",
    "RecommendationBundle",
    "BirthComparison",
    "MetricAssessment",
    "GrowthAssessment",
    "SleepRecommendation",
]
