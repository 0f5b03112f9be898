"""
Core data models for Sprout.

These Pydantic models define the plain inputs and outputs of the growth
calculation core. Reference rows and computed results are immutable;
nothing here is persisted.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: object) -> "Sex":
        """
        Lenient sex parsing: anything that is not recognisably female
        uses the male table.
        """
        if isinstance(value, Sex):
            return value
        if isinstance(value, str) and value.strip().lower() in ("female", "f", "girl", "girls"):
            return cls.FEMALE
        return cls.MALE


class Metric(str, Enum):
    WEIGHT = "weight"
    HEIGHT = "height"
    HEAD_CIRC = "head_circ"

    @property
    def label(self) -> str:
        return {
            Metric.WEIGHT: "weight",
            Metric.HEIGHT: "height",
            Metric.HEAD_CIRC: "head circumference",
        }[self]


class MeasurementUnit(str, Enum):
    GRAMS = "g"
    KILOGRAMS = "kg"
    MILLIMETERS = "mm"
    CENTIMETERS = "cm"

    @property
    def is_mass(self) -> bool:
        return self in (MeasurementUnit.GRAMS, MeasurementUnit.KILOGRAMS)


class GrowthStatus(str, Enum):
    BELOW_TARGET = "Below Target"
    APPROACHING_TARGET = "Approaching Target"
    ON_TARGET = "On Target"
    EXCEEDING_TARGET = "Exceeding Target"


class ProgressBand(str, Enum):
    ON_TRACK = "on_track"
    PROGRESSING = "progressing"
    NEEDS_ATTENTION = "needs_attention"


class BandBasis(str, Enum):
    """Which expected-gain figure the min/max gain bands are built from."""
    MIXED = "mixed"  # weekly for weight, monthly for height and head
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# =============================================================================
# REFERENCE DATA
# =============================================================================


class GrowthStandardRow(BaseModel):
    """One WHO reference sample: median values at an age."""
    model_config = ConfigDict(frozen=True)

    age_months: float
    weight_kg: float
    height_cm: float
    head_circ_cm: float

    def value(self, metric: Metric) -> float:
        if metric == Metric.WEIGHT:
            return self.weight_kg
        if metric == Metric.HEIGHT:
            return self.height_cm
        return self.head_circ_cm


# =============================================================================
# MEASUREMENTS
# =============================================================================


class Measurement(BaseModel):
    """A measured value tagged with its unit at capture time."""
    model_config = ConfigDict(frozen=True)

    value: float
    unit: MeasurementUnit

    @classmethod
    def grams(cls, value: float) -> "Measurement":
        return cls(value=value, unit=MeasurementUnit.GRAMS)

    @classmethod
    def kilograms(cls, value: float) -> "Measurement":
        return cls(value=value, unit=MeasurementUnit.KILOGRAMS)

    @classmethod
    def millimeters(cls, value: float) -> "Measurement":
        return cls(value=value, unit=MeasurementUnit.MILLIMETERS)

    @classmethod
    def centimeters(cls, value: float) -> "Measurement":
        return cls(value=value, unit=MeasurementUnit.CENTIMETERS)


def _check_mass(measurement: Measurement | None) -> Measurement | None:
    if measurement is not None and not measurement.unit.is_mass:
        raise ValueError(f"weight must be in g or kg, got {measurement.unit.value}")
    return measurement


def _check_length(measurement: Measurement | None) -> Measurement | None:
    if measurement is not None and measurement.unit.is_mass:
        raise ValueError(f"length must be in mm or cm, got {measurement.unit.value}")
    return measurement


class GrowthEntry(BaseModel):
    """A dated follow-up measurement set."""
    model_config = ConfigDict(frozen=True)

    recorded_on: date
    weight: Measurement | None = None
    height: Measurement | None = None
    head_circ: Measurement | None = None
    notes: str | None = None

    @field_validator("weight")
    @classmethod
    def weight_is_mass(cls, value: Measurement | None) -> Measurement | None:
        return _check_mass(value)

    @field_validator("height", "head_circ")
    @classmethod
    def lengths_are_lengths(cls, value: Measurement | None) -> Measurement | None:
        return _check_length(value)

    def get(self, metric: Metric) -> Measurement | None:
        if metric == Metric.WEIGHT:
            return self.weight
        if metric == Metric.HEIGHT:
            return self.height
        return self.head_circ


class GrowthRecord(BaseModel):
    """
    A child's growth history as supplied by the records service.

    The core only reads birth values, the latest and previous entries,
    age and sex.
    """
    model_config = ConfigDict(frozen=True)

    child_name: str | None = None
    sex: Sex
    birth_date: date | None = None
    age_months: float | None = Field(None, ge=0)

    birth_weight: Measurement | None = None
    birth_height: Measurement | None = None
    birth_head_circ: Measurement | None = None

    entries: list[GrowthEntry] = Field(default_factory=list)

    @field_validator("birth_weight")
    @classmethod
    def weight_is_mass(cls, value: Measurement | None) -> Measurement | None:
        return _check_mass(value)

    @field_validator("birth_height", "birth_head_circ")
    @classmethod
    def lengths_are_lengths(cls, value: Measurement | None) -> Measurement | None:
        return _check_length(value)

    @field_validator("sex", mode="before")
    @classmethod
    def parse_sex(cls, value: object) -> Sex:
        return Sex.parse(value)

    def birth_value(self, metric: Metric) -> Measurement | None:
        if metric == Metric.WEIGHT:
            return self.birth_weight
        if metric == Metric.HEIGHT:
            return self.birth_height
        return self.birth_head_circ

    @property
    def sorted_entries(self) -> list[GrowthEntry]:
        return sorted(self.entries, key=lambda e: e.recorded_on)

    @property
    def latest_entry(self) -> GrowthEntry | None:
        entries = self.sorted_entries
        return entries[-1] if entries else None

    @property
    def previous_entry(self) -> GrowthEntry | None:
        entries = self.sorted_entries
        return entries[-2] if len(entries) > 1 else None

    def age_in_months(self, as_of: date | None = None) -> float:
        """
        Age used for standard lookups.

        An explicit ``age_months`` wins; otherwise whole months since
        birth, not counting a month whose day has not been reached yet.
        """
        if self.age_months is not None:
            return self.age_months
        if self.birth_date is None:
            return 0
        today = as_of or date.today()
        months = (today.year - self.birth_date.year) * 12
        months += today.month - self.birth_date.month
        if today.day < self.birth_date.day:
            months -= 1
        return max(0, months)


# =============================================================================
# RESULTS
# =============================================================================


class ExpectedGrowth(BaseModel):
    """Expected gain per period: grams for weight, millimeters for lengths."""
    model_config = ConfigDict(frozen=True)

    weight: int
    height: int
    head_circ: int

    def value(self, metric: Metric) -> int:
        if metric == Metric.WEIGHT:
            return self.weight
        if metric == Metric.HEIGHT:
            return self.height
        return self.head_circ


class ProgressResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: int = Field(ge=0, le=100)
    current_total: float
    target: float
    birth_value: float
    expected_growth: float
    actual_growth: float


class GainRange(BaseModel):
    """Acceptable gain band for one metric over ``period``."""
    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    unit: MeasurementUnit
    period: str


class ValueRange(BaseModel):
    """Expected absolute value band around the WHO median."""
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    unit: MeasurementUnit


class RecommendationBundle(BaseModel):
    """Human-facing recommendation ranges for a child's age and sex."""
    model_config = ConfigDict(frozen=True)

    age_group: str
    exact_age: float
    sex: Sex
    who_standard: GrowthStandardRow

    expected_monthly: ExpectedGrowth
    expected_weekly: ExpectedGrowth

    weight_gain: GainRange
    height_gain: GainRange
    head_circ_gain: GainRange

    expected_weight: ValueRange
    expected_height: ValueRange
    expected_head_circ: ValueRange

    weight_gain_per_week: str
    height_gain_per_month: str
    head_circ_gain_per_month: str

    def gain_range(self, metric: Metric) -> GainRange:
        if metric == Metric.WEIGHT:
            return self.weight_gain
        if metric == Metric.HEIGHT:
            return self.height_gain
        return self.head_circ_gain

    def expected_range(self, metric: Metric) -> ValueRange:
        if metric == Metric.WEIGHT:
            return self.expected_weight
        if metric == Metric.HEIGHT:
            return self.expected_height
        return self.expected_head_circ


class BirthComparison(BaseModel):
    """How a birth measurement compares with the WHO newborn median."""
    model_config = ConfigDict(frozen=True)

    metric: Metric
    value: float | None
    who_average: float
    percent_difference: float | None
    label: str

    @computed_field
    @property
    def summary(self) -> str:
        if self.percent_difference is None:
            return ""
        if self.percent_difference > 0:
            return f"{self.percent_difference:.1f}% above avg"
        if self.percent_difference < 0:
            return f"{abs(self.percent_difference):.1f}% below avg"
        return "At average"


class MetricAssessment(BaseModel):
    """Gain and standard-relative progress for one metric."""
    model_config = ConfigDict(frozen=True)

    metric: Metric
    baseline: float
    baseline_source: str  # "previous" or "birth"
    current: float
    gain: int
    gain_unit: MeasurementUnit
    minimum_gain: int
    sufficient: bool
    gain_percentage: int
    difference_percentage: int
    status: GrowthStatus
    standard_progress: int

    @computed_field
    @property
    def difference_text(self) -> str:
        return f"+{self.difference_percentage}%" if self.difference_percentage >= 0 else f"{self.difference_percentage}%"


class GrowthAssessment(BaseModel):
    """Everything the growth screen shows for one child."""
    model_config = ConfigDict(frozen=True)

    child_name: str | None = None
    sex: Sex
    age_months: float
    recommendations: RecommendationBundle
    metrics: list[MetricAssessment]
    birth: list[BirthComparison]

    def metric(self, metric: Metric) -> MetricAssessment:
        return next(m for m in self.metrics if m.metric == metric)

    @computed_field
    @property
    def all_sufficient(self) -> bool:
        return all(m.sufficient for m in self.metrics)


class SleepRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    age_group: str
    min_hours: int
    max_hours: int
    recommended_nap_hours: int
    recommended_night_hours: int
