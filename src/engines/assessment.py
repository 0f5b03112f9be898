"""
Growth-adequacy assessment for a child's record.

Combines the recommendation bundle for the child's age with the gains
between the two most recent measurements (or birth and the latest one)
and reports, per metric, whether the gain reaches the recommended
minimum.
"""

from __future__ import annotations

import logging
from datetime import date

from knowledge.growth import lookup
from src.config import DEFAULT_SETTINGS, GrowthSettings
from src.engines.progress import (
    gain_difference_percentage,
    gain_percentage,
    growth_status,
    progress_relative_to_standard,
)
from src.engines.recommendations import build_recommendations
from src.models import (
    BirthComparison,
    GrowthAssessment,
    GrowthRecord,
    GrowthStatus,
    Measurement,
    Metric,
    MetricAssessment,
    RecommendationBundle,
    Sex,
)
from src.units import gain_unit, measurement_value, round_half_up, round_to, standard_unit

logger = logging.getLogger(__name__)


class GrowthAssessor:
    """
    Assesses a GrowthRecord against the WHO-based recommendations.

    The assessor holds only its settings; each call is independent.
    """

    def __init__(self, settings: GrowthSettings | None = None):
        self.settings = settings or DEFAULT_SETTINGS

    def assess(self, record: GrowthRecord, as_of: date | None = None) -> GrowthAssessment:
        """
        Assess a record.

        Args:
            record: The child's growth history
            as_of: Date the age is computed for (defaults to today)

        Returns:
            GrowthAssessment with per-metric gains and birth comparisons
        """
        age = record.age_in_months(as_of)
        recommendations = build_recommendations(age, record.sex, self.settings)

        metrics = [
            self._assess_metric(record, metric, age, recommendations)
            for metric in Metric
        ]
        birth = [self.compare_birth(record.birth_value(m), m, record.sex) for m in Metric]

        return GrowthAssessment(
            child_name=record.child_name,
            sex=record.sex,
            age_months=age,
            recommendations=recommendations,
            metrics=metrics,
            birth=birth,
        )

    def _assess_metric(
        self,
        record: GrowthRecord,
        metric: Metric,
        age: float,
        recommendations: RecommendationBundle,
    ) -> MetricAssessment:
        unit = gain_unit(metric)

        # Entries missing this metric are skipped rather than read as 0
        measured = [e.get(metric) for e in record.sorted_entries if e.get(metric) is not None]
        current = measured[-1] if measured else None
        if len(measured) > 1:
            baseline, baseline_source = measured[-2], "previous"
        else:
            baseline, baseline_source = record.birth_value(metric), "birth"

        if current is None:
            logger.debug("No %s measurements recorded, comparing birth with itself", metric.value)
            current = baseline

        current_value = measurement_value(current, unit)
        baseline_value = measurement_value(baseline, unit)
        gain = round_half_up(current_value - baseline_value)

        minimum = recommendations.gain_range(metric).min
        difference = gain_difference_percentage(gain, minimum)
        if minimum == 0:
            status = GrowthStatus.ON_TARGET
        else:
            status = growth_status(100 + difference)

        return MetricAssessment(
            metric=metric,
            baseline=baseline_value,
            baseline_source=baseline_source,
            current=current_value,
            gain=gain,
            gain_unit=unit,
            minimum_gain=minimum,
            sufficient=gain >= minimum,
            gain_percentage=gain_percentage(gain, minimum),
            difference_percentage=difference,
            status=status,
            standard_progress=progress_relative_to_standard(
                measurement_value(current, standard_unit(metric)),
                age,
                record.sex,
                metric,
            ),
        )

    def compare_birth(
        self,
        measurement: Measurement | None,
        metric: Metric,
        sex: Sex,
    ) -> BirthComparison:
        """Compare a birth measurement with the newborn WHO median."""
        unit = gain_unit(metric)
        newborn = lookup(0, sex).value(metric)
        who_average = round_half_up(newborn * (1000 if metric == Metric.WEIGHT else 10))

        value = measurement_value(measurement, unit) if measurement is not None else None
        if not value or who_average == 0:
            return BirthComparison(
                metric=metric,
                value=value,
                who_average=who_average,
                percent_difference=None,
                label="not recorded",
            )

        percent = round_to((value - who_average) / who_average * 100, 1)
        notable, significant = self.settings.birth_comparison_thresholds

        if percent > significant:
            label = "significantly above average"
        elif percent > notable:
            label = "above average"
        elif percent < -significant:
            label = "significantly below average"
        elif percent < -notable:
            label = "below average"
        else:
            label = "within normal range"

        return BirthComparison(
            metric=metric,
            value=value,
            who_average=who_average,
            percent_difference=percent,
            label=label,
        )


def assess_growth(
    record: GrowthRecord,
    as_of: date | None = None,
    settings: GrowthSettings | None = None,
) -> GrowthAssessment:
    """Assess a growth record with the given (or default) settings."""
    return GrowthAssessor(settings).assess(record, as_of)
