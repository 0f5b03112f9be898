"""
Markdown exporter for Sprout.

Exports a growth assessment as a human-readable report.
"""

from __future__ import annotations

from pathlib import Path

from src.engines.progress import format_signed_percentage
from src.models import GrowthAssessment, Metric, RecommendationBundle


def export_markdown(
    assessment: GrowthAssessment,
    output_path: Path | None = None,
    include_recommendations: bool = True,
) -> str:
    """
    Export an assessment to Markdown format.
    
    Args:
        assessment: The assessment to export
        output_path: Optional path to write the Markdown file
        include_recommendations: Whether to append the WHO recommendation section
    
    Returns:
        Markdown string representation of the assessment
    """
    lines = []
    name = assessment.child_name or "Child"
    
    # Header
    lines.append(f"# Growth Report: {name}")
    lines.append("")
    lines.append(f"- **Sex:** {assessment.sex.value.title()}")
    lines.append(f"- **Age:** {_format_age(assessment.age_months)}")
    lines.append(f"- **Age Group:** {assessment.recommendations.age_group}")
    lines.append("")
    
    # Growth summary
    lines.append("## Growth Summary")
    lines.append("")
    lines.append("| Measure | Gain | WHO Minimum | Progress | Difference | Status | vs WHO Median |")
    lines.append("|---|---|---|---|---|---|---|")
    for m in assessment.metrics:
        unit = m.gain_unit.value
        check = "✓" if m.sufficient else "✗"
        lines.append(
            f"| {m.metric.label.title()} | {m.gain} {unit} (since {m.baseline_source}) "
            f"| {m.minimum_gain} {unit} | {m.gain_percentage}% "
            f"| {format_signed_percentage(m.difference_percentage)} "
            f"| {check} {m.status.value} | {m.standard_progress}% |"
        )
    lines.append("")
    
    # Birth data
    lines.append("## Birth Data")
    lines.append("")
    for b in assessment.birth:
        unit = "g" if b.metric == Metric.WEIGHT else "mm"
        if b.value is None or b.percent_difference is None:
            lines.append(f"- **{b.metric.label.title()}:** Not recorded")
            continue
        lines.append(
            f"- **{b.metric.label.title()}:** {b.value:g} {unit} "
            f"(WHO average {b.who_average:g} {unit}; {b.summary}, {b.label})"
        )
    lines.append("")
    
    if include_recommendations:
        lines.extend(_recommendation_lines(assessment.recommendations))
    
    lines.append("---")
    lines.append("*Simplified WHO reference values; not for medical decision-making.*")
    
    markdown = "\n".join(lines)
    
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown)
    
    return markdown


def _recommendation_lines(rec: RecommendationBundle) -> list[str]:
    lines = []
    lines.append("## WHO Recommendations")
    lines.append("")
    lines.append(f"- **Weight gain per week:** {rec.weight_gain_per_week}")
    lines.append(f"- **Height gain per month:** {rec.height_gain_per_month}")
    lines.append(f"- **Head circumference gain per month:** {rec.head_circ_gain_per_month}")
    lines.append("")
    lines.append("### Expected Measurements")
    lines.append("")
    w, h, c = rec.expected_weight, rec.expected_height, rec.expected_head_circ
    lines.append(f"- **Weight:** {w.min:g}-{w.max:g} {w.unit.value}")
    lines.append(f"- **Height:** {h.min:g}-{h.max:g} {h.unit.value}")
    lines.append(f"- **Head circumference:** {c.min:g}-{c.max:g} {c.unit.value}")
    lines.append("")
    return lines


def _format_age(age_months: float) -> str:
    """Format age for display."""
    if age_months < 1:
        return "Newborn"
    if float(age_months).is_integer():
        months = int(age_months)
        return f"{months} month{'s' if months != 1 else ''}"
    return f"{age_months:.1f} months"
