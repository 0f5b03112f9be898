#!/usr/bin/env python3
"""
Sprout CLI

Command-line interface for WHO growth-standard lookups, progress
scores and growth assessments.
"""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()


SEX_CHOICE = click.Choice(["male", "female"])
METRIC_CHOICE = click.Choice(["weight", "height", "head_circ"])
UNIT_CHOICE = click.Choice(["g", "kg", "mm", "cm"])


def _print_json(model) -> None:
    from src.exporters import export_json

    click.echo(export_json(model))


@click.group()
@click.version_option(version="0.1.0", prog_name="sprout")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Settings YAML (defaults to $SPROUT_CONFIG)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """
    Sprout - Infant Growth Standards

    Compare an infant's measurements with simplified WHO growth
    standards for the first year.
    """
    from src.config import load_settings

    try:
        settings = load_settings(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load settings: {e}")

    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@click.argument("age_months", type=float)
@click.option("--sex", type=SEX_CHOICE, required=True, help="Child's sex")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def lookup(age_months: float, sex: str, as_json: bool):
    """
    Show the WHO standard for an age (interpolated between months).

    Example:

        sprout lookup 4.5 --sex female
    """
    from knowledge.growth import lookup as lookup_standard

    row = lookup_standard(age_months, sex)
    if as_json:
        _print_json(row)
        return

    table = Table(title=f"WHO standard, {sex}, {age_months:g} months")
    table.add_column("Measure", style="cyan")
    table.add_column("Median", justify="right", style="green")
    table.add_row("Weight", f"{row.weight_kg:.2f} kg")
    table.add_row("Height", f"{row.height_cm:.1f} cm")
    table.add_row("Head circumference", f"{row.head_circ_cm:.1f} cm")
    console.print(table)


@cli.command()
@click.argument("age_months", type=float)
@click.option("--sex", type=SEX_CHOICE, required=True, help="Child's sex")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def expected(age_months: float, sex: str, as_json: bool):
    """
    Show the expected gain over the month ending at an age.

    Example:

        sprout expected 2 --sex male
    """
    from knowledge.growth import expected_monthly_growth

    growth = expected_monthly_growth(age_months, sex)
    if as_json:
        _print_json(growth)
        return

    table = Table(title=f"Expected monthly growth, {sex}, {age_months:g} months")
    table.add_column("Measure", style="cyan")
    table.add_column("Gain", justify="right", style="green")
    table.add_row("Weight", f"{growth.weight} g")
    table.add_row("Height", f"{growth.height} mm")
    table.add_row("Head circumference", f"{growth.head_circ} mm")
    console.print(table)


@cli.command()
@click.option("--birth", type=float, required=True, help="Value at birth")
@click.option("--current", type=float, required=True, help="Current value (same unit)")
@click.option("--target-gain", type=float, required=True, help="Gain expected on top of birth")
@click.option("--ceiling", type=float, help="Optional cap on the total target")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a panel")
def progress(birth: float, current: float, target_gain: float, ceiling: Optional[float], as_json: bool):
    """
    Progress toward a gain target since birth.

    Example:

        sprout progress --birth 3300 --current 4300 --target-gain 1200
    """
    from src.engines import calculate_progress, growth_status

    result = calculate_progress(birth, current, target_gain, ceiling)
    if as_json:
        _print_json(result)
        return

    console.print(Panel(
        f"[bold]{result.percentage}%[/bold] ({growth_status(result.percentage).value})\n\n"
        f"Birth: {result.birth_value:g}\n"
        f"Current: {result.current_total:g}\n"
        f"Target: {result.target:g}\n"
        f"Growth: {result.actual_growth:g} of {result.expected_growth:g}",
        title="Progress Toward Target",
        border_style="green",
    ))


@cli.command("standard-progress")
@click.argument("value", type=float)
@click.option("--age", "age_months", type=float, required=True, help="Age in months")
@click.option("--sex", type=SEX_CHOICE, required=True, help="Child's sex")
@click.option("--metric", type=METRIC_CHOICE, required=True, help="Measure the value belongs to")
@click.option("--unit", type=UNIT_CHOICE, help="Unit of VALUE (defaults to kg or cm)")
def standard_progress(value: float, age_months: float, sex: str, metric: str, unit: Optional[str]):
    """
    A value as a percentage of the WHO median at an age.

    Example:

        sprout standard-progress 6500 --unit g --age 4 --sex female --metric weight
    """
    from src.engines import progress_relative_to_standard

    percentage = progress_relative_to_standard(value, age_months, sex, metric, unit)
    console.print(f"[bold]{percentage}%[/bold] of the WHO median")


@cli.command()
@click.argument("age_months", type=float)
@click.option("--sex", type=SEX_CHOICE, required=True, help="Child's sex")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables")
@click.pass_obj
def recommend(settings, age_months: float, sex: str, as_json: bool):
    """
    Show WHO-based growth recommendations for an age.

    Example:

        sprout recommend 2 --sex male
    """
    from src.engines import build_recommendations

    rec = build_recommendations(age_months, sex, settings)
    if as_json:
        _print_json(rec)
        return

    console.print(Panel(
        f"[bold]{rec.age_group}[/bold] ({rec.exact_age:g} months, {rec.sex.value})\n\n"
        f"Weight gain per week: {rec.weight_gain_per_week}\n"
        f"Height gain per month: {rec.height_gain_per_month}\n"
        f"Head circumference gain per month: {rec.head_circ_gain_per_month}",
        title="WHO Recommendations",
        border_style="blue",
    ))

    table = Table(title="Expected Measurements")
    table.add_column("Measure", style="cyan")
    table.add_column("WHO Median", justify="right")
    table.add_column("Expected Range", justify="right", style="green")
    table.add_column("Gain Band", justify="right")
    s = rec.who_standard
    for label, median, value_range, gain in (
        ("Weight", f"{s.weight_kg:.2f} kg", rec.expected_weight, rec.weight_gain),
        ("Height", f"{s.height_cm:.1f} cm", rec.expected_height, rec.height_gain),
        ("Head circumference", f"{s.head_circ_cm:.1f} cm", rec.expected_head_circ, rec.head_circ_gain),
    ):
        table.add_row(
            label,
            median,
            f"{value_range.min:g}-{value_range.max:g} {value_range.unit.value}",
            f"{gain.min}-{gain.max} {gain.unit.value}/{gain.period}",
        )
    console.print(table)


@cli.command()
@click.argument("record_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Date to compute the age for (defaults to today)")
@click.option("--format", "fmt", type=click.Choice(["table", "json", "markdown"]), default="table",
              help="Output format")
@click.option("--output", "-o", type=click.Path(), help="Write JSON/Markdown output to a file")
@click.option("--summary", is_flag=True, help="With --format json, print only the per-metric summary")
@click.pass_obj
def assess(settings, record_path: str, as_of, fmt: str, output: Optional[str], summary: bool):
    """
    Assess a growth record stored as JSON.

    Example:

        sprout assess ./records/mia.json --format markdown -o ./mia.md
    """
    from pydantic import ValidationError

    from src.engines import assess_growth
    from src.exporters import export_json, export_json_summary, export_markdown
    from src.models import GrowthRecord

    path = Path(record_path)
    try:
        record = GrowthRecord.model_validate_json(path.read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid growth record {path}: {e}")

    as_of_date: Optional[date] = as_of.date() if as_of else None
    assessment = assess_growth(record, as_of_date, settings)
    out_path = Path(output) if output else None

    if fmt == "json" and summary:
        text = json.dumps(export_json_summary(assessment), indent=2)
        if out_path:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text)
    elif fmt == "json":
        text = export_json(assessment, out_path)
    elif fmt == "markdown":
        text = export_markdown(assessment, out_path)
    else:
        _print_assessment(assessment)
        return

    if out_path:
        console.print(f"[green]✓ Exported to {out_path}[/green]")
    else:
        click.echo(text)


def _print_assessment(assessment) -> None:
    """Rich rendering of a GrowthAssessment."""
    from src.engines import format_signed_percentage

    console.print(Panel(
        f"[bold]{assessment.child_name or 'Child'}[/bold]\n"
        f"Sex: {assessment.sex.value}\n"
        f"Age: {assessment.age_months:g} months ({assessment.recommendations.age_group})",
        title="Growth Assessment",
        border_style="blue",
    ))

    table = Table(title="Growth Summary")
    table.add_column("Measure", style="cyan")
    table.add_column("Gain", justify="right")
    table.add_column("WHO Minimum", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Difference", justify="right")
    table.add_column("Status")
    table.add_column("vs Median", justify="right")

    for m in assessment.metrics:
        color = "green" if m.sufficient else "red"
        table.add_row(
            m.metric.label.title(),
            f"{m.gain} {m.gain_unit.value}",
            f"{m.minimum_gain} {m.gain_unit.value}",
            f"[{color}]{m.gain_percentage}%[/{color}]",
            format_signed_percentage(m.difference_percentage),
            f"[{color}]{m.status.value}[/{color}]",
            f"{m.standard_progress}%",
        )
    console.print(table)

    for b in assessment.birth:
        if b.percent_difference is None:
            console.print(f"[dim]Birth {b.metric.label}: not recorded[/dim]")
        else:
            console.print(f"Birth {b.metric.label}: {b.summary} ({b.label})")


@cli.command()
@click.option("--sex", type=SEX_CHOICE, required=True, help="Child's sex")
def table(sex: str):
    """
    Print the WHO standards table for a sex.
    """
    from knowledge.growth import standards_table

    t = Table(title=f"WHO Standards ({sex}, 0-12 months)")
    t.add_column("Age (months)", justify="right", style="cyan")
    t.add_column("Weight (kg)", justify="right")
    t.add_column("Height (cm)", justify="right")
    t.add_column("Head (cm)", justify="right")
    for row in standards_table(sex):
        t.add_row(f"{row.age_months:g}", f"{row.weight_kg:.1f}", f"{row.height_cm:.1f}", f"{row.head_circ_cm:.1f}")
    console.print(t)


@cli.command()
@click.argument("age_months", type=float)
def sleep(age_months: float):
    """
    Show recommended daily sleep for an age.
    """
    from knowledge.sleep import get_sleep_recommendation

    rec = get_sleep_recommendation(age_months)
    console.print(Panel(
        f"[bold]{rec.age_group}[/bold]\n\n"
        f"Total: {rec.min_hours}-{rec.max_hours} hours\n"
        f"Naps: ~{rec.recommended_nap_hours} hours\n"
        f"Night: ~{rec.recommended_night_hours} hours",
        title="Sleep Recommendation",
        border_style="blue",
    ))


@cli.command()
def info():
    """
    Show information about Sprout.
    """
    console.print(Panel(
        "[bold]Sprout[/bold]\n\n"
        "Infant growth tracking against simplified WHO standards:\n"
        "• Standard lookups with linear interpolation (0-12 months)\n"
        "• Expected monthly gains and weekly gain bands\n"
        "• Progress scores and growth-adequacy status\n\n"
        "[dim]A consumer approximation, not for medical decision-making.[/dim]",
        title="About",
        border_style="blue",
    ))

    console.print("\n[bold]Quick Start:[/bold]")
    console.print("  sprout lookup 6 --sex male")
    console.print("  sprout recommend 2 --sex female")
    console.print("  sprout assess ./record.json")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
