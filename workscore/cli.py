"""CLI interface for the Work Score engine."""

import json
import logging
from datetime import datetime
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workscore.consts import SCORE_TIER_GOOD, SCORE_TIER_GREAT
from workscore.engine import ScoringEngine
from workscore.exceptions import ScoringInputError
from workscore.models.model_eval import FactorWeights
from workscore.models.model_report import SpotReport
from workscore.models.model_score import CrowdLevel
from workscore.models.model_signals import SpotInputs

app = typer.Typer(
    name="workscore",
    help="Work Score - Rate work and study spots from check-ins, reviews and ratings",
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _get_score_color(score: float) -> str:
    """Get color for score display."""
    if score >= SCORE_TIER_GREAT:
        return "green"
    elif score >= SCORE_TIER_GOOD:
        return "yellow"
    else:
        return "red"


def _get_level_color(level: CrowdLevel) -> str:
    return {
        CrowdLevel.LOW: "green",
        CrowdLevel.MODERATE: "yellow",
        CrowdLevel.HIGH: "red",
    }.get(level, "dim")


def _load_spots(path: Path) -> list[SpotInputs]:
    """Load one spot snapshot or a list of them from a JSON file."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {path}: {escape(str(e))}")
        raise typer.Exit(1)

    items = payload if isinstance(payload, list) else [payload]
    try:
        return [SpotInputs.model_validate(item) for item in items]
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid spot data in {path}:\n{escape(str(e))}")
        raise typer.Exit(1)


def _parse_now(now: str | None) -> datetime | None:
    if now is None:
        return None
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid --now '{now}'. Use ISO 8601, e.g. 2026-01-05T15:00:00+00:00")
        raise typer.Exit(1)
    if parsed.tzinfo is None:
        console.print(f"[red]Error:[/red] --now '{now}' must include a timezone offset")
        raise typer.Exit(1)
    return parsed


def _score_all(
    spots: list[SpotInputs], now: datetime | None, start_hour: int | None = None
) -> list[SpotReport]:
    engine = ScoringEngine()
    try:
        return engine.score_batch(spots, now, forecast_start_hour=start_hour)
    except ScoringInputError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _print_report(report: SpotReport) -> None:
    breakdown = report.breakdown
    title = escape(report.name or report.spot_id)

    if breakdown.work_score is None:
        console.print(f"\n[bold]{title}[/bold]: [yellow]insufficient data[/yellow]")
    else:
        color = _get_score_color(breakdown.work_score)
        console.print(
            f"\n[bold]{title}[/bold]: Work Score [{color}]{breakdown.work_score}[/{color}] "
            f"({report.tier.value}, confidence {breakdown.confidence:.0%})"
        )
    if breakdown.stale:
        console.print("[yellow]Data may be outdated[/yellow]")
    if breakdown.is_open is False:
        console.print("[red]Closed now[/red]")

    if breakdown.factors:
        table = Table(title="Score Breakdown")
        table.add_column("Factor", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Reliability", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Source", style="blue")
        table.add_column("Detail", style="dim")

        for factor in breakdown.factors:
            color = _get_score_color(factor.value)
            weight = "gate" if factor.gating else f"{factor.weight or 0.0:.0%}"
            table.add_row(
                factor.factor.value,
                f"[{color}]{factor.value:.1f}[/{color}]",
                f"{factor.reliability:.2f}",
                weight,
                factor.source.value,
                factor.detail or "",
            )
        console.print(table)

    dominant = breakdown.analysis.dominant_factor
    if dominant is not None:
        console.print(
            f"Driven by [cyan]{dominant.value}[/cyan] "
            f"(dominance {breakdown.analysis.dominance_ratio:.2f})"
        )
    if report.momentum is not None:
        console.print(f"Momentum: {report.momentum.trend.value} ({report.momentum.relative_change:+.0%})")
    console.print(f"Crowd: {report.crowd_level.value}, best time: {report.best_time.value}")
    if report.highlights:
        console.print(f"Highlights: {', '.join(report.highlights)}")
    console.print(f"Good for: {', '.join(report.use_cases)}")


@app.command()
def score(
    file: Path = typer.Argument(..., help="JSON file with one spot snapshot or a list of them"),
    now: str = typer.Option(None, "--now", help="Reference time, ISO 8601 with offset"),
    as_json: bool = typer.Option(False, "--json", help="Print reports as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Compute the Work Score and its breakdown for spots in FILE."""
    _configure_logging(verbose)

    spots = _load_spots(file)
    reports = _score_all(spots, _parse_now(now))

    if as_json:
        payload = [report.model_dump(mode="json") for report in reports]
        typer.echo(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
        return

    for report in reports:
        _print_report(report)


@app.command()
def forecast(
    file: Path = typer.Argument(..., help="JSON file with one spot snapshot or a list of them"),
    start_hour: int = typer.Option(None, "--start-hour", min=0, max=23, help="First forecast hour (0-23)"),
    now: str = typer.Option(None, "--now", help="Reference time, ISO 8601 with offset"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show the crowd forecast for the next hours."""
    _configure_logging(verbose)

    spots = _load_spots(file)
    reports = _score_all(spots, _parse_now(now), start_hour)

    for report in reports:
        title = escape(report.name or report.spot_id)
        if not report.forecast:
            console.print(f"[yellow]No busyness history for {title}.[/yellow]")
            continue

        table = Table(title=f"Crowd Forecast: {title}")
        table.add_column("When", style="cyan")
        table.add_column("Hour")
        table.add_column("Busyness", justify="right")
        table.add_column("Level")
        table.add_column("Basis", style="dim")

        for point in report.forecast:
            color = _get_level_color(point.level)
            table.add_row(
                point.label,
                point.local_hour_label,
                f"{point.busyness:.0f}",
                f"[{color}]{point.level.value}[/{color}]",
                point.basis.value,
            )
        console.print(table)

        if report.weather_delta:
            console.print(f"[dim]Weather adjustment: {report.weather_delta:+.1f}[/dim]")


@app.command()
def weights() -> None:
    """Show the base weight of each factor."""
    table = Table(title="Base Factor Weights")
    table.add_column("Factor", style="cyan")
    table.add_column("Weight", justify="right")

    for factor, weight in FactorWeights().as_dict().items():
        table.add_row(factor.value, f"{weight:.2f}")
    table.add_row("open_status", "[dim]gate[/dim]")

    console.print(table)
    console.print("[dim]Combination weight = base weight x reliability, renormalized over present factors[/dim]")


if __name__ == "__main__":
    app()
