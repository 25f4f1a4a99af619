import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from metric_pulse.config import load_scoring_config
from metric_pulse.errors import MetricPulseError
from metric_pulse.formatter import format_report, format_simulation
from metric_pulse.models import SimulationInput
from metric_pulse.report import compute_period_report, simulate_growth
from metric_pulse.store import JsonRecordStore

load_dotenv()
app = typer.Typer()
console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])


def _emit(text: str, output: Optional[Path], as_markdown: bool) -> None:
    if output:
        output.write_text(text)
        console.print(f"[bold green]✓[/] Saved to [cyan]{output}[/]")
    elif as_markdown:
        console.print(Markdown(text))
    else:
        console.print_json(text)


@app.command()
def report(
    records: Path = typer.Argument(help="JSON file holding metric records"),
    period: str = typer.Option("monthly", "--period", "-p", help="'weekly' or 'monthly'"),
    anchor: Optional[str] = typer.Option(None, "--anchor", "-a", help="YYYY-MM or YYYY-Www; defaults to the current cycle"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="feed, reel or story"),
    owner: Optional[str] = typer.Option(None, "--owner", help="Only use records of this owner id"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save report to file instead of printing"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of Markdown"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details"),
):
    """Compare one weekly or monthly period with the one before it."""
    _setup_logging(verbose)
    if period not in ("weekly", "monthly"):
        console.print(f"[bold red]Error:[/] --period must be 'weekly' or 'monthly', got '{period}'")
        raise typer.Exit(1)

    try:
        loaded = JsonRecordStore(records).list_records(owner_id=owner)
    except (OSError, ValueError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/] could not load records from {records}: {exc}")
        raise typer.Exit(1)

    try:
        result = compute_period_report(
            loaded, period, anchor, category,
            reference_time=datetime.now(),
            config=load_scoring_config(),
        )
    except MetricPulseError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)

    if as_json:
        _emit(result.model_dump_json(indent=2, by_alias=True), output, as_markdown=False)
    else:
        _emit(format_report(result), output, as_markdown=True)


@app.command()
def simulate(
    current: int = typer.Option(..., "--current", help="Current follower count"),
    gain: int = typer.Option(..., "--gain", help="Target follower gain"),
    months: int = typer.Option(3, "--months", "-m", help="Plan period in months"),
    strategies: int = typer.Option(0, "--strategies", help="Number of growth strategies in use"),
    quality: str = typer.Option("medium", "--quality", "-q", help="Content quality: low, medium or high"),
    budget: float = typer.Option(0, "--budget", help="Paid promotion budget"),
    posts_per_week: int = typer.Option(5, "--posts-per-week", help="Posts you can publish per week"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save result to file instead of printing"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of Markdown"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details"),
):
    """Project follower growth against a target."""
    _setup_logging(verbose)
    try:
        params = SimulationInput(
            current_followers=current,
            target_gain=gain,
            period_months=months,
            strategy_count=strategies,
            content_quality=quality,
            budget=budget,
            avg_posts_per_week=posts_per_week,
        )
        result = simulate_growth(params, reference_date=date.today())
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/] invalid simulation input: {exc.errors()[0]['msg']}")
        raise typer.Exit(1)
    except MetricPulseError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)

    if as_json:
        _emit(result.model_dump_json(indent=2), output, as_markdown=False)
    else:
        _emit(format_simulation(result), output, as_markdown=True)
