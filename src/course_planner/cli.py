"""CLI entry point for the course planner."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import PlannerConfig
from .exceptions import PlannerError
from .exporters import get_exporter, load_request, save_request
from .models import FailureAnalysis, HintingResult, Solution
from .offerings import OfferingsLoader

app = typer.Typer(
    name="course-planner",
    help="Find conflict-free weekly course schedules",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(
    config_file: Path | None,
    duration: int | None,
    max_nodes: int | None,
    debug: bool,
) -> PlannerConfig:
    config = PlannerConfig.from_file(config_file)
    overrides = config.to_dict()
    if duration is not None:
        overrides["course_duration_minutes"] = duration
    if max_nodes is not None:
        overrides["max_search_nodes"] = max_nodes
    if debug:
        overrides["debug"] = True
    return PlannerConfig.from_dict(overrides)


def _format_slots(solution: Solution) -> str:
    return "\n".join(
        f"{course}: {', '.join(str(s) for s in sorted(slots, key=lambda s: s.sort_key))}"
        for course, slots in solution.schedule.items()
    )


def _schedules_table(title: str, schedules: list[Solution]) -> Table:
    table = Table(title=title)
    table.add_column("#", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Days")
    table.add_column("Busiest day")
    table.add_column("Max gap (h)")
    table.add_column("Assignments", style="magenta")

    for rank, solution in enumerate(schedules, start=1):
        table.add_row(
            str(rank),
            f"{solution.score:g}",
            str(solution.days),
            str(solution.courses_on_busiest_day),
            f"{solution.max_gap_between_courses:.2f}",
            _format_slots(solution),
        )
    return table


def _show_failure(result: HintingResult, verbose: bool) -> None:
    console.print(f"\n[bold red]✗ {result.reason}[/bold red]")

    if not result.hints and not result.alternatives:
        console.print("  [yellow]No automated suggestion found.[/yellow]")
        return

    if result.hints:
        console.print(f"\n[bold yellow]Hints ({len(result.hints)}):[/bold yellow]")
        for hint in result.hints:
            console.print(f"  [yellow]• {hint.description}[/yellow] [dim]({hint.impact})[/dim]")

    if result.alternatives:
        console.print(f"\n[bold]Alternatives ({len(result.alternatives)}):[/bold]")
        for alternative in result.alternatives:
            console.print(
                f"  • {alternative.description}: {len(alternative.schedules)} schedule(s)"
            )
            if verbose:
                console.print(_schedules_table(alternative.description, alternative.schedules))


def _show_analysis(details: FailureAnalysis) -> None:
    console.print(f"  Total courses: {details.total_courses}")

    if details.courses_with_no_slots:
        console.print(f"  [red]Courses without slots: {', '.join(details.courses_with_no_slots)}[/red]")

    if details.courses_with_limited_slots:
        names = ", ".join(entry["course"] for entry in details.courses_with_limited_slots)
        console.print(f"  [yellow]Courses with a single slot: {names}[/yellow]")

    if details.potential_conflicts:
        conflict_table = Table(title="Potential Conflicts")
        conflict_table.add_column("Slot", style="cyan")
        conflict_table.add_column("Courses", style="red")
        for conflict in details.potential_conflicts:
            conflict_table.add_row(str(conflict.slot), ", ".join(conflict.conflicting_courses))
        console.print(conflict_table)

    for entry in details.constraint_analysis:
        console.print(f"  [dim]{entry['type']}:[/dim] {entry['constraint']}")


@app.command()
def solve(
    request_file: Annotated[
        Path,
        typer.Argument(help="Request JSON file", exists=True, readable=True),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    max_solutions: Annotated[
        Optional[int],
        typer.Option("-n", "--max-solutions", help="Maximum schedules to return"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", help="Course duration in minutes, including break"),
    ] = None,
    max_nodes: Annotated[
        Optional[int],
        typer.Option("--max-nodes", help="Abort search after this many partial schedules"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Planner configuration JSON file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show schedules of alternatives"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Find ranked schedules, or hints and alternatives when none exist."""
    _setup_logging(debug)

    try:
        config = _load_config(config_file, duration, max_nodes, debug)
        request = load_request(request_file)
        solver = config.create_hinting_solver()
        with console.status("[bold green]Searching schedules..."):
            result = solver.solve(
                request, max_solutions if max_solutions is not None else config.max_solutions
            )
    except PlannerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)

    console.print(f"\n[bold]Schedules for:[/bold] {request_file.name}")
    console.print(f"  Courses: {', '.join(request.course_names)}")

    if result.success:
        console.print(_schedules_table(f"{len(result.schedules)} Schedule(s)", result.schedules))
    else:
        _show_failure(result, verbose)

    if output:
        exporter = get_exporter(format.value)
        with console.status(f"[bold green]Exporting to {format.value}..."):
            output_path = exporter.export(result, output)
        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")

    if not result.success:
        raise typer.Exit(1)


@app.command()
def analyze(
    request_file: Annotated[
        Path,
        typer.Argument(help="Request JSON file", exists=True, readable=True),
    ],
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", help="Course duration in minutes, including break"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Planner configuration JSON file"),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Find the first valid schedule or explain why none exists."""
    _setup_logging(debug)

    try:
        config = _load_config(config_file, duration, None, debug)
        request = load_request(request_file)
        result = config.create_solver().solve(request)
    except PlannerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)

    console.print(f"\n[bold]Analysis for:[/bold] {request_file.name}")

    if result.success:
        console.print("[bold green]✓ Request is feasible[/bold green]")
        console.print(_schedules_table("First Schedule", [result.solution]))
        return

    console.print(f"[bold red]✗ {result.reason}[/bold red]")
    _show_analysis(result.details)
    raise typer.Exit(1)


def _parse_multiplicity(values: list[str]) -> dict[str, int]:
    multiplicity = {}
    for value in values:
        name, sep, count = value.rpartition("=")
        if not sep or not name or not count.isdigit():
            raise typer.BadParameter(f"Expected NAME=COUNT, got '{value}'")
        multiplicity[name] = int(count)
    return multiplicity


@app.command("request")
def build_request(
    offerings_file: Annotated[
        Path,
        typer.Argument(help="Offerings table (.csv or .xlsx)", exists=True, readable=True),
    ],
    courses: Annotated[
        list[str],
        typer.Option("-c", "--course", help="Course to schedule (repeatable)"),
    ],
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Request JSON file to write"),
    ] = Path("request.json"),
    multiplicity: Annotated[
        Optional[list[str]],
        typer.Option("-m", "--multiplicity", help="Times per week as NAME=COUNT (repeatable)"),
    ] = None,
    max_per_day: Annotated[
        Optional[int],
        typer.Option("--max-per-day", help="Maximum courses per day"),
    ] = None,
    max_gap: Annotated[
        Optional[float],
        typer.Option("--max-gap", help="Maximum gap between courses on a day, in hours"),
    ] = None,
    exclude_pair_only: Annotated[
        bool,
        typer.Option("--exclude-pair-only", help="Skip sessions reserved for pairs"),
    ] = False,
) -> None:
    """Build a request JSON file from an offerings table."""
    counts = _parse_multiplicity(multiplicity or [])

    try:
        with console.status("[bold green]Loading offerings..."):
            table = OfferingsLoader().load(offerings_file)
        request = table.build_request(
            courses,
            multiplicity=counts,
            max_courses_per_day=max_per_day,
            max_empty_slots_between_courses=max_gap,
            exclude_pair_only=exclude_pair_only,
        )
    except PlannerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)

    if table.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(table.warnings)}):[/bold yellow]")
        for warning in table.warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    for name, slots in request.selected_courses.items():
        console.print(f"  {name}: {len(slots)} selected slot(s)")

    output_path = save_request(request, output)
    console.print(f"\n[bold green]✓[/bold green] Request written to: {output_path}")


if __name__ == "__main__":
    app()
