"""zpmbench results - Summarize timing reports."""

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _ms(seconds: float | None) -> str:
    if seconds is None:
        return "-"
    return f"{seconds * 1000:.1f}"


@click.command()
@click.option(
    "--results-dir",
    type=click.Path(file_okay=False),
    help="Directory holding the JSON reports (default: <project>/results)",
)
@click.pass_context
def results(ctx, results_dir):
    """Show a table of the collected benchmark reports."""
    from pathlib import Path

    from zpmbench.bench.results import collect_reports
    from zpmbench.config.models import BenchConfig
    from zpmbench.errors import ReportError

    directory = Path(results_dir) if results_dir else (ctx.obj or BenchConfig()).results_dir
    try:
        reports = collect_reports(directory)
    except ReportError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e

    if not reports:
        console.print(f"[yellow]No reports found in {directory}[/yellow]")
        return

    table = Table(title="Benchmark Results (ms)")
    table.add_column("Mode", style="cyan")
    table.add_column("Kind", style="bold")
    table.add_column("Mean", justify="right")
    table.add_column("Stddev", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Runs", justify="right")

    for report in reports:
        table.add_row(
            report.mode,
            report.kind.value,
            _ms(report.mean),
            _ms(report.stddev),
            _ms(report.min),
            _ms(report.max),
            str(report.runs),
        )

    console.print(table)
