"""zpmbench CLI - Main entry point."""

import logging
import sys

import click
from rich.console import Console

from zpmbench import __version__

console = Console()

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _parse_group_kind(ctx, param, value):
    from .bench_commands import parse_kind

    return parse_kind(ctx, param, value)


def _setup_logging(verbose: bool) -> None:
    """Send log records to stderr; a no-op if logging is already configured."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="zpmbench")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML configuration file",
)
@click.option(
    "--kind",
    "-k",
    "kind",
    metavar="KIND",
    callback=_parse_group_kind,
    help="Plugin manager for the action when the action gives none",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, kind, verbose):
    """Benchmark zsh plugin managers in Docker.

    Each action runs for one plugin manager (--kind) or, without it,
    for every plugin manager in turn.
    """
    from pathlib import Path

    from zpmbench.config.loader import load_config
    from zpmbench.errors import ConfigError

    _setup_logging(verbose)
    if kind is not None:
        ctx.meta[GROUP_KIND_KEY] = kind
    try:
        ctx.obj = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e


from .bench_commands import GROUP_KIND_KEY, defer, install, kinds, load, run, version  # noqa: E402
from .results_commands import results  # noqa: E402

cli.add_command(install)
cli.add_command(load)
cli.add_command(defer)
cli.add_command(run)
cli.add_command(version)
cli.add_command(kinds)
cli.add_command(results)


if __name__ == "__main__":
    cli()
