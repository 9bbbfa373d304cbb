"""zpmbench install/load/defer/run/version - Container actions."""

import click
from rich.console import Console
from rich.table import Table

from zpmbench.kinds import Kind

console = Console()

# Set when --kind is given before the subcommand (zpmbench -k zinit install).
GROUP_KIND_KEY = "zpmbench.kind"


def parse_kind(ctx, param, value):
    if value is None:
        return None
    try:
        return Kind.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def kind_options(func):
    """Options shared by every action command."""
    func = click.option(
        "--keep-going",
        is_flag=True,
        help="When sweeping all kinds, continue past failures and report them at the end",
    )(func)
    func = click.option(
        "--kind",
        "-k",
        "kind",
        callback=parse_kind,
        metavar="KIND",
        help=f"Plugin manager to use ({', '.join(k.value for k in Kind)}); default: all",
    )(func)
    return func


def _execute(ctx: click.Context, action_name: str, kind: Kind | None, keep_going: bool) -> None:
    from zpmbench.errors import BenchError, KindFailure, SweepError
    from zpmbench.runners.bench_runner import Action, BenchRunner

    action = Action(action_name)
    if kind is None:
        kind = ctx.meta.get(GROUP_KIND_KEY)
    runner = BenchRunner(ctx.obj)
    try:
        if kind is not None:
            runner.execute(action, kind)
        else:
            runner.run_sweep(action, keep_going=keep_going)
    except SweepError as e:
        console.print(f"[red]{e}[/red]")
        for name, error in e.failures:
            console.print(f"  [bold]{name}[/bold]: {error}")
        raise SystemExit(1) from e
    except KindFailure as e:
        console.print(f"[red]{action} failed for {e.kind}:[/red] {e.error}")
        raise SystemExit(1) from e
    except BenchError as e:
        console.print(f"[red]{action} failed for {kind}:[/red] {e}")
        raise SystemExit(1) from e


@click.command()
@kind_options
@click.pass_context
def install(ctx, kind, keep_going):
    """Benchmark the 'install' step."""
    _execute(ctx, "install", kind, keep_going)


@click.command()
@kind_options
@click.pass_context
def load(ctx, kind, keep_going):
    """Benchmark the 'load' step."""
    _execute(ctx, "load", kind, keep_going)


@click.command()
@kind_options
@click.pass_context
def defer(ctx, kind, keep_going):
    """Benchmark the 'load' step with deferred loading."""
    _execute(ctx, "defer", kind, keep_going)


@click.command()
@kind_options
@click.pass_context
def run(ctx, kind, keep_going):
    """Open 'zsh' with a particular plugin manager."""
    _execute(ctx, "run", kind, keep_going)


@click.command()
@kind_options
@click.pass_context
def version(ctx, kind, keep_going):
    """Output the versions of the plugin managers."""
    _execute(ctx, "version", kind, keep_going)


@click.command()
def kinds():
    """List the plugin managers and their commands."""
    from zpmbench.kinds import prepare_command, version_command

    table = Table(title="Plugin Managers")
    table.add_column("Kind", style="cyan")
    table.add_column("Prepare")
    table.add_column("Version")

    for kind in Kind:
        table.add_row(kind.value, prepare_command(kind), " ".join(version_command(kind)))

    console.print(table)
