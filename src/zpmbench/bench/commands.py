"""Commands executed inside the benchmark container."""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from zpmbench.kinds import Kind, prepare_command, version_command

WARMUP_RUNS = 3
SHELL_STARTUP = "zsh -ic exit"
DEFER_ENV = "DEFER=true"
RESULTS_MOUNT = "/results"
DEFAULT_BENCHMARK_TOOL = "hyperfine"


class BenchMode(str, Enum):
    """What a benchmark run measures."""

    INSTALL = "install"
    LOAD = "load"
    DEFER = "defer"  # load with DEFER=true

    def __str__(self) -> str:
        return self.value

    @property
    def report_name(self) -> str:
        """Prefix of the exported report; defer shares the load report."""
        if self is BenchMode.INSTALL:
            return "install"
        return "load"

    @property
    def measured_command(self) -> str:
        if self is BenchMode.DEFER:
            return f"{DEFER_ENV} {SHELL_STARTUP}"
        return SHELL_STARTUP


@dataclass(frozen=True)
class ExternalCommand:
    """An argv plus the environment overrides it needs."""

    argv: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def display(self) -> str:
        """Shell-quoted form for logs and error messages."""
        prefix = " ".join(f"{k}={shlex.quote(v)}" for k, v in self.env.items())
        command = shlex.join(self.argv)
        return f"{prefix} {command}" if prefix else command


def report_filename(mode: BenchMode, kind: Kind) -> str:
    """Name of the JSON report the benchmark tool writes, e.g. ``install-zinit.json``."""
    return f"{mode.report_name}-{kind.value}.json"


def build_benchmark_command(
    mode: BenchMode,
    kind: Kind,
    tool: str = DEFAULT_BENCHMARK_TOOL,
) -> ExternalCommand:
    """Build the timed shell-startup invocation for ``mode`` and ``kind``.

    Only install runs the kind's prepare command before each sample; load
    and defer time a shell start with plugins already installed.
    """
    argv = [tool]
    if mode is BenchMode.INSTALL:
        argv.extend(["--prepare", prepare_command(kind)])
    argv.extend(
        [
            "--warmup",
            str(WARMUP_RUNS),
            "--export-json",
            f"{RESULTS_MOUNT}/{report_filename(mode, kind)}",
            mode.measured_command,
        ]
    )
    return ExternalCommand(argv=tuple(argv))


def build_version_command(kind: Kind) -> ExternalCommand:
    return ExternalCommand(argv=tuple(version_command(kind)))


def build_shell_command() -> ExternalCommand:
    """An interactive zsh for poking around a configured container."""
    return ExternalCommand(argv=("zsh",))
