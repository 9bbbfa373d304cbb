"""Drive one plugin manager, or all of them, through a container action."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from zpmbench.bench.commands import (
    RESULTS_MOUNT,
    BenchMode,
    ExternalCommand,
    build_benchmark_command,
    build_shell_command,
    build_version_command,
)
from zpmbench.config.models import BenchConfig
from zpmbench.container.docker_manager import DockerManager
from zpmbench.errors import BenchError, KindFailure, StagingError, SweepError
from zpmbench.kinds import Kind
from zpmbench.render.mounts import MountPlanner
from zpmbench.render.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """A CLI action applied to one kind."""

    INSTALL = "install"
    LOAD = "load"
    DEFER = "defer"
    RUN = "run"
    VERSION = "version"

    def __str__(self) -> str:
        return self.value

    @property
    def bench_mode(self) -> BenchMode | None:
        """The benchmark mode for benchmark actions, None otherwise."""
        try:
            return BenchMode(self.value)
        except ValueError:
            return None


class RunPhase(str, Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    BUILDING = "building"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class InvocationResult:
    """Outcome of one linear pass for one kind."""

    kind: Kind
    action: Action
    phase: RunPhase = RunPhase.IDLE
    error: BaseException | None = None
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.phase == RunPhase.SUCCEEDED


@dataclass
class SweepResult:
    """Results of a sequential pass over several kinds."""

    action: Action
    invocations: list[InvocationResult] = field(default_factory=list)

    @property
    def failed(self) -> list[InvocationResult]:
        return [inv for inv in self.invocations if not inv.succeeded]

    @property
    def passed(self) -> bool:
        return not self.failed


class BenchRunner:
    """Render, build and run the benchmark container for a kind.

    Every action rebuilds the image first; docker's cache makes that cheap
    and it guarantees the container never runs against a stale image.
    """

    def __init__(
        self,
        config: BenchConfig | None = None,
        docker: DockerManager | None = None,
        planner: MountPlanner | None = None,
    ) -> None:
        self.config = config or BenchConfig()
        self.docker = docker or DockerManager(self.config.docker_binary)
        self.planner = planner or MountPlanner(
            TemplateRenderer(),
            self.config.rendered_dir,
            container_home=self.config.container_home,
        )

    def run_benchmark(self, mode: BenchMode, kind: Kind) -> InvocationResult:
        """Time ``mode`` for ``kind``; the report lands in the results dir."""
        command = build_benchmark_command(mode, kind, tool=self.config.benchmark_tool)
        return self._invoke(kind, Action(mode.value), command)

    def open_shell(self, kind: Kind) -> InvocationResult:
        """Open an interactive zsh configured for ``kind``."""
        return self._invoke(kind, Action.RUN, build_shell_command())

    def fetch_version(self, kind: Kind) -> InvocationResult:
        """Print the installed version of ``kind``."""
        return self._invoke(kind, Action.VERSION, build_version_command(kind))

    def execute(self, action: Action, kind: Kind) -> InvocationResult:
        mode = action.bench_mode
        if mode is not None:
            return self.run_benchmark(mode, kind)
        if action is Action.RUN:
            return self.open_shell(kind)
        if action is Action.VERSION:
            return self.fetch_version(kind)
        raise ValueError(f"Unknown action: {action!r}")

    def run_sweep(
        self,
        action: Action,
        kinds: list[Kind] | None = None,
        keep_going: bool = False,
    ) -> SweepResult:
        """Apply ``action`` to each kind in turn.

        By default the first failure stops the sweep and is raised as a
        KindFailure naming the kind, with the original error as its cause.
        With ``keep_going`` every kind runs and a SweepError listing the
        failures is raised at the end.

        Raises:
            KindFailure: The first failure, unless ``keep_going``.
            SweepError: If ``keep_going`` and any kind failed.
        """
        sweep = SweepResult(action=action)
        for kind in kinds if kinds is not None else Kind.all():
            logger.info(f"Kind is {kind}")
            try:
                sweep.invocations.append(self.execute(action, kind))
            except BenchError as e:
                sweep.invocations.append(
                    InvocationResult(kind=kind, action=action, phase=RunPhase.FAILED, error=e)
                )
                if not keep_going:
                    raise KindFailure(kind.value, action.value, e) from e
                logger.error(f"{action} failed for {kind}: {e}")

        if sweep.failed:
            raise SweepError([(inv.kind.value, inv.error) for inv in sweep.failed])
        return sweep

    def _invoke(self, kind: Kind, action: Action, command: ExternalCommand) -> InvocationResult:
        invocation = InvocationResult(kind=kind, action=action)
        logger.debug(f"Command for {kind}: {command.display()}")
        start = time.monotonic()
        try:
            self._transition(invocation, RunPhase.RENDERING)
            mounts = self.planner.plan(kind)

            self._transition(invocation, RunPhase.BUILDING)
            self.docker.build_image(
                self.config.image,
                self.config.project_dir,
                dockerfile=self.config.dockerfile_path,
            )

            self._transition(invocation, RunPhase.RUNNING)
            self._ensure_results_dir()
            volumes = [(str(self.config.results_dir), RESULTS_MOUNT)]
            volumes.extend((str(m.host_path), str(m.container_path)) for m in mounts)
            self.docker.run_container(
                self.config.image,
                list(command.argv),
                volumes=volumes,
                env=command.env,
                interactive=self.config.interactive,
            )
        except BenchError as e:
            invocation.error = e
            invocation.duration_seconds = time.monotonic() - start
            self._transition(invocation, RunPhase.FAILED)
            raise

        invocation.duration_seconds = time.monotonic() - start
        self._transition(invocation, RunPhase.SUCCEEDED)
        return invocation

    def _ensure_results_dir(self) -> None:
        results_dir = self.config.results_dir
        try:
            results_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingError(
                f"Failed to create results directory {results_dir}: {e}", results_dir
            ) from e

    @staticmethod
    def _transition(invocation: InvocationResult, phase: RunPhase) -> None:
        logger.debug(f"{invocation.action} {invocation.kind}: {invocation.phase} -> {phase}")
        invocation.phase = phase
        if phase == RunPhase.BUILDING:
            logger.info("Building docker container")
        elif phase == RunPhase.RUNNING:
            logger.info(_RUNNING_MESSAGES[invocation.action])


_RUNNING_MESSAGES = {
    Action.INSTALL: "Running benchmark",
    Action.LOAD: "Running benchmark",
    Action.DEFER: "Running benchmark",
    Action.RUN: "Opening a shell",
    Action.VERSION: "Fetching version",
}
