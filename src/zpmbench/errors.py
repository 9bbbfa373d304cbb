"""Exception types raised by the benchmark pipeline."""

from collections.abc import Sequence
from pathlib import Path


class BenchError(Exception):
    """Base class for every error the pipeline reports to the operator."""


class ConfigError(BenchError):
    """Raised when configuration loading or validation fails."""


class TemplateLoadError(BenchError):
    """Raised when a template bundle entry is missing or unreadable."""

    def __init__(self, message: str, kind: str = "", path: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


class RenderError(BenchError):
    """Raised when a template cannot be decoded or rendered."""

    def __init__(self, message: str, kind: str = "", path: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


class StagingError(BenchError, OSError):
    """Raised when rendered files cannot be written to the staging directory."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ProcessError(BenchError):
    """Base class for failures of an external command."""

    def __init__(self, message: str, command: Sequence[str]) -> None:
        super().__init__(message)
        self.command = list(command)


class ProcessLaunchError(ProcessError):
    """Raised when an external command could not be started."""


class ProcessExitError(ProcessError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, message: str, command: Sequence[str], returncode: int) -> None:
        super().__init__(message, command)
        self.returncode = returncode


class ReportError(BenchError):
    """Raised when a timing report cannot be parsed."""


class SweepError(BenchError):
    """Raised after a keep-going sweep in which one or more kinds failed."""

    def __init__(self, failures: list[tuple[str, BaseException]]) -> None:
        names = ", ".join(kind for kind, _ in failures)
        super().__init__(f"{len(failures)} plugin manager(s) failed: {names}")
        self.failures = failures


class KindFailure(BenchError):
    """Raised when a sweep stops because one plugin manager failed.

    The underlying error is chained as ``__cause__``.
    """

    def __init__(self, kind: str, action: str, error: BaseException) -> None:
        super().__init__(f"{action} failed for {kind}: {error}")
        self.kind = kind
        self.action = action
        self.error = error
