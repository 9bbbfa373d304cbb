"""Benchmark commands and timing reports."""

from .commands import (
    BenchMode,
    ExternalCommand,
    build_benchmark_command,
    build_shell_command,
    build_version_command,
    report_filename,
)
from .results import BenchReport, collect_reports, load_report

__all__ = [
    "BenchMode",
    "BenchReport",
    "ExternalCommand",
    "build_benchmark_command",
    "build_shell_command",
    "build_version_command",
    "collect_reports",
    "load_report",
    "report_filename",
]
