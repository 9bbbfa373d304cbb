"""Container action runners."""

from .bench_runner import Action, BenchRunner, InvocationResult, RunPhase, SweepResult

__all__ = ["Action", "BenchRunner", "InvocationResult", "RunPhase", "SweepResult"]
