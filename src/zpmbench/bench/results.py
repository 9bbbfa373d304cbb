"""Read the JSON timing reports written by the benchmark tool."""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from zpmbench.errors import ReportError
from zpmbench.kinds import Kind

logger = logging.getLogger(__name__)

_REPORT_NAME = re.compile(r"^(?P<mode>install|load)-(?P<kind>[a-z_]+)\.json$")
_MODE_ORDER = ("install", "load")


@dataclass
class BenchReport:
    """Summary statistics (seconds) from one exported report."""

    mode: str
    kind: Kind
    command: str
    mean: float
    stddev: float | None
    median: float | None
    min: float
    max: float
    times: list[float] = field(default_factory=list)
    path: Path | None = None

    @property
    def runs(self) -> int:
        return len(self.times)


def parse_report_name(path: Path) -> tuple[str, Kind] | None:
    """Split ``<mode>-<kind>.json`` into its parts, or None if it is not a report."""
    match = _REPORT_NAME.match(path.name)
    if not match:
        return None
    try:
        kind = Kind.parse(match.group("kind"))
    except ValueError:
        return None
    return match.group("mode"), kind


def load_report(path: Path) -> BenchReport:
    """Parse a hyperfine ``--export-json`` report.

    Raises:
        ReportError: If the file is missing, not JSON, misnamed or lacks
            the expected fields.
    """
    parsed = parse_report_name(path)
    if parsed is None:
        raise ReportError(f"Not a benchmark report name: {path.name}")
    mode, kind = parsed

    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        raise ReportError(f"Report not found: {path}") from None
    except (OSError, json.JSONDecodeError) as e:
        raise ReportError(f"Failed to read report {path}: {e}") from e

    try:
        result = data["results"][0]
        return BenchReport(
            mode=mode,
            kind=kind,
            command=result["command"],
            mean=float(result["mean"]),
            stddev=_optional_float(result.get("stddev")),
            median=_optional_float(result.get("median")),
            min=float(result["min"]),
            max=float(result["max"]),
            times=[float(t) for t in result.get("times", [])],
            path=path,
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ReportError(f"Malformed report {path}: {e!r}") from e


def collect_reports(results_dir: Path) -> list[BenchReport]:
    """Load every report in ``results_dir``, ordered by mode then kind.

    Files that are not named like reports are ignored.
    """
    if not results_dir.is_dir():
        return []

    reports = []
    for path in results_dir.glob("*.json"):
        if parse_report_name(path) is None:
            logger.debug(f"Skipping {path.name}: not a report")
            continue
        reports.append(load_report(path))

    kind_order = {kind: i for i, kind in enumerate(Kind.all())}
    reports.sort(key=lambda r: (_MODE_ORDER.index(r.mode), kind_order[r.kind]))
    return reports


def _optional_float(value) -> float | None:
    return None if value is None else float(value)
