"""Loading of the configured reports, mode by mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from genericcov._meta import logger
from genericcov.core.model.types import Mode
from genericcov.errors import CoverageReportNotFoundError, ReportParsingError, ReportReadError
from genericcov.inputs.report_parser import ReportParser

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from genericcov.core.config import CoverageSettings
    from genericcov.core.sink import MeasureSink
    from genericcov.inputs.locator import ResourceLocator

# Modes are loaded in this order; a missing report stops the chain.
MODE_ORDER: tuple[Mode, ...] = (Mode.COVERAGE, Mode.IT_COVERAGE, Mode.UNIT_TEST)


class DataError(Exception):
    """A report could not be read or violates the report format."""


@dataclass(frozen=True, slots=True)
class ModeSummary:
    mode: Mode
    reports: tuple[Path, ...]
    matched_files: int
    unmatched_files: int
    unmatched_sample: tuple[str, ...]


@dataclass(slots=True)
class LoadSummary:
    """Outcome of :func:`load_all`."""

    modes: list[ModeSummary] = field(default_factory=list)
    missing: CoverageReportNotFoundError | None = None

    @property
    def ok(self) -> bool:
        return self.missing is None


def split_report_paths(value: str | None) -> list[str]:
    """Split a comma-separated path list, dropping blanks."""
    if value is None:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def resolve_report_path(path: str, base_dir: Path) -> Path:
    report = Path(path)
    if not report.is_absolute():
        report = base_dir / report
    return report.absolute()


def should_execute(settings: CoverageSettings) -> bool:
    return not settings.is_empty()


def load_report(
    mode: Mode,
    report_paths: Sequence[str],
    *,
    base_dir: Path,
    locator: ResourceLocator,
    sink: MeasureSink,
) -> ModeSummary:
    """Parse every report of *mode* in order, then save the merged measures.

    Raises :class:`CoverageReportNotFoundError` when a report is missing; in
    that case nothing of this mode is saved. Read and format failures are
    raised as :class:`DataError`.
    """
    parser = ReportParser(locator, mode=mode)
    parsed: list[Path] = []
    for path in report_paths:
        report = resolve_report_path(path, base_dir)
        logger.info("Parsing %s", report)
        if not report.exists():
            logger.warning("Cannot find %s report to parse: %s", mode.label, report)
            msg = f"{mode.label} report not found: {report}"
            raise CoverageReportNotFoundError(msg)
        try:
            parser.parse(report)
        except ReportReadError as exc:
            msg = f"Cannot parse {mode.label} report {report}: {exc}"
            raise DataError(msg) from exc
        except ReportParsingError as exc:
            msg = f"Error at line {exc.line_number} of {mode.label} report {report}: {exc.message}"
            raise DataError(msg) from exc
        parsed.append(report)

    parser.save_measures(sink)

    logger.info("Imported %s data for %d files", mode.label, parser.matched_file_count)
    if parser.unmatched_file_count > 0:
        logger.info(
            "%s data ignored for %d unknown files, including:\n%s",
            mode.label,
            parser.unmatched_file_count,
            "\n".join(parser.unmatched_file_sample),
        )
    return ModeSummary(
        mode=mode,
        reports=tuple(parsed),
        matched_files=parser.matched_file_count,
        unmatched_files=parser.unmatched_file_count,
        unmatched_sample=parser.unmatched_file_sample,
    )


def load_all(
    settings: CoverageSettings,
    *,
    base_dir: Path,
    locator: ResourceLocator,
    sink_for: Callable[[Mode], MeasureSink],
) -> LoadSummary:
    """Load the reports of every mode, stopping at the first missing report."""
    summary = LoadSummary()
    for mode in MODE_ORDER:
        paths = split_report_paths(settings.report_paths_for(mode, warn=True))
        try:
            result = load_report(mode, paths, base_dir=base_dir, locator=locator, sink=sink_for(mode))
        except CoverageReportNotFoundError as exc:
            summary.missing = exc
            break
        summary.modes.append(result)
    return summary


__all__ = [
    "MODE_ORDER",
    "DataError",
    "LoadSummary",
    "ModeSummary",
    "load_all",
    "load_report",
    "resolve_report_path",
    "should_execute",
    "split_report_paths",
]
