from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TYPE_CHECKING

from genericcov.core.model.types import MetricFamily

if TYPE_CHECKING:
    from collections.abc import Mapping


class Counter(Enum):
    """Counters produced for one file, independent of the destination family."""

    LINES_TO_COVER = "lines_to_cover"
    UNCOVERED_LINES = "uncovered_lines"
    COVERAGE_LINE_HITS_DATA = "coverage_line_hits_data"
    CONDITIONS_TO_COVER = "conditions_to_cover"
    UNCOVERED_CONDITIONS = "uncovered_conditions"
    CONDITIONS_BY_LINE = "conditions_by_line"
    COVERED_CONDITIONS_BY_LINE = "covered_conditions_by_line"


class Metric(StrEnum):
    """Metric keys understood by the measure store."""

    LINES_TO_COVER = "lines_to_cover"
    UNCOVERED_LINES = "uncovered_lines"
    COVERAGE_LINE_HITS_DATA = "coverage_line_hits_data"
    CONDITIONS_TO_COVER = "conditions_to_cover"
    UNCOVERED_CONDITIONS = "uncovered_conditions"
    CONDITIONS_BY_LINE = "conditions_by_line"
    COVERED_CONDITIONS_BY_LINE = "covered_conditions_by_line"

    IT_LINES_TO_COVER = "it_lines_to_cover"
    IT_UNCOVERED_LINES = "it_uncovered_lines"
    IT_COVERAGE_LINE_HITS_DATA = "it_coverage_line_hits_data"
    IT_CONDITIONS_TO_COVER = "it_conditions_to_cover"
    IT_UNCOVERED_CONDITIONS = "it_uncovered_conditions"
    IT_CONDITIONS_BY_LINE = "it_conditions_by_line"
    IT_COVERED_CONDITIONS_BY_LINE = "it_covered_conditions_by_line"

    @property
    def is_data(self) -> bool:
        """True for metrics carrying a per-line key/value payload instead of a number."""
        return self.value.endswith(("_data", "_by_line"))


_FAMILY_PREFIX: dict[MetricFamily, str] = {
    MetricFamily.DEFAULT: "",
    MetricFamily.IT: "it_",
}


def metric_for(family: MetricFamily, counter: Counter) -> Metric:
    """Return the metric a counter is stored under for *family*."""
    return Metric(_FAMILY_PREFIX[family] + counter.value)


@dataclass(frozen=True, slots=True)
class Measure:
    """A single value destined for the measure store.

    Numeric metrics set ``value``; per-line metrics set ``data`` to the
    serialized line map (see :func:`format_key_value`).
    """

    metric: Metric
    value: float | None = None
    data: str | None = None


def format_key_value(mapping: Mapping[int, int]) -> str:
    """Serialize a line map as ``"2=0;3=1;5=1"`` in ascending line order."""
    return ";".join(f"{key}={mapping[key]}" for key in sorted(mapping))


__all__ = ["Counter", "Measure", "Metric", "MetricFamily", "format_key_value", "metric_for"]
