"""Per-file accumulation of line and branch coverage facts."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from genericcov.core.model.metrics import Counter, Measure, format_key_value, metric_for
from genericcov.core.model.types import MetricFamily
from genericcov.errors import BranchMergeConflictError

if TYPE_CHECKING:
    from collections.abc import Mapping


def _sorted_view(mapping: dict[int, int]) -> Mapping[int, int]:
    return MappingProxyType(dict(sorted(mapping.items())))


@dataclass(slots=True)
class CoverageMeasuresBuilder:
    """Mergeable coverage counters for one logical file.

    Facts may arrive several times for the same line, e.g. from several report
    fragments. Hits are max-merged. Branch totals must agree with what was
    recorded first; covered branches are max-merged.
    """

    family: MetricFamily = MetricFamily.DEFAULT
    _hits_by_line: dict[int, int] = field(default_factory=dict, init=False, repr=False)
    _conditions_by_line: dict[int, int] = field(default_factory=dict, init=False, repr=False)
    _covered_conditions_by_line: dict[int, int] = field(default_factory=dict, init=False, repr=False)
    _covered_lines: int = field(default=0, init=False, repr=False)
    _conditions: int = field(default=0, init=False, repr=False)
    _covered_conditions: int = field(default=0, init=False, repr=False)

    @classmethod
    def create(cls, *, integration_tests: bool = False) -> CoverageMeasuresBuilder:
        return cls(family=MetricFamily.IT if integration_tests else MetricFamily.DEFAULT)

    # ------------------------------------------------------------------ #
    # merging                                                            #
    # ------------------------------------------------------------------ #

    def set_hits(self, line: int, hits: int) -> CoverageMeasuresBuilder:
        old = self._hits_by_line.get(line)
        if old is None:
            self._hits_by_line[line] = hits
            if hits > 0:
                self._covered_lines += 1
        else:
            self._hits_by_line[line] = max(old, hits)
            if old == 0 and hits > 0:
                self._covered_lines += 1
        return self

    def record_line(self, line: int, *, covered: bool) -> CoverageMeasuresBuilder:
        return self.set_hits(line, 1 if covered else 0)

    def set_conditions(self, line: int, conditions: int, covered_conditions: int) -> CoverageMeasuresBuilder:
        """Merge the branch facts of *line*.

        Raises :class:`BranchMergeConflictError` when *line* already carries a
        different number of branches; the builder is left untouched then.
        """
        if conditions < 0 or covered_conditions < 0:
            msg = f"negative branch count on line {line}"
            raise ValueError(msg)
        if covered_conditions > conditions:
            msg = f"line {line}: {covered_conditions} covered branches exceed {conditions} branches to cover"
            raise ValueError(msg)
        if conditions == 0:
            return self

        known = self._conditions_by_line.get(line)
        if known is None:
            self._conditions_by_line[line] = conditions
            self._covered_conditions_by_line[line] = covered_conditions
            self._conditions += conditions
            self._covered_conditions += covered_conditions
            return self

        if known != conditions:
            raise BranchMergeConflictError(line, expected=known, actual=conditions)
        old = self._covered_conditions_by_line[line]
        new = max(old, covered_conditions)
        self._covered_conditions_by_line[line] = new
        self._covered_conditions += new - old
        return self

    # ------------------------------------------------------------------ #
    # totals and snapshots                                               #
    # ------------------------------------------------------------------ #

    @property
    def lines_to_cover(self) -> int:
        return len(self._hits_by_line)

    @property
    def covered_lines(self) -> int:
        return self._covered_lines

    @property
    def conditions(self) -> int:
        return self._conditions

    @property
    def covered_conditions(self) -> int:
        return self._covered_conditions

    @property
    def hits_by_line(self) -> Mapping[int, int]:
        return _sorted_view(self._hits_by_line)

    @property
    def conditions_by_line(self) -> Mapping[int, int]:
        return _sorted_view(self._conditions_by_line)

    @property
    def covered_conditions_by_line(self) -> Mapping[int, int]:
        return _sorted_view(self._covered_conditions_by_line)

    # ------------------------------------------------------------------ #
    # output                                                             #
    # ------------------------------------------------------------------ #

    def create_measures(self) -> tuple[Measure, ...]:
        """Materialize the counters; empty metric families are omitted."""
        measures: list[Measure] = []
        if self.lines_to_cover > 0:
            measures.extend([
                self._numeric(Counter.LINES_TO_COVER, self.lines_to_cover),
                self._numeric(Counter.UNCOVERED_LINES, self.lines_to_cover - self.covered_lines),
                self._data(Counter.COVERAGE_LINE_HITS_DATA, self._hits_by_line),
            ])
        if self.conditions > 0:
            measures.extend([
                self._numeric(Counter.CONDITIONS_TO_COVER, self.conditions),
                self._numeric(Counter.UNCOVERED_CONDITIONS, self.conditions - self.covered_conditions),
                self._data(Counter.CONDITIONS_BY_LINE, self._conditions_by_line),
                self._data(Counter.COVERED_CONDITIONS_BY_LINE, self._covered_conditions_by_line),
            ])
        return tuple(measures)

    def _numeric(self, counter: Counter, value: int) -> Measure:
        return Measure(metric=metric_for(self.family, counter), value=float(value))

    def _data(self, counter: Counter, mapping: Mapping[int, int]) -> Measure:
        return Measure(metric=metric_for(self.family, counter), data=format_key_value(mapping))


__all__ = ["CoverageMeasuresBuilder"]
