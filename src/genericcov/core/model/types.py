"""Shared type aliases and enumerations used across genericcov."""

from __future__ import annotations

from collections.abc import Hashable
from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Common type aliases
# ---------------------------------------------------------------------------

FileIdentity: TypeAlias = Hashable
"""Logical file reference handed out by a resource locator."""

LineHits: TypeAlias = dict[int, int]
"""Mapping of line number to a per-line counter, ordered by line number."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class MetricFamily(StrEnum):
    """Destination family of the emitted counters."""

    DEFAULT = "default"
    IT = "it"


class Mode(StrEnum):
    """Kind of coverage a parsing pass loads."""

    COVERAGE = "coverage"
    IT_COVERAGE = "it-coverage"
    UNIT_TEST = "unit-test"

    @property
    def label(self) -> str:
        """Human readable name used in log and error messages."""
        return _MODE_LABELS[self]

    @property
    def family(self) -> MetricFamily:
        return MetricFamily.IT if self is Mode.IT_COVERAGE else MetricFamily.DEFAULT


_MODE_LABELS: dict[Mode, str] = {
    Mode.COVERAGE: "coverage",
    Mode.IT_COVERAGE: "IT coverage",
    Mode.UNIT_TEST: "unit test",
}


__all__ = ["FileIdentity", "LineHits", "MetricFamily", "Mode"]
