"""Hand-off of materialized measures to the measure store."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from genericcov.core.model.metrics import Measure
    from genericcov.core.model.types import FileIdentity, Mode


class MeasureSink(Protocol):
    """Receives the measures of one file, once per file and mode."""

    def emit(self, file: FileIdentity, measures: tuple[Measure, ...]) -> None: ...


@dataclass(slots=True)
class InMemoryMeasureSink:
    """Keeps emitted measures in memory, refusing a second hand-off for a file."""

    files: dict[FileIdentity, tuple[Measure, ...]] = field(default_factory=dict)

    def emit(self, file: FileIdentity, measures: tuple[Measure, ...]) -> None:
        if file in self.files:
            msg = f"measures already saved for {file!r}"
            raise RuntimeError(msg)
        self.files[file] = tuple(measures)

    def __len__(self) -> int:
        return len(self.files)


@dataclass(slots=True)
class MeasureStore:
    """One :class:`InMemoryMeasureSink` per coverage mode."""

    _sinks: dict[Mode, InMemoryMeasureSink] = field(default_factory=dict, init=False, repr=False)

    def sink(self, mode: Mode) -> InMemoryMeasureSink:
        return self._sinks.setdefault(mode, InMemoryMeasureSink())

    def by_mode(self) -> Mapping[Mode, InMemoryMeasureSink]:
        return MappingProxyType(self._sinks)

    def iter_measures(self) -> Iterator[tuple[Mode, FileIdentity, tuple[Measure, ...]]]:
        for mode, sink in self._sinks.items():
            for file, measures in sink.files.items():
                yield mode, file, measures


__all__ = ["InMemoryMeasureSink", "MeasureSink", "MeasureStore"]
