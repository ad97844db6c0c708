from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from genericcov.core.model.metrics import Measure
    from genericcov.core.sink import MeasureStore


def _measure_value(measure: Measure) -> float | int | str | None:
    if measure.data is not None:
        return measure.data
    if measure.value is not None and measure.value.is_integer():
        return int(measure.value)
    return measure.value


def render_json(store: MeasureStore) -> dict[str, dict[str, dict[str, object]]]:
    """Return ``{mode: {file: {metric: value}}}`` with files in sorted order."""
    out: dict[str, dict[str, dict[str, object]]] = {}
    for mode, sink in store.by_mode().items():
        files: dict[str, dict[str, object]] = {}
        for file in sorted(sink.files, key=str):
            files[str(file)] = {str(m.metric): _measure_value(m) for m in sink.files[file]}
        out[str(mode)] = files
    return out


def format_json(store: MeasureStore) -> str:
    return json.dumps(render_json(store), indent=2, sort_keys=False)


__all__ = ["format_json", "render_json"]
