from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

from genericcov.core.model.metrics import Counter, metric_for

if TYPE_CHECKING:
    from genericcov.core.model.metrics import Measure
    from genericcov.core.model.types import Mode
    from genericcov.core.sink import MeasureStore

_COLUMNS: tuple[tuple[str, Counter], ...] = (
    ("Lines\nTot.", Counter.LINES_TO_COVER),
    ("Lines\nMiss", Counter.UNCOVERED_LINES),
    ("Cond.\nTot.", Counter.CONDITIONS_TO_COVER),
    ("Cond.\nMiss", Counter.UNCOVERED_CONDITIONS),
)


def _cell(measures: tuple[Measure, ...], mode: Mode, counter: Counter) -> str:
    metric = metric_for(mode.family, counter)
    for m in measures:
        if m.metric == metric and m.value is not None:
            n = int(m.value)
            if counter in {Counter.UNCOVERED_LINES, Counter.UNCOVERED_CONDITIONS}:
                return f"[red]{n}[/red]" if n else f"[green]{n}[/green]"
            return str(n)
    return "-"


def _label(file: object, base_dir: Path | None) -> str:
    if base_dir is not None and isinstance(file, Path):
        try:
            return str(file.relative_to(base_dir))
        except ValueError:
            pass
    return str(file)


def render_human(store: MeasureStore, *, color: bool = True, base_dir: Path | None = None) -> str:
    """Render imported measures as a Rich table, one row per file and mode."""
    table = Table(title="Imported Coverage", box=box.SIMPLE_HEAVY, header_style="bold", expand=True)
    table.add_column("File", overflow="fold")
    table.add_column("Mode")
    for title, _counter in _COLUMNS:
        table.add_column(title, justify="right")

    rows = sorted(store.iter_measures(), key=lambda r: (_label(r[1], base_dir), str(r[0])))
    for mode, file, measures in rows:
        table.add_row(
            _label(file, base_dir),
            mode.label,
            *(_cell(measures, mode, counter) for _title, counter in _COLUMNS),
        )

    buf = StringIO()
    console = Console(file=buf, force_terminal=color, no_color=not color)
    console.print()
    console.print(table)
    console.print()
    return buf.getvalue().rstrip()


__all__ = ["render_human"]
