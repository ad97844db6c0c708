from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from genericcov.core.config import CoverageSettings
from genericcov.core.loader import (
    DataError,
    load_all,
    load_report,
    resolve_report_path,
    should_execute,
    split_report_paths,
)
from genericcov.core.model.metrics import Metric
from genericcov.core.model.types import Mode
from genericcov.core.sink import InMemoryMeasureSink, MeasureStore
from genericcov.errors import CoverageReportNotFoundError
from genericcov.inputs.locator import MappingResourceLocator

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("a.xml", ["a.xml"]),
        (" a.xml , ,b.xml,", ["a.xml", "b.xml"]),
    ],
)
def test_split_report_paths(value: str | None, expected: list[str]) -> None:
    assert split_report_paths(value) == expected


def test_resolve_report_path(tmp_path: Path) -> None:
    assert resolve_report_path("out/cov.xml", tmp_path) == tmp_path / "out" / "cov.xml"
    absolute = tmp_path / "abs.xml"
    assert resolve_report_path(str(absolute), tmp_path / "elsewhere") == absolute


def test_should_execute() -> None:
    assert not should_execute(CoverageSettings())
    assert should_execute(CoverageSettings(it_report_paths="it.xml"))
    assert should_execute(CoverageSettings(deprecated_report_path="old.xml"))


def test_load_report_merges_fragments(
    tmp_path: Path,
    report_file: Callable[..., Path],
    sink: InMemoryMeasureSink,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="genericcov")
    report_file({"a.py": [(1, True)], "gone.py": [(1, True)]}, filename="part1.xml")
    report_file({"a.py": [(2, False)]}, filename="sub/part2.xml")

    result = load_report(
        Mode.COVERAGE,
        ["part1.xml", "sub/part2.xml"],
        base_dir=tmp_path,
        locator=MappingResourceLocator({"a.py": "a"}),
        sink=sink,
    )

    assert result.matched_files == 2
    assert result.unmatched_files == 1
    assert result.unmatched_sample == ("gone.py",)
    assert len(result.reports) == 2
    measures = {m.metric: m for m in sink.files["a"]}
    assert measures[Metric.COVERAGE_LINE_HITS_DATA].data == "1=1;2=0"

    assert f"Parsing {tmp_path / 'part1.xml'}" in caplog.text
    assert "Imported coverage data for 2 files" in caplog.text
    assert "coverage data ignored for 1 unknown files, including:\ngone.py" in caplog.text


def test_load_report_missing_file(
    tmp_path: Path,
    sink: InMemoryMeasureSink,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="genericcov")
    with pytest.raises(CoverageReportNotFoundError):
        load_report(
            Mode.IT_COVERAGE,
            ["missing.xml"],
            base_dir=tmp_path,
            locator=MappingResourceLocator(),
            sink=sink,
        )
    assert "Cannot find IT coverage report to parse" in caplog.text
    assert sink.files == {}


def test_load_report_wraps_parse_errors(tmp_path: Path, sink: InMemoryMeasureSink) -> None:
    report = tmp_path / "bad.xml"
    report.write_text('<coverage version="1">\n<file path="a">\n<oops/>\n</file>\n</coverage>', encoding="utf-8")
    with pytest.raises(DataError, match=r"Error at line 3 of unit test report .*bad\.xml"):
        load_report(
            Mode.UNIT_TEST,
            ["bad.xml"],
            base_dir=tmp_path,
            locator=MappingResourceLocator(),
            sink=sink,
        )


def test_load_report_wraps_read_errors(tmp_path: Path, sink: InMemoryMeasureSink) -> None:
    report = tmp_path / "bad.xml"
    report.write_text("<coverage version='1'>", encoding="utf-8")
    with pytest.raises(DataError, match=r"Cannot parse coverage report .*bad\.xml"):
        load_report(
            Mode.COVERAGE,
            ["bad.xml"],
            base_dir=tmp_path,
            locator=MappingResourceLocator(),
            sink=sink,
        )


def test_load_all_runs_every_mode(tmp_path: Path, report_file: Callable[..., Path]) -> None:
    report_file({"a.py": [(1, True)]}, filename="ut.xml")
    report_file({"a.py": [(1, False), (2, True)]}, filename="it.xml")
    settings = CoverageSettings(report_paths="ut.xml", it_report_paths="it.xml", unit_test_report_paths="ut.xml")
    store = MeasureStore()

    summary = load_all(
        settings,
        base_dir=tmp_path,
        locator=MappingResourceLocator({"a.py": "a"}),
        sink_for=store.sink,
    )

    assert summary.ok
    assert [m.mode for m in summary.modes] == [Mode.COVERAGE, Mode.IT_COVERAGE, Mode.UNIT_TEST]
    it_metrics = {m.metric: m for m in store.sink(Mode.IT_COVERAGE).files["a"]}
    assert it_metrics[Metric.IT_LINES_TO_COVER].value == 2.0
    assert Metric.LINES_TO_COVER in {m.metric for m in store.sink(Mode.UNIT_TEST).files["a"]}


def test_load_all_stops_after_missing_report(tmp_path: Path, report_file: Callable[..., Path]) -> None:
    report_file({"a.py": [(1, True)]}, filename="ut.xml")
    settings = CoverageSettings(report_paths="ut.xml", it_report_paths="nope.xml", unit_test_report_paths="ut.xml")
    store = MeasureStore()

    summary = load_all(
        settings,
        base_dir=tmp_path,
        locator=MappingResourceLocator({"a.py": "a"}),
        sink_for=store.sink,
    )

    assert not summary.ok
    assert isinstance(summary.missing, CoverageReportNotFoundError)
    assert [m.mode for m in summary.modes] == [Mode.COVERAGE]
    assert Mode.UNIT_TEST not in store.by_mode()


def test_load_all_warns_about_deprecated_setting(
    tmp_path: Path,
    report_file: Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="genericcov")
    report_file({"a.py": [(1, True)]}, filename="old.xml")
    settings = CoverageSettings(report_paths="new.xml", deprecated_report_path="old.xml")
    store = MeasureStore()

    summary = load_all(settings, base_dir=tmp_path, locator=MappingResourceLocator({"a.py": "a"}), sink_for=store.sink)

    assert summary.ok
    assert summary.modes[0].reports == (tmp_path / "old.xml",)
    assert 'Use the new property "report_paths" instead of the deprecated "report_path"' in caplog.text
