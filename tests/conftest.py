from __future__ import annotations

import io
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from genericcov.core.sink import InMemoryMeasureSink

DATA_DIR = Path(__file__).parent / "data"

# line number, covered, branchesToCover, coveredBranches
LineFact = tuple[int, bool] | tuple[int, bool, int, int]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def sink() -> InMemoryMeasureSink:
    return InMemoryMeasureSink()


def build_report_xml(files: Mapping[str, Iterable[LineFact]], *, version: str = "1") -> str:
    parts = [f'<coverage version="{version}">']
    for path, lines in files.items():
        parts.append(f'  <file path="{path}">')
        for fact in lines:
            line, covered = fact[0], fact[1]
            attrs = f'lineNumber="{line}" covered="{"true" if covered else "false"}"'
            if len(fact) == 4:  # noqa: PLR2004
                attrs += f' branchesToCover="{fact[2]}" coveredBranches="{fact[3]}"'
            parts.append(f"    <lineToCover {attrs}/>")
        parts.append("  </file>")
    parts.append("</coverage>")
    return "\n".join(parts)


def as_stream(xml: str) -> io.BytesIO:
    return io.BytesIO(xml.encode("utf-8"))


@pytest.fixture
def report_stream() -> Callable[..., io.BytesIO]:
    def build(files: Mapping[str, Iterable[LineFact]], *, version: str = "1") -> io.BytesIO:
        return as_stream(build_report_xml(files, version=version))

    return build


@pytest.fixture
def report_file(tmp_path: Path) -> Callable[..., Path]:
    def write(
        files: Mapping[str, Iterable[LineFact]],
        *,
        filename: str = "coverage.xml",
        version: str = "1",
    ) -> Path:
        xml_file = tmp_path / filename
        xml_file.parent.mkdir(parents=True, exist_ok=True)
        xml_file.write_text(build_report_xml(files, version=version), encoding="utf-8")
        return xml_file

    return write
