from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Annotated

import typer

from genericcov._meta import logger
from genericcov.cli.exit_codes import EXIT_DATAERR, EXIT_GENERIC, EXIT_NOINPUT, EXIT_OK
from genericcov.core.config import LOG_FORMAT, CoverageSettings, load_settings
from genericcov.core.loader import DataError, load_all, should_execute
from genericcov.core.sink import MeasureStore
from genericcov.inputs.locator import FileSystemResourceLocator
from genericcov.io import OutputFormat, compute_io_policy, write_output
from genericcov.render import format_json, render_human


def _configure_logging(*, quiet: bool, verbose: bool) -> None:
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)


def _joined(values: list[str] | None) -> str | None:
    if not values:
        return None
    return ",".join(values)


def merge_settings(
    settings: CoverageSettings,
    *,
    reports: list[str] | None,
    it_reports: list[str] | None,
    unit_test_reports: list[str] | None,
) -> CoverageSettings:
    """Let command-line report lists override the ones from pyproject.toml."""
    changes: dict[str, str | None] = {}
    if reports:
        changes["report_paths"] = _joined(reports)
        changes["deprecated_report_path"] = None
    if it_reports:
        changes["it_report_paths"] = _joined(it_reports)
    if unit_test_reports:
        changes["unit_test_report_paths"] = _joined(unit_test_reports)
    return dataclasses.replace(settings, **changes)


def import_cmd(
    reports: Annotated[
        list[str] | None,
        typer.Option("-r", "--report", help="Coverage report (repeatable)."),
    ] = None,
    it_reports: Annotated[
        list[str] | None,
        typer.Option("--it-report", help="Integration test coverage report (repeatable)."),
    ] = None,
    unit_test_reports: Annotated[
        list[str] | None,
        typer.Option("--unit-test-report", help="Unit test coverage report (repeatable)."),
    ] = None,
    base_dir: Annotated[
        Path | None,
        typer.Option("--base-dir", help="Directory report and source paths are relative to."),
    ] = None,
    format_: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format."),
    ] = OutputFormat.AUTO,
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write output to PATH (use '-' for stdout)."),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging."),
    ] = False,
) -> None:
    """Import the configured reports and print the resulting measures."""
    _configure_logging(quiet=quiet, verbose=verbose)

    root = (base_dir or Path.cwd()).resolve()
    settings = merge_settings(
        load_settings(root),
        reports=reports,
        it_reports=it_reports,
        unit_test_reports=unit_test_reports,
    )
    if not should_execute(settings):
        typer.echo("ERROR: no coverage report given or configured in pyproject.toml", err=True)
        raise typer.Exit(code=EXIT_NOINPUT)

    store = MeasureStore()
    try:
        summary = load_all(
            settings,
            base_dir=root,
            locator=FileSystemResourceLocator(root),
            sink_for=store.sink,
        )
    except DataError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    except OSError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_GENERIC) from exc

    fmt, color = compute_io_policy(fmt=format_, output=output)
    if fmt == OutputFormat.JSON:
        text = format_json(store)
    else:
        text = render_human(store, color=color, base_dir=root)
    write_output(text, output)

    if not summary.ok:
        typer.echo(f"ERROR: {summary.missing}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("import")(import_cmd)


__all__ = ["import_cmd", "merge_settings", "register"]
