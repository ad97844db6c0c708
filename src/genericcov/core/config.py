"""Central configuration and constants for ``genericcov``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from tomllib import TOMLDecodeError
from typing import TYPE_CHECKING

from genericcov._meta import logger
from genericcov.core.model.types import Mode

if TYPE_CHECKING:
    from pathlib import Path

# The only report format version the parser accepts.
SUPPORTED_VERSION = "1"

# Number of unknown file paths kept for diagnostics.
MAX_STORED_UNKNOWN_FILE_PATHS = 5

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

# Section of pyproject.toml holding the report settings.
PYPROJECT_SECTION = "genericcov"

REPORT_PATH_KEY = "report_path"
REPORT_PATHS_KEY = "report_paths"
IT_REPORT_PATHS_KEY = "it_report_paths"
UNIT_TEST_REPORT_PATHS_KEY = "unit_test_report_paths"


@dataclass(frozen=True, slots=True)
class CoverageSettings:
    """Comma-separated report path lists, one per mode.

    ``deprecated_report_path`` is the historical single-report setting; when
    present it takes precedence over ``report_paths``.
    """

    report_paths: str | None = None
    it_report_paths: str | None = None
    unit_test_report_paths: str | None = None
    deprecated_report_path: str | None = None

    def report_paths_for(self, mode: Mode, *, warn: bool = False) -> str | None:
        if mode is Mode.IT_COVERAGE:
            return self.it_report_paths
        if mode is Mode.UNIT_TEST:
            return self.unit_test_report_paths
        if self.deprecated_report_path:
            if warn:
                logger.warning(
                    'Use the new property "%s" instead of the deprecated "%s"',
                    REPORT_PATHS_KEY,
                    REPORT_PATH_KEY,
                )
            return self.deprecated_report_path
        return self.report_paths

    def is_empty(self) -> bool:
        return not any(self.report_paths_for(mode) for mode in Mode)


def _as_setting(value: object) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, list):
        items = [str(v).strip() for v in value if str(v).strip()]
        return ",".join(items) or None
    return None


def load_settings(project_root: Path) -> CoverageSettings:
    """Read ``[tool.genericcov]`` from ``pyproject.toml`` under *project_root*.

    Values may be comma-separated strings or lists of strings. A missing file
    or section yields empty settings.
    """
    pp = project_root / "pyproject.toml"
    if not pp.exists():
        return CoverageSettings()
    try:
        data = tomllib.loads(pp.read_text(encoding="utf-8"))
    except (OSError, TOMLDecodeError, UnicodeError) as e:
        logger.warning("Failed to parse %s: %s", pp, e)
        return CoverageSettings()

    section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        return CoverageSettings()
    return CoverageSettings(
        report_paths=_as_setting(section.get(REPORT_PATHS_KEY)),
        it_report_paths=_as_setting(section.get(IT_REPORT_PATHS_KEY)),
        unit_test_report_paths=_as_setting(section.get(UNIT_TEST_REPORT_PATHS_KEY)),
        deprecated_report_path=_as_setting(section.get(REPORT_PATH_KEY)),
    )


__all__ = [
    "LOG_FORMAT",
    "MAX_STORED_UNKNOWN_FILE_PATHS",
    "SUPPORTED_VERSION",
    "CoverageSettings",
    "load_settings",
]
