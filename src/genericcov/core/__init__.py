from genericcov.core.config import (
    LOG_FORMAT,
    MAX_STORED_UNKNOWN_FILE_PATHS,
    SUPPORTED_VERSION,
    CoverageSettings,
    load_settings,
)
from genericcov.core.loader import (
    DataError,
    LoadSummary,
    ModeSummary,
    load_all,
    load_report,
    should_execute,
    split_report_paths,
)
from genericcov.core.measures import CoverageMeasuresBuilder
from genericcov.core.model.metrics import Counter, Measure, Metric, format_key_value, metric_for
from genericcov.core.model.types import FileIdentity, MetricFamily, Mode
from genericcov.core.sink import InMemoryMeasureSink, MeasureSink, MeasureStore

__all__ = [
    "LOG_FORMAT",
    "MAX_STORED_UNKNOWN_FILE_PATHS",
    "SUPPORTED_VERSION",
    "Counter",
    "CoverageMeasuresBuilder",
    "CoverageSettings",
    "DataError",
    "FileIdentity",
    "InMemoryMeasureSink",
    "LoadSummary",
    "Measure",
    "MeasureSink",
    "MeasureStore",
    "Metric",
    "MetricFamily",
    "Mode",
    "ModeSummary",
    "format_key_value",
    "load_all",
    "load_report",
    "load_settings",
    "metric_for",
    "should_execute",
    "split_report_paths",
]
