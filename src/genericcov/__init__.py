from genericcov._meta import __version__, logger
from genericcov.core.measures import CoverageMeasuresBuilder
from genericcov.core.model.metrics import Measure, Metric, MetricFamily
from genericcov.core.model.types import Mode
from genericcov.inputs.report_parser import ReportParser, parse_report

__all__ = [
    "CoverageMeasuresBuilder",
    "Measure",
    "Metric",
    "MetricFamily",
    "Mode",
    "ReportParser",
    "__version__",
    "logger",
    "parse_report",
]
