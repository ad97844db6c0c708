"""Centralised exception hierarchy for genericcov."""

from __future__ import annotations


class GenericCoverageError(Exception):
    """Base class for all custom genericcov exceptions."""


class CoverageReportError(GenericCoverageError):
    """Base class for errors related to coverage report handling."""


class CoverageReportNotFoundError(CoverageReportError):
    """A configured coverage report could not be located on disk."""


class ReportReadError(CoverageReportError):
    """The report stream could not be read or is not well-formed XML."""


class ReportParsingError(CoverageReportError):
    """The report is well-formed XML but violates the report schema.

    ``line_number`` is the 1-based line of the input document where the
    offending element starts.
    """

    def __init__(self, message: str, *, line_number: int, attribute: str | None = None) -> None:
        super().__init__(f"Line {line_number}: {message}")
        self.message = message
        self.line_number = line_number
        self.attribute = attribute


class BranchMergeConflictError(GenericCoverageError):
    """A line was declared again with a different number of branches."""

    def __init__(self, line: int, *, expected: int, actual: int) -> None:
        super().__init__(
            f"line {line} was previously declared with {expected} branches to cover, got {actual}"
        )
        self.line = line
        self.expected = expected
        self.actual = actual


__all__ = [
    "BranchMergeConflictError",
    "CoverageReportError",
    "CoverageReportNotFoundError",
    "GenericCoverageError",
    "ReportParsingError",
    "ReportReadError",
]
