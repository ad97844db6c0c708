"""Streaming parser for generic coverage reports.

Expected document shape::

    <coverage version="1">
      <file path="src/app.py">
        <lineToCover lineNumber="2" covered="false"/>
        <lineToCover lineNumber="3" covered="true" branchesToCover="8" coveredBranches="7"/>
      </file>
    </coverage>

The document is read through SAX so that every schema violation can be
reported with the line of the offending element.
"""

from __future__ import annotations

import os
import re
from enum import Enum, auto
from pathlib import Path
from typing import IO, TYPE_CHECKING
from xml.sax import SAXException
from xml.sax.handler import ContentHandler

from defusedxml import DefusedXmlException
from defusedxml import sax as defused_sax

from genericcov.core.config import MAX_STORED_UNKNOWN_FILE_PATHS, SUPPORTED_VERSION
from genericcov.core.measures import CoverageMeasuresBuilder
from genericcov.core.model.types import Mode
from genericcov.errors import BranchMergeConflictError, ReportParsingError, ReportReadError

if TYPE_CHECKING:
    from xml.sax.xmlreader import AttributesImpl, Locator

    from genericcov.core.model.types import FileIdentity
    from genericcov.core.sink import MeasureSink
    from genericcov.inputs.locator import ResourceLocator

ReportSource = str | os.PathLike[str] | IO[bytes] | IO[str]

ROOT_TAG = "coverage"
FILE_TAG = "file"
LINE_TAG = "lineToCover"

_INT_RE = re.compile(r"-?[0-9]+")


class _State(Enum):
    EXPECT_ROOT = auto()
    EXPECT_FILE_OR_END = auto()
    EXPECT_LINE_OR_END_OF_FILE = auto()
    EXPECT_END_OF_LINE = auto()
    DONE = auto()


class ReportParser:
    """Validates report fragments and merges their facts per file.

    One instance serves one coverage mode. :meth:`parse` may be called once
    per fragment; counters and per-file builders are shared across calls so
    several reports can contribute to the same files until
    :meth:`save_measures` hands them off.
    """

    def __init__(self, locator: ResourceLocator, *, mode: Mode = Mode.COVERAGE) -> None:
        self.locator = locator
        self.mode = mode
        self._builders: dict[FileIdentity, CoverageMeasuresBuilder] = {}
        self._matched = 0
        self._unmatched = 0
        self._unmatched_sample: list[str] = []
        self._saved = False

    # ------------------------------------------------------------------ #
    # parsing                                                            #
    # ------------------------------------------------------------------ #

    def parse(self, source: ReportSource) -> None:
        """Parse one report fragment.

        *source* is either a path, opened and closed here, or an open stream
        left for the caller to close. Raises :class:`ReportParsingError` on
        schema violations and :class:`ReportReadError` when the input cannot
        be read or is not well-formed XML. Facts merged before a failure are
        kept.
        """
        if self._saved:
            msg = "measures were already saved; use a new parser for more fragments"
            raise RuntimeError(msg)
        if isinstance(source, (str, os.PathLike)):
            try:
                with Path(source).open("rb") as stream:
                    self._parse_stream(stream)
            except OSError as exc:
                msg = f"cannot read report {source}: {exc}"
                raise ReportReadError(msg) from exc
        else:
            self._parse_stream(source)

    def _parse_stream(self, stream: IO[bytes] | IO[str]) -> None:
        handler = _ReportHandler(self)
        try:
            defused_sax.parse(stream, handler)
        except SAXException as exc:
            msg = f"report is not well-formed XML: {exc}"
            raise ReportReadError(msg) from exc
        except DefusedXmlException as exc:
            msg = f"report uses forbidden XML constructs: {exc}"
            raise ReportReadError(msg) from exc
        except OSError as exc:
            msg = f"cannot read report stream: {exc}"
            raise ReportReadError(msg) from exc

    def _enter_file(self, path: str) -> CoverageMeasuresBuilder | None:
        identity = self.locator.resolve(path)
        if identity is None:
            self._unmatched += 1
            if len(self._unmatched_sample) < MAX_STORED_UNKNOWN_FILE_PATHS:
                self._unmatched_sample.append(path)
            return None
        self._matched += 1
        builder = self._builders.get(identity)
        if builder is None:
            builder = CoverageMeasuresBuilder(family=self.mode.family)
            self._builders[identity] = builder
        return builder

    # ------------------------------------------------------------------ #
    # bookkeeping                                                        #
    # ------------------------------------------------------------------ #

    @property
    def matched_file_count(self) -> int:
        return self._matched

    @property
    def unmatched_file_count(self) -> int:
        return self._unmatched

    @property
    def unmatched_file_sample(self) -> tuple[str, ...]:
        """First unknown paths met, capped at ``MAX_STORED_UNKNOWN_FILE_PATHS``."""
        return tuple(self._unmatched_sample)

    def builder_for(self, identity: FileIdentity) -> CoverageMeasuresBuilder | None:
        return self._builders.get(identity)

    def save_measures(self, sink: MeasureSink) -> None:
        """Hand every file's measures to *sink* and forget the builders.

        Files without any measure are skipped. Calling this again emits
        nothing, and the parser refuses further fragments afterwards.
        """
        self._saved = True
        builders, self._builders = self._builders, {}
        for identity, builder in builders.items():
            measures = builder.create_measures()
            if measures:
                sink.emit(identity, measures)


class _ReportHandler(ContentHandler):
    """SAX state machine feeding one fragment into a :class:`ReportParser`."""

    def __init__(self, parser: ReportParser) -> None:
        super().__init__()
        self._parser = parser
        self._state = _State.EXPECT_ROOT
        self._builder: CoverageMeasuresBuilder | None = None
        self._locator: Locator | None = None

    def setDocumentLocator(self, locator: Locator) -> None:  # noqa: N802
        self._locator = locator

    @property
    def _line(self) -> int:
        if self._locator is None:
            return 0
        return self._locator.getLineNumber() or 0

    def _error(self, message: str, attribute: str | None = None) -> ReportParsingError:
        return ReportParsingError(message, line_number=self._line, attribute=attribute)

    def _expect(self, name: str, expected: str) -> None:
        if name != expected:
            msg = f"Unexpected element <{name}>, expected <{expected}>"
            raise self._error(msg)

    # ------------------------------------------------------------------ #
    # SAX callbacks                                                      #
    # ------------------------------------------------------------------ #

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        state = self._state
        if state is _State.EXPECT_ROOT:
            self._expect(name, ROOT_TAG)
            self._check_version(attrs)
            self._state = _State.EXPECT_FILE_OR_END
        elif state is _State.EXPECT_FILE_OR_END:
            self._expect(name, FILE_TAG)
            path = self._required(attrs, "path")
            self._builder = self._parser._enter_file(path)  # noqa: SLF001
            self._state = _State.EXPECT_LINE_OR_END_OF_FILE
        elif state is _State.EXPECT_LINE_OR_END_OF_FILE:
            self._expect(name, LINE_TAG)
            self._line_to_cover(attrs)
            self._state = _State.EXPECT_END_OF_LINE
        else:
            # nothing may be nested below <lineToCover>
            msg = f"Unexpected element <{name}>"
            raise self._error(msg)

    def endElement(self, name: str) -> None:  # noqa: N802, ARG002
        state = self._state
        if state is _State.EXPECT_END_OF_LINE:
            self._state = _State.EXPECT_LINE_OR_END_OF_FILE
        elif state is _State.EXPECT_LINE_OR_END_OF_FILE:
            self._builder = None
            self._state = _State.EXPECT_FILE_OR_END
        elif state is _State.EXPECT_FILE_OR_END:
            self._state = _State.DONE

    # ------------------------------------------------------------------ #
    # element handling                                                   #
    # ------------------------------------------------------------------ #

    def _check_version(self, attrs: AttributesImpl) -> None:
        version = attrs.get("version")
        if version is None:
            msg = "Missing attribute 'version'"
            raise self._error(msg, "version")
        if version != SUPPORTED_VERSION:
            msg = f"Unknown report version: {version}. This parser only handles version {SUPPORTED_VERSION}."
            raise self._error(msg, "version")

    def _required(self, attrs: AttributesImpl, attribute: str) -> str:
        value = attrs.get(attribute)
        if value is None or not value.strip():
            msg = f"Missing attribute '{attribute}'"
            raise self._error(msg, attribute)
        return value

    def _int(self, attrs: AttributesImpl, attribute: str, *, minimum: int) -> int | None:
        raw = attrs.get(attribute)
        if raw is None:
            return None
        if not _INT_RE.fullmatch(raw):
            msg = f"Expected an integer instead of \"{raw}\" for attribute '{attribute}'"
            raise self._error(msg, attribute)
        value = int(raw)
        if value < minimum:
            bound = "strictly positive" if minimum > 0 else "non-negative"
            msg = f"Value of attribute '{attribute}' should be {bound}: {value}"
            raise self._error(msg, attribute)
        return value

    def _bool(self, attrs: AttributesImpl, attribute: str) -> bool:
        raw = self._required(attrs, attribute)
        if raw == "true":
            return True
        if raw == "false":
            return False
        msg = f"Expected \"true\" or \"false\" instead of \"{raw}\" for attribute '{attribute}'"
        raise self._error(msg, attribute)

    def _line_to_cover(self, attrs: AttributesImpl) -> None:
        self._required(attrs, "lineNumber")
        line = self._int(attrs, "lineNumber", minimum=1)
        covered = self._bool(attrs, "covered")
        branches = self._int(attrs, "branchesToCover", minimum=0)
        covered_branches = self._int(attrs, "coveredBranches", minimum=0) or 0
        if branches is not None and covered_branches > branches:
            msg = "'coveredBranches' should not be greater than 'branchesToCover'"
            raise self._error(msg, "coveredBranches")

        builder = self._builder
        if builder is None or line is None:
            return
        builder.record_line(line, covered=covered)
        if branches is None:
            return
        try:
            builder.set_conditions(line, branches, covered_branches)
        except BranchMergeConflictError as exc:
            raise self._error(str(exc), "branchesToCover") from exc


def parse_report(
    source: ReportSource,
    locator: ResourceLocator,
    sink: MeasureSink,
    *,
    mode: Mode = Mode.COVERAGE,
) -> ReportParser:
    """Parse a single report and save its measures right away."""
    parser = ReportParser(locator, mode=mode)
    parser.parse(source)
    parser.save_measures(sink)
    return parser


__all__ = ["FILE_TAG", "LINE_TAG", "ROOT_TAG", "ReportParser", "ReportSource", "parse_report"]
