"""File-level analysis: validity scan, End-Of-File placement, record listing.

Each pass takes an iterable of record lines (terminators optional) and reads
it once from the start. Line numbers are 1-based.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .errors import EofErrorKind, RecordError, RecordErrorKind
from .record import Record, decode, is_eof_line
from .resolver import AddressResolver, Resolution
from .validator import validate


@dataclass(frozen=True)
class ErrorReport:
    """A fault and the line it was detected on."""

    kind: RecordErrorKind | EofErrorKind
    line_number: int | None = None

    @property
    def message(self) -> str:
        return self.kind.message


@dataclass
class ValidityReport:
    """Result of the record validity scan."""

    error: ErrorReport | None = None
    lines_checked: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class EofReport:
    """Result of the End-Of-File placement scan."""

    error: ErrorReport | None = None
    eof_count: int = 0
    first_eof_line: int | None = None
    last_line: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RecordInfo:
    """Display data for one line of an already validated file."""

    line_number: int
    text: str
    resolution: Resolution

    @property
    def record(self) -> Record:
        return self.resolution.record


@dataclass
class FileAnalysis:
    """Aggregate of all passes run over one file."""

    validity: ValidityReport
    eof: EofReport | None = None
    records: list[RecordInfo] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.validity.ok and self.eof is not None and self.eof.ok

    @property
    def error(self) -> ErrorReport | None:
        if self.validity.error is not None:
            return self.validity.error
        if self.eof is not None:
            return self.eof.error
        return None


def analyze_sequence(lines: Iterable[str]) -> ValidityReport:
    """Decode and validate every line, stopping at the first invalid one.

    Lines after the failing one are not consumed from the iterable.
    """
    report = ValidityReport()
    for line_number, line in enumerate(lines, 1):
        report.lines_checked = line_number
        try:
            validate(decode(line))
        except RecordError as e:
            report.error = ErrorReport(e.kind, line_number)
            break
    return report


def check_terminal_record(lines: Iterable[str]) -> EofReport:
    """Check that exactly one End-Of-File record exists and ends the file.

    Every line is scanned. The EOF record's text is compared with the text of
    the final line, so anything following it (including a blank line) means
    the record is not at the end.
    """
    report = EofReport()
    eof_text = None

    for line_number, line in enumerate(lines, 1):
        report.last_line = line
        if is_eof_line(line):
            if report.eof_count == 0:
                report.first_eof_line = line_number
            report.eof_count += 1
            eof_text = line

    if report.eof_count == 0:
        report.error = ErrorReport(EofErrorKind.MISSING_EOF)
    elif report.eof_count == 1:
        if report.last_line != eof_text:
            report.error = ErrorReport(
                EofErrorKind.EOF_NOT_AT_END, report.first_eof_line
            )
    else:
        report.error = ErrorReport(EofErrorKind.DUPLICATE_EOF, report.first_eof_line)

    return report


def iter_records(lines: Iterable[str]) -> Iterator[RecordInfo]:
    """Decode and resolve each line, carrying addressing state across lines.

    Intended for sequences that already passed both scans; decode errors
    propagate.
    """
    resolver = AddressResolver()
    for line_number, line in enumerate(lines, 1):
        resolution = resolver.feed(decode(line))
        yield RecordInfo(line_number, line, resolution)


def describe_records(lines: Iterable[str]) -> list[RecordInfo]:
    """Presentation pass: display data for every record."""
    return list(iter_records(lines))


def analyze(
    open_lines: Callable[[], Iterable[str]], describe: bool = True
) -> FileAnalysis:
    """Run the validity scan, then the EOF scan, then the listing pass.

    open_lines must return a fresh iterable over the same lines on every
    call; each pass starts from the beginning. A pass only runs when the
    previous one succeeded.
    """
    analysis = FileAnalysis(validity=analyze_sequence(open_lines()))
    if not analysis.validity.ok:
        return analysis

    analysis.eof = check_terminal_record(open_lines())
    if not analysis.eof.ok:
        return analysis

    if describe:
        analysis.records = describe_records(open_lines())
    return analysis


def _read_lines(path: Path) -> Iterator[str]:
    with open(path, "r", newline="") as f:
        yield from f


def analyze_file(path: str | Path, describe: bool = True) -> FileAnalysis:
    """Analyze a HEX file on disk, reopening it for each pass.

    Raises OSError if the file cannot be read.
    """
    path = Path(path)
    return analyze(lambda: _read_lines(path), describe=describe)
