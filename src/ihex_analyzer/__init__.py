"""ihex_analyzer - decode, validate and resolve Intel HEX records."""

from .errors import (
    ChecksumError,
    EofErrorKind,
    RecordError,
    RecordErrorKind,
    RecordSyntaxError,
)
from .record import EOF_RECORD, Record, RecordType, decode
from .validator import check_record, validate
from .resolver import AddressingContext, AddressResolver, Resolution, resolve_address
from .analyzer import (
    EofReport,
    ErrorReport,
    FileAnalysis,
    RecordInfo,
    ValidityReport,
    analyze,
    analyze_file,
    analyze_sequence,
    check_terminal_record,
    describe_records,
)

__all__ = [
    "AddressResolver",
    "AddressingContext",
    "ChecksumError",
    "EOF_RECORD",
    "EofErrorKind",
    "EofReport",
    "ErrorReport",
    "FileAnalysis",
    "Record",
    "RecordError",
    "RecordErrorKind",
    "RecordInfo",
    "RecordSyntaxError",
    "RecordType",
    "Resolution",
    "ValidityReport",
    "analyze",
    "analyze_file",
    "analyze_sequence",
    "check_record",
    "check_terminal_record",
    "decode",
    "describe_records",
    "resolve_address",
    "validate",
]
