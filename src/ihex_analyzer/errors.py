"""Error kinds and exceptions raised while analyzing Intel HEX records."""

from enum import IntEnum


class RecordErrorKind(IntEnum):
    """Per-record faults, ranked by the order they are detected."""

    MISSING_START_CODE = 1
    MALFORMED_FIELDS = 2
    INVALID_RECORD_TYPE = 3
    BYTE_COUNT_MISMATCH = 4
    CHECKSUM_MISMATCH = 5

    @property
    def message(self) -> str:
        return _RECORD_MESSAGES[self]


class EofErrorKind(IntEnum):
    """File-level End-Of-File placement faults."""

    MISSING_EOF = 1
    EOF_NOT_AT_END = 2
    DUPLICATE_EOF = 3

    @property
    def message(self) -> str:
        return _EOF_MESSAGES[self]


_RECORD_MESSAGES = {
    RecordErrorKind.MISSING_START_CODE:
        "There is no ':' character at the beginning of the line.",
    RecordErrorKind.MALFORMED_FIELDS: "Record format isn't valid.",
    RecordErrorKind.INVALID_RECORD_TYPE: "Record type isn't valid.",
    RecordErrorKind.BYTE_COUNT_MISMATCH: (
        "The number of bytes of data field and record-length field "
        "aren't the same."
    ),
    RecordErrorKind.CHECKSUM_MISMATCH:
        "Checksum field doesn't match the actual calculation.",
}

_EOF_MESSAGES = {
    EofErrorKind.MISSING_EOF: "File is missing End-Of-File record!!!",
    EofErrorKind.EOF_NOT_AT_END: "End-Of-File record must at the end of file!!!",
    EofErrorKind.DUPLICATE_EOF:
        "File mustn't have more than one End-Of-File record!!!",
}


class RecordError(ValueError):
    """A record line failed decoding or validation."""

    def __init__(self, kind: RecordErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        text = kind.message
        if detail:
            text = f"{text} ({detail})"
        super().__init__(text)


class RecordSyntaxError(RecordError):
    """Raised by the decoder for structural faults."""


class ChecksumError(RecordError):
    """Raised by the validator when the checksum field is wrong."""

    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(
            RecordErrorKind.CHECKSUM_MISMATCH,
            f"found 0x{found:02X}, calculated 0x{expected:02X}",
        )

