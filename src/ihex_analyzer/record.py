"""Intel HEX record decoding."""

from dataclasses import dataclass
from enum import IntEnum

from .errors import RecordErrorKind, RecordSyntaxError

START_CODE = ":"
EOF_RECORD = ":00000001FF"

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Start code + byte count + address + record type + checksum
FIXED_WIDTH = 1 + 2 + 4 + 2 + 2
DATA_OFFSET = 9


class RecordType(IntEnum):
    """Record types accepted by the decoder.

    Record types:
        00 - Data
        01 - End-Of-File
        02 - Extended Segment Address
        04 - Extended Linear Address
        05 - Start Linear Address (accepted, not interpreted)
    """

    DATA = 0x00
    END_OF_FILE = 0x01
    EXTENDED_SEGMENT_ADDRESS = 0x02
    EXTENDED_LINEAR_ADDRESS = 0x04
    START_LINEAR_ADDRESS = 0x05


def checksum(data: bytes) -> int:
    """Calculate Intel HEX checksum (two's complement of sum)."""
    return (~sum(data) + 1) & 0xFF


@dataclass(frozen=True)
class Record:
    """One decoded Intel HEX line."""

    byte_count: int
    address: int
    record_type: RecordType
    data: bytes
    checksum: int

    @property
    def address_high(self) -> int:
        return (self.address >> 8) & 0xFF

    @property
    def address_low(self) -> int:
        return self.address & 0xFF

    @property
    def computed_checksum(self) -> int:
        header = bytes(
            [self.byte_count, self.address_high, self.address_low, self.record_type]
        )
        return checksum(header + self.data)

    def __len__(self) -> int:
        return len(self.data)


def strip_terminator(line: str) -> str:
    """Remove one trailing line terminator, if any."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _is_hex(text: str) -> bool:
    return bool(text) and all(c in HEX_DIGITS for c in text)


def decode(line: str) -> Record:
    """Decode one record line.

    Raises RecordSyntaxError carrying the first failing check, in order:
    missing start code, malformed header fields, invalid record type,
    byte count mismatch. Checksum correctness is not checked here.
    """
    text = strip_terminator(line)

    if not text.startswith(START_CODE):
        raise RecordSyntaxError(RecordErrorKind.MISSING_START_CODE)

    fields = (text[1:3], text[3:7], text[7:9])
    if len(text) < DATA_OFFSET or not all(_is_hex(f) for f in fields):
        raise RecordSyntaxError(RecordErrorKind.MALFORMED_FIELDS)
    byte_count, address, type_code = (int(f, 16) for f in fields)

    try:
        record_type = RecordType(type_code)
    except ValueError:
        raise RecordSyntaxError(
            RecordErrorKind.INVALID_RECORD_TYPE, f"type 0x{type_code:02X}"
        ) from None

    payload = len(text) - FIXED_WIDTH
    observed, remainder = divmod(payload, 2)
    if payload < 0 or remainder or observed != byte_count:
        raise RecordSyntaxError(
            RecordErrorKind.BYTE_COUNT_MISMATCH,
            f"declared {byte_count}, found {payload / 2:g}",
        )

    data_hex = text[DATA_OFFSET:DATA_OFFSET + 2 * byte_count]
    checksum_hex = text[-2:]
    if (data_hex and not _is_hex(data_hex)) or not _is_hex(checksum_hex):
        raise RecordSyntaxError(RecordErrorKind.MALFORMED_FIELDS)

    return Record(
        byte_count=byte_count,
        address=address,
        record_type=record_type,
        data=bytes.fromhex(data_hex),
        checksum=int(checksum_hex, 16),
    )


def is_eof_line(line: str) -> bool:
    """True if the line carries the End-Of-File record literal."""
    return line.startswith(EOF_RECORD)
