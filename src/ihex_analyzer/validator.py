"""Record validation: checksum verification on top of decoding."""

from .errors import ChecksumError, RecordError, RecordErrorKind
from .record import Record, decode


def validate(record: Record) -> None:
    """Confirm the record's checksum field.

    The expected value is the two's complement of the sum of the byte count,
    both address bytes, the record type and every data byte. Raises
    ChecksumError on mismatch.
    """
    expected = record.computed_checksum
    if expected != record.checksum:
        raise ChecksumError(expected=expected, found=record.checksum)


def check_record(line: str) -> RecordErrorKind | None:
    """Decode and validate one line; return the first error kind or None."""
    try:
        validate(decode(line))
    except RecordError as e:
        return e.kind
    return None
