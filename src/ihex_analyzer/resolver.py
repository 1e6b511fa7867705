"""Absolute address resolution across a sequence of records."""

from dataclasses import dataclass, field, replace
from enum import Enum

from .record import Record, RecordType


class ResolverState(Enum):
    INIT = "init"
    AFTER_DATA = "after_data"
    AFTER_SEGMENT = "after_segment"
    AFTER_LINEAR = "after_linear"
    AFTER_EOF = "after_eof"


LABELS = {
    RecordType.DATA: "DATA",
    RecordType.END_OF_FILE: "END-OF-FILE",
    RecordType.EXTENDED_SEGMENT_ADDRESS: "EXTENDED SEGMENT ADDRESS",
    RecordType.EXTENDED_LINEAR_ADDRESS: "EXTENDED LINEAR ADDRESS",
    RecordType.START_LINEAR_ADDRESS: "START LINEAR ADDRESS",
}


@dataclass(frozen=True)
class AddressingContext:
    """Addressing state for one scan. Create a fresh one per file."""

    base_address: int = 0
    state: ResolverState = ResolverState.INIT


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one record."""

    record: Record
    context: AddressingContext
    base_address: int
    absolute_address: int | None = None

    @property
    def label(self) -> str:
        return LABELS[self.record.record_type]

    @property
    def is_extended(self) -> bool:
        return self.record.record_type in (
            RecordType.EXTENDED_SEGMENT_ADDRESS,
            RecordType.EXTENDED_LINEAR_ADDRESS,
        )


SEGMENT_WEIGHTS = (0x1000, 0x10)
LINEAR_WEIGHTS = (0x1000000, 0x10000)


def _extended_address(record: Record, base: int, weights: tuple[int, int]) -> int | None:
    # Needs both offset bytes; a shorter record still validates
    if len(record.data) < 2:
        return None
    hi, lo = record.data[0], record.data[1]
    return (base + hi * weights[0] + lo * weights[1]) & 0xFFFFFFFF


def resolve_address(record: Record, context: AddressingContext) -> Resolution:
    """Resolve one validated record against the current context.

    - Data: base address becomes the record's own address.
    - Extended Segment Address: base + data[0] * 0x1000 + data[1] * 0x10
    - Extended Linear Address: base + data[0] * 0x1000000 + data[1] * 0x10000
    - End-Of-File: terminal marker, no address.

    Extended records leave the base address untouched. One carrying fewer
    than two data bytes resolves to no absolute address.
    """
    base = context.base_address
    rtype = record.record_type

    if rtype == RecordType.DATA:
        updated = AddressingContext(record.address, ResolverState.AFTER_DATA)
        return Resolution(record, updated, record.address, record.address)

    if rtype == RecordType.EXTENDED_SEGMENT_ADDRESS:
        absolute = _extended_address(record, base, SEGMENT_WEIGHTS)
        updated = replace(context, state=ResolverState.AFTER_SEGMENT)
        return Resolution(record, updated, base, absolute)

    if rtype == RecordType.EXTENDED_LINEAR_ADDRESS:
        absolute = _extended_address(record, base, LINEAR_WEIGHTS)
        updated = replace(context, state=ResolverState.AFTER_LINEAR)
        return Resolution(record, updated, base, absolute)

    if rtype == RecordType.END_OF_FILE:
        updated = replace(context, state=ResolverState.AFTER_EOF)
        return Resolution(record, updated, base)

    # Start Linear Address: accepted but not interpreted
    return Resolution(record, context, base)


@dataclass
class AddressResolver:
    """Threads an AddressingContext through the records of one scan."""

    context: AddressingContext = field(default_factory=AddressingContext)

    def feed(self, record: Record) -> Resolution:
        resolution = resolve_address(record, self.context)
        self.context = resolution.context
        return resolution
