"""
Designation descriptor iterator.

Walks a buffer of identification (designation) descriptors, the TLV list
found in the Device Identification page (83h) and in the target port
descriptor lists of the SCSI Ports page (88h).

Descriptor header:
    Byte 0: Protocol identifier (bits 7:4), code set (bits 3:0)
    Byte 1: PIV (bit 7), association (bits 5:4), designator type (bits 3:0)
    Byte 2: Reserved
    Byte 3: Designator length (n)
    Bytes 4..4+n-1: Designator

Reference: SPC-4 Section 7.8.6.1, Table 591 "Designation descriptor"
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Union

from ..exceptions import MalformedPageError
from ..models import IdentificationDescriptor
from ..protocol.constants import DESIGNATOR_HEADER_LEN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """A matching descriptor starts at offset."""
    offset: int


@dataclass(frozen=True)
class Exhausted:
    """No further matching descriptors."""
    pass


@dataclass(frozen=True)
class Malformed:
    """The descriptor at offset runs past the end of the buffer."""
    offset: int


EXHAUSTED = Exhausted()

ScanResult = Union[Found, Exhausted, Malformed]


def _matches(buffer: bytes, offset: int, assoc: int | None, desig_type: int | None,
             code_set: int | None) -> bool:
    if code_set is not None and (buffer[offset] & 0x0F) != code_set:
        return False
    if assoc is not None and ((buffer[offset + 1] >> 4) & 0x03) != assoc:
        return False
    if desig_type is not None and (buffer[offset + 1] & 0x0F) != desig_type:
        return False
    return True


def next_descriptor(buffer: bytes, length: int, cursor: int, assoc: int | None = None,
                    desig_type: int | None = None, code_set: int | None = None) -> ScanResult:
    """
    Find the next descriptor at or after cursor that matches every filter.

    Each descriptor passed over is bounds checked before its filters are
    applied, so a malformed descriptor is reported even when it would not
    have matched.

    Args:
        buffer: descriptor list
        length: number of valid bytes in buffer
        cursor: scan start; -1 before the first descriptor, otherwise the
            previous offset plus that descriptor's total length
        assoc: association filter, None for any
        desig_type: designator type filter, None for any
        code_set: code set filter, None for any

    Returns:
        Found(offset), EXHAUSTED, or Malformed(offset)
    """
    length = min(length, len(buffer))
    offset = 0 if cursor < 0 else cursor
    while offset < length:
        if offset + DESIGNATOR_HEADER_LEN > length:
            return Malformed(offset)
        total = DESIGNATOR_HEADER_LEN + buffer[offset + 3]
        if offset + total > length:
            return Malformed(offset)
        if _matches(buffer, offset, assoc, desig_type, code_set):
            return Found(offset)
        offset += total
    return EXHAUSTED


def parse_descriptor(buffer: bytes, offset: int) -> IdentificationDescriptor:
    """
    Parse the descriptor at offset.

    Only call with an offset returned in Found, which guarantees the whole
    descriptor lies inside the buffer.
    """
    b0 = buffer[offset]
    b1 = buffer[offset + 1]
    designator_len = buffer[offset + 3]
    start = offset + DESIGNATOR_HEADER_LEN
    return IdentificationDescriptor(
        offset=offset,
        protocol_id=(b0 >> 4) & 0x0F,
        code_set=b0 & 0x0F,
        piv=bool(b1 & 0x80),
        association=(b1 >> 4) & 0x03,
        designator_type=b1 & 0x0F,
        designator=bytes(buffer[start:start + designator_len]),
    )


def iter_descriptors(buffer: bytes, length: int | None = None, assoc: int | None = None,
                     desig_type: int | None = None, code_set: int | None = None,
                     page_code: int | None = None) -> Iterator[IdentificationDescriptor]:
    """
    Yield matching descriptors in buffer order.

    Raises:
        MalformedPageError: when a descriptor overruns the buffer; descriptors
            already yielded remain valid
    """
    if length is None:
        length = len(buffer)
    cursor = -1
    while True:
        result = next_descriptor(buffer, length, cursor, assoc, desig_type, code_set)
        if isinstance(result, Malformed):
            logger.warning(f"Designation descriptor at offset {result.offset} runs past "
                           f"end of buffer ({length} bytes)")
            raise MalformedPageError(
                f"Designation descriptor at offset {result.offset} exceeds buffer length {length}",
                page_code=page_code,
                offset=result.offset,
            )
        if isinstance(result, Exhausted):
            return
        descriptor = parse_descriptor(buffer, result.offset)
        yield descriptor
        cursor = result.offset + descriptor.total_length
