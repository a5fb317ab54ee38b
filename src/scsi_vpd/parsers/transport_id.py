"""
TransportID decoder.

Transport IDs identify initiator ports, typically other than the one
issuing the command. They appear in the SCSI Ports VPD page (88h) and share
their layout with the persistent reservation commands.

Every TransportID is 24 bytes long except iSCSI ones, whose length is
4 + the additional length in bytes 2-3 (and never less than 24).

Byte 0: Format code (bits 7:6), protocol identifier (bits 3:0)

Reference: SPC-4 Section 7.5.4 "TransportID identifiers"
"""

import logging
from typing import Iterator

from ..models import (
    AdtTransportId,
    AtaPacketTransportId,
    FibreChannelTransportId,
    Ieee1394TransportId,
    IscsiNameTransportId,
    IscsiWwuidTransportId,
    ParallelScsiTransportId,
    SasTransportId,
    SrpTransportId,
    SsaTransportId,
    TransportId,
    UnknownTransportId,
)
from ..protocol.constants import TRANSPORT_ID_MIN_LEN
from ..protocol.types import ProtocolIdentifier
from .base import BaseParser

logger = logging.getLogger(__name__)


class TransportIdParser(BaseParser):
    """Parser for TransportID lists."""

    @classmethod
    def iter_transport_ids(cls, buffer: bytes) -> Iterator[TransportId]:
        """
        Yield the TransportIDs held in buffer, in order.

        A buffer shorter than 24 bytes or not a multiple of 4 is logged and
        still decoded as far as its bytes go; each record is then flagged
        short.

        Args:
            buffer: concatenated TransportIDs

        Yields:
            TransportId subclass instances
        """
        length = len(buffer)
        short = length < TRANSPORT_ID_MIN_LEN or length % 4 != 0
        if short:
            logger.warning(f"Transport Id short or not multiple of 4 [length={length}]")

        offset = 0
        while offset < length:
            record_len = TRANSPORT_ID_MIN_LEN
            format_code = (buffer[offset] >> 6) & 0x03
            protocol_id = buffer[offset] & 0x0F
            if protocol_id == ProtocolIdentifier.ISCSI:
                name_len = cls.be_int(buffer[offset + 2:offset + 4])
                record_len = max(TRANSPORT_ID_MIN_LEN, 4 + name_len)
            raw = bytes(buffer[offset:offset + record_len])
            yield cls.parse_record(raw, format_code, protocol_id, short)
            offset += record_len

    @classmethod
    def parse_record(cls, raw: bytes, format_code: int, protocol_id: int, short: bool) -> TransportId:
        """Decode one TransportID whose header fields were already extracted."""
        common = dict(format_code=format_code, protocol_id=protocol_id, raw=raw, short=short)

        if protocol_id == ProtocolIdentifier.FCP:
            tid = FibreChannelTransportId(wwn=raw[8:16], **common)
        elif protocol_id == ProtocolIdentifier.SPI:
            tid = ParallelScsiTransportId(address=cls.be_int(raw[2:4]),
                                          relative_port=cls.be_int(raw[6:8]), **common)
        elif protocol_id == ProtocolIdentifier.SSA:
            tid = SsaTransportId(**common)
        elif protocol_id == ProtocolIdentifier.IEEE_1394:
            tid = Ieee1394TransportId(eui64=raw[8:16], **common)
        elif protocol_id == ProtocolIdentifier.SRP:
            tid = SrpTransportId(initiator_port_id=raw[8:24], **common)
        elif protocol_id == ProtocolIdentifier.ISCSI:
            tid = cls._parse_iscsi(raw, common)
        elif protocol_id == ProtocolIdentifier.SAS:
            tid = SasTransportId(sas_address=cls.be_int(raw[4:12]), **common)
        elif protocol_id == ProtocolIdentifier.ADT:
            tid = AdtTransportId(**common)
        elif protocol_id == ProtocolIdentifier.ATA:
            tid = AtaPacketTransportId(**common)
        else:
            logger.warning(f"unknown protocol id=0x{protocol_id:x}  format_code={format_code}")
            tid = UnknownTransportId(**common)

        if tid.unexpected_format_code:
            logger.warning(f"Unexpected format code {format_code} for protocol id 0x{protocol_id:x}")
        return tid

    @classmethod
    def _parse_iscsi(cls, raw: bytes, common: dict) -> TransportId:
        name_len = cls.be_int(raw[2:4])
        name = cls.extract_cstring(raw[4:4 + name_len], 'utf-8')
        format_code = common['format_code']
        if format_code == 0:
            return IscsiNameTransportId(name=name, **common)
        if format_code == 1:
            return IscsiWwuidTransportId(name=name, **common)
        logger.warning(f"iSCSI Transport Id with unexpected format code: {format_code}")
        return UnknownTransportId(**common)


def iter_transport_ids(buffer: bytes) -> Iterator[TransportId]:
    """Lazily decode the TransportIDs in buffer; see TransportIdParser."""
    return TransportIdParser.iter_transport_ids(buffer)
