"""
SCSI Ports VPD page (88h) decoder.

SCSI port designation descriptor:
    Bytes 0-1: Reserved
    Bytes 2-3: Relative port identifier
    Bytes 4-5: Reserved
    Bytes 6-7: Initiator port TransportID length (n)
    Bytes 8..8+n-1: Initiator port TransportID (optional)
    Bytes +0..+1: Reserved
    Bytes +2..+3: Target port descriptors length (m)
    Bytes +4..: Target port descriptors (designation descriptors)

Reference: SPC-4 Section 7.8.10, Tables 614-615
"""

import logging
from typing import NoReturn

from ..exceptions import MalformedPageError
from ..models import ScsiPort
from ..protocol.constants import VPD_SCSI_PORTS
from ..protocol.types import Association
from .base import BaseParser
from .device_id import DeviceIdParser
from .transport_id import iter_transport_ids

logger = logging.getLogger(__name__)

PORT_HEADER_LEN = 8
TARGET_PORT_HEADER_LEN = 4


class ScsiPortsParser(BaseParser):
    """Parser for the SCSI Ports VPD page."""

    @classmethod
    def parse_page(cls, body: bytes, long: bool = False, quiet: bool = False) -> list[ScsiPort]:
        """
        Decode every SCSI port designation descriptor.

        Target port descriptors are decoded like Device Identification
        designators restricted to the target port association.

        Args:
            body: page bytes following the 4 byte header
            long: break designators out into their fields
            quiet: abridged designator output

        Returns:
            List of ScsiPort

        Raises:
            MalformedPageError: a descriptor length runs past the page;
                records holds the ports decoded before it
        """
        ports: list[ScsiPort] = []
        length = len(body)
        k = 0
        while k < length:
            if k + PORT_HEADER_LEN > length:
                cls._short(ports, k, PORT_HEADER_LEN, length)
            rel_port = cls.be16(body, k + 2)
            ip_tid_len = cls.be16(body, k + 6)
            bump = PORT_HEADER_LEN + ip_tid_len
            if k + bump + TARGET_PORT_HEADER_LEN > length:
                cls._short(ports, k, bump, length)
            tpd_len = cls.be16(body, k + bump + 2)
            if k + bump + TARGET_PORT_HEADER_LEN + tpd_len > length:
                cls._short(ports, k, bump + TARGET_PORT_HEADER_LEN + tpd_len, length, "(tgt)")

            tid_data = body[k + PORT_HEADER_LEN:k + bump]
            tpd_start = k + bump + TARGET_PORT_HEADER_LEN
            tpd_data = body[tpd_start:tpd_start + tpd_len]
            port = ScsiPort(
                relative_port=rel_port,
                transport_ids=list(iter_transport_ids(tid_data)) if tid_data else [],
                initiator_transport_id_data=tid_data,
                target_port_descriptor_data=tpd_data,
            )
            try:
                if quiet:
                    port.target_port_records = DeviceIdParser.parse_abridged(
                        tpd_data, Association.TARGET_PORT, page_code=VPD_SCSI_PORTS)
                else:
                    port.target_port_records = DeviceIdParser.parse_full(
                        tpd_data, Association.TARGET_PORT, long, page_code=VPD_SCSI_PORTS)
            except MalformedPageError as e:
                port.target_port_records = e.records
                e.records = ports + [port]
                raise
            ports.append(port)
            k += bump + TARGET_PORT_HEADER_LEN + tpd_len
        return ports

    @staticmethod
    def _short(ports: list[ScsiPort], offset: int, needed: int, length: int, what: str = "") -> NoReturn:
        message = (f"SCSI Ports VPD page, short descriptor{what} length={needed}, "
                   f"left={length - offset}")
        logger.warning(message)
        raise MalformedPageError(message, page_code=VPD_SCSI_PORTS, offset=offset, records=ports)
