"""
Device Identification VPD page (83h) decoder.

Decodes designation descriptor lists in one of two modes:

Full mode yields a DesignatorRecord per descriptor carrying the decoded
designator (or a MalformedDesignator for the hex fallback).

Abridged mode yields only externally usable identifiers (EUI-64, NAA and
SCSI name strings). SAS target ports report their NAA-5 address and their
relative target port in separate descriptors; those are paired into a
single "address,port" identifier.

The same decoder handles the target port descriptor lists embedded in the
SCSI Ports page (88h).

Reference: SPC-4 Section 7.8.6 "Device Identification VPD page"
"""

import logging
from typing import Any

from ..exceptions import MalformedPageError
from ..models import (
    DesignatorRecord,
    HexDumpRecord,
    IdentifierRecord,
    Naa5Designator,
)
from ..protocol.constants import (
    VPD_DEVICE_ID,
    VPD_DI_SEL_AS_IS,
    VPD_DI_SEL_LU,
    VPD_DI_SEL_TARGET,
    VPD_DI_SEL_TPORT,
)
from ..protocol.types import Association, CodeSet, DesignatorType
from ..protocol.utils import hex_string
from .base import BaseParser
from .descriptors import iter_descriptors
from .designator import DesignatorParser

logger = logging.getLogger(__name__)

# Designator types that carry an externally usable identifier
ABRIDGED_TYPES = (
    DesignatorType.EUI64,
    DesignatorType.NAA,
    DesignatorType.SCSI_NAME_STRING,
)


class DeviceIdParser(BaseParser):
    """Parser for designation descriptor lists."""

    @staticmethod
    def association_passes(subvalue: int) -> list[int | None]:
        """
        Association filters to scan with, in order.

        Args:
            subvalue: 0 for every association in turn, VPD_DI_SEL_AS_IS for
                a single unfiltered pass, otherwise a VPD_DI_SEL_* bitmask

        Returns:
            List of association values; None means no association filter
        """
        if subvalue == 0:
            return [Association.LOGICAL_UNIT, Association.TARGET_PORT, Association.TARGET_DEVICE]
        if subvalue == VPD_DI_SEL_AS_IS:
            return [None]
        passes = []
        if subvalue & VPD_DI_SEL_LU:
            passes.append(Association.LOGICAL_UNIT)
        if subvalue & VPD_DI_SEL_TPORT:
            passes.append(Association.TARGET_PORT)
        if subvalue & VPD_DI_SEL_TARGET:
            passes.append(Association.TARGET_DEVICE)
        return passes

    @classmethod
    def parse_page(cls, body: bytes, subvalue: int = 0, long: bool = False, quiet: bool = False,
                   page_code: int = VPD_DEVICE_ID) -> list[Any]:
        """
        Decode the descriptor list of a Device Identification page.

        Args:
            body: page bytes following the 4 byte header
            subvalue: association selection, see association_passes()
            long: break designators out into their fields
            quiet: abridged mode
            page_code: page code reported on errors

        Returns:
            Output records from every association pass, in order

        Raises:
            MalformedPageError: descriptor overruns the page; records
                holds everything decoded before it
        """
        records: list[Any] = []
        for assoc in cls.association_passes(subvalue):
            try:
                if quiet:
                    records.extend(cls.parse_abridged(body, assoc, page_code=page_code))
                else:
                    records.extend(cls.parse_full(body, assoc, long, page_code=page_code))
            except MalformedPageError as e:
                e.records = records + e.records
                raise
        return records

    @classmethod
    def parse_full(cls, buffer: bytes, assoc: int | None = None, long: bool = False,
                   page_code: int | None = None) -> list[DesignatorRecord]:
        """Full mode: one DesignatorRecord per descriptor matching assoc."""
        records = []
        try:
            for descriptor in iter_descriptors(buffer, assoc=assoc, page_code=page_code):
                records.append(DesignatorRecord(
                    offset=descriptor.offset,
                    association=descriptor.association,
                    designator_type=descriptor.designator_type,
                    code_set=descriptor.code_set,
                    transport_protocol=descriptor.protocol_id if descriptor.shows_transport else None,
                    designator=DesignatorParser.parse(descriptor, long=long),
                ))
        except MalformedPageError as e:
            e.records = records
            raise
        return records

    @classmethod
    def parse_abridged(cls, buffer: bytes, assoc: int | None = None,
                       page_code: int | None = None) -> list[IdentifierRecord | HexDumpRecord]:
        """
        Abridged mode: identifiers only, SAS port addresses paired with ports.

        The pairing state lives for one call. An address still waiting for
        its relative port when the list ends is emitted alone; a relative
        port that never sees its address is dropped.
        """
        records: list[IdentifierRecord | HexDumpRecord] = []
        sas_tport_addr: str | None = None
        rtp: int | None = None

        try:
            for descriptor in iter_descriptors(buffer, assoc=assoc, page_code=page_code):
                desig_type = descriptor.designator_type

                if desig_type == DesignatorType.RELATIVE_TARGET_PORT:
                    if not (descriptor.is_sas and descriptor.code_set == CodeSet.BINARY
                            and descriptor.association == Association.TARGET_PORT
                            and descriptor.designator_len == 4):
                        continue
                    rtp = cls.be16(descriptor.designator, 2)
                    if sas_tport_addr is not None:
                        records.append(IdentifierRecord(sas_tport_addr, rtp))
                        sas_tport_addr = None
                        rtp = None
                    continue

                if desig_type not in ABRIDGED_TYPES:
                    continue

                designator = DesignatorParser.parse(descriptor)
                if desig_type == DesignatorType.EUI64:
                    # Unexpected EUI-64 lengths are still usable identifiers
                    records.append(IdentifierRecord(hex_string(designator.raw)))
                    continue
                if not designator.prerequisites_met:
                    records.append(HexDumpRecord(designator.raw, designator.reason))
                    continue
                if desig_type == DesignatorType.SCSI_NAME_STRING:
                    records.append(IdentifierRecord(designator.name))
                    continue

                # NAA
                if not (isinstance(designator, Naa5Designator) and descriptor.is_sas
                        and descriptor.association == Association.TARGET_PORT):
                    records.append(IdentifierRecord(designator.compact_hex))
                elif rtp is not None:
                    records.append(IdentifierRecord(designator.compact_hex, rtp))
                    rtp = None
                else:
                    if sas_tport_addr is not None:
                        records.append(IdentifierRecord(sas_tport_addr))
                    sas_tport_addr = designator.compact_hex
        except MalformedPageError as e:
            if sas_tport_addr is not None:
                records.append(IdentifierRecord(sas_tport_addr))
            e.records = records
            raise

        if sas_tport_addr is not None:
            records.append(IdentifierRecord(sas_tport_addr))
        return records

