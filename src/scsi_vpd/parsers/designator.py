"""
Designator parser.

Decodes the designator bytes of one designation descriptor according to
its designator type. A designator whose code set, association or length
prerequisite is not met is returned as a MalformedDesignator so callers can
fall back to a hex dump and carry on with the next descriptor.

Reference: SPC-4 Section 7.8.6 "Device Identification VPD page"
"""

import logging

from ..models import (
    Designator,
    Eui64Designator,
    IdentificationDescriptor,
    LogicalUnitGroupDesignator,
    MalformedDesignator,
    Md5LogicalUnitDesignator,
    Naa2Designator,
    Naa5Designator,
    Naa6Designator,
    RelativeTargetPortDesignator,
    ReservedDesignator,
    ScsiNameStringDesignator,
    T10VendorIdDesignator,
    TargetPortGroupDesignator,
    VendorSpecificDesignator,
)
from ..protocol.types import Association, CodeSet, DesignatorType, NAAFormat
from .base import BaseParser

logger = logging.getLogger(__name__)

# Designator length required by each NAA format
NAA_LENGTHS = {
    NAAFormat.IEEE_EXTENDED: 8,
    NAAFormat.IEEE_REGISTERED: 8,
    NAAFormat.IEEE_REGISTERED_EXTENDED: 16,
}

EUI64_LENGTHS = (8, 12, 16)


class DesignatorParser(BaseParser):
    """Parser for designators of the Device Identification VPD page."""

    @classmethod
    def parse(cls, descriptor: IdentificationDescriptor, long: bool = False) -> Designator:
        """
        Decode a designator.

        Args:
            descriptor: parsed designation descriptor
            long: long output requested; EUI-64 designators are then also
                checked for the binary code set

        Returns:
            A Designator subclass, MalformedDesignator if a prerequisite
            failed
        """
        handler = cls._HANDLERS.get(descriptor.designator_type)
        if handler is None:
            return ReservedDesignator(raw=descriptor.designator,
                                      designator_type=descriptor.designator_type)
        return getattr(cls, handler)(descriptor, long)

    @staticmethod
    def _malformed(descriptor: IdentificationDescriptor, reason: str) -> MalformedDesignator:
        logger.warning(f"Designator at offset {descriptor.offset}: {reason}")
        return MalformedDesignator(raw=descriptor.designator,
                                   designator_type=descriptor.designator_type,
                                   reason=reason)

    @classmethod
    def _parse_vendor_specific(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        return VendorSpecificDesignator(raw=descriptor.designator)

    @classmethod
    def _parse_t10_vendor_id(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        ip = descriptor.designator
        return T10VendorIdDesignator(
            raw=ip,
            vendor_id=cls.extract_cstring(ip[:8]),
            vendor_specific=cls.extract_cstring(ip[8:]),
        )

    @classmethod
    def _parse_eui64(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        ip = descriptor.designator
        i_len = len(ip)
        if long and descriptor.code_set != CodeSet.BINARY:
            return cls._malformed(descriptor, "expected binary code_set (1)")
        if i_len not in EUI64_LENGTHS:
            return cls._malformed(descriptor, f"expect 8, 12 and 16 byte ids, got {i_len}")

        ci_off = 0
        identifier_extension = None
        if i_len == 16:
            ci_off = 8
            identifier_extension = cls.be64(ip, 0)
        directory_id = cls.be32(ip, 8) if i_len == 12 else None

        return Eui64Designator(
            raw=ip,
            company_id=cls.be_int(ip[ci_off:ci_off + 3]),
            vendor_specific_extension_id=cls.be_int(ip[ci_off + 3:ci_off + 8]),
            identifier_extension=identifier_extension,
            directory_id=directory_id,
        )

    @classmethod
    def _parse_naa(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        ip = descriptor.designator
        if descriptor.code_set != CodeSet.BINARY:
            return cls._malformed(descriptor, f"unexpected code set {descriptor.code_set} for NAA")
        if not ip:
            return cls._malformed(descriptor, "empty NAA designator")

        naa = ip[0] >> 4
        if naa not in NAA_LENGTHS:
            return cls._malformed(descriptor, f"unexpected NAA [0x{naa:x}]")
        if len(ip) != NAA_LENGTHS[naa]:
            return cls._malformed(descriptor,
                                  f"unexpected NAA {naa} identifier length: 0x{len(ip):x}")

        if naa == NAAFormat.IEEE_EXTENDED:
            return Naa2Designator(
                raw=ip,
                vendor_specific_id_a=((ip[0] & 0x0F) << 8) | ip[1],
                company_id=cls.be_int(ip[2:5]),
                vendor_specific_id_b=cls.be_int(ip[5:8]),
            )

        # NAA 5 and 6: 24 bit company id straddles nibble boundaries
        company_id = (((ip[0] & 0x0F) << 20) | (ip[1] << 12) | (ip[2] << 4) | (ip[3] >> 4))
        vendor_specific_id = ((ip[3] & 0x0F) << 32) | cls.be32(ip, 4)
        if naa == NAAFormat.IEEE_REGISTERED:
            return Naa5Designator(raw=ip, company_id=company_id,
                                  vendor_specific_id=vendor_specific_id)
        return Naa6Designator(raw=ip, company_id=company_id,
                              vendor_specific_id=vendor_specific_id,
                              vendor_specific_extension=cls.be64(ip, 8))

    @classmethod
    def _check_port_style(cls, descriptor: IdentificationDescriptor, association: int) -> str | None:
        """Binary code set, given association and length 4, or the failure reason."""
        if (descriptor.code_set != CodeSet.BINARY or descriptor.association != association
                or len(descriptor.designator) != 4):
            if association == Association.TARGET_PORT:
                return "expected binary code_set, target port association, length 4"
            return "expected binary code_set, logical unit association, length 4"
        return None

    @classmethod
    def _parse_relative_target_port(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        reason = cls._check_port_style(descriptor, Association.TARGET_PORT)
        if reason:
            return cls._malformed(descriptor, reason)
        return RelativeTargetPortDesignator(raw=descriptor.designator,
                                            port=cls.be16(descriptor.designator, 2))

    @classmethod
    def _parse_target_port_group(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        reason = cls._check_port_style(descriptor, Association.TARGET_PORT)
        if reason:
            return cls._malformed(descriptor, reason)
        return TargetPortGroupDesignator(raw=descriptor.designator,
                                         group=cls.be16(descriptor.designator, 2))

    @classmethod
    def _parse_logical_unit_group(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        reason = cls._check_port_style(descriptor, Association.LOGICAL_UNIT)
        if reason:
            return cls._malformed(descriptor, reason)
        return LogicalUnitGroupDesignator(raw=descriptor.designator,
                                          group=cls.be16(descriptor.designator, 2))

    @classmethod
    def _parse_md5(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        if descriptor.code_set != CodeSet.BINARY or descriptor.association != Association.LOGICAL_UNIT:
            return cls._malformed(descriptor, "expected binary code_set, logical unit association")
        return Md5LogicalUnitDesignator(raw=descriptor.designator)

    @classmethod
    def _parse_scsi_name_string(cls, descriptor: IdentificationDescriptor, long: bool) -> Designator:
        if descriptor.code_set != CodeSet.UTF8:
            return cls._malformed(descriptor, "expected UTF-8 code_set")
        return ScsiNameStringDesignator(raw=descriptor.designator,
                                        name=cls.extract_cstring(descriptor.designator, 'utf-8'))

    _HANDLERS = {
        DesignatorType.VENDOR_SPECIFIC: "_parse_vendor_specific",
        DesignatorType.T10_VENDOR_ID: "_parse_t10_vendor_id",
        DesignatorType.EUI64: "_parse_eui64",
        DesignatorType.NAA: "_parse_naa",
        DesignatorType.RELATIVE_TARGET_PORT: "_parse_relative_target_port",
        DesignatorType.TARGET_PORT_GROUP: "_parse_target_port_group",
        DesignatorType.LOGICAL_UNIT_GROUP: "_parse_logical_unit_group",
        DesignatorType.MD5_LU_ID: "_parse_md5",
        DesignatorType.SCSI_NAME_STRING: "_parse_scsi_name_string",
    }
