"""
Decoders for the simpler standard VPD pages.

Each parser takes a VpdPage (whose data is the whole page, 4 byte header
included, so offsets below match the standard's byte numbering) and returns
the page's output records.

References:
- SPC-4 Section 7.8.15 "Supported VPD pages"
- SPC-4 Section 7.8.16 "Unit Serial Number VPD page"
- SPC-4 Section 7.8.14 "Software Interface Identification VPD page"
- SPC-4 Section 7.8.8 "Management Network Addresses VPD page"
- SPC-4 Section 7.8.7 "Extended INQUIRY Data VPD page"
- SPC-4 Section 7.8.9 "Mode Page Policy VPD page"
- SPC-4 Sections 7.8.11-12 "Protocol Specific Logical Unit/Port Information"
"""

import logging

from ..exceptions import MalformedPageError
from ..models import (
    ExtendedInquiryData,
    ModePagePolicyDescriptor,
    NetworkAddress,
    ProtocolSpecificDescriptor,
    SoftwareInterfaceId,
    SupportedPage,
    UnitSerialNumber,
    VpdPage,
)
from ..protocol.constants import (
    VPD_EXT_INQ,
    VPD_HEADER_LEN,
    VPD_MAN_NET_ADDR,
    VPD_MODE_PG_POLICY,
    VPD_PROTO_LU,
)
from ..protocol.page_table import ANY, find_page_info
from ..protocol.types import ProtocolIdentifier
from .base import BaseParser

logger = logging.getLogger(__name__)


class SupportedPagesParser(BaseParser):
    """Supported VPD pages (00h): one page code per byte."""

    @classmethod
    def parse(cls, page: VpdPage) -> list[SupportedPage]:
        return [SupportedPage(page_code=code,
                              info=find_page_info(code, ANY, page.pdt))
                for code in page.body]


class UnitSerialNumberParser(BaseParser):
    """Unit serial number (80h): ASCII, right aligned and space padded."""

    @classmethod
    def parse(cls, page: VpdPage) -> list[UnitSerialNumber]:
        serial = cls.extract_cstring(page.body).rstrip(' ')
        return [UnitSerialNumber(serial_number=serial)]


class SoftwareInterfaceIdParser(BaseParser):
    """Software interface identification (84h): list of 6 byte identifiers."""

    ID_LEN = 6

    @classmethod
    def parse(cls, page: VpdPage) -> list[SoftwareInterfaceId]:
        body = page.body
        usable = len(body) - len(body) % cls.ID_LEN
        if usable != len(body):
            logger.warning(f"Software interface identification page has "
                           f"{len(body) - usable} trailing bytes")
        return [SoftwareInterfaceId(identifier=body[k:k + cls.ID_LEN])
                for k in range(0, usable, cls.ID_LEN)]


class ManagementNetworkAddressesParser(BaseParser):
    """
    Management network addresses (85h).

    Network service descriptor:
        Byte 0: Association (bits 6:5), service type (bits 4:0)
        Bytes 2-3: Network address length (n)
        Bytes 4..4+n-1: Network address, null terminated and padded
    """

    @classmethod
    def parse(cls, page: VpdPage) -> list[NetworkAddress]:
        body = page.body
        records = []
        k = 0
        while k < len(body):
            if k + 4 > len(body):
                bump = 4
            else:
                bump = 4 + cls.be16(body, k + 2)
            if k + bump > len(body):
                message = (f"Management network addresses VPD page, short descriptor "
                           f"length={bump}, left={len(body) - k}")
                logger.warning(message)
                raise MalformedPageError(message, page_code=VPD_MAN_NET_ADDR,
                                         offset=VPD_HEADER_LEN + k, records=records)
            address = body[k + 4:k + bump]
            records.append(NetworkAddress(
                association=(body[k] >> 5) & 0x03,
                service_type=body[k] & 0x1F,
                address=cls.extract_cstring(address),
                raw=address,
            ))
            k += bump
        return records


class ExtendedInquiryDataParser(BaseParser):
    """Extended INQUIRY data (86h)."""

    MIN_LEN = 8

    @classmethod
    def parse(cls, page: VpdPage) -> list[ExtendedInquiryData]:
        buff = page.data
        cls.require_length(buff, cls.MIN_LEN, VPD_EXT_INQ, "Extended INQUIRY data VPD page")
        return [ExtendedInquiryData(
            spt=(buff[4] >> 3) & 0x07,
            grd_chk=bool(buff[4] & 0x04),
            app_chk=bool(buff[4] & 0x02),
            ref_chk=bool(buff[4] & 0x01),
            grp_sup=bool(buff[5] & 0x10),
            prior_sup=bool(buff[5] & 0x08),
            headsup=bool(buff[5] & 0x04),
            ordsup=bool(buff[5] & 0x02),
            simpsup=bool(buff[5] & 0x01),
            corr_d_sup=bool(buff[6] & 0x04),
            nv_sup=bool(buff[6] & 0x02),
            v_sup=bool(buff[6] & 0x01),
            luiclr=bool(buff[7] & 0x01),
        )]


class ModePagePolicyParser(BaseParser):
    """Mode page policy (87h): 4 byte descriptors."""

    DESCRIPTOR_LEN = 4

    @classmethod
    def parse(cls, page: VpdPage) -> list[ModePagePolicyDescriptor]:
        body = page.body
        records = []
        for k in range(0, len(body), cls.DESCRIPTOR_LEN):
            if k + cls.DESCRIPTOR_LEN > len(body):
                message = (f"Mode page policy VPD page, short descriptor "
                           f"length={cls.DESCRIPTOR_LEN}, left={len(body) - k}")
                logger.warning(message)
                raise MalformedPageError(message, page_code=VPD_MODE_PG_POLICY,
                                         offset=VPD_HEADER_LEN + k, records=records)
            records.append(ModePagePolicyDescriptor(
                policy_page_code=body[k] & 0x3F,
                policy_subpage_code=body[k + 1],
                mlus=bool(body[k + 2] & 0x80),
                policy=body[k + 2] & 0x03,
            ))
        return records


class ProtocolSpecificParser(BaseParser):
    """
    Protocol-specific logical unit (90h) and port (91h) information.

    Descriptor:
        Bytes 0-1: Relative port identifier
        Byte 2: Protocol identifier (bits 3:0)
        Bytes 6-7: Descriptor length (n)
        Bytes 8..8+n-1: Protocol specific data
    """

    @classmethod
    def parse(cls, page: VpdPage) -> list[ProtocolSpecificDescriptor]:
        body = page.body
        records = []
        k = 0
        while k < len(body):
            bump = 8 if k + 8 > len(body) else 8 + cls.be16(body, k + 6)
            if k + bump > len(body):
                message = (f"Protocol-specific VPD page 0x{page.page_code:x}, short "
                           f"descriptor length={bump}, left={len(body) - k}")
                logger.warning(message)
                raise MalformedPageError(message, page_code=page.page_code,
                                         offset=VPD_HEADER_LEN + k, records=records)
            protocol_id = body[k + 2] & 0x0F
            data = body[k + 8:k + bump]
            tlr = None
            if data:
                if page.page_code == VPD_PROTO_LU and protocol_id == ProtocolIdentifier.SAS:
                    tlr = bool(data[0] & 0x01)
                else:
                    logger.warning(f"Unexpected proto={protocol_id} in page 0x{page.page_code:x}")
            records.append(ProtocolSpecificDescriptor(
                relative_port=cls.be16(body, k),
                protocol_id=protocol_id,
                data=data,
                tlr_control_supported=tlr,
            ))
            k += bump
        return records
