"""
SCSI VPD Page Dispatcher

Fetches a VPD page through a caller supplied fetcher and routes it to the
first decoder in a chain that recognises it.

Decoding is two-phase: the page is fetched first (phase one yields a
VpdPage carrying the peripheral device type), then decoded. Page codes B0h
and B1h mean different things for different device types, so their decode
routine can only be chosen after the fetch.

Decoder chain, tried in order until one does not raise UnsupportedPageError:
    1. StandardPageDecoder - pages defined by SPC/SBC/SSC/SAT
    2. VendorPageDecoder - caller registered vendor specific decoders
    3. RawPageDecoder - hex dump, always succeeds

References:
- SPC-4 Section 6.4 "INQUIRY command"
- SPC-4 Section 7.8 "Vital product data parameters"
"""

import logging
from typing import Any, Callable, Protocol

from .exceptions import MalformedPageError, UnsupportedPageError
from .models import DecodedPage, DecodeOptions, HexDumpRecord, VpdPage
from .parsers import (
    AtaInformationParser,
    BaseParser,
    BlockDeviceCharacteristicsParser,
    BlockLimitsParser,
    DeviceIdParser,
    ExtendedInquiryDataParser,
    ManagementNetworkAddressesParser,
    ManufacturerSerialNumberParser,
    ModePagePolicyParser,
    ProtocolSpecificParser,
    ScsiPortsParser,
    SequentialAccessCapabilitiesParser,
    SoftwareInterfaceIdParser,
    SupportedPagesParser,
    UnitSerialNumberParser,
)
from .protocol import (
    DEF_ALLOC_LEN,
    MX_ALLOC_LEN,
    PDT_ADC,
    PDT_BLOCK_LIKE,
    PDT_TAPE_LIKE,
    VPD_ATA_INFO,
    VPD_ATA_INFO_LEN,
    VPD_BAD_RESPONSE_DUMP_LEN,
    VPD_DEVICE_ID,
    VPD_DI_SEL_AS_IS,
    VPD_EXT_INQ,
    VPD_HEADER_LEN,
    VPD_MAN_NET_ADDR,
    VPD_MODE_PG_POLICY,
    VPD_PROTO_LU,
    VPD_PROTO_PORT,
    VPD_SCSI_PORTS,
    VPD_SOFTW_INF_ID,
    VPD_SUPPORTED_VPDS,
    VPD_UNIT_SERIAL_NUM,
    find_page_info,
    hex_dump,
)

# A page decode routine: (page, subvalue, options) -> output records
PageDecodeFunc = Callable[[VpdPage, int, DecodeOptions], list[Any]]


class PageFetcher(Protocol):
    """Transport collaborator issuing INQUIRY with EVPD=1."""

    def fetch_page(self, page_code: int, alloc_len: int) -> bytes:
        """
        Return the raw response for page_code, at most alloc_len bytes.

        Failures are raised as any exception (VPDFetchError preferred) and
        reach the caller of VPDDecoder.decode_page unchanged.
        """
        ...


class StandardPageDecoder:
    """Decoder for the standard VPD pages."""

    name = "standard"

    def __init__(self):
        self._pages: dict[int, PageDecodeFunc] = {
            VPD_SUPPORTED_VPDS: lambda page, sub, opts: SupportedPagesParser.parse(page),
            VPD_UNIT_SERIAL_NUM: lambda page, sub, opts: UnitSerialNumberParser.parse(page),
            VPD_DEVICE_ID: self._decode_device_id,
            VPD_SOFTW_INF_ID: lambda page, sub, opts: SoftwareInterfaceIdParser.parse(page),
            VPD_MAN_NET_ADDR: lambda page, sub, opts: ManagementNetworkAddressesParser.parse(page),
            VPD_EXT_INQ: lambda page, sub, opts: ExtendedInquiryDataParser.parse(page),
            VPD_MODE_PG_POLICY: lambda page, sub, opts: ModePagePolicyParser.parse(page),
            VPD_SCSI_PORTS: self._decode_scsi_ports,
            VPD_ATA_INFO: lambda page, sub, opts: AtaInformationParser.parse(page),
            VPD_PROTO_LU: lambda page, sub, opts: ProtocolSpecificParser.parse(page),
            VPD_PROTO_PORT: lambda page, sub, opts: ProtocolSpecificParser.parse(page),
            0xB0: self._decode_b0,
            0xB1: self._decode_b1,
        }

    def decode(self, page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        """
        Decode a standard page.

        Raises:
            UnsupportedPageError: page code (or page code and device type
                pair) is not a standard page this decoder knows
            MalformedPageError: page structure is inconsistent
        """
        handler = self._pages.get(page.page_code)
        if handler is None:
            raise UnsupportedPageError(f"No standard decoder for VPD page 0x{page.page_code:02x}",
                                       page_code=page.page_code, pdt=page.pdt)
        try:
            return handler(page, subvalue, options)
        except ValueError as e:
            raise MalformedPageError(f"VPD page 0x{page.page_code:02x}: {e}",
                                     page_code=page.page_code) from e

    @staticmethod
    def _decode_device_id(page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        return DeviceIdParser.parse_page(page.body, subvalue, long=options.long,
                                         quiet=options.quiet)

    @staticmethod
    def _decode_scsi_ports(page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        return ScsiPortsParser.parse_page(page.body, long=options.long, quiet=options.quiet)

    @staticmethod
    def _decode_b0(page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        if page.pdt in PDT_BLOCK_LIKE:
            return BlockLimitsParser.parse(page)
        if page.pdt in PDT_TAPE_LIKE:
            return SequentialAccessCapabilitiesParser.parse(page)
        raise UnsupportedPageError(f"Unable to decode VPD page 0xb0 for pdt=0x{page.pdt:x}",
                                   page_code=page.page_code, pdt=page.pdt)

    @staticmethod
    def _decode_b1(page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        if page.pdt in PDT_BLOCK_LIKE:
            return BlockDeviceCharacteristicsParser.parse(page)
        if page.pdt in PDT_TAPE_LIKE or page.pdt == PDT_ADC:
            return ManufacturerSerialNumberParser.parse(page)
        raise UnsupportedPageError(f"Unable to decode VPD page 0xb1 for pdt=0x{page.pdt:x}",
                                   page_code=page.page_code, pdt=page.pdt)


class VendorPageDecoder:
    """
    Registry of vendor specific page decoders.

    Example:
        vendor = VendorPageDecoder()
        vendor.register(0xC0, decode_firmware_numbers)
        decoder = VPDDecoder(fetcher, vendor_decoder=vendor)
    """

    name = "vendor"

    def __init__(self, decoders: dict[int, PageDecodeFunc] | None = None):
        self._decoders: dict[int, PageDecodeFunc] = dict(decoders or {})

    def register(self, page_code: int, func: PageDecodeFunc) -> None:
        self._decoders[page_code] = func

    def decode(self, page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        func = self._decoders.get(page.page_code)
        if func is None:
            raise UnsupportedPageError(f"No vendor decoder for VPD page 0x{page.page_code:02x}",
                                       page_code=page.page_code, pdt=page.pdt)
        return func(page, subvalue, options)


class RawPageDecoder:
    """Last resort: the whole page as a hex dump."""

    name = "raw"

    def decode(self, page: VpdPage, subvalue: int, options: DecodeOptions) -> list[Any]:
        return [HexDumpRecord(page.data, "Only hex output supported")]


class VPDDecoder:
    """
    SCSI VPD page decoder

    Owns no device state; every decode_page() call fetches and decodes its
    own buffer, so one instance may serve concurrent callers.

    Example:
        decoder = VPDDecoder(fetcher)
        page = decoder.decode_page(VPD_DEVICE_ID, options=DecodeOptions(quiet=True))
        for line in render_text(page):
            print(line)
    """

    def __init__(self, fetcher: PageFetcher, max_alloc_len: int = MX_ALLOC_LEN,
                 vendor_decoder: VendorPageDecoder | None = None):
        """
        Initialize VPD decoder.

        Args:
            fetcher: transport collaborator providing fetch_page()
            max_alloc_len: largest allocation length a re-fetch may use
            vendor_decoder: vendor specific decoders tried after the
                standard ones
        """
        self.fetcher = fetcher
        self.max_alloc_len = max_alloc_len
        self.handlers = [
            StandardPageDecoder(),
            vendor_decoder if vendor_decoder is not None else VendorPageDecoder(),
            RawPageDecoder(),
        ]
        self._logger = logging.getLogger(__name__)

    def fetch_page(self, page_code: int, options: DecodeOptions | None = None) -> VpdPage:
        """
        Phase one: fetch a VPD page and validate its header.

        The page is fetched with the default allocation length (572 bytes
        for the ATA information page) and fetched again with a larger one
        if its declared length does not fit.

        Args:
            page_code: VPD page code
            options: decode options; verbose enables the bad response dump

        Returns:
            VpdPage whose data is exactly header plus declared length

        Raises:
            MalformedPageError: page code echo mismatch, declared length
                above max_alloc_len, or response shorter than declared
        """
        options = options or DecodeOptions()
        alloc_len = VPD_ATA_INFO_LEN if page_code == VPD_ATA_INFO else DEF_ALLOC_LEN
        alloc_len = min(alloc_len, self.max_alloc_len)

        self._logger.debug(f"Fetching VPD page 0x{page_code:02x}, alloc_len={alloc_len}")
        response = bytes(self.fetcher.fetch_page(page_code, alloc_len))
        self._check_response(page_code, response, options)

        total = VPD_HEADER_LEN + BaseParser.be16(response, 2)
        if total > self.max_alloc_len:
            message = f"response length too long: {total} > {self.max_alloc_len}"
            self._logger.warning(message)
            raise MalformedPageError(message, page_code=page_code)

        if total > len(response) and total > alloc_len:
            self._logger.debug(f"Re-fetching VPD page 0x{page_code:02x}, alloc_len={total}")
            response = bytes(self.fetcher.fetch_page(page_code, total))
            self._check_response(page_code, response, options)

        if len(response) < total:
            message = (f"VPD page 0x{page_code:02x} response shorter than declared: "
                       f"{len(response)} < {total}")
            self._logger.warning(message)
            raise MalformedPageError(message, page_code=page_code, offset=len(response))

        return VpdPage(
            page_code=response[1],
            peripheral_qualifier=(response[0] >> 5) & 0x07,
            peripheral_device_type=response[0] & 0x1F,
            declared_length=total - VPD_HEADER_LEN,
            data=response[:total],
        )

    def _check_response(self, page_code: int, response: bytes, options: DecodeOptions) -> None:
        if len(response) < VPD_HEADER_LEN:
            message = f"VPD page 0x{page_code:02x} response too short: {len(response)} bytes"
            self._logger.warning(message)
            raise MalformedPageError(message, page_code=page_code, offset=0)
        if response[1] != page_code:
            head = response[:VPD_BAD_RESPONSE_DUMP_LEN]
            self._logger.warning("invalid VPD response; probably a STANDARD INQUIRY response")
            if options.verbose:
                self._logger.warning("First 32 bytes of bad response\n" + "\n".join(hex_dump(head)))
            raise MalformedPageError(
                f"VPD page code echo mismatch: requested 0x{page_code:02x}, got 0x{response[1]:02x}",
                page_code=page_code,
                response_head=head,
            )

    def decode_page(self, page_code: int, subvalue: int = 0, pdt_hint: int | None = None,
                    options: DecodeOptions | None = None) -> DecodedPage:
        """
        Fetch and decode one VPD page.

        Args:
            page_code: VPD page code (0-255)
            subvalue: page specific selector; for the Device Identification
                page the association selection (see DeviceIdParser)
            pdt_hint: peripheral device type expected, used for the page
                name before the response is known
            options: decode options

        Returns:
            DecodedPage with the structured output records

        Raises:
            MalformedPageError: page structure invalid; records holds any
                output decoded before the failure
            Exception: whatever the fetcher raises, unchanged
        """
        options = options or DecodeOptions()
        info = find_page_info(page_code, subvalue, pdt_hint)
        page = self.fetch_page(page_code, options)
        if pdt_hint != page.pdt:
            info = find_page_info(page_code, subvalue, page.pdt)

        if info is not None:
            title = f"{info.name} VPD page"
        elif subvalue:
            title = f"VPD page code=0x{page_code:02x}, subvalue=0x{subvalue:02x}"
        else:
            title = f"VPD page code=0x{page_code:02x}"

        for handler in self.handlers:
            try:
                records = handler.decode(page, subvalue, options)
            except UnsupportedPageError as e:
                self._logger.debug(f"{handler.name} decoder: {e}")
                continue
            except MalformedPageError as e:
                if e.page_code is None:
                    e.page_code = page_code
                raise
            return DecodedPage(
                page=page,
                title=title,
                records=records,
                info=info,
                abridged=options.quiet and page_code in (VPD_DEVICE_ID, VPD_SCSI_PORTS),
                as_is=page_code == VPD_DEVICE_ID and subvalue == VPD_DI_SEL_AS_IS,
                decoder=handler.name,
            )
        raise UnsupportedPageError(f"No decoder for VPD page 0x{page_code:02x}",
                                   page_code=page_code, pdt=page.pdt)
