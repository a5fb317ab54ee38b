"""
SCSI VPD Data Models

Structured data classes for fetched VPD pages, identification designators,
transport IDs and the decoded output records of each page.
Provides type safety and clear interfaces instead of generic dictionaries.

References:
- SCSI Primary Commands 4 (SPC-4) Section 7.8 "Vital product data parameters"
- SPC-4 Section 7.5.4 "TransportID identifiers"
- SCSI Block Commands 3 (SBC-3) Section 6.5 "Vital product data parameters"
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .protocol.constants import VPD_HEADER_LEN
from .protocol.page_table import VpdPageInfo
from .protocol.types import (
    FORM_FACTOR_NAMES,
    Association,
    ProtocolIdentifier,
)
from .protocol.utils import hex_string


@dataclass
class DecodeOptions:
    """
    Caller supplied decode options.

    long: break designators out into their component fields
    quiet: abridged device identification output (identifiers only)
    verbose: diagnostic verbosity, >0 dumps rejected responses
    """
    long: bool = False
    quiet: bool = False
    verbose: int = 0


@dataclass
class VpdPage:
    """
    A VPD page as returned by INQUIRY with EVPD=1.

    Reference: SPC-4 Section 7.8.1, Table 586 "VPD page format"
    """

    page_code: int                  # Byte 1, echo of the requested page code
    peripheral_qualifier: int       # Byte 0 bits 7:5
    peripheral_device_type: int     # Byte 0 bits 4:0
    declared_length: int            # Bytes 2-3, page length (n-3)
    data: bytes                     # Full response, header included

    @property
    def length(self) -> int:
        """Total page length, header included."""
        return VPD_HEADER_LEN + self.declared_length

    @property
    def body(self) -> bytes:
        """Page payload following the 4 byte header."""
        return self.data[VPD_HEADER_LEN:self.length]

    @property
    def pdt(self) -> int:
        return self.peripheral_device_type


@dataclass
class IdentificationDescriptor:
    """
    One designation descriptor of a device identification style page.

    Reference: SPC-4 Section 7.8.6.1, Table 591 "Designation descriptor"
    """

    offset: int                     # Offset of byte 0 within the scanned buffer
    protocol_id: int                # Byte 0 bits 7:4
    code_set: int                   # Byte 0 bits 3:0
    piv: bool                       # Byte 1 bit 7, protocol identifier valid
    association: int                # Byte 1 bits 5:4
    designator_type: int            # Byte 1 bits 3:0
    designator: bytes               # Bytes 4..(4 + byte 3 - 1)

    @property
    def designator_len(self) -> int:
        return len(self.designator)

    @property
    def total_length(self) -> int:
        """Header plus designator, the distance to the next descriptor."""
        return 4 + len(self.designator)

    @property
    def is_sas(self) -> bool:
        """Protocol identifier is valid and names SAS."""
        return self.piv and self.protocol_id == ProtocolIdentifier.SAS

    @property
    def shows_transport(self) -> bool:
        """Protocol identifier applies (piv set, port or device association)."""
        return self.piv and self.association in (Association.TARGET_PORT, Association.TARGET_DEVICE)


# Designators
# Reference: SPC-4 Section 7.8.6, "Device Identification VPD page" designator formats

@dataclass
class Designator:
    """Base class for decoded designators; raw holds the designator bytes."""

    raw: bytes

    prerequisites_met: ClassVar[bool] = True

    @property
    def compact_hex(self) -> str:
        return hex_string(self.raw)


@dataclass
class VendorSpecificDesignator(Designator):
    """Designator type 0h."""
    pass


@dataclass
class T10VendorIdDesignator(Designator):
    """Designator type 1h: T10 vendor identification plus vendor specific data."""
    vendor_id: str                  # Bytes 0-7
    vendor_specific: str            # Bytes 8-n


@dataclass
class Eui64Designator(Designator):
    """
    Designator type 2h: EUI-64 based, 8, 12 or 16 bytes long.

    Reference: SPC-4 Section 7.8.6.5
    """
    company_id: int                         # IEEE company id (24 bits)
    vendor_specific_extension_id: int       # 40 bits following the company id
    identifier_extension: int | None        # EUI-64 based 16-byte: bytes 0-7
    directory_id: int | None                # EUI-64 based 12-byte: bytes 8-11


@dataclass
class NaaDesignator(Designator):
    """Designator type 3h base; concrete classes per NAA format."""

    @property
    def naa(self) -> int:
        return self.raw[0] >> 4


@dataclass
class Naa2Designator(NaaDesignator):
    """NAA IEEE Extended (2h), 8 bytes."""
    vendor_specific_id_a: int       # 12 bits
    company_id: int                 # 24 bits
    vendor_specific_id_b: int       # 24 bits


@dataclass
class Naa5Designator(NaaDesignator):
    """NAA IEEE Registered (5h), 8 bytes."""
    company_id: int                 # 24 bits
    vendor_specific_id: int         # 36 bits


@dataclass
class Naa6Designator(NaaDesignator):
    """NAA IEEE Registered Extended (6h), 16 bytes."""
    company_id: int                 # 24 bits
    vendor_specific_id: int         # 36 bits
    vendor_specific_extension: int  # Bytes 8-15


@dataclass
class RelativeTargetPortDesignator(Designator):
    """Designator type 4h."""
    port: int                       # Bytes 2-3


@dataclass
class TargetPortGroupDesignator(Designator):
    """Designator type 5h."""
    group: int                      # Bytes 2-3


@dataclass
class LogicalUnitGroupDesignator(Designator):
    """Designator type 6h."""
    group: int                      # Bytes 2-3


@dataclass
class Md5LogicalUnitDesignator(Designator):
    """Designator type 7h: MD5 logical unit identifier."""
    pass


@dataclass
class ScsiNameStringDesignator(Designator):
    """Designator type 8h: UTF-8, null terminated and padded."""
    name: str


@dataclass
class ReservedDesignator(Designator):
    """Designator types 9h-Fh."""
    designator_type: int


@dataclass
class MalformedDesignator(Designator):
    """
    A designator whose code set, association or length prerequisite failed.

    Rendered as a raw hex dump of the designator bytes.
    """
    designator_type: int
    reason: str

    prerequisites_met: ClassVar[bool] = False


# Transport IDs
# Reference: SPC-4 Section 7.5.4 "TransportID identifiers"

@dataclass
class TransportId:
    """
    Base class for decoded initiator port transport IDs.

    short is set when the enclosing buffer was shorter than 24 bytes or not
    a multiple of 4; only the fields present were decoded.
    """

    format_code: int                # Byte 0 bits 7:6
    protocol_id: int                # Byte 0 bits 3:0
    raw: bytes                      # Whole record
    short: bool

    expected_format_codes: ClassVar[tuple[int, ...] | None] = (0,)

    @property
    def unexpected_format_code(self) -> bool:
        if self.expected_format_codes is None:
            return False
        return self.format_code not in self.expected_format_codes


@dataclass
class FibreChannelTransportId(TransportId):
    """FCP-2 World Wide Name, bytes 8-15."""
    wwn: bytes


@dataclass
class ParallelScsiTransportId(TransportId):
    """SPI-4 SCSI address and relative port."""
    address: int                    # Bytes 2-3
    relative_port: int              # Bytes 6-7


@dataclass
class SsaTransportId(TransportId):
    """SSA transport ID, not defined by the standard."""
    expected_format_codes: ClassVar[tuple[int, ...] | None] = None


@dataclass
class Ieee1394TransportId(TransportId):
    """SBP-3 EUI-64 name, bytes 8-15."""
    eui64: bytes


@dataclass
class SrpTransportId(TransportId):
    """SRP initiator port identifier, bytes 8-23."""
    initiator_port_id: bytes


@dataclass
class IscsiNameTransportId(TransportId):
    """iSCSI name (format code 0)."""
    name: str


@dataclass
class IscsiWwuidTransportId(TransportId):
    """iSCSI world wide unique initiator port identifier (format code 1)."""
    name: str

    expected_format_codes: ClassVar[tuple[int, ...] | None] = (1,)


@dataclass
class SasTransportId(TransportId):
    """SAS address, bytes 4-11."""
    sas_address: int


@dataclass
class AdtTransportId(TransportId):
    expected_format_codes: ClassVar[tuple[int, ...] | None] = None


@dataclass
class AtaPacketTransportId(TransportId):
    expected_format_codes: ClassVar[tuple[int, ...] | None] = None


@dataclass
class UnknownTransportId(TransportId):
    """Unknown protocol, or an iSCSI record with a reserved format code."""
    expected_format_codes: ClassVar[tuple[int, ...] | None] = None


# Device identification output records

@dataclass
class DesignatorRecord:
    """Full mode output for one designation descriptor."""

    offset: int
    association: int
    designator_type: int
    code_set: int
    transport_protocol: int | None  # Only when piv set and port/device association
    designator: Designator


@dataclass
class IdentifierRecord:
    """
    Abridged mode output: one externally usable identifier.

    relative_port is set when a SAS target port address was paired with its
    relative target port designator.
    """

    identifier: str
    relative_port: int | None = None

    def __str__(self) -> str:
        if self.relative_port is None:
            return self.identifier
        return f"{self.identifier},0x{self.relative_port:x}"


@dataclass
class HexDumpRecord:
    """Bytes that could not (or should not) be decoded further."""

    data: bytes
    reason: str | None = None


# Page specific output records

@dataclass
class SupportedPage:
    """One entry of the Supported VPD pages page (00h)."""
    page_code: int
    info: VpdPageInfo | None


@dataclass
class UnitSerialNumber:
    """Unit serial number page (80h)."""
    serial_number: str


@dataclass
class SoftwareInterfaceId:
    """Software interface identification page (84h) entry, 6 bytes."""
    identifier: bytes

    @property
    def compact_hex(self) -> str:
        return self.identifier.hex()


@dataclass
class NetworkAddress:
    """
    Management network addresses page (85h) descriptor.

    Reference: SPC-4 Section 7.8.8, Table 609
    """
    association: int                # Byte 0 bits 6:5
    service_type: int               # Byte 0 bits 4:0
    address: str                    # Bytes 4-n, null terminated
    raw: bytes


@dataclass
class ExtendedInquiryData:
    """
    Extended INQUIRY data page (86h).

    Reference: SPC-4 Section 7.8.7, Table 604
    """
    spt: int                        # Byte 4 bits 5:3, supported protection type
    grd_chk: bool
    app_chk: bool
    ref_chk: bool
    grp_sup: bool                   # Byte 5
    prior_sup: bool
    headsup: bool
    ordsup: bool
    simpsup: bool
    corr_d_sup: bool                # Byte 6
    nv_sup: bool
    v_sup: bool
    luiclr: bool                    # Byte 7 bit 0


@dataclass
class ModePagePolicyDescriptor:
    """
    Mode page policy page (87h) descriptor.

    Reference: SPC-4 Section 7.8.9, Table 612
    """
    policy_page_code: int           # Byte 0 bits 5:0
    policy_subpage_code: int        # Byte 1
    mlus: bool                      # Byte 2 bit 7, multiple logical units share
    policy: int                     # Byte 2 bits 1:0


@dataclass
class ScsiPort:
    """
    SCSI ports page (88h) descriptor.

    Reference: SPC-4 Section 7.8.10, Table 615
    """
    relative_port: int
    transport_ids: list[TransportId] = field(default_factory=list)
    target_port_records: list[Any] = field(default_factory=list)
    initiator_transport_id_data: bytes = b''
    target_port_descriptor_data: bytes = b''


@dataclass
class AtaInformation:
    """
    ATA information page (89h).

    Reference: SAT-2 Section 10.3.2, Table 132
    """
    sat_vendor: str                 # Bytes 8-15
    sat_product: str                # Bytes 16-31
    sat_revision: str               # Bytes 32-35
    signature: bytes | None = None  # Bytes 36-55, device to host FIS
    command_code: int | None = None  # Byte 56, ECh or A1h
    identify_data: bytes | None = None  # Bytes 60-571
    model: str | None = None
    serial_number: str | None = None
    firmware_revision: str | None = None

    @property
    def is_packet_device(self) -> bool:
        return self.command_code == 0xA1


@dataclass
class ProtocolSpecificDescriptor:
    """
    Protocol-specific logical unit (90h) or port (91h) information descriptor.

    Reference: SPC-4 Sections 7.8.11 and 7.8.12
    """
    relative_port: int              # Bytes 0-1
    protocol_id: int                # Byte 2 bits 3:0
    data: bytes                     # Protocol specific bytes
    tlr_control_supported: bool | None = None  # SAS logical units only


@dataclass
class BlockLimits:
    """
    Block limits page (B0h, block devices).

    Reference: SBC-3 Section 6.5.3, Table 184
    """
    optimal_transfer_length_granularity: int    # Bytes 6-7
    maximum_transfer_length: int                # Bytes 8-11
    optimal_transfer_length: int                # Bytes 12-15
    maximum_prefetch_length: int | None = None  # Bytes 16-19, sbc3r09


@dataclass
class SequentialAccessCapabilities:
    """Sequential access device capabilities page (B0h, tape devices)."""
    worm: bool                      # Byte 4 bit 0


@dataclass
class BlockDeviceCharacteristics:
    """
    Block device characteristics page (B1h, block devices).

    Reference: SBC-3 Section 6.5.2, Table 181
    """
    rotation_rate: int              # Bytes 4-5
    form_factor: int                # Byte 7 bits 3:0

    @property
    def rotation_description(self) -> str:
        rate = self.rotation_rate
        if rate == 0:
            return "Medium rotation rate is not reported"
        if rate == 1:
            return "Non-rotating medium (e.g. solid state)"
        if rate < 0x401 or rate == 0xFFFF:
            return f"Reserved [0x{rate:x}]"
        return f"Nominal rotation rate: {rate} rpm"

    @property
    def form_factor_description(self) -> str:
        return FORM_FACTOR_NAMES.get(self.form_factor, "reserved")


@dataclass
class ManufacturerSerialNumber:
    """Manufacturer-assigned serial number page (B1h, tape and ADC devices)."""
    serial_number: str


@dataclass
class DecodedPage:
    """
    Result of decoding one VPD page.

    records holds the page's output records in order; their types depend on
    the page. A page handled by the raw fallback holds one HexDumpRecord.
    """

    page: VpdPage
    title: str
    records: list[Any]
    info: VpdPageInfo | None = None
    abridged: bool = False          # Device identification in quiet mode
    as_is: bool = False             # Association headings per designator
    decoder: str = "standard"       # Which handler in the chain produced it

    @property
    def page_code(self) -> int:
        return self.page.page_code
