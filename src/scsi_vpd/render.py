"""
SCSI VPD Rendering

Formats DecodedPage results for people. Decoding never produces text
itself; everything printable is built here from the structured records.

Three output forms are provided:
- render_text(): human readable lines, one list entry per line
- render_hex(): hex dump of the whole page
- render_raw(): the page bytes exactly as received
"""

from typing import Any, Callable

from .models import (
    AtaInformation,
    BlockDeviceCharacteristics,
    BlockLimits,
    DecodedPage,
    DecodeOptions,
    Designator,
    DesignatorRecord,
    Eui64Designator,
    ExtendedInquiryData,
    FibreChannelTransportId,
    HexDumpRecord,
    Ieee1394TransportId,
    IdentifierRecord,
    IscsiNameTransportId,
    IscsiWwuidTransportId,
    LogicalUnitGroupDesignator,
    MalformedDesignator,
    ManufacturerSerialNumber,
    Md5LogicalUnitDesignator,
    ModePagePolicyDescriptor,
    Naa2Designator,
    Naa5Designator,
    Naa6Designator,
    NetworkAddress,
    ParallelScsiTransportId,
    ProtocolSpecificDescriptor,
    RelativeTargetPortDesignator,
    SasTransportId,
    ScsiNameStringDesignator,
    ScsiPort,
    SequentialAccessCapabilities,
    SoftwareInterfaceId,
    SrpTransportId,
    SupportedPage,
    T10VendorIdDesignator,
    TargetPortGroupDesignator,
    TransportId,
    UnitSerialNumber,
)
from .protocol import (
    ASSOCIATION_NAMES,
    MODE_PAGE_POLICY_NAMES,
    ProtocolIdentifier,
    code_set_name,
    designator_type_name,
    hex_dump,
    network_service_type_name,
    pdt_name,
    protocol_name,
)


def render_raw(decoded: DecodedPage) -> bytes:
    """The page as fetched, header included."""
    return decoded.page.data


def render_hex(decoded: DecodedPage, no_ascii: bool = False) -> list[str]:
    """Hex dump of the whole page, header included."""
    return hex_dump(decoded.page.data, no_ascii=no_ascii)


def render_text(decoded: DecodedPage, options: DecodeOptions | None = None) -> list[str]:
    """
    Render a decoded page as human readable lines.

    Args:
        decoded: result of VPDDecoder.decode_page()
        options: the options the page was decoded with; long adds the
            elaborated designator fields, quiet drops the page heading

    Returns:
        List of output lines without trailing newlines
    """
    options = options or DecodeOptions()
    lines: list[str] = []
    if not options.quiet:
        lines.append(f"{decoded.title}:")
    if options.verbose or options.long:
        page = decoded.page
        lines.append(f"   [PQual={page.peripheral_qualifier}  "
                     f"Peripheral device type: {pdt_name(page.pdt)}]")

    if decoded.decoder == "raw":
        for record in decoded.records:
            if record.reason and not options.quiet:
                lines.append(record.reason)
            lines.extend(hex_dump(record.data))
        return lines

    previous_assoc = None
    for record in decoded.records:
        if isinstance(record, DesignatorRecord):
            if decoded.as_is or record.association != previous_assoc:
                lines.append(f"  {ASSOCIATION_NAMES[record.association]}:")
            previous_assoc = record.association
        lines.extend(render_record(record, options))
    return lines


def render_record(record: Any, options: DecodeOptions) -> list[str]:
    """Lines for a single output record of any page."""
    for record_type, renderer in _RENDERERS:
        if isinstance(record, record_type):
            return renderer(record, options)
    return [f"  {record}"]


# Device identification

def render_designator(record: DesignatorRecord, long: bool = False) -> list[str]:
    """Lines for one full mode designation descriptor."""
    lines = [f"    designator type: {designator_type_name(record.designator_type)},  "
             f"code_set: {code_set_name(record.code_set)}"]
    if record.transport_protocol is not None:
        lines.append(f"     transport: {protocol_name(record.transport_protocol)}")
    lines.extend(_designator_body(record.designator, long))
    return lines


def _designator_body(d: Designator, long: bool) -> list[str]:
    if isinstance(d, MalformedDesignator):
        return [f"      << {d.reason}>>"] + hex_dump(d.raw)
    if isinstance(d, T10VendorIdDesignator):
        lines = [f"      vendor id: {d.vendor_id}"]
        if len(d.raw) > 8:
            lines.append(f"      vendor specific: {d.vendor_specific}")
        return lines
    if isinstance(d, Eui64Designator):
        if not long:
            return [f"      {d.compact_hex}"]
        lines = [f"      EUI-64 based {len(d.raw)} byte identifier"]
        if d.identifier_extension is not None:
            lines.append(f"      Identifier extension: 0x{d.identifier_extension:x}")
        lines.append(f"      IEEE Company_id: 0x{d.company_id:x}")
        lines.append(f"      Vendor Specific Extension Identifier: "
                     f"0x{d.vendor_specific_extension_id:x}")
        if d.directory_id is not None:
            lines.append(f"      Directory ID: 0x{d.directory_id:x}")
        return lines
    if isinstance(d, Naa2Designator):
        lines = []
        if long:
            lines.append(f"      NAA 2, vendor specific identifier A: 0x{d.vendor_specific_id_a:x}")
            lines.append(f"      IEEE Company_id: 0x{d.company_id:x}")
            lines.append(f"      vendor specific identifier B: 0x{d.vendor_specific_id_b:x}")
            lines.append(f"      [{d.compact_hex}]")
        lines.append(f"      {d.compact_hex}")
        return lines
    if isinstance(d, (Naa5Designator, Naa6Designator)):
        if not long:
            return [f"      {d.compact_hex}"]
        lines = [f"      NAA {d.naa}, IEEE Company_id: 0x{d.company_id:x}",
                 f"      Vendor Specific Identifier: 0x{d.vendor_specific_id:x}"]
        if isinstance(d, Naa6Designator):
            lines.append(f"      Vendor Specific Identifier Extension: "
                         f"0x{d.vendor_specific_extension:x}")
        lines.append(f"      [{d.compact_hex}]")
        return lines
    if isinstance(d, RelativeTargetPortDesignator):
        return [f"      Relative target port: 0x{d.port:x}"]
    if isinstance(d, TargetPortGroupDesignator):
        return [f"      Target port group: 0x{d.group:x}"]
    if isinstance(d, LogicalUnitGroupDesignator):
        return [f"      Logical unit group: 0x{d.group:x}"]
    if isinstance(d, Md5LogicalUnitDesignator):
        return ["      MD5 logical unit identifier:"] + hex_dump(d.raw)
    if isinstance(d, ScsiNameStringDesignator):
        return ["      SCSI name string:", f"      {d.name}"]
    # Vendor specific and reserved designator types
    return hex_dump(d.raw)


def _render_identifier(record: IdentifierRecord, options: DecodeOptions) -> list[str]:
    return [str(record)]


def _render_hex_dump(record: HexDumpRecord, options: DecodeOptions) -> list[str]:
    return hex_dump(record.data)


# Transport IDs

def render_transport_id(tid: TransportId, leadin: str = " ") -> list[str]:
    """Lines for one initiator port TransportID."""
    if tid.short:
        lines = [f"{leadin}Transport Id short or not multiple of 4 [length={len(tid.raw)}]:"]
    else:
        lines = [f"{leadin}Transport Id of initiator:"]
    unexpected = f"{leadin}  [Unexpected format code: {tid.format_code}]"

    if isinstance(tid, FibreChannelTransportId):
        lines.append(f"{leadin}  FCP-2 World Wide Name:")
        if tid.unexpected_format_code:
            lines.append(unexpected)
        lines.extend(hex_dump(tid.wwn))
    elif isinstance(tid, ParallelScsiTransportId):
        lines.append(f"{leadin}  Parallel SCSI initiator SCSI address: 0x{tid.address:x}")
        if tid.unexpected_format_code:
            lines.append(unexpected)
        lines.append(f"{leadin}  relative port number (of corresponding target): "
                     f"0x{tid.relative_port:x}")
    elif isinstance(tid, Ieee1394TransportId):
        lines.append(f"{leadin}  IEEE 1394 EUI-64 name:")
        if tid.unexpected_format_code:
            lines.append(unexpected)
        lines.extend(hex_dump(tid.eui64))
    elif isinstance(tid, SrpTransportId):
        lines.append(f"{leadin}  RDMA initiator port identifier:")
        if tid.unexpected_format_code:
            lines.append(unexpected)
        lines.extend(hex_dump(tid.initiator_port_id))
    elif isinstance(tid, IscsiNameTransportId):
        lines.append(f"{leadin}  iSCSI name: {tid.name}")
    elif isinstance(tid, IscsiWwuidTransportId):
        lines.append(f"{leadin}  iSCSI world wide unique port id: {tid.name}")
    elif isinstance(tid, SasTransportId):
        lines.append(f"{leadin}  SAS address: 0x{tid.sas_address:x}")
        if tid.unexpected_format_code:
            lines.append(unexpected)
    else:
        if tid.protocol_id == ProtocolIdentifier.ISCSI:
            lines.append(f"{leadin}  iSCSI  [Unexpected format code: {tid.format_code}]")
        elif tid.protocol_id in (ProtocolIdentifier.SSA, ProtocolIdentifier.ADT,
                                 ProtocolIdentifier.ATA):
            lines.append(f"{leadin}  {protocol_name(tid.protocol_id)}:")
            lines.append(f"{leadin}  format code: {tid.format_code}")
        else:
            lines.append(f"{leadin}  unknown protocol id=0x{tid.protocol_id:x}  "
                         f"format_code={tid.format_code}")
        lines.extend(hex_dump(tid.raw))
    return lines


def _render_scsi_port(port: ScsiPort, options: DecodeOptions) -> list[str]:
    lines = [f"Relative port={port.relative_port}"]
    for tid in port.transport_ids:
        lines.extend(render_transport_id(tid))
    if port.target_port_records:
        if not options.quiet or port.transport_ids:
            lines.append(" Target port descriptor(s):")
        for record in port.target_port_records:
            if isinstance(record, DesignatorRecord):
                lines.extend(render_designator(record, options.long))
            else:
                lines.extend(render_record(record, options))
    return lines


# Other pages

def _render_designator_record(record: DesignatorRecord, options: DecodeOptions) -> list[str]:
    return render_designator(record, options.long)


def _render_supported_page(record: SupportedPage, options: DecodeOptions) -> list[str]:
    if record.info is not None:
        return [f"  {record.info.name} [{record.info.acronym}]"]
    return [f"  0x{record.page_code:x}"]


def _render_unit_serial(record: UnitSerialNumber, options: DecodeOptions) -> list[str]:
    return [f"  Unit serial number: {record.serial_number}"]


def _render_software_id(record: SoftwareInterfaceId, options: DecodeOptions) -> list[str]:
    return [f"    {record.compact_hex}"]


def _render_network_address(record: NetworkAddress, options: DecodeOptions) -> list[str]:
    lines = [f"  {ASSOCIATION_NAMES[record.association]}, "
             f"Service type: {network_service_type_name(record.service_type)}"]
    if record.raw:
        lines.append(f"    {record.address}")
    return lines


def _render_extended_inquiry(r: ExtendedInquiryData, options: DecodeOptions) -> list[str]:
    return [
        f"  SPT={r.spt} GRD_CHK={r.grd_chk:d} APP_CHK={r.app_chk:d} REF_CHK={r.ref_chk:d}",
        f"  GRP_SUP={r.grp_sup:d} PRIOR_SUP={r.prior_sup:d} HEADSUP={r.headsup:d} "
        f"ORDSUP={r.ordsup:d} SIMPSUP={r.simpsup:d}",
        f"  CORR_D_SUP={r.corr_d_sup:d} NV_SUP={r.nv_sup:d} V_SUP={r.v_sup:d} "
        f"LUICLR={r.luiclr:d}",
    ]


def _render_mode_page_policy(r: ModePagePolicyDescriptor, options: DecodeOptions) -> list[str]:
    line = f"  Policy page code: 0x{r.policy_page_code:x}"
    if r.policy_subpage_code:
        line += f",  subpage code: 0x{r.policy_subpage_code:x}"
    return [line, f"    MLUS={r.mlus:d},  Policy: {MODE_PAGE_POLICY_NAMES[r.policy]}"]


def _render_ata_information(r: AtaInformation, options: DecodeOptions) -> list[str]:
    lines = [
        f"  SAT Vendor identification: {r.sat_vendor}",
        f"  SAT Product identification: {r.sat_product}",
        f"  SAT Product revision level: {r.sat_revision}",
    ]
    if r.signature is not None and options.long:
        lines.append("  Signature (Device to host FIS):")
        lines.extend(hex_dump(r.signature))
    if r.model is not None:
        packet = "PACKET " if r.is_packet_device else ""
        lines.append(f"  ATA command IDENTIFY {packet}DEVICE response summary:")
        lines.append(f"    model: {r.model}")
        lines.append(f"    serial number: {r.serial_number}")
        lines.append(f"    firmware revision: {r.firmware_revision}")
        if options.long:
            lines.append(f"  ATA command IDENTIFY {packet}DEVICE response in hex:")
    elif r.command_code is not None and options.long:
        lines.append(f"  ATA command 0x{r.command_code:x} got following response:")
    if r.identify_data is not None and options.long:
        lines.extend(hex_dump(r.identify_data))
    return lines


def _render_protocol_specific(r: ProtocolSpecificDescriptor, options: DecodeOptions) -> list[str]:
    lines = [f"Relative port={r.relative_port}"]
    if r.tlr_control_supported is not None:
        lines.append(" Protocol identifier: SAS")
        lines.append(f" TLR control supported: {r.tlr_control_supported:d}")
    elif r.data:
        lines.extend(hex_dump(r.data))
    return lines


def _render_block_limits(r: BlockLimits, options: DecodeOptions) -> list[str]:
    lines = [
        f"  Optimal transfer length granularity: {r.optimal_transfer_length_granularity} blocks",
        f"  Maximum transfer length: {r.maximum_transfer_length} blocks",
        f"  Optimal transfer length: {r.optimal_transfer_length} blocks",
    ]
    if r.maximum_prefetch_length is not None:
        lines.append(f"  Maximum prefetch, xdread, xdwrite transfer length: "
                     f"{r.maximum_prefetch_length} blocks")
    return lines


def _render_sa_capabilities(r: SequentialAccessCapabilities, options: DecodeOptions) -> list[str]:
    return [f"  WORM={r.worm:d}"]


def _render_block_characteristics(r: BlockDeviceCharacteristics,
                                  options: DecodeOptions) -> list[str]:
    if r.form_factor == 0:
        suffix = " not reported"
    else:
        suffix = f": {r.form_factor_description}"
    return [f"  {r.rotation_description}", f"  Nominal form factor{suffix}"]


def _render_manufacturer_serial(r: ManufacturerSerialNumber, options: DecodeOptions) -> list[str]:
    return [f"  Manufacturer-assigned serial number: {r.serial_number}"]


_RENDERERS: list[tuple[type, Callable[[Any, DecodeOptions], list[str]]]] = [
    (DesignatorRecord, _render_designator_record),
    (IdentifierRecord, _render_identifier),
    (HexDumpRecord, _render_hex_dump),
    (ScsiPort, _render_scsi_port),
    (SupportedPage, _render_supported_page),
    (UnitSerialNumber, _render_unit_serial),
    (SoftwareInterfaceId, _render_software_id),
    (NetworkAddress, _render_network_address),
    (ExtendedInquiryData, _render_extended_inquiry),
    (ModePagePolicyDescriptor, _render_mode_page_policy),
    (AtaInformation, _render_ata_information),
    (ProtocolSpecificDescriptor, _render_protocol_specific),
    (BlockLimits, _render_block_limits),
    (SequentialAccessCapabilities, _render_sa_capabilities),
    (BlockDeviceCharacteristics, _render_block_characteristics),
    (ManufacturerSerialNumber, _render_manufacturer_serial),
]
