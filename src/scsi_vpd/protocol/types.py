"""
SCSI VPD Protocol Types and Enums

Type definitions and enums for the bit fields found in VPD pages,
identification descriptors and transport IDs.
"""

from enum import IntEnum


class PeripheralDeviceType(IntEnum):
    """
    Peripheral device type (PDT), byte 0 bits 4:0 of every INQUIRY response.

    Reference: SPC-4 Section 6.4.2, Table 141 "Peripheral device type"
    """
    DISK = 0x00
    TAPE = 0x01
    PRINTER = 0x02
    PROCESSOR = 0x03
    WRITE_ONCE = 0x04
    CD_DVD = 0x05
    SCANNER = 0x06
    OPTICAL_MEMORY = 0x07
    MEDIUM_CHANGER = 0x08
    COMMUNICATIONS = 0x09
    STORAGE_ARRAY = 0x0C
    ENCLOSURE_SERVICES = 0x0D
    SIMPLIFIED_DIRECT_ACCESS = 0x0E
    OPTICAL_CARD = 0x0F
    BRIDGE_CONTROLLER = 0x10
    OSD = 0x11
    ADC = 0x12
    WELL_KNOWN_LU = 0x1E
    NO_DEVICE = 0x1F


PDT_NAMES = {
    0x00: "disk",
    0x01: "tape",
    0x02: "printer",
    0x03: "processor",
    0x04: "write once optical disk",
    0x05: "cd/dvd",
    0x06: "scanner",
    0x07: "optical memory device",
    0x08: "medium changer",
    0x09: "communications",
    0x0A: "graphics",
    0x0B: "graphics",
    0x0C: "storage array controller",
    0x0D: "enclosure services device",
    0x0E: "simplified direct access device",
    0x0F: "optical card reader/writer device",
    0x10: "bridge controller commands",
    0x11: "object based storage",
    0x12: "automation/drive interface",
    0x1E: "well known logical unit",
    0x1F: "no physical device on this lu",
}


class CodeSet(IntEnum):
    """
    Designator code set, byte 0 bits 3:0 of an identification descriptor.

    Reference: SPC-4 Section 7.8.6.1, Table 592 "Code set"
    """
    RESERVED = 0x0
    BINARY = 0x1
    ASCII = 0x2
    UTF8 = 0x3


CODE_SET_NAMES = {
    0x0: "Reserved [0x0]",
    0x1: "Binary",
    0x2: "ASCII",
    0x3: "UTF-8",
}


class Association(IntEnum):
    """
    Designator association, byte 1 bits 5:4 of an identification descriptor.

    Reference: SPC-4 Section 7.8.6.1, Table 593 "Association field"
    """
    LOGICAL_UNIT = 0x0
    TARGET_PORT = 0x1
    TARGET_DEVICE = 0x2
    RESERVED = 0x3


ASSOCIATION_NAMES = {
    Association.LOGICAL_UNIT: "Addressed logical unit",
    Association.TARGET_PORT: "Target port",
    Association.TARGET_DEVICE: "Target device that contains addressed lu",
    Association.RESERVED: "Reserved [0x3]",
}


class DesignatorType(IntEnum):
    """
    Designator type, byte 1 bits 3:0 of an identification descriptor.

    Reference: SPC-4 Section 7.8.6.1, Table 594 "Designator type"
    """
    VENDOR_SPECIFIC = 0x0
    T10_VENDOR_ID = 0x1
    EUI64 = 0x2
    NAA = 0x3
    RELATIVE_TARGET_PORT = 0x4
    TARGET_PORT_GROUP = 0x5
    LOGICAL_UNIT_GROUP = 0x6
    MD5_LU_ID = 0x7
    SCSI_NAME_STRING = 0x8


DESIGNATOR_TYPE_NAMES = {
    0x0: "vendor specific [0x0]",
    0x1: "T10 vendor identification",
    0x2: "EUI-64 based",
    0x3: "NAA",
    0x4: "Relative target port",
    0x5: "Target port group",
    0x6: "Logical unit group",
    0x7: "MD5 logical unit identifier",
    0x8: "SCSI name string",
}


class ProtocolIdentifier(IntEnum):
    """
    SCSI transport protocol identifier.

    Reference: SPC-4 Section 7.5.1, Table 362 "PROTOCOL IDENTIFIER values"
    """
    FCP = 0x0       # Fibre Channel
    SPI = 0x1       # Parallel SCSI
    SSA = 0x2       # Serial Storage Architecture
    IEEE_1394 = 0x3  # SBP-3
    SRP = 0x4       # SCSI RDMA
    ISCSI = 0x5     # Internet SCSI
    SAS = 0x6       # Serial Attached SCSI
    ADT = 0x7       # Automation/Drive Interface
    ATA = 0x8       # ATA/ATAPI
    NONE = 0xF      # No specific protocol


PROTOCOL_NAMES = {
    0x0: "Fibre Channel (FCP-2)",
    0x1: "Parallel SCSI (SPI-4)",
    0x2: "SSA (SSA-S3P)",
    0x3: "IEEE 1394 (SBP-3)",
    0x4: "Remote Direct Memory Access (RDMA)",
    0x5: "Internet SCSI (iSCSI)",
    0x6: "Serial Attached SCSI (SAS)",
    0x7: "Automation/Drive Interface (ADT)",
    0x8: "ATA Packet Interface (ATA/ATAPI-7)",
    0xF: "No specific protocol",
}


class NAAFormat(IntEnum):
    """
    Network Address Authority format, high nibble of the first NAA byte.

    Reference: SPC-4 Section 7.8.6.6.1, Table 601 "NAA field"
    """
    IEEE_EXTENDED = 0x2
    IEEE_REGISTERED = 0x5
    IEEE_REGISTERED_EXTENDED = 0x6


class NetworkServiceType(IntEnum):
    """
    Management network address service type, byte 0 bits 4:0.

    Reference: SPC-4 Section 7.8.8, Table 610 "Service type field"
    """
    UNSPECIFIED = 0x00
    STORAGE_CONFIGURATION = 0x01
    DIAGNOSTICS = 0x02
    STATUS = 0x03
    LOGGING = 0x04
    CODE_DOWNLOAD = 0x05


NETWORK_SERVICE_TYPE_NAMES = {
    0x00: "unspecified",
    0x01: "storage configuration service",
    0x02: "diagnostics",
    0x03: "status",
    0x04: "logging",
    0x05: "code download",
}


class ModePagePolicy(IntEnum):
    """
    Mode page policy, byte 2 bits 1:0 of a mode page policy descriptor.

    Reference: SPC-4 Section 7.8.9, Table 613 "MODE PAGE POLICY field"
    """
    SHARED = 0x0
    PER_TARGET_PORT = 0x1
    PER_INITIATOR_PORT = 0x2
    PER_I_T_NEXUS = 0x3


MODE_PAGE_POLICY_NAMES = {
    ModePagePolicy.SHARED: "shared",
    ModePagePolicy.PER_TARGET_PORT: "per target port",
    ModePagePolicy.PER_INITIATOR_PORT: "per initiator port",
    ModePagePolicy.PER_I_T_NEXUS: "per I_T nexus",
}


FORM_FACTOR_NAMES = {
    0x0: "not reported",
    0x1: "5.25 inch",
    0x2: "3.5 inch",
    0x3: "2.5 inch",
    0x4: "1.8 inch",
    0x5: "less than 1.8 inch",
}
