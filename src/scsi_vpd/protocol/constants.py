"""
SCSI VPD Protocol Constants

Page codes, allocation lengths and selection masks used when fetching and
decoding Vital Product Data pages.
"""

# Standard VPD page codes
# Reference: SPC-4 Section 7.8.1, Table 587 "Vital product data page codes"
VPD_SUPPORTED_VPDS = 0x00       # Supported VPD pages
VPD_UNIT_SERIAL_NUM = 0x80      # Unit serial number
VPD_IMP_OP_DEF = 0x81           # Implemented operating definition (obsolete in SPC-2)
VPD_ASCII_OP_DEF = 0x82         # ASCII implemented operating definition (obsolete in SPC-2)
VPD_DEVICE_ID = 0x83            # Device identification
VPD_SOFTW_INF_ID = 0x84         # Software interface identification
VPD_MAN_NET_ADDR = 0x85         # Management network addresses
VPD_EXT_INQ = 0x86              # Extended INQUIRY data
VPD_MODE_PG_POLICY = 0x87       # Mode page policy
VPD_SCSI_PORTS = 0x88           # SCSI ports
VPD_ATA_INFO = 0x89             # ATA information (SAT)
VPD_PROTO_LU = 0x90             # Protocol-specific logical unit information
VPD_PROTO_PORT = 0x91           # Protocol-specific port information

# Page codes overloaded by peripheral device type
VPD_BLOCK_LIMITS = 0xB0         # SBC-3
VPD_SA_DEV_CAP = 0xB0           # SSC-3
VPD_OSD_INFO = 0xB0             # OSD
VPD_BLOCK_DEV_CHARS = 0xB1      # SBC-3
VPD_MAN_ASS_SN = 0xB1           # SSC-3, ADC-2
VPD_SECURITY_TOKEN = 0xB1       # OSD
VPD_TA_SUPPORTED = 0xB2         # SSC-3

# Device identification page association selection (subvalue) bits
# Bit n selects association n; AS_IS disables association filtering
VPD_DI_SEL_LU = 0x01
VPD_DI_SEL_TPORT = 0x02
VPD_DI_SEL_TARGET = 0x04
VPD_DI_SEL_AS_IS = 0x20

# Allocation lengths
DEF_ALLOC_LEN = 252             # Initial INQUIRY allocation length
MX_ALLOC_LEN = 0xC000 + 0x80    # Hard upper bound for a re-fetch
VPD_ATA_INFO_LEN = 572          # ATA information page is always this long

# Response layout
VPD_HEADER_LEN = 4              # PQ/PDT, page code, page length (2 bytes)
VPD_BAD_RESPONSE_DUMP_LEN = 32  # Bytes dumped when the page code echo mismatches

# Identification descriptor layout
# Reference: SPC-4 Section 7.8.6.1, Table 591 "Designation descriptor"
DESIGNATOR_HEADER_LEN = 4

# Transport ID layout
# Reference: SPC-4 Section 7.5.4 "TransportID identifiers"
TRANSPORT_ID_MIN_LEN = 24

# Peripheral device types sharing the same overloaded page layout
PDT_BLOCK_LIKE = (0x00, 0x04, 0x07)     # disk, write-once, optical memory
PDT_TAPE_LIKE = (0x01, 0x08)            # tape, medium changer
PDT_OSD = 0x11
PDT_ADC = 0x12
