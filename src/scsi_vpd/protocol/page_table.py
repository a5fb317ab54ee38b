"""
Standard VPD page metadata.

Maps (page code, subvalue, peripheral device type) to an acronym and a
descriptive name. Page codes 0xB0 and 0xB1 mean different things for
different device types, so entries may be pdt specific.
"""

from typing import NamedTuple

from .constants import (
    VPD_ASCII_OP_DEF,
    VPD_ATA_INFO,
    VPD_BLOCK_DEV_CHARS,
    VPD_BLOCK_LIMITS,
    VPD_DEVICE_ID,
    VPD_DI_SEL_AS_IS,
    VPD_DI_SEL_LU,
    VPD_DI_SEL_TARGET,
    VPD_DI_SEL_TPORT,
    VPD_EXT_INQ,
    VPD_IMP_OP_DEF,
    VPD_MAN_ASS_SN,
    VPD_MAN_NET_ADDR,
    VPD_MODE_PG_POLICY,
    VPD_OSD_INFO,
    VPD_PROTO_LU,
    VPD_PROTO_PORT,
    VPD_SA_DEV_CAP,
    VPD_SCSI_PORTS,
    VPD_SECURITY_TOKEN,
    VPD_SOFTW_INF_ID,
    VPD_SUPPORTED_VPDS,
    VPD_TA_SUPPORTED,
    VPD_UNIT_SERIAL_NUM,
)

ANY = None  # Matches every subvalue or pdt


class VpdPageInfo(NamedTuple):
    """Metadata for one standard VPD page (or page variant)."""
    page_code: int
    subvalue: int
    pdt: int | None       # None: applies to every peripheral device type
    acronym: str
    name: str
    vendor: bool = False


# Arranged in alphabetical order by acronym
STANDARD_VPD_PAGES: tuple[VpdPageInfo, ...] = (
    VpdPageInfo(VPD_ATA_INFO, 0, ANY, "ai", "ATA information (SAT)"),
    VpdPageInfo(VPD_ASCII_OP_DEF, 0, ANY, "aod", "ASCII implemented operating definition (obs)"),
    VpdPageInfo(VPD_BLOCK_LIMITS, 0, 0, "bl", "Block limits (SBC)"),
    VpdPageInfo(VPD_BLOCK_DEV_CHARS, 0, 0, "bdc", "Block device characteristics (SBC)"),
    VpdPageInfo(VPD_DEVICE_ID, 0, ANY, "di", "Device identification"),
    VpdPageInfo(VPD_DEVICE_ID, VPD_DI_SEL_AS_IS, ANY, "di_asis",
                "Like 'di' but designators ordered as found"),
    VpdPageInfo(VPD_DEVICE_ID, VPD_DI_SEL_LU, ANY, "di_lu", "Device identification, lu only"),
    VpdPageInfo(VPD_DEVICE_ID, VPD_DI_SEL_TPORT, ANY, "di_port",
                "Device identification, target port only"),
    VpdPageInfo(VPD_DEVICE_ID, VPD_DI_SEL_TARGET, ANY, "di_target",
                "Device identification, target device only"),
    VpdPageInfo(VPD_EXT_INQ, 0, ANY, "ei", "Extended inquiry data"),
    VpdPageInfo(VPD_IMP_OP_DEF, 0, ANY, "iod", "Implemented operating definition (obs)"),
    VpdPageInfo(VPD_MAN_ASS_SN, 0, 1, "mas", "Manufacturer assigned serial number (SSC)"),
    VpdPageInfo(VPD_MAN_ASS_SN, 0, 0x12, "masa", "Manufacturer assigned serial number (ADC)"),
    VpdPageInfo(VPD_MAN_NET_ADDR, 0, ANY, "mna", "Management network addresses"),
    VpdPageInfo(VPD_MODE_PG_POLICY, 0, ANY, "mpp", "Mode page policy"),
    VpdPageInfo(VPD_OSD_INFO, 0, 0x11, "oi", "OSD information"),
    VpdPageInfo(VPD_PROTO_LU, 0, 0, "pslu", "Protocol-specific logical unit information"),
    VpdPageInfo(VPD_PROTO_PORT, 0, 0, "pspo", "Protocol-specific port information"),
    VpdPageInfo(VPD_SA_DEV_CAP, 0, 1, "sad", "Sequential access device capabilities (SSC)"),
    VpdPageInfo(VPD_SOFTW_INF_ID, 0, ANY, "sii", "Software interface identification"),
    VpdPageInfo(VPD_UNIT_SERIAL_NUM, 0, ANY, "sn", "Unit serial number"),
    VpdPageInfo(VPD_SCSI_PORTS, 0, ANY, "sp", "SCSI ports"),
    VpdPageInfo(VPD_SECURITY_TOKEN, 0, 0x11, "st", "Security token (OSD)"),
    VpdPageInfo(VPD_SUPPORTED_VPDS, 0, ANY, "sv", "Supported VPD pages"),
    VpdPageInfo(VPD_TA_SUPPORTED, 0, 1, "tas", "TapeAlert supported flags (SSC)"),
)


def _matches(entry: VpdPageInfo, page_code: int, subvalue: int | None, pdt: int | None) -> bool:
    return (entry.page_code == page_code
            and (subvalue is ANY or entry.subvalue == subvalue)
            and (pdt is ANY or entry.pdt == pdt))


def find_page_info(page_code: int, subvalue: int | None = ANY, pdt: int | None = ANY,
                   table: tuple[VpdPageInfo, ...] = STANDARD_VPD_PAGES) -> VpdPageInfo | None:
    """
    Look up page metadata, relaxing the key until something matches.

    Keys are tried in order: exact (subvalue, pdt), then (subvalue, any pdt),
    then (any subvalue, any pdt). A key component that is already ANY is
    not relaxed again.

    Args:
        page_code: VPD page code
        subvalue: page specific selector, or ANY
        pdt: peripheral device type, or ANY
        table: metadata table to search

    Returns:
        First matching VpdPageInfo, or None
    """
    keys = [(subvalue, pdt)]
    if pdt is not ANY:
        keys.append((subvalue, ANY))
    if subvalue is not ANY:
        keys.append((ANY, ANY))

    for key_subvalue, key_pdt in keys:
        for entry in table:
            if _matches(entry, page_code, key_subvalue, key_pdt):
                return entry
    return None


def find_page_by_acronym(acronym: str,
                         table: tuple[VpdPageInfo, ...] = STANDARD_VPD_PAGES) -> VpdPageInfo | None:
    """Look up page metadata by acronym, e.g. 'di_lu' or 'bl'."""
    for entry in table:
        if entry.acronym == acronym:
            return entry
    return None
