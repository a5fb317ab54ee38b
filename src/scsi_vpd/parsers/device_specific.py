"""
Decoders for the device type specific VPD pages B0h and B1h.

The meaning of these page codes depends on the peripheral device type of
the logical unit, which is only known once the page has been fetched.

References:
- SBC-3 Section 6.5.3 "Block Limits VPD page"
- SBC-3 Section 6.5.2 "Block Device Characteristics VPD page"
- SSC-3 Section 8.4.2 "Sequential Access Device Capabilities VPD page"
- SSC-3 Section 8.4.3 "Manufacturer-assigned Serial Number VPD page"
"""

import logging

from ..models import (
    BlockDeviceCharacteristics,
    BlockLimits,
    ManufacturerSerialNumber,
    SequentialAccessCapabilities,
    VpdPage,
)
from ..protocol.constants import VPD_BLOCK_DEV_CHARS, VPD_BLOCK_LIMITS, VPD_SA_DEV_CAP
from .base import BaseParser

logger = logging.getLogger(__name__)


class BlockLimitsParser(BaseParser):
    """Block limits (B0h) for direct access block devices."""

    MIN_LEN = 16
    PREFETCH_LEN = 20       # Maximum prefetch length added in sbc3r09

    @classmethod
    def parse(cls, page: VpdPage) -> list[BlockLimits]:
        buff = page.data
        cls.require_length(buff, cls.MIN_LEN, VPD_BLOCK_LIMITS, "Block limits VPD page")
        granularity, max_len, optimal = cls.safe_unpack('>HII', buff, 6)
        prefetch = cls.be32(buff, 16) if len(buff) >= cls.PREFETCH_LEN else None
        return [BlockLimits(
            optimal_transfer_length_granularity=granularity,
            maximum_transfer_length=max_len,
            optimal_transfer_length=optimal,
            maximum_prefetch_length=prefetch,
        )]


class SequentialAccessCapabilitiesParser(BaseParser):
    """Sequential access device capabilities (B0h) for tape devices."""

    MIN_LEN = 5

    @classmethod
    def parse(cls, page: VpdPage) -> list[SequentialAccessCapabilities]:
        buff = page.data
        cls.require_length(buff, cls.MIN_LEN, VPD_SA_DEV_CAP,
                           "Sequential access device capabilities VPD page")
        return [SequentialAccessCapabilities(worm=bool(buff[4] & 0x01))]


class BlockDeviceCharacteristicsParser(BaseParser):
    """Block device characteristics (B1h) for direct access block devices."""

    MIN_LEN = 64

    @classmethod
    def parse(cls, page: VpdPage) -> list[BlockDeviceCharacteristics]:
        buff = page.data
        cls.require_length(buff, cls.MIN_LEN, VPD_BLOCK_DEV_CHARS,
                           "Block device characteristics VPD page")
        return [BlockDeviceCharacteristics(
            rotation_rate=cls.be16(buff, 4),
            form_factor=buff[7] & 0x0F,
        )]


class ManufacturerSerialNumberParser(BaseParser):
    """Manufacturer-assigned serial number (B1h) for tape and ADC devices."""

    @classmethod
    def parse(cls, page: VpdPage) -> list[ManufacturerSerialNumber]:
        return [ManufacturerSerialNumber(serial_number=cls.extract_cstring(page.body).rstrip(' '))]
