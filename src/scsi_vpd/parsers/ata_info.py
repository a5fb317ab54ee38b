"""
ATA Information VPD page (89h) decoder.

Returned by SCSI to ATA translation layers. Carries the SAT identity, the
ATA device signature and the full 512 byte IDENTIFY (PACKET) DEVICE data.

Page layout:
    Bytes 8-15: SAT vendor identification
    Bytes 16-31: SAT product identification
    Bytes 32-35: SAT product revision level
    Bytes 36-55: Device signature (device to host register FIS)
    Byte 56: Command code (ECh IDENTIFY DEVICE, A1h IDENTIFY PACKET DEVICE)
    Bytes 60-571: IDENTIFY data

Reference: SAT-2 Section 10.3.2, Table 132 "ATA Information VPD page"
"""

import logging

from ..models import AtaInformation, VpdPage
from ..protocol.constants import VPD_ATA_INFO, VPD_ATA_INFO_LEN
from ..protocol.utils import ata_string
from .base import BaseParser

logger = logging.getLogger(__name__)

MIN_LEN = 36
SIGNATURE_END = 56
IDENTIFY_OFFSET = 60
IDENTIFY_LEN = 512

ATA_IDENTIFY_DEVICE = 0xEC
ATA_IDENTIFY_PACKET_DEVICE = 0xA1

# IDENTIFY DEVICE word offsets (start word, number of words)
# Reference: ATA8-ACS Table 22
SERIAL_NUMBER_WORDS = (10, 10)
FIRMWARE_REVISION_WORDS = (23, 4)
MODEL_NUMBER_WORDS = (27, 20)


class AtaInformationParser(BaseParser):
    """Parser for the ATA Information VPD page."""

    @classmethod
    def parse(cls, page: VpdPage) -> list[AtaInformation]:
        buff = page.data
        cls.require_length(buff, MIN_LEN, VPD_ATA_INFO, "ATA information VPD page")

        info = AtaInformation(
            sat_vendor=cls.extract_cstring(buff[8:16]).rstrip(' '),
            sat_product=cls.extract_cstring(buff[16:32]).rstrip(' '),
            sat_revision=cls.extract_cstring(buff[32:36]).rstrip(' '),
        )
        if len(buff) < SIGNATURE_END:
            return [info]
        info.signature = bytes(buff[36:SIGNATURE_END])
        if len(buff) < IDENTIFY_OFFSET:
            return [info]

        info.command_code = buff[56]
        if info.command_code in (ATA_IDENTIFY_DEVICE, ATA_IDENTIFY_PACKET_DEVICE):
            identify = buff[IDENTIFY_OFFSET:IDENTIFY_OFFSET + IDENTIFY_LEN]
            info.model = ata_string(identify, *MODEL_NUMBER_WORDS)
            info.serial_number = ata_string(identify, *SERIAL_NUMBER_WORDS)
            info.firmware_revision = ata_string(identify, *FIRMWARE_REVISION_WORDS)
        else:
            logger.debug(f"ATA command 0x{info.command_code:x} response is not IDENTIFY data")

        if len(buff) >= VPD_ATA_INFO_LEN:
            info.identify_data = bytes(buff[IDENTIFY_OFFSET:IDENTIFY_OFFSET + IDENTIFY_LEN])
        return [info]
