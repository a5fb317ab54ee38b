"""
SCSI VPD parsing module.

This module provides specialized parsers for the descriptor lists and
pages found in SCSI Vital Product Data responses.
"""

from .base import BaseParser
from .descriptors import (
    EXHAUSTED,
    Exhausted,
    Found,
    Malformed,
    iter_descriptors,
    next_descriptor,
    parse_descriptor,
)
from .designator import DesignatorParser
from .device_id import DeviceIdParser
from .transport_id import TransportIdParser, iter_transport_ids
from .scsi_ports import ScsiPortsParser
from .pages import (
    ExtendedInquiryDataParser,
    ManagementNetworkAddressesParser,
    ModePagePolicyParser,
    ProtocolSpecificParser,
    SoftwareInterfaceIdParser,
    SupportedPagesParser,
    UnitSerialNumberParser,
)
from .ata_info import AtaInformationParser
from .device_specific import (
    BlockDeviceCharacteristicsParser,
    BlockLimitsParser,
    ManufacturerSerialNumberParser,
    SequentialAccessCapabilitiesParser,
)

__all__ = [
    'BaseParser',
    'EXHAUSTED',
    'Exhausted',
    'Found',
    'Malformed',
    'iter_descriptors',
    'next_descriptor',
    'parse_descriptor',
    'DesignatorParser',
    'DeviceIdParser',
    'TransportIdParser',
    'iter_transport_ids',
    'ScsiPortsParser',
    'ExtendedInquiryDataParser',
    'ManagementNetworkAddressesParser',
    'ModePagePolicyParser',
    'ProtocolSpecificParser',
    'SoftwareInterfaceIdParser',
    'SupportedPagesParser',
    'UnitSerialNumberParser',
    'AtaInformationParser',
    'BlockDeviceCharacteristicsParser',
    'BlockLimitsParser',
    'ManufacturerSerialNumberParser',
    'SequentialAccessCapabilitiesParser',
]
