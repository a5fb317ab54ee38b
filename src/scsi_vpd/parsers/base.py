"""
Base parser class with common utilities for SCSI VPD data parsing.

All multi-byte VPD fields are big-endian.
"""

import struct
import logging

from ..exceptions import MalformedPageError

logger = logging.getLogger(__name__)


class BaseParser:
    """Base class for all VPD page and descriptor parsers."""

    @staticmethod
    def safe_unpack(format_string: str, data: bytes, offset: int = 0) -> tuple:
        """
        Safely unpack binary data with error handling.

        Args:
            format_string: struct format string
            data: binary data to unpack
            offset: offset into data buffer

        Returns:
            Unpacked tuple

        Raises:
            ValueError: If unpacking fails
        """
        try:
            size = struct.calcsize(format_string)
            if len(data) < offset + size:
                raise ValueError(f"Insufficient data: need {offset + size} bytes, got {len(data)}")
            return struct.unpack(format_string, data[offset:offset + size])
        except struct.error as e:
            raise ValueError(f"Failed to unpack data: {e}")

    @classmethod
    def be16(cls, data: bytes, offset: int = 0) -> int:
        return cls.safe_unpack('>H', data, offset)[0]

    @classmethod
    def be32(cls, data: bytes, offset: int = 0) -> int:
        return cls.safe_unpack('>I', data, offset)[0]

    @classmethod
    def be64(cls, data: bytes, offset: int = 0) -> int:
        return cls.safe_unpack('>Q', data, offset)[0]

    @staticmethod
    def be_int(data: bytes) -> int:
        """Big-endian integer of arbitrary width (e.g. a 3 byte company id)."""
        return int.from_bytes(data, 'big')

    @staticmethod
    def extract_cstring(data: bytes, encoding: str = 'ascii') -> str:
        """Text up to the first NUL, as used by null terminated and padded fields."""
        return data.split(b'\x00', 1)[0].decode(encoding, errors='replace')

    @staticmethod
    def validate_data_length(data: bytes, expected_min_length: int, name: str = "data") -> None:
        """
        Validate that data meets minimum length requirements.

        Args:
            data: binary data to validate
            expected_min_length: minimum expected length
            name: descriptive name for error messages

        Raises:
            ValueError: If data is too short
        """
        if len(data) < expected_min_length:
            raise ValueError(f"{name} too short: got {len(data)} bytes, need at least {expected_min_length}")

    @classmethod
    def require_length(cls, data: bytes, expected_min_length: int, page_code: int, name: str) -> None:
        """
        validate_data_length for page decoders.

        Raises:
            MalformedPageError: If data is too short
        """
        try:
            cls.validate_data_length(data, expected_min_length, name)
        except ValueError as e:
            logger.warning(f"{e}")
            raise MalformedPageError(str(e), page_code=page_code, offset=len(data)) from e
