"""
SCSI VPD Protocol Utilities

Helpers for naming wire codes and formatting binary VPD data for display.
"""

from .types import (
    CODE_SET_NAMES,
    DESIGNATOR_TYPE_NAMES,
    NETWORK_SERVICE_TYPE_NAMES,
    PDT_NAMES,
    PROTOCOL_NAMES,
)


def code_set_name(code_set: int) -> str:
    """Name of a designator code set, e.g. 'Binary' or 'Reserved [0x5]'."""
    return CODE_SET_NAMES.get(code_set, f"Reserved [0x{code_set:x}]")


def designator_type_name(designator_type: int) -> str:
    """Name of a designator type, e.g. 'NAA' or 'Reserved [0x9]'."""
    return DESIGNATOR_TYPE_NAMES.get(designator_type, f"Reserved [0x{designator_type:x}]")


def protocol_name(protocol_id: int) -> str:
    """Name of a transport protocol identifier."""
    return PROTOCOL_NAMES.get(protocol_id, f"0x{protocol_id:x}")


def pdt_name(pdt: int) -> str:
    """Name of a peripheral device type, e.g. 'disk'."""
    return PDT_NAMES.get(pdt, f"reserved [0x{pdt:x}]")


def network_service_type_name(service_type: int) -> str:
    """Name of a management network address service type."""
    return NETWORK_SERVICE_TYPE_NAMES.get(service_type, f"reserved[0x{service_type:x}]")


def hex_string(data: bytes) -> str:
    """
    Compact hex form of a designator or address.

    Returns:
        '0x' followed by two lowercase hex digits per byte
    """
    return "0x" + data.hex()


def hex_dump(data: bytes, no_ascii: bool = False, indent: str = " ") -> list[str]:
    """
    Format binary data as a classic 16 bytes per line hex dump.

    Args:
        data: bytes to dump
        no_ascii: omit the trailing printable-ASCII column
        indent: text prepended to each line

    Returns:
        List of output lines (empty for empty data)

    Example line:
        ' 00     00 83 00 0c 01 93 00 08  50 00 00 00 00 00 00 01    ............P.......'
    """
    lines = []
    width = 2 if len(data) <= 0x100 else 4
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        hex_bytes = [f"{b:02x}" for b in chunk]
        left = " ".join(hex_bytes[:8])
        right = " ".join(hex_bytes[8:])
        hex_part = f"{left}  {right}" if right else left
        line = f"{indent}{offset:0{width}x}     {hex_part:<48}"
        if not no_ascii:
            printable = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
            line += f"    {printable}"
        lines.append(line.rstrip())
    return lines


def ata_string(data: bytes, start_word: int, num_words: int) -> str:
    """
    Extract an ATA IDENTIFY string field.

    ATA strings are stored in 16-bit little-endian words with the first
    character in the high byte, so each byte pair is swapped.

    Args:
        data: IDENTIFY DEVICE data (512 bytes, little-endian words)
        start_word: first word of the field
        num_words: number of words in the field

    Returns:
        Decoded string with trailing spaces and NULs removed

    Reference: ATA8-ACS Section 7.16.7 "IDENTIFY DEVICE data"
    """
    chars = bytearray()
    for word in range(start_word, start_word + num_words):
        offset = word * 2
        pair = data[offset:offset + 2]
        if len(pair) < 2:
            break
        chars.append(pair[1])
        chars.append(pair[0])
    return bytes(chars).rstrip(b"\x00 ").decode("ascii", errors="replace").strip()
