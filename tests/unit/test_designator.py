"""
Unit tests for designator decoding

Tests each designator type and the hex fallback taken when a code set,
association or length prerequisite is not met.
"""

import unittest

from scsi_vpd.models import (
    Eui64Designator,
    LogicalUnitGroupDesignator,
    MalformedDesignator,
    Md5LogicalUnitDesignator,
    Naa2Designator,
    Naa5Designator,
    Naa6Designator,
    RelativeTargetPortDesignator,
    ReservedDesignator,
    ScsiNameStringDesignator,
    T10VendorIdDesignator,
    TargetPortGroupDesignator,
    VendorSpecificDesignator,
)
from scsi_vpd.parsers.descriptors import parse_descriptor
from scsi_vpd.parsers.designator import DesignatorParser
from scsi_vpd.protocol import Association, CodeSet, DesignatorType
from tests.fixtures.vpd_responses import (
    EUI64_8,
    NAA2_EXTENDED,
    NAA5_SAS_LU,
    NAA6_LIO,
    designator,
    scsi_name_descriptor,
)


def decode(buf: bytes, long: bool = False):
    return DesignatorParser.parse(parse_descriptor(buf, 0), long=long)


class TestNAADesignators(unittest.TestCase):
    """Test NAA designator decoding."""

    def test_naa2(self):
        """Test NAA IEEE Extended decoding."""
        buf = designator(DesignatorType.NAA, NAA2_EXTENDED, association=Association.TARGET_PORT)
        d = decode(buf)

        self.assertIsInstance(d, Naa2Designator)
        self.assertTrue(d.prerequisites_met)
        self.assertEqual(d.raw, NAA2_EXTENDED)
        self.assertEqual(d.naa, 2)
        self.assertEqual(d.vendor_specific_id_a, 0x234)
        self.assertEqual(d.company_id, 0x56789A)
        self.assertEqual(d.vendor_specific_id_b, 0xBCDEF0)
        self.assertEqual(d.compact_hex, "0x223456789abcdef0")

    def test_naa5(self):
        """Test NAA IEEE Registered decoding."""
        d = decode(designator(DesignatorType.NAA, NAA5_SAS_LU))

        self.assertIsInstance(d, Naa5Designator)
        self.assertEqual(d.naa, 5)
        self.assertEqual(d.company_id, 0x000C50)
        self.assertEqual(d.vendor_specific_id, 0x12345678)
        self.assertEqual(d.compact_hex, "0x5000c50012345678")

    def test_naa6(self):
        """Test NAA IEEE Registered Extended decoding."""
        d = decode(designator(DesignatorType.NAA, NAA6_LIO))

        self.assertIsInstance(d, Naa6Designator)
        self.assertEqual(d.naa, 6)
        self.assertEqual(d.company_id, 0x001405)
        self.assertEqual(d.vendor_specific_id, 0xABCDEF012)
        self.assertEqual(d.vendor_specific_extension, 0x0102030405060708)

    def test_unexpected_naa_nibble_falls_back(self):
        """Test a NAA nibble other than 2, 5 or 6 is never guessed."""
        raw = bytes([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC, 0xDE, 0xF0])
        buf = bytes([0x01, 0x93, 0x00, 0x08]) + raw
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(buf)

        self.assertIsInstance(d, MalformedDesignator)
        self.assertFalse(d.prerequisites_met)
        self.assertEqual(d.raw, raw)
        self.assertEqual(d.designator_type, DesignatorType.NAA)
        self.assertIn("unexpected NAA [0x1]", d.reason)

    def test_naa_length_must_match_format(self):
        """Test NAA 6 with an 8 byte designator falls back."""
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(designator(DesignatorType.NAA, NAA6_LIO[:8]))
        self.assertIsInstance(d, MalformedDesignator)
        self.assertIn("NAA 6 identifier length", d.reason)

    def test_naa_requires_binary(self):
        """Test NAA with an ASCII code set falls back."""
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(designator(DesignatorType.NAA, NAA5_SAS_LU, code_set=CodeSet.ASCII))
        self.assertIsInstance(d, MalformedDesignator)
        self.assertIn("code set 2", d.reason)

    def test_empty_naa(self):
        """Test a zero length NAA designator falls back without indexing errors."""
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(designator(DesignatorType.NAA, b''))
        self.assertIsInstance(d, MalformedDesignator)


class TestEUI64Designators(unittest.TestCase):
    """Test EUI-64 based designator decoding."""

    def test_eui64_8(self):
        """Test 8 byte EUI-64."""
        d = decode(designator(DesignatorType.EUI64, EUI64_8), long=True)

        self.assertIsInstance(d, Eui64Designator)
        self.assertEqual(d.company_id, 0x001122)
        self.assertEqual(d.vendor_specific_extension_id, 0x3344556677)
        self.assertIsNone(d.identifier_extension)
        self.assertIsNone(d.directory_id)

    def test_eui64_12(self):
        """Test 12 byte EUI-64 carries a directory id."""
        d = decode(designator(DesignatorType.EUI64, EUI64_8 + bytes.fromhex("89abcdef")), long=True)
        self.assertEqual(d.company_id, 0x001122)
        self.assertEqual(d.directory_id, 0x89ABCDEF)

    def test_eui64_16(self):
        """Test 16 byte EUI-64 has the identifier extension first."""
        data = bytes.fromhex("0102030405060708") + EUI64_8
        d = decode(designator(DesignatorType.EUI64, data), long=True)

        self.assertEqual(d.identifier_extension, 0x0102030405060708)
        self.assertEqual(d.company_id, 0x001122)
        self.assertEqual(d.vendor_specific_extension_id, 0x3344556677)

    def test_eui64_bad_length(self):
        """Test unsupported EUI-64 lengths fall back."""
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(designator(DesignatorType.EUI64, EUI64_8[:6]))
        self.assertIsInstance(d, MalformedDesignator)

    def test_eui64_code_set_checked_in_long_mode_only(self):
        """Test a non binary EUI-64 is accepted unless long output is requested."""
        buf = designator(DesignatorType.EUI64, EUI64_8, code_set=CodeSet.ASCII)
        self.assertIsInstance(decode(buf), Eui64Designator)
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            self.assertIsInstance(decode(buf, long=True), MalformedDesignator)


class TestPortAndGroupDesignators(unittest.TestCase):
    """Test relative port, port group and logical unit group designators."""

    def test_relative_target_port(self):
        """Test relative target port decoding."""
        buf = designator(DesignatorType.RELATIVE_TARGET_PORT, b'\x00\x00\x00\x02',
                         association=Association.TARGET_PORT)
        d = decode(buf)
        self.assertIsInstance(d, RelativeTargetPortDesignator)
        self.assertEqual(d.port, 2)

    def test_relative_target_port_wrong_association(self):
        """Test relative target port with logical unit association falls back."""
        buf = designator(DesignatorType.RELATIVE_TARGET_PORT, b'\x00\x00\x00\x02')
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(buf)
        self.assertIsInstance(d, MalformedDesignator)
        self.assertEqual(d.reason, "expected binary code_set, target port association, length 4")

    def test_target_port_group(self):
        """Test target port group decoding."""
        buf = designator(DesignatorType.TARGET_PORT_GROUP, b'\x00\x00\x80\x01',
                         association=Association.TARGET_PORT)
        d = decode(buf)
        self.assertIsInstance(d, TargetPortGroupDesignator)
        self.assertEqual(d.group, 0x8001)

    def test_target_port_group_wrong_length(self):
        """Test target port group with a 2 byte designator falls back."""
        buf = designator(DesignatorType.TARGET_PORT_GROUP, b'\x80\x01',
                         association=Association.TARGET_PORT)
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            self.assertIsInstance(decode(buf), MalformedDesignator)

    def test_logical_unit_group(self):
        """Test logical unit group decoding."""
        d = decode(designator(DesignatorType.LOGICAL_UNIT_GROUP, b'\x00\x00\x00\x07'))
        self.assertIsInstance(d, LogicalUnitGroupDesignator)
        self.assertEqual(d.group, 7)

    def test_logical_unit_group_wrong_association(self):
        """Test logical unit group with target port association falls back."""
        buf = designator(DesignatorType.LOGICAL_UNIT_GROUP, b'\x00\x00\x00\x07',
                         association=Association.TARGET_PORT)
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            d = decode(buf)
        self.assertEqual(d.reason, "expected binary code_set, logical unit association, length 4")


class TestOtherDesignators(unittest.TestCase):
    """Test the remaining designator types."""

    def test_vendor_specific(self):
        """Test vendor specific designators keep their bytes."""
        d = decode(designator(DesignatorType.VENDOR_SPECIFIC, b'\xde\xad', code_set=CodeSet.ASCII))
        self.assertIsInstance(d, VendorSpecificDesignator)
        self.assertEqual(d.raw, b'\xde\xad')

    def test_t10_vendor_id(self):
        """Test T10 vendor identification splits vendor and vendor specific data."""
        data = b'SEAGATE ST1000NM0001Z1N0ABCD'
        d = decode(designator(DesignatorType.T10_VENDOR_ID, data, code_set=CodeSet.ASCII))

        self.assertIsInstance(d, T10VendorIdDesignator)
        self.assertEqual(d.vendor_id, "SEAGATE ")
        self.assertEqual(d.vendor_specific, "ST1000NM0001Z1N0ABCD")

    def test_md5(self):
        """Test MD5 logical unit identifier."""
        d = decode(designator(DesignatorType.MD5_LU_ID, bytes(range(16))))
        self.assertIsInstance(d, Md5LogicalUnitDesignator)

    def test_md5_wrong_code_set(self):
        """Test MD5 with an ASCII code set falls back."""
        buf = designator(DesignatorType.MD5_LU_ID, bytes(range(16)), code_set=CodeSet.ASCII)
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING'):
            self.assertIsInstance(decode(buf), MalformedDesignator)

    def test_scsi_name_string(self):
        """Test SCSI name strings stop at the first NUL."""
        d = decode(scsi_name_descriptor("iqn.2003-01.org.linux-iscsi.host:sn.1234"))
        self.assertIsInstance(d, ScsiNameStringDesignator)
        self.assertEqual(d.name, "iqn.2003-01.org.linux-iscsi.host:sn.1234")

    def test_scsi_name_string_ascii_falls_back(self):
        """Test a SCSI name string declared ASCII falls back with a diagnostic."""
        buf = scsi_name_descriptor("naa.5000c50012345678", code_set=CodeSet.ASCII)
        with self.assertLogs('scsi_vpd.parsers.designator', level='WARNING') as cm:
            d = decode(buf)

        self.assertIsInstance(d, MalformedDesignator)
        self.assertEqual(d.reason, "expected UTF-8 code_set")
        self.assertTrue(any("expected UTF-8" in line for line in cm.output))

    def test_reserved_type(self):
        """Test reserved designator types are kept raw."""
        d = decode(designator(0x9, b'\x01\x02'))
        self.assertIsInstance(d, ReservedDesignator)
        self.assertEqual(d.designator_type, 0x9)
        self.assertTrue(d.prerequisites_met)


if __name__ == '__main__':
    unittest.main()
