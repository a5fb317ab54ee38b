"""
Unit tests for the VPD page dispatcher

Tests the fetch phase (allocation lengths, re-fetch, header validation)
and routing through the standard, vendor and raw decoders.
"""

import unittest

from scsi_vpd.dispatcher import VendorPageDecoder, VPDDecoder
from scsi_vpd.exceptions import MalformedPageError, VPDFetchError
from scsi_vpd.models import (
    AtaInformation,
    BlockDeviceCharacteristics,
    BlockLimits,
    DecodeOptions,
    HexDumpRecord,
    IdentifierRecord,
    ManufacturerSerialNumber,
    SequentialAccessCapabilities,
    UnitSerialNumber,
)
from tests.fixtures.test_helpers import FakeFetcher, create_decoder
from tests.fixtures.vpd_responses import (
    NAA5_SAS_LU,
    ata_information_body,
    naa_descriptor,
    sas_disk_device_id_body,
    vpd_response,
)

SERIAL_PAGE = vpd_response(0x80, b'Z1D5K3XA')
BDC_BODY = bytes([0x1C, 0x20, 0x00, 0x02]) + bytes(56)


class TestFetchPage(unittest.TestCase):
    """Test phase one: fetching and validating the response."""

    def test_default_allocation_length(self):
        decoder, fetcher = create_decoder({0x80: SERIAL_PAGE})
        page = decoder.fetch_page(0x80)

        self.assertEqual(fetcher.calls, [(0x80, 252)])
        self.assertEqual(page.page_code, 0x80)
        self.assertEqual(page.declared_length, 8)
        self.assertEqual(page.length, 12)
        self.assertEqual(page.body, b'Z1D5K3XA')

    def test_header_fields(self):
        decoder, _ = create_decoder({0x80: vpd_response(0x80, b'X', pdt=0x01, pq=1)})
        page = decoder.fetch_page(0x80)

        self.assertEqual(page.peripheral_qualifier, 1)
        self.assertEqual(page.pdt, 1)

    def test_ata_information_allocation_length(self):
        decoder, fetcher = create_decoder({0x89: vpd_response(0x89, ata_information_body())})
        page = decoder.fetch_page(0x89)

        self.assertEqual(fetcher.calls, [(0x89, 572)])
        self.assertEqual(page.length, 572)

    def test_refetch_when_page_does_not_fit(self):
        """Test a page longer than the first allocation is fetched again in full."""
        body = naa_descriptor(NAA5_SAS_LU) * 25
        decoder, fetcher = create_decoder({0x83: vpd_response(0x83, body)})
        page = decoder.fetch_page(0x83)

        self.assertEqual(fetcher.calls, [(0x83, 252), (0x83, 304)])
        self.assertEqual(len(page.data), 304)
        self.assertEqual(page.body, body)

    def test_response_trimmed_to_declared_length(self):
        """Test bytes past the declared length are dropped."""
        decoder, _ = create_decoder({0x80: SERIAL_PAGE + b'\xff' * 8})
        page = decoder.fetch_page(0x80)
        self.assertEqual(page.data, SERIAL_PAGE)

    def test_too_long(self):
        """Test a declared length above the maximum allocation length."""
        decoder, fetcher = create_decoder({0x83: bytes([0x00, 0x83, 0xFF, 0xFF])})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING'):
            with self.assertRaises(MalformedPageError) as cm:
                decoder.fetch_page(0x83)

        self.assertIn("response length too long", str(cm.exception))
        self.assertEqual(cm.exception.page_code, 0x83)
        self.assertEqual(len(fetcher.calls), 1)

    def test_custom_max_alloc_len(self):
        """Test max_alloc_len caps both the first fetch and the declared length."""
        body = naa_descriptor(NAA5_SAS_LU) * 25
        decoder, fetcher = create_decoder({0x83: vpd_response(0x83, body)}, max_alloc_len=128)
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING'):
            with self.assertRaises(MalformedPageError):
                decoder.fetch_page(0x83)
        self.assertEqual(fetcher.calls, [(0x83, 128)])

    def test_shorter_than_declared(self):
        """Test a response shorter than its declared length without re-fetch."""
        response = vpd_response(0x80, b'Z1D5K3XA')[:8]
        decoder, fetcher = create_decoder({0x80: response})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING'):
            with self.assertRaises(MalformedPageError) as cm:
                decoder.fetch_page(0x80)

        self.assertIn("shorter than declared", str(cm.exception))
        self.assertEqual(len(fetcher.calls), 1)

    def test_still_short_after_refetch(self):
        """Test a re-fetched response that is still short."""
        body = naa_descriptor(NAA5_SAS_LU) * 25
        decoder, fetcher = create_decoder({0x83: vpd_response(0x83, body)[:284]})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING'):
            with self.assertRaises(MalformedPageError):
                decoder.fetch_page(0x83)
        self.assertEqual(fetcher.calls, [(0x83, 252), (0x83, 304)])

    def test_too_short_for_header(self):
        decoder, _ = create_decoder({0x80: b'\x00\x80'})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING'):
            with self.assertRaises(MalformedPageError):
                decoder.fetch_page(0x80)

    def test_page_code_echo_mismatch(self):
        """Test a standard INQUIRY response returned in place of a VPD page."""
        standard_inquiry = bytes([0x00, 0x00, 0x06, 0x02, 0x5B]) + b'\x00' * 3 + b'ATA     ' * 6
        decoder, _ = create_decoder({0x83: standard_inquiry})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING') as logs:
            with self.assertRaises(MalformedPageError) as cm:
                decoder.fetch_page(0x83)

        self.assertEqual(cm.exception.response_head, standard_inquiry[:32])
        self.assertTrue(any("probably a STANDARD INQUIRY response" in line for line in logs.output))
        self.assertFalse(any("First 32 bytes" in line for line in logs.output))

    def test_page_code_echo_mismatch_verbose(self):
        """Test the rejected response is dumped when verbose."""
        standard_inquiry = bytes([0x00, 0x00, 0x06, 0x02, 0x5B]) + b'\x00' * 3 + b'ATA     ' * 6
        decoder, _ = create_decoder({0x83: standard_inquiry})
        with self.assertLogs('scsi_vpd.dispatcher', level='WARNING') as logs:
            with self.assertRaises(MalformedPageError):
                decoder.fetch_page(0x83, DecodeOptions(verbose=1))

        self.assertTrue(any("First 32 bytes of bad response" in line for line in logs.output))

    def test_fetch_error_passes_through(self):
        """Test fetcher exceptions reach the caller unchanged."""
        error = VPDFetchError("INQUIRY failed", page_code=0x80, status=2)
        decoder = VPDDecoder(FakeFetcher(error=error))
        with self.assertRaises(VPDFetchError) as cm:
            decoder.decode_page(0x80)
        self.assertIs(cm.exception, error)


class TestDecodePage(unittest.TestCase):
    """Test phase two: routing to decoders."""

    def test_standard_page(self):
        decoder, _ = create_decoder({0x80: SERIAL_PAGE})
        decoded = decoder.decode_page(0x80)

        self.assertEqual(decoded.decoder, "standard")
        self.assertEqual(decoded.page_code, 0x80)
        self.assertEqual(decoded.title, "Unit serial number VPD page")
        self.assertEqual(decoded.info.acronym, "sn")
        self.assertEqual(decoded.records, [UnitSerialNumber("Z1D5K3XA")])

    def test_device_id_abridged(self):
        """Test quiet decoding of the Device Identification page."""
        decoder, _ = create_decoder({0x83: vpd_response(0x83, sas_disk_device_id_body())})
        decoded = decoder.decode_page(0x83, options=DecodeOptions(quiet=True))

        self.assertTrue(decoded.abridged)
        self.assertFalse(decoded.as_is)
        self.assertEqual(decoded.records[1], IdentifierRecord("0x5000c50012345679", 1))

    def test_device_id_subvalue_title(self):
        decoder, _ = create_decoder({0x83: vpd_response(0x83, sas_disk_device_id_body())})
        decoded = decoder.decode_page(0x83, subvalue=0x02)

        self.assertEqual(decoded.title, "Device identification, target port only VPD page")
        self.assertEqual([r.offset for r in decoded.records], [12, 24])

    def test_device_id_as_is(self):
        decoder, _ = create_decoder({0x83: vpd_response(0x83, sas_disk_device_id_body())})
        decoded = decoder.decode_page(0x83, subvalue=0x20)
        self.assertTrue(decoded.as_is)

    def test_ata_information(self):
        decoder, _ = create_decoder({0x89: vpd_response(0x89, ata_information_body())})
        decoded = decoder.decode_page(0x89)

        self.assertIsInstance(decoded.records[0], AtaInformation)
        self.assertEqual(decoded.records[0].model, "ST1000DM003-1CH162")

    def test_vendor_page(self):
        """Test a registered vendor decoder handles its page."""
        vendor = VendorPageDecoder()
        vendor.register(0xC0, lambda page, sub, opts: [UnitSerialNumber(page.body.decode())])
        decoder, _ = create_decoder({0xC0: vpd_response(0xC0, b'FW01')}, vendor_decoder=vendor)
        decoded = decoder.decode_page(0xC0)

        self.assertEqual(decoded.decoder, "vendor")
        self.assertEqual(decoded.title, "VPD page code=0xc0")
        self.assertEqual(decoded.records, [UnitSerialNumber("FW01")])

    def test_unknown_page_falls_back_to_hex(self):
        """Test pages nobody recognises are dumped raw."""
        response = vpd_response(0xC1, b'\x01\x02\x03')
        decoder, _ = create_decoder({0xC1: response})
        decoded = decoder.decode_page(0xC1, subvalue=3)

        self.assertEqual(decoded.decoder, "raw")
        self.assertEqual(decoded.title, "VPD page code=0xc1, subvalue=0x03")
        self.assertEqual(decoded.records, [HexDumpRecord(response, "Only hex output supported")])

    def test_vendor_malformed_gets_page_code(self):
        """Test malformed errors from vendor decoders are tagged with the page code."""
        def broken(page, sub, opts):
            raise MalformedPageError("bad vendor page")

        vendor = VendorPageDecoder({0xC0: broken})
        decoder, _ = create_decoder({0xC0: vpd_response(0xC0, b'FW01')}, vendor_decoder=vendor)
        with self.assertRaises(MalformedPageError) as cm:
            decoder.decode_page(0xC0)
        self.assertEqual(cm.exception.page_code, 0xC0)

    def test_malformed_keeps_partial_records(self):
        """Test partial output is available from the error."""
        body = naa_descriptor(NAA5_SAS_LU) + bytes([0x01, 0x03, 0x00, 20]) + bytes(10)
        decoder, _ = create_decoder({0x83: vpd_response(0x83, body)})
        with self.assertRaises(MalformedPageError) as cm:
            decoder.decode_page(0x83)

        self.assertEqual(cm.exception.page_code, 0x83)
        self.assertEqual(len(cm.exception.records), 1)

    def test_idempotent(self):
        decoder, _ = create_decoder({0x83: vpd_response(0x83, sas_disk_device_id_body())})
        self.assertEqual(decoder.decode_page(0x83), decoder.decode_page(0x83))


class TestDeviceTypeSpecificPages(unittest.TestCase):
    """Test B0h and B1h are routed by peripheral device type."""

    def decode(self, page_code, body, pdt):
        decoder, _ = create_decoder({page_code: vpd_response(page_code, body, pdt=pdt)})
        return decoder.decode_page(page_code)

    def test_block_limits_for_disk(self):
        decoded = self.decode(0xB0, bytes(16), 0x00)
        self.assertIsInstance(decoded.records[0], BlockLimits)
        self.assertEqual(decoded.title, "Block limits (SBC) VPD page")

    def test_block_limits_for_optical(self):
        decoded = self.decode(0xB0, bytes(16), 0x07)
        self.assertIsInstance(decoded.records[0], BlockLimits)

    def test_sequential_access_for_tape(self):
        decoded = self.decode(0xB0, b'\x01', 0x01)
        self.assertIsInstance(decoded.records[0], SequentialAccessCapabilities)
        self.assertEqual(decoded.title, "Sequential access device capabilities (SSC) VPD page")

    def test_osd_information_raw(self):
        """Test a device type without a B0h decoder falls through to hex."""
        decoded = self.decode(0xB0, b'\x00' * 8, 0x11)
        self.assertEqual(decoded.decoder, "raw")
        self.assertEqual(decoded.title, "OSD information VPD page")

    def test_block_device_characteristics(self):
        decoded = self.decode(0xB1, BDC_BODY, 0x00)
        self.assertIsInstance(decoded.records[0], BlockDeviceCharacteristics)
        self.assertEqual(decoded.records[0].rotation_rate, 7200)

    def test_manufacturer_serial_for_tape_and_adc(self):
        for pdt in (0x01, 0x08, 0x12):
            with self.subTest(pdt=pdt):
                decoded = self.decode(0xB1, b'HU1234ABCD', pdt)
                self.assertIsInstance(decoded.records[0], ManufacturerSerialNumber)

    def test_adc_title(self):
        decoded = self.decode(0xB1, b'HU1234ABCD', 0x12)
        self.assertEqual(decoded.title, "Manufacturer assigned serial number (ADC) VPD page")

    def test_pdt_hint(self):
        """Test a matching pdt hint keeps the initial page name."""
        decoder, _ = create_decoder({0xB1: vpd_response(0xB1, b'HU1234ABCD', pdt=1)})
        decoded = decoder.decode_page(0xB1, pdt_hint=1)
        self.assertEqual(decoded.info.acronym, "mas")


if __name__ == '__main__':
    unittest.main()
