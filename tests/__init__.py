"""
SCSI VPD Decoder Test Suite

This package contains the tests for the SCSI VPD decoder library.

Test Categories:
- unit/: Unit tests run against crafted VPD responses, no device required
- fixtures/: VPD page builders and a fake page fetcher
"""
