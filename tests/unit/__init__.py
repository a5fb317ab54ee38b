"""Unit tests that run without a SCSI device."""
