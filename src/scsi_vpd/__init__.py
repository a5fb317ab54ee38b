"""
SCSI VPD Decoder Library

A Python library for decoding SCSI Vital Product Data (VPD) pages, the
self-describing INQUIRY responses a device returns with EVPD=1, into
structured records, and for rendering them for diagnostic inspection.

The transport that issues INQUIRY is supplied by the caller as a
PageFetcher; this library only decodes.

Version: 1.0.0
"""

from .dispatcher import (
    PageFetcher,
    RawPageDecoder,
    StandardPageDecoder,
    VendorPageDecoder,
    VPDDecoder,
)
from .exceptions import (
    MalformedPageError,
    UnsupportedPageError,
    VPDError,
    VPDFetchError,
)
from .models import (
    DecodedPage,
    DecodeOptions,
    Designator,
    DesignatorRecord,
    HexDumpRecord,
    IdentificationDescriptor,
    IdentifierRecord,
    MalformedDesignator,
    TransportId,
    VpdPage,
)
from .render import (
    render_hex,
    render_raw,
    render_text,
)

__version__ = "1.0.0"
__all__ = [
    "VPDDecoder",
    "PageFetcher",
    "StandardPageDecoder",
    "VendorPageDecoder",
    "RawPageDecoder",
    "VPDError",
    "MalformedPageError",
    "UnsupportedPageError",
    "VPDFetchError",
    "DecodeOptions",
    "DecodedPage",
    "VpdPage",
    "IdentificationDescriptor",
    "Designator",
    "MalformedDesignator",
    "TransportId",
    "DesignatorRecord",
    "IdentifierRecord",
    "HexDumpRecord",
    "render_text",
    "render_hex",
    "render_raw",
]
