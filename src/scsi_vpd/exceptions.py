"""
SCSI VPD Decoder Exception Classes

Custom exception classes for VPD page decoding.
Provides specific error types for the different page-level failure scenarios.

References:
- SCSI Primary Commands (SPC-4) Section 6.4 "INQUIRY command"
- SPC-4 Section 7.8 "Vital product data parameters"
"""


class VPDError(Exception):
    """Base exception class for all VPD decoder errors."""
    pass


class MalformedPageError(VPDError):
    """
    Raised when a fetched VPD page is structurally unsafe to decode.

    This includes:
    - Declared page length inconsistent with the returned buffer
    - Declared page length beyond the maximum allocation length
    - A descriptor whose length runs past the end of the page
    - Page code echoed in the response differs from the requested one

    Only the page being decoded is aborted. Anything decoded before the
    failure is kept in ``records``.

    Attributes:
        page_code: VPD page code being decoded
        offset: Offset of the offending descriptor, if known
        records: Output records decoded before the failure
        response_head: Leading bytes of a rejected response (echo mismatch)
    """
    def __init__(self, message, page_code=None, offset=None, records=None,
                 response_head=None):
        super().__init__(message)
        self.page_code = page_code
        self.offset = offset
        self.records = list(records) if records else []
        self.response_head = response_head


class UnsupportedPageError(VPDError):
    """
    Raised when a decode table does not recognise a page code.

    Not an error for the end user: the dispatcher treats it as a signal to
    try the next decoder in its chain (standard, vendor, raw hex).

    Attributes:
        page_code: VPD page code that was not recognised
        pdt: Peripheral device type the lookup was made with, if any
    """
    def __init__(self, message, page_code=None, pdt=None):
        super().__init__(message)
        self.page_code = page_code
        self.pdt = pdt


class VPDFetchError(VPDError):
    """
    Raised by page fetchers when the INQUIRY command itself fails.

    The decoder never raises or wraps this itself; fetcher exceptions
    propagate to the caller unchanged.

    Attributes:
        page_code: VPD page code that was requested
        status: Transport or SCSI status reported by the fetcher
    """
    def __init__(self, message, page_code=None, status=None):
        super().__init__(message)
        self.page_code = page_code
        self.status = status
