"""
Exception classes for askai.

Formula-level input errors (an upstream ``#REF!`` passed as the range, for
example) are never raised: they travel as ``ErrorValue`` objects and are
handed straight back to the engine.  The exceptions below cover the hard
failures that must surface as evaluation errors.
"""


class TransportError(Exception):
    """Raised when the outbound call to the analysis service fails.

    This error wraps exceptions from the HTTP client (via httpx) and names
    the endpoint that failed. Common causes include:
        - Connection refused or DNS failure
        - Read/connect timeouts
        - Non-2xx HTTP status from the service
    """
    pass


class MalformedPayloadError(ValueError):
    """Raised when a service payload is not valid JSON or has the wrong shape.

    Raised both for a response envelope that cannot be decoded and for a
    successful response whose ``content`` is not a JSON-encoded array. An
    envelope whose ``content`` is not a string counts as the wrong shape.
    It is never turned into the fallback grid, so a misbehaving integration
    shows up as an evaluation error instead of stale placeholder text.
    """
    pass


class SheetsAPIError(Exception):
    """Raised when Google Sheets API call fails.

    This error wraps exceptions from the Google Sheets API (via gspread) that
    occur while materializing a ``SheetsReference``. Common causes include:
        - Authentication failures
        - Rate limiting (HTTP 429)
        - Invalid spreadsheet IDs, sheet names or permissions errors
    """
    pass
