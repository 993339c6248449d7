from __future__ import annotations

from typing import Optional


class GeoExtractError(Exception):
    """Base class for every error raised by the extraction engine."""


class SchemaError(GeoExtractError, ValueError):
    """Malformed schema definition (bad range, width mismatch, duplicate name).

    Raised only while a schema is being built, never while decoding.
    """


class CharsetUnavailableError(GeoExtractError, LookupError):
    """Requested text encoding has no bundled table."""

    def __init__(self, charset: str):
        super().__init__(f"charset {charset!r} is not supported; the file cannot be parsed.")
        self.charset = charset


class TruncatedHeaderError(GeoExtractError, EOFError):
    """Stream ended before a fixed-size header block was fully present."""

    def __init__(self, message: str, *, expected: int, actual: int):
        super().__init__(message)
        self.expected = int(expected)
        self.actual = int(actual)


class TruncatedTraceError(GeoExtractError, EOFError):
    """Stream ended inside a trace record (partial trace header or sample block).

    Traces returned before this error remain valid.
    """

    def __init__(self, message: str, *, trace_index: int, bytes_consumed: int, missing: Optional[int] = None):
        super().__init__(message)
        self.trace_index = int(trace_index)
        self.bytes_consumed = int(bytes_consumed)
        self.missing = missing


class UnsupportedSampleFormatError(GeoExtractError, ValueError):
    """Trace samples are stored in a representation the cursor cannot decode."""
