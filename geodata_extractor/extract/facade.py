"""Format-independent entry points used by the SEG-Y and LAS adapters."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Dict, Optional, Tuple

from geodata_extractor.analysis.trace_stats import summarize_traces
from geodata_extractor.errors import TruncatedHeaderError
from geodata_extractor.ingest.header_decoder import HeaderDecoder
from geodata_extractor.ingest.stream_io import read_up_to
from geodata_extractor.ingest.text_reader import read_all, read_block
from geodata_extractor.ingest.trace_cursor import TraceCursor
from geodata_extractor.models.records import DecodedHeader, TraceSummary
from geodata_extractor.models.schema import FormatSchema

logger = logging.getLogger(__name__)


def extract_text(stream: BinaryIO, charset: str, size: Optional[int] = None) -> str:
    """Whole remaining stream (size=None) or one fixed-length block, decoded verbatim."""
    if size is None:
        return read_all(stream, charset)
    return read_block(stream, size, charset, strict=True)


def extract_header_only(stream: BinaryIO, schema: FormatSchema, charset: Optional[str] = None) -> DecodedHeader:
    """
    Read one header block of ``schema.read_size`` bytes and decode it.

    Raises TruncatedHeaderError when the stream holds less than the declared block;
    no partial header is ever returned.
    """
    decoder = HeaderDecoder(schema, charset)
    size = decoder.block_size
    block = read_up_to(stream, size)
    if len(block) < size:
        raise TruncatedHeaderError(
            f"{schema.name}: stream ended after {len(block)} of {size} header bytes",
            expected=size,
            actual=len(block),
        )
    header = decoder.decode(block)
    logger.debug("decoded %s: %d fields", schema.name, len(header))
    return header


def trace_summary(stream: BinaryIO, trace_schema: FormatSchema, **cursor_options: Any) -> TraceSummary:
    """Walk the trace region from the current stream position and fold it into a TraceSummary."""
    with TraceCursor(stream, trace_schema, **cursor_options) as cursor:
        return summarize_traces(cursor)


def extract_with_trace_summary(
    stream: BinaryIO,
    header_schema: FormatSchema,
    trace_schema: FormatSchema,
    charset: Optional[str] = None,
    *,
    cursor_options: Optional[Dict[str, Any]] = None,
) -> Tuple[DecodedHeader, TraceSummary]:
    """
    Decode the header block, then fold every following trace.

    A header failure is fatal. A truncated trace region is not: the summary counts
    the traces read before it and is marked incomplete.
    """
    header = extract_header_only(stream, header_schema, charset)
    options = dict(cursor_options or {})
    options.setdefault("charset", charset)
    summary = trace_summary(stream, trace_schema, **options)
    return header, summary
