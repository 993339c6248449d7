"""Geodata Extractor -- metadata extraction for geophysical exchange formats.

Supported formats:
- SEG-Y seismic files: EBCDIC textual header, binary header, trace headers and samples
- LAS well-log files: whole-text content plus version/well header items

This package provides tools for:
- Declaring fixed-layout header blocks as schemas (field -> byte range -> decode type)
- Decoding big-endian integers, IBM and IEEE floats, and fixed-length text
- Walking SEG-Y traces with a forward-only cursor
- Folding traces into count/min/max summaries in constant memory

Key principles:
- Read-only: nothing is ever written back in a binary format
- Layouts are data: format revisions are schema constants, not code branches
- Partial failure is reported, not hidden: a truncated trace region keeps the
  traces read before it

Main subpackages:
- models: schemas and result records
- ingest: charsets, decoders, text reader, trace cursor, SEG-Y layouts
- analysis: trace statistics and trace-header tables
- extract: facade and per-format adapters
"""

__all__ = []
