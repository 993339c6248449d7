"""Ingest package - byte-level decoding of fixed-layout geophysical files.

This package handles:
- Bundled single-byte charsets (IBM-1047 EBCDIC, US-ASCII)
- IBM System/370 floating point decoding
- Schema-driven decoding of fixed-size header blocks
- Whole-stream and fixed-length text block reading
- Forward-only iteration over SEG-Y trace records

Key classes:
- HeaderDecoder: decodes one block against a FormatSchema
- TextBlockReader: decodes text under a bundled charset
- TraceCursor: pulls one SeismicTrace per next() call

Design principle:
- Layouts are data (FormatSchema constants), never branches in the decoder
- Nothing here writes files back
"""
