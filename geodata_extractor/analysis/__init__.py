"""Trace-region analysis.

Consumes SeismicTrace objects produced by the ingest cursor. Everything here is a
single streaming pass: memory stays bounded by one trace whatever the file size.
"""

from .trace_stats import summarize_traces, trace_header_table

__all__ = [
    "summarize_traces",
    "trace_header_table",
]
