"""Extraction entry points.

- facade: format-independent header / trace-summary extraction
- segy: SEG-Y adapter (application/segy)
- las: LAS adapter (text/las)

Each adapter returns an ExtractedRecord; mapping it into a host metadata
container is left to the caller (``ExtractedRecord.to_metadata()``).
"""

from .facade import extract_header_only, extract_text, extract_with_trace_summary, trace_summary
from .las import LasExtractor, LasExtractorConfig, extract_las_file
from .segy import SegyExtractor, SegyExtractorConfig, extract_segy_file

__all__ = [
    "extract_header_only",
    "extract_text",
    "extract_with_trace_summary",
    "trace_summary",
    "LasExtractor",
    "LasExtractorConfig",
    "extract_las_file",
    "SegyExtractor",
    "SegyExtractorConfig",
    "extract_segy_file",
]
