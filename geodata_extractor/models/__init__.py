from .schema import DecodeType, FieldRange, FieldSpec, FormatSchema, SchemaBuilder, build_schema
from .records import CursorState, DecodedHeader, ExtractedRecord, SeismicTrace, TraceSummary

__all__ = [
    "DecodeType",
    "FieldRange",
    "FieldSpec",
    "FormatSchema",
    "SchemaBuilder",
    "build_schema",
    "CursorState",
    "DecodedHeader",
    "ExtractedRecord",
    "SeismicTrace",
    "TraceSummary",
]
