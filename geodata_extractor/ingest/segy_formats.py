"""SEG-Y block layouts.

Offsets are 0-based and relative to the start of each block (the binary header
starts at file byte 3200, so SEG-Y "bytes 3217-3218" are ``(16, 18)`` here; trace
header "bytes 115-116" are ``(114, 116)``).

Revisions are separate schema constants. Rev 1 adds the revision number, the
fixed-length-trace flag and the extended textual header count in the
previously unassigned area of the binary header.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from geodata_extractor.models.schema import DecodeType, FormatSchema, SchemaBuilder

TEXT_HEADER_SIZE = 3200
BINARY_HEADER_SIZE = 400
TRACE_HEADER_SIZE = 240
EXTENDED_TEXT_HEADER_SIZE = 3200

I16 = DecodeType.INT16_BE
U16 = DecodeType.UINT16_BE
I32 = DecodeType.INT32_BE


class DataSampleCode(Enum):
    """Binary header data sample format code -> (code, bytes per sample)."""

    UNKNOWN = (0, None)
    IBM_FLOAT = (1, 4)
    INTEGER_4_BYTE = (2, 4)
    INTEGER_2_BYTE = (3, 2)
    FIXED_POINT_WITH_GAIN = (4, 4)
    IEEE_FLOAT = (5, 4)
    INTEGER_1_BYTE = (8, 1)

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def sample_width(self) -> Optional[int]:
        return self.value[1]

    @classmethod
    def from_code(cls, code: int) -> "DataSampleCode":
        for member in cls:
            if member.code == int(code) and member is not cls.UNKNOWN:
                return member
        return cls.UNKNOWN


_BINARY_REV0 = (
    SchemaBuilder("segy_binary_header_rev0", block_size=BINARY_HEADER_SIZE)
    .add_field("job_id", 0, 4, I32)
    .add_field("line_number", 4, 8, I32)
    .add_field("reel_number", 8, 12, I32)
    .add_field("traces_per_ensemble", 12, 14, I16)
    .add_field("aux_traces_per_ensemble", 14, 16, I16)
    .add_field("sample_interval", 16, 18, U16)
    .add_field("sample_interval_original", 18, 20, U16)
    .add_field("samples_per_trace", 20, 22, U16)
    .add_field("samples_per_trace_original", 22, 24, U16)
    .add_field("data_sample_code", 24, 26, I16)
    .add_field("ensemble_fold", 26, 28, I16)
    .add_field("trace_sorting_code", 28, 30, I16)
    .add_field("measurement_system", 54, 56, I16)
)

SEGY_BINARY_HEADER_REV0: FormatSchema = _BINARY_REV0.build()

SEGY_BINARY_HEADER_REV1: FormatSchema = (
    SchemaBuilder("segy_binary_header_rev1", block_size=BINARY_HEADER_SIZE, entries=_BINARY_REV0.entries)
    .add_field("segy_revision", 300, 302, U16)
    .add_field("fixed_length_trace_flag", 302, 304, I16)
    .add_field("extended_text_headers", 304, 306, I16)
    .build()
)

SEGY_TRACE_HEADER: FormatSchema = (
    SchemaBuilder("segy_trace_header", block_size=TRACE_HEADER_SIZE)
    .add_field("trace_sequence_line", 0, 4, I32)
    .add_field("trace_sequence_file", 4, 8, I32)
    .add_field("field_record", 8, 12, I32)
    .add_field("trace_number", 12, 16, I32)
    .add_field("energy_source_point", 16, 20, I32)
    .add_field("ensemble_number", 20, 24, I32)
    .add_field("trace_number_in_ensemble", 24, 28, I32)
    .add_field("trace_id_code", 28, 30, I16)
    .add_field("offset", 36, 40, I32)
    .add_field("coordinate_scalar", 70, 72, I16)
    .add_field("source_x", 72, 76, I32)
    .add_field("source_y", 76, 80, I32)
    .add_field("group_x", 80, 84, I32)
    .add_field("group_y", 84, 88, I32)
    .add_field("coordinate_units", 88, 90, I16)
    .add_field("number_of_samples", 114, 116, U16)
    .add_field("sample_interval", 116, 118, U16)
    .add_field("cdp_x", 180, 184, I32)
    .add_field("cdp_y", 184, 188, I32)
    .add_field("inline", 188, 192, I32)
    .add_field("crossline", 192, 196, I32)
    .build()
)


def binary_header_schema_for_revision(revision: int) -> FormatSchema:
    """Pick the binary header layout for a revision word (0 -> rev0, anything else -> rev1)."""
    return SEGY_BINARY_HEADER_REV0 if int(revision) == 0 else SEGY_BINARY_HEADER_REV1
