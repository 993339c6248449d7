from __future__ import annotations

import io

import pytest

from geodata_extractor.errors import CharsetUnavailableError, TruncatedHeaderError
from geodata_extractor.extract.facade import extract_header_only, extract_text, extract_with_trace_summary
from geodata_extractor.ingest.segy_formats import SEGY_BINARY_HEADER_REV1, SEGY_TRACE_HEADER, DataSampleCode
from geodata_extractor.models.schema import DecodeType, build_schema

from _encoding import encode_header, encode_text, encode_trace


def test_header_only_reads_exactly_one_block():
    block = encode_header(SEGY_BINARY_HEADER_REV1, {"samples_per_trace": 3, "data_sample_code": 1})
    stream = io.BytesIO(block + b"rest")
    header = extract_header_only(stream, SEGY_BINARY_HEADER_REV1)
    assert header["samples_per_trace"] == 3
    assert stream.read() == b"rest"


def test_header_only_requires_the_declared_block():
    # All fields end before byte 306, but the block is declared as 400 bytes.
    with pytest.raises(TruncatedHeaderError) as info:
        extract_header_only(io.BytesIO(bytes(350)), SEGY_BINARY_HEADER_REV1)
    assert info.value.expected == 400


def test_header_only_text_schema_charset_checked_first():
    schema = build_schema("label", [("name", 0, 4, DecodeType.FIXED_STRING)])
    stream = io.BytesIO(encode_text("WELL", "IBM1047"))
    with pytest.raises(CharsetUnavailableError):
        extract_header_only(stream, schema, "Cp500")
    assert stream.tell() == 0
    assert extract_header_only(stream, schema, "Cp1047")["name"] == "WELL"


def test_extract_text():
    assert extract_text(io.BytesIO(b"abc"), "ascii") == "abc"
    assert extract_text(io.BytesIO(b"\xc1\xc2\xc3\xc4"), "IBM1047", size=3) == "ABC"


def test_header_and_trace_summary():
    header_block = encode_header(SEGY_BINARY_HEADER_REV1, {"samples_per_trace": 2, "data_sample_code": 5})
    region = encode_trace([1.5, -4.0], code=DataSampleCode.IEEE_FLOAT) + encode_trace(
        [9.0, 0.0], code=DataSampleCode.IEEE_FLOAT
    )
    header, summary = extract_with_trace_summary(
        io.BytesIO(header_block + region),
        SEGY_BINARY_HEADER_REV1,
        SEGY_TRACE_HEADER,
        cursor_options={"sample_format": DataSampleCode.IEEE_FLOAT},
    )
    assert header["data_sample_code"] == 5
    assert (summary.count, summary.min, summary.max) == (2, -4.0, 9.0)
    assert summary.complete


def test_header_failure_is_fatal():
    with pytest.raises(TruncatedHeaderError):
        extract_with_trace_summary(io.BytesIO(bytes(10)), SEGY_BINARY_HEADER_REV1, SEGY_TRACE_HEADER)


def test_trace_failure_is_not():
    header_block = encode_header(SEGY_BINARY_HEADER_REV1, {})
    region = encode_trace([1.0, 2.0]) + encode_trace([3.0, 4.0])[:-1]
    header, summary = extract_with_trace_summary(
        io.BytesIO(header_block + region), SEGY_BINARY_HEADER_REV1, SEGY_TRACE_HEADER
    )
    assert summary.count == 1
    assert summary.max == 2.0
    assert not summary.complete
