"""Test-only encoders: build header blocks and synthetic SEG-Y streams.

Production code is read-only; these helpers exist so decoder tests can check that
encoding a set of values and decoding them again gives back the same bytes.
"""

from __future__ import annotations

import struct
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from geodata_extractor.ingest.charsets import require_charset
from geodata_extractor.ingest.segy_formats import (
    SEGY_BINARY_HEADER_REV1,
    SEGY_TRACE_HEADER,
    TEXT_HEADER_SIZE,
    DataSampleCode,
)
from geodata_extractor.models.schema import DecodeType, FormatSchema


def float_to_ibm32(value: float) -> int:
    if value == 0.0:
        return 0
    sign = 0x80000000 if value < 0 else 0
    v = abs(float(value))
    exponent = 64
    while v >= 1.0:
        v /= 16.0
        exponent += 1
    while v < 1.0 / 16.0:
        v *= 16.0
        exponent -= 1
    mantissa = int(round(v * (1 << 24)))
    if mantissa >= (1 << 24):
        mantissa >>= 4
        exponent += 1
    return sign | (exponent << 24) | mantissa


def encode_text(text: str, charset: str) -> bytes:
    table = require_charset(charset).table
    reverse = {ch: i for i, ch in enumerate(table)}
    return bytes(reverse[ch] for ch in text)


_STRUCT_FORMATS = {
    DecodeType.INT16_BE: ">h",
    DecodeType.UINT16_BE: ">H",
    DecodeType.INT32_BE: ">i",
    DecodeType.IEEE_FLOAT32: ">f",
}


def encode_header(schema: FormatSchema, values: Dict[str, object], charset: str = "IBM1047") -> bytes:
    """Pack ``values`` into a zero-filled block of ``schema.read_size`` bytes."""
    block = bytearray(schema.read_size)
    for spec in schema.fields:
        if spec.name not in values:
            continue
        value = values[spec.name]
        if spec.type is DecodeType.FIXED_STRING:
            raw = encode_text(str(value), charset)
            if len(raw) != spec.range.length:
                raise ValueError(f"{spec.name}: text must be exactly {spec.range.length} characters")
        elif spec.type is DecodeType.IBM_FLOAT32:
            raw = struct.pack(">I", float_to_ibm32(float(value)))
        else:
            raw = struct.pack(_STRUCT_FORMATS[spec.type], value)
        block[spec.range.start : spec.range.end] = raw
    return bytes(block)


def encode_samples(samples: Sequence[float], code: DataSampleCode = DataSampleCode.IBM_FLOAT) -> bytes:
    if code is DataSampleCode.IBM_FLOAT:
        return b"".join(struct.pack(">I", float_to_ibm32(float(s))) for s in samples)
    dtype = {
        DataSampleCode.INTEGER_4_BYTE: ">i4",
        DataSampleCode.INTEGER_2_BYTE: ">i2",
        DataSampleCode.IEEE_FLOAT: ">f4",
        DataSampleCode.INTEGER_1_BYTE: "i1",
    }[code]
    return np.asarray(samples).astype(dtype).tobytes()


def encode_trace(
    samples: Sequence[float],
    header: Optional[Dict[str, object]] = None,
    code: DataSampleCode = DataSampleCode.IBM_FLOAT,
    schema: FormatSchema = SEGY_TRACE_HEADER,
) -> bytes:
    values = {"number_of_samples": len(samples)}
    values.update(header or {})
    return encode_header(schema, values) + encode_samples(samples, code)


def text_header(lines: Iterable[str] = ("C 1 CLIENT ACME SURVEY", "C 2 LINE 42")) -> str:
    """Build a 40 x 80 textual header, padding with 'C nn' card images."""
    cards = list(lines)
    for k in range(len(cards), 40):
        cards.append(f"C{k + 1:2d}")
    return "".join(card[:80].ljust(80) for card in cards[:40])


def build_segy(
    traces: Sequence[Tuple[Sequence[float], Dict[str, object]]] = (),
    *,
    binary: Optional[Dict[str, object]] = None,
    text: Optional[str] = None,
    code: DataSampleCode = DataSampleCode.IBM_FLOAT,
    extended_headers: int = 0,
) -> bytes:
    """Assemble a complete in-memory SEG-Y file (rev1 layout unless overridden)."""
    text = text_header() if text is None else text
    assert len(text) == TEXT_HEADER_SIZE
    n_samples = len(traces[0][0]) if traces else 0
    values = {
        "line_number": 42,
        "sample_interval": 4000,
        "samples_per_trace": n_samples,
        "data_sample_code": code.code,
        "segy_revision": 0x0100,
        "fixed_length_trace_flag": 0,
        "extended_text_headers": extended_headers,
    }
    values.update(binary or {})
    parts = [encode_text(text, "IBM1047"), encode_header(SEGY_BINARY_HEADER_REV1, values)]
    parts.extend(encode_text(" " * 3200, "IBM1047") for _ in range(max(extended_headers, 0)))
    parts.extend(encode_trace(samples, header, code) for samples, header in traces)
    return b"".join(parts)
