from __future__ import annotations

import struct
from typing import Callable, Dict, Optional

from geodata_extractor.errors import TruncatedHeaderError
from geodata_extractor.ingest.charsets import Charset, require_charset
from geodata_extractor.ingest.ibm_float import ibm32_bytes_to_float
from geodata_extractor.models.records import DecodedHeader, HeaderValue
from geodata_extractor.models.schema import DecodeType, FormatSchema


def _struct_decoder(fmt: str) -> Callable[[bytes], HeaderValue]:
    packer = struct.Struct(fmt)

    def _decode(raw: bytes) -> HeaderValue:
        return packer.unpack(raw)[0]

    return _decode


_NUMERIC_DECODERS: Dict[DecodeType, Callable[[bytes], HeaderValue]] = {
    DecodeType.INT16_BE: _struct_decoder(">h"),
    DecodeType.UINT16_BE: _struct_decoder(">H"),
    DecodeType.INT32_BE: _struct_decoder(">i"),
    DecodeType.IEEE_FLOAT32: _struct_decoder(">f"),
    DecodeType.IBM_FLOAT32: ibm32_bytes_to_float,
}


class HeaderDecoder:
    """
    Decoder bound to one schema and one charset.

    The charset is resolved at construction (only when the schema has text fields),
    so an unavailable encoding is reported before any block is read.
    """

    def __init__(self, schema: FormatSchema, charset: Optional[str] = None):
        self.schema = schema
        self._charset: Optional[Charset] = None
        if schema.has_text_fields:
            if charset is None:
                raise ValueError(f"schema '{schema.name}' has text fields; a charset is required")
            self._charset = require_charset(charset)

    @property
    def block_size(self) -> int:
        return self.schema.read_size

    def decode(self, block: bytes) -> DecodedHeader:
        schema = self.schema
        need = schema.required_size
        if len(block) < need:
            raise TruncatedHeaderError(
                f"{schema.name}: block has {len(block)} bytes, fields need {need}",
                expected=need,
                actual=len(block),
            )

        values: Dict[str, HeaderValue] = {}
        for spec in schema.fields:
            raw = spec.range.slice(block)
            if spec.type is DecodeType.FIXED_STRING:
                values[spec.name] = self._charset.decode(raw)
            else:
                values[spec.name] = _NUMERIC_DECODERS[spec.type](raw)
        return DecodedHeader(values, schema_name=schema.name)


def decode_header(schema: FormatSchema, block: bytes, charset: Optional[str] = None) -> DecodedHeader:
    """Decode every field of ``schema`` from ``block``; all fields or an exception."""
    return HeaderDecoder(schema, charset).decode(block)
