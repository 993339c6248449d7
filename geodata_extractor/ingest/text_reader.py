from __future__ import annotations

from typing import BinaryIO

from geodata_extractor.errors import TruncatedHeaderError
from geodata_extractor.ingest.charsets import require_charset
from geodata_extractor.ingest.stream_io import read_remaining, read_up_to


def read_all(stream: BinaryIO, charset: str) -> str:
    """
    Decode the rest of ``stream`` as one text block.

    The charset is resolved before the first read, so CharsetUnavailableError leaves
    the stream untouched. An empty stream gives "".
    """
    cs = require_charset(charset)
    return cs.decode(read_remaining(stream))


def read_block(stream: BinaryIO, size: int, charset: str, *, strict: bool = True) -> str:
    """
    Decode exactly ``size`` bytes (a fixed-length text block such as the SEG-Y
    textual header). Text is returned verbatim, nothing is trimmed.

    strict:
      - True: a short block raises TruncatedHeaderError.
      - False: whatever was available is decoded.
    """
    cs = require_charset(charset)
    raw = read_up_to(stream, size)
    if strict and len(raw) < int(size):
        raise TruncatedHeaderError(
            f"text block: expected {size} bytes, stream ended after {len(raw)}",
            expected=size,
            actual=len(raw),
        )
    return cs.decode(raw)


class TextBlockReader:
    """Text reader with its charset bound (and validated) once."""

    def __init__(self, charset: str):
        self.charset = require_charset(charset)

    def read_all(self, stream: BinaryIO) -> str:
        return self.charset.decode(read_remaining(stream))

    def read_block(self, stream: BinaryIO, size: int, *, strict: bool = True) -> str:
        return read_block(stream, size, self.charset.name, strict=strict)
