"""Bundled single-byte character tables.

Text fields in the supported formats use one of two encodings: IBM code page 1047
(EBCDIC, SEG-Y textual headers) and US-ASCII (LAS files). Both are shipped here as
explicit byte -> code point tables, so decoding never depends on which codecs the
running interpreter happens to register.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Dict

from geodata_extractor.errors import CharsetUnavailableError


# 256 entries, index = byte value.
_CP1047_TABLE = (
    "\x00\x01\x02\x03\x9c\x09\x86\x7f"  # 0x00
    "\x97\x8d\x8e\x0b\x0c\x0d\x0e\x0f"  # 0x08
    "\x10\x11\x12\x13\x9d\x85\x08\x87"  # 0x10
    "\x18\x19\x92\x8f\x1c\x1d\x1e\x1f"  # 0x18
    "\x80\x81\x82\x83\x84\x0a\x17\x1b"  # 0x20
    "\x88\x89\x8a\x8b\x8c\x05\x06\x07"  # 0x28
    "\x90\x91\x16\x93\x94\x95\x96\x04"  # 0x30
    "\x98\x99\x9a\x9b\x14\x15\x9e\x1a"  # 0x38
    "\x20\xa0\xe2\xe4\xe0\xe1\xe3\xe5"  # 0x40
    "\xe7\xf1\xa2\x2e\x3c\x28\x2b\x7c"  # 0x48
    "\x26\xe9\xea\xeb\xe8\xed\xee\xef"  # 0x50
    "\xec\xdf\x21\x24\x2a\x29\x3b\x5e"  # 0x58
    "\x2d\x2f\xc2\xc4\xc0\xc1\xc3\xc5"  # 0x60
    "\xc7\xd1\xa6\x2c\x25\x5f\x3e\x3f"  # 0x68
    "\xf8\xc9\xca\xcb\xc8\xcd\xce\xcf"  # 0x70
    "\xcc\x60\x3a\x23\x40\x27\x3d\x22"  # 0x78
    "\xd8\x61\x62\x63\x64\x65\x66\x67"  # 0x80
    "\x68\x69\xab\xbb\xf0\xfd\xfe\xb1"  # 0x88
    "\xb0\x6a\x6b\x6c\x6d\x6e\x6f\x70"  # 0x90
    "\x71\x72\xaa\xba\xe6\xb8\xc6\xa4"  # 0x98
    "\xb5\x7e\x73\x74\x75\x76\x77\x78"  # 0xA0
    "\x79\x7a\xa1\xbf\xd0\x5b\xde\xae"  # 0xA8
    "\xac\xa3\xa5\xb7\xa9\xa7\xb6\xbc"  # 0xB0
    "\xbd\xbe\xdd\xa8\xaf\x5d\xb4\xd7"  # 0xB8
    "\x7b\x41\x42\x43\x44\x45\x46\x47"  # 0xC0
    "\x48\x49\xad\xf4\xf6\xf2\xf3\xf5"  # 0xC8
    "\x7d\x4a\x4b\x4c\x4d\x4e\x4f\x50"  # 0xD0
    "\x51\x52\xb9\xfb\xfc\xf9\xfa\xff"  # 0xD8
    "\x5c\xf7\x53\x54\x55\x56\x57\x58"  # 0xE0
    "\x59\x5a\xb2\xd4\xd6\xd2\xd3\xd5"  # 0xE8
    "\x30\x31\x32\x33\x34\x35\x36\x37"  # 0xF0
    "\x38\x39\xb3\xdb\xdc\xd9\xda\x9f"  # 0xF8
)

# Bytes >= 0x80 are undefined in US-ASCII; '\ufffe' marks them so charmap_decode
# substitutes U+FFFD under the "replace" error handler.
_US_ASCII_TABLE = "".join(chr(i) for i in range(128)) + "\ufffe" * 128


@dataclass(frozen=True)
class Charset:
    """A named single-byte encoding backed by a 256-entry decoding table."""

    name: str
    table: str

    def decode(self, data: bytes) -> str:
        if not data:
            return ""
        text, _ = codecs.charmap_decode(bytes(data), "replace", self.table)
        return text


CP1047 = Charset("IBM1047", _CP1047_TABLE)
US_ASCII = Charset("US-ASCII", _US_ASCII_TABLE)

_ALIASES: Dict[str, Charset] = {
    "ibm1047": CP1047,
    "ibm-1047": CP1047,
    "cp1047": CP1047,
    "1047": CP1047,
    "ebcdic-1047": CP1047,
    "us-ascii": US_ASCII,
    "ascii": US_ASCII,
    "iso646-us": US_ASCII,
    "ansi-x3.4-1968": US_ASCII,
}


def normalize_charset_name(name: str) -> str:
    return str(name).strip().lower().replace("_", "-")


def require_charset(name: str) -> Charset:
    """Return the bundled charset for ``name`` or raise CharsetUnavailableError."""
    try:
        return _ALIASES[normalize_charset_name(name)]
    except KeyError:
        raise CharsetUnavailableError(str(name)) from None
