from __future__ import annotations

import struct

import numpy as np


def ibm32_to_float(word: int) -> float:
    """
    Decode one IBM System/370 single-precision word.

    Layout (big-endian, bit 0 = MSB):
      bit 0      sign
      bits 1-7   base-16 exponent, excess 64
      bits 8-31  24-bit fraction

    value = sign * fraction * 16**(exponent - 64 - 6). A zero fraction decodes to 0.0
    whatever the sign and exponent bits say.
    """
    word = int(word) & 0xFFFFFFFF
    mantissa = word & 0x00FFFFFF
    if mantissa == 0:
        return 0.0
    sign = -1.0 if word >> 31 else 1.0
    exponent = ((word >> 24) & 0x7F) - 64
    return sign * float(mantissa) * 16.0 ** (exponent - 6)


def ibm32_bytes_to_float(data: bytes) -> float:
    if len(data) != 4:
        raise ValueError(f"IBM float needs exactly 4 bytes, got {len(data)}")
    return ibm32_to_float(struct.unpack(">I", data)[0])


def ibm32_array_to_float64(data: bytes) -> np.ndarray:
    """Vectorised decode of a packed big-endian IBM float block to float64."""
    if len(data) % 4 != 0:
        raise ValueError(f"IBM float block length {len(data)} is not a multiple of 4")
    words = np.frombuffer(data, dtype=">u4").astype(np.uint32)
    mantissa = (words & np.uint32(0x00FFFFFF)).astype(np.float64)
    exponent = ((words >> np.uint32(24)) & np.uint32(0x7F)).astype(np.int64) - 64
    sign = np.where(words >> np.uint32(31), -1.0, 1.0)
    values = sign * mantissa * np.power(16.0, (exponent - 6).astype(np.float64))
    values[mantissa == 0.0] = 0.0
    return values
