from __future__ import annotations

import struct

import numpy as np
import pytest

from geodata_extractor.ingest.ibm_float import ibm32_array_to_float64, ibm32_bytes_to_float, ibm32_to_float

from _encoding import float_to_ibm32

# Reference vectors for IBM System/370 single precision.
VECTORS = [
    (0x41100000, 1.0),
    (0x41210000, 2.0625),
    (0x42640000, 100.0),
    (0xC276A000, -118.625),
    (0xC2420000, -66.0),
    (0x40800000, 0.5),
    (0xC1100000, -1.0),
    (0x00000000, 0.0),
]


@pytest.mark.parametrize("word,expected", VECTORS)
def test_scalar_reference_vectors(word, expected):
    assert ibm32_to_float(word) == expected
    assert ibm32_bytes_to_float(struct.pack(">I", word)) == expected


def test_array_matches_scalar():
    raw = b"".join(struct.pack(">I", w) for w, _ in VECTORS)
    out = ibm32_array_to_float64(raw)
    assert out.dtype == np.float64
    np.testing.assert_array_equal(out, [v for _, v in VECTORS])


@pytest.mark.parametrize("word", [0x80000000, 0x7F000000, 0xFF000000, 0x3A000000])
def test_zero_mantissa_decodes_to_plain_zero(word):
    assert ibm32_to_float(word) == 0.0
    out = ibm32_array_to_float64(struct.pack(">I", word))
    assert out[0] == 0.0
    assert not np.signbit(out[0])


def test_extreme_exponents_stay_finite():
    largest = ibm32_to_float(0x7FFFFFFF)
    smallest = ibm32_to_float(0x00100000)
    assert np.isfinite(largest) and largest > 7.2e75
    assert 0.0 < smallest < 1e-77


def test_bad_lengths_raise():
    with pytest.raises(ValueError):
        ibm32_bytes_to_float(b"\x41\x10\x00")
    with pytest.raises(ValueError):
        ibm32_array_to_float64(b"\x41\x10\x00\x00\x00")


def test_test_encoder_is_consistent_with_decoder():
    for _, value in VECTORS:
        assert float_to_ibm32(value) in {w for w, v in VECTORS if v == value}
