# tests/test_core_roundtrip.py
from __future__ import annotations

import random
import struct

from repseries.core import (
    encode_series,
    decode_series,
    decode_float_series,
    decode_int_series,
)


def bits(values):
    """Rappresentazione bit-a-bit dei double, per confronti esatti."""
    return [struct.pack("<d", v) for v in values]


def test_float_roundtrip_multiple_values():
    values = [1.5, 2.7, 3.14, 0.0, -1.0]
    text = encode_series(values)

    assert text == "[1.5,2.7,3.14,0.0,-1.0]"
    assert decode_float_series(text) == values


def test_empty_series():
    assert encode_series([]) == "[]"
    assert decode_series("[]") == []
    assert decode_int_series("[]") == []


def test_single_element_has_no_separator():
    text = encode_series([42.5])

    assert text == "[42.5]"
    assert "," not in text
    assert decode_float_series(text) == [42.5]


def test_int_roundtrip_with_negative_and_zero():
    values = [100, 200, 300, 0, -50]
    text = encode_series(values)

    assert text == "[100,200,300,0,-50]"
    restored = decode_int_series(text)
    assert restored == values
    assert all(type(v) is int for v in restored)


def test_int_single_large_offset():
    values = [1234567890]
    assert decode_int_series(encode_series(values)) == values


def test_fifty_samples_capture_window():
    # 25 Hz per 2 secondi = 50 campioni
    values = [i * 0.5 for i in range(50)]
    restored = decode_float_series(encode_series(values))

    assert len(restored) == 50
    assert restored == values


def test_fifty_timestamp_offsets():
    # offset a 40 ms (25 Hz)
    values = [i * 40 for i in range(50)]
    restored = decode_int_series(encode_series(values))

    assert len(restored) == 50
    assert restored == values


def test_random_floats_are_bit_exact():
    random.seed(123)
    values = [random.gauss(0.0, 1e3) for _ in range(200)]
    values += [1e-300, -2.5e-308, 1.7976931348623157e308, 5e-324, -0.0, 0.1 + 0.2]

    restored = decode_float_series(encode_series(values))

    assert bits(restored) == bits(values)


def test_encode_of_decode_is_identity_on_encoded_forms():
    for text in ["[]", "[0.0]", "[1.5,2.7,3.14,0.0,-1.0]", "[1e-05,-2.5e+20]"]:
        assert encode_series(decode_float_series(text)) == text
    assert encode_series(decode_int_series("[100,-50,0]")) == "[100,-50,0]"


def test_float_decoder_accepts_integer_tokens():
    assert decode_float_series("[1,-2,3]") == [1.0, -2.0, 3.0]


def test_encode_accepts_generators_and_tuples():
    assert encode_series(float(i) for i in range(3)) == "[0.0,1.0,2.0]"
    assert encode_series((7, 8)) == "[7,8]"
