"""Tests for zigzag and varint primitives."""

import pytest

from twkb.errors import InputError, InvalidOperand, TruncatedInput
from twkb.varint import (
    decode_svarint,
    decode_uvarint,
    encode_svarint,
    encode_uvarint,
    zigzag_decode,
    zigzag_encode,
)

ZIGZAG_PAIRS = [
    (0, 0),
    (-1, 1),
    (1, 2),
    (-2, 3),
    (2, 4),
    (2147483647, 4294967294),
    (-2147483648, 4294967295),
]


@pytest.mark.unit
class TestZigzag:
    """Signed <-> unsigned mapping keeps small magnitudes small."""

    @pytest.mark.parametrize("signed,unsigned", ZIGZAG_PAIRS)
    def test_encode(self, signed, unsigned):
        assert zigzag_encode(signed) == unsigned

    @pytest.mark.parametrize("signed,unsigned", ZIGZAG_PAIRS)
    def test_decode(self, signed, unsigned):
        assert zigzag_decode(unsigned) == signed

    def test_large_values_survive(self):
        """No fixed-width truncation beyond 64 bits."""
        for n in (2**62, -(2**62), 2**63 - 1, -(2**63)):
            assert zigzag_decode(zigzag_encode(n)) == n


@pytest.mark.unit
class TestUnsignedVarint:
    """Base-128 groups, least significant first, continuation in the high bit."""

    @pytest.mark.parametrize("value,encoded", [
        (0, b"\x00"),
        (1, b"\x01"),
        (127, b"\x7f"),
        (128, b"\x80\x01"),
        (300, b"\xac\x02"),
        (16384, b"\x80\x80\x01"),
    ])
    def test_encode_known_values(self, value, encoded):
        assert encode_uvarint(value) == encoded

    def test_decode_returns_new_offset(self):
        assert decode_uvarint(b"\xac\x02") == (300, 2)

    def test_decode_from_offset(self):
        assert decode_uvarint(b"\xff\xac\x02\x05", 1) == (300, 3)

    def test_negative_rejected(self):
        with pytest.raises(InvalidOperand):
            encode_uvarint(-1)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidOperand):
            encode_uvarint(1.5)

    def test_truncated_sequence(self):
        """A continuation bit on the last byte means the input was cut short."""
        with pytest.raises(TruncatedInput):
            decode_uvarint(b"\x80")

    def test_empty_buffer(self):
        with pytest.raises(TruncatedInput):
            decode_uvarint(b"")

    def test_large_value_roundtrip(self):
        value = 2**64 - 1
        encoded = encode_uvarint(value)
        assert len(encoded) == 10
        assert decode_uvarint(encoded) == (value, 10)

    def test_overlong_sequence_rejected(self):
        """More than ten groups cannot come from a 64-bit value."""
        with pytest.raises(InputError):
            decode_uvarint(b"\xff" * 10 + b"\x01")

    def test_overlong_sequence_rejected_before_buffer_end(self):
        with pytest.raises(InputError):
            decode_uvarint(b"\xff" * 200)


@pytest.mark.unit
class TestSignedVarint:
    """Zigzag on top of the unsigned varint."""

    def test_minus_one_is_one_byte(self):
        assert encode_svarint(-1) == b"\x01"

    def test_encode_negative_two_bytes(self):
        # zigzag(-65) == 129
        assert encode_svarint(-65) == b"\x81\x01"

    def test_decode_negative(self):
        assert decode_svarint(b"\x81\x01") == (-65, 2)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidOperand):
            encode_svarint(2.0)
