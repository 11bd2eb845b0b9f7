"""Tests for ByteCursor and ByteSink."""

import pytest

from twkb.binary import ByteCursor, ByteSink
from twkb.errors import InvalidOperand, TruncatedInput


@pytest.mark.unit
class TestByteCursor:
    """Forward-only reads over a fixed buffer."""

    def test_read_uint8_sequence(self):
        cursor = ByteCursor(b"\x01\xff")
        assert cursor.read_uint8() == 1
        assert cursor.read_uint8() == 255
        assert cursor.at_end()

    def test_position_and_remaining(self):
        cursor = ByteCursor(b"\x01\xac\x02\x03")
        cursor.read_uint8()
        assert cursor.read_uvarint() == 300
        assert cursor.position == 3
        assert cursor.remaining() == 1

    def test_read_svarint(self):
        cursor = ByteCursor(b"\x01\x04")
        assert cursor.read_svarint() == -1
        assert cursor.read_svarint() == 2

    def test_read_past_end(self):
        cursor = ByteCursor(b"\x01")
        cursor.read_uint8()
        with pytest.raises(TruncatedInput):
            cursor.read_uint8()

    def test_varint_past_end(self):
        cursor = ByteCursor(b"\x80\x80")
        with pytest.raises(TruncatedInput):
            cursor.read_uvarint()

    def test_close_with_trailing_bytes_does_not_raise(self):
        cursor = ByteCursor(b"\x01\x02")
        cursor.read_uint8()
        cursor.close()
        assert cursor.remaining() == 1


@pytest.mark.unit
class TestByteSink:
    """Append-only accumulation."""

    def test_mixed_writes(self):
        sink = ByteSink()
        sink.write_uint8(1)
        sink.write_svarint(-1)
        sink.write_uvarint(300)
        sink.write_bytes(b"\x07")
        assert sink.bytes() == b"\x01\x01\xac\x02\x07"
        assert len(sink) == 5

    def test_empty_sink(self):
        assert ByteSink().bytes() == b""

    @pytest.mark.parametrize("value", [-1, 256])
    def test_uint8_out_of_range(self, value):
        with pytest.raises(InvalidOperand):
            ByteSink().write_uint8(value)

    def test_negative_uvarint(self):
        with pytest.raises(InvalidOperand):
            ByteSink().write_uvarint(-5)
