"""In-memory byte cursor and byte sink used by the TWKB reader and writer.

Neither class performs I/O beyond its own buffer. Both are scoped to a
single top-level decode or encode call.
"""

from __future__ import annotations

from loguru import logger

from twkb.errors import InvalidOperand, TruncatedInput
from twkb.varint import decode_svarint, decode_uvarint, encode_svarint, encode_uvarint


class ByteCursor:
    """Sequential, forward-only reader over a fixed byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read_uint8(self) -> int:
        """Read one raw byte.

        Raises:
            TruncatedInput: If the buffer is exhausted.
        """
        if self._pos >= len(self._data):
            raise TruncatedInput(f"Expected 1 byte at offset {self._pos}, buffer is {len(self._data)} bytes")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_uvarint(self) -> int:
        value, self._pos = decode_uvarint(self._data, self._pos)
        return value

    def read_svarint(self) -> int:
        value, self._pos = decode_svarint(self._data, self._pos)
        return value

    def close(self) -> None:
        """Finish reading. Trailing bytes are reported, not rejected."""
        if self.remaining():
            logger.debug(f"TWKB cursor closed with {self.remaining()} trailing bytes")


class ByteSink:
    """Append-only byte accumulator."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def write_uint8(self, value: int) -> None:
        """Append one raw byte.

        Raises:
            InvalidOperand: If ``value`` is outside 0..255.
        """
        if not 0 <= value <= 0xFF:
            raise InvalidOperand(f"Byte value out of range: {value}")
        self._buf.append(value)

    def write_uvarint(self, n: int) -> None:
        self._buf += encode_uvarint(n)

    def write_svarint(self, n: int) -> None:
        self._buf += encode_svarint(n)

    def write_bytes(self, data: bytes) -> None:
        self._buf += data

    def bytes(self) -> bytes:
        """Materialize the accumulated buffer."""
        return bytes(self._buf)
