"""Zigzag and base-128 varint primitives.

Unsigned varints are written as 7-bit groups, least significant group
first, with the high bit set on every byte except the last. Signed values
go through the zigzag mapping first so small magnitudes stay short.
"""

from __future__ import annotations

from twkb.errors import InputError, InvalidOperand, TruncatedInput

_GROUP_BITS = 7
_GROUP_MASK = 0x7F
_CONTINUE = 0x80
# A 64-bit value needs at most ten 7-bit groups.
MAX_VARINT_BYTES = 10


def zigzag_encode(n: int) -> int:
    """Map a signed integer onto the unsigned range (0, -1, 1, -2 -> 0, 1, 2, 3)."""
    return 2 * n if n >= 0 else -2 * n - 1


def zigzag_decode(u: int) -> int:
    """Inverse of :func:`zigzag_encode`."""
    return u // 2 if u % 2 == 0 else -(u + 1) // 2


def encode_uvarint(n: int) -> bytes:
    """Encode a non-negative integer as an unsigned varint.

    Raises:
        InvalidOperand: If ``n`` is negative or not an integer.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidOperand(f"Unsigned varint requires an int, got {type(n).__name__}")
    if n < 0:
        raise InvalidOperand(f"Unsigned varint requires n >= 0, got {n}")

    out = bytearray()
    while True:
        group = n & _GROUP_MASK
        n >>= _GROUP_BITS
        if n:
            out.append(group | _CONTINUE)
        else:
            out.append(group)
            return bytes(out)


def encode_svarint(n: int) -> bytes:
    """Encode a signed integer as a zigzag varint."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidOperand(f"Signed varint requires an int, got {type(n).__name__}")
    return encode_uvarint(zigzag_encode(n))


def decode_uvarint(buf: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned varint starting at ``offset``.

    Returns:
        (value, offset just past the varint)

    Raises:
        TruncatedInput: If the buffer ends before the final group.
        InputError: If the varint runs past :data:`MAX_VARINT_BYTES`.
    """
    value = 0
    shift = 0
    pos = offset
    while True:
        if pos >= len(buf):
            raise TruncatedInput(
                f"Buffer ended inside a varint starting at byte {offset}"
            )
        if pos - offset >= MAX_VARINT_BYTES:
            raise InputError(
                f"Varint starting at byte {offset} exceeds {MAX_VARINT_BYTES} bytes"
            )
        byte = buf[pos]
        pos += 1
        value |= (byte & _GROUP_MASK) << shift
        if not byte & _CONTINUE:
            return value, pos
        shift += _GROUP_BITS


def decode_svarint(buf: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a zigzag varint starting at ``offset``."""
    value, pos = decode_uvarint(buf, offset)
    return zigzag_decode(value), pos
