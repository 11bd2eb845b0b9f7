"""TWKB header bytes: named bit positions and pure pack/unpack functions.

Layout of the leading bytes of every independently-headered geometry:

    type byte       low nibble: type code (1..7)
                    high nibble: zigzag(XY precision digits)
    metadata byte   bit 0 bounding box, bit 1 size attribute, bit 2 id list,
                    bit 3 extended precision, bit 4 empty, bits 5..7 reserved
    extended byte   (only when bit 3 is set) bit 0 has Z, bit 1 has M,
                    bits 2..4 Z digits, bits 5..7 M digits

Reserved bits are never set by the writer. A reader that finds one set
skips one unsigned varint per bit.
"""

from __future__ import annotations

from dataclasses import dataclass

from twkb.errors import PrecisionOutOfRange, UnsupportedGeometryType
from twkb.geometry import BoundingBox, GeometryKind
from twkb.varint import zigzag_decode, zigzag_encode

TYPE_MASK = 0x0F
PRECISION_SHIFT = 4

BBOX_BIT = 0
SIZE_BIT = 1
IDLIST_BIT = 2
EXTENDED_PRECISION_BIT = 3
EMPTY_BIT = 4
RESERVED_BITS = (5, 6, 7)

HAS_Z_BIT = 0
HAS_M_BIT = 1
Z_DIGITS_SHIFT = 2
M_DIGITS_SHIFT = 5
EXTENDED_DIGITS_MASK = 0x07

# Zigzag values 0..15 fit the high nibble.
MIN_XY_DIGITS = -8
MAX_XY_DIGITS = 7
MAX_ZM_DIGITS = 7


@dataclass
class TwkbHeader:
    """Decoded header of one TWKB geometry.

    ``size`` and ``bounding_box`` are filled in by the reader after the
    fixed bytes, when the corresponding flags are set.
    """
    kind: GeometryKind
    precision: int = 0
    has_bounding_box: bool = False
    has_size: bool = False
    has_id_list: bool = False
    has_extended_precision: bool = False
    is_empty: bool = False
    reserved: tuple[bool, bool, bool] = (False, False, False)
    has_z: bool = False
    has_m: bool = False
    z_precision: int = 0
    m_precision: int = 0
    size: int | None = None
    bounding_box: BoundingBox | None = None

    @property
    def dimension(self) -> int:
        return 2 + int(self.has_z) + int(self.has_m)


def _bit(value: int, position: int) -> bool:
    return (value >> position) & 1 == 1


def pack_type_byte(kind: GeometryKind, precision: int) -> int:
    if not MIN_XY_DIGITS <= precision <= MAX_XY_DIGITS:
        raise PrecisionOutOfRange(
            f"XY precision {precision} outside {MIN_XY_DIGITS}..{MAX_XY_DIGITS}"
        )
    return kind.value | (zigzag_encode(precision) << PRECISION_SHIFT)


def unpack_type_byte(byte: int) -> tuple[GeometryKind, int]:
    """Split a type byte into (kind, XY precision digits).

    Raises:
        UnsupportedGeometryType: If the type code is not 1..7.
    """
    code = byte & TYPE_MASK
    try:
        kind = GeometryKind(code)
    except ValueError:
        raise UnsupportedGeometryType(f"Geometry type code {code} not supported") from None
    return kind, zigzag_decode(byte >> PRECISION_SHIFT)


def pack_metadata_byte(
    has_bounding_box: bool = False,
    has_size: bool = False,
    has_id_list: bool = False,
    has_extended_precision: bool = False,
    is_empty: bool = False,
) -> int:
    return (
        int(has_bounding_box) << BBOX_BIT
        | int(has_size) << SIZE_BIT
        | int(has_id_list) << IDLIST_BIT
        | int(has_extended_precision) << EXTENDED_PRECISION_BIT
        | int(is_empty) << EMPTY_BIT
    )


def unpack_metadata_byte(byte: int) -> dict:
    return {
        "has_bounding_box": _bit(byte, BBOX_BIT),
        "has_size": _bit(byte, SIZE_BIT),
        "has_id_list": _bit(byte, IDLIST_BIT),
        "has_extended_precision": _bit(byte, EXTENDED_PRECISION_BIT),
        "is_empty": _bit(byte, EMPTY_BIT),
        "reserved": tuple(_bit(byte, b) for b in RESERVED_BITS),
    }


def pack_extended_precision_byte(
    has_z: bool, has_m: bool, z_precision: int, m_precision: int,
) -> int:
    """Build the extended precision byte.

    Raises:
        PrecisionOutOfRange: If a digit count does not fit in 3 bits.
    """
    for axis, digits in (("Z", z_precision), ("M", m_precision)):
        if not 0 <= digits <= MAX_ZM_DIGITS:
            raise PrecisionOutOfRange(
                f"{axis} precision {digits} outside 0..{MAX_ZM_DIGITS}"
            )
    return (
        int(has_z) << HAS_Z_BIT
        | int(has_m) << HAS_M_BIT
        | (z_precision & EXTENDED_DIGITS_MASK) << Z_DIGITS_SHIFT
        | (m_precision & EXTENDED_DIGITS_MASK) << M_DIGITS_SHIFT
    )


def unpack_extended_precision_byte(byte: int) -> dict:
    return {
        "has_z": _bit(byte, HAS_Z_BIT),
        "has_m": _bit(byte, HAS_M_BIT),
        "z_precision": (byte >> Z_DIGITS_SHIFT) & EXTENDED_DIGITS_MASK,
        "m_precision": (byte >> M_DIGITS_SHIFT) & EXTENDED_DIGITS_MASK,
    }
