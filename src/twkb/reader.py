"""Decode TWKB bytes into geometry objects.

Each independently-headered geometry (the root, and every component of a
GeometryCollection) starts its own delta state at the origin. Components
of MultiPoint / MultiLineString / MultiPolygon share the parent header and
continue the parent's delta state.

Readers take the cursor, the active header and the incoming delta state,
and return the decoded geometry together with the outgoing state.
"""

from __future__ import annotations

from typing import Callable, Union

from loguru import logger

from twkb.binary import ByteCursor
from twkb.delta import ORIGIN, Coordinate, from_scaled
from twkb.errors import InputError
from twkb.geometry import (
    GEOMETRY_CLASSES,
    BoundingBox,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from twkb.header import (
    TwkbHeader,
    unpack_extended_precision_byte,
    unpack_metadata_byte,
    unpack_type_byte,
)


def decode(data: Union[bytes, bytearray, str], is_hex: bool = False) -> Geometry:
    """Decode a TWKB buffer into a geometry.

    Args:
        data: Raw TWKB bytes, or a hex string when ``is_hex`` is set.
        is_hex: Unhex ``data`` before decoding.

    Returns:
        The decoded geometry.

    Raises:
        InputError: Empty buffer or invalid hex.
        TruncatedInput: Buffer ended in the middle of the geometry.
        UnsupportedGeometryType: Type code outside 1..7.
    """
    cursor = ByteCursor(_prepare_input(data, is_hex))
    geometry = _read_geometry(cursor)
    cursor.close()
    return geometry


def decode_header(data: Union[bytes, bytearray, str], is_hex: bool = False) -> TwkbHeader:
    """Parse only the top-level header, including size and bounding box."""
    cursor = ByteCursor(_prepare_input(data, is_hex))
    return _read_header(cursor)


def _prepare_input(data: Union[bytes, bytearray, str], is_hex: bool) -> bytes:
    if is_hex:
        if isinstance(data, (bytes, bytearray)):
            try:
                data = data.decode("ascii")
            except UnicodeDecodeError as e:
                raise InputError(f"Hex input is not ASCII: {e}") from e
        try:
            raw = bytes.fromhex(data.strip())
        except (ValueError, AttributeError) as e:
            raise InputError(f"Invalid hex TWKB: {e}") from e
    elif isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
    else:
        raise InputError(f"Cannot read TWKB from {type(data).__name__}; pass is_hex=True for hex strings")

    if not raw:
        raise InputError("Cannot read empty TWKB")
    return raw


def _read_header(cursor: ByteCursor) -> TwkbHeader:
    kind, precision = unpack_type_byte(cursor.read_uint8())
    header = TwkbHeader(kind=kind, precision=precision, **unpack_metadata_byte(cursor.read_uint8()))

    if header.has_extended_precision:
        extended = unpack_extended_precision_byte(cursor.read_uint8())
        header.has_z = extended["has_z"]
        header.has_m = extended["has_m"]
        header.z_precision = extended["z_precision"]
        header.m_precision = extended["m_precision"]

    if header.has_size:
        header.size = cursor.read_uvarint()

    if header.has_bounding_box:
        header.bounding_box = _read_bounding_box(cursor, header)

    # Forward compatibility: each reserved flag announces one varint.
    for flag in header.reserved:
        if flag:
            cursor.read_uvarint()

    return header


def _read_bounding_box(cursor: ByteCursor, header: TwkbHeader) -> BoundingBox:
    axes = [("x", header.precision), ("y", header.precision)]
    if header.has_z:
        axes.append(("z", header.z_precision))
    if header.has_m:
        axes.append(("m", header.m_precision))

    extent = {}
    for axis, digits in axes:
        low = cursor.read_svarint()
        delta = cursor.read_svarint()
        extent[f"min_{axis}"] = from_scaled(low, digits)
        extent[f"max_{axis}"] = from_scaled(low + delta, digits)
    return BoundingBox(**extent)


def _read_geometry(cursor: ByteCursor) -> Geometry:
    header = _read_header(cursor)
    logger.debug(
        f"TWKB {header.kind.name} precision={header.precision} "
        f"z={header.has_z}/{header.z_precision} m={header.has_m}/{header.m_precision} "
        f"empty={header.is_empty}"
    )
    if header.is_empty:
        return GEOMETRY_CLASSES[header.kind]()

    geometry, _ = _READERS[header.kind](cursor, header, ORIGIN)
    return geometry


def _read_point(
    cursor: ByteCursor, header: TwkbHeader, state: Coordinate,
) -> tuple[Point, Coordinate]:
    x = state.x + cursor.read_svarint()
    y = state.y + cursor.read_svarint()
    z = state.z + cursor.read_svarint() if header.has_z else state.z
    m = state.m + cursor.read_svarint() if header.has_m else state.m

    point = Point(
        from_scaled(x, header.precision),
        from_scaled(y, header.precision),
        from_scaled(z, header.z_precision) if header.has_z else None,
        # M is rounded to the declared M precision from the extended byte.
        from_scaled(m, header.m_precision) if header.has_m else None,
    )
    return point, Coordinate(x, y, z, m)


def _read_line_string(
    cursor: ByteCursor, header: TwkbHeader, state: Coordinate,
) -> tuple[LineString, Coordinate]:
    count = cursor.read_uvarint()
    points = []
    for _ in range(count):
        point, state = _read_point(cursor, header, state)
        points.append(point)
    return LineString(points), state


def _read_polygon(
    cursor: ByteCursor, header: TwkbHeader, state: Coordinate,
) -> tuple[Polygon, Coordinate]:
    ring_count = cursor.read_uvarint()
    rings = []
    for _ in range(ring_count):
        ring, state = _read_line_string(cursor, header, state)
        rings.append(ring)
    return Polygon(rings), state


def _read_component_count(cursor: ByteCursor, header: TwkbHeader) -> int:
    count = cursor.read_uvarint()
    if header.has_id_list:
        ids = [cursor.read_svarint() for _ in range(count)]
        logger.debug(f"TWKB id list skipped: {len(ids)} ids")
    return count


def _read_homogeneous(read_component: Callable, cls: type) -> Callable:
    def read(
        cursor: ByteCursor, header: TwkbHeader, state: Coordinate,
    ) -> tuple[Geometry, Coordinate]:
        components = []
        for _ in range(_read_component_count(cursor, header)):
            component, state = read_component(cursor, header, state)
            components.append(component)
        return cls(components), state
    return read


def _read_geometry_collection(
    cursor: ByteCursor, header: TwkbHeader, state: Coordinate,
) -> tuple[GeometryCollection, Coordinate]:
    count = _read_component_count(cursor, header)
    # Every member carries its own header and starts from the origin.
    geometries = [_read_geometry(cursor) for _ in range(count)]
    return GeometryCollection(geometries), state


_READERS: dict[GeometryKind, Callable] = {
    GeometryKind.POINT: _read_point,
    GeometryKind.LINESTRING: _read_line_string,
    GeometryKind.POLYGON: _read_polygon,
    GeometryKind.MULTIPOINT: _read_homogeneous(_read_point, MultiPoint),
    GeometryKind.MULTILINESTRING: _read_homogeneous(_read_line_string, MultiLineString),
    GeometryKind.MULTIPOLYGON: _read_homogeneous(_read_polygon, MultiPolygon),
    GeometryKind.GEOMETRYCOLLECTION: _read_geometry_collection,
}
