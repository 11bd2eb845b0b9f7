"""Encode geometry objects as TWKB bytes.

The writer mirrors the reader: one header per independently-headered
geometry, per-kind writers that thread the delta state explicitly, and no
per-component header inside MultiPoint / MultiLineString / MultiPolygon.

Final byte order of one geometry:

    type, metadata, [extended precision], [size varint], [bbox varints], body
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple, Union

from loguru import logger

from twkb.binary import ByteSink
from twkb.delta import ORIGIN, Coordinate, to_scaled
from twkb.errors import GeometryError, UnsupportedGeometryType
from twkb.geometry import (
    HOMOGENEOUS_COMPONENT_KIND,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    Point,
    Polygon,
)
from twkb.header import (
    pack_extended_precision_byte,
    pack_metadata_byte,
    pack_type_byte,
)


@dataclass(frozen=True)
class WriteOptions:
    """Options fixed for one top-level encode call.

    Attributes:
        digits_xy: Decimal places kept for X and Y (-8..7).
        digits_z: Decimal places kept for Z (0..7).
        digits_m: Decimal places kept for M (0..7).
        include_size: Prefix each body with its byte length.
        include_bounding_box: Write the bounding box of each non-empty geometry.
    """
    digits_xy: int = 5
    digits_z: int = 0
    digits_m: int = 0
    include_size: bool = False
    include_bounding_box: bool = False

    @classmethod
    def from_settings(cls, settings) -> WriteOptions:
        """Build options from a :class:`twkb.config.TwkbSettings` instance."""
        return cls(
            digits_xy=settings.digits_xy,
            digits_z=settings.digits_z,
            digits_m=settings.digits_m,
            include_size=settings.include_size,
            include_bounding_box=settings.include_bounding_box,
        )


class _Context(NamedTuple):
    """Per-header write parameters shared by every component below it."""
    options: WriteOptions
    has_z: bool
    has_m: bool


def encode(
    geometry: Geometry,
    as_hex: bool = False,
    digits_xy: int = 5,
    digits_z: int = 0,
    digits_m: int = 0,
    include_size: bool = False,
    include_bounding_box: bool = False,
) -> Union[bytes, str]:
    """Encode a geometry as TWKB.

    Args:
        geometry: Geometry to encode.
        as_hex: Return a lowercase hex string instead of bytes.
        digits_xy: Decimal places kept for X and Y.
        digits_z: Decimal places kept for Z.
        digits_m: Decimal places kept for M.
        include_size: Write the size attribute.
        include_bounding_box: Write bounding boxes.

    Raises:
        PrecisionOutOfRange: A digit count does not fit its header field.
        UnsupportedGeometryType: ``geometry`` is not one of the seven variants.
        GeometryError: ``geometry`` cannot be represented in TWKB.
    """
    options = WriteOptions(
        digits_xy=digits_xy,
        digits_z=digits_z,
        digits_m=digits_m,
        include_size=include_size,
        include_bounding_box=include_bounding_box,
    )
    return encode_with(geometry, options, as_hex=as_hex)


def encode_with(
    geometry: Geometry, options: WriteOptions | None = None, as_hex: bool = False,
) -> Union[bytes, str]:
    """Encode a geometry with a prepared :class:`WriteOptions`."""
    if options is None:
        options = WriteOptions()
    data = _write_geometry(geometry, options)
    logger.debug(f"TWKB encoded {len(data)} bytes")
    return data.hex() if as_hex else data


def _kind_of(geometry) -> GeometryKind:
    kind_fn = getattr(geometry, "kind", None)
    kind = kind_fn() if callable(kind_fn) else None
    if not isinstance(kind, GeometryKind):
        raise UnsupportedGeometryType(f"Cannot encode {type(geometry).__name__} as TWKB")
    return kind


def _write_geometry(geometry: Geometry, options: WriteOptions) -> bytes:
    kind = _kind_of(geometry)
    has_z = geometry.has_z()
    has_m = geometry.is_measured()
    is_empty = geometry.is_empty()

    head = ByteSink()
    head.write_uint8(pack_type_byte(kind, options.digits_xy))
    head.write_uint8(pack_metadata_byte(
        # An empty body has no room for a bounding box.
        has_bounding_box=options.include_bounding_box and not is_empty,
        has_size=options.include_size,
        has_extended_precision=has_z or has_m,
        is_empty=is_empty,
    ))
    if has_z or has_m:
        head.write_uint8(
            pack_extended_precision_byte(has_z, has_m, options.digits_z, options.digits_m)
        )

    body = ByteSink()
    if not is_empty:
        ctx = _Context(options, has_z, has_m)
        if options.include_bounding_box:
            _write_bounding_box(body, geometry, ctx)
        _WRITERS[kind](body, geometry, ctx, ORIGIN)

    if options.include_size:
        head.write_uvarint(len(body))
    head.write_bytes(body.bytes())

    logger.debug(f"TWKB {kind.name}: header {len(head) - len(body)} bytes, body {len(body)} bytes")
    return head.bytes()


def _write_bounding_box(sink: ByteSink, geometry: Geometry, ctx: _Context) -> None:
    options = ctx.options
    axes = [("x", options.digits_xy), ("y", options.digits_xy)]
    if ctx.has_z:
        axes.append(("z", options.digits_z))
    if ctx.has_m:
        axes.append(("m", options.digits_m))

    points = list(geometry.coordinates())
    for axis, digits in axes:
        # Same scaled values the point writer emits, missing Z/M included as 0.
        scaled = [to_scaled(getattr(point, axis), digits) for point in points]
        low = min(scaled)
        sink.write_svarint(low)
        sink.write_svarint(max(scaled) - low)


def _write_point(sink: ByteSink, point: Point, ctx: _Context, state: Coordinate) -> Coordinate:
    if point.is_empty():
        raise GeometryError("Empty point inside a non-empty geometry has no TWKB encoding")

    options = ctx.options
    current = Coordinate(
        to_scaled(point.x, options.digits_xy),
        to_scaled(point.y, options.digits_xy),
        to_scaled(point.z, options.digits_z) if ctx.has_z else 0,
        to_scaled(point.m, options.digits_m) if ctx.has_m else 0,
    )
    sink.write_svarint(current.x - state.x)
    sink.write_svarint(current.y - state.y)
    if ctx.has_z:
        sink.write_svarint(current.z - state.z)
    if ctx.has_m:
        sink.write_svarint(current.m - state.m)
    return current


def _write_line_string(
    sink: ByteSink, line: LineString, ctx: _Context, state: Coordinate,
) -> Coordinate:
    sink.write_uvarint(line.point_count())
    for point in line.components:
        state = _write_point(sink, point, ctx, state)
    return state


def _write_polygon(sink: ByteSink, polygon: Polygon, ctx: _Context, state: Coordinate) -> Coordinate:
    sink.write_uvarint(polygon.component_count())
    for ring in polygon.components:
        state = _write_line_string(sink, ring, ctx, state)
    return state


def _write_homogeneous(write_component: Callable, component_kind: GeometryKind) -> Callable:
    def write(sink: ByteSink, multi: Geometry, ctx: _Context, state: Coordinate) -> Coordinate:
        sink.write_uvarint(multi.component_count())
        for component in multi.components:
            if _kind_of(component) is not component_kind:
                raise GeometryError(
                    f"{multi.kind().name} cannot hold a {component.kind().name}"
                )
            state = write_component(sink, component, ctx, state)
        return state
    return write


def _write_geometry_collection(
    sink: ByteSink, collection: GeometryCollection, ctx: _Context, state: Coordinate,
) -> Coordinate:
    sink.write_uvarint(collection.component_count())
    for component in collection.components:
        # Own header, own precision flags, own delta state.
        sink.write_bytes(_write_geometry(component, ctx.options))
    return state


_WRITERS: dict[GeometryKind, Callable] = {
    GeometryKind.POINT: _write_point,
    GeometryKind.LINESTRING: _write_line_string,
    GeometryKind.POLYGON: _write_polygon,
    GeometryKind.MULTIPOINT: _write_homogeneous(
        _write_point, HOMOGENEOUS_COMPONENT_KIND[GeometryKind.MULTIPOINT]),
    GeometryKind.MULTILINESTRING: _write_homogeneous(
        _write_line_string, HOMOGENEOUS_COMPONENT_KIND[GeometryKind.MULTILINESTRING]),
    GeometryKind.MULTIPOLYGON: _write_homogeneous(
        _write_polygon, HOMOGENEOUS_COMPONENT_KIND[GeometryKind.MULTIPOLYGON]),
    GeometryKind.GEOMETRYCOLLECTION: _write_geometry_collection,
}
