"""Tiny Well-known Binary (TWKB) geometry codec.

Encodes points, lines, polygons and their collections into a compact,
delta-coded varint byte stream, and decodes them back.
See https://github.com/TWKB/Specification/blob/master/twkb.md
"""

from loguru import logger

from twkb.errors import (
    GeometryError,
    InputError,
    InvalidOperand,
    PrecisionOutOfRange,
    TruncatedInput,
    TwkbError,
    UnsupportedGeometryType,
)
from twkb.geojson import from_geojson, to_geojson
from twkb.geometry import (
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
from twkb.header import TwkbHeader
from twkb.reader import decode, decode_header
from twkb.writer import WriteOptions, encode, encode_with

__all__ = [
    "BoundingBox",
    "Geometry",
    "GeometryCollection",
    "GeometryError",
    "GeometryKind",
    "InputError",
    "InvalidOperand",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "PrecisionOutOfRange",
    "TruncatedInput",
    "TwkbError",
    "TwkbHeader",
    "UnsupportedGeometryType",
    "WriteOptions",
    "decode",
    "decode_header",
    "encode",
    "encode_with",
    "from_geojson",
    "to_geojson",
]

# Library logging stays silent until an application opts in.
logger.disable("twkb")
