"""Geometry model consumed and produced by the TWKB codec.

Seven variants form a closed set, matching the TWKB type codes:

    Point, LineString, Polygon                      -- simple kinds
    MultiPoint, MultiLineString, MultiPolygon       -- homogeneous collections
    GeometryCollection                              -- heterogeneous collection

Every variant constructed with no arguments is the empty form of that kind.
Coordinates are plain floats; Z and M are optional per point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


class GeometryKind(Enum):
    """Geometry variant, valued by its TWKB type code."""
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extent. Z and M are None when no point carries them."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    min_z: float | None = None
    max_z: float | None = None
    min_m: float | None = None
    max_m: float | None = None

    def contains(self, point: Point) -> bool:
        """True if every present axis of ``point`` lies within the box."""
        if point.is_empty():
            return False
        if not (self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y):
            return False
        if point.z is not None and self.min_z is not None:
            if not self.min_z <= point.z <= self.max_z:
                return False
        if point.m is not None and self.min_m is not None:
            if not self.min_m <= point.m <= self.max_m:
                return False
        return True


@dataclass
class Point:
    x: float | None = None
    y: float | None = None
    z: float | None = None
    m: float | None = None

    def kind(self) -> GeometryKind:
        return GeometryKind.POINT

    def is_empty(self) -> bool:
        return self.x is None and self.y is None

    def has_z(self) -> bool:
        return self.z is not None

    def is_measured(self) -> bool:
        return self.m is not None

    def coordinates(self) -> Iterator[Point]:
        if not self.is_empty():
            yield self

    def bounding_box(self) -> BoundingBox | None:
        return _bounding_box(self)


class _Composite:
    """Shared behaviour of every variant that holds ordered components."""

    components: list

    def is_empty(self) -> bool:
        return all(c.is_empty() for c in self.components)

    def has_z(self) -> bool:
        return any(c.has_z() for c in self.components)

    def is_measured(self) -> bool:
        return any(c.is_measured() for c in self.components)

    def component_count(self) -> int:
        return len(self.components)

    def coordinates(self) -> Iterator[Point]:
        for component in self.components:
            yield from component.coordinates()

    def bounding_box(self) -> BoundingBox | None:
        return _bounding_box(self)


@dataclass
class LineString(_Composite):
    """Ordered sequence of points."""
    components: list[Point] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.LINESTRING

    @property
    def points(self) -> list[Point]:
        return self.components

    def point_count(self) -> int:
        return len(self.components)


@dataclass
class Polygon(_Composite):
    """Ordered rings: the first is the exterior, the rest are holes."""
    components: list[LineString] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.POLYGON

    @property
    def rings(self) -> list[LineString]:
        return self.components

    @property
    def exterior(self) -> LineString | None:
        return self.components[0] if self.components else None

    @property
    def interiors(self) -> list[LineString]:
        return self.components[1:]


@dataclass
class MultiPoint(_Composite):
    components: list[Point] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.MULTIPOINT


@dataclass
class MultiLineString(_Composite):
    components: list[LineString] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.MULTILINESTRING


@dataclass
class MultiPolygon(_Composite):
    components: list[Polygon] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.MULTIPOLYGON


@dataclass
class GeometryCollection(_Composite):
    """Heterogeneous collection; components may be any variant."""
    components: list[Geometry] = field(default_factory=list)

    def kind(self) -> GeometryKind:
        return GeometryKind.GEOMETRYCOLLECTION


Geometry = Union[
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
]

# Collection kinds whose components carry no header of their own, keyed
# to the kind of each component.
HOMOGENEOUS_COMPONENT_KIND: dict[GeometryKind, GeometryKind] = {
    GeometryKind.MULTIPOINT: GeometryKind.POINT,
    GeometryKind.MULTILINESTRING: GeometryKind.LINESTRING,
    GeometryKind.MULTIPOLYGON: GeometryKind.POLYGON,
}

GEOMETRY_CLASSES: dict[GeometryKind, type] = {
    GeometryKind.POINT: Point,
    GeometryKind.LINESTRING: LineString,
    GeometryKind.POLYGON: Polygon,
    GeometryKind.MULTIPOINT: MultiPoint,
    GeometryKind.MULTILINESTRING: MultiLineString,
    GeometryKind.MULTIPOLYGON: MultiPolygon,
    GeometryKind.GEOMETRYCOLLECTION: GeometryCollection,
}


def _bounding_box(geometry: Geometry) -> BoundingBox | None:
    xs: list[float] = []
    ys: list[float] = []
    zs: list[float] = []
    ms: list[float] = []
    for point in geometry.coordinates():
        xs.append(point.x)
        ys.append(point.y)
        if point.z is not None:
            zs.append(point.z)
        if point.m is not None:
            ms.append(point.m)

    if not xs:
        return None

    return BoundingBox(
        min_x=min(xs),
        min_y=min(ys),
        max_x=max(xs),
        max_y=max(ys),
        min_z=min(zs) if zs else None,
        max_z=max(zs) if zs else None,
        min_m=min(ms) if ms else None,
        max_m=max(ms) if ms else None,
    )
