"""Convert between the geometry model and GeoJSON (RFC 7946) dicts.

Positions are ``[x, y]`` or ``[x, y, z]``. A fourth position element is
read as M; M is written only when present, with Z filled in as 0.0 if the
point has none. Features are reduced to their geometry and a
FeatureCollection becomes a GeometryCollection of its feature geometries.
"""

from __future__ import annotations

import json

from twkb.errors import InputError, TwkbError, UnsupportedGeometryType
from twkb.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def to_geojson(geometry: Geometry) -> dict:
    """Export a geometry to a GeoJSON geometry dict."""
    if isinstance(geometry, GeometryCollection):
        return {
            "type": "GeometryCollection",
            "geometries": [to_geojson(g) for g in geometry.components],
        }
    if isinstance(geometry, Point):
        return {"type": "Point", "coordinates": _position(geometry)}
    if isinstance(geometry, LineString):
        return {"type": "LineString", "coordinates": _positions(geometry)}
    if isinstance(geometry, Polygon):
        return {"type": "Polygon", "coordinates": [_positions(r) for r in geometry.components]}
    if isinstance(geometry, MultiPoint):
        return {
            "type": "MultiPoint",
            "coordinates": [_position(p) for p in geometry.components if not p.is_empty()],
        }
    if isinstance(geometry, MultiLineString):
        return {"type": "MultiLineString", "coordinates": [_positions(l) for l in geometry.components]}
    if isinstance(geometry, MultiPolygon):
        return {
            "type": "MultiPolygon",
            "coordinates": [[_positions(r) for r in p.components] for p in geometry.components],
        }
    raise UnsupportedGeometryType(f"Cannot export {type(geometry).__name__} to GeoJSON")


def from_geojson(obj: dict | str) -> Geometry:
    """Parse a GeoJSON geometry, Feature or FeatureCollection.

    Args:
        obj: GeoJSON as a dict or a JSON string.

    Raises:
        InputError: Malformed JSON or coordinates.
        UnsupportedGeometryType: Unknown ``type`` member.
    """
    if isinstance(obj, str):
        try:
            obj = json.loads(obj)
        except json.JSONDecodeError as e:
            raise InputError(f"Invalid GeoJSON: {e}") from e
    if not isinstance(obj, dict):
        raise InputError(f"GeoJSON object must be a dict, got {type(obj).__name__}")

    geom_type = obj.get("type")
    try:
        if geom_type == "FeatureCollection":
            return GeometryCollection([
                from_geojson(f["geometry"]) for f in obj.get("features", [])
                if f.get("geometry") is not None
            ])
        if geom_type == "Feature":
            geometry = obj.get("geometry")
            if geometry is None:
                raise InputError("Feature has no geometry")
            return from_geojson(geometry)
        if geom_type == "GeometryCollection":
            return GeometryCollection([from_geojson(g) for g in obj.get("geometries", [])])

        coords = obj.get("coordinates")
        if coords is None:
            raise InputError(f"GeoJSON {geom_type} has no coordinates")
        if geom_type == "Point":
            return _point(coords)
        if geom_type == "LineString":
            return _line(coords)
        if geom_type == "Polygon":
            return Polygon([_line(r) for r in coords])
        if geom_type == "MultiPoint":
            return MultiPoint([_point(c) for c in coords])
        if geom_type == "MultiLineString":
            return MultiLineString([_line(l) for l in coords])
        if geom_type == "MultiPolygon":
            return MultiPolygon([Polygon([_line(r) for r in p]) for p in coords])
    except TwkbError:
        raise
    except (TypeError, KeyError, AttributeError, ValueError) as e:
        raise InputError(f"Malformed GeoJSON {geom_type}: {e}") from e

    raise UnsupportedGeometryType(f"GeoJSON type {geom_type!r} not supported")


def _position(point: Point) -> list[float]:
    if point.is_empty():
        return []
    pos = [point.x, point.y]
    if point.z is not None or point.m is not None:
        pos.append(point.z if point.z is not None else 0.0)
    if point.m is not None:
        pos.append(point.m)
    return pos


def _positions(line: LineString) -> list[list[float]]:
    return [_position(p) for p in line.components]


def _point(coords: list) -> Point:
    if len(coords) == 0:
        return Point()
    if len(coords) < 2:
        raise InputError(f"Position needs at least 2 values: {coords}")
    x, y = float(coords[0]), float(coords[1])
    z = float(coords[2]) if len(coords) > 2 else None
    m = float(coords[3]) if len(coords) > 3 else None
    return Point(x, y, z, m)


def _line(coords: list) -> LineString:
    return LineString([_point(c) for c in coords])
