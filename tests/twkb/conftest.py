"""Shared fixtures for TWKB codec tests."""

from __future__ import annotations

import pytest

from twkb.geometry import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def square(x0: float, y0: float, size: float) -> LineString:
    """Closed square ring, counter-clockwise from (x0, y0)."""
    return LineString([
        Point(x0, y0),
        Point(x0 + size, y0),
        Point(x0 + size, y0 + size),
        Point(x0, y0 + size),
        Point(x0, y0),
    ])


@pytest.fixture
def patrol_route():
    return LineString([
        Point(-122.41942, 37.77493),
        Point(-122.41801, 37.77602),
        Point(-122.41703, 37.77705),
        Point(-122.41690, 37.77811),
    ])


@pytest.fixture
def zone_with_hole():
    return Polygon([square(0.0, 0.0, 10.0), square(2.0, 2.0, 3.0)])


@pytest.fixture
def mixed_collection(patrol_route, zone_with_hole):
    return GeometryCollection([
        Point(1.5, -2.25, 10.0),
        patrol_route,
        MultiPolygon([zone_with_hole, Polygon([square(20.0, 20.0, 1.0)])]),
        GeometryCollection([MultiPoint([Point(3.0, 4.0), Point(-5.0, 6.0)])]),
    ])


@pytest.fixture
def all_geometries(patrol_route, zone_with_hole, mixed_collection):
    """One non-empty 2D geometry of each kind."""
    return [
        Point(-122.41942, 37.77493),
        patrol_route,
        zone_with_hole,
        MultiPoint([Point(0.0, 0.0), Point(1.0, 1.0), Point(-3.5, 2.25)]),
        MultiLineString([patrol_route, LineString([Point(5.0, 5.0), Point(6.0, 7.0)])]),
        MultiPolygon([zone_with_hole, Polygon([square(-20.0, -20.0, 4.0)])]),
        mixed_collection,
    ]
