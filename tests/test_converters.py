"""Tests for WKT, Shapely and pyproj converters."""

import pytest
import shapely
from shapely.geometry import GeometryCollection as ShapelyGeometryCollection
from shapely.geometry import LinearRing as ShapelyLinearRing
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon

from geocodec import (
    EmptyGeometryError,
    GeometryError,
    GeometryKind,
    LineString,
    LineStringZ,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    PointZ,
    Polygon,
    PolygonZ,
    UnsupportedGeometryKindError,
    geometry_from_shapely,
    geometry_to_shapely,
    reproject_geometry,
    to_wkt,
)

from .samples import SAMPLE_GEOMETRIES


class TestToWkt:
    def test_point_wkt(self):
        assert to_wkt(Point((-122.0, 47.0))) == "POINT (-122.0 47.0)"

    def test_linestring_wkt(self):
        line = LineString([(0, 0), (1, 1), (2, 2)])
        assert to_wkt(line) == "LINESTRING (0.0 0.0, 1.0 1.0, 2.0 2.0)"

    def test_wkt_parses_in_shapely(self):
        for geom in SAMPLE_GEOMETRIES:
            parsed = shapely.from_wkt(to_wkt(geom))
            assert parsed.equals(geometry_to_shapely(geom))


class TestToShapely:
    def test_point(self):
        shape = geometry_to_shapely(Point((-122.0, 47.0)))
        assert isinstance(shape, ShapelyPoint)
        assert shape.x == -122.0
        assert shape.y == 47.0

    def test_point_z(self):
        shape = geometry_to_shapely(PointZ((1, 2, 3)))
        assert shape.has_z
        assert shape.z == 3.0

    def test_linestring(self):
        shape = geometry_to_shapely(LineString([(0, 0), (1, 1), (2, 2)]))
        assert isinstance(shape, ShapelyLineString)
        assert len(shape.coords) == 3

    def test_polygon_with_hole(self):
        poly = Polygon(
            [
                [(0, 0), (10, 0), (10, 10), (0, 10)],
                [(2, 2), (8, 2), (8, 8), (2, 8)],
            ]
        )
        shape = geometry_to_shapely(poly)
        assert isinstance(shape, ShapelyPolygon)
        assert len(shape.interiors) == 1
        assert shape.area == 100 - 36

    def test_multipoint(self):
        shape = geometry_to_shapely(MultiPoint([(0, 0), (1, 1), (2, 2)]))
        assert shape.geom_type == "MultiPoint"
        assert len(shape.geoms) == 3

    def test_multilinestring(self):
        mls = MultiLineString([[(0, 0), (1, 1)], [(2, 2), (3, 3)]])
        shape = geometry_to_shapely(mls)
        assert shape.geom_type == "MultiLineString"
        assert shape.length == pytest.approx(2 * 2**0.5)

    def test_multipolygon(self):
        mpoly = MultiPolygon(
            [
                [[(0, 0), (1, 0), (1, 1), (0, 1)]],
                [[(5, 5), (7, 5), (7, 7), (5, 7)]],
            ]
        )
        shape = geometry_to_shapely(mpoly)
        assert isinstance(shape, ShapelyMultiPolygon)
        assert shape.area == 5.0

    def test_empty_polygon(self):
        assert geometry_to_shapely(Polygon([])).is_empty

    def test_unsupported_kind(self):
        class Collection(Point):
            kind = GeometryKind.GEOMETRYCOLLECTION

        with pytest.raises(UnsupportedGeometryKindError, match="GeometryCollection"):
            geometry_to_shapely(Collection((0, 0)))


class TestFromShapely:
    @pytest.mark.parametrize("geom", SAMPLE_GEOMETRIES, ids=lambda g: g.kind.label)
    def test_round_trip(self, geom):
        back = geometry_from_shapely(geometry_to_shapely(geom), srid=geom.srid)
        assert back == geom

    def test_z_detected(self):
        geom = geometry_from_shapely(ShapelyLineString([(0, 0, 1), (1, 1, 2)]))
        assert isinstance(geom, LineStringZ)

    def test_polygon_z(self):
        shape = ShapelyPolygon([(0, 0, 1), (1, 0, 1), (1, 1, 1)])
        geom = geometry_from_shapely(shape)
        assert isinstance(geom, PolygonZ)
        assert geom.exterior.is_closed

    def test_linear_ring(self):
        geom = geometry_from_shapely(ShapelyLinearRing([(0, 0), (1, 0), (1, 1)]))
        assert isinstance(geom, LineString)
        assert len(geom) == 4

    def test_srid_from_shapely(self):
        shape = shapely.set_srid(ShapelyPoint(1, 2), 3857)
        assert geometry_from_shapely(shape).srid == 3857
        assert geometry_from_shapely(shape, srid=4326).srid == 4326

    def test_no_srid(self):
        assert geometry_from_shapely(ShapelyPoint(1, 2)).srid is None

    def test_empty_point(self):
        with pytest.raises(EmptyGeometryError):
            geometry_from_shapely(ShapelyPoint())

    def test_geometry_collection(self):
        shape = ShapelyGeometryCollection([ShapelyPoint(0, 0)])
        with pytest.raises(UnsupportedGeometryKindError):
            geometry_from_shapely(shape)


class TestReproject:
    def test_wgs84_to_web_mercator(self):
        pt = Point((10.0, 0.0), srid=4326)
        projected = reproject_geometry(pt, 3857)
        assert projected.srid == 3857
        assert projected.x == pytest.approx(1113194.9079, abs=0.01)
        assert projected.y == pytest.approx(0.0, abs=0.01)

    def test_round_trip(self):
        line = LineString([(-122.0, 47.0), (-121.5, 47.5)], srid=4326)
        back = reproject_geometry(reproject_geometry(line, 3857), 4326)
        assert isinstance(back, LineString)
        for a, b in zip(back.coordinates, line.coordinates):
            assert a.x == pytest.approx(b.x)
            assert a.y == pytest.approx(b.y)

    def test_z_preserved(self):
        pt = PointZ((10.0, 0.0, 250.0), srid=4326)
        projected = reproject_geometry(pt, 3857)
        assert isinstance(projected, PointZ)
        assert projected.z == 250.0

    def test_explicit_source_srid(self):
        pt = Point((10.0, 0.0))
        projected = reproject_geometry(pt, 3857, source_srid=4326)
        assert projected.x == pytest.approx(1113194.9079, abs=0.01)

    def test_missing_source_srid(self):
        with pytest.raises(GeometryError, match="source SRID"):
            reproject_geometry(Point((0, 0)), 3857)

    def test_polygon_rings_kept(self):
        poly = Polygon([[(0, 0), (1, 0), (1, 1)]], srid=4326)
        projected = reproject_geometry(poly, 3857)
        assert projected.exterior.is_closed
        assert len(projected.exterior) == 4
