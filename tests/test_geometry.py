"""Tests for geometry classes."""

import pytest

from geocodec import (
    MBR,
    Coordinate,
    EmptyGeometryError,
    Geometry,
    GeometryError,
    GeometryKind,
    GeometryKindMismatchError,
    InvalidCoordinateError,
    LineString,
    LineStringZ,
    MultiLineString,
    MultiPoint,
    MultiPointZ,
    MultiPolygon,
    Point,
    PointSequence,
    PointZ,
    Polygon,
    PolygonZ,
    UnsupportedGeometryKindError,
    decode_ewkb,
    encode_ewkb,
    geometry_class,
    geometry_from_coordinates,
)


class TestPoint:
    def test_point_2d(self):
        pt = Point((-122.0, 47.0))
        assert pt.x == -122.0
        assert pt.y == 47.0
        assert pt.kind is GeometryKind.POINT
        assert pt.dimension == 2
        assert not pt.has_z
        assert pt.srid is None

    def test_point_3d(self):
        pt = PointZ((-122.0, 47.0, 100.0), srid=4326)
        assert pt.z == 100.0
        assert pt.has_z
        assert pt.srid == 4326

    def test_point_wrong_dimension(self):
        with pytest.raises(InvalidCoordinateError):
            Point((1.0, 2.0, 3.0))
        with pytest.raises(InvalidCoordinateError):
            PointZ((1.0, 2.0))

    def test_point_wkt_2d(self):
        assert Point((-122.0, 47.0)).wkt == "POINT (-122.0 47.0)"

    def test_point_wkt_3d(self):
        assert PointZ((-122.0, 47.0, 100.0)).wkt == "POINT Z (-122.0 47.0 100.0)"

    def test_point_mbr(self):
        assert Point((-122.0, 47.0)).mbr() == MBR(-122.0, 47.0, -122.0, 47.0)

    def test_point_rejects_string(self):
        with pytest.raises(InvalidCoordinateError):
            Point("12")

    def test_point_accepts_coordinate(self):
        pt = Point(Coordinate((1, 2)))
        assert pt.coordinates == Coordinate((1.0, 2.0))


class TestLineString:
    def test_linestring_basic(self):
        line = LineString([(-122.0, 47.0), (-122.1, 47.1), (-122.2, 47.2)])
        assert len(line) == 3
        assert not line.has_z

    def test_linestring_wkt(self):
        line = LineString([(-122.0, 47.0), (-122.1, 47.1)])
        assert line.wkt == "LINESTRING (-122.0 47.0, -122.1 47.1)"

    def test_linestring_z_wkt(self):
        line = LineStringZ([(0, 0, 1), (1, 1, 2)])
        assert line.wkt == "LINESTRING Z (0.0 0.0 1.0, 1.0 1.0 2.0)"

    def test_linestring_mbr(self):
        line = LineString([(-122.0, 47.0), (-122.5, 47.5), (-122.2, 47.2)])
        assert line.mbr() == MBR(-122.5, 47.0, -122.0, 47.5)

    def test_empty_linestring(self):
        line = LineString([])
        assert line.wkt == "LINESTRING EMPTY"
        with pytest.raises(EmptyGeometryError):
            line.mbr()

    def test_linestring_is_not_closed(self):
        line = LineString([(0, 0), (1, 0), (1, 1)])
        assert len(line) == 3


class TestPolygon:
    def test_ring_is_closed(self):
        poly = Polygon([[(0, 0), (0, 1), (1, 1), (1, 0)]])
        ring = poly.exterior
        assert len(ring) == 5
        assert ring[-1] == Coordinate((0, 0))

    def test_closed_ring_unchanged(self):
        poly = Polygon([[(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]])
        assert len(poly.exterior) == 5

    def test_polygon_with_hole(self):
        exterior = [(0, 0), (10, 0), (10, 10), (0, 10)]
        hole = [(2, 2), (8, 2), (8, 8), (2, 8)]
        poly = Polygon([exterior, hole])
        assert len(poly.interiors) == 1
        assert poly.interiors[0].is_closed

    def test_polygon_wkt(self):
        poly = Polygon([[(0, 0), (0, 1), (1, 1), (1, 0)]])
        assert poly.wkt == "POLYGON ((0.0 0.0, 0.0 1.0, 1.0 1.0, 1.0 0.0, 0.0 0.0))"

    def test_polygon_z(self):
        poly = PolygonZ([[(0, 0, 5), (0, 1, 5), (1, 1, 5)]])
        assert poly.exterior[-1] == Coordinate((0, 0, 5))
        assert poly.wkt.startswith("POLYGON Z ((")

    def test_empty_polygon(self):
        poly = Polygon([])
        assert poly.exterior is None
        assert poly.interiors == []
        assert poly.wkt == "POLYGON EMPTY"

    def test_input_not_mutated(self):
        ring = PointSequence([(0, 0), (0, 1), (1, 1)])
        Polygon([ring])
        assert len(ring) == 3


class TestMultiGeometries:
    def test_multipoint(self):
        mp = MultiPoint([(0, 0), (1, 1)])
        assert mp.kind is GeometryKind.MULTIPOINT
        assert len(mp) == 2
        assert mp.wkt == "MULTIPOINT ((0.0 0.0), (1.0 1.0))"

    def test_multipoint_z(self):
        mp = MultiPointZ([(0, 0, 1)])
        assert mp.kind is GeometryKind.MULTIPOINTZ
        assert mp.dimension == 3

    def test_multilinestring_is_not_closed(self):
        mls = MultiLineString([[(0, 0), (1, 1)], [(2, 2), (3, 3)]])
        assert len(mls) == 2
        assert len(mls.coordinates[0]) == 2
        assert mls.wkt == "MULTILINESTRING ((0.0 0.0, 1.0 1.0), (2.0 2.0, 3.0 3.0))"

    def test_multipolygon_rings_closed(self):
        mpoly = MultiPolygon(
            [
                [[(0, 0), (1, 0), (1, 1)]],
                [[(5, 5), (6, 5), (6, 6), (5, 5)]],
            ]
        )
        assert len(mpoly) == 2
        assert len(mpoly.coordinates[0][0]) == 4
        assert len(mpoly.coordinates[1][0]) == 4

    def test_multipolygon_mbr(self):
        mpoly = MultiPolygon(
            [
                [[(0, 0), (1, 0), (1, 1)]],
                [[(5, 5), (6, 5), (6, 6)]],
            ]
        )
        assert mpoly.mbr() == MBR(0.0, 0.0, 6.0, 6.0)

    def test_multipolygon_wkt(self):
        mpoly = MultiPolygon([[[(0, 0), (1, 0), (1, 1)]]])
        assert mpoly.wkt == "MULTIPOLYGON (((0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0)))"


class TestSrid:
    def test_srid_range(self):
        Point((0, 0), srid=0)
        Point((0, 0), srid=0xFFFFFFFF)
        with pytest.raises(GeometryError, match="out of range"):
            Point((0, 0), srid=-1)
        with pytest.raises(GeometryError, match="out of range"):
            Point((0, 0), srid=0x100000000)

    def test_srid_type(self):
        with pytest.raises(GeometryError, match="must be an integer"):
            Point((0, 0), srid="4326")


class TestFromGeometry:
    def test_matching_kind(self):
        pt = Point((1, 2))
        assert Point.from_geometry(pt) is pt

    def test_mismatch(self):
        line = LineString([(0, 0), (1, 1)])
        with pytest.raises(GeometryKindMismatchError, match="expected=Point, got=LineString"):
            Point.from_geometry(line)

    def test_decoded_mismatch(self):
        decoded = decode_ewkb(encode_ewkb(LineString([(0, 0), (1, 1)], srid=4326)))
        with pytest.raises(GeometryKindMismatchError, match="expected=Point, got=LineString"):
            Point.from_geometry(decoded)
        assert LineString.from_geometry(decoded) is decoded

    def test_dimension_mismatch(self):
        with pytest.raises(GeometryKindMismatchError, match="expected=Point, got=PointZ"):
            Point.from_geometry(PointZ((1, 2, 3)))


class TestGeometryClass:
    def test_lookup(self):
        assert geometry_class(GeometryKind.POLYGONZ) is PolygonZ
        assert geometry_class(GeometryKind.MULTIPOINT) is MultiPoint

    def test_collection_unsupported(self):
        with pytest.raises(UnsupportedGeometryKindError, match="GeometryCollection"):
            geometry_class(GeometryKind.GEOMETRYCOLLECTION)

    def test_from_coordinates(self):
        geom = geometry_from_coordinates(GeometryKind.LINESTRINGZ, [(0, 0, 0), (1, 1, 1)], srid=3857)
        assert isinstance(geom, LineStringZ)
        assert geom.srid == 3857

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            Geometry((0, 0))

    def test_equality(self):
        assert Point((1, 2), srid=4326) == Point((1.0, 2.0), srid=4326)
        assert Point((1, 2), srid=4326) != Point((1, 2), srid=3857)
        assert MultiPoint([(1, 2)]) != LineString([(1, 2)])
