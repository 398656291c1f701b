"""
Conversions between geocodec geometries and other representations.

This module provides:
- WKT (Well-Known Text) output
- Conversion to and from Shapely geometries
- Reprojection between coordinate reference systems using pyproj
"""

from typing import Any

import shapely
from pyproj import CRS, Transformer
from shapely.geometry import (
    LineString as ShapelyLineString,
)
from shapely.geometry import (
    MultiLineString as ShapelyMultiLineString,
)
from shapely.geometry import (
    MultiPoint as ShapelyMultiPoint,
)
from shapely.geometry import (
    MultiPolygon as ShapelyMultiPolygon,
)
from shapely.geometry import (
    Point as ShapelyPoint,
)
from shapely.geometry import (
    Polygon as ShapelyPolygon,
)
from shapely.geometry.base import BaseGeometry

from .coordinates import Coordinate
from .errors import EmptyGeometryError, GeometryError, UnsupportedGeometryKindError
from .geometry import Geometry, geometry_from_coordinates
from .kinds import GeometryKind

# Shapely geom_type -> 2D geometry kind
_SHAPELY_KINDS = {
    "Point": GeometryKind.POINT,
    "LineString": GeometryKind.LINESTRING,
    "LinearRing": GeometryKind.LINESTRING,
    "Polygon": GeometryKind.POLYGON,
    "MultiPoint": GeometryKind.MULTIPOINT,
    "MultiLineString": GeometryKind.MULTILINESTRING,
    "MultiPolygon": GeometryKind.MULTIPOLYGON,
    "GeometryCollection": GeometryKind.GEOMETRYCOLLECTION,
}


def to_wkt(geom: Geometry) -> str:
    """
    Convert geometry to Well-Known Text (WKT) format.

    Example:
        >>> to_wkt(Point((-122.0, 47.0)))
        'POINT (-122.0 47.0)'
    """
    return geom.wkt


def _polygon_to_shapely(rings: list[Any]) -> ShapelyPolygon:
    """Convert a list of rings (exterior first) to a Shapely Polygon."""
    if not rings:
        return ShapelyPolygon()
    return ShapelyPolygon(rings[0], rings[1:] or None)


def geometry_to_shapely(geom: Geometry) -> BaseGeometry:
    """
    Convert a library geometry to a Shapely geometry.

    The SRID is not carried over; Shapely geometries are usually used
    without one.

    Args:
        geom: Geometry object from this library

    Returns:
        Corresponding Shapely geometry object
    """
    coords = geom.coordinates.as_tuples()
    shape = geom.kind.shape

    if shape == GeometryKind.POINT:
        return ShapelyPoint(coords)

    if shape == GeometryKind.LINESTRING:
        return ShapelyLineString(coords)

    if shape == GeometryKind.POLYGON:
        return _polygon_to_shapely(coords)

    if shape == GeometryKind.MULTIPOINT:
        return ShapelyMultiPoint(coords)

    if shape == GeometryKind.MULTILINESTRING:
        return ShapelyMultiLineString(coords)

    if shape == GeometryKind.MULTIPOLYGON:
        return ShapelyMultiPolygon([_polygon_to_shapely(rings) for rings in coords])

    raise UnsupportedGeometryKindError(geom.kind)


def _polygon_rings(poly: ShapelyPolygon) -> list[list[tuple[float, ...]]]:
    if poly.is_empty:
        return []
    return [list(poly.exterior.coords)] + [list(r.coords) for r in poly.interiors]


def geometry_from_shapely(shape: BaseGeometry, srid: int | None = None) -> Geometry:
    """
    Convert a Shapely geometry to a library geometry.

    Args:
        shape: Shapely geometry
        srid: SRID of the result. If None, uses the SRID stored on the Shapely
              geometry, if any.

    Returns:
        The equivalent geometry (3D variant when the shape has Z values)

    Raises:
        EmptyGeometryError: For an empty Shapely Point
        UnsupportedGeometryKindError: For geometry collections
    """
    geom_type = shape.geom_type
    if geom_type not in _SHAPELY_KINDS:
        raise GeometryError(f"Unsupported Shapely geometry type: {geom_type}")
    kind = _SHAPELY_KINDS[geom_type].with_dimension(3 if shape.has_z else 2)

    if srid is None:
        srid = int(shapely.get_srid(shape)) or None

    coords: Any
    if geom_type == "Point":
        if shape.is_empty:
            raise EmptyGeometryError("Cannot convert an empty Shapely Point")
        coords = shape.coords[0]
    elif geom_type in ("LineString", "LinearRing"):
        coords = list(shape.coords)
    elif geom_type == "Polygon":
        coords = _polygon_rings(shape)
    elif geom_type == "MultiPoint":
        coords = [pt.coords[0] for pt in shape.geoms]
    elif geom_type == "MultiLineString":
        coords = [list(line.coords) for line in shape.geoms]
    elif geom_type == "MultiPolygon":
        coords = [_polygon_rings(poly) for poly in shape.geoms]
    else:
        coords = []

    return geometry_from_coordinates(kind, coords, srid=srid)


def get_transformer(
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> Transformer:
    """
    Create a pyproj Transformer for coordinate reprojection.

    Args:
        source_crs: Source coordinate reference system (EPSG code, WKT, or CRS object)
        target_crs: Target coordinate reference system (EPSG code, WKT, or CRS object)

    Returns:
        A pyproj Transformer instance configured for the specified transformation.

    Example:
        >>> transformer = get_transformer(3857, 4326)
        >>> lon, lat = transformer.transform(-13410713.258, 5894992.591)
    """
    return Transformer.from_crs(source_crs, target_crs, always_xy=True)


def _transform(level: Any, transformer: Transformer) -> Any:
    """Transform every coordinate of a hierarchy level, preserving Z."""
    if isinstance(level, Coordinate):
        x, y = transformer.transform(level.x, level.y)
        if level.z is not None:
            return (x, y, level.z)
        return (x, y)
    return [_transform(item, transformer) for item in level]


def reproject_geometry(
    geom: Geometry,
    target_srid: int,
    source_srid: int | None = None,
) -> Geometry:
    """
    Reproject a geometry to another EPSG coordinate reference system.

    Z values are carried over unchanged.

    Args:
        geom: Geometry object to reproject
        target_srid: EPSG code of the target CRS, set as the result's SRID
        source_srid: EPSG code of the source CRS (default: geom.srid)

    Returns:
        A new geometry of the same kind with transformed coordinates

    Raises:
        GeometryError: If neither the geometry nor the caller gives a source SRID

    Example:
        >>> pt = Point((-13410713.258, 5894992.591), srid=3857)
        >>> reprojected = reproject_geometry(pt, 4326)
        >>> round(reprojected.x, 4), round(reprojected.y, 4)
        (-120.4705, 46.7108)
    """
    source = source_srid if source_srid is not None else geom.srid
    if source is None:
        raise GeometryError("Cannot reproject a geometry without a source SRID")

    transformer = get_transformer(source, target_srid)
    coordinates = _transform(geom.coordinates, transformer)
    return type(geom)(coordinates, srid=target_srid)
