"""
Geometry classes for representing spatial data.

One concrete class exists per (shape, dimension) pair, e.g. Point and PointZ.
Each holds the matching level of the coordinate hierarchy plus an optional
spatial reference identifier (SRID).
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from .coordinates import (
    MBR,
    Coordinate,
    PointSequence,
    RingSequence,
    RingSequenceCollection,
)
from .errors import (
    GeometryError,
    GeometryKindMismatchError,
    UnsupportedGeometryKindError,
)
from .kinds import GeometryKind

DEFAULT_SRID = 4326
MAX_SRID = 0xFFFFFFFF


def validate_srid(srid: int | None) -> int | None:
    """Check that an SRID fits in an unsigned 32-bit integer"""
    if srid is None:
        return None
    if isinstance(srid, bool) or not isinstance(srid, int):
        raise GeometryError(f"SRID must be an integer, got {type(srid).__name__}")
    if not 0 <= srid <= MAX_SRID:
        raise GeometryError(f"SRID out of range: {srid}")
    return srid


def _coord_text(coord: Coordinate) -> str:
    return " ".join(f"{v}" for v in coord)


def _points_text(points: PointSequence) -> str:
    return "(" + ", ".join(_coord_text(c) for c in points) + ")"


def _rings_text(rings: RingSequence) -> str:
    return "(" + ", ".join(_points_text(r) for r in rings) + ")"


@dataclass
class Geometry:
    """
    Base class of all geometries.

    Subclasses set `kind` and the coordinate level they hold. The constructor
    accepts either coordinate objects or literal nested sequences:

        >>> LineString([(0, 0), (1, 1)], srid=4326)
    """

    coordinates: Any
    srid: int | None = None

    kind: ClassVar[GeometryKind]
    coordinates_type: ClassVar[Any]

    def __post_init__(self):
        if type(self) is Geometry:
            raise TypeError("Geometry is abstract, use a concrete geometry class")
        self.coordinates = self.coordinates_type.coerce(
            self.coordinates, self.dimension
        )
        self.srid = validate_srid(self.srid)

    @property
    def dimension(self) -> int:
        return self.kind.dimension

    @property
    def has_z(self) -> bool:
        return self.kind.has_z

    def mbr(self) -> MBR:
        """
        Compute the minimum bounding rectangle of the geometry.

        Raises:
            EmptyGeometryError: If the geometry has no coordinates
            InvalidCoordinateError: If an x or y coordinate is NaN
        """
        return self.coordinates.bounds()

    @property
    def wkt(self) -> str:
        tag = self.kind.shape.label.upper()
        if self.has_z:
            tag += " Z"
        if len(self.coordinates) == 0:
            return f"{tag} EMPTY"
        return f"{tag} {self._wkt_body()}"

    def _wkt_body(self) -> str:
        raise NotImplementedError

    @classmethod
    def from_geometry(cls, geom: "Geometry"):
        """
        Narrow a geometry to this class.

        Raises:
            GeometryKindMismatchError: If the geometry is of another kind
        """
        if geom.kind != cls.kind:
            raise GeometryKindMismatchError(cls.kind, geom.kind)
        return geom


class _PointBase(Geometry):
    coordinates_type = Coordinate

    @property
    def x(self) -> float:
        return self.coordinates.x

    @property
    def y(self) -> float:
        return self.coordinates.y

    def _wkt_body(self) -> str:
        return f"({_coord_text(self.coordinates)})"


class Point(_PointBase):
    """A 2D point"""

    kind = GeometryKind.POINT


class PointZ(_PointBase):
    """A 3D point"""

    kind = GeometryKind.POINTZ

    @property
    def z(self) -> float:
        return self.coordinates.z


class _LineStringBase(Geometry):
    coordinates_type = PointSequence

    def _wkt_body(self) -> str:
        return _points_text(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)


class LineString(_LineStringBase):
    """A 2D line string (polyline)"""

    kind = GeometryKind.LINESTRING


class LineStringZ(_LineStringBase):
    """A 3D line string"""

    kind = GeometryKind.LINESTRINGZ


class _PolygonBase(Geometry):
    coordinates_type = RingSequence

    def __post_init__(self):
        super().__post_init__()
        self.coordinates.close_rings()

    @property
    def exterior(self) -> PointSequence | None:
        """The exterior ring (first ring)"""
        return self.coordinates[0] if len(self.coordinates) else None

    @property
    def interiors(self) -> list[PointSequence]:
        """Interior rings (holes)"""
        return self.coordinates.items[1:]

    def _wkt_body(self) -> str:
        return _rings_text(self.coordinates)


class Polygon(_PolygonBase):
    """A 2D polygon with optional holes"""

    kind = GeometryKind.POLYGON


class PolygonZ(_PolygonBase):
    """A 3D polygon with optional holes"""

    kind = GeometryKind.POLYGONZ


class _MultiPointBase(Geometry):
    coordinates_type = PointSequence

    def _wkt_body(self) -> str:
        return "(" + ", ".join(f"({_coord_text(c)})" for c in self.coordinates) + ")"

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(self.coordinates)


class MultiPoint(_MultiPointBase):
    """Multiple 2D points"""

    kind = GeometryKind.MULTIPOINT


class MultiPointZ(_MultiPointBase):
    """Multiple 3D points"""

    kind = GeometryKind.MULTIPOINTZ


class _MultiLineStringBase(Geometry):
    coordinates_type = RingSequence

    def _wkt_body(self) -> str:
        return _rings_text(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(self.coordinates)


class MultiLineString(_MultiLineStringBase):
    """Multiple 2D line strings"""

    kind = GeometryKind.MULTILINESTRING


class MultiLineStringZ(_MultiLineStringBase):
    """Multiple 3D line strings"""

    kind = GeometryKind.MULTILINESTRINGZ


class _MultiPolygonBase(Geometry):
    coordinates_type = RingSequenceCollection

    def __post_init__(self):
        super().__post_init__()
        self.coordinates.close_rings()

    def _wkt_body(self) -> str:
        return "(" + ", ".join(_rings_text(p) for p in self.coordinates) + ")"

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(self.coordinates)


class MultiPolygon(_MultiPolygonBase):
    """Multiple 2D polygons"""

    kind = GeometryKind.MULTIPOLYGON


class MultiPolygonZ(_MultiPolygonBase):
    """Multiple 3D polygons"""

    kind = GeometryKind.MULTIPOLYGONZ


GEOMETRY_CLASSES: dict[GeometryKind, type[Geometry]] = {
    cls.kind: cls
    for cls in (
        Point,
        LineString,
        Polygon,
        MultiPoint,
        MultiLineString,
        MultiPolygon,
        PointZ,
        LineStringZ,
        PolygonZ,
        MultiPointZ,
        MultiLineStringZ,
        MultiPolygonZ,
    )
}


def geometry_class(kind: GeometryKind) -> type[Geometry]:
    """
    Get the geometry class implementing a kind.

    Raises:
        UnsupportedGeometryKindError: For geometry collections
    """
    try:
        return GEOMETRY_CLASSES[kind]
    except KeyError:
        raise UnsupportedGeometryKindError(kind) from None


def geometry_from_coordinates(
    kind: GeometryKind, coordinates: Any, srid: int | None = None
) -> Geometry:
    """Build the geometry of the given kind from its coordinates"""
    return geometry_class(kind)(coordinates, srid=srid)
