"""
Geometry kind registry.

Maps each geometry kind to the integer codes used by the two wire formats:

    EWKB:       base code 1-7, 3D variants set the 0x80000000 flag bit
    SpatiaLite: base code 1-7, 3D variants use 1001-1007

The enum values are the SpatiaLite class codes.
"""

from enum import IntEnum

from .errors import UnknownGeometryKindError

# EWKB type code flags
EWKB_Z_FLAG = 0x80000000
EWKB_SRID_FLAG = 0x20000000

SPATIALITE_Z_OFFSET = 1000

_LABELS = {
    1: "Point",
    2: "LineString",
    3: "Polygon",
    4: "MultiPoint",
    5: "MultiLineString",
    6: "MultiPolygon",
    7: "GeometryCollection",
}


class GeometryKind(IntEnum):
    """Geometry kinds, valued by their SpatiaLite class code"""

    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7
    # Z variants add 1000
    POINTZ = 1001
    LINESTRINGZ = 1002
    POLYGONZ = 1003
    MULTIPOINTZ = 1004
    MULTILINESTRINGZ = 1005
    MULTIPOLYGONZ = 1006
    GEOMETRYCOLLECTIONZ = 1007

    @property
    def base_code(self) -> int:
        """Shape code shared by the 2D and 3D variants (1-7)"""
        return self.value % SPATIALITE_Z_OFFSET

    @property
    def has_z(self) -> bool:
        return self.value > SPATIALITE_Z_OFFSET

    @property
    def dimension(self) -> int:
        return 3 if self.has_z else 2

    @property
    def shape(self) -> "GeometryKind":
        """The 2D kind with the same shape"""
        return GeometryKind(self.base_code)

    @property
    def is_collection(self) -> bool:
        return self.base_code == GeometryKind.GEOMETRYCOLLECTION

    @property
    def label(self) -> str:
        label = _LABELS[self.base_code]
        return f"{label}Z" if self.has_z else label

    @property
    def ewkb_code(self) -> int:
        """EWKB type code, without the SRID flag"""
        if self.has_z:
            return self.base_code | EWKB_Z_FLAG
        return self.base_code

    @property
    def spatialite_code(self) -> int:
        return self.value

    def with_dimension(self, dimension: int) -> "GeometryKind":
        """The kind with the same shape and the given dimension"""
        if dimension == 3:
            return GeometryKind(self.base_code + SPATIALITE_Z_OFFSET)
        return self.shape

    @classmethod
    def from_ewkb_code(cls, code: int) -> "GeometryKind":
        """
        Resolve an EWKB type code (SRID flag already removed).

        Raises:
            UnknownGeometryKindError: If the code matches no kind
        """
        kind = _EWKB_CODES.get(code)
        if kind is None:
            raise UnknownGeometryKindError(code, "EWKB")
        return kind

    @classmethod
    def from_spatialite_code(cls, code: int) -> "GeometryKind":
        """
        Resolve a SpatiaLite geometry class code.

        Raises:
            UnknownGeometryKindError: If the code matches no kind
        """
        try:
            return cls(code)
        except ValueError:
            raise UnknownGeometryKindError(code, "SpatiaLite") from None

    def __str__(self) -> str:
        return self.label


_EWKB_CODES = {kind.ewkb_code: kind for kind in GeometryKind}
