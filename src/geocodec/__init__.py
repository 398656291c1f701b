"""
geocodec

Binary geometry codecs for spatial databases: PostGIS Extended Well-Known
Binary (EWKB) and the SpatiaLite native BLOB format.

Example:
    >>> from geocodec import Polygon, encode_ewkb, decode_spatialite, encode_spatialite
    >>>
    >>> poly = Polygon([[(0, 0), (0, 1), (1, 1), (1, 0)]], srid=4326)
    >>> blob = encode_spatialite(poly)
    >>> decode_spatialite(blob) == poly
    True
    >>> poly.mbr()
    MBR(min_x=0.0, min_y=0.0, max_x=1.0, max_y=1.0)

CLI Example:
    $ geocodec inspect 0101000020E6100000000000000000244000000000000034C0
    $ geocodec convert <hex> --to spatialite
"""

__version__ = "0.1.0"

from .coordinates import (
    MBR,
    Coordinate,
    PointSequence,
    RingSequence,
    RingSequenceCollection,
)

from .errors import (
    EmptyGeometryError,
    GeometryError,
    GeometryKindMismatchError,
    InvalidCoordinateError,
    MalformedGeometryError,
    TruncatedStreamError,
    UnknownGeometryKindError,
    UnsupportedGeometryKindError,
)

from .kinds import (
    EWKB_SRID_FLAG,
    EWKB_Z_FLAG,
    GeometryKind,
)

from .geometry import (
    DEFAULT_SRID,
    Geometry,
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
    geometry_class,
    geometry_from_coordinates,
)

from .payload import ByteOrder

from .ewkb import (
    EWKBCodec,
    decode_ewkb,
    encode_ewkb,
)

from .spatialite import (
    SpatiaLiteCodec,
    decode_spatialite,
    encode_spatialite,
)

from .formats import (
    FORMATS,
    NativeFormat,
    get_format,
    sniff_format,
)

from .converters import (
    geometry_from_shapely,
    geometry_to_shapely,
    reproject_geometry,
    to_wkt,
)

__all__ = [
    # Version
    "__version__",
    # Coordinates
    "Coordinate",
    "PointSequence",
    "RingSequence",
    "RingSequenceCollection",
    "MBR",
    # Errors
    "GeometryError",
    "InvalidCoordinateError",
    "EmptyGeometryError",
    "MalformedGeometryError",
    "TruncatedStreamError",
    "UnknownGeometryKindError",
    "UnsupportedGeometryKindError",
    "GeometryKindMismatchError",
    # Kinds
    "GeometryKind",
    "EWKB_Z_FLAG",
    "EWKB_SRID_FLAG",
    # Geometry types
    "DEFAULT_SRID",
    "Geometry",
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "PointZ",
    "LineStringZ",
    "PolygonZ",
    "MultiPointZ",
    "MultiLineStringZ",
    "MultiPolygonZ",
    "geometry_class",
    "geometry_from_coordinates",
    # Codecs
    "ByteOrder",
    "EWKBCodec",
    "encode_ewkb",
    "decode_ewkb",
    "SpatiaLiteCodec",
    "encode_spatialite",
    "decode_spatialite",
    "NativeFormat",
    "FORMATS",
    "get_format",
    "sniff_format",
    # Converters
    "to_wkt",
    "geometry_to_shapely",
    "geometry_from_shapely",
    "reproject_geometry",
]
