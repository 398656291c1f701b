"""
Registry of the native binary formats.

Driver bindings pick a format by name (EWKB for PostGIS, SpatiaLite for
SQLite) and only rely on the NativeFormat interface.
"""

from typing import Protocol

from .ewkb import EWKBCodec
from .geometry import Geometry
from .payload import ByteOrder
from .spatialite import SpatiaLiteCodec


class NativeFormat(Protocol):
    """A binary geometry encoding understood by a database engine"""

    name: str

    def encode(self, geom: Geometry, byte_order: ByteOrder | None = None) -> bytes: ...

    def decode(self, data: bytes) -> Geometry: ...


FORMATS: dict[str, NativeFormat] = {
    EWKBCodec.name: EWKBCodec(),
    SpatiaLiteCodec.name: SpatiaLiteCodec(),
}

# Smallest SpatiaLite blob: header (43 bytes) + a 2D point (16) + end marker
_SPATIALITE_MIN_SIZE = 60
_SPATIALITE_MBR_END_OFFSET = 38


def get_format(name: str) -> NativeFormat:
    """
    Get a registered format by name (case-insensitive).

    Raises:
        ValueError: If no such format is registered
    """
    try:
        return FORMATS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown format: {name} (expected one of: {', '.join(FORMATS)})"
        ) from None


def sniff_format(data: bytes) -> str:
    """
    Guess the format of a geometry blob from its framing bytes.

    A SpatiaLite blob starts with 0x00, has the 0x7C MBR marker at offset 38
    and ends with 0xFE. Anything else is assumed to be EWKB.
    """
    if (
        len(data) >= _SPATIALITE_MIN_SIZE
        and data[0] == SpatiaLiteCodec.START
        and data[1] in (ByteOrder.BIG, ByteOrder.LITTLE)
        and data[_SPATIALITE_MBR_END_OFFSET] == SpatiaLiteCodec.MBR_END
        and data[-1] == SpatiaLiteCodec.END
    ):
        return SpatiaLiteCodec.name
    return EWKBCodec.name
