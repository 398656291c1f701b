"""
PostGIS Extended Well-Known Binary (EWKB) codec.

EWKB extends OGC WKB with flag bits in the type code:

    - Byte 0:    Byte order (0 = big endian, 1 = little endian)
    - Bytes 1-4: Type code = base code (1-7)
                 | 0x80000000 if the geometry is 3D
                 | 0x20000000 if an SRID follows
    - Bytes 5-8: SRID (only present when the SRID flag is set)
    - Bytes 5+:  Coordinate payload (see payload.py)

Example:
    >>> from geocodec import Point, encode_ewkb, decode_ewkb
    >>> data = encode_ewkb(Point((10.0, 20.0), srid=4326))
    >>> decode_ewkb(data)
    Point(coordinates=Coordinate(values=(10.0, 20.0)), srid=4326)
"""

import io
import logging
from typing import BinaryIO

from .errors import MalformedGeometryError
from .geometry import Geometry, geometry_class, validate_srid
from .kinds import EWKB_SRID_FLAG, EWKB_Z_FLAG, GeometryKind
from .payload import ByteOrder, PayloadReader, PayloadWriter

logger = logging.getLogger(__name__)


class EWKBCodec:
    """
    Encoder and decoder for the PostGIS EWKB format.

    Args:
        byte_order: Byte order used when encoding. If None, uses the host's
                    native byte order. Decoding always follows the byte
                    order marker of the input.
    """

    Z_FLAG = EWKB_Z_FLAG
    SRID_FLAG = EWKB_SRID_FLAG

    name = "ewkb"

    def __init__(self, byte_order: ByteOrder | None = None):
        self.byte_order = byte_order

    def _resolve_byte_order(self, byte_order: ByteOrder | None) -> ByteOrder:
        if byte_order is not None:
            return ByteOrder(byte_order)
        if self.byte_order is not None:
            return ByteOrder(self.byte_order)
        return ByteOrder.native()

    def encode(self, geom: Geometry, byte_order: ByteOrder | None = None) -> bytes:
        """
        Encode a geometry to EWKB bytes.

        Args:
            geom: Geometry to encode
            byte_order: Override the codec's byte order for this call

        Returns:
            EWKB bytes

        Raises:
            GeometryError: If the SRID or a sequence length does not fit in 32 bits
        """
        order = self._resolve_byte_order(byte_order)
        srid = validate_srid(geom.srid)

        type_code = geom.kind.ewkb_code
        if srid is not None:
            type_code |= self.SRID_FLAG

        buf = io.BytesIO()
        writer = PayloadWriter(buf, order)
        writer.write_u8(order)
        writer.write_u32(type_code)
        if srid is not None:
            writer.write_u32(srid)
        writer.write_coordinates(geom.coordinates)

        data = buf.getvalue()
        logger.debug(
            "Encoded %s (srid=%s) to %d EWKB bytes, %s endian",
            geom.kind.label,
            srid,
            len(data),
            order.name.lower(),
        )
        return data

    def encode_to_stream(
        self, geom: Geometry, stream: BinaryIO, byte_order: ByteOrder | None = None
    ) -> None:
        """Encode a geometry and write it to a binary stream"""
        stream.write(self.encode(geom, byte_order))

    def decode(self, data: bytes) -> Geometry:
        """
        Decode EWKB bytes to a geometry.

        Args:
            data: The raw EWKB bytes, holding exactly one geometry

        Returns:
            The decoded geometry, with its SRID set when the input carries one

        Raises:
            MalformedGeometryError: If the input is not valid EWKB
            TruncatedStreamError: If the input ends early
        """
        reader = PayloadReader(io.BytesIO(data))
        geom = self._read(reader)
        if not reader.at_end():
            raise MalformedGeometryError(
                f"Trailing bytes after EWKB geometry at offset {reader.bytes_read}"
            )
        return geom

    def decode_stream(self, stream: BinaryIO) -> Geometry:
        """Decode one geometry from a binary stream, leaving any following data unread"""
        return self._read(PayloadReader(stream))

    def _read(self, reader: PayloadReader) -> Geometry:
        reader.byte_order = ByteOrder.from_marker(reader.read_u8())

        type_code = reader.read_u32()
        has_srid = bool(type_code & self.SRID_FLAG)
        kind = GeometryKind.from_ewkb_code(type_code & ~self.SRID_FLAG)

        srid = reader.read_u32() if has_srid else None

        cls = geometry_class(kind)
        coordinates = reader.read_coordinates(cls.coordinates_type, kind.dimension)
        geom = cls(coordinates, srid=srid)

        logger.debug(
            "Decoded %s (srid=%s) from %d EWKB bytes",
            kind.label,
            srid,
            reader.bytes_read,
        )
        return geom


_default_codec = EWKBCodec()


def encode_ewkb(geom: Geometry, byte_order: ByteOrder | None = None) -> bytes:
    """
    Convenience function to encode a geometry to EWKB.

    Args:
        geom: Geometry to encode
        byte_order: Byte order to use (default: host native)

    Returns:
        EWKB bytes
    """
    return _default_codec.encode(geom, byte_order)


def decode_ewkb(data: bytes) -> Geometry:
    """
    Convenience function to decode EWKB bytes.

    Example:
        >>> geom = decode_ewkb(bytes.fromhex("010100000000000000000024400000000000003440"))
        >>> geom.wkt
        'POINT (10.0 20.0)'
    """
    return _default_codec.decode(data)
