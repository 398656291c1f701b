"""
SpatiaLite native BLOB geometry codec.

Blob Structure:
    - Byte 0:      Start marker (0x00)
    - Byte 1:      Byte order (0 = big endian, 1 = little endian)
    - Bytes 2-5:   SRID (always present)
    - Bytes 6-37:  MBR as four float64: min_x, min_y, max_x, max_y
    - Byte 38:     MBR end marker (0x7C)
    - Bytes 39-42: Geometry class code (1-7, 1001-1007 for 3D)
    - Bytes 43+:   Coordinate payload (see payload.py)
    - Last byte:   End marker (0xFE)

The MBR is recomputed from the coordinates on every encode. On decode it is
read and discarded, never trusted.
"""

import io
import logging
from typing import BinaryIO

from .coordinates import MBR
from .errors import MalformedGeometryError
from .geometry import DEFAULT_SRID, Geometry, geometry_class, validate_srid
from .kinds import GeometryKind
from .payload import ByteOrder, PayloadReader, PayloadWriter

logger = logging.getLogger(__name__)


class SpatiaLiteCodec:
    """
    Encoder and decoder for SpatiaLite geometry BLOBs.

    Args:
        byte_order: Byte order used when encoding. If None, uses the host's
                    native byte order.
        default_srid: SRID written for geometries that carry none
    """

    START = 0x00
    MBR_END = 0x7C
    END = 0xFE

    name = "spatialite"

    def __init__(
        self,
        byte_order: ByteOrder | None = None,
        default_srid: int = DEFAULT_SRID,
    ):
        self.byte_order = byte_order
        self.default_srid = validate_srid(default_srid)

    def _resolve_byte_order(self, byte_order: ByteOrder | None) -> ByteOrder:
        if byte_order is not None:
            return ByteOrder(byte_order)
        if self.byte_order is not None:
            return ByteOrder(self.byte_order)
        return ByteOrder.native()

    def encode(self, geom: Geometry, byte_order: ByteOrder | None = None) -> bytes:
        """
        Encode a geometry to a SpatiaLite BLOB.

        Args:
            geom: Geometry to encode
            byte_order: Override the codec's byte order for this call

        Returns:
            BLOB bytes

        Raises:
            EmptyGeometryError: If the geometry has no coordinates to bound
            InvalidCoordinateError: If the MBR cannot be computed (NaN)
            GeometryError: If the SRID or a sequence length does not fit in 32 bits
        """
        order = self._resolve_byte_order(byte_order)
        srid = validate_srid(geom.srid)
        if srid is None:
            srid = self.default_srid
        mbr = geom.mbr()

        buf = io.BytesIO()
        writer = PayloadWriter(buf, order)
        writer.write_u8(self.START)
        writer.write_u8(order)
        writer.write_u32(srid)
        for value in mbr:
            writer.write_f64(value)
        writer.write_u8(self.MBR_END)
        writer.write_u32(geom.kind.spatialite_code)
        writer.write_coordinates(geom.coordinates)
        writer.write_u8(self.END)

        data = buf.getvalue()
        logger.debug(
            "Encoded %s (srid=%s) to %d SpatiaLite bytes, %s endian",
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
        Decode a SpatiaLite BLOB to a geometry.

        Args:
            data: The raw blob bytes from a geometry column

        Returns:
            The decoded geometry, with its SRID set

        Raises:
            MalformedGeometryError: If a marker byte or code is invalid
            TruncatedStreamError: If the blob ends early
        """
        reader = PayloadReader(io.BytesIO(data))
        geom = self._read(reader)
        if not reader.at_end():
            raise MalformedGeometryError(
                f"Trailing bytes after SpatiaLite geometry at offset {reader.bytes_read}"
            )
        return geom

    def decode_stream(self, stream: BinaryIO) -> Geometry:
        """Decode one geometry from a binary stream, leaving any following data unread"""
        return self._read(PayloadReader(stream))

    def _expect_marker(self, reader: PayloadReader, expected: int, what: str) -> None:
        offset = reader.bytes_read
        marker = reader.read_u8()
        if marker != expected:
            raise MalformedGeometryError(
                f"Invalid {what} marker at offset {offset}: "
                f"expected 0x{expected:02X}, got 0x{marker:02X}"
            )

    def _read(self, reader: PayloadReader) -> Geometry:
        self._expect_marker(reader, self.START, "start")
        reader.byte_order = ByteOrder.from_marker(reader.read_u8())

        srid = reader.read_u32()

        # Stored MBR is discarded; Geometry.mbr() recomputes it
        stored_mbr = MBR(
            reader.read_f64(), reader.read_f64(), reader.read_f64(), reader.read_f64()
        )
        self._expect_marker(reader, self.MBR_END, "MBR end")

        kind = GeometryKind.from_spatialite_code(reader.read_u32())
        cls = geometry_class(kind)
        coordinates = reader.read_coordinates(cls.coordinates_type, kind.dimension)

        self._expect_marker(reader, self.END, "end")

        geom = cls(coordinates, srid=srid)
        logger.debug(
            "Decoded %s (srid=%s) from %d SpatiaLite bytes, discarded stored MBR %s",
            kind.label,
            srid,
            reader.bytes_read,
            tuple(stored_mbr),
        )
        return geom


_default_codec = SpatiaLiteCodec()


def encode_spatialite(geom: Geometry, byte_order: ByteOrder | None = None) -> bytes:
    """
    Convenience function to encode a geometry to a SpatiaLite BLOB.

    Geometries without an SRID are written with DEFAULT_SRID (4326).
    """
    return _default_codec.encode(geom, byte_order)


def decode_spatialite(data: bytes) -> Geometry:
    """Convenience function to decode a SpatiaLite BLOB"""
    return _default_codec.decode(data)
