"""
Coordinate payload reader and writer shared by the EWKB and SpatiaLite codecs.

Payload structure (all integers uint32, all scalars float64, in the byte
order announced by the enclosing header):

    coordinate               N scalars, no prefix (N = 2 or 3)
    point sequence           count, then `count` coordinates
    ring sequence            count, then `count` point sequences
    ring-sequence collection count, then `count` ring sequences
"""

import struct
import sys
from enum import IntEnum
from typing import BinaryIO

from .coordinates import (
    Coordinate,
    PointSequence,
    RingSequence,
    RingSequenceCollection,
)
from .errors import GeometryError, MalformedGeometryError, TruncatedStreamError

MAX_COUNT = 0xFFFFFFFF


class ByteOrder(IntEnum):
    """Byte order marker values used by both wire formats"""

    BIG = 0
    LITTLE = 1

    @classmethod
    def native(cls) -> "ByteOrder":
        """The host's byte order"""
        return cls.LITTLE if sys.byteorder == "little" else cls.BIG

    @classmethod
    def from_marker(cls, marker: int) -> "ByteOrder":
        """
        Resolve a byte order marker.

        Raises:
            MalformedGeometryError: If the marker is neither 0 nor 1
        """
        try:
            return cls(marker)
        except ValueError:
            raise MalformedGeometryError(
                f"Invalid byte order marker: 0x{marker:02X}"
            ) from None

    @property
    def struct_prefix(self) -> str:
        return ">" if self is ByteOrder.BIG else "<"


class PayloadReader:
    """
    Read fixed-size fields and coordinate payloads from a binary stream.

    The byte order may be changed after construction, since both formats
    announce it only after one or more leading bytes.
    """

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder = ByteOrder.LITTLE):
        self.stream = stream
        self.byte_order = byte_order
        self.bytes_read = 0

    def read_exact(self, size: int) -> bytes:
        """Read exactly `size` bytes or raise TruncatedStreamError"""
        data = self.stream.read(size)
        if data is None or len(data) < size:
            raise TruncatedStreamError(size, len(data or b""))
        self.bytes_read += size
        return data

    def _unpack(self, fmt: str, size: int) -> tuple:
        return struct.unpack(self.byte_order.struct_prefix + fmt, self.read_exact(size))

    def read_u8(self) -> int:
        return self.read_exact(1)[0]

    def read_u32(self) -> int:
        return self._unpack("I", 4)[0]

    def read_f64(self) -> float:
        return self._unpack("d", 8)[0]

    def read_coordinate(self, dimension: int) -> Coordinate:
        return Coordinate(self._unpack("d" * dimension, 8 * dimension))

    def read_point_sequence(self, dimension: int) -> PointSequence:
        count = self.read_u32()
        return PointSequence(
            [self.read_coordinate(dimension) for _ in range(count)], dimension
        )

    def read_ring_sequence(self, dimension: int) -> RingSequence:
        count = self.read_u32()
        return RingSequence(
            [self.read_point_sequence(dimension) for _ in range(count)], dimension
        )

    def read_ring_sequence_collection(self, dimension: int) -> RingSequenceCollection:
        count = self.read_u32()
        return RingSequenceCollection(
            [self.read_ring_sequence(dimension) for _ in range(count)], dimension
        )

    def read_coordinates(self, shape_type: type, dimension: int):
        """Read the payload level matching a coordinate type"""
        readers = {
            Coordinate: self.read_coordinate,
            PointSequence: self.read_point_sequence,
            RingSequence: self.read_ring_sequence,
            RingSequenceCollection: self.read_ring_sequence_collection,
        }
        return readers[shape_type](dimension)

    def at_end(self) -> bool:
        """Check whether the stream has no more data"""
        return not self.stream.read(1)


class PayloadWriter:
    """Write fixed-size fields and coordinate payloads to a binary stream"""

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder):
        self.stream = stream
        self.byte_order = byte_order

    def _pack(self, fmt: str, *values: float | int) -> None:
        self.stream.write(struct.pack(self.byte_order.struct_prefix + fmt, *values))

    def write_u8(self, value: int) -> None:
        self.stream.write(bytes([value]))

    def write_u32(self, value: int) -> None:
        if not 0 <= value <= MAX_COUNT:
            raise GeometryError(f"Value does not fit in 32 bits: {value}")
        self._pack("I", value)

    def write_f64(self, value: float) -> None:
        self._pack("d", value)

    def write_coordinates(
        self,
        coordinates: Coordinate | PointSequence | RingSequence | RingSequenceCollection,
    ) -> None:
        """Write any level of the coordinate hierarchy, recursing into sequences"""
        if isinstance(coordinates, Coordinate):
            self._pack("d" * coordinates.dimension, *coordinates.values)
            return
        self.write_u32(len(coordinates))
        for item in coordinates:
            self.write_coordinates(item)
