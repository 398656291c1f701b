"""
Coordinate hierarchy shared by every geometry.

Four nesting levels cover all supported shapes:

    Coordinate              one 2D or 3D position           (Point)
    PointSequence           list of coordinates             (LineString, MultiPoint)
    RingSequence            list of point sequences         (Polygon, MultiLineString)
    RingSequenceCollection  list of ring sequences          (MultiPolygon)

Every level carries an explicit dimension (2 or 3) and checks that all the
coordinates it contains share it. Bounding boxes are computed recursively
from the leaves.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar

from .errors import EmptyGeometryError, InvalidCoordinateError

DIMENSIONS = (2, 3)


@dataclass
class MBR:
    """Minimum bounding rectangle"""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.min_x, self.min_y, self.max_x, self.max_y))


def _check_dimension(dimension: int) -> int:
    if dimension not in DIMENSIONS:
        raise InvalidCoordinateError(f"Unsupported dimension: {dimension}")
    return dimension


def _ordered(value: float, axis: str) -> float:
    """Return value, refusing NaN which has no place in a min/max ordering"""
    if math.isnan(value):
        raise InvalidCoordinateError(f"Cannot order NaN {axis} coordinate")
    return value


@dataclass(frozen=True)
class Coordinate:
    """An immutable 2D or 3D position"""

    values: tuple[float, ...]

    def __post_init__(self):
        try:
            values = tuple(float(v) for v in self.values)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidCoordinateError(f"Invalid coordinate: {self.values!r}") from e
        if len(values) not in DIMENSIONS:
            raise InvalidCoordinateError(
                f"A coordinate needs 2 or 3 values, got {len(values)}"
            )
        object.__setattr__(self, "values", values)

    @classmethod
    def coerce(cls, value: Any, dimension: int | None = None) -> "Coordinate":
        """Build a coordinate from a Coordinate or any sequence of numbers"""
        if isinstance(value, Coordinate):
            coord = value
        elif isinstance(value, (str, bytes)):
            raise InvalidCoordinateError(f"Invalid coordinate: {value!r}")
        else:
            try:
                values = tuple(value)
            except TypeError as e:
                raise InvalidCoordinateError(f"Invalid coordinate: {value!r}") from e
            coord = cls(values)
        if dimension is not None and coord.dimension != dimension:
            raise InvalidCoordinateError(
                f"Expected a {dimension}D coordinate, got {coord.values!r}"
            )
        return coord

    @property
    def dimension(self) -> int:
        return len(self.values)

    @property
    def x(self) -> float:
        return self.values[0]

    @property
    def y(self) -> float:
        return self.values[1]

    @property
    def z(self) -> float | None:
        return self.values[2] if len(self.values) > 2 else None

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def min_x(self) -> float:
        return _ordered(self.x, "x")

    def max_x(self) -> float:
        return _ordered(self.x, "x")

    def min_y(self) -> float:
        return _ordered(self.y, "y")

    def max_y(self) -> float:
        return _ordered(self.y, "y")

    def bounds(self) -> MBR:
        return MBR(self.min_x(), self.min_y(), self.max_x(), self.max_y())

    def as_tuples(self) -> tuple[float, ...]:
        return self.values


@dataclass
class _CoordinateSequence:
    """
    Common behaviour of the sequence levels.

    Subclasses set _item_type to the level they contain. When no dimension
    is given it is inferred from the first item, and an empty sequence
    defaults to 2D.
    """

    items: list[Any]
    dimension: int | None = None

    _item_type: ClassVar[Any] = Coordinate

    def __post_init__(self):
        if self.dimension is not None:
            _check_dimension(self.dimension)
        items = [self._item_type.coerce(item, self.dimension) for item in self.items]
        dimension = self.dimension
        if dimension is None:
            dimension = items[0].dimension if items else 2
        for item in items:
            if item.dimension != dimension:
                raise InvalidCoordinateError(
                    f"Mixed dimensions in {type(self).__name__}: "
                    f"{item.dimension}D item in a {dimension}D sequence"
                )
        self.items = items
        self.dimension = dimension

    @classmethod
    def coerce(cls, value: Any, dimension: int | None = None):
        """
        Build a sequence from an instance or from literal nested sequences.

        Instances are rebuilt rather than shared, so the result owns all of
        its nested lists.
        """
        if isinstance(value, cls):
            if dimension is not None and value.dimension != dimension:
                raise InvalidCoordinateError(
                    f"Expected {dimension}D coordinates, got {value.dimension}D"
                )
            return cls(list(value.items), value.dimension)
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise InvalidCoordinateError(
                f"Cannot build {cls.__name__} from {type(value).__name__}"
            )
        return cls(list(value), dimension)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]

    def _non_empty(self) -> list[Any]:
        if not self.items:
            raise EmptyGeometryError(
                f"Cannot compute bounds of an empty {type(self).__name__}"
            )
        return self.items

    def min_x(self) -> float:
        return min(item.min_x() for item in self._non_empty())

    def max_x(self) -> float:
        return max(item.max_x() for item in self._non_empty())

    def min_y(self) -> float:
        return min(item.min_y() for item in self._non_empty())

    def max_y(self) -> float:
        return max(item.max_y() for item in self._non_empty())

    def bounds(self) -> MBR:
        return MBR(self.min_x(), self.min_y(), self.max_x(), self.max_y())

    def as_tuples(self) -> list[Any]:
        """Plain nested lists of coordinate tuples"""
        return [item.as_tuples() for item in self.items]


@dataclass
class PointSequence(_CoordinateSequence):
    """Ordered coordinates of a line string, a multi-point or a ring"""

    _item_type: ClassVar[Any] = Coordinate

    @property
    def is_closed(self) -> bool:
        return bool(self.items) and self.items[0] == self.items[-1]

    def close_ring(self) -> None:
        """Append the first coordinate if the ring is not already closed"""
        if self.items and not self.is_closed:
            self.items.append(self.items[0])


@dataclass
class RingSequence(_CoordinateSequence):
    """Rings of a polygon, or lines of a multi-line string"""

    _item_type: ClassVar[Any] = PointSequence

    def close_rings(self) -> None:
        for ring in self.items:
            ring.close_ring()


@dataclass
class RingSequenceCollection(_CoordinateSequence):
    """Polygons of a multi-polygon"""

    _item_type: ClassVar[Any] = RingSequence

    def close_rings(self) -> None:
        for rings in self.items:
            rings.close_rings()
