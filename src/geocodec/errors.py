"""
Exceptions raised by geocodec.

Every error derives from GeometryError, itself a ValueError, so callers that
only care about "bad geometry input" can catch a single type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .kinds import GeometryKind


class GeometryError(ValueError):
    """Base class for all geocodec errors"""


class InvalidCoordinateError(GeometryError):
    """A coordinate has the wrong arity or cannot be ordered (NaN)"""


class EmptyGeometryError(GeometryError):
    """A bounding box was requested for an empty coordinate sequence"""


class MalformedGeometryError(GeometryError):
    """The binary input does not follow the expected wire layout"""


class TruncatedStreamError(GeometryError, EOFError):
    """The stream ended before a complete geometry could be read"""

    def __init__(self, expected: int, got: int):
        super().__init__(f"Stream too short: expected {expected} bytes, got {got}")
        self.expected = expected
        self.got = got


class UnknownGeometryKindError(MalformedGeometryError):
    """A type or class code matches no known geometry kind"""

    def __init__(self, code: int, fmt: str):
        super().__init__(f"Unknown {fmt} geometry code: 0x{code:08X}")
        self.code = code
        self.format = fmt


class UnsupportedGeometryKindError(MalformedGeometryError):
    """The geometry kind is registered but cannot be encoded or decoded"""

    def __init__(self, kind: GeometryKind):
        super().__init__(f"Unsupported geometry kind: {kind.label}")
        self.kind = kind


class GeometryKindMismatchError(GeometryError):
    """A geometry was narrowed to a kind it does not have"""

    def __init__(self, expected: GeometryKind, got: GeometryKind):
        super().__init__(f"expected={expected.label}, got={got.label}")
        self.expected = expected
        self.got = got
