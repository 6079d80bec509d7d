"""Small immutable value types for coordinates and rectangles.

This module defines the host vocabulary for geometry:
- Point: A 2D coordinate
- Rect: An axis-aligned rectangle used for rectangle clipping
- CRectD: The engine's native rectangle struct
"""

import ctypes
from dataclasses import dataclass


class CRectD(ctypes.Structure):
    """Native ``CRectD`` struct: four doubles in left, top, right, bottom order."""

    _fields_ = [
        ("left", ctypes.c_double),
        ("top", ctypes.c_double),
        ("right", ctypes.c_double),
        ("bottom", ctypes.c_double),
    ]


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Created on demand by every API that yields a
    coordinate; carries no native resources.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle.

    Only used as an input to rectangle clipping; never produced as output.

    Attributes:
        left: Minimum x
        top: Minimum y
        right: Maximum x
        bottom: Maximum y
    """

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def is_empty(self) -> bool:
        """True when the rectangle encloses no area."""
        return self.right <= self.left or self.bottom <= self.top

    def to_native(self) -> CRectD:
        """Build the native struct passed to the rectangle clip entry points."""
        return CRectD(self.left, self.top, self.right, self.bottom)
