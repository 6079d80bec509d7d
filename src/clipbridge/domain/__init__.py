"""Domain models for clipbridge.

This module contains the host-side vocabulary exchanged with the native
clipping engine. The models are designed to be:

- Immutable where they are plain values (Point, Rect)
- Backed by ctypes storage where they cross the native boundary
  (Path, PathCollection), so no re-serialization happens per call

Key classes:
- GrowableBuffer: Amortized-doubling array of C doubles
- Point: A 2D coordinate
- Rect: Axis-aligned rectangle for rectangle clipping
- Path: Ordered points of one contour
- PathCollection: Ordered paths in the engine's packed layout
"""

from clipbridge.domain.buffer import DoublePointer, GrowableBuffer
from clipbridge.domain.enums import ClipType, EndType, FillRule, JoinType
from clipbridge.domain.geometry import CRectD, Point, Rect
from clipbridge.domain.path import Path, PathCollection

__all__: list[str] = [
    # Enums
    "ClipType",
    "EndType",
    "FillRule",
    "JoinType",
    # Storage
    "DoublePointer",
    "GrowableBuffer",
    # Core types
    "CRectD",
    "Path",
    "PathCollection",
    "Point",
    "Rect",
]
