"""Engine facade for clipbridge.

This module exposes the operation set of the native engine:

- Boolean operations (intersection, union, difference, exclusive-or)
- Path offsetting (inflate/shrink of one path or a collection)
- Rectangle clipping of polygons and of open lines

Key classes:
- Clipper: Binds host objects and option defaults to native calls
"""

from clipbridge.core.clipper import Clipper

__all__ = ["Clipper"]
