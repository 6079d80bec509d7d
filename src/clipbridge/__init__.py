"""clipbridge - Python facade over the Clipper2 clipping engine.

clipbridge converts between Python path objects and the packed double-array
format of the Clipper2 shared library, calls its boolean, offsetting and
rectangle clipping entry points, and decodes the results while releasing
native memory exactly once.

Example:
    >>> from clipbridge import Clipper, FillRule, PathCollection
    >>> clipper = Clipper()
    >>> subject = PathCollection.from_coords([[100, 50, 10, 79, 65, 2, 65, 98, 10, 21]])
    >>> clip = PathCollection.from_coords([[98, 63, 4, 68, 77, 8, 52, 100, 19, 12]])
    >>> closed, _ = clipper.intersect(subject, clip, fill_rule=FillRule.NON_ZERO)
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

from clipbridge.core import Clipper
from clipbridge.domain import (
    ClipType,
    EndType,
    FillRule,
    JoinType,
    Path,
    PathCollection,
    Point,
    Rect,
)

__all__ = [
    "ClipType",
    "Clipper",
    "EndType",
    "FillRule",
    "JoinType",
    "Path",
    "PathCollection",
    "Point",
    "Rect",
    "__author__",
    "__version__",
]
