"""Engine enumerations.

Values match the numeric codes the native engine expects, so members can
be passed straight through as ``uint8_t`` arguments.
"""

from enum import IntEnum


class ClipType(IntEnum):
    """Boolean operation kind."""

    NO_CLIP = 0
    INTERSECTION = 1
    UNION = 2
    DIFFERENCE = 3
    XOR = 4


class FillRule(IntEnum):
    """Winding rule deciding which regions count as filled."""

    EVEN_ODD = 0
    NON_ZERO = 1
    POSITIVE = 2
    NEGATIVE = 3


class JoinType(IntEnum):
    """How offset edges are joined at vertices."""

    SQUARE = 0
    BEVEL = 1
    ROUND = 2
    MITER = 3


class EndType(IntEnum):
    """How offsetting treats path ends.

    POLYGON offsets a closed shape; JOINED offsets an open path as a closed
    band; BUTT, SQUARE and ROUND cap the ends of open paths.
    """

    POLYGON = 0
    JOINED = 1
    BUTT = 2
    SQUARE = 3
    ROUND = 4
