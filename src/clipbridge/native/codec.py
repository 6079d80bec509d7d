"""Decoding of engine-allocated packed buffers.

The engine returns results as a raw ``double*`` to a packed buffer:

    [total_length, path_count, (n0, 0, x, y, ...), (n1, 0, x, y, ...), ...]

This buffer belongs to the engine. ``decode_native_packed`` copies it into a
host PathCollection and hands it back to the engine's deallocator exactly
once, whether decoding succeeds or raises.
"""

import ctypes
import math

from clipbridge.domain.buffer import DOUBLE_SIZE
from clipbridge.domain.path import COLLECTION_HEADER, RECORD_HEADER, Path, PathCollection
from clipbridge.exceptions import NativeFormatError
from clipbridge.native.library import EngineBackend
from clipbridge.utils.logging import get_logger

logger = get_logger(__name__)


def _as_count(value: float, what: str) -> int:
    if not math.isfinite(value) or value < 0 or value != int(value):
        raise NativeFormatError(f"{what} is not a non-negative integer ({value!r})")
    return int(value)


def read_packed_header(pointer: ctypes._Pointer) -> tuple[int, int]:
    """Read ``(total_length, path_count)`` from a non-null packed buffer.

    Raises:
        NativeFormatError: If either cell is not a non-negative integer
    """
    total = _as_count(pointer[0], "total length")
    count = _as_count(pointer[1], "path count")
    return total, count


def _decode(pointer: ctypes._Pointer, initial_points: int) -> PathCollection:
    total, count = read_packed_header(pointer)
    if total < COLLECTION_HEADER:
        raise NativeFormatError(f"total length {total} shorter than header")
    if count > (total - COLLECTION_HEADER) // RECORD_HEADER:
        raise NativeFormatError(f"{count} paths cannot fit in {total} slots")

    result = PathCollection(initial_paths=count, initial_points=initial_points)
    base = ctypes.cast(pointer, ctypes.c_void_p).value
    idx = COLLECTION_HEADER

    for i in range(count):
        if idx + RECORD_HEADER > total:
            raise NativeFormatError(f"path {i} header past end of buffer")
        npts = _as_count(pointer[idx], f"point count of path {i}")
        idx += RECORD_HEADER
        if idx + 2 * npts > total:
            raise NativeFormatError(f"path {i} with {npts} points overruns buffer")
        result.add(Path._from_memory(base + idx * DOUBLE_SIZE, npts))
        idx += 2 * npts

    return result


def decode_native_packed(
    pointer: ctypes._Pointer | None,
    engine: EngineBackend,
    initial_points: int = 16,
) -> PathCollection:
    """Convert an engine-allocated packed buffer into a PathCollection.

    A NULL pointer is a valid empty result: an empty collection is returned
    and the deallocator is not called. Any other pointer is released through
    ``engine.dispose`` exactly once, including when decoding raises.

    Args:
        pointer: Raw ``double*`` returned by the engine (may be NULL/None)
        engine: Engine owning the buffer
        initial_points: Capacity hint for decoded paths

    Returns:
        New PathCollection holding copies of every path

    Raises:
        NativeFormatError: If the buffer layout is inconsistent
    """
    if not pointer:
        return PathCollection()

    try:
        return _decode(pointer, initial_points)
    finally:
        engine.dispose(pointer)
        logger.debug("Disposed native buffer")
