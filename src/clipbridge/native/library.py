"""ctypes binding of the Clipper2 export API.

This module declares the double-precision entry points of the Clipper2
shared library and owns the process-wide engine handle. The library is
located and bound once per process; every facade shares the same handle.

Key pieces:
- NativeEngine: Typed wrapper over the bound entry points
- EngineBackend: Structural type the facade depends on
- load_engine / get_engine: Process-wide loader
"""

import ctypes
import ctypes.util
import os
import struct
from pathlib import Path
from typing import Protocol

from clipbridge.domain.buffer import DoublePointer
from clipbridge.domain.geometry import CRectD
from clipbridge.exceptions import LibraryLoadError, LibraryNotFoundError
from clipbridge.utils.logging import get_logger

logger = get_logger(__name__)

ENV_LIBRARY = "CLIPBRIDGE_LIBRARY"

_INFLATE_ARGTYPES = [
    DoublePointer,     # path(s)
    ctypes.c_double,   # delta
    ctypes.c_uint8,    # join type
    ctypes.c_uint8,    # end type
    ctypes.c_int,      # precision
    ctypes.c_double,   # miter limit
    ctypes.c_double,   # arc tolerance
    ctypes.c_bool,     # reverse solution
]

_RECT_CLIP_ARGTYPES = [
    ctypes.POINTER(CRectD),
    DoublePointer,
    ctypes.c_int,
]

# name -> (argtypes, restype)
_SIGNATURES: dict[str, tuple[list, object]] = {
    "Version": ([], ctypes.c_char_p),
    "DisposeArrayD": ([DoublePointer], None),
    "BooleanOpD": (
        [
            ctypes.c_uint8,                  # clip type
            ctypes.c_uint8,                  # fill rule
            DoublePointer,                   # subjects
            DoublePointer,                   # open subjects
            DoublePointer,                   # clips
            ctypes.POINTER(DoublePointer),   # closed solution out-slot
            ctypes.POINTER(DoublePointer),   # open solution out-slot
            ctypes.c_int,                    # precision
            ctypes.c_bool,                   # preserve collinear
            ctypes.c_bool,                   # reverse solution
        ],
        ctypes.c_int,
    ),
    "InflatePathD": (_INFLATE_ARGTYPES, DoublePointer),
    "InflatePathsD": (_INFLATE_ARGTYPES, DoublePointer),
    "RectClipD": (_RECT_CLIP_ARGTYPES, DoublePointer),
    "RectClipLinesD": (_RECT_CLIP_ARGTYPES, DoublePointer),
}


class EngineBackend(Protocol):
    """Calls the facade makes into a clipping engine.

    Input pointers may be None, meaning NULL. Returned pointers reference
    engine-owned packed buffers that must be passed to ``dispose`` once.
    """

    def version(self) -> str: ...

    def dispose(self, pointer: ctypes._Pointer) -> None: ...

    def boolean_op(
        self,
        clip_type: int,
        fill_rule: int,
        subjects: ctypes._Pointer | None,
        subjects_open: ctypes._Pointer | None,
        clips: ctypes._Pointer | None,
        precision: int,
        preserve_collinear: bool,
        reverse_solution: bool,
    ) -> tuple[int, ctypes._Pointer, ctypes._Pointer]: ...

    def inflate_path(
        self,
        path: ctypes._Pointer,
        delta: float,
        join_type: int,
        end_type: int,
        precision: int,
        miter_limit: float,
        arc_tolerance: float,
        reverse_solution: bool,
    ) -> ctypes._Pointer: ...

    def inflate_paths(
        self,
        paths: ctypes._Pointer,
        delta: float,
        join_type: int,
        end_type: int,
        precision: int,
        miter_limit: float,
        arc_tolerance: float,
        reverse_solution: bool,
    ) -> ctypes._Pointer: ...

    def rect_clip(
        self, rect: CRectD, paths: ctypes._Pointer, precision: int
    ) -> ctypes._Pointer: ...

    def rect_clip_lines(
        self, rect: CRectD, paths: ctypes._Pointer, precision: int
    ) -> ctypes._Pointer: ...


class NativeEngine:
    """Bound Clipper2 shared library.

    Example:
        engine = NativeEngine(ctypes.CDLL("libClipper2.so"), "libClipper2.so")
        print(engine.version())
    """

    def __init__(self, library: ctypes.CDLL, path: str) -> None:
        """Bind the entry points of an already-loaded library.

        Args:
            library: Loaded shared library
            path: Path or name it was loaded from

        Raises:
            LibraryLoadError: If an expected symbol is missing
        """
        self.path = path
        self._lib = library
        for name, (argtypes, restype) in _SIGNATURES.items():
            try:
                func = getattr(library, name)
            except AttributeError as e:
                raise LibraryLoadError(path, f"missing symbol {name}") from e
            func.argtypes = argtypes
            func.restype = restype

    def version(self) -> str:
        raw = self._lib.Version()
        return raw.decode("utf-8") if raw else ""

    def dispose(self, pointer: ctypes._Pointer) -> None:
        self._lib.DisposeArrayD(pointer)

    def boolean_op(
        self,
        clip_type: int,
        fill_rule: int,
        subjects: ctypes._Pointer | None,
        subjects_open: ctypes._Pointer | None,
        clips: ctypes._Pointer | None,
        precision: int,
        preserve_collinear: bool,
        reverse_solution: bool,
    ) -> tuple[int, ctypes._Pointer, ctypes._Pointer]:
        """Run BooleanOpD.

        Returns:
            Tuple of (status, closed solution pointer, open solution pointer)
        """
        solution = DoublePointer()
        solution_open = DoublePointer()
        status = self._lib.BooleanOpD(
            clip_type,
            fill_rule,
            subjects,
            subjects_open,
            clips,
            ctypes.byref(solution),
            ctypes.byref(solution_open),
            precision,
            preserve_collinear,
            reverse_solution,
        )
        return status, solution, solution_open

    def inflate_path(
        self,
        path: ctypes._Pointer,
        delta: float,
        join_type: int,
        end_type: int,
        precision: int,
        miter_limit: float,
        arc_tolerance: float,
        reverse_solution: bool,
    ) -> ctypes._Pointer:
        return self._lib.InflatePathD(
            path, delta, join_type, end_type, precision,
            miter_limit, arc_tolerance, reverse_solution,
        )

    def inflate_paths(
        self,
        paths: ctypes._Pointer,
        delta: float,
        join_type: int,
        end_type: int,
        precision: int,
        miter_limit: float,
        arc_tolerance: float,
        reverse_solution: bool,
    ) -> ctypes._Pointer:
        return self._lib.InflatePathsD(
            paths, delta, join_type, end_type, precision,
            miter_limit, arc_tolerance, reverse_solution,
        )

    def rect_clip(self, rect: CRectD, paths: ctypes._Pointer, precision: int) -> ctypes._Pointer:
        return self._lib.RectClipD(ctypes.byref(rect), paths, precision)

    def rect_clip_lines(
        self, rect: CRectD, paths: ctypes._Pointer, precision: int
    ) -> ctypes._Pointer:
        return self._lib.RectClipLinesD(ctypes.byref(rect), paths, precision)

    def __repr__(self) -> str:
        return f"NativeEngine(path={self.path!r})"


_engine: NativeEngine | None = None


def candidate_names() -> list[str]:
    """Library names searched when no explicit path is given."""
    bits = struct.calcsize("P") * 8
    return [f"Clipper2_{bits}", "Clipper2", "clipper2"]


def find_library(path: Path | str | None = None) -> str:
    """Resolve the shared library to load.

    Resolution order: explicit ``path``, the CLIPBRIDGE_LIBRARY environment
    variable, then the platform library search for ``candidate_names()``.

    Raises:
        LibraryNotFoundError: If nothing could be resolved
    """
    if path is not None:
        return str(path)

    env_path = os.environ.get(ENV_LIBRARY)
    if env_path:
        return env_path

    names = candidate_names()
    for name in names:
        found = ctypes.util.find_library(name)
        if found:
            return found

    raise LibraryNotFoundError(names)


def load_engine(path: Path | str | None = None) -> NativeEngine:
    """Load and bind the engine once per process.

    Later calls return the cached handle. Asking for a different library
    after one is loaded is an error.

    Args:
        path: Explicit library path (None = search)

    Returns:
        Process-wide NativeEngine

    Raises:
        LibraryNotFoundError: If no library could be located
        LibraryLoadError: If loading or binding fails
    """
    global _engine

    if _engine is not None:
        if path is not None and str(path) != _engine.path:
            raise LibraryLoadError(str(path), f"engine already loaded from {_engine.path}")
        return _engine

    resolved = find_library(path)
    try:
        library = ctypes.CDLL(resolved)
    except OSError as e:
        raise LibraryLoadError(resolved, str(e)) from e

    engine = NativeEngine(library, resolved)
    logger.info("Native engine loaded", path=resolved, version=engine.version())
    _engine = engine
    return engine


def get_engine(path: Path | str | None = None) -> NativeEngine:
    """Return the process-wide engine, loading it on first use."""
    if _engine is not None and path is None:
        return _engine
    return load_engine(path)
