"""Shared fixtures: a pure-ctypes stand-in for the native engine."""

import ctypes

import pytest

from clipbridge.domain import DoublePointer


def address(pointer: ctypes._Pointer) -> int:
    """Raw address held by a ctypes pointer."""
    return ctypes.cast(pointer, ctypes.c_void_p).value


def read_collection(pointer: ctypes._Pointer) -> list[float]:
    """Copy a packed multi-path buffer, header included."""
    return pointer[: int(pointer[0])]


def read_single_path(pointer: ctypes._Pointer) -> list[float]:
    """Copy a single-path buffer ``[n, 0, x, y, ...]``."""
    return pointer[: 2 + 2 * int(pointer[0])]


def pack(*paths: list[float]) -> list[float]:
    """Build packed multi-path cells from flat coordinate lists."""
    cells = [0.0, float(len(paths))]
    for coords in paths:
        cells += [len(coords) / 2, 0.0, *coords]
    cells[0] = float(len(cells))
    return cells


class FakeEngine:
    """Echoing engine that owns its result buffers like the real library.

    Results are copies of the input geometry unless an override is set.
    Every buffer handed out must come back through ``dispose`` exactly once.
    """

    def __init__(self, status: int = 0) -> None:
        self.status = status
        self.calls: list[tuple[str, dict]] = []
        self.allocated: dict[int, ctypes.Array] = {}
        self.disposed: list[int] = []
        self.closed_override: list[float] | None = None
        self.open_override: list[float] | None = None
        self.result_override: list[float] | None = None
        self.null_results = False

    def allocate(self, cells: list[float]) -> ctypes._Pointer:
        array = (ctypes.c_double * len(cells))(*cells)
        pointer = ctypes.cast(array, DoublePointer)
        self.allocated[address(pointer)] = array
        return pointer

    @property
    def live(self) -> int:
        """Buffers handed out and not yet released."""
        return len(self.allocated)

    def version(self) -> str:
        return "1.5.4-fake"

    def dispose(self, pointer: ctypes._Pointer) -> None:
        key = address(pointer)
        if key not in self.allocated:
            raise AssertionError(f"dispose of unknown or released buffer {key:#x}")
        del self.allocated[key]
        self.disposed.append(key)

    def _result(self, override: list[float] | None, echo: list[float] | None) -> ctypes._Pointer:
        if self.null_results:
            return DoublePointer()
        if override is not None:
            return self.allocate(override)
        if echo is None:
            return DoublePointer()
        return self.allocate(echo)

    def boolean_op(
        self,
        clip_type,
        fill_rule,
        subjects,
        subjects_open,
        clips,
        precision,
        preserve_collinear,
        reverse_solution,
    ):
        self.calls.append(
            (
                "boolean_op",
                {
                    "clip_type": int(clip_type),
                    "fill_rule": int(fill_rule),
                    "subjects": read_collection(subjects) if subjects else None,
                    "subjects_open": read_collection(subjects_open) if subjects_open else None,
                    "clips": read_collection(clips) if clips else None,
                    "precision": precision,
                    "preserve_collinear": preserve_collinear,
                    "reverse_solution": reverse_solution,
                },
            )
        )
        if self.status != 0:
            return self.status, DoublePointer(), DoublePointer()
        closed = self._result(
            self.closed_override, read_collection(subjects) if subjects else None
        )
        opened = self._result(
            self.open_override, read_collection(subjects_open) if subjects_open else None
        )
        return 0, closed, opened

    def _offset_call(self, name, cells, delta, join_type, end_type, precision,
                     miter_limit, arc_tolerance, reverse_solution):
        self.calls.append(
            (
                name,
                {
                    "input": cells,
                    "delta": delta,
                    "join_type": int(join_type),
                    "end_type": int(end_type),
                    "precision": precision,
                    "miter_limit": miter_limit,
                    "arc_tolerance": arc_tolerance,
                    "reverse_solution": reverse_solution,
                },
            )
        )

    def inflate_path(self, path, delta, join_type, end_type, precision,
                     miter_limit, arc_tolerance, reverse_solution):
        cells = read_single_path(path)
        self._offset_call("inflate_path", cells, delta, join_type, end_type, precision,
                          miter_limit, arc_tolerance, reverse_solution)
        return self._result(self.result_override, pack(cells[2:]))

    def inflate_paths(self, paths, delta, join_type, end_type, precision,
                      miter_limit, arc_tolerance, reverse_solution):
        cells = read_collection(paths)
        self._offset_call("inflate_paths", cells, delta, join_type, end_type, precision,
                          miter_limit, arc_tolerance, reverse_solution)
        return self._result(self.result_override, cells)

    def _rect_call(self, name, rect, paths, precision):
        cells = read_collection(paths)
        self.calls.append(
            (
                name,
                {
                    "rect": (rect.left, rect.top, rect.right, rect.bottom),
                    "input": cells,
                    "precision": precision,
                },
            )
        )
        return self._result(self.result_override, cells)

    def rect_clip(self, rect, paths, precision):
        return self._rect_call("rect_clip", rect, paths, precision)

    def rect_clip_lines(self, rect, paths, precision):
        return self._rect_call("rect_clip_lines", rect, paths, precision)


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Fresh echoing engine."""
    return FakeEngine()
