"""Engine facade for boolean operations, offsetting and rectangle clipping.

The Clipper class binds host objects to the native call signatures:

1. Merge per-call overrides into the configured option models
2. Borrow packed-buffer pointers for the duration of one native call
3. Call the engine once
4. For boolean operations, check the status code before touching outputs
5. Decode every returned pointer, releasing each exactly once

Key classes:
- Clipper: Facade over an EngineBackend
"""

import ctypes
import time
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import TypeVar

import structlog
from pydantic import BaseModel

from clipbridge.config import (
    BooleanOptions,
    ClipBridgeSettings,
    OffsetOptions,
    RectClipOptions,
    get_default_settings,
)
from clipbridge.domain import (
    ClipType,
    EndType,
    FillRule,
    GrowableBuffer,
    JoinType,
    Path,
    PathCollection,
    Rect,
)
from clipbridge.exceptions import BooleanOperationError, ClipBridgeError
from clipbridge.native import EngineBackend, decode_native_packed, get_engine
from clipbridge.utils.logging import OperationLogger, OperationStats, get_logger

Geometry = Path | PathCollection

OptionsT = TypeVar("OptionsT", bound=BaseModel)


def _with_overrides(options: OptionsT, **overrides: object) -> OptionsT:
    """Copy of ``options`` with every non-None override applied and validated."""
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return options
    return type(options).model_validate({**options.model_dump(), **update})


def _as_collection(geometry: Geometry | None) -> PathCollection | None:
    if geometry is None or isinstance(geometry, PathCollection):
        return geometry
    return PathCollection.from_paths([geometry])


def _borrow(stack: ExitStack, paths: PathCollection | None) -> ctypes._Pointer | None:
    if paths is None:
        return None
    return stack.enter_context(paths.buffer.borrow())


class Clipper:
    """Facade over the native clipping engine.

    Example:
        clipper = Clipper()
        subject = PathCollection.from_paths([clipper.make_path([0, 0, 10, 0, 10, 10])])
        clip = PathCollection.from_paths([clipper.make_path([5, 0, 15, 0, 15, 10])])
        closed, _open = clipper.intersect(subject, clip, fill_rule=FillRule.NON_ZERO)
    """

    def __init__(
        self,
        settings: ClipBridgeSettings | None = None,
        engine: EngineBackend | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            settings: Option defaults and engine location (defaults if None)
            engine: Engine to call (process-wide native engine if None,
                loaded on first use)
            logger: Structured logger for call events
        """
        self.settings = settings or get_default_settings()
        self._engine = engine
        self.logger = logger or get_logger("clipbridge.clipper")
        self.operation_logger = OperationLogger(self.logger)

    @property
    def engine(self) -> EngineBackend:
        """Engine in use, resolved on first access."""
        if self._engine is None:
            self._engine = get_engine(self.settings.engine.library_path)
        return self._engine

    @property
    def stats(self) -> OperationStats:
        """Statistics over calls made through this facade."""
        return self.operation_logger.stats

    def version(self) -> str:
        """Engine version string."""
        return self.engine.version()

    @staticmethod
    def make_path(coords: Sequence[float]) -> Path:
        """Build a Path from ``[x0, y0, x1, y1, ...]``."""
        return Path.from_coords(coords)

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def boolean_op(
        self,
        clip_type: ClipType,
        fill_rule: FillRule,
        subjects: Geometry | None,
        subjects_open: Geometry | None = None,
        clips: Geometry | None = None,
        precision: int | None = None,
        preserve_collinear: bool | None = None,
        reverse_solution: bool | None = None,
    ) -> tuple[PathCollection, PathCollection]:
        """Perform a boolean operation.

        Args:
            clip_type: Operation kind
            fill_rule: Winding rule
            subjects: Closed subject paths
            subjects_open: Open subject paths (None = NULL)
            clips: Closed clip paths (None = NULL)
            precision: Decimal precision (default from settings, 2)
            preserve_collinear: Keep collinear vertices (default True)
            reverse_solution: Reverse output orientation (default False)

        Returns:
            Tuple of (closed result paths, open result paths)

        Raises:
            BooleanOperationError: If the engine returns a nonzero status
        """
        options = _with_overrides(
            self.settings.boolean,
            fill_rule=fill_rule,
            precision=precision,
            preserve_collinear=preserve_collinear,
            reverse_solution=reverse_solution,
        )
        return self._boolean(ClipType(clip_type), subjects, subjects_open, clips, options)

    def intersect(
        self,
        subjects: Geometry,
        clips: Geometry | None = None,
        fill_rule: FillRule | None = None,
        precision: int | None = None,
    ) -> tuple[PathCollection, PathCollection]:
        """Intersection of subjects and clips."""
        return self._fixed_boolean(ClipType.INTERSECTION, subjects, clips, fill_rule, precision)

    def union(
        self,
        subjects: Geometry,
        clips: Geometry | None = None,
        fill_rule: FillRule | None = None,
        precision: int | None = None,
    ) -> tuple[PathCollection, PathCollection]:
        """Union of subjects and clips."""
        return self._fixed_boolean(ClipType.UNION, subjects, clips, fill_rule, precision)

    def difference(
        self,
        subjects: Geometry,
        clips: Geometry | None = None,
        fill_rule: FillRule | None = None,
        precision: int | None = None,
    ) -> tuple[PathCollection, PathCollection]:
        """Subjects minus clips."""
        return self._fixed_boolean(ClipType.DIFFERENCE, subjects, clips, fill_rule, precision)

    def xor(
        self,
        subjects: Geometry,
        clips: Geometry | None = None,
        fill_rule: FillRule | None = None,
        precision: int | None = None,
    ) -> tuple[PathCollection, PathCollection]:
        """Exclusive-or of subjects and clips."""
        return self._fixed_boolean(ClipType.XOR, subjects, clips, fill_rule, precision)

    def _fixed_boolean(
        self,
        clip_type: ClipType,
        subjects: Geometry,
        clips: Geometry | None,
        fill_rule: FillRule | None,
        precision: int | None,
    ) -> tuple[PathCollection, PathCollection]:
        options = _with_overrides(
            self.settings.boolean, fill_rule=fill_rule, precision=precision
        )
        return self._boolean(clip_type, subjects, None, clips, options)

    def _boolean(
        self,
        clip_type: ClipType,
        subjects: Geometry | None,
        subjects_open: Geometry | None,
        clips: Geometry | None,
        options: BooleanOptions,
    ) -> tuple[PathCollection, PathCollection]:
        operation = clip_type.name.lower()
        subjects = _as_collection(subjects)
        subjects_open = _as_collection(subjects_open)
        clips = _as_collection(clips)

        self.operation_logger.log_operation_start(
            operation,
            fill_rule=options.fill_rule.name,
            subjects=subjects.size() if subjects is not None else None,
            subjects_open=subjects_open.size() if subjects_open is not None else None,
            clips=clips.size() if clips is not None else None,
            precision=options.precision,
        )
        start_time = time.perf_counter()

        engine = self.engine
        with ExitStack() as stack:
            status, closed_ptr, open_ptr = engine.boolean_op(
                clip_type,
                options.fill_rule,
                _borrow(stack, subjects),
                _borrow(stack, subjects_open),
                _borrow(stack, clips),
                options.precision,
                options.preserve_collinear,
                options.reverse_solution,
            )

        if status != 0:
            self.operation_logger.log_operation_failed(operation, status)
            raise BooleanOperationError(status, operation)

        try:
            closed = self._decode(operation, closed_ptr)
        except Exception:
            # Release the open result too; the closed error is the one reported
            try:
                self._decode(operation, open_ptr)
            except ClipBridgeError as e:
                self.logger.warning(
                    "Open result also failed to decode", operation=operation, error=str(e)
                )
            raise
        opened = self._decode(operation, open_ptr)

        self.operation_logger.log_operation_complete(
            operation,
            paths_returned=closed.size() + opened.size(),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return closed, opened

    # ------------------------------------------------------------------
    # Offsetting
    # ------------------------------------------------------------------

    def inflate_path(
        self,
        path: Path,
        delta: float,
        join_type: JoinType | None = None,
        end_type: EndType | None = None,
        precision: int | None = None,
        miter_limit: float | None = None,
        arc_tolerance: float | None = None,
        reverse_solution: bool | None = None,
    ) -> PathCollection:
        """Offset a single path.

        Args:
            path: Path to offset
            delta: Offset distance (>0 outward, <0 inward), passed through unchanged
            join_type: Vertex join style (default MITER)
            end_type: End treatment (default POLYGON)
            precision: Decimal precision (default 2)
            miter_limit: Maximum miter ratio (default 2.0)
            arc_tolerance: Round join tolerance (default 0.0)
            reverse_solution: Reverse output orientation (default False)

        Returns:
            Offset paths
        """
        options = _with_overrides(
            self.settings.offset,
            join_type=join_type,
            end_type=end_type,
            precision=precision,
            miter_limit=miter_limit,
            arc_tolerance=arc_tolerance,
            reverse_solution=reverse_solution,
        )
        packed = path.to_packed()
        return self._inflate("inflate_path", self.engine.inflate_path, packed, delta, options)

    def inflate_paths(
        self,
        paths: Geometry,
        delta: float,
        join_type: JoinType | None = None,
        end_type: EndType | None = None,
        precision: int | None = None,
        miter_limit: float | None = None,
        arc_tolerance: float | None = None,
        reverse_solution: bool | None = None,
    ) -> PathCollection:
        """Offset every path in a collection.

        Takes the same options as ``inflate_path``. A single Path is offset
        as a one-path collection.

        Returns:
            Offset paths
        """
        options = _with_overrides(
            self.settings.offset,
            join_type=join_type,
            end_type=end_type,
            precision=precision,
            miter_limit=miter_limit,
            arc_tolerance=arc_tolerance,
            reverse_solution=reverse_solution,
        )
        collection = _as_collection(paths)
        return self._inflate(
            "inflate_paths", self.engine.inflate_paths, collection.buffer, delta, options
        )

    def _inflate(
        self,
        operation: str,
        entry: Callable[..., ctypes._Pointer],
        buffer: GrowableBuffer,
        delta: float,
        options: OffsetOptions,
    ) -> PathCollection:
        self.operation_logger.log_operation_start(
            operation,
            delta=delta,
            join_type=options.join_type.name,
            end_type=options.end_type.name,
            precision=options.precision,
        )
        start_time = time.perf_counter()

        with buffer.borrow() as pointer:
            result_ptr = entry(
                pointer,
                delta,
                options.join_type,
                options.end_type,
                options.precision,
                options.miter_limit,
                options.arc_tolerance,
                options.reverse_solution,
            )

        result = self._decode(operation, result_ptr)
        self.operation_logger.log_operation_complete(
            operation,
            paths_returned=result.size(),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    # ------------------------------------------------------------------
    # Rectangle clipping
    # ------------------------------------------------------------------

    def rect_clip(
        self, rect: Rect, paths: Geometry, precision: int | None = None
    ) -> PathCollection:
        """Clip closed polygons to a rectangle, removing the area outside."""
        return self._rect_clip("rect_clip", rect, paths, precision)

    def rect_clip_lines(
        self, rect: Rect, paths: Geometry, precision: int | None = None
    ) -> PathCollection:
        """Clip open lines to a rectangle, removing segments outside."""
        return self._rect_clip("rect_clip_lines", rect, paths, precision)

    def _rect_clip(
        self, operation: str, rect: Rect, paths: Geometry, precision: int | None
    ) -> PathCollection:
        options: RectClipOptions = _with_overrides(self.settings.rect_clip, precision=precision)
        collection = _as_collection(paths)
        entry = getattr(self.engine, operation)

        self.operation_logger.log_operation_start(
            operation,
            rect=(rect.left, rect.top, rect.right, rect.bottom),
            paths=collection.size(),
            precision=options.precision,
        )
        start_time = time.perf_counter()

        native_rect = rect.to_native()
        with collection.buffer.borrow() as pointer:
            result_ptr = entry(native_rect, pointer, options.precision)

        result = self._decode(operation, result_ptr)
        self.operation_logger.log_operation_complete(
            operation,
            paths_returned=result.size(),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    def _decode(self, operation: str, pointer: ctypes._Pointer | None) -> PathCollection:
        try:
            return decode_native_packed(
                pointer,
                self.engine,
                initial_points=self.settings.buffers.initial_points,
            )
        finally:
            if pointer:
                self.operation_logger.log_buffer_released(operation)
