"""Paths and path collections backed by growable double buffers.

A Path stores its points as an interleaved ``x, y`` stream. A PathCollection
stores every path it holds in the engine's packed multi-path layout:

    [total_length, path_count, (n0, 0, x, y, ...), (n1, 0, x, y, ...), ...]

so the collection can be handed to the native engine as-is. The packed
buffer is the only copy of the coordinates; the collection keeps a list of
record offsets next to it for indexed access.
"""

from collections.abc import Iterable, Iterator, Sequence

from clipbridge.domain.buffer import GrowableBuffer
from clipbridge.domain.geometry import Point
from clipbridge.exceptions import PathIndexError

# Slots taken by the collection header and by each path record header
COLLECTION_HEADER = 2
RECORD_HEADER = 2


class Path:
    """Ordered sequence of points forming one contour or polyline.

    Indices are zero-based. Out-of-range access raises PathIndexError.

    Example:
        path = Path.from_coords([0, 0, 10, 0, 10, 10])
        path.add(Point(0, 10))
        assert path.size() == 4
    """

    __slots__ = ("_buffer",)

    def __init__(self, initial_capacity: int = 16) -> None:
        """Create an empty path.

        Args:
            initial_capacity: Number of points to pre-allocate room for
        """
        self._buffer = GrowableBuffer(initial_capacity * 2)

    @classmethod
    def from_coords(cls, coords: Sequence[float]) -> "Path":
        """Build a path from an alternating coordinate list.

        Args:
            coords: Flat list ``[x0, y0, x1, y1, ...]``

        Returns:
            New Path with ``len(coords) // 2`` points

        Raises:
            ValueError: If the list has an odd number of values
        """
        if len(coords) % 2:
            raise ValueError(f"Coordinate list has odd length {len(coords)}")
        path = cls(len(coords) // 2)
        for i in range(0, len(coords), 2):
            path.add(Point(float(coords[i]), float(coords[i + 1])))
        return path

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Path":
        """Build a path from an iterable of points."""
        points = list(points)
        path = cls(len(points))
        for point in points:
            path.add(point)
        return path

    @classmethod
    def _from_memory(cls, address: int, count: int) -> "Path":
        """Copy ``count`` interleaved points starting at a raw address."""
        path = cls(count)
        path._buffer.copy_from(address, 0, 2 * count)
        path._buffer.reset(2 * count)
        return path

    @property
    def buffer(self) -> GrowableBuffer:
        """Backing buffer holding the interleaved coordinates."""
        return self._buffer

    def add(self, point: Point) -> None:
        """Append a point."""
        buffer = self._buffer
        buffer.ensure(2)
        length = buffer.length
        buffer[length] = point.x
        buffer[length + 1] = point.y
        buffer.length = length + 2

    def set(self, index: int, point: Point) -> None:
        """Replace the point at ``index``."""
        self._check(index)
        self._buffer[2 * index] = point.x
        self._buffer[2 * index + 1] = point.y

    def get(self, index: int) -> Point:
        """Return the point at ``index`` as a fresh Point."""
        self._check(index)
        return Point(self._buffer[2 * index], self._buffer[2 * index + 1])

    def clear(self) -> None:
        """Remove every point, keeping the allocated storage."""
        self._buffer.reset(0)

    def size(self) -> int:
        """Number of stored points."""
        return self._buffer.length // 2

    def to_coords(self) -> list[float]:
        """Flat ``[x0, y0, x1, y1, ...]`` copy of the coordinates."""
        return self._buffer.to_list()

    def to_packed(self) -> GrowableBuffer:
        """Encode this path in the engine's single-path layout.

        Returns:
            New buffer holding ``[point_count, 0, x0, y0, ...]``
        """
        count = self.size()
        packed = GrowableBuffer(RECORD_HEADER + 2 * count)
        packed[0] = count
        packed[1] = 0
        packed.copy_from(self._buffer.address(), RECORD_HEADER, 2 * count)
        packed.reset(RECORD_HEADER + 2 * count)
        return packed

    def _check(self, index: int) -> None:
        size = self.size()
        if not 0 <= index < size:
            raise PathIndexError(index, size)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Point]:
        for i in range(self.size()):
            yield self.get(i)

    def __getitem__(self, index: int) -> Point:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.to_coords() == other.to_coords()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Path(size={self.size()})"


class PathCollection:
    """Ordered group of paths stored in the engine's packed layout.

    Adding a path copies its current coordinates into the packed buffer;
    later changes to the original Path are not reflected. ``get`` returns a
    fresh Path built from the stored record.

    Example:
        paths = PathCollection()
        paths.add(Path.from_coords([0, 0, 10, 0, 10, 10]))
        with paths.buffer.borrow() as ptr:
            ...  # hand ptr to a native call
    """

    __slots__ = ("_buffer", "_offsets")

    def __init__(self, initial_paths: int = 4, initial_points: int = 16) -> None:
        """Create an empty collection.

        Args:
            initial_paths: Anticipated number of paths
            initial_points: Anticipated points per path
        """
        num_paths = max(initial_paths, 0)
        per_path = max(initial_points, 0)
        capacity = num_paths * (RECORD_HEADER + 2 * per_path) + COLLECTION_HEADER
        self._buffer = GrowableBuffer(capacity)
        self._offsets: list[int] = []
        self._write_header()

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> "PathCollection":
        """Build a collection holding copies of ``paths``."""
        paths = list(paths)
        collection = cls(initial_paths=len(paths))
        collection.extend(paths)
        return collection

    @classmethod
    def from_coords(cls, coords: Iterable[Sequence[float]]) -> "PathCollection":
        """Build a collection from flat coordinate lists, one per path."""
        return cls.from_paths(Path.from_coords(c) for c in coords)

    @property
    def buffer(self) -> GrowableBuffer:
        """Packed buffer, ready to be borrowed for a native call."""
        return self._buffer

    def add(self, path: Path) -> None:
        """Append a copy of ``path``'s current points."""
        count = path.size()
        need = RECORD_HEADER + 2 * count
        buffer = self._buffer
        buffer.ensure(need)

        cursor = buffer.length
        buffer[cursor] = count
        buffer[cursor + 1] = 0
        buffer.copy_from(path.buffer.address(), cursor + RECORD_HEADER, 2 * count)
        buffer.reset(cursor + need)

        self._offsets.append(cursor)
        self._write_header()

    def extend(self, paths: Iterable[Path]) -> None:
        """Append copies of several paths."""
        for path in paths:
            self.add(path)

    def get(self, index: int) -> Path:
        """Return the path at ``index``."""
        size = self.size()
        if not 0 <= index < size:
            raise PathIndexError(index, size)
        offset = self._offsets[index]
        count = int(self._buffer[offset])
        return Path._from_memory(self._buffer.address(offset + RECORD_HEADER), count)

    def clear(self) -> None:
        """Remove every path, keeping the allocated storage."""
        self._offsets.clear()
        self._buffer.reset(COLLECTION_HEADER)
        self._write_header()

    def size(self) -> int:
        """Number of stored paths."""
        return len(self._offsets)

    def point_count(self) -> int:
        """Total number of points across all paths."""
        return (self._buffer.length - COLLECTION_HEADER - RECORD_HEADER * self.size()) // 2

    def to_coords(self) -> list[list[float]]:
        """Flat coordinate list per path."""
        return [path.to_coords() for path in self]

    def _write_header(self) -> None:
        if self._buffer.length < COLLECTION_HEADER:
            self._buffer.reset(COLLECTION_HEADER)
        self._buffer[0] = self._buffer.length
        self._buffer[1] = len(self._offsets)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Path]:
        for i in range(self.size()):
            yield self.get(i)

    def __getitem__(self, index: int) -> Path:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathCollection):
            return NotImplemented
        return self._buffer.to_list() == other._buffer.to_list()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PathCollection(size={self.size()}, points={self.point_count()})"
