"""Growable contiguous buffer of C doubles.

GrowableBuffer is the storage primitive behind Path and PathCollection. It
keeps its data in a ctypes array so the very same memory can be handed to
the native engine as a ``double*`` without re-serialization.
"""

import ctypes
from collections.abc import Iterator
from contextlib import contextmanager

from clipbridge.exceptions import BufferAllocationError, BufferBorrowedError

DoublePointer = ctypes.POINTER(ctypes.c_double)

DOUBLE_SIZE = ctypes.sizeof(ctypes.c_double)


def _allocate(capacity: int) -> ctypes.Array:
    try:
        return (ctypes.c_double * capacity)()
    except (MemoryError, OverflowError) as e:
        raise BufferAllocationError(capacity) from e


class GrowableBuffer:
    """Resizable array of doubles with amortized-doubling growth.

    Growth is never in place: a new array is allocated, the logical region
    is copied byte-for-byte and the old array is dropped. Capacity never
    shrinks.

    Attributes:
        length: Number of slots in use
        capacity: Number of slots allocated
    """

    __slots__ = ("_borrows", "_data", "capacity", "length")

    def __init__(self, capacity: int = 16) -> None:
        self.capacity = max(int(capacity), 1)
        self.length = 0
        self._data = _allocate(self.capacity)
        self._borrows = 0

    def ensure(self, required: int) -> None:
        """Guarantee room for ``required`` more slots past ``length``.

        Args:
            required: Number of extra slots needed

        Raises:
            BufferBorrowedError: If growth is needed while a pointer is borrowed
            BufferAllocationError: If the new storage cannot be allocated
        """
        needed = self.length + required
        if needed <= self.capacity:
            return

        if self._borrows:
            raise BufferBorrowedError()

        capacity = self.capacity
        while capacity < needed:
            capacity *= 2

        data = _allocate(capacity)
        ctypes.memmove(data, self._data, self.length * DOUBLE_SIZE)
        self._data = data
        self.capacity = capacity

    def append(self, value: float) -> None:
        """Append a single value, growing if necessary."""
        self.ensure(1)
        self._data[self.length] = value
        self.length += 1

    def reset(self, length: int = 0) -> None:
        """Move the logical length without touching capacity."""
        if not 0 <= length <= self.capacity:
            raise ValueError(f"Length {length} outside capacity {self.capacity}")
        self.length = length

    def copy_from(self, source: int, offset: int, count: int) -> None:
        """Copy ``count`` doubles from raw address ``source`` into slot ``offset``.

        The destination range must already be allocated.
        """
        if offset + count > self.capacity:
            raise ValueError("Copy would overrun buffer capacity")
        if count:
            dest = ctypes.addressof(self._data) + offset * DOUBLE_SIZE
            ctypes.memmove(dest, source, count * DOUBLE_SIZE)

    def address(self, offset: int = 0) -> int:
        """Raw address of slot ``offset`` for bulk copies between buffers."""
        return ctypes.addressof(self._data) + offset * DOUBLE_SIZE

    @contextmanager
    def borrow(self) -> Iterator[ctypes._Pointer]:
        """Lend a raw ``double*`` to the current storage for one native call.

        The pointer is only valid inside the ``with`` block. Growth is refused
        while any borrow is active.

        Yields:
            Pointer to the first slot
        """
        self._borrows += 1
        try:
            yield ctypes.cast(self._data, DoublePointer)
        finally:
            self._borrows -= 1

    @property
    def borrowed(self) -> bool:
        """True while a raw pointer is on loan."""
        return self._borrows > 0

    def to_list(self) -> list[float]:
        """Copy of the logical region as Python floats."""
        return self._data[: self.length]

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < self.length:
            raise IndexError(f"Buffer index {index} out of range")
        return self._data[index]

    def __setitem__(self, index: int, value: float) -> None:
        if not 0 <= index < self.capacity:
            raise IndexError(f"Buffer index {index} out of range")
        self._data[index] = value

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"GrowableBuffer(length={self.length}, capacity={self.capacity})"
