"""Tests for the growable double buffer."""

import ctypes

import pytest

from clipbridge.domain import DoublePointer, GrowableBuffer
from clipbridge.exceptions import BufferAllocationError, BufferBorrowedError


class TestGrowableBuffer:
    """Tests for GrowableBuffer."""

    def test_initial_state(self):
        buffer = GrowableBuffer(8)
        assert buffer.length == 0
        assert buffer.capacity == 8
        assert len(buffer) == 0

    @pytest.mark.parametrize("hint", [0, -5])
    def test_non_positive_hint_is_clamped(self, hint):
        """Zero or negative hints must not stall the doubling loop."""
        buffer = GrowableBuffer(hint)
        assert buffer.capacity == 1
        buffer.ensure(100)
        assert buffer.capacity >= 100

    def test_ensure_no_growth_when_room(self):
        buffer = GrowableBuffer(8)
        buffer.ensure(8)
        assert buffer.capacity == 8

    def test_ensure_doubles_until_sufficient(self):
        """A single large request is met in one reallocation."""
        buffer = GrowableBuffer(4)
        buffer.append(1.0)
        buffer.ensure(100)
        assert buffer.capacity == 128

    def test_growth_preserves_contents(self):
        buffer = GrowableBuffer(1)
        for i in range(257):
            buffer.append(i * 0.5)
        assert buffer.to_list() == [i * 0.5 for i in range(257)]
        assert buffer.capacity >= buffer.length

    def test_growth_allocates_new_storage(self):
        buffer = GrowableBuffer(2)
        before = buffer.address()
        buffer.ensure(10)
        assert buffer.address() != before

    def test_reset_keeps_capacity(self):
        buffer = GrowableBuffer(4)
        buffer.ensure(50)
        capacity = buffer.capacity
        buffer.reset(0)
        assert buffer.length == 0
        assert buffer.capacity == capacity

    def test_reset_beyond_capacity(self):
        with pytest.raises(ValueError):
            GrowableBuffer(4).reset(5)

    def test_getitem_bounds(self):
        buffer = GrowableBuffer(4)
        buffer.append(3.0)
        assert buffer[0] == 3.0
        with pytest.raises(IndexError):
            _ = buffer[1]

    def test_copy_from_raw_address(self):
        source = (ctypes.c_double * 3)(1.0, 2.0, 3.0)
        buffer = GrowableBuffer(4)
        buffer.copy_from(ctypes.addressof(source), 1, 3)
        buffer.reset(4)
        assert buffer.to_list()[1:] == [1.0, 2.0, 3.0]

    def test_copy_from_overrun(self):
        source = (ctypes.c_double * 3)()
        with pytest.raises(ValueError):
            GrowableBuffer(2).copy_from(ctypes.addressof(source), 0, 3)

    def test_borrow_yields_pointer_to_storage(self):
        buffer = GrowableBuffer(4)
        buffer.append(7.5)
        with buffer.borrow() as pointer:
            assert isinstance(pointer, DoublePointer)
            assert pointer[0] == 7.5
            assert buffer.borrowed
        assert not buffer.borrowed

    def test_growth_refused_while_borrowed(self):
        buffer = GrowableBuffer(2)
        with buffer.borrow():
            with pytest.raises(BufferBorrowedError):
                buffer.ensure(10)
        buffer.ensure(10)
        assert buffer.capacity >= 10

    def test_ensure_within_capacity_allowed_while_borrowed(self):
        buffer = GrowableBuffer(8)
        with buffer.borrow():
            buffer.ensure(8)

    def test_borrow_released_on_error(self):
        buffer = GrowableBuffer(2)
        with pytest.raises(RuntimeError):
            with buffer.borrow():
                raise RuntimeError("native call failed")
        assert not buffer.borrowed

    def test_allocation_failure_is_memory_error(self, monkeypatch):
        import clipbridge.domain.buffer as buffer_module

        def refuse(capacity):
            raise BufferAllocationError(capacity)

        buffer = GrowableBuffer(2)
        monkeypatch.setattr(buffer_module, "_allocate", refuse)
        with pytest.raises(MemoryError):
            buffer.ensure(1000)
        assert buffer.capacity == 2
