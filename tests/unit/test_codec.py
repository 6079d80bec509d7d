"""Tests for decoding engine-owned packed buffers."""

import pytest
from conftest import FakeEngine, pack

from clipbridge.domain import DoublePointer, Path, PathCollection
from clipbridge.exceptions import NativeFormatError
from clipbridge.native import decode_native_packed, read_packed_header


class TestDecodeNativePacked:
    """Tests for decode_native_packed."""

    def test_null_pointer_is_empty_without_dispose(self, fake_engine):
        result = decode_native_packed(DoublePointer(), fake_engine)
        assert isinstance(result, PathCollection)
        assert result.size() == 0
        assert fake_engine.disposed == []

    def test_none_pointer_is_empty(self, fake_engine):
        assert decode_native_packed(None, fake_engine).size() == 0
        assert fake_engine.disposed == []

    def test_decodes_paths_in_order(self, fake_engine):
        pointer = fake_engine.allocate(pack([1, 2, 3, 4], [5.5, -6.25]))
        result = decode_native_packed(pointer, fake_engine)

        assert result.to_coords() == [[1, 2, 3, 4], [5.5, -6.25]]
        assert fake_engine.live == 0
        assert len(fake_engine.disposed) == 1

    def test_empty_collection_buffer(self, fake_engine):
        pointer = fake_engine.allocate(pack())
        result = decode_native_packed(pointer, fake_engine)
        assert result.size() == 0
        assert fake_engine.live == 0

    def test_zero_point_paths(self, fake_engine):
        pointer = fake_engine.allocate(pack([], [1, 1], []))
        result = decode_native_packed(pointer, fake_engine)
        assert [p.size() for p in result] == [0, 1, 0]

    def test_round_trip_is_lossless(self, fake_engine):
        """Encoding then decoding keeps counts and bit-identical coordinates."""
        coords = [
            [0.1, 0.2, 1 / 3, 2 / 3, 1e-12, 1e12],
            [],
            [-123.456, 789.0125],
        ]
        original = PathCollection.from_coords(coords)
        pointer = fake_engine.allocate(original.buffer.to_list())

        decoded = decode_native_packed(pointer, fake_engine)

        assert decoded == original
        assert decoded.to_coords() == coords

    def test_result_is_independent_of_native_memory(self, fake_engine):
        pointer = fake_engine.allocate(pack([1, 2]))
        result = decode_native_packed(pointer, fake_engine)
        fake_engine.allocated.clear()
        assert result.get(0).to_coords() == [1, 2]

    @pytest.mark.parametrize(
        "cells",
        [
            [2.0, -1.0],                    # negative path count
            [2.0, 1.5],                     # fractional path count
            [2.0, 1.0],                     # record past end of buffer
            [6.0, 1.0, 5.0, 0.0, 1.0, 2.0], # points overrun buffer
            [1.0, 0.0],                     # total shorter than header
            [float("nan"), 0.0],
        ],
    )
    def test_malformed_buffer_still_disposed(self, fake_engine, cells):
        pointer = fake_engine.allocate(cells)
        with pytest.raises(NativeFormatError):
            decode_native_packed(pointer, fake_engine)
        assert fake_engine.live == 0
        assert len(fake_engine.disposed) == 1

    def test_dispose_called_exactly_once(self):
        engine = FakeEngine()
        pointer = engine.allocate(pack([0, 0, 1, 1]))
        decode_native_packed(pointer, engine)
        with pytest.raises(AssertionError):
            engine.dispose(pointer)

    def test_capacity_hint(self, fake_engine):
        pointer = fake_engine.allocate(pack([1, 1]))
        result = decode_native_packed(pointer, fake_engine, initial_points=0)
        assert result.get(0) == Path.from_coords([1, 1])


class TestReadPackedHeader:
    """Tests for read_packed_header."""

    def test_reads_total_and_count(self, fake_engine):
        pointer = fake_engine.allocate(pack([1, 2], [3, 4, 5, 6]))
        assert read_packed_header(pointer) == (12, 2)

    def test_rejects_negative_total(self, fake_engine):
        pointer = fake_engine.allocate([-2.0, 0.0])
        with pytest.raises(NativeFormatError, match="total length"):
            read_packed_header(pointer)
