import itertools

import numpy as np
import pytest

from tinytensor import Entry, EntryKind, Tensor, View, into_vector


class TestIndex:
    def test_rank_one_yields_scalars(self):
        view = into_vector([1, 2, 3, 4]).view()
        assert [view.index(i).scalar() for i in range(4)] == [1, 2, 3, 4]

    def test_rank_two_yields_rows(self, matrix):
        view = matrix.view()
        np.testing.assert_array_equal(view.index(0).slice(), [1, 2])
        np.testing.assert_array_equal(view.index(1).slice(), [3, 4])

    def test_descend_to_scalar(self, matrix):
        row = matrix.index(0)
        assert row.is_slice
        assert row.view().index(1).scalar() == 2
        np.testing.assert_array_equal(matrix.index(1).slice(), [3, 4])

    def test_narrowed_shape(self, cube):
        entry = cube.index(1)
        assert entry.view().shape() == (3, 4)
        assert entry.view().index(2).view().shape() == (4,)

    def test_round_trip_matches_row_major_offset(self, cube):
        dims = cube.shape()
        for position in itertools.product(*(range(d) for d in dims)):
            entry = cube.view()
            for axis in position:
                entry = entry.index(axis)
                if entry.is_slice:
                    entry = entry.view()
            offset = np.ravel_multi_index(position, dims)
            assert entry.scalar() == cube.data()[offset]

    def test_tuple_indexing(self, cube):
        assert cube[1, 2, 3].scalar() == 23
        assert cube[0, 1].view().shape() == (4,)
        np.testing.assert_array_equal(cube[0, 1].slice(), [4, 5, 6, 7])
        assert cube[1] == cube.index(1)

    def test_slices_share_memory_with_tensor(self, cube):
        row = cube[1, 2].slice()
        assert np.shares_memory(row, cube.data())

    def test_view_sees_in_place_mutation(self, matrix):
        view = matrix.view()
        matrix += 10
        np.testing.assert_array_equal(view.index(1).slice(), [13, 14])

    def test_view_data_is_read_only(self, matrix):
        with pytest.raises(ValueError):
            matrix.index(0).slice()[0] = 99
        assert matrix.data()[0] == 1

    @pytest.mark.parametrize("position", [2, 5, -1])
    def test_out_of_range_position(self, matrix, position):
        with pytest.raises(IndexError):
            matrix.index(position)

    def test_out_of_range_on_inner_axis(self, matrix):
        with pytest.raises(IndexError):
            matrix[0, 2]

    def test_too_many_positions(self, matrix):
        with pytest.raises(IndexError):
            matrix[0, 1, 0]

    def test_empty_position_tuple(self, matrix):
        with pytest.raises(IndexError):
            matrix[()]

    @pytest.mark.parametrize("position", [1.0, "1", None])
    def test_non_integer_position(self, matrix, position):
        with pytest.raises(TypeError):
            matrix.index(position)

    def test_numpy_integer_position(self, matrix):
        np.testing.assert_array_equal(matrix.index(np.int64(1)).slice(), [3, 4])

    def test_iteration_over_first_axis(self, matrix):
        rows = [entry.slice().tolist() for entry in matrix]
        assert rows == [[1, 2], [3, 4]]
        assert len(matrix) == 2
        assert [e.scalar() for e in into_vector([7, 8, 9])] == [7, 8, 9]

    def test_zero_sized_rows(self):
        tensor = Tensor([], [3, 0])
        row = tensor.index(2)
        assert row.view().shape() == (0,)
        assert len(row.slice()) == 0


class TestEntry:
    def test_scalar_entry(self):
        entry = Entry.of_scalar(5)
        assert entry.kind is EntryKind.SCALAR
        assert entry.is_scalar and not entry.is_slice
        assert entry.scalar() == 5

    def test_slice_entry(self, matrix):
        view = matrix.view()
        entry = Entry.of_slice(view)
        assert entry.kind is EntryKind.SLICE
        assert entry.view() is view
        np.testing.assert_array_equal(entry.slice(), [1, 2, 3, 4])

    def test_wrong_accessor_on_scalar(self):
        entry = Entry.of_scalar(5)
        with pytest.raises(TypeError):
            entry.slice()
        with pytest.raises(TypeError):
            entry.view()

    def test_wrong_accessor_on_slice(self, matrix):
        with pytest.raises(TypeError):
            matrix.index(0).scalar()

    def test_equality(self, matrix):
        assert matrix.index(0) == Entry.of_slice(View(np.array([1, 2]), [2]))
        assert matrix.index(0) != matrix.index(1)
        assert Entry.of_scalar(2) == Entry.of_scalar(2)
        assert Entry.of_scalar(2) != Entry.of_slice(matrix.view())

    def test_kind_must_be_entry_kind(self):
        with pytest.raises(TypeError):
            Entry("scalar", 1)


class TestView:
    def test_length_must_match_shape(self):
        with pytest.raises(ValueError):
            View(np.arange(5), [2, 2])

    def test_data_must_be_flat_array(self):
        with pytest.raises(ValueError):
            View(np.arange(4).reshape(2, 2), [2, 2])
        with pytest.raises(ValueError):
            View([1, 2, 3, 4], [4])

    def test_accessors(self, cube):
        view = cube.view()
        assert view.shape() == (2, 3, 4)
        assert view.numel() == 24
        assert len(view) == 2
        np.testing.assert_array_equal(view.data(), np.arange(24))

    def test_does_not_make_caller_array_read_only(self):
        data = np.arange(4)
        View(data, [4])
        data[0] = 10
        assert data[0] == 10
