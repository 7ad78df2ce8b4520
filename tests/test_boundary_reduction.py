"""Tests for the Z2 boundary reduction kernel."""

import copy
import sys

import numpy as np
import pytest

from simplex_homology.geometry.filtration import build_rips_filtration
from simplex_homology.reduction.boundary_reduction import (
    Column,
    boundary_column,
    check_pivot_map,
    is_reduced,
    low_of,
    reduce_columns,
    sorted_indices,
    z2_chain,
)
from simplex_homology.reduction.indexer import index_filtration
from simplex_homology.utils.exceptions import InvariantViolation


class TestChains:

    def test_indices_come_back_sorted(self):
        assert sorted_indices(z2_chain([5, 0, 3])) == [0, 3, 5]

    def test_repeated_indices_cancel(self):
        assert z2_chain([2, 2, 4]) == {4}

    def test_low(self):
        assert low_of(set()) == -1
        assert low_of(z2_chain([1, 7])) == 7

    def test_symmetric_difference(self):
        a = z2_chain([1, 2, 3])
        a ^= z2_chain([2, 3, 4])
        assert sorted_indices(a) == [1, 4]

    def test_boundary_column(self):
        col = boundary_column([0, 2], position=3)
        assert col.rows() == [0, 2]
        assert col.member_positions() == [3]
        assert col.low == 2
        assert not col.is_zero


class TestReduceColumns:

    def test_triangle_boundary(self):
        # edges (0,1), (1,2), (0,2) on three vertices: the last one is a cycle
        columns = [
            boundary_column([0, 1], 0),
            boundary_column([1, 2], 1),
            boundary_column([0, 2], 2),
        ]
        result = reduce_columns(columns)
        assert result.pivots == {1: 0, 2: 1}
        assert result.zero_columns == [2]
        assert columns[2].is_zero
        assert columns[2].member_positions() == [0, 1, 2]
        assert result.rank == 2
        assert result.n_additions == 2
        assert result.pivot_columns() == [0, 1]

    def test_members_not_tracked(self):
        columns = [boundary_column([0, 1], 0), boundary_column([0, 1], 1)]
        reduce_columns(columns, track_members=False)
        assert columns[1].is_zero
        assert columns[1].member_positions() == [1]

    def test_empty_input(self):
        result = reduce_columns([])
        assert result.pivots == {}
        assert result.zero_columns == []

    def test_zero_column_stays_zero(self):
        columns = [Column(boundary=set(), members={0})]
        result = reduce_columns(columns)
        assert result.zero_columns == [0]

    def test_pivot_uniqueness_on_rips(self, random_cloud):
        indexed = index_filtration(build_rips_filtration(random_cloud), random_cloud.shape[0])
        columns = indexed.columns()
        result = reduce_columns(columns)

        owners = list(result.pivots.values())
        assert len(owners) == len(set(owners))
        assert is_reduced(columns)
        check_pivot_map(columns, result.pivots)
        assert len(result.pivots) + len(result.zero_columns) == len(columns)

    def test_idempotent(self, random_cloud):
        indexed = index_filtration(build_rips_filtration(random_cloud), random_cloud.shape[0])
        columns = indexed.columns()
        first = reduce_columns(columns)
        snapshot = copy.deepcopy(columns)

        second = reduce_columns(columns)
        assert second.n_additions == 0
        assert second.pivots == first.pivots
        assert second.zero_columns == first.zero_columns
        assert [(c.boundary, c.members) for c in columns] == [(c.boundary, c.members) for c in snapshot]

    def test_members_reproduce_reduced_boundary(self, unit_square):
        indexed = index_filtration(build_rips_filtration(unit_square), 4)
        original = [z2_chain(rows) for rows in indexed.boundaries]
        columns = indexed.columns()
        reduce_columns(columns)
        for col in columns:
            acc = set()
            for pos in col.member_positions():
                acc ^= original[pos]
            assert acc == col.boundary


class TestIsReduced:

    def test_detects_shared_low(self):
        columns = [boundary_column([0, 3], 0), boundary_column([1, 3], 1)]
        assert not is_reduced(columns)

    def test_check_pivot_map_mismatch(self):
        columns = [boundary_column([0, 3], 0)]
        with pytest.raises(InvariantViolation):
            check_pivot_map(columns, {2: 0})


def _bytes_per_column(n_points, seed=0):
    rng = np.random.default_rng(seed)
    X = rng.uniform(0.0, 400.0, size=(n_points, 2))
    columns = index_filtration(build_rips_filtration(X), n_points).columns()
    total = 0
    for col in columns:
        total += sys.getsizeof(col.boundary) + sys.getsizeof(col.members)
        total += sum(sys.getsizeof(i) for i in col.boundary | col.members)
    return total / len(columns), columns


class TestColumnFootprint:

    def test_fresh_columns_hold_only_their_faces(self):
        _, columns = _bytes_per_column(40)
        for col in columns:
            assert len(col.boundary) in (2, 3)
            assert len(col.members) == 1

    def test_bytes_per_column_do_not_grow_with_the_matrix(self):
        small, small_cols = _bytes_per_column(20)
        large, large_cols = _bytes_per_column(60)
        assert len(large_cols) > 20 * len(small_cols)
        assert large < 1.25 * small
