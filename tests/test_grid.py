"""Tests for bounded point arithmetic and grid helpers."""

import numpy as np
import pytest

from cloudvm.grid import (
    CARDINALS, GRID_EXTENT, GRID_SHAPE, NUM_POINTS, Point, check_grid, combine, in_bounds,
    iter_points, new_grid,
)


class TestCombine:

    def test_upper_edge_rejected(self):
        assert combine(Point(29, 0, 0), Point(1, 0, 0)) is None

    def test_step_back_from_edge(self):
        assert combine(Point(29, 0, 0), Point(-1, 0, 0)) == Point(28, 0, 0)

    def test_lower_edge_rejected(self):
        assert combine(Point(0, 5, 5), Point(-1, 0, 0)) is None
        assert combine(Point(5, 0, 5), Point(0, -1, 0)) is None
        assert combine(Point(5, 5, 0), Point(0, 0, -1)) is None

    @pytest.mark.parametrize("offset", [Point(0, 1, 0), Point(0, 0, 1)])
    def test_each_axis_checked(self, offset):
        assert combine(Point(29, 29, 29), offset) is None

    def test_sum_inside(self):
        assert combine(Point(3, 4, 5), Point(10, -2, 7)) == Point(13, 2, 12)

    def test_out_of_range_inputs_can_sum_back_in(self):
        assert combine(Point(-5, 40, 0), Point(6, -20, 0)) == Point(1, 20, 0)

    def test_large_values(self):
        assert combine(Point(10 ** 12, 0, 0), Point(-10 ** 12, 0, 0)) == Point(0, 0, 0)

    def test_operator_delegates(self):
        assert Point(1, 1, 1) + Point(1, 0, 0) == Point(2, 1, 1)
        assert Point(0, 0, 0) + Point(0, -1, 0) is None


class TestGridHelpers:

    def test_cardinals_are_six_unit_offsets(self):
        assert len(set(CARDINALS)) == 6
        for offset in CARDINALS:
            assert abs(offset.x) + abs(offset.y) + abs(offset.z) == 1

    def test_in_bounds(self):
        assert in_bounds(Point(0, 0, 0))
        assert in_bounds(Point(GRID_EXTENT - 1, GRID_EXTENT - 1, GRID_EXTENT - 1))
        assert not in_bounds(Point(GRID_EXTENT, 0, 0))
        assert not in_bounds(Point(0, -1, 0))

    def test_new_grid(self):
        grid = new_grid()
        assert grid.shape == GRID_SHAPE
        assert grid.dtype == bool
        assert not grid.any()

    def test_iter_points_exhaustive_and_unique(self):
        points = list(iter_points())
        assert len(points) == NUM_POINTS == 27000
        assert len(set(points)) == NUM_POINTS
        assert points[0] == Point(0, 0, 0)
        assert points[1] == Point(0, 0, 1)
        assert points[-1] == Point(29, 29, 29)

    def test_point_index(self):
        grid = new_grid()
        grid[Point(1, 2, 3).index] = True
        assert grid[1, 2, 3]

    def test_check_grid(self):
        check_grid(new_grid())
        with pytest.raises(ValueError):
            check_grid(np.zeros((3, 3, 3), dtype=bool))
        with pytest.raises(ValueError):
            check_grid([[0]])
