import random

import numpy as np
import pytest

from grid_core import (
    CellState,
    HexCell,
    HexDirection,
    MazeGrid,
    SquareCell,
    SquareDirection,
    make_grid,
)
from maze_gen import generate_maze


@pytest.mark.parametrize("cell_type", [HexCell, SquareCell])
def test_neighbour_lookup_is_symmetric(cell_type):
    grid = MazeGrid(6, 5, cell_type=cell_type)
    for cell in grid.get_all_cells():
        for direction in cell.get_all_directions():
            neighbour = grid.get_neighbour_in_direction(cell, direction)
            if neighbour is None:
                continue
            back = grid.get_neighbour_in_direction(neighbour, grid.get_opposite_direction(direction))
            assert back is cell


def test_opposite_directions():
    assert HexCell.opposite_direction(HexDirection.UP) == HexDirection.DOWN
    assert HexCell.opposite_direction(HexDirection.UP_RIGHT) == HexDirection.DOWN_LEFT
    assert HexCell.opposite_direction(HexDirection.UP_LEFT) == HexDirection.DOWN_RIGHT
    assert SquareCell.opposite_direction(SquareDirection.RIGHT) == SquareDirection.LEFT
    assert SquareCell.opposite_direction(SquareDirection.DOWN) == SquareDirection.UP


def test_hex_offsets_depend_on_column_parity():
    grid = MazeGrid(4, 4)
    even = grid.get_cell(0, 2)
    odd = grid.get_cell(1, 2)
    assert grid.get_neighbour_in_direction(even, HexDirection.UP_RIGHT) is grid.get_cell(1, 2)
    assert grid.get_neighbour_in_direction(even, HexDirection.DOWN_RIGHT) is grid.get_cell(1, 1)
    assert grid.get_neighbour_in_direction(odd, HexDirection.UP_RIGHT) is grid.get_cell(2, 3)
    assert grid.get_neighbour_in_direction(odd, HexDirection.DOWN_RIGHT) is grid.get_cell(2, 2)
    assert grid.get_neighbour_in_direction(odd, HexDirection.UP_LEFT) is grid.get_cell(0, 3)


def test_boundary_lookup_returns_none():
    grid = MazeGrid(3, 3)
    corner = grid.get_cell(0, 0)
    assert grid.get_neighbour_in_direction(corner, HexDirection.DOWN) is None
    assert grid.get_neighbour_in_direction(corner, HexDirection.DOWN_LEFT) is None
    assert grid.get_cell(3, 0) is None
    assert grid.get_cell(-1, 0) is None


def test_direction_between_adjacent_and_non_adjacent(capsys):
    grid = MazeGrid(4, 4)
    a = grid.get_cell(1, 1)
    assert grid.get_direction_between(a, grid.get_cell(1, 2)) == HexDirection.UP
    assert grid.get_direction_between(a, grid.get_cell(0, 1)) == HexDirection.DOWN_LEFT

    assert grid.get_direction_between(a, grid.get_cell(3, 3)) is None
    assert "ERROR" in capsys.readouterr().out


def test_disable_face_between_is_idempotent():
    grid = MazeGrid(3, 3)
    a = grid.get_cell(1, 1)
    b = grid.get_cell(2, 2)
    direction = grid.get_direction_between(a, b)

    grid.disable_face_between(a, b, direction)
    once = grid.wall_array()
    grid.disable_face_between(a, b, direction)
    twice = grid.wall_array()

    assert np.array_equal(once, twice)
    assert not grid.has_wall_between(a, b, direction)
    assert grid.count_open_passages() == 1


def test_has_wall_between_needs_both_sides():
    grid = MazeGrid(3, 3)
    a = grid.get_cell(0, 0)
    b = grid.get_cell(0, 1)
    assert grid.has_wall_between(a, b, HexDirection.UP)

    a.disable_face(HexDirection.UP)
    assert not grid.has_wall_between(a, b, HexDirection.UP)
    assert b.has_wall(HexDirection.DOWN)


def test_set_state_counts_visits():
    cell = HexCell(0, 0)
    cell.set_state(CellState.CURRENT)
    assert cell.state == CellState.CURRENT
    assert cell.visit_count == 0
    assert not cell.visited

    cell.set_state(CellState.VISITED)
    assert cell.state == CellState.VISITED
    assert cell.visit_count == 1
    assert cell.visited

    cell.set_state(CellState.CURRENT)
    assert cell.state == CellState.CURRENT

    cell.set_state(CellState.VISITED)
    assert cell.state == CellState.BACKTRACKED
    assert cell.visit_count == 2


def test_reset_restores_every_cell():
    grid = MazeGrid(5, 4, rng=random.Random(3))
    generate_maze(grid, "dfs")
    assert grid.count_open_passages() > 0

    grid.reset()

    assert grid.visit_order == []
    for cell in grid.get_all_cells():
        assert cell.visited is False
        assert cell.visit_count == 0
        assert all(cell.walls)
        assert cell.state == CellState.UNVISITED


def test_shuffled_directions_are_fresh_permutations():
    grid = MazeGrid(2, 2, rng=random.Random(99))
    cell = grid.get_cell(0, 0)
    orders = set()
    for _ in range(50):
        directions = grid.get_shuffled_directions(cell)
        assert sorted(directions) == list(HexDirection)
        orders.add(tuple(directions))
    assert len(orders) > 1


def test_start_cell_is_top_of_first_column():
    grid = MazeGrid(4, 6)
    assert grid.get_start_cell() is grid.get_cell(0, 5)
    assert MazeGrid(0, 0).get_start_cell() is None


def test_set_visited_records_first_visit_only():
    grid = MazeGrid(3, 3)
    a = grid.get_cell(0, 0)
    b = grid.get_cell(1, 0)
    grid.set_visited(a, True)
    grid.set_visited(b, True)
    grid.set_visited(a, True)
    assert grid.visit_order == [a, b]
    # (0, 1) sits in an even column: DOWN_RIGHT is (1, 0), then DOWN is (0, 0)
    assert grid.get_visited_neighbours(grid.get_cell(0, 1)) == [b, a]
    # (0, 2) touches neither
    assert grid.get_visited_neighbours(grid.get_cell(0, 2)) == []


def test_wall_array_shape():
    walls = MazeGrid(4, 3, cell_type=SquareCell).wall_array()
    assert walls.shape == (4, 3, 4)
    assert walls.all()


def test_neighbour_pairs_cover_each_adjacency_once():
    grid = MazeGrid(2, 2)
    pairs = {frozenset((a.id, b.id)) for a, b, _ in grid.neighbour_pairs()}
    assert len(pairs) == len(list(grid.neighbour_pairs()))
    assert pairs == {
        frozenset(("0,0", "0,1")),
        frozenset(("1,0", "1,1")),
        frozenset(("0,0", "1,0")),
        frozenset(("0,1", "1,1")),
        frozenset(("0,1", "1,0")),
    }


def test_invalid_grid_arguments():
    with pytest.raises(ValueError):
        MazeGrid(-1, 3)
    with pytest.raises(ValueError):
        make_grid(3, 3, topology="triangle")
    with pytest.raises(ValueError):
        MazeGrid(3, 3, cell_type=int)
    with pytest.raises(IndexError):
        MazeGrid(0, 0).random_cell()


def test_make_grid_selects_backend():
    assert make_grid(2, 2, "square").cell_type is SquareCell
    assert isinstance(make_grid(2, 2).get_cell(1, 1), HexCell)
