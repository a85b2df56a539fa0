import random

import pytest

import entrance_exit
from entrance_exit import (
    create_entrance,
    create_exit,
    force_create_exit_at_cell,
    get_last_column_cells,
)
from grid_core import HexDirection, MazeGrid, SquareCell, SquareDirection
from maze_controller import MazeController


def _open_boundary_walls(grid, cell):
    return [d for d in grid.get_boundary_directions(cell) if not cell.has_wall(d)]


def test_entrance_opens_first_boundary_direction():
    grid = MazeGrid(4, 4)
    start = grid.get_start_cell()

    direction = create_entrance(grid, start)

    assert direction == HexDirection.UP
    assert not start.has_wall(HexDirection.UP)
    assert _open_boundary_walls(grid, start) == [HexDirection.UP]


def test_entrance_on_square_grid():
    grid = MazeGrid(3, 3, cell_type=SquareCell)
    assert create_entrance(grid, grid.get_start_cell()) == SquareDirection.UP


def test_entrance_without_boundary_is_reported(capsys):
    grid = MazeGrid(3, 3)
    interior = grid.get_cell(1, 1)

    assert create_entrance(grid, interior) is None
    assert all(interior.walls)
    assert "ERROR" in capsys.readouterr().out


def test_entrance_for_missing_cell():
    assert create_entrance(MazeGrid(0, 0), None) is None


@pytest.mark.parametrize("algorithm", ["dfs", "prim", "wilson"])
@pytest.mark.parametrize("topology", ["hex", "square"])
def test_generated_maze_has_one_entrance_and_one_exit(algorithm, topology):
    controller = MazeController(6, 5, algorithm=algorithm, topology=topology, seed=9)
    controller.generate_instant()
    grid = controller.grid

    start = controller.start_cell
    assert len(_open_boundary_walls(grid, start)) == 1

    exit_cell = controller.exit_cell
    assert exit_cell is not None
    assert exit_cell.x == grid.width - 1
    assert exit_cell.visited
    last_column_openings = sum(
        len(_open_boundary_walls(grid, cell)) for cell in grid.cells[grid.width - 1]
    )
    assert last_column_openings == 1


def test_exit_falls_back_to_last_visited_cell():
    grid = MazeGrid(3, 3)
    grid.set_visited(grid.get_cell(0, 0), True)
    grid.set_visited(grid.get_cell(0, 1), True)

    exit_cell = create_exit(grid, grid.visit_order, random.Random(0))

    assert exit_cell is grid.get_cell(0, 1)
    # (0, 1) only leaves the grid through DOWN_LEFT
    assert not exit_cell.has_wall(HexDirection.DOWN_LEFT)
    assert sum(1 for wall in exit_cell.walls if not wall) == 1


def test_exit_without_any_visited_cell():
    grid = MazeGrid(3, 3)
    assert get_last_column_cells(grid) == []
    assert create_exit(grid, []) is None


def test_exit_forced_when_no_boundary_side(monkeypatch):
    grid = MazeGrid(3, 3, rng=random.Random(2))
    for cell in grid.get_all_cells():
        grid.set_visited(cell, True)
    monkeypatch.setattr(entrance_exit, "try_create_exit_at_cell", lambda grid, cell: None)

    exit_cell = create_exit(grid, grid.visit_order)

    assert exit_cell.x == 2
    assert not exit_cell.has_wall(HexDirection.UP)


def test_force_exit_on_interior_cell_opens_first_wall():
    grid = MazeGrid(3, 3)
    interior = grid.get_cell(1, 1)
    assert force_create_exit_at_cell(grid, interior) == HexDirection.UP
    assert not interior.has_wall(HexDirection.UP)
    assert grid.get_cell(1, 2).has_wall(HexDirection.DOWN)


def test_force_exit_prefers_boundary():
    grid = MazeGrid(3, 3)
    edge = grid.get_cell(2, 1)
    direction = force_create_exit_at_cell(grid, edge)
    assert grid.get_neighbour_in_direction(edge, direction) is None
