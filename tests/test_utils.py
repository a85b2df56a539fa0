import numpy as np
import pytest

import constants as const
from grid_core import MazeGrid, SquareCell
from utils import cell_center, cell_outline, hex_distance, offset_to_axial, wall_segment


def test_offset_to_axial():
    assert offset_to_axial(0, 0) == (0, 0)
    assert offset_to_axial(1, 0) == (1, 0)
    assert offset_to_axial(2, 2) == (2, 1)
    assert offset_to_axial(3, 2) == (3, 1)


def test_neighbours_are_one_step_apart(hex_grid):
    for cell in hex_grid.get_all_cells():
        assert hex_distance(cell.coords, cell.coords) == 0
        for direction in cell.get_all_directions():
            neighbour = hex_grid.get_neighbour_in_direction(cell, direction)
            if neighbour is not None:
                assert hex_distance(cell.coords, neighbour.coords) == 1


@pytest.mark.parametrize("cell_type", [None, SquareCell])
def test_shared_walls_coincide(cell_type):
    grid = MazeGrid(4, 4) if cell_type is None else MazeGrid(4, 4, cell_type=cell_type)
    for cell, neighbour, direction in grid.neighbour_pairs():
        a1, a2 = wall_segment(cell, direction)
        b1, b2 = wall_segment(neighbour, grid.get_opposite_direction(direction))
        # Same edge, traversed in the opposite order
        assert np.allclose(a1, b2, atol=const.GEOMETRY_TOLERANCE)
        assert np.allclose(a2, b1, atol=const.GEOMETRY_TOLERANCE)


def test_neighbour_centres_are_equidistant(hex_grid):
    spacing = set()
    for cell, neighbour, _ in hex_grid.neighbour_pairs():
        spacing.add(round(float(np.linalg.norm(cell_center(neighbour) - cell_center(cell))), 6))
    assert spacing == {round(np.sqrt(3.0), 6)}


def test_cell_outline_is_closed():
    grid = MazeGrid(2, 2)
    outline = cell_outline(grid.get_cell(1, 1))
    assert outline.shape == (7, 2)
    assert np.allclose(outline[0], outline[-1])
