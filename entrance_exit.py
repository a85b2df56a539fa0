# entrance_exit.py
import random
from enum import IntEnum
from typing import List, Optional

# Import from other project modules
from grid_core import Cell, MazeGrid


def create_entrance(grid: MazeGrid, cell: Optional[Cell]) -> Optional[IntEnum]:
    """
    Opens the first boundary-facing wall of `cell` (fixed direction order).
    Returns the opened direction, or None if the cell has no boundary side.
    """
    if cell is None:
        return None

    for direction in cell.get_all_directions():
        if grid.get_neighbour_in_direction(cell, direction) is None:
            grid.disable_boundary_face(cell, direction)
            print(f"  Created entrance at {cell.id} facing {direction.name}")
            return direction

    print(f"ERROR: Entrance cell {cell.id} has no boundary direction; no entrance created.")
    return None


def get_last_column_cells(grid: MazeGrid) -> List[Cell]:
    """All visited cells in the last column, bottom to top."""
    if grid.width == 0:
        return []
    return [cell for cell in grid.cells[grid.width - 1] if grid.is_visited(cell)]


def try_create_exit_at_cell(grid: MazeGrid, cell: Cell) -> Optional[IntEnum]:
    """Opens a boundary wall of `cell` if it has one."""
    for direction in cell.get_all_directions():
        if grid.get_neighbour_in_direction(cell, direction) is None:
            grid.disable_boundary_face(cell, direction)
            return direction
    return None


def force_create_exit_at_cell(grid: MazeGrid, cell: Cell) -> IntEnum:
    """Opens a boundary wall if possible, otherwise the cell's first wall."""
    direction = try_create_exit_at_cell(grid, cell)
    if direction is not None:
        return direction

    direction = cell.get_all_directions()[0]
    grid.disable_boundary_face(cell, direction)
    return direction


def create_exit(
    grid: MazeGrid, visit_order: List[Cell], rng: Optional[random.Random] = None
) -> Optional[Cell]:
    """
    Creates the exit among the visited cells of the last column.

    Candidates are tried in random order and the first with a boundary side
    wins. If none has one, a random candidate is forced open. If the last
    column holds no visited cell at all, the most recently visited cell is
    forced open instead. Returns None only when there is nothing to open.
    """
    rng = rng if rng is not None else grid.rng
    last_column_cells = get_last_column_cells(grid)

    if not last_column_cells:
        print("Warning: No visited cells found in last column, falling back to last visited cell.")
        if not visit_order:
            print("ERROR: No visited cells at all; no exit created.")
            return None
        fallback_exit = visit_order[-1]
        force_create_exit_at_cell(grid, fallback_exit)
        print(f"  Forced exit creation at {fallback_exit.id}")
        return fallback_exit

    # Shuffle the list for randomness
    rng.shuffle(last_column_cells)

    for candidate in last_column_cells:
        direction = try_create_exit_at_cell(grid, candidate)
        if direction is not None:
            print(f"  Created exit at {candidate.id} facing {direction.name}")
            return candidate

    forced_exit = last_column_cells[rng.randrange(len(last_column_cells))]
    direction = force_create_exit_at_cell(grid, forced_exit)
    print(f"  Forced exit creation at {forced_exit.id} facing {direction.name}")
    return forced_exit
