# pathfinding.py
from collections import deque
from typing import Dict, List, Optional

# Import from other project modules
from grid_core import Cell, MazeGrid


def _open_neighbours(grid: MazeGrid, cell: Cell) -> List[Cell]:
    """Neighbours reachable through a passage, in the cell's fixed direction order."""
    reachable = []
    for direction in cell.get_all_directions():
        neighbour = grid.get_neighbour_in_direction(cell, direction)
        if neighbour is not None and not grid.has_wall_between(cell, neighbour, direction):
            reachable.append(neighbour)
    return reachable


def find_solution_path(
    grid: MazeGrid, start_cell: Optional[Cell], end_cell: Optional[Cell]
) -> Optional[List[Cell]]:
    """Finds the shortest path between two cells using Breadth-First Search over passages."""
    print(f"--- Finding path from {start_cell.id if start_cell else 'None'} to {end_cell.id if end_cell else 'None'} ---")
    if not (grid.contains(start_cell) and grid.contains(end_cell)):
        print("ERROR: Invalid start or end cell provided.")
        return None

    # BFS initialization
    queue = deque([start_cell])
    # Keep track of predecessors to reconstruct the path
    # (visited set equivalent to keys in predecessor)
    predecessor: Dict[Cell, Optional[Cell]] = {start_cell: None}
    path_found = False

    while queue:
        current_cell = queue.popleft()

        if current_cell is end_cell:
            path_found = True
            break

        for neighbour in _open_neighbours(grid, current_cell):
            if neighbour not in predecessor:
                predecessor[neighbour] = current_cell
                queue.append(neighbour)

    if not path_found:
        print("  Path not found!")
        return None

    # Reconstruct path
    path_cells: List[Cell] = []
    cell: Optional[Cell] = end_cell
    while cell is not None:
        path_cells.append(cell)
        cell = predecessor[cell]
    path_cells.reverse()  # Reverse to get path from start to end

    print(f"  Path length: {len(path_cells)} cells.")
    return path_cells


def compute_distances(grid: MazeGrid, start_cell: Cell) -> Dict[Cell, int]:
    """BFS step distance from `start_cell` to every reachable cell."""
    distances: Dict[Cell, int] = {start_cell: 0}
    queue = deque([start_cell])
    while queue:
        current_cell = queue.popleft()
        for neighbour in _open_neighbours(grid, current_cell):
            if neighbour not in distances:
                distances[neighbour] = distances[current_cell] + 1
                queue.append(neighbour)
    return distances


def is_fully_connected(grid: MazeGrid, start_cell: Optional[Cell] = None) -> bool:
    """True if every cell is reachable from `start_cell` (default: the start cell)."""
    if grid.size() == 0:
        return True
    start_cell = start_cell if start_cell is not None else grid.get_start_cell()
    return len(compute_distances(grid, start_cell)) == grid.size()
