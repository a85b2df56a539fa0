# utils.py
import math
from typing import Tuple

import numpy as np

import constants as const
from grid_core import Cell, HexCell

SQRT_THREE = math.sqrt(3.0)


def offset_to_axial(x: int, y: int) -> Tuple[int, int]:
    """
    Converts offset-column coordinates (odd columns shifted up) to axial (q, r).
    Neighbour steps in axial space are the usual six unit vectors.
    """
    return x, y - (x - (x & 1)) // 2


def hex_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Number of hex steps between two offset-coordinate cells."""
    aq, ar = offset_to_axial(*a)
    bq, br = offset_to_axial(*b)
    dq, dr = bq - aq, br - ar
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def cell_center(cell: Cell, size: float = const.DEFAULT_CELL_SIZE) -> np.ndarray:
    """Planar centre of a cell (flat-topped hexes, or unit squares)."""
    if isinstance(cell, HexCell):
        row_height = SQRT_THREE * size
        cx = cell.x * size * 1.5
        cy = cell.y * row_height
        # Offset every other column for hex grid staggering
        if cell.x % 2 == 1:
            cy += row_height / 2.0
        return np.array([cx, cy])
    return np.array([cell.x * 2.0 * size, cell.y * 2.0 * size])


def hex_corner(center: np.ndarray, size: float, index: int) -> np.ndarray:
    """Corner i of a flat-topped hex; wall i runs from corner i to corner i+1."""
    angle = math.radians(120 - 60 * index)
    return center + size * np.array([math.cos(angle), math.sin(angle)])


def wall_segment(
    cell: Cell, direction: int, size: float = const.DEFAULT_CELL_SIZE
) -> Tuple[np.ndarray, np.ndarray]:
    """Endpoints of the wall on the given side of a cell."""
    center = cell_center(cell, size)
    index = int(direction)
    if isinstance(cell, HexCell):
        return hex_corner(center, size, index), hex_corner(center, size, (index + 1) % 6)

    # Square corners clockwise from top-left; wall i joins corner i and i+1
    corners = np.array([(-1.0, 1.0), (1.0, 1.0), (1.0, -1.0), (-1.0, -1.0)]) * size
    return center + corners[index], center + corners[(index + 1) % 4]


def cell_outline(cell: Cell, size: float = const.DEFAULT_CELL_SIZE) -> np.ndarray:
    """Closed polygon (n+1 x 2) tracing the cell border."""
    points = [wall_segment(cell, d, size)[0] for d in cell.get_all_directions()]
    points.append(points[0])
    return np.array(points)
