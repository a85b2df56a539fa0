# grid_core.py
import random
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, Optional, Tuple, Type

import numpy as np

# Import from other project modules
import constants as const


class HexDirection(IntEnum):
    """Hex directions. The ordinal doubles as the wall index."""

    UP = 0
    UP_RIGHT = 1
    DOWN_RIGHT = 2
    DOWN = 3
    DOWN_LEFT = 4
    UP_LEFT = 5


class SquareDirection(IntEnum):
    """Square directions. The ordinal doubles as the wall index."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


class CellState(Enum):
    UNVISITED = "unvisited"
    CURRENT = "current"
    VISITED = "visited"
    BACKTRACKED = "backtracked"


class Cell:
    """
    A single grid node: wall flags, visited flag, visit count and state tag.

    Subclasses define the topology (direction set and neighbour offsets).
    The grid picks one subclass at construction time and uses it for every cell.
    """

    DIRECTIONS: Tuple[IntEnum, ...] = ()

    def __init__(self, x: int, y: int):
        if not self.DIRECTIONS:
            raise TypeError(f"{type(self).__name__} defines no directions.")
        self.x = x
        self.y = y
        self.id = f"{x},{y}"
        self.coords = (x, y)  # Store as tuple for convenience
        self.walls: List[bool] = [True] * len(self.DIRECTIONS)
        self.visited: bool = False
        self.visit_count: int = 0
        self.state: CellState = CellState.UNVISITED

    # --- Topology ---
    @classmethod
    def get_all_directions(cls) -> Tuple[IntEnum, ...]:
        return cls.DIRECTIONS

    @classmethod
    def opposite_direction(cls, direction: IntEnum) -> IntEnum:
        """Opposite direction: (d + n/2) mod n."""
        count = len(cls.DIRECTIONS)
        return cls.DIRECTIONS[(int(direction) + count // 2) % count]

    def neighbour_offset(self, direction: IntEnum) -> Tuple[int, int]:
        raise NotImplementedError

    @property
    def wall_count(self) -> int:
        return len(self.walls)

    # --- Walls ---
    def has_wall(self, direction: IntEnum) -> bool:
        return self.walls[int(direction)]

    def disable_face(self, direction: IntEnum):
        """Removes this cell's wall in the given direction."""
        self.walls[int(direction)] = False

    # --- Visited state ---
    def mark_visited(self):
        """Marks the cell as visited (for algorithms)."""
        self.visited = True

    def unmark_visited(self):
        """Marks the cell as not visited."""
        self.visited = False

    def is_visited(self) -> bool:
        """Checks if the cell has been marked as visited."""
        return self.visited

    def set_state(self, new_state: CellState):
        """
        Updates the state tag. Entering VISITED counts a visit; a cell visited
        more than once reports BACKTRACKED unless it is being made CURRENT.
        """
        if new_state == CellState.VISITED:
            self.visit_count += 1
            self.visited = True

        if self.visit_count > 1 and new_state != CellState.CURRENT:
            self.state = CellState.BACKTRACKED
        else:
            self.state = new_state

    def reset_cell(self):
        """Restores the fully walled, unvisited initial state."""
        self.walls = [True] * len(self.DIRECTIONS)
        self.visited = False
        self.visit_count = 0
        self.state = CellState.UNVISITED

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, Cell) and self.id == other.id


class HexCell(Cell):
    """Hexagonal cell on an offset-column grid (odd columns shifted up)."""

    DIRECTIONS = tuple(HexDirection)

    def neighbour_offset(self, direction: IntEnum) -> Tuple[int, int]:
        if self.x % 2 == 0:
            return const.HEX_EVEN_COL_OFFSETS[int(direction)]
        return const.HEX_ODD_COL_OFFSETS[int(direction)]


class SquareCell(Cell):
    """Square cell with four walls."""

    DIRECTIONS = tuple(SquareDirection)

    def neighbour_offset(self, direction: IntEnum) -> Tuple[int, int]:
        return const.SQUARE_OFFSETS[int(direction)]


CELL_TYPES: Dict[str, Type[Cell]] = {
    "hex": HexCell,
    "square": SquareCell,
}


class MazeGrid:
    """
    Fixed-size width x height table of cells addressed by (x, y), with the
    neighbour, wall and visited-state operations the maze algorithms need.
    """

    def __init__(
        self,
        width: int,
        height: int,
        cell_type: Type[Cell] = HexCell,
        rng: Optional[random.Random] = None,
    ):
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}.")
        if not (isinstance(cell_type, type) and issubclass(cell_type, Cell)) or not cell_type.DIRECTIONS:
            raise ValueError(f"Unsupported cell type: {cell_type!r}")

        self.width = width
        self.height = height
        self.cell_type = cell_type
        self.rng = rng if rng is not None else random.Random()
        self.visit_order: List[Cell] = []
        # Indexed [x][y]
        self.cells: List[List[Cell]] = [
            [cell_type(x, y) for y in range(height)] for x in range(width)
        ]

    @property
    def total_cell_count(self) -> int:
        return self.width * self.height

    def size(self) -> int:
        """Returns the total number of cells in the grid."""
        return self.total_cell_count

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Safely retrieves a cell by coordinates."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[x][y]
        return None

    def get_all_cells(self) -> Iterator[Cell]:
        """Iterates column by column, bottom to top."""
        for column in self.cells:
            yield from column

    def contains(self, cell: Optional[Cell]) -> bool:
        return cell is not None and self.get_cell(cell.x, cell.y) is cell

    def random_cell(self) -> Cell:
        """Returns a random cell from the grid."""
        if self.total_cell_count == 0:
            raise IndexError("Cannot select random cell from empty grid.")
        return self.cells[self.rng.randrange(self.width)][self.rng.randrange(self.height)]

    def get_start_cell(self) -> Optional[Cell]:
        """Bottom-left cell in generation coordinates: (0, height - 1)."""
        return self.get_cell(0, self.height - 1)

    # --- Neighbours and directions ---
    def get_neighbour_in_direction(self, cell: Cell, direction: IntEnum) -> Optional[Cell]:
        """Returns the neighbour in the given direction, or None at the boundary."""
        dx, dy = cell.neighbour_offset(direction)
        return self.get_cell(cell.x + dx, cell.y + dy)

    def get_opposite_direction(self, direction: IntEnum) -> IntEnum:
        return self.cell_type.opposite_direction(direction)

    def get_direction_between(self, from_cell: Cell, to_cell: Cell) -> Optional[IntEnum]:
        """
        Direction from one cell to an adjacent one. Returns None (and reports an
        error) when the cells are not neighbours, which means a caller bug.
        """
        for direction in from_cell.get_all_directions():
            if self.get_neighbour_in_direction(from_cell, direction) is to_cell:
                return direction
        print(f"ERROR: Direction not found between {from_cell.id} and {to_cell.id} (not adjacent).")
        return None

    def get_visited_neighbours(self, cell: Cell) -> List[Cell]:
        """In-bounds neighbours already marked visited, in direction order."""
        visited = []
        for direction in cell.get_all_directions():
            neighbour = self.get_neighbour_in_direction(cell, direction)
            if neighbour is not None and neighbour.visited:
                visited.append(neighbour)
        return visited

    def get_shuffled_directions(self, cell: Cell) -> List[IntEnum]:
        """Fresh Fisher-Yates permutation of the cell's directions on every call."""
        directions = list(cell.get_all_directions())
        self.rng.shuffle(directions)
        return directions

    def get_boundary_directions(self, cell: Cell) -> List[IntEnum]:
        """Directions (fixed order) that lead off the grid."""
        return [
            direction
            for direction in cell.get_all_directions()
            if self.get_neighbour_in_direction(cell, direction) is None
        ]

    # --- Walls ---
    def has_wall_between(self, cell1: Cell, cell2: Cell, direction: IntEnum) -> bool:
        """True while both sides of the shared wall are still standing."""
        return cell1.has_wall(direction) and cell2.has_wall(self.get_opposite_direction(direction))

    def disable_face_between(self, cell1: Cell, cell2: Cell, direction: IntEnum):
        """Opens the wall between two adjacent cells on both sides."""
        cell1.disable_face(direction)
        cell2.disable_face(self.get_opposite_direction(direction))

    def disable_boundary_face(self, cell: Cell, direction: IntEnum):
        """Opens a single wall flag; used for entrances and exits."""
        cell.disable_face(direction)

    def count_open_passages(self) -> int:
        """Number of adjacent cell pairs with no wall between them."""
        return len(self.passages())

    def wall_array(self) -> np.ndarray:
        """Boolean (width, height, directions) copy of all wall flags."""
        walls = np.ones((self.width, self.height, len(self.cell_type.DIRECTIONS)), dtype=bool)
        for cell in self.get_all_cells():
            walls[cell.x, cell.y, :] = cell.walls
        return walls

    # --- Visited state management ---
    def is_visited(self, cell: Cell) -> bool:
        return cell.visited

    def set_visited(self, cell: Cell, visited: bool):
        """Sets the visited flag; first visits are appended to visit_order."""
        if visited and not cell.visited:
            self.visit_order.append(cell)
        if visited:
            cell.mark_visited()
        else:
            cell.unmark_visited()

    def reset(self):
        """Fully resets every cell and forgets the previous visit order."""
        self.visit_order = []
        for cell in self.get_all_cells():
            cell.reset_cell()

    def neighbour_pairs(self) -> Iterator[Tuple[Cell, Cell, IntEnum]]:
        """Each adjacent pair once, as (cell, neighbour, direction)."""
        half = len(self.cell_type.DIRECTIONS) // 2
        for cell in self.get_all_cells():
            for direction in cell.get_all_directions()[:half]:
                neighbour = self.get_neighbour_in_direction(cell, direction)
                if neighbour is not None:
                    yield cell, neighbour, direction

    def passages(self) -> List[Tuple[Cell, Cell]]:
        """Adjacent pairs joined by a passage."""
        return [
            (cell, neighbour)
            for cell, neighbour, direction in self.neighbour_pairs()
            if not self.has_wall_between(cell, neighbour, direction)
        ]

    def __repr__(self) -> str:
        return f"MazeGrid({self.width}x{self.height}, {self.cell_type.__name__})"


def make_grid(
    width: int,
    height: int,
    topology: str = const.DEFAULT_TOPOLOGY,
    rng: Optional[random.Random] = None,
) -> MazeGrid:
    """Builds a grid for a named topology ("hex" or "square")."""
    cell_type = CELL_TYPES.get(topology)
    if cell_type is None:
        raise ValueError(f"Unknown topology '{topology}'. Expected one of {sorted(CELL_TYPES)}.")
    return MazeGrid(width, height, cell_type=cell_type, rng=rng)

