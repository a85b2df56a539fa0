# maze_gen.py
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Set, Union

# Import from other project modules
import constants as const
from grid_core import Cell, CellState, MazeGrid

StepSink = Callable[[Cell, CellState], None]


class MazeAlgorithmType(Enum):
    DFS = "dfs"
    PRIM = "prim"
    WILSON = "wilson"


class MazeAlgorithm(ABC):
    """
    Base class for maze generation algorithms.

    Each algorithm is written once as an iterative generator, `steps`, which
    yields the affected cell after every unit of work. Instant generation
    simply exhausts that generator, so both modes draw the same random numbers
    in the same order.

    Algorithm instances hold no per-run state. The step sink belongs to the
    generator returned by `steps`, so one instance can drive several runs.
    """

    name: str = ""
    step_delay: float = 0.0

    @abstractmethod
    def _run(self, grid: MazeGrid, start_cell: Cell, set_state: StepSink) -> Iterator[Cell]:
        """Yields once per unit of work. Only called for non-empty grids."""

    def steps(
        self, grid: MazeGrid, start_cell: Optional[Cell], on_state: Optional[StepSink] = None
    ) -> Iterator[Cell]:
        """Stepped generation. An empty grid yields nothing."""
        if grid.total_cell_count == 0 or start_cell is None:
            return

        def set_state(cell: Cell, state: CellState):
            cell.set_state(state)
            if on_state is not None:
                on_state(cell, cell.state)

        yield from self._run(grid, start_cell, set_state)
        self._finish(grid, set_state)

    def generate_instant(self, grid: MazeGrid, start_cell: Optional[Cell]) -> int:
        """Runs to completion without suspension. Returns the number of steps."""
        step_count = 0
        for _ in self.steps(grid, start_cell):
            step_count += 1
        return step_count

    @staticmethod
    def _visit(grid: MazeGrid, cell: Cell, set_state: StepSink):
        """Marks a cell visited and records its first-pass VISITED state."""
        grid.set_visited(cell, True)
        set_state(cell, CellState.VISITED)

    @staticmethod
    def _finish(grid: MazeGrid, set_state: StepSink):
        """Cells left CURRENT, or visited but never tagged, settle to VISITED."""
        for cell in grid.get_all_cells():
            if cell.state == CellState.CURRENT or (cell.visited and cell.state == CellState.UNVISITED):
                set_state(cell, CellState.VISITED)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DFSMazeAlgorithm(MazeAlgorithm):
    """Recursive backtracker, run with an explicit stack."""

    name = "Depth-First Search"
    step_delay = const.STEP_DELAY_DFS

    def _run(self, grid: MazeGrid, start_cell: Cell, set_state: StepSink) -> Iterator[Cell]:
        stack: List[Cell] = [start_cell]
        visited_count = 0
        total = grid.total_cell_count

        while stack and visited_count < total:
            current_cell = stack[-1]

            if not grid.is_visited(current_cell):
                grid.set_visited(current_cell, True)
                visited_count += 1
            set_state(current_cell, CellState.CURRENT)

            found_neighbour = False
            for direction in grid.get_shuffled_directions(current_cell):
                next_cell = grid.get_neighbour_in_direction(current_cell, direction)
                if next_cell is None or grid.is_visited(next_cell):
                    continue
                grid.disable_face_between(current_cell, next_cell, direction)
                grid.set_visited(next_cell, True)
                visited_count += 1
                stack.append(next_cell)
                set_state(current_cell, CellState.VISITED)
                found_neighbour = True
                break

            if not found_neighbour:
                # Dead end: backtrack
                stack.pop()
                set_state(current_cell, CellState.VISITED)

            yield current_cell

        if visited_count < total:
            print(f"Warning: DFS stack emptied after visiting {visited_count}/{total} cells.")


class PrimMazeAlgorithm(MazeAlgorithm):
    """Randomized Prim: grow the maze from a uniformly random frontier cell."""

    name = "Prim's Algorithm"
    step_delay = const.STEP_DELAY_PRIM

    def _run(self, grid: MazeGrid, start_cell: Cell, set_state: StepSink) -> Iterator[Cell]:
        rng = grid.rng
        frontier: List[Cell] = []
        in_frontier: Set[Cell] = set()
        total = grid.total_cell_count

        self._visit(grid, start_cell, set_state)
        visited_count = 1
        self._add_to_frontier(grid, start_cell, frontier, in_frontier)

        while visited_count < total and frontier:
            frontier_cell = frontier[rng.randrange(len(frontier))]
            set_state(frontier_cell, CellState.CURRENT)

            neighbours = grid.get_visited_neighbours(frontier_cell)
            if neighbours:
                neighbour = neighbours[rng.randrange(len(neighbours))]
                direction = grid.get_direction_between(neighbour, frontier_cell)
                if direction is not None:
                    grid.disable_face_between(neighbour, frontier_cell, direction)

            self._visit(grid, frontier_cell, set_state)
            visited_count += 1
            self._add_to_frontier(grid, frontier_cell, frontier, in_frontier)
            frontier.remove(frontier_cell)
            in_frontier.discard(frontier_cell)

            yield frontier_cell

    @staticmethod
    def _add_to_frontier(grid: MazeGrid, cell: Cell, frontier: List[Cell], in_frontier: Set[Cell]):
        """Queues unvisited neighbours that are not already in the frontier."""
        for direction in grid.get_shuffled_directions(cell):
            neighbour = grid.get_neighbour_in_direction(cell, direction)
            if neighbour is not None and not grid.is_visited(neighbour) and neighbour not in in_frontier:
                frontier.append(neighbour)
                in_frontier.add(neighbour)


class WilsonMazeAlgorithm(MazeAlgorithm):
    """
    Wilson's algorithm: loop-erased random walks from unvisited cells until
    they hit the maze. Produces a uniformly random spanning tree.

    The walk direction is drawn by reshuffling and taking the first entry on
    every step.
    """

    name = "Wilson's Algorithm"
    step_delay = const.STEP_DELAY_WILSON

    def _run(self, grid: MazeGrid, start_cell: Cell, set_state: StepSink) -> Iterator[Cell]:
        # start_cell is unused: the first maze cell is drawn at random.
        rng = grid.rng
        unvisited: List[Cell] = list(grid.get_all_cells())
        positions: Dict[Cell, int] = {cell: i for i, cell in enumerate(unvisited)}

        first = grid.random_cell()
        self._visit(grid, first, set_state)
        self._discard_unvisited(unvisited, positions, first)
        yield first

        while unvisited:
            origin = unvisited[rng.randrange(len(unvisited))]
            set_state(origin, CellState.CURRENT)
            walk = self.perform_random_walk(grid, origin)
            yield from self._connect_walk_to_maze(grid, walk, unvisited, positions, set_state)

    @staticmethod
    def _discard_unvisited(unvisited: List[Cell], positions: Dict[Cell, int], cell: Cell):
        """Constant-time removal: the last entry moves into the freed slot."""
        index = positions.pop(cell)
        last = unvisited.pop()
        if last is not cell:
            unvisited[index] = last
            positions[last] = index

    @staticmethod
    def perform_random_walk(grid: MazeGrid, start: Cell) -> List[Cell]:
        """Loop-erased random walk from `start` until a visited cell is reached."""
        walk: List[Cell] = [start]
        positions: Dict[Cell, int] = {start: 0}

        while not grid.is_visited(walk[-1]):
            direction = grid.get_shuffled_directions(walk[-1])[0]
            next_cell = grid.get_neighbour_in_direction(walk[-1], direction)
            if next_cell is None:
                continue

            loop_index = positions.get(next_cell)
            if loop_index is not None:
                # Erase the loop back to the earlier visit
                for erased in walk[loop_index + 1:]:
                    del positions[erased]
                del walk[loop_index + 1:]
            else:
                positions[next_cell] = len(walk)
                walk.append(next_cell)

        return walk

    def _connect_walk_to_maze(
        self,
        grid: MazeGrid,
        walk: List[Cell],
        unvisited: List[Cell],
        positions: Dict[Cell, int],
        set_state: StepSink,
    ) -> Iterator[Cell]:
        for from_cell, to_cell in zip(walk, walk[1:]):
            direction = grid.get_direction_between(from_cell, to_cell)
            if direction is not None:
                grid.disable_face_between(from_cell, to_cell, direction)
            self._visit(grid, from_cell, set_state)
            self._discard_unvisited(unvisited, positions, from_cell)
            yield from_cell

        last_cell = walk[-1]
        if not grid.is_visited(last_cell):
            self._visit(grid, last_cell, set_state)
            self._discard_unvisited(unvisited, positions, last_cell)


ALGORITHMS: Dict[MazeAlgorithmType, type] = {
    MazeAlgorithmType.DFS: DFSMazeAlgorithm,
    MazeAlgorithmType.PRIM: PrimMazeAlgorithm,
    MazeAlgorithmType.WILSON: WilsonMazeAlgorithm,
}


def get_algorithm(algorithm: Union[str, MazeAlgorithmType, MazeAlgorithm]) -> MazeAlgorithm:
    """Resolves an algorithm name, enum member or instance to an instance."""
    if isinstance(algorithm, MazeAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        try:
            algorithm = MazeAlgorithmType(algorithm.lower())
        except ValueError:
            raise ValueError(
                f"Unknown maze algorithm '{algorithm}'. "
                f"Expected one of {[t.value for t in MazeAlgorithmType]}."
            ) from None
    return ALGORITHMS[algorithm]()


def generate_maze(
    grid: MazeGrid,
    algorithm: Union[str, MazeAlgorithmType, MazeAlgorithm] = const.DEFAULT_ALGORITHM,
    start_cell: Optional[Cell] = None,
) -> int:
    """
    Resets the grid and carves a maze into it with the chosen algorithm.
    Returns the number of cells visited.
    """
    maze_algorithm = get_algorithm(algorithm)
    print(f"--- Starting Maze Generation ({maze_algorithm.name}) ---")
    if grid.size() == 0:
        print("Warning: Grid has no cells, nothing to generate.")
        return 0

    # Reset previous maze state (if any)
    grid.reset()

    start_cell = start_cell if start_cell is not None else grid.get_start_cell()
    print(f"  Starting maze generation at cell: {start_cell.id}")
    maze_algorithm.generate_instant(grid, start_cell)

    visited_count = len(grid.visit_order)
    print(f"--- Maze Generation Complete: Visited {visited_count}/{grid.size()} cells. ---")

    # Sanity check: Ensure all cells were visited
    if visited_count < grid.size():
        print(f"ERROR: MAZE GENERATION FAILED TO VISIT ALL CELLS! Visited {visited_count}/{grid.size()}.")
        unvisited_example = next((c for c in grid.get_all_cells() if not c.is_visited()), None)
        if unvisited_example:
            print(f"Example unvisited cell: {unvisited_example.id}")
    return visited_count
