# maze_controller.py
import random
import time
from enum import IntEnum
from typing import Callable, Iterator, List, Optional, Union

# Import from other project modules
import constants as const
from entrance_exit import create_entrance, create_exit
from grid_core import Cell, MazeGrid, make_grid
from maze_gen import MazeAlgorithm, MazeAlgorithmType, StepSink, generate_maze, get_algorithm
from pathfinding import find_solution_path


class MazeController:
    """
    Owns one maze instance: the grid, the selected algorithm, and the results
    of the latest run (entrance, exit, solution path).

    Generation runs either instantly or as a stepped run that a driver
    advances one unit of work at a time. Starting a new run abandons any
    stepped run in flight and resets the grid first.
    """

    def __init__(
        self,
        width: int = const.DEFAULT_GRID_WIDTH,
        height: int = const.DEFAULT_GRID_HEIGHT,
        algorithm: Union[str, MazeAlgorithmType] = const.DEFAULT_ALGORITHM,
        topology: str = const.DEFAULT_TOPOLOGY,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        create_entrance_and_exit: bool = const.CREATE_ENTRANCE_AND_EXIT,
        step_sink: Optional[StepSink] = None,
    ):
        self.rng = rng if rng is not None else random.Random(seed)
        self.grid: MazeGrid = make_grid(width, height, topology, rng=self.rng)
        self.algorithm: MazeAlgorithm = get_algorithm(algorithm)
        self.create_entrance_and_exit = create_entrance_and_exit
        self.step_sink = step_sink

        self.start_cell: Optional[Cell] = None
        self.exit_cell: Optional[Cell] = None
        self.entrance_direction: Optional[IntEnum] = None
        self.solution_path: Optional[List[Cell]] = None
        self.step_count = 0
        self._active_run: Optional[Iterator[Cell]] = None

    @property
    def is_generating(self) -> bool:
        return self._active_run is not None

    def available_algorithms(self) -> List[str]:
        return [get_algorithm(t).name for t in MazeAlgorithmType]

    def set_algorithm(self, algorithm: Union[str, MazeAlgorithmType]) -> Optional[List[Cell]]:
        """Switches algorithm and regenerates instantly."""
        self.algorithm = get_algorithm(algorithm)
        return self.regenerate()

    def regenerate(self) -> Optional[List[Cell]]:
        return self.generate_instant()

    # --- Run lifecycle ---
    def _prepare_run(self):
        self.cancel()
        self.grid.reset()
        self.start_cell = self.grid.get_start_cell()
        self.exit_cell = None
        self.entrance_direction = None
        self.solution_path = None
        self.step_count = 0

    def generate_instant(self) -> Optional[List[Cell]]:
        """Generates the whole maze synchronously. Returns the solution path."""
        self._prepare_run()
        generate_maze(self.grid, self.algorithm, self.start_cell)
        self._complete_generation()
        return self.solution_path

    def start_generation(self) -> Iterator[Cell]:
        """
        Begins a stepped run and returns its step iterator. Exhausting the
        iterator finishes the maze (entrance, exit and path).
        """
        self._prepare_run()
        print(f"--- Starting Stepped Maze Generation ({self.algorithm.name}) ---")
        self._active_run = self._stepped_run()
        return self._active_run

    def _stepped_run(self) -> Iterator[Cell]:
        for cell in self.algorithm.steps(self.grid, self.start_cell, on_state=self.step_sink):
            self.step_count += 1
            yield cell
        self._active_run = None
        self._complete_generation()

    def step(self) -> bool:
        """Advances the active stepped run by one unit. False once finished."""
        if self._active_run is None:
            return False
        try:
            next(self._active_run)
        except StopIteration:
            return False
        return True

    def run_animated(
        self, delay: Optional[float] = None, sleep: Callable[[float], None] = time.sleep
    ) -> Optional[List[Cell]]:
        """Drives a stepped run to completion, pausing `delay` seconds per step."""
        delay = self.algorithm.step_delay if delay is None else delay
        for _ in self.start_generation():
            if delay > 0:
                sleep(delay)
        return self.solution_path

    def cancel(self):
        """Abandons a stepped run in flight and resets the grid."""
        if self._active_run is None:
            return
        run, self._active_run = self._active_run, None
        run.close()
        self.grid.reset()
        print("  Stepped generation cancelled; grid reset.")

    def _complete_generation(self):
        if self.create_entrance_and_exit:
            self.entrance_direction = create_entrance(self.grid, self.start_cell)
            self.exit_cell = create_exit(self.grid, self.grid.visit_order, self.rng)

        if self.start_cell is not None and self.exit_cell is not None:
            self.solution_path = find_solution_path(self.grid, self.start_cell, self.exit_cell)
            if self.solution_path is None:
                print("Warning: No path found from entrance to exit; no path drawn.")
        print(f"Maze generated using {self.algorithm.name}")
