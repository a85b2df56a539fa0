# main.py
import argparse
import os
import time
from typing import List, Optional

# Import project modules
import constants as const
from grid_core import Cell, CellState
from maze_controller import MazeController
from maze_gen import MazeAlgorithmType
from pathfinding import is_fully_connected
from visualization import (
    visualize_maze_connectivity,
    visualize_maze_solution,
    visualize_maze_walls,
)


def print_step(cell: Cell, state: CellState):
    """Step sink for animated runs: one line per state change."""
    print(f"    step: {cell.id} -> {state.name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and solve a hexagonal maze.")
    parser.add_argument("--width", type=int, default=const.DEFAULT_GRID_WIDTH)
    parser.add_argument("--height", type=int, default=const.DEFAULT_GRID_HEIGHT)
    parser.add_argument(
        "--algorithm",
        choices=[t.value for t in MazeAlgorithmType],
        default=const.DEFAULT_ALGORITHM,
    )
    parser.add_argument("--topology", choices=["hex", "square"], default=const.DEFAULT_TOPOLOGY)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--animated", action="store_true", help="Run stepwise, printing each step.")
    parser.add_argument("--delay", type=float, default=None, help="Seconds between animated steps.")
    parser.add_argument("--output-dir", default="output")
    parser.add_argument("--no-plots", action="store_true", help="Skip PNG renders.")
    return parser


def run_maze_generation(args: argparse.Namespace) -> MazeController:
    start_time = time.time()

    print("\n--- Configuration ---")
    print(f"  Grid: {args.width}x{args.height} ({args.topology}), Algorithm: {args.algorithm}, Seed: {args.seed}")

    controller = MazeController(
        width=args.width,
        height=args.height,
        algorithm=args.algorithm,
        topology=args.topology,
        seed=args.seed,
        step_sink=print_step if args.animated else None,
    )

    if args.animated:
        controller.run_animated(delay=args.delay)
    else:
        controller.generate_instant()

    grid = controller.grid
    print("\n--- Summary ---")
    print(f"  Passages: {grid.count_open_passages()} (spanning tree expects {max(grid.size() - 1, 0)})")
    print(f"  Fully connected: {is_fully_connected(grid)}")
    path: Optional[List[Cell]] = controller.solution_path
    if path:
        print(f"  Solution ({len(path)} cells): {' -> '.join(cell.id for cell in path)}")
    else:
        print("  No solution path.")

    if not args.no_plots and grid.size() > 0:
        print("\n--- Generating Visualizations ---")
        os.makedirs(args.output_dir, exist_ok=True)
        visualize_maze_walls(
            grid,
            filename=os.path.join(args.output_dir, "maze_walls.png"),
            entry_cell=controller.start_cell,
            exit_cell=controller.exit_cell,
        )
        visualize_maze_solution(
            grid,
            controller.start_cell,
            controller.exit_cell,
            filename=os.path.join(args.output_dir, "maze_solution.png"),
            solution_path=path,
        )
        visualize_maze_connectivity(
            grid,
            controller.start_cell,
            filename=os.path.join(args.output_dir, "maze_connectivity.png"),
        )

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")
    return controller


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    run_maze_generation(args)


if __name__ == "__main__":
    main()
