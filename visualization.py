# visualization.py
import matplotlib.pyplot as plt
import matplotlib.cm as cm
import matplotlib.colors as mcolors
from typing import List, Optional, Tuple

# Import from other project modules
from grid_core import Cell, MazeGrid
from pathfinding import compute_distances, find_solution_path
from utils import cell_center, cell_outline, wall_segment
import constants as const


# --- Visualization Helpers ---
def _setup_plot(grid: MazeGrid) -> Tuple[plt.Figure, plt.Axes]:
    """Creates an equal-aspect axis with no ticks."""
    fig, ax = plt.subplots(figsize=const.VIS_FIGSIZE)
    ax.set_aspect("equal")
    ax.set_axis_off()
    return fig, ax


def _save(fig: plt.Figure, filename: str):
    fig.savefig(filename, dpi=const.VIS_DPI, bbox_inches="tight")
    plt.close(fig)


def _draw_walls(ax: plt.Axes, grid: MazeGrid) -> int:
    """Draws every standing wall once. Boundary walls use the cell's own flag."""
    wall_count = 0
    for cell in grid.get_all_cells():
        for direction in cell.get_all_directions():
            neighbour = grid.get_neighbour_in_direction(cell, direction)
            if neighbour is None:
                standing = cell.has_wall(direction)
            elif neighbour.coords < cell.coords:
                continue  # Shared wall drawn from the other side
            else:
                standing = grid.has_wall_between(cell, neighbour, direction)
            if standing:
                p1, p2 = wall_segment(cell, direction)
                ax.plot([p1[0], p2[0]], [p1[1], p2[1]],
                        const.VIS_WALL_LINE_STYLE,
                        lw=const.VIS_WALL_LINE_LW,
                        alpha=const.VIS_WALL_LINE_ALPHA,
                        solid_capstyle="round")
                wall_count += 1
    return wall_count


def _draw_entry_exit(ax: plt.Axes, entry_cell: Optional[Cell], exit_cell: Optional[Cell]):
    """Marks entry and exit cells."""
    if entry_cell:
        x, y = cell_center(entry_cell)
        ax.plot(x, y, const.VIS_ENTRY_MARKER,
                markersize=const.VIS_MARKER_SIZE,
                mfc=const.VIS_ENTRY_MFC,
                mec=const.VIS_MARKER_MEC,
                label="Entry")
    if exit_cell:
        x, y = cell_center(exit_cell)
        ax.plot(x, y, const.VIS_EXIT_MARKER,
                markersize=const.VIS_MARKER_SIZE,
                mfc=const.VIS_EXIT_MFC,
                mec=const.VIS_MARKER_MEC,
                label="Exit")


# --- Main Visualization Functions ---
def visualize_maze_walls(
    grid: MazeGrid,
    filename: str = "maze_walls.png",
    entry_cell: Optional[Cell] = None,
    exit_cell: Optional[Cell] = None,
):
    """Draws the carved maze walls."""
    print(f"--- Generating Maze Walls Visualization: {filename} ---")
    try:
        fig, ax = _setup_plot(grid)
        wall_count = _draw_walls(ax, grid)
        _draw_entry_exit(ax, entry_cell, exit_cell)
        ax.set_title(f"Maze Walls ({wall_count} walls, {grid.count_open_passages()} passages)")
        _save(fig, filename)
        print(f"  Walls visualization saved to {filename}")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_maze_solution(
    grid: MazeGrid,
    entry_cell: Optional[Cell],
    exit_cell: Optional[Cell],
    filename: str = "maze_solution.png",
    solution_path: Optional[List[Cell]] = None,
):
    """Draws the walls plus the solution path from entry to exit."""
    print(f"--- Generating Maze Solution Visualization: {filename} ---")
    if solution_path is None:
        solution_path = find_solution_path(grid, entry_cell, exit_cell)
    if not solution_path:
        print("  Could not find solution path, cannot visualize.")
        return

    try:
        fig, ax = _setup_plot(grid)
        _draw_walls(ax, grid)

        print(f"  Visualizing solution path ({len(solution_path)} cells)...")
        centers = [cell_center(cell) for cell in solution_path]
        ax.plot([c[0] for c in centers], [c[1] for c in centers],
                const.VIS_SOLUTION_LINE_STYLE,
                lw=const.VIS_SOLUTION_LINE_LW,
                alpha=const.VIS_SOLUTION_LINE_ALPHA)

        _draw_entry_exit(ax, entry_cell, exit_cell)
        ax.set_title("Maze Solution Path")
        _save(fig, filename)
        print(f"  Solution visualization saved to {filename}")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_maze_connectivity(
    grid: MazeGrid, start_cell: Optional[Cell] = None, filename: str = "maze_connectivity.png"
):
    """Colours cells by BFS distance from the start cell."""
    print(f"--- Generating Connectivity Visualization: {filename} ---")
    if grid.size() == 0:
        print("Grid empty, cannot visualize connectivity.")
        return

    start_node = start_cell or grid.get_start_cell()
    distances = compute_distances(grid, start_node)
    max_distance = max(distances.values())
    print(f"  Connectivity check visited {len(distances)}/{grid.size()} cells.")
    if len(distances) < grid.size():
        print("  WARNING: Not all cells are reachable from the start node!")

    try:
        fig, ax = _setup_plot(grid)
        cmap = cm.viridis
        norm = mcolors.Normalize(vmin=0, vmax=max(1, max_distance))

        for cell in grid.get_all_cells():
            distance = distances.get(cell)
            color = const.VIS_CONN_UNREACHABLE_COLOR if distance is None else cmap(norm(distance))
            outline = cell_outline(cell)
            ax.fill(outline[:, 0], outline[:, 1], color=color,
                    edgecolor=const.VIS_CELL_OUTLINE_COLOR,
                    linewidth=const.VIS_CELL_OUTLINE_LW)
        _draw_walls(ax, grid)

        sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])  # Needed for colorbar
        cbar = plt.colorbar(sm, ax=ax, shrink=0.7, aspect=20, pad=0.04)
        cbar.set_label(f"Distance from Start Cell ({start_node.id})")

        ax.set_title(f"Maze Connectivity ({len(distances)}/{grid.size()} Reachable)")
        _save(fig, filename)
        print(f"  Connectivity visualization saved to {filename}")
    except Exception as e:
        print(f"ERROR during visualization: {e}")
