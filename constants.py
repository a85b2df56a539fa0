# --- Grid Structure ---
DEFAULT_GRID_WIDTH = 10
DEFAULT_GRID_HEIGHT = 10
DEFAULT_TOPOLOGY = "hex"  # "hex" or "square"

# --- Maze Generation ---
DEFAULT_ALGORITHM = "dfs"  # "dfs", "prim" or "wilson"
CREATE_ENTRANCE_AND_EXIT = True

# Seconds between animated steps, per algorithm
STEP_DELAY_DFS = 0.1
STEP_DELAY_PRIM = 0.05
STEP_DELAY_WILSON = 0.03

# --- Hex Neighbour Offsets ---
# Indexed by HexDirection ordinal: UP, UP_RIGHT, DOWN_RIGHT, DOWN, DOWN_LEFT, UP_LEFT.
# Odd columns sit half a cell higher than even ones.
HEX_EVEN_COL_OFFSETS = (
    (0, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
)
HEX_ODD_COL_OFFSETS = (
    (0, 1),
    (1, 1),
    (1, 0),
    (0, -1),
    (-1, 0),
    (-1, 1),
)

# --- Square Neighbour Offsets ---
# Indexed by SquareDirection ordinal: UP, RIGHT, DOWN, LEFT.
SQUARE_OFFSETS = (
    (0, 1),
    (1, 0),
    (0, -1),
    (-1, 0),
)

# --- Geometry ---
DEFAULT_CELL_SIZE = 1.0  # Hex outer radius / half the square side
GEOMETRY_TOLERANCE = 1e-9

# --- Visualization ---
VIS_FIGSIZE = (10, 10)
VIS_DPI = 150
VIS_CONN_UNREACHABLE_COLOR = "lightgrey"
VIS_CELL_OUTLINE_COLOR = "lightgrey"
VIS_CELL_OUTLINE_LW = 0.5
VIS_WALL_LINE_STYLE = "k-"
VIS_WALL_LINE_LW = 1.5
VIS_WALL_LINE_ALPHA = 0.9
VIS_SOLUTION_LINE_STYLE = "r-"
VIS_SOLUTION_LINE_LW = 2.0
VIS_SOLUTION_LINE_ALPHA = 0.9
VIS_ENTRY_MARKER = "go"
VIS_EXIT_MARKER = "ro"
VIS_MARKER_SIZE = 8
VIS_ENTRY_MFC = "lime"
VIS_EXIT_MFC = "red"
VIS_MARKER_MEC = "black"
