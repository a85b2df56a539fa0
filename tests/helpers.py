def open_all_walls(grid):
    """Removes every interior wall of the grid."""
    for cell, neighbour, direction in list(grid.neighbour_pairs()):
        grid.disable_face_between(cell, neighbour, direction)
    return grid
