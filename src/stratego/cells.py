"""
Geometry of the board: cells, rows/columns, and the lakes in the middle.

(placed in its own module as multiple other modules need to import it)

Cells are numbered 0-99, row by row. The host sits on rows 0-3, the guest on rows 6-9.
"""

# Board is always 10x10. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (10, 10)
NUM_CELLS = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

# The two lakes: nobody can stand on, start on, or cross these cells
WATER_CELLS: frozenset[int] = frozenset({42, 43, 46, 47, 52, 53, 56, 57})


def row(cell: int) -> int:
    return cell // BOARD_DIMENSIONS[0]


def column(cell: int) -> int:
    return cell % BOARD_DIMENSIONS[0]


def is_on_board(cell: int) -> bool:
    return 0 <= cell < NUM_CELLS


def is_water(cell: int) -> bool:
    return cell in WATER_CELLS


def path(from_cell: int, to_cell: int) -> list[int]:
    """
    All cells on the straight line between two cells, including both endpoints.
    ---

    Sorted from the lowest to the highest index: a vertical path steps by a full row, a horizontal path by one column.
    Only defined for cells on the same row or column.
    """
    low, high = min(from_cell, to_cell), max(from_cell, to_cell)
    if column(low) == column(high):
        return list(range(low, high + 1, BOARD_DIMENSIONS[0]))
    return list(range(low, high + 1))
