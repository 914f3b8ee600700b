"""Index geometry for a flat Sudoku board: rows, columns, groups and peers."""

from __future__ import annotations
from typing import Iterator, Tuple

import numpy as np

N = 3
N2 = N * N
SIZE = N2 * N2

# 8 row peers + 8 column peers + 4 remaining group peers for N = 3
PEER_COUNT = 2 * (N2 - 1) + (N2 - 2 * N + 1)


def to_pos(row: int, col: int) -> int:
    """Linear index of (row, col)."""
    return row * N2 + col


def to_row_col(pos: int) -> Tuple[int, int]:
    """Decompose a linear index into (row, col)."""
    return pos // N2, pos % N2


def row_positions(row: int) -> Iterator[int]:
    """Indices of a row, left to right."""
    for col in range(N2):
        yield to_pos(row, col)


def col_positions(col: int) -> Iterator[int]:
    """Indices of a column, top to bottom."""
    for row in range(N2):
        yield to_pos(row, col)


def group_positions(row: int, col: int) -> Iterator[int]:
    """Indices of the group (box) containing (row, col), row-major."""
    group_row = row - row % N
    group_col = col - col % N
    for i in range(N):
        for j in range(N):
            yield to_pos(group_row + i, group_col + j)


def adjacent_positions(pos: int) -> Iterator[int]:
    """
    Peers of a cell: every other cell sharing its row, column or group.

    Order is fixed: row peers left to right, then column peers top to
    bottom, then the group cells not already emitted, row-major. Each
    call starts a fresh sequence.
    """
    row, col = to_row_col(pos)

    for i in range(N2):
        if i != col:
            yield to_pos(row, i)

    for i in range(N2):
        if i != row:
            yield to_pos(i, col)

    for other in group_positions(row, col):
        other_row, other_col = to_row_col(other)
        if other_row != row and other_col != col:
            yield other


# Row i holds the peers of cell i, in adjacent_positions order.
PEERS = np.array([list(adjacent_positions(pos)) for pos in range(SIZE)], dtype=np.intp)
