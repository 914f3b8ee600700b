"""Per-cell candidate tracking for the backtracking search."""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .positions import N2, SIZE, PEERS

if TYPE_CHECKING:
    from .board import SudokuBoard


class Domains:
    """
    Candidate digits for every cell plus the set of empty cells.

    ``table[pos, v]`` is True iff digit ``v + 1`` can still be placed at the
    empty cell ``pos``; rows of filled cells are all False. ``empty[pos]``
    is True iff ``pos`` holds no value.

    Propagation only ever removes candidates. The search undoes an
    assignment by taking a :meth:`copy` before it and calling
    :meth:`restore` afterwards, never by re-adding bits.
    """

    def __init__(self, table: np.ndarray, empty: np.ndarray):
        self.table = table
        self.empty = empty

    @classmethod
    def calculate(cls, board: SudokuBoard) -> Domains:
        """Build the domains of ``board`` from scratch."""
        empty = board.cells == 0
        table = np.zeros((SIZE, N2), dtype=bool)
        table[empty] = True

        domains = cls(table, empty.copy())
        for pos in np.flatnonzero(~empty):
            domains.table[PEERS[pos], board.cells[pos] - 1] = False
        return domains

    def update(self, pos: int, value: int) -> None:
        """Record ``value`` placed at ``pos`` and strike it from every peer."""
        if value < 1 or value > N2:
            raise ValueError(f"Cannot propagate value {value}, must be 1-{N2}")
        self.table[PEERS[pos], value - 1] = False
        self.table[pos] = False
        self.empty[pos] = False

    def still_possible(self) -> bool:
        """False if some empty cell has no candidate left."""
        return not np.any(self.empty & ~self.table.any(axis=1))

    def copy(self) -> Domains:
        return Domains(self.table.copy(), self.empty.copy())

    def restore(self, snapshot: Domains) -> None:
        """Swap in the state held by ``snapshot``."""
        self.table = snapshot.table
        self.empty = snapshot.empty

    def empty_positions(self) -> np.ndarray:
        """Indices of empty cells, ascending."""
        return np.flatnonzero(self.empty)

    def has_empty(self) -> bool:
        return bool(self.empty.any())

    def candidates(self, pos: int) -> np.ndarray:
        """Digits still possible at ``pos``, ascending."""
        return np.flatnonzero(self.table[pos]) + 1

    def __repr__(self) -> str:
        return f"Domains(empty={int(self.empty.sum())})"
