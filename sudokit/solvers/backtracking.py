"""Backtracking search guided by incrementally maintained cell domains."""

from __future__ import annotations
from typing import Callable, List, Optional

import numpy as np

from .base_solver import BaseSolver
from ..core.board import SudokuBoard
from ..core.domains import Domains
from ..core.positions import N, SIZE, PEERS


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over (board, domains).

    Features:
    - Minimum Remaining Values (MRV) cell selection; large ties are broken
      by picking the cell with the fewest empty peers
    - Least-constraining-value ordering when a cell has many candidates
    - Dead-end detection after every assignment: the branch is dropped as
      soon as some empty cell runs out of candidates
    - Domains are snapshotted before each assignment and restored on failure

    The search is deterministic: the same board always yields the same
    solutions in the same order.
    """

    name = "MRV Backtracking"

    def __init__(self, min_tie_to_solve: int = SIZE // 2, min_possible_ordered: int = N):
        """
        Initialize the solver.

        Args:
            min_tie_to_solve: Break MRV ties by empty-peer count only when
                              more than this many cells are tied.
            min_possible_ordered: Order candidate values by their impact on
                                  peers only when a cell has more than this
                                  many candidates.
        """
        super().__init__()
        self.min_tie_to_solve = min_tie_to_solve
        self.min_possible_ordered = min_possible_ordered

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        if self.solve_in_place(board):
            return board
        return None

    def solve_in_place(self, board: SudokuBoard) -> bool:
        """
        Fill ``board`` with its first solution.

        Returns False if the board has no solution; every tentative value
        is cleared again in that case.
        """
        self._reset_counters()
        if not board.is_consistent():
            return False
        found = self._search(board, Domains.calculate(board), lambda solved: True)
        self.stats.extra["solutions"] = int(found)
        return found

    def count_solutions(self, board: SudokuBoard, max_count: int) -> int:
        """
        Count solutions of ``board``, stopping at ``max_count``.

        The search runs on a copy; ``board`` is not modified.
        """
        self._reset_counters()
        if max_count <= 0 or not board.is_consistent():
            return 0

        count = 0

        def on_solution(solved: SudokuBoard) -> bool:
            nonlocal count
            count += 1
            return count >= max_count

        self._search(board.copy(), Domains.calculate(board), on_solution)
        self.stats.extra["solutions"] = count
        return count

    def solve_all(self, board: SudokuBoard, max_count: int) -> List[SudokuBoard]:
        """
        Collect up to ``max_count`` solutions of ``board`` in search order.

        The search runs on a copy; ``board`` is not modified.
        """
        self._reset_counters()
        solutions: List[SudokuBoard] = []
        if max_count <= 0 or not board.is_consistent():
            return solutions

        def on_solution(solved: SudokuBoard) -> bool:
            solutions.append(solved.copy())
            return len(solutions) >= max_count

        self._search(board.copy(), Domains.calculate(board), on_solution)
        self.stats.extra["solutions"] = len(solutions)
        return solutions

    def _reset_counters(self) -> None:
        self.stats.iterations = 0
        self.stats.nodes_explored = 0
        self.stats.backtracks = 0

    def _search(
        self,
        board: SudokuBoard,
        domains: Domains,
        on_solution: Callable[[SudokuBoard], bool]
    ) -> bool:
        """
        Recursive backtracking.

        ``on_solution`` is called with the board at every full assignment
        and returns True to stop the search. Returns True once stopped,
        leaving the board filled; otherwise the board and domains are
        back to their state on entry.
        """
        self.stats.iterations += 1

        if not domains.has_empty():
            return on_solution(board)

        pos = self._select_position(domains)
        self.stats.nodes_explored += 1

        for value in self._order_values(pos, domains):
            if not board.is_valid(pos, value):
                continue

            board[pos] = value
            snapshot = domains.copy()
            domains.update(pos, value)

            if domains.still_possible() and self._search(board, domains, on_solution):
                return True

            domains.restore(snapshot)
            board[pos] = 0
            self.stats.backtracks += 1

        return False

    def _select_position(self, domains: Domains) -> int:
        """
        Pick the empty cell with the fewest candidates (MRV).

        When more than ``min_tie_to_solve`` cells share the minimum, prefer
        the one with the fewest empty peers. Remaining ties go to the
        lowest index.
        """
        empty = domains.empty_positions()
        counts = domains.table[empty].sum(axis=1)
        tied = empty[counts == counts.min()]

        if len(tied) > self.min_tie_to_solve:
            open_peers = domains.empty[PEERS[tied]].sum(axis=1)
            return int(tied[np.argmin(open_peers)])
        return int(tied[0])

    def _order_values(self, pos: int, domains: Domains) -> List[int]:
        """
        Candidate values for ``pos`` in the order they should be tried.

        Ascending by default. With more than ``min_possible_ordered``
        candidates, values that remove the fewest options from empty
        peers come first; equal impact keeps ascending order.
        """
        candidates = domains.candidates(pos)
        if len(candidates) <= self.min_possible_ordered:
            return candidates.tolist()

        peers = PEERS[pos]
        open_peers = peers[domains.empty[peers]]
        impact = domains.table[open_peers][:, candidates - 1].sum(axis=0)
        return candidates[np.argsort(impact, kind="stable")].tolist()
