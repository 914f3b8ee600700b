"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import SudokuBoard


def has_unique_solution(board: SudokuBoard) -> bool:
    """
    Check if a puzzle has exactly one solution.

    Args:
        board: The puzzle board.

    Returns:
        True if the puzzle has exactly one solution.
    """
    from ..solvers.backtracking import BacktrackingSolver
    return BacktrackingSolver().count_solutions(board, 2) == 1


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is complete, consistent and keeps every clue.
    """
    clues = puzzle.cells != 0
    if (puzzle.cells[clues] != solution.cells[clues]).any():
        return False
    return solution.is_solved()
