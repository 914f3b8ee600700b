"""Sudoku solver and puzzle generator."""

from .core import SudokuBoard, InvalidBoardError, BoardParseError, BoardRangeError
from .solvers import BacktrackingSolver
from .generator import Difficulty, PuzzleGenerator, SudokuPuzzle

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "InvalidBoardError",
    "BoardParseError",
    "BoardRangeError",
    "BacktrackingSolver",
    "Difficulty",
    "PuzzleGenerator",
    "SudokuPuzzle",
]
