"""Core module for board representation, geometry and domain tracking."""

from .board import SudokuBoard, InvalidBoardError, BoardParseError, BoardRangeError
from .domains import Domains
from .validator import has_unique_solution, validate_solution

__all__ = [
    "SudokuBoard",
    "InvalidBoardError",
    "BoardParseError",
    "BoardRangeError",
    "Domains",
    "has_unique_solution",
    "validate_solution",
]
