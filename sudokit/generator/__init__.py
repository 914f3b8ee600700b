"""Generator module for creating solved boards and puzzles."""

from .generator import (
    Difficulty,
    PuzzleGenerator,
    PuzzleStats,
    SudokuPuzzle,
    generate_board,
    make_rng,
    parse_difficulty,
)

__all__ = [
    "Difficulty",
    "PuzzleGenerator",
    "PuzzleStats",
    "SudokuPuzzle",
    "generate_board",
    "make_rng",
    "parse_difficulty",
]
