"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking import BacktrackingSolver

__all__ = ["BaseSolver", "SolverStats", "BacktrackingSolver"]
