"""Sudoku board and puzzle generation from reproducible seeds."""

from __future__ import annotations
import hashlib
import random
import string
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.domains import Domains
from ..core.positions import N, N2, SIZE, group_positions
from ..core.validator import has_unique_solution
from ..solvers.backtracking import BacktrackingSolver

Seed = Union[str, bytes, int]

RANDOM_DIFFICULTY = "random"

# Number of random cells fixed on top of the diagonal groups, drawn from [low, high)
PERTURBATIONS = (10, 20)


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    INSANE = "insane"

    @property
    def empty_positions(self) -> int:
        """Target number of empty cells for this difficulty."""
        targets = {
            Difficulty.EASY: 25,
            Difficulty.NORMAL: 35,
            Difficulty.HARD: 50,
            Difficulty.INSANE: 64,
        }
        return targets[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def names(cls) -> List[str]:
        return [d.value for d in cls]

    def __str__(self) -> str:
        return self.label


def parse_difficulty(name: str) -> Optional[Difficulty]:
    """Difficulty from its name; ``"random"`` gives None."""
    if name == RANDOM_DIFFICULTY:
        return None
    return Difficulty(name)


def make_rng(seed: Seed) -> np.random.Generator:
    """
    Deterministic random generator for a seed.

    The seed is hashed with SHA-256 (``str`` and ``int`` seeds through the
    UTF-8 bytes of ``str(seed)``, ``bytes`` as they are) and the digest
    seeds a PCG64 bit generator, so a seed maps to the same stream on
    every run and platform.
    """
    data = seed if isinstance(seed, bytes) else str(seed).encode("utf-8")
    digest = hashlib.sha256(data).digest()
    return np.random.Generator(np.random.PCG64(int.from_bytes(digest, "little")))


def random_seed(length: int) -> str:
    """Random alphanumeric seed, not reproducible."""
    return ''.join(random.choices(string.ascii_letters + string.digits, k=length))


def generate_board(rng: np.random.Generator) -> SudokuBoard:
    """
    Generate a complete valid board.

    Algorithm:
    1. Fill the diagonal groups with random permutations; they share no
       row or column, so they never conflict
    2. Fix a handful of random cells to random values, keeping only values
       that leave the board solvable
    3. Complete the board with the backtracking solver
    """
    board = SudokuBoard()
    for k in range(N):
        values = rng.permutation(np.arange(1, N2 + 1))
        for pos, value in zip(group_positions(k * N, k * N), values.tolist()):
            board[pos] = value

    solver = BacktrackingSolver()
    domains = Domains.calculate(board)

    for _ in range(int(rng.integers(*PERTURBATIONS))):
        empty = domains.empty_positions()
        pos = int(empty[rng.integers(len(empty))])

        values = domains.candidates(pos)
        rng.shuffle(values)
        for value in values.tolist():
            board[pos] = value
            if solver.count_solutions(board, 1) == 1:
                domains.update(pos, value)
                break
            board[pos] = 0

    if not solver.solve_in_place(board):
        raise RuntimeError("Could not complete a generated board")
    return board


def dig_holes(
    solution: SudokuBoard,
    rng: np.random.Generator,
    target: int,
    unique: bool = True
) -> Tuple[SudokuBoard, int]:
    """
    Remove values from a solved board to make a puzzle.

    Cells are visited once each in random order. A removal that would give
    the puzzle a second solution is undone when ``unique`` is set. Stops
    after ``target`` removals or when every cell has been tried.

    Returns:
        Tuple of (puzzle, number of cells removed).
    """
    puzzle = solution.copy()
    removed = 0
    if target <= 0:
        return puzzle, removed

    for pos in rng.permutation(SIZE).tolist():
        value = puzzle[pos]
        puzzle[pos] = 0

        if unique and not has_unique_solution(puzzle):
            puzzle[pos] = value
            continue

        removed += 1
        if removed >= target:
            break

    return puzzle, removed


@dataclass
class PuzzleStats:
    """Facts about a generated puzzle."""
    seed: str
    difficulty: Difficulty
    empty_positions: int
    possible_solutions: Optional[int] = None
    # Seconds spent building the solved board and digging the puzzle
    board_time: float = 0.0
    puzzle_time: float = 0.0

    @property
    def board_time_us(self) -> int:
        return int(self.board_time * 1_000_000)

    @property
    def puzzle_time_us(self) -> int:
        return int(self.puzzle_time * 1_000_000)


@dataclass
class SudokuPuzzle:
    """A puzzle, optionally its solution, and generation stats."""
    puzzle: SudokuBoard
    solution: Optional[SudokuBoard]
    stats: PuzzleStats

    CSV_HEADER = [
        "puzzle",
        "solution",
        "seed",
        "empty_positions",
        "difficulty",
        "possible_solutions",
        "board_generation_time_microseconds",
        "puzzle_generation_time_microseconds",
    ]

    @staticmethod
    def prepare(**options) -> PuzzleGenerator:
        """Generator configured with ``options`` on top of the defaults."""
        return PuzzleGenerator(**options)

    def csv_row(self) -> List[str]:
        """Values in :attr:`CSV_HEADER` order."""
        s = self.stats
        return [
            self.puzzle.to_line_string(),
            self.solution.to_line_string() if self.solution is not None else "",
            s.seed,
            str(s.empty_positions),
            s.difficulty.value,
            str(s.possible_solutions) if s.possible_solutions is not None else "",
            str(s.board_time_us),
            str(s.puzzle_time_us),
        ]

    def to_line_string(self) -> str:
        """The puzzle's compact form, followed by ``,<solution>`` when present."""
        line = self.puzzle.to_line_string()
        if self.solution is not None:
            line += "," + self.solution.to_line_string()
        return line

    def __str__(self) -> str:
        lines = [
            str(self.puzzle),
            f"ID: {self.stats.seed}",
            self.stats.difficulty.label,
        ]
        if self.stats.possible_solutions is not None:
            lines.append(f"Number of solutions: {self.stats.possible_solutions}")
        if self.solution is not None:
            lines.append("Solution:")
            lines.append(str(self.solution))
        return '\n'.join(lines)


@dataclass
class PuzzleGenerator:
    """
    Configurable puzzle generator.

    Attributes:
        unique_solution: Only remove cells while the puzzle keeps exactly
                         one solution.
        difficulty: Target difficulty; None picks a random one per puzzle.
        seed: Seed for the solved board and the removal order. The same
              seed with the same difficulty and uniqueness setting gives the
              same puzzle. Random when None.
        seed_length: Length of the random seed used when ``seed`` is None.
        count_solutions: Count the puzzle's solutions after generating it.
        max_count_solutions: Upper bound for that count.
        show_solution: Keep the solved board in the result.
    """
    unique_solution: bool = True
    difficulty: Optional[Difficulty] = Difficulty.NORMAL
    seed: Optional[str] = None
    seed_length: int = 8
    count_solutions: bool = False
    max_count_solutions: int = 256
    show_solution: bool = False

    def generate(self) -> SudokuPuzzle:
        """Generate one puzzle."""
        seed = self.seed if self.seed is not None else random_seed(self.seed_length)
        difficulty = self.difficulty or random.choice(list(Difficulty))
        rng = make_rng(seed)

        start_time = time.perf_counter()
        solution = generate_board(rng)
        board_time = time.perf_counter() - start_time

        start_time = time.perf_counter()
        puzzle, removed = dig_holes(
            solution, rng, difficulty.empty_positions, self.unique_solution
        )
        puzzle_time = time.perf_counter() - start_time

        possible_solutions = None
        if self.count_solutions:
            possible_solutions = BacktrackingSolver().count_solutions(
                puzzle, self.max_count_solutions
            )

        stats = PuzzleStats(
            seed=seed,
            difficulty=difficulty,
            empty_positions=removed,
            possible_solutions=possible_solutions,
            board_time=board_time,
            puzzle_time=puzzle_time,
        )
        return SudokuPuzzle(
            puzzle=puzzle,
            solution=solution if self.show_solution else None,
            stats=stats,
        )

    def generate_batch(self, count: int, show_progress: bool = False) -> List[SudokuPuzzle]:
        """
        Generate several puzzles with the same settings.

        With a fixed ``seed`` every puzzle in the batch is identical.
        """
        return [
            self.generate()
            for _ in tqdm(range(count), desc="Generating", disable=not show_progress)
        ]
