"""Sudoku board representation: a flat array of 81 cells with legality checks."""

from __future__ import annotations
import string
from typing import Iterable, Iterator, List, Optional, Set, TYPE_CHECKING

import numpy as np

from .positions import (
    N, N2, SIZE, PEERS,
    to_pos, row_positions, col_positions, group_positions,
)

if TYPE_CHECKING:
    from ..generator.generator import Seed


class InvalidBoardError(ValueError):
    """Base class for malformed board input."""


class BoardParseError(InvalidBoardError):
    """The text form has the wrong length or an unknown character."""


class BoardRangeError(InvalidBoardError):
    """The integer form has the wrong length or a value outside 0-9."""


class SudokuBoard:
    """
    A standard 9x9 Sudoku board stored as a flat sequence of 81 cells.

    Cell ``pos`` is row ``pos // 9``, column ``pos % 9``. A value of 0 marks
    an empty cell, 1-9 a filled one. The board holds data and answers
    legality questions about itself; searching lives in
    :class:`sudokit.solvers.BacktrackingSolver`, which the ``solve``,
    ``count_solutions`` and ``solve_all`` shortcuts delegate to.
    """

    def __init__(self, cells: Optional[Iterable[int]] = None):
        """
        Initialize a board.

        Args:
            cells: Optional 81 integers in row-major order, each in 0-9.
                   If None, creates an empty board.

        Raises:
            BoardRangeError: If the length or any value is out of range.
        """
        if cells is None:
            self.cells = np.zeros(SIZE, dtype=np.int32)
            return

        arr = np.asarray(list(cells))
        if arr.ndim != 1 or arr.size != SIZE:
            raise BoardRangeError(f"Board must have {SIZE} cells, got {arr.size}")
        if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
            raise BoardRangeError(f"Board cells must be integers, got {arr.dtype}")
        if np.any((arr < 0) | (arr > N2)):
            raise BoardRangeError(f"Values must be between 0 and {N2}")
        self.cells = arr.astype(np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.cells = self.cells.copy()
        return new_board

    def __getitem__(self, pos: int) -> int:
        return int(self.cells[pos])

    def __setitem__(self, pos: int, value: int) -> None:
        if value < 0 or value > N2:
            raise BoardRangeError(f"Value must be 0-{N2}, got {value}")
        self.cells[pos] = value

    def __len__(self) -> int:
        return SIZE

    def __iter__(self) -> Iterator[int]:
        return (int(v) for v in self.cells)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return self[to_pos(row, col)]

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        self[to_pos(row, col)] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.cells[to_pos(row, col)] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.cells[to_pos(row, col)] == 0

    def is_valid(self, pos: int, value: int) -> bool:
        """
        Check if ``value`` can be placed at ``pos``.

        True iff none of the 20 peers of ``pos`` currently holds ``value``.
        The cell's own content is not considered.
        """
        if value == 0:
            return True
        return not np.any(self.cells[PEERS[pos]] == value)

    def is_valid_row(self, value: int, row: int) -> bool:
        """True iff ``value`` does not appear in ``row``."""
        return all(self.cells[pos] != value for pos in row_positions(row))

    def is_valid_col(self, value: int, col: int) -> bool:
        """True iff ``value`` does not appear in ``col``."""
        return all(self.cells[pos] != value for pos in col_positions(col))

    def is_valid_group(self, value: int, row: int, col: int) -> bool:
        """True iff ``value`` does not appear in the group holding (row, col)."""
        return all(self.cells[pos] != value for pos in group_positions(row, col))

    def get_candidates(self, pos: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns an empty set if the cell is filled.
        """
        if self.cells[pos] != 0:
            return set()
        used = set(int(v) for v in self.cells[PEERS[pos]])
        return set(range(1, N2 + 1)) - used

    def empty_positions(self) -> List[int]:
        """Indices of all empty cells, ascending."""
        return [int(pos) for pos in np.flatnonzero(self.cells == 0)]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.cells == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.cells != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_consistent(self) -> bool:
        """
        Check that no filled value repeats among its peers.

        Does not check whether the board is complete or solvable.
        """
        filled = self.cells[:, np.newaxis]
        clashes = (self.cells[PEERS] == filled) & (filled != 0)
        return not clashes.any()

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_consistent()

    def solve(self) -> bool:
        """
        Solve the board in place.

        Returns False if no solution exists, leaving the board as it was.
        """
        from ..solvers.backtracking import BacktrackingSolver
        return BacktrackingSolver().solve_in_place(self)

    def count_solutions(self, max_count: int) -> int:
        """Count solutions, stopping once ``max_count`` have been found."""
        from ..solvers.backtracking import BacktrackingSolver
        return BacktrackingSolver().count_solutions(self, max_count)

    def solve_all(self, max_count: int) -> List[SudokuBoard]:
        """Return up to ``max_count`` distinct solutions, in search order."""
        from ..solvers.backtracking import BacktrackingSolver
        return BacktrackingSolver().solve_all(self, max_count)

    @classmethod
    def generate(cls, rng: np.random.Generator) -> SudokuBoard:
        """Generate a fully solved board from a random generator."""
        from ..generator.generator import generate_board
        return generate_board(rng)

    @classmethod
    def generate_from_seed(cls, seed: Seed) -> SudokuBoard:
        """Generate a fully solved board; the same seed always gives the same board."""
        from ..generator.generator import generate_board, make_rng
        return generate_board(make_rng(seed))

    def to_line_string(self) -> str:
        """Compact 81-character form, '.' for empty cells."""
        return ''.join(str(v) if v else '.' for v in self.cells)

    def to_2d_list(self) -> List[List[int]]:
        """Rows of the board as nested lists."""
        return self.cells.reshape(N2, N2).tolist()

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from its 81-character form.

        Args:
            s: Row-major cells; '1'-'9' for values, '.' or '0' for empty.

        Raises:
            BoardParseError: On a wrong length or an unknown character.
        """
        if len(s) != SIZE:
            raise BoardParseError(f"String length must be {SIZE}, got {len(s)}")

        values = []
        for idx, c in enumerate(s):
            if c == '.':
                values.append(0)
            elif c in string.digits:
                values.append(int(c))
            else:
                raise BoardParseError(f"Invalid character {c!r} at position {idx}")
        return cls(values)

    @classmethod
    def from_list(cls, values: Iterable[int]) -> SudokuBoard:
        """Create a board from 81 integers in 0-9."""
        return cls(values)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from 9 rows of 9 integers."""
        if len(data) != N2 or any(len(row) != N2 for row in data):
            raise BoardRangeError(f"Grid shape must be ({N2}, {N2})")
        return cls(v for row in data for v in row)

    def __str__(self) -> str:
        """Pretty-print the board as a bordered grid."""
        def border(left: str, cell_sep: str, group_sep: str, right: str, fill: str) -> str:
            parts = [left]
            for col in range(N2):
                parts.append(fill * 3)
                if col != N2 - 1:
                    parts.append(group_sep if col % N == N - 1 else cell_sep)
            parts.append(right)
            return ''.join(parts)

        lines = [border('╔', '═', '╦', '╗', '═')]
        for row in range(N2):
            row_str = '║'
            for col in range(N2):
                val = self.get(row, col)
                row_str += f' {val} ' if val else '   '
                row_str += '║' if col % N == N - 1 else '│'
            lines.append(row_str)

            if row == N2 - 1:
                lines.append(border('╚', '═', '╩', '╝', '═'))
            elif row % N == N - 1:
                lines.append(border('╠', '═', '╬', '╣', '═'))
            else:
                lines.append(border('║', '┼', '║', '║', '─'))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard({self.to_line_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash(self.to_line_string())

