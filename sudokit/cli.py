"""Command-line interface for the Sudoku solver and generator."""

import argparse
import contextlib
import csv
import sys
from typing import List, Optional, TextIO

from .core.board import SudokuBoard, InvalidBoardError
from .generator import PuzzleGenerator, SudokuPuzzle, Difficulty, parse_difficulty
from .generator.generator import RANDOM_DIFFICULTY
from .solvers import BacktrackingSolver

FORMATS = ["pretty", "line", "csv"]


def _non_negative_int(value: str) -> int:
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f'"{value}" is not a valid number')
    return int(value)


def _add_common_arguments(parser: argparse.ArgumentParser, with_defaults: bool) -> None:
    """
    Options accepted both before and after the subcommand.

    Subcommand copies suppress their defaults so they do not overwrite a
    value given before the subcommand.
    """
    def default(value):
        return value if with_defaults else argparse.SUPPRESS

    parser.add_argument(
        "--output", "-o", metavar="FILE", default=default(None),
        help="Write results to FILE instead of stdout"
    )
    parser.add_argument(
        "--format", "-F", choices=FORMATS, default=default("pretty"),
        help="Output format (default: pretty)"
    )
    parser.add_argument(
        "--count", action="store_true", default=default(False),
        help="Count the number of solutions up to a limit (see --limit)"
    )
    parser.add_argument(
        "--limit", metavar="MAX", type=_non_negative_int, default=default(255),
        help="Limit when working with multiple solutions (default: 255)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudokit",
        description="Sudoku solver and generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 hard puzzles as CSV
  sudokit generate --amount 5 --difficulty hard --format csv

  # Solve a puzzle ('.' for empty cells)
  sudokit solve "..2....3.....86.5..365...91..."

  # Count the solutions of every puzzle in a file
  sudokit solve --count --file puzzles.txt
        """
    )
    _add_common_arguments(parser, with_defaults=True)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    solve_parser = subparsers.add_parser("solve", aliases=["s"], help="Solve sudokus")
    _add_common_arguments(solve_parser, with_defaults=False)
    solve_parser.add_argument(
        "sudoku", nargs="*",
        help="Sudoku strings (81 chars, '.' for empty cells)"
    )
    solve_parser.add_argument(
        "--file", "-f", nargs="+", metavar="FILE",
        help="Input files, one sudoku per line"
    )
    solve_parser.add_argument(
        "--seed", "-s", nargs="+", metavar="SEED", dest="from_seed",
        help="Solve the boards generated from these seeds"
    )
    solve_parser.add_argument(
        "--all", action="store_true",
        help="Get multiple solutions up to a limit (see --limit)"
    )

    gen_parser = subparsers.add_parser(
        "generate", aliases=["g", "gen"], help="Generate sudokus"
    )
    _add_common_arguments(gen_parser, with_defaults=False)
    gen_parser.add_argument(
        "--amount", "-n", type=_non_negative_int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=Difficulty.names() + [RANDOM_DIFFICULTY],
        default=Difficulty.NORMAL.value,
        help="Difficulty of the puzzles (default: normal)"
    )
    gen_parser.add_argument(
        "--show-solution", action="store_true",
        help="Show the solution of each puzzle"
    )
    gen_parser.add_argument(
        "--allow-multiple", "-m", action="store_true",
        help="Allow puzzles with multiple solutions"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=str, default=None,
        help="Generate from a seed (difficulty and uniqueness must match to get the same puzzle)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "solve" or args.command == "s":
        given = [bool(args.sudoku), bool(args.file), bool(args.from_seed)]
        if sum(given) != 1:
            parser.error("solve needs exactly one input: sudoku strings, --file or --seed")
        if args.from_seed and (args.all or args.count):
            parser.error("--seed cannot be combined with --all or --count")
        if args.all and args.count:
            parser.error("--all cannot be combined with --count")
        if (args.all or args.count) and args.limit < 1:
            parser.error("--limit must be at least 1 with --all or --count")

    if args.output:
        output_cm = open(args.output, "w", encoding="utf-8", newline="")
    else:
        output_cm = contextlib.nullcontext(sys.stdout)

    with output_cm as out:
        if args.command in ("solve", "s"):
            cmd_solve(args, out)
        elif args.command in ("generate", "g", "gen"):
            cmd_generate(args, out)
        else:
            cmd_default(args, out)


def _read_inputs(args) -> List[str]:
    """Input lines for the solve command."""
    if args.sudoku:
        return list(args.sudoku)
    if args.from_seed:
        return list(args.from_seed)

    lines = []
    for path in args.file:
        with open(path, "r", encoding="utf-8") as f:
            lines.extend(line.strip() for line in f if line.strip())
    return lines


def cmd_solve(args, out: TextIO) -> None:
    """Handle the solve command."""
    print("Parsing inputs...", file=sys.stderr)
    try:
        inputs = _read_inputs(args)
        if args.from_seed:
            boards = [SudokuBoard.generate_from_seed(seed) for seed in inputs]
        else:
            boards = [SudokuBoard.from_string(text) for text in inputs]
    except (OSError, InvalidBoardError) as e:
        print(f"Error parsing puzzle: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Start solving {len(boards)} sudoku(s)", file=sys.stderr)

    pretty = args.format == "pretty"
    writer = csv.writer(out, lineterminator="\n")
    if args.format == "csv":
        writer.writerow(["input", "result"])

    def emit(text: str, result: str, pretty_result: str) -> None:
        if pretty:
            out.write(f"{text}:\n{pretty_result}\n")
        else:
            writer.writerow([text, result])

    solver = BacktrackingSolver()
    for text, board in zip(inputs, boards):
        if args.all:
            solutions = solver.solve_all(board, args.limit)
            if not solutions:
                emit(text, "no_solution", "\tNo solution")
            for solution in solutions:
                emit(text, solution.to_line_string(), str(solution))
        elif args.count:
            count = solver.count_solutions(board, args.limit)
            emit(text, str(count), f"\t{count} solutions")
        elif solver.solve_in_place(board):
            emit(text, board.to_line_string(), str(board))
        else:
            emit(text, "no_solution", "\tNo solution")


def _write_puzzles(puzzles: List[SudokuPuzzle], fmt: str, out: TextIO) -> None:
    if fmt == "csv":
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(SudokuPuzzle.CSV_HEADER)
        for puzzle in puzzles:
            writer.writerow(puzzle.csv_row())
    elif fmt == "line":
        for puzzle in puzzles:
            out.write(puzzle.to_line_string() + "\n")
    else:
        for puzzle in puzzles:
            out.write(f"{puzzle}\n\n")


def cmd_generate(args, out: TextIO) -> None:
    """Handle the generate command."""
    generator = PuzzleGenerator(
        unique_solution=not args.allow_multiple,
        difficulty=parse_difficulty(args.difficulty),
        seed=args.seed,
        count_solutions=args.count,
        max_count_solutions=args.limit,
        show_solution=args.show_solution,
    )

    print("Generating puzzles...", file=sys.stderr)
    puzzles = generator.generate_batch(args.amount, show_progress=args.amount > 1)
    _write_puzzles(puzzles, args.format, out)


def cmd_default(args, out: TextIO) -> None:
    """Without a subcommand, generate one puzzle with default settings."""
    puzzle = PuzzleGenerator(
        count_solutions=args.count,
        max_count_solutions=args.limit,
    ).generate()

    _write_puzzles([puzzle], args.format, out)


if __name__ == "__main__":
    main()
