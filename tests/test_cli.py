"""Tests for the command-line interface."""

import pytest
from sudokit.cli import main
from sudokit.generator.generator import SudokuPuzzle


PUZZLE = "..2....3.....86.5..365...91........6.691...7...8............9.......8.17.716..5.3"
SOLUTION = "542971638917386254836542791723859146469123875158467329384715962695238417271694583"
TWO_SOLUTIONS = "542971638917386254836542791.238591.6.691238.5158467329384715962695238417271694583"
CONTRADICTORY = "55" + "." * 79


class TestSolveCommand:
    """Tests for `sudokit solve`."""

    def test_solve_line(self, capsys):
        main(["solve", PUZZLE, "--format", "line"])
        captured = capsys.readouterr()
        assert captured.out == f"{PUZZLE},{SOLUTION}\n"
        assert "Start solving 1 sudoku(s)" in captured.err

    def test_solve_pretty(self, capsys):
        main(["s", PUZZLE])
        out = capsys.readouterr().out
        assert out.startswith(f"{PUZZLE}:\n╔")

    def test_count_csv(self, capsys):
        main(["solve", "--count", "-F", "csv", TWO_SOLUTIONS, PUZZLE])
        assert capsys.readouterr().out == (
            "input,result\n"
            f"{TWO_SOLUTIONS},2\n"
            f"{PUZZLE},1\n"
        )

    def test_global_options_before_subcommand(self, capsys):
        main(["--count", "--limit", "1", "-F", "line", "solve", TWO_SOLUTIONS])
        assert capsys.readouterr().out == f"{TWO_SOLUTIONS},1\n"

    def test_all(self, capsys):
        main(["solve", "--all", "-F", "line", TWO_SOLUTIONS])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert f"{TWO_SOLUTIONS},{SOLUTION}" in lines

    def test_no_solution(self, capsys):
        main(["solve", "-F", "line", CONTRADICTORY])
        assert capsys.readouterr().out == f"{CONTRADICTORY},no_solution\n"

    def test_no_solution_pretty(self, capsys):
        main(["solve", "--all", CONTRADICTORY])
        assert capsys.readouterr().out == f"{CONTRADICTORY}:\n\tNo solution\n"

    def test_file_input(self, tmp_path, capsys):
        path = tmp_path / "puzzles.txt"
        path.write_text(f"{PUZZLE}\n\n  {CONTRADICTORY}  \n", encoding="utf-8")

        main(["solve", "-F", "line", "--file", str(path)])
        assert capsys.readouterr().out == (
            f"{PUZZLE},{SOLUTION}\n"
            f"{CONTRADICTORY},no_solution\n"
        )

    def test_seed_input(self, capsys):
        main(["solve", "-F", "line", "--seed", "TEST"])
        out = capsys.readouterr().out.strip()
        seed, board = out.split(",")
        assert seed == "TEST"
        assert len(board) == 81 and "." not in board

    def test_output_file(self, tmp_path):
        path = tmp_path / "out.txt"
        main(["solve", "-F", "line", "-o", str(path), PUZZLE])
        assert path.read_text(encoding="utf-8") == f"{PUZZLE},{SOLUTION}\n"

    def test_parse_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", "123"])
        assert excinfo.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().err

    def test_missing_input(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve"])
        assert excinfo.value.code == 2

    def test_seed_conflicts_with_count(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", "--count", "--seed", "TEST"])
        assert excinfo.value.code == 2

    @pytest.mark.parametrize("argv", [
        ["solve", "--all", "--count", PUZZLE],
        ["--count", "solve", "--all", PUZZLE],
    ])
    def test_all_conflicts_with_count(self, argv, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2
        assert "--all cannot be combined with --count" in capsys.readouterr().err

    @pytest.mark.parametrize("flag", ["--all", "--count"])
    def test_zero_limit_rejected(self, flag, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", flag, "--limit", "0", PUZZLE])
        assert excinfo.value.code == 2
        assert capsys.readouterr().out == ""

    def test_zero_limit_without_all_or_count(self, capsys):
        """The limit only matters for --all and --count."""
        main(["solve", "--limit", "0", "-F", "line", PUZZLE])
        assert capsys.readouterr().out == f"{PUZZLE},{SOLUTION}\n"


class TestGenerateCommand:
    """Tests for `sudokit generate`."""

    def test_csv(self, capsys):
        main(["generate", "-d", "easy", "-s", "TEST", "--show-solution", "--count", "-F", "csv"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0] == ",".join(SudokuPuzzle.CSV_HEADER)
        fields = lines[1].split(",")
        assert len(fields) == 8
        assert fields[2:6] == ["TEST", "25", "easy", "1"]

    def test_line_amount(self, capsys):
        main(["gen", "-n", "2", "-d", "easy", "-s", "X", "-F", "line"])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0] == lines[1]
        assert len(lines[0]) == 81

    def test_line_with_solution(self, capsys):
        main(["g", "-d", "easy", "-s", "X", "--show-solution", "-F", "line"])
        puzzle, solution = capsys.readouterr().out.strip().split(",")
        assert puzzle.count(".") == 25
        assert "." not in solution

    def test_allow_multiple(self, capsys):
        main(["generate", "-d", "insane", "-m", "-s", "X", "-F", "line"])
        assert capsys.readouterr().out.strip().count(".") == 64

    def test_pretty(self, capsys):
        main(["generate", "-d", "easy", "-s", "TEST"])
        out = capsys.readouterr().out
        assert "ID: TEST" in out
        assert "Easy" in out

    def test_bad_amount(self):
        with pytest.raises(SystemExit):
            main(["generate", "-n", "-3"])


class TestDefaultCommand:
    """Without a subcommand one default puzzle is generated."""

    def test_line(self, capsys):
        main(["-F", "line"])
        out = capsys.readouterr().out
        assert len(out.strip()) == 81

    def test_line_puzzle_only(self, capsys):
        """The default puzzle keeps no solution, so a line is just the board."""
        main(["-F", "line"])
        line = capsys.readouterr().out
        assert line.endswith("\n") and line.count("\n") == 1
        assert "," not in line
        assert 0 < line.count(".") <= 35

    def test_csv(self, capsys):
        main(["-F", "csv", "--count"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == ",".join(SudokuPuzzle.CSV_HEADER)
        fields = lines[1].split(",")
        assert fields[1] == ""
        assert fields[4:6] == ["normal", "1"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
