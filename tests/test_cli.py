"""Unit tests for the command-line interface."""

import json

import pytest
from tenner.cli import main


class TestCli:
    """Tests for the tenner command."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_solve(self, capsys):
        assert main(["solve", "--puzzle", "12./4.6/.89", "--sums", "12,15,18", "--check-unique"]) == 0
        out = capsys.readouterr().out
        assert "| 1 | 2 | 3 |" in out
        assert "Unique solution: yes" in out

    def test_solve_unsolvable(self, capsys):
        assert main(["solve", "--puzzle", "12./4.6/.89", "--sums", "1,1,1"]) == 1
        assert "no solution" in capsys.readouterr().out

    @pytest.mark.parametrize("puzzle,sums", [
        ("12x/456/789", "12,15,18"),
        ("12./4.6/.89", "12,15"),
        ("12./4.6/.89", "a,b,c"),
    ])
    def test_solve_bad_input(self, capsys, puzzle, sums):
        assert main(["solve", "--puzzle", puzzle, "--sums", sums]) == 1
        assert "Error" in capsys.readouterr().out

    def test_hint(self, capsys):
        assert main(["hint", "--puzzle", "01234/56789/12345/678.0", "--sums", "12,16,20,24,18"]) == 0
        assert "Logical move: cell (3, 3) must be 9" in capsys.readouterr().out

    def test_hint_with_selection(self, capsys):
        assert main(["hint", "--puzzle", "..././...", "--sums", "20,20,5", "--select", "1,1"]) == 0
        assert "Possible values for cell (1, 1)" in capsys.readouterr().out

    @pytest.mark.parametrize("selection", ["2", "1,2,3", "a,b", "3,0", "0,-1"])
    def test_hint_bad_selection(self, capsys, selection):
        assert main(["hint", "--puzzle", "12./4.6/.89", "--sums", "12,15,18",
                     "--select", selection]) == 1
        assert "Error" in capsys.readouterr().out

    def test_hint_on_complete_grid(self, capsys):
        assert main(["hint", "--puzzle", "123/456/789", "--sums", "12,15,18"]) == 0
        assert "already complete" in capsys.readouterr().out

    def test_hint_dead_end_is_not_reported_complete(self, capsys, monkeypatch):
        monkeypatch.setattr("tenner.cli.HintEngine.provide_hint", lambda self, live: None)
        assert main(["hint", "--puzzle", "12./4.6/.89", "--sums", "12,15,18"]) == 0
        out = capsys.readouterr().out
        assert "already complete" not in out
        assert "no empty cell has a legal value" in out

    def test_generate_json(self, capsys):
        assert main(["generate", "--rows", "3", "--difficulty", "easy", "--seed", "5", "--json"]) == 0
        puzzles = json.loads(capsys.readouterr().out)
        assert len(puzzles) == 1
        assert puzzles[0]["rows"] == 3
        assert puzzles[0]["difficulty"] == "easy"

    def test_generate_bad_rows(self, capsys):
        assert main(["generate", "--rows", "12"]) == 1

    def test_bad_config(self, capsys, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"colour": "red"}')
        assert main(["--config", str(path), "solve", "--puzzle", "1", "--sums", "1"]) == 1
        assert "Error loading config" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
