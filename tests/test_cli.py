"""Tests for the command line interface and the terminal helpers."""

import logging

import pytest
from typer.testing import CliRunner

from giocaparole.core.selection import FoundWord
from giocaparole.core.wordle import Guess, LetterState
from giocaparole.main import app
from giocaparole.rendering.terminal import render_grid, render_guesses, render_word_list
from giocaparole.ui.menu import parse_drag
from giocaparole.utils.logger import LOG_FORMAT, configure_logging

runner = CliRunner()


class TestCommands:
    def test_categorie_lists_shipped_categories(self):
        result = runner.invoke(app, ["categorie"])
        assert result.exit_code == 0
        assert "animali" in result.output
        assert "griglia" in result.output

    def test_caccia_quit_immediately(self):
        result = runner.invoke(app, ["--seed", "1", "caccia", "colori"], input="q\n")
        assert result.exit_code == 0
        assert "ROSSO" in result.output

    def test_caccia_bad_input_then_quit(self):
        result = runner.invoke(app, ["--seed", "1", "caccia", "colori"], input="ciao\n99,99 99,98\nq\n")
        assert result.exit_code == 0
        assert "Formato non valido" in result.output
        assert "fuori dalla griglia" in result.output

    def test_caccia_unknown_category(self):
        result = runner.invoke(app, ["caccia", "pianeti"])
        assert result.exit_code == 1
        assert "Categoria non trovata" in result.output

    def test_parole_invalid_guess_then_quit(self):
        result = runner.invoke(app, ["--seed", "2", "parole", "--casuale"], input="casa\nq\n")
        assert result.exit_code == 0
        assert "La parola deve avere 5 lettere" in result.output

    def test_menu_exit(self):
        result = runner.invoke(app, ["menu"], input="4\n")
        assert result.exit_code == 0
        assert "A presto!" in result.output


class TestParseDrag:
    def test_two_cells(self):
        assert parse_drag("0,0 0,4") == [(0, 0), (0, 4)]

    def test_semicolons(self):
        assert parse_drag("1,1;2,2;3,3") == [(1, 1), (2, 2), (3, 3)]

    def test_invalid(self):
        assert parse_drag("a,b") is None
        assert parse_drag("1 2") is None
        assert parse_drag("") is None


class TestTerminalRendering:
    def test_grid_marks_found_and_selected(self):
        grid = [list("CANE"), list("XXXX")]
        out = render_grid(grid, [FoundWord("CANE", ((0, 0), (0, 1), (0, 2), (0, 3)))], [(1, 0)])
        assert " c  a  n  e " in out
        assert "[X]" in out

    def test_word_list(self):
        assert render_word_list(["CANE", "LUPO"], {"CANE"}) == "✔ CANE  · LUPO"

    def test_guesses(self):
        g = Guess("PASTA", (LetterState.CORRECT,) + (LetterState.ABSENT,) * 4)
        lines = render_guesses([g], 5, 3).splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("🟩⬛⬛⬛⬛")
        assert lines[1] == "⬜" * 5

    def test_rectangular_grid_uses_row_length(self):
        grid = [list("CANE"), list("LUPO")]
        lines = render_grid(grid).splitlines()
        assert len(lines) == 3
        assert lines[0].split() == ["0", "1", "2", "3"]
        assert lines[2].split() == ["1", "L", "U", "P", "O"]


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_verbose_sets_debug(self):
        configure_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("PIL").level == logging.INFO

    def test_reconfigure_replaces_own_handler(self):
        configure_logging()
        configure_logging()
        root = logging.getLogger()
        own = [h for h in root.handlers if h.formatter is not None and h.formatter._fmt == LOG_FORMAT]
        assert len(own) == 1
        assert root.level == logging.WARNING
