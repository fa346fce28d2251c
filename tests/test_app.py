"""Tests for the application layer: config, sessions, image export."""

import json
from datetime import date

import pytest
from PIL import Image

from giocaparole.app import GiocaParoleApp
from giocaparole.core.exceptions import CategoryNotFoundError, ConfigError
from giocaparole.core.feedback import Feedback, RecordingFeedback
from giocaparole.core.selection import CellGeometry, FoundWord, MatchResult
from giocaparole.rendering.wordsearch_renderer import WordSearchRenderer, answer_runs


class ManualScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    def run_all(self):
        calls, self.calls = self.calls, []
        for _, cb in calls:
            cb()


class TestConfig:
    def test_overrides_merge_with_defaults(self, project):
        app = GiocaParoleApp(project, seed=1)
        assert app.geometry() == CellGeometry(cell_size=30, gap=2, padding=10)
        assert app.config["wordsearch"]["max_attempts"] == 100
        assert app.config["render"]["highlight_style"] == "fill"

    def test_missing_config_uses_defaults(self, project):
        (project / "data" / "config.json").unlink()
        app = GiocaParoleApp(project)
        assert app.geometry() == CellGeometry(cell_size=40, gap=4, padding=12)

    def test_malformed_config(self, project):
        (project / "data" / "config.json").write_text("{nope", encoding="utf-8")
        with pytest.raises(ConfigError):
            GiocaParoleApp(project)

    def test_config_must_be_object(self, project):
        (project / "data" / "config.json").write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(ConfigError):
            GiocaParoleApp(project)

    def write_config(self, project, section, values):
        (project / "data" / "config.json").write_text(json.dumps({section: values}), encoding="utf-8")

    def test_wordsearch_settings_are_converted(self, project):
        settings = GiocaParoleApp(project).wordsearch_settings()
        assert settings == {"completion_delay": 0.5, "max_attempts": 100, "regenerate_on_drop": 20}

    @pytest.mark.parametrize("values", [
        {"max_attempts": "molti"},
        {"completion_delay": "presto"},
        {"regenerate_on_drop": [1]},
        {"max_attempts": -1},
    ])
    def test_bad_wordsearch_values(self, project, values):
        self.write_config(project, "wordsearch", values)
        app = GiocaParoleApp(project)
        with pytest.raises(ConfigError, match="wordsearch"):
            app.nuova_caccia_parole("animali")

    @pytest.mark.parametrize("values", [
        {"stroke_width": "spesso"},
        {"stroke_width": -2},
        {"highlight_style": "neon"},
    ])
    def test_bad_render_values(self, project, values):
        self.write_config(project, "render", values)
        app = GiocaParoleApp(project)
        with pytest.raises(ConfigError):
            app.esporta_immagine("animali")
        assert not app.output_dir.exists()


class TestWordSearchSession:
    @pytest.fixture
    def app(self, project):
        return GiocaParoleApp(project, seed=3)

    def test_unknown_category(self, app):
        with pytest.raises(CategoryNotFoundError):
            app.nuova_caccia_parole("pianeti")

    def test_full_game_through_pointer_events(self, app):
        scheduler = ManualScheduler()
        feedback = RecordingFeedback()
        completed = []
        session = app.nuova_caccia_parole(
            "animali", on_complete=lambda: completed.append(True),
            feedback=feedback, scheduler=scheduler,
        )
        assert session.puzzle.dropped_words == []

        for word in session.category.words:
            cells = session.puzzle.cells_of(word)
            assert session.drag([cells[0], cells[-1]]) == MatchResult.SUCCESS

        assert session.engine.is_complete
        assert feedback.count(Feedback.SUCCESS) == 3
        scheduler.run_all()
        assert completed == [True]

    def test_play_again_regenerates(self, app):
        session = app.nuova_caccia_parole("animali", scheduler=ManualScheduler())
        word = session.category.words[0]
        cells = session.puzzle.cells_of(word)
        session.drag(cells)
        old_grid = [row[:] for row in session.grid]

        session.play_again()
        assert session.engine.found_words == []
        assert session.engine.grid == session.grid
        assert session.grid != old_grid

    def test_drag_outside_grid_is_ignored(self, app):
        session = app.nuova_caccia_parole("animali", scheduler=ManualScheduler())
        assert session.drag([(20, 20), (20, 23)]) == MatchResult.IGNORED
        assert session.drag([]) == MatchResult.IGNORED


class TestParole:
    def test_daily_word(self, project):
        game = GiocaParoleApp(project).nuova_parole(day=date(2025, 1, 1))
        assert game.target == "PIZZA"
        assert game.is_valid_word("PASTA")

    def test_random_word(self, project):
        game = GiocaParoleApp(project, seed=0).nuova_parole(random_word=True)
        assert game.target == "PIZZA"


class TestRendering:
    def test_export_writes_png_files(self, project):
        app = GiocaParoleApp(project, seed=5)
        ex, an = app.esporta_immagine("animali", output_basename="prova")
        assert ex.name == "prova_esercizio.png"
        assert an is not None and an.exists()
        with Image.open(ex) as img:
            side = int(round(app.geometry().extent(8)))
            assert img.size == (side, side)

    def test_export_without_answers(self, project):
        ex, an = GiocaParoleApp(project, seed=5).esporta_immagine("animali", answers=False)
        assert ex.exists()
        assert an is None

    def test_found_and_selected_colours(self):
        grid = [list("CANE"), list("XXXX"), list("XXXX"), list("XXXX")]
        geom = CellGeometry(cell_size=40, gap=4, padding=12)
        renderer = WordSearchRenderer(grid, geometry=geom)
        found = [FoundWord("CANE", ((0, 0), (0, 1), (0, 2), (0, 3)))]
        img = renderer.render(found=found, selection=[(2, 0), (2, 1)])

        def pixel(r, c):
            x, y = geom.cell_origin(r, c)
            return img.getpixel((int(x + 3), int(y + geom.cell_size / 2)))

        assert pixel(0, 1) == WordSearchRenderer.FOUND_FILL
        assert pixel(2, 1) == WordSearchRenderer.SELECTED_FILL
        assert pixel(3, 3) == WordSearchRenderer.CELL

    def test_answer_key_styles(self):
        grid = [list("CANE"), list("XXXX"), list("XXXX"), list("XXXX")]
        runs = answer_runs({"CANE": {"r": 0, "c": 0, "dr": 0, "dc": 1}})
        assert runs == [[(0, 0), (0, 1), (0, 2), (0, 3)]]

        filled = WordSearchRenderer(grid).render(answers=runs)
        geom = CellGeometry()
        x, y = geom.cell_origin(0, 2)
        assert filled.getpixel((int(x + 3), int(y + 20))) == WordSearchRenderer.HIGHLIGHT_FILL

        stroked = WordSearchRenderer(grid, highlight_style="stroke").render(answers=runs)
        x, y = geom.cell_origin(0, 0)
        assert stroked.getpixel((int(x + 3), int(y + 20))) == WordSearchRenderer.CELL
