"""Tests for category and word list loading."""

import json
from pathlib import Path

import pytest

from giocaparole.core.exceptions import CategoryNotFoundError, DataLoadError
from giocaparole.data.catalog import Catalog

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class TestCatalog:
    def test_load_normalises_words(self, project):
        catalog = Catalog.load(project / "data" / "categories.json", project / "data" / "parole.json")
        cat = catalog.category("animali")
        assert cat.grid_size == 8
        assert cat.words == ["CANE", "GATTO", "LUPO"]
        assert cat.emoji == "🐾"

    def test_wordle_lists(self, project):
        catalog = Catalog.load(project / "data" / "categories.json", project / "data" / "parole.json")
        assert catalog.wordle_targets == ["PIZZA"]
        assert catalog.wordle_dictionary == ["PIZZA", "PASTA", "AMORE"]

    def test_unknown_category(self, project):
        catalog = Catalog.load(project / "data" / "categories.json")
        with pytest.raises(CategoryNotFoundError, match="Categoria non trovata"):
            catalog.category("pianeti")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            Catalog.load(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "categories.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(DataLoadError):
            Catalog.load(path)

    def test_category_without_grid_size(self, tmp_path):
        path = tmp_path / "categories.json"
        path.write_text(json.dumps([{"id": "x", "words": ["A"]}]), encoding="utf-8")
        with pytest.raises(DataLoadError, match="malformata"):
            Catalog.load(path)

    @pytest.mark.parametrize("size", [0, -3])
    def test_non_positive_grid_size(self, tmp_path, size):
        path = tmp_path / "categories.json"
        path.write_text(json.dumps([{"id": "x", "gridSize": size, "words": ["A"]}]), encoding="utf-8")
        with pytest.raises(DataLoadError, match="gridSize non valido"):
            Catalog.load(path)

    def test_wrong_top_level_type(self, tmp_path):
        path = tmp_path / "categories.json"
        path.write_text(json.dumps({"id": "x"}), encoding="utf-8")
        with pytest.raises(DataLoadError, match="Formato inatteso"):
            Catalog.load(path)


class TestShippedData:
    def test_shipped_categories_fit_their_grids(self):
        catalog = Catalog.load(PROJECT_ROOT / "data" / "categories.json", PROJECT_ROOT / "data" / "parole.json")
        assert catalog.categories
        for cat in catalog.categories:
            assert cat.words
            assert all(len(w) <= cat.grid_size for w in cat.words)

    def test_shipped_parole_words_have_five_letters(self):
        catalog = Catalog.load(PROJECT_ROOT / "data" / "categories.json", PROJECT_ROOT / "data" / "parole.json")
        assert catalog.wordle_targets
        assert all(len(w) == 5 for w in catalog.wordle_dictionary)
