import json

import pytest


@pytest.fixture
def project(tmp_path):
    """Minimal project root with config, one category and a Parole word list."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "categories.json").write_text(json.dumps([
        {
            "id": "animali",
            "name": "Animali",
            "emoji": "🐾",
            "description": "Amici a quattro zampe",
            "gridSize": 8,
            "words": ["cane", "GATTO", "LUPO", "CANE"],
        }
    ]), encoding="utf-8")
    (data / "parole.json").write_text(json.dumps({
        "targets": ["PIZZA"],
        "dictionary": ["PASTA", "AMORE"],
    }), encoding="utf-8")
    (data / "config.json").write_text(json.dumps({
        "wordsearch": {"cell_size": 30, "gap": 2, "padding": 10, "regenerate_on_drop": 20},
    }), encoding="utf-8")
    return tmp_path
