from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from giocaparole.core.exceptions import CategoryNotFoundError, DataLoadError


@dataclass(frozen=True)
class Category:
    """Categoria della caccia parole: lista di parole + lato della griglia."""

    id: str
    name: str
    emoji: str
    description: str
    grid_size: int
    words: List[str] = field(default_factory=list)


class Catalog:
    """
    Dati statici di sola lettura:
      - categorie della caccia parole (categories.json)
      - dizionario e parole del giorno di Parole (parole.json)
    """

    def __init__(
        self,
        categories: List[Category],
        wordle_targets: Optional[List[str]] = None,
        wordle_dictionary: Optional[List[str]] = None,
    ) -> None:
        self.categories = list(categories)
        self._by_id: Dict[str, Category] = {c.id: c for c in self.categories}
        self.wordle_targets: List[str] = [w.upper() for w in (wordle_targets or [])]
        extra = [w.upper() for w in (wordle_dictionary or [])]
        self.wordle_dictionary: List[str] = list(dict.fromkeys(self.wordle_targets + extra))

    @classmethod
    def load(cls, categories_path: Path, wordle_path: Optional[Path] = None) -> "Catalog":
        categories = [cls._parse_category(it, categories_path) for it in _read_json(categories_path, list)]
        targets: List[str] = []
        dictionary: List[str] = []
        if wordle_path is not None:
            data = _read_json(wordle_path, dict)
            targets = [w for w in data.get("targets", []) if isinstance(w, str)]
            dictionary = [w for w in data.get("dictionary", []) if isinstance(w, str)]
        return cls(categories, targets, dictionary)

    def category(self, category_id: str) -> Category:
        try:
            return self._by_id[category_id]
        except KeyError:
            raise CategoryNotFoundError(f"Categoria non trovata: '{category_id}'") from None

    @staticmethod
    def _parse_category(item: object, source: Path) -> Category:
        if not isinstance(item, dict):
            raise DataLoadError(f"Voce non valida in {source.name}: {item!r}")
        try:
            size = int(item["gridSize"])
            cid = str(item["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise DataLoadError(f"Categoria malformata in {source.name}: {e}") from e
        if size < 1:
            raise DataLoadError(f"gridSize non valido per '{cid}' in {source.name}: {size}")
        words = [(w or "").strip().upper() for w in item.get("words", []) if isinstance(w, str)]
        words = [w for w in dict.fromkeys(words) if w]
        return Category(
            id=cid,
            name=str(item.get("name") or cid),
            emoji=str(item.get("emoji") or ""),
            description=str(item.get("description") or ""),
            grid_size=size,
            words=words,
        )


def _read_json(path: Path, expected: type):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Impossibile leggere '{path}': {e}") from e
    if not isinstance(data, expected):
        raise DataLoadError(f"Formato inatteso in '{path}': atteso {expected.__name__}")
    return data
