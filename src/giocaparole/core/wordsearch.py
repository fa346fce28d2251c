from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import random

from giocaparole.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Alfabeto italiano (21 lettere): niente J, K, W, X, Y
ALPHABET: str = "ABCDEFGHILMNOPQRSTUVZ"
MAX_ATTEMPTS: int = 100
EMPTY: str = ""

Grid = List[List[str]]


class WordSearch:
    """
    Griglia di caccia parole NxN con 8 direzioni (→ ← ↓ ↑ ↗ ↘ ↙ ↖).

    Interfaccia pubblica:
      - WordSearch(words, size, *, rng=None, seed=None, max_attempts=100)
      - generate() -> Grid
      - .size : int
      - .grid : List[List[str]]   # N×N, lettere dell'alfabeto italiano
      - .placed_words : Dict[str, Dict[str,int]]  # {word:{r,c,dr,dc}}
      - .dropped_words : List[str]

    Osservazioni:
      - Le parole vengono piazzate dalla più lunga alla più corta (a parità,
        nell'ordine originale).
      - Ogni parola ha un budget di tentativi casuali (direzione + cella di
        partenza). Se nessuno è valido la parola viene scartata in silenzio:
        resta nella lista mostrata ma non è presente nella griglia.
    """

    # (dr, dc): destra, giù, diagonali, e i loro inversi
    DIRECTIONS: List[Tuple[int, int]] = [
        (0, 1), (1, 0), (1, 1), (-1, 1),
        (0, -1), (-1, 0), (-1, -1), (1, -1),
    ]

    def __init__(
        self,
        words: List[str],
        size: int = 10,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_attempts: int = MAX_ATTEMPTS,
        alphabet: str = ALPHABET,
    ) -> None:
        self.size = int(size)
        self.max_attempts = int(max_attempts)
        self._alphabet = alphabet
        if rng is None:
            rng = random.Random(seed) if seed is not None else random.Random()
        self._rng = rng

        # rimuove duplicati preservando l'ordine
        seen = set()
        self.words: List[str] = []
        for w in words or []:
            w = (w or "").strip().upper()
            if w and w not in seen:
                self.words.append(w)
                seen.add(w)

        self.grid: Grid = self._empty_grid()
        self.placed_words: Dict[str, Dict[str, int]] = {}
        self.dropped_words: List[str] = []

    # ------------------------- API principale -------------------------

    def generate(self) -> Grid:
        """Piazza le parole e riempie le celle vuote. Ogni chiamata riparte da zero."""
        self.grid = self._empty_grid()
        self.placed_words = {}
        self.dropped_words = []

        # sorted() è stabile: a parità di lunghezza resta l'ordine originale
        for word in sorted(self.words, key=len, reverse=True):
            if not self._place_randomly(word):
                self.dropped_words.append(word)
                LOGGER.warning(
                    "Parola '%s' scartata dopo %d tentativi (griglia %dx%d)",
                    word, self.max_attempts, self.size, self.size,
                )

        self._fill_empty_cells()
        LOGGER.debug(
            "Griglia %dx%d generata: %d parole piazzate, %d scartate",
            self.size, self.size, len(self.placed_words), len(self.dropped_words),
        )
        return self.grid

    # ------------------------- Piazzamento -------------------------

    def _place_randomly(self, word: str) -> bool:
        for _ in range(self.max_attempts):
            dr, dc = self._rng.choice(self.DIRECTIONS)
            r = self._rng.randrange(self.size)
            c = self._rng.randrange(self.size)
            if self._can_place(word, r, c, dr, dc):
                self._place(word, r, c, dr, dc)
                self.placed_words[word] = {"r": r, "c": c, "dr": dr, "dc": dc}
                return True
        return False

    def _can_place(self, word: str, r: int, c: int, dr: int, dc: int) -> bool:
        """La parola entra nei bordi e ogni cella è vuota o ha già la lettera giusta."""
        end_r = r + (len(word) - 1) * dr
        end_c = c + (len(word) - 1) * dc
        if not (0 <= end_r < self.size and 0 <= end_c < self.size):
            return False
        for i, ch in enumerate(word):
            cell = self.grid[r + i * dr][c + i * dc]
            if cell != EMPTY and cell != ch:
                return False
        return True

    def _place(self, word: str, r: int, c: int, dr: int, dc: int) -> None:
        for i, ch in enumerate(word):
            self.grid[r + i * dr][c + i * dc] = ch

    def _fill_empty_cells(self) -> None:
        for r in range(self.size):
            for c in range(self.size):
                if self.grid[r][c] == EMPTY:
                    self.grid[r][c] = self._rng.choice(self._alphabet)

    def _empty_grid(self) -> Grid:
        return [[EMPTY for _ in range(self.size)] for _ in range(self.size)]

    # ------------------------- Utilità -------------------------

    def cells_of(self, word: str) -> List[Tuple[int, int]]:
        """Celle occupate da una parola piazzata (lista vuota se scartata)."""
        pos = self.placed_words.get(word.upper())
        if pos is None:
            return []
        return [(pos["r"] + i * pos["dr"], pos["c"] + i * pos["dc"]) for i in range(len(word))]


def generate_word_search(
    words: List[str],
    grid_size: int,
    rng: Optional[random.Random] = None,
    *,
    regenerate_on_drop: int = 0,
    max_attempts: int = MAX_ATTEMPTS,
) -> Grid:
    """Genera una griglia piena a partire dalla lista di parole.

    `regenerate_on_drop` > 0 ripete l'intera generazione (con nuova casualità)
    finché qualche parola viene scartata, al massimo quel numero di volte in più.
    """
    return build_word_search(
        words, grid_size, rng,
        regenerate_on_drop=regenerate_on_drop,
        max_attempts=max_attempts,
    ).grid


def build_word_search(
    words: List[str],
    grid_size: int,
    rng: Optional[random.Random] = None,
    *,
    regenerate_on_drop: int = 0,
    max_attempts: int = MAX_ATTEMPTS,
) -> WordSearch:
    ws = WordSearch(words, grid_size, rng=rng, max_attempts=max_attempts)
    ws.generate()
    retries = max(0, int(regenerate_on_drop))
    while ws.dropped_words and retries > 0:
        LOGGER.info("Rigenero la griglia: %d parole non piazzate", len(ws.dropped_words))
        ws.generate()
        retries -= 1
    return ws
