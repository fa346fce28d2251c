# src/giocaparole/app.py
from __future__ import annotations

import json
import random
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from giocaparole.core.exceptions import ConfigError, DataLoadError
from giocaparole.core.feedback import FeedbackSink
from giocaparole.core.selection import (
    COMPLETION_DELAY,
    CellCoord,
    CellGeometry,
    MatchResult,
    Scheduler,
    SelectionEngine,
)
from giocaparole.core.wordle import WordleGame, todays_word
from giocaparole.core.wordsearch import MAX_ATTEMPTS, WordSearch, build_word_search
from giocaparole.data.catalog import Catalog, Category
from giocaparole.rendering.wordsearch_renderer import WordSearchRenderer, answer_runs
from giocaparole.utils.logger import get_logger

LOGGER = get_logger(__name__)


class TerminalFeedback:
    """Feedback per il terminale: un breve segnale testuale per ogni evento."""

    def __init__(self, out: Callable[[str], None] = print) -> None:
        self._out = out

    def light_impact(self) -> None:
        pass

    def success(self) -> None:
        self._out("✅ Trovata!")

    def error(self) -> None:
        self._out("❌ Niente da fare")


class WordSearchSession:
    """
    Una partita di caccia parole: griglia generata + motore di selezione.
    `play_again()` rigenera la griglia con nuova casualità e azzera le parole trovate.
    """

    def __init__(
        self,
        category: Category,
        *,
        geometry: CellGeometry,
        rng: random.Random,
        on_complete: Optional[Callable[[], None]] = None,
        feedback: Optional[FeedbackSink] = None,
        scheduler: Optional[Scheduler] = None,
        completion_delay: float = COMPLETION_DELAY,
        max_attempts: int = MAX_ATTEMPTS,
        regenerate_on_drop: int = 0,
    ) -> None:
        self.category = category
        self.geometry = geometry
        self._rng = rng
        self._max_attempts = max_attempts
        self._regenerate_on_drop = regenerate_on_drop
        self.puzzle: WordSearch = self._generate()
        self.engine = SelectionEngine(
            self.puzzle.grid,
            category.words,
            on_complete,
            feedback=feedback,
            scheduler=scheduler,
            completion_delay=completion_delay,
        )

    def _generate(self) -> WordSearch:
        ws = build_word_search(
            self.category.words,
            self.category.grid_size,
            self._rng,
            regenerate_on_drop=self._regenerate_on_drop,
            max_attempts=self._max_attempts,
        )
        if ws.dropped_words:
            LOGGER.warning("Categoria '%s': parole non presenti nella griglia: %s",
                           self.category.id, ", ".join(ws.dropped_words))
        return ws

    @property
    def grid(self) -> List[List[str]]:
        return self.puzzle.grid

    def play_again(self) -> None:
        self.puzzle = self._generate()
        self.engine.reset(self.puzzle.grid)

    def drag(self, cells: Sequence[CellCoord]) -> MatchResult:
        """Simula un trascinamento: pointer down sul primo punto, move sugli altri, up sull'ultimo."""
        if not cells:
            return MatchResult.IGNORED
        g = self.geometry
        x, y = g.cell_center(*cells[0])
        if not self.engine.pointer_down(x, y, g):
            return MatchResult.IGNORED
        for cell in cells[1:]:
            x, y = g.cell_center(*cell)
            self.engine.pointer_move(x, y, g)
        return self.engine.pointer_up(x, y, g)


class GiocaParoleApp:
    """
    Orchestratore dell'applicazione:
      - Legge config (data/config.json)
      - Risolve i percorsi (data/, output/)
      - Carica catalogo di categorie e parole
      - Crea le partite (Caccia Parole / Parole)
      - Esporta immagini PNG delle griglie
    """

    DEFAULTS: Dict = {
        "categories_file": "data/categories.json",
        "wordle_file": "data/parole.json",
        "wordsearch": {
            "cell_size": 40,
            "gap": 4,
            "padding": 12,
            "completion_delay": COMPLETION_DELAY,
            "max_attempts": MAX_ATTEMPTS,
            "regenerate_on_drop": 0,
        },
        "render": {"highlight_style": "fill", "stroke_width": 5, "font_path": None},
    }

    # -------------------- Infra --------------------
    def __init__(self, project_root: Optional[Path] = None, *, seed: Optional[int] = None) -> None:
        self.project_root = Path(project_root) if project_root else self._detect_project_root()
        self.data_dir = self.project_root / "data"
        self.output_dir = self.project_root / "output"
        self.config_path = self.data_dir / "config.json"
        self.config: Dict = self._merge(self.DEFAULTS, self._load_config() or {})
        self.rng = random.Random(seed) if seed is not None else random.Random()
        self._catalog: Optional[Catalog] = None

    def _detect_project_root(self) -> Path:
        here = Path(__file__).resolve()
        for p in [here, *here.parents]:
            if (p / "data" / "categories.json").exists():
                return p
        return Path.cwd()

    def _as_path(self, rel: str | Path) -> Path:
        p = Path(rel)
        return p if p.is_absolute() else (self.project_root / p)

    # -------------------- Config --------------------
    def _load_config(self) -> Optional[Dict]:
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                cfg = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Configurazione non leggibile '{self.config_path}': {e}") from e
        if not isinstance(cfg, dict):
            raise ConfigError(f"Configurazione non valida '{self.config_path}': atteso un oggetto JSON")
        return cfg

    @staticmethod
    def _merge(base: Dict, override: Dict) -> Dict:
        out = dict(base)
        for k, v in override.items():
            if isinstance(v, dict) and isinstance(out.get(k), dict):
                out[k] = {**out[k], **v}
            else:
                out[k] = v
        return out

    def _section(self, name: str) -> Dict:
        section = self.config.get(name)
        if not isinstance(section, dict):
            raise ConfigError(f"Sezione '{name}' non valida in config: atteso un oggetto")
        return section

    def geometry(self) -> CellGeometry:
        ws_cfg = self._section("wordsearch")
        try:
            return CellGeometry(
                cell_size=float(ws_cfg["cell_size"]),
                gap=float(ws_cfg["gap"]),
                padding=float(ws_cfg["padding"]),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Geometria non valida in config: {e}") from e

    def wordsearch_settings(self) -> Dict:
        """Ritardo, tentativi e rigenerazioni della caccia parole, già convertiti e validati."""
        ws_cfg = self._section("wordsearch")
        try:
            out = {
                "completion_delay": float(ws_cfg.get("completion_delay", COMPLETION_DELAY)),
                "max_attempts": int(ws_cfg.get("max_attempts", MAX_ATTEMPTS)),
                "regenerate_on_drop": int(ws_cfg.get("regenerate_on_drop") or 0),
            }
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Sezione 'wordsearch' non valida in config: {e}") from e
        for key, value in out.items():
            if value < 0:
                raise ConfigError(f"Sezione 'wordsearch' non valida in config: {key} negativo ({value})")
        return out

    def render_settings(self) -> Dict:
        render_cfg = self._section("render")
        style = str(render_cfg.get("highlight_style") or "fill").lower()
        if style not in ("fill", "stroke"):
            raise ConfigError(f"highlight_style non valido in config: '{style}' (fill | stroke)")
        try:
            stroke_width = int(render_cfg.get("stroke_width") or 5)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"stroke_width non valido in config: {e}") from e
        if stroke_width < 1:
            raise ConfigError(f"stroke_width non valido in config: {stroke_width}")
        font_path = render_cfg.get("font_path")
        return {"highlight_style": style, "stroke_width": stroke_width, "font_path": str(font_path) if font_path else None}

    # -------------------- Catalogo --------------------
    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            wordle = self.config.get("wordle_file")
            self._catalog = Catalog.load(
                self._as_path(self.config["categories_file"]),
                self._as_path(wordle) if wordle else None,
            )
        return self._catalog

    # ======================================================================
    #                            CACCIA PAROLE
    # ======================================================================
    def nuova_caccia_parole(
        self,
        category_id: str,
        *,
        on_complete: Optional[Callable[[], None]] = None,
        feedback: Optional[FeedbackSink] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> WordSearchSession:
        category = self.catalog.category(category_id)
        settings = self.wordsearch_settings()
        return WordSearchSession(
            category,
            geometry=self.geometry(),
            rng=self.rng,
            on_complete=on_complete,
            feedback=feedback,
            scheduler=scheduler,
            completion_delay=settings["completion_delay"],
            max_attempts=settings["max_attempts"],
            regenerate_on_drop=settings["regenerate_on_drop"],
        )

    def esporta_immagine(
        self,
        category_id: str,
        *,
        output_basename: Optional[str] = None,
        answers: bool = True,
    ) -> Tuple[Path, Optional[Path]]:
        """Genera una griglia nuova e salva l'esercizio (e opzionalmente le soluzioni) in PNG."""
        render_cfg = self.render_settings()
        session = self.nuova_caccia_parole(category_id)
        renderer = WordSearchRenderer(session.grid, geometry=session.geometry, **render_cfg)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        base = output_basename or category_id
        ex = self.output_dir / f"{base}_esercizio.png"
        renderer.generate_image(str(ex))
        an: Optional[Path] = None
        if answers:
            an = self.output_dir / f"{base}_soluzioni.png"
            renderer.generate_image(str(an), answers=answer_runs(session.puzzle.placed_words))
        LOGGER.info("Immagini salvate in %s", self.output_dir)
        return ex, an

    # ======================================================================
    #                               PAROLE
    # ======================================================================
    def nuova_parole(
        self,
        *,
        day: Optional[date] = None,
        random_word: bool = False,
        feedback: Optional[FeedbackSink] = None,
    ) -> WordleGame:
        targets = self.catalog.wordle_targets
        if not targets:
            raise DataLoadError("Nessuna parola disponibile per Parole.")
        target = self.rng.choice(targets) if random_word else todays_word(targets, day)
        return WordleGame(target, self.catalog.wordle_dictionary, feedback=feedback)
