from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set, Tuple

from giocaparole.core.feedback import FeedbackSink, NullFeedback
from giocaparole.utils.logger import get_logger

LOGGER = get_logger(__name__)

CellCoord = Tuple[int, int]
Scheduler = Callable[[float, Callable[[], None]], None]

# ritardo prima di notificare il completamento (il feedback di successo deve essere percepito prima)
COMPLETION_DELAY: float = 0.5
# soglia del rapporto fra assi oltre la quale il tratto è orizzontale/verticale
AXIS_RATIO: float = 1.5
MIN_WORD_CELLS: int = 2


@dataclass(frozen=True)
class CellGeometry:
    """Geometria della griglia disegnata: lato cella, spazio fra celle, margine."""

    cell_size: float = 40.0
    gap: float = 4.0
    padding: float = 12.0

    @property
    def pitch(self) -> float:
        return self.cell_size + self.gap

    def cell_origin(self, row: int, col: int) -> Tuple[float, float]:
        """Angolo in alto a sinistra (x, y) della cella."""
        return (self.padding + col * self.pitch, self.padding + row * self.pitch)

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        x, y = self.cell_origin(row, col)
        half = self.cell_size / 2
        return (x + half, y + half)

    def extent(self, grid_size: int) -> float:
        """Lato totale dell'area disegnata, margini inclusi."""
        return 2 * self.padding + grid_size * self.cell_size + max(0, grid_size - 1) * self.gap


@dataclass(frozen=True)
class FoundWord:
    word: str
    cells: Tuple[CellCoord, ...]


@dataclass(frozen=True)
class SelectionSnapshot:
    """Stato pubblicato al livello di rendering a ogni cambiamento."""

    selection: Tuple[CellCoord, ...]
    found: Tuple[FoundWord, ...]


class MatchResult(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    IGNORED = "ignored"   # nessun gesto attivo


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def cell_at(x: float, y: float, geometry: CellGeometry, grid_size: int) -> Optional[CellCoord]:
    """Cella che contiene il punto (x, y), oppure None se fuori griglia."""
    pitch = geometry.pitch
    if pitch <= 0:
        return None
    offset = geometry.gap / 2 - geometry.padding
    col = math.floor((x + offset) / pitch)
    row = math.floor((y + offset) / pitch)
    if not (0 <= row < grid_size and 0 <= col < grid_size):
        return None
    return (row, col)


def snap_line(anchor: CellCoord, target: CellCoord, grid_size: int) -> List[CellCoord]:
    """
    Linea retta di celle da `anchor` verso `target`, agganciata a una delle
    8 direzioni canoniche. Viene ricalcolata da zero a ogni movimento: non è
    stabile sul prefisso. Il tratto si interrompe al primo passo fuori griglia.
    """
    ar, ac = anchor
    dr = target[0] - ar
    dc = target[1] - ac
    abs_dr, abs_dc = abs(dr), abs(dc)

    if abs_dr == 0 and abs_dc == 0:
        return [anchor]
    if abs_dr >= AXIS_RATIO * abs_dc:
        step, length = (_sign(dr), 0), abs_dr
    elif abs_dc >= AXIS_RATIO * abs_dr:
        step, length = (0, _sign(dc)), abs_dc
    else:
        step, length = (_sign(dr), _sign(dc)), max(abs_dr, abs_dc)

    line = [anchor]
    for i in range(1, length + 1):
        r = ar + i * step[0]
        c = ac + i * step[1]
        if not (0 <= r < grid_size and 0 <= c < grid_size):
            break
        line.append((r, c))
    return line


@dataclass
class GestureSession:
    """Stato di un singolo gesto: ancora fissa e linea corrente."""

    anchor: CellCoord
    grid_size: int
    cells: List[CellCoord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [self.anchor]

    def update(self, target: CellCoord) -> Tuple[bool, bool]:
        """Ricalcola la linea; ritorna (linea cambiata, numero di celle cambiato)."""
        line = snap_line(self.anchor, target, self.grid_size)
        if line == self.cells:
            return (False, False)
        count_changed = len(line) != len(self.cells)
        self.cells = line
        return (True, count_changed)


def _timer_scheduler(delay: float, callback: Callable[[], None]) -> None:
    """
    Scheduler di default: `callback` gira su un thread `threading.Timer`.
    Chi ha un proprio event loop (GUI, asyncio) deve passare il suo scheduler,
    altrimenti `on_complete` arriva da un thread diverso da quello del loop.
    """
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class SelectionEngine:
    """
    Motore di selezione della caccia parole.

    Converte eventi di puntatore (giù / movimento / su / annullamento) in una
    linea discreta di celle, la confronta con la lista di parole (dritta o al
    contrario) e notifica feedback, cambiamenti di stato e completamento.

    Un solo gesto alla volta: un secondo `pointer_down` prima della fine del
    primo viene ignorato.

    Gli eventi vanno inviati da un solo thread. Solo il completamento
    ritardato può arrivare da un altro thread (vedi `_timer_scheduler`).
    """

    def __init__(
        self,
        grid: Sequence[Sequence[str]],
        words: Sequence[str],
        on_complete: Optional[Callable[[], None]] = None,
        *,
        feedback: Optional[FeedbackSink] = None,
        scheduler: Optional[Scheduler] = None,
        completion_delay: float = COMPLETION_DELAY,
        on_change: Optional[Callable[[SelectionSnapshot], None]] = None,
    ) -> None:
        self.words: List[str] = list(dict.fromkeys((w or "").strip().upper() for w in words if w))
        self._on_complete = on_complete
        self._feedback: FeedbackSink = feedback or NullFeedback()
        self._scheduler: Scheduler = scheduler or _timer_scheduler
        self._completion_delay = float(completion_delay)
        self._on_change = on_change
        self._lock = threading.Lock()
        self._epoch = 0
        self._load(grid)

    def _load(self, grid: Sequence[Sequence[str]]) -> None:
        self.grid: List[List[str]] = [list(row) for row in grid]
        self.size = len(self.grid)
        self._session: Optional[GestureSession] = None
        self._found: List[FoundWord] = []
        self._completion_scheduled = False

    # ------------------------- Stato osservabile -------------------------

    @property
    def selection(self) -> List[CellCoord]:
        return list(self._session.cells) if self._session else []

    @property
    def found_words(self) -> List[FoundWord]:
        return list(self._found)

    @property
    def found_set(self) -> Set[str]:
        return {fw.word for fw in self._found}

    @property
    def is_selecting(self) -> bool:
        return self._session is not None

    @property
    def is_complete(self) -> bool:
        return len(self._found) == len(self.words)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(tuple(self.selection), tuple(self._found))

    def is_cell_selected(self, row: int, col: int) -> bool:
        return self._session is not None and (row, col) in self._session.cells

    def is_cell_found(self, row: int, col: int) -> bool:
        return any((row, col) in fw.cells for fw in self._found)

    def letters_of(self, cells: Sequence[CellCoord]) -> str:
        return "".join(self.grid[r][c] for r, c in cells)

    # ------------------------- Eventi in pixel -------------------------

    def pointer_down(self, x: float, y: float, geometry: CellGeometry) -> bool:
        cell = cell_at(x, y, geometry, self.size)
        if cell is None:
            return False
        return self.press_cell(cell)

    def pointer_move(self, x: float, y: float, geometry: CellGeometry) -> bool:
        cell = cell_at(x, y, geometry, self.size)
        if cell is None:
            return False
        return self.drag_to(cell)

    def pointer_up(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        geometry: Optional[CellGeometry] = None,
    ) -> MatchResult:
        """Fine del gesto; se arriva una posizione finale, la linea viene prima aggiornata."""
        if x is not None and y is not None and geometry is not None:
            self.pointer_move(x, y, geometry)
        return self.release()

    def pointer_cancel(self) -> None:
        """Gesto interrotto: la selezione viene scartata senza valutazione né feedback."""
        if self._session is None:
            return
        LOGGER.debug("Gesto annullato su %s", self._session.cells)
        self._session = None
        self._publish()

    # ------------------------- Eventi in celle -------------------------

    def press_cell(self, cell: CellCoord) -> bool:
        if self._session is not None:
            return False
        r, c = cell
        if not (0 <= r < self.size and 0 <= c < self.size):
            return False
        self._session = GestureSession(anchor=cell, grid_size=self.size)
        self._feedback.light_impact()
        self._publish()
        return True

    def drag_to(self, cell: CellCoord) -> bool:
        if self._session is None:
            return False
        changed, count_changed = self._session.update(cell)
        if not changed:
            return False
        if count_changed:
            self._feedback.light_impact()
        self._publish()
        return True

    def release(self) -> MatchResult:
        session = self._session
        if session is None:
            return MatchResult.IGNORED
        self._session = None

        word = self._match(session.cells)
        if word is None:
            LOGGER.debug("Selezione senza corrispondenza: %s", self.letters_of(session.cells))
            self._feedback.error()
            self._publish()
            return MatchResult.FAILURE

        self._found.append(FoundWord(word=word, cells=tuple(session.cells)))
        LOGGER.debug("Parola trovata: %s (%d/%d)", word, len(self._found), len(self.words))
        self._feedback.success()
        self._publish()
        if self.is_complete:
            with self._lock:
                if self._completion_scheduled:
                    return MatchResult.SUCCESS
                self._completion_scheduled = True
                epoch = self._epoch
            self._scheduler(self._completion_delay, lambda: self._fire_complete(epoch))
        return MatchResult.SUCCESS

    # ------------------------- Partita -------------------------

    def reset(self, grid: Sequence[Sequence[str]]) -> None:
        """Nuova partita sulla stessa lista di parole ("Gioca ancora")."""
        with self._lock:
            self._epoch += 1
            self._load(grid)
        self._publish()

    # ------------------------- Interni -------------------------

    def _match(self, cells: Sequence[CellCoord]) -> Optional[str]:
        if len(cells) < MIN_WORD_CELLS:
            return None
        forward = self.letters_of(cells)
        backward = forward[::-1]
        found = self.found_set
        for w in self.words:
            if w in found:
                continue
            if w == forward or w == backward:
                return w
        return None

    def _fire_complete(self, epoch: int) -> None:
        # una partita resettata nel frattempo non deve ricevere il completamento della precedente
        with self._lock:
            if epoch != self._epoch:
                return
        LOGGER.info("Puzzle completato: %d parole", len(self._found))
        if self._on_complete is not None:
            self._on_complete()

    def _publish(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
