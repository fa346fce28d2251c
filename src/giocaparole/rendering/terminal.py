from __future__ import annotations
from typing import Iterable, List, Sequence, Set

from giocaparole.core.selection import CellCoord, FoundWord
from giocaparole.core.wordle import Guess, LetterState

_STATE_MARK = {
    LetterState.CORRECT: "🟩",
    LetterState.PRESENT: "🟧",
    LetterState.ABSENT: "⬛",
    LetterState.EMPTY: "⬜",
}


def render_grid(
    grid: Sequence[Sequence[str]],
    found: Iterable[FoundWord] = (),
    selection: Sequence[CellCoord] = (),
) -> str:
    """
    Griglia testuale con indici di riga/colonna.
    Lettere trovate in minuscolo, selezione corrente tra parentesi quadre.
    """
    width = max((len(row) for row in grid), default=0)
    found_cells: Set[CellCoord] = {cell for fw in found for cell in fw.cells}
    selected = set(selection)

    lines: List[str] = ["    " + "".join(f"{c:>3}" for c in range(width))]
    for r, row in enumerate(grid):
        cells = []
        for c in range(len(row)):
            ch = row[c]
            if (r, c) in found_cells:
                ch = ch.lower()
            cells.append(f"[{ch}]" if (r, c) in selected else f" {ch} ")
        lines.append(f"{r:>3} " + "".join(cells))
    return "\n".join(lines)


def render_word_list(words: Sequence[str], found: Iterable[str]) -> str:
    done = set(found)
    return "  ".join(f"✔ {w}" if w in done else f"· {w}" for w in words)


def render_guesses(guesses: Sequence[Guess], word_length: int, max_guesses: int) -> str:
    rows = []
    for i in range(max_guesses):
        if i < len(guesses):
            g = guesses[i]
            marks = "".join(_STATE_MARK[s] for s in g.states)
            rows.append(f"{marks}  {' '.join(g.word)}")
        else:
            rows.append(_STATE_MARK[LetterState.EMPTY] * word_length)
    return "\n".join(rows)
