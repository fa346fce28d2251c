from __future__ import annotations

from datetime import date
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from giocaparole.core.exceptions import InvalidGuessError
from giocaparole.core.feedback import FeedbackSink, NullFeedback
from giocaparole.utils.logger import get_logger

LOGGER = get_logger(__name__)

WORD_LENGTH: int = 5
MAX_GUESSES: int = 6


class LetterState(str, Enum):
    CORRECT = "correct"   # lettera giusta al posto giusto
    PRESENT = "present"   # lettera presente altrove
    ABSENT = "absent"
    EMPTY = "empty"


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Guess:
    word: str
    states: Tuple[LetterState, ...]


def evaluate_guess(guess: str, target: str) -> List[LetterState]:
    """
    Valuta un tentativo in due passate: prima le lettere al posto giusto
    (che "consumano" la lettera del bersaglio), poi quelle presenti altrove,
    consumando la prima occorrenza libera.
    """
    guess = guess.upper()
    remaining: List[Optional[str]] = list(target.upper())
    states = [LetterState.ABSENT] * len(guess)

    for i, ch in enumerate(guess):
        if i < len(remaining) and remaining[i] == ch:
            states[i] = LetterState.CORRECT
            remaining[i] = None

    for i, ch in enumerate(guess):
        if states[i] == LetterState.CORRECT:
            continue
        if ch in remaining:
            states[i] = LetterState.PRESENT
            remaining[remaining.index(ch)] = None

    return states


def todays_word(words: Sequence[str], day: Optional[date] = None) -> str:
    """Parola del giorno: scelta deterministica in base alla data."""
    if not words:
        raise ValueError("lista di parole vuota")
    day = day or date.today()
    return words[day.toordinal() % len(words)].upper()


class WordleGame:
    """Partita di Parole: indovina la parola di 5 lettere in 6 tentativi."""

    def __init__(
        self,
        target: str,
        dictionary: Iterable[str],
        *,
        feedback: Optional[FeedbackSink] = None,
        word_length: int = WORD_LENGTH,
        max_guesses: int = MAX_GUESSES,
    ) -> None:
        self.word_length = int(word_length)
        self.max_guesses = int(max_guesses)
        self.dictionary = {w.strip().upper() for w in dictionary if w}
        self._feedback: FeedbackSink = feedback or NullFeedback()
        self.reset(target)

    def reset(self, target: str) -> None:
        self.target = target.strip().upper()
        self.guesses: List[Guess] = []
        self.status = GameStatus.PLAYING

    @property
    def remaining(self) -> int:
        return self.max_guesses - len(self.guesses)

    def is_valid_word(self, word: str) -> bool:
        return word.upper() in self.dictionary or word.upper() == self.target

    def submit(self, guess: str) -> Guess:
        if self.status != GameStatus.PLAYING:
            raise InvalidGuessError("La partita è finita")

        word = (guess or "").strip().upper()
        if len(word) != self.word_length:
            self._feedback.error()
            raise InvalidGuessError(f"La parola deve avere {self.word_length} lettere")
        if not self.is_valid_word(word):
            self._feedback.error()
            raise InvalidGuessError("Parola non valida")

        result = Guess(word=word, states=tuple(evaluate_guess(word, self.target)))
        self.guesses.append(result)

        if word == self.target:
            self.status = GameStatus.WON
            self._feedback.success()
        elif len(self.guesses) >= self.max_guesses:
            self.status = GameStatus.LOST
            self._feedback.error()
        else:
            self._feedback.light_impact()
        LOGGER.debug("Tentativo %d: %s -> %s", len(self.guesses), word, self.status.value)
        return result
