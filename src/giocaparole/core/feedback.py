from __future__ import annotations
from enum import Enum
from typing import List, Protocol


class Feedback(str, Enum):
    """Segnali di feedback (aptico/notifica) emessi dai giochi."""

    LIGHT_IMPACT = "light_impact"
    SUCCESS = "success"
    ERROR = "error"


class FeedbackSink(Protocol):
    """Capacità iniettata: tre segnali discreti, nessun valore di ritorno."""

    def light_impact(self) -> None: ...

    def success(self) -> None: ...

    def error(self) -> None: ...


class NullFeedback:
    """Ignora ogni segnale (default quando l'host non fornisce un sink)."""

    def light_impact(self) -> None:
        pass

    def success(self) -> None:
        pass

    def error(self) -> None:
        pass


class RecordingFeedback:
    """Registra i segnali in ordine; utile per test e per il replay."""

    def __init__(self) -> None:
        self.events: List[Feedback] = []

    def light_impact(self) -> None:
        self.events.append(Feedback.LIGHT_IMPACT)

    def success(self) -> None:
        self.events.append(Feedback.SUCCESS)

    def error(self) -> None:
        self.events.append(Feedback.ERROR)

    def count(self, kind: Feedback) -> int:
        return sum(1 for e in self.events if e == kind)

    def clear(self) -> None:
        self.events.clear()
