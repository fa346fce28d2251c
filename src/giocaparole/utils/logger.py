"""
Log dei giochi.

La griglia e i messaggi per il giocatore vanno su stdout con `print`; il log
va su stderr, così una partita nel terminale resta leggibile anche con
`--verbose`. Ogni modulo dichiara `LOGGER = get_logger(__name__)`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_NAME = "giocaparole"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# marca l'handler installato qui, per sostituirlo senza toccare quelli altrui
_HANDLER_FLAG = "_giocaparole_handler"


def configure_logging(verbose: bool = False) -> None:
    """
    Chiamata una volta dalla CLI. Senza `verbose` passano solo gli avvisi
    (es. parole scartate dalla griglia); con `verbose` anche il DEBUG del
    motore di selezione. Pillow resta a INFO in ogni caso.
    """
    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _HANDLER_FLAG, False)]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
    setattr(handler, _HANDLER_FLAG, True)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_NAME)
