from __future__ import annotations

import time
from typing import Callable, List, Optional

from giocaparole.app import GiocaParoleApp, TerminalFeedback
from giocaparole.core.exceptions import GiocaParoleError, InvalidGuessError
from giocaparole.core.selection import CellCoord, MatchResult
from giocaparole.core.wordle import GameStatus
from giocaparole.rendering.terminal import render_grid, render_guesses, render_word_list


# ----------------- helpers -----------------
def _ask(prompt: str, default: Optional[str] = None) -> str:
    if default is None:
        v = input(f"{prompt}: ").strip()
    else:
        v = input(f"{prompt} [{default}]: ").strip()
        if v == "":
            return default
    return v

def _ask_yes_no(prompt: str, default_yes: bool = True) -> bool:
    hint = "Invio=Sì | s/n" if default_yes else "Invio=No | s/n"
    while True:
        v = input(f"{prompt} [{hint}]: ").strip().lower()
        if v == "": return default_yes
        if v in ("s", "si", "sì", "y", "yes"): return True
        if v in ("n", "no"): return False
        print("Risposta non valida. Scrivi s/n o premi Invio.")

def _sleep_scheduler(delay: float, callback: Callable[[], None]) -> None:
    # nel terminale il completamento arriva in modo sincrono, dopo la pausa
    time.sleep(delay)
    callback()


def parse_drag(raw: str) -> Optional[List[CellCoord]]:
    """'0,0 0,4' -> [(0,0), (0,4)]; None se il testo non è valido."""
    cells: List[CellCoord] = []
    for token in raw.replace(";", " ").split():
        parts = token.split(",")
        if len(parts) != 2:
            return None
        try:
            cells.append((int(parts[0]), int(parts[1])))
        except ValueError:
            return None
    return cells or None


# ----------------- partite -----------------
def gioca_caccia_parole(app: GiocaParoleApp, category_id: str) -> None:
    done = {"complete": False}

    def on_complete() -> None:
        done["complete"] = True
        print("\n🎉 Complimenti! Hai trovato tutte le parole!")

    session = app.nuova_caccia_parole(
        category_id,
        on_complete=on_complete,
        feedback=TerminalFeedback(),
        scheduler=_sleep_scheduler,
    )
    cat = session.category
    print(f"\n{cat.emoji} {cat.name} — {cat.description}")
    print("Trascina sulle lettere: riga,colonna di partenza e di arrivo (es: 0,0 0,4).")
    print("Comandi: n = nuova griglia | q = categorie")

    while True:
        engine = session.engine
        print()
        print(render_grid(session.grid, engine.found_words))
        print(render_word_list(engine.words, engine.found_set))

        if done["complete"]:
            if _ask_yes_no("Gioca ancora?", True):
                done["complete"] = False
                session.play_again()
                continue
            return

        raw = input("> ").strip().lower()
        if raw in ("q", "esci"):
            return
        if raw == "n":
            session.play_again()
            continue
        cells = parse_drag(raw)
        if cells is None:
            print("Formato non valido. Esempio: 2,2 2,5")
            continue
        if session.drag(cells) == MatchResult.IGNORED:
            print("Cella fuori dalla griglia.")


def gioca_parole(app: GiocaParoleApp, *, random_word: bool = False) -> None:
    game = app.nuova_parole(random_word=random_word)
    print(f"\n🎯 Indovina la parola italiana di {game.word_length} lettere in {game.max_guesses} tentativi")
    print("🟩 posizione giusta  🟧 lettera presente  ⬛ assente")

    while True:
        print()
        print(render_guesses(game.guesses, game.word_length, game.max_guesses))

        if game.status != GameStatus.PLAYING:
            if game.status == GameStatus.WON:
                n = len(game.guesses)
                print(f"\n🎉 Bravissimo! Hai indovinato in {n} {'tentativo' if n == 1 else 'tentativi'}!")
            else:
                print(f"\n😔 Peccato! La parola era: {game.target}")
            if _ask_yes_no("Nuova partita?", True):
                game = app.nuova_parole(random_word=True)
                continue
            return

        raw = _ask("Scrivi qui (q = esci)")
        if raw.lower() == "q":
            return
        try:
            game.submit(raw)
        except InvalidGuessError as e:
            print(f"❌ {e}")


# ----------------- Menu -----------------
class Menu:
    def __init__(self, app: Optional[GiocaParoleApp] = None) -> None:
        self.app = app or GiocaParoleApp()

    def run(self) -> None:
        while True:
            print("\n╔═════════════════════════════════════╗")
            print("║   Impara l'italiano giocando!       ║")
            print("╠═════════════════════════════════════╣")
            print("║ 1) 🔍 Caccia Parole                 ║")
            print("║ 2) 🎯 Parole                        ║")
            print("║ 3) Esporta griglia in PNG           ║")
            print("║ 4) Esci                             ║")
            print("╚═════════════════════════════════════╝")
            op = input("Scegli un'opzione: ").strip()
            try:
                if op == "1":
                    cid = self._pick_category()
                    if cid:
                        gioca_caccia_parole(self.app, cid)
                elif op == "2":
                    gioca_parole(self.app)
                elif op == "3":
                    self._export()
                elif op == "4":
                    print("\nA presto!")
                    return
                else:
                    print("Opzione non valida.")
            except GiocaParoleError as e:
                print(f"❌ ERRORE: {e}")

    def _pick_category(self) -> Optional[str]:
        cats = self.app.catalog.categories
        print("\nScegli una categoria per iniziare")
        for i, c in enumerate(cats, 1):
            print(f"   {i}) {c.emoji} {c.name:<12} — {len(c.words)} parole • {c.grid_size}×{c.grid_size} griglia")
        raw = input("Numero (Invio = indietro): ").strip()
        if not raw:
            return None
        try:
            idx = int(raw) - 1
        except ValueError:
            print("Selezione non valida.")
            return None
        if 0 <= idx < len(cats):
            return cats[idx].id
        print("Selezione non valida.")
        return None

    def _export(self) -> None:
        cid = self._pick_category()
        if not cid:
            return
        answers = _ask_yes_no("Salvare anche le soluzioni?", True)
        ex, an = self.app.esporta_immagine(cid, answers=answers)
        print(f"📦 Uscita: {self.app.output_dir}")
        print(f"   - {ex.name}")
        if an is not None:
            print(f"   - {an.name}")


def run() -> None:
    Menu().run()
