from typing import Optional

import typer
from typing_extensions import Annotated

from giocaparole.app import GiocaParoleApp
from giocaparole.core.exceptions import GiocaParoleError
from giocaparole.ui.menu import Menu, gioca_caccia_parole, gioca_parole
from giocaparole.utils.logger import configure_logging

app = typer.Typer(add_completion=False, help="Impara l'italiano giocando: Caccia Parole e Parole.")


def _build_app(ctx: typer.Context) -> GiocaParoleApp:
    try:
        return GiocaParoleApp(seed=ctx.obj.get("seed"))
    except GiocaParoleError as e:
        print(f"❌ ERRORE: {e}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    seed: Annotated[Optional[int], typer.Option(
        "--seed",
        help="Seme per una generazione deterministica."
    )] = None,
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="Mostra i log di debug."
    )] = False,
):
    configure_logging(verbose)
    ctx.obj = {"seed": seed}


@app.command()
def categorie(ctx: typer.Context):
    """Elenca le categorie disponibili per la Caccia Parole."""
    gp = _build_app(ctx)
    try:
        cats = gp.catalog.categories
    except GiocaParoleError as e:
        print(f"❌ ERRORE: {e}")
        raise typer.Exit(code=1)
    for c in cats:
        print(f"{c.emoji} {c.id:<10} {c.name:<12} {len(c.words)} parole • {c.grid_size}×{c.grid_size} griglia")


@app.command()
def caccia(
    ctx: typer.Context,
    category_id: Annotated[str, typer.Argument(help="Id della categoria (vedi 'categorie').")],
):
    """Gioca alla Caccia Parole nel terminale."""
    gp = _build_app(ctx)
    try:
        gioca_caccia_parole(gp, category_id)
    except GiocaParoleError as e:
        print(f"❌ ERRORE: {e}")
        raise typer.Exit(code=1)


@app.command()
def immagine(
    ctx: typer.Context,
    category_id: Annotated[str, typer.Argument(help="Id della categoria.")],
    output_basename: Annotated[Optional[str], typer.Option(
        "--basename", "-b",
        help="Nome base dei file di uscita (default: id della categoria)."
    )] = None,
    soluzioni: Annotated[bool, typer.Option(
        "--soluzioni/--senza-soluzioni",
        help="Salva anche l'immagine con le soluzioni."
    )] = True,
):
    """Genera una griglia e la salva in PNG nella cartella 'output'."""
    gp = _build_app(ctx)
    try:
        ex, an = gp.esporta_immagine(category_id, output_basename=output_basename, answers=soluzioni)
    except GiocaParoleError as e:
        print(f"❌ ERRORE: {e}")
        raise typer.Exit(code=1)
    print(f"🖼️  Immagine '{ex.name}' generata.")
    if an is not None:
        print(f"🖼️  Immagine '{an.name}' generata.")


@app.command()
def parole(
    ctx: typer.Context,
    casuale: Annotated[bool, typer.Option(
        "--casuale",
        help="Parola casuale invece della parola del giorno."
    )] = False,
):
    """Gioca a Parole: indovina la parola di 5 lettere in 6 tentativi."""
    gp = _build_app(ctx)
    try:
        gioca_parole(gp, random_word=casuale)
    except GiocaParoleError as e:
        print(f"❌ ERRORE: {e}")
        raise typer.Exit(code=1)


@app.command()
def menu(ctx: typer.Context):
    """Menu interattivo con entrambi i giochi."""
    Menu(_build_app(ctx)).run()


def run():
    app()

if __name__ == "__main__":
    run()
