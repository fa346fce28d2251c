from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
from PIL import Image, ImageDraw, ImageFont

from giocaparole.core.selection import CellCoord, CellGeometry, FoundWord


class WordSearchRenderer:
    """
    Renderizzatore PNG della caccia parole, con la stessa geometria
    (cell_size, gap, padding) usata dal motore per mappare il puntatore:
      - griglia + lettere
      - parole trovate (verde) e selezione in corso (blu)
      - soluzioni opzionali: evidenziate (fill) OPPURE barrate (stroke)
    """

    BACKGROUND = (242, 242, 247)
    CELL = (255, 255, 255)
    TEXT = (0, 0, 0)
    FOUND_FILL = (200, 236, 205)      # verde chiaro
    FOUND_TEXT = (36, 138, 61)
    SELECTED_FILL = (204, 224, 255)   # blu chiaro
    SELECTED_TEXT = (0, 88, 208)
    HIGHLIGHT_FILL = (255, 236, 179)  # soluzioni
    HIGHLIGHT_STROKE = (200, 0, 0)

    def __init__(
        self,
        grid: Sequence[Sequence[str]],
        *,
        geometry: Optional[CellGeometry] = None,
        highlight_style: str = "fill",   # "fill" o "stroke"
        stroke_width: int = 5,
        font_path: Optional[str] = None,
    ) -> None:
        self.grid = [list(row) for row in grid]
        self.n = len(self.grid)
        self.geometry = geometry or CellGeometry()
        self.style = str(highlight_style or "fill").lower()
        self.stroke_width = int(stroke_width)
        self.font = self._load_font(font_path, int(self.geometry.cell_size * 0.5))

    @staticmethod
    def _load_font(font_path: Optional[str], size: int):
        # font monospace; fallback al default di PIL
        for candidate in (font_path, "DejaVuSansMono-Bold.ttf", "DejaVuSansMono.ttf"):
            if not candidate:
                continue
            try:
                return ImageFont.truetype(candidate, size=size)
            except OSError:
                continue
        return ImageFont.load_default()

    # ---------- API ----------

    def render(
        self,
        *,
        found: Iterable[FoundWord] = (),
        selection: Sequence[CellCoord] = (),
        answers: Sequence[Sequence[CellCoord]] = (),
    ) -> Image.Image:
        side = int(round(self.geometry.extent(self.n)))
        img = Image.new("RGB", (side, side), self.BACKGROUND)
        draw = ImageDraw.Draw(img)

        found_cells = {cell for fw in found for cell in fw.cells}
        selected_cells = set(selection)
        answer_cells = {cell for run in answers for cell in run} if self.style == "fill" else set()

        for r in range(self.n):
            for c in range(self.n):
                fill, text = self.CELL, self.TEXT
                if (r, c) in answer_cells:
                    fill = self.HIGHLIGHT_FILL
                if (r, c) in found_cells:
                    fill, text = self.FOUND_FILL, self.FOUND_TEXT
                if (r, c) in selected_cells:
                    fill, text = self.SELECTED_FILL, self.SELECTED_TEXT
                self._draw_cell(draw, r, c, fill, text)

        # le linee vanno sopra le lettere
        if self.style != "fill":
            for run in answers:
                self._draw_stroke(draw, run)
        return img

    def generate_image(self, filename: str, **kwargs) -> None:
        self.render(**kwargs).save(filename, format="PNG")

    # ---------- disegno ----------

    def _draw_cell(self, draw: ImageDraw.ImageDraw, r: int, c: int, fill, text) -> None:
        x0, y0 = self.geometry.cell_origin(r, c)
        size = self.geometry.cell_size
        draw.rounded_rectangle([x0, y0, x0 + size, y0 + size], radius=size * 0.2, fill=fill)
        ch = self.grid[r][c]
        if ch:
            cx, cy = self.geometry.cell_center(r, c)
            # centra compensando l'offset (bx0, by0) del bbox del glifo
            bx0, by0, bx1, by1 = self.font.getbbox(ch)
            x = cx - (bx1 - bx0) / 2 - bx0
            y = cy - (by1 - by0) / 2 - by0
            draw.text((x, y), ch, fill=text, font=self.font)

    def _draw_stroke(self, draw: ImageDraw.ImageDraw, run: Sequence[CellCoord]) -> None:
        if not run:
            return
        start = self.geometry.cell_center(*run[0])
        end = self.geometry.cell_center(*run[-1])
        draw.line([start, end], fill=self.HIGHLIGHT_STROKE, width=self.stroke_width)


def answer_runs(placed_words: dict) -> List[List[Tuple[int, int]]]:
    """Converte {word:{r,c,dr,dc}} nelle celle occupate da ogni parola."""
    runs = []
    for w, pos in (placed_words or {}).items():
        r, c, dr, dc = pos["r"], pos["c"], pos["dr"], pos["dc"]
        runs.append([(r + i * dr, c + i * dc) for i in range(len(w))])
    return runs
