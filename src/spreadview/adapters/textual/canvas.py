"""Character-grid canvas that lets the spread layout run inside a terminal."""

from __future__ import annotations

import textwrap
from typing import Any, List

# A terminal cell is about twice as tall as it is wide; layout units are
# cell widths, so one row spans this many units.
CELL_ASPECT = 2.0


def page_text(page: Any) -> str:
    """Plain text of a page handle; PyMuPDF pages expose ``get_text``."""

    get_text = getattr(page, "get_text", None)
    if callable(get_text):
        return str(get_text("text"))
    return str(page)


class TextCanvas:
    """Fixed-size grid of characters implementing ``paint_page``.

    Each painted page becomes a framed box filled with the page's extracted
    text. Anything outside the grid is clipped.
    """

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = max(0, columns)
        self.rows = max(0, rows)
        self._grid: List[List[str]] = [
            [" "] * self.columns for _ in range(self.rows)
        ]
        self.painted = 0

    @property
    def layout_size(self) -> tuple[float, float]:
        """Drawing area in layout units, for ``Document.render_spread``."""

        return (float(self.columns), self.rows * CELL_ASPECT)

    def _put(self, column: int, row: int, char: str) -> None:
        if 0 <= row < self.rows and 0 <= column < self.columns:
            self._grid[row][column] = char

    def paint_page(
        self,
        page: Any,
        *,
        x: float,
        y: float,
        scale: float,
        width: float,
        height: float,
    ) -> None:
        del scale
        left = int(round(x))
        top = int(round(y / CELL_ASPECT))
        columns = max(1, int(round(width)))
        rows = max(1, int(round(height / CELL_ASPECT)))
        right = left + columns - 1
        bottom = top + rows - 1

        if columns >= 2 and rows >= 2:
            for column in range(left + 1, right):
                self._put(column, top, "─")
                self._put(column, bottom, "─")
            for row in range(top + 1, bottom):
                self._put(left, row, "│")
                self._put(right, row, "│")
            self._put(left, top, "┌")
            self._put(right, top, "┐")
            self._put(left, bottom, "└")
            self._put(right, bottom, "┘")
            inner_left, inner_top = left + 1, top + 1
            inner_columns, inner_rows = columns - 2, rows - 2
        else:
            inner_left, inner_top = left, top
            inner_columns, inner_rows = columns, rows

        if inner_columns > 0 and inner_rows > 0:
            lines: List[str] = []
            for paragraph in page_text(page).splitlines():
                lines.extend(textwrap.wrap(paragraph, inner_columns) or [""])
                if len(lines) >= inner_rows:
                    break
            for offset, line in enumerate(lines[:inner_rows]):
                for index, char in enumerate(line[:inner_columns]):
                    self._put(inner_left + index, inner_top + offset, char)
        self.painted += 1

    def render(self) -> str:
        return "\n".join("".join(row).rstrip() for row in self._grid)


__all__ = ["CELL_ASPECT", "TextCanvas", "page_text"]
