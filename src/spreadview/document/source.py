"""Boundary types between the document core and page-rendering backends."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Protocol, Tuple

import fitz  # PyMuPDF

PageSize = Tuple[float, float]


class DocumentOpenError(RuntimeError):
    """Raised when a page source cannot open the requested file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class Canvas(Protocol):
    """Drawing surface a host hands to ``Document.render_spread``."""

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
        """Draw ``page`` with its top-left corner at device ``(x, y)``."""
        ...


class PageSource(Protocol):
    """Random-access, ordered sequence of pages with queryable sizes."""

    @property
    def page_count(self) -> int:
        ...

    def page_size(self, index: int) -> PageSize:
        """Natural ``(width, height)`` of page ``index`` in page units."""
        ...

    def page(self, index: int) -> Any:
        """Opaque handle passed through to ``Canvas.paint_page``."""
        ...

    def close(self) -> None:
        ...


SourceFactory = Callable[[Path], PageSource]


class PdfPageSource:
    """PyMuPDF-backed page source."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        try:
            self._doc: Optional[fitz.Document] = fitz.open(str(self.path))
        except Exception as exc:
            raise DocumentOpenError(
                f"Cannot open document '{self.path}': {exc}", path=self.path
            ) from exc

    @property
    def page_count(self) -> int:
        return self._doc.page_count if self._doc else 0

    def page(self, index: int) -> fitz.Page:
        if self._doc is None:
            raise DocumentOpenError("Document already closed", path=self.path)
        return self._doc.load_page(index)

    def page_size(self, index: int) -> PageSize:
        rect = self.page(index).rect
        return (float(rect.width), float(rect.height))

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None


def open_pdf(path: Path) -> PageSource:
    return PdfPageSource(path)


__all__ = [
    "Canvas",
    "DocumentOpenError",
    "PageSize",
    "PageSource",
    "PdfPageSource",
    "SourceFactory",
    "open_pdf",
]
