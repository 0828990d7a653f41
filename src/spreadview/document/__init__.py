"""Page mapping, spread layout and per-document view state."""

from .document import Document, PageStamp, ReadTimeEntry, SpreadLayout
from .page_map import PageMap
from .source import (
    Canvas,
    DocumentOpenError,
    PageSize,
    PageSource,
    PdfPageSource,
    SourceFactory,
    open_pdf,
)

__all__ = [
    "Canvas",
    "Document",
    "DocumentOpenError",
    "PageMap",
    "PageSize",
    "PageSource",
    "PageStamp",
    "PdfPageSource",
    "ReadTimeEntry",
    "SourceFactory",
    "SpreadLayout",
    "open_pdf",
]
