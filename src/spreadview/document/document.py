"""Document view state: navigation, spread layout, marks and read-time log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Tuple

from spreadview.runtime import telemetry
from spreadview.runtime.settings import (
    DEFAULT_SPLIT_COUNT,
    MAX_SPLIT_COUNT,
    MIN_SPLIT_COUNT,
)
from spreadview.storage import StoredRecord

from .page_map import PageMap
from .source import Canvas, PageSize, PageSource

if TYPE_CHECKING:  # pragma: no cover
    from spreadview.storage import PersistentStore

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class PageStamp:
    at: datetime
    page_number: int


@dataclass(slots=True)
class ReadTimeEntry:
    """One open/close cycle of a document."""

    opened: PageStamp
    closed: Optional[PageStamp] = None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.closed is None:
            return None
        return self.closed.at - self.opened.at


@dataclass(frozen=True, slots=True)
class SpreadLayout:
    """Transform that fits one spread into a drawing area.

    Like a cairo context, ``scale`` is applied first and the translation is
    expressed in page units. ``page_render_order[slot]`` is the virtual page
    drawn in slot ``slot``, counted from the left edge.
    """

    scale: float
    translate_x: float
    translate_y: float
    page_width: float
    page_height: float
    page_render_order: Tuple[int, ...]

    def slot_origin(self, slot: int) -> Tuple[float, float]:
        x = self.scale * (self.translate_x + slot * self.page_width)
        y = self.scale * self.translate_y
        return (x, y)


class Document:
    """Owns a page source, its page map and all per-document view state."""

    def __init__(
        self,
        path: Path,
        source: PageSource,
        *,
        split_count: int = DEFAULT_SPLIT_COUNT,
        clock: Clock = datetime.now,
    ) -> None:
        self.path = Path(path)
        self._source: Optional[PageSource] = source
        self.page_map = PageMap(source.page_count)
        self._page_index = 0
        self._split_count = DEFAULT_SPLIT_COUNT
        self.set_split_count(split_count)
        self.inverted = False
        self.page_number_delta: Optional[int] = None
        self._marks: Dict[str, int] = {}
        self.read_time_log: List[ReadTimeEntry] = []
        self._clock = clock
        self._closed = False

    # -- indices -------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return self.page_map.total_pages

    @property
    def page_index(self) -> int:
        return self._page_index

    @page_index.setter
    def page_index(self, value: int) -> None:
        if value < 0:
            value = self.total_pages + value
        self._move_to(value)

    def _move_to(self, index: int) -> bool:
        if 0 <= index < self.total_pages:
            self._page_index = index
            return True
        return False

    @property
    def page_number(self) -> int:
        return self._page_index + 1

    @page_number.setter
    def page_number(self, value: int) -> None:
        self.page_index = value - 1

    @property
    def real_page_number(self) -> int:
        return self.page_number + (self.page_number_delta or 0)

    @real_page_number.setter
    def real_page_number(self, value: int) -> None:
        self.page_number = value - (self.page_number_delta or 0)

    def set_page_number_delta(self, real_page_number: int) -> None:
        """Make the current page read as ``real_page_number``."""

        self.page_number_delta = real_page_number - self.page_number

    def clear_page_number_delta(self) -> None:
        self.page_number_delta = None

    def forward_pages(self, n: int = 2) -> bool:
        return self._move_to(self._page_index + n)

    def back_pages(self, n: int = 2) -> bool:
        return self._move_to(self._page_index - n)

    # -- view options --------------------------------------------------

    @property
    def split_count(self) -> int:
        return self._split_count

    def set_split_count(self, count: int) -> bool:
        if MIN_SPLIT_COUNT <= count <= MAX_SPLIT_COUNT:
            self._split_count = count
            return True
        return False

    def toggle_split(self) -> None:
        self._split_count = 1 if self._split_count > 1 else 2

    def invert(self) -> None:
        self.inverted = not self.inverted

    # -- blank pages ---------------------------------------------------

    def insert_blank_left(self) -> bool:
        # Spreads read right-to-left unless inverted, so index + 1 sits left.
        return self.page_map.insert_blank_at(self._page_index + 1)

    def insert_blank_right(self) -> bool:
        return self.page_map.insert_blank_at(self._page_index)

    def toggle_first_blank(self) -> None:
        self.page_map.toggle_first_blank()
        if self._page_index >= self.total_pages:
            self._page_index = max(0, self.total_pages - 1)

    # -- marks ---------------------------------------------------------

    @property
    def marks(self) -> Mapping[str, int]:
        return dict(self._marks)

    def mark(self, label: str) -> None:
        if len(label) != 1:
            raise ValueError(f"Mark label must be a single character, got {label!r}")
        self._marks[label] = self._page_index

    def jump(self, label: str) -> bool:
        if label not in self._marks:
            return False
        target = self._marks[label]
        self.page_index = target
        return self._page_index == target

    # -- layout + rendering --------------------------------------------

    def page_size(self, virtual_index: int) -> Optional[PageSize]:
        actual = self.page_map.actual_page(virtual_index)
        if actual is None or self._source is None:
            return None
        try:
            return self._source.page_size(actual)
        except Exception as exc:
            telemetry.record_event(
                "document.page_size_failed",
                level="warning",
                data={"page": actual, "error": str(exc)},
                logger_name="spreadview.document",
            )
            return None

    def spread_layout(
        self, context_width: float, context_height: float
    ) -> Optional[SpreadLayout]:
        splits = self._split_count
        size: Optional[PageSize] = None
        for index in range(self._page_index + splits - 1, self._page_index - 1, -1):
            size = self.page_size(index)
            if size is not None:
                break
        if size is None:
            return None

        page_width, page_height = float(size[0]), float(size[1])
        width, height = float(context_width), float(context_height)
        if page_width <= 0 or page_height <= 0 or width <= 0 or height <= 0:
            return None

        if width / height >= page_width * splits / page_height:
            scale = height / page_height
            translate_x = (width - scale * splits * page_width) / 2 / scale
            translate_y = 0.0
        else:
            scale = width / page_width / splits
            translate_x = 0.0
            translate_y = (height - scale * page_height) / 2 / scale

        order = tuple(
            self._page_index + (slot if self.inverted else splits - slot - 1)
            for slot in range(splits)
        )
        return SpreadLayout(
            scale=scale,
            translate_x=translate_x,
            translate_y=translate_y,
            page_width=page_width,
            page_height=page_height,
            page_render_order=order,
        )

    def render_spread(
        self, canvas: Canvas, context_width: float, context_height: float
    ) -> Optional[SpreadLayout]:
        """Paint the current spread; a page that fails to render is skipped."""

        layout = self.spread_layout(context_width, context_height)
        if layout is None or self._source is None:
            return layout
        for slot, virtual_index in enumerate(layout.page_render_order):
            actual = self.page_map.actual_page(virtual_index)
            if actual is None:
                continue
            x, y = layout.slot_origin(slot)
            try:
                canvas.paint_page(
                    self._source.page(actual),
                    x=x,
                    y=y,
                    scale=layout.scale,
                    width=layout.page_width * layout.scale,
                    height=layout.page_height * layout.scale,
                )
            except Exception as exc:
                telemetry.record_event(
                    "document.render_failed",
                    level="warning",
                    data={"page": actual, "error": str(exc)},
                    logger_name="spreadview.document",
                )
        return layout

    # -- persistence ---------------------------------------------------

    def snapshot(self) -> StoredRecord:
        return StoredRecord(
            inverted=self.inverted,
            split_count=self._split_count,
            page_index=self._page_index,
            page_number_delta=self.page_number_delta,
            marks=dict(self._marks),
            blank_pages=frozenset(self.page_map.blank_indices()),
        )

    def apply_record(self, record: StoredRecord) -> None:
        """Overwrite every field the record carries; others keep their value."""

        if record.has("blank_pages"):
            self.page_map.replay_blanks(record.blank_pages)
            if self._page_index >= self.total_pages:
                self._page_index = max(0, self.total_pages - 1)
        if record.has("split_count"):
            self.set_split_count(record.split_count)
        if record.has("inverted"):
            self.inverted = record.inverted
        if record.has("page_number_delta"):
            self.page_number_delta = record.page_number_delta
        if record.has("marks"):
            self._marks = dict(record.marks)
        if record.has("page_index"):
            self.page_index = record.page_index

    def load(self, store: "PersistentStore") -> bool:
        record = store.load(self.path)
        if record is None:
            return False
        self.apply_record(record)
        return True

    def save(self, store: "PersistentStore") -> None:
        store.save(self.path, self.snapshot())

    # -- lifecycle -----------------------------------------------------

    def _stamp(self) -> PageStamp:
        return PageStamp(at=self._clock(), page_number=self.page_number)

    def open(self, store: "PersistentStore") -> None:
        self.load(store)
        self.read_time_log.append(ReadTimeEntry(opened=self._stamp()))
        telemetry.record_event(
            "document.open",
            data={"document": str(self.path), "page": self.page_number},
            logger_name="spreadview.document",
        )

    def close(self, store: "PersistentStore") -> None:
        if self._closed:
            return
        self._closed = True
        if self.read_time_log and self.read_time_log[-1].closed is None:
            entry = self.read_time_log[-1]
            entry.closed = self._stamp()
            telemetry.record_event(
                "document.read_time",
                data={
                    "document": str(self.path),
                    "opened_page": entry.opened.page_number,
                    "closed_page": entry.closed.page_number,
                    "seconds": round(entry.duration.total_seconds(), 1)
                    if entry.duration is not None
                    else 0,
                },
                logger_name="spreadview.document",
            )
        try:
            self.save(store)
        finally:
            if self._source is not None:
                self._source.close()
                self._source = None

    @property
    def closed(self) -> bool:
        return self._closed

    def title(self) -> str:
        parts = [f"{self.path.name} [{self.page_number}/{self.total_pages}]"]
        if self.page_number_delta is not None:
            parts.append(f"p.{self.real_page_number}")
        if self.inverted:
            parts.append("(inverted)")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"Document(path={str(self.path)!r}, page_index={self._page_index}, "
            f"split_count={self._split_count}, total_pages={self.total_pages})"
        )


__all__ = ["Document", "PageStamp", "ReadTimeEntry", "SpreadLayout"]
