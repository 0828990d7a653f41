from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import pytest

from spreadview.document import DocumentOpenError
from spreadview.navigation import DirectoryChain
from spreadview.session import ViewerSession
from spreadview.storage import PersistentStore


class FakePage:
    def __init__(self, index: int) -> None:
        self.index = index

    def get_text(self, kind: str = "text") -> str:
        del kind
        return f"page {self.index + 1}"


class FakePageSource:
    """In-memory page source with optional per-page sizes and failures."""

    def __init__(
        self,
        page_count: int = 10,
        *,
        size: Tuple[float, float] = (100.0, 150.0),
        sizes: Optional[Dict[int, Tuple[float, float]]] = None,
        failing: Iterable[int] = (),
    ) -> None:
        self._page_count = page_count
        self.size = size
        self.sizes = dict(sizes or {})
        self.failing = set(failing)
        self.close_calls = 0

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def page_size(self, index: int) -> Tuple[float, float]:
        if not 0 <= index < self._page_count:
            raise IndexError(index)
        return self.sizes.get(index, self.size)

    def page(self, index: int) -> FakePage:
        if index in self.failing:
            raise RuntimeError(f"cannot render page {index}")
        return FakePage(index)

    def close(self) -> None:
        self.close_calls += 1


class FakeCanvas:
    def __init__(self) -> None:
        self.painted: List[Dict[str, Any]] = []

    def paint_page(self, page: Any, *, x, y, scale, width, height) -> None:
        self.painted.append(
            {
                "page": page.index,
                "x": x,
                "y": y,
                "scale": scale,
                "width": width,
                "height": height,
            }
        )


class StepClock:
    """Clock advancing a fixed step per call."""

    def __init__(self, start: datetime | None = None, step: float = 60.0) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)
        self.step = timedelta(seconds=step)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def store(tmp_path: Path) -> PersistentStore:
    return PersistentStore(tmp_path / "state" / "saves.yaml")


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """Directory holding three empty documents plus a non-matching file."""

    directory = tmp_path / "library"
    directory.mkdir()
    for name in ("a.pdf", "b.pdf", "c.pdf", "notes.txt"):
        (directory / name).write_bytes(b"")
    return directory


@pytest.fixture
def page_counts() -> Dict[str, int]:
    return {"a.pdf": 10, "b.pdf": 6, "c.pdf": 7}


@pytest.fixture
def sources() -> Dict[str, List[FakePageSource]]:
    return {}


@pytest.fixture
def source_factory(
    page_counts: Dict[str, int], sources: Dict[str, List[FakePageSource]]
) -> Callable[[Path], FakePageSource]:
    def factory(path: Path) -> FakePageSource:
        if not Path(path).exists() or path.name not in page_counts:
            raise DocumentOpenError(f"Cannot open document '{path}'", path=path)
        source = FakePageSource(page_counts[path.name])
        sources.setdefault(path.name, []).append(source)
        return source

    return factory


@pytest.fixture
def session(
    store: PersistentStore, source_factory: Callable[[Path], FakePageSource]
) -> ViewerSession:
    return ViewerSession(
        store=store,
        chain=DirectoryChain(),
        source_factory=source_factory,
        clock=StepClock(),
    )
