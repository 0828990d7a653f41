"""Sibling-document lookup used to chain reading across a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from spreadview.runtime import telemetry
from spreadview.runtime.settings import DEFAULT_EXTENSIONS


class DirectoryChain:
    """Stateless next/previous lookup over same-directory documents.

    Siblings are the files next to ``path`` whose suffix matches one of
    ``extensions`` case-insensitively, sorted by resolved path. Lookups wrap
    around at both ends.
    """

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)

    def siblings(self, path: Path) -> List[Path]:
        directory = Path(path).expanduser().resolve().parent
        try:
            entries = [
                entry.resolve()
                for entry in directory.iterdir()
                if entry.is_file() and entry.suffix.lower() in self.extensions
            ]
        except OSError as exc:
            telemetry.record_event(
                "chain.list_failed",
                level="warning",
                data={"directory": str(directory), "error": str(exc)},
                logger_name="spreadview.navigation",
            )
            return []
        return sorted(entries, key=str)

    def _neighbour(self, path: Path, step: int) -> Optional[Path]:
        siblings = self.siblings(path)
        try:
            index = siblings.index(Path(path).expanduser().resolve())
        except ValueError:
            return None
        return siblings[(index + step) % len(siblings)]

    def next(self, path: Path) -> Optional[Path]:
        return self._neighbour(path, 1)

    def previous(self, path: Path) -> Optional[Path]:
        return self._neighbour(path, -1)


__all__ = ["DirectoryChain"]
