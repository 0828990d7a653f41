"""Viewer session: the current document and everything around its lifecycle."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from spreadview.document import Document, DocumentOpenError, SourceFactory, open_pdf
from spreadview.modes.base_mode import ModeBus
from spreadview.navigation import DirectoryChain
from spreadview.runtime import telemetry
from spreadview.runtime.customization import OpenHook, load_customization
from spreadview.runtime.settings import (
    DEFAULT_AUTOSAVE_EVERY,
    DEFAULT_SPLIT_COUNT,
    Settings,
)
from spreadview.storage import PersistentStore

LOGGER_NAME = "spreadview.session"


class ViewerSession:
    """Owns exactly one open ``Document`` plus its store, chain and hooks.

    Bus events: ``document.open`` (payload: the new document) after every
    successful open, ``session.quit`` once the session has closed.
    """

    def __init__(
        self,
        *,
        store: PersistentStore,
        chain: Optional[DirectoryChain] = None,
        source_factory: SourceFactory = open_pdf,
        bus: Optional[ModeBus] = None,
        hooks: Iterable[OpenHook] = (),
        autosave_every: int = DEFAULT_AUTOSAVE_EVERY,
        default_split: int = DEFAULT_SPLIT_COUNT,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.chain = chain or DirectoryChain()
        self.bus = bus or ModeBus()
        self.autosave_every = max(1, autosave_every)
        self.default_split = default_split
        self._source_factory = source_factory
        self._hooks: List[OpenHook] = list(hooks)
        self._clock = clock
        self._document: Optional[Document] = None
        self._commands_since_save = 0
        self._running = True

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        source_factory: SourceFactory = open_pdf,
        bus: Optional[ModeBus] = None,
    ) -> "ViewerSession":
        return cls(
            store=PersistentStore(settings.store_path),
            chain=DirectoryChain(settings.extensions),
            source_factory=source_factory,
            bus=bus,
            hooks=load_customization(settings.init_path),
            autosave_every=settings.autosave_every,
            default_split=settings.default_split,
        )

    @property
    def document(self) -> Optional[Document]:
        return self._document

    @property
    def running(self) -> bool:
        return self._running

    def add_open_hook(self, hook: OpenHook) -> None:
        self._hooks.append(hook)

    # -- opening and switching -----------------------------------------

    def open(
        self,
        path: Path | str,
        *,
        page_number: Optional[int] = None,
        at_end: bool = False,
    ) -> Document:
        """Open ``path`` as the current document, closing any previous one.

        The new document is constructed before the old one is closed, so a
        ``DocumentOpenError`` leaves the session untouched.
        """

        path = Path(path).expanduser()
        with telemetry.span(
            "session::open",
            logger_name=LOGGER_NAME,
            component="session",
            metadata={"document": str(path)},
        ):
            source = self._source_factory(path)
            document = Document(
                path, source, split_count=self.default_split, clock=self._clock
            )
            previous = self._document
            if previous is not None:
                self._close_quietly(previous)
            document.open(self.store)
            if at_end:
                document.page_number = -document.split_count + 1
            elif page_number is not None:
                document.page_number = page_number
            self._document = document
            self._commands_since_save = 0
            self._run_hooks(document)
        self.bus.emit("document.open", document)
        return document

    def switch_to(
        self,
        path: Path | str,
        page_number: Optional[int] = None,
        *,
        at_end: bool = False,
    ) -> bool:
        try:
            self.open(path, page_number=page_number, at_end=at_end)
        except DocumentOpenError as exc:
            telemetry.record_event(
                "session.switch_failed",
                level="warning",
                data={"document": str(path), "error": str(exc)},
                logger_name=LOGGER_NAME,
            )
            return False
        return True

    def advance_document(self) -> bool:
        """Save, then open the next sibling at its first page."""

        return self._chain_step(forward=True)

    def retreat_document(self) -> bool:
        """Save, then open the previous sibling at its last spread."""

        return self._chain_step(forward=False)

    def _chain_step(self, *, forward: bool) -> bool:
        document = self._require_document()
        self._save_quietly()
        lookup = self.chain.next if forward else self.chain.previous
        target = lookup(document.path)
        if target is None or target == document.path.expanduser().resolve():
            return False
        telemetry.record_event(
            "session.chain",
            data={
                "from": str(document.path),
                "to": str(target),
                "direction": "next" if forward else "previous",
            },
            logger_name=LOGGER_NAME,
        )
        if forward:
            return self.switch_to(target, 1)
        return self.switch_to(target, at_end=True)

    def _run_hooks(self, document: Document) -> None:
        for hook in self._hooks:
            try:
                hook(document)
            except Exception as exc:
                telemetry.record_event(
                    "session.hook_failed",
                    level="warning",
                    data={
                        "hook": getattr(hook, "__name__", repr(hook)),
                        "error": repr(exc),
                    },
                    logger_name=LOGGER_NAME,
                )

    # -- persistence ---------------------------------------------------

    def save(self) -> None:
        """Persist the current document; ``OSError`` propagates."""

        self._require_document().save(self.store)

    def reload(self) -> bool:
        return self._require_document().load(self.store)

    def note_command(self) -> None:
        """Count one executed command and autosave on the fixed cadence."""

        if self._document is None or not self._running:
            return
        self._commands_since_save += 1
        if self._commands_since_save >= self.autosave_every:
            self._commands_since_save = 0
            telemetry.record_event(
                "session.autosave",
                level="debug",
                data={"document": str(self._document.path)},
                logger_name=LOGGER_NAME,
            )
            self._save_quietly()

    def _save_quietly(self) -> None:
        try:
            self.save()
        except OSError as exc:
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"store": str(self.store.path), "error": str(exc)},
                logger_name=LOGGER_NAME,
            )

    def _close_quietly(self, document: Document) -> None:
        try:
            document.close(self.store)
        except OSError as exc:
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"store": str(self.store.path), "error": str(exc)},
                logger_name=LOGGER_NAME,
            )

    # -- shutdown ------------------------------------------------------

    def close(self) -> None:
        """Close the current document; safe to call more than once."""

        if self._document is not None and not self._document.closed:
            self._close_quietly(self._document)

    def quit(self) -> None:
        if not self._running:
            return
        self.close()
        self._running = False
        telemetry.record_event("session.quit", logger_name=LOGGER_NAME)
        self.bus.emit("session.quit", self._document)

    def _require_document(self) -> Document:
        if self._document is None:
            raise RuntimeError("No document is open")
        return self._document


__all__ = ["ViewerSession"]
