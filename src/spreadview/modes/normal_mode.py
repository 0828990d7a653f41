"""Normal mode: count prefixes and keymap-dispatched viewer commands."""

from __future__ import annotations

from typing import List

from spreadview.keymaps import ResolutionMatch
from spreadview.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, keymap_flag_context, require_keymap_resolver


class NormalMode(Mode):
    """Folds digits into ``context.count`` and runs bound commands.

    A resolved command sees the count on the context and clears it once it
    has run. Unbound keys leave both the count and the document untouched.
    """

    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        digit = key.digit
        if digit is not None and not self._pending:
            count = self.context.count
            self.context.count = digit if count is None else count * 10 + digit
            return ModeResult(
                consumed=True, status="count", message=str(self.context.count)
            )

        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=keymap_flag_context(self.context)
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )

        self._pending.clear()
        return ModeResult(consumed=False, status="miss", message="unbound")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            logger_name="spreadview.modes",
            component="keymaps",
            metadata={
                "binding_id": match.binding.id,
                "action": match.action.id,
                "count": self.context.count,
            },
        ):
            try:
                outcome = match.action(self.context, match)
            finally:
                self.context.count = None

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True, executed=True, repaint=True)


__all__ = ["NormalMode"]
