"""One-shot modes that read a mark label from the next key."""

from __future__ import annotations

from spreadview.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeResult


class LabelMode(Mode):
    """Consumes exactly one raw key as a label, then returns to normal.

    Digits are labels here, not counts. A key without a printable character
    (arrows, escape, modified keys) cancels the pending command.
    """

    name = "label"

    def handle_key(self, key: KeyInput) -> ModeResult:
        label = key.label
        if label is None:
            return ModeResult(
                consumed=True,
                switch_to="normal",
                status="label_cancel",
                message=f"{self.name}_cancel",
            )
        telemetry.record_event(
            f"{self.name}.label",
            level="debug",
            data={"label": label},
            logger_name="spreadview.modes",
        )
        return self.apply_label(label)

    def apply_label(self, label: str) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError


class MarkMode(LabelMode):
    name = "mark"

    def apply_label(self, label: str) -> ModeResult:
        document = self.context.session.document
        document.mark(label)
        return ModeResult(
            consumed=True,
            switch_to="normal",
            status="mark",
            message=f"mark {label} -> {document.page_number}",
            executed=True,
            repaint=True,
        )


class JumpMode(LabelMode):
    name = "jump"

    def apply_label(self, label: str) -> ModeResult:
        jumped = self.context.session.document.jump(label)
        return ModeResult(
            consumed=True,
            switch_to="normal",
            status="jump" if jumped else "jump_unset",
            message=f"jump {label}" if jumped else f"no mark {label}",
            executed=True,
            repaint=jumped,
        )


__all__ = ["LabelMode", "MarkMode", "JumpMode"]
