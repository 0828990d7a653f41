"""Per-user customization file support.

The file is plain Python executed once at startup in a namespace that only
exposes a handful of builtins and ``on_document_open``::

    @on_document_open
    def two_up(document):
        document.set_split_count(2)
"""

from __future__ import annotations

import builtins
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from spreadview.runtime import telemetry

OpenHook = Callable[[Any], None]

_SAFE_BUILTINS = (
    "abs",
    "bool",
    "dict",
    "enumerate",
    "float",
    "int",
    "isinstance",
    "len",
    "list",
    "max",
    "min",
    "print",
    "range",
    "set",
    "str",
    "tuple",
    "Exception",
    "ValueError",
)


def _restricted_builtins() -> Dict[str, Any]:
    return {name: getattr(builtins, name) for name in _SAFE_BUILTINS}


def load_customization(path: Optional[Path]) -> List[OpenHook]:
    """Run the customization file at ``path`` and return the hooks it registered.

    A missing file yields no hooks. Syntax or runtime errors inside the file
    are logged and also yield no hooks.
    """

    if path is None or not path.is_file():
        return []

    hooks: List[OpenHook] = []

    def on_document_open(callback: OpenHook) -> OpenHook:
        if not callable(callback):
            raise TypeError("on_document_open expects a callable")
        hooks.append(callback)
        return callback

    namespace: Dict[str, Any] = {
        "__builtins__": _restricted_builtins(),
        "__name__": "spreadview_init",
        "on_document_open": on_document_open,
    }

    try:
        source = path.read_text(encoding="utf-8")
        code = compile(source, str(path), "exec")
        exec(code, namespace)
    except Exception as exc:
        telemetry.record_event(
            "customization.error",
            level="warning",
            data={"path": str(path), "error": repr(exc)},
        )
        return []

    telemetry.record_event(
        "customization.loaded", data={"path": str(path), "hooks": len(hooks)}
    )
    return hooks


__all__ = ["OpenHook", "load_customization"]
