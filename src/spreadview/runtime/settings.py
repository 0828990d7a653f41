"""Process-wide settings resolved from the environment and per-user dirs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "spreadview"
ENV_PREFIX = "SPREADVIEW_"
STORE_FILENAME = "saves.yaml"
INIT_FILENAME = "init.py"

DEFAULT_EXTENSIONS: tuple[str, ...] = (".pdf",)
DEFAULT_AUTOSAVE_EVERY = 11
DEFAULT_SPLIT_COUNT = 2
MIN_SPLIT_COUNT = 1
MAX_SPLIT_COUNT = 10


def default_store_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / STORE_FILENAME


def default_init_path() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False)) / INIT_FILENAME


def _parse_extensions(raw: str) -> tuple[str, ...]:
    values = []
    for item in raw.split(","):
        cleaned = item.strip().lower()
        if not cleaned:
            continue
        if not cleaned.startswith("."):
            cleaned = f".{cleaned}"
        values.append(cleaned)
    return tuple(dict.fromkeys(values)) or DEFAULT_EXTENSIONS


def _parse_int(raw: Optional[str], fallback: int, *, low: int, high: int) -> int:
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    if value < low or value > high:
        return fallback
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration shared by the session and the adapters."""

    store_path: Path
    init_path: Path
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    autosave_every: int = DEFAULT_AUTOSAVE_EVERY
    default_split: int = DEFAULT_SPLIT_COUNT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value if value else None

        store = get("STORE")
        init = get("INIT_FILE")
        extensions = get("EXTENSIONS")
        return cls(
            store_path=Path(store).expanduser() if store else default_store_path(),
            init_path=Path(init).expanduser() if init else default_init_path(),
            extensions=(
                _parse_extensions(extensions) if extensions else DEFAULT_EXTENSIONS
            ),
            autosave_every=_parse_int(
                get("AUTOSAVE_EVERY"), DEFAULT_AUTOSAVE_EVERY, low=1, high=10_000
            ),
            default_split=_parse_int(
                get("DEFAULT_SPLIT"),
                DEFAULT_SPLIT_COUNT,
                low=MIN_SPLIT_COUNT,
                high=MAX_SPLIT_COUNT,
            ),
        )


__all__ = [
    "APP_NAME",
    "Settings",
    "default_store_path",
    "default_init_path",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_AUTOSAVE_EVERY",
    "DEFAULT_SPLIT_COUNT",
    "MIN_SPLIT_COUNT",
    "MAX_SPLIT_COUNT",
]
