"""YAML-backed store of per-document reading state."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from spreadview.runtime import telemetry

from .record import StoredRecord


def canonical_key(path: Path | str) -> str:
    return str(Path(path).expanduser().resolve())


class PersistentStore:
    """Maps canonical document paths to ``StoredRecord`` entries in one file.

    Reads never raise: a missing, unreadable or malformed file is the same as
    an empty store. Writes rewrite the whole file; the last writer wins.
    """

    def __init__(self, path: Path, *, logger_name: str | None = None) -> None:
        self.path = Path(path)
        self._logger_name = logger_name or "spreadview.storage"

    def read_all(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_bytes()
        except OSError:
            return {}
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            telemetry.record_event(
                "store.malformed",
                level="warning",
                data={"path": str(self.path), "error": str(exc)},
                logger_name=self._logger_name,
            )
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, document_path: Path | str) -> Optional[StoredRecord]:
        key = canonical_key(document_path)
        entry = self.read_all().get(key)
        if not isinstance(entry, dict):
            return None
        record = StoredRecord.from_mapping(entry)
        telemetry.record_event(
            "store.load",
            level="debug",
            data={"document": key, "fields": ",".join(sorted(record.present))},
            logger_name=self._logger_name,
        )
        return record

    def save(self, document_path: Path | str, record: StoredRecord) -> None:
        key = canonical_key(document_path)
        with telemetry.span(
            "store::save",
            logger_name=self._logger_name,
            component="storage",
            metadata={"document": key},
        ):
            data = self.read_all()
            data[key] = record.to_mapping()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(data, allow_unicode=True, sort_keys=True),
                encoding="utf-8",
            )


__all__ = ["PersistentStore", "canonical_key"]
