"""Persistence of per-document reading state."""

from .record import FIELD_NAMES, StoredRecord
from .store import PersistentStore, canonical_key

__all__ = ["FIELD_NAMES", "StoredRecord", "PersistentStore", "canonical_key"]
