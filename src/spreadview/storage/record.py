"""Typed snapshot of a document's persisted view state."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

FIELD_NAMES: tuple[str, ...] = (
    "inverted",
    "split_count",
    "page_index",
    "page_number_delta",
    "marks",
    "blank_pages",
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """Per-document record; ``present`` lists the fields that carry data.

    Records built in memory mark every field present. Records decoded from
    disk only mark the fields that were stored with a usable value, so a
    stored ``False`` stays distinguishable from a missing key.
    """

    inverted: bool = False
    split_count: int = 2
    page_index: int = 0
    page_number_delta: Optional[int] = None
    marks: Mapping[str, int] = field(default_factory=dict)
    blank_pages: FrozenSet[int] = frozenset()
    present: FrozenSet[str] = frozenset(FIELD_NAMES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "marks", MappingProxyType(dict(self.marks)))
        object.__setattr__(self, "blank_pages", frozenset(self.blank_pages))
        object.__setattr__(self, "present", frozenset(self.present))

    def has(self, name: str) -> bool:
        return name in self.present

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "inverted": bool(self.inverted),
            "split_count": int(self.split_count),
            "page_index": int(self.page_index),
            "page_number_delta": self.page_number_delta,
            "marks": {str(label): int(index) for label, index in self.marks.items()},
            "blank_pages": sorted(self.blank_pages),
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StoredRecord":
        values: Dict[str, Any] = {}

        inverted = data.get("inverted")
        if isinstance(inverted, bool):
            values["inverted"] = inverted

        split_count = data.get("split_count")
        if _is_int(split_count) and 1 <= split_count <= 10:
            values["split_count"] = split_count

        page_index = data.get("page_index")
        if _is_int(page_index):
            values["page_index"] = page_index

        if "page_number_delta" in data:
            delta = data["page_number_delta"]
            if delta is None or _is_int(delta):
                values["page_number_delta"] = delta

        marks = data.get("marks")
        if isinstance(marks, Mapping):
            values["marks"] = {
                str(label): index
                for label, index in marks.items()
                if len(str(label)) == 1 and _is_int(index)
            }

        blank_pages = data.get("blank_pages")
        if isinstance(blank_pages, (list, tuple, set, frozenset)):
            values["blank_pages"] = frozenset(
                index for index in blank_pages if _is_int(index) and index >= 0
            )

        return cls(present=frozenset(values), **values)


__all__ = ["StoredRecord", "FIELD_NAMES"]
