# daygrid/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Entry:
    instance_id: str
    start_time: str        # "HH:MM"
    end_time: str          # "HH:MM"
    duration: int          # minutes

    day: str = ""
    title: str = ""
    color: str = ""

    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)


@dataclass(frozen=True)
class LayoutSlot:
    column: int
    columns: int

    start_min: int = 0
    end_min: int = 0
    group_id: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "column": self.column,
            "columns": self.columns,
            "start_min": self.start_min,
            "end_min": self.end_min,
        }
        if self.group_id is not None:
            out["group_id"] = self.group_id
        return out


@dataclass(frozen=True)
class Position:
    top: float
    height: float


@dataclass(frozen=True)
class CardBox:
    top: float
    height: float
    left_pct: float
    width_pct: float


@dataclass(frozen=True)
class LayoutSummary:
    entries: int
    groups: int
    max_columns: int
    overlapping: int   # entries sharing a group with at least one other entry


DayLayout = Dict[str, LayoutSlot]


__all__ = [
    "Entry",
    "LayoutSlot",
    "Position",
    "CardBox",
    "LayoutSummary",
    "DayLayout",
]
