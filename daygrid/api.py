"""daygrid.api

Stable *library* entrypoint for daygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from daygrid.config import GridConfig, config_from_dict, config_from_env
from daygrid.conformance import (
    LAYOUT_TORTURE_FIXTURES,
    LayoutFixture,
    check_fixture,
    check_layout_invariants,
    run_layout_fixtures,
)
from daygrid.geometry import card_box, day_plan
from daygrid.interval import clamp_to_window, overlaps, position, snap_to_grid
from daygrid.layout import build_day_groups, build_day_layout, build_week_layout, layout_summary, pack_group
from daygrid.model import CardBox, DayLayout, Entry, LayoutSlot, LayoutSummary, Position
from daygrid.normalize import load_entries_json, normalize_entries, normalize_entry
from daygrid.util.timeparse import (
    is_start_before_end,
    minutes_from_midnight,
    normalize_hhmm,
    parse_day_window,
    time_from_minutes,
)
from daygrid.validate import EntryValidationError, assert_valid_entries, validate_entries

JsonPath = Union[str, Path]


def layout_records(records: Sequence[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Records in, JSON-ready `{id: {column, columns, ...}}` out (one day)."""
    entries = normalize_entries(list(records))
    return {iid: slot.as_dict() for iid, slot in build_day_layout(entries).items()}


def plan_day(
    entries: Sequence[Entry],
    cfg: Optional[GridConfig] = None,
) -> List[Dict[str, Any]]:
    """Layout plus card geometry for one day, ready for a renderer."""
    items = list(entries)
    return day_plan(items, build_day_layout(items), cfg)


def plan_file(path: JsonPath, *, day: Optional[str] = None, cfg: Optional[GridConfig] = None) -> Dict[str, Any]:
    entries = load_entries_json(path)
    if day is not None:
        entries = [e for e in entries if e.day == day]
    cfg = cfg or GridConfig()
    week = build_week_layout(entries)
    by_day: Dict[str, List[Entry]] = {}
    for e in entries:
        by_day.setdefault(e.day, []).append(e)
    return {
        "cfg": {
            "day_start_hour": cfg.day_start_hour,
            "day_end_hour": cfg.day_end_hour,
            "pixels_per_minute": cfg.pixels_per_minute,
            "grid_height_px": cfg.grid_height_px,
        },
        "days": [
            {"day": d, "entries": day_plan(by_day.get(d, []), lay, cfg)}
            for d, lay in week.items()
        ],
    }


# --- Public API exports ----------------------------------------------------
_PUBLIC_EXPORTS = (
    "CardBox",
    "DayLayout",
    "Entry",
    "EntryValidationError",
    "GridConfig",
    "LAYOUT_TORTURE_FIXTURES",
    "LayoutFixture",
    "LayoutSlot",
    "LayoutSummary",
    "Position",
    "assert_valid_entries",
    "build_day_groups",
    "build_day_layout",
    "build_week_layout",
    "card_box",
    "check_fixture",
    "check_layout_invariants",
    "clamp_to_window",
    "config_from_dict",
    "config_from_env",
    "day_plan",
    "is_start_before_end",
    "layout_records",
    "layout_summary",
    "load_entries_json",
    "minutes_from_midnight",
    "normalize_entries",
    "normalize_entry",
    "normalize_hhmm",
    "overlaps",
    "pack_group",
    "parse_day_window",
    "plan_day",
    "plan_file",
    "position",
    "run_layout_fixtures",
    "snap_to_grid",
    "time_from_minutes",
    "validate_entries",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
