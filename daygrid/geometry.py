# daygrid/geometry.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .config import GridConfig
from .interval import position
from .model import CardBox, DayLayout, Entry, LayoutSlot


def card_box(slot: LayoutSlot, start_time: str, duration: int, cfg: Optional[GridConfig] = None) -> CardBox:
    """Pixel/percent box for one entry card inside its day column."""
    cfg = cfg or GridConfig()
    pos = position(start_time, duration, cfg.day_start_hour, cfg.pixels_per_minute)
    top = pos.top + cfg.event_gap_px / 2
    height = max(pos.height - cfg.event_gap_px, cfg.min_height_px)
    width_pct = 100.0 / max(slot.columns, 1)
    left_pct = width_pct * slot.column
    return CardBox(top=top, height=height, left_pct=left_pct, width_pct=width_pct)


def day_plan(
    entries: Sequence[Entry],
    layout: DayLayout,
    cfg: Optional[GridConfig] = None,
) -> List[Dict[str, Any]]:
    """
    Renderer-facing rows, one per laid-out entry, in input order.

    Entries ending before or starting after the visible window are still
    listed (layout never looks at the window); `visible` tells the renderer.
    """
    cfg = cfg or GridConfig()
    rows: List[Dict[str, Any]] = []
    for e in entries:
        slot = layout.get(e.instance_id)
        if slot is None:
            continue
        box = card_box(slot, e.start_time, e.duration, cfg)
        visible = slot.end_min > cfg.window_start_min and slot.start_min < cfg.window_end_min
        row = {
            "id": e.instance_id,
            "title": e.title,
            "color": e.color,
            "start_time": e.start_time,
            "end_time": e.end_time,
            "visible": visible,
            "top": box.top,
            "height": box.height,
            "left_pct": box.left_pct,
            "width_pct": box.width_pct,
        }
        row.update(slot.as_dict())
        rows.append(row)
    return rows
