# daygrid/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .util.timeparse import parse_day_window

DEFAULT_DAY_WINDOW = "08:00-17:00"


@dataclass(frozen=True)
class GridConfig:
    day_start_hour: int = 8
    day_end_hour: int = 17
    pixels_per_minute: float = 2.0
    snap_minutes: int = 15
    event_gap_px: int = 4
    min_height_px: int = 18

    @property
    def window_start_min(self) -> int:
        return self.day_start_hour * 60

    @property
    def window_end_min(self) -> int:
        return self.day_end_hour * 60

    @property
    def grid_height_px(self) -> float:
        return (self.day_end_hour - self.day_start_hour) * 60 * self.pixels_per_minute


def config_from_dict(cfg: Optional[Dict[str, Any]]) -> GridConfig:
    """Tolerant coercion from a loose dict (JSON, CLI); out-of-range values are clamped."""
    cfg = cfg if isinstance(cfg, dict) else {}

    start_h = int(cfg.get("day_start_hour", 8) or 0)
    end_h = int(cfg.get("day_end_hour", 17) or 24)
    start_h = max(0, min(23, start_h))
    end_h = max(1, min(24, end_h))
    if end_h <= start_h:
        start_h, end_h = 0, 24

    ppm = float(cfg.get("pixels_per_minute", 2.0) or 2.0)
    if ppm <= 0:
        ppm = 2.0

    snap = int(cfg.get("snap_minutes", 15) or 15)
    if snap < 1:
        snap = 1

    gap = max(0, int(cfg.get("event_gap_px", 4) or 0))
    min_h = max(0, int(cfg.get("min_height_px", 18) or 0))

    return GridConfig(
        day_start_hour=start_h,
        day_end_hour=end_h,
        pixels_per_minute=ppm,
        snap_minutes=snap,
        event_gap_px=gap,
        min_height_px=min_h,
    )


def config_from_env(base: Optional[Dict[str, Any]] = None) -> GridConfig:
    """
    Overlay env on `base`:
      - DAYGRID_DAY_WINDOW  e.g. "07:00-19:00" (whole hours)
      - DAYGRID_PX_PER_MIN  e.g. "1.5"
      - DAYGRID_SNAP        e.g. "10"
    """
    cfg: Dict[str, Any] = dict(base or {})

    window = (os.getenv("DAYGRID_DAY_WINDOW", "") or "").strip()
    if window:
        start, end = parse_day_window(window)
        if start % 60 or end % 60:
            raise ValueError(f"DAYGRID_DAY_WINDOW must use whole hours, got {window!r}")
        cfg["day_start_hour"] = start // 60
        cfg["day_end_hour"] = end // 60

    ppm = (os.getenv("DAYGRID_PX_PER_MIN", "") or "").strip()
    if ppm:
        cfg["pixels_per_minute"] = float(ppm)

    snap = (os.getenv("DAYGRID_SNAP", "") or "").strip()
    if snap:
        cfg["snap_minutes"] = int(snap)

    return config_from_dict(cfg)
