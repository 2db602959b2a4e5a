# daygrid/interval.py
from __future__ import annotations

import math
from typing import Union

from .model import Position
from .util.timeparse import minutes_from_midnight

TimeLike = Union[str, int]

DEFAULT_GRID_MIN = 15


def _as_min(t: TimeLike) -> int:
    if isinstance(t, bool):
        raise ValueError(f"Invalid time value: {t!r}")
    if isinstance(t, int):
        return t
    return minutes_from_midnight(t)


def overlaps(start_a: TimeLike, end_a: TimeLike, start_b: TimeLike, end_b: TimeLike) -> bool:
    """Strict open-interval overlap; touching endpoints do not overlap."""
    a0 = _as_min(start_a)
    a1 = _as_min(end_a)
    b0 = _as_min(start_b)
    b1 = _as_min(end_b)
    return a0 < b1 and b0 < a1


def snap_to_grid(minutes: float, grid_size: int = DEFAULT_GRID_MIN) -> int:
    if grid_size <= 1:
        return int(minutes)
    # Half-up, not banker's rounding: 7.5 on a 15 grid snaps to 15.
    return int(math.floor(minutes / grid_size + 0.5)) * int(grid_size)


def clamp_to_window(start_min: int, duration: int, window_start_min: int, window_end_min: int) -> int:
    """Keep a pointer-placed block of `duration` minutes inside the window."""
    hi = window_end_min - duration
    return max(window_start_min, min(start_min, hi))


def position(
    start_time: str,
    duration_minutes: int,
    day_start_hour: int = 8,
    pixels_per_minute: float = 2.0,
) -> Position:
    top = (minutes_from_midnight(start_time) - day_start_hour * 60) * pixels_per_minute
    height = duration_minutes * pixels_per_minute
    return Position(top=top, height=height)
