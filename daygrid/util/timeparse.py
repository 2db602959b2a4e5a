# daygrid/util/timeparse.py
from __future__ import annotations

import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_LOOSE_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{1,2})$")

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(s: str) -> Tuple[int, int]:
    if not isinstance(s, str):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def minutes_from_midnight(s: str) -> int:
    """Minutes since 00:00 for a 24-hour "HH:MM" string.

    A one-digit hour ("9:05") is accepted, so time_from_minutes only gives
    back the same text for zero-padded input ("09:05").

    Raises ValueError on anything that is not a valid clock value; callers
    must not get a plausible-looking number back for garbage input.
    """
    hh, mm = parse_hhmm(s)
    return hh * 60 + mm


def time_from_minutes(minutes: int) -> str:
    """Zero-padded "HH:MM" for minutes since midnight.

    Values of 1440 and up keep counting hours ("24:00") so an end-of-day
    boundary can still be written out.
    """
    total = int(minutes)
    if total < 0:
        raise ValueError(f"minutes must be >= 0, got {minutes!r}")
    return f"{total // 60:02d}:{total % 60:02d}"


def normalize_hhmm(raw: str) -> str:
    # Accepts "9:5" style input from hand-edited data; output is always "09:05".
    if not isinstance(raw, str):
        raise ValueError("time must be string")
    m = _LOOSE_HHMM_RE.match(raw.strip())
    if not m:
        raise ValueError(f"Time must be HH:MM, got {raw!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid time: {raw!r}")
    return f"{hh:02d}:{mm:02d}"


def is_start_before_end(start_hhmm: str, end_hhmm: str) -> bool:
    return minutes_from_midnight(start_hhmm) < minutes_from_midnight(end_hhmm)


def parse_day_window(s: str) -> Tuple[int, int]:
    """Parse "08:00-17:00" into (start_min, end_min).

    "24:00" is accepted as the end so a window can cover the whole day.
    """
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("day window must be like 08:00-17:00")
    start = minutes_from_midnight(parts[0])
    end_s = parts[1].strip()
    end = MINUTES_PER_DAY if end_s == "24:00" else minutes_from_midnight(end_s)
    if end <= start:
        raise ValueError("day window end must be after start")
    return start, end
