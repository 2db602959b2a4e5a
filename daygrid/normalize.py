# daygrid/normalize.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .model import Entry
from .util.console import eprint, obs_enabled
from .util.timeparse import minutes_from_midnight, normalize_hhmm

JsonPath = Union[str, Path]


def _first(rec: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        v = rec.get(k)
        if v is not None:
            return v
    return None


def normalize_entry(rec: Dict[str, Any], index: int = 0) -> Entry:
    """Build an Entry from a schedule record.

    Accepts both camelCase (instanceId/startTime/endTime) and snake_case
    keys. Times are normalized to zero-padded HH:MM; a bad time raises
    ValueError. A missing duration is derived from the times.
    """
    if not isinstance(rec, dict):
        raise ValueError(f"entry record [{index}] must be an object, got {type(rec).__name__}")

    iid = _first(rec, "instanceId", "instance_id", "id")
    iid_s = str(iid).strip() if iid is not None else ""
    if not iid_s:
        iid_s = f"entry-{index}"
        if obs_enabled():
            eprint(f"[daygrid.normalize] WARN: record [{index}] has no id; using {iid_s!r}")

    start_raw = _first(rec, "startTime", "start_time", "start")
    end_raw = _first(rec, "endTime", "end_time", "end")
    try:
        start = normalize_hhmm(start_raw)
        end = normalize_hhmm(end_raw)
    except ValueError as e:
        raise ValueError(f"entry record [{index}] ({iid_s!r}): {e}") from e

    dur = rec.get("duration")
    if isinstance(dur, bool) or not isinstance(dur, int):
        dur = minutes_from_midnight(end) - minutes_from_midnight(start)

    return Entry(
        instance_id=iid_s,
        start_time=start,
        end_time=end,
        duration=int(dur),
        day=str(rec.get("day") or ""),
        title=str(rec.get("title") or ""),
        color=str(rec.get("color") or ""),
        raw=dict(rec),
    )


def normalize_entries(records: List[Dict[str, Any]]) -> List[Entry]:
    return [normalize_entry(r, i) for i, r in enumerate(records)]


def load_entries_json(path: JsonPath) -> List[Entry]:
    """Read a JSON list of records, or an object with an "entries" list."""
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict):
        obj = obj.get("entries")
    if not isinstance(obj, list):
        raise ValueError(f"{p}: expected a JSON list of entries (or {{\"entries\": [...]}})")
    return normalize_entries(obj)
