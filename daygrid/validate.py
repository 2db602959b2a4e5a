"""Entry validation helpers (library-facing)."""

from __future__ import annotations

from typing import List, Sequence

from .model import Entry
from .util.console import eprint, obs_enabled
from .util.timeparse import minutes_from_midnight


class EntryValidationError(ValueError):
    """Raised when a batch of entries cannot be laid out.

    `errors` holds every problem found; str(exc) is the first one.
    """

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__(self.errors[0] if self.errors else "invalid entries")


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_entries(entries: Sequence[Entry], *, label: str = "entries") -> List[str]:
    errs: List[str] = []
    seen: set[str] = set()

    for i, e in enumerate(entries):
        if not isinstance(e, Entry):
            errs.append(f"{label}[{i}] must be Entry, got {type(e).__name__}")
            continue

        iid = e.instance_id
        _require(isinstance(iid, str) and bool(iid.strip()), f"{label}[{i}].instance_id must be non-empty string", errs)
        if isinstance(iid, str) and iid:
            if iid in seen:
                errs.append(f"{label}[{i}]: duplicate instance_id {iid!r}")
            seen.add(iid)

        try:
            start = minutes_from_midnight(e.start_time)
        except ValueError:
            errs.append(f"{label}[{i}] ({iid!r}): invalid start_time {e.start_time!r}")
            continue
        try:
            end = minutes_from_midnight(e.end_time)
        except ValueError:
            errs.append(f"{label}[{i}] ({iid!r}): invalid end_time {e.end_time!r}")
            continue

        if end <= start:
            errs.append(
                f"{label}[{i}] ({iid!r}): end_time {e.end_time} must be after start_time {e.start_time}"
            )
            continue

        if obs_enabled() and e.duration != end - start:
            eprint(
                f"[daygrid.validate] WARN: duration mismatch id={iid!r} "
                f"duration={e.duration} span={end - start}"
            )

    return errs


def assert_valid_entries(entries: Sequence[Entry]) -> None:
    errs = validate_entries(entries)
    if errs:
        raise EntryValidationError(errs)


__all__ = [
    "EntryValidationError",
    "assert_valid_entries",
    "validate_entries",
]
