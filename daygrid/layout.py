# daygrid/layout.py
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .model import DayLayout, Entry, LayoutSlot, LayoutSummary
from .util.console import eprint, obs_enabled
from .util.timeparse import minutes_from_midnight
from .validate import EntryValidationError, assert_valid_entries

EntryIdFn = Callable[[Entry, int], str]
Span = Tuple[int, int]


def _default_entry_id(entry: Entry, index: int) -> str:
    iid = getattr(entry, "instance_id", None)
    if isinstance(iid, str) and iid:
        return iid
    return f"entry-{index}"


def _spans(entries: Sequence[Entry]) -> List[Span]:
    return [(minutes_from_midnight(e.start_time), minutes_from_midnight(e.end_time)) for e in entries]


def _span_overlap(a: Span, b: Span) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def _group_indices(spans: Sequence[Span]) -> List[List[int]]:
    """
    Connected-component clustering over strict overlap, in arrival order:
      - every existing group touching the new span is pulled out
      - merged members keep working-list order, the new index goes last
      - a span touching nothing starts a singleton
    """
    groups: List[List[int]] = []
    for i, span in enumerate(spans):
        hit = [g for g in groups if any(_span_overlap(spans[j], span) for j in g)]
        if not hit:
            groups.append([i])
            continue
        merged: List[int] = []
        for g in hit:
            merged.extend(g)
        groups = [g for g in groups if not any(g is h for h in hit)]
        merged.append(i)
        groups.append(merged)
    return groups


def _pack_indices(group: Sequence[int], spans: Sequence[Span]) -> List[List[int]]:
    # Canonical order: start, then end, then input position.
    order = sorted(group, key=lambda j: (spans[j][0], spans[j][1], j))
    columns: List[List[int]] = []
    for j in order:
        for col in columns:
            if not _span_overlap(spans[col[-1]], spans[j]):
                col.append(j)
                break
        else:
            columns.append([j])
    return columns


def build_day_groups(entries: Sequence[Entry]) -> List[List[Entry]]:
    """Partition one day's entries into transitive overlap groups."""
    spans = _spans(entries)
    return [[entries[j] for j in g] for g in _group_indices(spans)]


def pack_group(group: Sequence[Entry]) -> Tuple[List[List[Entry]], Dict[str, int]]:
    """
    Greedy first-fit column packing for one overlap group.

    Returns (columns, placement) where placement maps instance_id -> column.
    The group's width is len(columns) for every member, whether or not a given
    member is concurrent with all the others.
    """
    spans = _spans(group)
    cols = _pack_indices(list(range(len(group))), spans)
    columns = [[group[j] for j in col] for col in cols]
    placement: Dict[str, int] = {}
    for ci, col in enumerate(cols):
        for j in col:
            placement[_default_entry_id(group[j], j)] = ci
    return columns, placement


def build_day_layout(
    entries: Sequence[Entry],
    *,
    get_entry_id: Optional[EntryIdFn] = None,
    group_id_prefix: str = "group",
    include_group_id: bool = True,
    validate: bool = True,
) -> DayLayout:
    """Column assignment for one day's entries, keyed by entry id.

    Pure: the input sequence is not touched and nothing is kept between calls.
    With validate=True a bad batch raises one EntryValidationError before any
    layout work is done.
    """
    items = list(entries)
    if validate:
        assert_valid_entries(items)

    id_fn = get_entry_id or _default_entry_id
    ids = [id_fn(e, i) for i, e in enumerate(items)]
    if validate:
        seen: Dict[str, int] = {}
        dup_errs: List[str] = []
        for i, iid in enumerate(ids):
            if iid in seen:
                dup_errs.append(f"entries[{i}]: duplicate entry id {iid!r} (first at [{seen[iid]}])")
            else:
                seen[iid] = i
        if dup_errs:
            raise EntryValidationError(dup_errs)

    spans = _spans(items)

    layout: DayLayout = {}
    for gi, group in enumerate(_group_indices(spans)):
        columns = _pack_indices(group, spans)
        total = len(columns)
        group_id = f"{group_id_prefix}-{gi + 1}" if include_group_id else None
        for ci, col in enumerate(columns):
            for j in col:
                layout[ids[j]] = LayoutSlot(
                    column=ci,
                    columns=total,
                    start_min=spans[j][0],
                    end_min=spans[j][1],
                    group_id=group_id,
                )
    return layout


def build_week_layout(
    entries: Sequence[Entry],
    days: Optional[Sequence[str]] = None,
) -> Dict[str, DayLayout]:
    """Run build_day_layout once per Entry.day.

    Days come out in `days` order when given (listed days without entries map
    to {}; entries on unlisted days are ignored), else in order of first
    appearance.
    """
    items = list(entries)
    assert_valid_entries(items)

    by_day: Dict[str, List[Entry]] = {}
    if days is not None:
        for d in days:
            by_day.setdefault(d, [])
    for e in items:
        if days is not None and e.day not in by_day:
            continue
        by_day.setdefault(e.day, []).append(e)

    out: Dict[str, DayLayout] = {}
    for day, day_entries in by_day.items():
        lay = build_day_layout(day_entries, validate=False)
        out[day] = lay
        if obs_enabled():
            s = layout_summary(lay)
            eprint(
                f"[daygrid.layout] INFO: day={day!r} entries={s.entries} "
                f"groups={s.groups} max_columns={s.max_columns}"
            )
    return out


def layout_summary(layout: DayLayout) -> LayoutSummary:
    group_sizes: Dict[object, int] = {}
    for iid, slot in layout.items():
        # Without group ids groups cannot be told apart; each entry counts once.
        key = slot.group_id if slot.group_id is not None else ("_", iid)
        group_sizes[key] = group_sizes.get(key, 0) + 1

    max_columns = max((s.columns for s in layout.values()), default=0)
    overlapping = sum(1 for s in layout.values() if s.columns > 1)
    return LayoutSummary(
        entries=len(layout),
        groups=len(group_sizes),
        max_columns=max_columns,
        overlapping=overlapping,
    )
