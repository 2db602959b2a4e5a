"""daygrid.conformance

Layout torture fixtures with hand-checked groups and column assignments.
Any change to grouping or packing that alters one of these is a behavior
change, not a refactor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .interval import overlaps
from .layout import build_day_groups, build_day_layout
from .model import DayLayout, Entry

Expected = Tuple[int, int]  # (column, columns)


@dataclass(frozen=True)
class LayoutFixture:
    name: str
    entries: Tuple[Entry, ...]
    expected_layout: Dict[str, Expected]
    expected_groups: Tuple[Tuple[str, ...], ...]


def make_entry(
    instance_id: str,
    start_time: str = "08:00",
    end_time: str = "09:00",
    *,
    title: str = "",
    day: str = "Måndag",
    color: str = "#93c5fd",
    duration: int = 60,
) -> Entry:
    return Entry(
        instance_id=instance_id,
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        day=day,
        title=title,
        color=color,
    )


def _fixture(name: str, entries: Sequence[Entry], layout: Dict[str, Expected], groups: Sequence[Sequence[str]]) -> LayoutFixture:
    return LayoutFixture(
        name=name,
        entries=tuple(entries),
        expected_layout=dict(layout),
        expected_groups=tuple(tuple(g) for g in groups),
    )


LAYOUT_TORTURE_FIXTURES: Tuple[LayoutFixture, ...] = (
    _fixture(
        "Adjacent events (end == start)",
        [
            make_entry("adjacent-1", "09:00", "10:00", title="Math"),
            make_entry("adjacent-2", "10:00", "11:00", title="Physics"),
        ],
        {"adjacent-1": (0, 1), "adjacent-2": (0, 1)},
        [["adjacent-1"], ["adjacent-2"]],
    ),
    _fixture(
        "Nested overlaps",
        [
            make_entry("nested-long", "09:00", "12:00", title="Long block"),
            make_entry("nested-short-1", "09:30", "10:00", title="Short block A"),
            make_entry("nested-short-2", "10:00", "11:00", title="Short block B"),
        ],
        {"nested-long": (0, 2), "nested-short-1": (1, 2), "nested-short-2": (1, 2)},
        [["nested-long", "nested-short-1", "nested-short-2"]],
    ),
    _fixture(
        "Many overlaps (7 entries)",
        [make_entry(f"overlap-{i + 1}", f"10:0{i}", f"11:0{i}", title=f"Overlap {i + 1}") for i in range(7)],
        {f"overlap-{i + 1}": (i, 7) for i in range(7)},
        [[f"overlap-{i + 1}" for i in range(7)]],
    ),
    _fixture(
        "Very short events",
        [
            make_entry("short-1", "13:00", "13:05", title="5-min", duration=5),
            make_entry("short-2", "13:02", "13:04", title="2-min overlap", duration=2),
            make_entry("short-3", "13:05", "13:06", title="Adjacent short", duration=1),
        ],
        {"short-1": (0, 2), "short-2": (1, 2), "short-3": (0, 1)},
        [["short-1", "short-2"], ["short-3"]],
    ),
    _fixture(
        "Long titles",
        [
            make_entry(
                "long-title-1",
                "15:00",
                "16:00",
                title="Very long event title that should not affect layout calculation in any column decisions",
            ),
            make_entry(
                "long-title-2",
                "15:30",
                "16:30",
                title="Another intentionally verbose schedule entry title to test truncation behavior",
            ),
        ],
        {"long-title-1": (0, 2), "long-title-2": (1, 2)},
        [["long-title-1", "long-title-2"]],
    ),
    _fixture(
        "Events outside visible time window",
        [
            make_entry("outside-early", "06:00", "07:00", title="Early"),
            make_entry("outside-late", "19:00", "20:00", title="Late"),
        ],
        {"outside-early": (0, 1), "outside-late": (0, 1)},
        [["outside-early"], ["outside-late"]],
    ),
    # B arrives last and bridges two groups that were built apart.
    _fixture(
        "Transitive chain merged by a late bridge",
        [
            make_entry("chain-a", "09:00", "10:00"),
            make_entry("chain-c", "11:00", "12:00"),
            make_entry("chain-b", "09:30", "11:30", duration=120),
        ],
        {"chain-a": (0, 2), "chain-b": (1, 2), "chain-c": (0, 2)},
        [["chain-a", "chain-b", "chain-c"]],
    ),
    _fixture(
        "Disjoint siblings of a long block keep the group width",
        [
            make_entry("sibling-long", "08:00", "12:00", duration=240),
            make_entry("sibling-1", "08:00", "09:00"),
            make_entry("sibling-2", "09:00", "10:00"),
            make_entry("sibling-3", "10:30", "11:00", duration=30),
        ],
        {"sibling-1": (0, 2), "sibling-long": (1, 2), "sibling-2": (0, 2), "sibling-3": (0, 2)},
        [["sibling-long", "sibling-1", "sibling-2", "sibling-3"]],
    ),
    _fixture(
        "Column reuse after release",
        [
            make_entry("reuse-a", "09:00", "11:00", duration=120),
            make_entry("reuse-b", "09:00", "10:00"),
            make_entry("reuse-c", "10:00", "12:00", duration=120),
            make_entry("reuse-d", "11:00", "12:00"),
        ],
        {"reuse-b": (0, 2), "reuse-a": (1, 2), "reuse-c": (0, 2), "reuse-d": (1, 2)},
        [["reuse-a", "reuse-b", "reuse-c", "reuse-d"]],
    ),
    # Identical intervals: input position decides, not the id.
    _fixture(
        "Identical intervals keep input order",
        [
            make_entry("same-c", "14:00", "15:00"),
            make_entry("same-a", "14:00", "15:00"),
            make_entry("same-b", "14:00", "15:00"),
        ],
        {"same-c": (0, 3), "same-a": (1, 3), "same-b": (2, 3)},
        [["same-a", "same-b", "same-c"]],
    ),
)


def normalize_groups(groups: Sequence[Sequence[str]]) -> List[List[str]]:
    return sorted((sorted(g) for g in groups), key=lambda g: "|".join(g))


def check_fixture(fixture: LayoutFixture) -> List[str]:
    """Return mismatch messages for one fixture (empty list == pass)."""
    tag = f"[layout fixtures] {fixture.name}"
    errs: List[str] = []

    layout = build_day_layout(fixture.entries)
    groups = build_day_groups(fixture.entries)

    actual = normalize_groups([[e.instance_id for e in g] for g in groups])
    expected = normalize_groups(fixture.expected_groups)

    if len(actual) != len(expected):
        errs.append(f"{tag}: expected {len(expected)} groups, got {len(actual)}")
    else:
        for exp_g, act_g in zip(expected, actual):
            if exp_g != act_g:
                errs.append(f"{tag}: group mismatch. expected {', '.join(exp_g)}, got {', '.join(act_g)}")

    for iid, (column, columns) in fixture.expected_layout.items():
        slot = layout.get(iid)
        if slot is None:
            errs.append(f"{tag}: missing layout for {iid}")
            continue
        if slot.column != column:
            errs.append(f"{tag}: {iid} column expected {column}, got {slot.column}")
        if slot.columns != columns:
            errs.append(f"{tag}: {iid} columns expected {columns}, got {slot.columns}")

    errs.extend(f"{tag}: {m}" for m in check_layout_invariants(fixture.entries, layout))
    return errs


def check_layout_invariants(entries: Sequence[Entry], layout: DayLayout) -> List[str]:
    """
    Structural checks that hold for any input:
      - every entry has a slot and 0 <= column < columns
      - one width per group
      - no two entries in the same group column overlap
    """
    errs: List[str] = []
    by_id = {e.instance_id: e for e in entries}

    for iid in by_id:
        slot = layout.get(iid)
        if slot is None:
            errs.append(f"no slot for {iid}")
            continue
        if not (0 <= slot.column < slot.columns):
            errs.append(f"{iid}: column {slot.column} out of range for columns={slot.columns}")

    for group in build_day_groups(list(entries)):
        ids = [e.instance_id for e in group if e.instance_id in layout]
        widths = {layout[i].columns for i in ids}
        if len(widths) > 1:
            errs.append(f"group {sorted(ids)} has mixed widths {sorted(widths)}")

        cols: Dict[int, List[Entry]] = {}
        for e in group:
            slot = layout.get(e.instance_id)
            if slot is not None:
                cols.setdefault(slot.column, []).append(e)
        for ci, members in sorted(cols.items()):
            for x in range(len(members)):
                for y in range(x + 1, len(members)):
                    a, b = members[x], members[y]
                    if overlaps(a.start_time, a.end_time, b.start_time, b.end_time):
                        errs.append(f"column {ci}: {a.instance_id} overlaps {b.instance_id}")
    return errs


def run_layout_fixtures(fixtures: Sequence[LayoutFixture] = LAYOUT_TORTURE_FIXTURES) -> List[str]:
    errs: List[str] = []
    for fx in fixtures:
        errs.extend(check_fixture(fx))
    return errs


def fixture_to_dict(fixture: LayoutFixture) -> Dict[str, object]:
    return {
        "name": fixture.name,
        "entries": [
            {
                "instanceId": e.instance_id,
                "day": e.day,
                "title": e.title,
                "color": e.color,
                "startTime": e.start_time,
                "endTime": e.end_time,
                "duration": e.duration,
            }
            for e in fixture.entries
        ],
        "expectedLayout": {
            iid: {"column": c, "columns": n} for iid, (c, n) in fixture.expected_layout.items()
        },
        "expectedGroups": [list(g) for g in fixture.expected_groups],
    }
