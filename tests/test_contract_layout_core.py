from __future__ import annotations

import copy
import unittest

from daygrid.conformance import make_entry
from daygrid.layout import build_day_groups, build_day_layout, build_week_layout, layout_summary, pack_group
from daygrid.model import Entry, LayoutSlot
from daygrid.validate import EntryValidationError


def _cols(layout):
    return {k: (v.column, v.columns) for k, v in layout.items()}


class TestLayoutScenariosContract(unittest.TestCase):
    def test_adjacent_touching_entries_are_separate(self) -> None:
        entries = [make_entry("a", "09:00", "10:00"), make_entry("b", "10:00", "11:00")]
        self.assertEqual(_cols(build_day_layout(entries)), {"a": (0, 1), "b": (0, 1)})
        self.assertEqual(len(build_day_groups(entries)), 2)

    def test_nested_overlap(self) -> None:
        entries = [
            make_entry("long", "09:00", "12:00"),
            make_entry("s1", "09:30", "10:00"),
            make_entry("s2", "10:00", "11:00"),
        ]
        self.assertEqual(
            _cols(build_day_layout(entries)),
            {"long": (0, 2), "s1": (1, 2), "s2": (1, 2)},
        )

    def test_seven_staggered(self) -> None:
        entries = [make_entry(f"o{i}", f"10:0{i}", f"11:0{i}") for i in range(7)]
        layout = build_day_layout(entries)
        self.assertEqual({s.columns for s in layout.values()}, {7})
        self.assertEqual([layout[f"o{i}"].column for i in range(7)], list(range(7)))

    def test_short_entries(self) -> None:
        entries = [
            make_entry("x", "13:00", "13:05"),
            make_entry("y", "13:02", "13:04"),
            make_entry("z", "13:05", "13:06"),
        ]
        self.assertEqual(_cols(build_day_layout(entries)), {"x": (0, 2), "y": (1, 2), "z": (0, 1)})


class TestOverlapGrouperContract(unittest.TestCase):
    def test_transitive_membership(self) -> None:
        a = make_entry("a", "09:00", "10:00")
        b = make_entry("b", "09:30", "10:30")
        c = make_entry("c", "10:15", "11:00")
        groups = build_day_groups([a, b, c])
        self.assertEqual(len(groups), 1)
        self.assertEqual(sorted(e.instance_id for e in groups[0]), ["a", "b", "c"])

    def test_late_bridge_merges_groups_in_working_order(self) -> None:
        a = make_entry("a", "09:00", "10:00")
        c = make_entry("c", "11:00", "12:00")
        d = make_entry("d", "14:00", "15:00")
        b = make_entry("b", "09:30", "11:30")
        groups = build_day_groups([a, c, d, b])
        ids = [[e.instance_id for e in g] for g in groups]
        # d is untouched and stays first; merged group goes to the end
        self.assertEqual(ids, [["d"], ["a", "c", "b"]])

    def test_empty(self) -> None:
        self.assertEqual(build_day_groups([]), [])
        self.assertEqual(build_day_layout([]), {})

    def test_membership_does_not_depend_on_order(self) -> None:
        entries = [
            make_entry("a", "08:00", "09:00"),
            make_entry("b", "08:30", "09:30"),
            make_entry("c", "09:30", "10:00"),
            make_entry("d", "09:45", "11:00"),
            make_entry("e", "12:00", "13:00"),
        ]

        def norm(groups):
            return sorted(sorted(e.instance_id for e in g) for g in groups)

        expected = norm(build_day_groups(entries))
        self.assertEqual(expected, [["a", "b"], ["c", "d"], ["e"]])
        self.assertEqual(norm(build_day_groups(list(reversed(entries)))), expected)
        self.assertEqual(norm(build_day_groups(entries[2:] + entries[:2])), expected)


class TestColumnPackerContract(unittest.TestCase):
    def test_first_fit_reuses_lowest_free_column(self) -> None:
        group = [
            make_entry("a", "09:00", "11:00"),
            make_entry("b", "09:00", "10:00"),
            make_entry("c", "10:00", "12:00"),
            make_entry("d", "11:00", "12:00"),
        ]
        columns, placement = pack_group(group)
        self.assertEqual([[e.instance_id for e in col] for col in columns], [["b", "c"], ["a", "d"]])
        self.assertEqual(placement, {"b": 0, "a": 1, "c": 0, "d": 1})

    def test_ties_broken_by_position(self) -> None:
        group = [make_entry("z", "14:00", "15:00"), make_entry("y", "14:00", "15:00")]
        columns, placement = pack_group(group)
        self.assertEqual(placement, {"z": 0, "y": 1})

    def test_uniform_width_for_non_concurrent_members(self) -> None:
        entries = [
            make_entry("long", "08:00", "12:00"),
            make_entry("first", "08:00", "09:00"),
            make_entry("second", "10:00", "11:00"),
        ]
        layout = build_day_layout(entries)
        self.assertEqual(layout["second"].columns, 2)
        self.assertEqual(layout["first"].column, 0)
        self.assertEqual(layout["long"].column, 1)


class TestLayoutEngineContract(unittest.TestCase):
    def test_slot_carries_minutes_and_group_id(self) -> None:
        entries = [
            make_entry("a", "09:00", "10:00"),
            make_entry("b", "09:30", "10:30"),
            make_entry("c", "13:00", "14:00"),
        ]
        layout = build_day_layout(entries)
        self.assertEqual(layout["a"], LayoutSlot(column=0, columns=2, start_min=540, end_min=600, group_id="group-1"))
        self.assertEqual(layout["b"].group_id, "group-1")
        self.assertEqual(layout["c"].group_id, "group-2")
        self.assertEqual(
            layout["c"].as_dict(),
            {"column": 0, "columns": 1, "start_min": 780, "end_min": 840, "group_id": "group-2"},
        )

    def test_group_id_options(self) -> None:
        entries = [make_entry("a", "09:00", "10:00")]
        self.assertEqual(build_day_layout(entries, group_id_prefix="mon")["a"].group_id, "mon-1")
        slot = build_day_layout(entries, include_group_id=False)["a"]
        self.assertIsNone(slot.group_id)
        self.assertNotIn("group_id", slot.as_dict())

    def test_custom_and_fallback_entry_ids(self) -> None:
        entries = [make_entry("a", "09:00", "10:00"), make_entry("b", "09:30", "10:30")]
        layout = build_day_layout(entries, get_entry_id=lambda e, i: f"{e.day}/{i}")
        self.assertEqual(set(layout), {"Måndag/0", "Måndag/1"})

        anon = [Entry(instance_id="", start_time="09:00", end_time="10:00", duration=60)]
        self.assertEqual(set(build_day_layout(anon, validate=False)), {"entry-0"})

    def test_colliding_entry_ids_are_rejected(self) -> None:
        entries = [make_entry("a", "09:00", "10:00"), make_entry("b", "11:00", "12:00")]
        with self.assertRaises(EntryValidationError) as cm:
            build_day_layout(entries, get_entry_id=lambda e, i: "x")
        self.assertEqual(len(cm.exception.errors), 1)
        self.assertIn("duplicate entry id 'x'", str(cm.exception))

        # Unchecked mode trusts the caller and keeps the last slot per key.
        self.assertEqual(set(build_day_layout(entries, get_entry_id=lambda e, i: "x", validate=False)), {"x"})

    def test_determinism_and_no_input_mutation(self) -> None:
        entries = [
            make_entry("a", "09:00", "10:30"),
            make_entry("b", "09:15", "09:45"),
            make_entry("c", "10:00", "11:00"),
            make_entry("d", "09:50", "10:10"),
        ]
        before = copy.deepcopy(entries)
        first = build_day_layout(entries)
        second = build_day_layout(entries)
        self.assertEqual(first, second)
        self.assertEqual(entries, before)
        self.assertEqual([e.instance_id for e in entries], ["a", "b", "c", "d"])

    def test_tuple_input_is_accepted(self) -> None:
        entries = (make_entry("a", "09:00", "10:00"), make_entry("b", "09:30", "10:30"))
        self.assertEqual(_cols(build_day_layout(entries)), {"a": (0, 2), "b": (1, 2)})

    def test_invalid_batch_raises_one_error(self) -> None:
        entries = [
            make_entry("ok", "09:00", "10:00"),
            make_entry("zero", "10:00", "10:00"),
            make_entry("inverted", "12:00", "11:00"),
            make_entry("bad", "9h", "10:00"),
        ]
        with self.assertRaises(EntryValidationError) as cm:
            build_day_layout(entries)
        self.assertEqual(len(cm.exception.errors), 3)
        self.assertIn("zero", str(cm.exception))


class TestWeekLayoutContract(unittest.TestCase):
    def test_per_day_layouts_are_independent(self) -> None:
        entries = [
            make_entry("mon-a", "09:00", "10:00", day="Måndag"),
            make_entry("tue-a", "09:00", "10:00", day="Tisdag"),
            make_entry("mon-b", "09:30", "10:30", day="Måndag"),
        ]
        week = build_week_layout(entries)
        self.assertEqual(list(week), ["Måndag", "Tisdag"])
        self.assertEqual(_cols(week["Måndag"]), {"mon-a": (0, 2), "mon-b": (1, 2)})
        self.assertEqual(_cols(week["Tisdag"]), {"tue-a": (0, 1)})

    def test_explicit_days_order(self) -> None:
        entries = [
            make_entry("a", "09:00", "10:00", day="Tisdag"),
            make_entry("b", "09:00", "10:00", day="Söndag"),
        ]
        week = build_week_layout(entries, days=["Måndag", "Tisdag"])
        self.assertEqual(list(week), ["Måndag", "Tisdag"])
        self.assertEqual(week["Måndag"], {})
        self.assertEqual(set(week["Tisdag"]), {"a"})

    def test_summary(self) -> None:
        entries = [
            make_entry("a", "09:00", "10:00"),
            make_entry("b", "09:30", "10:30"),
            make_entry("c", "09:45", "10:15"),
            make_entry("d", "13:00", "14:00"),
        ]
        s = layout_summary(build_day_layout(entries))
        self.assertEqual((s.entries, s.groups, s.max_columns, s.overlapping), (4, 2, 3, 3))
        empty = layout_summary({})
        self.assertEqual((empty.entries, empty.groups, empty.max_columns), (0, 0, 0))


if __name__ == "__main__":
    unittest.main(verbosity=2)
