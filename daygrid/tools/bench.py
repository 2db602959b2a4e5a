#!/usr/bin/env python3
from __future__ import annotations

import argparse
import random
import statistics
import sys
import time
from typing import List, Tuple

from daygrid.conformance import check_layout_invariants
from daygrid.layout import build_day_layout, layout_summary
from daygrid.model import Entry
from daygrid.util.timeparse import time_from_minutes


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid-bench] ERROR: {msg}", file=sys.stderr)
    return rc


def _now_ns() -> int:
    return time.perf_counter_ns()


def _time_one(fn, *, repeats: int, warmup: int) -> Tuple[float, float, float]:
    for _ in range(max(0, warmup)):
        fn()

    samples_ms: List[float] = []
    for _ in range(max(1, repeats)):
        t0 = _now_ns()
        fn()
        t1 = _now_ns()
        samples_ms.append((t1 - t0) / 1_000_000.0)

    return (min(samples_ms), statistics.fmean(samples_ms), max(samples_ms))


def synthetic_day(n: int, seed: int, *, start_min: int = 6 * 60, end_min: int = 22 * 60) -> List[Entry]:
    """Random day of `n` entries, 5..180 minutes long, all inside [start_min, end_min)."""
    rng = random.Random(seed)
    out: List[Entry] = []
    for i in range(n):
        dur = rng.randint(5, 180)
        s = rng.randint(start_min, end_min - dur)
        out.append(
            Entry(
                instance_id=f"bench-{i:05d}",
                start_time=time_from_minutes(s),
                end_time=time_from_minutes(s + dur),
                duration=dur,
            )
        )
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="daygrid-bench", description="Micro-benchmark daygrid layout.")
    ap.add_argument("--n", type=int, default=50, help="Entries per synthetic day")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed")
    ap.add_argument("--repeats", type=int, default=5, help="Measurement repeats (min/avg/max over repeats)")
    ap.add_argument("--warmup", type=int, default=1, help="Warmup runs before measuring")
    ap.add_argument("--check", action="store_true", help="Also verify layout invariants on the synthetic day")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die("--n must be >= 0")

    entries = synthetic_day(int(ns.n), int(ns.seed))
    print(f"[daygrid-bench] n={ns.n} seed={ns.seed} repeats={ns.repeats} warmup={ns.warmup}")

    def _layout() -> None:
        build_day_layout(entries)

    mn, av, mx = _time_one(_layout, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[daygrid-bench] layout: {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")

    layout = build_day_layout(entries)
    s = layout_summary(layout)
    print(f"[daygrid-bench] groups={s.groups} max_columns={s.max_columns} overlapping={s.overlapping}")

    if ns.check:
        errs = check_layout_invariants(entries, layout)
        if errs:
            print("[daygrid-bench] FAIL", file=sys.stderr)
            for e in errs[:20]:
                print(f"  - {e}", file=sys.stderr)
            return 3
        print("[daygrid-bench] invariants OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
