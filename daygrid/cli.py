from __future__ import annotations

import argparse
import os
import sys
from dataclasses import asdict
from pathlib import Path

from .api import plan_file
from .config import DEFAULT_DAY_WINDOW, config_from_dict, config_from_env
from .render.inline import build_html, dumps_pretty
from .util.timeparse import parse_day_window
from .validate import EntryValidationError


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid",
        description="Compute side-by-side column layout for a day's time-stamped entries.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Entries JSON (list of records or {\"entries\": [...]})")
    ap.add_argument("--day", default=None, help="Only lay out entries whose day equals this value")
    ap.add_argument(
        "--day-window",
        default=os.getenv("DAYGRID_DAY_WINDOW", DEFAULT_DAY_WINDOW),
        help="Visible window in whole hours, e.g. 08:00-17:00 (default: env DAYGRID_DAY_WINDOW or 08:00-17:00)",
    )
    ap.add_argument(
        "--px-per-min",
        type=float,
        default=None,
        help="Vertical scale in pixels per minute (default: env DAYGRID_PX_PER_MIN or 2.0)",
    )
    ap.add_argument("--geometry", action="store_true", help="Include card geometry (top/height/left/width) in JSON output")
    ap.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    ap.add_argument("--html", default=None, help="Also write a static HTML preview to this path")
    ns = ap.parse_args(argv)

    try:
        w_start, w_end = parse_day_window(ns.day_window)
    except ValueError as e:
        return _die(f"Invalid --day-window value: {e}")
    if w_start % 60 or w_end % 60:
        return _die(f"--day-window must use whole hours, got {ns.day_window!r}")

    try:
        base = config_from_env()
    except ValueError as e:
        return _die(f"Invalid DAYGRID_* environment: {e}")

    overrides = asdict(base)
    overrides["day_start_hour"] = w_start // 60
    overrides["day_end_hour"] = w_end // 60
    if ns.px_per_min is not None:
        overrides["pixels_per_minute"] = ns.px_per_min
    cfg = config_from_dict(overrides)

    in_path = Path(ns.in_json)
    if not in_path.exists():
        return _die(f"Missing input JSON: {in_path}")

    try:
        plan = plan_file(in_path, day=ns.day, cfg=cfg)
    except EntryValidationError as e:
        print(f"[daygrid] FAIL: {len(e.errors)} invalid entr{'y' if len(e.errors) == 1 else 'ies'}", file=sys.stderr)
        for msg in e.errors:
            print(f"  - {msg}", file=sys.stderr)
        return 3
    except ValueError as e:
        return _die(f"Failed to load entries: {in_path} ({e})")

    if ns.html:
        html_path = Path(ns.html)
        html_path.parent.mkdir(parents=True, exist_ok=True)
        html_path.write_text(build_html(plan), encoding="utf-8")

    if ns.geometry:
        out_obj: object = plan
    else:
        out_obj = {
            d["day"]: {
                row["id"]: {"column": row["column"], "columns": row["columns"]}
                for row in d["entries"]
            }
            for d in plan["days"]
        }

    text = dumps_pretty(out_obj)
    if ns.out:
        out_path = Path(ns.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(str(out_path.resolve()))
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
