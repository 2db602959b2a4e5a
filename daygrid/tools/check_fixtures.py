#!/usr/bin/env python3
"""Run the layout torture fixtures and report mismatches.

Usage:
  python -m daygrid.tools.check_fixtures [--only NAME_SUBSTRING] [--list]
"""

from __future__ import annotations

import argparse
import sys
from typing import List

from daygrid.conformance import LAYOUT_TORTURE_FIXTURES, check_fixture


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid-check-fixtures] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid-check-fixtures",
        description="Check grouping and column assignment against the layout torture fixtures.",
    )
    ap.add_argument("--only", default=None, help="Run only fixtures whose name contains this substring")
    ap.add_argument("--list", action="store_true", help="List fixture names and exit")
    ns = ap.parse_args(argv)

    fixtures = list(LAYOUT_TORTURE_FIXTURES)
    if ns.only:
        needle = ns.only.lower()
        fixtures = [fx for fx in fixtures if needle in fx.name.lower()]
        if not fixtures:
            return _die(f"No fixture matches --only {ns.only!r}")

    if ns.list:
        for fx in fixtures:
            print(fx.name)
        return 0

    all_errs: List[str] = []
    for fx in fixtures:
        errs = check_fixture(fx)
        status = "ok" if not errs else f"FAIL ({len(errs)})"
        print(f"[daygrid-check-fixtures] {fx.name}: {status}")
        all_errs.extend(errs)

    if all_errs:
        print("[daygrid-check-fixtures] FAIL", file=sys.stderr)
        for e in all_errs:
            print(f"  - {e}", file=sys.stderr)
        return 3

    print(f"[daygrid-check-fixtures] OK ({len(fixtures)} fixtures)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
