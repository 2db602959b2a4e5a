"""Export and/or check the layout torture fixtures as JSON.

The JSON copy lets non-Python renderers (or another layout implementation)
replay the same fixtures.

Modes:
  --check   (default) exit non-zero if the JSON file differs from the fixtures
  --write            overwrite the JSON file to match the fixtures
"""

from __future__ import annotations

import argparse
import difflib
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from daygrid.conformance import LAYOUT_TORTURE_FIXTURES, fixture_to_dict

DEFAULT_OUT = Path("tests/fixtures/layout_torture.json")


def _canonical(obj: Any) -> str:
    # Stable text representation for diffs and git review.
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def _fixtures_doc() -> Dict[str, Any]:
    return {
        "version": 1,
        "fixtures": [fixture_to_dict(fx) for fx in LAYOUT_TORTURE_FIXTURES],
    }


def _diff(old_txt: str, new_txt: str, rel: Path) -> str:
    return "".join(
        difflib.unified_diff(
            old_txt.splitlines(True),
            new_txt.splitlines(True),
            fromfile=str(rel),
            tofile=str(rel),
            lineterm="",
        )
    )


def write_or_check(path: Path, *, write: bool) -> Tuple[bool, str]:
    """Return (ok, message)."""
    new_txt = _canonical(_fixtures_doc())
    old_txt = path.read_text(encoding="utf-8", errors="replace") if path.exists() else ""
    if old_txt == new_txt:
        return True, f"[daygrid-fixtures] OK: {path} up to date"

    d = _diff(old_txt, new_txt, path)

    if write:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(new_txt, encoding="utf-8", newline="\n")
        return True, f"[daygrid-fixtures] WROTE: {path}"

    msg = f"[daygrid-fixtures] FAIL: {path} differs from the fixture set"
    if d.strip():
        msg += "\n" + d
    return False, msg


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid-gen-fixtures",
        description="Export/check the layout torture fixtures as JSON.",
    )
    mx = ap.add_mutually_exclusive_group()
    mx.add_argument("--check", action="store_true", help="Check the JSON file (default)")
    mx.add_argument("--write", action="store_true", help="Write the JSON file if changed")
    ap.add_argument("--out", default=str(DEFAULT_OUT), help=f"JSON path (default: {DEFAULT_OUT})")
    ns = ap.parse_args(argv)

    ok, msg = write_or_check(Path(ns.out), write=bool(ns.write))
    print(msg)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
