# daygrid/render/inline.py
from __future__ import annotations

import json
from .template import HTML_TEMPLATE

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

_DATA_MARKER = "__DATA_JSON__"
_DATA_MARKER_COUNT = HTML_TEMPLATE.count(_DATA_MARKER)


def dumps_compact(data: object) -> str:
    if orjson is not None:
        return orjson.dumps(data).decode("utf-8")
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def build_html(plan: dict) -> str:
    # Inject the day plan JSON into the HTML template.
    #   - Template must contain the __DATA_JSON__ placeholder exactly once.
    #   - Generated HTML must not contain the placeholder after injection.
    if not isinstance(plan, dict):
        raise TypeError(f"plan must be dict, got {type(plan).__name__}")

    if _DATA_MARKER_COUNT != 1:
        raise RuntimeError(f"HTML_TEMPLATE must contain {_DATA_MARKER} exactly once (found {_DATA_MARKER_COUNT})")

    data_json = dumps_compact(plan)
    data_json = data_json.replace("</", r"<\/")  # script-safe injection
    html = HTML_TEMPLATE.replace(_DATA_MARKER, data_json)

    if _DATA_MARKER in html:
        raise RuntimeError("HTML generation failed: marker still present after injection")

    return html


def dumps_pretty(data: object) -> str:
    if orjson is not None:
        return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n"
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
