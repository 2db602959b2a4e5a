# daygrid/render/template.py
from __future__ import annotations

CSS_BLOCK = r"""
body { font: 13px system-ui, sans-serif; margin: 16px; background: #f8fafc; }
.days { display: flex; gap: 12px; align-items: flex-start; }
.day { flex: 1 1 0; min-width: 160px; }
.day h2 { font-size: 14px; margin: 0 0 6px; }
.col { position: relative; border: 1px solid #cbd5e1; background: #fff; overflow: hidden; }
.hour { position: absolute; left: 0; right: 0; border-top: 1px dashed #e2e8f0; font-size: 10px; color: #94a3b8; }
.card { position: absolute; box-sizing: border-box; border: 1px solid rgba(0,0,0,.2);
        border-radius: 4px; padding: 2px 4px; overflow: hidden; font-size: 11px; }
.card .t { font-family: ui-monospace, monospace; font-weight: 700; opacity: .7; }
"""

JS_BLOCK = r"""
(function () {
  const data = JSON.parse(document.getElementById("daygrid-data").textContent);
  const cfg = data.cfg;
  const root = document.getElementById("days");
  for (const day of data.days) {
    const wrap = document.createElement("div");
    wrap.className = "day";
    const h = document.createElement("h2");
    h.textContent = day.day || "(day)";
    wrap.appendChild(h);
    const col = document.createElement("div");
    col.className = "col";
    col.style.height = cfg.grid_height_px + "px";
    for (let hr = cfg.day_start_hour; hr < cfg.day_end_hour; hr++) {
      const line = document.createElement("div");
      line.className = "hour";
      line.style.top = ((hr - cfg.day_start_hour) * 60 * cfg.pixels_per_minute) + "px";
      line.textContent = String(hr).padStart(2, "0") + ":00";
      col.appendChild(line);
    }
    for (const e of day.entries) {
      if (!e.visible) continue;
      const card = document.createElement("div");
      card.className = "card";
      card.style.top = e.top + "px";
      card.style.height = e.height + "px";
      card.style.left = "calc(" + e.left_pct + "% + 4px)";
      card.style.width = "calc(" + e.width_pct + "% - 8px)";
      card.style.background = e.color || "#93c5fd";
      card.title = e.start_time + " - " + e.end_time;
      const t = document.createElement("span");
      t.className = "t";
      t.textContent = e.start_time + " ";
      card.appendChild(t);
      card.appendChild(document.createTextNode(e.title || e.id));
      col.appendChild(card);
    }
    wrap.appendChild(col);
    root.appendChild(wrap);
  }
})();
"""

HTML_SHELL = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>daygrid preview</title>
<style>
__CSS_BLOCK__
</style>
</head>
<body>
<div id="days" class="days"></div>
<script id="daygrid-data" type="application/json">
__DATA_JSON__
</script>

<script>
__JS_BLOCK__
</script>
</body>
</html>
"""

# Assemble full HTML template (data is injected later by build_html)
HTML_TEMPLATE = (
    HTML_SHELL
    .replace("__CSS_BLOCK__", CSS_BLOCK)
    .replace("__JS_BLOCK__", JS_BLOCK)
)
