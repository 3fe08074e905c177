import os
import time
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, render_template_string

from streettrees.config import load_settings
from streettrees.errors import EmptyCollection
from streettrees.query_engine import QueryEngine
from streettrees.storage import TreeCollection, ingest_file

app = Flask(__name__)

trees = TreeCollection()

STATE: Dict[str, Any] = {"csv_path": None, "db_loaded": False, "ingest": None}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status

def require_db():
    if not STATE["db_loaded"]:
        return err("Trees not loaded (startup ingestion failed). Check CSV path.", 400)
    return None

def warm_start(csv_path: Optional[str] = None) -> None:
    """Ingest the census CSV at startup."""
    try:
        settings = load_settings(csv_path=csv_path)
    except RuntimeError as e:
        print(f"[warm_start] Bad configuration: {e}")
        return
    STATE["csv_path"] = settings.csv_path

    if not settings.csv_path:
        print("[warm_start] No CSV path provided.")
        return
    if not os.path.exists(settings.csv_path):
        print(f"[warm_start] CSV not found: {settings.csv_path}")
        return

    print(f"[warm_start] Ingesting CSV: {settings.csv_path}")
    t0 = time.time()
    try:
        report = ingest_file(trees, settings.csv_path, progress_every=settings.progress_every)
    except OSError as e:
        print(f"[warm_start] Could not read CSV: {e}")
        return
    t1 = time.time()
    STATE["db_loaded"] = True
    STATE["ingest"] = report
    print(f"[warm_start] Trees loaded: {len(trees):,} records in {t1 - t0:.2f}s")


def _query_arg() -> Optional[str]:
    q = request.args.get("q")
    return q.strip() if q is not None else None


@app.get("/api/status")
def api_status():
    report = STATE["ingest"]
    return ok({
        "csv_path": STATE["csv_path"],
        "db_loaded": STATE["db_loaded"],
        "total_trees": len(trees),
        "species_count": len(trees.species),
        "skipped_lines": report.skipped if report is not None else 0,
        "integrity_violations": report.integrity_violations if report is not None else 0,
    })


@app.get("/api/species")
def api_species():
    r = require_db()
    if r is not None:
        return r

    q = _query_arg()
    if q is None:
        return err("q is required: /api/species?q=...")

    names = QueryEngine(trees).matching_species(q)
    return ok({"query": q, "count_returned": len(names), "species": names})


@app.get("/api/report")
def api_report():
    r = require_db()
    if r is not None:
        return r

    q = _query_arg()
    if q is None:
        return err("q is required: /api/report?q=...")

    report = QueryEngine(trees).species_report(q)
    if report is None:
        return err(f"There are no records of '{q}' on NYC streets.", 404)
    return ok(report.to_dict())


@app.get("/api/boroughs")
def api_boroughs():
    r = require_db()
    if r is not None:
        return r
    return ok({"total_trees": trees.total_trees, "boroughs": trees.borough_counts()})


@app.get("/api/records/<which>")
def api_record_extreme(which: str):
    r = require_db()
    if r is not None:
        return r

    if which not in ("first", "last"):
        return err("use /api/records/first or /api/records/last", 404)
    try:
        rec = trees.first() if which == "first" else trees.last()
    except EmptyCollection:
        return err("no trees stored", 404)
    return ok({"record": rec.to_dict(), "text": str(rec)})


HTML = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>NYC Street Trees</title>
<style>
  body{font-family:system-ui,sans-serif;margin:40px auto;max-width:720px;color:#17301c;}
  input{padding:10px;width:70%;border-radius:10px;border:1px solid #9bb59f;}
  button{padding:10px 14px;border-radius:10px;border:none;background:#2f6b3a;color:#fff;font-weight:700;cursor:pointer;}
  table{border-collapse:collapse;margin-top:16px;width:100%;}
  td,th{padding:6px 10px;border-bottom:1px solid #d8e4da;text-align:right;}
  td:first-child,th:first-child{text-align:left;}
  .err{color:#a0281e;font-weight:700;}
</style>
</head>
<body>
<h1>NYC Street Trees</h1>
<p>Enter a tree species to learn more about it.</p>
<input id="q" placeholder="e.g. oak"> <button onclick="run_report()">Search</button>
<div id="results"></div>
<script>
  const el = (id) => document.getElementById(id);

  async function run_report(){
    const q = (el("q").value || "").trim();
    const res = await fetch(`/api/report?q=${encodeURIComponent(q)}`);
    const r = await res.json();
    if(!r.ok){ el("results").innerHTML = `<p class="err">${r.error}</p>`; return; }
    let html = `<h3>All matching species</h3><p>${r.data.species.join(", ")}</p>`;
    html += "<table><tr><th></th><th>Matches</th><th>Total</th><th>%</th></tr>";
    for(const row of r.data.rows){
      html += `<tr><td>${row.label}</td><td>${row.matches.toLocaleString()}</td>`
            + `<td>${row.total.toLocaleString()}</td><td>${row.percentage.toFixed(2)}</td></tr>`;
    }
    el("results").innerHTML = html + "</table>";
  }
</script>
</body>
</html>
"""

@app.get("/")
def home():
    return render_template_string(HTML)

if __name__ == "__main__":
    settings = load_settings()
    warm_start(settings.csv_path)
    app.run(host=settings.host, port=settings.port, debug=settings.debug, use_reloader=False)
