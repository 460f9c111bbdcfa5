import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from dominate import document, tags
from dominate.util import raw

from metricdiff import logging as mlog
from metricdiff.interfaces import ContrastState
from metricdiff.reporting.viz.table import render_metric_table

# ----------------------------
# Texts & small helpers
# ----------------------------
OUT_DIR = "results"

RESULT_TEXT = {
    ContrastState.MATCH: lambda s:
        "Every expected metric was found and no unexpected metrics were reported.",
    ContrastState.WARN: lambda s:
        f"{s.get('missing', 0)} expected metric(s) missing and {s.get('extra', 0)} unexpected metric(s) reported.",
    ContrastState.SUSPICIOUS: lambda s:
        f"{s.get('missing', 0)} expected metric(s) missing and {s.get('extra', 0)} unexpected metric(s) reported. "
        "The pipeline output differs substantially from the fixture.",
}

STYLE = """
body { font-family: sans-serif; margin: 2em; }
body[data-theme="dark"] { background: #1e1f22; color: #e6e6e6; }
.state { display: inline-block; padding: .2em .6em; border-radius: .3em; font-weight: bold; }
.state.match { background: #2e7d32; color: #fff; }
.state.warn { background: #f9a825; color: #000; }
.state.suspicious { background: #c62828; color: #fff; }
.kpi-row { display: flex; gap: 1.5em; margin: 1em 0; }
.kpi-title { font-size: .8em; opacity: .7; }
.kpi-value { font-size: 1.6em; }
.report-table { border-collapse: collapse; }
.report-table th, .report-table td { border: 1px solid #999; padding: .25em .6em; text-align: left; }
.muted { opacity: .6; }
"""


def state_enum(s: str) -> ContrastState:
    try:
        return ContrastState[str(s).upper()]
    except KeyError:
        return ContrastState.WARN


def render_summary(report: Dict[str, Any], src_path: Optional[str] = None) -> None:
    state = state_enum(report.get("overall", "WARN"))
    stats = report.get("stats") or {}

    tags.h1(report.get("title") or "Metric verification")
    with tags.p():
        tags.span("Result: ")
        tags.span(state.name, cls="state " + state.name.lower())
    tags.p(RESULT_TEXT[state](stats))
    if src_path:
        tags.p(f"Source: {src_path}", cls="muted")

    with tags.div(_class="kpi-row"):
        for title, key in (("Compared", "compared"), ("Matched", "matched"),
                           ("Missing", "missing"), ("Extra", "extra")):
            with tags.div(_class="kpi"):
                tags.div(title, _class="kpi-title")
                tags.div(str(int(stats.get(key, 0) or 0)), _class="kpi-value")


def render_unregistered(names: List[str]) -> None:
    if not names:
        return
    with tags.div(_class="metric-block metric-unregistered"):
        tags.h3(f"Names never expected ({len(names)})")
        with tags.ul():
            for n in names:
                tags.li(n)


def render_report(report: Dict[str, Any], src_path: Optional[str] = None) -> str:
    """Render a report JSON (see assemble_report) into a standalone HTML page."""
    doc = document(title=report.get("title") or "Metric verification")

    with doc.head:
        tags.style(raw(STYLE))

    with doc:
        theme = str(report.get("theme", "light")).strip().lower()
        if theme not in {"light", "dark"}:
            theme = "light"
        doc.body["data-theme"] = theme

        render_summary(report, src_path=src_path)
        render_metric_table("Missing (expected, not reported)", report.get("missing") or [], kind="missing")
        render_metric_table("Extra (reported, not expected)", report.get("extra") or [], kind="extra")
        render_unregistered(report.get("unregistered_names") or [])

    return str(doc)


# ----------------------------
# Main
# ----------------------------

def _write_html(profile_path: str, out_dir: str, output_file: str) -> str:
    with open(profile_path, "r", encoding="utf-8") as f:
        report = json.load(f)

    html = render_report(report, src_path=profile_path)

    os.makedirs(out_dir, exist_ok=True)
    out_path = os.path.join(out_dir, os.path.basename(output_file))
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)
    return out_path


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render a metric verification report as HTML.")
    parser.add_argument("-v", "--verification-profile",
                        help="Input verification JSON produced by verify_metrics",
                        action="store", metavar="file", required=True)
    parser.add_argument("-o", "--output-file",
                        help="Name of output HTML",
                        action="store", metavar="outfile",
                        required=False, default="comparison.html")
    parser.add_argument("-d", "--out-dir",
                        help="Output directory (default: results)",
                        action="store", default=OUT_DIR)
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only log warnings and errors")
    args = parser.parse_args(argv)
    mlog.setup_logging(0 if args.quiet else 1)

    try:
        out_path = _write_html(args.verification_profile, args.out_dir, args.output_file)
    except Exception as e:
        mlog.log_err(f"Error: {e}")
        return 1

    mlog.log_ok(f"HTML report written to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
