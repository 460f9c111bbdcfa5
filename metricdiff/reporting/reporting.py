# metricdiff/reporting/reporting.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
from metricdiff.interfaces import ContrastState
from metricdiff.metric import Diff, Metric

# --------------------------- enums & ordering ---------------------------

_ORDER = {"MATCH": 0, "WARN": 1, "SUSPICIOUS": 2}


def state_to_str(x) -> str:
    if isinstance(x, ContrastState):
        return x.name
    if isinstance(x, str):
        up = x.upper()
        if up in _ORDER:
            return up
    return "WARN"


def _max_state(a: str, b: str) -> str:
    return a if _ORDER.get(a, 1) >= _ORDER.get(b, 1) else b


def exit_code(state) -> int:
    """Process exit status for a verification outcome: 0 only on MATCH."""
    return 0 if state_to_str(state) == "MATCH" else 1


# --------------------------- severity policy ---------------------------

def compute_severity(meta: dict, changed: int, compared: int) -> str:
    """Return MATCH/WARN/SUSPICIOUS based on thresholds."""
    if compared == 0 or changed == 0:
        return "MATCH"

    thr_ratio = meta.get("threshold_ratio", None)
    thr_count = meta.get("threshold_count", None)

    if isinstance(thr_ratio, (int, float, str)):
        try:
            thr_ratio = float(thr_ratio)
        except ValueError:
            thr_ratio = None
    if isinstance(thr_count, (int, float, str)):
        try:
            thr_count = int(thr_count)
        except ValueError:
            thr_count = None

    if isinstance(thr_ratio, float) and 0 <= thr_ratio <= 1:
        ratio = changed / float(compared)
        return "SUSPICIOUS" if ratio >= thr_ratio else "WARN"

    if isinstance(thr_count, int) and thr_count > 0:
        return "SUSPICIOUS" if changed >= thr_count else "WARN"

    return "WARN"


# --------------------------- formatting ---------------------------

def format_metric(metric: Metric) -> str:
    """One-line rendering: name value timestamp k=v ... (empty fields omitted)."""
    parts = [metric.name or '""']
    if metric.value != "":
        parts.append(metric.value)
    if metric.timestamp != "":
        parts.append(metric.timestamp)
    for k in sorted(metric.tags):
        v = metric.tags[k]
        parts.append(f"{k}={v}" if v != "" else f"{k}=*")
    return " ".join(parts)


def _sorted_rows(metrics: Iterable[Metric]) -> List[Dict[str, Any]]:
    # Diff lists come from mapping iteration; sort for a stable report.
    return [m.to_dict() for m in sorted(metrics, key=format_metric)]


def unregistered_names(extra: Iterable[Metric], expected_names: Iterable[str]) -> List[str]:
    """Names of extra metrics that never appear on the expected side."""
    known = set(expected_names)
    return sorted({m.name for m in extra if m.name not in known})


# --------------------------- main entrypoint ---------------------------

def assemble_report(
    diff: Diff,
    *,
    config: Dict[str, Any],
    expected_names: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """Build the normalized report JSON used by the console summary and the HTML layer."""
    matching = config.get("matching") or {}
    severity = config.get("severity") or {}
    report_cfg = config.get("report") or {}

    missing = len(diff.missing)
    extra = len(diff.extra)
    matched = len(diff.matched)

    unknown = unregistered_names(diff.extra, expected_names) if expected_names is not None else []

    stats = {
        "compared": matched + missing + extra,
        "matched": matched,
        "missing": missing,
        "extra": extra,
        "unregistered": len(unknown),
    }

    result = compute_severity(severity, changed=missing + extra, compared=stats["compared"])
    if unknown and matching.get("strict_names"):
        result = _max_state(result, "SUSPICIOUS")

    theme = str(report_cfg.get("theme") or "light").strip().lower()
    if theme not in {"light", "dark"}:
        theme = "light"

    return {
        "title": config.get("title"),
        "theme": theme,
        "overall": result,
        "stats": stats,
        "missing": _sorted_rows(diff.missing),
        "extra": _sorted_rows(diff.extra),
        "unregistered_names": unknown,
        "meta": {
            "generated_by": "assemble_report",
            "strict_names": bool(matching.get("strict_names", False)),
            "threshold_ratio": severity.get("threshold_ratio"),
            "threshold_count": severity.get("threshold_count"),
        },
    }
