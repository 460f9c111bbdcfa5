# metricdiff/tests/utility.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from metricdiff.metric import Diff, Metric
from metricdiff.reporting.reporting import format_metric


# -------------------------
# Paths
# -------------------------

# Returns repository root (one level above tests/).
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


# Returns the report generator script path (report_html.py in repo root).
def report_html_path() -> Path:
    return project_root() / "report_html.py"


# -------------------------
# Builders
# -------------------------

# Short constructor so fixtures read like the metric lines they stand for.
def metric(name: str, value: str = "", timestamp: str = "", tags: Optional[Dict[str, str]] = None) -> Metric:
    return Metric(name=name, value=value, timestamp=timestamp, tags=dict(tags or {}))


# Writes a YAML config file into tmp_path and returns its path as str.
def write_config(tmp_path: Path, text: str, name: str = "config.yml") -> str:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


# -------------------------
# Assertions helpers
# -------------------------

# Order-insensitive view of a metric list (Diff lists carry no ordering guarantee).
def as_set(metrics: Iterable[Metric]) -> Set[str]:
    return {format_metric(m) for m in metrics}


# Sorted one-line renderings, handy for exact comparisons in assertions.
def lines(metrics: Iterable[Metric]) -> List[str]:
    return sorted(format_metric(m) for m in metrics)


# Asserts that a Diff reports nothing missing and nothing extra.
def assert_empty_diff(diff: Diff) -> None:
    assert diff.missing == [], f"unexpected missing: {lines(diff.missing)}"
    assert diff.extra == [], f"unexpected extra: {lines(diff.extra)}"


# Loads a JSON file into a dict (fails if the root isn't a mapping).
def load_json(path: Path) -> Dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise AssertionError(f"JSON did not parse into dict: {path}")
    return data


# Checks whether a dict looks like the report JSON consumed by report_html.py.
def is_report_json(d: Dict[str, Any]) -> bool:
    return (
        isinstance(d.get("overall"), str)
        and isinstance(d.get("theme"), str)
        and isinstance(d.get("stats"), dict)
        and isinstance(d.get("missing"), list)
        and isinstance(d.get("extra"), list)
    )
