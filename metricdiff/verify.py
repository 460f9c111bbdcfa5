# metricdiff/verify.py
from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from metricdiff import logging as mlog
from metricdiff.config import default_config
from metricdiff.differ import diff_metrics
from metricdiff.metric import Metric
from metricdiff.reporting.reporting import assemble_report, exit_code, format_metric


def _preview(label: str, metrics: List[Metric], limit: int) -> None:
    if not metrics or limit <= 0:
        return
    shown = sorted(metrics, key=format_metric)[:limit]
    mlog.log_info(f"    • {label}: {len(metrics)}")
    for m in shown:
        mlog.log_info(f"       - {format_metric(m)}")
    if len(metrics) > limit:
        mlog.log_info(f"       … {len(metrics) - limit} more")


def verify_metrics(
    expected: Sequence[Metric],
    actual: Sequence[Metric],
    *,
    config: Optional[Dict[str, Any]] = None,
    output_file: Optional[str] = None,
) -> Tuple[Dict[str, Any], int]:
    """
    Diff `actual` against `expected`, log a summary and optionally write the
    report JSON. Returns (report, exit code).
    """
    cfg = config or default_config()
    report_cfg = cfg.get("report") or {}

    mlog.log_step("Comparing metrics:", f"expected={len(expected)} actual={len(actual)}")
    diff = diff_metrics(expected, actual)

    report = assemble_report(diff, config=cfg, expected_names=[m.name for m in expected])
    stats = report["stats"]
    mlog.log_info(
        f"    • matched {stats['matched']}/{stats['compared']}, "
        f"missing {stats['missing']}, extra {stats['extra']}"
    )

    limit = int(report_cfg.get("print_diffs", 3) or 0)
    _preview("missing", diff.missing, limit)
    _preview("extra", diff.extra, limit)

    for name in report["unregistered_names"]:
        mlog.log_warn(f"metric '{name}' is not part of the expected set")

    if output_file:
        mlog.log_step("Writing output JSON:", output_file)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

    code = exit_code(report["overall"])
    if code == 0:
        mlog.log_ok("All expected metrics matched.")
    else:
        mlog.log_err(f"Verification result: {report['overall']}")
    return report, code
