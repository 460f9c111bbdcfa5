from typing import Any, Dict, List
from dominate import tags

METRIC_HEADERS = ["Name", "Value", "Timestamp", "Tags"]


def _tags_cell(tag_map: Dict[str, Any]) -> str:
    if not tag_map:
        return "-"
    return ", ".join(f"{k}={v}" if v != "" else f"{k}=*" for k, v in sorted(tag_map.items()))


def metric_row(m: Dict[str, Any]) -> List[str]:
    """Report row (Metric.to_dict shape) -> table cells; empty fields show as '*'."""
    return [
        str(m.get("name", "")),
        str(m.get("value") or "*"),
        str(m.get("timestamp") or "*"),
        _tags_cell(m.get("tags") or {}),
    ]


def render_table_block(headers: List[str], rows: List[List[Any]]):
    """
    Render a generic table block (NO per-table show/hide).
    The section wrapper decides visibility.
    """
    container = tags.div(_class="table-container")

    with container:
        t = tags.table(_class="report-table")
        with t:
            with tags.thead():
                with tags.tr():
                    for h in headers:
                        tags.th(str(h))

            with tags.tbody():
                for r in rows or []:
                    cells = r if isinstance(r, (list, tuple)) else [r]
                    with tags.tr():
                        for c in cells:
                            tags.td(str(c))
    return container


def render_metric_table(title: str, metrics: List[Dict[str, Any]], *, kind: str):
    """Titled table of metrics; renders a placeholder line when the list is empty."""
    block = tags.div(_class=f"metric-block metric-{kind}")
    with block:
        tags.h3(f"{title} ({len(metrics)})")
        if not metrics:
            tags.p("None.", _class="muted")
        else:
            render_table_block(METRIC_HEADERS, [metric_row(m) for m in metrics])
    return block
