from __future__ import annotations

from .default import METRIC_HEADERS, metric_row, render_metric_table, render_table_block

__all__ = ["METRIC_HEADERS", "metric_row", "render_metric_table", "render_table_block"]
