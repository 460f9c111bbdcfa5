# metricdiff/metric.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Metric:
    """
    One observation to compare.

    On the expected side, empty fields relax the match:
      - value == ""      -> any value
      - timestamp == ""  -> any timestamp
      - tags[k] == ""    -> tag k must be present, any value
      - k not in tags    -> tag k is not checked
    """
    name: str
    value: str = ""
    timestamp: str = ""
    tags: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "timestamp": self.timestamp,
            "tags": {k: self.tags[k] for k in sorted(self.tags)},
        }


@dataclass
class Diff:
    """Unmatched residue of a comparison. List order is not meaningful."""
    missing: List[Metric] = field(default_factory=list)
    extra: List[Metric] = field(default_factory=list)
    matched: List[Metric] = field(default_factory=list)  # expected side of matched pairs

    def is_empty(self) -> bool:
        return not self.missing and not self.extra
