# metricdiff/interfaces.py
from __future__ import annotations
from enum import Enum


class ContrastState(Enum):
    """Outcome of a verification run, ordered by severity."""
    MATCH = 0
    WARN = 1
    SUSPICIOUS = 2
