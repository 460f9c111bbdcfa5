# metricdiff/keyers/interface.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple

from metricdiff.metric import Metric


class Keyer(ABC):
    """
    Matching rule for one field (or a group of fields) of a Metric.
    Implementations must be pure: same metric in, same answer out.
    """

    @abstractmethod
    def match(self, metric: Metric) -> Tuple[bool, str]:
        """
        Return (matched, key). The key summarizes the matched value and is
        only meaningful when matched is True.
        """
        ...
