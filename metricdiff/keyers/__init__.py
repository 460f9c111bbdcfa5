from .interface import Keyer
from .rules import (
    CompositeKeyer,
    NameKeyer,
    TagPresentKeyer,
    TagValueKeyer,
    TimestampKeyer,
    ValueKeyer,
    metric_keyer,
    tags_keyer,
)

__all__ = [
    "Keyer",
    "CompositeKeyer",
    "NameKeyer",
    "ValueKeyer",
    "TimestampKeyer",
    "TagPresentKeyer",
    "TagValueKeyer",
    "metric_keyer",
    "tags_keyer",
]
