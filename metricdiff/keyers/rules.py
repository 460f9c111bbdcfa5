# metricdiff/keyers/rules.py
from __future__ import annotations
import json
from typing import Dict, List, Sequence, Tuple

from metricdiff.metric import Metric
from .interface import Keyer


def _quote(s: str) -> str:
    # double-quoted, backslash-escaped
    return json.dumps(s, ensure_ascii=False)


class CompositeKeyer(Keyer):
    """AND of child keyers; key is the space-joined child keys, in child order."""

    def __init__(self, children: Sequence[Keyer]):
        self.children: List[Keyer] = list(children)

    def match(self, metric: Metric) -> Tuple[bool, str]:
        keys: List[str] = []
        for child in self.children:
            matched, key = child.match(metric)
            if not matched:
                return False, ""
            keys.append(key)
        return True, " ".join(keys)


class NameKeyer(Keyer):
    def __init__(self, expected: str):
        self.expected = expected

    def match(self, metric: Metric) -> Tuple[bool, str]:
        return metric.name == self.expected, metric.name


class ValueKeyer(Keyer):
    def __init__(self, expected: str):
        self.expected = expected

    def match(self, metric: Metric) -> Tuple[bool, str]:
        return metric.value == self.expected, metric.value


class TimestampKeyer(Keyer):
    def __init__(self, expected: str):
        self.expected = expected

    def match(self, metric: Metric) -> Tuple[bool, str]:
        return metric.timestamp == self.expected, metric.timestamp


class TagPresentKeyer(Keyer):
    """Tag must exist; its value is not part of the key."""

    def __init__(self, name: str):
        self.name = name

    def match(self, metric: Metric) -> Tuple[bool, str]:
        return self.name in metric.tags, f"{self.name}=*"


class TagValueKeyer(Keyer):
    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def match(self, metric: Metric) -> Tuple[bool, str]:
        actual = metric.tags.get(self.name, "")
        return actual == self.value, f"{self.name}={_quote(actual)}"


def tags_keyer(tags: Dict[str, str]) -> CompositeKeyer:
    """
    Build the tag composite. Names are sorted so the key does not depend on
    mapping insertion order; an empty tag map yields an always-true keyer
    with an empty key.
    """
    children: List[Keyer] = []
    for name in sorted(tags):
        if tags[name] == "":
            children.append(TagPresentKeyer(name))
        else:
            children.append(TagValueKeyer(name, tags[name]))
    return CompositeKeyer(children)


def metric_keyer(metric: Metric) -> CompositeKeyer:
    """
    Keyer that treats `metric` as a (possibly partial) specification.
    Field order is fixed: name, value, timestamp, tags.
    """
    children: List[Keyer] = [NameKeyer(metric.name)]
    if metric.value != "":
        children.append(ValueKeyer(metric.value))
    if metric.timestamp != "":
        children.append(TimestampKeyer(metric.timestamp))
    children.append(tags_keyer(metric.tags))
    return CompositeKeyer(children)
