# metricdiff/differ.py
from __future__ import annotations
from typing import Dict, Iterable, List, Sequence, Tuple

from metricdiff.logging import get_logger
from metricdiff.keyers import Keyer, metric_keyer
from metricdiff.metric import Diff, Metric

KeyerMap = Dict[str, List[Keyer]]
KeyMap = Dict[str, Metric]

_log = get_logger("differ")


def diff_metrics(expected: Sequence[Metric], actual: Sequence[Metric]) -> Diff:
    """
    Compare `actual` against the (possibly partial) `expected` metrics.

    Keyers are derived once from `expected` and applied to both sides, so an
    actual metric with extra tags, or a value the expected side left empty,
    lands on the same key as its expected counterpart.
    """
    keyers = metric_keyers(expected)
    expected_keys = metric_key_map(expected, keyers)
    actual_keys = metric_key_map(actual, keyers)
    missing, extra = disjunct(expected_keys, actual_keys)
    matched = [m for k, m in expected_keys.items() if k in actual_keys]
    _log.debug(
        "expected=%d actual=%d missing=%d extra=%d",
        len(expected_keys), len(actual_keys), len(missing), len(extra),
    )
    return Diff(missing=missing, extra=extra, matched=matched)


def metric_keyers(expected: Iterable[Metric]) -> KeyerMap:
    """One keyer per expected metric, grouped by name in input order."""
    by_name: KeyerMap = {}
    for m in expected:
        by_name.setdefault(m.name, []).append(metric_keyer(m))
    return by_name


def metric_key_map(metrics: Iterable[Metric], keyers: KeyerMap) -> KeyMap:
    """
    Map each metric to the key of the first registered keyer that matches it.
    Metrics nothing matches get their own full key. Colliding keys keep the
    last metric.
    """
    key_map: KeyMap = {}
    for metric in metrics:
        key = _first_match(metric, keyers.get(metric.name, []))
        if key is None:
            _, key = metric_keyer(metric).match(metric)
            _log.debug("no keyer matched %r, using self key %r", metric.name, key)
        key_map[key] = metric
    return key_map


def _first_match(metric: Metric, candidates: List[Keyer]) -> str | None:
    for keyer in candidates:
        matched, key = keyer.match(metric)
        if matched:
            return key
    return None


def disjunct(a: KeyMap, b: KeyMap) -> Tuple[List[Metric], List[Metric]]:
    """Return (values keyed only in a, values keyed only in b)."""
    only_in_a = [m for k, m in a.items() if k not in b]
    only_in_b = [m for k, m in b.items() if k not in a]
    return only_in_a, only_in_b
