# metricdiff/config.py
from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict
import yaml
from metricdiff import logging as mlog

_SUPPORTED_CONFIG_VERSIONS = {"0.1"}
_THEMES = {"light", "dark"}

_DEFAULTS: Dict[str, Any] = {
    "title": None,
    "matching": {"strict_names": False},
    "severity": {"threshold_ratio": None, "threshold_count": None},
    "report": {"theme": "light", "print_diffs": 3},
}


def default_config() -> Dict[str, Any]:
    return deepcopy(_DEFAULTS)


def _as_int(v: Any) -> int | None:
    """Integral value of v, or None. Bools and fractional/infinite floats are rejected."""
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


def _as_float(v: Any) -> float | None:
    if isinstance(v, bool):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


class ConfigLoader:
    """
    Loads a YAML verification config:
      config_version: "0.1"
      title: str (optional)
      matching: { strict_names: bool }
      severity: { threshold_ratio: 0..1, threshold_count: int > 0 }
      report:   { theme: light|dark, print_diffs: int >= 0 }

    Missing keys fall back to default_config(). With strict=False, invalid
    optional values are logged and reset to their defaults instead of raising.
    """

    def __init__(self, yaml_path: str, *, strict: bool = True):
        self.yaml_path = yaml_path
        self.strict = strict

    def _warn_or_raise(self, msg: str, *, fatal: bool = False) -> None:
        if fatal or self.strict:
            mlog.log_err(msg)
            raise ValueError(msg)
        mlog.log_warn(msg)

    def _section(self, raw: Dict[str, Any], name: str) -> Dict[str, Any]:
        sec = raw.get(name)
        if sec is None:
            return {}
        if not isinstance(sec, dict):
            self._warn_or_raise(f"'{name}' must be a mapping.", fatal=True)
        return sec

    def _normalize_matching(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        sec = self._section(raw, "matching")
        strict_names = sec.get("strict_names", False)
        if not isinstance(strict_names, bool):
            self._warn_or_raise(f"matching.strict_names must be true or false, got {strict_names!r}.")
            strict_names = False
        return {"strict_names": strict_names}

    def _normalize_severity(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        sec = self._section(raw, "severity")
        ratio = sec.get("threshold_ratio")
        count = sec.get("threshold_count")

        if ratio is not None:
            parsed = _as_float(ratio)
            if parsed is None or not 0 <= parsed <= 1:
                self._warn_or_raise(f"severity.threshold_ratio must be a number within [0, 1], got {ratio!r}.")
                parsed = None
            ratio = parsed

        if count is not None:
            parsed_count = _as_int(count)
            if parsed_count is None or parsed_count <= 0:
                self._warn_or_raise(f"severity.threshold_count must be a positive integer, got {count!r}.")
                parsed_count = None
            count = parsed_count

        return {"threshold_ratio": ratio, "threshold_count": count}

    def _normalize_report(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        sec = self._section(raw, "report")
        out = dict(_DEFAULTS["report"])

        theme = sec.get("theme")
        if theme is not None:
            t = str(theme).strip().lower()
            if t in _THEMES:
                out["theme"] = t
            else:
                self._warn_or_raise(f"report.theme must be 'light' or 'dark', got {theme!r}.")

        n = sec.get("print_diffs")
        if n is not None:
            if isinstance(n, int) and not isinstance(n, bool) and n >= 0:
                out["print_diffs"] = n
            else:
                self._warn_or_raise(f"report.print_diffs must be a non-negative integer, got {n!r}.")

        return out

    def load(self) -> Dict[str, Any]:
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            self._warn_or_raise("Config root must be a mapping.", fatal=True)

        version = str(raw.get("config_version", "")).strip()
        if version not in _SUPPORTED_CONFIG_VERSIONS:
            self._warn_or_raise(
                f"Unsupported or missing config_version '{version}'. Supported: {sorted(_SUPPORTED_CONFIG_VERSIONS)}",
                fatal=True,
            )

        title = raw.get("title")
        return {
            "title": str(title) if title is not None else None,
            "matching": self._normalize_matching(raw),
            "severity": self._normalize_severity(raw),
            "report": self._normalize_report(raw),
        }
