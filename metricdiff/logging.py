# metricdiff/logging.py
from __future__ import annotations
import logging as _logging
import os
import sys

ROOT_LOGGER = "metricdiff"

# mark -> (glyph, ansi colour)
_MARKS = {
    "ok": ("✓", "\x1b[32m"),
    "warn": ("⚠", "\x1b[33m"),
    "err": ("✖", "\x1b[31m"),
    "step": ("→", "\x1b[36m"),
}
_GRAY = "\x1b[90m"
_RESET = "\x1b[0m"


def _supports_color(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty()) and os.environ.get("TERM") not in (None, "dumb")


def get_logger(component: str | None = None) -> _logging.Logger:
    """Project logger, or its `metricdiff.<component>` child."""
    if not component:
        return _logging.getLogger(ROOT_LOGGER)
    return _logging.getLogger(f"{ROOT_LOGGER}.{component}")


_CONSOLE = get_logger("verify")


class ConsoleFormatter(_logging.Formatter):
    """
    Renders the extras log helpers attach to records:
      mark   - one of _MARKS, rendered as a leading glyph
      detail - trailing text, dimmed when colour is on
    """

    def __init__(self, fmt: str = "%(message)s", *, color: bool = False):
        super().__init__(fmt)
        self.color = color

    def _paint(self, text: str, ansi: str) -> str:
        return f"{ansi}{text}{_RESET}" if self.color else text

    def formatMessage(self, record: _logging.LogRecord) -> str:
        msg = record.message
        detail = getattr(record, "detail", "")
        if detail:
            msg = f"{msg} {self._paint(detail, _GRAY)}"
        mark = _MARKS.get(getattr(record, "mark", ""))
        if mark:
            glyph, ansi = mark
            msg = f"{self._paint(glyph, ansi)} {msg}"
        record.message = msg
        return super().formatMessage(record)


def verbosity_level(verbosity: int) -> int:
    """0→WARNING, 1→INFO, 2+→DEBUG."""
    if verbosity >= 2:
        return _logging.DEBUG
    if verbosity == 1:
        return _logging.INFO
    return _logging.WARNING


def setup_logging(verbosity: int = 0, log_file: str | None = None) -> _logging.Logger:
    """
    Attach a stdout handler (and optionally a UTF-8 file handler with
    timestamps) to the project logger. Calling it again replaces the handlers.
    """
    level = verbosity_level(verbosity)
    root = get_logger()
    root.handlers.clear()
    root.setLevel(level)

    sh = _logging.StreamHandler(stream=sys.stdout)
    sh.setLevel(level)
    sh.setFormatter(ConsoleFormatter(color=_supports_color(sys.stdout)))
    root.addHandler(sh)

    if log_file:
        fh = _logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(ConsoleFormatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
        root.addHandler(fh)

    return root


def log_info(msg: str) -> None:
    _CONSOLE.info(msg)

def log_debug(msg: str) -> None:
    _CONSOLE.debug(msg)

def log_warn(msg: str) -> None:
    _CONSOLE.warning(msg, extra={"mark": "warn"})

def log_err(msg: str) -> None:
    _CONSOLE.error(msg, extra={"mark": "err"})

def log_ok(msg: str) -> None:
    _CONSOLE.info(msg, extra={"mark": "ok"})

def log_step(label: str, value: str = "") -> None:
    _CONSOLE.info(label, extra={"mark": "step", "detail": value})
