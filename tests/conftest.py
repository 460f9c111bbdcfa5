# metricdiff/tests/conftest.py
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS = ROOT / "tests"

for p in (ROOT, TESTS):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


# Drops handlers and level left on the project logger by setup_logging() calls.
@pytest.fixture(autouse=True)
def _reset_project_logger():
    yield
    from metricdiff.logging import get_logger
    root = get_logger()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


# Captures every metricdiff record down to DEBUG through pytest's caplog.
@pytest.fixture
def debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="metricdiff")
    return caplog
