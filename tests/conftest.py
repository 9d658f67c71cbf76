import os
import sys
import tempfile
from pathlib import Path

import pytest

# Must happen before anything imports tt: paths and the logger are resolved at import time.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ["TIMETAP_HOME"] = tempfile.mkdtemp(prefix="timetap-tests-")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_APP = None


@pytest.fixture(scope="session", autouse=True)
def _qapp():
    """One QApplication for the whole run, timers need it."""
    global _APP
    from PySide6.QtWidgets import QApplication

    _APP = QApplication.instance() or QApplication([])
    yield _APP
