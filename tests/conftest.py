# Shared fixtures for the tour engine tests, plus a fallback 'qtbot' fixture
# if pytest-qt is not installed so the tree model tests still run headless.

import os
import sys

import pytest

from tours.engine import TourStateEngine
from tours.memory_store import InMemoryTourStore

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
        app = qt_widgets.QApplication.instance() or qt_widgets.QApplication(sys.argv)

        class Bot:
            def __init__(self, app):
                self.app = app

            def addWidget(self, w):  # mimic pytest-qt API subset
                pass

        return Bot(app)


@pytest.fixture
def store():
    return InMemoryTourStore()


@pytest.fixture
def engine(store):
    eng = TourStateEngine(store=store)
    eng.reload_state()
    return eng


@pytest.fixture
def events(engine):
    """Record every event the engine publishes as (name, payload) tuples."""
    received = []
    engine.subscribe("tour_list_changed", lambda e: received.append((e.name, e.payload)))
    engine.subscribe("step_selected", lambda e: received.append((e.name, e.payload)))
    return received
