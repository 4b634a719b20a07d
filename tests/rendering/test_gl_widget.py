"""Tests for the Qt viewport's event plumbing (offscreen, never shown)."""

import os

import pytest

pytest.importorskip("OpenGL.GL")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from meshwalk.core.events import EventType
from meshwalk.core.state import Dispatcher
from meshwalk.rendering.gl_widget import GLViewport, qt_key_to_code


@pytest.fixture(scope="module")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def viewport(qapp):
    dispatcher = Dispatcher()
    view = GLViewport(dispatcher)
    view.repaints = []
    view.update = lambda: view.repaints.append(dispatcher.state)
    yield view
    dispatcher.event_bus.unsubscribe(EventType.STATE_CHANGED, view._on_state_changed)
    view.deleteLater()


def _key(kind, key, auto_repeat=False):
    return QKeyEvent(kind, key, Qt.KeyboardModifier.NoModifier, "", auto_repeat)


def test_qt_key_translation():
    assert qt_key_to_code(Qt.Key.Key_W) == 87
    assert qt_key_to_code(Qt.Key.Key_Left) == 37
    assert qt_key_to_code(Qt.Key.Key_Space) == -1


def test_state_change_schedules_repaint(viewport):
    viewport.dispatcher.dispatch(EventType.KEY_CHANGED, key_code=87, pressed=True)
    assert len(viewport.repaints) == 1
    assert viewport.repaints[0].keys.w is True


def test_timer_tick_advances_state_and_repaints(viewport):
    viewport.dispatcher.post(EventType.KEY_CHANGED, key_code=87, pressed=True)
    viewport._on_timer()
    assert viewport.dispatcher.pending == 0
    assert len(viewport.repaints) == 2
    assert viewport.dispatcher.state.keys.w is True


def test_key_press_and_release_are_posted(viewport):
    viewport.keyPressEvent(_key(QEvent.Type.KeyPress, Qt.Key.Key_A))
    viewport.dispatcher.process()
    assert viewport.dispatcher.state.keys.a is True
    viewport.keyReleaseEvent(_key(QEvent.Type.KeyRelease, Qt.Key.Key_A))
    viewport.dispatcher.process()
    assert viewport.dispatcher.state.keys.a is False


def test_auto_repeat_is_ignored(viewport):
    viewport.keyPressEvent(_key(QEvent.Type.KeyPress, Qt.Key.Key_D, auto_repeat=True))
    assert viewport.dispatcher.pending == 0


def test_unbound_key_is_not_posted(viewport):
    viewport.keyPressEvent(_key(QEvent.Type.KeyPress, Qt.Key.Key_Space))
    assert viewport.dispatcher.pending == 0
