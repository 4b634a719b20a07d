"""PySide6 QOpenGLWidget subclass bridging Qt events and OpenGL rendering."""

import logging
import traceback

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QKeyEvent, QSurfaceFormat
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from meshwalk.constants import (
    FRAME_INTERVAL_MS,
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
)
from meshwalk.coordination.scene_composer import compose
from meshwalk.core.clock import DeltaClock
from meshwalk.core.events import EventType
from meshwalk.core.state import Dispatcher
from meshwalk.rendering.renderer import GLRenderer

logger = logging.getLogger(__name__)

# Qt key -> key code understood by the input state
_QT_KEY_CODES = {
    Qt.Key.Key_Left: KEY_LEFT,
    Qt.Key.Key_Up: KEY_UP,
    Qt.Key.Key_Right: KEY_RIGHT,
    Qt.Key.Key_Down: KEY_DOWN,
    Qt.Key.Key_A: KEY_A,
    Qt.Key.Key_D: KEY_D,
    Qt.Key.Key_S: KEY_S,
    Qt.Key.Key_W: KEY_W,
}


def create_gl_format() -> QSurfaceFormat:
    """Create an OpenGL 3.3 core-profile surface format."""
    fmt = QSurfaceFormat()
    fmt.setVersion(3, 3)
    fmt.setProfile(QSurfaceFormat.OpenGLContextProfile.CoreProfile)
    fmt.setDepthBufferSize(24)
    fmt.setSwapBehavior(QSurfaceFormat.SwapBehavior.DoubleBuffer)
    return fmt


def qt_key_to_code(key: int) -> int:
    """Translate a Qt key to an input key code (-1 when unbound)."""
    return _QT_KEY_CODES.get(key, -1)


class GLViewport(QOpenGLWidget):
    """OpenGL viewport that feeds key and frame events to a Dispatcher.

    A QTimer posts one ``FRAME_TICK`` per frame and drains the
    dispatcher.  Every ``STATE_CHANGED`` on the dispatcher's bus
    schedules a repaint; :meth:`paintGL` draws whatever the current
    state composes to.

    Parameters
    ----------
    dispatcher : Dispatcher
        Owner of the application state.
    parent : QWidget, optional
        Parent widget.
    """

    def __init__(self, dispatcher: Dispatcher, parent=None) -> None:
        super().__init__(parent)
        self.setFormat(create_gl_format())

        self.dispatcher = dispatcher
        self.renderer: GLRenderer = GLRenderer()
        self.clock = DeltaClock()

        # Refresh timer (~60 fps)
        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_timer)

        self.dispatcher.event_bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed)

        # Accept focus for keyboard events
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # ------------------------------------------------------------------
    # QOpenGLWidget overrides
    # ------------------------------------------------------------------

    def initializeGL(self) -> None:
        """Called once when the GL context is ready."""
        try:
            logger.info("GLViewport: initialising OpenGL.")
            self.renderer.init_gl()
            self.clock.reset()
            self._timer.start()
        except Exception:
            logger.error("initializeGL failed:\n%s", traceback.format_exc())

    def resizeGL(self, w: int, h: int) -> None:
        """Called on every resize.

        Qt passes logical dimensions; we scale by devicePixelRatio for
        the actual framebuffer size (needed on Retina/HiDPI displays).
        """
        dpr = self.devicePixelRatio()
        self.renderer.resize(int(w * dpr), int(h * dpr))

    def paintGL(self) -> None:
        """Called each frame to render the current state."""
        try:
            self.renderer.render(compose(self.dispatcher.state))
        except Exception:
            logger.error("paintGL failed:\n%s", traceback.format_exc())

    # ------------------------------------------------------------------
    # Key events -> dispatcher
    # ------------------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if not self._post_key(event, pressed=True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if not self._post_key(event, pressed=False):
            super().keyReleaseEvent(event)

    def _post_key(self, event: QKeyEvent, pressed: bool) -> bool:
        if event.isAutoRepeat():
            event.accept()
            return True
        code = qt_key_to_code(event.key())
        if code < 0:
            return False
        self.dispatcher.post(EventType.KEY_CHANGED, key_code=code, pressed=pressed)
        event.accept()
        return True

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Explicitly release GL resources. Call before the widget is destroyed."""
        self._timer.stop()
        self.dispatcher.event_bus.unsubscribe(EventType.STATE_CHANGED, self._on_state_changed)
        self.makeCurrent()
        self.renderer.destroy()
        self.doneCurrent()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _on_timer(self) -> None:
        """Timer callback: advance the simulation one frame."""
        self.dispatcher.post(EventType.FRAME_TICK, dt=self.clock.get_delta())
        self.dispatcher.process()

    def _on_state_changed(self, state, event_type) -> None:
        self.update()
