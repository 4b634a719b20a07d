"""Application state and the single-threaded event dispatcher.

The whole application is one immutable :class:`AppState` snapshot.
Every external happening (key press, frame tick, asset completion) is
an event; :func:`apply_event` maps ``(state, event)`` to the next state
and :class:`Dispatcher` applies queued events strictly one at a time.
"""

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from meshwalk.core.events import EventBus, EventType
from meshwalk.core.input_state import InputState, transition
from meshwalk.core.mesh import EMPTY_MESH, Mesh
from meshwalk.core.movement import Pose, tick
from meshwalk.core.texture import TextureImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    """Everything the frame loop needs.

    mesh stays EMPTY_MESH and texture stays None until their loads finish.
    """
    mesh: Mesh = EMPTY_MESH
    texture: Optional[TextureImage] = None
    pose: Pose = field(default_factory=Pose)
    keys: InputState = field(default_factory=InputState)


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------

def _on_key_changed(state: AppState, key_code: int = 0, pressed: bool = False, **kw) -> AppState:
    keys = transition(state.keys, key_code, pressed)
    if keys is state.keys:
        return state
    return replace(state, keys=keys)


def _on_frame_tick(state: AppState, dt: float = 0.0, **kw) -> AppState:
    return replace(state, pose=tick(dt, state.keys, state.pose))


def _on_mesh_loaded(state: AppState, mesh: Mesh = EMPTY_MESH, **kw) -> AppState:
    return replace(state, mesh=mesh)


def _on_texture_loaded(state: AppState, texture: Optional[TextureImage] = None, **kw) -> AppState:
    return replace(state, texture=texture)


def _on_asset_failed(state: AppState, **kw) -> AppState:
    return state


_TRANSITIONS: dict[EventType, Callable[..., AppState]] = {
    EventType.KEY_CHANGED: _on_key_changed,
    EventType.FRAME_TICK: _on_frame_tick,
    EventType.MESH_LOADED: _on_mesh_loaded,
    EventType.TEXTURE_LOADED: _on_texture_loaded,
    EventType.ASSET_FAILED: _on_asset_failed,
}


def apply_event(state: AppState, event_type: EventType, **data: Any) -> AppState:
    """Return the state that follows *state* after one event."""
    handler = _TRANSITIONS.get(event_type)
    if handler is None:
        return state
    return handler(state, **data)


# ------------------------------------------------------------------
# Dispatcher
# ------------------------------------------------------------------

class Dispatcher:
    """Owns the current :class:`AppState` and a FIFO of pending events.

    :meth:`post` only enqueues, so it is safe to call from event handlers
    and asset callbacks.  :meth:`process` drains the queue; events posted
    during a drain are handled in the same drain, after those already
    queued.  Each applied event is announced as ``STATE_CHANGED`` on the
    bus.
    """

    def __init__(self, state: Optional[AppState] = None, event_bus: Optional[EventBus] = None):
        self.state: AppState = state if state is not None else AppState()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self._queue: deque[tuple[EventType, dict[str, Any]]] = deque()
        self._processing: bool = False

    def post(self, event_type: EventType, **data: Any) -> None:
        self._queue.append((event_type, data))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def process(self) -> int:
        """Apply all queued events in order; return how many were applied."""
        if self._processing:
            return 0
        self._processing = True
        count = 0
        try:
            while self._queue:
                event_type, data = self._queue.popleft()
                self.state = apply_event(self.state, event_type, **data)
                count += 1
                self.event_bus.publish(
                    EventType.STATE_CHANGED, state=self.state, event_type=event_type,
                )
        finally:
            self._processing = False
        return count

    def dispatch(self, event_type: EventType, **data: Any) -> AppState:
        """Post one event and drain the queue."""
        self.post(event_type, **data)
        self.process()
        return self.state
