"""Event types and an EventBus for decoupled publish/subscribe communication."""

from enum import Enum, auto
from typing import Any, Callable
from collections import defaultdict


class EventType(Enum):
    # Input
    KEY_CHANGED = auto()      # data: key_code (int), pressed (bool)

    # Frame events
    FRAME_TICK = auto()       # data: dt (float, milliseconds)

    # Asset loading
    MESH_LOADED = auto()      # data: mesh (Mesh)
    TEXTURE_LOADED = auto()   # data: texture (TextureImage)
    ASSET_FAILED = auto()     # data: asset (str), error (Exception)

    # Notifications
    STATE_CHANGED = auto()    # data: state (AppState), event_type (EventType)


class EventBus:
    """Simple publish/subscribe event system."""

    def __init__(self):
        self._handlers: dict[EventType, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, **data: Any) -> None:
        for handler in list(self._handlers[event_type]):
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
