"""Keyboard flag state, updated by key-down / key-up events."""

from dataclasses import dataclass, replace

from meshwalk.constants import (
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
)


@dataclass(frozen=True)
class InputState:
    """Pressed/released flags for the eight movement keys."""
    # Arrows: look up/down, turn left/right
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    # Walk: forward/back, strafe left/right
    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False


# Key code -> InputState field name
KEY_BINDINGS: dict[int, str] = {
    KEY_UP: "up",
    KEY_DOWN: "down",
    KEY_LEFT: "left",
    KEY_RIGHT: "right",
    KEY_W: "w",
    KEY_A: "a",
    KEY_S: "s",
    KEY_D: "d",
}


def transition(state: InputState, key_code: int, pressed: bool) -> InputState:
    """Return *state* with the flag bound to *key_code* set to *pressed*.

    Unbound key codes leave the state unchanged.
    """
    flag = KEY_BINDINGS.get(key_code)
    if flag is None:
        return state
    return replace(state, **{flag: bool(pressed)})
