"""Mapping of game actions to keyboard and mouse bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

KEY_SPACE = 32
KEY_A = 65
KEY_B = 66
KEY_D = 68
KEY_G = 71
KEY_S = 83
KEY_W = 87
KEY_TAB = 258
KEY_RIGHT = 262
KEY_LEFT = 263
KEY_DOWN = 264
KEY_UP = 265
KEY_LEFT_SHIFT = 340
KEY_LEFT_CONTROL = 341
KEY_RIGHT_SHIFT = 344
KEY_RIGHT_CONTROL = 345


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    UP = 3
    DOWN = 4
    USE = 5
    SPRINT = 6
    DROP = 7
    CTRL = 8
    TOGGLE_INV = 9
    TOGGLE_DEMOLITION = 10


class Device(IntEnum):
    NONE = 0
    KEYBOARD = 1
    MOUSE = 2
    JOYSTICK = 3


@dataclass(frozen=True)
class InputBind:
    device: Device
    id: int


@dataclass(frozen=True)
class InputMap:
    name: str
    action: Action
    binds: tuple[InputBind, ...]


class InputBackend(Protocol):
    """Source of raw key and mouse button states."""

    def key_down(self, key: int) -> bool: ...
    def key_pressed(self, key: int) -> bool: ...
    def key_released(self, key: int) -> bool: ...
    def mouse_down(self, button: int) -> bool: ...
    def mouse_pressed(self, button: int) -> bool: ...
    def mouse_released(self, button: int) -> bool: ...


def _keys(*keys: int) -> tuple[InputBind, ...]:
    return tuple(InputBind(Device.KEYBOARD, key) for key in keys)


_MAPS = (
    InputMap("left", Action.LEFT, _keys(KEY_LEFT, KEY_A)),
    InputMap("right", Action.RIGHT, _keys(KEY_RIGHT, KEY_D)),
    InputMap("up", Action.UP, _keys(KEY_UP, KEY_W)),
    InputMap("down", Action.DOWN, _keys(KEY_DOWN, KEY_S)),
    InputMap("use", Action.USE, _keys(KEY_SPACE)),
    InputMap("sprint", Action.SPRINT, _keys(KEY_LEFT_SHIFT, KEY_RIGHT_SHIFT)),
    InputMap("drop", Action.DROP, _keys(KEY_G)),
    InputMap("ctrl", Action.CTRL, _keys(KEY_LEFT_CONTROL, KEY_RIGHT_CONTROL)),
    InputMap("toggle inventory", Action.TOGGLE_INV, _keys(KEY_TAB)),
    InputMap("toggle build", Action.TOGGLE_DEMOLITION, _keys(KEY_B)),
)


def get_map(action: Action) -> InputMap:
    """Return the binding map of ``action``; raise KeyError if unbound."""
    for input_map in _MAPS:
        if input_map.action == action:
            return input_map
    raise KeyError(f"key not bound: {action!r}")


def _check(action: Action, keyboard, mouse) -> bool:
    for bind in get_map(action).binds:
        if bind.device == Device.KEYBOARD and keyboard(bind.id):
            return True
        if bind.device == Device.MOUSE and mouse(bind.id):
            return True
    return False


def is_down(action: Action, backend: InputBackend) -> bool:
    return _check(action, backend.key_down, backend.mouse_down)


def is_pressed(action: Action, backend: InputBackend) -> bool:
    return _check(action, backend.key_pressed, backend.mouse_pressed)


def is_released(action: Action, backend: InputBackend) -> bool:
    return _check(action, backend.key_released, backend.mouse_released)