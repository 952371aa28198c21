import pytest

from ecoframe.input import (
    KEY_A,
    KEY_G,
    KEY_LEFT,
    KEY_SPACE,
    Action,
    Device,
    InputBind,
    get_map,
    is_down,
    is_pressed,
    is_released,
)


class FakeBackend:
    def __init__(self, down=(), pressed=(), released=()):
        self.down = set(down)
        self.pressed = set(pressed)
        self.released = set(released)

    def key_down(self, key):
        return key in self.down

    def key_pressed(self, key):
        return key in self.pressed

    def key_released(self, key):
        return key in self.released

    def mouse_down(self, button):
        return False

    def mouse_pressed(self, button):
        return False

    def mouse_released(self, button):
        return False


def test_left_map():
    m = get_map(Action.LEFT)
    assert m.name == "left"
    assert m.binds == (InputBind(Device.KEYBOARD, KEY_LEFT), InputBind(Device.KEYBOARD, KEY_A))


def test_every_action_is_bound():
    for action in Action:
        if action == Action.NONE:
            continue
        assert get_map(action).action == action


def test_unbound_action_raises():
    with pytest.raises(KeyError):
        get_map(Action.NONE)


def test_is_down_any_bind():
    backend = FakeBackend(down={KEY_A})
    assert is_down(Action.LEFT, backend) is True
    assert is_down(Action.RIGHT, backend) is False


def test_pressed_and_released_are_separate():
    backend = FakeBackend(pressed={KEY_SPACE}, released={KEY_G})
    assert is_pressed(Action.USE, backend) is True
    assert is_released(Action.USE, backend) is False
    assert is_released(Action.DROP, backend) is True
    assert is_down(Action.DROP, backend) is False