import pytest

from chip8vm.keypad import Keypad


@pytest.fixture()
def keypad() -> Keypad:
    return Keypad()


def test_first_down_is_lowest_key(keypad: Keypad):
    assert keypad.first_down() is None
    keypad.set(0xC, True)
    keypad.set(0x5, True)
    assert keypad.first_down() == 0x5
    assert keypad.pressed_keys() == [0x5, 0xC]
    keypad.set(0x5, False)
    assert keypad.first_down() == 0xC


@pytest.mark.parametrize("key", [-1, 16, 0xFF])
def test_out_of_range_keys(keypad: Keypad, key: int):
    keypad.set(key, True)
    assert not keypad.is_down(key)
    assert keypad.first_down() is None


def test_clear(keypad: Keypad):
    keypad.set(0x0, True)
    assert keypad.is_down(0x0)
    keypad.clear()
    assert not keypad.is_down(0x0)
