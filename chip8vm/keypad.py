import numpy as np

from .constants import NUM_KEYS


class Keypad:
    """State of the 16-key hexadecimal keypad, written by the host once per frame."""

    def __init__(self) -> None:
        self.keys = np.zeros(NUM_KEYS, dtype=bool)

    def set(self, key: int, down: bool) -> None:
        if 0 <= key < NUM_KEYS:
            self.keys[key] = down

    def is_down(self, key: int) -> bool:
        if 0 <= key < NUM_KEYS:
            return bool(self.keys[key])
        return False

    def first_down(self) -> int | None:
        """Lowest pressed key, used as the tie-break when waiting for input."""
        pressed = np.flatnonzero(self.keys)
        if len(pressed) == 0:
            return None
        return int(pressed[0])

    def pressed_keys(self) -> list[int]:
        return [int(k) for k in np.flatnonzero(self.keys)]

    def clear(self) -> None:
        self.keys.fill(False)
