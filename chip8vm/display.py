import numpy as np

from .constants import HEIGHT, WIDTH


class Display:
    def __init__(self) -> None:
        self.screen = np.zeros((HEIGHT, WIDTH), dtype=bool)

    def clear(self) -> None:
        self.screen.fill(False)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < WIDTH and 0 <= y < HEIGHT

    def get_pixel(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self.screen[y, x])

    def toggle_pixel(self, x: int, y: int) -> None:
        if self.in_bounds(x, y):
            self.screen[y, x] = not self.screen[y, x]

    def __str__(self) -> str:
        lines = ["+" + "".join("█" if e else " " for e in row) + "+" for row in self.screen]
        top_bot = ["+" * len(lines[0])]
        return "\n".join(top_bot + lines + top_bot)
