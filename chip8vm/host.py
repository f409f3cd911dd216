from collections.abc import Callable

from .constants import CYCLES_PER_FRAME
from .cpu import CPU
from .keypad import Keypad

# COSMAC VIP keypad layout on the left hand side of a QWERTY keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_MAP = {
    0x1: "1",
    0x2: "2",
    0x3: "3",
    0xC: "4",
    0x4: "q",
    0x5: "w",
    0x6: "e",
    0xD: "r",
    0x7: "a",
    0x8: "s",
    0x9: "d",
    0xE: "f",
    0xA: "z",
    0x0: "x",
    0xB: "c",
    0xF: "v",
}


def poll_keypad(keypad: Keypad, is_pressed: Callable[[str], bool]) -> None:
    for key_num, key_name in KEY_MAP.items():
        keypad.set(key_num, bool(is_pressed(key_name)))


PAUSE_KEY = "space"
STEP_MODE_KEY = "tab"
STEP_KEY = "s"


class Controls:
    """Pause and single-step switches of the host, toggled on key press edges."""

    def __init__(self, is_pressed: Callable[[str], bool]) -> None:
        self.is_pressed = is_pressed
        self.paused = False
        self.step_mode = False
        self.held: set[str] = set()
        self.just_pressed: set[str] = set()

    def poll(self) -> None:
        down = {name for name in (PAUSE_KEY, STEP_MODE_KEY, STEP_KEY) if self.is_pressed(name)}
        self.just_pressed = down - self.held
        self.held = down
        if PAUSE_KEY in self.just_pressed:
            self.paused = not self.paused
        if STEP_MODE_KEY in self.just_pressed:
            self.step_mode = not self.step_mode

    def advance(self, cpu: CPU, cycles_per_frame: int = CYCLES_PER_FRAME) -> None:
        if self.paused:
            return
        if not self.step_mode:
            run_frame(cpu, cycles_per_frame)
        elif STEP_KEY in self.just_pressed:
            cpu.step()

    @property
    def mode(self) -> str:
        if self.paused:
            return "PAUSED"
        return "STEP" if self.step_mode else "RUN"


def run_frame(cpu: CPU, cycles_per_frame: int = CYCLES_PER_FRAME) -> None:
    """Run one 60 Hz frame: a batch of instructions followed by a single timer tick."""
    for _ in range(cycles_per_frame):
        cpu.step()
    cpu.tick_timers()


def render(cpu: CPU, rom_name: str = "", controls: Controls | None = None) -> str:
    keys = " ".join(f"{k:X}" for k in cpu.keypad.pressed_keys()) or "None"
    sound = "BEEP" if cpu.sound_active else "    "
    mode = controls.mode if controls is not None else "RUN"
    status = (
        f"ROM: {rom_name} | {mode} | I: 0x{cpu.register_I:04X} | DT: {cpu.register_DT:3d} | "
        f"ST: {cpu.register_ST:3d} | Keys: {keys} | PC: 0x{cpu.register_PC:04X} {sound}"
    )
    return f"{cpu.display}\n{status}\nSpace: Pause | Tab: Step mode | S: Step | Esc: Quit"
