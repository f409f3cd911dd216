import logging
from collections.abc import Iterable

import numpy as np
import numpy.typing as npt

from .constants import MEMORY_START_ROM, NUM_REGISTERS, STACK_SIZE
from .display import Display
from .errors import InvalidOpcodeError, StackOverflowError
from .keypad import Keypad
from .memory import Memory
from .utils import display_bytes, nibbles, read_address, read_byte

# https://colineberhardt.github.io/wasm-rust-chip8/web/
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

# decode hint for opcode groups that only define some of their encodings
PARTIAL_GROUPS = {
    0x5: "5xy?",
    0x8: "8xy?",
    0x9: "9xy?",
    0xE: "Ex??",
    0xF: "Fx??",
}


class CPU:
    def __init__(
        self,
        memory: Memory | None = None,
        display: Display | None = None,
        keypad: Keypad | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.memory = memory if memory is not None else Memory()
        self.display = display if display is not None else Display()
        self.keypad = keypad if keypad is not None else Keypad()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.reset_registers()

    def reset_registers(self) -> None:
        self.data_registers = np.zeros(NUM_REGISTERS, dtype=np.uint8)
        self.register_I = 0  # 16 bits
        self.register_PC = MEMORY_START_ROM  # 16 bits
        self.register_DT = 0  # 8 bits
        self.register_ST = 0  # 8 bits
        self.stack = np.zeros(STACK_SIZE, dtype=np.uint16)
        self.stack_pointer = 0
        self.cycles = 0

    def reset(self) -> None:
        self.display.clear()
        self.keypad.clear()
        self.memory.clear()
        self.memory.load_font()
        self.reset_registers()
        logging.debug("Machine reset")

    def load(self, rom_data: bytes | bytearray | Iterable[int] | npt.NDArray[np.uint8]) -> int:
        self.reset()
        size = self.memory.load_program(rom_data)
        logging.info("Loaded ROM (%d bytes)", size)
        return size

    def step(self) -> int:
        operation = self.fetch()
        self.execute(operation)
        self.cycles += 1
        return operation

    def tick_timers(self) -> None:
        if self.register_DT > 0:
            self.register_DT -= 1
        if self.register_ST > 0:
            self.register_ST -= 1

    @property
    def sound_active(self) -> bool:
        return self.register_ST > 0

    def fetch(self) -> int:
        operation = self.memory.read_op(self.register_PC)
        self.register_PC = (self.register_PC + 2) & 0xFFFF
        return operation

    def faulting_pc(self) -> int:
        return (self.register_PC - 2) & 0xFFFF

    def execute(self, operation: int) -> None:  # noqa: C901, PLR0912, PLR0915
        match nibbles(operation):
            case (0x0, 0x0, 0xE, 0x0):
                # 00E0 - CLS                                - Clear the display.
                self.display.clear()
            case (0x0, 0x0, 0xE, 0xE):
                # 00EE - RET                                - Return from a subroutine.
                if self.stack_pointer > 0:
                    self.stack_pointer -= 1
                    self.register_PC = int(self.stack[self.stack_pointer])
            case (0x1, *_):
                # 1nnn - JP addr                            - Jump to location nnn.
                self.register_PC = read_address(operation)
            case (0x2, *_):
                # 2nnn - CALL addr                          - Call subroutine at nnn.
                if self.stack_pointer == STACK_SIZE:
                    raise StackOverflowError(operation, self.faulting_pc(), STACK_SIZE)
                self.stack[self.stack_pointer] = self.register_PC
                self.stack_pointer += 1
                self.register_PC = read_address(operation)
            case (0x3, vx, _, _):
                # 3xkk - SE Vx, byte                        - Skip next instruction if Vx = kk.
                if self.get_register(vx) == read_byte(operation):
                    self.skip()
            case (0x4, vx, _, _):
                # 4xkk - SNE Vx, byte                       - Skip next instruction if Vx != kk.
                if self.get_register(vx) != read_byte(operation):
                    self.skip()
            case (0x5, vx, vy, 0x0):
                # 5xy0 - SE Vx, Vy                          - Skip next instruction if Vx = Vy.
                if self.get_register(vx) == self.get_register(vy):
                    self.skip()
            case (0x6, vx, _, _):
                # 6xkk - LD Vx, byte                        - Set Vx = kk.
                self.set_register(vx, read_byte(operation))
            case (0x7, vx, _, _):
                # 7xkk - ADD Vx, byte                       - Set Vx = Vx + kk.
                self.set_register(vx, self.get_register(vx) + read_byte(operation))
            case (0x8, vx, vy, 0x0):
                # 8xy0 - LD Vx, Vy                          - Set Vx = Vy.
                self.set_register(vx, self.get_register(vy))
            case (0x8, vx, vy, 0x1):
                # 8xy1 - OR Vx, Vy                          - Set Vx = Vx OR Vy, VF = 0.
                self.set_register(vx, self.get_register(vx) | self.get_register(vy))
                self.set_register(0xF, 0)
            case (0x8, vx, vy, 0x2):
                # 8xy2 - AND Vx, Vy                         - Set Vx = Vx AND Vy, VF = 0.
                self.set_register(vx, self.get_register(vx) & self.get_register(vy))
                self.set_register(0xF, 0)
            case (0x8, vx, vy, 0x3):
                # 8xy3 - XOR Vx, Vy                         - Set Vx = Vx XOR Vy, VF = 0.
                self.set_register(vx, self.get_register(vx) ^ self.get_register(vy))
                self.set_register(0xF, 0)
            case (0x8, vx, vy, 0x4):
                # 8xy4 - ADD Vx, Vy                         - Set Vx = Vx + Vy, set VF = carry.
                total = self.get_register(vx) + self.get_register(vy)
                self.set_register(vx, total)
                self.set_register(0xF, 1 if total > 0xFF else 0)
            case (0x8, vx, vy, 0x5):
                # 8xy5 - SUB Vx, Vy                         - Set Vx = Vx - Vy, set VF = NOT borrow.
                value_1 = self.get_register(vx)
                value_2 = self.get_register(vy)
                self.set_register(vx, value_1 - value_2)
                self.set_register(0xF, 1 if value_1 >= value_2 else 0)
            case (0x8, vx, _, 0x6):
                # 8xy6 - SHR Vx {, Vy}                      - Set Vx = Vx SHR 1.
                value = self.get_register(vx)
                self.set_register(vx, value >> 1)
                self.set_register(0xF, value & 0x1)
            case (0x8, vx, vy, 0x7):
                # 8xy7 - SUBN Vx, Vy                        - Set Vx = Vy - Vx, set VF = NOT borrow.
                value_1 = self.get_register(vx)
                value_2 = self.get_register(vy)
                self.set_register(vx, value_2 - value_1)
                self.set_register(0xF, 1 if value_2 >= value_1 else 0)
            case (0x8, vx, _, 0xE):
                # 8xyE - SHL Vx {, Vy}                      - Set Vx = Vx SHL 1.
                value = self.get_register(vx)
                self.set_register(vx, value << 1)
                self.set_register(0xF, value >> 7)
            case (0x9, vx, vy, 0x0):
                # 9xy0 - SNE Vx, Vy                         - Skip next instruction if Vx != Vy.
                if self.get_register(vx) != self.get_register(vy):
                    self.skip()
            case (0xA, *_):
                # Annn - LD I, addr                         - Set I = nnn.
                self.register_I = read_address(operation)
            case (0xB, *_):
                # Bnnn - JP V0, addr                        - Jump to location nnn + V0.
                self.register_PC = read_address(operation) + self.get_register(0x0)
            case (0xC, vx, _, _):
                # Cxkk - RND Vx, byte                       - Set Vx = random byte AND kk.
                rnd = int(self.rng.integers(0, 256))
                self.set_register(vx, rnd & read_byte(operation))
            case (0xD, vx, vy, n):
                # Dxyn - DRW Vx, Vy, nibble                 - Display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision  # noqa: E501
                self.draw_sprite(self.get_register(vx), self.get_register(vy), n)
            case (0xE, vx, 0x9, 0xE):
                # Ex9E - SKP Vx                             - Skip next instruction if key with the value of Vx is pressed.  # noqa: E501
                if self.keypad.is_down(self.get_register(vx)):
                    self.skip()
            case (0xE, vx, 0xA, 0x1):
                # ExA1 - SKNP Vx                            - Skip next instruction if key with the value of Vx is not pressed.  # noqa: E501
                if not self.keypad.is_down(self.get_register(vx)):
                    self.skip()
            case (0xF, vx, 0x0, 0x7):
                # Fx07 - LD Vx, DT                          - Set Vx = delay timer value.
                self.set_register(vx, self.register_DT)
            case (0xF, vx, 0x0, 0xA):
                # Fx0A - LD Vx, K                           - Wait for a key press, store the value of the key in Vx.
                key = self.keypad.first_down()
                if key is None:
                    # re-run this instruction on the next step
                    self.register_PC = (self.register_PC - 2) & 0xFFFF
                else:
                    self.set_register(vx, key)
            case (0xF, vx, 0x1, 0x5):
                # Fx15 - LD DT, Vx                          - Set delay timer = Vx.
                self.register_DT = self.get_register(vx)
            case (0xF, vx, 0x1, 0x8):
                # Fx18 - LD ST, Vx                          - Set sound timer = Vx.
                self.register_ST = self.get_register(vx)
            case (0xF, vx, 0x1, 0xE):
                # Fx1E - ADD I, Vx                          - Set I = I + Vx.
                self.register_I = (self.register_I + self.get_register(vx)) & 0xFFFF
            case (0xF, vx, 0x2, 0x9):
                # Fx29 - LD F, Vx                           - Set I = location of sprite for digit Vx.
                self.register_I = Memory.glyph_address(self.get_register(vx))
            case (0xF, vx, 0x3, 0x3):
                # Fx33 - LD B, Vx                           - Store BCD representation of Vx in memory locations I, I+1, and I+2.  # noqa: E501
                value = self.get_register(vx)
                self.memory.write(self.register_I, value // 100)
                self.memory.write(self.register_I + 1, value // 10 % 10)
                self.memory.write(self.register_I + 2, value % 10)
            case (0xF, vx, 0x5, 0x5):
                # Fx55 - LD [I], Vx                         - Store registers V0 through Vx in memory starting at location I.  # noqa: E501
                for i in range(vx + 1):
                    self.memory.write(self.register_I + i, self.get_register(i))
                self.register_I = (self.register_I + vx + 1) & 0xFFFF
            case (0xF, vx, 0x6, 0x5):
                # Fx65 - LD Vx, [I]                         - Read registers V0 through Vx from memory starting at location I.  # noqa: E501
                for i in range(vx + 1):
                    self.set_register(i, self.memory.read(self.register_I + i))
                self.register_I = (self.register_I + vx + 1) & 0xFFFF
            case (group, *_):
                raise InvalidOpcodeError(operation, self.faulting_pc(), PARTIAL_GROUPS.get(group))

    def draw_sprite(self, x_pos: int, y_pos: int, height: int) -> None:
        self.set_register(0xF, 0)
        graphic_data = self.memory.read_bytes(self.register_I, height)
        for row, line in enumerate(graphic_data):
            y = y_pos + row
            for col in range(8):
                x = x_pos + col
                if not (int(line) >> (7 - col)) & 1 or not self.display.in_bounds(x, y):
                    continue
                if self.display.get_pixel(x, y):
                    self.set_register(0xF, 1)
                self.display.toggle_pixel(x, y)

    def skip(self) -> None:
        self.register_PC = (self.register_PC + 2) & 0xFFFF

    def get_register(self, reg: int) -> int:
        return int(self.data_registers[reg])

    def set_register(self, reg: int, data: int) -> None:
        self.data_registers[reg] = data & 0xFF

    def __str__(self) -> str:
        return (
            f"PC: {self.register_PC, hex(self.register_PC)}, I: {self.register_I}, "
            f"DT: {self.register_DT}, ST: {self.register_ST}, regs: {display_bytes(self.data_registers)}"
        )
