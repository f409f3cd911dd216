import logging
from collections.abc import Iterable

import numpy as np
import numpy.typing as npt

from .constants import FONT_GLYPH_SIZE, MEMORY_SIZE, MEMORY_START_FONT, MEMORY_START_ROM
from .data import FONT_DATA


class Memory:
    def __init__(self) -> None:
        self.memory = np.zeros(MEMORY_SIZE, dtype=np.uint8)
        self.load_font()

    def load_font(self) -> None:
        font_data = FONT_DATA
        self.memory[MEMORY_START_FONT : MEMORY_START_FONT + len(font_data)] = font_data

    def load_program(self, rom_data: bytes | bytearray | Iterable[int] | npt.NDArray[np.uint8]) -> int:
        """Copy a program to the ROM area and return how many bytes were stored.

        Bytes that would land at or beyond the end of memory are dropped.
        """
        if not isinstance(rom_data, bytes | bytearray):
            # by value, so wider integer arrays are not reinterpreted as raw bytes
            rom_data = bytes(list(rom_data))
        data = np.frombuffer(rom_data, dtype=np.uint8)
        room = MEMORY_SIZE - MEMORY_START_ROM
        if len(data) > room:
            logging.warning("ROM is %d bytes, truncating to %d", len(data), room)
            data = data[:room]
        self.memory[MEMORY_START_ROM : MEMORY_START_ROM + len(data)] = data
        return len(data)

    def clear(self) -> None:
        self.memory.fill(0)

    def read(self, address: int) -> int:
        if 0 <= address < MEMORY_SIZE:
            return int(self.memory[address])
        return 0

    def write(self, address: int, value: int) -> None:
        if 0 <= address < MEMORY_SIZE:
            self.memory[address] = value & 0xFF

    def read_bytes(self, address: int, num: int) -> npt.NDArray[np.uint8]:
        if 0 <= address and address + num <= MEMORY_SIZE:
            return self.memory[address : address + num].copy()
        return np.asarray([self.read(address + i) for i in range(num)], dtype=np.uint8)

    def read_op(self, address: int) -> int:
        return (self.read(address) << 8) | self.read(address + 1)

    @staticmethod
    def glyph_address(digit: int) -> int:
        return MEMORY_START_FONT + digit * FONT_GLYPH_SIZE

    def __str__(self) -> str:
        return "\n".join(
            f"{address:03X}: {bytes(self.memory[address : address + 32]).hex(' ')}"
            for address in range(0, MEMORY_SIZE, 32)
        )
