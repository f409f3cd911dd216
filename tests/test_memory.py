import logging

import numpy as np
import pytest

from chip8vm.constants import MEMORY_SIZE, MEMORY_START_ROM
from chip8vm.data import FONT_DATA
from chip8vm.memory import Memory


@pytest.fixture()
def memory() -> Memory:
    return Memory()


def test_font_is_loaded_on_construction(memory: Memory):
    assert list(memory.memory[: len(FONT_DATA)]) == FONT_DATA
    assert len(FONT_DATA) == 80


@pytest.mark.parametrize("digit", range(16))
def test_glyph_address(memory: Memory, digit: int):
    address = Memory.glyph_address(digit)
    assert address == digit * 5
    assert list(memory.read_bytes(address, 5)) == FONT_DATA[digit * 5 : digit * 5 + 5]


@pytest.mark.parametrize("address", [MEMORY_SIZE, MEMORY_SIZE + 1, 0xFFFF, -1])
def test_out_of_range_access_is_lenient(memory: Memory, address: int):
    memory.write(address, 0xAB)
    assert memory.read(address) == 0
    assert memory.memory.sum() == sum(FONT_DATA)


def test_write_masks_to_byte(memory: Memory):
    memory.write(0x300, 0x1FF)
    assert memory.read(0x300) == 0xFF


def test_read_op_is_big_endian(memory: Memory):
    memory.write(0x300, 0x12)
    memory.write(0x301, 0x34)
    assert memory.read_op(0x300) == 0x1234


def test_read_bytes_past_the_end(memory: Memory):
    memory.write(MEMORY_SIZE - 1, 0x77)
    assert list(memory.read_bytes(MEMORY_SIZE - 1, 3)) == [0x77, 0, 0]


def test_load_program(memory: Memory):
    assert memory.load_program(b"\x00\xe0\x12\x00") == 4
    assert memory.read_op(MEMORY_START_ROM) == 0x00E0
    assert memory.read_op(MEMORY_START_ROM + 2) == 0x1200


def test_load_program_accepts_arrays(memory: Memory):
    memory.load_program(np.asarray([1, 2, 3], dtype=np.uint8))
    assert list(memory.read_bytes(MEMORY_START_ROM, 3)) == [1, 2, 3]


def test_load_program_truncates(memory: Memory, caplog: pytest.LogCaptureFixture):
    room = MEMORY_SIZE - MEMORY_START_ROM
    with caplog.at_level(logging.WARNING):
        stored = memory.load_program(bytes([0xAA]) * (room + 10))
    assert stored == room
    assert memory.read(MEMORY_SIZE - 1) == 0xAA
    assert "truncating" in caplog.text


def test_clear(memory: Memory):
    memory.write(0x300, 1)
    memory.clear()
    assert not memory.memory.any()
    memory.load_font()
    assert memory.read(0) == FONT_DATA[0]


@pytest.mark.parametrize(
    "rom_data",
    [np.asarray([0x60, 0x2A]), np.asarray([0x60, 0x2A], dtype=np.uint16), [0x60, 0x2A], bytearray(b"\x60\x2a")],
)
def test_load_program_converts_by_value(memory: Memory, rom_data):
    assert memory.load_program(rom_data) == 2
    assert memory.read_op(MEMORY_START_ROM) == 0x602A
    assert memory.read(MEMORY_START_ROM + 2) == 0


def test_load_program_rejects_values_above_a_byte(memory: Memory):
    with pytest.raises(ValueError):
        memory.load_program([0x100])


def test_str_dumps_rows_with_addresses(memory: Memory):
    lines = str(memory).split("\n")
    assert len(lines) == MEMORY_SIZE // 32
    assert lines[0].startswith("000: f0 90 90 90 f0 20 60")
    assert lines[16].startswith("200: 00 00")
