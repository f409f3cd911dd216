from pathlib import Path

import numpy as np
import numpy.typing as npt

from .errors import RomLoadError

# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#2.4
FONT_DATA = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]  # fmt: skip

ROM_DIRECTORIES = [
    Path("chip8-roms/games"),
    Path("chip8-roms/demos"),
    Path("chip8-roms/programs"),
    Path("chip8-roms/tests"),
]
ROM_SUFFIX = ".ch8"


def read_rom(rom_file: Path) -> npt.NDArray[np.uint8]:
    try:
        content = Path(rom_file).read_bytes()
    except OSError as e:
        raise RomLoadError(rom_file, e.strerror or str(e)) from e
    return np.frombuffer(content, dtype=np.uint8)


def list_roms(directories: list[Path] | None = None) -> dict[str, list[Path]]:
    """Collect the ROM files of every existing directory, keyed by directory name."""
    found: dict[str, list[Path]] = {}
    for directory in ROM_DIRECTORIES if directories is None else directories:
        if not directory.is_dir():
            continue
        roms = [p for p in directory.iterdir() if p.is_file() and p.suffix == ROM_SUFFIX]
        found[directory.name] = sorted(roms)
    return found
