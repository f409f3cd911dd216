import argparse
import logging
import sys
import time
from pathlib import Path

import keyboard

from .constants import CYCLES_PER_FRAME, FRAMES_PER_SECOND
from .cpu import CPU
from .data import list_roms, read_rom
from .errors import MachineFault, RomLoadError
from .host import Controls, poll_keypad, render

CLEAR_SCREEN = "\x1b[H\x1b[2J"
QUIT_KEY = "esc"


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be at least 1, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def print_roms() -> None:
    print("\nAvailable ROMs:", file=sys.stderr)  # noqa: T201
    for category, roms in list_roms().items():
        print(f"\n{category.upper()}:", file=sys.stderr)  # noqa: T201
        for rom in roms:
            print(f"  {rom}", file=sys.stderr)  # noqa: T201


def main() -> int:
    parser = argparse.ArgumentParser(prog="chip8vm", description="Run rom")
    parser.add_argument("rom", type=Path, nargs="?")
    parser.add_argument("--list", action="store_true", help="list the ROMs found under chip8-roms/")
    parser.add_argument("--cycles-per-frame", type=positive_int, default=CYCLES_PER_FRAME)
    parser.add_argument("--fps", type=positive_int, default=FRAMES_PER_SECOND)
    parser.add_argument("-v", "--verbose", action="count", default=0)
    args = parser.parse_args()

    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    logging.basicConfig(level=levels[min(args.verbose, len(levels) - 1)])

    if args.list:
        print_roms()
        return 0
    if args.rom is None:
        parser.print_usage(sys.stderr)
        print('Example: python -m chip8vm "chip8-roms/games/Tetris [Fran Dachille, 1991].ch8"', file=sys.stderr)  # noqa: T201
        print_roms()
        return 1

    rom_file: Path = args.rom
    cpu = CPU()
    try:
        cpu.load(read_rom(rom_file))
    except RomLoadError as e:
        logging.error(e)  # noqa: TRY400
        return 1

    controls = Controls(keyboard.is_pressed)
    try:
        while not keyboard.is_pressed(QUIT_KEY):
            poll_keypad(cpu.keypad, keyboard.is_pressed)
            controls.poll()
            controls.advance(cpu, args.cycles_per_frame)
            print(CLEAR_SCREEN + render(cpu, rom_file.name, controls), flush=True)  # noqa: T201
            time.sleep(1 / args.fps)
    except MachineFault as e:
        logging.error("%s\n%s", e, cpu)  # noqa: TRY400
        logging.debug("Memory:\n%s", cpu.memory)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
