WIDTH = 64
HEIGHT = 32

MEMORY_SIZE = 4096
MEMORY_START_FONT = 0x000
MEMORY_START_ROM = 0x200
FONT_GLYPH_SIZE = 5

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_SIZE = 16

# 60 Hz timers, CPU speed is expressed relative to them
FRAMES_PER_SECOND = 60
CYCLES_PER_FRAME = 15
