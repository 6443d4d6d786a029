# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
#
# MEMORY MAP
#   0x000 - 0x0FF   stack (return addresses, 2 bytes each)
#   0x0FF - 0x14F   built-in hex font, 16 glyphs x 5 bytes
#   0x200 - 0xFFF   program

import os


# ******************** MEMORY LAYOUT
MEMORY_SIZE = 4096
ROM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START_ADDRESS

STACK_START = 0x000
STACK_END = 0x0FF

FONT_START = 0x0FF
FONT_END = 0x14F
FONT_GLYPH_SIZE = 5

C8_FONTS = bytes([
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
])


# ******************** REGISTERS / PERIPHERALS
NUM_REGISTERS = 16
VF = 0xF                # carry, borrow and collision flag
NUM_KEYS = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SCREEN_RESOLUTION = (SCREEN_WIDTH, SCREEN_HEIGHT)
PIXEL_ON = 255
PIXEL_OFF = 0


# ******************** CLOCKS / HOST DEFAULTS
TIMER_HZ = 60
DEFAULT_SPEED = 500     # instructions per second, one every 2ms
DEFAULT_SCALE = 15

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
