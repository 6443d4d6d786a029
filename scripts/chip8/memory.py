import logging

from .constants import (
    C8_FONTS, FONT_END, FONT_START, MAX_ROM_SIZE, MEMORY_SIZE,
    ROM_START_ADDRESS, STACK_END, STACK_START,
)
from .errors import MemoryFault, RomTooLarge

log = logging.getLogger(__name__)


# ******************** MEMORY SECTION
# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self):
        self.inner = bytearray(MEMORY_SIZE)
        self.inner[FONT_START:FONT_END] = C8_FONTS
        self.end = ROM_START_ADDRESS     # first address past the loaded program

    def __getitem__(self, index):
        return self.inner[index]

    def load_rom(self, path):
        """load ROM file from user specified path, errors opening or reading it are left to the caller"""
        with open(path, mode='rb') as f:
            rom = f.read()
        self.load_bytes(rom)
        log.info("The ROM at path %s has been loaded successfully (%d bytes)", path, len(rom))

    def load_bytes(self, rom):
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLarge(len(rom), MAX_ROM_SIZE)
        self.inner[ROM_START_ADDRESS:] = bytes(MAX_ROM_SIZE)
        self.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+len(rom)] = rom
        self.end = ROM_START_ADDRESS + len(rom)

    def reset(self):
        """zero the stack and everything past the program, leaving the program itself in place"""
        self.inner[STACK_START:STACK_END] = bytes(STACK_END - STACK_START)
        self.inner[self.end:] = bytes(MEMORY_SIZE - self.end)
        self.inner[FONT_START:FONT_END] = C8_FONTS

    def fetch(self, address):
        """read the big-endian instruction word at address"""
        if address < ROM_START_ADDRESS or address >= self.end:
            raise MemoryFault(address, "instruction fetch outside the loaded program")
        if address & 0x1:
            raise MemoryFault(address, "unaligned instruction fetch")
        return self.inner[address] << 8 | self.inner[address + 1]

    def read(self, address, length=1):
        if address < 0 or address + length > MEMORY_SIZE:
            raise MemoryFault(address, f"read of {length} bytes past the end of memory")
        return bytes(self.inner[address:address+length])

    def write(self, address, data):
        if address < 0 or address + len(data) > MEMORY_SIZE:
            raise MemoryFault(address, f"write of {len(data)} bytes past the end of memory")
        if address < FONT_END and address + len(data) > FONT_START:
            raise MemoryFault(address, "write into the font table")
        self.inner[address:address+len(data)] = data


# ********** RETURN ADDRESSES KEPT INSIDE THE STACK REGION OF THE MAIN MEMORY
class Stack:
    def __init__(self, memory, strict=False):
        self.mem = memory
        self.strict = strict
        self.sp = STACK_START

    def __len__(self):
        return self.sp // 2

    def push(self, address):
        if self.strict and self.sp + 2 > STACK_END:
            raise MemoryFault(self.sp, "stack overflow")
        # low byte first
        self.mem.inner[self.sp] = address & 0xFF
        self.mem.inner[self.sp + 1] = (address >> 8) & 0xFF
        self.sp = (self.sp + 2) & 0xFF

    def pop(self):
        if self.strict and self.sp < STACK_START + 2:
            raise MemoryFault(self.sp, "stack underflow")
        self.sp = (self.sp - 2) & 0xFF
        return self.mem.inner[self.sp] | self.mem.inner[self.sp + 1] << 8

    def reset(self):
        self.sp = STACK_START
