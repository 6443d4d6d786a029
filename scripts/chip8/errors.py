class Chip8Error(Exception):
    """base class of every fault raised by the machine"""


class MemoryFault(Chip8Error, IndexError):
    """access outside the region an operation is allowed to touch"""

    def __init__(self, address, reason="invalid memory access"):
        self.address = address
        self.reason = reason
        super().__init__(f"{reason} at address 0x{address:04x}")


class UnknownOpcode(Chip8Error, NotImplementedError):
    """the decoded nibble pattern is not a CHIP-8 instruction"""

    def __init__(self, opcode, nibbles):
        self.opcode = opcode
        self.nibbles = nibbles
        super().__init__(f"Instruction not specified: 0x{opcode:04x} -- decoded -> {nibbles}")


class RomTooLarge(Chip8Error, ValueError):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes long, the program area holds at most {limit}")
