from .cpu import Chip8, MachineState
from .decoder import Instruction, decode, disassemble
from .display import Display
from .errors import Chip8Error, MemoryFault, RomTooLarge, UnknownOpcode
from .keypad import Keypad
from .memory import Memory, Stack

__all__ = [
    "Chip8", "MachineState",
    "Instruction", "decode", "disassemble",
    "Display", "Keypad", "Memory", "Stack",
    "Chip8Error", "MemoryFault", "RomTooLarge", "UnknownOpcode",
]
