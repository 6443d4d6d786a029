from collections import namedtuple


class Instruction(namedtuple("Instruction", "opcode nibbles nnn kk n")):
    """
    one decoded 16-bit instruction word

        opcode   the raw word
        nibbles  its four 4-bit fields, most significant first
        nnn      lowest 12 bits (address)
        kk       lowest 8 bits (immediate byte)
        n        lowest 4 bits (count)
    """
    __slots__ = ()

    @property
    def x(self):
        return self.nibbles[1]

    @property
    def y(self):
        return self.nibbles[2]


def decode(opcode):
    nibbles = (
        (opcode & 0xF000) >> 12,
        (opcode & 0x0F00) >> 8,
        (opcode & 0x00F0) >> 4,
        opcode & 0x000F,
    )
    return Instruction(opcode, nibbles, opcode & 0x0FFF, opcode & 0x00FF, opcode & 0x000F)


# WATCH OUT: masks order is important!!!
# the lookup stops at the first mask whose result is a known pattern
MASKS = {
    0xFFFF: (0x00E0, 0x00EE),
    0xF0FF: (0xE09E, 0xE0A1, 0xF007, 0xF00A, 0xF015, 0xF018, 0xF01E, 0xF029, 0xF033, 0xF055, 0xF065),
    0xF00F: (0x5000, 0x8000, 0x8001, 0x8002, 0x8003, 0x8004, 0x8005, 0x8006, 0x8007, 0x800E, 0x9000),
    0xF000: (0x1000, 0x2000, 0x3000, 0x4000, 0x6000, 0x7000, 0xA000, 0xB000, 0xC000, 0xD000),
}


def pattern(opcode):
    """return the masked opcode identifying the instruction, None if it is not a CHIP-8 instruction"""
    for mask, patterns in MASKS.items():
        if (opcode & mask) in patterns:
            return opcode & mask
    return None


MNEMONICS = {
    0x00E0: "CLS",
    0x00EE: "RET",
    0x1000: "JP 0x{i.nnn:03x}",
    0x2000: "CALL 0x{i.nnn:03x}",
    0x3000: "SE V{i.x:X}, 0x{i.kk:02x}",
    0x4000: "SNE V{i.x:X}, 0x{i.kk:02x}",
    0x5000: "SE V{i.x:X}, V{i.y:X}",
    0x6000: "LD V{i.x:X}, 0x{i.kk:02x}",
    0x7000: "ADD V{i.x:X}, 0x{i.kk:02x}",
    0x8000: "LD V{i.x:X}, V{i.y:X}",
    0x8001: "OR V{i.x:X}, V{i.y:X}",
    0x8002: "AND V{i.x:X}, V{i.y:X}",
    0x8003: "XOR V{i.x:X}, V{i.y:X}",
    0x8004: "ADD V{i.x:X}, V{i.y:X}",
    0x8005: "SUB V{i.x:X}, V{i.y:X}",
    0x8006: "SHR V{i.x:X}",
    0x8007: "SUBN V{i.x:X}, V{i.y:X}",
    0x800E: "SHL V{i.x:X}",
    0x9000: "SNE V{i.x:X}, V{i.y:X}",
    0xA000: "LD I, 0x{i.nnn:03x}",
    0xB000: "JP V0, 0x{i.nnn:03x}",
    0xC000: "RND V{i.x:X}, 0x{i.kk:02x}",
    0xD000: "DRW V{i.x:X}, V{i.y:X}, {i.n}",
    0xE09E: "SKP V{i.x:X}",
    0xE0A1: "SKNP V{i.x:X}",
    0xF007: "LD V{i.x:X}, DT",
    0xF00A: "LD V{i.x:X}, K",
    0xF015: "LD DT, V{i.x:X}",
    0xF018: "LD ST, V{i.x:X}",
    0xF01E: "ADD I, V{i.x:X}",
    0xF029: "LD F, V{i.x:X}",
    0xF033: "LD B, V{i.x:X}",
    0xF055: "LD [I], V{i.x:X}",
    0xF065: "LD V{i.x:X}, [I]",
}


def disassemble(opcode):
    key = pattern(opcode)
    if key is None:
        return f"DW 0x{opcode:04x}"
    return MNEMONICS[key].format(i=decode(opcode))
