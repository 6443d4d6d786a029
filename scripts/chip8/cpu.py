import enum
import logging
import random

from .constants import (
    FONT_GLYPH_SIZE, FONT_START, NUM_REGISTERS, ROM_START_ADDRESS, VF,
)
from .decoder import decode, disassemble, pattern
from .display import Display
from .errors import UnknownOpcode
from .keypad import Keypad
from .memory import Memory, Stack

log = logging.getLogger(__name__)


class MachineState(enum.Enum):
    RUNNING = "running"
    WAITING = "waiting"     # suspended on Fx0A until the host delivers a key
    FINISHED = "finished"   # PC walked off the end of the loaded program


# ******************** CPU SECTION
class Chip8:
    def __init__(self, strict_stack=False, rng=None):
        self.mem = Memory()
        self.stack = Stack(self.mem, strict=strict_stack)
        self.screen = Display()
        self.keypad = Keypad()
        self.v_regs = [0] * NUM_REGISTERS
        self.pc = ROM_START_ADDRESS
        self.idx = 0    # I register, mostly pointing at sprites
        self.dt = 0     # delay timer, active when non-zero
        self.st = 0     # sound timer, active when non-zero
        self.rng = rng or random.Random()
        self.instructions = {
            0x00E0: self._clear_screen,
            0x00EE: self._return,
            0x1000: self._jump,
            0x2000: self._call_addr,
            0x3000: self._skip_if_eq,
            0x4000: self._skip_if_not_eq,
            0x5000: self._skip_if_eq_regs,
            0x6000: self._set_vk,
            0x7000: self._add_to_vk,
            0x8000: self._set_vx_to_vy,
            0x8001: self._set_vx_or_vy,
            0x8002: self._set_vx_and_vy,
            0x8003: self._set_vx_xor_vy,
            0x8004: self._add_vx_vy,
            0x8005: self._sub_vx_vy,
            0x8006: self._shr,
            0x8007: self._subn_vx_vy,
            0x800E: self._shl,
            0x9000: self._skip_if_not_eq_regs,
            0xA000: self._set_idx,
            0xB000: self._jump_plus,
            0xC000: self._random_byte_and,
            0xD000: self._to_screen,
            0xE09E: self._skip_if_pressed,
            0xE0A1: self._skip_if_not_pressed,
            0xF007: self._set_vx_dt,
            0xF00A: self._wait_keypress,
            0xF015: self._set_dt_vx,
            0xF018: self._set_st,
            0xF01E: self._add_to_idx,
            0xF029: self._select_char,
            0xF033: self._bcd_repr,
            0xF055: self._store_vregs,
            0xF065: self._load_vregs,
        }

    def __str__(self):
        return self.dump()

    # ********** HOST INTERFACE
    @property
    def sp(self):
        return self.stack.sp

    @property
    def waiting(self):
        return self.keypad.waiting

    @property
    def state(self):
        if self.keypad.waiting is not None:
            return MachineState.WAITING
        if self.finished():
            return MachineState.FINISHED
        return MachineState.RUNNING

    def load(self, rom):
        """load a ROM from a path or from raw bytes, OSError from reading the file propagates"""
        if isinstance(rom, (bytes, bytearray, memoryview)):
            self.mem.load_bytes(bytes(rom))
        else:
            self.mem.load_rom(rom)

    def reboot(self):
        """restart the loaded program from scratch without reading the ROM again"""
        self.v_regs = [0] * NUM_REGISTERS
        self.idx = 0
        self.dt = 0
        self.st = 0
        self.keypad.reset()
        self.screen.clear()
        self.screen.updated = False
        self.mem.reset()
        self.stack.reset()
        self.pc = ROM_START_ADDRESS
        log.info("Machine rebooted")

    def finished(self):
        return self.pc == self.mem.end

    def tick_timers(self):
        """
        decrement the delay and sound timers, meant to be called at 60Hz
        return True when a tone should be played for this tick
        """
        if self.dt > 0:
            self.dt -= 1
        if self.st > 0:
            self.st -= 1
            return True
        return False

    def deliver_key(self, key):
        """answer a pending Fx0A with the pressed key, no-op when nothing is waiting"""
        register = self.keypad.answer(key)
        if register is not None:
            self.v_regs[register] = key
            log.debug("Key 0x%x delivered into V%X", key, register)

    def step(self):
        """
        run one fetch-decode-execute cycle, return the executed instruction
        or None while waiting for a key press
        """
        self.screen.updated = False
        if self.keypad.waiting is not None:
            return None
        # fetch (each instruction is two bytes long)
        mem_addr = self.pc
        opcode = self.mem.fetch(mem_addr)
        self._goto_next_instruction()
        # decode + execute
        ins = decode(opcode)
        key = pattern(opcode)
        if key is None:
            raise UnknownOpcode(opcode, ins.nibbles)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("mem_addr: 0x%04x    opcode: 0x%04x    instruction: %s",
                      mem_addr, opcode, disassemble(opcode))
        self.instructions[key](ins)
        return ins

    # ********** DIAGNOSTICS
    def dump(self):
        registers = "  ".join(f"V{i:X}:{v:02x}" for i, v in enumerate(self.v_regs))
        return (f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | SP:0x{self.sp:02x}"
                f" | DT:{self.dt} | ST:{self.st} | STATE:{self.state.value}\n"
                f"VARIABLE_REGISTERS: {registers}")

    def dump_rom(self):
        """disassembly listing of the loaded program, one line per word"""
        lines = []
        for addr in range(ROM_START_ADDRESS, self.mem.end, 2):
            opcode = self.mem[addr] << 8 | self.mem[addr + 1]
            lines.append(f"0x{addr:03x}:\t{opcode:04X}\t{disassemble(opcode)}")
        return lines

    # ********** INSTRUCTIONS
    def _goto_next_instruction(self):
        self.pc += 0x2

    def _clear_screen(self, ins):
        self.screen.clear()

    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    def _jump(self, ins):
        self.pc = ins.nnn

    def _call_addr(self, ins):
        self.stack.push(self.pc)
        self.pc = ins.nnn

    def _skip_if_eq(self, ins):
        if self.v_regs[ins.x] == ins.kk:
            self._goto_next_instruction()

    def _skip_if_not_eq(self, ins):
        if self.v_regs[ins.x] != ins.kk:
            self._goto_next_instruction()

    def _skip_if_eq_regs(self, ins):
        if self.v_regs[ins.x] == self.v_regs[ins.y]:
            self._goto_next_instruction()

    def _skip_if_not_eq_regs(self, ins):
        if self.v_regs[ins.x] != self.v_regs[ins.y]:
            self._goto_next_instruction()

    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.kk

    def _add_to_vk(self, ins):
        """add to the value already present in one of the variable registers, VF untouched"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.kk) & 0xFF

    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]

    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]

    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]

    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]

    # the flag is written after the result so that VF as destination ends up holding the flag
    def _add_vx_vy(self, ins):
        """set the value of Vx to Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        self.v_regs[ins.x] = total & 0xFF
        self.v_regs[VF] = 1 if total > 0xFF else 0

    def _sub_vx_vy(self, ins):
        """set the value of Vx to Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self.v_regs[VF] = 1 if vx >= vy else 0

    def _subn_vx_vy(self, ins):
        """set the value of Vx to Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self.v_regs[VF] = 1 if vy >= vx else 0

    # shifts work on Vx alone, Vy is ignored
    def _shr(self, ins):
        vx = self.v_regs[ins.x]
        self.v_regs[ins.x] = vx >> 1
        self.v_regs[VF] = vx & 0x1

    def _shl(self, ins):
        vx = self.v_regs[ins.x]
        self.v_regs[ins.x] = (vx << 1) & 0xFF
        self.v_regs[VF] = (vx & 0x80) >> 7

    def _set_idx(self, ins):
        self.idx = ins.nnn

    def _jump_plus(self, ins):
        self.pc = ins.nnn + self.v_regs[0x0]

    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.kk

    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        rows = self.mem.read(self.idx, ins.n)
        collided = self.screen.sprite(self.v_regs[ins.x], self.v_regs[ins.y], rows)
        self.v_regs[VF] = 1 if collided else 0

    def _skip_if_pressed(self, ins):
        if self.keypad[self.v_regs[ins.x] & 0xF]:
            self._goto_next_instruction()

    def _skip_if_not_pressed(self, ins):
        if not self.keypad[self.v_regs[ins.x] & 0xF]:
            self._goto_next_instruction()

    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.dt

    def _wait_keypress(self, ins):
        """suspend the machine until the host delivers a key press into Vx"""
        self.keypad.wait(ins.x)

    def _set_dt_vx(self, ins):
        self.dt = self.v_regs[ins.x]

    def _set_st(self, ins):
        self.st = self.v_regs[ins.x]

    def _add_to_idx(self, ins):
        self.idx = (self.idx + self.v_regs[ins.x]) & 0xFFFF

    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        self.idx = FONT_START + (self.v_regs[ins.x] & 0xF) * FONT_GLYPH_SIZE

    def _bcd_repr(self, ins):
        """hundreds digit of Vx at I, tens at I+1, ones at I+2"""
        vx = self.v_regs[ins.x]
        self.mem.write(self.idx, bytes([vx // 100, (vx // 10) % 10, vx % 10]))

    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        self.mem.write(self.idx, bytes(self.v_regs[:ins.x+1]))
        self.idx = (self.idx + ins.x + 1) & 0xFFFF

    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        self.v_regs[:ins.x+1] = list(self.mem.read(self.idx, ins.x + 1))
        self.idx = (self.idx + ins.x + 1) & 0xFFFF
