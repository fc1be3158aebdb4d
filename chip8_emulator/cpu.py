# CHIP8 Virtual Machine:
# 16 general-purpose registers V0-VF (VF doubles as the carry/borrow/collision flag),
# an index register I, a program counter, a 16-level call stack and two 60Hz timers.
#----------------------------------------------------------------------------------------------

import random

from .config import PROGRAM_START, REGISTER_COUNT, STACK_DEPTH
from .errors import StackOverflow, StackUnderflow
from .gpu import GPU
from .keypad import Keypad
from .logs import log, logs_enabled
from .memory import Memory, font_address
from .opcodes import Op, decode


class CPU:

    def __init__(self, memory=None, gpu=None, keypad=None, seed=None, rng=None):
        self.memory = memory if memory is not None else Memory()
        self.gpu = gpu if gpu is not None else GPU()
        self.keypad = keypad if keypad is not None else Keypad()
        self.seed = seed
        self.rng = rng if rng is not None else random.Random()
        self._own_rng = rng is None

        # Prepare opcode function map
        self.setup_funcmap()
        self.initialize()

    def initialize(self):
        self.v = [0] * REGISTER_COUNT
        self.i = 0
        self.pc = PROGRAM_START
        self.stack = []
        self.dt = 0
        self.st = 0
        self.blocked = False
        self.halted = False
        self.beep = False
        self.memory.reset()
        self.gpu.clear()
        self.keypad.release_all()
        # an injected generator keeps its own state unless a seed is given
        if self._own_rng or self.seed is not None:
            self.rng.seed(self.seed)

    def load(self, data):
        self.memory.load(data)

    # ---- Fetch ----
    def fetch(self):
        """Read the word at PC and advance past it.

        Returns None once PC runs off the end of memory: that is the normal
        end of a program, not a fault.
        """
        if self.pc + 1 >= len(self.memory):
            self.halted = True
            return None
        word = self.memory.read_word(self.pc)
        self.pc += 2
        return word

    # ---- Cycle ----
    def cycle(self):
        address = self.pc
        word = self.fetch()
        if word is None:
            return False

        instruction = decode(word, address)
        if logs_enabled():
            log("%03X: %04X  %s" % (address, word, instruction.mnemonic()))
        self.execute(instruction)

        if self.blocked:
            self.pc -= 2  # retry the key wait next cycle
        return True

    def execute(self, instruction):
        self.funcmap[instruction.op](instruction)

    # ---- Timers ----
    def tick(self):
        if self.dt > 0:
            self.dt -= 1
        if self.st > 0:
            self.st -= 1
            if self.st == 0:
                self.beep = True
                log("Sound plays!")

    def consume_beep(self):
        beep, self.beep = self.beep, False
        return beep

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.SYS: self._0nnn,
            Op.CLS: self._00E0,
            Op.RET: self._00EE,
            Op.JP: self._1nnn,
            Op.CALL: self._2nnn,
            Op.SE_VX_BYTE: self._3xkk,
            Op.SNE_VX_BYTE: self._4xkk,
            Op.SE_VX_VY: self._5xy0,
            Op.LD_VX_BYTE: self._6xkk,
            Op.ADD_VX_BYTE: self._7xkk,
            Op.LD_VX_VY: self._8xy0,
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD_VX_VY: self._8xy4,
            Op.SUB: self._8xy5,
            Op.SHR: self._8xy6,
            Op.SUBN: self._8xy7,
            Op.SHL: self._8xyE,
            Op.SNE_VX_VY: self._9xy0,
            Op.LD_I: self._Annn,
            Op.JP_V0: self._Bnnn,
            Op.RND: self._Cxkk,
            Op.DRW: self._Dxyn,
            Op.SKP: self._Ex9E,
            Op.SKNP: self._ExA1,
            Op.LD_VX_DT: self._Fx07,
            Op.LD_VX_K: self._Fx0A,
            Op.LD_DT_VX: self._Fx15,
            Op.LD_ST_VX: self._Fx18,
            Op.ADD_I_VX: self._Fx1E,
            Op.LD_F_VX: self._Fx29,
            Op.LD_B_VX: self._Fx33,
            Op.LD_I_VX: self._Fx55,
            Op.LD_VX_I: self._Fx65,
        }
        missing = set(Op) - set(self.funcmap)
        if missing:
            raise RuntimeError("no handler for " + ", ".join(sorted(op.name for op in missing)))

    # ---- Opcode Handlers ----

    # 0nnn - SYS call, ignored on modern interpreters
    def _0nnn(self, ins):
        pass

    # 00E0 - Clear the display
    def _00E0(self, ins):
        self.gpu.clear()

    # 00EE - Return from subroutine
    def _00EE(self, ins):
        if not self.stack:
            raise StackUnderflow("could not return from subroutine, stack was empty")
        self.pc = self.stack.pop()

    # 1nnn - Jump to address NNN
    def _1nnn(self, ins):
        self.pc = ins.nnn

    # 2nnn - Call subroutine at NNN
    def _2nnn(self, ins):
        if len(self.stack) >= STACK_DEPTH:
            raise StackOverflow("stack overflow calling 0x%03X" % ins.nnn)
        self.stack.append(self.pc)
        self.pc = ins.nnn

    # 3xkk - Skip next instruction if Vx == kk
    def _3xkk(self, ins):
        if self.v[ins.x] == ins.kk:
            self.pc += 2

    # 4xkk - Skip next instruction if Vx != kk
    def _4xkk(self, ins):
        if self.v[ins.x] != ins.kk:
            self.pc += 2

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self, ins):
        if self.v[ins.x] == self.v[ins.y]:
            self.pc += 2

    # 6xkk - Set Vx = kk
    def _6xkk(self, ins):
        self.v[ins.x] = ins.kk

    # 7xkk - Add immediate, no carry flag
    def _7xkk(self, ins):
        self.v[ins.x] = (self.v[ins.x] + ins.kk) & 0xFF

    # 8xy0..8xyE - the flag is written last so VF as a target ends up holding it
    def _8xy0(self, ins):
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):
        self.v[ins.x] |= self.v[ins.y]

    def _8xy2(self, ins):
        self.v[ins.x] &= self.v[ins.y]

    def _8xy3(self, ins):
        self.v[ins.x] ^= self.v[ins.y]

    def _8xy4(self, ins):
        s = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = s & 0xFF
        self.v[0xF] = 1 if s > 0xFF else 0

    def _8xy5(self, ins):
        vx, vy = self.v[ins.x], self.v[ins.y]
        self.v[ins.x] = (vx - vy) & 0xFF
        self.v[0xF] = 1 if vx >= vy else 0

    def _8xy6(self, ins):
        vx = self.v[ins.x]
        self.v[ins.x] = vx >> 1
        self.v[0xF] = vx & 1

    def _8xy7(self, ins):
        vx, vy = self.v[ins.x], self.v[ins.y]
        self.v[ins.x] = (vy - vx) & 0xFF
        self.v[0xF] = 1 if vy >= vx else 0

    def _8xyE(self, ins):
        vx = self.v[ins.x]
        self.v[ins.x] = (vx << 1) & 0xFF
        self.v[0xF] = (vx >> 7) & 1

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self, ins):
        if self.v[ins.x] != self.v[ins.y]:
            self.pc += 2

    # Annn - Set I = NNN
    def _Annn(self, ins):
        self.i = ins.nnn

    # Bnnn - Jump to address NNN + V0
    def _Bnnn(self, ins):
        self.pc = ins.nnn + self.v[0]

    # Cxkk - Vx = random byte AND kk
    def _Cxkk(self, ins):
        self.v[ins.x] = self.rng.getrandbits(8) & ins.kk

    # Dxyn - Draw n-byte sprite from memory[I] at (Vx, Vy), VF = collision
    def _Dxyn(self, ins):
        sprite = self.memory.read_block(self.i, ins.n)
        collision = self.gpu.blit(self.v[ins.x], self.v[ins.y], sprite)
        self.v[0xF] = 1 if collision else 0

    # Ex9E / ExA1 - Skip next instruction if key Vx is / is not pressed
    def _Ex9E(self, ins):
        if self.keypad.is_pressed(self.v[ins.x]):
            self.pc += 2

    def _ExA1(self, ins):
        if not self.keypad.is_pressed(self.v[ins.x]):
            self.pc += 2

    # Fx07 - Vx = delay timer
    def _Fx07(self, ins):
        self.v[ins.x] = self.dt

    # Fx0A - wait for a key press, cycle() rewinds PC while blocked
    def _Fx0A(self, ins):
        self.blocked = True
        pressed = self.keypad.first_pressed()
        if pressed is not None:
            self.v[ins.x] = pressed
            self.blocked = False

    # Fx15 / Fx18 - set delay / sound timer
    def _Fx15(self, ins):
        self.dt = self.v[ins.x]

    def _Fx18(self, ins):
        self.st = self.v[ins.x]

    # Fx1E - I = I + Vx
    def _Fx1E(self, ins):
        self.i = (self.i + self.v[ins.x]) & 0xFFFF

    # Fx29 - I = address of the font glyph for digit Vx
    def _Fx29(self, ins):
        self.i = font_address(self.v[ins.x])

    # Fx33 - BCD of Vx at I, I+1, I+2
    def _Fx33(self, ins):
        val = self.v[ins.x]
        self.memory.write_block(self.i, (val // 100, (val // 10) % 10, val % 10))

    # Fx55 - store V0..Vx at I
    def _Fx55(self, ins):
        self.memory.write_block(self.i, self.v[:ins.x + 1])

    # Fx65 - load V0..Vx from I
    def _Fx65(self, ins):
        self.v[:ins.x + 1] = list(self.memory.read_block(self.i, ins.x + 1))
