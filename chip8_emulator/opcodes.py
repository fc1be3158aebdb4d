# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Turns each instruction word into an Instruction with its operand fields.

import enum
from dataclasses import dataclass

from .errors import UnimplementedOpcode


class Op(enum.Enum):
    SYS = "0nnn"
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_VX_BYTE = "3xkk"
    SNE_VX_BYTE = "4xkk"
    SE_VX_VY = "5xy0"
    LD_VX_BYTE = "6xkk"
    ADD_VX_BYTE = "7xkk"
    LD_VX_VY = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_I_VX = "Fx55"
    LD_VX_I = "Fx65"


@dataclass(frozen=True)
class Instruction:
    op: Op
    word: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    def mnemonic(self):
        return _FORMATS[self.op].format(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)

    def __str__(self):
        return self.mnemonic()


_FORMATS = {
    Op.SYS: "SYS 0x{nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_VX_BYTE: "SE V{x:X}, 0x{kk:02X}",
    Op.SNE_VX_BYTE: "SNE V{x:X}, 0x{kk:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_BYTE: "LD V{x:X}, 0x{kk:02X}",
    Op.ADD_VX_BYTE: "ADD V{x:X}, 0x{kk:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03X}",
    Op.JP_V0: "JP V0, 0x{nnn:03X}",
    Op.RND: "RND V{x:X}, 0x{kk:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.LD_F_VX: "LD F, V{x:X}",
    Op.LD_B_VX: "LD B, V{x:X}",
    Op.LD_I_VX: "LD [I], V{x:X}",
    Op.LD_VX_I: "LD V{x:X}, [I]",
}

# kind -> op for classes selected by the top nibble alone
_BY_KIND = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_BYTE,
    0x4: Op.SNE_VX_BYTE,
    0x6: Op.LD_VX_BYTE,
    0x7: Op.ADD_VX_BYTE,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_ARITHMETIC = {
    0x0: Op.LD_VX_VY,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_VX_VY,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEYS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}


def _select(word):
    kind = (word & 0xF000) >> 12
    n = word & 0x000F
    kk = word & 0x00FF

    if kind == 0x0:
        if word == 0x00E0:
            return Op.CLS
        if word == 0x00EE:
            return Op.RET
        return Op.SYS
    if kind in _BY_KIND:
        return _BY_KIND[kind]
    if kind == 0x5 and n == 0:
        return Op.SE_VX_VY
    if kind == 0x8:
        return _ARITHMETIC.get(n)
    if kind == 0x9 and n == 0:
        return Op.SNE_VX_VY
    if kind == 0xE:
        return _KEYS.get(kk)
    if kind == 0xF:
        return _MISC.get(kk)
    return None


def decode(word, address=None):
    """Split an instruction word into its operation and operand fields.

    Raises UnimplementedOpcode when no instruction class matches.
    """
    word &= 0xFFFF
    op = _select(word)
    if op is None:
        raise UnimplementedOpcode(word, address)
    return Instruction(
        op=op,
        word=word,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF,
    )


def disassemble(data, origin=0x200):
    """Yield (address, word, text) for each instruction word in `data`."""
    data = bytes(data)
    for offset in range(0, len(data) - 1, 2):
        word = (data[offset] << 8) | data[offset + 1]
        try:
            text = decode(word).mnemonic()
        except UnimplementedOpcode:
            text = "DW 0x%04X" % word
        yield origin + offset, word, text
    if len(data) % 2:
        yield origin + len(data) - 1, data[-1], "DB 0x%02X" % data[-1]
