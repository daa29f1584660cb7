# Instruction Decoder - turn a 16-bit word into an Op and its operand fields.
# Top nibble picks the group; groups 0, 8, E and F are split further by the
# low nibble or low byte. Anything else decodes to Op.UNKNOWN.
#----------------------------------------------------------------------------------------------

from enum import Enum
from typing import NamedTuple

from . import config


class Op(Enum):
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_VX_KK = "SE_Vx_kk"
    SNE_VX_KK = "SNE_Vx_kk"
    SE_VX_VY = "SE_Vx_Vy"
    LD_VX_KK = "LD_Vx_kk"
    ADD_VX_KK = "ADD_Vx_kk"
    LD_VX_VY = "LD_Vx_Vy"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD = "ADD"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_VX_VY = "SNE_Vx_Vy"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_Vx_DT"
    WAITKEY = "WAITKEY"
    LD_DT_VX = "LD_DT_Vx"
    LD_ST_VX = "LD_ST_Vx"
    ADD_I_VX = "ADD_I_Vx"
    FONT = "FONT"
    BCD = "BCD"
    STORE = "STORE"
    LOAD = "LOAD"
    UNKNOWN = "UNKNOWN"


class Instruction(NamedTuple):
    op: Op
    word: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int


# decode table: (mask, pattern, op)
OPCODES = [
    (0xF0FF, 0x00E0, Op.CLS),
    (0xF0FF, 0x00EE, Op.RET),

    (0xF000, 0x1000, Op.JP),
    (0xF000, 0x2000, Op.CALL),
    (0xF000, 0x3000, Op.SE_VX_KK),
    (0xF000, 0x4000, Op.SNE_VX_KK),
    (0xF000, 0x5000, Op.SE_VX_VY),
    (0xF000, 0x6000, Op.LD_VX_KK),
    (0xF000, 0x7000, Op.ADD_VX_KK),

    (0xF00F, 0x8000, Op.LD_VX_VY),
    (0xF00F, 0x8001, Op.OR),
    (0xF00F, 0x8002, Op.AND),
    (0xF00F, 0x8003, Op.XOR),
    (0xF00F, 0x8004, Op.ADD),
    (0xF00F, 0x8005, Op.SUB),
    (0xF00F, 0x8006, Op.SHR),
    (0xF00F, 0x8007, Op.SUBN),
    (0xF00F, 0x800E, Op.SHL),

    (0xF000, 0x9000, Op.SNE_VX_VY),
    (0xF000, 0xA000, Op.LD_I),
    (0xF000, 0xB000, Op.JP_V0),
    (0xF000, 0xC000, Op.RND),
    (0xF000, 0xD000, Op.DRW),

    (0xF0FF, 0xE09E, Op.SKP),
    (0xF0FF, 0xE0A1, Op.SKNP),

    (0xF0FF, 0xF007, Op.LD_VX_DT),
    (0xF0FF, 0xF00A, Op.WAITKEY),
    (0xF0FF, 0xF015, Op.LD_DT_VX),
    (0xF0FF, 0xF018, Op.LD_ST_VX),
    (0xF0FF, 0xF01E, Op.ADD_I_VX),
    (0xF0FF, 0xF029, Op.FONT),
    (0xF0FF, 0xF033, Op.BCD),
    (0xF0FF, 0xF055, Op.STORE),
    (0xF0FF, 0xF065, Op.LOAD),
]


def decode(word):
    word &= 0xFFFF
    op = Op.UNKNOWN
    for mask, pattern, candidate in OPCODES:
        if (word & mask) == pattern:
            op = candidate
            break
    return Instruction(
        op=op,
        word=word,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        kk=word & 0xFF,
        nnn=word & 0x0FFF,
    )


def fetch(state):
    """Big-endian word at pc; the second byte wraps at the top of memory."""
    pc = state.pc % config.MEM_SIZE
    return (state.memory[pc] << 8) | state.memory[(pc + 1) % config.MEM_SIZE]


# mnemonic templates for disassemble()
_MNEMONICS = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_VX_KK: "SE V{x:X}, 0x{kk:02X}",
    Op.SNE_VX_KK: "SNE V{x:X}, 0x{kk:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_KK: "LD V{x:X}, 0x{kk:02X}",
    Op.ADD_VX_KK: "ADD V{x:X}, 0x{kk:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD: "ADD V{x:X}, V{y:X}",
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
    Op.WAITKEY: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.FONT: "LD F, V{x:X}",
    Op.BCD: "LD B, V{x:X}",
    Op.STORE: "LD [I], V{x:X}",
    Op.LOAD: "LD V{x:X}, [I]",
    Op.UNKNOWN: "DW 0x{word:04X}",
}


def disassemble(ins):
    return _MNEMONICS[ins.op].format(**ins._asdict())
