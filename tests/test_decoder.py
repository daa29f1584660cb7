import pytest

from chip8vm.decoder import Op, decode, disassemble, fetch


@pytest.mark.parametrize("word, op", [
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_VX_KK),
    (0x4A12, Op.SNE_VX_KK),
    (0x5AB0, Op.SE_VX_VY),
    (0x6A12, Op.LD_VX_KK),
    (0x7A12, Op.ADD_VX_KK),
    (0x8AB0, Op.LD_VX_VY),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_VX_VY),
    (0xAABC, Op.LD_I),
    (0xBABC, Op.JP_V0),
    (0xCA12, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.WAITKEY),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.FONT),
    (0xFA33, Op.BCD),
    (0xFA55, Op.STORE),
    (0xFA65, Op.LOAD),
])
def test_decode_known(word, op):
    assert decode(word).op is op


@pytest.mark.parametrize("word", [
    0x0000, 0x0123, 0x00E1, 0x8AB8, 0x8ABF, 0xEA00, 0xEA9F, 0xF000, 0xFAFF, 0xF156,
])
def test_decode_unknown_keeps_raw_word(word):
    ins = decode(word)
    assert ins.op is Op.UNKNOWN
    assert ins.word == word


def test_operand_fields():
    ins = decode(0xD4A7)
    assert ins.x == 0x4
    assert ins.y == 0xA
    assert ins.n == 0x7
    assert ins.kk == 0xA7
    assert ins.nnn == 0x4A7


def test_every_op_is_reachable():
    ops = {decode(w).op for w in range(0x10000)}
    assert ops == set(Op)


def test_fetch_is_big_endian(state):
    state.memory[0x200] = 0x12
    state.memory[0x201] = 0x34
    assert fetch(state) == 0x1234


def test_fetch_wraps_at_top_of_memory(state):
    state.pc = 0xFFF
    state.memory[0xFFF] = 0xAB
    state.memory[0x000] = 0xCD
    assert fetch(state) == 0xABCD


@pytest.mark.parametrize("word, text", [
    (0x00E0, "CLS"),
    (0x6005, "LD V0, 0x05"),
    (0x8AB4, "ADD VA, VB"),
    (0xD125, "DRW V1, V2, 5"),
    (0xA2F0, "LD I, 0x2F0"),
    (0xF30A, "LD V3, K"),
    (0x0123, "DW 0x0123"),
])
def test_disassemble(word, text):
    assert disassemble(decode(word)) == text
