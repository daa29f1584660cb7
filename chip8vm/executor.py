# Operation Executor - one handler per Op, each a state transition on MachineState.
# Every handler moves pc on as its last step: +2 normally, +4 on a taken skip,
# or an absolute target for jumps, calls and returns. WAITKEY leaves pc alone
# until a key is down.
#----------------------------------------------------------------------------------------------

from . import config
from .decoder import Op
from .errors import StackOverflow, StackUnderflow, UnknownOpcode
from .log import log

F = config.FLAG


def _next(state):
    state.pc = (state.pc + 2) & 0xFFF


def _skip_if(state, condition, what):
    if condition:
        log(f"Skip next instruction: {what}")
    state.pc = (state.pc + (4 if condition else 2)) & 0xFFF


# ---- Opcode Handlers ----

# 00E0 - Clear the display
def op_CLS(state, ins):
    state.clear_screen()
    log("Clear the display (all pixels turned off)")
    _next(state)


# 00EE - Return to the call site pushed by CALL, then step past it
def op_RET(state, ins):
    if state.sp == 0:
        raise StackUnderflow(state.pc)
    addr = state.pop()
    state.pc = addr
    log("Return to", hex(addr + 2))
    _next(state)


# 1nnn - Jump to address NNN
def op_JP(state, ins):
    state.pc = ins.nnn
    log("Jump to address", hex(ins.nnn))


# 2nnn - Call subroutine at NNN, pushing this instruction's own address
def op_CALL(state, ins):
    if state.sp >= config.STACK_SIZE:
        raise StackOverflow(state.pc)
    state.push(state.pc)
    state.pc = ins.nnn
    log("Call subroutine at", hex(ins.nnn))


# 3xkk - Skip next instruction if Vx == kk
def op_SE_Vx_kk(state, ins):
    _skip_if(state, state.V[ins.x] == ins.kk, f"V{ins.x} == {ins.kk}")


# 4xkk - Skip next instruction if Vx != kk
def op_SNE_Vx_kk(state, ins):
    _skip_if(state, state.V[ins.x] != ins.kk, f"V{ins.x} != {ins.kk}")


# 5xy0 - Skip next instruction if Vx == Vy
def op_SE_Vx_Vy(state, ins):
    _skip_if(state, state.V[ins.x] == state.V[ins.y], f"V{ins.x} == V{ins.y}")


# 6xkk - Set Vx = kk
def op_LD_Vx_kk(state, ins):
    state.V[ins.x] = ins.kk
    log(f"Set V{ins.x} = {ins.kk}")
    _next(state)


# 7xkk - Add immediate, VF untouched
def op_ADD_Vx_kk(state, ins):
    state.V[ins.x] = (state.V[ins.x] + ins.kk) & 0xFF
    log(f"Add {ins.kk} to V{ins.x}: {state.V[ins.x]}")
    _next(state)


# 8xy0..8xyE - Math and logic between two registers.
# VF is written first; SUB, SUBN and the shifts then re-read their operands,
# so an operand of F sees the new flag and a destination of F ends up with the result.
def op_LD_Vx_Vy(state, ins):
    state.V[ins.x] = state.V[ins.y]
    log(f"Copy V{ins.y} ({state.V[ins.y]}) into V{ins.x}")
    _next(state)


def op_OR(state, ins):
    state.V[ins.x] |= state.V[ins.y]
    log(f"V{ins.x} = V{ins.x} OR V{ins.y} -> {state.V[ins.x]}")
    _next(state)


def op_AND(state, ins):
    state.V[ins.x] &= state.V[ins.y]
    log(f"V{ins.x} = V{ins.x} AND V{ins.y} -> {state.V[ins.x]}")
    _next(state)


def op_XOR(state, ins):
    state.V[ins.x] ^= state.V[ins.y]
    log(f"V{ins.x} = V{ins.x} XOR V{ins.y} -> {state.V[ins.x]}")
    _next(state)


def op_ADD(state, ins):
    total = state.V[ins.x] + state.V[ins.y]
    state.V[F] = 1 if total > 0xFF else 0
    state.V[ins.x] = total & 0xFF
    log(f"Add V{ins.y} to V{ins.x}: result {state.V[ins.x]}, carry={state.V[F]}")
    _next(state)


def op_SUB(state, ins):
    state.V[F] = 1 if state.V[ins.x] >= state.V[ins.y] else 0
    state.V[ins.x] = (state.V[ins.x] - state.V[ins.y]) & 0xFF
    log(f"Subtract V{ins.y} from V{ins.x}: result {state.V[ins.x]}, NOT borrow={state.V[F]}")
    _next(state)


def op_SHR(state, ins):
    state.V[F] = state.V[ins.x] & 1
    state.V[ins.x] = state.V[ins.x] >> 1
    log(f"Shift V{ins.x} right by 1: {state.V[ins.x]}, least significant bit={state.V[F]}")
    _next(state)


def op_SUBN(state, ins):
    state.V[F] = 1 if state.V[ins.y] >= state.V[ins.x] else 0
    state.V[ins.x] = (state.V[ins.y] - state.V[ins.x]) & 0xFF
    log(f"Set V{ins.x} = V{ins.y} - V{ins.x}: result {state.V[ins.x]}, NOT borrow={state.V[F]}")
    _next(state)


def op_SHL(state, ins):
    state.V[F] = (state.V[ins.x] >> 7) & 1
    state.V[ins.x] = (state.V[ins.x] << 1) & 0xFF
    log(f"Shift V{ins.x} left by 1: {state.V[ins.x]}, most significant bit={state.V[F]}")
    _next(state)


# 9xy0 - Skip next instruction if Vx != Vy
def op_SNE_Vx_Vy(state, ins):
    _skip_if(state, state.V[ins.x] != state.V[ins.y], f"V{ins.x} != V{ins.y}")


# Annn - Set I = NNN
def op_LD_I(state, ins):
    state.I = ins.nnn
    log(f"Set I = {state.I:03X}")
    _next(state)


# Bnnn - Jump to address NNN + V0
def op_JP_V0(state, ins):
    state.pc = (ins.nnn + state.V[0]) & 0xFFF
    log(f"Jump to address V0 + {ins.nnn:03X} = {state.pc:03X}")


# Cxkk - Vx = random byte AND kk
def op_RND(state, ins):
    state.V[ins.x] = state.rng.randint(0, 255) & ins.kk
    log(f"Set V{ins.x} = random_byte & {ins.kk} -> {state.V[ins.x]}")
    _next(state)


# Dxyn - XOR an n-row sprite from [I] onto the screen at (Vx, Vy).
# Pixels wrap around both edges; VF = 1 if any lit pixel was switched off.
def op_DRW(state, ins):
    px = state.V[ins.x]
    py = state.V[ins.y]
    vram = state.vram
    collision = 0
    for row in range(ins.n):
        sprite = state.read(state.I + row)
        if sprite == 0:
            continue
        y = (py + row) % config.height
        for bit in range(config.SPRITE_WIDTH):
            if sprite & (0x80 >> bit):
                x = (px + bit) % config.width
                collision |= int(vram[y, x])
                vram[y, x] ^= 1
    state.V[F] = collision
    state.should_draw = True
    log(f"Drew sprite, collision={collision}")
    _next(state)


# Ex9E / ExA1 - Skip if the key named by Vx is / is not pressed
def op_SKP(state, ins):
    _skip_if(state, state.is_pressed(state.V[ins.x] & 0xF), f"key V{ins.x} pressed")


def op_SKNP(state, ins):
    _skip_if(state, not state.is_pressed(state.V[ins.x] & 0xF), f"key V{ins.x} not pressed")


# Fx07 - Vx = delay timer
def op_LD_Vx_DT(state, ins):
    state.V[ins.x] = state.delay
    log(f"Set V{ins.x} = delay timer {state.delay}")
    _next(state)


# Fx0A - Wait for a key: store the lowest pressed key, otherwise stall on this instruction
def op_WAITKEY(state, ins):
    pressed = state.first_pressed()
    if pressed is None:
        log(f"Waiting for a key press into V{ins.x}")
        return
    state.V[ins.x] = pressed
    log(f"Key {pressed:X} stored in V{ins.x}")
    _next(state)


# Fx15 / Fx18 - Load delay / sound timer from Vx
def op_LD_DT_Vx(state, ins):
    state.delay = state.V[ins.x]
    log(f"Delay timer = V{ins.x} ({state.delay})")
    _next(state)


def op_LD_ST_Vx(state, ins):
    state.sound = state.V[ins.x]
    log(f"Sound timer = V{ins.x} ({state.sound})")
    _next(state)


# Fx1E - I = I + Vx, no flag
def op_ADD_I_Vx(state, ins):
    state.I = (state.I + state.V[ins.x]) & 0xFFFF
    log(f"Add V{ins.x} to I: {state.I:03X}")
    _next(state)


# Fx29 - I = address of the font glyph for Vx
def op_FONT(state, ins):
    state.I = config.FONT_ADDRESS + state.V[ins.x] * config.FONT_BYTES
    log(f"I = glyph address for V{ins.x}: {state.I:03X}")
    _next(state)


# Fx33 - Hundreds, tens and ones of Vx at I, I+1, I+2
def op_BCD(state, ins):
    v = state.V[ins.x]
    state.write(state.I, v // 100)
    state.write(state.I + 1, (v // 10) % 10)
    state.write(state.I + 2, v % 10)
    log(f"Stored BCD of V{ins.x} ({v}) at {state.I:03X}")
    _next(state)


# Fx55 / Fx65 - Copy V0..Vx to / from memory at I, then I += x + 1
def op_STORE(state, ins):
    for i in range(ins.x + 1):
        state.write(state.I + i, state.V[i])
    state.I = (state.I + ins.x + 1) & 0xFFFF
    log(f"Stored V0..V{ins.x} in memory, I = {state.I:03X}")
    _next(state)


def op_LOAD(state, ins):
    for i in range(ins.x + 1):
        state.V[i] = state.read(state.I + i)
    state.I = (state.I + ins.x + 1) & 0xFFFF
    log(f"Loaded V0..V{ins.x} from memory, I = {state.I:03X}")
    _next(state)


def op_UNKNOWN(state, ins):
    raise UnknownOpcode(ins.word, state.pc)


HANDLERS = {
    Op.CLS: op_CLS,
    Op.RET: op_RET,
    Op.JP: op_JP,
    Op.CALL: op_CALL,
    Op.SE_VX_KK: op_SE_Vx_kk,
    Op.SNE_VX_KK: op_SNE_Vx_kk,
    Op.SE_VX_VY: op_SE_Vx_Vy,
    Op.LD_VX_KK: op_LD_Vx_kk,
    Op.ADD_VX_KK: op_ADD_Vx_kk,
    Op.LD_VX_VY: op_LD_Vx_Vy,
    Op.OR: op_OR,
    Op.AND: op_AND,
    Op.XOR: op_XOR,
    Op.ADD: op_ADD,
    Op.SUB: op_SUB,
    Op.SHR: op_SHR,
    Op.SUBN: op_SUBN,
    Op.SHL: op_SHL,
    Op.SNE_VX_VY: op_SNE_Vx_Vy,
    Op.LD_I: op_LD_I,
    Op.JP_V0: op_JP_V0,
    Op.RND: op_RND,
    Op.DRW: op_DRW,
    Op.SKP: op_SKP,
    Op.SKNP: op_SKNP,
    Op.LD_VX_DT: op_LD_Vx_DT,
    Op.WAITKEY: op_WAITKEY,
    Op.LD_DT_VX: op_LD_DT_Vx,
    Op.LD_ST_VX: op_LD_ST_Vx,
    Op.ADD_I_VX: op_ADD_I_Vx,
    Op.FONT: op_FONT,
    Op.BCD: op_BCD,
    Op.STORE: op_STORE,
    Op.LOAD: op_LOAD,
    Op.UNKNOWN: op_UNKNOWN,
}


def execute(state, ins):
    HANDLERS[ins.op](state, ins)
