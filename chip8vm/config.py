# CHIP8 machine layout and host pacing.
# Memory - 4096 bytes: the font table sits at the bottom, programs load at 0x200.
# Output - 64x32 display, every pixel either on or off (0 || 1).
#----------------------------------------------------------------------------------------------

# ---- Machine ----
MEM_SIZE = 4096
PROGRAM_OFFSET = 0x200
NUM_REGS = 16
FLAG = 0xF            # VF doubles as carry / borrow / collision flag
STACK_SIZE = 16
NUM_KEYS = 16
width, height = 64, 32
SPRITE_WIDTH = 8

# ---- Pacing ----
CYCLES_PER_FRAME = 20
FRAME_HZ = 60

# ---- Host ----
scale = 10
window_width, window_height = width * scale, height * scale

# set fonts (binary pixel patterns)
FONT_ADDRESS = 0x000
FONT_BYTES = 5        # bytes per glyph
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes
