# Machine State - everything a running CHIP8 program can see or change.
# We store the 16 registers as a plain list, memory as a bytearray, and the
# stack, keypad and framebuffer as NumPy arrays so the host can read them directly.
#----------------------------------------------------------------------------------------------

import numbers
import random
from enum import IntEnum

import numpy as np

from . import config
from .errors import InvalidKeyIndex, ProgramTooLarge
from .log import log


class Key(IntEnum):
    KEY_0 = 0x0
    KEY_1 = 0x1
    KEY_2 = 0x2
    KEY_3 = 0x3
    KEY_4 = 0x4
    KEY_5 = 0x5
    KEY_6 = 0x6
    KEY_7 = 0x7
    KEY_8 = 0x8
    KEY_9 = 0x9
    KEY_A = 0xA
    KEY_B = 0xB
    KEY_C = 0xC
    KEY_D = 0xD
    KEY_E = 0xE
    KEY_F = 0xF


class MachineState:
    """Memory, registers, timers, stack, keypad and framebuffer of one machine.

    The framebuffer is indexed ``vram[y, x]`` and holds 0 or 1 per pixel.
    """

    def __init__(self, seed=None):
        self.rng = random.Random(seed)
        self.initialize()

    def initialize(self):
        """Zero everything, seed the font table and point pc at the load offset."""
        self.memory = bytearray(config.MEM_SIZE)
        self.V = [0] * config.NUM_REGS
        self.I = 0
        self.pc = config.PROGRAM_OFFSET

        self.stack = np.zeros(config.STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.delay = 0
        self.sound = 0

        self.keys = np.zeros(config.NUM_KEYS, dtype=np.uint8)
        self.vram = np.zeros((config.height, config.width), dtype=np.uint8)
        self.should_draw = True

        # Load fontset into memory
        start = config.FONT_ADDRESS
        self.memory[start:start + len(config.FONTSET)] = bytes(config.FONTSET)

    def load_program(self, data):
        """Copy a program image into memory at the load offset.

        Nothing else is touched: pc, registers and timers keep their values.
        """
        data = bytes(data)
        capacity = config.MEM_SIZE - config.PROGRAM_OFFSET
        if len(data) > capacity:
            raise ProgramTooLarge(len(data), capacity)
        start = config.PROGRAM_OFFSET
        self.memory[start:start + len(data)] = data
        log(f"Loaded {len(data)} bytes at 0x{start:03X}")

    def set_key(self, key, pressed):
        if isinstance(key, bool) or not isinstance(key, numbers.Integral) or not 0 <= key < config.NUM_KEYS:
            raise InvalidKeyIndex(key)
        self.keys[key] = 1 if pressed else 0

    def is_pressed(self, key):
        return bool(self.keys[key])

    def first_pressed(self):
        """Lowest pressed key index, or None when the keypad is idle."""
        for i in range(config.NUM_KEYS):
            if self.keys[i]:
                return i
        return None

    # ---- Memory ----
    def read(self, address):
        return self.memory[address % config.MEM_SIZE]

    def write(self, address, value):
        self.memory[address % config.MEM_SIZE] = value & 0xFF

    # ---- Stack ----
    def push(self, address):
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self):
        self.sp -= 1
        return int(self.stack[self.sp])

    # ---- Framebuffer ----
    def pixel(self, x, y):
        return int(self.vram[y % config.height, x % config.width])

    def clear_screen(self):
        self.vram[:] = 0
        self.should_draw = True

    def snapshot(self):
        """Copy of the framebuffer, safe to keep while the machine runs on."""
        return self.vram.copy()
