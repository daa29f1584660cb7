from .errors import (Chip8Error, InvalidKeyIndex, ProgramTooLarge,
                     StackOverflow, StackUnderflow, UnknownOpcode)
from .decoder import Instruction, Op, decode, disassemble
from .machine import Chip8
from .state import Key, MachineState

__version__ = "0.1.0"

__all__ = [
    "Chip8", "MachineState", "Key", "Op", "Instruction", "decode", "disassemble",
    "Chip8Error", "ProgramTooLarge", "InvalidKeyIndex", "UnknownOpcode",
    "StackOverflow", "StackUnderflow",
]
