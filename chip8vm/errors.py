"""Errors raised by the CHIP-8 core.

Every error is raised before the machine state is touched, so a failed
call leaves the machine exactly as it was.
"""


class Chip8Error(Exception):
    pass


class ProgramTooLarge(Chip8Error):
    def __init__(self, size, capacity):
        super().__init__(f"Program of {size} bytes does not fit in {capacity} bytes")
        self.size = size
        self.capacity = capacity


class InvalidKeyIndex(Chip8Error, IndexError):
    def __init__(self, key):
        super().__init__(f"Key index out of range: {key!r}")
        self.key = key


class UnknownOpcode(Chip8Error):
    def __init__(self, word, address):
        super().__init__("Unknown opcode: %04X at 0x%03X" % (word, address))
        self.word = word
        self.address = address


class StackOverflow(Chip8Error):
    def __init__(self, address):
        super().__init__("Stack overflow on CALL at 0x%03X" % address)
        self.address = address


class StackUnderflow(Chip8Error):
    def __init__(self, address):
        super().__init__("Stack underflow on RET at 0x%03X" % address)
        self.address = address
