# Program images from outside the core: ROM files on disk and hex-digit strings.
import re
from pathlib import Path

from .log import log

_WHITESPACE = re.compile(r"\s+")


def read_rom(path):
    """Raw bytes of a ROM file. OSError from the filesystem is passed through."""
    log("Loading ROM:", path)
    return Path(path).read_bytes()


def parse_hex(text):
    """Bytes of a program written as hex digits, e.g. ``"6005 7003"``.

    Whitespace is ignored. Raises ValueError for anything else that is not hex
    or for an odd number of digits.
    """
    digits = _WHITESPACE.sub("", text)
    if len(digits) % 2:
        raise ValueError(f"Odd number of hex digits: {len(digits)}")
    return bytes.fromhex(digits)
