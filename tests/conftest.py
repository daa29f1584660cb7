import pytest

from chip8vm import Chip8, MachineState
from chip8vm.decoder import decode
from chip8vm.executor import execute


@pytest.fixture
def vm():
    return Chip8(seed=1234)


@pytest.fixture
def state():
    return MachineState(seed=1234)


@pytest.fixture
def run_op(state):
    """Decode and execute one instruction word against the ``state`` fixture."""
    def run(word):
        ins = decode(word)
        execute(state, ins)
        return ins
    return run
