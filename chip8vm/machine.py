# Step Driver - Fetch -> Decode -> Execute -> Timer tick, one instruction per call.
# The host decides how often to call step() (or run_frame() for a batch);
# nothing here looks at the wall clock.
#----------------------------------------------------------------------------------------------

import pyglet

from . import config
from .decoder import decode, disassemble, fetch
from .executor import execute
from .log import log
from .rom import parse_hex
from .state import MachineState


class Chip8(pyglet.event.EventDispatcher):
    """A CHIP-8 virtual machine.

    Owns one :class:`MachineState` and mutates it only through :meth:`step`.
    Dispatches ``on_sound_stop`` when the sound timer runs down to zero.
    """

    def __init__(self, cycles_per_frame=config.CYCLES_PER_FRAME, seed=None):
        super().__init__()
        self.cycles_per_frame = cycles_per_frame
        self.state = MachineState(seed)
        self.sound_stopped = False
        self.cycle_count = 0

    # ---- Host write surface ----
    def initialize(self):
        self.state.initialize()
        self.sound_stopped = False
        self.cycle_count = 0

    def load_program(self, data):
        self.state.load_program(data)

    def load_hex(self, text):
        self.state.load_program(parse_hex(text))

    def set_key(self, key, pressed):
        self.state.set_key(key, pressed)

    # ---- Host read surface ----
    @property
    def vram(self):
        return self.state.vram

    @property
    def pc(self):
        return self.state.pc

    @property
    def V(self):
        return self.state.V

    @property
    def delay_timer(self):
        return self.state.delay

    @property
    def sound_timer(self):
        return self.state.sound

    @property
    def should_draw(self):
        return self.state.should_draw

    @should_draw.setter
    def should_draw(self, value):
        self.state.should_draw = value

    # ---- Cycle ----
    def step(self):
        """Execute one instruction and tick both timers once.

        Returns the executed instruction. Raises a Chip8Error (UnknownOpcode,
        StackOverflow, StackUnderflow) with the machine left untouched.
        """
        ins = decode(fetch(self.state))
        log(f"{self.state.pc:03X}: {ins.word:04X}  {disassemble(ins)}")
        execute(self.state, ins)
        self.cycle_count += 1
        self._timer_tick()
        return ins

    def run_frame(self, cycles=None):
        """Run one host frame worth of steps (cycles_per_frame by default)."""
        if cycles is None:
            cycles = self.cycles_per_frame
        for _ in range(cycles):
            self.step()

    def skip(self):
        """Step over the instruction at pc without executing it."""
        log(f"Skipping {fetch(self.state):04X} at {self.state.pc:03X}")
        self.state.pc = (self.state.pc + 2) & 0xFFF
        self._timer_tick()

    # ---- timers ----
    def _timer_tick(self):
        state = self.state
        self.sound_stopped = False
        if state.delay > 0:
            state.delay -= 1
        if state.sound > 0:
            state.sound -= 1
            if state.sound == 0:
                self.sound_stopped = True
                log("Sound timer expired")
                self.dispatch_event('on_sound_stop')

    def on_sound_stop(self):
        """Default handler; hosts push their own."""


Chip8.register_event_type('on_sound_stop')
