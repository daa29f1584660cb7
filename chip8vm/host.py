# pyglet host - window, keyboard and beeper around a Chip8 machine.
# The window runs cycles_per_frame steps per frame at FRAME_HZ, blits the
# framebuffer (upscaled with numpy.repeat) and beeps while the sound timer runs.
# F1 toggles trace logs, ESC quits.
#----------------------------------------------------------------------------------------------

import random

import numpy as np
import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from . import config
from .errors import Chip8Error, UnknownOpcode
from .log import logger, toggle_logs

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, scale=config.scale, skip_unknown=False):
        self.scale = scale
        window_width, window_height = config.width * scale, config.height * scale
        super().__init__(
            width=window_width,
            height=window_height,
            caption="CHIP-8 Emulator",
            vsync=False
        )
        self.machine = machine
        self.skip_unknown = skip_unknown
        self.machine.push_handlers(on_sound_stop=self._stop_beep)
        self.beep_player = None

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            bytes(window_width * window_height * 4)
        )

        # Performance tracking
        self._fps_counter = 0
        self._cps_counter = 0
        self._bench_time = pyglet.clock.get_default().time()
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=5,
            y=window_height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=window_height - 30,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        pyglet.clock.schedule_interval(self.frame, 1 / config.FRAME_HZ)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # ---- CPU frame ----
    def frame(self, dt):
        for _ in range(self.machine.cycles_per_frame):
            try:
                self.machine.step()
            except UnknownOpcode as e:
                if not self.skip_unknown:
                    self._halt(e)
                    return
                logger.warning("%s, skipping", e)
                self.machine.skip()
            except Chip8Error as e:
                self._halt(e)
                return
            self._cps_counter += 1

        if self.machine.sound_timer > 0 and self.beep_player is None:
            self._play_beep()

    def _halt(self, error):
        logger.error("Emulation error: %s", error)
        pyglet.clock.unschedule(self.frame)
        self.close()

    # FPS / CPS
    def _update_bench(self, dt):
        now = pyglet.clock.get_default().time()
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            self.fps_label.text = f"FPS: {self._fps_counter / elapsed:.1f}"
            self.cps_label.text = f"Cycles/s: {self._cps_counter}"
            self._fps_counter = 0
            self._cps_counter = 0
            self._bench_time = now

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        # pyglet's origin is bottom-left, CHIP-8's is top-left
        lit = self.machine.vram[::-1] * 255
        self._small_framebuf[..., 0] = lit
        self._small_framebuf[..., 1] = lit
        self._small_framebuf[..., 2] = lit

        if self.scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, self.scale, axis=0), self.scale, axis=1)
        else:
            scaled = self._small_framebuf

        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())
        self.image.blit(0, 0)
        self.fps_label.draw()
        self.cps_label.draw()

        self.machine.should_draw = False
        self._fps_counter += 1

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            toggle_logs()
        elif symbol in keymap:
            self.machine.set_key(keymap[symbol], True)

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], False)

    def on_close(self):
        pyglet.clock.unschedule(self.frame)
        pyglet.clock.unschedule(self._update_bench)
        self._stop_beep()
        super().on_close()

    # ---- Sound ----
    def _play_beep(self, base_freq=440, pitch_variation=15):
        freq = base_freq + random.randint(-pitch_variation, pitch_variation)
        duration = max(self.machine.sound_timer, 1) / config.FRAME_HZ
        wave = synthesis.Sine(duration=duration, frequency=freq, sample_rate=44100)

        player = pyglet.media.Player()
        player.queue(wave)
        player.play()
        self.beep_player = player

        def on_eos():
            if self.beep_player is player:
                self.beep_player = None
            player.delete()

        player.on_eos = on_eos

    def _stop_beep(self):
        if self.beep_player is not None:
            self.beep_player.pause()
            self.beep_player.delete()
            self.beep_player = None


def run(machine, scale=config.scale, skip_unknown=False):
    Chip8Window(machine, scale=scale, skip_unknown=skip_unknown)
    pyglet.app.run()
