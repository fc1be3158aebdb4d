# We're subclassing pyglet (that'll handle graphics, sound output, and keyboard handling)
# and overriding whatever def we need from there. The Machine does the emulation,
# this window only feeds it key events and displays its frames.

import random

import numpy as np
import pyglet
from pyglet.window import key
from pyglet.media import synthesis

from .config import width, height
from .errors import Chip8Error
from .logs import log, logger, logs_enabled, set_logging

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, caption="CHIP-8 Emulator"):
        self.machine = machine
        self.config = machine.config
        window_width, window_height = self.config.window_size
        super().__init__(window_width, window_height, caption=caption, resizable=False, vsync=False)

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((height, width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self._on = np.array(self.config.on_color, dtype=np.uint8)
        self._off = np.array(self.config.off_color, dtype=np.uint8)
        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            bytes(window_width * window_height * 4)
        )

        # ---- Performance Counters ----
        self._fps_counter = 0
        self._cps_counter = 0
        self.fps_label = pyglet.text.Label(
            "FPS: 0", font_size=12, x=5, y=window_height - 15,
            anchor_x='left', anchor_y='center', color=(255, 0, 0, 255))
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0", font_size=12, x=5, y=window_height - 30,
            anchor_x='left', anchor_y='center', color=(255, 0, 0, 255))

        self.error = None

        # One callback per frame; the Machine spreads dt over CPU cycles and timer ticks
        pyglet.clock.schedule_interval(self._update, 1.0 / self.config.timer_hz)
        if self.config.show_stats:
            pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # ---- Display surface ----
    def present(self, frame):
        lit = frame.astype(bool)[::-1]  # pyglet's origin is bottom-left
        self._small_framebuf[..., :3] = np.where(lit[..., None], self._on, self._off)
        scale = self.config.scale
        if scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1)
        else:
            scaled = self._small_framebuf
        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())

    def on_draw(self):
        self.clear()
        self.image.blit(0, 0)
        if self.config.show_stats:
            self.fps_label.draw()
            self.cps_label.draw()
        self._fps_counter += 1

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            self.close()
        if symbol in keymap:
            self.machine.keypad.press(keymap[symbol])
        if symbol == key.F1:
            set_logging(not logs_enabled())
            log("logsOn:", logs_enabled())

    def on_key_release(self, symbol, modifiers):
        #@Override
        if symbol in keymap:
            self.machine.keypad.release(keymap[symbol])

    # ---- CPU cycles and timers ----
    def _update(self, dt):
        if self.machine.halted:
            return
        before = self.machine.cycle_count
        try:
            beeps = self.machine.update(dt, self)
        except Chip8Error as e:
            logger.error("Emulation error: %s", e)
            self.error = e
            self.close()
            return
        self._cps_counter += self.machine.cycle_count - before
        for _ in range(beeps):
            self._play_beep()

    def _play_beep(self, pitch_variation=15):
        freq = self.config.beep_frequency + random.randint(-pitch_variation, pitch_variation)
        wave = synthesis.Sine(duration=self.config.beep_duration, frequency=freq, sample_rate=44100)

        player = pyglet.media.Player()
        player.queue(wave)
        player.play()

        # Ensure the player goes away once the beep is over
        def on_eos():
            player.delete()

        player.on_eos = on_eos

    def _update_bench(self, dt):
        self.fps_label.text = f"FPS: {self._fps_counter / dt:.1f}"
        self.cps_label.text = f"Cycles/s: {self._cps_counter / dt:.0f}"
        self._fps_counter = 0
        self._cps_counter = 0

    def close(self):
        pyglet.clock.unschedule(self._update)
        pyglet.clock.unschedule(self._update_bench)
        super().close()


def run(machine):
    window = Chip8Window(machine)
    pyglet.app.run()
    return window
