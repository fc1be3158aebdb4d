"""Wires the interpreter, framebuffer and keypad together and paces them.

Instructions run at the configured CPU rate while the delay and sound timers
count down at 60 Hz, independent of how many instructions ran in between.
"""

import time

from .config import EmulatorConfig
from .cpu import CPU
from .gpu import GPU
from .keypad import Keypad
from .logs import log
from .memory import Memory


class Machine:

    def __init__(self, config=None, rng=None):
        self.config = config if config is not None else EmulatorConfig()
        self.memory = Memory()
        self.gpu = GPU()
        self.keypad = Keypad()
        self.cpu = CPU(self.memory, self.gpu, self.keypad, seed=self.config.seed, rng=rng)

        self.cycle_count = 0
        self._cycle_budget = 0.0
        self._timer_elapsed = 0.0
        self._halt_reported = False

    @property
    def halted(self):
        return self.cpu.halted

    def load(self, data):
        self.cpu.load(data)

    def load_rom_file(self, path):
        self.memory.load_rom_file(path)

    # ---- one instruction, then hand the frame to the display ----
    def step(self, surface=None):
        ran = self.cpu.cycle()
        if ran:
            self.cycle_count += 1
        elif self.cpu.halted and not self._halt_reported:
            self._halt_reported = True
            log("Program halted at 0x%03X" % self.cpu.pc)
        if surface is not None and self.gpu.dirty:
            self.gpu.render(surface)
        return ran

    def tick_timers(self):
        self.cpu.tick()
        return self.cpu.consume_beep()

    def update(self, dt, surface=None):
        """Advance emulation by `dt` seconds of host time.

        Timers tick first, then as many instructions as the CPU rate allows.
        A dirty frame is handed to `surface` once the batch is done. Returns
        the number of beeps that started during the interval.
        """
        beeps = 0
        self._timer_elapsed += dt
        period = 1.0 / self.config.timer_hz
        while self._timer_elapsed >= period:
            self._timer_elapsed -= period
            if self.tick_timers():
                beeps += 1

        self._cycle_budget += dt * self.config.cpu_hz
        while self._cycle_budget >= 1.0:
            self._cycle_budget -= 1.0
            if not self.step():
                self._cycle_budget = 0.0
                break
        if surface is not None and self.gpu.dirty:
            self.gpu.render(surface)
        return beeps

    def run(self, max_cycles, surface=None, clock=time.perf_counter):
        """Run up to `max_cycles` instructions as fast as possible.

        Timers still tick once per elapsed 1/60 s of `clock` time. Stops early
        when the program runs off the end of memory.
        """
        period = 1.0 / self.config.timer_hz
        last_tick = clock()
        executed = 0
        while executed < max_cycles:
            if not self.step(surface):
                break
            executed += 1
            now = clock()
            if now - last_tick >= period:
                self.tick_timers()
                last_tick = now
        return executed
