"""Host loop pacing: instruction rate vs. the 60 Hz timers."""

from __future__ import annotations

import random

from chip8_emulator.config import EmulatorConfig
from chip8_emulator.machine import Machine


class FakeClock:
    def __init__(self, step):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def _looping_machine(assemble, config=None):
    machine = Machine(config or EmulatorConfig(cpu_hz=600, seed=1))
    # LD V0, 0x3C ; LD DT, V0 ; JP 0x204 (spin)
    machine.load(assemble(0x603C, 0xF015, 0x1204))
    return machine


def test_step_renders_only_dirty_frames(assemble, surface):
    machine = Machine()
    machine.load(assemble(0x00E0, 0x6000, 0x6100))
    machine.step(surface)
    assert len(surface.frames) == 1
    machine.step(surface)
    machine.step(surface)
    assert len(surface.frames) == 1
    assert machine.cycle_count == 3


def test_update_runs_cpu_rate_cycles(assemble):
    machine = _looping_machine(assemble)
    machine.update(0.5)
    assert machine.cycle_count == 300


def test_update_ticks_timers_at_60hz(assemble):
    machine = _looping_machine(assemble)
    machine.update(2.5 / 60)  # timers tick before DT is loaded
    assert machine.cpu.dt == 60
    machine.update(10 / 60)
    assert machine.cpu.dt == 50


def test_update_reports_beep_edges(assemble):
    machine = Machine(EmulatorConfig(cpu_hz=60))
    # LD V0, 2 ; LD ST, V0 ; JP 0x204
    machine.load(assemble(0x6002, 0xF018, 0x1204))
    machine.update(2.5 / 60)
    assert machine.cpu.st == 2
    assert machine.update(2 / 60) == 1
    assert machine.cpu.st == 0
    assert machine.update(1.0) == 0


def test_run_stops_at_end_of_memory(assemble):
    machine = Machine()
    machine.load(assemble(0x1FFE))
    executed = machine.run(10_000)
    # JP then the last word of memory, a SYS no-op
    assert executed == 2
    assert machine.halted


def test_run_decouples_timers_from_cycles(assemble):
    machine = _looping_machine(assemble)
    # clock advances 1 ms per read: about one tick every 17 instructions
    executed = machine.run(170, clock=FakeClock(0.001))
    assert executed == 170
    assert 50 <= machine.cpu.dt < 60


def test_run_without_elapsed_time_never_ticks(assemble):
    machine = _looping_machine(assemble)
    machine.run(1000, clock=FakeClock(0.0))
    assert machine.cpu.dt == 60


def test_update_after_halt_is_harmless(assemble):
    machine = Machine(EmulatorConfig(cpu_hz=1000))
    machine.load(assemble(0x1FFE))
    machine.update(1.0)
    machine.update(1.0)
    assert machine.halted
    assert machine.cycle_count == 2


def test_keypad_is_shared_with_cpu():
    machine = Machine()
    machine.keypad.press(4)
    assert machine.cpu.keypad.is_pressed(4)


def test_update_renders_dirty_frame_once(assemble, surface):
    machine = Machine(EmulatorConfig(cpu_hz=60))
    # CLS ; JP 0x202 (spin)
    machine.load(assemble(0x00E0, 0x1202))
    machine.update(2.5 / 60, surface)
    assert len(surface.frames) == 1
    assert not machine.gpu.dirty
    machine.update(2 / 60, surface)
    assert len(surface.frames) == 1


def test_injected_generator_reaches_cpu(assemble):
    rng = random.Random(5)
    machine = Machine(rng=rng)
    assert machine.cpu.rng is rng
    machine.load(assemble(0xC0FF))
    machine.step()
    assert machine.cpu.v[0] == random.Random(5).getrandbits(8)
