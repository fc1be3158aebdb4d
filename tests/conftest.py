from __future__ import annotations

import pytest

from chip8_emulator.cpu import CPU
from chip8_emulator.logs import set_logging


def program(*words):
    """Big-endian bytes for a list of instruction words."""
    out = bytearray()
    for word in words:
        out += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(out)


class FakeSurface:
    def __init__(self):
        self.frames = []

    def present(self, frame):
        self.frames.append(frame)


@pytest.fixture
def assemble():
    return program


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def cpu():
    return CPU(seed=1234)


@pytest.fixture
def run():
    """Load `words` into a fresh CPU and execute them one cycle each."""

    def _run(*words, cycles=None, cpu=None):
        cpu = cpu if cpu is not None else CPU(seed=1234)
        cpu.load(program(*words))
        for _ in range(len(words) if cycles is None else cycles):
            cpu.cycle()
        return cpu

    return _run


@pytest.fixture(autouse=True)
def _quiet_logs():
    yield
    set_logging(False)
