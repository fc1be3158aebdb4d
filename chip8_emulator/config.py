# ---- Configuration ----
# Machine constants plus the user-tunable emulator settings.

import json
from dataclasses import dataclass, asdict, fields
from typing import Optional, Tuple

width, height = 64, 32
MEMORY_SIZE = 4096        # max 4096 bytes
PROGRAM_START = 0x200     # programs are loaded at 0x200 (Cowgod's reference)
STACK_DEPTH = 16
REGISTER_COUNT = 16
KEY_COUNT = 16
TIMER_HZ = 60
BYTES_PER_GLYPH = 5
ROM_EXTENSION = ".ch8"

# Standard CHIP-8 fontset (binary pixel patterns)
fontset = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes


@dataclass
class EmulatorConfig:
    """Settings for the host loop, window and sound."""
    scale: int = 10
    cpu_hz: int = 500
    timer_hz: int = TIMER_HZ
    on_color: Tuple[int, int, int] = (255, 255, 255)
    off_color: Tuple[int, int, int] = (0, 0, 0)
    beep_frequency: int = 440
    beep_duration: float = 0.2
    show_stats: bool = False
    log_enabled: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError("scale must be at least 1")
        if self.cpu_hz < 1 or self.timer_hz < 1:
            raise ValueError("clock rates must be positive")
        self.on_color = tuple(self.on_color)
        self.off_color = tuple(self.off_color)

    @property
    def window_size(self):
        return width * self.scale, height * self.scale

    def to_dict(self) -> dict:
        data = asdict(self)
        data["on_color"] = list(self.on_color)
        data["off_color"] = list(self.off_color)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EmulatorConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError("unknown config keys: " + ", ".join(sorted(unknown)))
        return cls(**data)

    def save(self, path) -> None:
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path) -> "EmulatorConfig":
        with open(path, "r") as f:
            return cls.from_dict(json.load(f))
