"""CHIP-8 virtual machine: interpreter, framebuffer and a pyglet front end."""

from .config import EmulatorConfig
from .cpu import CPU
from .errors import (
    Chip8Error,
    InvalidRomFormat,
    MalformedRom,
    MemoryAccessOutOfRange,
    RomReadError,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
    UnimplementedOpcode,
)
from .gpu import GPU
from .keypad import Keypad
from .machine import Machine
from .memory import Memory
from .opcodes import Instruction, Op, decode, disassemble

__version__ = "0.1.0"

__all__ = [
    "CPU",
    "GPU",
    "Chip8Error",
    "EmulatorConfig",
    "Instruction",
    "InvalidRomFormat",
    "Keypad",
    "Machine",
    "MalformedRom",
    "Memory",
    "MemoryAccessOutOfRange",
    "Op",
    "RomReadError",
    "RomTooLarge",
    "StackOverflow",
    "StackUnderflow",
    "UnimplementedOpcode",
    "decode",
    "disassemble",
]
