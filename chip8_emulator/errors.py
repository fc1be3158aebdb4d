"""Errors raised by the interpreter and loader.

Every one of them ends the current run: CHIP-8 has no way for a program to
recover from a fault, so the host stops emulation when one propagates.
"""


class Chip8Error(Exception):
    pass


class MalformedRom(Chip8Error):
    """Empty, odd-length or unsupported program image."""


InvalidRomFormat = MalformedRom


class RomReadError(MalformedRom):
    def __init__(self, path, reason):
        super().__init__("could not open rom: %s (%s)" % (path, reason))
        self.path = path
        self.reason = reason


class RomTooLarge(Chip8Error):
    def __init__(self, size, capacity):
        super().__init__("rom is %d bytes, only %d fit in memory" % (size, capacity))
        self.size = size
        self.capacity = capacity


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class UnimplementedOpcode(Chip8Error):
    def __init__(self, word, address=None):
        if address is None:
            message = "unknown opcode: %04X" % word
        else:
            message = "unknown opcode: %04X at 0x%03X" % (word, address)
        super().__init__(message)
        self.word = word
        self.address = address


class MemoryAccessOutOfRange(Chip8Error):
    def __init__(self, address):
        super().__init__("memory access out of range: 0x%X" % address)
        self.address = address
