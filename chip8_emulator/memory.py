# Memory - can hold up to 4096 bytes which includes: the fonts and the inputted ROM.
# 0x000-0x04F holds the 16 font glyphs, programs start at 0x200.

import os

from .config import MEMORY_SIZE, PROGRAM_START, BYTES_PER_GLYPH, ROM_EXTENSION, fontset
from .errors import MalformedRom, RomReadError, RomTooLarge, MemoryAccessOutOfRange
from .logs import log


def font_address(digit):
    return digit * BYTES_PER_GLYPH


class Memory:
    """Bounds-checked 4 KiB address space."""

    def __init__(self):
        self.ram = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self):
        """Zero every byte, then put the font glyphs back at 0x000."""
        self.ram[:] = bytes(MEMORY_SIZE)
        self.ram[:len(fontset)] = bytes(fontset)
        self.program_size = 0

    def __len__(self):
        return len(self.ram)

    def _check(self, address, count=1):
        if address < 0:
            raise MemoryAccessOutOfRange(address)
        if address + count > MEMORY_SIZE:
            # first address past the end
            raise MemoryAccessOutOfRange(max(address, MEMORY_SIZE))

    def read(self, address):
        self._check(address)
        return self.ram[address]

    def read_word(self, address):
        self._check(address, 2)
        return (self.ram[address] << 8) | self.ram[address + 1]

    def read_block(self, address, count):
        self._check(address, count)
        return bytes(self.ram[address:address + count])

    def write(self, address, value):
        self._check(address)
        self.ram[address] = value & 0xFF

    def write_block(self, address, data):
        self._check(address, len(data))
        self.ram[address:address + len(data)] = bytes(b & 0xFF for b in data)

    # ---- Load ROM ----
    def load(self, data):
        data = bytes(data)
        if not data:
            raise MalformedRom("rom is empty")
        if len(data) % 2:
            raise MalformedRom("rom has an odd number of bytes (%d)" % len(data))
        capacity = MEMORY_SIZE - PROGRAM_START
        if len(data) > capacity:
            raise RomTooLarge(len(data), capacity)
        self.ram[PROGRAM_START:PROGRAM_START + len(data)] = data
        self.program_size = len(data)
        log("Loaded %d bytes at 0x%03X" % (len(data), PROGRAM_START))

    def load_rom_file(self, path):
        extension = os.path.splitext(str(path))[1]
        if extension.lower() != ROM_EXTENSION:
            raise MalformedRom("file extension not supported: %r" % extension)
        log("Loading ROM:", path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise RomReadError(path, e.strerror or e) from e
        self.load(data)
