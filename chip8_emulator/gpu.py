# Output - 64x32 display (array of pixels that are either on or off (0 || 1)).

import numpy as np

from .config import width, height


class GPU:
    """Monochrome framebuffer with XOR sprite drawing."""

    def __init__(self):
        self.vram = np.zeros((height, width), dtype=np.uint8)
        self.dirty = True

    def clear(self):
        self.vram[:] = 0
        self.dirty = True

    def blit(self, x0, y0, sprite):
        """XOR `sprite` rows onto the screen with its top-left at (x0, y0).

        Coordinates wrap on both axes. Returns True if any lit pixel was
        switched off.
        """
        collision = False
        for row, byte in enumerate(sprite):
            if byte == 0:
                continue
            y = (y0 + row) % height
            for bit in range(8):
                if byte & (0x80 >> bit):
                    x = (x0 + bit) % width
                    if self.vram[y, x]:
                        collision = True
                    self.vram[y, x] ^= 1
        self.dirty = True
        return collision

    def pixel(self, x, y):
        return bool(self.vram[y % height, x % width])

    @property
    def frame(self):
        return self.vram.copy()

    def render(self, surface):
        surface.present(self.frame)
        self.dirty = False

    def to_text(self, on="#", off="."):
        return "\n".join("".join(on if p else off for p in row) for row in self.vram)
