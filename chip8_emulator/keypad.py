# Input - store key input states and check these per cycle.

import threading

import numpy as np

from .config import KEY_COUNT


class Keypad:
    """The 16-key hex keypad.

    The host's input adapter presses and releases keys, the interpreter only
    reads them. A lock guards the table so input may come from another thread.
    """

    def __init__(self):
        self._keys = np.zeros(KEY_COUNT, dtype=np.uint8)
        self._lock = threading.Lock()

    @staticmethod
    def _validate(code):
        if not 0 <= code < KEY_COUNT:
            raise ValueError("key code out of range: %r" % (code,))

    def set(self, code, pressed):
        self._validate(code)
        with self._lock:
            self._keys[code] = 1 if pressed else 0

    def press(self, code):
        self.set(code, True)

    def release(self, code):
        self.set(code, False)

    def release_all(self):
        with self._lock:
            self._keys[:] = 0

    def is_pressed(self, code):
        if not 0 <= code < KEY_COUNT:
            return False
        with self._lock:
            return bool(self._keys[code])

    def first_pressed(self):
        with self._lock:
            pressed = np.flatnonzero(self._keys)
        if len(pressed) == 0:
            return None
        return int(pressed[0])

    def snapshot(self):
        with self._lock:
            return [bool(k) for k in self._keys]
