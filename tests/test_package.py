from __future__ import annotations

import chip8_emulator


def test_public_names_are_importable():
    assert chip8_emulator.__version__
    for name in chip8_emulator.__all__:
        assert hasattr(chip8_emulator, name)
