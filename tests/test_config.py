from __future__ import annotations

import json

import pytest

from chip8_emulator.config import EmulatorConfig


def test_defaults():
    config = EmulatorConfig()
    assert config.scale == 10
    assert config.timer_hz == 60
    assert config.window_size == (640, 320)


def test_save_and_load(tmp_path):
    path = tmp_path / "settings.json"
    EmulatorConfig(scale=4, cpu_hz=700, on_color=(30, 144, 255), seed=3).save(path)
    loaded = EmulatorConfig.load(path)
    assert loaded.scale == 4
    assert loaded.cpu_hz == 700
    assert loaded.on_color == (30, 144, 255)
    assert loaded.seed == 3


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"scale": 2, "turbo": True}))
    with pytest.raises(ValueError, match="turbo"):
        EmulatorConfig.load(path)


@pytest.mark.parametrize("kwargs", [{"scale": 0}, {"cpu_hz": 0}, {"timer_hz": -1}])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        EmulatorConfig(**kwargs)
