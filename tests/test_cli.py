"""Command line behaviour that does not need a window."""

from __future__ import annotations

import pytest

from chip8_emulator.cli import main


def _rom(tmp_path, data, name="prog.ch8"):
    path = tmp_path / name
    path.write_bytes(data)
    return str(path)


def test_missing_rom_argument_prints_usage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code != 0
    assert "usage" in capsys.readouterr().err.lower()


def test_disassemble(tmp_path, capsys, assemble):
    rom = _rom(tmp_path, assemble(0x600A, 0x6105, 0x8014))
    assert main([rom, "--disassemble"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "200: 600A  LD V0, 0x0A",
        "202: 6105  LD V1, 0x05",
        "204: 8014  ADD V0, V1",
    ]


def test_headless_draws_the_screen(tmp_path, capsys, assemble):
    # LD V0, 0xF ; LD F, V0 ; DRW V1, V1, 5
    rom = _rom(tmp_path, assemble(0x600F, 0xF029, 0xD115))
    assert main([rom, "--headless", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 32
    assert lines[0].startswith("####.")
    assert lines[4].startswith("#....")


def test_unsupported_extension(tmp_path, capsys):
    rom = _rom(tmp_path, b"\x00\xE0", name="prog.rom")
    assert main([rom, "--headless", "1"]) == 1
    assert "extension" in capsys.readouterr().err


def test_unreadable_rom(tmp_path, capsys):
    assert main([str(tmp_path / "nope.ch8"), "--headless", "1"]) == 1
    assert "could not open rom" in capsys.readouterr().err


def test_emulation_error_is_reported(tmp_path, capsys, assemble):
    rom = _rom(tmp_path, assemble(0x00EE))
    assert main([rom, "--headless", "5"]) == 1
    assert "stack" in capsys.readouterr().err


def test_bad_config_file(tmp_path, capsys, assemble):
    rom = _rom(tmp_path, assemble(0x00E0))
    config = tmp_path / "bad.json"
    config.write_text('{"scale": 0}')
    assert main([rom, "--config", str(config), "--headless", "1"]) == 1
    assert "configuration" in capsys.readouterr().err


def test_config_value_of_wrong_type(tmp_path, capsys, assemble):
    rom = _rom(tmp_path, assemble(0x00E0))
    config = tmp_path / "bad.json"
    config.write_text('{"scale": "x"}')
    assert main([rom, "--config", str(config), "--headless", "1"]) == 1
    assert "configuration" in capsys.readouterr().err
