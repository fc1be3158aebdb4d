"""Command line entry point: ``chip8-emulator <rom-file>``."""

import argparse
import sys
from dataclasses import replace

from .config import EmulatorConfig
from .errors import Chip8Error
from .logs import set_logging
from .machine import Machine
from .opcodes import disassemble


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chip8-emulator",
        description="Run a CHIP-8 program (.ch8).",
    )
    parser.add_argument("rom", help="path to the .ch8 program image")
    parser.add_argument("--config", metavar="FILE", help="JSON settings file")
    parser.add_argument("--scale", type=int, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--cpu-hz", type=int, help="instructions per second")
    parser.add_argument("--seed", type=int, help="seed for the RND instruction")
    parser.add_argument("--log", action="store_true", help="log every executed instruction")
    parser.add_argument("--stats", action="store_true", help="show FPS and cycles/s")
    parser.add_argument("--headless", type=int, metavar="CYCLES",
                        help="run CYCLES instructions without a window and print the screen")
    parser.add_argument("--disassemble", action="store_true",
                        help="print the program listing and exit")
    return parser


def make_config(args):
    config = EmulatorConfig.load(args.config) if args.config else EmulatorConfig()
    overrides = {}
    if args.scale is not None:
        overrides["scale"] = args.scale
    if args.cpu_hz is not None:
        overrides["cpu_hz"] = args.cpu_hz
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.log:
        overrides["log_enabled"] = True
    if args.stats:
        overrides["show_stats"] = True
    return replace(config, **overrides)


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = make_config(args)
    except (OSError, ValueError, TypeError) as e:
        print("error: bad configuration: %s" % e, file=sys.stderr)
        return 1
    set_logging(config.log_enabled)

    machine = Machine(config)
    try:
        machine.load_rom_file(args.rom)
        if args.disassemble:
            start = 0x200
            program = machine.memory.read_block(start, machine.memory.program_size)
            for address, word, text in disassemble(program, start):
                print("%03X: %04X  %s" % (address, word, text))
            return 0
        if args.headless is not None:
            machine.run(args.headless)
            print(machine.gpu.to_text())
            return 0
    except Chip8Error as e:
        print("error: %s" % e, file=sys.stderr)
        return 1

    from .window import run

    window = run(machine)
    if window.error is not None:
        print("error: %s" % window.error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
