import argparse
import logging
import sys

from . import config
from .errors import Chip8Error
from .log import set_logs
from .machine import Chip8
from .rom import read_rom


def build_parser():
    parser = argparse.ArgumentParser(prog="chip8vm", description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="ROM image to run")
    parser.add_argument("--cycles-per-frame", type=int, default=config.CYCLES_PER_FRAME,
                        help="instructions executed per 1/%d s frame (default: %%(default)s)"
                        % config.FRAME_HZ)
    parser.add_argument("--scale", type=int, default=config.scale,
                        help="window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("--log", action="store_true", help="print a trace of every instruction")
    parser.add_argument("--skip-unknown", action="store_true",
                        help="step over unknown opcodes instead of stopping")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.log else logging.INFO,
                        format="[%(levelname)s]:  %(message)s", stream=sys.stdout)
    set_logs(args.log)

    machine = Chip8(cycles_per_frame=args.cycles_per_frame)
    try:
        machine.load_program(read_rom(args.rom))
    except OSError as e:
        print(f"Failed to open rom file: {e}", file=sys.stderr)
        sys.exit(1)
    except Chip8Error as e:
        print(f"Cannot load {args.rom}: {e}", file=sys.stderr)
        sys.exit(1)

    # pyglet.window needs a display
    from .host import run
    run(machine, scale=args.scale, skip_unknown=args.skip_unknown)


if __name__ == "__main__":
    main()
