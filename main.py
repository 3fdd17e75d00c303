# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Sequence, TextIO

from config_reader import HISTORICAL, load_config, setup
from debug import COMPONENTS, Debug
from errors import ConfigurationError, EnigmaError
from machine import Machine

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the simulator."""

    block: int = 5                      # display group size
    debug: tuple[str, ...] = ()         # components to log
    log_file: str | None = None         # extra log destination

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        return cls(
            block=args.block,
            debug=tuple(args.debug or ()),
            log_file=args.log_file,
        )


# ────────────────────────────────────────────────────────────────────────
#  1. Message handling
# ────────────────────────────────────────────────────────────────────────


def format_groups(msg: str, block: int = 5) -> str:
    """Split *msg* into space-separated groups of *block* symbols."""
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


def process(machine: Machine, lines: Iterable[str], out: TextIO, block: int = 5) -> None:
    """
    Run every line of *lines* through *machine*. Lines starting with '*'
    (re)configure it, blank lines are copied, everything else is a message
    whose whitespace is dropped before conversion.
    """
    configured = False
    for raw in lines:
        line = raw.strip()
        if not line:
            if configured:
                out.write("\n")
            continue
        if line.startswith("*"):
            setup(machine, line)
            configured = True
            continue
        if not configured:
            raise ConfigurationError("Input must start with a setup line")

        msg = "".join(line.split())
        out.write(format_groups(machine.convert_message(msg), block) + "\n")

    if not configured:
        raise ConfigurationError("No input")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="enigma-sim",
        description="Encrypt or decrypt messages with a configurable rotor machine",
    )
    p.add_argument("config", help=f"Machine configuration (.conf, .json or '{HISTORICAL}')")
    p.add_argument("input", nargs="?", help="Message file. Default: standard input")
    p.add_argument("output", nargs="?", help="Result file. Default: standard output")
    p.add_argument("--block", type=_positive, default=5, help="Output group size. Default: 5")
    p.add_argument("--debug", nargs="+", choices=COMPONENTS, metavar="COMPONENT",
                   help=f"Log the given components ({', '.join(COMPONENTS)})")
    p.add_argument("--log-file", dest="log_file", metavar="FILE",
                   help="Also write debug messages to FILE")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = Config.from_args(args)

    if cfg.debug:
        Debug.configure(log_to=cfg.log_file)
        debug.enable(*cfg.debug)

    try:
        machine = load_config(args.config)
        debug.log("config", f"loaded {args.config}")
        with ExitStack() as stack:
            src = (stack.enter_context(open(args.input, encoding="utf-8"))
                   if args.input else sys.stdin)
            dst = (stack.enter_context(open(args.output, "w", encoding="utf-8"))
                   if args.output else sys.stdout)
            process(machine, src, dst, cfg.block)
    except (EnigmaError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
