"""Command line entry point: play a game between registered players."""

from __future__ import annotations

import argparse
import contextlib
import sys

from pandemic import ai_byzu, ai_demo, ai_null  # noqa: F401  (registers the players)
from pandemic.game import run
from pandemic.registry import player_names
from pandemic.settings import version
from pandemic.structs import GameError

_PROG = "pandemic"
_MAX_NAME_LENGTH = 12


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise GameError(message)


def _help() -> None:
    print(f"Usage: {_PROG} [options] player1 player2 ... [< default.cnf] [> default.out] ")
    print("Available options:")
    print("--seed=seed     -s seed     set random seed")
    print("--input=file    -i input    set input file  (default: stdin)")
    print("--output=file   -o output   set output file (default: stdout)")
    print("--list          -l          list registered players")
    print("--version       -v          print version")
    print("--help          -h          print help")


def _parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog=_PROG, add_help=False)
    parser.add_argument("-s", "--seed", type=int, default=-1)
    parser.add_argument("-i", "--input")
    parser.add_argument("-o", "--output")
    parser.add_argument("-l", "--list", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("names", nargs="*")
    return parser


def main(argv=None) -> int:
    """Run the program with ``argv`` (default: the process arguments)."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        _help()
        return 0

    try:
        opts = _parser().parse_args(args)
    except GameError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if opts.help:
        _help()
        return 0
    if opts.list:
        for name in player_names():
            print(name)
        return 0
    if opts.version:
        print(version())
        return 0

    try:
        for name in opts.names:
            if len(name) > _MAX_NAME_LENGTH:
                raise GameError("Player name too long.")
        if opts.seed < 0:
            raise GameError("Missing seed?")
        with contextlib.ExitStack() as stack:
            instream = (stack.enter_context(open(opts.input, encoding="utf-8"))
                        if opts.input else sys.stdin)
            outstream = (stack.enter_context(open(opts.output, "w", encoding="utf-8"))
                         if opts.output else sys.stdout)
            run(opts.names, instream, outstream, opts.seed)
    except (GameError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())