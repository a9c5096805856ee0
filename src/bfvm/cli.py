from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .api import RunOptions, compile_file, run_program
from .errors import BFError


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Run a Brainfuck program against stdin/stdout.",
    )
    parser.add_argument("file", help="Path to the program source")
    parser.add_argument("--no-optimize", action="store_true", help="Skip the peephole optimizer")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop with an error after N instructions")
    parser.add_argument("--dump", action="store_true", help="Print the compiled instruction listing instead of running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    options = RunOptions(optimize=not args.no_optimize, max_steps=args.max_steps)

    try:
        program = compile_file(args.file, options=options)
        if args.dump:
            print(program.listing())
            return 0
        try:
            run_program(program, sys.stdin.buffer, sys.stdout.buffer, options=options)
        finally:
            sys.stdout.flush()
    except BFError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
