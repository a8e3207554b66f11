#!/usr/bin/env python
"""prefix-calc: evaluate prefix arithmetic such as (+ 1 (* 2 3)), one line at a time"""

import argparse
import sys
from functools import partial

from calc_errors import CalcError, TrailingContent
from calc_eval import evaluate
from calc_parser import parse
from calc_types import Expression

TERMINATORS = ("", "\n", "\r\n")

def read_line(line: str) -> Expression:
    """Parse a whole input line; only a line terminator may follow the expression."""
    remaining, expr = parse(line)
    if remaining not in TERMINATORS:
        raise TrailingContent(remaining)
    return expr

def calculate(line: str) -> int:
    return evaluate(read_line(line))

def repl(stdin=None, stdout=None, stderr=None, prompt: str = ">>> ", debug: bool = False) -> None:
    """Read, evaluate and print until end of input.

    Errors are reported on `stderr` and never end the loop.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    error = partial(print, file=stderr or sys.stderr)
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return
        if line in TERMINATORS:
            continue

        try:
            expr = read_line(line)
            if debug:
                error(f"parsed: {expr}")
            print(f"=> {evaluate(expr)}", file=stdout)
        except TrailingContent:
            error(f"invalid expr: {line.rstrip()}")
        except CalcError as e:
            error(f"error: {e}")

def main(argv=None) -> int:
    arg_parser = argparse.ArgumentParser(prog="prefix-calc", description=__doc__)
    arg_parser.add_argument("-d", "--debug", action="store_true", help="print each parsed expression")
    arg_parser.add_argument("-p", "--prompt", default=">>> ", help="prompt shown before each line")
    args = arg_parser.parse_args(argv)

    try:
        repl(prompt=args.prompt, debug=args.debug)
    except KeyboardInterrupt:
        print("\ninterrupted", file=sys.stderr)
        return 130
    return 0

if __name__ == "__main__":
    sys.exit(main())
