#!/usr/bin/env python3
"""
Lispy REPL

An integer calculator with S-expression syntax. Each line is parsed,
read, evaluated and printed on its own; nothing carries over between
lines.

Usage:
  lispy                       # interactive REPL
  lispy -e '(+ 1 2 3)'        # evaluate one line
  lispy script.lispy          # evaluate every line of a file
  lispy --tui                 # full-screen REPL with history

Syntax:
  42 -7                       integer literals
  + - * / %                   operators
  (+ 1 2 3)                   fold left to right: 6
  (- 5)                       unary minus: -5
  (* 1 2 (+ 1 1))             nesting: 4
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lispy import __version__
from lispy.evaluator import evaluate
from lispy.grammar import ParseFailure, parse
from lispy.printer import format_val
from lispy.reader import read
from lispy.values import Error

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
BANNER = f"Lispy Version {__version__}"


# ============================================================
# One line: parse -> read -> eval -> print
# ============================================================

def run_line(text: str) -> tuple[str, bool]:
    """Evaluate one line of input. Returns (output, is_error)."""
    try:
        tree = parse(text)
    except ParseFailure as e:
        return e.description, True
    result = evaluate(read(tree))
    return format_val(result), isinstance(result, Error)


# ============================================================
# REPL
# ============================================================

def enable_line_editing() -> bool:
    """Load readline so input() gets line editing and history."""
    try:
        import readline  # noqa: F401
    except ImportError:
        return False
    return True


def repl():
    """Interactive REPL."""
    enable_line_editing()
    print(BANNER)
    print("Press Ctrl+c to Exit\n")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        output, _ = run_line(line)
        print(output)


def eval_string(text: str) -> tuple[str, bool]:
    """Evaluate a single line passed on the command line."""
    return run_line(text)


def eval_file(path: str | Path) -> bool:
    """Evaluate each non-blank line of a file. Returns True if none failed."""
    ok = True
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            output, failed = run_line(line.rstrip("\n"))
            if failed:
                logger.debug("%s:%d failed", path, lineno)
                ok = False
            print(output)
    return ok


# ============================================================
# Main
# ============================================================

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lispy: integer calculator with S-expression syntax",
        prog="lispy",
    )
    parser.add_argument("file", nargs="?", help="File of lines to evaluate")
    parser.add_argument("-e", "--expr", help="Single line to evaluate")
    parser.add_argument("--tui", action="store_true",
                        help="Start the full-screen REPL")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging threshold (default: WARNING)")
    parser.add_argument("--version", action="version", version=BANNER)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.expr is not None:
        output, failed = eval_string(args.expr)
        print(output)
        return 1 if failed else 0

    if args.file:
        path = Path(args.file)
        if not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 1
        try:
            return 0 if eval_file(path) else 1
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Cannot read {path}: {e}", file=sys.stderr)
            return 1

    if args.tui:
        from lispy.tui import LispyApp
        LispyApp().run()
        return 0

    repl()
    return 0


if __name__ == "__main__":
    sys.exit(main())
