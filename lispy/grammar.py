"""
grammar — Lark grammar for Lispy input lines.

  number  := optional '-' followed by one or more decimal digits
  symbol  := one of + - * / %
  sexpr   := '(' expr* ')'
  expr    := number | symbol | sexpr
  program := expr*

parse() hands back the raw Lark tree; turning it into values is the
reader's job. A line that does not match raises ParseFailure carrying a
located, human-readable description.
"""

from __future__ import annotations

import logging

from lark import Lark, Tree
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)

from lispy.values import Error, ErrorKind, LispyError

logger = logging.getLogger(__name__)


# ============================================================
# Grammar
# ============================================================

# NUMBER outranks SYMBOL so "-5" lexes as a literal and "- 5" as minus then 5.
GRAMMAR = r"""
    start: expr*

    ?expr: number
         | symbol
         | sexpr

    number: NUMBER
    symbol: SYMBOL
    sexpr: "(" expr* ")"

    NUMBER.2: /-?[0-9]+/
    SYMBOL: "+" | "-" | "*" | "/" | "%"

    %ignore /\s+/
"""

SOURCE_NAME = "<stdin>"

TERMINAL_NAMES = {
    "LPAR": "'('",
    "RPAR": "')'",
    "NUMBER": "number",
    "SYMBOL": "symbol",
    "$END": "end of input",
}


def build_parser(**options) -> Lark:
    """Compile the grammar. Extra options go straight to Lark."""
    options.setdefault("parser", "lalr")
    return Lark(GRAMMAR, **options)


parser = build_parser()


# ============================================================
# Failures
# ============================================================

class ParseFailure(LispyError):
    """Input text does not match the grammar."""

    def __init__(self, description: str, line: int = 0, column: int = 0):
        super().__init__(description)
        self.description = description
        self.line = line
        self.column = column

    def to_value(self) -> Error:
        """The failure as an Error value of kind SYNTAX_ERROR."""
        return Error(ErrorKind.SYNTAX_ERROR, self.description)


def _terminal_name(name: str) -> str:
    return TERMINAL_NAMES.get(name, name)


def _expected_text(names) -> str:
    if not names:
        return ""
    shown = sorted(_terminal_name(n) for n in names)
    return f", expected {' or '.join(shown)}"


def describe_failure(err: UnexpectedInput, text: str, source: str = SOURCE_NAME) -> ParseFailure:
    """Turn a Lark exception into a ParseFailure with location and context."""
    line = getattr(err, "line", -1)
    column = getattr(err, "column", -1)

    if isinstance(err, UnexpectedCharacters):
        what = f"unexpected character {err.char!r}{_expected_text(err.allowed)}"
    elif isinstance(err, UnexpectedToken):
        if err.token.type == "$END":
            what = f"unexpected end of input{_expected_text(err.expected)}"
        else:
            what = f"unexpected {err.token.value!r}{_expected_text(err.expected)}"
    elif isinstance(err, UnexpectedEOF):
        what = f"unexpected end of input{_expected_text(err.expected)}"
    else:
        what = str(err)

    if line is None or line < 1:
        line, column = 1, len(text) + 1
    description = f"{source}:{line}:{column}: error: {what}"
    pos = getattr(err, "pos_in_stream", None)
    if text and pos is not None and pos >= 0:
        description += "\n" + err.get_context(text).rstrip("\n")
    return ParseFailure(description, line, column)


# ============================================================
# Entry point
# ============================================================

def parse(text: str, source: str = SOURCE_NAME) -> Tree:
    try:
        return parser.parse(text)
    except UnexpectedInput as e:
        failure = describe_failure(e, text, source)
        logger.debug("parse failed for %r: %s", text, failure.description)
        raise failure from e
