"""
reader — Convert a Lark parse tree into a Lispy value tree.

The reader only builds values. It never evaluates, and the single way it
can fail (a literal too large for a native integer) comes back as an
Error value rather than an exception.
"""

from __future__ import annotations

from lark import Token, Tree, v_args
from lark.visitors import Transformer_NonRecursive

from lispy.grammar import parse
from lispy.values import Error, Expression, Number, Symbol, Value, in_native_range


def read_number(text: str) -> Value:
    n = int(text, 10)
    if not in_native_range(n):
        return Error.invalid_number()
    return Number(n)


def _structural(item) -> bool:
    # Delimiters and ignored tokens only show up when the parser keeps them.
    return isinstance(item, Token)


@v_args(inline=True)
class Reader(Transformer_NonRecursive):
    def number(self, tok):
        return read_number(str(tok))

    def symbol(self, tok):
        return Symbol(str(tok))

    def sexpr(self, *items):
        return Expression(tuple(i for i in items if not _structural(i)))

    def start(self, *items):
        return Expression(tuple(i for i in items if not _structural(i)))


reader = Reader()


def read(tree: Tree) -> Value:
    """Build the value tree for one parsed line."""
    return reader.transform(tree)


def read_string(text: str) -> Value:
    """Parse and read one line. Raises ParseFailure on bad syntax."""
    return read(parse(text))
