"""Render Lispy values back to the text the reader accepts."""

from __future__ import annotations

from lispy.values import Error, Expression, Number, Symbol, Value


def format_val(v: Value) -> str:
    match v:
        case Number(value=n):
            return str(n)
        case Error(message=msg):
            return f"Error: {msg}"
        case Symbol(name=name):
            return name
        case Expression(children=children):
            return "(" + " ".join(format_val(c) for c in children) + ")"
    raise TypeError(f"not a Lispy value: {v!r}")
