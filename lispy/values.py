"""
values — The Lispy value model and error taxonomy.

Every value the reader builds or the evaluator produces is one of four
frozen dataclasses:

  Number(value)           whole number of native machine width
  Error(kind, message)    first-class error value, never raised
  Symbol(name)            operator token: + - * / %
  Expression(children)    ordered, possibly empty, possibly nested list

Expressions hold their children in a tuple, so a tree can only be
extended by building a new node.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


# ============================================================
# Native integer range
# ============================================================

NATIVE_INT = np.int64
_INFO = np.iinfo(NATIVE_INT)
INT_MIN = int(_INFO.min)
INT_MAX = int(_INFO.max)
INT_BITS = _INFO.bits


def in_native_range(n: int) -> bool:
    return INT_MIN <= n <= INT_MAX


def wrap_native(n: int) -> int:
    """Reduce an arbitrary int to the native two's complement range."""
    return (n - INT_MIN) % (1 << INT_BITS) + INT_MIN


# ============================================================
# Error taxonomy
# ============================================================

class ErrorKind(str, Enum):
    """Every way a line of input can fail."""

    SYNTAX_ERROR = "SyntaxError"
    INVALID_NUMBER = "InvalidNumber"
    NOT_A_NUMBER = "NotANumber"
    NOT_A_SYMBOL = "NotASymbol"
    DIVISION_BY_ZERO = "DivisionByZero"
    UNKNOWN_OPERATOR = "UnknownOperator"


class LispyError(Exception):
    """Base exception for failures outside the value model."""


# ============================================================
# Values
# ============================================================

@dataclass(frozen=True)
class Number:
    value: int

    def __post_init__(self):
        if not in_native_range(self.value):
            raise ValueError(f"{self.value} does not fit a {INT_BITS}-bit integer")


@dataclass(frozen=True)
class Error:
    kind: ErrorKind
    message: str

    @staticmethod
    def invalid_number() -> "Error":
        return Error(ErrorKind.INVALID_NUMBER, "invalid number")

    @staticmethod
    def not_a_number() -> "Error":
        return Error(ErrorKind.NOT_A_NUMBER, "argument is not a number")

    @staticmethod
    def not_a_symbol() -> "Error":
        return Error(ErrorKind.NOT_A_SYMBOL, "S-expression does not start with a symbol")

    @staticmethod
    def division_by_zero() -> "Error":
        return Error(ErrorKind.DIVISION_BY_ZERO, "division by zero")

    @staticmethod
    def unknown_operator(name: str) -> "Error":
        return Error(ErrorKind.UNKNOWN_OPERATOR, f"unknown operator '{name}'")


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True)
class Expression:
    children: tuple["Value", ...] = ()


Value = Union[Number, Error, Symbol, Expression]