"""
evaluator — Reduce a Lispy value tree to a single value.

Atoms (numbers, symbols, errors) are already in normal form. An
expression evaluates its children left to right, then:

  any child is an Error   -> the leftmost Error
  ()                      -> () itself
  (x)                     -> x
  (op a b ...)            -> op folded over a b ... left to right

Arithmetic follows native 64-bit integer semantics: division truncates
toward zero, the remainder takes the sign of the dividend, and results
wrap around on overflow.
"""

from __future__ import annotations

import logging
import operator
from typing import Callable, Sequence

from lispy.values import (
    Error,
    Expression,
    Number,
    Symbol,
    Value,
    wrap_native,
)

logger = logging.getLogger(__name__)


# ============================================================
# Operator table
# ============================================================

def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_rem(a: int, b: int) -> int:
    return a - b * trunc_div(a, b)


OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": trunc_div,
    "%": trunc_rem,
}

ZERO_GUARDED = frozenset({"/", "%"})


def builtin_op(op: str, operands: Sequence[Value]) -> Value:
    """Fold operator `op` over one or more operands."""
    if not operands:
        raise ValueError(f"{op} applied to no operands")

    for arg in operands:
        if not isinstance(arg, Number):
            logger.debug("%s: operand %r is not a number", op, arg)
            return Error.not_a_number()

    fn = OPERATORS.get(op)
    if fn is None:
        return Error.unknown_operator(op)

    acc = operands[0].value
    if op == "-" and len(operands) == 1:
        return Number(wrap_native(-acc))

    for arg in operands[1:]:
        if op in ZERO_GUARDED and arg.value == 0:
            logger.debug("%s: zero divisor, abandoning fold at %d", op, acc)
            return Error.division_by_zero()
        acc = wrap_native(fn(acc, arg.value))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("(%s %s) -> %d", op, " ".join(str(a.value) for a in operands), acc)
    return Number(acc)


# ============================================================
# Evaluation
# ============================================================

def reduce_expression(expr: Expression, children: list[Value]) -> Value:
    """Reduce an expression whose children are already evaluated."""
    for child in children:
        if isinstance(child, Error):
            return child

    if not children:
        return expr
    if len(children) == 1:
        return children[0]

    head, operands = children[0], children[1:]
    if not isinstance(head, Symbol):
        return Error.not_a_symbol()
    return builtin_op(head.name, operands)


def evaluate(v: Value) -> Value:
    match v:
        case Expression():
            return eval_expression(v)
        case Number() | Symbol() | Error():
            return v
        case _:
            raise TypeError(f"not a Lispy value: {v!r}")


def eval_expression(expr: Expression) -> Value:
    # Each frame is an expression and the results of its children so far;
    # nesting depth is bounded by memory, not the interpreter stack.
    stack: list[tuple[Expression, list[Value]]] = [(expr, [])]
    while True:
        node, done = stack[-1]
        if len(done) < len(node.children):
            child = node.children[len(done)]
            if isinstance(child, Expression):
                stack.append((child, []))
            else:
                done.append(evaluate(child))
            continue

        stack.pop()
        result = reduce_expression(node, done)
        if not stack:
            return result
        stack[-1][1].append(result)
