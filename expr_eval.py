"""Evaluate arithmetic expressions via their postfix form.

    +------------------------+     +----------------+
    | infix_to_postfix(expr) | >>> | eval_postfix() | >>> float
    +------------------------+     +----------------+

All numbers are floats. `^` never fails (NaN or infinity instead, like C's pow);
dividing by zero does, as does every kind of malformed input, see `expr_errors`.
"""
import logging
import math
import re

from expr_errors import (
    DivisionByZeroError,
    EmptyExpressionError,
    InvalidNumberError,
    MismatchedParenthesesError,
    NotEnoughOperandsError,
    NumberOutOfRangeError,
    TooManyOperandsError,
)
from expr_parser import OPS, PARENS, Op, format_postfix, infix_to_postfix

logger = logging.getLogger(__name__)

_number_re = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def parse_number(literal):
    """Convert a number literal to a float.

    Only an optional sign, digits and at most one decimal point are accepted,
    so "inf", "1e5" or "--5" are invalid even though `float` might take them.
    """
    if not _number_re.fullmatch(literal):
        raise InvalidNumberError(literal)
    if math.isinf(value := float(literal)):
        raise NumberOutOfRangeError(literal)
    return value


def apply_op(op, stack):
    n = op.arity
    if len(stack) < n:
        raise NotEnoughOperandsError(op)
    # stack[-2:] is [left, right]
    args = stack[-n:]
    if op is OPS["/"] and args[1] == 0:
        raise DivisionByZeroError()
    stack[-n:] = [op(*args)]


def eval_postfix(tokens):
    stack = []
    for token in tokens:
        if isinstance(token, Op):
            apply_op(token, stack)
        elif token in PARENS:
            raise MismatchedParenthesesError(f"mismatched parentheses: stray {token!r}")
        else:
            stack.append(parse_number(token))

    if not stack:
        raise EmptyExpressionError("nothing to evaluate")
    if len(stack) > 1:
        raise TooManyOperandsError(len(stack))
    (ans,) = stack
    return ans


def evaluate(expression):
    """Return the value of the infix arithmetic `expression`.

    >>> evaluate("2^3^2"), evaluate("8 - 3 - 2"), evaluate("1,5 + 1,5")
    (512.0, 3.0, 3.0)
    """
    if not expression:
        raise EmptyExpressionError()
    postfix = infix_to_postfix(expression)
    logger.debug("%r in postfix: %s", expression, format_postfix(postfix))
    return eval_postfix(postfix)
