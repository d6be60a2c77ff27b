"""Errors raised while parsing or evaluating an arithmetic expression.

Every error is an `ExpressionError`, which is a `ValueError`, so callers that
only care about "bad input" can catch either.
"""


class ExpressionError(ValueError):
    pass


class EmptyExpressionError(ExpressionError):
    def __init__(self, msg="empty expression"):
        super().__init__(msg)


class MismatchedParenthesesError(ExpressionError):
    pass


class UnknownOperatorError(ExpressionError):
    def __init__(self, symbol):
        super().__init__(f"unknown operator: {symbol!r}")
        self.symbol = symbol


class InvalidNumberError(ExpressionError):
    def __init__(self, literal):
        super().__init__(f"invalid number: {literal!r}")
        self.literal = literal


class NumberOutOfRangeError(ExpressionError):
    def __init__(self, literal):
        super().__init__(f"number out of range: {literal[:20]}{'...' if len(literal) > 20 else ''}")
        self.literal = literal


class NotEnoughOperandsError(ExpressionError):
    def __init__(self, op):
        super().__init__(f"not enough operands for {op}")
        self.op = op


class TooManyOperandsError(ExpressionError):
    def __init__(self, count):
        super().__init__(f"too many operands: {count} values left, expected 1")
        self.count = count


class DivisionByZeroError(ExpressionError, ZeroDivisionError):
    def __init__(self, msg="division by zero"):
        super().__init__(msg)
