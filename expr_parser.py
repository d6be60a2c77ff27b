import math
import operator
import re
from typing import Callable, NamedTuple

from expr_errors import MismatchedParenthesesError, UnknownOperatorError

PARENS = ("(", ")")


def _is_odd_integer(x):
    return math.isfinite(x) and x == int(x) and int(x) % 2 == 1


def power(base, exp):
    """`base ^ exp` the way C's pow does it: no exceptions, NaN or infinity instead.

    >>> power(2.0, -1.0), power(-8.0, 1 / 3), power(0.0, -3.0), power(-10.0, 401.0)
    (0.5, nan, inf, -inf)
    """
    try:
        return math.pow(base, exp)
    except OverflowError:
        return math.copysign(math.inf, base) if _is_odd_integer(exp) else math.inf
    except ValueError:
        if base == 0:  # 0 ^ negative
            return math.copysign(math.inf, base) if _is_odd_integer(exp) else math.inf
        return math.nan


class Op(NamedTuple):
    symbol: str
    name: str
    priority: int
    left_associative: bool
    fun: Callable
    arity: int = 2

    def __call__(self, *args):
        return self.fun(*args)

    def __repr__(self):
        return f"op({self.symbol!r})" if self.arity == 2 else f"op({self.name!r})"

    def __str__(self):
        return self.symbol if self.arity == 2 else self.name


# One line per priority level, lowest first: <function><symbol><associativity>.
OP_GROUPS = """
add+l sub-l
mul*l truediv/l
power^r
""".strip()
OPS = {
    o: Op(o, fun, prec, assoc == "l", getattr(operator, fun, None) or power)
    for prec, op_groups in enumerate(OP_GROUPS.split("\n"), start=1)
    for [(fun, o, assoc)] in map(
        re.compile(r"^(\w+)(\W)(\w)$").findall, op_groups.split()
    )
}

# A sign written in front of "(" (a sign in front of a number is part of the
# number). Binds tighter than any binary operator, same as a signed literal.
PREFIX_OPS = {
    "-": Op("-", "neg", 4, False, operator.neg, 1),
    "+": Op("+", "pos", 4, False, operator.pos, 1),
}


def _lookup(op):
    if isinstance(op, Op):
        return op
    try:
        return OPS[op]
    except KeyError:
        raise UnknownOperatorError(op) from None


def has_lower_precedence(op1, op2):
    """Whether `op2`, on top of the operator stack, has to be applied before `op1` is pushed.

    >>> has_lower_precedence("+", "*"), has_lower_precedence("-", "+"), has_lower_precedence("^", "^")
    (True, True, False)
    """
    if op1 in PARENS or op2 in PARENS:
        return False
    op1, op2 = _lookup(op1), _lookup(op2)
    if op1.priority == op2.priority:
        return op1.left_associative
    return op1.priority < op2.priority


_token_re = re.compile(r"\s*(?:(?P<number>[0-9.,]+)|(?P<symbol>\S))")


def _expects_operand(tokens):
    return not tokens or isinstance(tokens[-1], Op) or tokens[-1] == "("


def tokenize(expression):
    """Split `expression` into number literals (str), `Op`s and parentheses.

    A sign in operand position is glued onto the number that follows it, so
    the literal keeps it verbatim; decimal commas become points.

    >>> tokenize("3*-2,5")
    ['3', op('*'), '-2.5']
    >>> tokenize("-(1)")
    [op('neg'), '(', '1', ')']
    """
    tokens = []
    signs = ""
    for m in _token_re.finditer(expression):
        number, symbol = m.group("number", "symbol")
        if number is not None:
            tokens.append(signs + number.replace(",", "."))
            signs = ""
            continue
        if symbol in OPS and (signs or _expects_operand(tokens)):
            signs += symbol
            continue
        if signs:
            # Nothing numeric follows; anything but "+"/"-" before "(" is left
            # as a bogus literal for the evaluator to reject.
            if symbol == "(" and not signs.strip("+-"):
                tokens.extend(PREFIX_OPS[s] for s in signs)
            else:
                tokens.append(signs)
            signs = ""
        if symbol in OPS:
            tokens.append(OPS[symbol])
        elif symbol in PARENS:
            tokens.append(symbol)
        else:
            raise UnknownOperatorError(symbol)
    if signs:
        tokens.append(signs)
    return tokens


def to_postfix(tokens):
    """Reorder infix `tokens` into postfix with the shunting yard algorithm.

    See <https://en.wikipedia.org/wiki/Shunting_yard_algorithm>
    """
    out = []
    stack = []
    for token in tokens:
        if isinstance(token, Op):
            # Prefix operators have nothing to their left to reduce.
            if token.arity == 2:
                while stack and stack[-1] != "(" and has_lower_precedence(token, stack[-1]):
                    out.append(stack.pop())
            stack.append(token)
        elif token == "(":
            stack.append(token)
        elif token == ")":
            while stack and stack[-1] != "(":
                out.append(stack.pop())
            if not stack:
                raise MismatchedParenthesesError("mismatched parentheses: ')' without matching '('")
            stack.pop()
        else:
            out.append(token)

    while stack:
        if (token := stack.pop()) == "(":
            raise MismatchedParenthesesError("mismatched parentheses: '(' is never closed")
        out.append(token)
    return out


def infix_to_postfix(expression):
    return to_postfix(tokenize(expression))


def format_postfix(tokens):
    return " ".join(map(str, tokens))
