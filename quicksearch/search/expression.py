"""
Expression Evaluator - Inline arithmetic for the search box.

Queries such as "3+4*2" or "(1.5 + 2) * 4" are recognized and evaluated
without ever handing user text to a code-evaluation facility.

Two strategies share the same recognition guards and result formatting:

  builtin     TokenEvaluator, a hand-written tokenizer with explicit
              parenthesis and operator-precedence resolution (default)
  simpleeval  SimpleEvalEvaluator, simpleeval's whitelisted AST walker
              restricted to the same operators

The strategy is chosen once, when the evaluator is built (make_evaluator).
"""

import ast
import math
import re
from abc import ABC, abstractmethod
from typing import Optional, Union

from loguru import logger
from simpleeval import DEFAULT_OPERATORS, InvalidExpression, simple_eval

# digit, operator, digit; closing/opening parens and a sign may sit in between
_EXPRESSION_HINT = re.compile(r"\d\)*[-+*/%^][-+(]*\.?\d")
_ALLOWED = re.compile(r"^[0-9+\-*/().%]+$")
_WHITESPACE = re.compile(r"\s+")

_DIGITS = "0123456789."
_SYMBOLS = "+-*/%()"
OPERATORS = {"+", "-", "*", "/", "%"}
# Marks a unary minus applied to the parenthesized group that follows it
NEGATE = "neg"

Token = Union[float, str]


class MalformedExpression(ValueError):
    """Token stream that cannot be reduced to a single number."""


def prepare_expression(text: Optional[str]) -> Optional[str]:
    """
    Strip whitespace and decide whether text looks like arithmetic.

    Returns:
        The compact expression, or None if text is ordinary search text
    """
    expr = _WHITESPACE.sub("", text or "")
    if not _EXPRESSION_HINT.search(expr):
        return None
    if "()" in expr or not _ALLOWED.match(expr):
        return None
    return expr


def tokenize(expr: str) -> list[Token]:
    """
    Split a compact expression into numbers and operator/paren symbols.

    A "+" or "-" where an operand is expected is a sign: it is folded into
    the following number, or becomes NEGATE in front of a "(".
    """
    tokens: list[Token] = []
    number = ""
    negative = False

    for ch in expr:
        if ch in _DIGITS:
            number += ch
            continue

        if number:
            tokens.append(_to_number(number, negative))
            number = ""
            negative = False

        if ch in "+-" and _expects_operand(tokens):
            if ch == "-":
                negative = not negative
            continue

        if ch not in _SYMBOLS:
            raise MalformedExpression(f"unexpected character {ch!r}")

        if ch == "(" and negative:
            tokens.append(NEGATE)
            negative = False
        tokens.append(ch)

    if number:
        tokens.append(_to_number(number, negative))
    elif negative:
        raise MalformedExpression("dangling sign")

    return tokens


def _expects_operand(tokens: list[Token]) -> bool:
    if not tokens:
        return True
    last = tokens[-1]
    return isinstance(last, str) and (last in OPERATORS or last in ("(", NEGATE))


def _to_number(text: str, negative: bool) -> float:
    if text.count(".") > 1 or text == ".":
        raise MalformedExpression(f"bad number {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise MalformedExpression(f"number out of range {text!r}")
    return -value if negative else value


def evaluate_tokens(tokens: list[Token]) -> float:
    """
    Reduce a token stream to a number.

    Parenthesized groups are resolved innermost first: each ")" is paired
    with the nearest "(" before it, the enclosed run is evaluated and the
    scalar spliced back. The flat stream is then reduced "*", "/", "%"
    first and "+", "-" second, both left to right.

    Raises:
        MalformedExpression: unmatched parens, misplaced operators,
            non-finite intermediate results
        ZeroDivisionError: division or modulo by zero
    """
    stream = list(tokens)

    while ")" in stream:
        close = stream.index(")")
        open_ = _matching_open(stream, close)
        value = _evaluate_flat(stream[open_ + 1:close])

        start = open_
        if start > 0 and stream[start - 1] == NEGATE:
            value = -value
            start -= 1
        stream[start:close + 1] = [value]

    if "(" in stream or NEGATE in stream:
        raise MalformedExpression("unmatched '('")

    return _evaluate_flat(stream)


def _matching_open(stream: list[Token], close: int) -> int:
    for index in range(close - 1, -1, -1):
        if stream[index] == "(":
            return index
    raise MalformedExpression("unmatched ')'")


def _evaluate_flat(tokens: list[Token]) -> float:
    if not tokens:
        raise MalformedExpression("empty group")

    stream = _reduce(tokens, {"*", "/", "%"})
    stream = _reduce(stream, {"+", "-"})
    if len(stream) != 1:
        raise MalformedExpression("expression did not reduce to one value")
    return stream[0]


def _reduce(tokens: list[Token], operators: set[str]) -> list[Token]:
    """Apply one precedence level left to right over number/op alternation."""
    _check_alternation(tokens)

    out: list[Token] = [tokens[0]]
    for index in range(1, len(tokens), 2):
        op, right = tokens[index], tokens[index + 1]
        if op in operators:
            out[-1] = _apply(op, out[-1], right)
        else:
            out.extend((op, right))
    return out


def _check_alternation(tokens: list[Token]) -> None:
    if len(tokens) % 2 == 0:
        raise MalformedExpression("operator without operand")
    for index, token in enumerate(tokens):
        is_number = isinstance(token, float)
        if is_number != (index % 2 == 0):
            raise MalformedExpression(f"misplaced token {token!r}")
        if not is_number and token not in OPERATORS:
            raise MalformedExpression(f"unexpected token {token!r}")


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        result = left + right
    elif op == "-":
        result = left - right
    elif op == "*":
        result = left * right
    elif op == "/":
        if right == 0:
            raise ZeroDivisionError("division by zero")
        result = left / right
    else:
        result = _fmod(left, right)

    if not math.isfinite(result):
        raise MalformedExpression("non-finite intermediate result")
    return result


def _fmod(left: float, right: float) -> float:
    """Truncated remainder: the result takes the sign of the dividend."""
    if right == 0:
        raise ZeroDivisionError("modulo by zero")
    return math.fmod(left, right)


def format_number(value: float, precision: int = 8) -> Optional[str]:
    """Round to precision decimals and render canonically ("11", "0.33333333")."""
    rounded = round(value, precision)
    if not math.isfinite(rounded):
        return None
    if rounded == 0:
        rounded = 0.0  # no "-0"
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


class ExpressionEvaluator(ABC):
    """Recognize and evaluate arithmetic in free text."""

    name = "base"

    def __init__(self, precision: int = 8):
        self.precision = precision

    def evaluate(self, text: Optional[str]) -> Optional[str]:
        """
        Evaluate text if it is an arithmetic expression.

        Returns:
            Canonical numeric string, or None when text is not an expression
            or cannot be evaluated (division by zero, unmatched parens, ...)
        """
        expr = prepare_expression(text)
        if expr is None:
            return None

        try:
            value = self._compute(expr)
        except (MalformedExpression, ZeroDivisionError, OverflowError) as e:
            logger.debug(f"Expression '{expr}' has no value: {e}")
            return None

        return format_number(value, self.precision)

    @abstractmethod
    def _compute(self, expr: str) -> float:
        ...


class TokenEvaluator(ExpressionEvaluator):
    """Hand-written tokenizer and precedence evaluator."""

    name = "builtin"

    def _compute(self, expr: str) -> float:
        return evaluate_tokens(tokenize(expr))


# Same operator set as the builtin grammar: no "**" or "//"
_SIMPLEEVAL_OPERATORS = {
    node: fn for node, fn in DEFAULT_OPERATORS.items()
    if node in (ast.Add, ast.Sub, ast.Mult, ast.Div, ast.USub, ast.UAdd)
}
_SIMPLEEVAL_OPERATORS[ast.Mod] = _fmod


class SimpleEvalEvaluator(ExpressionEvaluator):
    """simpleeval-backed evaluator with builtins, names and functions disabled."""

    name = "simpleeval"

    def _compute(self, expr: str) -> float:
        try:
            result = simple_eval(
                expr,
                operators=_SIMPLEEVAL_OPERATORS,
                functions={},
                names={},
            )
        except (InvalidExpression, SyntaxError, TypeError, ValueError) as e:
            raise MalformedExpression(str(e)) from e
        except (RecursionError, MemoryError) as e:
            # ast.parse nests one node per operator
            raise MalformedExpression(f"expression too deep: {type(e).__name__}") from e

        if isinstance(result, bool) or not isinstance(result, (int, float)):
            raise MalformedExpression(f"non-numeric result {result!r}")
        result = float(result)
        if not math.isfinite(result):
            raise MalformedExpression("non-finite result")
        return result


EVALUATORS = {
    TokenEvaluator.name: TokenEvaluator,
    SimpleEvalEvaluator.name: SimpleEvalEvaluator,
}


def make_evaluator(engine: str = "builtin", precision: int = 8) -> ExpressionEvaluator:
    """
    Build the evaluator named in settings.

    Raises:
        ValueError: unknown engine name
    """
    try:
        cls = EVALUATORS[engine]
    except KeyError:
        raise ValueError(
            f"Unknown calculator engine '{engine}', expected one of {sorted(EVALUATORS)}"
        ) from None
    return cls(precision=precision)
