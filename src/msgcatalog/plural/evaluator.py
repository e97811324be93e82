"""Plural expression evaluation.

Turns a gettext plural rule and an item count into a zero-based variant
index. The rule is checked against a character whitelist on every call,
parsed once into an AST (cached per expression string), then interpreted;
nothing is ever handed to eval().

Python 3.13+. Zero external dependencies.
"""

import functools
import math
import re
from decimal import Decimal
from numbers import Real

from msgcatalog.constants import (
    MAX_PLURAL_EXPRESSION_LENGTH,
    PLURAL_CACHE_SIZE,
    PLURAL_VALID_CHARS,
)
from msgcatalog.core.depth_guard import DepthLimitExceededError
from msgcatalog.diagnostics import ErrorTemplate, InvalidPluralSyntax, InvalidQuantity

from .ast import BinaryOp, BinaryOperator, Conditional, Not, NumberLiteral, PluralNode, Quantity
from .parser import PluralParseError, PluralParser

__all__ = [
    "compile_plural",
    "count_plural_clauses",
    "evaluate_plural",
    "has_valid_plural_chars",
]

type Number = int | float | Decimal

_INVALID_CHAR_PATTERN = re.compile(f"[^ {re.escape(PLURAL_VALID_CHARS)}]")


def has_valid_plural_chars(expression: str) -> bool:
    """Check that an expression uses only whitelisted characters.

    Allowed: digits, 'n', space and ``( ) % = & ! ? | : < >``.

    Example:
        >>> has_valid_plural_chars("(n != 1)")
        True
        >>> has_valid_plural_chars("n.constructor")
        False
    """
    return _INVALID_CHAR_PATTERN.search(expression) is None


def count_plural_clauses(expression: str) -> int:
    """Count the '?'-separated pieces of a plural expression.

    This is the number of plural variants a catalog must declare for the
    expression: ``(n > 1)`` has one, ``n==1 ? 0 : n==2 ? 1 : 2`` has three.
    """
    return expression.count("?") + 1


@functools.lru_cache(maxsize=PLURAL_CACHE_SIZE)
def _parse_cached(expression: str) -> PluralNode:
    return PluralParser(expression).parse()


def compile_plural(expression: str, domain: str | None = None) -> PluralNode:
    """Validate and parse a plural expression.

    Args:
        expression: Plural rule, e.g. ``(n%10==1 && n%100!=11) ? 0 : 1``
        domain: Domain label for diagnostics (None for the default rule)

    Returns:
        Root node of the parsed expression (shared, immutable)

    Raises:
        InvalidPluralSyntax: If the expression has disallowed characters,
            is too long, or does not parse
    """
    if not isinstance(expression, str):
        raise InvalidPluralSyntax(
            ErrorTemplate.invalid_plural_syntax(repr(expression), domain, "not a string"),
            expression=repr(expression),
            domain=domain,
        )

    # Whitelist first, always, before touching the parse cache.
    if not has_valid_plural_chars(expression):
        raise InvalidPluralSyntax(
            ErrorTemplate.invalid_plural_characters(expression, domain),
            expression=expression,
            domain=domain,
        )

    if len(expression) > MAX_PLURAL_EXPRESSION_LENGTH:
        reason = f"longer than {MAX_PLURAL_EXPRESSION_LENGTH} characters"
        raise InvalidPluralSyntax(
            ErrorTemplate.invalid_plural_syntax(expression, domain, reason),
            expression=expression,
            domain=domain,
        )

    try:
        return _parse_cached(expression)
    except (PluralParseError, DepthLimitExceededError) as e:
        raise InvalidPluralSyntax(
            ErrorTemplate.invalid_plural_syntax(expression, domain, str(e)),
            expression=expression,
            domain=domain,
        ) from e


def _normalize_quantity(n: object) -> Number:
    if isinstance(n, bool) or not isinstance(n, Real | Decimal):
        raise InvalidQuantity(ErrorTemplate.invalid_quantity(n))
    if isinstance(n, Decimal):
        finite = n.is_finite()
    else:
        finite = math.isfinite(n)
    if not finite:
        raise InvalidQuantity(ErrorTemplate.invalid_quantity(n))
    return abs(n)  # type: ignore[return-value]


def _interpret(node: PluralNode, n: Number) -> Number:
    match node:
        case NumberLiteral(value=value):
            return value
        case Quantity():
            return n
        case Not(operand=operand):
            return int(not _interpret(operand, n))
        case Conditional(test=test, consequent=consequent, alternative=alternative):
            if _interpret(test, n):
                return _interpret(consequent, n)
            return _interpret(alternative, n)
        case BinaryOp(operator=BinaryOperator.AND, left=left, right=right):
            return int(bool(_interpret(left, n)) and bool(_interpret(right, n)))
        case BinaryOp(operator=BinaryOperator.OR, left=left, right=right):
            return int(bool(_interpret(left, n)) or bool(_interpret(right, n)))
        case BinaryOp(operator=operator, left=left, right=right):
            return _apply(operator, _interpret(left, n), _interpret(right, n))
    msg = f"Unknown plural node: {type(node).__name__}"  # pragma: no cover
    raise TypeError(msg)  # pragma: no cover


def _apply(operator: BinaryOperator, left: Number, right: Number) -> Number:
    match operator:
        case BinaryOperator.MOD:
            # Operands are non-negative, so Python's % agrees with C's.
            return left % right
        case BinaryOperator.EQ:
            return int(left == right)
        case BinaryOperator.NE:
            return int(left != right)
        case BinaryOperator.LT:
            return int(left < right)
        case BinaryOperator.LE:
            return int(left <= right)
        case BinaryOperator.GT:
            return int(left > right)
        case BinaryOperator.GE:
            return int(left >= right)
    msg = f"Unknown plural operator: {operator}"  # pragma: no cover
    raise TypeError(msg)  # pragma: no cover


def evaluate_plural(expression: str, n: object, domain: str | None = None) -> int:
    """Evaluate a plural expression for a count.

    Args:
        expression: Plural rule over the variable ``n``
        n: Item count (int, float or Decimal); its absolute value is tested
        domain: Domain label for diagnostics (None for the default rule)

    Returns:
        Zero-based plural variant index (false -> 0, true -> 1, ternary
        chains -> their selected integer)

    Raises:
        InvalidQuantity: If n is not a finite number
        InvalidPluralSyntax: If the expression has disallowed characters or
            fails to parse or evaluate (e.g. modulo by zero)

    Examples:
        >>> evaluate_plural("(n != 1)", 1)
        0
        >>> evaluate_plural("(n > 1)", -5)
        1
        >>> evaluate_plural("n==1 ? 0 : n%10>=2 && n%10<=4 ? 1 : 2", 23)
        1
    """
    quantity = _normalize_quantity(n)
    tree = compile_plural(expression, domain)
    try:
        result = _interpret(tree, quantity)
    except (ArithmeticError, RecursionError) as e:
        raise InvalidPluralSyntax(
            ErrorTemplate.invalid_plural_syntax(expression, domain, str(e) or type(e).__name__),
            expression=expression,
            domain=domain,
        ) from e
    return int(result)
