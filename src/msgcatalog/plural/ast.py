"""Plural expression AST node definitions.

A gettext plural rule such as ``(n%10==1 && n%100!=11) ? 0 : 1`` is parsed
once into these nodes and then interpreted for each count. The node set
covers exactly the restricted grammar: integer literals, the quantity ``n``,
logical negation, binary operators and the ternary conditional.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Operators
    "BinaryOperator",
    # Nodes
    "NumberLiteral",
    "Quantity",
    "Not",
    "BinaryOp",
    "Conditional",
    # Type aliases
    "PluralNode",
]


class BinaryOperator(StrEnum):
    """Binary operators of the plural grammar, spelled as in C.

    StrEnum provides automatic string conversion: str(BinaryOperator.MOD) == "%"
    """

    OR = "||"
    AND = "&&"
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    MOD = "%"


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Non-negative integer literal: 0, 1, 100."""

    value: int


@dataclass(frozen=True, slots=True)
class Quantity:
    """The quantity variable ``n`` (absolute value of the count)."""


@dataclass(frozen=True, slots=True)
class Not:
    """Logical negation: ``!expr`` yields 1 when expr is 0, else 0."""

    operand: "PluralNode"


@dataclass(frozen=True, slots=True)
class BinaryOp:
    """Binary operation: comparison, modulo or short-circuit logic."""

    operator: BinaryOperator
    left: "PluralNode"
    right: "PluralNode"


@dataclass(frozen=True, slots=True)
class Conditional:
    """Ternary conditional: ``test ? consequent : alternative``."""

    test: "PluralNode"
    consequent: "PluralNode"
    alternative: "PluralNode"


type PluralNode = NumberLiteral | Quantity | Not | BinaryOp | Conditional
"""Any node of a parsed plural expression."""
