"""Plural expression engine.

Parses gettext-style plural rules (``(n != 1)``,
``n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 ? 1 : 2``) into a small
AST and evaluates them for item counts without eval().

Submodules:
    ast       - Tagged-variant node types
    parser    - Tokenizer and recursive-descent parser
    evaluator - Whitelist check, cached compilation, interpretation
    forms     - Per-language rules from Babel's plural table

Python 3.13+.
"""

from .ast import BinaryOp, BinaryOperator, Conditional, Not, NumberLiteral, PluralNode, Quantity
from .evaluator import (
    compile_plural,
    count_plural_clauses,
    evaluate_plural,
    has_valid_plural_chars,
)
from .forms import PluralForms, plural_forms_for_locale

__all__ = [
    "BinaryOp",
    "BinaryOperator",
    "Conditional",
    "Not",
    "NumberLiteral",
    "PluralForms",
    "PluralNode",
    "Quantity",
    "compile_plural",
    "count_plural_clauses",
    "evaluate_plural",
    "has_valid_plural_chars",
    "plural_forms_for_locale",
]
