"""Shared constants for msgcatalog.

This module provides centralized configuration constants used across
the plural, catalog and runtime packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Plural expressions: character whitelist, default rule, size limits
- Depth limits: Recursion protection for the plural expression parser
- Cache limits: Memory bounds for compiled plural expressions
- Catalog payload: Reserved keys and header names
- Web output: Markers used by escape_for_web()

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Plural expressions
    "PLURAL_VALID_CHARS",
    "DEFAULT_PLURAL_EXPRESSION",
    "MAX_PLURAL_EXPRESSION_LENGTH",
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "PLURAL_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Catalog payload
    "METADATA_KEY",
    "HEADER_NPLURALS",
    "HEADER_PLURAL",
    "HEADER_DOMAIN",
    "HEADER_LANGUAGE",
    # Web output
    "WEB_LINE_BREAK",
]

# ============================================================================
# PLURAL EXPRESSIONS
# ============================================================================

# Characters a plural expression may contain, besides the space character.
# Checked before every evaluation, including ad hoc evaluation of a custom
# default rule.
PLURAL_VALID_CHARS: str = "()%=&!?|:<>0123456789n"

# Plural test used when a catalog does not supply its own rule, or when
# custom plural forms are disabled: plural variant for any count except one.
DEFAULT_PLURAL_EXPRESSION: str = "(n != 1)"

# Longest plural expression accepted. The longest gettext rules in the wild
# (Arabic, Welsh, Irish) are well under 200 characters. Also bounds the
# length of left-associative operator chains the evaluator walks.
MAX_PLURAL_EXPRESSION_LENGTH: int = 512

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum parenthesis / ternary nesting depth in a plural expression.
# Real rules nest at most 5-6 levels; deeper input is malformed.
MAX_DEPTH: int = 50

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Compiled plural expressions kept in the process-wide parse cache.
# An application usually loads one rule per language.
PLURAL_CACHE_SIZE: int = 128

# Babel Locale objects kept by get_babel_locale().
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# CATALOG PAYLOAD
# ============================================================================

# The empty key holds the metadata block and never a translation.
METADATA_KEY: str = ""

HEADER_NPLURALS: str = "nplurals"
HEADER_PLURAL: str = "plural"
HEADER_DOMAIN: str = "domain"
HEADER_LANGUAGE: str = "language"

# ============================================================================
# WEB OUTPUT
# ============================================================================

# Replacement for newline characters when escaping for HTML output.
WEB_LINE_BREAK: str = "<br/>"
