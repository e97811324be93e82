"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for catalog diagnostics.

    Categories:
        LOAD: Catalog data rejected by load_domain()
        PLURAL: Plural expression or quantity could not be evaluated
        RESOLUTION: Lookup degraded to a fallback string
    """

    LOAD = "load"
    PLURAL = "plural"
    RESOLUTION = "resolution"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Load errors (catalog payload and plural metadata)
        2000-2999: Plural evaluation errors
        3000-3999: Resolution warnings (never raised to callers)
    """

    # Load errors (1000-1999)
    INVALID_CATALOG_FORMAT = 1001
    MISSING_OR_INVALID_PLURAL_COUNT = 1002
    MISSING_PLURAL_EXPRESSION = 1003
    PLURAL_ARITY_MISMATCH = 1004
    PLURAL_VARIANT_COUNT_MISMATCH = 1005

    # Plural evaluation errors (2000-2999)
    INVALID_PLURAL_SYNTAX = 2001
    INVALID_PLURAL_CHARACTERS = 2002
    INVALID_QUANTITY = 2003
    PLURAL_DEPTH_EXCEEDED = 2004

    # Resolution warnings (3000-3999)
    DOMAIN_NOT_FOUND = 3001
    MESSAGE_NOT_FOUND = 3002
    PLURAL_VARIANT_NOT_FOUND = 3003
    PLURAL_EVALUATION_FAILED = 3004
    PLACEHOLDER_FORMAT_FAILED = 3005

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the code's numeric range."""
        if self.value < 2000:
            return ErrorCategory.LOAD
        if self.value < 3000:
            return ErrorCategory.PLURAL
        return ErrorCategory.RESOLUTION


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context to tell a
    catalog author which domain, key or expression needs fixing.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        domain: Domain the error relates to, if known
        key: Message key the error relates to, if any
        expression: Plural expression involved, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    domain: str | None = None
    key: str | None = None
    expression: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[PLURAL_ARITY_MISMATCH]: The 'nplurals' value (2) doesn't match ...
              = domain: main
              = plural: (n==0)?0:(n==1)?1:2
              = help: Count the '?'-separated pieces of the 'plural' expression

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
