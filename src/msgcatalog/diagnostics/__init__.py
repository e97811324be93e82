"""Diagnostic system for catalog errors.

Provides structured error diagnostics with codes, hints and context
(domain, key, plural expression). Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    CatalogError,
    DomainLoadError,
    InvalidCatalogFormat,
    InvalidPluralSyntax,
    InvalidQuantity,
    MissingOrInvalidPluralCount,
    MissingPluralExpression,
    PlaceholderFormatError,
    PluralArityMismatch,
    PluralVariantCountMismatch,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CatalogError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DomainLoadError",
    "ErrorCategory",
    "ErrorTemplate",
    "InvalidCatalogFormat",
    "InvalidPluralSyntax",
    "InvalidQuantity",
    "MissingOrInvalidPluralCount",
    "MissingPluralExpression",
    "OutputFormat",
    "PlaceholderFormatError",
    "PluralArityMismatch",
    "PluralVariantCountMismatch",
]
