"""msgcatalog - gettext-style message catalogs with safe plural rules.

Loads JSON-shaped translation catalogs grouped by domain and resolves
messages with gettext semantics (singular, plural, domain-qualified),
selecting plural variants with C-style plural rules that are parsed and
interpreted rather than passed to eval().

Public API:
    Locale - Catalog store and message resolution for one language
    PathCatalogLoader - Reads <dir>/<domain>.json catalogs from disk
    evaluate_plural - Evaluate a plural rule for an item count
    plural_forms_for_locale - Babel's plural rule for a language

Exceptions:
    CatalogError - Base exception class
    DomainLoadError - A catalog failed validation (with subclasses)
    InvalidPluralSyntax - A plural rule is malformed or disallowed
    InvalidQuantity - An item count is not a finite number

Submodules:
    msgcatalog.catalog - Domain model, payload validation, loaders
    msgcatalog.plural - Plural rule parser and interpreter
    msgcatalog.diagnostics - Error codes, templates and formatters
    msgcatalog.runtime - Locale, output formatting, RWLock
"""

from .catalog import CatalogLoader, Domain, DomainMetadata, PathCatalogLoader
from .diagnostics import (
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
from .plural import PluralForms, evaluate_plural, plural_forms_for_locale
from .runtime import Locale

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgcatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogError",
    "CatalogLoader",
    "Domain",
    "DomainLoadError",
    "DomainMetadata",
    "InvalidCatalogFormat",
    "InvalidPluralSyntax",
    "InvalidQuantity",
    "Locale",
    "MissingOrInvalidPluralCount",
    "MissingPluralExpression",
    "PathCatalogLoader",
    "PlaceholderFormatError",
    "PluralArityMismatch",
    "PluralForms",
    "PluralVariantCountMismatch",
    "__version__",
    "evaluate_plural",
    "plural_forms_for_locale",
]
