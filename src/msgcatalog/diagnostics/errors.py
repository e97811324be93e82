"""Catalog exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error information.

Load-time errors (DomainLoadError family) always reach the caller of
load_domain(). Resolve-time problems never raise out of the gettext family;
they degrade to a fallback string and a log record.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CatalogError",
    "DomainLoadError",
    "InvalidCatalogFormat",
    "InvalidPluralSyntax",
    "InvalidQuantity",
    "MissingOrInvalidPluralCount",
    "MissingPluralExpression",
    "PlaceholderFormatError",
    "PluralArityMismatch",
    "PluralVariantCountMismatch",
]


class CatalogError(Exception):
    """Base exception for all catalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidQuantity(CatalogError):
    """Quantity passed to a plural test is not a usable number."""


class PlaceholderFormatError(CatalogError):
    """Placeholder substitution failed (argument count or type mismatch).

    Raised by format_placeholders(). Locale catches it, logs it and returns
    the unsubstituted string.
    """


class DomainLoadError(CatalogError):
    """Catalog data rejected while loading a domain.

    The domain is never installed when this is raised.

    Attributes:
        domain: Name of the domain being loaded (None for ad hoc checks)
    """

    def __init__(self, message: str | Diagnostic, *, domain: str | None = None) -> None:
        super().__init__(message)
        self.domain = domain


class InvalidCatalogFormat(DomainLoadError):
    """Payload is not a mapping of keys to strings or string lists."""


class MissingOrInvalidPluralCount(DomainLoadError):
    """Metadata 'nplurals' is missing, blank, non-numeric or negative."""


class MissingPluralExpression(DomainLoadError):
    """Metadata declares plural forms but provides no 'plural' expression."""


class PluralArityMismatch(DomainLoadError):
    """'nplurals' does not match the number of clauses in 'plural'."""


class PluralVariantCountMismatch(DomainLoadError):
    """A plural entry has a different number of variants than 'nplurals'.

    Attributes:
        key: Offending message key
        variant_count: Number of variants supplied for the key
        plural_count: Number declared by 'nplurals'
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        domain: str | None = None,
        key: str,
        variant_count: int,
        plural_count: int,
    ) -> None:
        super().__init__(message, domain=domain)
        self.key = key
        self.variant_count = variant_count
        self.plural_count = plural_count


class InvalidPluralSyntax(DomainLoadError):
    """Plural expression has disallowed characters or does not evaluate.

    Raised both while loading a domain and when a plural test is evaluated
    ad hoc (e.g. validating a custom default rule).

    Attributes:
        expression: The offending expression
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        expression: str,
        domain: str | None = None,
    ) -> None:
        super().__init__(message, domain=domain)
        self.expression = expression
