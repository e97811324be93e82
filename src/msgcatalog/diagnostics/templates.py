"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from msgcatalog.constants import PLURAL_VALID_CHARS

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


def _where(domain: str | None) -> str:
    return f"in domain '{domain}'" if domain is not None else "in the default plural rule"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # ------------------------------------------------------------------
    # Load errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_catalog_format(domain: str, reason: str) -> Diagnostic:
        """Payload for a domain is not a usable catalog.

        Args:
            domain: Domain being loaded
            reason: What was wrong with the payload

        Returns:
            Diagnostic for INVALID_CATALOG_FORMAT
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_CATALOG_FORMAT,
            message=f"Invalid catalog data for domain '{domain}': {reason}",
            hint="Catalog data must map message keys to a string or a list of strings",
            domain=domain,
        )

    @staticmethod
    def invalid_plural_count(domain: str, value: object) -> Diagnostic:
        """Metadata 'nplurals' is missing or not a non-negative integer.

        Args:
            domain: Domain being loaded
            value: The raw 'nplurals' value found (None when missing)

        Returns:
            Diagnostic for MISSING_OR_INVALID_PLURAL_COUNT
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_OR_INVALID_PLURAL_COUNT,
            message=f"Missing or invalid 'nplurals' number in domain '{domain}': {value!r}",
            hint='Set "nplurals" in the "" metadata block, e.g. "nplurals": "1"',
            domain=domain,
        )

    @staticmethod
    def missing_plural_expression(domain: str, plural_count: int) -> Diagnostic:
        """Metadata declares plural forms without a 'plural' test.

        Args:
            domain: Domain being loaded
            plural_count: Declared 'nplurals'

        Returns:
            Diagnostic for MISSING_PLURAL_EXPRESSION
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_PLURAL_EXPRESSION,
            message=(
                f"Missing 'plural' ternary test conditions in domain '{domain}' "
                f"(nplurals={plural_count})"
            ),
            hint='Set "plural" in the "" metadata block, e.g. "plural": "(n > 1)"',
            domain=domain,
        )

    @staticmethod
    def plural_arity_mismatch(
        domain: str, plural_count: int, clause_count: int, expression: str
    ) -> Diagnostic:
        """'nplurals' disagrees with the number of '?'-separated clauses.

        Args:
            domain: Domain being loaded
            plural_count: Declared 'nplurals'
            clause_count: Clauses found in the expression
            expression: The 'plural' expression

        Returns:
            Diagnostic for PLURAL_ARITY_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.PLURAL_ARITY_MISMATCH,
            message=(
                f"The 'nplurals' value ({plural_count}) doesn't match the number of "
                f"'plural' conditions ({clause_count}) in domain '{domain}'"
            ),
            hint="Count the '?'-separated pieces of the 'plural' expression",
            domain=domain,
            expression=expression,
        )

    @staticmethod
    def plural_variant_count_mismatch(
        domain: str, key: str, variant_count: int, plural_count: int
    ) -> Diagnostic:
        """A plural entry has the wrong number of variants.

        Args:
            domain: Domain being loaded
            key: Offending message key
            variant_count: Variants supplied
            plural_count: Declared 'nplurals'

        Returns:
            Diagnostic for PLURAL_VARIANT_COUNT_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.PLURAL_VARIANT_COUNT_MISMATCH,
            message=(
                f"Possible plurals count ({variant_count}) for key '{key}' in domain "
                f"'{domain}' doesn't match the 'nplurals' value ({plural_count})"
            ),
            hint=f"Provide exactly {plural_count} translation(s) for '{key}'",
            domain=domain,
            key=key,
        )

    # ------------------------------------------------------------------
    # Plural evaluation errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_plural_characters(expression: str, domain: str | None) -> Diagnostic:
        """Expression contains characters outside the whitelist.

        Args:
            expression: The offending expression
            domain: Domain label, None for the default rule

        Returns:
            Diagnostic for INVALID_PLURAL_CHARACTERS
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_CHARACTERS,
            message=f"Invalid characters found in 'plural' {_where(domain)}: '{expression}'",
            hint=(
                "A 'plural' expression may only use the 'n' variable, spaces and "
                f"the characters '{PLURAL_VALID_CHARS}'"
            ),
            domain=domain,
            expression=expression,
        )

    @staticmethod
    def invalid_plural_syntax(expression: str, domain: str | None, reason: str) -> Diagnostic:
        """Expression passed the whitelist but does not evaluate.

        Args:
            expression: The offending expression
            domain: Domain label, None for the default rule
            reason: Parser or evaluator message

        Returns:
            Diagnostic for INVALID_PLURAL_SYNTAX
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_SYNTAX,
            message=(
                f"Invalid 'plural' ternary conditions format {_where(domain)}: "
                f"'{expression}' ({reason})"
            ),
            hint="Use C syntax: comparisons, %, !, &&, ||, ?: and parentheses over n",
            domain=domain,
            expression=expression,
        )

    @staticmethod
    def multi_form_default_rule(language: str, expression: str, plural_count: int) -> Diagnostic:
        """Language rule has more forms than the default rule can select.

        The default rule only distinguishes the singular from the first
        plural variant, so it must have a single clause.

        Args:
            language: Language the rule belongs to
            expression: The language's plural rule
            plural_count: Its clause count

        Returns:
            Diagnostic for INVALID_PLURAL_SYNTAX
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_SYNTAX,
            message=(
                f"Plural rule for '{language}' has {plural_count} clauses; "
                "the default plural rule must have one"
            ),
            hint="Enable custom plural forms and declare the rule in the catalog metadata",
            expression=expression,
        )

    @staticmethod
    def plural_depth_exceeded(max_depth: int) -> Diagnostic:
        """Expression nests deeper than the parser allows.

        Args:
            max_depth: Maximum allowed nesting depth

        Returns:
            Diagnostic for PLURAL_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.PLURAL_DEPTH_EXCEEDED,
            message=f"Plural expression nesting exceeds maximum depth ({max_depth})",
        )

    @staticmethod
    def invalid_quantity(value: object) -> Diagnostic:
        """Quantity is not a usable number.

        Args:
            value: The value passed as 'n'

        Returns:
            Diagnostic for INVALID_QUANTITY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_QUANTITY,
            message=f"Invalid 'n' number (e.g. item count) passed: {value!r}",
            hint="Pass an int, float or Decimal item count",
        )

    # ------------------------------------------------------------------
    # Resolution warnings
    # ------------------------------------------------------------------

    @staticmethod
    def domain_not_found(domain: str) -> Diagnostic:
        """Lookup in a domain that was never (successfully) loaded."""
        return Diagnostic(
            code=DiagnosticCode.DOMAIN_NOT_FOUND,
            message=f"Undefined domain: '{domain}'",
            domain=domain,
            severity="warning",
        )

    @staticmethod
    def message_not_found(domain: str, key: str) -> Diagnostic:
        """Lookup of a key with no translation in its domain."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Undefined message in domain '{domain}': '{key}'",
            domain=domain,
            key=key,
            severity="warning",
        )

    @staticmethod
    def plural_variant_not_found(domain: str, key: str, index: int) -> Diagnostic:
        """Plural test selected a variant the entry does not have."""
        return Diagnostic(
            code=DiagnosticCode.PLURAL_VARIANT_NOT_FOUND,
            message=f"Undefined message in domain '{domain}': '{key}' [array id: {index}]",
            domain=domain,
            key=key,
            severity="warning",
        )
