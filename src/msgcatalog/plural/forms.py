"""Language plural rules from Babel's gettext plural table.

Provides a ready-made plural rule for a language so applications need not
hand-write ``(n%10==1 && n%100!=11 ? 0 : ...)`` expressions.

Babel counts every grammatical form in ``nplurals`` (French: 2). Catalogs in
this package count '?'-separated clauses of the expression instead, which
is the number of entries a plural variant list carries (French ``(n > 1)``:
1, with the singular stored under its own key). plural_forms_for_locale()
converts to that convention.

Python 3.13+. Depends on Babel for plural data.
"""

import logging
from dataclasses import dataclass

from babel.core import UnknownLocaleError
from babel.messages.plurals import get_plural

from msgcatalog.constants import DEFAULT_PLURAL_EXPRESSION
from msgcatalog.locale_utils import get_babel_locale

from .evaluator import count_plural_clauses

__all__ = ["PluralForms", "plural_forms_for_locale"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PluralForms:
    """Plural rule for a language, in catalog metadata terms.

    Attributes:
        plural_count: Value for the 'nplurals' metadata header
        expression: Value for the 'plural' metadata header
    """

    plural_count: int
    expression: str

    def as_metadata(self) -> dict[str, str]:
        """Return the ``""`` metadata block entries for a catalog payload."""
        return {"nplurals": str(self.plural_count), "plural": self.expression}


def plural_forms_for_locale(locale: str) -> PluralForms:
    """Look up the gettext plural rule for a language.

    Args:
        locale: Locale code (e.g., "fr_FR", "ru", "pt-BR")

    Returns:
        PluralForms for the locale, or the ``(n != 1)`` rule when Babel does
        not know the locale

    Examples:
        >>> plural_forms_for_locale("fr_FR")
        PluralForms(plural_count=1, expression='(n > 1)')
        >>> plural_forms_for_locale("ru").plural_count
        3
    """
    try:
        babel_locale = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Unknown locale '%s': %s. Falling back to plural rule %s",
            locale,
            e,
            DEFAULT_PLURAL_EXPRESSION,
        )
        return PluralForms(
            plural_count=count_plural_clauses(DEFAULT_PLURAL_EXPRESSION),
            expression=DEFAULT_PLURAL_EXPRESSION,
        )

    expression = get_plural(babel_locale).plural_expr
    return PluralForms(plural_count=count_plural_clauses(expression), expression=expression)
