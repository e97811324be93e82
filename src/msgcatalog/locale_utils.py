"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale format normalization used when looking up Babel's
plural data for a language tag.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from msgcatalog.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    An encoding suffix (fr_FR.UTF-8) is dropped.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "fr_FR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "fr_FR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("pt_BR.UTF-8")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.split(".", 1)[0].strip().replace("-", "_")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("fr-CA")
        >>> locale.language
        'fr'
        >>> locale.territory
        'CA'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
