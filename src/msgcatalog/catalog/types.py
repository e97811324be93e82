"""Type aliases for the catalog domain.

Provides semantic type aliases used throughout the catalog and runtime
packages and by user code when annotating Locale call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping, Sequence

__all__ = [
    "CatalogPayload",
    "DomainName",
    "LocaleCode",
    "MessageKey",
    "Translation",
]

type DomainName = str
"""Name of a message catalog (e.g., 'main', 'navbar')."""

type MessageKey = str
"""Untranslated source message used as lookup key (e.g., 'Logout')."""

type LocaleCode = str
"""Language tag the catalogs are written in (e.g., 'fr_FR', 'pt-BR')."""

type Translation = str | tuple[str, ...]
"""Singular translation, or the ordered plural variants of a message."""

type CatalogPayload = Mapping[str, object] | Sequence[tuple[str, object]]
"""Raw domain data: keys to str / list of str, plus the '' metadata block."""
