"""Runtime lookups: the Locale store and its output pipeline.

Submodules:
    locale     - Locale (domain store, gettext-style resolution)
    formatting - Placeholder substitution and HTML escaping
    rwlock     - Readers-writer lock used when thread_safe=True

Python 3.13+.
"""

from .formatting import escape_for_web, format_placeholders
from .locale import Locale
from .rwlock import RWLock

__all__ = ["Locale", "RWLock", "escape_for_web", "format_placeholders"]
