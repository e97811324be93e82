"""Output formatting for resolved messages.

Two pure functions applied by Locale after a lookup:

- format_placeholders(): printf-style substitution (``%s``, ``%d``,
  ``%(name)s``) of caller-supplied values into the translation.
- escape_for_web(): HTML-entity escaping for direct insertion into markup.

Python 3.13+. Zero external dependencies.
"""

import html
from collections.abc import Mapping

from msgcatalog.constants import WEB_LINE_BREAK
from msgcatalog.diagnostics import Diagnostic, DiagnosticCode, PlaceholderFormatError

__all__ = ["escape_for_web", "format_placeholders"]


def format_placeholders(template: str, args: tuple[object, ...]) -> str:
    """Substitute printf-style placeholders.

    A single mapping argument selects named placeholders; otherwise the
    arguments fill positional placeholders in order.

    Args:
        template: Translated message, e.g. "Vous avez %d courriels"
        args: Values to substitute

    Returns:
        The formatted message

    Raises:
        PlaceholderFormatError: On argument count or type mismatch

    Examples:
        >>> format_placeholders("Vous avez %d courriels", (6,))
        'Vous avez 6 courriels'
        >>> format_placeholders("Bonjour %(name)s", ({"name": "Jean"},))
        'Bonjour Jean'
    """
    values: object
    if len(args) == 1 and isinstance(args[0], Mapping):
        values = args[0]
    else:
        values = args
    try:
        return template % values
    except (TypeError, ValueError, KeyError) as e:
        raise PlaceholderFormatError(
            Diagnostic(
                code=DiagnosticCode.PLACEHOLDER_FORMAT_FAILED,
                message=f"Cannot substitute {len(args)} value(s) into {template!r}: {e}",
                hint="Check the number and types of values against the placeholders",
            )
        ) from e


def escape_for_web(text: str, collapse_newlines: bool = True) -> str:
    """Escape a message for HTML output.

    ``& < > " '`` become entities; with collapse_newlines, each newline
    becomes ``<br/>``.

    Examples:
        >>> escape_for_web('Say "hi" <b>')
        'Say &quot;hi&quot; &lt;b&gt;'
        >>> escape_for_web("line one\\nline two")
        'line one<br/>line two'
    """
    escaped = html.escape(text, quote=True)
    if collapse_newlines:
        escaped = escaped.replace("\n", WEB_LINE_BREAK)
    return escaped
