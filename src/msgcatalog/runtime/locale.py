"""Locale - Main API for message catalog lookups.

Python 3.13+. External dependency: Babel (plural rules by language).
"""

import logging
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager, nullcontext
from types import MappingProxyType

from msgcatalog.catalog.domain import Domain, parse_domain
from msgcatalog.catalog.loading import CatalogLoader
from msgcatalog.catalog.types import DomainName, LocaleCode, MessageKey
from msgcatalog.constants import DEFAULT_PLURAL_EXPRESSION
from msgcatalog.diagnostics import (
    CatalogError,
    Diagnostic,
    DomainLoadError,
    ErrorTemplate,
    InvalidCatalogFormat,
    InvalidPluralSyntax,
    PlaceholderFormatError,
)
from msgcatalog.plural import PluralForms, evaluate_plural, plural_forms_for_locale
from msgcatalog.runtime.formatting import escape_for_web, format_placeholders
from msgcatalog.runtime.rwlock import RWLock

__all__ = ["Locale"]

logger = logging.getLogger(__name__)

type PlaceholderFormatter = Callable[[str, tuple[object, ...]], str]


class Locale:
    """Message catalogs for one language, organized by domain.

    Holds a default domain plus any number of additionally loaded domains,
    and resolves messages with gettext semantics: a lookup always returns a
    displayable string, falling back to the untranslated key when a domain,
    key or plural variant is missing.

    Plural Forms:
        With use_custom_plural_forms=True (default), each catalog declares
        ``nplurals`` and a ``plural`` rule in its ``""`` metadata block, and
        lookups in that domain use its rule. With use_custom_plural_forms=False
        catalogs need no metadata and every lookup uses the instance default
        rule, ``(n != 1)`` unless changed with set_default_plural_expression().

    Active Plural Expression:
        active_plural_expression is shared, mutable, instance-wide state:
        every successful load_domain() of a catalog with a plural rule
        overwrites it (last writer wins). It is informational; lookups use
        the rule of the domain being read: dngettext() selects a variant
        with the 'plural' rule of the domain it reads, never with
        active_plural_expression.

    Thread Safety:
        By default, Locale is NOT thread-safe: complete loading before
        sharing an instance across threads. With thread_safe=True, loads and
        setters take an exclusive lock and lookups a shared one, so a lookup
        never observes a partially installed domain.

    Examples:
        >>> locale = Locale("fr_FR", "main", {
        ...     "": {"nplurals": "1", "plural": "(n > 1)"},
        ...     "Search": "Recherche",
        ...     "You have %d mails": ["Vous avez %d courriels"],
        ... })
        >>> locale.gettext("Search")
        'Recherche'
        >>> locale.ngettext("You have one mail", "You have %d mails", 6, 6)
        'Vous avez 6 courriels'
        >>> locale.dgettext("navbar", "Logout")  # domain not loaded
        'Logout'
    """

    __slots__ = (
        "_active_plural",
        "_debug",
        "_default_domain",
        "_default_plural",
        "_domains",
        "_format_for_web",
        "_format_for_web_include_placeholders",
        "_formatter",
        "_language",
        "_lock",
        "_use_custom_plural_forms",
    )

    def __init__(
        self,
        language: LocaleCode,
        default_domain: DomainName,
        data: object,
        use_custom_plural_forms: bool = True,
        debug: bool = False,
        *,
        thread_safe: bool = False,
        formatter: PlaceholderFormatter = format_placeholders,
    ) -> None:
        """Initialize the locale and load its default domain.

        A default domain that fails validation is logged and skipped rather
        than raised, so the instance stays usable and lookups return keys.

        Args:
            language: Language tag the catalogs are written in (e.g. "fr_FR")
            default_domain: Domain used by gettext() / ngettext()
            data: Catalog payload of the default domain
            use_custom_plural_forms: Use each catalog's own plural rule
                (default: True). When False, the default rule is used.
            debug: Report missing domains and keys at WARNING level instead
                of DEBUG (default: False)
            thread_safe: Guard state with a readers-writer lock (default: False)
            formatter: Placeholder substitution function
                (default: format_placeholders)
        """
        self._language = language
        self._default_domain = default_domain
        self._domains: dict[DomainName, Domain] = {}
        self._default_plural = DEFAULT_PLURAL_EXPRESSION
        self._active_plural: str | None = None
        self._use_custom_plural_forms = use_custom_plural_forms
        self._debug = debug
        self._format_for_web = False
        self._format_for_web_include_placeholders = True
        self._formatter = formatter
        self._lock: RWLock | None = RWLock() if thread_safe else None

        logger.info(
            "Locale initialized for language: %s (default domain=%s, custom plural forms=%s, "
            "thread_safe=%s)",
            language,
            default_domain,
            use_custom_plural_forms,
            thread_safe,
        )

        try:
            self.load_domain(default_domain, data)
        except DomainLoadError as e:
            logger.error("Failed to load default domain '%s': %s", default_domain, e)

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    def _reading(self) -> AbstractContextManager[None]:
        return self._lock.read() if self._lock is not None else nullcontext()

    def _writing(self) -> AbstractContextManager[None]:
        return self._lock.write() if self._lock is not None else nullcontext()

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def language(self) -> LocaleCode:
        """Language tag passed at construction (informational)."""
        return self._language

    @property
    def default_domain(self) -> DomainName:
        """Domain used by gettext() and ngettext()."""
        return self._default_domain

    @property
    def use_custom_plural_forms(self) -> bool:
        """Whether catalogs supply their own plural rules."""
        return self._use_custom_plural_forms

    @property
    def debug(self) -> bool:
        """Whether lookup misses are reported at WARNING level."""
        return self._debug

    @property
    def thread_safe(self) -> bool:
        """Whether state is guarded by a readers-writer lock."""
        return self._lock is not None

    @property
    def loaded_domains(self) -> Mapping[DomainName, Domain]:
        """Read-only snapshot of all successfully loaded domains."""
        with self._reading():
            return MappingProxyType(dict(self._domains))

    def get_loaded_domains(self) -> Mapping[DomainName, Domain]:
        """Return a read-only snapshot of loaded domains (see loaded_domains)."""
        return self.loaded_domains

    def get_language(self) -> LocaleCode:
        """Return the language tag (see language)."""
        return self._language

    @property
    def default_plural_expression(self) -> str:
        """Plural rule used when custom plural forms are disabled."""
        with self._reading():
            return self._default_plural

    @property
    def active_plural_expression(self) -> str:
        """Rule of the last catalog loaded with a plural rule.

        Falls back to the default rule while no such catalog has been loaded,
        and always when custom plural forms are disabled.
        """
        with self._reading():
            if self._use_custom_plural_forms and self._active_plural is not None:
                return self._active_plural
            return self._default_plural

    @property
    def format_for_web(self) -> bool:
        """Whether results are HTML-escaped."""
        return self._format_for_web

    @property
    def format_for_web_include_placeholders(self) -> bool:
        """Whether HTML escaping also covers substituted placeholder values."""
        return self._format_for_web_include_placeholders

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_default_plural_expression(self, expression: str) -> None:
        """Replace the default plural rule.

        The rule is trial-evaluated for n=1 before it is accepted.

        Raises:
            InvalidPluralSyntax: If the rule has disallowed characters or
                does not evaluate
        """
        evaluate_plural(expression, 1)
        with self._writing():
            self._default_plural = expression
        logger.debug("Default plural expression set to: %s", expression)

    def use_language_plural_rule(self) -> PluralForms:
        """Set the default plural rule from Babel's data for this language.

        The default rule only tells the singular from the first plural
        variant, so languages with more forms are rejected.

        Returns:
            The plural forms that were applied

        Raises:
            InvalidPluralSyntax: If the language rule has more than one clause

        Example:
            >>> Locale("fr", "main", {}, use_custom_plural_forms=False).use_language_plural_rule()
            PluralForms(plural_count=1, expression='(n > 1)')
        """
        forms = plural_forms_for_locale(self._language)
        if forms.plural_count > 1:
            diagnostic = ErrorTemplate.multi_form_default_rule(
                self._language, forms.expression, forms.plural_count
            )
            raise InvalidPluralSyntax(diagnostic, expression=forms.expression)
        self.set_default_plural_expression(forms.expression)
        return forms

    def set_format_for_web(self, enabled: bool) -> bool:
        """Enable or disable HTML escaping of results.

        Returns:
            The previous setting
        """
        with self._writing():
            previous = self._format_for_web
            self._format_for_web = enabled
        return previous

    def set_format_for_web_include_placeholders(self, enabled: bool) -> bool:
        """Choose whether HTML escaping also covers placeholder values.

        When False, the translation is escaped before substitution and the
        substituted values are inserted verbatim (e.g. trusted markup).

        Returns:
            The previous setting
        """
        with self._writing():
            previous = self._format_for_web_include_placeholders
            self._format_for_web_include_placeholders = enabled
        return previous

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_domain(self, domain: DomainName, data: object) -> Domain:
        """Validate a catalog and install it under a domain name.

        Loading is all-or-nothing: a catalog that fails validation is never
        installed. A reload that fails metadata validation also removes the
        domain previously loaded under that name. A payload that is not a
        catalog at all (InvalidCatalogFormat) leaves that domain in place.

        Args:
            domain: Domain name
            data: Catalog payload

        Returns:
            The installed Domain

        Raises:
            DomainLoadError: One of InvalidCatalogFormat,
                MissingOrInvalidPluralCount, MissingPluralExpression,
                PluralArityMismatch, PluralVariantCountMismatch,
                InvalidPluralSyntax
        """
        with self._writing():
            return self._load_domain_impl(domain, data)

    def _load_domain_impl(self, name: DomainName, data: object) -> Domain:
        """Internal implementation of load_domain (no locking)."""
        logger.debug("Loading domain: %s", name)
        try:
            domain = parse_domain(
                name, data, use_custom_plural_forms=self._use_custom_plural_forms
            )
        except InvalidCatalogFormat:
            raise
        except DomainLoadError:
            if self._domains.pop(name, None) is not None:
                logger.warning("Domain '%s' removed after a failed reload", name)
            raise

        self._domains[name] = domain

        expression = domain.metadata.plural_expression
        plural_count = domain.metadata.plural_count or 0
        if self._use_custom_plural_forms and plural_count >= 1 and expression:
            self._active_plural = expression

        logger.info(
            "Loaded domain '%s': %d entries, %s plural: %s",
            name,
            len(domain),
            "custom" if self._use_custom_plural_forms else "default",
            expression if self._use_custom_plural_forms else self._default_plural,
        )
        return domain

    def load_domain_from(self, loader: CatalogLoader, domain: DomainName) -> Domain:
        """Fetch a catalog for this locale's language and load it.

        Raises:
            FileNotFoundError, OSError: From the loader
            DomainLoadError: As load_domain()
        """
        return self.load_domain(domain, loader.load(self._language, domain))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def gettext(self, message: MessageKey, *args: object) -> str:
        """Look up a message in the default domain, singular form.

        Args:
            message: Message key
            *args: Values for printf-style placeholders

        Returns:
            Translation, or the key itself if there is none
        """
        return self.dgettext(self._default_domain, message, *args)

    def ngettext(self, singular: MessageKey, plural: MessageKey, n: object, *args: object) -> str:
        """Look up a message in the default domain, plural form.

        Args:
            singular: Singular message key
            plural: Plural message key
            n: Item count selecting the grammatical number
            *args: Values for printf-style placeholders

        Returns:
            Translation, or one of the keys if there is none
        """
        return self.dngettext(self._default_domain, singular, plural, n, *args)

    def dgettext(self, domain: DomainName, message: MessageKey, *args: object) -> str:
        """Look up a message in a given domain, singular form.

        Never raises for missing data: an unknown domain or a missing, empty
        or plural-only entry yields the key itself.
        """
        with self._reading():
            return self._finish(self._lookup_singular(domain, message), args)

    def dngettext(
        self,
        domain: DomainName,
        singular: MessageKey,
        plural: MessageKey,
        n: object,
        *args: object,
    ) -> str:
        """Look up a message in a given domain, plural form.

        Never raises for missing data or a failing plural rule.

        Fallbacks:
            - unknown domain, plural rule failure, singular chosen but
              untranslated: the singular key
            - plural chosen but untranslated, or the selected variant
              missing: the plural key
        """
        with self._reading():
            return self._finish(self._lookup_plural(domain, singular, plural, n), args)

    # gettext-style short aliases
    _ = gettext
    _n = ngettext
    _d = dgettext
    _dn = dngettext

    # ------------------------------------------------------------------
    # Resolution internals (caller holds the read lock)
    # ------------------------------------------------------------------

    def _report(self, diagnostic: Diagnostic) -> None:
        logger.log(
            logging.WARNING if self._debug else logging.DEBUG,
            "[%s] %s",
            diagnostic.code.name,
            diagnostic.message,
        )

    def _lookup_singular(self, domain_name: DomainName, message: MessageKey) -> str:
        domain = self._domains.get(domain_name)
        if domain is None:
            self._report(ErrorTemplate.domain_not_found(domain_name))
            return message

        value = domain.get(message)
        if not isinstance(value, str) or not value.strip():
            self._report(ErrorTemplate.message_not_found(domain_name, message))
            return message
        return value

    def _lookup_plural(
        self, domain_name: DomainName, singular: MessageKey, plural: MessageKey, n: object
    ) -> str:
        domain = self._domains.get(domain_name)
        if domain is None:
            self._report(ErrorTemplate.domain_not_found(domain_name))
            return singular

        if not self._use_custom_plural_forms:
            try:
                index = evaluate_plural(self._default_plural, n)
            except CatalogError as e:
                logger.error(
                    "Plural evaluation for key '%s' failed with default plural ('%s'): %s",
                    singular,
                    self._default_plural,
                    e,
                )
                return singular
            if index == 1:
                return self._first_variant(domain, plural)
            return self._singular_translation(domain, singular)

        plural_count = domain.metadata.plural_count or 0
        expression = domain.metadata.plural_expression
        if plural_count == 0 or not expression:
            # The language has no plural distinction.
            return self._singular_translation(domain, singular)

        try:
            index = evaluate_plural(expression, n, domain_name)
        except CatalogError as e:
            logger.error(
                "Plural evaluation for key '%s' failed with plural ('%s'): %s",
                singular,
                expression,
                e,
            )
            return singular

        if plural_count == 1 and index == 1:
            return self._first_variant(domain, plural)
        if plural_count == 1 and index == 0:
            return self._singular_translation(domain, singular)
        return self._indexed_variant(domain, plural, index)

    def _singular_translation(self, domain: Domain, singular: MessageKey) -> str:
        value = domain.get(singular)
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            self._report(ErrorTemplate.message_not_found(domain.name, singular))
            return singular
        return text

    def _first_variant(self, domain: Domain, plural: MessageKey) -> str:
        value = domain.get(plural)
        match value:
            case str():
                text = value.strip()
            case (first, *_):
                text = first.strip()
            case _:
                text = ""
        if not text:
            self._report(ErrorTemplate.message_not_found(domain.name, plural))
            return plural
        return text

    def _indexed_variant(self, domain: Domain, plural: MessageKey, index: int) -> str:
        value = domain.get(plural)
        # A plain string under a multi-form rule is a catalog mistake: it is
        # discarded and the plural key is returned, not the singular key.
        text = value[index].strip() if isinstance(value, tuple) and index < len(value) else ""
        if not text:
            self._report(ErrorTemplate.plural_variant_not_found(domain.name, plural, index))
            return plural
        return text

    def _finish(self, translation: str, args: tuple[object, ...]) -> str:
        """Apply web escaping and placeholder substitution in their fixed order."""
        if self._format_for_web and not self._format_for_web_include_placeholders:
            translation = escape_for_web(translation)

        if args:
            try:
                translation = self._formatter(translation, args)
            except (PlaceholderFormatError, TypeError, ValueError, KeyError) as e:
                logger.error("Placeholder substitution failed for %r: %s", translation, e)

        if self._format_for_web and self._format_for_web_include_placeholders:
            translation = escape_for_web(translation)

        return translation
