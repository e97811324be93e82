"""Tests for Locale construction, domain loading and configuration.

Tests verify:
- Constructor loads the default domain, or logs and continues on failure
- load_domain() is all-or-nothing; a reload failing validation evicts,
  a malformed payload keeps the previous catalog
- active_plural_expression is last-writer-wins across loads
- Accessors expose read-only views
- Logging levels for misses follow the debug flag
"""

import logging

import pytest

from msgcatalog import (
    InvalidCatalogFormat,
    InvalidPluralSyntax,
    Locale,
    MissingOrInvalidPluralCount,
    PluralVariantCountMismatch,
)
from msgcatalog.constants import DEFAULT_PLURAL_EXPRESSION
from msgcatalog.plural import plural_forms_for_locale

LOGGER = "msgcatalog.runtime.locale"


class TestConstruction:
    """Test Locale.__init__."""

    def test_accessors(self, locale: Locale) -> None:
        """Constructor arguments are exposed as properties."""
        assert locale.language == "fr_FR"
        assert locale.default_domain == "main"
        assert locale.use_custom_plural_forms is True
        assert locale.debug is False
        assert locale.thread_safe is False

    def test_default_domain_loaded(self, locale: Locale) -> None:
        """The default domain is installed at construction."""
        assert set(locale.loaded_domains) == {"main"}
        assert locale.loaded_domains["main"].name == "main"

    def test_invalid_default_domain_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failing default domain is logged, not raised."""
        with caplog.at_level(logging.ERROR, logger=LOGGER):
            locale = Locale("fr", "main", {"Search": "Recherche"})

        assert "Failed to load default domain 'main'" in caplog.text
        assert locale.loaded_domains == {}
        assert locale.gettext("Search") == "Search"

    def test_init_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Construction is logged at INFO."""
        with caplog.at_level(logging.INFO, logger=LOGGER):
            Locale("de", "main", {}, use_custom_plural_forms=False)

        assert "Locale initialized for language: de" in caplog.text
        assert "Loaded domain 'main'" in caplog.text


class TestLoadDomain:
    """Test Locale.load_domain()."""

    def test_returns_domain(self, locale: Locale, russian_files: dict[str, object]) -> None:
        """The installed Domain is returned."""
        domain = locale.load_domain("files", russian_files)

        assert domain is locale.loaded_domains["files"]
        assert domain.metadata.plural_count == 3

    def test_failure_raises_and_installs_nothing(self, locale: Locale) -> None:
        """A rejected catalog is not installed."""
        with pytest.raises(MissingOrInvalidPluralCount):
            locale.load_domain("navbar", {"Logout": "Quitter"})

        assert "navbar" not in locale.loaded_domains

    def test_reload_replaces(self, locale: Locale) -> None:
        """Loading under an existing name replaces the catalog."""
        locale.load_domain("main", {"": {"nplurals": "0"}, "Search": "Chercher"})

        assert locale.gettext("Search") == "Chercher"

    def test_failed_reload_evicts(
        self, locale: Locale, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failed reload removes the previously loaded catalog."""
        with (
            caplog.at_level(logging.WARNING, logger=LOGGER),
            pytest.raises(PluralVariantCountMismatch),
        ):
            locale.load_domain(
                "main",
                {"": {"nplurals": "1", "plural": "(n > 1)"}, "Search": ["a", "b"]},
            )

        assert "main" not in locale.loaded_domains
        assert locale.gettext("Search") == "Search"
        assert "removed after a failed reload" in caplog.text

    def test_malformed_reload_keeps_previous(
        self, locale: Locale, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A payload that is not a catalog at all leaves the old one in place."""
        with caplog.at_level(logging.WARNING, logger=LOGGER), pytest.raises(InvalidCatalogFormat):
            locale.load_domain("main", 42)

        assert "main" in locale.loaded_domains
        assert locale.gettext("Search") == "Recherche"
        assert "removed" not in caplog.text

    def test_failed_load_of_new_name_logs_no_eviction(
        self, locale: Locale, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Failing to load a new name does not touch other domains."""
        with caplog.at_level(logging.WARNING, logger=LOGGER), pytest.raises(InvalidPluralSyntax):
            locale.load_domain("x", {"": {"nplurals": "1", "plural": "n.x"}})

        assert set(locale.loaded_domains) == {"main"}
        assert "removed" not in caplog.text

    def test_loaded_domains_is_read_only(self, locale: Locale) -> None:
        """loaded_domains cannot be mutated."""
        with pytest.raises(TypeError):
            locale.loaded_domains["x"] = locale.loaded_domains["main"]  # type: ignore[index]

    def test_loaded_domains_is_a_snapshot(self, locale: Locale) -> None:
        """A view taken earlier does not change with later loads."""
        view = locale.loaded_domains
        locale.load_domain("navbar", {"": {"nplurals": "0"}})

        assert "navbar" not in view
        assert "navbar" in locale.loaded_domains


class TestActivePluralExpression:
    """Test active_plural_expression."""

    def test_set_by_default_domain(self, locale: Locale) -> None:
        """The default domain's rule becomes active."""
        assert locale.active_plural_expression == "(n > 1)"

    def test_last_load_wins(self, locale: Locale, russian_files: dict[str, object]) -> None:
        """Each load with a rule overwrites the active expression."""
        locale.load_domain("files", russian_files)

        assert locale.active_plural_expression == russian_files[""]["plural"]  # type: ignore[index]

    def test_lookups_ignore_active_expression(
        self, locale: Locale, russian_files: dict[str, object]
    ) -> None:
        """Each domain selects variants with its own rule, not the active one."""
        locale.load_domain("files", russian_files)

        # Russian is active, but n=0 is singular under the French rule.
        assert locale.dngettext("main", "You have one mail", "You have %d mails", 0) == (
            "Vous avez un courriel"
        )
        assert locale.dngettext("files", "One file", "%d files", 0, 0) == "0 файлов"

    def test_zero_count_load_keeps_previous(self, locale: Locale) -> None:
        """A catalog without plural forms leaves the active expression."""
        locale.load_domain("navbar", {"": {"nplurals": "0"}})

        assert locale.active_plural_expression == "(n > 1)"

    def test_failed_load_keeps_previous(self, locale: Locale) -> None:
        """A rejected catalog never changes the active expression."""
        with pytest.raises(InvalidPluralSyntax):
            locale.load_domain("x", {"": {"nplurals": "1", "plural": "(n >"}})

        assert locale.active_plural_expression == "(n > 1)"

    def test_default_when_nothing_loaded(self) -> None:
        """Without a loaded rule, the default rule is reported."""
        locale = Locale("de", "main", {"": {"nplurals": "0"}})

        assert locale.active_plural_expression == DEFAULT_PLURAL_EXPRESSION

    def test_disabled_custom_forms_report_default(self) -> None:
        """With custom forms disabled, the default rule is always active."""
        locale = Locale(
            "fr",
            "main",
            {"": {"nplurals": "1", "plural": "(n > 1)"}},
            use_custom_plural_forms=False,
        )
        locale.set_default_plural_expression("n==1 ? 0 : 1")

        assert locale.active_plural_expression == "n==1 ? 0 : 1"
        assert locale.default_plural_expression == "n==1 ? 0 : 1"


class TestDefaultPluralExpression:
    """Test set_default_plural_expression() and use_language_plural_rule()."""

    def test_initial_default(self, locale: Locale) -> None:
        """The default rule starts as (n != 1)."""
        assert locale.default_plural_expression == DEFAULT_PLURAL_EXPRESSION

    @pytest.mark.parametrize("expression", ["n.x", "(n >", "n%0", ""])
    def test_invalid_rejected(self, locale: Locale, expression: str) -> None:
        """Invalid rules are rejected and the old default kept."""
        with pytest.raises(InvalidPluralSyntax):
            locale.set_default_plural_expression(expression)

        assert locale.default_plural_expression == DEFAULT_PLURAL_EXPRESSION

    def test_language_rule(self) -> None:
        """use_language_plural_rule() applies a one-clause Babel rule."""
        locale = Locale(
            "fr_FR",
            "main",
            {"One file": "Un fichier", "%d files": ["%d fichiers"]},
            use_custom_plural_forms=False,
        )

        forms = locale.use_language_plural_rule()

        assert forms.plural_count == 1
        assert locale.default_plural_expression == "(n > 1)"
        assert locale.ngettext("One file", "%d files", 0) == "Un fichier"
        assert locale.ngettext("One file", "%d files", 2, 2) == "2 fichiers"

    def test_multi_form_language_rule_rejected(self) -> None:
        """A rule with more forms than the default can select is refused."""
        locale = Locale("ru_RU", "main", {}, use_custom_plural_forms=False)

        with pytest.raises(InvalidPluralSyntax) as exc_info:
            locale.use_language_plural_rule()

        assert exc_info.value.expression == plural_forms_for_locale("ru").expression
        assert "3 clauses" in str(exc_info.value)
        assert locale.default_plural_expression == DEFAULT_PLURAL_EXPRESSION


class TestMissLogging:
    """Test log levels of lookup misses."""

    def test_misses_at_debug_by_default(
        self, locale: Locale, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Without debug, misses are DEBUG records."""
        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            locale.gettext("Unknown")

        records = [r for r in caplog.records if "Unknown" in r.getMessage()]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_misses_at_warning_with_debug(
        self, french_main: dict[str, object], caplog: pytest.LogCaptureFixture
    ) -> None:
        """With debug=True, misses are WARNING records."""
        locale = Locale("fr", "main", french_main, debug=True)

        with caplog.at_level(logging.WARNING, logger=LOGGER):
            locale.dgettext("navbar", "Logout")
            locale.gettext("Unknown")

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert "[DOMAIN_NOT_FOUND] Undefined domain: 'navbar'" in messages
        assert "[MESSAGE_NOT_FOUND] Undefined message in domain 'main': 'Unknown'" in messages

    def test_missing_variant_logged(
        self, russian_files: dict[str, object], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Missing plural variants name the selected index."""
        locale = Locale("ru", "files", russian_files, debug=True)

        with caplog.at_level(logging.WARNING, logger=LOGGER):
            locale.ngettext("One dir", "%d dirs", 5)

        assert "[array id: 2]" in caplog.text


class TestAccessorMethods:
    """Test get_loaded_domains() and get_language()."""

    def test_get_language(self, locale: Locale) -> None:
        """get_language() matches the language property."""
        assert locale.get_language() == locale.language == "fr_FR"

    def test_get_loaded_domains(self, locale: Locale) -> None:
        """get_loaded_domains() matches loaded_domains."""
        assert dict(locale.get_loaded_domains()) == dict(locale.loaded_domains)

    def test_reload_same_payload_is_idempotent(
        self, locale: Locale, french_main: dict[str, object]
    ) -> None:
        """Loading an identical payload again yields an equal domain."""
        before = locale.loaded_domains["main"]
        after = locale.load_domain("main", french_main)

        assert after == before
        assert locale.gettext("Search") == "Recherche"
