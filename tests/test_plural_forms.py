"""Tests for plural/forms.py and locale_utils.py.

Per-language plural rules come from Babel's gettext plural table and are
converted to the '?'-clause count catalogs declare in 'nplurals'.
"""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from msgcatalog.constants import DEFAULT_PLURAL_EXPRESSION
from msgcatalog.locale_utils import get_babel_locale, normalize_locale
from msgcatalog.plural import PluralForms, evaluate_plural, plural_forms_for_locale


class TestNormalizeLocale:
    """Test normalize_locale()."""

    def test_bcp47_to_posix(self) -> None:
        """Hyphens become underscores."""
        assert normalize_locale("en-US") == "en_US"

    def test_encoding_suffix_dropped(self) -> None:
        """POSIX encoding suffixes are removed."""
        assert normalize_locale("pt_BR.UTF-8") == "pt_BR"

    def test_simple_locale(self) -> None:
        """Language-only codes are unchanged."""
        assert normalize_locale("fr") == "fr"


class TestGetBabelLocale:
    """Test get_babel_locale()."""

    def test_parses_bcp47(self) -> None:
        """BCP-47 tags resolve to Babel locales."""
        babel_locale = get_babel_locale("fr-CA")

        assert babel_locale.language == "fr"
        assert babel_locale.territory == "CA"

    def test_cached(self) -> None:
        """Repeated lookups return the cached object."""
        assert get_babel_locale("de_DE") is get_babel_locale("de_DE")


class TestPluralFormsForLocale:
    """Test plural_forms_for_locale()."""

    def test_french(self) -> None:
        """French has one plural clause: zero and one are singular."""
        forms = plural_forms_for_locale("fr_FR")

        assert forms == PluralForms(plural_count=1, expression="(n > 1)")

    def test_german(self) -> None:
        """German uses the default rule."""
        forms = plural_forms_for_locale("de")

        assert forms.plural_count == 1
        assert forms.expression == "(n != 1)"

    def test_russian(self) -> None:
        """Russian has three plural clauses."""
        forms = plural_forms_for_locale("ru_RU")

        assert forms.plural_count == 3
        assert [evaluate_plural(forms.expression, n) for n in (1, 3, 5, 21)] == [0, 1, 2, 0]

    def test_bcp47_tag(self) -> None:
        """Hyphenated tags are accepted."""
        assert plural_forms_for_locale("fr-BE").expression == "(n > 1)"

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales get the default rule and a warning."""
        with caplog.at_level(logging.WARNING, logger="msgcatalog.plural.forms"):
            forms = plural_forms_for_locale("xx_XX")

        assert forms.expression == DEFAULT_PLURAL_EXPRESSION
        assert forms.plural_count == 1
        assert "Unknown locale 'xx_XX'" in caplog.text

    def test_as_metadata(self) -> None:
        """as_metadata() yields a '' metadata block."""
        forms = PluralForms(plural_count=1, expression="(n > 1)")

        assert forms.as_metadata() == {"nplurals": "1", "plural": "(n > 1)"}

    @settings(deadline=None)
    @given(
        locale=st.sampled_from(
            ["en", "fr", "de", "ru", "pl", "cs", "ar", "ja", "zh", "lv", "ga", "cy", "sl"]
        ),
        n=st.integers(min_value=0, max_value=10_000),
    )
    def test_babel_rules_pass_whitelist_and_arity(self, locale: str, n: int) -> None:
        """Every Babel rule evaluates and selects an index below its clause count."""
        forms = plural_forms_for_locale(locale)
        index = evaluate_plural(forms.expression, n)

        assert 0 <= index <= forms.plural_count
