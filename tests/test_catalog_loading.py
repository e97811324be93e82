"""Tests for catalog/loading.py and Locale.load_domain_from().

PathCatalogLoader reads <base_path>/<domain>.json with {locale}
substituted and refuses path traversal.
"""

import json
from pathlib import Path

import pytest

from msgcatalog import InvalidCatalogFormat, Locale, PathCatalogLoader
from msgcatalog.catalog import CatalogLoader


def _write_catalog(root: Path, locale: str, domain: str, payload: object) -> Path:
    directory = root / locale
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{domain}.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


class TestPathCatalogLoader:
    """Test PathCatalogLoader."""

    def test_requires_locale_placeholder(self, tmp_path: Path) -> None:
        """base_path must contain {locale}."""
        with pytest.raises(ValueError, match="placeholder"):
            PathCatalogLoader(str(tmp_path))

    def test_load(self, tmp_path: Path, french_main: dict[str, object]) -> None:
        """Catalogs are read and decoded from JSON."""
        _write_catalog(tmp_path, "fr_FR", "main", french_main)
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        assert loader.load("fr_FR", "main") == french_main

    def test_custom_suffix(self, tmp_path: Path) -> None:
        """The file suffix is configurable."""
        (tmp_path / "de").mkdir()
        (tmp_path / "de" / "main.catalog").write_text('{"a": "b"}', encoding="utf-8")
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}", suffix=".catalog")

        assert loader.load("de", "main") == {"a": "b"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing catalog raises FileNotFoundError."""
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        with pytest.raises(FileNotFoundError):
            loader.load("fr_FR", "main")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Undecodable JSON raises InvalidCatalogFormat."""
        (tmp_path / "fr").mkdir()
        (tmp_path / "fr" / "main.json").write_text("{not json", encoding="utf-8")
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        with pytest.raises(InvalidCatalogFormat) as exc_info:
            loader.load("fr", "main")

        assert exc_info.value.domain == "main"

    @pytest.mark.parametrize(
        ("locale", "domain"),
        [("..", "main"), ("fr", "../secret"), ("fr/..", "main"), ("fr", "a\\b"), ("", "main"),
         ("fr", "")],
    )
    def test_traversal_rejected(self, tmp_path: Path, locale: str, domain: str) -> None:
        """Separators, '..' and empty components are refused."""
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        with pytest.raises(ValueError, match="not allowed|cannot be empty"):
            loader.load(locale, domain)

    def test_root_escape_rejected(self, tmp_path: Path) -> None:
        """Resolved paths must stay under root_dir."""
        outside = tmp_path / "outside"
        inside = tmp_path / "inside"
        inside.mkdir()
        loader = PathCatalogLoader(f"{outside}/{{locale}}", root_dir=str(inside))

        with pytest.raises(ValueError, match="escapes root directory"):
            loader.load("fr", "main")

    def test_describe_path(self) -> None:
        """describe_path() shows the file a load would read."""
        loader = PathCatalogLoader("locales/{locale}")

        assert loader.describe_path("fr_FR", "navbar") == "locales/fr_FR/navbar.json"

    def test_satisfies_protocol(self) -> None:
        """PathCatalogLoader is a CatalogLoader."""
        loader: CatalogLoader = PathCatalogLoader("locales/{locale}")

        assert callable(loader.load)


class TestLoadDomainFrom:
    """Test Locale.load_domain_from()."""

    def test_loads_for_locale_language(self, tmp_path: Path, locale: Locale) -> None:
        """The loader is asked for this locale's language."""
        _write_catalog(tmp_path, "fr_FR", "navbar", {"": {"nplurals": "0"}, "Logout": "Quitter"})
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        domain = locale.load_domain_from(loader, "navbar")

        assert domain.name == "navbar"
        assert locale.dgettext("navbar", "Logout") == "Quitter"

    def test_custom_loader(self, locale: Locale) -> None:
        """Any object with a load(locale, domain) method works."""

        class DictLoader:
            def __init__(self, catalogs: dict[str, dict[str, object]]) -> None:
                self.catalogs = catalogs
                self.calls: list[tuple[str, str]] = []

            def load(self, locale: str, domain: str) -> object:
                self.calls.append((locale, domain))
                return self.catalogs[domain]

        loader = DictLoader({"footer": {"": {"nplurals": "0"}, "About": "À propos"}})
        locale.load_domain_from(loader, "footer")

        assert loader.calls == [("fr_FR", "footer")]
        assert locale.dgettext("footer", "About") == "À propos"

    def test_loader_errors_propagate(self, tmp_path: Path, locale: Locale) -> None:
        """Loader failures reach the caller and install nothing."""
        loader = PathCatalogLoader(f"{tmp_path}/{{locale}}")

        with pytest.raises(FileNotFoundError):
            locale.load_domain_from(loader, "missing")

        assert "missing" not in locale.loaded_domains
