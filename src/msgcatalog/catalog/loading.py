"""Catalog loading infrastructure.

Provides the protocol for catalog loaders and a filesystem implementation
reading JSON catalogs (the shape produced by po2json-style converters)
with path-traversal protection.

Components:
    CatalogLoader - Protocol for loading raw domain payloads
    PathCatalogLoader - Disk-based JSON loader with path-traversal prevention

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from msgcatalog.diagnostics import ErrorTemplate, InvalidCatalogFormat

from .types import DomainName, LocaleCode

__all__ = ["CatalogLoader", "PathCatalogLoader"]

logger = logging.getLogger(__name__)


class CatalogLoader(Protocol):
    """Protocol for loading the raw payload of a domain for a language.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders (databases,
    HTTP endpoints, package resources).

    Example:
        >>> class DictLoader:
        ...     def __init__(self, catalogs):
        ...         self.catalogs = catalogs
        ...     def load(self, locale, domain):
        ...         return self.catalogs[locale][domain]
        ...
        >>> locale.load_domain_from(DictLoader(data), "navbar")
    """

    def load(self, locale: LocaleCode, domain: DomainName) -> object:
        """Load the payload of a domain.

        Args:
            locale: Language the catalogs are written in
            domain: Domain name

        Returns:
            Catalog payload, validated later by Locale.load_domain()

        Raises:
            FileNotFoundError: If the catalog doesn't exist for this locale
            OSError: If the catalog cannot be read
        """
        ...


@dataclass(frozen=True, slots=True)
class PathCatalogLoader:
    """File system loader for JSON catalogs.

    Reads ``<base_path with {locale} substituted>/<domain><suffix>``.

    Security:
        Locale codes and domain names containing path separators or ".."
        are rejected, and every resolved path is checked against a fixed
        root directory.

    Example:
        >>> loader = PathCatalogLoader("locales/{locale}")
        >>> payload = loader.load("fr_FR", "navbar")
        # Reads: locales/fr_FR/navbar.json

    Attributes:
        base_path: Path template with {locale} placeholder
        suffix: Catalog file extension (default: ".json")
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of base_path.
    """

    base_path: str
    suffix: str = ".json"
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate template.

        Raises:
            ValueError: If base_path does not contain {locale} placeholder
        """
        if "{locale}" not in self.base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{locale}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_component(kind: str, value: str) -> None:
        if not value:
            msg = f"{kind} cannot be empty"
            raise ValueError(msg)
        if ".." in value:
            msg = f"Path traversal sequences not allowed in {kind.lower()}: '{value}'"
            raise ValueError(msg)
        if "/" in value or "\\" in value:
            msg = f"Path separators not allowed in {kind.lower()}: '{value}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleCode, domain: DomainName) -> str:
        """Return human-readable path for diagnostics."""
        return f"{self.base_path.replace('{locale}', locale)}/{domain}{self.suffix}"

    def load(self, locale: LocaleCode, domain: DomainName) -> object:
        """Load and decode a JSON catalog from disk.

        Raises:
            ValueError: If locale or domain contains path traversal sequences
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
            InvalidCatalogFormat: If the file is not valid JSON
        """
        self._validate_component("Locale code", locale)
        self._validate_component("Domain name", domain)

        full_path = Path(self.describe_path(locale, domain))
        try:
            full_path.resolve().relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path '{full_path}' escapes root directory '{self._resolved_root}'"
            raise ValueError(msg) from None

        logger.debug("Reading catalog %s", full_path)
        source = full_path.read_text(encoding="utf-8")
        try:
            return json.loads(source)
        except json.JSONDecodeError as e:
            raise InvalidCatalogFormat(
                ErrorTemplate.invalid_catalog_format(domain, f"{full_path}: {e}"),
                domain=domain,
            ) from e
