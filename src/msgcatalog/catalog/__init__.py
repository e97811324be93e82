"""Catalog data package.

Submodules:
    types   - PEP 695 type aliases (DomainName, MessageKey, Translation, ...)
    domain  - Domain / DomainMetadata and payload validation
    loading - CatalogLoader protocol, PathCatalogLoader

Python 3.13+.
"""

from .domain import Domain, DomainMetadata, parse_domain
from .loading import CatalogLoader, PathCatalogLoader
from .types import CatalogPayload, DomainName, LocaleCode, MessageKey, Translation

__all__ = [
    "CatalogLoader",
    "CatalogPayload",
    "Domain",
    "DomainMetadata",
    "DomainName",
    "LocaleCode",
    "MessageKey",
    "PathCatalogLoader",
    "Translation",
    "parse_domain",
]
