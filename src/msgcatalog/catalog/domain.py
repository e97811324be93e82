"""Domain model and catalog payload validation.

A domain is one named message catalog. parse_domain() turns a raw payload
(typically po2json output) into an immutable Domain, or raises a
DomainLoadError subclass naming what the catalog author has to fix. Nothing
is installed anywhere here; the caller installs the returned Domain, which
keeps loading all-or-nothing.

Python 3.13+.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from msgcatalog.constants import (
    HEADER_DOMAIN,
    HEADER_LANGUAGE,
    HEADER_NPLURALS,
    HEADER_PLURAL,
    METADATA_KEY,
)
from msgcatalog.diagnostics import (
    ErrorTemplate,
    InvalidCatalogFormat,
    MissingOrInvalidPluralCount,
    MissingPluralExpression,
    PluralArityMismatch,
    PluralVariantCountMismatch,
)
from msgcatalog.plural import count_plural_clauses, evaluate_plural

from .types import DomainName, MessageKey, Translation

__all__ = ["Domain", "DomainMetadata", "parse_domain"]

_EMPTY_HEADERS: Mapping[str, object] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class DomainMetadata:
    """Parsed '' metadata block of a domain.

    Attributes:
        plural_count: 'nplurals' as an integer (None when absent or, with
            custom plural forms disabled, unparseable)
        plural_expression: Trimmed 'plural' rule (None when absent)
        headers: Read-only copy of the raw block, with 'nplurals' and
            'plural' trimmed; None when the payload had no metadata block
    """

    plural_count: int | None = None
    plural_expression: str | None = None
    headers: Mapping[str, object] | None = None

    @property
    def domain_label(self) -> str | None:
        """The optional 'domain' header."""
        value = (self.headers or _EMPTY_HEADERS).get(HEADER_DOMAIN)
        return value if isinstance(value, str) else None

    @property
    def language(self) -> str | None:
        """The optional 'language' header."""
        value = (self.headers or _EMPTY_HEADERS).get(HEADER_LANGUAGE)
        return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class Domain:
    """Immutable, validated message catalog.

    Attributes:
        name: Domain name the catalog was loaded under
        metadata: Parsed metadata block
        entries: Message key -> translation (read-only). Never contains the
            '' metadata key. None values mean "no translation yet".
    """

    name: DomainName
    metadata: DomainMetadata
    entries: Mapping[MessageKey, Translation | None]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: MessageKey) -> Translation | None:
        """Return the stored translation for key, or None."""
        return self.entries.get(key)

    def to_payload(self) -> dict[str, object]:
        """Rebuild the catalog payload this domain was loaded from.

        Plural variants come back as lists; 'nplurals' and 'plural' come
        back trimmed. Everything else is as supplied.
        """
        payload: dict[str, object] = {}
        if self.metadata.headers is not None:
            payload[METADATA_KEY] = dict(self.metadata.headers)
        for key, value in self.entries.items():
            payload[key] = list(value) if isinstance(value, tuple) else value
        return payload


def _coerce_plural_count(value: object) -> int | None:
    """Read 'nplurals' as a non-negative integer, None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text and text.isascii() and text.isdigit():
            return int(text)
    return None


def _normalize_value(domain: str, key: str, value: object) -> Translation | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list | tuple):
        if not all(isinstance(variant, str) for variant in value):
            raise InvalidCatalogFormat(
                ErrorTemplate.invalid_catalog_format(
                    domain, f"plural variants of {key!r} must all be strings"
                ),
                domain=domain,
            )
        return tuple(value)
    raise InvalidCatalogFormat(
        ErrorTemplate.invalid_catalog_format(
            domain, f"value of {key!r} is {type(value).__name__}, expected str or list of str"
        ),
        domain=domain,
    )


def _iter_items(domain: str, data: object) -> list[tuple[object, object]]:
    if isinstance(data, Mapping):
        return list(data.items())
    if isinstance(data, Sequence) and not isinstance(data, str | bytes):
        items: list[tuple[object, object]] = []
        for item in data:
            if (
                not isinstance(item, Sequence)
                or isinstance(item, str | bytes)
                or len(item) != 2  # noqa: PLR2004 - (key, value) pair
            ):
                raise InvalidCatalogFormat(
                    ErrorTemplate.invalid_catalog_format(
                        domain, "sequence payloads must hold (key, value) pairs"
                    ),
                    domain=domain,
                )
            items.append((item[0], item[1]))
        return items
    raise InvalidCatalogFormat(
        ErrorTemplate.invalid_catalog_format(
            domain, f"expected a mapping, got {type(data).__name__}"
        ),
        domain=domain,
    )


def _split_payload(
    domain: str, data: object
) -> tuple[dict[str, object] | None, dict[MessageKey, Translation | None]]:
    """Structural pass: separate the metadata block from the entries."""
    headers: dict[str, object] | None = None
    entries: dict[MessageKey, Translation | None] = {}

    for key, value in _iter_items(domain, data):
        if not isinstance(key, str):
            raise InvalidCatalogFormat(
                ErrorTemplate.invalid_catalog_format(
                    domain, f"message keys must be strings, got {type(key).__name__}"
                ),
                domain=domain,
            )
        if key == METADATA_KEY:
            if value is None:
                continue
            if not isinstance(value, Mapping):
                raise InvalidCatalogFormat(
                    ErrorTemplate.invalid_catalog_format(
                        domain, "the '' metadata block must be a mapping"
                    ),
                    domain=domain,
                )
            headers = dict(value)
            continue
        entries[key] = _normalize_value(domain, key, value)

    return headers, entries


def parse_domain(
    name: DomainName,
    data: object,
    *,
    use_custom_plural_forms: bool,
) -> Domain:
    """Validate a catalog payload and build a Domain.

    With custom plural forms enabled, the metadata block must declare
    'nplurals' and, when it is at least 1, a 'plural' rule whose
    '?'-separated clause count equals 'nplurals'; every plural entry must
    carry exactly 'nplurals' variants, and the rule must evaluate for n=1.
    With custom plural forms disabled, metadata is read leniently and
    never rejected.

    Args:
        name: Domain name
        data: Catalog payload (mapping, or sequence of (key, value) pairs)
        use_custom_plural_forms: Whether the catalog's own plural rule is used

    Returns:
        Validated Domain

    Raises:
        InvalidCatalogFormat: Payload shape is wrong
        MissingOrInvalidPluralCount: 'nplurals' missing/blank/non-numeric/negative
        MissingPluralExpression: 'nplurals' >= 1 without a 'plural' rule
        PluralArityMismatch: Clause count of 'plural' differs from 'nplurals'
        PluralVariantCountMismatch: A plural entry has the wrong variant count
        InvalidPluralSyntax: 'plural' has bad characters or does not evaluate
    """
    headers, entries = _split_payload(name, data)
    raw = headers or {}

    raw_count = raw.get(HEADER_NPLURALS)
    raw_expression = raw.get(HEADER_PLURAL)
    plural_count = _coerce_plural_count(raw_count)
    plural_expression = raw_expression.strip() if isinstance(raw_expression, str) else None

    if use_custom_plural_forms:
        if plural_count is None:
            raise MissingOrInvalidPluralCount(
                ErrorTemplate.invalid_plural_count(name, raw_count), domain=name
            )

        if plural_count >= 1:
            if not plural_expression:
                raise MissingPluralExpression(
                    ErrorTemplate.missing_plural_expression(name, plural_count), domain=name
                )

            clause_count = count_plural_clauses(plural_expression)
            if clause_count != plural_count:
                raise PluralArityMismatch(
                    ErrorTemplate.plural_arity_mismatch(
                        name, plural_count, clause_count, plural_expression
                    ),
                    domain=name,
                )

            for key, value in entries.items():
                if isinstance(value, tuple) and len(value) != plural_count:
                    raise PluralVariantCountMismatch(
                        ErrorTemplate.plural_variant_count_mismatch(
                            name, key, len(value), plural_count
                        ),
                        domain=name,
                        key=key,
                        variant_count=len(value),
                        plural_count=plural_count,
                    )

            # Trial run: a rule that parses but cannot evaluate is rejected now.
            evaluate_plural(plural_expression, 1, domain=name)

    if headers is not None:
        if isinstance(raw_count, str):
            headers[HEADER_NPLURALS] = raw_count.strip()
        if plural_expression is not None:
            headers[HEADER_PLURAL] = plural_expression

    return Domain(
        name=name,
        metadata=DomainMetadata(
            plural_count=plural_count,
            plural_expression=plural_expression,
            headers=MappingProxyType(headers) if headers is not None else None,
        ),
        entries=MappingProxyType(entries),
    )
