"""Translation stores for one parsed PO file.

SingleStore maps message keys to one template; PluralStore maps keys to
templates per plural category and owns the file's PluralFormula. A
TranslationFile pairs both with the file's header fields and any junk
lines the parser skipped.

Stores are filled by the PO parser and treated as read-only afterwards:
a reload builds new stores instead of patching existing ones.

Lookups come in two flavours:
    get()    - raises NotFoundError / CategoryNotFoundError
    lookup() - returns a LookupResult tagged with LookupStatus

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pocatalog.diagnostics import CategoryNotFoundError, NotFoundError, ParseError
from pocatalog.enums import LookupStatus
from pocatalog.runtime.formatting import format_template
from pocatalog.syntax.plural_forms import PluralFormula

__all__ = [
    "JunkLine",
    "LookupResult",
    "PluralStore",
    "SingleStore",
    "TranslationFile",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LookupResult:
    """Tagged outcome of a lookup.

    Attributes:
        status: FOUND, MISSING_KEY or MISSING_CATEGORY
        key: The key that was looked up
        value: Formatted text when status is FOUND, else None
        category: Selected plural category (plural lookups only)
    """

    status: LookupStatus
    key: str
    value: str | None = None
    category: int | None = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @classmethod
    def hit(cls, key: str, value: str, category: int | None = None) -> LookupResult:
        return cls(LookupStatus.FOUND, key, value, category)

    @classmethod
    def missing(cls, key: str) -> LookupResult:
        return cls(LookupStatus.MISSING_KEY, key)


class SingleStore:
    """Message key to single format template.

    Setting an existing key overwrites it (last write wins).
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def __repr__(self) -> str:
        return f"SingleStore({len(self._values)} keys)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SingleStore):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def set(self, key: str, value: str) -> None:
        """Register a template, replacing any previous one for the key."""
        if key in self._values:
            logger.debug("Overriding value for %r with %r", key, value)
        self._values[key] = value

    def append(self, key: str, chunk: str) -> None:
        """Extend a registered template with a continuation chunk."""
        self._values[key] = self._values.get(key, "") + chunk

    def has(self, key: str) -> bool:
        return key in self._values

    def template(self, key: str) -> str:
        """Raw template for a key.

        Raises:
            NotFoundError: If the key is absent
        """
        try:
            return self._values[key]
        except KeyError:
            msg = f"Cannot find string with key {key!r}"
            raise NotFoundError(msg, key=key) from None

    def get(self, key: str, *args: object) -> str:
        """Formatted template for a key.

        Raises:
            NotFoundError: If the key is absent
            TemplateFormatError: If args do not fit the template
        """
        return format_template(self.template(key), args)

    def lookup(self, key: str, *args: object) -> LookupResult:
        if key not in self._values:
            return LookupResult.missing(key)
        return LookupResult.hit(key, format_template(self._values[key], args))

    def as_mapping(self) -> Mapping[str, str]:
        """Read-only view of all templates."""
        return MappingProxyType(self._values)


class PluralStore:
    """Message key to templates per plural category.

    Example:
        msgid_plural "QUANTITY"
        msgstr[0] "no items"
        msgstr[1] "one item"
        msgstr[2] "items"

    registers {"QUANTITY": {0: "no items", 1: "one item", 2: "items"}}.
    The category for a quantity comes from the store's formula.
    """

    __slots__ = ("_plurals", "formula")

    def __init__(
        self,
        formula: PluralFormula | None = None,
        plurals: Mapping[str, Mapping[int, str]] | None = None,
    ) -> None:
        self.formula: PluralFormula = formula if formula is not None else PluralFormula()
        self._plurals: dict[str, dict[int, str]] = {
            key: dict(values) for key, values in (plurals or {}).items()
        }

    def __repr__(self) -> str:
        return f"PluralStore({len(self._plurals)} keys, formula={self.formula.expression!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PluralStore):
            return NotImplemented
        return self.formula == other.formula and self._plurals == other._plurals

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._plurals)

    def __iter__(self) -> Iterator[str]:
        return iter(self._plurals)

    def __contains__(self, key: object) -> bool:
        return key in self._plurals

    def add(self, key: str, category: int, value: str) -> None:
        """Register the template for one category of a key."""
        self._plurals.setdefault(key, {})[category] = value

    def append(self, key: str, category: int, chunk: str) -> None:
        """Extend a category template with a continuation chunk."""
        values = self._plurals.setdefault(key, {})
        values[category] = values.get(category, "") + chunk

    def has(self, key: str) -> bool:
        return key in self._plurals

    def categories(self, key: str) -> Mapping[int, str]:
        """Read-only view of the category templates for a key.

        Raises:
            NotFoundError: If the key is absent
        """
        try:
            return MappingProxyType(self._plurals[key])
        except KeyError:
            msg = f"Cannot find plural with key {key!r}"
            raise NotFoundError(msg, key=key) from None

    def get(self, key: str, quantity: int, *args: object) -> str:
        """Formatted template for the category the formula selects.

        Raises:
            NotFoundError: If the key is absent
            CategoryNotFoundError: If the selected category has no template
            TemplateFormatError: If args do not fit the template
        """
        values = self.categories(key)
        category = self.formula.evaluate(quantity)
        if category not in values:
            msg = f"Cannot find plural category {category} for key {key!r} (quantity: {quantity})"
            raise CategoryNotFoundError(msg, key=key, category=category, quantity=quantity)
        return format_template(values[category], args)

    def lookup(self, key: str, quantity: int, *args: object) -> LookupResult:
        values = self._plurals.get(key)
        if values is None:
            return LookupResult.missing(key)
        category = self.formula.evaluate(quantity)
        template = values.get(category)
        if template is None:
            logger.warning(
                "Plural category %d missing for key %r (quantity: %d)", category, key, quantity
            )
            return LookupResult(LookupStatus.MISSING_CATEGORY, key, category=category)
        return LookupResult.hit(key, format_template(template, args), category)


@dataclass(frozen=True, slots=True)
class JunkLine:
    """A line the parser could not interpret.

    Attributes:
        line_number: 1-based line number
        content: The raw line
        error: The ParseError describing the problem
    """

    line_number: int
    content: str
    error: ParseError = field(compare=False)


@dataclass(frozen=True, slots=True)
class TranslationFile:
    """Result of parsing one PO source.

    Attributes:
        singles: Singular translations
        plurals: Plural translations and the file's formula
        source_path: Path the lines came from, if known
        headers: Header fields from the PO header entry (e.g. 'Language')
        junk: Lines skipped as malformed
    """

    singles: SingleStore
    plurals: PluralStore
    source_path: str | None = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    junk: tuple[JunkLine, ...] = ()

    @property
    def language(self) -> str | None:
        """Value of the 'Language' header, if present."""
        return self.headers.get("Language")

    @property
    def has_junk(self) -> bool:
        return len(self.junk) > 0
