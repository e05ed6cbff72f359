"""Locale utilities: LocaleTag and BCP-47 to POSIX conversion.

Centralizes locale format normalization used throughout the codebase.
Discovery indexes files under the normalized tag text, and catalogs look
files up by the same text, so every locale identifier entering the system
passes through LocaleTag.parse() exactly once.

Python 3.13+. Depends on Babel for locale identifier parsing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel.core import parse_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "LocaleLike",
    "LocaleTag",
    "get_system_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.strip().replace("-", "_")


@dataclass(frozen=True, slots=True)
class LocaleTag:
    """Language subtag plus optional region subtag.

    Tags compare structurally. A tag with a region is strictly more specific
    than the same language without one; discovery files declared under the
    full tag override files declared under the bare language.

    Example:
        >>> tag = LocaleTag.parse("fr-FR")
        >>> tag.language, tag.region
        ('fr', 'FR')
        >>> str(tag)
        'fr_FR'
        >>> str(tag.language_only)
        'fr'
        >>> tag.is_more_specific_than(tag.language_only)
        True

    Attributes:
        language: Lowercase language subtag (e.g. 'fr')
        region: Uppercase region subtag (e.g. 'FR'), or None
    """

    language: str
    region: str | None = None

    def __post_init__(self) -> None:
        if not self.language:
            msg = "Locale language subtag cannot be empty"
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.region:
            return f"{self.language}_{self.region}"
        return self.language

    @classmethod
    def parse(cls, identifier: str) -> LocaleTag:
        """Parse a locale identifier such as 'fr', 'fr_FR', 'fr-FR' or 'fr_FR.UTF-8'.

        Script and variant subtags are accepted and dropped; only language
        and region take part in catalog selection.

        Raises:
            ValueError: If the identifier is not a valid locale identifier
        """
        normalized = normalize_locale(identifier)
        if not normalized:
            msg = "Locale identifier cannot be empty"
            raise ValueError(msg)
        parts = parse_locale(normalized)
        return cls(language=parts[0], region=parts[1] or None)

    @classmethod
    def from_babel(cls, locale: Locale) -> LocaleTag:
        """Build a tag from a babel.Locale instance."""
        return cls(language=locale.language, region=locale.territory or None)

    @classmethod
    def coerce(cls, value: LocaleLike) -> LocaleTag:
        """Accept a LocaleTag, a babel.Locale or identifier text."""
        if isinstance(value, LocaleTag):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        # babel.Locale is duck-typed to avoid importing CLDR data eagerly
        language = getattr(value, "language", None)
        if isinstance(language, str):
            return cls(language=language, region=getattr(value, "territory", None) or None)
        msg = f"Cannot interpret {type(value).__name__} as a locale"
        raise TypeError(msg)

    @property
    def language_only(self) -> LocaleTag:
        """The same tag without its region."""
        if self.region is None:
            return self
        return LocaleTag(self.language)

    @property
    def has_region(self) -> bool:
        return self.region is not None

    def is_more_specific_than(self, other: LocaleTag) -> bool:
        """True if self carries a region for the language other names without one."""
        return (
            self.language == other.language
            and self.region is not None
            and other.region is None
        )


type LocaleLike = LocaleTag | Locale | str
"""Anything the public API accepts as a locale."""


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and strips encoding suffixes.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return normalize_locale(value.split(".")[0])

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en_US"
