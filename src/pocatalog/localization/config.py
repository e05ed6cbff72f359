"""Configuration for LocaleResolver.

Provides a single frozen dataclass with every tunable of the resolver so
the process-wide configure() call and direct LocaleResolver construction
take the same typed object.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from pocatalog.constants import (
    DEFAULT_ASSET_ROOT,
    DEFAULT_FALLBACK_LOCALE,
    DEFAULT_FILE_SUFFIX,
    DEFAULT_MAX_WORKERS,
)

__all__ = ["ResolverConfig"]


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for LocaleResolver.

    All fields have usable defaults; ``ResolverConfig()`` looks for ``*.po``
    files under ``po/`` and falls back to en_US.

    Attributes:
        root: Folder (relative to the asset provider) searched for PO files.
        suffix: File suffix that marks a translation file.
        fallback_locale: Fallback used when select_locale() is not given one.
        send_key_if_not_found: Default policy for missing translations:
            True returns the key itself, False returns an empty string.
        strict: Abort a file's load on its first malformed line instead of
            skipping the line.
        max_workers: Threads used to load the active and fallback catalogs.

    Example:
        >>> config = ResolverConfig(root="assets/po", fallback_locale="fr")
        >>> config.suffix
        '.po'
    """

    root: str = DEFAULT_ASSET_ROOT
    suffix: str = DEFAULT_FILE_SUFFIX
    fallback_locale: str = DEFAULT_FALLBACK_LOCALE
    send_key_if_not_found: bool = False
    strict: bool = False
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If suffix or fallback_locale is empty, or
                max_workers is not positive.
        """
        if not self.suffix:
            msg = "suffix cannot be empty"
            raise ValueError(msg)
        if not self.fallback_locale:
            msg = "fallback_locale cannot be empty"
            raise ValueError(msg)
        if self.max_workers <= 0:
            msg = "max_workers must be positive"
            raise ValueError(msg)
