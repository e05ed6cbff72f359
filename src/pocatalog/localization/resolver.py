"""Locale selection and text lookup with a fallback catalog.

LocaleResolver keeps two catalogs: the active one for the selected locale
and a fallback one. A lookup consults the active catalog, then the
fallback, then applies the missing-translation policy (the key itself or
an empty string).

Key architectural decisions:
- Protocol-based AssetProvider (dependency inversion)
- Discovery index cached across selections; rescan=True rebuilds it
- Both catalogs load in parallel; either one succeeding is enough
- One immutable snapshot (active, fallback, policy, summary) replaced
  under the write side of an RWLock; lookups hold the read side, so a
  reader sees the whole previous selection or the whole new one

Concurrency:
    Overlapping select_locale() calls are not serialized against each
    other; the last swap wins. Callers that change locale from several
    threads must serialize those calls themselves.

A process-wide default resolver is available through configure() and the
module-level select_locale(), get_text(), get_quantity_text() and
current_locale() functions.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from pocatalog.diagnostics import CatalogError, CatalogLoadError, NotInitializedError
from pocatalog.locale_utils import LocaleLike, LocaleTag, get_system_locale
from pocatalog.localization.catalog import Catalog
from pocatalog.localization.config import ResolverConfig
from pocatalog.localization.loading import (
    AssetProvider,
    FallbackInfo,
    LoadSummary,
    MissingTranslation,
    discover_translation_files,
)
from pocatalog.localization.types import LanguageIndex, MessageKey
from pocatalog.runtime.rwlock import RWLock
from pocatalog.runtime.stores import LookupResult

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resolver
    "LocaleResolver",
    # Process-wide default resolver
    "configure",
    "get_resolver",
    "reset",
    "select_locale",
    "get_text",
    "get_quantity_text",
    "current_locale",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Snapshot:
    """Everything a lookup reads, replaced as one unit."""

    active: Catalog
    fallback: Catalog
    send_key_if_not_found: bool
    summary: LoadSummary


class LocaleResolver:
    """Active and fallback catalogs behind a readers-writer lock.

    Example:
        >>> provider = PathAssetProvider("assets")
        >>> resolver = LocaleResolver(provider, ResolverConfig(fallback_locale="en"))
        >>> summary = resolver.select_locale("fr_FR")
        >>> resolver.get_text("HELLO")
        'Bonjour'
        >>> resolver.get_quantity_text("YOU TAPPED TIMES", 3, 3)
        'Vous avez tapé 3 fois'

    Thread Safety:
        Lookups may run concurrently with each other and with
        select_locale(); they never observe a half-installed selection.
    """

    __slots__ = (
        "_config",
        "_index",
        "_index_lock",
        "_lock",
        "_on_fallback",
        "_on_missing",
        "_provider",
        "_snapshot",
    )

    def __init__(
        self,
        provider: AssetProvider,
        config: ResolverConfig | None = None,
        *,
        on_missing: Callable[[MissingTranslation], None] | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Create a resolver; no catalog is loaded until select_locale().

        Args:
            provider: Source of translation files
            config: Discovery and policy settings (defaults: ResolverConfig())
            on_missing: Called when neither catalog has a key
            on_fallback: Called when a key is served by the fallback catalog
        """
        self._provider = provider
        self._config = config if config is not None else ResolverConfig()
        self._on_missing = on_missing
        self._on_fallback = on_fallback
        self._lock = RWLock()
        self._snapshot: _Snapshot | None = None
        self._index: LanguageIndex | None = None
        self._index_lock = threading.Lock()

    def __repr__(self) -> str:
        snapshot = self._snapshot
        if snapshot is None:
            return f"LocaleResolver(provider={self._provider!r}, uninitialized)"
        return (
            f"LocaleResolver(locale={str(snapshot.active.locale)!r}, "
            f"fallback={str(snapshot.fallback.locale)!r})"
        )

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        """True once a select_locale() call has installed catalogs."""
        with self._lock.read():
            return self._snapshot is not None

    def _discover(self, *, rescan: bool) -> LanguageIndex:
        with self._index_lock:
            if self._index is None or rescan:
                self._index = discover_translation_files(
                    self._provider, self._config.root, self._config.suffix
                )
                logger.debug("Discovered locales: %s", sorted(self._index))
            return self._index

    def _build_catalog(
        self, tag: LocaleTag, index: LanguageIndex
    ) -> tuple[Catalog, CatalogError | None]:
        catalog = Catalog(tag)
        try:
            catalog.load(self._provider, index, strict=self._config.strict)
        except CatalogError as e:
            return catalog, e
        return catalog, None

    def select_locale(
        self,
        locale: LocaleLike | None = None,
        fallback_locale: LocaleLike | None = None,
        send_key_if_not_found: bool | None = None,
        *,
        rescan: bool = False,
    ) -> LoadSummary:
        """Load catalogs for a locale and its fallback, then install them.

        Re-selecting the locale that is already active (same language and
        region) does nothing and returns the current summary.

        Args:
            locale: Locale to activate; None uses the system locale
            fallback_locale: Fallback locale; None uses config.fallback_locale
            send_key_if_not_found: Missing-translation policy; None uses
                config.send_key_if_not_found
            rescan: Rebuild the discovery index before loading

        Returns:
            LoadSummary of every file load attempt of both catalogs

        Raises:
            CatalogLoadError: If neither catalog could be loaded; the
                previous selection stays installed
            ValueError: If a locale identifier is invalid
        """
        tag = LocaleTag.coerce(locale if locale is not None else get_system_locale())
        fallback_tag = LocaleTag.coerce(
            fallback_locale if fallback_locale is not None else self._config.fallback_locale
        )
        send_key = (
            self._config.send_key_if_not_found
            if send_key_if_not_found is None
            else send_key_if_not_found
        )

        with self._lock.read():
            current = self._snapshot
        if current is not None and current.active.loaded and current.active.locale == tag:
            logger.debug("Locale %s already active", tag)
            return current.summary

        index = self._discover(rescan=rescan)
        with ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="pocatalog-load"
        ) as executor:
            active_future = executor.submit(self._build_catalog, tag, index)
            fallback_future = executor.submit(self._build_catalog, fallback_tag, index)

        active, active_error = active_future.result()
        fallback, fallback_error = fallback_future.result()
        # Failed catalogs still report the files they attempted
        summary = LoadSummary(results=active.load_results + fallback.load_results)
        errors = tuple(e for e in (active_error, fallback_error) if e is not None)

        if not active.loaded and not fallback.loaded:
            logger.error("Cannot load catalogs for %s or fallback %s", tag, fallback_tag)
            msg = f"Cannot load translations for '{tag}' or fallback '{fallback_tag}'"
            raise CatalogLoadError(
                msg, locale=str(tag), fallback_locale=str(fallback_tag), errors=errors
            )
        if not active.loaded:
            logger.warning("Catalog %s unavailable, using fallback %s only", tag, fallback_tag)
        elif not fallback.loaded:
            logger.warning("Fallback catalog %s unavailable", fallback_tag)

        with self._lock.write():
            self._snapshot = _Snapshot(
                active=active,
                fallback=fallback,
                send_key_if_not_found=send_key,
                summary=summary,
            )
        logger.info("Selected locale %s (fallback %s): %r", tag, fallback_tag, summary)
        junk_files = [r.source_path for r in summary.get_with_junk()]
        if junk_files:
            logger.info("Skipped malformed lines in: %s", ", ".join(junk_files))
        return summary

    def _require_snapshot(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            msg = "No locale selected; call select_locale() first"
            raise NotInitializedError(msg)
        return snapshot

    def _resolve(
        self,
        key: MessageKey,
        quantity: int | None,
        lookup: Callable[[Catalog], LookupResult],
    ) -> str:
        with self._lock.read():
            snapshot = self._require_snapshot()
            primary = lookup(snapshot.active)
            secondary = None if primary.found else lookup(snapshot.fallback)

        # Callbacks run outside the lock so they may call select_locale()
        if primary.found and primary.value is not None:
            return primary.value
        if secondary is not None and secondary.found and secondary.value is not None:
            if self._on_fallback is not None:
                self._on_fallback(
                    FallbackInfo(
                        requested_locale=snapshot.active.locale,
                        resolved_locale=snapshot.fallback.locale,
                        key=key,
                    )
                )
            return secondary.value

        logger.warning(
            "Translation for %r not found in %s or fallback %s",
            key,
            snapshot.active.locale,
            snapshot.fallback.locale,
        )
        if self._on_missing is not None:
            self._on_missing(
                MissingTranslation(
                    key=key,
                    locale=snapshot.active.locale,
                    fallback_locale=snapshot.fallback.locale,
                    quantity=quantity,
                )
            )
        return key if snapshot.send_key_if_not_found else ""

    def get_text(self, key: MessageKey, *args: object) -> str:
        """Singular translation of key, formatted with args.

        Returns:
            The translation, or the key / "" when no catalog has it

        Raises:
            NotInitializedError: If no locale has been selected
            TemplateFormatError: If args do not fit the template
        """
        return self._resolve(key, None, lambda catalog: catalog.single_for_key(key, *args))

    def get_quantity_text(self, key: MessageKey, quantity: int, *args: object) -> str:
        """Plural translation of key for quantity, formatted with args.

        The quantity selects the category; it is not substituted into the
        template unless also passed in args.

        Raises:
            NotInitializedError: If no locale has been selected
            TemplateFormatError: If args do not fit the template
        """
        return self._resolve(
            key, quantity, lambda catalog: catalog.plural_for_key(key, quantity, *args)
        )

    def has_text(self, key: MessageKey) -> bool:
        """True if either catalog has key as a singular or plural entry."""
        with self._lock.read():
            snapshot = self._snapshot
            if snapshot is None:
                return False
            return any(
                catalog.has_single(key) or catalog.has_plural(key)
                for catalog in (snapshot.active, snapshot.fallback)
            )

    def current_locale(self) -> LocaleTag:
        """Active locale if its catalog loaded, else the fallback locale.

        Raises:
            NotInitializedError: If no catalog is loaded
        """
        with self._lock.read():
            snapshot = self._require_snapshot()
            if snapshot.active.loaded:
                return snapshot.active.locale
            return snapshot.fallback.locale

    def get_load_summary(self) -> LoadSummary:
        """Load results of the installed selection (empty before the first one)."""
        with self._lock.read():
            if self._snapshot is None:
                return LoadSummary()
            return self._snapshot.summary

    def reset(self) -> None:
        """Drop the installed catalogs and the cached discovery index."""
        with self._lock.write():
            self._snapshot = None
        with self._index_lock:
            self._index = None


_DEFAULT_RESOLVER: LocaleResolver | None = None
_DEFAULT_LOCK = threading.Lock()


def configure(
    provider: AssetProvider,
    config: ResolverConfig | None = None,
    *,
    on_missing: Callable[[MissingTranslation], None] | None = None,
    on_fallback: Callable[[FallbackInfo], None] | None = None,
) -> LocaleResolver:
    """Install the process-wide default resolver, replacing any previous one.

    Example:
        >>> configure(PathAssetProvider("assets"))
        >>> select_locale("fr")
        >>> get_text("HELLO")
        'Bonjour'
    """
    global _DEFAULT_RESOLVER  # noqa: PLW0603
    resolver = LocaleResolver(provider, config, on_missing=on_missing, on_fallback=on_fallback)
    with _DEFAULT_LOCK:
        _DEFAULT_RESOLVER = resolver
    return resolver


def get_resolver() -> LocaleResolver:
    """The default resolver.

    Raises:
        NotInitializedError: If configure() has not been called
    """
    with _DEFAULT_LOCK:
        resolver = _DEFAULT_RESOLVER
    if resolver is None:
        msg = "pocatalog is not configured; call configure() first"
        raise NotInitializedError(msg)
    return resolver


def reset() -> None:
    """Remove the default resolver."""
    global _DEFAULT_RESOLVER  # noqa: PLW0603
    with _DEFAULT_LOCK:
        _DEFAULT_RESOLVER = None


def select_locale(
    locale: LocaleLike | None = None,
    fallback_locale: LocaleLike | None = None,
    send_key_if_not_found: bool | None = None,
    *,
    rescan: bool = False,
) -> LoadSummary:
    """LocaleResolver.select_locale() on the default resolver."""
    return get_resolver().select_locale(
        locale, fallback_locale, send_key_if_not_found, rescan=rescan
    )


def get_text(key: MessageKey, *args: object) -> str:
    """LocaleResolver.get_text() on the default resolver."""
    return get_resolver().get_text(key, *args)


def get_quantity_text(key: MessageKey, quantity: int, *args: object) -> str:
    """LocaleResolver.get_quantity_text() on the default resolver."""
    return get_resolver().get_quantity_text(key, quantity, *args)


def current_locale() -> LocaleTag:
    """LocaleResolver.current_locale() on the default resolver."""
    return get_resolver().current_locale()
