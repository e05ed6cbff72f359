"""Per-locale catalog of parsed translation files.

A Catalog owns every TranslationFile declared for one locale. Files
declared under the complete language_REGION tag are scanned before files
declared under the bare language tag, so regional files override the
generic language files key by key.

Catalogs are built once and never patched: a locale switch builds fresh
catalogs and replaces the old ones wholesale.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pocatalog.diagnostics import NoCatalogFoundError, ParseError
from pocatalog.enums import CatalogState, LoadStatus
from pocatalog.locale_utils import LocaleLike, LocaleTag
from pocatalog.localization.loading import FileLoadResult, LoadSummary
from pocatalog.parsing import POParser
from pocatalog.runtime.stores import LookupResult

if TYPE_CHECKING:
    from pocatalog.localization.loading import AssetProvider
    from pocatalog.localization.types import AssetPath, LanguageIndex, MessageKey
    from pocatalog.runtime.stores import TranslationFile

__all__ = ["Catalog"]

logger = logging.getLogger(__name__)


class Catalog:
    """Translation files for one locale, in lookup order.

    Example:
        >>> provider = MemoryAssetProvider({
        ...     "po/fr.po": '"Language: fr\\n"\\nmsgid "hi"\\nmsgstr "salut"',
        ... })
        >>> index = discover_translation_files(provider)
        >>> catalog = Catalog("fr_FR")
        >>> summary = catalog.load(provider, index)
        >>> catalog.single_for_key("hi").value
        'salut'

    Attributes:
        locale: The catalog's locale tag
        state: Lifecycle state (UNSET, LOADING, READY, FAILED)
    """

    __slots__ = ("_files", "_load_results", "_locale", "_state")

    def __init__(self, locale: LocaleLike) -> None:
        self._locale: LocaleTag = LocaleTag.coerce(locale)
        self._state: CatalogState = CatalogState.UNSET
        self._files: tuple[TranslationFile, ...] = ()
        self._load_results: tuple[FileLoadResult, ...] = ()

    def __repr__(self) -> str:
        return f"Catalog(locale={str(self._locale)!r}, state={self._state}, files={len(self._files)})"

    @classmethod
    def build(
        cls,
        locale: LocaleLike,
        provider: AssetProvider,
        index: LanguageIndex,
        *,
        strict: bool = False,
    ) -> Catalog:
        """Create and load a catalog in one step.

        Raises:
            NoCatalogFoundError: If no file for the locale could be loaded
        """
        catalog = cls(locale)
        catalog.load(provider, index, strict=strict)
        return catalog

    @property
    def locale(self) -> LocaleTag:
        return self._locale

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def loaded(self) -> bool:
        """True once load() has installed at least one file."""
        return self._state == CatalogState.READY

    @property
    def files(self) -> tuple[TranslationFile, ...]:
        """Parsed files in lookup order (regional first)."""
        return self._files

    @property
    def load_results(self) -> tuple[FileLoadResult, ...]:
        return self._load_results

    def candidate_paths(self, index: LanguageIndex) -> tuple[AssetPath, ...]:
        """Indexed paths for this locale: complete tag first, then bare language."""
        paths: list[AssetPath] = []
        if self._locale.has_region:
            paths.extend(index.get(str(self._locale), ()))
        paths.extend(index.get(self._locale.language, ()))
        # dict.fromkeys() drops duplicates while keeping the first position
        return tuple(dict.fromkeys(paths))

    def load(
        self,
        provider: AssetProvider,
        index: LanguageIndex,
        *,
        strict: bool = False,
    ) -> LoadSummary:
        """Parse every file indexed for this locale.

        A file that cannot be read or parsed is recorded in the summary and
        skipped; the remaining files still load.

        Args:
            provider: Asset provider the index was built from
            index: Discovery index (tag text -> paths)
            strict: Abort a file on its first malformed line

        Returns:
            LoadSummary with one FileLoadResult per candidate file

        Raises:
            NoCatalogFoundError: If no file matches the locale, or none loads
        """
        self._state = CatalogState.LOADING
        locale_text = str(self._locale)
        paths = self.candidate_paths(index)
        if not paths:
            self._state = CatalogState.FAILED
            logger.error("No translation file declares locale %s", locale_text)
            msg = f"No translation file found for locale '{locale_text}'"
            raise NoCatalogFoundError(msg, locale=locale_text)

        parser = POParser(strict=strict)
        files: list[TranslationFile] = []
        results: list[FileLoadResult] = []
        for path in paths:
            result, parsed = self._load_file(provider, parser, path)
            results.append(result)
            if parsed is not None:
                files.append(parsed)

        self._load_results = tuple(results)
        summary = LoadSummary(results=self._load_results)
        if not files:
            self._state = CatalogState.FAILED
            logger.error("Every translation file for %s failed to load: %r", locale_text, summary)
            msg = f"No translation file could be loaded for locale '{locale_text}'"
            raise NoCatalogFoundError(msg, locale=locale_text)

        self._files = tuple(files)
        self._state = CatalogState.READY
        logger.info("Loaded catalog %s: %r", locale_text, summary)
        return summary

    def _load_file(
        self, provider: AssetProvider, parser: POParser, path: AssetPath
    ) -> tuple[FileLoadResult, TranslationFile | None]:
        locale_text = str(self._locale)
        try:
            parsed = parser.parse(provider.read_lines(path), source_path=path)
        except FileNotFoundError as e:
            logger.warning("Translation file vanished: %s", path)
            return FileLoadResult(locale_text, path, LoadStatus.NOT_FOUND, error=e), None
        except (OSError, UnicodeDecodeError, ValueError, ParseError) as e:
            logger.warning("Cannot load %s: %s", path, e)
            return FileLoadResult(locale_text, path, LoadStatus.ERROR, error=e), None
        return (
            FileLoadResult(locale_text, path, LoadStatus.SUCCESS, junk_entries=parsed.junk),
            parsed,
        )

    def single_for_key(self, key: MessageKey, *args: object) -> LookupResult:
        """Formatted singular text from the first file that has the key."""
        for po_file in self._files:
            if po_file.singles.has(key):
                return po_file.singles.lookup(key, *args)
        return LookupResult.missing(key)

    def plural_for_key(self, key: MessageKey, quantity: int, *args: object) -> LookupResult:
        """Formatted plural text from the first file that has the key.

        Each file evaluates the quantity with its own formula. A file that
        has the key but not the selected category ends the scan with
        MISSING_CATEGORY.
        """
        for po_file in self._files:
            if po_file.plurals.has(key):
                return po_file.plurals.lookup(key, quantity, *args)
        return LookupResult.missing(key)

    def has_single(self, key: MessageKey) -> bool:
        return any(po_file.singles.has(key) for po_file in self._files)

    def has_plural(self, key: MessageKey) -> bool:
        return any(po_file.plurals.has(key) for po_file in self._files)
