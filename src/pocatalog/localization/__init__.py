"""Locale selection package: discovery, catalogs, and the resolver.

Submodules:
    types    - PEP 695 type aliases (MessageKey, AssetPath, LanguageIndex)
    config   - ResolverConfig
    loading  - AssetProvider protocol, PathAssetProvider, MemoryAssetProvider,
               discover_translation_files, FileLoadResult, LoadSummary,
               FallbackInfo, MissingTranslation
    catalog  - Catalog (files for one locale, regional first)
    resolver - LocaleResolver and the process-wide default resolver

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from pocatalog.enums import CatalogState, LoadStatus
from pocatalog.localization.catalog import Catalog
from pocatalog.localization.config import ResolverConfig
from pocatalog.localization.loading import (
    AssetProvider,
    FallbackInfo,
    FileLoadResult,
    LoadSummary,
    MemoryAssetProvider,
    MissingTranslation,
    PathAssetProvider,
    discover_translation_files,
    list_translation_files,
)
from pocatalog.localization.resolver import (
    LocaleResolver,
    configure,
    current_locale,
    get_quantity_text,
    get_resolver,
    get_text,
    reset,
    select_locale,
)
from pocatalog.localization.types import AssetPath, LanguageIndex, MessageKey

__all__ = [
    # Resolver
    "LocaleResolver",
    "ResolverConfig",
    "Catalog",
    "CatalogState",
    # Process-wide default resolver
    "configure",
    "get_resolver",
    "reset",
    "select_locale",
    "get_text",
    "get_quantity_text",
    "current_locale",
    # Provider protocol and implementations
    "AssetProvider",
    "PathAssetProvider",
    "MemoryAssetProvider",
    "discover_translation_files",
    "list_translation_files",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "FileLoadResult",
    # Lookup observability
    "FallbackInfo",
    "MissingTranslation",
    # Type aliases for user code type annotations
    "AssetPath",
    "LanguageIndex",
    "MessageKey",
]
