"""pocatalog - runtime gettext PO translation catalogs.

Discovers PO files by their Language header, loads a catalog for the
selected locale plus a fallback catalog, and resolves singular and plural
translations with the file's own Plural-Forms formula.

Public API:
    LocaleResolver - Active/fallback catalogs with thread-safe lookups
    ResolverConfig - Discovery and missing-translation settings
    PathAssetProvider - Read PO files from a directory
    MemoryAssetProvider - Serve PO files from memory
    configure, select_locale, get_text, get_quantity_text, current_locale,
    get_resolver, reset
        - Process-wide default resolver
    parse_po - Parse PO lines into a TranslationFile
    PluralFormula - Compiled Plural-Forms expression
    LocaleTag - Language plus optional region

Exceptions:
    CatalogError - Base exception class
    ParseError - Malformed PO line
    FormulaError - Invalid or failing Plural-Forms expression
    NotFoundError, CategoryNotFoundError - Store lookup misses
    CatalogLoadError - Neither active nor fallback catalog loaded
    NotInitializedError - Lookup before configuration or selection

Submodules:
    pocatalog.syntax - Plural-Forms expression compiler
    pocatalog.runtime - Translation stores, printf formatting, RWLock
    pocatalog.parsing - PO parser
    pocatalog.localization - Discovery, catalogs, resolver
    pocatalog.diagnostics - Exception hierarchy
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    CatalogError,
    CatalogLoadError,
    CategoryNotFoundError,
    FormulaError,
    NotFoundError,
    NotInitializedError,
    ParseError,
)
from .locale_utils import LocaleTag
from .localization import (
    LocaleResolver,
    MemoryAssetProvider,
    PathAssetProvider,
    ResolverConfig,
    configure,
    current_locale,
    get_quantity_text,
    get_resolver,
    get_text,
    reset,
    select_locale,
)
from .parsing import parse_po
from .syntax import PluralFormula

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("pocatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Encoding of PO files read by PathAssetProvider
__recommended_encoding__ = "UTF-8"

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "CategoryNotFoundError",
    "FormulaError",
    "LocaleResolver",
    "LocaleTag",
    "MemoryAssetProvider",
    "NotFoundError",
    "NotInitializedError",
    "ParseError",
    "PathAssetProvider",
    "PluralFormula",
    "ResolverConfig",
    "__recommended_encoding__",
    "__version__",
    "configure",
    "current_locale",
    "get_quantity_text",
    "get_resolver",
    "get_text",
    "parse_po",
    "reset",
    "select_locale",
]
