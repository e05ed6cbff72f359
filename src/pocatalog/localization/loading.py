"""Asset access and translation file discovery.

Provides the protocol through which the engine reads translation files,
two implementations of it, the discovery pass that indexes files by their
declared language, and result/summary records for load attempts.

Components:
    AssetProvider - Protocol for listing and reading assets (structural typing)
    PathAssetProvider - Disk-based provider with path-traversal prevention
    MemoryAssetProvider - In-memory provider (embedded catalogs, tests)
    discover_translation_files - Index files by their "Language:" header
    FileLoadResult - Immutable result of a single file load attempt
    LoadSummary - Immutable aggregate of all load results of a selection
    FallbackInfo - Record of a lookup served by the fallback catalog
    MissingTranslation - Record of a lookup no catalog could serve

Python 3.13+.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pocatalog.constants import DEFAULT_ASSET_ROOT, DEFAULT_FILE_SUFFIX, HEADER_LANGUAGE
from pocatalog.enums import LoadStatus
from pocatalog.locale_utils import LocaleTag
from pocatalog.localization.types import AssetPath, MessageKey
from pocatalog.parsing import parse_language_header

if TYPE_CHECKING:
    from pocatalog.runtime.stores import JunkLine

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "AssetProvider",
    # Concrete providers
    "PathAssetProvider",
    "MemoryAssetProvider",
    # Discovery
    "discover_translation_files",
    "list_translation_files",
    # Load result types
    "FileLoadResult",
    "LoadSummary",
    # Lookup observability
    "FallbackInfo",
    "MissingTranslation",
]

logger = logging.getLogger(__name__)


class AssetProvider(Protocol):
    """Protocol for reading translation assets.

    This is a Protocol (structural typing) rather than ABC so any object
    with these two methods works, e.g. an adapter over a package's bundled
    resources or an application's asset manager.

    Example:
        >>> class DictProvider:
        ...     def __init__(self, files): self.files = files
        ...     def list_entries(self, path): return []
        ...     def read_lines(self, path): return iter(self.files[path].splitlines())
    """

    def list_entries(self, path: AssetPath) -> Sequence[str]:
        """Names of the children of a folder.

        An empty result means the path is a file (or does not exist).

        Args:
            path: '/'-separated folder path

        Returns:
            Child names relative to path
        """
        ...

    def read_lines(self, path: AssetPath) -> Iterable[str]:
        """Lazily yield the UTF-8 decoded lines of a file, without trailing newline.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        ...


@dataclass(frozen=True, slots=True)
class PathAssetProvider:
    """File system asset provider rooted at a directory.

    Security:
        Asset paths must be relative and must not contain '..'. Every
        resolved path is verified to stay inside root_dir.

    Example:
        >>> provider = PathAssetProvider("assets")
        >>> provider.list_entries("po")          # doctest: +SKIP
        ['de.po', 'fr']

    Attributes:
        root_dir: Directory that asset paths are relative to
    """

    root_dir: str | os.PathLike[str] = "."
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    def _resolve(self, path: AssetPath) -> Path:
        """Map an asset path to a file system path inside the root.

        Raises:
            ValueError: If the path is absolute, contains '..', or escapes the root
        """
        if Path(path).is_absolute() or path.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in asset path: '{path}'"
            raise ValueError(msg)
        if ".." in Path(path).parts:
            msg = f"Path traversal sequences not allowed in asset path: '{path}'"
            raise ValueError(msg)
        full_path = (self._resolved_root / path).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path traversal detected: '{path}' escapes root directory"
            raise ValueError(msg) from None
        return full_path

    def list_entries(self, path: AssetPath) -> Sequence[str]:
        full_path = self._resolve(path)
        if not full_path.is_dir():
            return []
        return sorted(entry.name for entry in full_path.iterdir())

    def read_lines(self, path: AssetPath) -> Iterator[str]:
        full_path = self._resolve(path)
        with full_path.open(encoding="utf-8") as handle:
            for line in handle:
                yield line.rstrip("\r\n")


class MemoryAssetProvider:
    """In-memory asset provider over a path -> text mapping.

    Folders are implied by the '/'-separated keys.

    Example:
        >>> provider = MemoryAssetProvider({"po/fr.po": 'msgid "a"\\nmsgstr "b"'})
        >>> provider.list_entries("po")
        ['fr.po']
        >>> list(provider.read_lines("po/fr.po"))
        ['msgid "a"', 'msgstr "b"']
    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[AssetPath, str]) -> None:
        self._files: dict[str, str] = {path.strip("/"): text for path, text in files.items()}

    def __repr__(self) -> str:
        return f"MemoryAssetProvider({len(self._files)} files)"

    def list_entries(self, path: AssetPath) -> Sequence[str]:
        prefix = path.strip("/") + "/" if path.strip("/") else ""
        children = {
            name[len(prefix):].split("/", 1)[0]
            for name in self._files
            if name.startswith(prefix) and name != path.strip("/")
        }
        return sorted(children)

    def read_lines(self, path: AssetPath) -> Iterator[str]:
        try:
            text = self._files[path.strip("/")]
        except KeyError:
            msg = f"No such asset: '{path}'"
            raise FileNotFoundError(msg) from None
        # Only \n, \r\n and \r end a line, as in a text-mode file
        return (line.rstrip("\r\n") for line in io.StringIO(text, newline=None))


def list_translation_files(
    provider: AssetProvider,
    root: AssetPath = DEFAULT_ASSET_ROOT,
    suffix: str = DEFAULT_FILE_SUFFIX,
) -> list[AssetPath]:
    """Recursively collect every file path under root ending in suffix.

    A path whose listing is empty is treated as a file. Listing failures
    are logged and the path is skipped.
    """
    try:
        entries = provider.list_entries(root)
    except (OSError, ValueError) as e:
        logger.debug("Cannot list %s: %s", root, e)
        return []

    if not entries:
        return [root] if root.endswith(suffix) else []

    files: list[AssetPath] = []
    for entry in entries:
        child = f"{root.rstrip('/')}/{entry}" if root else entry
        files.extend(list_translation_files(provider, child, suffix))
    return files


def _read_language(provider: AssetProvider, path: AssetPath) -> str | None:
    """Scan a file until its "Language:" header line; None if there is none."""
    lines = provider.read_lines(path)
    try:
        for line in lines:
            if line.strip().startswith(HEADER_LANGUAGE):
                return parse_language_header(line.strip())
    finally:
        close = getattr(lines, "close", None)
        if close is not None:
            close()
    return None


def discover_translation_files(
    provider: AssetProvider,
    root: AssetPath = DEFAULT_ASSET_ROOT,
    suffix: str = DEFAULT_FILE_SUFFIX,
) -> dict[str, tuple[AssetPath, ...]]:
    """Index translation files by the language they declare.

    Each candidate file is read up to its "Language:" header. The tag is
    normalized through LocaleTag ('fr-FR' and 'fr_FR' index the same), so
    the index keys are 'fr' or 'fr_FR' style text. Files that cannot be
    read, have no Language header, or declare an invalid tag are logged
    and skipped. Order within a tag follows the provider's listing order.

    Returns:
        Mapping of tag text to the paths declaring it
    """
    candidates = list_translation_files(provider, root, suffix)
    logger.debug("Translation file candidates under %s: %s", root, candidates)

    index: dict[str, list[AssetPath]] = {}
    for path in candidates:
        try:
            raw_tag = _read_language(provider, path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Cannot read %s during discovery: %s", path, e)
            continue
        if not raw_tag:
            logger.warning("No Language header in %s, skipping", path)
            continue
        try:
            tag = str(LocaleTag.parse(raw_tag))
        except ValueError as e:
            logger.warning("Invalid Language %r in %s: %s", raw_tag, path, e)
            continue
        logger.debug("Found Language %s in %s", tag, path)
        index.setdefault(tag, []).append(path)

    return {tag: tuple(paths) for tag, paths in index.items()}


@dataclass(frozen=True, slots=True)
class FileLoadResult:
    """Result of loading a single translation file into a catalog.

    Attributes:
        locale: Tag text of the catalog the file was loaded for
        source_path: Asset path of the file
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR or NOT_FOUND, None otherwise
        junk_entries: Lines the parser skipped as malformed
    """

    locale: str
    source_path: AssetPath
    status: LoadStatus
    error: Exception | None = None
    junk_entries: tuple[JunkLine, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status == LoadStatus.ERROR

    @property
    def has_junk(self) -> bool:
        return len(self.junk_entries) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of file load results.

    Attributes:
        results: All individual load results (immutable tuple)

    Example:
        >>> summary = resolver.select_locale("fr_FR")   # doctest: +SKIP
        >>> for result in summary.get_errors():          # doctest: +SKIP
        ...     print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[FileLoadResult, ...] = ()

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors}, "
            f"junk={self.junk_count})"
        )

    def __add__(self, other: LoadSummary) -> LoadSummary:
        return LoadSummary(results=self.results + other.results)

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    def with_status(self, status: LoadStatus) -> tuple[FileLoadResult, ...]:
        return tuple(r for r in self.results if r.status == status)

    @property
    def successful(self) -> int:
        return len(self.with_status(LoadStatus.SUCCESS))

    @property
    def not_found(self) -> int:
        return len(self.with_status(LoadStatus.NOT_FOUND))

    @property
    def errors(self) -> int:
        return len(self.with_status(LoadStatus.ERROR))

    @property
    def junk_count(self) -> int:
        return sum(len(r.junk_entries) for r in self.results)

    def get_errors(self) -> tuple[FileLoadResult, ...]:
        return self.with_status(LoadStatus.ERROR)

    def get_by_locale(self, locale: str) -> tuple[FileLoadResult, ...]:
        return tuple(r for r in self.results if r.locale == locale)

    def get_with_junk(self) -> tuple[FileLoadResult, ...]:
        """Loaded files that had malformed lines skipped."""
        return tuple(r for r in self.results if r.has_junk)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """True if no file failed or went missing (junk lines are allowed)."""
        return self.errors == 0 and self.not_found == 0

    @property
    def all_clean(self) -> bool:
        """Stricter than all_successful: also requires zero junk lines."""
        return self.all_successful and self.junk_count == 0


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """A lookup served by the fallback catalog.

    Attributes:
        requested_locale: Locale of the active catalog
        resolved_locale: Locale of the fallback catalog that had the key
        key: The message key
    """

    requested_locale: LocaleTag
    resolved_locale: LocaleTag
    key: MessageKey


@dataclass(frozen=True, slots=True)
class MissingTranslation:
    """A lookup neither catalog could serve.

    Attributes:
        key: The message key
        locale: Locale of the active catalog
        fallback_locale: Locale of the fallback catalog
        quantity: The quantity for plural lookups, None for singular
    """

    key: MessageKey
    locale: LocaleTag
    fallback_locale: LocaleTag
    quantity: int | None = None
