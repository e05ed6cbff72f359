"""Tests for Catalog: per-locale file loading and lookup order.

Tests verify:
- Files under the complete language_REGION tag override bare-language files
- Lookup returns the first file in scan order that has the key
- Per-file failures are contained and recorded
- NoCatalogFoundError when nothing matches or nothing loads

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pocatalog.diagnostics import NoCatalogFoundError
from pocatalog.enums import CatalogState, LoadStatus, LookupStatus
from pocatalog.locale_utils import LocaleTag
from pocatalog.localization import Catalog, MemoryAssetProvider, discover_translation_files
from tests.strategies import message_keys, message_texts, render_po


def build_from(
    provider: MemoryAssetProvider, locale: str, *, strict: bool = False
) -> Catalog:
    return Catalog.build(locale, provider, discover_translation_files(provider), strict=strict)


def build(files: dict[str, str], locale: str, *, strict: bool = False) -> Catalog:
    return build_from(MemoryAssetProvider(files), locale, strict=strict)


class TestCatalogLoad:
    """Loading the files indexed for a locale."""

    def test_regional_catalog_loads_both_tags(
        self, memory_provider: MemoryAssetProvider
    ) -> None:
        catalog = Catalog("fr_CA")
        summary = catalog.load(memory_provider, discover_translation_files(memory_provider))
        assert catalog.loaded
        assert catalog.state == CatalogState.READY
        assert [f.source_path for f in catalog.files] == ["po/fr_CA/main.po", "po/fr.po"]
        assert summary.successful == 2

    def test_bare_catalog_ignores_regional_files(
        self, memory_provider: MemoryAssetProvider
    ) -> None:
        catalog = Catalog("fr")
        catalog.load(memory_provider, discover_translation_files(memory_provider))
        assert [f.source_path for f in catalog.files] == ["po/fr.po"]

    def test_regional_request_falls_back_to_language_files(
        self, memory_provider: MemoryAssetProvider
    ) -> None:
        """fr_FR has no files of its own; fr files serve it."""
        catalog = Catalog("fr_FR")
        catalog.load(memory_provider, discover_translation_files(memory_provider))
        assert [f.source_path for f in catalog.files] == ["po/fr.po"]
        assert catalog.locale == LocaleTag("fr", "FR")

    def test_no_matching_file(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = Catalog("de")
        with pytest.raises(NoCatalogFoundError) as exc_info:
            catalog.load(memory_provider, discover_translation_files(memory_provider))
        assert exc_info.value.locale == "de"
        assert catalog.state == CatalogState.FAILED
        assert not catalog.loaded

    def test_initial_state(self) -> None:
        catalog = Catalog("fr")
        assert catalog.state == CatalogState.UNSET
        assert catalog.files == ()

    def test_vanished_file_recorded(self) -> None:
        provider = MemoryAssetProvider({"po/fr.po": '"Language: fr\\n"'})
        index = {"fr": ("po/fr.po", "po/gone.po")}
        catalog = Catalog("fr")
        summary = catalog.load(provider, index)
        assert catalog.loaded
        assert summary.not_found == 1
        assert summary.get_by_locale("fr")[1].status == LoadStatus.NOT_FOUND

    def test_every_file_failing_fails_catalog(self) -> None:
        provider = MemoryAssetProvider({})
        with pytest.raises(NoCatalogFoundError):
            Catalog("fr").load(provider, {"fr": ("po/gone.po",)})

    def test_strict_parse_error_contained_to_file(self) -> None:
        files = {
            "po/fr_CA.po": '"Language: fr_CA\\n"\nbroken line\nmsgid "A"\nmsgstr "ca"',
            "po/fr.po": '"Language: fr\\n"\nmsgid "A"\nmsgstr "fr"',
        }
        catalog = build(files, "fr_CA", strict=True)
        assert [f.source_path for f in catalog.files] == ["po/fr.po"]
        errors = [r for r in catalog.load_results if r.is_error]
        assert errors[0].source_path == "po/fr_CA.po"
        assert catalog.single_for_key("A").value == "fr"

    def test_junk_recorded_in_results(self) -> None:
        files = {"po/fr.po": '"Language: fr\\n"\nbroken line\nmsgid "A"\nmsgstr "a"'}
        catalog = build(files, "fr")
        assert catalog.load_results[0].has_junk
        assert catalog.single_for_key("A").value == "a"


class TestCatalogLookup:
    """Scan order and per-file formulas."""

    def test_regional_override(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = build_from(memory_provider, "fr_CA")
        assert catalog.single_for_key("COLOR").value == "couleur (Canada)"

    def test_language_file_fills_gaps(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = build_from(memory_provider, "fr_CA")
        assert catalog.single_for_key("HELLO").value == "Bonjour"

    def test_missing_key(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = build_from(memory_provider, "fr")
        result = catalog.single_for_key("NOPE")
        assert result.status == LookupStatus.MISSING_KEY

    def test_plural_uses_file_formula(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = build_from(memory_provider, "ru")
        assert catalog.plural_for_key("FILES", 21, 21).value == "21 файл"
        assert catalog.plural_for_key("FILES", 3, 3).value == "3 файла"
        assert catalog.plural_for_key("FILES", 11, 11).value == "11 файлов"

    def test_plural_missing_category(self) -> None:
        files = {
            "po/fr.po": (
                '"Language: fr\\n"\n"Plural-Forms: nplurals=2; plural=(n > 1);\\n"\n'
                'msgid_plural "K"\nmsgstr[0] "one"'
            ),
        }
        catalog = build(files, "fr")
        assert catalog.plural_for_key("K", 5).status == LookupStatus.MISSING_CATEGORY

    def test_has_single_and_plural(self, memory_provider: MemoryAssetProvider) -> None:
        catalog = build_from(memory_provider, "fr")
        assert catalog.has_single("HELLO")
        assert not catalog.has_single("YOU TAPPED TIMES")
        assert catalog.has_plural("YOU TAPPED TIMES")

    def test_repr(self) -> None:
        assert repr(Catalog("fr")) == "Catalog(locale='fr', state=unset, files=0)"


class TestCatalogProperties:
    """Property-based override invariant."""

    @given(
        key=message_keys(),
        regional=message_texts(),
        generic=message_texts(),
        regional_first=st.booleans(),
    )
    def test_full_tag_wins_regardless_of_listing(
        self, key: str, regional: str, generic: str, regional_first: bool
    ) -> None:
        regional_lines = render_po({key: regional}, {}, language="de_AT")
        generic_lines = render_po({key: generic}, {}, language="de")
        # Listing order is alphabetical; swap names so either file may be listed first
        names = ("a.po", "b.po") if regional_first else ("b.po", "a.po")
        files = {
            f"po/{names[0]}": "\n".join(regional_lines),
            f"po/{names[1]}": "\n".join(generic_lines),
        }
        assert build(files, "de_AT").single_for_key(key).value == regional
        assert build(files, "de").single_for_key(key).value == generic

