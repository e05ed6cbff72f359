"""Quickstart - Loading PO catalogs and looking up translations.

Demonstrates:
1. Writing a small PO tree and discovering it by Language header
2. Regional files overriding generic language files
3. Plural lookups driven by each file's Plural-Forms formula
4. Fallback catalog and missing-translation policy
5. Process-wide default resolver

Python 3.13+.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pocatalog
from pocatalog import LocaleResolver, PathAssetProvider, ResolverConfig

FILES = {
    "po/fr.po": """\
msgid ""
msgstr ""
"Language: fr\\n"
"Plural-Forms: nplurals=2; plural=(n > 1);\\n"

msgid "HELLO"
msgstr "Bonjour"

msgid "COLOR"
msgstr "couleur"

msgid "Counter: %d"
msgstr "Compteur : %d"

msgid "YOU TAPPED TIMES"
msgid_plural "YOU TAPPED TIMES"
msgstr[0] "Vous avez tapé %d fois"
msgstr[1] "Vous avez tapé %d fois au total"
""",
    "po/fr_CA/app.po": """\
msgid ""
msgstr ""
"Language: fr-CA\\n"

msgid "COLOR"
msgstr "couleur (Canada)"
""",
    "po/en.po": """\
msgid ""
msgstr ""
"Language: en_US\\n"
"Plural-Forms: nplurals=2; plural=(n != 1);\\n"

msgid "HELLO"
msgstr "Hello"

msgid "GOODBYE"
msgstr "Goodbye"
""",
}


def write_tree(root: Path) -> None:
    for relative, text in FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def example_1_lookup(root: Path) -> None:
    """Example 1: Regional override and plural forms."""
    print("=" * 60)
    print("Example 1: fr_CA with en_US fallback")
    print("=" * 60)

    resolver = LocaleResolver(PathAssetProvider(root), ResolverConfig(fallback_locale="en_US"))
    summary = resolver.select_locale("fr_CA")
    print(f"  {summary!r}")

    print(f"  COLOR:   {resolver.get_text('COLOR')}")
    print(f"  HELLO:   {resolver.get_text('HELLO')}")
    print(f"  Counter: {resolver.get_text('Counter: %d', 5)}")
    for taps in (1, 4):
        print(f"  taps={taps}: {resolver.get_quantity_text('YOU TAPPED TIMES', taps, taps)}")


def example_2_fallback(root: Path) -> None:
    """Example 2: Fallback catalog and missing keys."""
    print("\n" + "=" * 60)
    print("Example 2: Fallback and missing policy")
    print("=" * 60)

    resolver = LocaleResolver(
        PathAssetProvider(root),
        on_fallback=lambda info: print(f"  [fallback] {info.key} from {info.resolved_locale}"),
        on_missing=lambda miss: print(f"  [missing] {miss.key}"),
    )
    resolver.select_locale("fr", "en_US", send_key_if_not_found=True)
    print(f"  GOODBYE: {resolver.get_text('GOODBYE')}")
    print(f"  NOPE:    {resolver.get_text('NOPE')}")


def example_3_default_resolver(root: Path) -> None:
    """Example 3: configure() once, then call the module-level functions."""
    print("\n" + "=" * 60)
    print("Example 3: Process-wide default resolver")
    print("=" * 60)

    pocatalog.configure(PathAssetProvider(root))
    pocatalog.select_locale("de")  # no German files: fallback only
    print(f"  current locale: {pocatalog.current_locale()}")
    print(f"  HELLO: {pocatalog.get_text('HELLO')}")
    pocatalog.reset()


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        assets = Path(tmp)
        write_tree(assets)
        example_1_lookup(assets)
        example_2_fallback(assets)
        example_3_default_resolver(assets)

    print("\n" + "=" * 60)
    print("[SUCCESS] All quickstart examples complete!")
    print("=" * 60)
