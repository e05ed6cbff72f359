"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "AssetPath",
    "LanguageIndex",
    "MessageKey",
]

type MessageKey = str
"""msgid (or msgid_plural) used as lookup key (e.g. 'YOU TAPPED TIMES')."""

type AssetPath = str
"""'/'-separated path understood by an AssetProvider (e.g. 'po/fr/main.po')."""

type LanguageIndex = Mapping[str, tuple[AssetPath, ...]]
"""Discovery result: normalized language tag text -> files declaring it."""
