"""Runtime package: translation stores, template formatting, locking.

Depends on the syntax package for plural formulas.

Python 3.13+.
"""

from .formatting import format_template
from .rwlock import RWLock
from .stores import JunkLine, LookupResult, PluralStore, SingleStore, TranslationFile

__all__ = [
    "JunkLine",
    "LookupResult",
    "PluralStore",
    "RWLock",
    "SingleStore",
    "TranslationFile",
    "format_template",
]
