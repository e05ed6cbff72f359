"""Enumerations for pocatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading a single translation file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File was read and parsed (possibly with junk lines)."""

    NOT_FOUND = "not_found"
    """File disappeared between discovery and load."""

    ERROR = "error"
    """File could not be read or failed strict parsing."""


class CatalogState(StrEnum):
    """Lifecycle state of a Catalog.

    A catalog moves UNSET -> LOADING -> READY, or UNSET -> LOADING -> FAILED.
    """

    UNSET = "unset"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class LookupStatus(StrEnum):
    """Tagged outcome of a store or catalog lookup."""

    FOUND = "found"
    """Key present and (for plurals) the selected category has a string."""

    MISSING_KEY = "missing_key"
    """Key absent from the store."""

    MISSING_CATEGORY = "missing_category"
    """Plural key present but the evaluated category has no string."""


__all__ = [
    "CatalogState",
    "LoadStatus",
    "LookupStatus",
]
