"""Shared constants for pocatalog.

This module provides centralized configuration constants used across the
syntax, runtime and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- PO directives: Keywords recognized by the line parser
- Discovery: Default asset root and file suffix
- Formula limits: Recursion and size protection for Plural-Forms expressions
- Locale defaults: Fallback locale used when none is given

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # PO directives
    "MSGID",
    "MSGID_PLURAL",
    "MSGSTR",
    "MSGCTXT",
    "EMPTY_MSGID",
    "EMPTY_MSGSTR",
    "HEADER_PLURAL_FORMS",
    "HEADER_LANGUAGE",
    # Discovery
    "DEFAULT_ASSET_ROOT",
    "DEFAULT_FILE_SUFFIX",
    # Formula limits
    "MAX_DEPTH",
    "MAX_FORMULA_LENGTH",
    # Locale defaults
    "DEFAULT_FALLBACK_LOCALE",
    "DEFAULT_MAX_WORKERS",
]

# ============================================================================
# PO DIRECTIVES
# ============================================================================

MSGID: str = "msgid"
MSGID_PLURAL: str = "msgid_plural"
MSGSTR: str = "msgstr"
MSGCTXT: str = "msgctxt"

# Header block id/value lines. They never carry message content.
EMPTY_MSGID: str = 'msgid ""'
EMPTY_MSGSTR: str = 'msgstr ""'

# Header field lines appear as quoted continuation lines: "Plural-Forms: ...\n"
HEADER_PLURAL_FORMS: str = '"Plural-Forms:'
HEADER_LANGUAGE: str = '"Language:'

# ============================================================================
# DISCOVERY
# ============================================================================

# Folder under the asset provider root that holds translation files.
DEFAULT_ASSET_ROOT: str = "po"

DEFAULT_FILE_SUFFIX: str = ".po"

# ============================================================================
# FORMULA LIMITS
# ============================================================================

# Maximum parenthesis/unary nesting in a Plural-Forms condition.
# Real formulas nest 2-3 levels; 100 is clearly malformed input.
MAX_DEPTH: int = 100

# Same bound CPython's gettext.c2py applies to plural expressions.
MAX_FORMULA_LENGTH: int = 1000

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_FALLBACK_LOCALE: str = "en_US"

# One worker per catalog: active and fallback load in parallel.
DEFAULT_MAX_WORKERS: int = 2
