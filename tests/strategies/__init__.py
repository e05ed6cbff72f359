"""Hypothesis strategies for pocatalog property-based testing.

Strategies are organized by domain:

- formulas: Plural-Forms expressions in the gettext C subset
- po: PO entries, rendered PO sources and locale tags

Usage:
    from tests.strategies import c_expressions, po_sources
    from tests.strategies.po import message_keys, locale_tags

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - arithmetic_terms, c_expressions, po_sources
"""

from .formulas import arithmetic_terms, c_conditions, c_expressions
from .po import locale_tags, message_keys, message_texts, po_entries, po_sources, render_po

__all__ = [
    "arithmetic_terms",
    "c_conditions",
    "c_expressions",
    "locale_tags",
    "message_keys",
    "message_texts",
    "po_entries",
    "po_sources",
    "render_po",
]
