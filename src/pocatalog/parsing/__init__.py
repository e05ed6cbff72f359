"""PO source parsing.

Turns line sequences into TranslationFile records. Depends on the syntax
package for Plural-Forms formulas and on the runtime package for stores.

Python 3.13+.
"""

from .po_parser import POParser, parse_language_header, parse_po, unescape

__all__ = ["POParser", "parse_language_header", "parse_po", "unescape"]
