"""Plural-Forms formula syntax.

Provides the expression tokenizer and recursive-descent parser, and the
PluralFormula that decomposes a Plural-Forms header into ordered rules.

Python 3.13+.
"""

from .expression import CompiledExpression, compile_expression, tokenize
from .plural_forms import PluralFormula, PluralRule

__all__ = [
    "CompiledExpression",
    "PluralFormula",
    "PluralRule",
    "compile_expression",
    "tokenize",
]
