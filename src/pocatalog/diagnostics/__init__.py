"""Error types for pocatalog.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    CatalogError,
    CatalogLoadError,
    CategoryNotFoundError,
    FormulaError,
    FormulaEvalError,
    FormulaSyntaxError,
    NoCatalogFoundError,
    NotFoundError,
    NotInitializedError,
    ParseError,
    TemplateFormatError,
    TranslationNotFoundError,
)

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "CategoryNotFoundError",
    "FormulaError",
    "FormulaEvalError",
    "FormulaSyntaxError",
    "NoCatalogFoundError",
    "NotFoundError",
    "NotInitializedError",
    "ParseError",
    "TemplateFormatError",
    "TranslationNotFoundError",
]
