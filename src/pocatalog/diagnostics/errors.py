"""pocatalog exception hierarchy.

Every error raised by the package derives from CatalogError. Errors carry
the context needed to report them (key, locale, line number) as keyword
attributes so callers never need to parse messages.

Containment rules:
    ParseError           - one file (junk line, or that file's load in strict mode)
    FormulaError         - one formula; evaluation degrades to category 0
    NotFoundError        - one store; a catalog miss, not a process error
    CategoryNotFoundError- one plural key; treated as a lookup failure
    NoCatalogFoundError  - one catalog (active or fallback)
    CatalogLoadError     - a locale selection where both catalogs failed
    NotInitializedError  - facade used before any successful selection

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

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


class CatalogError(Exception):
    """Base exception for all pocatalog errors."""


class ParseError(CatalogError):
    """Malformed directive line in a PO source.

    Attributes:
        line: The offending line text
        line_number: 1-based line number (0 when unknown)
        source_path: Path of the file being parsed, if known
    """

    def __init__(
        self,
        message: str,
        *,
        line: str = "",
        line_number: int = 0,
        source_path: str | None = None,
    ) -> None:
        """Initialize ParseError.

        Args:
            message: Description of what is malformed
            line: The offending line text
            line_number: 1-based line number
            source_path: Path of the file being parsed
        """
        location = source_path or "<lines>"
        if line_number:
            location = f"{location}:{line_number}"
        super().__init__(f"{location}: {message}")
        self.line = line
        self.line_number = line_number
        self.source_path = source_path


class FormulaError(CatalogError):
    """Base class for Plural-Forms formula failures.

    Attributes:
        expression: The expression text that failed
    """

    def __init__(self, message: str, *, expression: str = "") -> None:
        super().__init__(message)
        self.expression = expression


class FormulaSyntaxError(FormulaError):
    """Plural-Forms expression could not be tokenized or parsed."""


class FormulaEvalError(FormulaError):
    """Plural-Forms expression failed while evaluating (e.g. division by zero)."""


class TranslationNotFoundError(CatalogError, KeyError):
    """Base class for lookup misses.

    Subclasses KeyError so callers treating stores as mappings can catch
    the builtin.

    Attributes:
        key: The message key that was looked up
    """

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class NotFoundError(TranslationNotFoundError):
    """Message key absent from a store."""


class CategoryNotFoundError(TranslationNotFoundError):
    """Plural key present but the evaluated category has no string.

    This is a data-authoring error: the file declares a plural count the
    formula never reaches, or vice versa.

    Attributes:
        category: The category index the formula selected
        quantity: The quantity that was evaluated
    """

    def __init__(self, message: str, *, key: str, category: int, quantity: int) -> None:
        super().__init__(message, key=key)
        self.category = category
        self.quantity = quantity


class NoCatalogFoundError(CatalogError):
    """No usable translation file exists for a locale.

    Attributes:
        locale: The locale tag (as text) that was requested
    """

    def __init__(self, message: str, *, locale: str) -> None:
        super().__init__(message)
        self.locale = locale


class CatalogLoadError(CatalogError):
    """Both the active and the fallback catalog failed to load.

    Attributes:
        locale: Requested locale (as text)
        fallback_locale: Requested fallback locale (as text)
        errors: Exceptions raised by the active and fallback loads
    """

    def __init__(
        self,
        message: str,
        *,
        locale: str,
        fallback_locale: str,
        errors: tuple[BaseException, ...] = (),
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.fallback_locale = fallback_locale
        self.errors = errors


class NotInitializedError(CatalogError, RuntimeError):
    """Translations were requested before any locale was successfully selected."""


class TemplateFormatError(CatalogError, ValueError):
    """printf-style substitution failed for a template.

    Attributes:
        template: The template text
        args_given: The arguments that did not fit it
    """

    def __init__(self, message: str, *, template: str, args: tuple[object, ...]) -> None:
        super().__init__(message)
        self.template = template
        self.args_given = args
