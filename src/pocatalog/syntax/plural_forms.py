"""Plural category selection from a gettext Plural-Forms header.

A PO header such as

    "Plural-Forms: nplurals=3; plural=(n==0 ? 0 : n==1 ? 1 : 2);\\n"

is decomposed into an ordered list of (condition, category) rules:

    [("n==0", 0), ("n==1", 1), ("", 2)]

evaluate(n) returns the category of the first rule whose condition holds,
falling back to the catch-all (empty condition), then to 0. Any formula
failure, at compile or evaluation time, selects category 0 so a broken
header degrades to the first plural form instead of failing the lookup.

Python 3.13+. Depends on Babel for per-locale default formulas.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pocatalog.diagnostics import FormulaError, FormulaSyntaxError
from pocatalog.locale_utils import LocaleLike, LocaleTag
from pocatalog.syntax.expression import CompiledExpression, compile_expression

__all__ = ["PluralFormula", "PluralRule"]

logger = logging.getLogger(__name__)

_NPLURALS_PATTERN = re.compile(r"nplurals\s*=\s*(\d+)")
_PLURAL_PATTERN = re.compile(r"(?<![A-Za-z_])plural\s*=")


@dataclass(frozen=True, slots=True)
class PluralRule:
    """One (condition, category) pair. Empty condition is the catch-all."""

    condition: str
    index: int

    @property
    def is_default(self) -> bool:
        return not self.condition.strip()


@dataclass(frozen=True, slots=True)
class PluralFormula:
    """Ordered plural selection rules built from one Plural-Forms header.

    The empty formula (no rules) always selects category 0, which is the
    behaviour for files that carry no Plural-Forms header.

    Example:
        >>> formula = PluralFormula.from_header(
        ...     '"Plural-Forms: nplurals=2; plural=(n != 1);\\\\n"'
        ... )
        >>> formula.evaluate(1), formula.evaluate(0), formula.evaluate(2)
        (0, 1, 1)

    Attributes:
        rules: Rules in file order
        nplurals: Declared number of plural forms, if the header had one
        expression: The extracted plural expression text
    """

    rules: tuple[PluralRule, ...] = ()
    nplurals: int | None = None
    expression: str = ""
    _compiled: tuple[CompiledExpression | FormulaError | None, ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # Compile every condition once; failures are kept and surface per evaluate()
        compiled: list[CompiledExpression | FormulaError | None] = []
        for rule in self.rules:
            if rule.is_default:
                compiled.append(None)
                continue
            try:
                compiled.append(compile_expression(rule.condition))
            except FormulaSyntaxError as e:
                logger.warning("Invalid plural condition %r: %s", rule.condition, e)
                compiled.append(e)
        object.__setattr__(self, "_compiled", tuple(compiled))

    @classmethod
    def from_header(cls, line: str) -> PluralFormula:
        """Build a formula from a raw Plural-Forms header line.

        Accepts the quoted PO continuation line or the bare header value.
        A header without a usable plural= expression yields the empty formula.
        """
        match = _NPLURALS_PATTERN.search(line)
        nplurals = int(match.group(1)) if match else None
        expression = _extract_expression(line)
        if not expression:
            logger.warning("Plural-Forms header without plural expression: %r", line)
            return cls(nplurals=nplurals)
        try:
            rules = tuple(_decompose(expression))
        except FormulaSyntaxError as e:
            logger.warning("Invalid Plural-Forms expression %r: %s", expression, e)
            return cls(nplurals=nplurals, expression=expression)
        return cls(rules=rules, nplurals=nplurals, expression=expression)

    @classmethod
    def from_expression(cls, expression: str, nplurals: int | None = None) -> PluralFormula:
        """Build a formula from a bare plural expression such as 'n != 1'."""
        header = f"plural={expression};"
        if nplurals is not None:
            header = f"nplurals={nplurals}; {header}"
        return cls.from_header(header)

    @classmethod
    def for_locale(cls, locale: LocaleLike) -> PluralFormula:
        """Formula from Babel's gettext plural table for a locale.

        Unknown locales get the two-form rule 'n != 1'.
        """
        # Lazy import: babel.messages pulls in CLDR data on first use
        from babel.core import UnknownLocaleError  # noqa: PLC0415
        from babel.messages.plurals import get_plural  # noqa: PLC0415

        tag = LocaleTag.coerce(locale)
        try:
            plural = get_plural(str(tag))
        except UnknownLocaleError:
            logger.debug("No plural data for %s, using two-form default", tag)
            return cls.from_expression("(n != 1)", nplurals=2)
        return cls.from_header(plural.plural_forms)

    def evaluate(self, quantity: int) -> int:
        """Return the plural category index for a quantity.

        First matching condition wins; otherwise the catch-all index;
        otherwise 0. Formula errors are logged and select 0.
        """
        default = 0
        try:
            for rule, compiled in zip(self.rules, self._compiled, strict=True):
                if compiled is None:
                    default = rule.index
                    continue
                if isinstance(compiled, FormulaError):
                    raise compiled
                if compiled.test(quantity):
                    return rule.index
        except FormulaError as e:
            logger.warning("Plural formula failed for n=%d: %s", quantity, e)
            return 0
        return default


def _extract_expression(line: str) -> str:
    """Isolate the text assigned to plural= (without trailing ';' or outer parens)."""
    match = _PLURAL_PATTERN.search(line)
    if match is None:
        return ""
    text = line[match.end():]
    # Header line may end with the escaped newline and closing quote: ...;\n"
    text = text.removesuffix('"').removesuffix("\\n")
    semicolon = _find_top_level(text, ";")
    if semicolon != -1:
        text = text[:semicolon]
    return _strip_outer_parens(text.strip())


def _find_top_level(text: str, target: str, start: int = 0) -> int:
    """Index of the first target character outside parentheses, or -1."""
    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == target and depth == 0:
            return i
    return -1


def _strip_outer_parens(text: str) -> str:
    """Remove parentheses pairs that wrap the entire text."""
    while text.startswith("(") and text.endswith(")"):
        depth = 0
        for i, char in enumerate(text):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0 and i != len(text) - 1:
                    return text
        if depth != 0:
            return text
        text = text[1:-1].strip()
    return text


def _split_top_level(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    start = 0
    while (index := _find_top_level(text, separator, start)) != -1:
        parts.append(text[start:index])
        start = index + 1
    parts.append(text[start:])
    return parts


def _decompose(expression: str) -> list[PluralRule]:
    """Flatten 'c0 ? i0 : c1 ? i1 : ... : iN' into ordered rules.

    A bare condition without '?' is the two-form shorthand: it selects
    category 1 when true and the implicit default 0 otherwise.
    """
    segments = _split_top_level(expression, ":")
    if len(segments) == 1 and _find_top_level(expression, "?") == -1:
        return [PluralRule(expression.strip(), 1)]

    rules: list[PluralRule] = []
    for segment in segments:
        question = _find_top_level(segment, "?")
        if question == -1:
            rules.extend(_default_rules(segment))
            continue
        condition = segment[:question].strip()
        rules.extend(_default_rules(segment[question + 1:], condition))
    return rules


def _default_rules(text: str, condition: str = "") -> list[PluralRule]:
    """Rules for the value side of a ternary branch.

    Normally a literal index. A parenthesized nested chain is flattened with
    the enclosing condition and-ed onto each inner condition.

    Raises:
        FormulaSyntaxError: If the branch is neither an index nor a nested chain
    """
    value = text.strip()
    inner = _strip_outer_parens(value)
    if inner.isdigit():
        return [PluralRule(condition, int(inner))]
    if inner != value and _find_top_level(inner, "?") != -1:
        nested = _decompose(inner)
        if not condition:
            return nested
        return [
            PluralRule(
                condition if rule.is_default else f"({condition}) && ({rule.condition})",
                rule.index,
            )
            for rule in nested
        ]
    msg = f"Plural branch value is not a category index: {value!r}"
    raise FormulaSyntaxError(msg, expression=value)
