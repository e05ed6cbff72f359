"""Line-oriented gettext PO parser.

Streams text lines into a TranslationFile. Recognized lines:

    msgid "key"              - starts a singular entry
    msgid_plural "key"       - switches the entry to plural mode; this is the lookup key
    msgstr "value"           - singular value (last write wins)
    msgstr[N] "value"        - plural value for category N
    "continuation"           - extends the previous directive's payload
    "Plural-Forms: ..."      - selects the file's plural formula
    # comment, msgctxt, blank lines are ignored

The header entry (msgid "" / msgstr "") never registers content; its
continuation lines are collected as header fields instead.

Error Recovery:
    A malformed directive line (missing quotes, bad plural index) is kept
    as a JunkLine and parsing continues with the next line. In strict mode
    the first malformed line raises ParseError instead, aborting the file.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType

from pocatalog.constants import (
    EMPTY_MSGID,
    EMPTY_MSGSTR,
    HEADER_LANGUAGE,
    HEADER_PLURAL_FORMS,
    MSGCTXT,
    MSGID,
    MSGID_PLURAL,
    MSGSTR,
)
from pocatalog.diagnostics import ParseError
from pocatalog.runtime.stores import JunkLine, PluralStore, SingleStore, TranslationFile
from pocatalog.syntax.plural_forms import PluralFormula

__all__ = ["POParser", "parse_language_header", "parse_po", "unescape"]

logger = logging.getLogger(__name__)

_ESCAPE = re.compile(r"\\(.)")
_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


def unescape(payload: str) -> str:
    r"""Resolve C escape sequences in a quoted PO payload.

    Example:
        >>> unescape(r'Say \"hi\"\n')
        'Say "hi"\n'
    """
    if "\\" not in payload:
        return payload
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), payload)


def parse_language_header(line: str) -> str:
    r"""Language tag text from a '"Language: fr_FR\n"' header line.

    Whitespace and escaped newlines are stripped.
    """
    value = line[line.index(":") + 1:]
    value = value.removesuffix('"')
    return value.replace("\\n", "").replace(" ", "").replace("\t", "")


class _Pending(Enum):
    """Which payload a continuation line extends."""

    NONE = auto()
    KEY = auto()
    VALUE = auto()
    PLURAL_VALUE = auto()
    HEADER = auto()


@dataclass(slots=True)
class _ParseState:
    """Mutable per-file parser state."""

    singles: SingleStore
    plurals: PluralStore
    current_key: str = ""
    current_key_is_plural: bool = False
    pending: _Pending = _Pending.NONE
    pending_index: int = 0
    # msgstr "" seen for a real key: first continuation chunk sets, later ones append
    value_started: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    junk: list[JunkLine] = field(default_factory=list)


def _quoted_payload(line: str, line_number: int, source_path: str | None) -> str:
    """Text between the first and the final double quote, unescaped."""
    first = line.find('"')
    last = line.rfind('"')
    if first == -1 or last == first:
        msg = "Expected a quoted string"
        raise ParseError(msg, line=line, line_number=line_number, source_path=source_path)
    return unescape(line[first + 1:last])


def _plural_index(line: str, line_number: int, source_path: str | None) -> int:
    """Category index between '[' and ']' of a msgstr[N] line."""
    open_bracket = line.find("[")
    close_bracket = line.find("]", open_bracket + 1)
    quote = line.find('"')
    if open_bracket == -1 or close_bracket == -1 or (quote != -1 and open_bracket > quote):
        msg = "Expected msgstr[N] in plural entry"
        raise ParseError(msg, line=line, line_number=line_number, source_path=source_path)
    text = line[open_bracket + 1:close_bracket].strip()
    if not text.isdigit():
        msg = f"Invalid plural index {text!r}"
        raise ParseError(msg, line=line, line_number=line_number, source_path=source_path)
    return int(text)


class POParser:
    """Parser producing a TranslationFile from PO text lines.

    Example:
        >>> parser = POParser()
        >>> po = parser.parse([
        ...     'msgid "hello"',
        ...     'msgstr "bonjour"',
        ... ])
        >>> po.singles.get("hello")
        'bonjour'

    Args:
        strict: Raise ParseError on the first malformed line instead of
            recording it as junk
        default_formula: Formula used when the file has no Plural-Forms
            header. None keeps the always-category-0 behaviour.
    """

    __slots__ = ("_default_formula", "_strict")

    def __init__(
        self, *, strict: bool = False, default_formula: PluralFormula | None = None
    ) -> None:
        self._strict = strict
        self._default_formula = default_formula

    @property
    def strict(self) -> bool:
        return self._strict

    def parse(self, lines: Iterable[str], *, source_path: str | None = None) -> TranslationFile:
        """Parse one PO source.

        Args:
            lines: Text lines (trailing newlines are tolerated)
            source_path: Path used in error messages and on the result

        Returns:
            TranslationFile with singular and plural stores

        Raises:
            ParseError: In strict mode, on the first malformed line
        """
        state = _ParseState(
            singles=SingleStore(),
            plurals=PluralStore(formula=self._default_formula),
        )
        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            try:
                self._parse_line(state, line, line_number, source_path)
            except ParseError as e:
                if self._strict:
                    logger.error("Failed to parse %s: %s", source_path or "<lines>", e)
                    raise
                logger.warning(
                    "Syntax error in %s:%d: %s", source_path or "<lines>", line_number, repr(line[:100])
                )
                state.junk.append(JunkLine(line_number, raw, e))
                state.pending = _Pending.NONE

        logger.info(
            "Parsed %s: %d singular, %d plural, %d junk",
            source_path or "<lines>",
            len(state.singles),
            len(state.plurals),
            len(state.junk),
        )
        return TranslationFile(
            singles=state.singles,
            plurals=state.plurals,
            source_path=source_path,
            headers=MappingProxyType(state.headers),
            junk=tuple(state.junk),
        )

    def _parse_line(
        self, state: _ParseState, line: str, line_number: int, source_path: str | None
    ) -> None:
        if not line:
            state.pending = _Pending.NONE
            return
        if line.startswith("#"):
            return
        if line == EMPTY_MSGID:
            # Header entry id, or a key that continues on the next lines
            state.current_key = ""
            state.current_key_is_plural = False
            state.pending = _Pending.KEY
            return
        if line == EMPTY_MSGSTR:
            if not state.current_key:
                state.pending = _Pending.HEADER
            elif state.current_key_is_plural:
                state.pending = _Pending.NONE
            else:
                # Untranslated unless continuation lines follow
                state.pending = _Pending.VALUE
                state.value_started = False
            return
        if line.startswith(HEADER_PLURAL_FORMS):
            state.plurals.formula = PluralFormula.from_header(line)
            self._add_header_field(state, line, line_number, source_path)
            return
        if line.startswith('"'):
            self._continue(state, line, line_number, source_path)
            return
        if line.startswith(MSGID_PLURAL):
            state.current_key = _quoted_payload(line, line_number, source_path)
            state.current_key_is_plural = True
            state.pending = _Pending.KEY
            return
        if line.startswith(MSGID):
            state.current_key = _quoted_payload(line, line_number, source_path)
            state.current_key_is_plural = False
            state.pending = _Pending.KEY
            return
        if line.startswith(MSGSTR):
            self._register_value(state, line, line_number, source_path)
            return
        if line.startswith(MSGCTXT):
            state.pending = _Pending.NONE
            return
        msg = "Unknown directive"
        raise ParseError(msg, line=line, line_number=line_number, source_path=source_path)

    def _register_value(
        self, state: _ParseState, line: str, line_number: int, source_path: str | None
    ) -> None:
        key = state.current_key
        if state.current_key_is_plural:
            index = _plural_index(line, line_number, source_path)
            value = _quoted_payload(line, line_number, source_path)
            state.plurals.add(key, index, value)
            state.pending = _Pending.PLURAL_VALUE
            state.pending_index = index
            logger.debug("Registered plural: %s[%d]", key, index)
            return
        value = _quoted_payload(line, line_number, source_path)
        if not key:
            # msgstr for the header entry written on one line
            state.pending = _Pending.HEADER
            return
        state.singles.set(key, value)
        state.pending = _Pending.VALUE
        state.value_started = True
        logger.debug("Registered single: %s", key)

    def _continue(
        self, state: _ParseState, line: str, line_number: int, source_path: str | None
    ) -> None:
        match state.pending:
            case _Pending.KEY:
                state.current_key += _quoted_payload(line, line_number, source_path)
            case _Pending.VALUE:
                chunk = _quoted_payload(line, line_number, source_path)
                if state.value_started:
                    state.singles.append(state.current_key, chunk)
                else:
                    state.singles.set(state.current_key, chunk)
                    state.value_started = True
            case _Pending.PLURAL_VALUE:
                chunk = _quoted_payload(line, line_number, source_path)
                state.plurals.append(state.current_key, state.pending_index, chunk)
            case _Pending.HEADER:
                self._add_header_field(state, line, line_number, source_path)
            case _Pending.NONE:
                logger.debug("Ignoring stray string at line %d", line_number)

    @staticmethod
    def _add_header_field(
        state: _ParseState, line: str, line_number: int, source_path: str | None
    ) -> None:
        if line.startswith(HEADER_LANGUAGE):
            state.headers["Language"] = parse_language_header(line)
            return
        text = _quoted_payload(line, line_number, source_path).strip()
        name, sep, value = text.partition(":")
        if sep:
            state.headers[name.strip()] = value.strip()


def parse_po(
    lines: Iterable[str],
    *,
    source_path: str | None = None,
    strict: bool = False,
) -> TranslationFile:
    """Parse PO lines with a default POParser.

    Example:
        >>> po = parse_po(['msgid "a"', 'msgstr "b"'])
        >>> po.singles.get("a")
        'b'
    """
    return POParser(strict=strict).parse(lines, source_path=source_path)
