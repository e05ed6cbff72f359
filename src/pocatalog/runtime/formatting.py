"""printf-style argument substitution for translation templates.

Templates use the directive syntax translators already know from C and
Java gettext tooling:

    %s %d %i %f %.2f %x %e %g %c   - consume the next positional argument
    %1$s %2$d                        - consume an explicit argument (1-based)
    %%                               - literal percent sign
    %n                               - newline

Substitution is delegated to Python's % operator after directives are
resolved to a flat argument tuple, so widths, flags and precisions behave
exactly as in printf-style string formatting. Surplus arguments are
ignored. Without arguments only %% and %n are rewritten; argument
directives such as %d are left in place.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re

from pocatalog.diagnostics import TemplateFormatError

__all__ = ["format_template"]

_DIRECTIVE = re.compile(
    r"%(?:(?P<index>[1-9][0-9]*)\$)?(?P<spec>[-#0 +]*[0-9]*(?:\.[0-9]+)?(?P<conv>[a-zA-Z%]))"
)


def _escape_only(directive: re.Match[str]) -> str:
    """Rewrite %% and %n; keep argument directives verbatim."""
    if directive.group("index") is None:
        match directive.group("spec"):
            case "%":
                return "%"
            case "n":
                return "\n"
    return directive.group(0)


def format_template(template: str, args: tuple[object, ...] = ()) -> str:
    """Substitute positional args into a printf-style template.

    Example:
        >>> format_template("Counter: %d", (5,))
        'Counter: 5'
        >>> format_template("%2$s before %1$s", ("b", "a"))
        'a before b'

    Raises:
        TemplateFormatError: If the template needs arguments that were not
            given or an argument does not fit its directive
    """
    if not args:
        return _DIRECTIVE.sub(_escape_only, template)

    ordered: list[object] = []
    next_arg = 0

    def _resolve(match: re.Match[str]) -> str:
        nonlocal next_arg
        conv = match.group("conv")
        if conv == "%":
            return "%%"
        if conv == "n":
            return "\n"
        index = match.group("index")
        if index is not None:
            position = int(index) - 1
        else:
            position = next_arg
            next_arg += 1
        if position >= len(args):
            msg = f"Template {template!r} needs argument {position + 1}, got {len(args)}"
            raise TemplateFormatError(msg, template=template, args=args)
        ordered.append(args[position])
        return "%" + match.group("spec")

    rewritten = _DIRECTIVE.sub(_resolve, template)
    try:
        return rewritten % tuple(ordered)
    except (TypeError, ValueError) as e:
        msg = f"Cannot format {template!r} with {args!r}: {e}"
        raise TemplateFormatError(msg, template=template, args=args) from e
