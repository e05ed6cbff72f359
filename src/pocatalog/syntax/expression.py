"""Plural-Forms expression language: tokenizer, AST and recursive-descent parser.

The gettext plural expression is a small closed subset of C:

    expression  := condition [ "?" expression ":" expression ]
    condition   := binary expression over the operators below
    unary       := "!" unary | primary
    primary     := NUMBER | "n" | "(" expression ")"

Binary operators by precedence (lowest first), all left associative:

    ||
    &&
    ==  !=
    <  <=  >  >=
    +  -
    *  /  %

Evaluation works purely on Python ints with C semantics: comparisons and
logical operators produce 0 or 1, "/" and "%" truncate toward zero, and
"&&" / "||" short-circuit. The quantity is bound to "n" at evaluation time
instead of being spliced into the source text, so an expression is
tokenized and parsed exactly once.

Pattern Reference:
    - CPython Lib/gettext.py (_tokenize, _parse, c2py)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from pocatalog.constants import MAX_DEPTH, MAX_FORMULA_LENGTH
from pocatalog.diagnostics import FormulaEvalError, FormulaSyntaxError

__all__ = [
    "BinaryOp",
    "CompiledExpression",
    "Conditional",
    "Expression",
    "Not",
    "Number",
    "Token",
    "Variable",
    "compile_expression",
    "evaluate",
    "tokenize",
]

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<WHITESPACE>\s+)                       |
    (?P<NUMBER>[0-9]+)                        |
    (?P<NAME>n(?![A-Za-z0-9_]))               |
    (?P<PAREN>[()])                           |
    (?P<OPERATOR>&&|\|\||==|!=|<=|>=|[<>!%*/+\-?:]) |
    (?P<INVALID>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_BINARY_PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
    "%": 6,
}


@dataclass(frozen=True, slots=True)
class Token:
    """Lexical token. kind is NUMBER, NAME, PAREN, OPERATOR or EOF."""

    kind: str
    value: str
    pos: int


def tokenize(source: str) -> tuple[Token, ...]:
    """Split expression text into tokens, ending with an EOF token.

    Raises:
        FormulaSyntaxError: On any character outside the grammar
    """
    tokens: list[Token] = []
    for match in _TOKEN_PATTERN.finditer(source):
        kind = match.lastgroup
        value = match.group()
        if kind == "WHITESPACE":
            continue
        if kind == "INVALID":
            msg = f"Invalid character {value!r} at position {match.start()} in {source!r}"
            raise FormulaSyntaxError(msg, expression=source)
        tokens.append(Token(kind or "INVALID", value, match.start()))
    tokens.append(Token("EOF", "", len(source)))
    return tuple(tokens)


# ============================================================================
# AST
# ============================================================================


@dataclass(frozen=True, slots=True)
class Number:
    value: int


@dataclass(frozen=True, slots=True)
class Variable:
    """The quantity 'n'."""


@dataclass(frozen=True, slots=True)
class Not:
    operand: Expression


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Conditional:
    """C ternary: test ? if_true : if_false."""

    test: Expression
    if_true: Expression
    if_false: Expression


type Expression = Number | Variable | Not | BinaryOp | Conditional


# ============================================================================
# PARSER
# ============================================================================


@dataclass(slots=True)
class _Parser:
    """Recursive-descent parser over a token tuple.

    Mutable position; one instance per compile_expression() call.
    """

    source: str
    tokens: tuple[Token, ...]
    pos: int = 0
    depth: int = field(default=0)

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "EOF":
            self.pos += 1
        return token

    def _error(self, message: str) -> FormulaSyntaxError:
        token = self.current
        where = "end of expression" if token.kind == "EOF" else f"position {token.pos}"
        return FormulaSyntaxError(f"{message} at {where} in {self.source!r}", expression=self.source)

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise self._error(f"Expression nesting exceeds {MAX_DEPTH} levels")

    def parse(self) -> Expression:
        if self.current.kind == "EOF":
            raise self._error("Empty expression")
        node = self._parse_conditional()
        if self.current.kind != "EOF":
            raise self._error(f"Unexpected token {self.current.value!r}")
        return node

    def _parse_conditional(self) -> Expression:
        test = self._parse_binary(1)
        if self.current.value != "?":
            return test
        self._advance()
        self._enter()
        if_true = self._parse_conditional()
        if self.current.value != ":":
            raise self._error("Expected ':' in conditional")
        self._advance()
        if_false = self._parse_conditional()
        self.depth -= 1
        return Conditional(test, if_true, if_false)

    def _parse_binary(self, min_precedence: int) -> Expression:
        left = self._parse_unary()
        while True:
            token = self.current
            precedence = _BINARY_PRECEDENCE.get(token.value) if token.kind == "OPERATOR" else None
            if precedence is None or precedence < min_precedence:
                return left
            self._advance()
            right = self._parse_binary(precedence + 1)
            left = BinaryOp(token.value, left, right)

    def _parse_unary(self) -> Expression:
        token = self.current
        if token.value == "!":
            self._advance()
            self._enter()
            operand = self._parse_unary()
            self.depth -= 1
            return Not(operand)
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        token = self._advance()
        match token.kind:
            case "NUMBER":
                return Number(int(token.value))
            case "NAME":
                return Variable()
            case "PAREN" if token.value == "(":
                self._enter()
                node = self._parse_conditional()
                if self.current.value != ")":
                    raise self._error("Expected ')'")
                self._advance()
                self.depth -= 1
                return node
            case "EOF":
                self.pos = len(self.tokens) - 1
                raise self._error("Unexpected end of expression")
            case _:
                self.pos -= 1
                raise self._error(f"Unexpected token {token.value!r}")


# ============================================================================
# EVALUATION
# ============================================================================


def _c_divide(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _c_remainder(left: int, right: int) -> int:
    return left - right * _c_divide(left, right)


def evaluate(node: Expression, n: int) -> int:
    """Evaluate an expression tree with the quantity bound to n.

    Raises:
        FormulaEvalError: On division or modulo by zero
    """
    match node:
        case Number(value=value):
            return value
        case Variable():
            return n
        case Not(operand=operand):
            return int(not evaluate(operand, n))
        case Conditional(test=test, if_true=if_true, if_false=if_false):
            return evaluate(if_true if evaluate(test, n) else if_false, n)
        case BinaryOp(op="&&", left=left, right=right):
            return int(bool(evaluate(left, n)) and bool(evaluate(right, n)))
        case BinaryOp(op="||", left=left, right=right):
            return int(bool(evaluate(left, n)) or bool(evaluate(right, n)))
        case BinaryOp(op=op, left=left, right=right):
            return _apply(op, evaluate(left, n), evaluate(right, n))
    msg = f"Unknown expression node: {node!r}"
    raise FormulaEvalError(msg)


def _apply(op: str, left: int, right: int) -> int:
    match op:
        case "==":
            return int(left == right)
        case "!=":
            return int(left != right)
        case "<":
            return int(left < right)
        case "<=":
            return int(left <= right)
        case ">":
            return int(left > right)
        case ">=":
            return int(left >= right)
        case "+":
            return left + right
        case "-":
            return left - right
        case "*":
            return left * right
        case "/" | "%" if right == 0:
            msg = f"Division by zero in {left} {op} {right}"
            raise FormulaEvalError(msg)
        case "/":
            return _c_divide(left, right)
        case "%":
            return _c_remainder(left, right)
    msg = f"Unknown operator: {op!r}"
    raise FormulaEvalError(msg)


@dataclass(frozen=True, slots=True)
class CompiledExpression:
    """Parsed expression paired with its source text.

    Equality and hashing use the source text only.
    """

    source: str
    tree: Expression = field(compare=False)

    def evaluate(self, n: int) -> int:
        """Integer value of the expression for quantity n.

        Raises:
            FormulaEvalError: On division or modulo by zero
        """
        try:
            return evaluate(self.tree, n)
        except FormulaEvalError as e:
            e.expression = self.source
            raise

    def test(self, n: int) -> bool:
        """Truth value of the expression for quantity n."""
        return self.evaluate(n) != 0


def compile_expression(source: str) -> CompiledExpression:
    """Tokenize and parse a Plural-Forms expression.

    Example:
        >>> expr = compile_expression("n%10==1 && n%100!=11")
        >>> expr.test(21), expr.test(11)
        (True, False)

    Raises:
        FormulaSyntaxError: If the text is too long or not in the grammar
    """
    if len(source) > MAX_FORMULA_LENGTH:
        msg = f"Plural expression is too long ({len(source)} > {MAX_FORMULA_LENGTH} characters)"
        raise FormulaSyntaxError(msg, expression=source[:50])
    parser = _Parser(source, tokenize(source))
    return CompiledExpression(source=source, tree=parser.parse())
