"""Tests for the Plural-Forms expression compiler and evaluator.

Tests verify:
- Tokenization of every operator and rejection of foreign characters
- C operator precedence and left associativity
- C integer semantics (truncating division, 0/1 booleans, short-circuit)
- Ternary conditionals
- Nesting and length limits
- Agreement with CPython's gettext.c2py on generated expressions

Python 3.13+.
"""

from __future__ import annotations

import gettext

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pocatalog.constants import MAX_DEPTH, MAX_FORMULA_LENGTH
from pocatalog.diagnostics import FormulaEvalError, FormulaSyntaxError
from pocatalog.syntax import compile_expression, tokenize
from pocatalog.syntax.expression import BinaryOp, Conditional, Not, Number, Variable
from tests.strategies import c_expressions


class TestTokenize:
    """Lexical analysis."""

    def test_operators_and_operands(self) -> None:
        """Every two-character operator is a single token."""
        tokens = tokenize("n%10==1 && n!=11 || n<=2 >= 3")
        values = [t.value for t in tokens if t.kind != "EOF"]
        assert values == [
            "n", "%", "10", "==", "1", "&&", "n", "!=", "11", "||", "n", "<=", "2", ">=", "3",
        ]

    def test_ends_with_eof(self) -> None:
        """Token stream is terminated by EOF at the source length."""
        tokens = tokenize("n")
        assert tokens[-1].kind == "EOF"
        assert tokens[-1].pos == 1

    def test_whitespace_skipped(self) -> None:
        """Whitespace produces no tokens."""
        assert [t.kind for t in tokenize("  n \t ")] == ["NAME", "EOF"]

    def test_positions_recorded(self) -> None:
        """Token positions index into the source."""
        tokens = tokenize("n == 1")
        assert [t.pos for t in tokens] == [0, 2, 5, 6]

    @pytest.mark.parametrize("source", ["n & 1", "x == 1", "n = 1", "n == 1.5", "nn"])
    def test_invalid_characters_rejected(self, source: str) -> None:
        """Characters outside the grammar raise FormulaSyntaxError."""
        with pytest.raises(FormulaSyntaxError):
            compile_expression(source)


class TestParse:
    """Tree shape produced by the recursive-descent parser."""

    def test_number_and_variable(self) -> None:
        assert compile_expression("42").tree == Number(42)
        assert compile_expression("n").tree == Variable()

    def test_multiplicative_binds_tighter_than_additive(self) -> None:
        """1 + 2 * 3 parses as 1 + (2 * 3)."""
        tree = compile_expression("1 + 2 * 3").tree
        assert tree == BinaryOp("+", Number(1), BinaryOp("*", Number(2), Number(3)))

    def test_left_associative(self) -> None:
        """10 - 4 - 3 parses as (10 - 4) - 3."""
        tree = compile_expression("10 - 4 - 3").tree
        assert tree == BinaryOp("-", BinaryOp("-", Number(10), Number(4)), Number(3))

    def test_and_binds_tighter_than_or(self) -> None:
        tree = compile_expression("n || n && n").tree
        assert tree == BinaryOp("||", Variable(), BinaryOp("&&", Variable(), Variable()))

    def test_double_negation(self) -> None:
        assert compile_expression("!!n").tree == Not(Not(Variable()))

    def test_ternary_right_nested(self) -> None:
        """a ? b : c ? d : e nests in the else branch."""
        tree = compile_expression("n==1 ? 0 : n==2 ? 1 : 2").tree
        assert isinstance(tree, Conditional)
        assert isinstance(tree.if_false, Conditional)
        assert tree.if_true == Number(0)

    def test_parentheses_override_precedence(self) -> None:
        tree = compile_expression("(1 + 2) * 3").tree
        assert tree == BinaryOp("*", BinaryOp("+", Number(1), Number(2)), Number(3))

    @pytest.mark.parametrize(
        "source",
        ["", "   ", "n ==", "(n == 1", "n == 1)", "n ? 1", "== 1", "n 1", "()"],
    )
    def test_malformed_rejected(self, source: str) -> None:
        with pytest.raises(FormulaSyntaxError):
            compile_expression(source)

    def test_error_carries_expression(self) -> None:
        with pytest.raises(FormulaSyntaxError) as exc_info:
            compile_expression("n ==")
        assert exc_info.value.expression == "n =="


class TestEvaluate:
    """C integer semantics."""

    @pytest.mark.parametrize(
        ("source", "n", "expected"),
        [
            ("n != 1", 1, 0),
            ("n != 1", 2, 1),
            ("n > 1", 0, 0),
            ("n % 10", 123, 3),
            ("n / 3", 7, 2),
            ("0 - n / 2", 7, -3),
            ("(0 - n) % 3", 7, -1),
            ("!n", 0, 1),
            ("!n", 5, 0),
            ("!!n", 5, 1),
            ("n == 0 || n == 1", 1, 1),
            ("n >= 2 && n <= 4", 3, 1),
            ("n >= 2 && n <= 4", 5, 0),
            ("n == 1 ? 7 : 9", 1, 7),
            ("n == 1 ? 7 : 9", 2, 9),
        ],
    )
    def test_values(self, source: str, n: int, expected: int) -> None:
        assert compile_expression(source).evaluate(n) == expected

    def test_division_truncates_toward_zero(self) -> None:
        """C division: -7 / 2 == -3, not Python's -4."""
        assert compile_expression("(0 - 7) / 2").evaluate(0) == -3
        assert compile_expression("(0 - 7) % 2").evaluate(0) == -1

    def test_division_by_zero_raises(self) -> None:
        expr = compile_expression("1 / n")
        with pytest.raises(FormulaEvalError) as exc_info:
            expr.evaluate(0)
        assert exc_info.value.expression == "1 / n"

    def test_modulo_by_zero_raises(self) -> None:
        with pytest.raises(FormulaEvalError):
            compile_expression("n % 0").evaluate(3)

    def test_and_short_circuits(self) -> None:
        """Right operand of && is not evaluated when the left is false."""
        assert compile_expression("n != 0 && 10 / n > 1").evaluate(0) == 0

    def test_or_short_circuits(self) -> None:
        assert compile_expression("n == 0 || 10 / n > 1").evaluate(0) == 1

    def test_ternary_evaluates_only_taken_branch(self) -> None:
        assert compile_expression("n == 0 ? 5 : 10 / n").evaluate(0) == 5

    def test_test_is_truthiness(self) -> None:
        expr = compile_expression("n % 3")
        assert expr.test(4) is True
        assert expr.test(3) is False

    def test_compiled_equality_by_source(self) -> None:
        assert compile_expression("n != 1") == compile_expression("n != 1")
        assert compile_expression("n != 1") != compile_expression("n!=1")


class TestLimits:
    """Resource limits on hostile expressions."""

    def test_nesting_limit(self) -> None:
        deep = "(" * (MAX_DEPTH + 1) + "n" + ")" * (MAX_DEPTH + 1)
        with pytest.raises(FormulaSyntaxError, match="nesting"):
            compile_expression(deep)

    def test_nesting_within_limit(self) -> None:
        depth = MAX_DEPTH - 1
        nested = "(" * depth + "n" + ")" * depth
        assert compile_expression(nested).evaluate(3) == 3

    def test_negation_chain_limit(self) -> None:
        with pytest.raises(FormulaSyntaxError):
            compile_expression("!" * (MAX_DEPTH + 1) + "n")

    def test_length_limit(self) -> None:
        source = "n" + " + 1" * MAX_FORMULA_LENGTH
        with pytest.raises(FormulaSyntaxError, match="too long"):
            compile_expression(source)


class TestAgreementWithGettext:
    """Evaluator matches CPython's gettext.c2py for generated expressions."""

    @given(source=c_expressions(), n=st.integers(min_value=0, max_value=10_000))
    def test_matches_c2py(self, source: str, n: int) -> None:
        reference = gettext.c2py(source)
        assert compile_expression(source).evaluate(n) == reference(n)
