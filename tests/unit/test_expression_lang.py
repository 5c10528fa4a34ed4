"""Tests for the calc expression tokenizer, parser and evaluator."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tokenvex.core.expression_lang import (
    ExpressionParseError,
    ReferenceValue,
    evaluate,
    evaluate_expression,
    parse_expr,
)
from tokenvex.core.expression_lang.tokenizer import TokenKind, tokenize
from tokenvex.core.ir.expressions import BinaryExpr, BinaryOp, FuncCall, NumberLiteral
from tokenvex.core.ir.settings import Unit

# =============================================================================
# Tokenizer / Parser
# =============================================================================


class TestTokenizer:
    def test_kinds(self):
        kinds = [t.kind for t in tokenize("round(a * 1.5, .5)")]
        assert kinds == [
            TokenKind.IDENT,
            TokenKind.LPAREN,
            TokenKind.IDENT,
            TokenKind.STAR,
            TokenKind.NUMBER,
            TokenKind.COMMA,
            TokenKind.NUMBER,
            TokenKind.RPAREN,
            TokenKind.EOF,
        ]

    def test_unexpected_character(self):
        with pytest.raises(ExpressionParseError):
            parse_expr("2 % 3")


class TestParser:
    def test_precedence(self):
        expr = parse_expr("1 + 2 * 3")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.ADD
        assert isinstance(expr.right, BinaryExpr)
        assert expr.right.op == BinaryOp.MUL

    def test_function_call(self):
        expr = parse_expr("max(1, 2, 3)")
        assert isinstance(expr, FuncCall)
        assert expr.name == "max"
        assert len(expr.args) == 3

    def test_literal(self):
        assert parse_expr("42") == NumberLiteral(value=42)

    @pytest.mark.parametrize("source", ["", "1 +", "(1 + 2", "1 2", "round(1,)"])
    def test_invalid(self, source):
        with pytest.raises(ExpressionParseError):
            parse_expr(source)


# =============================================================================
# Evaluator
# =============================================================================


class TestEvaluate:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1 + 2 * 3", 7),
            ("(1 + 2) * 3", 9),
            ("10 - 4 - 3", 3),
            ("12 / 4 / 3", 1),
            ("-2 * -3", 6),
            ("round(2.5)", 3),
            ("round(-2.5)", -2),
            ("floor(2.7)", 2),
            ("ceil(2.1)", 3),
            ("abs(-4)", 4),
            ("min(3, 1, 2)", 1),
            ("max(3, 1, 2)", 3),
        ],
    )
    def test_arithmetic(self, source, expected):
        assert evaluate(parse_expr(source), {}) == expected

    def test_identifiers(self):
        assert evaluate(parse_expr("base * 2"), {"base": 8}) == 16

    @given(
        st.integers(min_value=-1000, max_value=1000),
        st.integers(min_value=-1000, max_value=1000),
        st.integers(min_value=-1000, max_value=1000),
    )
    def test_multiplication_binds_tighter(self, a, b, c):
        assert evaluate(parse_expr(f"{a} + {b} * {c}"), {}) == a + b * c
        assert evaluate(parse_expr(f"{a} - {b} * {c}"), {}) == a - b * c
        assert evaluate(parse_expr(f"({a} + {b}) * {c}"), {}) == (a + b) * c


class TestEvaluateExpression:
    def test_quoted_references(self):
        context = {"'a'": ReferenceValue(2), "'b'": ReferenceValue(3)}
        result = evaluate_expression("'a' + 'b' * 4", context)
        assert result.value == 14
        assert result.unit == Unit.PX
        assert result.warnings == []
        assert result.ok

    def test_var_references(self):
        context = {"var(--spacing-base)": ReferenceValue(8)}
        result = evaluate_expression("var(--spacing-base) / 2", context)
        assert result.value == 4

    def test_paths_with_slashes_and_spaces(self):
        context = {"'Spacing/Base Size'": ReferenceValue(10)}
        assert evaluate_expression("'Spacing/Base Size' * 3", context).value == 30

    def test_unit_is_first_non_px_reference(self):
        context = {
            "'a'": ReferenceValue(1, Unit.PX),
            "'b'": ReferenceValue(2, Unit.REM),
            "'c'": ReferenceValue(3, Unit.EM),
        }
        assert evaluate_expression("'a' + 'b' + 'c'", context).unit == Unit.REM

    def test_no_references_is_px(self):
        assert evaluate_expression("2 * 3", {}).unit == Unit.PX

    def test_all_missing_references_are_reported(self):
        result = evaluate_expression("'a' + 'b'", {})
        assert result.value is None
        assert result.warnings == ["Variable 'a' not found", "Variable 'b' not found"]

    def test_division_by_zero(self):
        result = evaluate_expression("'a' / 0", {"'a'": ReferenceValue(4)})
        assert result.value == math.inf
        assert result.warnings == ["Division by zero"]
        assert not result.ok

    def test_negative_division_by_zero(self):
        assert evaluate_expression("-4 / 0", {}).value == -math.inf

    def test_zero_by_zero_is_nan(self):
        result = evaluate_expression("0 / 0", {})
        assert result.value is not None
        assert math.isnan(result.value)

    @pytest.mark.parametrize("source", ["2 +", "foo(2)", "unknown * 2", "round(1, 2)"])
    def test_syntax_errors(self, source):
        result = evaluate_expression(source, {})
        assert result.value is None
        assert len(result.warnings) == 1
        assert "syntax" in result.warnings[0].lower()
