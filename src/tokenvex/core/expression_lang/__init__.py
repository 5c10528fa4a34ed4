"""
Arithmetic expression language for ``calc:`` token directives.

Tokenizer, parser and evaluator for expressions such as
``round('Spacing/base' * 1.5)`` or ``var(--spacing-base) / 2``.

Usage:
    from tokenvex.core.expression_lang import ReferenceValue, evaluate_expression

    result = evaluate_expression(
        "'Spacing/base' * 2", {"'Spacing/base'": ReferenceValue(8)}
    )
    # result.value == 16.0
"""

from tokenvex.core.expression_lang.evaluator import (
    EvaluationResult,
    ExpressionEvalError,
    ReferenceValue,
    evaluate,
    evaluate_expression,
)
from tokenvex.core.expression_lang.parser import ExpressionParseError, parse_expr

__all__ = [
    "EvaluationResult",
    "ExpressionEvalError",
    "ExpressionParseError",
    "ReferenceValue",
    "evaluate",
    "evaluate_expression",
    "parse_expr",
]
