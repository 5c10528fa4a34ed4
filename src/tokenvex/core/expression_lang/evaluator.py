"""
Evaluator for calc expressions.

``evaluate`` is a safe tree-walking interpreter over the closed set of AST
node types; it does NOT use Python's eval(). ``evaluate_expression`` is the
entry point used by the resolver: it extracts variable references from the
raw expression text, substitutes generated identifiers, and turns every
failure into a warning string instead of raising.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from tokenvex.core.expression_lang.parser import ExpressionParseError, parse_expr
from tokenvex.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    FuncCall,
    NumberLiteral,
    RefName,
    UnaryExpr,
    UnaryOp,
)
from tokenvex.core.ir.settings import Unit

# A quoted variable path ('Collection/Group/name') or a CSS var() reference
REFERENCE_RE = re.compile(r"'((?:[^'\\]|\\.)+)'|var\(--[^)]+\)")


class ExpressionEvalError(Exception):
    """Error during expression evaluation."""


@dataclass(frozen=True)
class ReferenceValue:
    """Resolved numeric value of a referenced variable."""

    value: float
    unit: Unit = Unit.PX


@dataclass
class EvaluationResult:
    """Outcome of evaluating a calc expression.

    ``value`` is None when evaluation could not produce a number; the
    reasons are listed in ``warnings``.
    """

    value: float | None
    unit: Unit = Unit.PX
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.warnings


def _js_round(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x + 0.5))


def _floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def _ceil(x: float) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else x


def _min(*args: float) -> float:
    return min(args) if args else math.inf


def _max(*args: float) -> float:
    return max(args) if args else -math.inf


_FUNCTIONS: dict[str, tuple[Callable[..., float], int | None]] = {
    # name -> (implementation, required arg count or None for variadic)
    "round": (_js_round, 1),
    "floor": (_floor, 1),
    "ceil": (_ceil, 1),
    "abs": (abs, 1),
    "min": (_min, None),
    "max": (_max, None),
}


@dataclass
class _EvalState:
    divided_by_zero: bool = False


def evaluate(expr: Expr, values: Mapping[str, float]) -> float:
    """Evaluate an expression AST against identifier values.

    Division by zero follows IEEE semantics (``inf``/``-inf``/``nan``).

    Raises:
        ExpressionEvalError: For unknown identifiers or functions.
    """
    return _interpret(expr, values, _EvalState())


def _interpret(expr: Expr, values: Mapping[str, float], state: _EvalState) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, NumberLiteral):
        return expr.value

    if isinstance(expr, RefName):
        if expr.name not in values:
            raise ExpressionEvalError(f"Undefined identifier: {expr.name}")
        return values[expr.name]

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, values, state)

    if isinstance(expr, UnaryExpr):
        operand = _interpret(expr.operand, values, state)
        return -operand if expr.op == UnaryOp.NEG else operand

    if isinstance(expr, FuncCall):
        return _interpret_func_call(expr, values, state)

    raise ExpressionEvalError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr, values: Mapping[str, float], state: _EvalState) -> float:
    left = _interpret(expr.left, values, state)
    right = _interpret(expr.right, values, state)

    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right

    if right == 0:
        state.divided_by_zero = True
        if left == 0 or math.isnan(left):
            return math.nan
        sign = math.copysign(1.0, left) * math.copysign(1.0, right)
        return math.copysign(math.inf, sign)
    return left / right


def _interpret_func_call(expr: FuncCall, values: Mapping[str, float], state: _EvalState) -> float:
    entry = _FUNCTIONS.get(expr.name)
    if entry is None:
        raise ExpressionEvalError(f"Unknown function: {expr.name}()")
    func, arity = entry
    if arity is not None and len(expr.args) != arity:
        raise ExpressionEvalError(
            f"{expr.name}() takes {arity} argument(s), got {len(expr.args)}"
        )
    args = [_interpret(arg, values, state) for arg in expr.args]
    return float(func(*args))


def _substitute_references(expression: str) -> tuple[str, dict[str, str]]:
    """Replace every reference with a generated identifier.

    Returns the rewritten source and a map of identifier -> original
    reference text. Repeated references share one identifier.
    """
    identifiers: dict[str, str] = {}
    by_text: dict[str, str] = {}

    def replace(match: re.Match[str]) -> str:
        text = match.group(0)
        if text not in by_text:
            ident = f"__ref{len(by_text)}"
            by_text[text] = ident
            identifiers[ident] = text
        return f" {by_text[text]} "

    return REFERENCE_RE.sub(replace, expression), identifiers


def reference_display_name(reference: str) -> str:
    """Human-readable form of a reference: the bare path for quoted refs."""
    if reference.startswith("'") and reference.endswith("'") and len(reference) >= 2:
        return re.sub(r"\\(.)", r"\1", reference[1:-1])
    return reference


def evaluate_expression(
    expression: str, context: Mapping[str, ReferenceValue]
) -> EvaluationResult:
    """Evaluate a calc expression against resolved reference values.

    ``context`` is keyed by the reference text exactly as written in the
    expression (``"'Spacing/base'"`` or ``"var(--spacing-base)"``).

    The result unit is the unit of the first referenced value that is not
    ``px``; ``px`` otherwise. Missing references, syntax errors and
    division by zero are reported as warnings; the first two yield a
    ``None`` value.
    """
    warnings: list[str] = []
    unit = Unit.PX

    source, identifiers = _substitute_references(expression)

    values: dict[str, float] = {}
    missing = False
    for ident, reference in identifiers.items():
        entry = context.get(reference)
        if entry is None:
            warnings.append(f"Variable '{reference_display_name(reference)}' not found")
            missing = True
            continue
        if unit == Unit.PX and entry.unit != Unit.PX:
            unit = entry.unit
        values[ident] = entry.value

    if missing:
        return EvaluationResult(value=None, unit=unit, warnings=warnings)

    state = _EvalState()
    try:
        value = _interpret(parse_expr(source), values, state)
    except (ExpressionParseError, ExpressionEvalError) as e:
        warnings.append(f"Expression syntax error: {e}")
        return EvaluationResult(value=None, unit=unit, warnings=warnings)

    if state.divided_by_zero:
        warnings.append("Division by zero")
    return EvaluationResult(value=value, unit=unit, warnings=warnings)
