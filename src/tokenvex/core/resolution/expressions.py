"""
Resolve ``calc:`` expressions against the variable set.
"""

from __future__ import annotations

import logging

from ..expression_lang import EvaluationResult, ReferenceValue, evaluate_expression
from ..expression_lang.evaluator import REFERENCE_RE, reference_display_name
from ..ir.settings import TokenConfig, Unit
from ..ir.variables import ResolvedType
from .aliases import resolve_to_number
from .context import ResolutionContext
from .lookup import LookupEntry, lookup_by_path, lookup_variable, unescape_path

logger = logging.getLogger(__name__)


def _lookup_reference(
    reference: str, path: str | None, ctx: ResolutionContext
) -> LookupEntry | None:
    if path is not None:
        return lookup_by_path(path, ctx.variables, ctx.collections)
    return lookup_variable(reference, ctx.css_lookup)


def resolve_expression(
    config: TokenConfig, mode_id: str, ctx: ResolutionContext
) -> EvaluationResult:
    """Evaluate ``config.expression`` for ``mode_id``.

    Each reference is resolved to a number (following aliases); references
    to non-numeric variables or to values that cannot be resolved produce
    warnings. A unit set explicitly on the token (anything but ``px``)
    overrides the inferred unit.

    Raises:
        AmbiguousReferenceError: If a path reference matches variables in
            several collections.
    """
    expression = config.expression
    if not expression:
        return EvaluationResult(value=None, unit=config.unit, warnings=["No expression provided"])

    context: dict[str, ReferenceValue] = {}
    warnings: list[str] = []

    for match in REFERENCE_RE.finditer(expression):
        reference = match.group(0)
        if reference in context:
            continue
        path = unescape_path(match.group(1)) if match.group(1) is not None else None
        entry = _lookup_reference(reference, path, ctx)
        if entry is None:
            # reported by the evaluator as a missing variable
            continue

        display = reference_display_name(reference)
        variable = entry.variable
        if variable.resolved_type != ResolvedType.FLOAT:
            warnings.append(
                f"Variable '{display}' is not numeric (type: {variable.resolved_type.value})"
            )
            continue

        value, unit = resolve_to_number(variable, mode_id, ctx)
        if value is None:
            warnings.append(f"Could not resolve value for '{display}'")
            continue
        context[reference] = ReferenceValue(value=value, unit=unit)

    result = evaluate_expression(expression, context)
    result.warnings = [*warnings, *result.warnings]

    if config.unit != Unit.PX:
        result.unit = config.unit
    return result
