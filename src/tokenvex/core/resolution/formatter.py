"""
Calc passthrough: re-emit a ``calc:`` expression as CSS or SCSS.

Quoted path references become ``var(--name)`` (CSS) or ``$name`` (SCSS);
the token unit is applied as a trailing conversion.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..errors import AmbiguousReferenceError
from ..ir.settings import Unit
from .context import ResolutionContext
from .lookup import lookup_by_path, unescape_path

logger = logging.getLogger(__name__)

_PATH_REF_RE = re.compile(r"'((?:[^'\\]|\\.)+)'")
_CALC_TRIGGERS = ("*", "/", "+", "-", "var(")


def _rewrite_paths(expression: str, ctx: ResolutionContext, render: Callable[[str], str]) -> str:
    def substitute(match: re.Match[str]) -> str:
        path = unescape_path(match.group(1))
        try:
            entry = lookup_by_path(path, ctx.variables, ctx.collections)
        except AmbiguousReferenceError as e:
            logger.warning("%s; leaving reference unchanged", e)
            return match.group(0)
        if entry is None:
            return match.group(0)
        return render(ctx.css_name(entry.variable))

    return _PATH_REF_RE.sub(substitute, expression)


def _apply_unit(
    formatted: str,
    unit: Unit,
    ctx: ResolutionContext,
    rem_base_variable_id: str | None,
    render: Callable[[str], str],
) -> str:
    if unit in (Unit.REM, Unit.EM):
        rem_base = ctx.variables_by_id.get(rem_base_variable_id) if rem_base_variable_id else None
        if rem_base is not None:
            return f"{formatted} / {render(ctx.css_name(rem_base))} * 1{unit.value}"
        return f"{formatted} * 1{unit.value}"
    if unit == Unit.PERCENT:
        return f"{formatted} * 100%"
    if unit not in (Unit.NONE, Unit.PX):
        return f"{formatted}{unit.value}"
    return formatted


def format_for_css(
    expression: str,
    ctx: ResolutionContext,
    rem_base_variable_id: str | None,
    unit: Unit,
) -> str:
    """CSS form of ``expression``, wrapped in ``calc()`` when it has operators or vars.

    >>> format_for_css("'Spacing/base' * 2", ctx, None, Unit.PX)  # doctest: +SKIP
    'calc(var(--spacing-base) * 2)'
    """

    def render(name: str) -> str:
        return f"var(--{name})"

    formatted = _rewrite_paths(expression, ctx, render)
    formatted = _apply_unit(formatted, unit, ctx, rem_base_variable_id, render)
    if any(trigger in formatted for trigger in _CALC_TRIGGERS):
        return f"calc({formatted})"
    return formatted


def format_for_scss(
    expression: str,
    ctx: ResolutionContext,
    rem_base_variable_id: str | None,
    unit: Unit,
) -> str:
    """SCSS form of ``expression``; SCSS evaluates arithmetic itself, so no ``calc()``."""

    def render(name: str) -> str:
        return f"${name}"

    formatted = _rewrite_paths(expression, ctx, render)
    return _apply_unit(formatted, unit, ctx, rem_base_variable_id, render)
