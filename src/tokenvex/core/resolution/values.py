"""
Variable value resolution: one host value to a CSS-ready string.
"""

from __future__ import annotations

import logging
import math

from ..config import UNRESOLVED_ALIAS
from ..ir.settings import ConversionSettings, OutputFormat, TokenConfig
from ..ir.variables import RGBA, ResolvedType, Variable, VariableAlias, VariableValue
from ..transforms.colors import format_rgba, rgb_to_hex
from ..transforms.description import resolve_token_config
from ..transforms.units import format_number, js_number
from .aliases import AliasFailure, resolve_alias, resolve_to_number
from .context import ResolutionContext
from .expressions import resolve_expression
from .formatter import format_for_css, format_for_scss
from .lookup import lookup_by_path

logger = logging.getLogger(__name__)


def _default_mode_number(variable: Variable, ctx: ResolutionContext) -> float | None:
    collection = ctx.collection_of(variable)
    mode_id = collection.default_mode_id if collection else next(iter(variable.values_by_mode), "")
    value, _ = resolve_to_number(variable, mode_id, ctx)
    return value


def effective_config(
    variable: Variable,
    ctx: ResolutionContext,
    settings: ConversionSettings | None = None,
) -> TokenConfig:
    """Token config for ``variable``: defaults, then settings, then its description.

    A remBase given as a variable path (``unit: rem('Typography/rem-base')``)
    or as the global remBase variable is resolved through the variable's
    default mode. Non-positive or unresolvable values keep the numeric
    remBase.

    Raises:
        AmbiguousReferenceError: If the remBase path matches variables in
            several collections.
    """
    base = settings.base_token_config() if settings is not None else ctx.base_config
    config = resolve_token_config(variable.description, base)

    rem_base_variable: Variable | None = None
    if config.rem_base_variable_path:
        entry = lookup_by_path(config.rem_base_variable_path, ctx.variables, ctx.collections)
        if entry is None:
            logger.warning(
                "remBase variable '%s' not found for %s",
                config.rem_base_variable_path,
                variable.name,
            )
        else:
            rem_base_variable = entry.variable
    elif ctx.rem_base_variable_id:
        rem_base_variable = ctx.variables_by_id.get(ctx.rem_base_variable_id)

    if rem_base_variable is not None and rem_base_variable.id != variable.id:
        rem_base = _default_mode_number(rem_base_variable, ctx)
        if rem_base is not None and rem_base > 0:
            config = config.merged(rem_base=rem_base)
    return config


def _quote(value: str) -> str:
    escaped = value.replace('"', '\\"')
    return f'"{escaped}"'


def _is_finite_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and math.isfinite(value)


def _fallback(value: VariableValue | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float | int):
        return js_number(value)
    if isinstance(value, RGBA):
        return rgb_to_hex(value)
    if isinstance(value, VariableAlias):
        return UNRESOLVED_ALIAS
    return str(value)


def _resolve_calc(
    mode_id: str, config: TokenConfig, ctx: ResolutionContext
) -> str | None:
    expression = config.expression or ""
    if ctx.export_as_calc_expressions and ctx.output_format is not None:
        if ctx.output_format == OutputFormat.SCSS:
            return format_for_scss(expression, ctx, ctx.rem_base_variable_id, config.unit)
        return format_for_css(expression, ctx, ctx.rem_base_variable_id, config.unit)

    result = resolve_expression(config, mode_id, ctx)
    if result.value is not None and not result.warnings:
        return format_number(result.value, config.merged(unit=result.unit))

    logger.warning("Expression evaluation warnings for %r: %s", expression, result.warnings)
    return None


def resolve_value(
    value: VariableValue,
    mode_id: str,
    resolved_type: ResolvedType,
    config: TokenConfig,
    ctx: ResolutionContext,
    origin_id: str | None = None,
) -> str:
    """Render ``value`` as a CSS (or SCSS) value.

    - numeric tokens with a ``calc:`` directive are passed through or
      evaluated; on any warning the direct value is used instead
    - aliases become ``var(--target)``, or a sentinel comment when the
      chain is circular or the target is missing
    - colors are formatted per ``config.color_format``; numbers per its
      unit; strings are double-quoted; booleans are ``1``/``0``
    """
    if config.expression and resolved_type == ResolvedType.FLOAT:
        rendered = _resolve_calc(mode_id, config, ctx)
        if rendered is not None:
            return rendered

    if isinstance(value, VariableAlias):
        resolution = resolve_alias(value, mode_id, ctx, origin_id=origin_id)
        if resolution.failure is AliasFailure.CIRCULAR:
            return resolution.failure.sentinel
        if resolution.target is None:
            return AliasFailure.UNRESOLVED.sentinel
        return f"var(--{ctx.css_name(resolution.target)})"

    if resolved_type == ResolvedType.COLOR and isinstance(value, RGBA):
        return format_rgba(value, config.color_format)
    if resolved_type == ResolvedType.FLOAT and _is_finite_number(value):
        return format_number(value, config)
    if resolved_type == ResolvedType.STRING and isinstance(value, str):
        return _quote(value)
    if resolved_type == ResolvedType.BOOLEAN and isinstance(value, bool):
        return "1" if value else "0"

    return _fallback(value)


def resolve_variable(
    variable: Variable, mode_id: str, ctx: ResolutionContext, config: TokenConfig | None = None
) -> str | None:
    """Resolve ``variable`` in ``mode_id``; None when it has no value for that mode."""
    value = variable.values_by_mode.get(mode_id)
    if value is None:
        logger.debug("Skipping %s: no value for mode %s", variable.name, mode_id)
        return None
    if config is None:
        config = effective_config(variable, ctx)
    return resolve_value(value, mode_id, variable.resolved_type, config, ctx, origin_id=variable.id)
