"""
Style value resolvers: paint, text, effect and grid styles to CSS values.

Bound variables are rendered as ``var(--name)`` when ``variable_css_names``
(variable id to CSS name, without ``--``) knows the variable; otherwise
the literal style value is used.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from ..config import UNSUPPORTED_PAINT
from ..ir.settings import TokenConfig
from ..ir.styles import (
    BlurEffect,
    BoundVariable,
    ColorStop,
    EffectBoundVariables,
    EffectStyle,
    GradientPaint,
    GridStyle,
    LayoutGrid,
    LineHeightUnit,
    PaintStyle,
    ShadowEffect,
    SolidPaint,
    TextStyle,
)
from ..ir.variables import RGBA
from ..transforms.colors import format_rgba
from ..transforms.units import clean_number, format_number, js_number

VariableCssNames = Mapping[str, str]

_TEXT_CASE_TRANSFORMS = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}


def _bound(variable_id: str | None, names: VariableCssNames | None) -> str | None:
    if variable_id is None or names is None:
        return None
    css_name = names.get(variable_id)
    return f"var(--{css_name})" if css_name else None


def _bound_id(binding: BoundVariable | None) -> str | None:
    return binding.variable_id if binding is not None else None


# =============================================================================
# Paint
# =============================================================================


def resolve_paint_value(
    style: PaintStyle,
    config: TokenConfig,
    variable_css_names: VariableCssNames | None = None,
) -> str:
    """CSS value of the style's first paint: a color or a gradient."""
    if not style.paints:
        return "transparent"

    paint = style.paints[0]
    if isinstance(paint, SolidPaint):
        bindings = style.paint_bound_variables[0] if style.paint_bound_variables else None
        bound = _bound(_bound_id(bindings.color if bindings else None), variable_css_names)
        if bound:
            return bound
        color = RGBA(r=paint.color.r, g=paint.color.g, b=paint.color.b, a=paint.opacity)
        return format_rgba(color, config.color_format)

    if isinstance(paint, GradientPaint):
        stops = _format_gradient_stops(paint.gradient_stops, config, variable_css_names)
        if paint.type == "GRADIENT_LINEAR":
            angle = gradient_angle(paint.gradient_transform)
            return f"linear-gradient({angle}deg, {stops})"
        if paint.type == "GRADIENT_ANGULAR":
            return f"conic-gradient({stops})"
        # diamond gradients have no CSS equivalent; radial is the closest
        return f"radial-gradient({stops})"

    return UNSUPPORTED_PAINT


def gradient_angle(transform: list[list[float]]) -> int:
    """CSS angle in degrees from a 2x3 gradient transform."""
    a, b = transform[0][0], transform[0][1]
    return math.floor(math.degrees(math.atan2(b, a)) + 90 + 0.5)


def _format_gradient_stops(
    stops: list[ColorStop],
    config: TokenConfig,
    variable_css_names: VariableCssNames | None,
) -> str:
    rendered: list[str] = []
    for stop in stops:
        alias = stop.bound_variables.get("color")
        color = _bound(alias.id if alias else None, variable_css_names)
        if color is None:
            color = format_rgba(stop.color, config.color_format)
        rendered.append(f"{color} {clean_number(stop.position * 100, config.precision)}%")
    return ", ".join(rendered)


# =============================================================================
# Text
# =============================================================================


def resolve_text_properties(style: TextStyle, config: TokenConfig) -> dict[str, str]:
    """CSS property to value mapping for a text style, in declaration order."""
    props: dict[str, str] = {
        "font-family": f'"{style.font_family}", sans-serif',
        "font-size": format_number(style.font_size, config),
        "font-weight": str(style.font_weight),
    }

    if "italic" in style.font_style.lower():
        props["font-style"] = "italic"

    if style.line_height.unit == LineHeightUnit.PIXELS:
        props["line-height"] = format_number(style.line_height.value, config)
    elif style.line_height.unit == LineHeightUnit.PERCENT:
        props["line-height"] = f"{clean_number(style.line_height.value, config.precision)}%"

    if style.letter_spacing.unit == "PIXELS":
        props["letter-spacing"] = format_number(style.letter_spacing.value, config)
    elif style.letter_spacing.unit == "PERCENT":
        # letter-spacing is relative to the font size
        em = clean_number(style.letter_spacing.value / 100, config.precision)
        props["letter-spacing"] = f"{em}em"

    if style.text_decoration != "NONE":
        props["text-decoration"] = style.text_decoration.lower().replace("_", "-", 1)

    if transform := _TEXT_CASE_TRANSFORMS.get(style.text_case):
        props["text-transform"] = transform

    return props


# =============================================================================
# Effects
# =============================================================================


def _px(value: float) -> str:
    return f"{js_number(value)}px"


def _shadow(
    effect: ShadowEffect,
    config: TokenConfig,
    bindings: EffectBoundVariables | None,
    names: VariableCssNames | None,
) -> str:
    b = bindings or EffectBoundVariables()
    x = _bound(_bound_id(b.offset_x), names) or _px(effect.offset.x)
    y = _bound(_bound_id(b.offset_y), names) or _px(effect.offset.y)
    blur = _bound(_bound_id(b.radius), names) or _px(effect.radius)
    spread = _bound(_bound_id(b.spread), names) or _px(effect.spread)
    color = _bound(_bound_id(b.color), names) or format_rgba(effect.color, config.color_format)
    inset = "inset " if effect.type == "INNER_SHADOW" else ""
    return f"{inset}{x} {y} {blur} {spread} {color}"


def _effect_bindings(style: EffectStyle, index: int) -> EffectBoundVariables | None:
    if index < len(style.effect_bound_variables):
        return style.effect_bound_variables[index]
    return None


def _blur(
    effect: BlurEffect,
    bindings: EffectBoundVariables | None,
    names: VariableCssNames | None,
) -> str:
    radius = _bound(_bound_id(bindings.radius if bindings else None), names)
    return f"blur({radius or _px(effect.radius)})"


def resolve_effect_value(
    style: EffectStyle,
    config: TokenConfig,
    variable_css_names: VariableCssNames | None = None,
) -> str:
    """``box-shadow`` list for shadow effects, else a ``blur()`` filter, else ``none``."""
    shadows: list[str] = []
    filters: list[str] = []

    for index, effect in enumerate(style.effects):
        if not effect.visible:
            continue
        bindings = _effect_bindings(style, index)
        if isinstance(effect, ShadowEffect):
            shadows.append(_shadow(effect, config, bindings, variable_css_names))
        elif isinstance(effect, BlurEffect):
            filters.append(_blur(effect, bindings, variable_css_names))

    if shadows:
        return ", ".join(shadows)
    if filters:
        return " ".join(filters)
    return "none"


def resolve_blur_filter(
    style: EffectStyle,
    blur_type: str,
    variable_css_names: VariableCssNames | None = None,
) -> str | None:
    """``blur()`` functions for the visible blurs of ``blur_type``, or None.

    ``blur_type`` is ``LAYER_BLUR`` (``filter``) or ``BACKGROUND_BLUR``
    (``backdrop-filter``).
    """
    blurs = [
        _blur(effect, _effect_bindings(style, index), variable_css_names)
        for index, effect in enumerate(style.effects)
        if isinstance(effect, BlurEffect) and effect.visible and effect.type == blur_type
    ]
    return " ".join(blurs) if blurs else None


def has_box_shadow(style: EffectStyle) -> bool:
    return any(isinstance(e, ShadowEffect) and e.visible for e in style.effects)


# =============================================================================
# Grids
# =============================================================================


def _track_count(grid: LayoutGrid) -> str:
    count = grid.count
    if count is None or count <= 0 or math.isinf(count):
        return "auto-fill"
    return js_number(count)


def resolve_grid_value(style: GridStyle) -> str:
    """``grid-template-columns`` value from the first visible column and row grids."""
    grids = [g for g in style.layout_grids if g.visible]
    values: list[str] = []
    for pattern in ("COLUMNS", "ROWS"):
        grid = next((g for g in grids if g.pattern == pattern), None)
        if grid is not None:
            values.append(f"repeat({_track_count(grid)}, {_px(grid.section_size)})")
    return " / ".join(values) or "none"
