"""
Host styles to CSS variables, CSS utility classes, SCSS variables and
SCSS mixins.

These run the style resolvers directly on host records; bound variables
are emitted as ``var(--name)`` (``$name`` in SCSS) when the variable is
known.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..converters.common import rule_block
from ..converters.scss import convert_var_to_scss
from ..core.ir.settings import ConversionSettings, StyleType, TokenConfig
from ..core.ir.styles import StyleCollection
from ..core.resolution.styles import (
    has_box_shadow,
    resolve_blur_filter,
    resolve_effect_value,
    resolve_grid_value,
    resolve_paint_value,
    resolve_text_properties,
)
from ..core.transforms.description import resolve_token_config
from ..core.transforms.names import (
    to_prefixed_name,
    to_style_class_name,
    to_style_css_name,
    to_style_var_name,
)

STYLES_BANNER = "/* ═══ Styles ═══ */"

_SECTION_TITLES = {
    StyleType.PAINT: "Paint",
    StyleType.TEXT: "Text",
    StyleType.EFFECT: "Effect",
    StyleType.GRID: "Grid",
}


def _style_config(description: str, settings: ConversionSettings) -> TokenConfig:
    return resolve_token_config(description, settings.base_token_config())


def _wanted(styles: StyleCollection, settings: ConversionSettings) -> list[StyleType]:
    return [
        StyleType(style_type)
        for style_type in settings.style_types
        if getattr(styles, StyleType(style_type).value)
    ]


def _style_declarations(
    styles: StyleCollection,
    settings: ConversionSettings,
    style_type: StyleType,
    names: Mapping[str, str] | None,
) -> list[tuple[str, list[tuple[str, str]]]]:
    """``(style name, [(suffix, value), ...])`` per style of one category.

    Text styles produce one entry per CSS property; other categories a
    single entry with an empty suffix.
    """
    entries: list[tuple[str, list[tuple[str, str]]]] = []
    if style_type == StyleType.PAINT:
        for paint in styles.paint:
            value = resolve_paint_value(paint, _style_config(paint.description, settings), names)
            entries.append((paint.name, [("", value)]))
    elif style_type == StyleType.TEXT:
        for text in styles.text:
            props = resolve_text_properties(text, _style_config(text.description, settings))
            entries.append((text.name, [(f"-{prop}", value) for prop, value in props.items()]))
    elif style_type == StyleType.EFFECT:
        for effect in styles.effect:
            value = resolve_effect_value(effect, _style_config(effect.description, settings), names)
            entries.append((effect.name, [("", value)]))
    else:
        for grid in styles.grid:
            entries.append((grid.name, [("", resolve_grid_value(grid))]))
    return entries


# =============================================================================
# CSS
# =============================================================================


def export_styles_to_css_variables(
    styles: StyleCollection,
    settings: ConversionSettings,
    indent: str = "  ",
    variable_css_names: Mapping[str, str] | None = None,
) -> list[str]:
    """Declarations for a selector block, one section per style category."""
    wanted = _wanted(styles, settings)
    if not wanted:
        return []

    lines = ["", f"{indent}{STYLES_BANNER}"]
    for style_type in wanted:
        lines.append(f"{indent}/* {_SECTION_TITLES[style_type]} Styles */")
        for name, values in _style_declarations(styles, settings, style_type, variable_css_names):
            var_name = to_style_var_name(name, settings.prefix)
            lines.extend(f"{indent}{var_name}{suffix}: {value};" for suffix, value in values)
    return lines


def export_styles_to_css_classes(
    styles: StyleCollection,
    settings: ConversionSettings,
    variable_css_names: Mapping[str, str] | None = None,
) -> list[str]:
    """Utility classes: color/bg/border for paints, typography, effects and grids."""
    lines: list[str] = []
    wanted = _wanted(styles, settings)

    if StyleType.PAINT in wanted:
        lines.append("/* Paint Style Classes */")
        for paint in styles.paint:
            class_name = to_style_class_name(paint.name, settings.prefix)
            value = resolve_paint_value(
                paint, _style_config(paint.description, settings), variable_css_names
            )
            lines.extend(rule_block(f".{class_name}", [("color", value)]))
            lines.extend(rule_block(f".bg-{class_name}", [("background-color", value)]))
            lines.extend(rule_block(f".border-{class_name}", [("border-color", value)]))
            lines.append("")

    if StyleType.TEXT in wanted:
        lines.append("/* Text Style Classes */")
        for text in styles.text:
            class_name = to_style_class_name(text.name, settings.prefix)
            props = resolve_text_properties(text, _style_config(text.description, settings))
            lines.extend(rule_block(f".{class_name}", props.items()))
            lines.append("")

    if StyleType.EFFECT in wanted:
        lines.append("/* Effect Style Classes */")
        for effect in styles.effect:
            class_name = to_style_class_name(effect.name, settings.prefix)
            value = resolve_effect_value(
                effect, _style_config(effect.description, settings), variable_css_names
            )
            declarations: list[tuple[str, str]] = []
            if has_box_shadow(effect):
                declarations.append(("box-shadow", value))
            if layer_blur := resolve_blur_filter(effect, "LAYER_BLUR", variable_css_names):
                declarations.append(("filter", layer_blur))
            if backdrop := resolve_blur_filter(effect, "BACKGROUND_BLUR", variable_css_names):
                declarations.append(("backdrop-filter", backdrop))
            lines.extend(rule_block(f".{class_name}", declarations))
            lines.append("")

    if StyleType.GRID in wanted:
        lines.append("/* Grid Style Classes */")
        for grid in styles.grid:
            class_name = to_style_class_name(grid.name, settings.prefix)
            declarations = [
                ("display", "grid"),
                ("grid-template-columns", resolve_grid_value(grid)),
            ]
            lines.extend(rule_block(f".{class_name}", declarations))
            lines.append("")

    return lines


def style_variable_names(styles: StyleCollection, settings: ConversionSettings) -> list[str]:
    """Every ``--name`` ``export_styles_to_css_variables`` declares."""
    names: list[str] = []
    for style_type in _wanted(styles, settings):
        for name, values in _style_declarations(styles, settings, style_type, None):
            var_name = to_style_var_name(name, settings.prefix)
            names.extend(f"{var_name}{suffix}" for suffix, _ in values)
    return names


def style_class_names(styles: StyleCollection, settings: ConversionSettings) -> list[str]:
    """Every class name ``export_styles_to_css_classes`` declares."""
    names: list[str] = []
    wanted = _wanted(styles, settings)
    for style_type in wanted:
        for style in getattr(styles, style_type.value):
            class_name = to_style_class_name(style.name, settings.prefix)
            if style_type == StyleType.PAINT:
                names.extend([class_name, f"bg-{class_name}", f"border-{class_name}"])
            else:
                names.append(class_name)
    return names


# =============================================================================
# SCSS
# =============================================================================


def _scss_name(name: str, settings: ConversionSettings) -> str:
    return f"${to_prefixed_name(to_style_css_name(name), settings.prefix)}"


def export_styles_to_scss_variables(
    styles: StyleCollection,
    settings: ConversionSettings,
    variable_css_names: Mapping[str, str] | None = None,
) -> list[str]:
    """``$name: value;`` per style, with a comment header per category."""
    lines: list[str] = []
    for style_type in _wanted(styles, settings):
        lines.append(f"// {_SECTION_TITLES[style_type]} Styles")
        for name, values in _style_declarations(styles, settings, style_type, variable_css_names):
            scss_name = _scss_name(name, settings)
            lines.extend(
                f"{scss_name}{suffix}: {convert_var_to_scss(value)};" for suffix, value in values
            )
    return lines


def _mixin(name: str, declarations: Sequence[tuple[str, str]], parameter: str = "") -> list[str]:
    return [
        f"@mixin {name}{parameter} {{",
        *(f"  {prop}: {convert_var_to_scss(value)};" for prop, value in declarations),
        "}",
        "",
    ]


def export_styles_to_scss_mixins(
    styles: StyleCollection,
    settings: ConversionSettings,
    variable_css_names: Mapping[str, str] | None = None,
) -> list[str]:
    """One ``@mixin`` per style; paint mixins take the target property."""
    lines: list[str] = []
    wanted = _wanted(styles, settings)

    if StyleType.PAINT in wanted:
        lines.append("// Paint Style Mixins")
        for paint in styles.paint:
            name = to_style_class_name(paint.name, settings.prefix)
            value = resolve_paint_value(
                paint, _style_config(paint.description, settings), variable_css_names
            )
            lines.extend(_mixin(name, [("#{$property}", value)], "($property: color)"))

    if StyleType.TEXT in wanted:
        lines.append("// Text Style Mixins")
        for text in styles.text:
            name = to_style_class_name(text.name, settings.prefix)
            props = resolve_text_properties(text, _style_config(text.description, settings))
            lines.extend(_mixin(name, list(props.items())))

    if StyleType.EFFECT in wanted:
        lines.append("// Effect Style Mixins")
        for effect in styles.effect:
            name = to_style_class_name(effect.name, settings.prefix)
            value = resolve_effect_value(
                effect, _style_config(effect.description, settings), variable_css_names
            )
            lines.extend(_mixin(name, [("box-shadow", value)]))

    if StyleType.GRID in wanted:
        lines.append("// Grid Style Mixins")
        for grid in styles.grid:
            name = to_style_class_name(grid.name, settings.prefix)
            declarations = [
                ("display", "grid"),
                ("grid-template-columns", resolve_grid_value(grid)),
            ]
            lines.extend(_mixin(name, declarations))

    return lines
