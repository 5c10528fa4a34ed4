"""Tests for paint, text, effect and grid style resolvers."""

from __future__ import annotations

import pytest

from tokenvex.core.config import UNSUPPORTED_PAINT
from tokenvex.core.ir.settings import ColorFormat, TokenConfig, Unit
from tokenvex.core.ir.styles import (
    BlurEffect,
    BoundVariable,
    ColorStop,
    EffectBoundVariables,
    EffectStyle,
    GradientPaint,
    GridStyle,
    ImagePaint,
    LayoutGrid,
    LetterSpacing,
    LineHeight,
    LineHeightUnit,
    PaintBoundVariables,
    PaintStyle,
    ShadowEffect,
    SolidPaint,
    TextStyle,
    Vector,
)
from tokenvex.core.ir.variables import RGB, RGBA, VariableAlias
from tokenvex.core.resolution.styles import (
    gradient_angle,
    has_box_shadow,
    resolve_blur_filter,
    resolve_effect_value,
    resolve_grid_value,
    resolve_paint_value,
    resolve_text_properties,
)

RED = RGBA(r=1, g=0, b=0)
BLUE = RGBA(r=0, g=0, b=1)
BLACK_25 = RGBA(r=0, g=0, b=0, a=0.25)


def _stops() -> list[ColorStop]:
    return [ColorStop(position=0, color=RED), ColorStop(position=1, color=BLUE)]


# =============================================================================
# Paint
# =============================================================================


class TestPaint:
    def test_no_paints_is_transparent(self):
        style = PaintStyle(id="p", name="Empty")
        assert resolve_paint_value(style, TokenConfig()) == "transparent"

    def test_solid_uses_opacity_as_alpha(self):
        style = PaintStyle(
            id="p", name="Brand", paints=[SolidPaint(color=RGB(r=1, g=0, b=0), opacity=0.5)]
        )
        assert resolve_paint_value(style, TokenConfig()) == "#ff000080"
        rgba = TokenConfig(color_format=ColorFormat.RGBA)
        assert resolve_paint_value(style, rgba) == "rgba(255, 0, 0, 0.500)"

    def test_bound_color_variable(self):
        style = PaintStyle(
            id="p",
            name="Brand",
            paints=[SolidPaint(color=RGB(r=1, g=0, b=0))],
            paint_bound_variables=[PaintBoundVariables(color=BoundVariable(variable_id="v1"))],
        )
        names = {"v1": "color-primary"}
        assert resolve_paint_value(style, TokenConfig(), names) == "var(--color-primary)"
        assert resolve_paint_value(style, TokenConfig(), {}) == "#ff0000"

    def test_linear_gradient(self):
        paint = GradientPaint(type="GRADIENT_LINEAR", gradient_stops=_stops())
        style = PaintStyle(id="p", name="Fade", paints=[paint])
        assert (
            resolve_paint_value(style, TokenConfig())
            == "linear-gradient(90deg, #ff0000 0%, #0000ff 100%)"
        )

    def test_gradient_angle_from_transform(self):
        assert gradient_angle([[0.0, 1.0, 0.0], [-1.0, 0.0, 1.0]]) == 180
        assert gradient_angle([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]) == 90

    @pytest.mark.parametrize(
        ("paint_type", "function"),
        [
            ("GRADIENT_RADIAL", "radial-gradient"),
            ("GRADIENT_DIAMOND", "radial-gradient"),
            ("GRADIENT_ANGULAR", "conic-gradient"),
        ],
    )
    def test_other_gradients(self, paint_type, function):
        style = PaintStyle(
            id="p", name="G", paints=[GradientPaint(type=paint_type, gradient_stops=_stops())]
        )
        assert resolve_paint_value(style, TokenConfig()) == f"{function}(#ff0000 0%, #0000ff 100%)"

    def test_bound_gradient_stop(self):
        stops = [
            ColorStop(
                position=0.25,
                color=RED,
                bound_variables={"color": VariableAlias(id="v1")},
            )
        ]
        style = PaintStyle(
            id="p", name="G", paints=[GradientPaint(type="GRADIENT_RADIAL", gradient_stops=stops)]
        )
        value = resolve_paint_value(style, TokenConfig(), {"v1": "red"})
        assert value == "radial-gradient(var(--red) 25%)"

    def test_image_paint_is_unsupported(self):
        style = PaintStyle(id="p", name="Photo", paints=[ImagePaint(type="IMAGE")])
        assert resolve_paint_value(style, TokenConfig()) == UNSUPPORTED_PAINT


# =============================================================================
# Text
# =============================================================================


class TestText:
    def test_minimal(self):
        style = TextStyle(id="t", name="Body", font_family="Inter", font_size=16)
        assert resolve_text_properties(style, TokenConfig()) == {
            "font-family": '"Inter", sans-serif',
            "font-size": "16px",
            "font-weight": "400",
            "letter-spacing": "0px",
        }

    def test_full(self):
        style = TextStyle(
            id="t",
            name="Heading",
            font_family="Inter",
            font_style="Bold Italic",
            font_size=32,
            font_weight=700,
            line_height=LineHeight(unit=LineHeightUnit.PERCENT, value=120),
            letter_spacing=LetterSpacing(unit="PERCENT", value=-2),
            text_decoration="STRIKETHROUGH",
            text_case="UPPER",
        )
        props = resolve_text_properties(style, TokenConfig(unit=Unit.REM))
        assert props == {
            "font-family": '"Inter", sans-serif',
            "font-size": "2rem",
            "font-weight": "700",
            "font-style": "italic",
            "line-height": "120%",
            "letter-spacing": "-0.02em",
            "text-decoration": "strikethrough",
            "text-transform": "uppercase",
        }

    def test_pixel_line_height_and_spacing(self):
        style = TextStyle(
            id="t",
            name="Caption",
            font_family="Inter",
            font_size=12,
            line_height=LineHeight(unit=LineHeightUnit.PIXELS, value=18),
            letter_spacing=LetterSpacing(unit="PIXELS", value=0.5),
        )
        props = resolve_text_properties(style, TokenConfig())
        assert props["line-height"] == "18px"
        assert props["letter-spacing"] == "0.5px"

    def test_auto_line_height_is_omitted(self):
        style = TextStyle(id="t", name="Body", font_family="Inter", font_size=16)
        assert "line-height" not in resolve_text_properties(style, TokenConfig())


# =============================================================================
# Effects
# =============================================================================


class TestEffects:
    def test_drop_and_inner_shadows(self):
        style = EffectStyle(
            id="e",
            name="Elevation",
            effects=[
                ShadowEffect(
                    type="DROP_SHADOW", color=BLACK_25, offset=Vector(x=0, y=4), radius=8
                ),
                ShadowEffect(type="INNER_SHADOW", color=BLACK_25, radius=2, spread=1),
            ],
        )
        assert resolve_effect_value(style, TokenConfig()) == (
            "0px 4px 8px 0px #00000040, inset 0px 0px 2px 1px #00000040"
        )
        assert has_box_shadow(style)
        assert resolve_blur_filter(style, "LAYER_BLUR") is None

    def test_hidden_effects_are_ignored(self):
        style = EffectStyle(
            id="e",
            name="Hidden",
            effects=[ShadowEffect(type="DROP_SHADOW", color=BLACK_25, visible=False)],
        )
        assert resolve_effect_value(style, TokenConfig()) == "none"
        assert not has_box_shadow(style)

    def test_blur(self):
        style = EffectStyle(
            id="e", name="Frosted", effects=[BlurEffect(type="BACKGROUND_BLUR", radius=12)]
        )
        assert resolve_effect_value(style, TokenConfig()) == "blur(12px)"
        assert resolve_blur_filter(style, "BACKGROUND_BLUR") == "blur(12px)"
        assert resolve_blur_filter(style, "LAYER_BLUR") is None

    def test_blur_filter_alongside_shadow(self):
        style = EffectStyle(
            id="e",
            name="Glass",
            effects=[
                ShadowEffect(type="DROP_SHADOW", color=BLACK_25, radius=8),
                BlurEffect(type="BACKGROUND_BLUR", radius=12),
            ],
            effect_bound_variables=[
                EffectBoundVariables(),
                EffectBoundVariables(radius=BoundVariable(variable_id="b")),
            ],
        )
        assert resolve_effect_value(style, TokenConfig()) == "0px 0px 8px 0px #00000040"
        assert resolve_blur_filter(style, "BACKGROUND_BLUR") == "blur(12px)"
        assert resolve_blur_filter(style, "BACKGROUND_BLUR", {"b": "glass-blur"}) == (
            "blur(var(--glass-blur))"
        )

    def test_bound_shadow_properties(self):
        style = EffectStyle(
            id="e",
            name="Bound",
            effects=[ShadowEffect(type="DROP_SHADOW", color=BLACK_25, radius=8)],
            effect_bound_variables=[
                EffectBoundVariables(
                    color=BoundVariable(variable_id="c"),
                    radius=BoundVariable(variable_id="r"),
                )
            ],
        )
        names = {"c": "shadow-color", "r": "shadow-blur"}
        assert resolve_effect_value(style, TokenConfig(), names) == (
            "0px 0px var(--shadow-blur) 0px var(--shadow-color)"
        )


# =============================================================================
# Grids
# =============================================================================


class TestGrids:
    def test_columns_and_rows(self):
        style = GridStyle(
            id="g",
            name="Layout",
            layout_grids=[
                LayoutGrid(pattern="COLUMNS", section_size=80, count=12),
                LayoutGrid(pattern="ROWS", section_size=40),
            ],
        )
        assert resolve_grid_value(style) == "repeat(12, 80px) / repeat(auto-fill, 40px)"

    def test_no_visible_grids(self):
        style = GridStyle(
            id="g",
            name="Layout",
            layout_grids=[LayoutGrid(pattern="COLUMNS", section_size=80, visible=False)],
        )
        assert resolve_grid_value(style) == "none"

    def test_pixel_grid_only_is_none(self):
        style = GridStyle(id="g", name="Px", layout_grids=[LayoutGrid(pattern="GRID")])
        assert resolve_grid_value(style) == "none"
