"""
Host style records: paint, text, effect and layout-grid styles.

Styles reference variables through bound-variable ids so resolvers can
emit ``var(--name)`` in place of the literal value.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field

from .variables import RGB, RGBA, HostModel, VariableAlias


class BoundVariable(HostModel):
    """Reference from a style property to a variable."""

    variable_id: str


class ColorStop(HostModel):
    position: float
    color: RGBA
    bound_variables: dict[str, VariableAlias] = Field(default_factory=dict)


class SolidPaint(HostModel):
    type: Literal["SOLID"] = "SOLID"
    color: RGB
    opacity: float = 1.0
    visible: bool = True


class GradientPaint(HostModel):
    type: Literal["GRADIENT_LINEAR", "GRADIENT_RADIAL", "GRADIENT_ANGULAR", "GRADIENT_DIAMOND"]
    gradient_stops: list[ColorStop] = Field(default_factory=list)
    gradient_transform: list[list[float]] = Field(
        default_factory=lambda: [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
        description="2x3 affine transform [[a, b, c], [d, e, f]]",
    )
    opacity: float = 1.0
    visible: bool = True


class ImagePaint(HostModel):
    type: Literal["IMAGE", "VIDEO"]
    visible: bool = True


Paint = Annotated[SolidPaint | GradientPaint | ImagePaint, Field(discriminator="type")]


class PaintBoundVariables(HostModel):
    color: BoundVariable | None = None


class PaintStyle(HostModel):
    id: str
    name: str
    description: str = ""
    paints: list[Paint] = Field(default_factory=list)
    paint_bound_variables: list[PaintBoundVariables] = Field(default_factory=list)


class LineHeightUnit(StrEnum):
    AUTO = "AUTO"
    PIXELS = "PIXELS"
    PERCENT = "PERCENT"


class LineHeight(HostModel):
    unit: LineHeightUnit = LineHeightUnit.AUTO
    value: float = 0.0


class LetterSpacing(HostModel):
    unit: Literal["PIXELS", "PERCENT"] = "PIXELS"
    value: float = 0.0


class TextStyle(HostModel):
    id: str
    name: str
    description: str = ""
    font_family: str
    font_style: str = "Regular"
    font_size: float
    font_weight: int = 400
    line_height: LineHeight = Field(default_factory=LineHeight)
    letter_spacing: LetterSpacing = Field(default_factory=LetterSpacing)
    text_decoration: str = "NONE"
    text_case: str = "ORIGINAL"


class Vector(HostModel):
    x: float = 0.0
    y: float = 0.0


class ShadowEffect(HostModel):
    type: Literal["DROP_SHADOW", "INNER_SHADOW"]
    color: RGBA
    offset: Vector = Field(default_factory=Vector)
    radius: float = 0.0
    spread: float = 0.0
    visible: bool = True


class BlurEffect(HostModel):
    type: Literal["LAYER_BLUR", "BACKGROUND_BLUR"]
    radius: float = 0.0
    visible: bool = True


Effect = Annotated[ShadowEffect | BlurEffect, Field(discriminator="type")]


class EffectBoundVariables(HostModel):
    color: BoundVariable | None = None
    radius: BoundVariable | None = None
    spread: BoundVariable | None = None
    offset_x: BoundVariable | None = None
    offset_y: BoundVariable | None = None


class EffectStyle(HostModel):
    id: str
    name: str
    description: str = ""
    effects: list[Effect] = Field(default_factory=list)
    effect_bound_variables: list[EffectBoundVariables] = Field(default_factory=list)


class LayoutGrid(HostModel):
    pattern: Literal["COLUMNS", "ROWS", "GRID"]
    section_size: float = 0.0
    count: float | None = Field(
        default=None, description="Number of tracks; None or non-positive means auto-fill"
    )
    gutter_size: float = 0.0
    offset: float = 0.0
    visible: bool = True


class GridStyle(HostModel):
    id: str
    name: str
    description: str = ""
    layout_grids: list[LayoutGrid] = Field(default_factory=list)


class StyleCollection(HostModel):
    """All local styles of a file, by category."""

    paint: list[PaintStyle] = Field(default_factory=list)
    text: list[TextStyle] = Field(default_factory=list)
    effect: list[EffectStyle] = Field(default_factory=list)
    grid: list[GridStyle] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.paint or self.text or self.effect or self.grid)
