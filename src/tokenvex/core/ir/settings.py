"""
Settings and per-token formatting directives.

``ConversionSettings`` is the user-facing option set shared by the
document converters and the direct exporters. ``TokenConfig`` is the
per-token view derived from settings plus directives parsed from the
variable's description; it is frozen and replaced, never mutated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_CSS_SELECTOR, DEFAULT_REM_BASE, DEFAULT_STYLE_TYPES


class Unit(StrEnum):
    NONE = "none"
    PX = "px"
    REM = "rem"
    EM = "em"
    PERCENT = "%"
    MS = "ms"
    S = "s"


class ColorFormat(StrEnum):
    HEX = "hex"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    OKLCH = "oklch"


class CasingOption(StrEnum):
    """Casing applied by the default name format rule."""

    KEBAB = "kebab"
    SNAKE = "snake"
    CAMEL = "camel"
    PASCAL = "pascal"
    LOWER = "lower"
    UPPER = "upper"


class StyleOutputMode(StrEnum):
    VARIABLES = "variables"
    CLASSES = "classes"


class StyleType(StrEnum):
    PAINT = "paint"
    TEXT = "text"
    EFFECT = "effect"
    GRID = "grid"


class ExportType(StrEnum):
    CSS = "css"
    SCSS = "scss"
    JSON = "json"
    TYPESCRIPT = "typescript"


class OutputFormat(StrEnum):
    """Target syntax for calc-expression passthrough."""

    CSS = "css"
    SCSS = "scss"


class NameFormatRule(BaseModel):
    """
    A glob rename rule.

    ``pattern`` is matched against the slash-delimited variable name;
    ``replacement`` may reference captures as ``$1``, ``${1}``, ``$1:camel``
    or ``${1:camel}``.
    """

    id: str = ""
    pattern: str = Field(description="Glob pattern, e.g. 'color/*/alpha/*'")
    replacement: str = Field(description="Replacement template, e.g. 'color-$1-a$2'")
    enabled: bool = True

    model_config = ConfigDict(frozen=True)


class TokenConfig(BaseModel):
    """Formatting directives for one token."""

    unit: Unit = Unit.PX
    rem_base: float = Field(default=DEFAULT_REM_BASE, gt=0)
    color_format: ColorFormat = ColorFormat.HEX
    expression: str | None = Field(default=None, description="calc source expression")
    precision: int | None = Field(default=None, description="Decimal places for numbers")
    rem_base_variable_path: str | None = Field(
        default=None, description="Variable path whose value is used as remBase"
    )

    model_config = ConfigDict(frozen=True)

    def merged(self, **overrides: Any) -> TokenConfig:
        """Return a new config with ``overrides`` applied (None values ignored)."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return self.model_copy(update=updates)


class ConversionSettings(BaseModel):
    """Options controlling naming, value formatting and output layout."""

    prefix: str = ""
    name_format_rules: list[NameFormatRule] = Field(default_factory=list)
    name_format_casing: CasingOption = CasingOption.KEBAB
    color_format: ColorFormat = ColorFormat.HEX
    default_unit: Unit = Unit.PX
    rem_base: float = Field(default=DEFAULT_REM_BASE, gt=0)
    rem_base_variable_id: str | None = None
    number_precision: int | None = None
    selector: str = DEFAULT_CSS_SELECTOR
    use_modes_as_selectors: bool = False
    include_collection_comments: bool = True
    include_mode_comments: bool = False
    export_as_calc_expressions: bool = False
    include_styles: bool = False
    style_output_mode: StyleOutputMode = StyleOutputMode.VARIABLES
    style_types: list[StyleType] = Field(
        default_factory=lambda: [StyleType(t) for t in DEFAULT_STYLE_TYPES]
    )
    selected_collections: list[str] | None = Field(
        default=None, description="Collection ids or names to export; None exports all"
    )
    header_banner: str | None = None
    compact_json: bool = False

    model_config = ConfigDict(frozen=True)

    def base_token_config(self) -> TokenConfig:
        """Token config seeded from these settings."""
        return TokenConfig(
            unit=self.default_unit,
            rem_base=self.rem_base,
            color_format=self.color_format,
            precision=self.number_precision,
        )

    def includes_collection(self, collection_id: str, collection_name: str) -> bool:
        if not self.selected_collections:
            return True
        return (
            collection_id in self.selected_collections
            or collection_name in self.selected_collections
        )


class SerializationOptions(BaseModel):
    """Options for building the intermediate token document."""

    selected_collections: list[str] | None = None
    include_styles: bool = False
    style_types: list[StyleType] = Field(
        default_factory=lambda: [StyleType(t) for t in DEFAULT_STYLE_TYPES]
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: ConversionSettings) -> SerializationOptions:
        return cls(
            selected_collections=settings.selected_collections,
            include_styles=settings.include_styles,
            style_types=settings.style_types,
        )
