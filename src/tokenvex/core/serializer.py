"""
DTCG serializer: host variables and styles to the intermediate ``Document``.

Variables are grouped per collection and nested by their slash-delimited
names. Aliases become dotted ``$ref`` paths to the target collection and
name so the document does not depend on host ids.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from .ir.settings import (
    ColorFormat,
    ConversionSettings,
    SerializationOptions,
    StyleType,
    TokenConfig,
    Unit,
)
from .ir.styles import (
    EffectStyle,
    GridStyle,
    LayoutGrid,
    PaintStyle,
    ShadowEffect,
    StyleCollection,
    TextStyle,
)
from .ir.tokens import (
    Document,
    DocumentMetadata,
    GridValue,
    PerMode,
    Reference,
    ShadowValue,
    Single,
    StyleGroups,
    Token,
    TokenExtensions,
    TokenGroup,
    TokenType,
    TypographyValue,
)
from .ir.variables import (
    RGBA,
    ResolvedType,
    Variable,
    VariableAlias,
    VariableCollection,
    VariableValue,
)
from .resolution.context import ResolutionContext
from .resolution.expressions import resolve_expression
from .resolution.styles import resolve_paint_value, resolve_text_properties
from .selection import collection_variables, filter_collections
from .transforms.colors import rgb_to_hex
from .transforms.description import parse_description, resolve_token_config
from .transforms.units import js_number

logger = logging.getLogger(__name__)

TYPE_MAP: dict[ResolvedType, TokenType] = {
    ResolvedType.COLOR: TokenType.COLOR,
    ResolvedType.FLOAT: TokenType.NUMBER,
    ResolvedType.STRING: TokenType.STRING,
    ResolvedType.BOOLEAN: TokenType.BOOLEAN,
}

_GRID_PATTERNS = {"COLUMNS": "columns", "ROWS": "rows", "GRID": "grid"}


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _VariableSerializer:
    """Builds tokens for one serialization call."""

    def __init__(self, ctx: ResolutionContext):
        self.ctx = ctx

    def reference_path(self, variable: Variable) -> str:
        collection = self.ctx.collection_of(variable)
        collection_name = collection.name if collection else "Unknown"
        return f"{collection_name}.{variable.name.replace('/', '.')}"

    def convert_value(
        self, value: VariableValue, variable: Variable, mode_id: str, config: TokenConfig
    ) -> Single | Reference:
        if isinstance(value, VariableAlias):
            target = self.ctx.variables_by_id.get(value.id)
            if target is None:
                return Reference(path=value.id)
            return Reference(path=self.reference_path(target))

        resolved_type = variable.resolved_type
        if resolved_type == ResolvedType.FLOAT and config.expression:
            result = resolve_expression(config, mode_id, self.ctx)
            if result.value is not None and not result.warnings:
                return Single(value=result.value)
            logger.warning(
                "Keeping the raw value of %s: %s", variable.name, "; ".join(result.warnings)
            )

        if resolved_type == ResolvedType.COLOR and isinstance(value, RGBA):
            return Single(value=rgb_to_hex(value))
        if resolved_type == ResolvedType.FLOAT and isinstance(value, int | float):
            return Single(value=float(value))
        if resolved_type == ResolvedType.STRING and isinstance(value, str):
            return Single(value=value)
        if resolved_type == ResolvedType.BOOLEAN and isinstance(value, bool):
            return Single(value=value)

        if isinstance(value, bool):
            return Single(value="true" if value else "false")
        if isinstance(value, int | float):
            return Single(value=js_number(value))
        if isinstance(value, RGBA):
            return Single(value=rgb_to_hex(value))
        return Single(value=str(value))

    def serialize(self, variable: Variable, collection: VariableCollection) -> Token | None:
        config = resolve_token_config(variable.description, self.ctx.base_config)

        if len(collection.modes) <= 1:
            value = variable.values_by_mode.get(collection.default_mode_id)
            if value is None:
                logger.warning(
                    "Skipping %s: no value for mode %s", variable.name, collection.default_mode_id
                )
                return None
            token_value: Single | PerMode | Reference = self.convert_value(
                value, variable, collection.default_mode_id, config
            )
        else:
            values: dict[str, Single | Reference] = {}
            for mode in collection.modes:
                value = variable.values_by_mode.get(mode.mode_id)
                if value is None:
                    logger.warning("Omitting mode %s of %s: no value", mode.name, variable.name)
                    continue
                values[mode.name] = self.convert_value(value, variable, mode.mode_id, config)
            if not values:
                return None
            token_value = PerMode(values=values)

        directives = parse_description(variable.description)
        unit = directives.get("unit")
        return Token(
            type=TYPE_MAP.get(variable.resolved_type, TokenType.STRING),
            value=token_value,
            description=variable.description or None,
            extensions=TokenExtensions(
                unit=unit.value if unit is not None and unit != Unit.PX else None,
                resolved_type=variable.resolved_type.value,
                expression=directives.get("expression"),
            ),
        )


# =============================================================================
# Styles
# =============================================================================


def _style_token(token_type: TokenType, value: object, description: str) -> Token:
    return Token(type=token_type, value=Single(value=value), description=description or None)


def _serialize_paint(styles: Sequence[PaintStyle]) -> TokenGroup:
    group = TokenGroup()
    for style in styles:
        config = resolve_token_config(style.description).merged(color_format=ColorFormat.HEX)
        value = resolve_paint_value(style, config)
        group.insert(style.name.split("/"), _style_token(TokenType.COLOR, value, style.description))
    return group


def _typography(style: TextStyle) -> TypographyValue:
    props = resolve_text_properties(style, resolve_token_config(style.description))
    return TypographyValue(
        font_family=style.font_family,
        font_size=style.font_size,
        font_weight=style.font_weight,
        font_style=props.get("font-style"),
        line_height=props.get("line-height"),
        letter_spacing=props.get("letter-spacing"),
        text_decoration=props.get("text-decoration"),
        text_transform=props.get("text-transform"),
    )


def _serialize_text(styles: Sequence[TextStyle]) -> TokenGroup:
    group = TokenGroup()
    for style in styles:
        token = _style_token(TokenType.TYPOGRAPHY, _typography(style), style.description)
        group.insert(style.name.split("/"), token)
    return group


def _shadow(effect: ShadowEffect) -> ShadowValue:
    return ShadowValue(
        offset_x=effect.offset.x,
        offset_y=effect.offset.y,
        blur=effect.radius,
        spread=effect.spread,
        color=rgb_to_hex(effect.color),
        type="innerShadow" if effect.type == "INNER_SHADOW" else "dropShadow",
    )


def _serialize_effect(styles: Sequence[EffectStyle]) -> TokenGroup:
    group = TokenGroup()
    for style in styles:
        shadow = next(
            (e for e in style.effects if isinstance(e, ShadowEffect) and e.visible), None
        )
        if shadow is None:
            logger.debug("Effect style %s has no visible shadow, skipping", style.name)
            continue
        token = _style_token(TokenType.SHADOW, _shadow(shadow), style.description)
        group.insert(style.name.split("/"), token)
    return group


def _grid(grid: LayoutGrid) -> GridValue:
    count = grid.count
    return GridValue(
        pattern=_GRID_PATTERNS.get(grid.pattern, "grid"),
        count=count if count is not None and 0 < count < float("inf") else None,
        section_size=grid.section_size or None,
        gutter_size=grid.gutter_size,
        offset=grid.offset,
    )


def _serialize_grid(styles: Sequence[GridStyle]) -> TokenGroup:
    group = TokenGroup()
    for style in styles:
        grid = next((g for g in style.layout_grids if g.visible), None)
        if grid is None:
            continue
        token = _style_token(TokenType.GRID, _grid(grid), style.description)
        group.insert(style.name.split("/"), token)
    return group


def serialize_styles(styles: StyleCollection, style_types: Sequence[StyleType]) -> StyleGroups:
    """Serialize the requested style categories; empty categories are left out."""
    groups = StyleGroups()
    if StyleType.PAINT in style_types and styles.paint:
        groups.paint = _serialize_paint(styles.paint)
    if StyleType.TEXT in style_types and styles.text:
        groups.text = _serialize_text(styles.text)
    if StyleType.EFFECT in style_types and styles.effect:
        groups.effect = _serialize_effect(styles.effect)
    if StyleType.GRID in style_types and styles.grid:
        groups.grid = _serialize_grid(styles.grid)
    return groups


# =============================================================================
# Entry point
# =============================================================================


def serialize_to_dtcg(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    file_name: str,
    options: SerializationOptions | None = None,
    styles: StyleCollection | None = None,
    *,
    settings: ConversionSettings | None = None,
    generated_at: str | None = None,
) -> Document:
    """
    Build the intermediate token document.

    Args:
        variables: All local variables (aliases may point at any of them).
        collections: All local collections.
        file_name: Source file name recorded in the metadata.
        options: Collection filter and style selection.
        styles: Local styles, serialized when ``options.include_styles``.
        settings: Used for naming and number defaults when evaluating
            ``calc:`` directives.
        generated_at: Timestamp to record; the current UTC time by default.

    Returns:
        The document, with variables in natural order of their raw names.

    Raises:
        TokenTreeConflictError: If a name is both a token and a group.
        AmbiguousReferenceError: If a ``calc:`` path reference is ambiguous.
    """
    options = options or SerializationOptions()
    settings = settings or ConversionSettings()
    ctx = ResolutionContext.from_settings(variables, collections, settings)
    serializer = _VariableSerializer(ctx)

    document = Document(
        metadata=DocumentMetadata(
            source_file=file_name, generated_at=generated_at or utc_timestamp()
        )
    )

    for collection in filter_collections(collections, options.selected_collections):
        group = TokenGroup()
        for variable in collection_variables(variables, collection.id):
            token = serializer.serialize(variable, collection)
            if token is not None:
                group.insert(variable.name.split("/"), token)
        document.collections[collection.name] = group

    if options.include_styles and styles is not None:
        document.styles = serialize_styles(styles, options.style_types)

    logger.debug(
        "Serialized %d collection(s) from %s", len(document.collections), file_name or "<unnamed>"
    )
    return document
