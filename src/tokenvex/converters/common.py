"""
Shared pieces of the document converters.

Every converter walks the same token tree and must agree on naming
(``format_css_name``), value rendering (``TokenRenderer``), mode selection
and collection filtering; those live here.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from ..core.ir.settings import ConversionSettings, OutputFormat, StyleType, Unit
from ..core.ir.tokens import (
    Document,
    GridValue,
    PerMode,
    Reference,
    ShadowValue,
    Single,
    Token,
    TokenGroup,
    TokenType,
    TypographyValue,
)
from ..core.resolution.lookup import unescape_path
from ..core.transforms.colors import format_color
from ..core.transforms.names import format_css_name, natural_sort_key
from ..core.transforms.units import clean_number, format_number_with_unit

logger = logging.getLogger(__name__)

_PATH_REF_RE = re.compile(r"'((?:[^'\\]|\\.)+)'")
_CALC_TRIGGERS = ("*", "/", "+", "-", "var(")


class HeaderStyle(StrEnum):
    BLOCK = "block"
    LINE = "line"


def generate_header(
    title: str,
    source_file: str,
    generated_at: str,
    banner: str | None = None,
    style: HeaderStyle = HeaderStyle.BLOCK,
) -> str:
    """File header; a custom banner replaces the generated comment."""
    if banner:
        return banner + "\n"
    source = source_file or "unknown"
    lines = [title, f"Exported from: {source}", f"Generated: {generated_at}"]
    if style == HeaderStyle.LINE:
        body = ["//", *(f"// {line}" for line in lines), "//"]
    else:
        body = ["/**", *(f" * {line}" for line in lines), " */"]
    return "\n".join([*body, ""])


def document_header(
    title: str,
    document: Document,
    banner: str | None = None,
    style: HeaderStyle = HeaderStyle.BLOCK,
) -> str:
    """Header stamped with the document's metadata.

    Converting the same document twice gives identical output.
    """
    metadata = document.metadata
    return generate_header(
        title, metadata.source_file, metadata.generated_at or "unknown", banner, style
    )


def selected_collections(
    document: Document, settings: ConversionSettings
) -> list[tuple[str, TokenGroup]]:
    """Collections to convert, in document order."""
    selected = settings.selected_collections
    return [
        (name, group)
        for name, group in document.collections.items()
        if not selected or name in selected
    ]


def selected_style_groups(
    document: Document, settings: ConversionSettings
) -> list[tuple[StyleType, TokenGroup]]:
    """Style groups to emit, in ``settings.style_types`` order."""
    if not settings.include_styles or document.styles is None:
        return []
    groups = dict(document.styles.items())
    return [
        (StyleType(style_type), groups[style_type])
        for style_type in settings.style_types
        if style_type in groups
    ]


def style_path(style_type: StyleType, path: Sequence[str]) -> list[str]:
    """Token path used to name a style variable."""
    return ["styles", style_type.value, *path]


def rule_block(
    selector: str, declarations: Iterable[tuple[str, str]], indent: str = "  "
) -> list[str]:
    """``selector { prop: value; ... }`` as lines."""
    return [f"{selector} {{", *(f"{indent}{prop}: {value};" for prop, value in declarations), "}"]


@dataclass
class RenderedToken:
    """A token rendered for one output: a flat value or per-mode values."""

    path: list[str]
    name: str
    value: str = ""
    modes: dict[str, str] = field(default_factory=dict)

    @property
    def is_per_mode(self) -> bool:
        return bool(self.modes)

    def default_value(self) -> str:
        """Value of the ``default``-named mode, else the first mode."""
        if not self.modes:
            return self.value
        mode = default_mode_name(self.modes)
        return self.modes[mode] if mode is not None else ""


def default_mode_name(mode_names: Iterable[str]) -> str | None:
    names = list(mode_names)
    for name in names:
        if name.lower() == "default":
            return name
    return names[0] if names else None


class TokenRenderer:
    """Renders document token values as CSS or SCSS values.

    References are resolved by traversing the document and rendered as
    ``var(--name)``; the SCSS converter rewrites those afterwards.
    """

    def __init__(
        self,
        document: Document,
        settings: ConversionSettings,
        output_format: OutputFormat = OutputFormat.CSS,
    ):
        self.document = document
        self.settings = settings
        self.output_format = output_format

    # -- naming --

    def css_name(self, path: Sequence[str]) -> str:
        return format_css_name(path, self.settings)

    def reference_name(self, reference: Reference) -> str:
        path = self.document.resolve_reference(reference.path)
        if path is None:
            logger.debug("Reference %s not found in document", reference.path)
            path = reference.path.split(".")
        return self.css_name(path)

    # -- values --

    def render_tokens(self, group: TokenGroup, prefix: Sequence[str]) -> list[RenderedToken]:
        """Rendered tokens of ``group`` in natural order of their CSS names."""
        rendered = [self.render_token(path, token) for path, token in group.walk(prefix)]
        return sorted(rendered, key=lambda token: natural_sort_key(token.name))

    def render_token(self, path: list[str], token: Token) -> RenderedToken:
        name = self.css_name(path)
        if isinstance(token.value, PerMode):
            modes = {mode: self.render(value, token) for mode, value in token.value.values.items()}
            return RenderedToken(path=path, name=name, modes=modes)
        return RenderedToken(path=path, name=name, value=self.render(token.value, token))

    def render(self, value: Single | Reference, token: Token) -> str:
        if isinstance(value, Reference):
            return self.var(self.reference_name(value))

        raw = value.value
        extensions = token.extensions

        if token.type == TokenType.COLOR and isinstance(raw, str):
            return format_color(raw, self.settings.color_format)

        is_number = isinstance(raw, int | float) and not isinstance(raw, bool)
        if token.type == TokenType.NUMBER and is_number:
            if extensions and extensions.expression and self.settings.export_as_calc_expressions:
                return self.calc_expression(extensions.expression)
            unit = self._unit(extensions.unit if extensions else None)
            return self.number(raw, unit)

        if token.type == TokenType.STRING and isinstance(raw, str):
            escaped = raw.replace('"', '\\"')
            return f'"{escaped}"'

        if token.type == TokenType.BOOLEAN and isinstance(raw, bool):
            return "1" if raw else "0"

        if isinstance(raw, TypographyValue):
            return self.font_shorthand(raw)
        if isinstance(raw, ShadowValue):
            return self.box_shadow(raw)
        if isinstance(raw, GridValue):
            return self.grid_template(raw)

        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, float):
            return clean_number(raw, self.settings.number_precision)
        return str(raw)

    def var(self, name: str) -> str:
        return f"var(--{name})"

    def number(self, value: float, unit: Unit) -> str:
        return format_number_with_unit(
            value, unit, self.settings.rem_base, self.settings.number_precision
        )

    def _unit(self, unit: str | None) -> Unit:
        if unit:
            try:
                return Unit(unit)
            except ValueError:
                logger.debug("Ignoring unknown unit %r", unit)
        return self.settings.default_unit

    def px(self, value: float) -> str:
        return self.number(value, Unit.PX)

    # -- composite values --

    def typography_declarations(self, value: TypographyValue) -> list[tuple[str, str]]:
        declarations = [
            ("font-family", f'"{value.font_family}", sans-serif'),
            ("font-size", self.number(value.font_size, self.settings.default_unit)),
            ("font-weight", clean_number(value.font_weight)),
        ]
        optional = (
            ("font-style", value.font_style),
            ("line-height", value.line_height),
            ("letter-spacing", value.letter_spacing),
            ("text-decoration", value.text_decoration),
            ("text-transform", value.text_transform),
        )
        declarations.extend((prop, v) for prop, v in optional if v)
        return declarations

    def font_shorthand(self, value: TypographyValue) -> str:
        """``[style] weight size[/line-height] family``."""
        size = self.number(value.font_size, self.settings.default_unit)
        if value.line_height:
            size = f"{size}/{value.line_height}"
        parts = [value.font_style] if value.font_style else []
        parts += [clean_number(value.font_weight), size, f'"{value.font_family}", sans-serif']
        return " ".join(parts)

    def box_shadow(self, value: ShadowValue) -> str:
        inset = "inset " if value.type == "innerShadow" else ""
        color = format_color(value.color, self.settings.color_format)
        lengths = " ".join(
            self.px(v) for v in (value.offset_x, value.offset_y, value.blur, value.spread)
        )
        return f"{inset}{lengths} {color}"

    def grid_template(self, value: GridValue) -> str:
        count = clean_number(value.count) if value.count else "auto-fill"
        size = self.px(value.section_size) if value.section_size else "1fr"
        return f"repeat({count}, {size})"

    # -- calc passthrough --

    def find_path(self, path: str) -> list[str] | None:
        """Token path for a slash (``Colors/primary``) or dotted reference."""
        found = self.document.resolve_path(path)
        if found is not None:
            return found[0]
        if "/" not in path:
            return self.document.resolve_reference(path)
        return None

    def calc_expression(self, expression: str) -> str:
        """Re-emit a ``calc:`` expression with path references as variables.

        Raises:
            AmbiguousReferenceError: If a short path matches tokens in
                several collections.
        """

        def substitute(match: re.Match[str]) -> str:
            path = self.find_path(unescape_path(match.group(1)))
            if path is None:
                return match.group(0)
            return self.var(self.css_name(path))

        formatted = _PATH_REF_RE.sub(substitute, expression)
        if self.output_format == OutputFormat.SCSS:
            return formatted
        if any(trigger in formatted for trigger in _CALC_TRIGGERS):
            return f"calc({formatted})"
        return formatted


def walk_style_tokens(
    document: Document, settings: ConversionSettings
) -> Iterator[tuple[StyleType, list[str], Token]]:
    """``(style type, style path, token)`` for every selected style token."""
    for style_type, group in selected_style_groups(document, settings):
        for path, token in group.walk():
            yield style_type, path, token
