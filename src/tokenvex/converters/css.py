"""
Document to CSS custom properties.
"""

from __future__ import annotations

import logging

from ..core.ir.settings import ConversionSettings, StyleOutputMode, StyleType
from ..core.ir.tokens import Document, Single, Token, TokenType, TypographyValue
from ..core.transforms.names import to_style_class_name
from .common import (
    RenderedToken,
    TokenRenderer,
    default_mode_name,
    document_header,
    rule_block,
    selected_collections,
    style_path,
    walk_style_tokens,
)

logger = logging.getLogger(__name__)

HEADER_TITLE = "Auto-generated CSS Custom Properties"


def mode_selector(selector: str, mode_name: str, is_default: bool) -> str:
    if is_default:
        return selector
    mode = mode_name.lower()
    return f'{selector}[data-theme="{mode}"], .theme-{mode}'


def _declaration(name: str, value: str, indent: str = "  ") -> str:
    return f"{indent}--{name}: {value};"


def _style_variable_lines(
    document: Document, settings: ConversionSettings, renderer: TokenRenderer
) -> list[str]:
    lines: list[str] = []
    for style_type, path, token in walk_style_tokens(document, settings):
        rendered = renderer.render_token(style_path(style_type, path), token)
        lines.append(_declaration(rendered.name, rendered.default_value()))
    return lines


def style_class_declarations(
    style_type: StyleType, token: Token, renderer: TokenRenderer
) -> list[tuple[str, list[tuple[str, str]]]]:
    """``(class prefix, declarations)`` pairs for one style token."""
    value = token.flat_value()
    if value is None:
        return []
    raw = value.value if isinstance(value, Single) else None

    if style_type == StyleType.TEXT and isinstance(raw, TypographyValue):
        return [("", renderer.typography_declarations(raw))]

    rendered = renderer.render(value, token)
    if style_type == StyleType.PAINT:
        return [
            ("", [("color", rendered)]),
            ("bg-", [("background-color", rendered)]),
            ("border-", [("border-color", rendered)]),
        ]
    if style_type == StyleType.EFFECT and token.type == TokenType.SHADOW:
        return [("", [("box-shadow", rendered)])]
    if style_type == StyleType.GRID:
        return [("", [("display", "grid"), ("grid-template-columns", rendered)])]
    return [("", [])]


def _style_class_lines(
    document: Document, settings: ConversionSettings, renderer: TokenRenderer
) -> list[str]:
    lines: list[str] = []
    current: StyleType | None = None
    for style_type, path, token in walk_style_tokens(document, settings):
        if style_type != current:
            lines.append(f"/* {style_type.value.capitalize()} Style Classes */")
            current = style_type
        class_name = to_style_class_name("/".join(path), settings.prefix)
        for class_prefix, declarations in style_class_declarations(style_type, token, renderer):
            lines.extend(rule_block(f".{class_prefix}{class_name}", declarations))
        lines.append("")
    return lines


def _mode_names(tokens: list[RenderedToken]) -> list[str]:
    names: dict[str, None] = {}
    for token in tokens:
        names.update(dict.fromkeys(token.modes))
    return list(names)


def _convert_with_mode_selectors(
    document: Document,
    settings: ConversionSettings,
    renderer: TokenRenderer,
    selector: str,
    style_lines: list[str],
) -> list[str]:
    lines: list[str] = []
    styles_added = not style_lines

    for collection_name, group in selected_collections(document, settings):
        if settings.include_collection_comments:
            lines.append(f"/* Collection: {collection_name} */")

        tokens = renderer.render_tokens(group, [collection_name])
        modes = _mode_names(tokens)
        default = default_mode_name(modes)
        if default is None and tokens:
            # every token is single-valued
            modes, default = ["default"], "default"

        for mode in modes:
            is_default = mode == default
            if settings.include_mode_comments:
                lines.append(f"/* Mode: {mode} */")
            lines.append(f"{mode_selector(selector, mode, is_default)} {{")
            for token in tokens:
                if token.is_per_mode:
                    if mode in token.modes:
                        lines.append(_declaration(token.name, token.modes[mode]))
                elif is_default:
                    lines.append(_declaration(token.name, token.value))
            if is_default and not styles_added:
                lines.extend(style_lines)
                styles_added = True
            lines.extend(["}", ""])

    if not styles_added:
        lines.extend([f"{selector} {{", *style_lines, "}", ""])
    return lines


def _convert_flat(
    document: Document,
    settings: ConversionSettings,
    renderer: TokenRenderer,
    selector: str,
    style_lines: list[str],
) -> list[str]:
    lines = [f"{selector} {{"]
    collections = selected_collections(document, settings)
    for index, (collection_name, group) in enumerate(collections):
        if settings.include_collection_comments:
            lines.append(f"  /* {collection_name} */")
        for token in renderer.render_tokens(group, [collection_name]):
            lines.append(_declaration(token.name, token.default_value()))
        if index < len(collections) - 1:
            lines.append("")
    lines.extend(style_lines)
    lines.append("}")
    return lines


def convert_to_css(document: Document, settings: ConversionSettings | None = None) -> str:
    """
    Render a token document as CSS custom properties.

    With ``use_modes_as_selectors`` each collection gets one selector block
    per mode; the default mode (named ``default``, else the first) uses the
    plain selector and also holds single-valued tokens. Otherwise one block
    holds every token at its default-mode value.

    Styles are emitted as variables inside the block, or as utility
    classes after it when ``style_output_mode`` is ``classes``.
    """
    settings = settings or ConversionSettings()
    renderer = TokenRenderer(document, settings)
    selector = settings.selector.strip() or ":root"
    as_classes = settings.style_output_mode == StyleOutputMode.CLASSES

    style_lines = [] if as_classes else _style_variable_lines(document, settings, renderer)

    lines = [document_header(HEADER_TITLE, document, settings.header_banner)]
    if settings.use_modes_as_selectors:
        lines.extend(
            _convert_with_mode_selectors(document, settings, renderer, selector, style_lines)
        )
    else:
        lines.extend(_convert_flat(document, settings, renderer, selector, style_lines))

    if as_classes:
        class_lines = _style_class_lines(document, settings, renderer)
        if class_lines:
            lines.append("")
            lines.extend(class_lines)

    logger.debug("Converted document to CSS (%d lines)", len(lines))
    return "\n".join(lines)
