"""
Document to SCSS variables (and optionally mixins).
"""

from __future__ import annotations

import logging
import re

from ..core.ir.settings import ConversionSettings, OutputFormat, StyleOutputMode, StyleType
from ..core.ir.tokens import Document
from ..core.transforms.names import to_style_class_name
from .common import (
    HeaderStyle,
    TokenRenderer,
    document_header,
    selected_collections,
    style_path,
    walk_style_tokens,
)
from .css import style_class_declarations

logger = logging.getLogger(__name__)

HEADER_TITLE = "Auto-generated SCSS Variables"
STYLE_VARIABLES_BANNER = "// ═══ Style Variables ═══"
STYLE_MIXINS_BANNER = "// ═══ Style Mixins ═══"

_VAR_NAME_CHAR_RE = re.compile(r"[a-zA-Z0-9_-]")


def convert_var_to_scss(value: str) -> str:
    """Rewrite ``var(--name[, fallback])`` as ``$name``.

    Fallbacks are dropped; nested parentheses inside them are skipped.

    >>> convert_var_to_scss("var(--a, rgb(0, 0, 0)) * 2")
    '$a * 2'
    """
    result: list[str] = []
    i = 0
    while i < len(value):
        if value.startswith("var(--", i):
            j = i + 6
            while j < len(value) and _VAR_NAME_CHAR_RE.match(value[j]):
                j += 1
            name = value[i + 6 : j]
            depth = 1
            while j < len(value) and depth > 0:
                if value[j] == "(":
                    depth += 1
                elif value[j] == ")":
                    depth -= 1
                j += 1
            result.append(f"${name}")
            i = j
        else:
            result.append(value[i])
            i += 1
    return "".join(result)


def _mixin_lines(
    document: Document, settings: ConversionSettings, renderer: TokenRenderer
) -> list[str]:
    lines: list[str] = []
    for style_type, path, token in walk_style_tokens(document, settings):
        name = to_style_class_name("/".join(path), settings.prefix)
        if style_type == StyleType.PAINT:
            value = token.flat_value()
            rendered = convert_var_to_scss(renderer.render(value, token)) if value else ""
            lines.extend(
                [f"@mixin {name}($property: color) {{", f"  #{{$property}}: {rendered};", "}"]
            )
        else:
            blocks = style_class_declarations(style_type, token, renderer)
            declarations = blocks[0][1] if blocks else []
            lines.append(f"@mixin {name} {{")
            lines.extend(f"  {prop}: {convert_var_to_scss(v)};" for prop, v in declarations)
            lines.append("}")
        lines.append("")
    return lines


def convert_to_scss(document: Document, settings: ConversionSettings | None = None) -> str:
    """
    Render a token document as SCSS variables.

    Multi-mode tokens use their default mode (named ``default``, else the
    first). References and calc passthrough use ``$name``; SCSS evaluates
    arithmetic itself, so nothing is wrapped in ``calc()``.
    """
    settings = settings or ConversionSettings()
    renderer = TokenRenderer(document, settings, OutputFormat.SCSS)
    lines = [document_header(HEADER_TITLE, document, settings.header_banner, HeaderStyle.LINE)]

    collections = selected_collections(document, settings)
    for index, (collection_name, group) in enumerate(collections):
        if settings.include_collection_comments:
            lines.append(f"// Collection: {collection_name}")
        for token in renderer.render_tokens(group, [collection_name]):
            lines.append(f"${token.name}: {convert_var_to_scss(token.default_value())};")
        if index < len(collections) - 1:
            lines.append("")

    if next(walk_style_tokens(document, settings), None) is not None:
        lines.append("")
        if settings.style_output_mode == StyleOutputMode.CLASSES:
            lines.append(STYLE_MIXINS_BANNER)
            lines.extend(_mixin_lines(document, settings, renderer))
        else:
            lines.append(STYLE_VARIABLES_BANNER)
            for style_type, path, token in walk_style_tokens(document, settings):
                rendered = renderer.render_token(style_path(style_type, path), token)
                lines.append(f"${rendered.name}: {convert_var_to_scss(rendered.default_value())};")

    logger.debug("Converted document to SCSS (%d lines)", len(lines))
    return "\n".join(lines)
