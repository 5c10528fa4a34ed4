"""
Document to TypeScript CSS variable name types.
"""

from __future__ import annotations

from ..core.config import NO_VARIABLES_LINE_COMMENT
from ..core.ir.settings import ConversionSettings, StyleOutputMode, StyleType
from ..core.ir.tokens import Document
from ..core.transforms.names import format_css_name, natural_sort_key, to_style_class_name
from .common import document_header, selected_collections, style_path, walk_style_tokens

HEADER_TITLE = "Auto-generated TypeScript types for CSS Custom Properties"

CSSTYPE_AUGMENTATION = [
    "declare module 'csstype' {",
    "  interface Properties {",
    "    [key: CSSVariableName]: string | number;",
    "  }",
    "}",
]


def union_type(type_name: str, members: list[str]) -> list[str]:
    """``export type Name =`` followed by one ``| "member"`` line each."""
    return [f"export type {type_name} =", *(f'  | "{member}"' for member in members), ";"]


def collect_variable_names(document: Document, settings: ConversionSettings) -> list[str]:
    """``--name`` for every token, and for styles when emitted as variables."""
    names: list[str] = []
    for collection_name, group in selected_collections(document, settings):
        collection_names = [
            format_css_name(path, settings) for path, _ in group.walk([collection_name])
        ]
        names.extend(f"--{name}" for name in sorted(collection_names, key=natural_sort_key))
    if settings.style_output_mode != StyleOutputMode.CLASSES:
        names.extend(
            f"--{format_css_name(style_path(style_type, path), settings)}"
            for style_type, path, _ in walk_style_tokens(document, settings)
        )
    return names


def collect_class_names(document: Document, settings: ConversionSettings) -> list[str]:
    """Utility class names generated for styles in classes mode."""
    if settings.style_output_mode != StyleOutputMode.CLASSES:
        return []
    names: list[str] = []
    for style_type, path, _ in walk_style_tokens(document, settings):
        class_name = to_style_class_name("/".join(path), settings.prefix)
        if style_type == StyleType.PAINT:
            names.extend([class_name, f"bg-{class_name}", f"border-{class_name}"])
        else:
            names.append(class_name)
    return names


def convert_to_typescript(document: Document, settings: ConversionSettings | None = None) -> str:
    """
    Render a ``CSSVariableName`` string-literal union plus a ``csstype``
    module augmentation so the names are accepted as style keys.

    With styles in classes mode a ``StyleClassName`` union follows. A
    document with no names gives a single comment line, since an empty
    union is not valid TypeScript.
    """
    settings = settings or ConversionSettings()
    variable_names = collect_variable_names(document, settings)
    if not variable_names:
        return NO_VARIABLES_LINE_COMMENT

    lines = [document_header(HEADER_TITLE, document, settings.header_banner)]
    lines.extend(union_type("CSSVariableName", variable_names))
    lines.append("")
    lines.extend(CSSTYPE_AUGMENTATION)

    class_names = collect_class_names(document, settings)
    if class_names:
        lines.append("")
        lines.extend(union_type("StyleClassName", class_names))

    return "\n".join(lines)
