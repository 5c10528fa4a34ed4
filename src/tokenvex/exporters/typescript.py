"""
Variables to TypeScript CSS variable name types.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..converters.common import generate_header
from ..converters.typescript import CSSTYPE_AUGMENTATION, HEADER_TITLE, union_type
from ..core.config import NO_VARIABLES_LINE_COMMENT
from ..core.ir.settings import ConversionSettings, OutputFormat, StyleOutputMode
from ..core.ir.styles import StyleCollection
from ..core.ir.variables import Variable, VariableCollection
from ._common import ExportRun
from .styles import style_class_names, style_variable_names


def export_to_typescript(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    file_name: str,
    settings: ConversionSettings | None = None,
    styles: StyleCollection | None = None,
    *,
    generated_at: str | None = None,
) -> str:
    """Export a ``CSSVariableName`` union of every exported custom property name."""
    if not variables:
        return NO_VARIABLES_LINE_COMMENT

    settings = settings or ConversionSettings()
    run = ExportRun.start(variables, collections, settings, OutputFormat.CSS, generated_at)

    names = [
        f"--{run.css_name(variable)}"
        for collection in run.selected_collections()
        for variable in run.variables_of(collection)
    ]
    as_classes = settings.style_output_mode == StyleOutputMode.CLASSES
    exported_styles = styles if settings.include_styles else None
    if exported_styles is not None and not as_classes:
        names.extend(style_variable_names(exported_styles, settings))

    if not names:
        return NO_VARIABLES_LINE_COMMENT

    lines = [generate_header(HEADER_TITLE, file_name, run.generated_at, settings.header_banner)]
    lines.extend(union_type("CSSVariableName", names))
    lines.append("")
    lines.extend(CSSTYPE_AUGMENTATION)

    if exported_styles is not None and as_classes:
        class_names = style_class_names(exported_styles, settings)
        if class_names:
            lines.append("")
            lines.extend(union_type("StyleClassName", class_names))

    return "\n".join(lines)
