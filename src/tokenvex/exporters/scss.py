"""
Variables to SCSS, resolved directly from host records.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..converters.common import HeaderStyle, generate_header
from ..converters.scss import STYLE_MIXINS_BANNER, STYLE_VARIABLES_BANNER, convert_var_to_scss
from ..core.config import NO_VARIABLES_LINE_COMMENT
from ..core.ir.settings import ConversionSettings, OutputFormat, StyleOutputMode
from ..core.ir.styles import StyleCollection
from ..core.ir.variables import Variable, VariableCollection
from ._common import ExportRun, default_mode_id
from .styles import export_styles_to_scss_mixins, export_styles_to_scss_variables

logger = logging.getLogger(__name__)

HEADER_TITLE = "Auto-generated SCSS Variables"


def export_to_scss(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    file_name: str,
    settings: ConversionSettings | None = None,
    styles: StyleCollection | None = None,
    *,
    generated_at: str | None = None,
) -> str:
    """
    Export variables (and optionally styles) as SCSS variables.

    Each variable uses its collection's default mode. Alias references
    and calc passthrough use ``$name``.
    """
    if not variables:
        return NO_VARIABLES_LINE_COMMENT

    settings = settings or ConversionSettings()
    run = ExportRun.start(variables, collections, settings, OutputFormat.SCSS, generated_at)
    lines = [
        generate_header(
            HEADER_TITLE, file_name, run.generated_at, settings.header_banner, HeaderStyle.LINE
        )
    ]

    selected = run.selected_collections()
    for index, collection in enumerate(selected):
        if settings.include_collection_comments:
            lines.append(f"// Collection: {collection.name}")
        mode_id = default_mode_id(collection)
        for variable in run.variables_of(collection):
            value = run.resolve(variable, mode_id)
            if value is not None:
                lines.append(f"${run.css_name(variable)}: {convert_var_to_scss(value)};")
        if index < len(selected) - 1:
            lines.append("")

    if settings.include_styles and styles is not None:
        names = run.ctx.variable_css_names
        lines.append("")
        if settings.style_output_mode == StyleOutputMode.CLASSES:
            lines.append(STYLE_MIXINS_BANNER)
            lines.extend(export_styles_to_scss_mixins(styles, settings, names))
        else:
            lines.append(STYLE_VARIABLES_BANNER)
            lines.extend(export_styles_to_scss_variables(styles, settings, names))

    logger.debug("Exported %d variable(s) to SCSS", len(variables))
    return "\n".join(lines)
