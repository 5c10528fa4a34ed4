"""
Variables to CSS custom properties, resolved directly from host records.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..converters.common import generate_header
from ..converters.css import mode_selector
from ..core.config import NO_VARIABLES_CSS
from ..core.ir.settings import ConversionSettings, OutputFormat, StyleOutputMode
from ..core.ir.styles import StyleCollection
from ..core.ir.variables import Variable, VariableCollection
from ._common import ExportRun, default_mode_id
from .styles import export_styles_to_css_classes, export_styles_to_css_variables

logger = logging.getLogger(__name__)

HEADER_TITLE = "Auto-generated CSS Custom Properties"


def _variable_lines(run: ExportRun, collection: VariableCollection, mode_id: str) -> list[str]:
    lines: list[str] = []
    for variable in run.variables_of(collection):
        value = run.resolve(variable, mode_id)
        if value is not None:
            lines.append(f"  --{run.css_name(variable)}: {value};")
    return lines


def _mode_blocks(run: ExportRun, selector: str, style_lines: list[str]) -> list[str]:
    lines: list[str] = []
    styles_added = not style_lines
    settings = run.settings

    for collection in run.selected_collections():
        if settings.include_collection_comments:
            lines.append(f"/* Collection: {collection.name} */")
        default_id = default_mode_id(collection)
        for mode in collection.modes:
            is_default = mode.mode_id == default_id
            if settings.include_mode_comments:
                lines.append(f"/* Mode: {mode.name} */")
            lines.append(f"{mode_selector(selector, mode.name, is_default)} {{")
            lines.extend(_variable_lines(run, collection, mode.mode_id))
            if is_default and not styles_added:
                lines.extend(style_lines)
                styles_added = True
            lines.extend(["}", ""])

    if not styles_added:
        lines.extend([f"{selector} {{", *style_lines, "}", ""])
    return lines


def _flat_block(run: ExportRun, selector: str, style_lines: list[str]) -> list[str]:
    lines = [f"{selector} {{"]
    collections = run.selected_collections()
    for index, collection in enumerate(collections):
        if run.settings.include_collection_comments:
            lines.append(f"  /* {collection.name} */")
        lines.extend(_variable_lines(run, collection, default_mode_id(collection)))
        if index < len(collections) - 1:
            lines.append("")
    lines.extend(style_lines)
    lines.append("}")
    return lines


def export_to_css(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    file_name: str,
    settings: ConversionSettings | None = None,
    styles: StyleCollection | None = None,
    *,
    generated_at: str | None = None,
) -> str:
    """
    Export variables (and optionally styles) as CSS custom properties.

    Aliases render as ``var(--target)``, ``calc:`` directives are evaluated
    (or passed through with ``export_as_calc_expressions``), and values
    missing for a mode are skipped. Unresolvable aliases render as
    sentinel comments.

    Returns:
        The stylesheet, or ``/* No variables found in this file */`` when
        there are no variables.

    Raises:
        AmbiguousReferenceError: If a ``calc:`` path reference is ambiguous.
    """
    if not variables:
        return NO_VARIABLES_CSS

    settings = settings or ConversionSettings()
    run = ExportRun.start(variables, collections, settings, OutputFormat.CSS, generated_at)
    selector = settings.selector.strip() or ":root"
    names = run.ctx.variable_css_names

    exported_styles = styles if settings.include_styles else None
    as_classes = settings.style_output_mode == StyleOutputMode.CLASSES
    style_lines: list[str] = []
    if exported_styles is not None and not as_classes:
        style_lines = export_styles_to_css_variables(
            exported_styles, settings, variable_css_names=names
        )

    lines = [generate_header(HEADER_TITLE, file_name, run.generated_at, settings.header_banner)]
    if settings.use_modes_as_selectors:
        lines.extend(_mode_blocks(run, selector, style_lines))
    else:
        lines.extend(_flat_block(run, selector, style_lines))

    if exported_styles is not None and as_classes:
        lines.append("")
        lines.extend(export_styles_to_css_classes(exported_styles, settings, names))

    logger.debug("Exported %d variable(s) to CSS", len(variables))
    return "\n".join(lines)
