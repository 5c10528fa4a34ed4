"""
Alias, expression and style resolution against a variable set.
"""

from .aliases import AliasFailure, AliasResolution, resolve_alias, resolve_to_number
from .context import ResolutionContext
from .expressions import resolve_expression
from .formatter import format_for_css, format_for_scss
from .lookup import (
    LookupEntry,
    build_variable_lookup,
    extract_path_references,
    extract_var_references,
    lookup_by_path,
    lookup_variable,
)
from .styles import (
    has_box_shadow,
    resolve_blur_filter,
    resolve_effect_value,
    resolve_grid_value,
    resolve_paint_value,
    resolve_text_properties,
)
from .values import effective_config, resolve_value, resolve_variable

__all__ = [
    "AliasFailure",
    "AliasResolution",
    "LookupEntry",
    "ResolutionContext",
    "build_variable_lookup",
    "effective_config",
    "extract_path_references",
    "extract_var_references",
    "format_for_css",
    "format_for_scss",
    "has_box_shadow",
    "lookup_by_path",
    "lookup_variable",
    "resolve_alias",
    "resolve_blur_filter",
    "resolve_effect_value",
    "resolve_expression",
    "resolve_grid_value",
    "resolve_paint_value",
    "resolve_text_properties",
    "resolve_to_number",
    "resolve_value",
    "resolve_variable",
]
