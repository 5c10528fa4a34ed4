"""
tokenvex - design variables to CSS, SCSS, TypeScript and DTCG JSON.

Host variables, collections and styles are serialized into a DTCG token
document, which the converters render into each output format.
"""

from __future__ import annotations

from ._version import get_version
from .converters import convert_to_css, convert_to_json, convert_to_scss, convert_to_typescript
from .core import ir
from .core.errors import (
    AmbiguousReferenceError,
    InputError,
    SettingsError,
    TokenTreeConflictError,
    TokenVexError,
)
from .core.ir.settings import ConversionSettings, ExportType
from .core.serializer import serialize_to_dtcg
from .exporters.service import export_document, generate_exports
from .provider import JsonSnapshotProvider, VariableProvider

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Errors
    "TokenVexError",
    "AmbiguousReferenceError",
    "InputError",
    "SettingsError",
    "TokenTreeConflictError",
    # Settings
    "ConversionSettings",
    "ExportType",
    # Pipeline
    "serialize_to_dtcg",
    "convert_to_css",
    "convert_to_json",
    "convert_to_scss",
    "convert_to_typescript",
    "export_document",
    "generate_exports",
    # Host boundary
    "JsonSnapshotProvider",
    "VariableProvider",
]
