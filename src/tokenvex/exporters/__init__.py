"""
Variable-level exporters, the export service and host write-back sync.
"""

from .css import export_to_css
from .scss import export_to_scss
from .service import (
    CONVERTERS,
    FILE_EXTENSIONS,
    build_document,
    export_direct,
    export_document,
    generate_exports,
)
from .styles import (
    export_styles_to_css_classes,
    export_styles_to_css_variables,
    export_styles_to_scss_mixins,
    export_styles_to_scss_variables,
)
from .sync import (
    CalculationSyncReport,
    CodeSyntaxSyncReport,
    reset_code_syntax,
    sync_calculations,
    sync_code_syntax,
)
from .typescript import export_to_typescript

__all__ = [
    "CONVERTERS",
    "FILE_EXTENSIONS",
    "CalculationSyncReport",
    "CodeSyntaxSyncReport",
    "build_document",
    "export_direct",
    "export_document",
    "export_styles_to_css_classes",
    "export_styles_to_css_variables",
    "export_styles_to_scss_mixins",
    "export_styles_to_scss_variables",
    "export_to_css",
    "export_to_scss",
    "export_to_typescript",
    "generate_exports",
    "reset_code_syntax",
    "sync_calculations",
    "sync_code_syntax",
]
