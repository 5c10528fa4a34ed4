"""
Fixed configuration values shared across the pipeline.

User-adjustable options live in ``ConversionSettings``
(see ``tokenvex.core.ir.settings``) and are loaded by
``tokenvex.core.settings_loader``.
"""

from __future__ import annotations

# Alias chains longer than this are treated as circular.
MAX_ALIAS_DEPTH = 10

DEFAULT_CSS_SELECTOR = ":root"
DEFAULT_REM_BASE = 16
DEFAULT_PRECISION = 4

DTCG_SCHEMA_URL = "https://design-tokens.github.io/format/"
EXTENSION_KEY = "com.tokenvex"

DEFAULT_RULE_ID = "__default__"
DEFAULT_STYLE_TYPES = ("paint", "text", "effect", "grid")

# Sentinels rendered in place of values that cannot be resolved
CIRCULAR_REFERENCE = "/* circular reference */"
UNRESOLVED_ALIAS = "/* unresolved alias */"
UNSUPPORTED_PAINT = "/* unsupported paint type */"

NO_VARIABLES_CSS = "/* No variables found in this file */"
NO_VARIABLES_LINE_COMMENT = "// No variables found in this file"

SETTINGS_FILE = "tokenvex.yaml"
SETTINGS_EXPORT_VERSION = 1
