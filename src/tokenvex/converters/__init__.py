"""
Converters from the intermediate token document to text formats.
"""

from .css import convert_to_css
from .json import convert_to_json
from .scss import convert_to_scss, convert_var_to_scss
from .typescript import convert_to_typescript

__all__ = [
    "convert_to_css",
    "convert_to_json",
    "convert_to_scss",
    "convert_to_typescript",
    "convert_var_to_scss",
]
