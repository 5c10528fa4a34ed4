"""Core tokenvex functionality: IR, transforms, expression language, resolution, serializer."""

from . import ir
from .errors import (
    AmbiguousReferenceError,
    ErrorContext,
    InputError,
    InvalidGlobPatternError,
    SettingsError,
    TokenTreeConflictError,
    TokenVexError,
)
from .serializer import serialize_styles, serialize_to_dtcg
from .settings_loader import load_settings, save_settings, validate_settings

__all__ = [
    "ir",
    "TokenVexError",
    "AmbiguousReferenceError",
    "ErrorContext",
    "InputError",
    "InvalidGlobPatternError",
    "SettingsError",
    "TokenTreeConflictError",
    "serialize_styles",
    "serialize_to_dtcg",
    "load_settings",
    "save_settings",
    "validate_settings",
]
