"""
Intermediate representation for tokenvex.

Host records (variables, collections, styles), the DTCG token document,
settings, and the calc expression AST.
"""

from .settings import (
    CasingOption,
    ColorFormat,
    ConversionSettings,
    ExportType,
    NameFormatRule,
    OutputFormat,
    SerializationOptions,
    StyleOutputMode,
    StyleType,
    TokenConfig,
    Unit,
)
from .styles import (
    BlurEffect,
    BoundVariable,
    ColorStop,
    EffectBoundVariables,
    EffectStyle,
    GradientPaint,
    GridStyle,
    ImagePaint,
    LayoutGrid,
    LetterSpacing,
    LineHeight,
    LineHeightUnit,
    PaintBoundVariables,
    PaintStyle,
    ShadowEffect,
    SolidPaint,
    StyleCollection,
    TextStyle,
    Vector,
)
from .tokens import (
    Document,
    DocumentMetadata,
    GridValue,
    PerMode,
    Reference,
    ShadowValue,
    Single,
    StyleGroups,
    Token,
    TokenExtensions,
    TokenGroup,
    TokenType,
    TypographyValue,
)
from .variables import (
    RGB,
    RGBA,
    Mode,
    ResolvedType,
    Variable,
    VariableAlias,
    VariableCollection,
    VariableValue,
)

__all__ = [
    # Settings
    "CasingOption",
    "ColorFormat",
    "ConversionSettings",
    "ExportType",
    "NameFormatRule",
    "OutputFormat",
    "SerializationOptions",
    "StyleOutputMode",
    "StyleType",
    "TokenConfig",
    "Unit",
    # Styles
    "BlurEffect",
    "BoundVariable",
    "ColorStop",
    "EffectBoundVariables",
    "EffectStyle",
    "GradientPaint",
    "GridStyle",
    "ImagePaint",
    "LayoutGrid",
    "LetterSpacing",
    "LineHeight",
    "LineHeightUnit",
    "PaintBoundVariables",
    "PaintStyle",
    "ShadowEffect",
    "SolidPaint",
    "StyleCollection",
    "TextStyle",
    "Vector",
    # Document
    "Document",
    "DocumentMetadata",
    "GridValue",
    "PerMode",
    "Reference",
    "ShadowValue",
    "Single",
    "StyleGroups",
    "Token",
    "TokenExtensions",
    "TokenGroup",
    "TokenType",
    "TypographyValue",
    # Variables
    "RGB",
    "RGBA",
    "Mode",
    "ResolvedType",
    "Variable",
    "VariableAlias",
    "VariableCollection",
    "VariableValue",
]
