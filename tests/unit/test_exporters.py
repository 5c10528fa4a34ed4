"""Tests for the direct exporters and the export service."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import pytest
from factories import FIXED_TIMESTAMP, make_variable

from tokenvex.core.ir.settings import ConversionSettings, ExportType, StyleOutputMode, StyleType
from tokenvex.core.ir.styles import (
    BlurEffect,
    BoundVariable,
    EffectStyle,
    PaintBoundVariables,
    PaintStyle,
    ShadowEffect,
    SolidPaint,
    StyleCollection,
    TextStyle,
)
from tokenvex.core.ir.variables import RGB, RGBA, Variable, VariableCollection
from tokenvex.exporters.css import export_to_css
from tokenvex.exporters.scss import export_to_scss
from tokenvex.exporters.service import (
    FILE_EXTENSIONS,
    build_document,
    export_direct,
    export_document,
    generate_exports,
)
from tokenvex.exporters.styles import (
    export_styles_to_css_classes,
    export_styles_to_css_variables,
    export_styles_to_scss_mixins,
    style_class_names,
    style_variable_names,
)
from tokenvex.exporters.typescript import export_to_typescript
from tokenvex.provider import VariableProvider


@pytest.fixture
def styles() -> StyleCollection:
    return StyleCollection(
        paint=[
            PaintStyle(
                id="s1",
                name="Brand/Primary",
                paints=[SolidPaint(color=RGB(r=1, g=0, b=0))],
                paint_bound_variables=[
                    PaintBoundVariables(color=BoundVariable(variable_id="v-primary"))
                ],
            )
        ],
        text=[TextStyle(id="s2", name="Heading/H1", font_family="Inter", font_size=32)],
    )


@dataclass
class InMemoryProvider:
    variables: list[Variable]
    collections: list[VariableCollection]
    styles: StyleCollection = field(default_factory=StyleCollection)
    file_name: str = "Design System"
    style_reads: int = 0

    def get_variables(self) -> list[Variable]:
        return self.variables

    def get_collections(self) -> list[VariableCollection]:
        return self.collections

    def get_styles(self) -> StyleCollection:
        self.style_reads += 1
        return self.styles


# =============================================================================
# CSS
# =============================================================================


class TestExportCss:
    def test_flat(self, simple_variables, primitives):
        css = export_to_css(
            simple_variables, [primitives], "Design System", generated_at=FIXED_TIMESTAMP
        )
        assert css.startswith("/**\n * Auto-generated CSS Custom Properties\n")
        assert " * Exported from: Design System\n" in css
        assert css.endswith(
            ":root {\n"
            "  /* Primitives */\n"
            "  --color-primary: #ff0000;\n"
            "  --spacing-sm: 8px;\n"
            "}"
        )

    def test_no_variables(self, primitives):
        assert export_to_css([], [primitives], "Empty") == "/* No variables found in this file */"

    def test_aliases_and_calc(self, spacing_variables, spacing):
        css = export_to_css(spacing_variables, [spacing], "DS")
        assert "  --gap: var(--base);" in css
        assert "  --double: 16px;" in css

    def test_calc_passthrough(self, spacing_variables, spacing):
        settings = ConversionSettings(export_as_calc_expressions=True)
        css = export_to_css(spacing_variables, [spacing], "DS", settings)
        assert "  --double: calc(var(--base) * 2);" in css

    def test_mode_selectors_skip_missing_modes(self, themed_variables, theme):
        variables, collections = themed_variables
        variables = [
            *variables,
            make_variable("t-accent", "accent", theme, values={"light": 2}),
        ]
        settings = ConversionSettings(use_modes_as_selectors=True)
        css = export_to_css(variables, collections, "DS", settings)

        light = css.split("/* Collection: Theme */\n:root {\n", 1)[1].split("}", 1)[0]
        dark = css.split('.theme-dark {\n', 1)[1].split("}", 1)[0]
        assert "--accent: 2px;" in light
        assert "--surface-background: var(--white);" in light
        assert "--accent" not in dark
        assert "--surface-background: var(--black);" in dark

    def test_prefix(self, simple_variables, primitives):
        settings = ConversionSettings(prefix="ds", include_collection_comments=False)
        css = export_to_css(simple_variables, [primitives], "DS", settings)
        assert ":root {\n  --ds-color-primary: #ff0000;\n  --ds-spacing-sm: 8px;\n}" in css

    def test_code_syntax_overrides_name(self, primitives):
        variables = [
            make_variable("v1", "spacing/sm", primitives, 8, code_syntax={"WEB": "var(--gap-s)"})
        ]
        assert "  --gap-s: 8px;" in export_to_css(variables, [primitives], "DS")

    def test_style_variables(self, simple_variables, primitives, styles):
        settings = ConversionSettings(include_styles=True)
        css = export_to_css(simple_variables, [primitives], "DS", settings, styles)
        assert (
            "  /* ═══ Styles ═══ */\n"
            "  /* Paint Styles */\n"
            "  --brand-primary: var(--color-primary);\n"
            "  /* Text Styles */\n"
            '  --heading-h1-font-family: "Inter", sans-serif;\n'
            "  --heading-h1-font-size: 32px;\n"
            "  --heading-h1-font-weight: 400;\n"
            "  --heading-h1-letter-spacing: 0px;\n"
            "}"
        ) in css

    def test_styles_ignored_without_opt_in(self, simple_variables, primitives, styles):
        css = export_to_css(simple_variables, [primitives], "DS", None, styles)
        assert "Styles" not in css

    def test_style_classes(self, simple_variables, primitives, styles):
        settings = ConversionSettings(
            include_styles=True, style_output_mode=StyleOutputMode.CLASSES
        )
        css = export_to_css(simple_variables, [primitives], "DS", settings, styles)
        assert ".bg-brand-primary {\n  background-color: var(--color-primary);\n}" in css
        assert ".heading-h1 {\n  font-family: \"Inter\", sans-serif;" in css


# =============================================================================
# SCSS and TypeScript
# =============================================================================


class TestExportScss:
    def test_variables(self, spacing_variables, spacing):
        scss = export_to_scss(spacing_variables, [spacing], "DS", generated_at=FIXED_TIMESTAMP)
        assert scss.startswith("//\n// Auto-generated SCSS Variables\n")
        assert "$gap: $base;" in scss
        assert "$double: 16px;" in scss

    def test_calc_passthrough(self, spacing_variables, spacing):
        settings = ConversionSettings(export_as_calc_expressions=True)
        assert "$double: $base * 2;" in export_to_scss(
            spacing_variables, [spacing], "DS", settings
        )

    def test_no_variables(self):
        assert export_to_scss([], [], "DS") == "// No variables found in this file"

    def test_style_mixins(self, simple_variables, primitives, styles):
        settings = ConversionSettings(
            include_styles=True, style_output_mode=StyleOutputMode.CLASSES
        )
        scss = export_to_scss(simple_variables, [primitives], "DS", settings, styles)
        assert "// ═══ Style Mixins ═══" in scss
        assert (
            "@mixin brand-primary($property: color) {\n  #{$property}: $color-primary;\n}"
        ) in scss


class TestExportTypescript:
    def test_union(self, simple_variables, primitives):
        ts = export_to_typescript(simple_variables, [primitives], "DS")
        assert 'export type CSSVariableName =\n  | "--color-primary"\n  | "--spacing-sm"\n;' in ts

    def test_no_variables(self):
        assert export_to_typescript([], [], "DS") == "// No variables found in this file"

    def test_style_names(self, simple_variables, primitives, styles):
        settings = ConversionSettings(include_styles=True)
        ts = export_to_typescript(simple_variables, [primitives], "DS", settings, styles)
        assert '  | "--heading-h1-font-size"' in ts

        classes = settings.model_copy(update={"style_output_mode": StyleOutputMode.CLASSES})
        ts = export_to_typescript(simple_variables, [primitives], "DS", classes, styles)
        assert '  | "--heading-h1-font-size"' not in ts
        assert '  | "border-brand-primary"' in ts


# =============================================================================
# Style exporters
# =============================================================================


class TestStyleExporters:
    def test_style_types_filter(self, styles):
        settings = ConversionSettings(style_types=[StyleType.TEXT])
        lines = export_styles_to_css_variables(styles, settings)
        assert "  /* Paint Styles */" not in lines
        assert "  --heading-h1-font-size: 32px;" in lines

    def test_nothing_wanted(self):
        assert export_styles_to_css_variables(StyleCollection(), ConversionSettings()) == []

    def test_unbound_paint_uses_literal(self, styles):
        lines = export_styles_to_css_classes(styles, ConversionSettings())
        assert "  color: #ff0000;" in lines

    def test_effect_class_splits_shadow_and_blur(self):
        styles = StyleCollection(
            effect=[
                EffectStyle(
                    id="e1",
                    name="Glass",
                    effects=[
                        ShadowEffect(type="DROP_SHADOW", color=RGBA(r=0, g=0, b=0), radius=8),
                        BlurEffect(type="BACKGROUND_BLUR", radius=12),
                    ],
                )
            ]
        )
        lines = export_styles_to_css_classes(styles, ConversionSettings())
        assert lines[1:5] == [
            ".glass {",
            "  box-shadow: 0px 0px 8px 0px #000000;",
            "  backdrop-filter: blur(12px);",
            "}",
        ]

    def test_names_match_declarations(self, styles):
        settings = ConversionSettings(prefix="ds")
        names = style_variable_names(styles, settings)
        lines = export_styles_to_css_variables(styles, settings)
        for name in names:
            assert any(line.strip().startswith(f"{name}:") for line in lines)
        assert style_class_names(styles, settings)[:3] == [
            "ds-brand-primary",
            "bg-ds-brand-primary",
            "border-ds-brand-primary",
        ]

    def test_text_mixin(self, styles):
        lines = export_styles_to_scss_mixins(styles, ConversionSettings())
        start = lines.index("@mixin heading-h1 {")
        assert lines[start + 2] == "  font-size: 32px;"


# =============================================================================
# Service
# =============================================================================


class TestService:
    def test_provider_protocol(self, simple_variables, primitives):
        assert isinstance(InMemoryProvider(simple_variables, [primitives]), VariableProvider)

    def test_export_document(self, simple_variables, primitives):
        provider = InMemoryProvider(simple_variables, [primitives])
        results = export_document(
            provider,
            [ExportType.JSON, ExportType.CSS, ExportType.JSON],
            generated_at=FIXED_TIMESTAMP,
        )
        assert list(results) == [ExportType.JSON, ExportType.CSS]
        assert "--primitives-color-primary: #ff0000;" in results[ExportType.CSS]
        assert json.loads(results[ExportType.JSON])["$metadata"] == {
            "sourceFile": "Design System",
            "generatedAt": FIXED_TIMESTAMP,
        }

    def test_styles_read_only_when_included(self, simple_variables, primitives, styles):
        provider = InMemoryProvider(simple_variables, [primitives], styles)
        build_document(provider)
        assert provider.style_reads == 0

        document = build_document(provider, ConversionSettings(include_styles=True))
        assert provider.style_reads == 1
        assert document.styles is not None

    def test_generate_exports_all_formats(self, simple_variables, primitives):
        document = build_document(InMemoryProvider(simple_variables, [primitives]))
        results = generate_exports(document, list(ExportType))
        assert set(results) == set(ExportType)
        assert set(FILE_EXTENSIONS) == set(ExportType)

    def test_export_direct(self, spacing_variables, spacing):
        provider = InMemoryProvider(spacing_variables, [spacing])
        results = export_direct(
            provider,
            [ExportType.CSS, ExportType.SCSS, ExportType.JSON],
            generated_at=FIXED_TIMESTAMP,
        )
        assert "  --gap: var(--base);" in results[ExportType.CSS]
        assert "$gap: $base;" in results[ExportType.SCSS]
        gap = json.loads(results[ExportType.JSON])["collections"]["Spacing"]["gap"]
        assert gap["$value"] == {"$ref": "Spacing.base"}
