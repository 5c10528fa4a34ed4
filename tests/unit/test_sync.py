"""Tests for calc and code-syntax write-back."""

from __future__ import annotations

from factories import make_collection, make_variable

from tokenvex.core.ir.settings import CasingOption, NameFormatRule
from tokenvex.core.transforms.names import get_all_rules_with_default
from tokenvex.exporters.sync import (
    WEB,
    reset_code_syntax,
    sync_calculations,
    sync_code_syntax,
)


class TestSyncCalculations:
    def test_evaluates_calc_directives(self, spacing_variables, spacing):
        report = sync_calculations(spacing_variables, [spacing])
        assert report.synced == 1
        assert report.failed == 0
        assert report.updates == {"v-double": {"c-space-m1": 16.0}}

    def test_apply_returns_new_records(self, spacing_variables, spacing):
        report = sync_calculations(spacing_variables, [spacing])
        updated = report.apply(spacing_variables)

        double = next(v for v in updated if v.id == "v-double")
        assert double.values_by_mode["c-space-m1"] == 16.0
        original = next(v for v in spacing_variables if v.id == "v-double")
        assert original.values_by_mode["c-space-m1"] == 0
        assert [v.id for v in updated] == [v.id for v in spacing_variables]

    def test_every_mode(self, themed_variables, theme):
        variables, collections = themed_variables
        variables = [
            *variables,
            make_variable(
                "t-radius-lg",
                "radius-lg",
                theme,
                values={"light": 0, "dark": 0},
                description="calc: 'Theme/radius' * 2",
            ),
        ]
        report = sync_calculations(variables, collections)
        assert report.updates == {"t-radius-lg": {"light": 8.0, "dark": 8.0}}
        assert report.synced == 2

    def test_missing_reference_fails(self, primitives, caplog):
        variables = [make_variable("v1", "size", primitives, 1, description="calc: 'Nope' + 1")]
        report = sync_calculations(variables, [primitives])
        assert report.synced == 0
        assert report.failed == 1
        assert report.updates == {}
        assert report.warnings
        assert all(w.startswith("size: ") for w in report.warnings)
        assert "1 failed" in caplog.text

    def test_ambiguous_reference_fails_the_mode(self):
        first = make_collection("c1", "Spacing")
        second = make_collection("c2", "Sizing")
        variables = [
            make_variable("a", "base", first, 4),
            make_variable("b", "base", second, 8),
            make_variable("c", "double", first, 0, description="calc: 'base' * 2"),
        ]
        report = sync_calculations(variables, [first, second])
        assert report.failed == 1
        assert report.warnings[0].startswith("double: Ambiguous reference 'base'")

    def test_variables_without_calc_are_ignored(self, simple_variables, primitives):
        report = sync_calculations(simple_variables, [primitives])
        assert (report.synced, report.failed) == (0, 0)


class TestSyncCodeSyntax:
    def test_default_rule_covers_everything(self, simple_variables):
        rules = get_all_rules_with_default([], "ds", CasingOption.KEBAB)
        report = sync_code_syntax(simple_variables, "ds", rules)
        assert report.synced == 2
        assert report.code_syntax == {
            "v-primary": "var(--ds-color-primary)",
            "v-sm": "var(--ds-spacing-sm)",
        }

    def test_custom_rules_only(self, simple_variables):
        rules = [NameFormatRule(id="r1", pattern="color/*", replacement="brand-$1")]
        report = sync_code_syntax(simple_variables, "ds", rules)
        assert report.code_syntax == {"v-primary": "var(--ds-brand-primary)"}
        assert report.skipped == 1

    def test_apply_keeps_other_platforms(self, primitives):
        variables = [
            make_variable(
                "v1",
                "spacing/sm",
                primitives,
                8,
                code_syntax={WEB: "var(--old)", "ANDROID": "spacing_sm"},
            )
        ]
        rules = get_all_rules_with_default([], "", CasingOption.KEBAB)
        updated = sync_code_syntax(variables, "", rules).apply(variables)
        assert updated[0].code_syntax == {"ANDROID": "spacing_sm", WEB: "var(--spacing-sm)"}
        assert variables[0].code_syntax[WEB] == "var(--old)"

    def test_reset(self, primitives):
        variables = [
            make_variable("v1", "a", primitives, 1, code_syntax={WEB: "var(--a)", "iOS": "a"}),
            make_variable("v2", "b", primitives, 2),
        ]
        report = reset_code_syntax(variables)
        assert (report.synced, report.skipped) == (1, 1)
        updated = report.apply(variables)
        assert updated[0].code_syntax == {"iOS": "a"}
        assert updated[1].code_syntax == {}
