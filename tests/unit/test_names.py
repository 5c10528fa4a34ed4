"""Tests for CSS/SCSS name formatting."""

from __future__ import annotations

import pytest
from factories import make_collection, make_variable
from hypothesis import given
from hypothesis import strategies as st

from tokenvex.core.ir.settings import CasingOption, ConversionSettings, NameFormatRule
from tokenvex.core.transforms.names import (
    compute_default_replacement,
    format_css_name,
    format_name,
    format_scss_name,
    get_all_rules_with_default,
    get_variable_css_name,
    natural_sort_key,
    strip_code_syntax,
    to_css_name,
    to_style_class_name,
    to_style_var_name,
)


class TestToCssName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Color/Primary Blue", "color-primary-blue"),
            ("spacing/sm", "spacing-sm"),
            ("fontSize/bodyLarge", "font-size-body-large"),
            ("Brand / Primary!!", "brand-primary"),
            ("--leading--", "leading"),
            ("", ""),
        ],
    )
    def test_default_transform(self, raw, expected):
        assert to_css_name(raw) == expected

    @given(st.text(max_size=40))
    def test_idempotent(self, raw):
        once = format_name(raw)
        assert format_name(to_css_name(raw)) == once
        assert format_name(once) == once


class TestFormatName:
    def test_prefix_on_default_transform(self):
        assert format_name("color/primary", prefix="ds") == "ds-color-primary"

    def test_prefix_on_custom_rule(self):
        rules = [NameFormatRule(pattern="color/*/alpha/*", replacement="color-$1-a$2")]
        assert format_name("color/teal/alpha/2", rules, "ds") == "ds-color-teal-a2"

    def test_empty_custom_result_falls_back(self):
        rules = [NameFormatRule(pattern="color/*/*", replacement="$3")]
        assert format_name("color/brand/primary", rules, "ds") == "ds-color-brand-primary"

    def test_default_rule_bakes_in_prefix(self):
        rules = get_all_rules_with_default([], "ds", CasingOption.KEBAB)
        assert format_name("Color/Primary", rules, "ds") == "ds-color-primary"

    def test_custom_rules_come_before_default(self):
        custom = [NameFormatRule(id="r1", pattern="spacing/*", replacement="space-$1")]
        rules = get_all_rules_with_default(custom, "", CasingOption.KEBAB)
        assert [r.id for r in rules] == ["r1", "__default__"]
        assert format_name("spacing/sm", rules) == "space-sm"
        assert format_name("color/red", rules) == "color-red"

    def test_stale_default_rule_is_replaced(self):
        stale = NameFormatRule(id="__default__", pattern="**", replacement="old-$1")
        rules = get_all_rules_with_default([stale], "new", CasingOption.KEBAB)
        assert len(rules) == 1
        assert rules[0].replacement == "new-${1:kebab}"


class TestDefaultReplacement:
    @pytest.mark.parametrize(
        ("prefix", "casing", "expected"),
        [
            ("", CasingOption.KEBAB, "${1:kebab}"),
            ("ds", CasingOption.KEBAB, "ds-${1:kebab}"),
            ("ds", CasingOption.SNAKE, "ds_${1:snake}"),
            ("ds", CasingOption.CAMEL, "ds${1:pascal}"),
            ("ds", CasingOption.PASCAL, "Ds${1:pascal}"),
            ("DS", CasingOption.LOWER, "ds-${1:kebab}"),
            ("ds", CasingOption.UPPER, "DS_${1:snake}"),
        ],
    )
    def test_replacement(self, prefix, casing, expected):
        assert compute_default_replacement(prefix, casing) == expected

    def test_camel_casing_end_to_end(self):
        rules = get_all_rules_with_default([], "ds", CasingOption.CAMEL)
        assert format_name("color/primary blue", rules, "ds") == "dsColorPrimaryBlue"


class TestVariableNames:
    def test_web_code_syntax_wins(self):
        collection = make_collection("c", "Colors")
        variable = make_variable(
            "v", "color/primary", collection, 1, code_syntax={"WEB": "var(--brand-primary)"}
        )
        assert get_variable_css_name(variable, prefix="ds") == "brand-primary"

    def test_rules_then_default(self):
        collection = make_collection("c", "Colors")
        variable = make_variable("v", "color/primary", collection, 1)
        rules = [NameFormatRule(pattern="color/*", replacement="c-$1")]
        assert get_variable_css_name(variable, "", rules) == "c-primary"
        assert get_variable_css_name(variable) == "color-primary"

    @pytest.mark.parametrize("web", ["--brand", "var(--brand)", "  var( --brand )  "])
    def test_strip_code_syntax(self, web):
        assert strip_code_syntax(web) == "brand"

    def test_document_paths(self):
        settings = ConversionSettings(prefix="ds")
        assert format_css_name(["Colors", "primary"], settings) == "ds-colors-primary"
        assert format_scss_name(["Colors", "primary"], settings) == "$ds-colors-primary"


class TestStyleNames:
    def test_class_and_var_names(self):
        assert to_style_class_name("Typography/Heading/Large") == "typography-heading-large"
        assert to_style_class_name("Heading", "ds") == "ds-heading"
        assert to_style_var_name("Colors/Primary") == "--colors-primary"


class TestNaturalSort:
    def test_numbers_compare_numerically(self):
        names = ["spacing-10", "spacing-2", "spacing-1"]
        assert sorted(names, key=natural_sort_key) == ["spacing-1", "spacing-2", "spacing-10"]

    def test_case_insensitive_with_stable_tiebreak(self):
        names = ["b", "A", "a"]
        assert sorted(names, key=natural_sort_key) == ["A", "a", "b"]
