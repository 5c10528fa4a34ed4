"""Tests for formatting directives parsed from descriptions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tokenvex.core.ir.settings import ColorFormat, ConversionSettings, TokenConfig, Unit
from tokenvex.core.transforms.description import parse_description, resolve_token_config
from tokenvex.core.transforms.units import format_number


class TestParseDescription:
    def test_empty(self):
        assert parse_description("") == {}
        assert parse_description(None) == {}

    def test_plain_text_has_no_directives(self):
        assert parse_description("Primary brand color") == {}

    def test_unit(self):
        assert parse_description("unit: rem") == {"unit": Unit.REM}
        assert parse_description("UNIT: %") == {"unit": Unit.PERCENT}

    def test_unit_with_rem_base(self):
        assert parse_description("unit: rem(18)") == {"unit": Unit.REM, "rem_base": 18}

    @pytest.mark.parametrize("text", ["unit: rem(0)", "unit: rem(0.5)"])
    def test_non_positive_rem_base_is_ignored(self, text):
        assert parse_description(text) == {"unit": Unit.REM}

    def test_unit_with_rem_base_variable(self):
        assert parse_description("unit: rem('Typography/rem-base')") == {
            "unit": Unit.REM,
            "rem_base_variable_path": "Typography/rem-base",
        }

    def test_unknown_unit_is_ignored(self):
        assert parse_description("unit: parsecs") == {}

    def test_color_format(self):
        assert parse_description("format: oklch") == {"color_format": ColorFormat.OKLCH}

    def test_calc_stops_at_semicolon(self):
        assert parse_description("calc: 'Spacing/base' * 2; unit: rem") == {
            "expression": "'Spacing/base' * 2",
            "unit": Unit.REM,
        }

    def test_calc_on_its_own_line(self):
        text = "Double spacing\ncalc: round('Spacing/base' * 1.5)\nprecision: 2"
        assert parse_description(text) == {
            "expression": "round('Spacing/base' * 1.5)",
            "precision": 2,
        }


class TestResolveTokenConfig:
    def test_overlays_base(self):
        base = TokenConfig(unit=Unit.PX, color_format=ColorFormat.RGB, rem_base=20)
        config = resolve_token_config("unit: rem", base)
        assert config.unit == Unit.REM
        assert config.color_format == ColorFormat.RGB
        assert config.rem_base == 20

    def test_base_is_not_mutated(self):
        base = TokenConfig()
        resolve_token_config("unit: em; format: hsl", base)
        assert base.unit == Unit.PX
        assert base.color_format == ColorFormat.HEX

    def test_zero_rem_base_keeps_default(self):
        config = resolve_token_config("unit: rem(0)")
        assert config.rem_base == 16
        assert format_number(16, config) == "1rem"

    def test_rem_base_must_be_positive(self):
        with pytest.raises(ValidationError):
            TokenConfig(rem_base=0)
        with pytest.raises(ValidationError):
            ConversionSettings(rem_base=-4)

    def test_defaults_without_base(self):
        assert resolve_token_config(None) == TokenConfig()
