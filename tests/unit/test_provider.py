"""Tests for the JSON snapshot provider."""

from __future__ import annotations

import json

import pytest

from tokenvex.core.errors import InputError
from tokenvex.core.ir.variables import RGBA, VariableAlias
from tokenvex.exporters.sync import sync_calculations
from tokenvex.provider import JsonSnapshotProvider, VariableProvider


class TestJsonSnapshotProvider:
    def test_reads_records(self, write_snapshot, themed_variables):
        variables, collections = themed_variables
        provider = JsonSnapshotProvider(write_snapshot(variables, collections))

        assert isinstance(provider, VariableProvider)
        assert provider.file_name == "Design System"
        assert [v.id for v in provider.get_variables()] == [v.id for v in variables]
        assert [c.name for c in provider.get_collections()] == ["Primitives", "Theme"]

        background = next(v for v in provider.get_variables() if v.id == "t-bg")
        assert background.values_by_mode["dark"] == VariableAlias(id="p-black")
        white = next(v for v in provider.get_variables() if v.id == "p-white")
        assert isinstance(white.values_by_mode["c-prim-m1"], RGBA)

    def test_file_name_falls_back_to_stem(self, write_snapshot, simple_variables, primitives):
        path = write_snapshot(simple_variables, [primitives], file_name="", name="brand.json")
        assert JsonSnapshotProvider(path).file_name == "brand"

    def test_styles(self, write_snapshot, simple_variables, primitives):
        styles = {
            "paint": [
                {
                    "id": "s1",
                    "name": "Brand",
                    "paints": [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}}],
                }
            ],
            "text": [{"id": "s2", "name": "Body", "fontFamily": "Inter", "fontSize": 16}],
        }
        path = write_snapshot(simple_variables, [primitives], styles=styles)
        provider = JsonSnapshotProvider(path)
        loaded = provider.get_styles()
        assert loaded.paint[0].name == "Brand"
        assert loaded.text[0].font_family == "Inter"

    def test_missing_styles_are_empty(self, write_snapshot, simple_variables, primitives):
        provider = JsonSnapshotProvider(write_snapshot(simple_variables, [primitives]))
        assert provider.get_styles().is_empty()

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="Snapshot not found"):
            JsonSnapshotProvider(tmp_path / "missing.json").get_variables()

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("{not json", "Invalid JSON"),
            ("[]", "must be a JSON object"),
            ('{"variables": [{"id": "x"}]}', "Invalid 'variables'"),
        ],
    )
    def test_malformed(self, tmp_path, content, message):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(InputError, match=message) as exc_info:
            JsonSnapshotProvider(path).get_variables()
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == path

    def test_save_keeps_other_keys(self, write_snapshot, spacing_variables, spacing):
        path = write_snapshot(spacing_variables, [spacing])
        provider = JsonSnapshotProvider(path)
        report = sync_calculations(provider.get_variables(), provider.get_collections())

        assert provider.save(report.apply(provider.get_variables())) == path

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["fileName"] == "Design System"
        assert data["collections"][0]["name"] == "Spacing"
        double = next(v for v in data["variables"] if v["id"] == "v-double")
        assert double["valuesByMode"] == {"c-space-m1": 16.0}

        reloaded = JsonSnapshotProvider(path)
        assert next(v for v in reloaded.get_variables() if v.id == "v-double").values_by_mode == {
            "c-space-m1": 16.0
        }

    def test_save_to_other_path(self, write_snapshot, simple_variables, primitives, tmp_path):
        source = write_snapshot(simple_variables, [primitives])
        before = source.read_text(encoding="utf-8")
        provider = JsonSnapshotProvider(source)
        target = provider.save(provider.get_variables()[:1], tmp_path / "copy.json")

        assert source.read_text(encoding="utf-8") == before
        assert len(json.loads(target.read_text(encoding="utf-8"))["variables"]) == 1
