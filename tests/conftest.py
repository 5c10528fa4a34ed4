"""Shared pytest fixtures for tokenvex tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from factories import alias, color, make_collection, make_variable

from tokenvex.core.ir.settings import ConversionSettings
from tokenvex.core.ir.variables import ResolvedType, Variable, VariableCollection
from tokenvex.core.resolution.context import ResolutionContext


@pytest.fixture
def settings() -> ConversionSettings:
    return ConversionSettings()


@pytest.fixture
def primitives() -> VariableCollection:
    return make_collection("c-prim", "Primitives")


@pytest.fixture
def spacing() -> VariableCollection:
    return make_collection("c-space", "Spacing")


@pytest.fixture
def theme() -> VariableCollection:
    return make_collection("c-theme", "Theme", [("light", "Light"), ("dark", "Dark")])


@pytest.fixture
def simple_variables(primitives: VariableCollection) -> list[Variable]:
    """``color/primary = #ff0000`` and ``spacing/sm = 8`` in one single-mode collection."""
    return [
        make_variable(
            "v-primary",
            "color/primary",
            primitives,
            color(1, 0, 0),
            resolved_type=ResolvedType.COLOR,
        ),
        make_variable("v-sm", "spacing/sm", primitives, 8),
    ]


@pytest.fixture
def spacing_variables(spacing: VariableCollection) -> list[Variable]:
    """Spacing scale with a calc directive and a rem base."""
    return [
        make_variable("v-base", "base", spacing, 8),
        make_variable("v-rem-base", "rem-base", spacing, 16),
        make_variable(
            "v-double",
            "double",
            spacing,
            0,
            description="calc: 'Spacing/base' * 2",
        ),
        make_variable("v-gap", "gap", spacing, alias("v-base")),
    ]


@pytest.fixture
def themed_variables(
    theme: VariableCollection, primitives: VariableCollection
) -> tuple[list[Variable], list[VariableCollection]]:
    """Two-mode theme collection aliasing into a primitive palette."""
    variables = [
        make_variable(
            "p-white",
            "white",
            primitives,
            color(1, 1, 1),
            resolved_type=ResolvedType.COLOR,
        ),
        make_variable(
            "p-black",
            "black",
            primitives,
            color(0, 0, 0),
            resolved_type=ResolvedType.COLOR,
        ),
        make_variable(
            "t-bg",
            "surface/background",
            theme,
            resolved_type=ResolvedType.COLOR,
            values={"light": alias("p-white"), "dark": alias("p-black")},
        ),
        make_variable(
            "t-radius",
            "radius",
            theme,
            resolved_type=ResolvedType.FLOAT,
            values={"light": 4, "dark": 4},
        ),
    ]
    return variables, [primitives, theme]


@pytest.fixture
def make_ctx():
    """Build a ``ResolutionContext`` over the given records."""

    def _make(
        variables: list[Variable],
        collections: list[VariableCollection],
        **kwargs: Any,
    ) -> ResolutionContext:
        return ResolutionContext(variables=variables, collections=collections, **kwargs)

    return _make


@pytest.fixture
def write_snapshot(tmp_path: Path):
    """Write a host snapshot JSON file and return its path."""

    def _write(
        variables: list[Variable],
        collections: list[VariableCollection],
        *,
        file_name: str = "Design System",
        styles: dict[str, Any] | None = None,
        name: str = "tokens.json",
    ) -> Path:
        data: dict[str, Any] = {
            "fileName": file_name,
            "variables": [v.model_dump(mode="json", by_alias=True) for v in variables],
            "collections": [c.model_dump(mode="json", by_alias=True) for c in collections],
        }
        if styles is not None:
            data["styles"] = styles
        path = tmp_path / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
