"""
Host variable records consumed by the token pipeline.

These mirror the variable/collection shapes exposed by the design tool's
plugin API. They are read, never owned: the pipeline does not mutate them
and only depends on the fields declared here. JSON snapshots use the
host's camelCase keys, which the models accept through aliases.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HostModel(BaseModel):
    """Base for host-facing records (camelCase on the wire)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ResolvedType(StrEnum):
    """Primitive type of a variable's values."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class RGB(HostModel):
    """Color channels in the 0..1 range."""

    r: float
    g: float
    b: float


class RGBA(HostModel):
    """Color channels and alpha in the 0..1 range."""

    r: float
    g: float
    b: float
    a: float = 1.0


class VariableAlias(HostModel):
    """A variable value that points at another variable by id."""

    type: Literal["VARIABLE_ALIAS"] = "VARIABLE_ALIAS"
    id: str = Field(description="Target variable id")


VariableValue = VariableAlias | RGBA | bool | float | str


class Variable(HostModel):
    """A design variable with one value per mode of its collection."""

    id: str
    name: str = Field(description="Slash-delimited variable name, e.g. 'color/primary'")
    resolved_type: ResolvedType
    values_by_mode: dict[str, VariableValue] = Field(default_factory=dict)
    variable_collection_id: str
    description: str = ""
    code_syntax: dict[str, str] = Field(
        default_factory=dict, description="Per-platform code names, e.g. {'WEB': 'var(--x)'}"
    )

    def value_for_mode(self, mode_id: str) -> VariableValue | None:
        return self.values_by_mode.get(mode_id)


class Mode(HostModel):
    """A named variant of a collection (e.g. Light, Dark)."""

    mode_id: str
    name: str


class VariableCollection(HostModel):
    """A group of variables sharing the same set of modes."""

    id: str
    name: str
    modes: list[Mode] = Field(default_factory=list)
    default_mode_id: str

    @property
    def default_mode(self) -> Mode | None:
        for mode in self.modes:
            if mode.mode_id == self.default_mode_id:
                return mode
        return self.modes[0] if self.modes else None

    def mode_name(self, mode_id: str) -> str | None:
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode.name
        return None
