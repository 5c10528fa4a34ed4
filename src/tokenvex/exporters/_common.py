"""
Pieces shared by the direct (variable-level) exporters.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..core.ir.settings import ConversionSettings, OutputFormat
from ..core.ir.variables import Variable, VariableCollection
from ..core.resolution.context import ResolutionContext
from ..core.resolution.values import resolve_variable
from ..core.selection import collection_variables, filter_collections
from ..core.serializer import utc_timestamp


@dataclass
class ExportRun:
    """State of one export call: settings, resolution context and timestamp."""

    variables: Sequence[Variable]
    collections: Sequence[VariableCollection]
    settings: ConversionSettings
    ctx: ResolutionContext
    generated_at: str

    @classmethod
    def start(
        cls,
        variables: Sequence[Variable],
        collections: Sequence[VariableCollection],
        settings: ConversionSettings,
        output_format: OutputFormat,
        generated_at: str | None = None,
    ) -> ExportRun:
        return cls(
            variables=variables,
            collections=collections,
            settings=settings,
            ctx=ResolutionContext.from_settings(variables, collections, settings, output_format),
            generated_at=generated_at or utc_timestamp(),
        )

    def selected_collections(self) -> list[VariableCollection]:
        return filter_collections(self.collections, self.settings.selected_collections)

    def variables_of(self, collection: VariableCollection) -> list[Variable]:
        """Collection members in natural order of their CSS names."""
        return collection_variables(self.variables, collection.id, key=self.ctx.css_name)

    def css_name(self, variable: Variable) -> str:
        return self.ctx.css_name(variable)

    def resolve(self, variable: Variable, mode_id: str) -> str | None:
        return resolve_variable(variable, mode_id, self.ctx)


def default_mode_id(collection: VariableCollection) -> str:
    """Id of the mode named ``default``, else the collection's default mode."""
    for mode in collection.modes:
        if mode.name.lower() == "default":
            return mode.mode_id
    return collection.default_mode_id
