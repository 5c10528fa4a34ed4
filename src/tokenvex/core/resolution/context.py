"""
Resolution context shared by the value, expression and style resolvers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cached_property

from ..config import MAX_ALIAS_DEPTH
from ..ir.settings import ConversionSettings, NameFormatRule, OutputFormat, TokenConfig
from ..ir.variables import Variable, VariableCollection
from ..transforms.names import get_variable_css_name
from .lookup import LookupEntry, build_variable_lookup


@dataclass
class ResolutionContext:
    """Everything a resolver needs, with defaults.

    Lookup maps are built lazily and memoized on the instance; build one
    context per conversion call.
    """

    variables: Sequence[Variable]
    collections: Sequence[VariableCollection]
    prefix: str = ""
    name_format_rules: Sequence[NameFormatRule] = ()
    export_as_calc_expressions: bool = False
    rem_base_variable_id: str | None = None
    output_format: OutputFormat | None = None
    max_depth: int = MAX_ALIAS_DEPTH
    base_config: TokenConfig = field(default_factory=TokenConfig)

    @classmethod
    def from_settings(
        cls,
        variables: Sequence[Variable],
        collections: Sequence[VariableCollection],
        settings: ConversionSettings,
        output_format: OutputFormat | None = None,
    ) -> ResolutionContext:
        return cls(
            variables=variables,
            collections=collections,
            prefix=settings.prefix,
            name_format_rules=settings.name_format_rules,
            export_as_calc_expressions=settings.export_as_calc_expressions,
            rem_base_variable_id=settings.rem_base_variable_id,
            output_format=output_format,
            base_config=settings.base_token_config(),
        )

    @cached_property
    def variables_by_id(self) -> dict[str, Variable]:
        return {v.id: v for v in self.variables}

    @cached_property
    def collections_by_id(self) -> dict[str, VariableCollection]:
        return {c.id: c for c in self.collections}

    @cached_property
    def css_lookup(self) -> dict[str, LookupEntry]:
        return build_variable_lookup(
            self.variables, self.collections, self.prefix, self.name_format_rules
        )

    @cached_property
    def variable_css_names(self) -> dict[str, str]:
        """Variable id to CSS name, for bound style properties."""
        return {v.id: self.css_name(v) for v in self.variables}

    def css_name(self, variable: Variable) -> str:
        return get_variable_css_name(variable, self.prefix, self.name_format_rules)

    def collection_of(self, variable: Variable) -> VariableCollection | None:
        return self.collections_by_id.get(variable.variable_collection_id)
