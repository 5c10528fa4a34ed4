"""
Alias resolution with depth and cycle guards.

Chains are walked iteratively. A chain that revisits a variable, or that
is longer than ``ResolutionContext.max_depth``, is circular; a chain that
points at an unknown id is unresolved. Neither raises: callers render the
corresponding sentinel comment.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum

from ..config import CIRCULAR_REFERENCE, UNRESOLVED_ALIAS
from ..ir.settings import Unit
from ..ir.variables import Variable, VariableAlias, VariableValue
from ..transforms.description import parse_description
from .context import ResolutionContext

logger = logging.getLogger(__name__)


class AliasFailure(StrEnum):
    UNRESOLVED = "unresolved"
    CIRCULAR = "circular"

    @property
    def sentinel(self) -> str:
        return UNRESOLVED_ALIAS if self is AliasFailure.UNRESOLVED else CIRCULAR_REFERENCE


@dataclass(frozen=True)
class AliasResolution:
    """Result of following an alias chain.

    ``target`` is the variable the alias points at directly; ``terminal``
    is the last variable in the chain, holding the concrete ``value``.
    """

    target: Variable | None = None
    terminal: Variable | None = None
    value: VariableValue | None = None
    failure: AliasFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def value_for_mode(
    variable: Variable, mode_id: str, ctx: ResolutionContext
) -> VariableValue | None:
    """Value of ``variable`` in ``mode_id``.

    Aliases may cross into a collection with different mode ids; in that
    case the target collection's default mode is used.
    """
    if mode_id in variable.values_by_mode:
        return variable.values_by_mode[mode_id]
    collection = ctx.collection_of(variable)
    if collection is not None:
        return variable.values_by_mode.get(collection.default_mode_id)
    return None


def resolve_alias(
    alias: VariableAlias,
    mode_id: str,
    ctx: ResolutionContext,
    origin_id: str | None = None,
) -> AliasResolution:
    """Follow ``alias`` until a concrete value is reached."""
    visited: set[str] = {origin_id} if origin_id else set()
    target: Variable | None = None
    current_id = alias.id
    depth = 0

    while True:
        if depth > ctx.max_depth or current_id in visited:
            logger.debug("Circular alias chain at %s (depth %d)", current_id, depth)
            return AliasResolution(target=target, failure=AliasFailure.CIRCULAR)
        visited.add(current_id)

        variable = ctx.variables_by_id.get(current_id)
        if variable is None:
            return AliasResolution(target=target, failure=AliasFailure.UNRESOLVED)
        if target is None:
            target = variable

        value = value_for_mode(variable, mode_id, ctx)
        if isinstance(value, VariableAlias):
            current_id = value.id
            depth += 1
            continue
        if value is None:
            return AliasResolution(
                target=target, terminal=variable, failure=AliasFailure.UNRESOLVED
            )
        return AliasResolution(target=target, terminal=variable, value=value)


def variable_unit(variable: Variable) -> Unit:
    """Unit declared in the variable's description; ``px`` by default."""
    return parse_description(variable.description).get("unit", Unit.PX)


def resolve_to_number(
    variable: Variable, mode_id: str, ctx: ResolutionContext
) -> tuple[float | None, Unit]:
    """Numeric value of ``variable`` in ``mode_id``, following aliases.

    Returns ``(None, unit)`` for non-numeric, non-finite, missing or
    circular values.
    """
    unit = variable_unit(variable)
    value = value_for_mode(variable, mode_id, ctx)

    if isinstance(value, VariableAlias):
        resolution = resolve_alias(value, mode_id, ctx, origin_id=variable.id)
        if not resolution.ok:
            return None, unit
        value = resolution.value

    if isinstance(value, bool) or not isinstance(value, int | float):
        return None, unit
    if not math.isfinite(value):
        return None, unit
    return float(value), unit
