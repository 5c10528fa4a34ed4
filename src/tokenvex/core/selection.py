"""
Collection filtering and stable variable ordering.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .ir.variables import Variable, VariableCollection
from .transforms.names import natural_sort_key


def filter_collections(
    collections: Sequence[VariableCollection], selected: Sequence[str] | None
) -> list[VariableCollection]:
    """Collections whose id or name is in ``selected``; all when nothing is selected."""
    if not selected:
        return list(collections)
    wanted = set(selected)
    return [c for c in collections if c.id in wanted or c.name in wanted]


def collection_variables(
    variables: Sequence[Variable],
    collection_id: str,
    key: Callable[[Variable], str] | None = None,
) -> list[Variable]:
    """Variables of one collection in natural order of ``key`` (the raw name by default)."""
    sort_name = key or (lambda v: v.name)
    members = [v for v in variables if v.variable_collection_id == collection_id]
    return sorted(members, key=lambda v: natural_sort_key(sort_name(v)))
