"""
Variable lookup by CSS name, ``var()`` reference, or slash path.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import NamedTuple

from ..errors import AmbiguousReferenceError
from ..ir.settings import NameFormatRule
from ..ir.variables import Variable, VariableCollection
from ..transforms.names import get_variable_css_name

_VAR_REF_RE = re.compile(r"var\(--[^)]+\)")
_VAR_NAME_RE = re.compile(r"var\((--[^)]+)\)")
_PATH_REF_RE = re.compile(r"'((?:[^'\\]|\\.)+)'")
_ESCAPE_RE = re.compile(r"\\(.)")


class LookupEntry(NamedTuple):
    variable: Variable
    collection: VariableCollection


def build_variable_lookup(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    prefix: str = "",
    rules: Sequence[NameFormatRule] = (),
) -> dict[str, LookupEntry]:
    """Map ``--css-name`` to its variable, using the same naming as the exporters.

    Variables whose collection is unknown are skipped.
    """
    collections_by_id = {c.id: c for c in collections}
    lookup: dict[str, LookupEntry] = {}
    for variable in variables:
        collection = collections_by_id.get(variable.variable_collection_id)
        if collection is None:
            continue
        css_name = f"--{get_variable_css_name(variable, prefix, rules)}"
        lookup[css_name] = LookupEntry(variable, collection)
    return lookup


def lookup_variable(var_ref: str, lookup: dict[str, LookupEntry]) -> LookupEntry | None:
    """Find the variable behind ``var(--name)``."""
    match = _VAR_NAME_RE.search(var_ref)
    if not match:
        return None
    return lookup.get(match.group(1))


def extract_var_references(expression: str) -> list[str]:
    """All ``var(--x)`` references in order, duplicates included."""
    return _VAR_REF_RE.findall(expression)


def extract_path_references(expression: str) -> list[str]:
    """All quoted path references, unescaped, duplicates included."""
    return [unescape_path(raw) for raw in _PATH_REF_RE.findall(expression)]


def unescape_path(raw: str) -> str:
    return _ESCAPE_RE.sub(r"\1", raw)


def lookup_by_path(
    path: str,
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
) -> LookupEntry | None:
    """Find a variable by ``Collection/name`` or by its bare ``name``.

    Raises:
        AmbiguousReferenceError: If a bare name matches variables in more
            than one collection.
    """
    collections_by_id = {c.id: c for c in collections}

    head, _, rest = path.partition("/")
    if rest:
        for variable in variables:
            collection = collections_by_id.get(variable.variable_collection_id)
            if collection is not None and collection.name == head and variable.name == rest:
                return LookupEntry(variable, collection)

    matches = [
        LookupEntry(variable, collections_by_id[variable.variable_collection_id])
        for variable in variables
        if variable.name == path and variable.variable_collection_id in collections_by_id
    ]
    if len(matches) > 1:
        raise AmbiguousReferenceError(path, [m.collection.name for m in matches])
    return matches[0] if matches else None
