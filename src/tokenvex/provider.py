"""
Host boundary: where variables, collections and styles come from.

The pipeline only depends on the ``VariableProvider`` protocol. The
``JsonSnapshotProvider`` reads a snapshot exported from the design tool::

    {
      "fileName": "Design System",
      "variables": [...],
      "collections": [...],
      "styles": {"paint": [...], "text": [...], "effect": [...], "grid": [...]}
    }

All records use the host's camelCase field names.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from .core.errors import ErrorContext, InputError
from .core.ir.styles import StyleCollection
from .core.ir.variables import Variable, VariableCollection

logger = logging.getLogger(__name__)

_VARIABLES = TypeAdapter(list[Variable])
_COLLECTIONS = TypeAdapter(list[VariableCollection])


@runtime_checkable
class VariableProvider(Protocol):
    """Source of host variables, collections and styles."""

    @property
    def file_name(self) -> str: ...

    def get_variables(self) -> list[Variable]: ...

    def get_collections(self) -> list[VariableCollection]: ...

    def get_styles(self) -> StyleCollection: ...


class JsonSnapshotProvider:
    """Provider backed by a JSON snapshot file; parsed once, on first access."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._raw: dict[str, Any] | None = None
        self._variables: list[Variable] | None = None
        self._collections: list[VariableCollection] | None = None
        self._styles: StyleCollection | None = None

    def __repr__(self) -> str:
        return f"JsonSnapshotProvider({str(self.path)!r})"

    # -- loading --

    def _load(self) -> dict[str, Any]:
        if self._raw is not None:
            return self._raw
        if not self.path.exists():
            raise InputError(f"Snapshot not found: {self.path}")
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InputError(
                f"Invalid JSON: {e}", context=ErrorContext(file=self.path)
            ) from e
        if not isinstance(data, dict):
            raise InputError("Snapshot must be a JSON object", context=ErrorContext(file=self.path))
        self._raw = data
        return data

    def _validate(self, adapter: TypeAdapter[Any], key: str) -> Any:
        try:
            return adapter.validate_python(self._load().get(key) or [])
        except ValidationError as e:
            raise InputError(
                f"Invalid '{key}' in snapshot: {e}", context=ErrorContext(file=self.path)
            ) from e

    @property
    def file_name(self) -> str:
        return str(self._load().get("fileName") or self.path.stem)

    def get_variables(self) -> list[Variable]:
        if self._variables is None:
            self._variables = self._validate(_VARIABLES, "variables")
            logger.debug("Loaded %d variable(s) from %s", len(self._variables), self.path)
        return list(self._variables)

    def get_collections(self) -> list[VariableCollection]:
        if self._collections is None:
            self._collections = self._validate(_COLLECTIONS, "collections")
        return list(self._collections)

    def get_styles(self) -> StyleCollection:
        if self._styles is None:
            try:
                self._styles = StyleCollection.model_validate(self._load().get("styles") or {})
            except ValidationError as e:
                raise InputError(
                    f"Invalid 'styles' in snapshot: {e}", context=ErrorContext(file=self.path)
                ) from e
        return self._styles

    # -- writing --

    def save(self, variables: Sequence[Variable], path: Path | None = None) -> Path:
        """Write ``variables`` back into the snapshot, keeping everything else.

        Args:
            variables: The full, updated variable list.
            path: Destination; the snapshot itself by default.

        Returns:
            The path written.
        """
        data = dict(self._load())
        data["variables"] = _VARIABLES.dump_python(list(variables), mode="json", by_alias=True)
        target = Path(path) if path is not None else self.path
        target.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

        self._raw = data
        self._variables = list(variables)
        logger.info("Saved %d variable(s) to %s", len(variables), target)
        return target
