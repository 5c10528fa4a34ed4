"""
Document to JSON.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.ir.settings import ConversionSettings
from ..core.ir.tokens import Document


def compact(data: Any) -> Any:
    """Drop ``$description`` keys and empty ``$extensions`` namespaces, recursively.

    ``$type`` and ``$value`` are kept as they are.
    """
    if not isinstance(data, dict):
        return data

    result: dict[str, Any] = {}
    for key, value in data.items():
        if key == "$description":
            continue
        if key == "$value":
            result[key] = value
            continue
        if key == "$extensions" and isinstance(value, dict):
            extensions = {ns: ext for ns, ext in value.items() if ext}
            if extensions:
                result[key] = extensions
            continue
        result[key] = compact(value)
    return result


def convert_to_json(document: Document, settings: ConversionSettings | None = None) -> str:
    """Pretty-printed DTCG JSON, compacted when ``settings.compact_json`` is set."""
    settings = settings or ConversionSettings()
    data = document.to_dtcg()
    if settings.compact_json:
        data = compact(data)
    return json.dumps(data, indent=2, ensure_ascii=False)
