"""
Export orchestration: provider -> token document -> requested formats.

Two routes produce text:

- ``export_document`` serializes the provider's records into the token
  document and runs the document converters (the default route).
- ``export_direct`` runs the variable-level exporters, which resolve
  aliases to ``var(--target)`` instead of flattening them. JSON always
  goes through the document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..converters import convert_to_css, convert_to_json, convert_to_scss, convert_to_typescript
from ..core.ir.settings import ConversionSettings, ExportType, SerializationOptions
from ..core.ir.styles import StyleCollection
from ..core.ir.tokens import Document
from ..core.serializer import serialize_to_dtcg, utc_timestamp
from ..provider import VariableProvider
from .css import export_to_css
from .scss import export_to_scss
from .typescript import export_to_typescript

logger = logging.getLogger(__name__)

Converter = Callable[[Document, ConversionSettings], str]

CONVERTERS: dict[ExportType, Converter] = {
    ExportType.CSS: convert_to_css,
    ExportType.SCSS: convert_to_scss,
    ExportType.JSON: convert_to_json,
    ExportType.TYPESCRIPT: convert_to_typescript,
}

DIRECT_EXPORTERS = {
    ExportType.CSS: export_to_css,
    ExportType.SCSS: export_to_scss,
    ExportType.TYPESCRIPT: export_to_typescript,
}

# File extension per export type, used by the CLI when writing files
FILE_EXTENSIONS: dict[ExportType, str] = {
    ExportType.CSS: "css",
    ExportType.SCSS: "scss",
    ExportType.JSON: "json",
    ExportType.TYPESCRIPT: "ts",
}


def _unique(export_types: Iterable[ExportType]) -> list[ExportType]:
    return list(dict.fromkeys(ExportType(t) for t in export_types))


def generate_exports(
    document: Document,
    export_types: Iterable[ExportType],
    settings: ConversionSettings | None = None,
) -> dict[ExportType, str]:
    """Convert ``document`` to each requested format, in request order."""
    settings = settings or ConversionSettings()
    results: dict[ExportType, str] = {}
    for export_type in _unique(export_types):
        results[export_type] = CONVERTERS[export_type](document, settings)
        logger.debug("Generated %s export (%d chars)", export_type, len(results[export_type]))
    return results


def build_document(
    provider: VariableProvider,
    settings: ConversionSettings | None = None,
    *,
    generated_at: str | None = None,
) -> Document:
    """Serialize the provider's records; styles are read only when included."""
    settings = settings or ConversionSettings()
    styles = provider.get_styles() if settings.include_styles else None
    return serialize_to_dtcg(
        provider.get_variables(),
        provider.get_collections(),
        provider.file_name,
        SerializationOptions.from_settings(settings),
        styles,
        settings=settings,
        generated_at=generated_at,
    )


def export_document(
    provider: VariableProvider,
    export_types: Iterable[ExportType],
    settings: ConversionSettings | None = None,
    *,
    generated_at: str | None = None,
) -> dict[ExportType, str]:
    """
    Serialize the provider's variables and convert them to each format.

    Args:
        provider: Source of variables, collections and styles.
        export_types: Formats to produce; duplicates are ignored.
        settings: Naming, formatting and layout options.
        generated_at: Timestamp for headers and metadata; now by default.

    Returns:
        Mapping of export type to generated text.

    Raises:
        AmbiguousReferenceError: If a ``calc:`` path reference is ambiguous.
        TokenTreeConflictError: If a name is both a token and a group.
    """
    settings = settings or ConversionSettings()
    document = build_document(provider, settings, generated_at=generated_at)
    results = generate_exports(document, export_types, settings)
    logger.info(
        "Exported %s from %s", ", ".join(str(t) for t in results), provider.file_name or "<unnamed>"
    )
    return results


def export_direct(
    provider: VariableProvider,
    export_types: Iterable[ExportType],
    settings: ConversionSettings | None = None,
    *,
    generated_at: str | None = None,
) -> dict[ExportType, str]:
    """Like ``export_document`` but through the variable-level exporters."""
    settings = settings or ConversionSettings()
    generated_at = generated_at or utc_timestamp()
    variables = provider.get_variables()
    collections = provider.get_collections()
    styles: StyleCollection | None = provider.get_styles() if settings.include_styles else None

    results: dict[ExportType, str] = {}
    for export_type in _unique(export_types):
        if export_type == ExportType.JSON:
            document = build_document(provider, settings, generated_at=generated_at)
            results[export_type] = convert_to_json(document, settings)
            continue
        exporter = DIRECT_EXPORTERS[export_type]
        results[export_type] = exporter(
            variables,
            collections,
            provider.file_name,
            settings,
            styles,
            generated_at=generated_at,
        )
    return results
