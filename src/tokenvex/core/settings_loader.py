"""
Settings persistence for tokenvex.

Conversion settings are read from ``tokenvex.yaml`` in the project root,
or from the ``[tool.tokenvex]`` table of ``pyproject.toml`` when no YAML
file exists. Keys use the ``ConversionSettings`` field names::

    prefix: ds
    color_format: oklch
    use_modes_as_selectors: true
    name_format_rules:
      - pattern: "color/*/alpha/*"
        replacement: "color-$1-a$2"

A portable export file (``{"version", "exportedAt", "settings"}``) lets
settings move between projects; its settings use camelCase keys.

Default location: {project_root}/tokenvex.yaml
"""

from __future__ import annotations

import json
import logging
import tomllib
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_camel, to_snake

from .config import SETTINGS_EXPORT_VERSION, SETTINGS_FILE
from .errors import InvalidGlobPatternError, SettingsError
from .ir.settings import ConversionSettings
from .ir.variables import Variable, VariableCollection
from .transforms.glob import compile_glob

logger = logging.getLogger(__name__)

PYPROJECT_FILE = "pyproject.toml"
PYPROJECT_TABLE = "tokenvex"


# =============================================================================
# Path helpers
# =============================================================================


def get_settings_path(project_root: Path) -> Path:
    """Get the tokenvex.yaml file path."""
    return project_root / SETTINGS_FILE


def settings_exist(project_root: Path) -> bool:
    """Check if a tokenvex.yaml exists in the project."""
    return get_settings_path(project_root).exists()


# =============================================================================
# Load / Save
# =============================================================================


def _parse_settings_data(data: dict[str, Any], source: Path) -> ConversionSettings:
    try:
        return ConversionSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings schema in {source}: {e}") from e


def _load_pyproject_table(project_root: Path) -> dict[str, Any] | None:
    pyproject_path = project_root / PYPROJECT_FILE
    if not pyproject_path.exists():
        return None
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML in {pyproject_path}: {e}") from e
    table = data.get("tool", {}).get(PYPROJECT_TABLE)
    return table if isinstance(table, dict) else None


def load_settings(project_root: Path, *, use_defaults: bool = True) -> ConversionSettings:
    """Load conversion settings for a project.

    Args:
        project_root: Directory holding tokenvex.yaml or pyproject.toml.
        use_defaults: If True, return default settings when neither file
            configures tokenvex.

    Returns:
        ConversionSettings instance.

    Raises:
        SettingsError: If no settings exist (when use_defaults=False) or
            the file is invalid.
    """
    settings_path = get_settings_path(project_root)

    if not settings_path.exists():
        table = _load_pyproject_table(project_root)
        if table is not None:
            logger.debug("Using [tool.%s] from %s", PYPROJECT_TABLE, PYPROJECT_FILE)
            return _parse_settings_data(table, project_root / PYPROJECT_FILE)
        if use_defaults:
            logger.debug("No %s found, using defaults", SETTINGS_FILE)
            return ConversionSettings()
        raise SettingsError(f"Settings not found: {settings_path}")

    try:
        data = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {settings_path}: {e}") from e

    if not data:
        if use_defaults:
            logger.warning("Empty %s at %s, using defaults", SETTINGS_FILE, settings_path)
            return ConversionSettings()
        raise SettingsError(f"Empty or invalid YAML in {settings_path}")
    if not isinstance(data, dict):
        raise SettingsError(f"Settings in {settings_path} must be a mapping")

    return _parse_settings_data(data, settings_path)


def save_settings(project_root: Path, settings: ConversionSettings) -> Path:
    """Save settings to tokenvex.yaml, omitting values left at their defaults.

    Returns:
        Path to the saved file.
    """
    settings_path = get_settings_path(project_root)
    data = settings.model_dump(mode="json", exclude_defaults=True)

    settings_path.write_text(
        yaml.dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        ),
        encoding="utf-8",
    )

    logger.info("Saved settings to %s", settings_path)
    return settings_path


# =============================================================================
# Portable export file
# =============================================================================


def export_settings_file(settings: ConversionSettings, path: Path) -> Path:
    """Write settings to a portable JSON file."""
    payload = {
        "version": SETTINGS_EXPORT_VERSION,
        "exportedAt": datetime.now(UTC).isoformat(),
        "settings": {
            to_camel(key): value for key, value in settings.model_dump(mode="json").items()
        },
    }
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Exported settings to %s", path)
    return path


def import_settings_file(path: Path) -> ConversionSettings:
    """Read settings from a portable JSON file.

    Raises:
        SettingsError: If the file is not a settings export or is invalid.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot read settings export {path}: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("settings"), dict):
        raise SettingsError(f"Not a settings export: {path}")

    version = payload.get("version")
    if version != SETTINGS_EXPORT_VERSION:
        raise SettingsError(f"Unsupported settings export version {version!r} in {path}")

    data = {to_snake(key): value for key, value in payload["settings"].items()}
    return _parse_settings_data(data, path)


# =============================================================================
# Validation
# =============================================================================


class SettingsValidationResult:
    """Result of settings validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __repr__(self) -> str:
        return (
            f"SettingsValidationResult(errors={len(self.errors)}, warnings={len(self.warnings)})"
        )


def validate_settings(
    settings: ConversionSettings,
    variables: list[Variable] | None = None,
    collections: list[VariableCollection] | None = None,
) -> SettingsValidationResult:
    """Check settings for problems the schema cannot catch.

    Args:
        settings: Settings to validate.
        variables: Project variables, to check the remBase variable.
        collections: Project collections, to check the collection filter.

    Returns:
        SettingsValidationResult with errors and warnings.
    """
    result = SettingsValidationResult()

    if settings.number_precision is not None and settings.number_precision < 0:
        result.add_error(f"number_precision must be >= 0, got {settings.number_precision}")
    if not settings.selector.strip():
        result.add_warning("selector is empty; ':root' will be used")

    # Rename rules
    for i, rule in enumerate(settings.name_format_rules):
        try:
            compile_glob(rule.pattern)
        except InvalidGlobPatternError as e:
            result.add_error(f"name_format_rules[{i}]: {e.message}")
        if not rule.replacement.strip():
            result.add_warning(f"name_format_rules[{i}] has an empty replacement")

    if collections is not None and settings.selected_collections:
        found = {c.id for c in collections} | {c.name for c in collections}
        for selected in settings.selected_collections:
            if selected not in found:
                result.add_warning(f"selected_collections: '{selected}' matches no collection")

    if variables is not None and settings.rem_base_variable_id:
        if not any(v.id == settings.rem_base_variable_id for v in variables):
            result.add_error(
                f"rem_base_variable_id '{settings.rem_base_variable_id}' matches no variable"
            )

    return result
