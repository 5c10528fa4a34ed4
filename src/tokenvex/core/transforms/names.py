"""
Name formatting: variable and style names to CSS/SCSS identifiers.

Order of precedence for a variable name:
1. the variable's ``WEB`` code syntax (already final, including prefix)
2. the first enabled name format rule that matches
3. the default transform (see ``to_css_name``)

The configured prefix is prepended to names produced by custom rules and
by the default transform. The computed default rule (id ``__default__``)
already encodes the prefix and casing in its replacement.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..config import DEFAULT_RULE_ID
from ..ir.settings import CasingOption, ConversionSettings, NameFormatRule
from ..ir.variables import Variable
from .glob import find_matching_rule

_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9-]")
_HYPHENS_RE = re.compile(r"-+")
_DIGITS_RE = re.compile(r"(\d+)")


def to_css_name(name: str) -> str:
    """Default transform: ``"Color/Primary Blue"`` -> ``"color-primary-blue"``.

    Slashes, whitespace and camelCase boundaries become hyphens, other
    characters outside ``[a-z0-9-]`` become hyphens, runs collapse, and the
    result is lowercased with no leading or trailing hyphen.
    """
    if not name or not isinstance(name, str):
        return ""
    result = name.replace("/", "-")
    result = _WHITESPACE_RE.sub("-", result)
    result = _CAMEL_BOUNDARY_RE.sub(r"\1-\2", result)
    result = _INVALID_CHARS_RE.sub("-", result)
    result = _HYPHENS_RE.sub("-", result)
    return result.strip("-").lower()


def to_prefixed_name(css_name: str, prefix: str | None = None) -> str:
    return f"{prefix}-{css_name}" if prefix else css_name


def format_name(
    raw_name: str, rules: Sequence[NameFormatRule] = (), prefix: str | None = None
) -> str:
    """Format a slash-delimited name with rename rules and a prefix.

    A rule that renders an empty name falls back to the default transform.
    """
    found = find_matching_rule(raw_name, rules) if rules else None
    if found is not None and found[1].strip():
        rule, custom = found
        if rule.id == DEFAULT_RULE_ID:
            return custom
        return to_prefixed_name(custom, prefix)
    return to_prefixed_name(to_css_name(raw_name), prefix)


def strip_code_syntax(web_name: str) -> str:
    """``"--brand-primary"`` or ``"var(--brand-primary)"`` -> ``"brand-primary"``."""
    name = web_name.strip()
    if name.startswith("var(") and name.endswith(")"):
        name = name[4:-1].strip()
    return name.removeprefix("--")


def get_variable_css_name(
    variable: Variable,
    prefix: str | None = None,
    rules: Sequence[NameFormatRule] = (),
) -> str:
    """CSS custom property name (without ``--``) for a host variable."""
    web = variable.code_syntax.get("WEB")
    if web:
        return strip_code_syntax(web)
    return format_name(variable.name, rules, prefix)


def format_css_name(path: Sequence[str], settings: ConversionSettings) -> str:
    """CSS name (without ``--``) for a document token path."""
    return format_name("/".join(path), settings.name_format_rules, settings.prefix)


def format_scss_name(path: Sequence[str], settings: ConversionSettings) -> str:
    return f"${format_css_name(path, settings)}"


# =============================================================================
# Style names
# =============================================================================


def to_style_css_name(name: str) -> str:
    return to_css_name(name)


def to_style_class_name(name: str, prefix: str | None = None) -> str:
    """``"Typography/Heading/Large"`` -> ``"typography-heading-large"``."""
    return to_prefixed_name(to_style_css_name(name), prefix)


def to_style_var_name(name: str, prefix: str | None = None) -> str:
    """``"Colors/Primary"`` -> ``"--colors-primary"``."""
    return f"--{to_prefixed_name(to_style_css_name(name), prefix)}"


# =============================================================================
# Default rule
# =============================================================================


def compute_default_replacement(prefix: str, casing: CasingOption) -> str:
    """Replacement template for the ``**`` default rule."""
    casing = CasingOption(casing)
    if not prefix:
        return f"${{1:{casing.value}}}"

    if casing == CasingOption.KEBAB:
        return f"{prefix}-${{1:kebab}}"
    if casing == CasingOption.SNAKE:
        return f"{prefix}_${{1:snake}}"
    if casing == CasingOption.CAMEL:
        return f"{prefix}${{1:pascal}}"
    if casing == CasingOption.PASCAL:
        return f"{prefix[:1].upper()}{prefix[1:].lower()}${{1:pascal}}"
    if casing == CasingOption.LOWER:
        return f"{prefix.lower()}-${{1:kebab}}"
    return f"{prefix.upper()}_${{1:snake}}"


def create_default_rule(prefix: str, casing: CasingOption) -> NameFormatRule:
    return NameFormatRule(
        id=DEFAULT_RULE_ID,
        pattern="**",
        replacement=compute_default_replacement(prefix, casing),
        enabled=True,
    )


def get_all_rules_with_default(
    custom_rules: Sequence[NameFormatRule], prefix: str, casing: CasingOption
) -> list[NameFormatRule]:
    """Custom rules followed by the computed default rule."""
    rules = [rule for rule in custom_rules if rule.id != DEFAULT_RULE_ID]
    return [*rules, create_default_rule(prefix, casing)]


# =============================================================================
# Ordering
# =============================================================================


def natural_sort_key(name: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key ordering ``spacing-2`` before ``spacing-10``.

    Ties between names differing only in case are broken by the raw name.
    """
    parts: list[tuple[int, int | str]] = []
    for chunk in _DIGITS_RE.split(name):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.casefold()))
    parts.append((2, name))
    return tuple(parts)
