"""
Glob patterns for rename rules.

- ``*`` matches one path segment (captured)
- ``**`` matches zero or more segments (captured, greedy)
- everything else is literal and matched case-insensitively

Compiled patterns are cached by pattern string; ``compile_glob.cache_info()``
and ``compile_glob.cache_clear()`` expose the cache.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from functools import lru_cache

from ..errors import InvalidGlobPatternError
from ..ir.settings import NameFormatRule

logger = logging.getLogger(__name__)

# ${1}, ${1:camel}, $1, $1:camel
_TEMPLATE_RE = re.compile(r"\$(?:\{(\d+)(?::(\w+))?\}|(\d+)(?::(\w+))?)")
_SEGMENT_SPLIT_RE = re.compile(r"[/\-_\s]+")

_SINGLE = "([^/]+)"
_GLOBSTAR = "(.*)"


def _segment_regex(segment: str) -> str:
    parts = segment.split("**")
    return _GLOBSTAR.join(_SINGLE.join(re.escape(p) for p in part.split("*")) for part in parts)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern to an anchored, case-insensitive regex.

    Raises:
        InvalidGlobPatternError: If the pattern is empty or cannot be compiled.
    """
    if not pattern or not pattern.strip():
        raise InvalidGlobPatternError("Glob pattern is empty")

    segments = pattern.split("/")
    last = len(segments) - 1
    out: list[str] = []

    for i, segment in enumerate(segments):
        if segment == "**":
            if i == 0 and i == last:
                out.append(_GLOBSTAR)
            elif i == 0:
                out.append("(?:(.*)/)?")
            else:
                # mid or trailing: the optional group carries its own separator
                out.append("(?:/(.*))?")
            continue
        if i > 0 and not (i == 1 and segments[0] == "**"):
            out.append("/")
        out.append(_segment_regex(segment))

    try:
        return re.compile("".join(out), re.IGNORECASE)
    except re.error as e:
        raise InvalidGlobPatternError(f"Invalid glob pattern {pattern!r}: {e}") from e


def match_glob(pattern: str, name: str) -> list[str] | None:
    """Captures of ``pattern`` against ``name``, or None if it does not match.

    Optional globstar groups that did not participate capture ``""``.
    """
    match = compile_glob(pattern).fullmatch(name)
    if match is None:
        return None
    return [group or "" for group in match.groups()]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def apply_modifier(value: str, modifier: str | None) -> str:
    """Apply a casing modifier to a captured value.

    Unknown modifiers leave the value untouched.
    """
    if not value or not modifier:
        return value

    segments = [s for s in _SEGMENT_SPLIT_RE.split(value) if s]
    modifier = modifier.lower()

    if modifier == "kebab":
        return "-".join(s.lower() for s in segments)
    if modifier == "snake":
        return "_".join(s.lower() for s in segments)
    if modifier == "camel":
        return "".join(s.lower() if i == 0 else _capitalize(s) for i, s in enumerate(segments))
    if modifier == "pascal":
        return "".join(_capitalize(s) for s in segments)
    if modifier == "lower":
        return value.lower()
    if modifier == "upper":
        return value.upper()
    return value


def apply_replacement(template: str, captures: Sequence[str]) -> str:
    """Render ``template`` with 1-based capture references.

    A reference to a capture that does not exist renders as an empty string.
    """

    def substitute(match: re.Match[str]) -> str:
        index = int(match.group(1) or match.group(3)) - 1
        modifier = match.group(2) or match.group(4)
        value = captures[index] if 0 <= index < len(captures) else ""
        return apply_modifier(value, modifier)

    return _TEMPLATE_RE.sub(substitute, template)


def find_matching_rule(
    name: str, rules: Sequence[NameFormatRule]
) -> tuple[NameFormatRule, str] | None:
    """First enabled rule matching ``name`` and its rendered replacement.

    Disabled rules are skipped; rules with invalid patterns are skipped.
    """
    for rule in rules:
        if not rule.enabled:
            continue
        try:
            captures = match_glob(rule.pattern, name)
        except InvalidGlobPatternError as e:
            logger.debug("Skipping rule %s: %s", rule.id or rule.pattern, e)
            continue
        if captures is not None:
            return rule, apply_replacement(rule.replacement, captures)
    return None


def to_custom_css_name(name: str, rules: Sequence[NameFormatRule]) -> str | None:
    """Rename ``name`` with the first matching rule, or None if none match."""
    found = find_matching_rule(name, rules)
    return found[1] if found else None
