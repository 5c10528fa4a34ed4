"""
Formatting directives embedded in variable and style descriptions.

Directives may share a line, separated by semicolons::

    unit: rem
    unit: rem(18)
    unit: rem('Typography/rem-base')
    format: oklch
    calc: 'Spacing/base' * 2; unit: rem
    precision: 2
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from ..ir.settings import ColorFormat, TokenConfig, Unit

logger = logging.getLogger(__name__)

UNIT_RE = re.compile(r"unit:\s*(\w+|%)(?:\((?:(\d+(?:\.\d+)?)|'([^']+)')\))?", re.I)
FORMAT_RE = re.compile(r"format:\s*(rgba|rgb|hex|hsl|oklch)", re.I)
CALC_RE = re.compile(r"calc:\s*(.+?)(?:;|$)", re.I | re.M)
PRECISION_RE = re.compile(r"precision:\s*(\d+)", re.I)


def parse_description(description: str | None) -> dict[str, Any]:
    """Extract directives as ``TokenConfig`` field overrides.

    Only directives present in the text appear in the result; unknown
    units are ignored.
    """
    if not description:
        return {}

    overrides: dict[str, Any] = {}

    if match := UNIT_RE.search(description):
        try:
            overrides["unit"] = Unit(match.group(1).lower())
        except ValueError:
            logger.debug("Ignoring unknown unit directive %r", match.group(1))
        else:
            if match.group(2):
                rem_base = math.floor(float(match.group(2)))
                if rem_base > 0:
                    overrides["rem_base"] = rem_base
                else:
                    logger.debug("Ignoring non-positive remBase %r", match.group(2))
            elif match.group(3):
                overrides["rem_base_variable_path"] = match.group(3)

    if match := FORMAT_RE.search(description):
        overrides["color_format"] = ColorFormat(match.group(1).lower())

    if match := CALC_RE.search(description):
        overrides["expression"] = match.group(1).strip()

    if match := PRECISION_RE.search(description):
        overrides["precision"] = int(match.group(1))

    return overrides


def resolve_token_config(description: str | None, base: TokenConfig | None = None) -> TokenConfig:
    """``base`` (defaults when omitted) overlaid with the description's directives."""
    return (base or TokenConfig()).merged(**parse_description(description))
