"""
Number and unit formatting.

Numbers are stored in pixel-equivalent form; ``rem`` output divides by the
configured remBase.
"""

from __future__ import annotations

import math
import re

from ..config import DEFAULT_PRECISION, DEFAULT_REM_BASE
from ..ir.settings import TokenConfig, Unit

_TRAILING_ZEROS_RE = re.compile(r"\.?0+$")


def js_number(value: float) -> str:
    """Render a number the way a JavaScript host prints it (``8`` not ``8.0``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def clean_number(value: float, decimals: int | None = DEFAULT_PRECISION) -> str:
    """Format ``value`` with at most ``decimals`` places, trailing zeros removed.

    >>> clean_number(1.5)
    '1.5'
    >>> clean_number(2 / 3)
    '0.6667'
    """
    if decimals is None:
        decimals = DEFAULT_PRECISION
    if not math.isfinite(value) or float(value).is_integer():
        return js_number(value)
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = _TRAILING_ZEROS_RE.sub("", text)
    return text


def format_number_with_unit(
    value: float,
    unit: Unit,
    rem_base: float = DEFAULT_REM_BASE,
    precision: int | None = None,
) -> str:
    """Format a pixel-equivalent number in ``unit``."""
    if unit == Unit.NONE:
        return clean_number(value, precision)
    if unit == Unit.REM:
        return f"{clean_number(value / rem_base, precision)}rem"
    return f"{clean_number(value, precision)}{unit.value}"


def format_number(value: float, config: TokenConfig) -> str:
    """Format a number according to a token's unit, remBase and precision."""
    return format_number_with_unit(value, config.unit, config.rem_base, config.precision)
