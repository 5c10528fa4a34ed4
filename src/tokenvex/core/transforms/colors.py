"""
Color conversion and formatting.

Canonical storage is hex (``#rrggbb`` or ``#rrggbbaa``). Host colors arrive
as RGBA floats in 0..1. The OKLCH pipeline is sRGB -> linear -> LMS -> OKLab
-> polar, using Björn Ottosson's matrices; the inverse is provided so that
every output format can be parsed back.
"""

from __future__ import annotations

import math
import re

from ..ir.settings import ColorFormat
from ..ir.variables import RGBA

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)$", re.I
)
_HSL_RE = re.compile(
    r"^hsla?\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*(?:,\s*([\d.]+)\s*)?\)$", re.I
)
_OKLCH_RE = re.compile(
    r"^oklch\(\s*([\d.]+)%\s+([\d.]+)\s+([\d.]+)\s*(?:/\s*([\d.]+)\s*)?\)$", re.I
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _to_byte(channel: float) -> int:
    return min(255, max(0, _round_half_up(channel * 255)))


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


# =============================================================================
# Hex
# =============================================================================


def rgb_to_hex(color: RGBA) -> str:
    """``#rrggbb``, or ``#rrggbbaa`` when alpha is below 1."""
    channels = [color.r, color.g, color.b]
    if color.a < 1:
        channels.append(color.a)
    return "#" + "".join(f"{_to_byte(c):02x}" for c in channels)


def parse_hex(value: str) -> RGBA | None:
    """Parse 3, 6 or 8 digit hex (with or without ``#``); None if malformed."""
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return RGBA(r=r, g=g, b=b, a=a)


# =============================================================================
# HSL
# =============================================================================


def rgb_to_hsl(color: RGBA) -> tuple[float, float, float]:
    """Hue in degrees, saturation and lightness in 0..1."""
    r, g, b = color.r, color.g, color.b
    high, low = max(r, g, b), min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        return 0.0, 0.0, lightness

    delta = high - low
    saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
    if high == r:
        hue = (g - b) / delta + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    return hue * 60, saturation, lightness


def hsl_to_rgb(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> RGBA:
    if saturation == 0:
        return RGBA(r=lightness, g=lightness, b=lightness, a=alpha)

    def channel(p: float, q: float, t: float) -> float:
        t %= 1.0
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    q = (
        lightness * (1 + saturation)
        if lightness < 0.5
        else lightness + saturation - lightness * saturation
    )
    p = 2 * lightness - q
    h = (hue % 360) / 360
    return RGBA(
        r=channel(p, q, h + 1 / 3), g=channel(p, q, h), b=channel(p, q, h - 1 / 3), a=alpha
    )


# =============================================================================
# OKLCH
# =============================================================================


def _srgb_to_linear(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * c ** (1 / 2.4) - 0.055


def rgb_to_oklch(color: RGBA) -> tuple[float, float, float]:
    """Lightness (0..1), chroma, hue in degrees."""
    r = _srgb_to_linear(color.r)
    g = _srgb_to_linear(color.g)
    b = _srgb_to_linear(color.b)

    l_ = math.cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = math.cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = math.cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)

    lightness = 0.2104542553 * l_ + 0.793617785 * m_ - 0.0040720468 * s_
    lab_a = 1.9779984951 * l_ - 2.428592205 * m_ + 0.4505937099 * s_
    lab_b = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.808675766 * s_

    chroma = math.sqrt(lab_a**2 + lab_b**2)
    hue = math.degrees(math.atan2(lab_b, lab_a))
    if hue < 0:
        hue += 360
    return lightness, chroma, hue


def oklch_to_rgb(lightness: float, chroma: float, hue: float, alpha: float = 1.0) -> RGBA:
    """Inverse of ``rgb_to_oklch``; channels are clamped to the sRGB gamut."""
    lab_a = chroma * math.cos(math.radians(hue))
    lab_b = chroma * math.sin(math.radians(hue))

    l_ = (lightness + 0.3963377774 * lab_a + 0.2158037573 * lab_b) ** 3
    m_ = (lightness - 0.1055613458 * lab_a - 0.0638541728 * lab_b) ** 3
    s_ = (lightness - 0.0894841775 * lab_a - 1.2914855480 * lab_b) ** 3

    r = 4.0767416621 * l_ - 3.3077115913 * m_ + 0.2309699292 * s_
    g = -1.2684380046 * l_ + 2.6097574011 * m_ - 0.3413193965 * s_
    b = -0.0041960863 * l_ - 0.7034186147 * m_ + 1.7076147010 * s_

    return RGBA(
        r=_clamp01(_linear_to_srgb(r)),
        g=_clamp01(_linear_to_srgb(g)),
        b=_clamp01(_linear_to_srgb(b)),
        a=alpha,
    )


# =============================================================================
# Formatting
# =============================================================================


def format_rgba(color: RGBA, color_format: ColorFormat) -> str:
    """Render a host color in ``color_format``."""
    if color_format in (ColorFormat.RGB, ColorFormat.RGBA):
        r, g, b = _to_byte(color.r), _to_byte(color.g), _to_byte(color.b)
        if color.a < 1:
            return f"rgba({r}, {g}, {b}, {color.a:.3f})"
        return f"rgb({r}, {g}, {b})"

    if color_format == ColorFormat.HSL:
        hue, saturation, lightness = rgb_to_hsl(color)
        h = _round_half_up(hue)
        s = _round_half_up(saturation * 100)
        lum = _round_half_up(lightness * 100)
        if color.a < 1:
            return f"hsla({h}, {s}%, {lum}%, {color.a:.3f})"
        return f"hsl({h}, {s}%, {lum}%)"

    if color_format == ColorFormat.OKLCH:
        lightness, chroma, hue = rgb_to_oklch(color)
        body = f"{lightness * 100:.2f}% {chroma:.4f} {hue:.2f}"
        if color.a < 1:
            return f"oklch({body} / {color.a:.3f})"
        return f"oklch({body})"

    return rgb_to_hex(color)


def parse_color(value: str) -> RGBA | None:
    """Parse any color string this module emits; None if unrecognised."""
    text = value.strip()
    if color := parse_hex(text):
        return color

    if match := _RGB_RE.match(text):
        r, g, b = (float(match.group(i)) / 255 for i in (1, 2, 3))
        a = float(match.group(4)) if match.group(4) else 1.0
        return RGBA(r=_clamp01(r), g=_clamp01(g), b=_clamp01(b), a=a)

    if match := _HSL_RE.match(text):
        hue = float(match.group(1))
        saturation = float(match.group(2)) / 100
        lightness = float(match.group(3)) / 100
        a = float(match.group(4)) if match.group(4) else 1.0
        return hsl_to_rgb(hue, saturation, lightness, a)

    if match := _OKLCH_RE.match(text):
        a = float(match.group(4)) if match.group(4) else 1.0
        return oklch_to_rgb(
            float(match.group(1)) / 100, float(match.group(2)), float(match.group(3)), a
        )
    return None


def format_color(value: str, color_format: ColorFormat) -> str:
    """Convert a stored color string to ``color_format``.

    Hex input is returned unchanged for hex output. Input that cannot be
    parsed is returned unchanged rather than raising.
    """
    if color_format == ColorFormat.HEX and parse_hex(value) is not None:
        return value
    color = parse_color(value)
    if color is None:
        return value
    return format_rgba(color, color_format)
