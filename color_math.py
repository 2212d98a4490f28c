"""
Color Math Utilities - Shared helpers for the animation pipeline

This module provides:
- Hex <-> RGB conversion for author-supplied colors ("#ff0000", "#f00")
- HSV -> RGB conversion (0-1 inputs, 0-255 integer outputs)
- Clamping and half-up rounding matching the firmware-side expectations
- Deterministic pseudo-random generator for sparkle/twinkle effects

All functions are pure and never raise on malformed input: bad hex strings
fall back to the caller's default color.

Version: 1.0.0
"""

import math
from typing import Optional, Tuple


RGB = Tuple[int, int, int]


# ============================================================
# Numeric helpers
# ============================================================

def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]"""
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    """
    Round to nearest integer with .5 going up.

    Python's round() uses banker's rounding (round(2.5) == 2); channel and
    hold values are defined with half-up rounding.
    """
    return int(math.floor(value + 0.5))


def clamp_byte(value: float) -> int:
    """Round and clamp a channel value to 0-255"""
    return int(clamp(round_half_up(value), 0, 255))


def to_float(value, default: float) -> float:
    """Coerce a JSON-ish value to a finite float, else return default"""
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


# ============================================================
# Hex conversion
# ============================================================

def hex_to_rgb(value, default: Optional[RGB] = None) -> Optional[RGB]:
    """
    Parse "#rrggbb" / "rrggbb" / "#rgb" into an (r, g, b) tuple.

    Returns default if the value is not a parseable hex color.
    """
    if not isinstance(value, str):
        return default

    normalized = value.strip().lstrip('#')
    if len(normalized) == 3:
        normalized = ''.join(ch + ch for ch in normalized)
    if len(normalized) != 6:
        return default

    try:
        int_val = int(normalized, 16)
    except ValueError:
        return default

    return (int_val >> 16) & 255, (int_val >> 8) & 255, int_val & 255


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format channels as lowercase "#rrggbb" (channels clamped)"""
    return '#' + ''.join(f"{clamp_byte(ch):02x}" for ch in (r, g, b))


# ============================================================
# HSV conversion
# ============================================================

def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """
    Convert HSV (all 0-1) to integer RGB (0-255).

    Hue wraps, so values outside 0-1 are still valid.
    """
    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255)


# ============================================================
# Deterministic noise
# ============================================================

def rand01(seed: float) -> float:
    """
    Hash-style pseudo-random value in [0, 1) for a numeric seed.

    Same seed always yields the same value, so twinkle frames are
    reproducible for preview and encoding.
    """
    x = math.sin(seed * 12.9898) * 43758.5453
    return x - math.floor(x)
