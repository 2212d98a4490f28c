"""
Animation Registry - Fixed catalog of designer animations

This module provides:
- AnimationSpec: id, display metadata and the pixel function
- AnimationRegistry: lookup by id with permissive fallback
- Built-in catalog (rainbow, smoothFade, theater, larson, breathing, police,
  strobe, running, water, plasma, twinkle, beat)
- effective_index(): direction/mirror remapping shared by all animations

Every animation function has the signature:

    fn(time_ms, local_index, segment_length, props, global_speed) -> RGBColor

and is pure: same inputs, same color. Props may be partial; each animation
falls back to its documented default color.

The catalog is built once at import time and sealed. register() after
sealing raises RuntimeError.

Version: 1.0.0
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from color_math import clamp, hex_to_rgb, hsv_to_rgb, rand01, round_half_up, RGB
from designer_models import AnimationProps, RGBColor, BLACK, DIRECTION_RIGHT, DEFAULT_PROPS


AnimationFn = Callable[[float, int, int, AnimationProps, float], RGBColor]

# Lowest effective speed used as a period divisor; keeps periods finite
MIN_EFFECTIVE_SPEED = 0.1

DEFAULT_ANIMATION_ID = "rainbow"

# Default base colors
LARSON_DEFAULT_COLOR: RGB = (255, 40, 40)
BREATHING_DEFAULT_COLOR: RGB = (0, 255, 255)
POLICE_DEFAULT_LEFT: RGB = (255, 0, 0)
POLICE_DEFAULT_RIGHT: RGB = (0, 0, 255)
RUNNING_DEFAULT_COLOR: RGB = (255, 0, 0)
TWINKLE_DEFAULT_COLOR: RGB = (255, 255, 255)
BEAT_DEFAULT_COLOR: RGB = (255, 0, 128)

WHITE = RGBColor(255, 255, 255)

# Timing constants (ms at speed 1)
LARSON_PERIOD_MS = 2200.0
BREATHING_PERIOD_MS = 3000.0
POLICE_PERIOD_MS = 800.0
STROBE_PERIOD_MS = 260.0
WATER_PERIOD_MS = 2000.0
TWINKLE_FRAME_MS = 120.0
BEAT_PERIOD_MS = 900.0

STROBE_DUTY = 0.12
TWINKLE_THRESHOLD = 0.85


# ============================================================
# Shared helpers
# ============================================================

def normalize_anim_id(anim_id) -> str:
    """Lowercase and strip non-alphanumerics ("Smooth-Fade" -> "smoothfade")"""
    if not isinstance(anim_id, str):
        return ""
    return re.sub(r"[^a-z0-9]", "", anim_id.lower())


def effective_index(local_index: int, segment_length: int, props: AnimationProps) -> int:
    """
    Position used by position-dependent animations.

    direction "right" reverses the index; mirror folds it around the
    segment midpoint so both halves show the same pattern.
    """
    idx = local_index
    if props.direction == DIRECTION_RIGHT:
        idx = segment_length - 1 - idx
    if props.mirror and segment_length > 1:
        last = segment_length - 1
        idx = min(idx, last - idx)
    return idx


def local_speed(props: AnimationProps, global_speed: float) -> float:
    """Per-entry speed times global speed, floored above zero"""
    return max(MIN_EFFECTIVE_SPEED, props.speed * global_speed)


def _shifted_time(time_ms: float, props: AnimationProps) -> float:
    return time_ms + props.phase_ms


def _base_color(value: Optional[str], default: RGB) -> RGB:
    return hex_to_rgb(value, default)


def _scale(base: RGB, v: float) -> RGBColor:
    return RGBColor(
        round_half_up(base[0] * v),
        round_half_up(base[1] * v),
        round_half_up(base[2] * v),
    )


# ============================================================
# Larson scanner geometry (also used by the command encoder)
# ============================================================

def larson_position(time_ms: float, segment_length: int, props: AnimationProps,
                    global_speed: float) -> float:
    """Continuous position of the scanner dot, 0 .. segment_length-1"""
    t = _shifted_time(time_ms, props)
    period = LARSON_PERIOD_MS / local_speed(props, global_speed)
    phase = ((t % period) / period) * 2 * math.pi
    return (math.sin(phase) * 0.5 + 0.5) * max(0, segment_length - 1)


def larson_intensity(index: float, position: float) -> float:
    """Squared linear falloff from the dot (0 beyond 1.4 LEDs)"""
    intensity = max(0.0, 1.4 - abs(index - position))
    return intensity * intensity


def larson_base_color(props: AnimationProps) -> RGB:
    return _base_color(props.color, LARSON_DEFAULT_COLOR)


# ============================================================
# Animation functions
# ============================================================

def _rainbow(t, i, length, props, global_speed):
    idx = effective_index(i, length, props)
    t = _shifted_time(t, props)
    pos = idx / max(1, length - 1) + t * 0.00015 * local_speed(props, global_speed)
    return RGBColor.from_tuple(hsv_to_rgb(pos % 1, 1, 1))


def _smooth_fade(t, i, length, props, global_speed):
    t = _shifted_time(t, props)
    hue = (t * 0.0002 * local_speed(props, global_speed)) % 1
    return RGBColor.from_tuple(hsv_to_rgb(hue, 0.9, 1))


def _theater(t, i, length, props, global_speed):
    idx = effective_index(i, length, props)
    t = _shifted_time(t, props)
    step = math.floor(t * 0.00035 * local_speed(props, global_speed))
    if (idx + step) % 3 == 0:
        return WHITE
    return BLACK


def _larson(t, i, length, props, global_speed):
    idx = effective_index(i, length, props)
    pos = larson_position(t, length, props, global_speed)
    return _scale(larson_base_color(props), larson_intensity(idx, pos))


def _breathing(t, i, length, props, global_speed):
    base = _base_color(props.color, BREATHING_DEFAULT_COLOR)
    t = _shifted_time(t, props)
    period = BREATHING_PERIOD_MS / local_speed(props, global_speed)
    phase = ((t % period) / period) * 2 * math.pi
    v = (math.sin(phase - math.pi / 2) + 1) / 2
    v = v * 0.9 + 0.1
    return _scale(base, v)


def _police(t, i, length, props, global_speed):
    t = _shifted_time(t, props)
    half = length // 2
    period = POLICE_PERIOD_MS / local_speed(props, global_speed)
    left_on = (t % period) / period < 0.5
    if i < half:
        if left_on:
            return RGBColor.from_tuple(_base_color(props.left_color, POLICE_DEFAULT_LEFT))
        return BLACK
    if not left_on:
        return RGBColor.from_tuple(_base_color(props.right_color, POLICE_DEFAULT_RIGHT))
    return BLACK


def _strobe(t, i, length, props, global_speed):
    t = _shifted_time(t, props)
    period = STROBE_PERIOD_MS / local_speed(props, global_speed)
    if (t % period) / period < STROBE_DUTY:
        return WHITE
    return BLACK


def _running(t, i, length, props, global_speed):
    base = _base_color(props.color, RUNNING_DEFAULT_COLOR)
    idx = effective_index(i, length, props)
    t = _shifted_time(t, props)
    phase = idx / max(1, length) * 2 * math.pi + t * 0.012 * local_speed(props, global_speed)
    return _scale(base, (math.sin(phase) + 1) / 2)


def _water(t, i, length, props, global_speed):
    idx = effective_index(i, length, props)
    t = _shifted_time(t, props)
    dist = abs(idx - (length - 1) / 2)
    period = WATER_PERIOD_MS / local_speed(props, global_speed)
    wave_phase = ((t % period) / period) * 2 * math.pi
    ripple = math.sin(wave_phase - dist * 0.55) * math.exp(-dist * 0.2)
    intensity = clamp((ripple + 1) / 2, 0, 1) * 0.9 + 0.1
    return RGBColor.from_tuple(hsv_to_rgb(0.58, 0.7, intensity))


def _plasma(t, i, length, props, global_speed):
    idx = effective_index(i, length, props)
    t = _shifted_time(t, props)
    x = idx / max(1, length)
    tf = t * 0.001 * local_speed(props, global_speed)
    v = math.sin(6 * x + tf) + math.sin(4 * x - tf * 1.3) + math.cos(5 * x + tf * 0.7)
    hue = ((v + 3) / 6 + tf * 0.08) % 1
    return RGBColor.from_tuple(hsv_to_rgb(hue, 1, 1))


def _twinkle(t, i, length, props, global_speed):
    base = _base_color(props.color, TWINKLE_DEFAULT_COLOR)
    t = _shifted_time(t, props)
    frame = math.floor(t / (TWINKLE_FRAME_MS / local_speed(props, global_speed)))
    idx = effective_index(i, length, props)
    r = rand01(idx * 9283 + frame * 173)
    if r > TWINKLE_THRESHOLD:
        strength = (r - TWINKLE_THRESHOLD) / (1 - TWINKLE_THRESHOLD)
        return _scale(base, 0.3 + strength * 0.7)
    return BLACK


def _beat(t, i, length, props, global_speed):
    base = _base_color(props.color, BEAT_DEFAULT_COLOR)
    t = _shifted_time(t, props)
    period = BEAT_PERIOD_MS / local_speed(props, global_speed)
    beat_phase = (t % period) / period
    # Linear attack over the first 20%, exponential decay after
    if beat_phase < 0.2:
        v = beat_phase / 0.2
    else:
        v = math.exp(-(beat_phase - 0.2) * 4.5)
    return _scale(base, clamp(v, 0.05, 1))


# ============================================================
# Registry
# ============================================================

@dataclass(frozen=True)
class AnimationSpec:
    """Catalog entry for one animation"""
    anim_id: str
    name: str
    description: str
    fn: AnimationFn
    full_strip: bool = True  # True if most LEDs are lit on a typical frame

    def evaluate(self, time_ms: float, local_index: int, segment_length: int,
                 props: Optional[AnimationProps], global_speed: float) -> RGBColor:
        return self.fn(time_ms, local_index, max(1, segment_length),
                       props or DEFAULT_PROPS, global_speed)

    def to_dict(self) -> dict:
        return {
            'id': self.anim_id,
            'name': self.name,
            'description': self.description,
            'full_strip': self.full_strip,
        }


class AnimationRegistry:
    """
    Catalog of animation functions keyed by id.

    Built-ins are registered in __init__, after which the registry is
    sealed and read-only.
    """

    def __init__(self):
        self._specs: Dict[str, AnimationSpec] = {}
        self._sealed = False
        self._register_builtin_animations()
        self._sealed = True
        self._by_normalized_id: Dict[str, str] = {
            normalize_anim_id(anim_id): anim_id for anim_id in self._specs
        }

    def register(self, spec: AnimationSpec):
        if self._sealed:
            raise RuntimeError(f"Animation registry is sealed; cannot register '{spec.anim_id}'")
        self._specs[spec.anim_id] = spec

    def _register_builtin_animations(self):
        self.register(AnimationSpec(
            "rainbow", "Rainbow",
            "Hue cycles along the strip and over time", _rainbow))
        self.register(AnimationSpec(
            "smoothFade", "Smooth Fade",
            "Whole segment sweeps through one shared hue", _smooth_fade))
        self.register(AnimationSpec(
            "theater", "Theater Chase",
            "White on/off triplets marching along the strip", _theater,
            full_strip=False))
        self.register(AnimationSpec(
            "larson", "Larson Scanner",
            "A bright dot sweeping back and forth", _larson,
            full_strip=False))
        self.register(AnimationSpec(
            "breathing", "Breathing",
            "Whole segment pulses between 10% and 100%", _breathing))
        self.register(AnimationSpec(
            "police", "Police",
            "Left and right halves flash alternately", _police,
            full_strip=False))
        self.register(AnimationSpec(
            "strobe", "Strobe",
            "Short white flashes", _strobe,
            full_strip=False))
        self.register(AnimationSpec(
            "running", "Running Lights",
            "Sine brightness ripple travelling along the strip", _running))
        self.register(AnimationSpec(
            "water", "Water",
            "Cyan-blue ripple spreading from the middle", _water))
        self.register(AnimationSpec(
            "plasma", "Plasma",
            "Overlapping waves mapped to a cycling hue", _plasma))
        self.register(AnimationSpec(
            "twinkle", "Twinkle",
            "Random LEDs sparkle and fade", _twinkle,
            full_strip=False))
        self.register(AnimationSpec(
            "beat", "Beat",
            "Fast attack, exponential decay pulse", _beat))

    @property
    def default(self) -> AnimationSpec:
        return self._specs[DEFAULT_ANIMATION_ID]

    def get(self, anim_id: str) -> Optional[AnimationSpec]:
        """Exact lookup; None if unknown"""
        return self._specs.get(anim_id)

    def catalog_id(self, anim_id) -> Optional[str]:
        """Catalog id matching anim_id case- and punctuation-insensitively"""
        return self._by_normalized_id.get(normalize_anim_id(anim_id))

    def resolve(self, anim_id) -> AnimationSpec:
        """Lookup with fallback to the default animation for unknown ids"""
        if isinstance(anim_id, str):
            spec = self._specs.get(anim_id)
            if spec is not None:
                return spec
        return self.default

    def __contains__(self, anim_id) -> bool:
        return anim_id in self._specs

    def list_ids(self) -> List[str]:
        return list(self._specs.keys())

    def to_dict(self) -> dict:
        return {anim_id: spec.to_dict() for anim_id, spec in self._specs.items()}


# Global registry instance
animation_registry = AnimationRegistry()


def get_animation(anim_id) -> AnimationSpec:
    """Resolve an animation id through the global registry"""
    return animation_registry.resolve(anim_id)
