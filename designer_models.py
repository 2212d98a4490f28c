"""
Designer Data Model - Value types for animation configurations

This module provides:
- RGBColor: clamped 0-255 color value ("black" is the LED-off sentinel)
- AnimationProps: optional per-entry animation parameters
- AnimationConfigEntry: one animation over a logical LED range
- DesignerConfig: root configuration (LED count, brightness, speed, entries)

Configurations arrive as JSON-compatible dicts from the UI or the external
generator. from_dict() is permissive: wrong types fall back to defaults and
nothing raises. Range clamping is left to the evaluator and the encoder.

JSON keys use the camelCase names of the wire format:

| Python field        | JSON key          |
|---------------------|-------------------|
| led_count           | ledCount          |
| global_brightness   | globalBrightness  |
| global_speed        | globalSpeed       |
| anim_id             | animId            |
| phase_ms            | phaseMs           |
| left_color          | leftColor         |
| right_color         | rightColor        |

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from color_math import clamp_byte, round_half_up, to_float


# ============================================================
# RGB COLOR
# ============================================================

@dataclass(frozen=True)
class RGBColor:
    """
    RGB color for a single LED.
    All values are integers 0-255.
    """
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'r', clamp_byte(self.r))
        object.__setattr__(self, 'g', clamp_byte(self.g))
        object.__setattr__(self, 'b', clamp_byte(self.b))

    @property
    def is_black(self) -> bool:
        """True if the LED is off"""
        return self.r == 0 and self.g == 0 and self.b == 0

    def scaled(self, factor: float) -> 'RGBColor':
        """Return a copy with every channel multiplied by factor (rounded)"""
        return RGBColor(
            round_half_up(self.r * factor),
            round_half_up(self.g * factor),
            round_half_up(self.b * factor),
        )

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_dict(self) -> dict:
        return {'r': self.r, 'g': self.g, 'b': self.b}

    @classmethod
    def from_tuple(cls, rgb) -> 'RGBColor':
        r, g, b = rgb
        return cls(r, g, b)


BLACK = RGBColor(0, 0, 0)


# ============================================================
# ANIMATION PROPS
# ============================================================

DIRECTION_LEFT = "left"
DIRECTION_RIGHT = "right"

_PROP_KEYS = ('direction', 'mirror', 'phaseMs', 'speed', 'color', 'leftColor', 'rightColor')


def _optional_str(value) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class AnimationProps:
    """Optional per-entry parameters; missing values use documented defaults"""
    direction: str = DIRECTION_LEFT
    mirror: bool = False
    phase_ms: float = 0.0
    speed: float = 1.0
    color: Optional[str] = None
    left_color: Optional[str] = None
    right_color: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data) -> 'AnimationProps':
        """Build props from a JSON dict, defaulting anything malformed"""
        if not isinstance(data, dict):
            return cls()

        direction = data.get('direction')
        if direction not in (DIRECTION_LEFT, DIRECTION_RIGHT):
            direction = DIRECTION_LEFT

        speed = to_float(data.get('speed'), 1.0)
        if speed < 0:
            speed = 0.0

        return cls(
            direction=direction,
            mirror=data.get('mirror') is True,
            phase_ms=to_float(data.get('phaseMs'), 0.0),
            speed=speed,
            color=_optional_str(data.get('color')),
            left_color=_optional_str(data.get('leftColor')),
            right_color=_optional_str(data.get('rightColor')),
            extra={k: v for k, v in data.items() if k not in _PROP_KEYS},
        )

    def to_dict(self) -> dict:
        d = dict(self.extra)
        d.update({
            'direction': self.direction,
            'mirror': self.mirror,
            'phaseMs': self.phase_ms,
            'speed': self.speed,
        })
        if self.color is not None:
            d['color'] = self.color
        if self.left_color is not None:
            d['leftColor'] = self.left_color
        if self.right_color is not None:
            d['rightColor'] = self.right_color
        return d


DEFAULT_PROPS = AnimationProps()


# ============================================================
# CONFIG ENTRY
# ============================================================

@dataclass(frozen=True)
class AnimationConfigEntry:
    """One animation applied to the logical LED range [start, start+length)"""
    start: int = 0
    length: int = 1
    anim_id: str = ""
    props: AnimationProps = DEFAULT_PROPS

    def __post_init__(self):
        if self.props is None:
            object.__setattr__(self, 'props', DEFAULT_PROPS)

    @property
    def end(self) -> int:
        return self.start + self.length

    @classmethod
    def from_dict(cls, data: dict) -> 'AnimationConfigEntry':
        anim_id = data.get('animId')
        return cls(
            start=round_half_up(to_float(data.get('start'), 0.0)),
            length=round_half_up(to_float(data.get('length'), 0.0)),
            anim_id=anim_id if isinstance(anim_id, str) else "",
            props=AnimationProps.from_dict(data.get('props')),
        )

    def to_dict(self) -> dict:
        return {
            'start': self.start,
            'length': self.length,
            'animId': self.anim_id,
            'props': self.props.to_dict(),
        }


# ============================================================
# DESIGNER CONFIG
# ============================================================

@dataclass(frozen=True)
class DesignerConfig:
    """
    Root configuration object.

    Value type: fully described by its fields, no hidden state.
    """
    led_count: int = 16
    global_brightness: float = 1.0
    global_speed: float = 1.0
    configs: Tuple[AnimationConfigEntry, ...] = ()

    def __post_init__(self):
        if not isinstance(self.configs, tuple):
            object.__setattr__(self, 'configs', tuple(self.configs))

    @classmethod
    def from_dict(cls, data) -> 'DesignerConfig':
        """
        Build a config from a JSON-compatible dict.

        Non-dict entries in "configs" are skipped; a missing LED count
        becomes 0 and is clamped to 1 downstream.
        """
        if not isinstance(data, dict):
            data = {}

        raw_configs = data.get('configs')
        if not isinstance(raw_configs, (list, tuple)):
            raw_configs = []

        return cls(
            led_count=round_half_up(to_float(data.get('ledCount'), 0.0)),
            global_brightness=to_float(data.get('globalBrightness'), 1.0),
            global_speed=to_float(data.get('globalSpeed'), 1.0),
            configs=tuple(
                AnimationConfigEntry.from_dict(raw)
                for raw in raw_configs
                if isinstance(raw, dict)
            ),
        )

    @classmethod
    def coerce(cls, value) -> 'DesignerConfig':
        """Accept either a DesignerConfig or its JSON dict form"""
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)

    def to_dict(self) -> dict:
        return {
            'ledCount': self.led_count,
            'globalBrightness': self.global_brightness,
            'globalSpeed': self.global_speed,
            'configs': [entry.to_dict() for entry in self.configs],
        }
