"""
AT Command Generator - Fixed-length color/scenario requests

The light controller also accepts short 8-byte commands for plain colors and
its built-in animation scenarios:

| Byte | Color command        | Animation command      |
|------|----------------------|------------------------|
| 0    | 0x00                 | scenario (1-4)         |
| 1    | channel type (1)     | 0x02                   |
| 2-4  | R, G, B (0-255)      | R, G, B (0-255)        |
| 5    | intensity (0-20)     | intensity (0-20)       |
| 6-7  | 0x0D 0x0A (CR LF)    | 0x0D 0x0A (CR LF)      |

Intensity is given as a 0-100% UI value and sent in 5% steps.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List

from color_math import clamp, round_half_up, to_float


COLOR_COMMAND_ID = 0x00
COLOR_CHANNEL_TYPE = 0x01
ANIMATION_COMMAND_TYPE = 0x02
COMMAND_END = (0x0D, 0x0A)

MIN_SCENARIO = 1
MAX_SCENARIO = 4


@dataclass
class LightSettings:
    """Color + intensity as edited in the UI"""
    red: int = 255
    green: int = 255
    blue: int = 255
    intensity: int = 100  # 0-100 %

    @classmethod
    def from_dict(cls, data) -> 'LightSettings':
        if not isinstance(data, dict):
            data = {}
        return cls(
            red=round_half_up(to_float(data.get('red'), 255)),
            green=round_half_up(to_float(data.get('green'), 255)),
            blue=round_half_up(to_float(data.get('blue'), 255)),
            intensity=round_half_up(to_float(data.get('intensity'), 100)),
        )

    def to_dict(self) -> dict:
        return {
            'red': self.red,
            'green': self.green,
            'blue': self.blue,
            'intensity': self.intensity,
        }


def convert_intensity(percent: float) -> int:
    """UI intensity 0-100 -> command intensity 0-20"""
    return int(round_half_up(clamp(percent, 0, 100) / 5))


def clamp_color(value: float) -> int:
    return int(clamp(round_half_up(value), 0, 255))


def _create_command(first: int, second: int, settings: LightSettings) -> List[int]:
    return [
        first & 0xFF,
        second & 0xFF,
        clamp_color(settings.red),
        clamp_color(settings.green),
        clamp_color(settings.blue),
        convert_intensity(settings.intensity),
        *COMMAND_END,
    ]


def generate_color_command(settings: LightSettings, channel_type: int = COLOR_CHANNEL_TYPE) -> List[int]:
    """Static color request for one light channel"""
    return _create_command(COLOR_COMMAND_ID, channel_type, settings)


def generate_animation_command(scenario: int, settings: LightSettings) -> List[int]:
    """Built-in animation request; scenario is clamped to 1-4"""
    scenario = int(clamp(scenario, MIN_SCENARIO, MAX_SCENARIO))
    return _create_command(scenario, ANIMATION_COMMAND_TYPE, settings)


def describe_command(label: str, command: List[int]) -> str:
    """One-line summary for the command history log"""
    r, g, b, level = command[2], command[3], command[4], command[5]
    if command[1] == ANIMATION_COMMAND_TYPE and command[0] != COLOR_COMMAND_ID:
        kind = f"Scenario {command[0]}"
    else:
        kind = f"Color, Type 0x{command[1]:02X}"
    return f"{label} ({kind}): RGB({r}, {g}, {b}), Intensity level {level} ({level * 5}%)"
