"""
Scenario Presets - Built-in scenario names -> designer configurations

The app offers four named scenarios (plus whatever the user types). Each one
is rendered in the designer preview as a small stack of catalog animations
over the 16-LED strip, tinted with the user's color and scaled by their
intensity setting.

| Scenario        | Animations                          |
|-----------------|-------------------------------------|
| Rainbow Flow    | rainbow (mirrored)                  |
| Lightning Pulse | strobe + beat in the user color     |
| Ocean Wave      | plasma (mirrored) + breathing       |
| Starlight       | twinkle in the user color           |
| anything else   | breathing in the user color         |

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List

from at_commands import LightSettings
from color_math import clamp, rgb_to_hex
from designer_models import AnimationConfigEntry, AnimationProps, DesignerConfig
from pixel_mapper import STRIP_LED_COUNT


MIN_PRESET_BRIGHTNESS = 0.1
MIN_PRESET_SPEED = 0.6
MAX_PRESET_SPEED = 1.6


@dataclass(frozen=True)
class BaseScenario:
    """Named scenario with its built-in firmware scenario id"""
    scenario_id: int
    name: str

    def to_dict(self) -> dict:
        return {'id': self.scenario_id, 'name': self.name}


BASE_SCENARIOS: List[BaseScenario] = [
    BaseScenario(1, "Rainbow Flow"),
    BaseScenario(2, "Lightning Pulse"),
    BaseScenario(3, "Ocean Wave"),
    BaseScenario(4, "Starlight"),
]


def preset_brightness(intensity: float) -> float:
    return clamp(intensity / 100, MIN_PRESET_BRIGHTNESS, 1.0)


def preset_speed(intensity: float) -> float:
    return clamp(0.6 + intensity / 125, MIN_PRESET_SPEED, MAX_PRESET_SPEED)


def _full_strip(anim_id: str, **props) -> AnimationConfigEntry:
    return AnimationConfigEntry(
        start=0,
        length=STRIP_LED_COUNT,
        anim_id=anim_id,
        props=AnimationProps(**props),
    )


def build_scenario_config(scenario_name: str, settings: LightSettings) -> DesignerConfig:
    """
    Build the preview configuration for a scenario.

    Names are matched by case-insensitive substring, so "Deep Ocean" picks
    the ocean preset. Unknown names get a breathing preset.
    """
    normalized = (scenario_name or "").lower()
    color = rgb_to_hex(settings.red, settings.green, settings.blue)

    if 'rainbow' in normalized:
        entries = [_full_strip('rainbow', mirror=True)]
    elif 'lightning' in normalized or 'pulse' in normalized:
        entries = [
            _full_strip('strobe', speed=1.35),
            _full_strip('beat', speed=0.85, phase_ms=200, color=color),
        ]
    elif 'ocean' in normalized or 'wave' in normalized:
        entries = [
            _full_strip('plasma', mirror=True, speed=0.82),
            _full_strip('breathing', speed=0.7, phase_ms=140, color=color),
        ]
    elif 'star' in normalized:
        entries = [_full_strip('twinkle', mirror=True, phase_ms=240, color=color)]
    else:
        entries = [_full_strip('breathing', speed=0.9, color=color)]

    return DesignerConfig(
        led_count=STRIP_LED_COUNT,
        global_brightness=preset_brightness(settings.intensity),
        global_speed=preset_speed(settings.intensity),
        configs=tuple(entries),
    )
