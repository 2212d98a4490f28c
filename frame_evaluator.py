"""
Frame Evaluator - Full configuration -> per-LED colors at a timestamp

Algorithm:
1. Clamp ledCount to 1-256, globalBrightness to 0-1, globalSpeed to 0.01-10
2. Start every LED at black
3. For each entry (array order): clamp its range, resolve its animation
   (unknown ids fall back to the default animation), evaluate each LED and
   add it channel-wise into the frame, clamped at 255
4. Scale by globalBrightness and round

Pure function of (config, timestamp): no state is kept between calls, so
the same inputs always give the same frame.

Version: 1.0.0
"""

from typing import List, Tuple, Union

from animation_registry import animation_registry
from color_math import clamp, round_half_up
from designer_models import AnimationConfigEntry, DesignerConfig, RGBColor


MIN_LED_COUNT = 1
MAX_LED_COUNT = 256

MIN_GLOBAL_SPEED = 0.01
MAX_GLOBAL_SPEED = 10.0

# Narrower speed range used when encoding for the firmware
ENCODER_MIN_SPEED = 0.1
ENCODER_MAX_SPEED = 10.0


# ============================================================
# Clamping helpers (shared with the command encoder)
# ============================================================

def clamp_led_count(led_count: int) -> int:
    return int(clamp(round_half_up(led_count), MIN_LED_COUNT, MAX_LED_COUNT))


def clamp_brightness(brightness: float) -> float:
    return clamp(brightness, 0.0, 1.0)


def clamp_global_speed(speed: float, lo: float = MIN_GLOBAL_SPEED,
                       hi: float = MAX_GLOBAL_SPEED) -> float:
    return clamp(speed, lo, hi)


def clamp_entry_range(entry: AnimationConfigEntry, led_count: int) -> Tuple[int, int]:
    """
    Clamp an entry's logical range into the strip.

    Returns (start, length) with start in [0, led_count-1] and
    length in [1, led_count-start].
    """
    start = int(clamp(entry.start, 0, led_count - 1))
    length = int(clamp(entry.length, 1, led_count - start))
    return start, length


# ============================================================
# Evaluation
# ============================================================

def evaluate_frame(config: Union[DesignerConfig, dict], timestamp_ms: float) -> List[RGBColor]:
    """
    Compute the final color of every LED at timestamp_ms.

    Args:
        config: DesignerConfig or its JSON dict form
        timestamp_ms: Animation time in milliseconds

    Returns:
        Fresh list of RGBColor, one per LED (length = clamped ledCount)
    """
    config = DesignerConfig.coerce(config)

    led_count = clamp_led_count(config.led_count)
    brightness = clamp_brightness(config.global_brightness)
    global_speed = clamp_global_speed(config.global_speed)

    # Accumulate as plain channel lists; RGBColor is immutable
    frame = [[0, 0, 0] for _ in range(led_count)]

    for entry in config.configs:
        spec = animation_registry.resolve(entry.anim_id)
        start, length = clamp_entry_range(entry, led_count)

        for local_index in range(length):
            color = spec.evaluate(timestamp_ms, local_index, length, entry.props, global_speed)
            slot = frame[start + local_index]
            slot[0] = min(255, slot[0] + color.r)
            slot[1] = min(255, slot[1] + color.g)
            slot[2] = min(255, slot[2] + color.b)

    return [
        RGBColor(
            round_half_up(r * brightness),
            round_half_up(g * brightness),
            round_half_up(b * brightness),
        )
        for r, g, b in frame
    ]


def evaluate_entry(entry: AnimationConfigEntry, led_count: int, timestamp_ms: float,
                   global_speed: float) -> List[RGBColor]:
    """
    Evaluate a single entry over the logical strip (no brightness scaling).

    LEDs outside the entry's range are black. Used by the command encoder,
    where brightness travels separately as the intensity byte.
    """
    led_count = clamp_led_count(led_count)
    spec = animation_registry.resolve(entry.anim_id)
    start, length = clamp_entry_range(entry, led_count)

    frame = [RGBColor() for _ in range(led_count)]
    for local_index in range(length):
        frame[start + local_index] = spec.evaluate(
            timestamp_ms, local_index, length, entry.props, global_speed)
    return frame
