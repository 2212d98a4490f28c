"""
Designer Command Encoder - DesignerConfig -> firmware byte command

This module provides:
- encode_designer_config(): renders the first config entry into a looped,
  segment-run-length encoded frame sequence for the light controller
- decode_command(): structural parser for encoded commands (validation/logs)
- convert_designer_config(): encoder with fallback to the cached sample
  police command when encoding is not possible
- Hex string and byte sanitizing helpers

COMMAND FORMAT:

    01 00 <scenario>                        header
    01 <hold> <segment>... 03               frame block (repeated)
    03                                      loop terminator

    segment = 37 <start> <count> (<r> <g> <b> <intensity>) x count

- hold: how many 20ms firmware ticks each frame stays on screen
- start: physical LED index of the first lit LED in the run
- intensity: global brightness in 5% steps (0-20), repeated per LED

Frame budgets: the firmware buffers about 2KB per command. A full 16-LED
frame costs 2 + 3 + 16*4 + 1 = 70 bytes, so full-strip animations get ~24
frames; sparse ones (larson top-3: at most 3*7 + 3 = 24 bytes) get up to
80. Budgets are per animation constants below, and FIRMWARE_BYTE_BUDGET is
enforced while frames are appended.

Version: 1.0.0
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Union

from animation_registry import (
    animation_registry,
    effective_index,
    larson_base_color,
    larson_intensity,
    larson_position,
    normalize_anim_id,
    DEFAULT_ANIMATION_ID,
    POLICE_DEFAULT_LEFT,
    POLICE_DEFAULT_RIGHT,
)
from color_math import clamp, hex_to_rgb, round_half_up
from designer_models import AnimationConfigEntry, DesignerConfig, RGBColor, DEFAULT_PROPS
from frame_evaluator import (
    clamp_brightness,
    clamp_entry_range,
    clamp_global_speed,
    clamp_led_count,
    evaluate_entry,
    ENCODER_MAX_SPEED,
    ENCODER_MIN_SPEED,
)
from pixel_mapper import physical_position, remap_to_physical
from segment_builder import Segment, build_segments, split_segment


# Configure logging
encoder_logger = logging.getLogger('smartlight.encoder')
encoder_logger.setLevel(logging.INFO)
if not encoder_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        '%(asctime)s [ENCODER] %(levelname)s: %(message)s'
    ))
    encoder_logger.addHandler(handler)


# ============================================================
# PROTOCOL CONSTANTS
# ============================================================

CMD_BYTE = 0x01
TYPE_BYTE = 0x00
HEADER_LENGTH = 3

FRAME_MARKER = 0x01
SEGMENT_MARKER = 0x37
FRAME_TERMINATOR = 0x03
LOOP_TERMINATOR = 0x03

HOLD_UNIT_MS = 20
HOLD_NUMERATOR = 10.0       # hold = round(10 / speed) -> 200ms frames at speed 1
MAX_HOLD = 0xFF
MAX_INTENSITY = 0x14        # 100% in 5% steps
MAX_RUN_LENGTH = 0xFF

FIRMWARE_BYTE_BUDGET = 2048

# Scenario byte per normalized animation id
SCENARIO_BYTES: Dict[str, int] = {
    'police': 0x00,
    'larson': 0x01,
    'breathing': 0x02,
    'rainbow': 0x03,
    'smoothfade': 0x04,
    'theater': 0x05,
    'strobe': 0x06,
    'running': 0x07,
    'water': 0x08,
    'plasma': 0x09,
    'twinkle': 0x0A,
    'beat': 0x0B,
}
UNKNOWN_SCENARIO = 0x10

# Sampled frames per animation. One frame lasts 200ms at speed 1, and every
# period below scales with speed the same way, so frames-per-period is fixed.
FRAME_BUDGETS: Dict[str, int] = {
    'larson': 80,       # top-3 single LEDs, ~24 bytes/frame
    'twinkle': 80,      # ~15% of LEDs lit per frame
    'breathing': 15,    # 3000ms period = 15 frames, one seamless loop
    'beat': 9,          # 900ms period = 4.5 frames, two beats loop cleanly
    'strobe': 13,       # 260ms period, 13 frames = 10 flashes; mostly black
    'smoothfade': 25,   # one full hue turn (0.04/frame)
    'water': 20,        # 2000ms period = 10 frames, two ripples
    'theater': 24,
    'rainbow': 24,
    'running': 24,
    'plasma': 24,
}
DEFAULT_FRAME_BUDGET = 24

LARSON_TOP_K = 3
LARSON_MIN_INTENSITY = 0.02


# ============================================================
# Result types
# ============================================================

@dataclass
class EncodedCommand:
    """Encoded firmware command plus the parameters it was built with"""
    command_bytes: List[int]
    hex_string: str
    scenario: int
    hold: int
    intensity: int
    frame_count: int

    def to_dict(self) -> dict:
        return {
            'bytes': list(self.command_bytes),
            'hexString': self.hex_string,
            'scenario': self.scenario,
            'hold': self.hold,
            'intensity': self.intensity,
            'frameCount': self.frame_count,
        }


@dataclass
class DecodedSegment:
    start: int
    colors: List[RGBColor] = field(default_factory=list)
    intensities: List[int] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.colors)


@dataclass
class DecodedFrame:
    hold: int
    segments: List[DecodedSegment] = field(default_factory=list)


@dataclass
class DecodedCommand:
    header: List[int]
    frames: List[DecodedFrame] = field(default_factory=list)


# ============================================================
# Parameter helpers
# ============================================================

def to_hex_string(data: Sequence[int]) -> str:
    """Uppercase, space separated hex ("01 00 03 ...")"""
    return ' '.join(f"{byte & 0xFF:02X}" for byte in data)


def scenario_byte_for(anim_id) -> int:
    return SCENARIO_BYTES.get(normalize_anim_id(anim_id), UNKNOWN_SCENARIO)


def frame_budget_for(anim_id) -> int:
    return FRAME_BUDGETS.get(normalize_anim_id(anim_id), DEFAULT_FRAME_BUDGET)


def effective_speed(global_speed: float, entry_speed: float) -> float:
    """Global speed (operational range) times entry speed, floored at 0.1"""
    speed = clamp_global_speed(global_speed, ENCODER_MIN_SPEED, ENCODER_MAX_SPEED) * entry_speed
    return max(ENCODER_MIN_SPEED, speed)


def compute_hold(speed: float) -> int:
    """Firmware ticks per frame: round(10 / speed), clamped to 1-255"""
    return int(clamp(round_half_up(HOLD_NUMERATOR / max(ENCODER_MIN_SPEED, speed)), 1, MAX_HOLD))


def compute_intensity(brightness: float) -> int:
    """Brightness 0-1 -> intensity byte 0-20"""
    return int(clamp(round_half_up(clamp_brightness(brightness) * 20), 0, MAX_INTENSITY))


# ============================================================
# Frame encoding
# ============================================================

def _encode_segment(segment: Segment, intensity: int) -> List[int]:
    out = [SEGMENT_MARKER, segment.start & 0xFF, segment.length]
    for color in segment.colors:
        out.extend((color.r, color.g, color.b, intensity))
    return out


def encode_frame(segments: Sequence[Segment], hold: int, intensity: int) -> List[int]:
    """Wrap a frame's segments in frame marker, hold and terminator"""
    out = [FRAME_MARKER, hold]
    for segment in segments:
        for chunk in split_segment(segment, MAX_RUN_LENGTH):
            out.extend(_encode_segment(chunk, intensity))
    out.append(FRAME_TERMINATOR)
    return out


def _police_frames(entry: AnimationConfigEntry, led_count: int) -> List[List[RGBColor]]:
    """Two logical frames: left half in leftColor, then right half in rightColor"""
    start, length = clamp_entry_range(entry, led_count)
    half = length // 2
    left = RGBColor.from_tuple(hex_to_rgb(entry.props.left_color, POLICE_DEFAULT_LEFT))
    right = RGBColor.from_tuple(hex_to_rgb(entry.props.right_color, POLICE_DEFAULT_RIGHT))

    left_frame = [RGBColor() for _ in range(led_count)]
    right_frame = [RGBColor() for _ in range(led_count)]
    for local_index in range(length):
        if local_index < half:
            left_frame[start + local_index] = left
        else:
            right_frame[start + local_index] = right
    return [left_frame, right_frame]


def _larson_segments(entry: AnimationConfigEntry, led_count: int, time_ms: float,
                     global_speed: float) -> List[Segment]:
    """
    Top-K scanner frame: the 3 brightest LEDs above 0.02, one segment each.

    The smooth falloff tail of the scanner is dropped to keep the frame at a
    fixed small byte cost.
    """
    start, length = clamp_entry_range(entry, led_count)
    props = entry.props
    base = larson_base_color(props)
    position = larson_position(time_ms, length, props, global_speed)

    candidates = []
    for local_index in range(length):
        intensity = larson_intensity(effective_index(local_index, length, props), position)
        if intensity > LARSON_MIN_INTENSITY:
            candidates.append((intensity, local_index))
    candidates.sort(key=lambda c: (-c[0], c[1]))

    segments = []
    for intensity, local_index in candidates[:LARSON_TOP_K]:
        color = RGBColor(
            round_half_up(base[0] * intensity),
            round_half_up(base[1] * intensity),
            round_half_up(base[2] * intensity),
        )
        if color.is_black:
            continue
        segments.append(Segment(start=physical_position(start + local_index), colors=[color]))

    segments.sort(key=lambda s: s.start)
    return segments


# ============================================================
# Encoder
# ============================================================

def encode_designer_config(config: Union[DesignerConfig, dict]) -> Optional[EncodedCommand]:
    """
    Encode the first config entry into a firmware command.

    Only one animation scenario per command is supported: entries after
    the first are ignored.

    Returns:
        EncodedCommand, or None if the config has no entries
    """
    config = DesignerConfig.coerce(config)
    if not config.configs:
        encoder_logger.warning("Cannot encode designer config: no animation entries")
        return None

    if len(config.configs) > 1:
        encoder_logger.debug(f"Encoding first of {len(config.configs)} entries only")

    entry = config.configs[0]
    led_count = clamp_led_count(config.led_count)
    normalized_id = normalize_anim_id(entry.anim_id)
    scenario = SCENARIO_BYTES.get(normalized_id, UNKNOWN_SCENARIO)

    # Sample the catalog animation the scenario byte names ("Breathing" -> breathing)
    catalog_id = animation_registry.catalog_id(entry.anim_id) or DEFAULT_ANIMATION_ID
    entry = replace(entry, anim_id=catalog_id, props=entry.props or DEFAULT_PROPS)

    global_speed = clamp_global_speed(config.global_speed, ENCODER_MIN_SPEED, ENCODER_MAX_SPEED)
    hold = compute_hold(effective_speed(global_speed, entry.props.speed))
    intensity = compute_intensity(config.global_brightness)

    out = [CMD_BYTE, TYPE_BYTE, scenario]
    frame_count = 0

    if normalized_id == 'police':
        for logical in _police_frames(entry, led_count):
            segments = build_segments(remap_to_physical(logical))
            out.extend(encode_frame(segments, hold, intensity))
            frame_count += 1
    else:
        budget = frame_budget_for(normalized_id)
        frame_ms = hold * HOLD_UNIT_MS

        for frame_index in range(budget):
            # phaseMs is applied inside the animation functions
            t = frame_index * frame_ms
            if normalized_id == 'larson':
                segments = _larson_segments(entry, led_count, t, global_speed)
            else:
                logical = evaluate_entry(entry, led_count, t, global_speed)
                segments = build_segments(remap_to_physical(logical))

            frame_bytes = encode_frame(segments, hold, intensity)
            if len(out) + len(frame_bytes) + 1 > FIRMWARE_BYTE_BUDGET:
                encoder_logger.debug(
                    f"Byte budget reached after {frame_count}/{budget} frames ({entry.anim_id})"
                )
                break
            out.extend(frame_bytes)
            frame_count += 1

    out.append(LOOP_TERMINATOR)

    encoder_logger.debug(
        f"Encoded {entry.anim_id or '<none>'}: scenario=0x{scenario:02X} hold={hold} "
        f"intensity={intensity} frames={frame_count} bytes={len(out)}"
    )

    return EncodedCommand(
        command_bytes=out,
        hex_string=to_hex_string(out),
        scenario=scenario,
        hold=hold,
        intensity=intensity,
        frame_count=frame_count,
    )


# ============================================================
# Decoder
# ============================================================

def decode_command(data: Sequence[int], header_length: int = HEADER_LENGTH) -> DecodedCommand:
    """
    Parse an encoded command back into frames and segments.

    Raises:
        ValueError: If the bytes do not follow the command format
    """
    data = list(data)
    if len(data) < header_length + 1:
        raise ValueError(f"Command too short ({len(data)} bytes)")

    decoded = DecodedCommand(header=data[:header_length])
    pos = header_length

    while pos < len(data):
        byte = data[pos]
        if byte == LOOP_TERMINATOR and pos == len(data) - 1:
            return decoded
        if byte != FRAME_MARKER:
            raise ValueError(f"Expected frame marker at offset {pos}, got 0x{byte:02X}")
        if pos + 1 >= len(data):
            raise ValueError("Truncated frame header")

        frame = DecodedFrame(hold=data[pos + 1])
        pos += 2

        while pos < len(data) and data[pos] == SEGMENT_MARKER:
            if pos + 2 >= len(data):
                raise ValueError(f"Truncated segment header at offset {pos}")
            segment = DecodedSegment(start=data[pos + 1])
            count = data[pos + 2]
            pos += 3
            if pos + count * 4 > len(data):
                raise ValueError(f"Segment at physical {segment.start} overruns command")
            for _ in range(count):
                r, g, b, level = data[pos:pos + 4]
                segment.colors.append(RGBColor(r, g, b))
                segment.intensities.append(level)
                pos += 4
            frame.segments.append(segment)

        if pos >= len(data) or data[pos] != FRAME_TERMINATOR:
            raise ValueError(f"Frame not terminated at offset {pos}")
        pos += 1
        decoded.frames.append(frame)

    raise ValueError("Missing loop terminator")


# ============================================================
# Conversion with sample fallback
# ============================================================

SAMPLE_DESIGNER_CONFIG = DesignerConfig(
    led_count=16,
    global_brightness=0.9,
    global_speed=1.0,
    configs=(
        AnimationConfigEntry.from_dict({
            'start': 0,
            'length': 16,
            'animId': 'police',
            'props': {'direction': 'left', 'mirror': False, 'phaseMs': 0, 'speed': 1},
        }),
    ),
)

# Police command shipped with the app (500ms red, 500ms blue). It predates
# the scenario byte, so its header is two bytes: decode with header_length=2.
SAMPLE_POLICE_COMMAND_BYTES: List[int] = [
    0x01, 0x00,
    0x01, 0x19, 0x37, 0x00, 0x08,
    0xFF, 0x00, 0x00, 0x64, 0xFF, 0x00, 0x00, 0x64,
    0xFF, 0x00, 0x00, 0x64, 0xFF, 0x00, 0x00, 0x64,
    0xFF, 0x00, 0x00, 0x64, 0xFF, 0x00, 0x00, 0x64,
    0xFF, 0x00, 0x00, 0x64, 0xFF, 0x00, 0x00, 0x64,
    0x03,
    0x01, 0x19, 0x37, 0x08, 0x08,
    0x00, 0x00, 0xFF, 0x64, 0x00, 0x00, 0xFF, 0x64,
    0x00, 0x00, 0xFF, 0x64, 0x00, 0x00, 0xFF, 0x64,
    0x00, 0x00, 0xFF, 0x64, 0x00, 0x00, 0xFF, 0x64,
    0x00, 0x00, 0xFF, 0x64, 0x00, 0x00, 0xFF, 0x64,
    0x03,
    0x03,
]
SAMPLE_HEADER_LENGTH = 2

SOURCE_LOCAL = "local"
SOURCE_SAMPLE = "sample"


@dataclass
class DesignerCommandResult:
    command_bytes: List[int]
    hex_string: str
    source: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'bytes': list(self.command_bytes),
            'hexString': self.hex_string,
            'source': self.source,
            'note': self.note,
        }


def sanitize_bytes(values) -> List[int]:
    """
    Coerce arbitrary input into byte values.

    Numeric strings are parsed, non-numeric items dropped, everything
    clamped to 0-255. Non-sequences give [].
    """
    if not isinstance(values, (list, tuple)):
        return []

    result = []
    for value in values:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            numeric = value
        elif isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                continue
            numeric = int(value)
        else:
            try:
                numeric = int(str(value).strip(), 10)
            except ValueError:
                continue
        result.append(max(0, min(255, numeric)))
    return result


def build_sample_result(note: Optional[str] = None) -> DesignerCommandResult:
    return DesignerCommandResult(
        command_bytes=list(SAMPLE_POLICE_COMMAND_BYTES),
        hex_string=to_hex_string(SAMPLE_POLICE_COMMAND_BYTES),
        source=SOURCE_SAMPLE,
        note=note or (
            "Using the built-in police animation example (500ms red, 500ms blue) "
            "because the configuration could not be encoded."
        ),
    )


def convert_designer_config(config, allow_sample_fallback: bool = True) -> Optional[DesignerCommandResult]:
    """
    Encode a config, falling back to the sample police command.

    Returns None only if encoding fails and the fallback is disabled.
    """
    encoded = encode_designer_config(config)
    if encoded is not None:
        return DesignerCommandResult(
            command_bytes=encoded.command_bytes,
            hex_string=encoded.hex_string,
            source=SOURCE_LOCAL,
            note=f"Encoded {encoded.frame_count} frame(s), hold {encoded.hold}",
        )

    if not allow_sample_fallback:
        return None

    encoder_logger.info("Falling back to sample police command")
    return build_sample_result()
