"""
Live Preview Service - Render designer configurations for the UI

This module provides:
- PreviewFrame: One evaluated frame (colors + hex strings) for streaming
- render_preview_frames(): A short run of frames at a fixed interval
- render_preview_frame(): Single frame at a timestamp

Architecture:
- Stateless: every frame is evaluate_frame(config, t), nothing is cached
  between requests, so the UI can ask for any timestamp in any order
- Preview never talks to hardware; the encoder produces the device command
  separately

Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from typing import List, Union

from color_math import clamp, round_half_up, to_float
from designer_models import DesignerConfig, RGBColor
from frame_evaluator import evaluate_frame


preview_logger = logging.getLogger('smartlight.preview')

DEFAULT_INTERVAL_MS = 1000 / 30
MIN_INTERVAL_MS = 1.0
MAX_PREVIEW_FRAMES = 300


# ============================================================
# Preview Frame - Single rendered frame for streaming
# ============================================================

@dataclass
class PreviewFrame:
    """A single preview frame for the LED strip visualization"""
    frame_number: int
    timestamp_ms: float
    colors: List[RGBColor] = field(default_factory=list)

    @property
    def hex_colors(self) -> List[str]:
        return [c.to_hex() for c in self.colors]

    def to_dict(self) -> dict:
        return {
            'frameNumber': self.frame_number,
            'timestampMs': self.timestamp_ms,
            'colors': [c.to_dict() for c in self.colors],
            'hexColors': self.hex_colors,
        }


# ============================================================
# Rendering
# ============================================================

def clamp_frame_count(frame_count) -> int:
    return int(clamp(round_half_up(to_float(frame_count, 1)), 1, MAX_PREVIEW_FRAMES))


def render_preview_frame(config: Union[DesignerConfig, dict], timestamp_ms: float,
                         frame_number: int = 0) -> PreviewFrame:
    return PreviewFrame(
        frame_number=frame_number,
        timestamp_ms=timestamp_ms,
        colors=evaluate_frame(config, timestamp_ms),
    )


def render_preview_frames(config: Union[DesignerConfig, dict], start_ms: float = 0,
                          frame_count: int = 1,
                          interval_ms: float = DEFAULT_INTERVAL_MS) -> List[PreviewFrame]:
    """
    Render frame_count frames starting at start_ms, interval_ms apart.

    frame_count is clamped to 1-300 and interval_ms to at least 1ms.

    Returns:
        List of PreviewFrame in time order
    """
    config = DesignerConfig.coerce(config)
    frame_count = clamp_frame_count(frame_count)
    interval_ms = max(MIN_INTERVAL_MS, to_float(interval_ms, DEFAULT_INTERVAL_MS))
    start_ms = to_float(start_ms, 0.0)

    preview_logger.debug(
        f"Rendering {frame_count} preview frame(s) from {start_ms}ms every {interval_ms:.1f}ms"
    )

    return [
        render_preview_frame(config, start_ms + n * interval_ms, frame_number=n)
        for n in range(frame_count)
    ]
