"""
Tests for the preview frame renderer
"""

import sys
import os

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from frame_evaluator import evaluate_frame
from preview_service import (
    MAX_PREVIEW_FRAMES,
    PreviewFrame,
    render_preview_frame,
    render_preview_frames,
)


CONFIG = {
    'ledCount': 16,
    'globalBrightness': 1,
    'globalSpeed': 1,
    'configs': [{'start': 0, 'length': 16, 'animId': 'breathing'}],
}

STROBE = {
    'ledCount': 4,
    'configs': [{'start': 0, 'length': 4, 'animId': 'strobe'}],
}


class TestRenderPreviewFrames:

    def test_single_frame_default(self):
        frames = render_preview_frames(CONFIG)
        assert len(frames) == 1
        assert frames[0].frame_number == 0
        assert frames[0].timestamp_ms == 0

    def test_timestamps(self):
        frames = render_preview_frames(CONFIG, start_ms=50, frame_count=5, interval_ms=100)
        assert [f.timestamp_ms for f in frames] == [50, 150, 250, 350, 450]
        assert [f.frame_number for f in frames] == [0, 1, 2, 3, 4]

    def test_frames_match_evaluator(self):
        for frame in render_preview_frames(CONFIG, frame_count=10, interval_ms=250):
            assert frame.colors == evaluate_frame(CONFIG, frame.timestamp_ms)

    @pytest.mark.parametrize("requested,expected", [
        (0, 1), (-3, 1), ("lots", 1), (12, 12), (10_000, MAX_PREVIEW_FRAMES),
    ])
    def test_frame_count_clamped(self, requested, expected):
        assert len(render_preview_frames(CONFIG, frame_count=requested)) == expected

    def test_zero_interval(self):
        frames = render_preview_frames(CONFIG, frame_count=3, interval_ms=0)
        assert [f.timestamp_ms for f in frames] == [0, 1, 2]


class TestPreviewFrame:

    def test_hex_colors(self):
        frame = render_preview_frame(STROBE, 0)
        assert frame.hex_colors == ['#ffffff'] * 4

    def test_to_dict(self):
        data = render_preview_frame(STROBE, 0, frame_number=7).to_dict()
        assert data['frameNumber'] == 7
        assert data['timestampMs'] == 0
        assert data['colors'][0] == {'r': 255, 'g': 255, 'b': 255}
        assert data['hexColors'][0] == '#ffffff'

    def test_empty_frame(self):
        assert PreviewFrame(frame_number=0, timestamp_ms=0).hex_colors == []
