"""
Tests for the sparse segment builder
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from designer_models import RGBColor, BLACK
from segment_builder import Segment, build_segments, split_segment


RED = RGBColor(255, 0, 0)
GREEN = RGBColor(0, 255, 0)


class TestBuildSegments:

    def test_runs_of_lit_leds(self):
        segments = build_segments([BLACK, BLACK, RED, RED, BLACK, GREEN, BLACK])
        assert [(s.start, s.colors) for s in segments] == [
            (2, [RED, RED]),
            (5, [GREEN]),
        ]

    def test_all_black(self):
        assert build_segments([BLACK] * 16) == []

    def test_empty_frame(self):
        assert build_segments([]) == []

    def test_all_lit(self):
        segments = build_segments([RED] * 16)
        assert len(segments) == 1
        assert segments[0].start == 0
        assert segments[0].length == 16

    def test_adjacent_colors_share_segment(self):
        segments = build_segments([RED, GREEN, RED])
        assert len(segments) == 1
        assert segments[0].colors == [RED, GREEN, RED]

    def test_dim_is_not_black(self):
        segments = build_segments([RGBColor(0, 0, 1)])
        assert len(segments) == 1

    def test_to_dict(self):
        seg = Segment(start=4, colors=[RED])
        assert seg.to_dict() == {'start': 4, 'length': 1,
                                 'colors': [{'r': 255, 'g': 0, 'b': 0}]}


class TestSplitSegment:

    def test_short_segment_untouched(self):
        seg = Segment(start=0, colors=[RED] * 10)
        assert split_segment(seg, 255) == [seg]

    def test_long_segment_split(self):
        seg = Segment(start=1, colors=[RED] * 600)
        chunks = split_segment(seg, 255)
        assert [(c.start, c.length) for c in chunks] == [(1, 255), (256, 255), (511, 90)]
