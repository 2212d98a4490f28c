"""
Tests for the logical-to-physical LED mapping

Tests validate:
1. The wiring table is a bijection on 0-15
2. Known table entries
3. Out-of-range behavior
4. Whole-frame remapping

Run with: pytest tests/test_pixel_mapper.py -v
"""

import sys
import os

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from designer_models import RGBColor
from pixel_mapper import (
    LOGICAL_TO_PHYSICAL,
    STRIP_LED_COUNT,
    map_logical_to_physical,
    physical_position,
    remap_to_physical,
    validate_wiring,
    wiring_table_dict,
)


RED = RGBColor(255, 0, 0)


# ============================================================
# WIRING TABLE TESTS
# ============================================================

class TestWiringTable:

    def test_sixteen_leds(self):
        assert STRIP_LED_COUNT == 16

    def test_bijection(self):
        physical = [map_logical_to_physical(i) for i in range(16)]
        assert sorted(physical) == list(range(16))

    def test_validate_wiring(self):
        ok, errors = validate_wiring()
        assert ok
        assert errors == []

    def test_validate_rejects_duplicates(self):
        ok, errors = validate_wiring([0, 0, 1])
        assert not ok
        assert any('multiple' in e for e in errors)

    def test_validate_rejects_out_of_range(self):
        ok, errors = validate_wiring([0, 5])
        assert not ok

    @pytest.mark.parametrize("logical,physical", [
        (0, 3), (7, 10), (8, 0), (9, 1), (10, 2), (11, 11), (15, 15),
    ])
    def test_known_entries(self, logical, physical):
        assert map_logical_to_physical(logical) == physical

    def test_out_of_range_is_zero(self):
        assert map_logical_to_physical(16) == 0
        assert map_logical_to_physical(-1) == 0

    def test_export(self):
        data = wiring_table_dict()
        assert data['led_count'] == 16
        assert data['logical_to_physical'] == list(LOGICAL_TO_PHYSICAL)


# ============================================================
# FRAME REMAP TESTS
# ============================================================

class TestRemap:

    def test_short_frame_padded_to_strip(self):
        physical = remap_to_physical([RED])
        assert len(physical) == 16
        assert physical[3] == RED
        assert sum(1 for c in physical if not c.is_black) == 1

    def test_full_frame_permutation(self):
        logical = [RGBColor(i, 0, 0) for i in range(16)]
        physical = remap_to_physical(logical)
        for i in range(16):
            assert physical[map_logical_to_physical(i)] == logical[i]

    def test_long_frame_passes_through(self):
        logical = [RGBColor(i, i, i) for i in range(20)]
        physical = remap_to_physical(logical)
        assert len(physical) == 20
        assert physical_position(18) == 18
        assert physical[18] == logical[18]
        assert physical[0] == logical[8]
