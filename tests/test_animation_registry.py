"""
Tests for the animation catalog

Tests validate:
1. The catalog holds exactly the twelve built-in animations
2. Unknown ids resolve to rainbow
3. The registry is sealed after import
4. Per-animation behavior at known timestamps
5. Direction and mirror remapping

Run with: pytest tests/test_animation_registry.py -v
"""

import sys
import os

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from animation_registry import (
    AnimationSpec,
    animation_registry,
    effective_index,
    get_animation,
    local_speed,
    normalize_anim_id,
    DEFAULT_ANIMATION_ID,
    MIN_EFFECTIVE_SPEED,
)
from designer_models import AnimationProps, RGBColor, BLACK


BUILTIN_IDS = [
    'rainbow', 'smoothFade', 'theater', 'larson', 'breathing', 'police',
    'strobe', 'running', 'water', 'plasma', 'twinkle', 'beat',
]

PROPS = AnimationProps()


def colors(anim_id, t, length=16, props=PROPS, global_speed=1.0):
    spec = animation_registry.resolve(anim_id)
    return [spec.evaluate(t, i, length, props, global_speed) for i in range(length)]


# ============================================================
# CATALOG TESTS
# ============================================================

class TestCatalog:

    def test_builtin_ids(self):
        assert sorted(animation_registry.list_ids()) == sorted(BUILTIN_IDS)

    def test_default_is_rainbow(self):
        assert DEFAULT_ANIMATION_ID == 'rainbow'
        assert animation_registry.default.anim_id == 'rainbow'

    def test_unknown_id_falls_back(self):
        assert animation_registry.resolve('sparkle').anim_id == 'rainbow'
        assert animation_registry.resolve(None).anim_id == 'rainbow'
        assert get_animation('').anim_id == 'rainbow'

    def test_exact_get(self):
        assert animation_registry.get('police').anim_id == 'police'
        assert animation_registry.get('sparkle') is None
        assert 'beat' in animation_registry
        assert 'Beat' not in animation_registry

    def test_catalog_id_ignores_case_and_punctuation(self):
        assert animation_registry.catalog_id('Smooth-Fade') == 'smoothFade'
        assert animation_registry.catalog_id('WATER') == 'water'
        assert animation_registry.catalog_id('Breathing') == 'breathing'
        assert animation_registry.catalog_id('sparkle') is None
        assert animation_registry.catalog_id(None) is None

    def test_normalize_anim_id(self):
        assert normalize_anim_id('Smooth-Fade') == 'smoothfade'
        assert normalize_anim_id(None) == ''

    def test_registry_is_sealed(self):
        spec = AnimationSpec('solid', 'Solid', 'One color', lambda *a: BLACK)
        with pytest.raises(RuntimeError):
            animation_registry.register(spec)
        assert 'solid' not in animation_registry

    def test_to_dict(self):
        data = animation_registry.to_dict()
        assert data['larson']['name'] == 'Larson Scanner'
        assert data['larson']['full_strip'] is False


# ============================================================
# HELPER TESTS
# ============================================================

class TestHelpers:

    def test_effective_index_left(self):
        assert [effective_index(i, 5, PROPS) for i in range(5)] == [0, 1, 2, 3, 4]

    def test_effective_index_right(self):
        props = AnimationProps(direction='right')
        assert [effective_index(i, 5, props) for i in range(5)] == [4, 3, 2, 1, 0]

    def test_effective_index_mirror(self):
        props = AnimationProps(mirror=True)
        assert [effective_index(i, 6, props) for i in range(6)] == [0, 1, 2, 2, 1, 0]

    def test_mirror_single_led(self):
        assert effective_index(0, 1, AnimationProps(mirror=True)) == 0

    def test_local_speed_floor(self):
        assert local_speed(AnimationProps(speed=0), 1.0) == MIN_EFFECTIVE_SPEED
        assert local_speed(AnimationProps(speed=2), 1.5) == 3.0

    def test_speed_floor_value(self):
        assert MIN_EFFECTIVE_SPEED == 0.1
        assert local_speed(AnimationProps(speed=0.5), 0.01) == pytest.approx(0.1)


# ============================================================
# ANIMATION BEHAVIOR TESTS
# ============================================================

class TestAnimations:

    @pytest.mark.parametrize("anim_id", BUILTIN_IDS)
    def test_deterministic(self, anim_id):
        assert colors(anim_id, 1234.5) == colors(anim_id, 1234.5)

    @pytest.mark.parametrize("anim_id", BUILTIN_IDS)
    def test_zero_speed_is_finite(self, anim_id):
        """Speed 0 is floored, so periods stay finite"""
        result = colors(anim_id, 5000, props=AnimationProps(speed=0), global_speed=0.01)
        assert len(result) == 16
        assert all(isinstance(c, RGBColor) for c in result)

    @pytest.mark.parametrize("anim_id", BUILTIN_IDS)
    def test_zero_length_segment(self, anim_id):
        spec = animation_registry.resolve(anim_id)
        assert isinstance(spec.evaluate(0, 0, 0, None, 1.0), RGBColor)

    def test_rainbow_spans_hue(self):
        frame = colors('rainbow', 0)
        assert frame[0] == RGBColor(255, 0, 0)
        assert frame[15] == RGBColor(255, 0, 0)  # hue 1.0 wraps to red

    def test_rainbow_mirror_symmetry(self):
        frame = colors('rainbow', 777, props=AnimationProps(mirror=True))
        for i in range(16):
            assert frame[i] == frame[15 - i]

    def test_breathing_quarter_period(self):
        """t=750ms is a quarter of the 3000ms period: v = 0.55"""
        frame = colors('breathing', 750)
        assert all(c == RGBColor(0, 140, 140) for c in frame)

    def test_breathing_floor(self):
        frame = colors('breathing', 0)
        assert frame[0] == RGBColor(0, 26, 26)

    def test_breathing_custom_color(self):
        frame = colors('breathing', 750, props=AnimationProps(color='#ff0000'))
        assert frame[0] == RGBColor(140, 0, 0)

    def test_invalid_color_uses_default(self):
        frame = colors('breathing', 750, props=AnimationProps(color='not-a-color'))
        assert frame[0] == RGBColor(0, 140, 140)

    def test_police_halves(self):
        first = colors('police', 0)
        assert first[:8] == [RGBColor(255, 0, 0)] * 8
        assert all(c.is_black for c in first[8:])

        second = colors('police', 400)
        assert all(c.is_black for c in second[:8])
        assert second[8:] == [RGBColor(0, 0, 255)] * 8

    def test_police_custom_colors(self):
        props = AnimationProps(left_color='#00ff00', right_color='#ffffff')
        assert colors('police', 0, props=props)[0] == RGBColor(0, 255, 0)
        assert colors('police', 400, props=props)[15] == RGBColor(255, 255, 255)

    def test_strobe_duty(self):
        assert all(c == RGBColor(255, 255, 255) for c in colors('strobe', 0))
        assert all(c.is_black for c in colors('strobe', 100))

    def test_theater_every_third(self):
        frame = colors('theater', 0)
        lit = [i for i, c in enumerate(frame) if not c.is_black]
        assert lit == [0, 3, 6, 9, 12, 15]

    def test_larson_dot(self):
        """At t=0 the dot sits between LEDs 7 and 8"""
        frame = colors('larson', 0)
        assert frame[7] == RGBColor(207, 32, 32)
        assert frame[8] == RGBColor(207, 32, 32)
        assert frame[0].is_black
        assert frame[15].is_black

    def test_beat_attack_and_peak(self):
        assert colors('beat', 0)[0] == RGBColor(13, 0, 6)
        assert colors('beat', 180)[0] == RGBColor(255, 0, 128)

    def test_twinkle_sparse(self):
        for t in range(0, 2400, 120):
            for c in colors('twinkle', t):
                assert c.is_black or c.r >= 76

    def test_phase_shift(self):
        """phaseMs shifts time: breathing at t=0 with phase 750 equals t=750"""
        shifted = colors('breathing', 0, props=AnimationProps(phase_ms=750))
        assert shifted == colors('breathing', 750)

    def test_speed_scales_time(self):
        fast = colors('breathing', 375, props=AnimationProps(speed=2))
        assert fast == colors('breathing', 750)
