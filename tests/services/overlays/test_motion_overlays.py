"""
Tests for click effects, clip transitions and zoom transforms
"""

import pytest

from demoforge.models import ClickEvent, Layer, ZoomKeyframe
from demoforge.services.overlays import (
    OverlayContext,
    PulseEffect,
    RingEffect,
    RippleEffect,
    SceneTransitions,
    ZoomOverlay,
    calculate_offset,
    create_click_effect,
)


@pytest.fixture
def context():
    return OverlayContext(width=1280, height=720, duration=10.0, fps=30)


class TestClickEffects:
    """Test suite for click effect generators"""

    def test_ripple_rings_and_dot(self, context):
        primitives = RippleEffect([ClickEvent(x=100, y=200, time=1.0)]).generate(context)

        assert len(primitives) == 5
        assert all(p.layer == Layer.INTERACTION for p in primitives)
        assert primitives[0].enable == "between(t,1,1.4)"
        assert primitives[-1].param("w") == "8"
        assert primitives[-1].param("c") == "0x3B82F6@0.9"

    def test_rings_stagger_and_fade(self, context):
        rings = RippleEffect([{"x": 0, "y": 0, "time": 0}]).generate(context)[:4]
        starts = [p.enable for p in rings]
        assert starts[1] == "between(t,0.067,0.4)"
        assert rings[0].param("c") == "0x3B82F6@0.6"
        assert rings[3].param("c") == "0x3B82F6@0.15"

    def test_click_time_in_milliseconds(self, context):
        (primitive,) = PulseEffect([{"x": 10, "y": 10, "t": 1500}]).generate(context)
        assert primitive.enable == "between(t,1.5,2)"
        assert primitive.param("x") == "10-w/2"

    def test_clicks_sorted(self, context):
        effect = RingEffect([ClickEvent(0, 0, 3.0), ClickEvent(0, 0, 1.0)])
        enables = [p.enable for p in effect.generate(context)]
        assert enables == ["between(t,1,1.45)", "between(t,3,3.45)"]

    def test_factory(self):
        assert isinstance(create_click_effect([], {"style": "pulse"}), PulseEffect)
        assert type(create_click_effect([], {"style": "sparkle"})) is RippleEffect

    def test_overrides(self, context):
        effect = create_click_effect([ClickEvent(0, 0, 0)], {"style": "ring", "duration": 1, "color": "#FF0000"})
        (primitive,) = effect.generate(context)
        assert primitive.enable == "between(t,0,1)"
        assert primitive.param("c") == "0xFF0000@0.6"


class TestSceneTransitions:
    """Test suite for clip joins"""

    def test_calculate_offset(self):
        assert calculate_offset(10, 0.5) == 9.5
        assert calculate_offset(1, 0.5) == 0.5
        assert calculate_offset(0.2, 0.5) == 0

    def test_fade_join(self):
        (join,) = SceneTransitions({"kind": "fade"}).plan([10, 8])
        assert join.offset == 9.5
        assert join.to_filter() == "xfade=transition=fade:duration=0.5:offset=9.5"

    def test_offsets_accumulate(self):
        joins = SceneTransitions({"kind": "slide-left"}).plan([10, 8, 6])
        assert [j.offset for j in joins] == pytest.approx([9.7, 17.4])
        assert joins[1].animation == "slideleft"

    def test_duration_clamped_to_clip(self):
        transitions = SceneTransitions({"kind": "zoom"})
        join = transitions.describe(0, 1, 0.3)
        assert join.duration == 0.3
        assert join.offset == 0

    def test_cut(self):
        (join,) = SceneTransitions({"kind": "none"}).plan([4, 4])
        assert join.is_cut
        assert join.to_filter() == "concat=n=2:v=1:a=0"

    def test_unknown_kind_uses_fade(self):
        transitions = SceneTransitions({"kind": "spin"})
        assert transitions.kind == "fade"
        assert transitions.duration == 0.5

    def test_duration_override(self):
        assert SceneTransitions({"kind": "wipe", "duration": 1.25}).duration == 1.25

    def test_single_clip_has_no_joins(self):
        assert SceneTransitions().plan([10]) == []

    def test_plan_deterministic(self):
        durations = [12.5, 7.25, 9.0, 3.3]
        first = SceneTransitions({"kind": "blur"}).plan(durations)
        second = SceneTransitions({"kind": "blur"}).plan(durations)
        assert first == second


class TestZoomOverlay:
    """Test suite for zoom transforms"""

    def test_no_keyframes(self, context):
        assert ZoomOverlay([]).generate(context) == []

    def test_single_zoompan(self, context):
        overlay = ZoomOverlay([
            ZoomKeyframe(time=4000, zoom=1.5, x=0.25),
            ZoomKeyframe(time=1000, zoom=2.0),
        ])
        (primitive,) = overlay.generate(context)

        assert primitive.kind == "zoompan"
        assert primitive.layer == Layer.MOTION
        assert primitive.param("s") == "1280x720"
        assert primitive.param("d") == "1"
        assert primitive.param("fps") == "30"

    def test_zoom_expression_ramps(self):
        overlay = ZoomOverlay([ZoomKeyframe(time=2000, zoom=1.5, duration=500)])
        assert overlay.zoom_expression(overlay.keyframes) == "if(lt(it,2),1,1+0.5*min(1,(it-2)/0.5))"

    def test_keyframes_sorted(self):
        overlay = ZoomOverlay([ZoomKeyframe(time=3000, zoom=1.2), ZoomKeyframe(time=1000, zoom=2)])
        assert [k.time for k in overlay.keyframes] == [1000, 3000]

    def test_keyframes_split_across_clips(self):
        overlay = ZoomOverlay([ZoomKeyframe(time=4000, zoom=1.5), ZoomKeyframe(time=14000, zoom=2)])
        first = OverlayContext(duration=10.0, offset=0.0, total_duration=29.5)
        second = OverlayContext(duration=20.0, clip=1, offset=9.5, total_duration=29.5)

        assert [k.time for k in overlay.keyframes_for(first)] == [4000]
        assert [k.time for k in overlay.keyframes_for(second)] == [4500]
        (primitive,) = overlay.generate(second)
        assert primitive.clip == 1
        assert "lt(it,4.5)" in primitive.param("z")

    def test_clip_without_keyframes_is_untouched(self):
        overlay = ZoomOverlay([ZoomKeyframe(time=25000, zoom=1.5)])
        first = OverlayContext(duration=10.0, total_duration=29.5)
        assert overlay.generate(first) == []
