"""
Tests for overlay helpers and progress indicators
"""

import pytest

from demoforge.models import Layer, TimelineEntry
from demoforge.services.overlays import (
    BarProgress,
    ChapterProgress,
    CircularProgress,
    DotsProgress,
    LineProgress,
    OverlayContext,
    at_or_after,
    between,
    create_progress_indicator,
    escape_drawtext,
    to_ffmpeg_color,
)


@pytest.fixture
def context():
    return OverlayContext(width=1920, height=1080, duration=10.0)


class TestDrawingHelpers:
    """Test suite for color, text and predicate helpers"""

    def test_hex_color(self):
        assert to_ffmpeg_color("#3b82f6") == "0x3B82F6"
        assert to_ffmpeg_color("#00000033") == "0x00000033"

    def test_color_with_opacity(self):
        assert to_ffmpeg_color("#3B82F6CC", 0.5) == "0x3B82F6@0.5"
        assert to_ffmpeg_color("white", 0.25) == "white@0.25"

    def test_escape_drawtext(self):
        assert escape_drawtext("It's 50%: a\\b") == "It’s 50\\%\\: a\\\\b"

    def test_predicates(self):
        assert between(1.5, 3) == "between(t,1.5,3)"
        assert at_or_after(2.25) == "gte(t,2.25)"


class TestBarProgress:
    """Test suite for the default bar style"""

    def test_bar_filters(self, context):
        primitives = BarProgress().generate(context)

        assert [p.to_filter() for p in primitives] == [
            "drawbox=x=0:y=1074:w=1920:h=6:c=0xE5E7EB33:t=fill",
            "drawbox=x=0:y=1074:w='min(1920,t/10*1920)':h=6:c=0x3B82F6:t=fill",
        ]
        assert all(p.layer == Layer.BACKGROUND for p in primitives)

    def test_top_position_and_overrides(self, context):
        indicator = BarProgress({"position": "top", "height": 12, "color": "#FF0000"})
        background, fill = indicator.generate(context)
        assert background.param("y") == "0"
        assert fill.param("h") == "12"
        assert fill.param("c") == "0xFF0000"

    def test_padding(self, context):
        _, fill = BarProgress({"padding": 10}).generate(context)
        assert fill.param("y") == str(1080 - 6 - 10)


class TestProgressStyles:
    """Test suite for the alternative progress styles"""

    def test_factory_picks_style(self):
        assert isinstance(create_progress_indicator({"style": "dots"}), DotsProgress)
        assert isinstance(create_progress_indicator({"style": "line"}), LineProgress)
        assert isinstance(create_progress_indicator({"style": "circular"}), CircularProgress)
        assert isinstance(create_progress_indicator({"style": "chapter"}), ChapterProgress)

    def test_unknown_style_uses_bar(self):
        indicator = create_progress_indicator({"style": "spinner"})
        assert type(indicator) is BarProgress

    def test_line_is_thinner_than_slot(self, context):
        _, fill = LineProgress().generate(context)
        assert fill.param("h") == "2"

    def test_dots_light_up_in_order(self, context):
        primitives = DotsProgress({"dot_count": 5}).generate(context)
        lit = [p.enable for p in primitives if p.enable]
        assert len(primitives) == 10
        assert lit == ["gte(t,0)", "gte(t,2)", "gte(t,4)", "gte(t,6)", "gte(t,8)"]

    def test_circular_segments(self, context):
        primitives = CircularProgress({"segment_count": 8}).generate(context)
        assert len(primitives) == 9
        assert primitives[0].enable is None
        assert primitives[-1].enable == "gte(t,8.75)"

    def test_chapter_segments_follow_timeline(self):
        context = OverlayContext(
            width=1000, height=500, duration=12,
            timeline=(
                TimelineEntry(index=0, name="A", start_time=0, duration=4000),
                TimelineEntry(index=1, name="B", start_time=5000, duration=7000),
            ),
        )
        primitives = ChapterProgress({"segment_gap": 10}).generate(context)

        assert len(primitives) == 4
        second_fill = primitives[3]
        assert second_fill.param("x") == "505"
        assert second_fill.enable == "gte(t,5)"
        assert "(t-5)/7" in second_fill.param("w")

    def test_chapter_falls_back_to_bar(self, context):
        primitives = ChapterProgress().generate(context)
        assert len(primitives) == 2
        assert "t/10" in primitives[1].param("w")

    def test_deterministic(self, context):
        first = [p.to_filter() for p in DotsProgress().generate(context)]
        second = [p.to_filter() for p in DotsProgress().generate(context)]
        assert first == second
