"""
Tests for config module: environment settings and preset tables
"""

import pytest

from demoforge import config
from demoforge.config import (
    CAPTION_PRESETS,
    CLICK_EFFECT_PRESETS,
    LOWER_THIRD_PRESETS,
    MARKER_TEMPLATES,
    PROGRESS_PRESETS,
    SCROLL_SPEEDS,
    TRANSITION_PRESETS,
)


class TestSettings:
    """Test suite for environment-driven settings"""

    def test_types(self):
        assert isinstance(config.FFMPEG_BINARY, str)
        assert isinstance(config.FFPROBE_BINARY, str)
        assert isinstance(config.RENDER_TIMEOUT_SECONDS, float)
        assert isinstance(config.MAX_CONCURRENT_RENDERS, int)
        assert isinstance(config.LOG_JSON, bool)

    def test_timeouts_positive(self):
        assert config.RENDER_TIMEOUT_SECONDS > 0
        assert config.PROBE_TIMEOUT_SECONDS > 0


class TestPresetTables:
    """Test suite for the named style tables"""

    def test_progress_styles(self):
        assert set(PROGRESS_PRESETS) == {"bar", "line", "dots", "circular", "chapter"}

    def test_caption_styles(self):
        assert set(CAPTION_PRESETS) == {"standard", "karaoke", "pop", "typewriter", "fade"}

    def test_lower_third_styles(self):
        assert set(LOWER_THIRD_PRESETS) == {"modern", "classic", "minimal", "gradient", "broadcast"}

    def test_click_and_transition_kinds(self):
        assert set(CLICK_EFFECT_PRESETS) == {"ripple", "pulse", "ring"}
        assert set(TRANSITION_PRESETS) == {"fade", "blur", "slide-left", "slide-right", "zoom", "wipe"}

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            PROGRESS_PRESETS["neon"] = {}
        with pytest.raises(TypeError):
            SCROLL_SPEEDS["warp"] = 5000

    @pytest.mark.parametrize("name", sorted(MARKER_TEMPLATES))
    def test_templates_ordered(self, name):
        offsets = [offset for offset, _ in MARKER_TEMPLATES[name]]
        assert offsets == sorted(offsets)
        assert offsets[0] == 0.0 and offsets[-1] < 1.0
