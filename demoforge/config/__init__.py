"""
Engine configuration and settings
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .constants import (
    COMPLEXITY_MULTIPLIERS,
    DEFAULT_COMPLEXITY_MULTIPLIER,
    PACING_STYLE_FACTORS,
    SCROLL_SPEEDS,
    FALLBACK_WIDTH,
    FALLBACK_HEIGHT,
    FALLBACK_DURATION,
    FALLBACK_FPS,
)
from .presets import (
    PROGRESS_PRESETS,
    CAPTION_PRESETS,
    CAPTION_POSITIONS,
    LOWER_THIRD_PRESETS,
    CLICK_EFFECT_PRESETS,
    TRANSITION_PRESETS,
    MARKER_TEMPLATES,
)

# External tool binaries
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")
FFPROBE_BINARY = os.getenv("FFPROBE_BINARY", "ffprobe")

# Timeouts (seconds)
RENDER_TIMEOUT_SECONDS = float(os.getenv("RENDER_TIMEOUT_SECONDS", "300"))
PROBE_TIMEOUT_SECONDS = float(os.getenv("PROBE_TIMEOUT_SECONDS", "30"))

# Batch / multi-platform export
MAX_CONCURRENT_RENDERS = int(os.getenv("MAX_CONCURRENT_RENDERS", "2"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "false").lower() == "true"

# Unknown option keys raise instead of being ignored
STRICT_OPTIONS = os.getenv("STRICT_OPTIONS", "false").lower() == "true"

__all__ = [
    "FFMPEG_BINARY",
    "FFPROBE_BINARY",
    "RENDER_TIMEOUT_SECONDS",
    "PROBE_TIMEOUT_SECONDS",
    "MAX_CONCURRENT_RENDERS",
    "LOG_LEVEL",
    "LOG_JSON",
    "STRICT_OPTIONS",
    "COMPLEXITY_MULTIPLIERS",
    "DEFAULT_COMPLEXITY_MULTIPLIER",
    "PACING_STYLE_FACTORS",
    "SCROLL_SPEEDS",
    "FALLBACK_WIDTH",
    "FALLBACK_HEIGHT",
    "FALLBACK_DURATION",
    "FALLBACK_FPS",
    "PROGRESS_PRESETS",
    "CAPTION_PRESETS",
    "CAPTION_POSITIONS",
    "LOWER_THIRD_PRESETS",
    "CLICK_EFFECT_PRESETS",
    "TRANSITION_PRESETS",
    "MARKER_TEMPLATES",
]
