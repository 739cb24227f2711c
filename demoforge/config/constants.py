"""
Constants configuration

Fixed numeric tables used by the timing stages and the metadata probe.
"""

from types import MappingProxyType

# Reading speed: ~200 words per minute, ~5 characters per word
CHARS_PER_WORD = 5
WORDS_PER_SECOND = 3.3

COMPLEXITY_MULTIPLIERS = MappingProxyType({
    "low": 1.0,
    "medium": 1.3,
    "high": 1.6,
})
DEFAULT_COMPLEXITY_MULTIPLIER = 1.3

INTERACTIVE_ELEMENT_MS = 300
ANIMATION_WAIT_MS = 1000
IMPORTANCE_BONUS_MS = 1500
SECTION_BASE_MS = 1500
SECTION_CAP_MS = 15000

PACING_STYLE_FACTORS = MappingProxyType({
    "fast": 0.7,
    "natural": 1.0,
    "slow": 1.3,
    "dramatic": 1.5,
})

# Gap between consecutive timeline entries
TRANSITION_GAP_MS = 800

# Voiceover sync
VOICEOVER_BUFFER_MS = 500

# Dramatic pauses
REVEAL_PAUSE_OFFSET_MS = 200
REVEAL_PAUSE_MS = 600
EMPHASIS_PAUSE_MS = 400
LONG_SECTION_MS = 5000
DEFAULT_PAUSE_MS = 500

# Scroll speeds in pixels per second
SCROLL_SPEEDS = MappingProxyType({
    "fast": 800,
    "smooth": 400,
    "cinematic": 200,
})
KEYFRAME_INTERVAL_MS = 16.67  # ~60 samples per second

# Fallback metadata when a clip cannot be probed
FALLBACK_WIDTH = 1920
FALLBACK_HEIGHT = 1080
FALLBACK_DURATION = 10.0
FALLBACK_FPS = 30.0

__all__ = [
    "CHARS_PER_WORD",
    "WORDS_PER_SECOND",
    "COMPLEXITY_MULTIPLIERS",
    "DEFAULT_COMPLEXITY_MULTIPLIER",
    "INTERACTIVE_ELEMENT_MS",
    "ANIMATION_WAIT_MS",
    "IMPORTANCE_BONUS_MS",
    "SECTION_BASE_MS",
    "SECTION_CAP_MS",
    "PACING_STYLE_FACTORS",
    "TRANSITION_GAP_MS",
    "VOICEOVER_BUFFER_MS",
    "REVEAL_PAUSE_OFFSET_MS",
    "REVEAL_PAUSE_MS",
    "EMPHASIS_PAUSE_MS",
    "LONG_SECTION_MS",
    "DEFAULT_PAUSE_MS",
    "SCROLL_SPEEDS",
    "KEYFRAME_INTERVAL_MS",
    "FALLBACK_WIDTH",
    "FALLBACK_HEIGHT",
    "FALLBACK_DURATION",
    "FALLBACK_FPS",
]
