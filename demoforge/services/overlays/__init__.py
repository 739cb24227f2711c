"""
Overlay primitive generators

Each generator reads the overlay context (frame size, duration, timeline)
and emits time-gated primitives on a fixed compositing layer:
    - progress.py: progress indicators (background)
    - zoom.py: zoom transforms (motion)
    - click_effects.py: cursor click effects (interaction)
    - captions.py, lower_thirds.py: text overlays
    - transitions.py: clip joins (applied after per-clip compositing)
"""

from .base import (
    ChapterWindow,
    OverlayContext,
    OverlayGenerator,
    to_ffmpeg_color,
    escape_drawtext,
    between,
    at_or_after,
)
from .progress import (
    ProgressIndicator,
    BarProgress,
    LineProgress,
    DotsProgress,
    CircularProgress,
    ChapterProgress,
    PROGRESS_STYLES,
    create_progress_indicator,
)
from .subtitles import parse_srt, parse_timestamp, format_srt_timestamp, generate_srt, split_script
from .captions import (
    CaptionOverlay,
    split_into_words,
    calculate_position_y,
    generate_caption_frames,
    karaoke_frames,
    pop_frames,
    typewriter_frames,
)
from .lower_thirds import LowerThird, AnimationState
from .click_effects import (
    ClickEffect,
    RippleEffect,
    PulseEffect,
    RingEffect,
    CLICK_EFFECT_STYLES,
    create_click_effect,
)
from .transitions import SceneTransitions, calculate_offset
from .zoom import ZoomOverlay

__all__ = [
    "ChapterWindow",
    "OverlayContext",
    "OverlayGenerator",
    "to_ffmpeg_color",
    "escape_drawtext",
    "between",
    "at_or_after",
    "ProgressIndicator",
    "BarProgress",
    "LineProgress",
    "DotsProgress",
    "CircularProgress",
    "ChapterProgress",
    "PROGRESS_STYLES",
    "create_progress_indicator",
    "parse_srt",
    "parse_timestamp",
    "format_srt_timestamp",
    "generate_srt",
    "split_script",
    "CaptionOverlay",
    "split_into_words",
    "calculate_position_y",
    "generate_caption_frames",
    "karaoke_frames",
    "pop_frames",
    "typewriter_frames",
    "LowerThird",
    "AnimationState",
    "ClickEffect",
    "RippleEffect",
    "PulseEffect",
    "RingEffect",
    "CLICK_EFFECT_STYLES",
    "create_click_effect",
    "SceneTransitions",
    "calculate_offset",
    "ZoomOverlay",
]
