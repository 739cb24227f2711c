"""
Motion interpolation - easings, keyframe sampling and scroll timing
"""

from .easing import EASINGS, get_easing, ease_out_cubic, ease_in_out_quint
from .keyframes import interpolate, generate_fade_keyframes, sample_count
from .scroll import calculate_scroll_timing, adjusted_speed

__all__ = [
    "EASINGS",
    "get_easing",
    "ease_out_cubic",
    "ease_in_out_quint",
    "interpolate",
    "generate_fade_keyframes",
    "sample_count",
    "calculate_scroll_timing",
    "adjusted_speed",
]
