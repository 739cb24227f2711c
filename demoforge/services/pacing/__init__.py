"""
Pacing - builds the canonical timeline

Flow: estimator -> scheduler -> voiceover sync -> pause injection
"""

from .estimator import calculate_section_duration, reading_time_ms
from .scheduler import generate_pacing_timeline, relayout, style_factor
from .voiceover import sync_with_voiceover
from .pauses import add_dramatic_pauses, detect_key_moments, find_entry_at

__all__ = [
    "calculate_section_duration",
    "reading_time_ms",
    "generate_pacing_timeline",
    "relayout",
    "style_factor",
    "sync_with_voiceover",
    "add_dramatic_pauses",
    "detect_key_moments",
    "find_entry_at",
]
