"""
Duration estimator - intrinsic viewing time of one content section
"""

from demoforge.config.constants import (
    ANIMATION_WAIT_MS,
    CHARS_PER_WORD,
    COMPLEXITY_MULTIPLIERS,
    DEFAULT_COMPLEXITY_MULTIPLIER,
    IMPORTANCE_BONUS_MS,
    INTERACTIVE_ELEMENT_MS,
    SECTION_BASE_MS,
    SECTION_CAP_MS,
    WORDS_PER_SECOND,
)
from demoforge.models.timeline import Section


def reading_time_ms(text_length: int) -> float:
    """Time to read ``text_length`` characters at ~200 words per minute"""
    words = max(0, text_length) / CHARS_PER_WORD
    return (words / WORDS_PER_SECOND) * 1000


def calculate_section_duration(section: Section) -> float:
    """
    Estimate how long a section should stay on screen

    Returns:
        Duration in ms, always within [SECTION_BASE_MS, SECTION_CAP_MS]
    """
    complexity = COMPLEXITY_MULTIPLIERS.get(
        section.visual_complexity, DEFAULT_COMPLEXITY_MULTIPLIER
    )
    estimate = (
        reading_time_ms(section.text_length) * complexity
        + max(0, section.interactive_elements) * INTERACTIVE_ELEMENT_MS
        + (ANIMATION_WAIT_MS if section.has_animation else 0)
        + (IMPORTANCE_BONUS_MS if section.is_important else 0)
    )
    return min(max(SECTION_BASE_MS, estimate), SECTION_CAP_MS)
