"""
Markers - chapter lists, zoom cues and named marker templates
"""

from .translator import (
    format_timestamp,
    chapter_markers,
    generate_chapters,
    generate_zoom_keyframes,
    apply_marker_template,
)

__all__ = [
    "format_timestamp",
    "chapter_markers",
    "generate_chapters",
    "generate_zoom_keyframes",
    "apply_marker_template",
]
