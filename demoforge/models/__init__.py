"""
Data models for the timeline and render plan

Internal domain objects are dataclasses; user-facing option structs and
style presets are pydantic models.
"""

from .timeline import (
    Section,
    Pause,
    TimelineEntry,
    VoiceoverSegment,
    KeyMoment,
    PacingResult,
    timeline_total_duration,
)
from .markers import (
    MarkerType,
    Marker,
    ZoomKeyframe,
    Keyframe,
    ScrollKeyframe,
    ScrollTiming,
)
from .captions import Caption, Word, CaptionFrame, ClickEvent
from .render import Layer, Primitive, TransitionDescriptor, RenderPlan, fmt
from .options import (
    OptionsModel,
    StylePreset,
    build_preset_table,
    resolve_preset,
    PacingOptions,
    ScrollOptions,
    ZoomOptions,
    ProgressBarOptions,
    CaptionOptions,
    LowerThirdOptions,
    ClickEffectOptions,
    TransitionOptions,
)

__all__ = [
    # Timeline
    "Section",
    "Pause",
    "TimelineEntry",
    "VoiceoverSegment",
    "KeyMoment",
    "PacingResult",
    "timeline_total_duration",
    # Markers
    "MarkerType",
    "Marker",
    "ZoomKeyframe",
    "Keyframe",
    "ScrollKeyframe",
    "ScrollTiming",
    # Captions
    "Caption",
    "Word",
    "CaptionFrame",
    "ClickEvent",
    # Render plan
    "Layer",
    "Primitive",
    "TransitionDescriptor",
    "RenderPlan",
    "fmt",
    # Options
    "OptionsModel",
    "StylePreset",
    "build_preset_table",
    "resolve_preset",
    "PacingOptions",
    "ScrollOptions",
    "ZoomOptions",
    "ProgressBarOptions",
    "CaptionOptions",
    "LowerThirdOptions",
    "ClickEffectOptions",
    "TransitionOptions",
]
