"""
Marker and keyframe data model
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MarkerType(str, Enum):
    """What a marker annotates"""
    CHAPTER = "chapter"
    ZOOM = "zoom"
    HIGHLIGHT = "highlight"
    CUT = "cut"
    PAUSE = "pause"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Marker:
    """A point-in-time annotation. ``time`` is in seconds."""
    time: float
    type: str = MarkerType.CHAPTER.value
    label: str = ""
    id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Marker":
        marker_type = data.get("type", MarkerType.CHAPTER.value)
        if isinstance(marker_type, MarkerType):
            marker_type = marker_type.value
        return cls(
            time=float(data.get("time", 0)),
            type=marker_type,
            label=data.get("label", ""),
            id=data.get("id"),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True)
class ZoomKeyframe:
    """Zoom cue in milliseconds, focus point normalised to [0, 1]."""
    time: float
    zoom: float
    x: float = 0.5
    y: float = 0.5
    duration: float = 1000


@dataclass(frozen=True)
class Keyframe:
    """A sampled eased value. ``time`` in ms, ``progress`` in [0, 1]."""
    time: float
    progress: float
    value: float


@dataclass(frozen=True)
class ScrollKeyframe:
    time: float
    scroll_y: float
    progress: float


@dataclass(frozen=True)
class ScrollTiming:
    duration: float
    keyframes: Tuple[ScrollKeyframe, ...]
    style: str
