"""
Timeline data model

Sections come from the content-analysis collaborator and never change.
TimelineEntry objects are created by the pacing scheduler and mutated in
place by the voiceover synchronizer and pause injector.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Section:
    """One analysed content section of the page under demo."""
    name: str = ""
    text_length: int = 0
    visual_complexity: str = "medium"
    interactive_elements: int = 0
    is_important: bool = False
    has_animation: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            name=data.get("name", ""),
            text_length=max(0, int(data.get("textLength", data.get("text_length", 0)) or 0)),
            visual_complexity=data.get("visualComplexity", data.get("visual_complexity", "medium")),
            interactive_elements=max(0, int(
                data.get("interactiveElements", data.get("interactive_elements", 0)) or 0
            )),
            is_important=bool(data.get("isImportant", data.get("is_important", False))),
            has_animation=bool(data.get("hasAnimation", data.get("has_animation", False))),
        )


@dataclass(frozen=True)
class Pause:
    """A hold beat inside an entry. ``at`` is relative to the entry start."""
    at: float
    duration: float
    type: str


@dataclass
class TimelineEntry:
    """When one section is on screen, in milliseconds."""
    index: int
    name: str
    start_time: float
    duration: float
    emphasis: str = "normal"
    pauses: List[Pause] = field(default_factory=list)
    has_voiceover: bool = False
    voice_start: Optional[float] = None
    voice_end: Optional[float] = None

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def contains(self, time: float, inclusive_end: bool = False) -> bool:
        """Half-open [start, end) membership, closed when inclusive_end."""
        if inclusive_end:
            return self.start_time <= time <= self.end_time
        return self.start_time <= time < self.end_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "start_time": self.start_time,
            "duration": self.duration,
            "end_time": self.end_time,
            "emphasis": self.emphasis,
            "pauses": [
                {"at": p.at, "duration": p.duration, "type": p.type}
                for p in self.pauses
            ],
            "has_voiceover": self.has_voiceover,
            "voice_start": self.voice_start,
            "voice_end": self.voice_end,
        }


@dataclass(frozen=True)
class VoiceoverSegment:
    """Narration length for one section, matched by index or name."""
    duration: float
    section_index: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoiceoverSegment":
        index = data.get("sectionIndex", data.get("section_index"))
        return cls(
            duration=float(data.get("duration", 0)),
            section_index=None if index is None else int(index),
            name=data.get("name"),
        )

    def matches(self, entry: TimelineEntry) -> bool:
        if self.section_index is not None and self.section_index == entry.index:
            return True
        return self.name is not None and self.name == entry.name


@dataclass(frozen=True)
class KeyMoment:
    """An absolute point on the timeline that deserves a dramatic pause."""
    time: float
    type: str
    duration: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyMoment":
        duration = data.get("duration")
        return cls(
            time=float(data["time"]),
            type=data.get("type", "emphasis"),
            duration=None if duration is None else float(duration),
        )


@dataclass
class PacingResult:
    """Output of the pacing scheduler."""
    timeline: List[TimelineEntry]
    total_duration: float
    sections: int
    transition_gap: float


def timeline_total_duration(entries: List[TimelineEntry], transition_gap: float) -> float:
    """Sum of durations plus one gap between each adjacent pair."""
    if not entries:
        return 0.0
    return sum(e.duration for e in entries) + (len(entries) - 1) * transition_gap
