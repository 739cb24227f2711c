"""
Shared overlay generator contract and drawing helpers

Every overlay generator implements ``generate(context) -> List[Primitive]``
and declares the compositing layer it draws on. Generators only read the
timeline; they never mutate it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from demoforge.config.constants import (
    FALLBACK_DURATION,
    FALLBACK_FPS,
    FALLBACK_HEIGHT,
    FALLBACK_WIDTH,
)
from demoforge.core.media import VideoMetadata
from demoforge.models.markers import Marker
from demoforge.models.render import Layer, Primitive, fmt
from demoforge.models.timeline import TimelineEntry


@dataclass(frozen=True)
class ChapterWindow:
    """A chapter's span on the output video, in seconds"""
    label: str
    start: float
    duration: float


@dataclass(frozen=True)
class OverlayContext:
    """
    Everything a generator may read. Times are in seconds.

    ``offset`` is where this clip starts on the joined output and
    ``total_duration`` the joined length; both are set by the compositor
    when a plan has several clips. Timeline entries and chapters are
    always on the output timeline.
    """
    width: int = FALLBACK_WIDTH
    height: int = FALLBACK_HEIGHT
    duration: float = FALLBACK_DURATION
    fps: float = FALLBACK_FPS
    timeline: Tuple[TimelineEntry, ...] = ()
    chapters: Tuple[Marker, ...] = ()
    clip: int = 0
    offset: float = 0.0
    total_duration: Optional[float] = None

    @classmethod
    def from_metadata(
        cls,
        metadata: VideoMetadata,
        timeline: Sequence[TimelineEntry] = (),
        chapters: Sequence[Marker] = (),
        clip: int = 0,
    ) -> "OverlayContext":
        return cls(
            width=metadata.width,
            height=metadata.height,
            duration=metadata.duration,
            fps=metadata.fps,
            timeline=tuple(timeline),
            chapters=tuple(chapters),
            clip=clip,
        )

    @property
    def output_duration(self) -> float:
        """Joined output length, or this clip's own length when it stands alone"""
        return self.duration if self.total_duration is None else self.total_duration

    @property
    def is_last_clip(self) -> bool:
        return self.total_duration is None or self.offset + self.duration >= self.total_duration

    def output_time(self) -> str:
        """Playback time on the output timeline, as an expression"""
        return f"(t+{fmt(self.offset)})" if self.offset else "t"

    def local_time(self, output_time: float) -> float:
        """Output time as clip time, clamped to the clip start"""
        return max(0.0, output_time - self.offset)

    def chapter_windows(self) -> List[ChapterWindow]:
        """
        Chapter spans, from the timeline when present, otherwise from
        chapter markers (each running until the next one)
        """
        if self.timeline:
            return [
                ChapterWindow(e.name, e.start_time / 1000, e.duration / 1000)
                for e in self.timeline
            ]
        markers = sorted(self.chapters, key=lambda m: m.time)
        windows = []
        for i, marker in enumerate(markers):
            end = markers[i + 1].time if i + 1 < len(markers) else self.output_duration
            windows.append(ChapterWindow(marker.label, marker.time, max(0.0, end - marker.time)))
        return windows


class OverlayGenerator(ABC):
    """Turns a style preset plus the overlay context into primitives"""

    name: str = "overlay"
    layer: Layer = Layer.TEXT

    @abstractmethod
    def generate(self, context: OverlayContext) -> List[Primitive]:
        ...

    def primitive(
        self,
        kind: str,
        context: OverlayContext,
        enable: Optional[str] = None,
        **params,
    ) -> Primitive:
        return Primitive.create(
            kind, self.layer, self.name, enable=enable, clip=context.clip, **params
        )


def to_ffmpeg_color(color: str, opacity: Optional[float] = None) -> str:
    """
    ``#RRGGBB[AA]`` to the compositor's ``0xRRGGBB[AA]`` notation

    Named colors pass through. An explicit opacity is appended as ``@alpha``.
    """
    value = color.strip()
    if value.startswith("#"):
        value = "0x" + value[1:].upper()
    if opacity is not None:
        if value.startswith("0x") and len(value) == 10:
            value = value[:8]
        value = f"{value}@{opacity:g}"
    return value


def escape_drawtext(text: str) -> str:
    """Escape text for a drawtext ``text`` option"""
    return (
        text.replace("\\", "\\\\")
        .replace(":", "\\:")
        .replace("%", "\\%")
        .replace("'", "’")
    )


def between(start: float, end: float) -> str:
    return f"between(t,{fmt(start)},{fmt(end)})"


def at_or_after(start: float) -> str:
    return f"gte(t,{fmt(start)})"

