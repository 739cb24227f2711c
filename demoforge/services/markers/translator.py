"""
Marker translator - chapters, zoom keyframes and marker templates

Marker times are in seconds; zoom keyframes are emitted in milliseconds.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from demoforge.config.presets import MARKER_TEMPLATES
from demoforge.core.logging import get_logger
from demoforge.models.markers import Marker, MarkerType, ZoomKeyframe
from demoforge.models.options import ZoomOptions

logger = get_logger(__name__, component="markers")

MarkerInput = Union[Marker, Dict[str, Any]]

INTRO_LABEL = "Intro"


def _as_markers(markers: Iterable[MarkerInput]) -> List[Marker]:
    return [m if isinstance(m, Marker) else Marker.from_dict(m) for m in markers]


def format_timestamp(seconds: float) -> str:
    """``M:SS`` below one hour, ``H:MM:SS`` from one hour on"""
    total = int(max(0.0, seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def chapter_markers(markers: Iterable[MarkerInput]) -> List[Marker]:
    """Chapter markers sorted by time, with an Intro at 0 when missing"""
    chapters = sorted(
        (m for m in _as_markers(markers) if m.type == MarkerType.CHAPTER.value),
        key=lambda m: m.time,
    )
    if chapters and chapters[0].time > 0:
        chapters.insert(0, Marker(time=0.0, label=INTRO_LABEL))
    return chapters


def generate_chapters(markers: Iterable[MarkerInput]) -> str:
    """
    Publishable chapter list, one ``timestamp label`` line per chapter

    Non-chapter markers are ignored. An empty result is the empty string.
    """
    return "\n".join(
        f"{format_timestamp(m.time)} {m.label}" for m in chapter_markers(markers)
    )


def _zoom_level(value: Any, default: float) -> float:
    if value is None or float(value) <= 0:
        return default
    return float(value)


def _focus(value: Any) -> float:
    """Focus coordinate in [0, 1], centred when missing"""
    if value is None:
        return 0.5
    return min(1.0, max(0.0, float(value)))


def generate_zoom_keyframes(
    markers: Iterable[MarkerInput],
    options: Optional[Union[ZoomOptions, Mapping[str, Any]]] = None,
) -> List[ZoomKeyframe]:
    """Zoom markers as keyframes, sorted by time"""
    opts = ZoomOptions.from_options(options)
    zooms = sorted(
        (m for m in _as_markers(markers) if m.type == MarkerType.ZOOM.value),
        key=lambda m: m.time,
    )
    return [
        ZoomKeyframe(
            time=m.time * 1000,
            zoom=_zoom_level(m.metadata.get("zoom"), opts.default_zoom),
            x=_focus(m.metadata.get("x")),
            y=_focus(m.metadata.get("y")),
            duration=opts.default_duration,
        )
        for m in zooms
    ]


def apply_marker_template(
    name: str,
    duration: float,
    templates: Mapping[str, Sequence[Tuple[float, str]]] = MARKER_TEMPLATES,
) -> List[Marker]:
    """
    Expand a named chapter layout over ``duration`` seconds

    Unknown template names yield an empty list.
    """
    template = templates.get(name)
    if template is None:
        logger.info("Unknown marker template", extra={"template": name})
        return []
    return [
        Marker(
            id=f"marker-{i}",
            time=offset * duration,
            label=label,
            type=MarkerType.CHAPTER.value,
        )
        for i, (offset, label) in enumerate(template)
    ]
