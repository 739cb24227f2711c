"""
Pause injector - attaches dramatic hold beats to timeline entries

Pauses are playback hints only; entry timing never changes here.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from demoforge.config.constants import (
    DEFAULT_PAUSE_MS,
    EMPHASIS_PAUSE_MS,
    LONG_SECTION_MS,
    REVEAL_PAUSE_MS,
    REVEAL_PAUSE_OFFSET_MS,
)
from demoforge.core.logging import get_logger
from demoforge.models.timeline import KeyMoment, Pause, TimelineEntry

logger = get_logger(__name__, component="pacing")

MomentInput = Union[KeyMoment, Dict[str, Any]]


def detect_key_moments(timeline: Sequence[TimelineEntry]) -> List[KeyMoment]:
    """Reveal beats for high-emphasis entries, midpoint beats for long ones"""
    moments = []
    for entry in timeline:
        if entry.emphasis == "high":
            moments.append(KeyMoment(
                time=entry.start_time + REVEAL_PAUSE_OFFSET_MS,
                type="reveal",
                duration=REVEAL_PAUSE_MS,
            ))
        if entry.duration > LONG_SECTION_MS:
            moments.append(KeyMoment(
                time=entry.start_time + entry.duration / 2,
                type="emphasis",
                duration=EMPHASIS_PAUSE_MS,
            ))
    return moments


def find_entry_at(
    timeline: Sequence[TimelineEntry],
    time: float,
) -> Optional[TimelineEntry]:
    """
    Entry whose interval contains ``time``

    Intervals are half-open [start, end), except the last entry which also
    owns its end point. The first containing entry wins.
    """
    last = len(timeline) - 1
    for i, entry in enumerate(timeline):
        if entry.contains(time, inclusive_end=(i == last)):
            return entry
    return None


def add_dramatic_pauses(
    timeline: List[TimelineEntry],
    key_moments: Optional[Sequence[MomentInput]] = None,
) -> List[TimelineEntry]:
    """
    Append pauses to the entries containing each key moment

    When no moments are given they are detected from the timeline.
    Moments outside every entry are dropped.

    Returns:
        The same list, for chaining
    """
    if key_moments:
        moments = [
            m if isinstance(m, KeyMoment) else KeyMoment.from_dict(m)
            for m in key_moments
        ]
    else:
        moments = detect_key_moments(timeline)

    dropped = 0
    for moment in moments:
        entry = find_entry_at(timeline, moment.time)
        if entry is None:
            dropped += 1
            continue
        entry.pauses.append(Pause(
            at=moment.time - entry.start_time,
            duration=moment.duration if moment.duration else DEFAULT_PAUSE_MS,
            type=moment.type,
        ))

    if dropped:
        logger.debug("Key moments outside the timeline were dropped", extra={
            "dropped": dropped,
        })
    return timeline
