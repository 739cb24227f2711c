"""
Voiceover synchronizer - stretches timeline entries to fit narration
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from demoforge.config.constants import TRANSITION_GAP_MS, VOICEOVER_BUFFER_MS
from demoforge.core.logging import get_logger
from demoforge.models.timeline import TimelineEntry, VoiceoverSegment
from .scheduler import relayout

logger = get_logger(__name__, component="pacing")

SegmentInput = Union[VoiceoverSegment, Dict[str, Any]]


def _find_segment(
    entry: TimelineEntry,
    segments: Sequence[VoiceoverSegment],
) -> Optional[VoiceoverSegment]:
    for segment in segments:
        if segment.matches(entry):
            return segment
    return None


def sync_with_voiceover(
    timeline: List[TimelineEntry],
    segments: Sequence[SegmentInput],
    transition_gap: float = TRANSITION_GAP_MS,
    buffer_time: float = VOICEOVER_BUFFER_MS,
) -> List[TimelineEntry]:
    """
    Match narration segments to entries and re-lay the timeline

    Entries are updated in place. A matched entry grows to at least
    ``voice duration + buffer_time``; unmatched entries keep their duration.
    Start times are then re-derived in one sweep with ``transition_gap``.

    ``voice_start`` and ``voice_end`` are recorded after that sweep, not when
    the segment is matched: they sit on the entry's final start time, which
    moves whenever an earlier entry grew. Entries with no segment have both
    cleared to None.

    Returns:
        The same list, for chaining
    """
    parsed = [
        s if isinstance(s, VoiceoverSegment) else VoiceoverSegment.from_dict(s)
        for s in segments
    ]

    matched = 0
    for entry in timeline:
        segment = _find_segment(entry, parsed)
        if segment is None:
            entry.has_voiceover = False
            entry.voice_start = None
            entry.voice_end = None
            continue
        matched += 1
        entry.duration = max(entry.duration, segment.duration + buffer_time)
        entry.has_voiceover = True

    relayout(timeline, transition_gap)

    # Voice windows follow the final start times
    for entry in timeline:
        if not entry.has_voiceover:
            continue
        segment = _find_segment(entry, parsed)
        entry.voice_start = entry.start_time
        entry.voice_end = entry.start_time + segment.duration

    logger.debug("Synced timeline with voiceover", extra={
        "entries": len(timeline),
        "matched": matched,
    })
    return timeline
