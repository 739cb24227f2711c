"""
Pacing scheduler - fits estimated section durations to a target length
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from demoforge.config.constants import PACING_STYLE_FACTORS
from demoforge.core.exceptions import ConfigurationError
from demoforge.core.logging import get_logger
from demoforge.models.options import PacingOptions
from demoforge.models.timeline import (
    PacingResult,
    Section,
    TimelineEntry,
    timeline_total_duration,
)
from .estimator import calculate_section_duration

logger = get_logger(__name__, component="pacing")

SectionInput = Union[Section, Dict[str, Any]]
Estimator = Callable[[Section], float]


def _as_section(value: SectionInput) -> Section:
    return value if isinstance(value, Section) else Section.from_dict(value)


def style_factor(style: str) -> float:
    factor = PACING_STYLE_FACTORS.get(style)
    if factor is None:
        logger.warning("Unknown pacing style, using natural", extra={"style": style})
        return PACING_STYLE_FACTORS["natural"]
    return factor


def relayout(entries: List[TimelineEntry], transition_gap: float) -> float:
    """
    Re-derive start times left to right with a fixed gap

    Returns:
        Total timeline length in ms
    """
    current = 0.0
    for entry in entries:
        entry.start_time = current
        current = entry.end_time + transition_gap
    return timeline_total_duration(entries, transition_gap)


def generate_pacing_timeline(
    sections: Sequence[SectionInput],
    options: Optional[Union[PacingOptions, Mapping[str, Any]]] = None,
    estimator: Estimator = calculate_section_duration,
) -> PacingResult:
    """
    Build a contiguous timeline scaled towards the target duration

    Each raw estimate is scaled by
    ``(target - n * gap) / sum(raw) * style_factor`` and clamped to
    [min_section_time, max_section_time].

    Raises:
        ConfigurationError: If the raw estimates sum to zero (including an
            empty section list), which leaves the scale undefined
    """
    opts = PacingOptions.from_options(options)
    parsed = [_as_section(s) for s in sections]
    raw = [estimator(s) for s in parsed]
    raw_total = sum(raw)

    if raw_total <= 0:
        raise ConfigurationError(
            f"Cannot pace {len(parsed)} section(s): estimated durations sum to zero"
        )

    gap = opts.transition_gap
    scale = (opts.target_duration - len(parsed) * gap) / raw_total * style_factor(opts.style)

    timeline = []
    for i, (section, raw_duration) in enumerate(zip(parsed, raw)):
        duration = min(opts.max_section_time, max(opts.min_section_time, raw_duration * scale))
        timeline.append(TimelineEntry(
            index=i,
            name=section.name or f"Section {i + 1}",
            start_time=0.0,
            duration=duration,
            emphasis="high" if section.is_important else "normal",
        ))

    total = relayout(timeline, gap)

    logger.debug("Generated pacing timeline", extra={
        "sections": len(timeline),
        "target_duration_ms": opts.target_duration,
        "total_duration_ms": total,
        "style": opts.style,
    })

    return PacingResult(
        timeline=timeline,
        total_duration=total,
        sections=len(timeline),
        transition_gap=gap,
    )
