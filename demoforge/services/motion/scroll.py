"""
Scroll timing - eased scroll keyframes for revealing a page
"""

import math
from typing import Any, Mapping, Optional, Union

from demoforge.config.constants import SCROLL_SPEEDS
from demoforge.core.logging import get_logger
from demoforge.models.markers import ScrollKeyframe, ScrollTiming
from demoforge.models.options import ScrollOptions
from .easing import ease_in_out_quint, ease_out_cubic
from .keyframes import sample_count

logger = get_logger(__name__, component="motion")


def adjusted_speed(distance: float, style: str, viewport_height: float) -> float:
    """Base speed for the style, slowed logarithmically for long scrolls (px/s)"""
    base = SCROLL_SPEEDS.get(style, SCROLL_SPEEDS["smooth"])
    return base * (1 - math.log10(distance / viewport_height + 1) * 0.2)


def calculate_scroll_timing(
    distance: float,
    options: Optional[Union[ScrollOptions, Mapping[str, Any]]] = None,
) -> ScrollTiming:
    """
    Duration and keyframes for scrolling ``distance`` pixels

    Keyframes are sampled every ~16ms from t=0 to the full duration with
    ``progress`` rising from 0 to 1. Cinematic scrolls use a quintic
    ease-in-out; the other styles use a cubic ease-out.
    """
    opts = ScrollOptions.from_options(options)
    magnitude = abs(distance)

    if magnitude == 0:
        return ScrollTiming(
            duration=0.0,
            keyframes=(ScrollKeyframe(time=0.0, scroll_y=0.0, progress=1.0),),
            style=opts.style,
        )

    speed = adjusted_speed(magnitude, opts.style, max(1.0, opts.viewport_height))
    if speed <= 0:
        # Very long scroll: hold the slowest usable pace
        speed = SCROLL_SPEEDS["cinematic"] * 0.1
        logger.debug("Scroll speed floored", extra={"distance": distance})

    duration = magnitude / speed * 1000
    ease = ease_in_out_quint if opts.style == "cinematic" else ease_out_cubic
    steps = sample_count(duration)

    keyframes = tuple(
        ScrollKeyframe(
            time=(i / steps) * duration,
            scroll_y=distance * ease(i / steps),
            progress=i / steps,
        )
        for i in range(steps + 1)
    )
    return ScrollTiming(duration=duration, keyframes=keyframes, style=opts.style)
