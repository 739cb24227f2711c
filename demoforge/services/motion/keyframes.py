"""
Keyframe sampling for continuous motion

Sequences are finite, ordered by time and never mutated after generation.
"""

import math
from typing import List

from demoforge.config.constants import KEYFRAME_INTERVAL_MS
from demoforge.models.markers import Keyframe
from .easing import get_easing


def sample_count(duration_ms: float, interval_ms: float = KEYFRAME_INTERVAL_MS) -> int:
    return max(1, math.ceil(duration_ms / interval_ms))


def interpolate(
    duration_ms: float,
    easing: str = "linear",
    start: float = 0.0,
    end: float = 1.0,
) -> List[Keyframe]:
    """
    Eased keyframes from ``start`` to ``end`` over ``duration_ms``

    A non-positive duration yields one keyframe holding ``end``.
    """
    if duration_ms <= 0:
        return [Keyframe(time=0.0, progress=1.0, value=end)]

    ease = get_easing(easing)
    steps = sample_count(duration_ms)
    frames = []
    for i in range(steps + 1):
        progress = i / steps
        frames.append(Keyframe(
            time=float(round(progress * duration_ms)),
            progress=progress,
            value=start + (end - start) * ease(progress),
        ))
    return frames


def generate_fade_keyframes(
    kind: str = "out",
    duration_ms: float = 500,
    easing: str = "ease-in-out-quad",
) -> List[Keyframe]:
    """
    Opacity keyframes for a fade

    ``in`` fades a cover from 1 to 0, ``out`` from 0 to 1, and ``cross``
    rises and falls back following a half sine.
    """
    frames = interpolate(duration_ms, easing)
    if kind == "in":
        return [Keyframe(f.time, f.progress, 1 - f.value) for f in frames]
    if kind == "cross":
        return [Keyframe(f.time, f.progress, math.sin(f.value * math.pi)) for f in frames]
    return frames

