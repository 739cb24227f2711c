"""
Easing functions

Each maps progress in [0, 1] to eased progress with f(0) = 0 and f(1) = 1.
"""

import math
from types import MappingProxyType
from typing import Callable

from demoforge.core.logging import get_logger

logger = get_logger(__name__, component="motion")

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - math.pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - math.pow(-2 * t + 2, 3) / 2


def ease_out_quint(t: float) -> float:
    return 1 - math.pow(1 - t, 5)


def ease_in_out_quint(t: float) -> float:
    return 16 * math.pow(t, 5) if t < 0.5 else 1 - math.pow(-2 * t + 2, 5) / 2


def ease_in_expo(t: float) -> float:
    return 0.0 if t == 0 else math.pow(2, 10 * (t - 1))


def ease_out_expo(t: float) -> float:
    return 1.0 if t == 1 else 1 - math.pow(2, -10 * t)


EASINGS = MappingProxyType({
    "linear": linear,
    "ease-in-quad": ease_in_quad,
    "ease-out-quad": ease_out_quad,
    "ease-in-out-quad": ease_in_out_quad,
    "ease-in-cubic": ease_in_cubic,
    "ease-out-cubic": ease_out_cubic,
    "ease-in-out-cubic": ease_in_out_cubic,
    "ease-out-quint": ease_out_quint,
    "ease-in-out-quint": ease_in_out_quint,
    "ease-in-expo": ease_in_expo,
    "ease-out-expo": ease_out_expo,
    # CSS-style shorthands used by the style presets
    "ease-in": ease_in_quad,
    "ease-out": ease_out_cubic,
    "ease-in-out": ease_in_out_quad,
})


def get_easing(name: str) -> EasingFn:
    """Resolve an easing by name; unknown names fall back to linear"""
    fn = EASINGS.get(name)
    if fn is None:
        logger.warning("Unknown easing, using linear", extra={"easing": name})
        return linear
    return fn
