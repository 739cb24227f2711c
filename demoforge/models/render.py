"""
Render plan intermediate representation

Overlay generators emit Primitive value objects and the transition
generator emits TransitionDescriptor objects. The compositor orders them
into a RenderPlan; the textual filter graph is only produced at the
boundary by demoforge.services.compositor.serializer.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional, Tuple, Union

Number = Union[int, float]

# Characters that force a filter option value to be single-quoted
_QUOTE_TRIGGERS = set(",;[]() ")


class Layer(IntEnum):
    """Fixed compositing order, bottom to top"""
    BACKGROUND = 0   # progress bar / dots
    MOTION = 1       # zoom transforms
    INTERACTION = 2  # cursor / click effects
    TEXT = 3         # captions, lower-thirds
    TRANSITION = 4   # clip joins, applied after per-clip compositing


def fmt(value: Number) -> str:
    """Deterministic number rendering: at most 3 decimals, no trailing zeros"""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _format_option(value: str) -> str:
    if value.startswith("'") and value.endswith("'") and len(value) > 1:
        return value
    if any(ch in _QUOTE_TRIGGERS for ch in value):
        return f"'{value}'"
    return value


@dataclass(frozen=True)
class Primitive:
    """
    One time-gated drawing operation for the external compositor

    ``params`` keeps insertion order so serialization is stable. ``enable``
    is the visibility predicate over playback time ``t`` (seconds) and is
    passed through untouched.
    """
    kind: str
    params: Tuple[Tuple[str, str], ...]
    layer: Layer
    source: str
    enable: Optional[str] = None
    clip: int = 0

    @classmethod
    def create(
        cls,
        kind: str,
        layer: Layer,
        source: str,
        enable: Optional[str] = None,
        clip: int = 0,
        **params: Union[str, Number],
    ) -> "Primitive":
        ordered = tuple(
            (key, value if isinstance(value, str) else fmt(value))
            for key, value in params.items()
        )
        return cls(kind=kind, params=ordered, layer=layer, source=source,
                   enable=enable, clip=clip)

    def param(self, key: str) -> Optional[str]:
        for name, value in self.params:
            if name == key:
                return value
        return None

    def to_filter(self) -> str:
        parts = [f"{key}={_format_option(value)}" for key, value in self.params]
        if self.enable is not None:
            parts.append(f"enable='{self.enable}'")
        if not parts:
            return self.kind
        return f"{self.kind}=" + ":".join(parts)


@dataclass(frozen=True)
class TransitionDescriptor:
    """A join between two adjacent clips. Times are in seconds."""
    from_clip: int
    to_clip: int
    offset: float
    kind: str
    duration: float
    easing: str = "linear"
    animation: Optional[str] = None  # xfade transition name; None joins by concat

    @property
    def is_cut(self) -> bool:
        return self.animation is None

    def to_filter(self) -> str:
        if self.is_cut:
            return "concat=n=2:v=1:a=0"
        return (
            f"xfade=transition={self.animation}"
            f":duration={fmt(self.duration)}"
            f":offset={fmt(self.offset)}"
        )


@dataclass(frozen=True)
class RenderPlan:
    """Ordered primitives plus clip transition descriptors for one video"""
    primitives: Tuple[Primitive, ...] = ()
    transitions: Tuple[TransitionDescriptor, ...] = ()
    clip_count: int = 1
    metadata: dict = field(default_factory=dict, hash=False, compare=False)

    def primitives_for_clip(self, clip: int) -> Iterator[Primitive]:
        return (p for p in self.primitives if p.clip == clip)

    def primitives_on(self, layer: Layer) -> Tuple[Primitive, ...]:
        return tuple(p for p in self.primitives if p.layer == layer)
