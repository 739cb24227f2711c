"""
Cursor click effects

Driven by raw click events rather than the timeline. Each click produces
primitives active for a fixed window after the click, gated on playback
time in seconds.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, Union

from demoforge.config.presets import CLICK_EFFECT_PRESETS
from demoforge.core.logging import get_logger
from demoforge.models.captions import ClickEvent
from demoforge.models.options import (
    ClickEffectOptions,
    StylePreset,
    build_preset_table,
    resolve_preset,
)
from demoforge.models.render import Layer, Primitive, fmt
from .base import OverlayContext, OverlayGenerator, between, to_ffmpeg_color

logger = get_logger(__name__, component="click_effects")

CLICK_EFFECT_STYLE_TABLE = build_preset_table(CLICK_EFFECT_PRESETS)

DEFAULT_STYLE = "ripple"

RIPPLE_RINGS = 4
CENTER_DOT_SIZE = 8
CENTER_DOT_OPACITY = 0.9

ClickInput = Union[ClickEvent, Dict[str, Any]]


class ClickEffect(OverlayGenerator):
    """Shared setup for the click effect styles"""

    name = "click_effects"
    layer = Layer.INTERACTION
    style = DEFAULT_STYLE

    def __init__(
        self,
        clicks: Sequence[ClickInput],
        options: Optional[Union[ClickEffectOptions, Mapping[str, Any]]] = None,
        presets: Mapping[str, StylePreset] = CLICK_EFFECT_STYLE_TABLE,
    ):
        self.clicks = [c if isinstance(c, ClickEvent) else ClickEvent.from_dict(c) for c in clicks]
        self.options = ClickEffectOptions.from_options(options)
        self.preset = resolve_preset(presets, self.style, DEFAULT_STYLE).with_overrides(
            color=self.options.color,
            size=self.options.size,
            duration=self.options.duration,
            opacity=self.options.opacity,
        )

    @property
    def size(self) -> float:
        return self.preset.size or 60

    @property
    def duration(self) -> float:
        return self.preset.duration or 0.4

    @property
    def opacity(self) -> float:
        return self.preset.opacity if self.preset.opacity is not None else 0.6

    def color(self, opacity: float) -> str:
        return to_ffmpeg_color(self.preset.color or "#3B82F6", round(opacity, 2))

    def growth(self, click: ClickEvent) -> str:
        """0 -> 1 over the effect window"""
        return f"min(1,(t-{fmt(click.time)})/{fmt(self.duration)})"

    def effect_primitives(self, context: OverlayContext, click: ClickEvent) -> List[Primitive]:
        raise NotImplementedError

    def generate(self, context: OverlayContext) -> List[Primitive]:
        primitives = []
        for click in sorted(self.clicks, key=lambda c: c.time):
            primitives.extend(self.effect_primitives(context, click))
        logger.debug("Generated click effect primitives", extra={
            "style": self.style,
            "clicks": len(self.clicks),
        })
        return primitives


class RippleEffect(ClickEffect):
    """Four staggered concentric rings plus a short-lived center dot"""
    style = "ripple"

    def effect_primitives(self, context: OverlayContext, click: ClickEvent) -> List[Primitive]:
        cx, cy = round(click.x), round(click.y)
        end = click.time + self.duration
        primitives = []
        for ring in range(RIPPLE_RINGS):
            max_radius = self.size * (0.4 + ring * 0.2)
            ring_opacity = max(0.1, self.opacity - ring * 0.15)
            box = round(max_radius * 0.7)
            start = click.time + ring * self.duration / 6
            primitives.append(self.primitive(
                "drawbox", context, enable=between(start, end),
                x=cx - box / 2, y=cy - box / 2, w=box, h=box,
                c=self.color(ring_opacity), t=2,
            ))

        half = CENTER_DOT_SIZE // 2
        primitives.append(self.primitive(
            "drawbox", context, enable=between(click.time, click.time + self.duration / 3),
            x=cx - half, y=cy - half, w=CENTER_DOT_SIZE, h=CENTER_DOT_SIZE,
            c=self.color(CENTER_DOT_OPACITY), t="fill",
        ))
        return primitives


class PulseEffect(ClickEffect):
    """A filled square swelling out from the click point"""
    style = "pulse"

    def effect_primitives(self, context: OverlayContext, click: ClickEvent) -> List[Primitive]:
        size = f"{fmt(self.size)}*{self.growth(click)}"
        return [self.primitive(
            "drawbox", context, enable=between(click.time, click.time + self.duration),
            x=f"{round(click.x)}-w/2", y=f"{round(click.y)}-h/2", w=size, h=size,
            c=self.color(self.opacity), t="fill",
        )]


class RingEffect(ClickEffect):
    """A single outline expanding from half size to full size"""
    style = "ring"

    def effect_primitives(self, context: OverlayContext, click: ClickEvent) -> List[Primitive]:
        size = f"{fmt(self.size)}*(0.5+0.5*{self.growth(click)})"
        return [self.primitive(
            "drawbox", context, enable=between(click.time, click.time + self.duration),
            x=f"{round(click.x)}-w/2", y=f"{round(click.y)}-h/2", w=size, h=size,
            c=self.color(self.opacity), t=3,
        )]


CLICK_EFFECT_STYLES: Dict[str, Type[ClickEffect]] = {
    cls.style: cls for cls in (RippleEffect, PulseEffect, RingEffect)
}


def create_click_effect(
    clicks: Sequence[ClickInput],
    options: Optional[Union[ClickEffectOptions, Mapping[str, Any]]] = None,
    presets: Mapping[str, StylePreset] = CLICK_EFFECT_STYLE_TABLE,
) -> ClickEffect:
    """Instantiate the click effect class matching ``options.style``"""
    opts = ClickEffectOptions.from_options(options)
    cls = CLICK_EFFECT_STYLES.get(opts.style)
    if cls is None:
        logger.warning("Unknown click effect style, using ripple", extra={"style": opts.style})
        cls = RippleEffect
    return cls(clicks, opts, presets)
