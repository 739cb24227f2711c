"""
Progress indicator overlays

One generator class per style (bar, line, dots, circular, chapter).
Use ``create_progress_indicator`` to pick the class from options.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from demoforge.config.presets import PROGRESS_PRESETS
from demoforge.models.options import (
    ProgressBarOptions,
    StylePreset,
    build_preset_table,
    resolve_preset,
)
from demoforge.models.render import Layer, Primitive, fmt
from demoforge.core.logging import get_logger
from .base import OverlayContext, OverlayGenerator, at_or_after, to_ffmpeg_color

logger = get_logger(__name__, component="overlays")

PROGRESS_STYLE_TABLE = build_preset_table(PROGRESS_PRESETS)

DEFAULT_STYLE = "bar"
DEFAULT_BAR_HEIGHT = 4


class ProgressIndicator(OverlayGenerator):
    """Shared geometry and colors for the progress styles"""

    name = "progress"
    layer = Layer.BACKGROUND
    style = DEFAULT_STYLE

    def __init__(
        self,
        options: Optional[Union[ProgressBarOptions, Mapping[str, Any]]] = None,
        presets: Mapping[str, StylePreset] = PROGRESS_STYLE_TABLE,
    ):
        self.options = ProgressBarOptions.from_options(options)
        self.preset = resolve_preset(presets, self.style, DEFAULT_STYLE).with_overrides(
            color=self.options.color,
            background_color=self.options.background_color,
            size=self.options.height,
        )

    @property
    def bar_height(self) -> int:
        return int(self.preset.size or DEFAULT_BAR_HEIGHT)

    @property
    def fg(self) -> str:
        return to_ffmpeg_color(self.preset.color or "#3B82F6")

    @property
    def bg(self) -> str:
        return to_ffmpeg_color(self.preset.background_color or "#00000033")

    def y_position(self, context: OverlayContext) -> int:
        padding = int(self.options.padding)
        if self.options.position == "top":
            return padding
        return context.height - self.bar_height - padding

    def box(
        self,
        context: OverlayContext,
        x: Union[int, float, str],
        y: Union[int, float, str],
        w: Union[int, float, str],
        h: Union[int, float, str],
        color: str,
        enable: Optional[str] = None,
    ) -> Primitive:
        return self.primitive("drawbox", context, enable=enable,
                              x=x, y=y, w=w, h=h, c=color, t="fill")

    def linear_fill(self, context: OverlayContext, y: float, height: int) -> List[Primitive]:
        width = context.width
        duration = max(context.output_duration, 1e-3)
        elapsed = context.output_time()
        return [
            self.box(context, 0, y, width, height, self.bg),
            self.box(context, 0, y, f"min({width},{elapsed}/{fmt(duration)}*{width})", height, self.fg),
        ]


class BarProgress(ProgressIndicator):
    """Full-width bar growing linearly with elapsed time"""
    style = "bar"

    def generate(self, context: OverlayContext) -> List[Primitive]:
        return self.linear_fill(context, self.y_position(context), self.bar_height)


class LineProgress(ProgressIndicator):
    """Thin line centred in the bar's slot"""
    style = "line"

    def generate(self, context: OverlayContext) -> List[Primitive]:
        line_height = max(2, self.bar_height // 2)
        y = self.y_position(context) + (self.bar_height - line_height) / 2
        return self.linear_fill(context, y, line_height)


class DotsProgress(ProgressIndicator):
    """Fixed row of dots, each lit once its share of the video has played"""
    style = "dots"

    def generate(self, context: OverlayContext) -> List[Primitive]:
        count = max(1, self.options.dot_count)
        size = self.bar_height
        y = self.y_position(context)
        spacing = (context.width - size * count) / (count + 1)

        primitives = []
        for i in range(count):
            x = round(spacing + i * (size + spacing))
            activate = context.local_time(i / count * context.output_duration)
            primitives.append(self.box(context, x, y, size, size, self.bg))
            primitives.append(
                self.box(context, x, y, size, size, self.fg, enable=at_or_after(activate))
            )
        return primitives


class CircularProgress(ProgressIndicator):
    """Ring of small markers in the bottom-right corner lit clockwise"""
    style = "circular"

    CORNER_OFFSET = 30
    MARKER_SIZE = 4

    def generate(self, context: OverlayContext) -> List[Primitive]:
        radius = self.bar_height
        segments = max(1, self.options.segment_count)
        cx = context.width - self.CORNER_OFFSET
        cy = context.height - self.CORNER_OFFSET
        half = self.MARKER_SIZE // 2

        primitives = [
            self.box(context, cx - radius, cy - radius, radius * 2, radius * 2, self.bg)
        ]
        for i in range(segments):
            angle = i / segments * math.pi * 2 - math.pi / 2
            x = round(cx + math.cos(angle) * (radius - 2))
            y = round(cy + math.sin(angle) * (radius - 2))
            primitives.append(self.box(
                context, x - half, y - half, self.MARKER_SIZE, self.MARKER_SIZE, self.fg,
                enable=at_or_after(context.local_time(i / segments * context.output_duration)),
            ))
        return primitives


class ChapterProgress(ProgressIndicator):
    """
    One segment per chapter, each filling with time relative to its own window

    Falls back to a plain bar when there are no chapters.
    """
    style = "chapter"

    def generate(self, context: OverlayContext) -> List[Primitive]:
        windows = context.chapter_windows()
        y = self.y_position(context)
        height = self.bar_height
        if not windows:
            return self.linear_fill(context, y, height)

        gap = self.options.segment_gap
        count = len(windows)
        segment_width = round((context.width - gap * (count - 1)) / count)

        primitives = []
        for i, window in enumerate(windows):
            x = round(i * (segment_width + gap))
            span = max(window.duration, 1e-3)
            relative = f"min(1,max(0,({context.output_time()}-{fmt(window.start)})/{fmt(span)}))"
            primitives.append(self.box(context, x, y, segment_width, height, self.bg))
            primitives.append(self.box(
                context, x, y, f"{segment_width}*{relative}", height, self.fg,
                enable=at_or_after(context.local_time(window.start)),
            ))
        return primitives


PROGRESS_STYLES: Dict[str, Type[ProgressIndicator]] = {
    cls.style: cls
    for cls in (BarProgress, LineProgress, DotsProgress, CircularProgress, ChapterProgress)
}


def create_progress_indicator(
    options: Optional[Union[ProgressBarOptions, Mapping[str, Any]]] = None,
    presets: Mapping[str, StylePreset] = PROGRESS_STYLE_TABLE,
) -> ProgressIndicator:
    """Instantiate the progress class matching ``options.style``"""
    opts = ProgressBarOptions.from_options(options)
    cls = PROGRESS_STYLES.get(opts.style)
    if cls is None:
        logger.warning("Unknown progress style, using bar", extra={"style": opts.style})
        cls = BarProgress
    return cls(opts, presets)
