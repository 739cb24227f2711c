"""
Lower-third name/title overlays

Box size follows the text length, the anchor is one of the four screen
corners, and the entrance animation is described as a from/to state pair
that is lowered into time expressions over the entrance window.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from demoforge.config.presets import LOWER_THIRD_PRESETS
from demoforge.models.options import (
    LowerThirdOptions,
    StylePreset,
    build_preset_table,
    resolve_preset,
)
from demoforge.models.render import Layer, Primitive, fmt
from .base import OverlayContext, OverlayGenerator, between, escape_drawtext, to_ffmpeg_color

LOWER_THIRD_STYLE_TABLE = build_preset_table(LOWER_THIRD_PRESETS)

DEFAULT_STYLE = "modern"
DEFAULT_DISPLAY_SECONDS = 5.0

ANIMATIONS = ("slide-in", "fade-in", "scale-up", "wipe")
POSITIONS = ("bottom-left", "bottom-right", "top-left", "top-right")

MARGIN_X = 60
MARGIN_Y = 100
PADDING_X = 24
PADDING_Y = 16
ACCENT_WIDTH = 6
LINE_HEIGHT = 1.3
TITLE_SPACING = 4
CHAR_WIDTH_RATIO = 0.55
SCALE_UP_FROM = 0.8


@dataclass(frozen=True)
class AnimationState:
    opacity: float = 1.0
    translate_x: float = 0.0
    scale: float = 1.0
    reveal: float = 1.0  # visible fraction of the box width


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


class LowerThird(OverlayGenerator):
    """A name (and optional title) card shown over [start_time, end_time]"""

    name = "lower_third"
    layer = Layer.TEXT

    def __init__(
        self,
        label: str,
        title: Optional[str] = None,
        options: Optional[Union[LowerThirdOptions, Mapping[str, Any]]] = None,
        presets: Mapping[str, StylePreset] = LOWER_THIRD_STYLE_TABLE,
    ):
        self.label = label
        self.title = title or None
        self.options = LowerThirdOptions.from_options(options)
        self.preset = resolve_preset(presets, self.options.style, DEFAULT_STYLE).with_overrides(
            animation=self.options.animation,
            animation_duration=self.options.animation_duration,
            background_color=self.options.background_color,
            text_color=self.options.text_color,
            accent_color=self.options.accent_color,
            font_size=self.options.font_size,
        )
        self.position = self.options.position if self.options.position in POSITIONS else POSITIONS[0]
        self.start_time = self.options.start_time
        self.end_time = (
            self.options.end_time
            if self.options.end_time is not None
            else self.start_time + DEFAULT_DISPLAY_SECONDS
        )

    # -- display window ----------------------------------------------------

    def set_display_time(self, start_time: float, end_time: float) -> None:
        self.start_time = start_time
        self.end_time = max(start_time, end_time)

    def get_duration(self) -> float:
        return self.end_time - self.start_time

    def is_visible_at(self, time: float) -> bool:
        return self.start_time <= time <= self.end_time

    # -- geometry ----------------------------------------------------------

    @property
    def name_font_size(self) -> int:
        return self.preset.font_size or 32

    @property
    def title_font_size(self) -> int:
        return self.preset.title_font_size or 20

    def get_dimensions(self) -> Dimensions:
        name_width = len(self.label) * self.name_font_size * CHAR_WIDTH_RATIO
        title_width = len(self.title) * self.title_font_size * CHAR_WIDTH_RATIO if self.title else 0
        width = max(name_width, title_width) + PADDING_X * 2 + ACCENT_WIDTH
        height = PADDING_Y * 2 + self.name_font_size * LINE_HEIGHT
        if self.title:
            height += self.title_font_size * LINE_HEIGHT + TITLE_SPACING
        return Dimensions(width=round(width), height=round(height))

    def get_position(self, frame_width: int, frame_height: int) -> Tuple[int, int]:
        """Top-left corner of the box in frame pixels"""
        dims = self.get_dimensions()
        vertical, horizontal = self.position.split("-")
        x = MARGIN_X if horizontal == "left" else frame_width - MARGIN_X - dims.width
        y = MARGIN_Y if vertical == "top" else frame_height - MARGIN_Y - dims.height
        return int(x), int(y)

    # -- animation ---------------------------------------------------------

    @property
    def animation(self) -> str:
        animation = self.preset.animation or "fade-in"
        return animation if animation in ANIMATIONS else "fade-in"

    @property
    def animation_duration(self) -> float:
        return min(self.preset.animation_duration or 0.5, max(self.get_duration(), 0.0))

    def get_animation_keyframes(
        self,
        animation: Optional[str] = None,
    ) -> Tuple[AnimationState, AnimationState]:
        """(from, to) states of the entrance animation"""
        animation = animation or self.animation
        final = AnimationState()
        if animation == "slide-in":
            offset = self.get_dimensions().width + MARGIN_X
            return AnimationState(opacity=0.0, translate_x=-offset), final
        if animation == "scale-up":
            return AnimationState(opacity=0.0, scale=SCALE_UP_FROM), final
        if animation == "wipe":
            return AnimationState(reveal=0.0), final
        return AnimationState(opacity=0.0), final

    def _progress_expr(self) -> str:
        duration = max(self.animation_duration, 1e-3)
        return f"min(1,max(0,(t-{fmt(self.start_time)})/{fmt(duration)}))"

    def _lerp_expr(self, start: float, end: float) -> str:
        if start == end:
            return fmt(end)
        return f"{fmt(start)}+{fmt(end - start)}*{self._progress_expr()}"

    # -- primitives --------------------------------------------------------

    def generate(self, context: OverlayContext) -> List[Primitive]:
        if self.get_duration() <= 0:
            return []

        dims = self.get_dimensions()
        x, y = self.get_position(context.width, context.height)
        start, end = self.get_animation_keyframes()
        window = between(self.start_time, self.end_time)

        shift = self._lerp_expr(start.translate_x, end.translate_x)
        box_x = f"{x}+{shift}" if start.translate_x != end.translate_x else x
        width_factor = self._lerp_expr(start.scale * start.reveal, end.scale * end.reveal)
        box_w = f"{fmt(dims.width)}*{width_factor}" if width_factor != fmt(1.0) else dims.width
        height_factor = self._lerp_expr(start.scale, end.scale)
        box_h = f"{fmt(dims.height)}*{height_factor}" if height_factor != fmt(1.0) else dims.height
        alpha = self._lerp_expr(start.opacity, end.opacity)

        text_x = f"{x}+{ACCENT_WIDTH + PADDING_X}"
        if start.translate_x != end.translate_x:
            text_x = f"{text_x}+{shift}"

        primitives = [
            self.primitive("drawbox", context, enable=window,
                           x=box_x, y=y, w=box_w, h=box_h,
                           c=to_ffmpeg_color(self.preset.background_color or "#000000CC"),
                           t="fill"),
            self.primitive("drawbox", context, enable=window,
                           x=box_x, y=y, w=ACCENT_WIDTH, h=box_h,
                           c=to_ffmpeg_color(self.preset.accent_color or "#FFFFFF"),
                           t="fill"),
        ]

        name_y = y + PADDING_Y
        primitives.append(self._text(context, self.label, text_x, name_y,
                                     self.name_font_size, alpha, window))
        if self.title:
            title_y = name_y + round(self.name_font_size * LINE_HEIGHT) + TITLE_SPACING
            primitives.append(self._text(context, self.title, text_x, title_y,
                                         self.title_font_size, alpha, window))
        return primitives

    def _text(
        self,
        context: OverlayContext,
        text: str,
        x: Union[int, str],
        y: int,
        size: int,
        alpha: str,
        window: str,
    ) -> Primitive:
        params = {
            "text": f"'{escape_drawtext(text)}'",
            "fontsize": size,
            "fontcolor": to_ffmpeg_color(self.preset.text_color or "#FFFFFF"),
            "x": x,
            "y": y,
        }
        if self.preset.font_family:
            params["font"] = f"'{self.preset.font_family}'"
        if alpha != fmt(1.0):
            params["alpha"] = alpha
        return self.primitive("drawtext", context, enable=window, **params)
