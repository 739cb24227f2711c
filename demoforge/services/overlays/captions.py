"""
Animated captions

Captions are read from subtitle text, split into evenly timed words, and
turned into per-frame animation states (karaoke, pop, typewriter) and into
drawtext primitives gated on playback time. All times are in seconds.
"""

import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from demoforge.config.constants import FALLBACK_FPS
from demoforge.config.presets import CAPTION_POSITIONS, CAPTION_PRESETS
from demoforge.core.logging import get_logger
from demoforge.models.captions import Caption, CaptionFrame, Word
from demoforge.models.options import (
    CaptionOptions,
    StylePreset,
    build_preset_table,
    resolve_preset,
)
from demoforge.models.render import Layer, Primitive, fmt
from .base import OverlayContext, OverlayGenerator, between, escape_drawtext, to_ffmpeg_color
from .subtitles import parse_srt

logger = get_logger(__name__, component="captions")

CAPTION_STYLE_TABLE = build_preset_table(CAPTION_PRESETS)

DEFAULT_STYLE = "standard"
DEFAULT_POSITION = "bottom"

# Approximate glyph advance as a fraction of font size
CHAR_WIDTH_RATIO = 0.5
UNSPOKEN_OPACITY = 0.4

POP_GROW_SECONDS = 0.15
POP_SETTLE_SECONDS = 0.25
POP_START_SCALE = 0.5
POP_PEAK_SCALE = 1.1
FADE_SECONDS = 0.2


def split_into_words(caption: Caption) -> List[Word]:
    """
    Spread a caption's span evenly over its words

    The first word starts at the caption start and the last word ends
    exactly at the caption end.
    """
    texts = caption.text.split()
    if not texts:
        return []
    per_word = caption.duration / len(texts)
    words = []
    for i, text in enumerate(texts):
        start = caption.start_time + i * per_word
        end = caption.end_time if i == len(texts) - 1 else caption.start_time + (i + 1) * per_word
        words.append(Word(text=text, start_time=start, end_time=end))
    return words


def calculate_position_y(position: str, height: int) -> int:
    """Vertical anchor in pixels for a named caption position"""
    fraction = CAPTION_POSITIONS.get(position, CAPTION_POSITIONS[DEFAULT_POSITION])
    return round(height * fraction)


def active_word_index(words: Sequence[Word], time: float) -> Optional[int]:
    """Word being spoken at ``time``; the last word owns its end point"""
    last = len(words) - 1
    for i, word in enumerate(words):
        if word.start_time <= time < word.end_time or (i == last and time == word.end_time):
            return i
    return None


def pop_scale(elapsed: float) -> float:
    """Scale of a word ``elapsed`` seconds after it is spoken"""
    if elapsed < 0:
        return POP_START_SCALE
    if elapsed < POP_GROW_SECONDS:
        return POP_START_SCALE + (POP_PEAK_SCALE - POP_START_SCALE) * (elapsed / POP_GROW_SECONDS)
    if elapsed < POP_SETTLE_SECONDS:
        progress = (elapsed - POP_GROW_SECONDS) / (POP_SETTLE_SECONDS - POP_GROW_SECONDS)
        return POP_PEAK_SCALE - (POP_PEAK_SCALE - 1.0) * progress
    return 1.0


def pop_opacity(elapsed: float) -> float:
    if elapsed < 0:
        return 0.0
    return min(1.0, elapsed / POP_GROW_SECONDS)


def _frame_times(caption: Caption, fps: float, minimum_frames: int = 1) -> List[float]:
    if fps <= 0:
        fps = FALLBACK_FPS
    natural = max(1, math.ceil(caption.duration * fps))
    frames = max(minimum_frames, natural)
    step = caption.duration / frames if frames > natural else 1 / fps
    return [caption.start_time + i * step for i in range(frames)]


def karaoke_frames(caption: Caption, fps: float) -> List[CaptionFrame]:
    """Whole caption visible, the spoken word highlighted"""
    words = split_into_words(caption)
    texts = tuple(w.text for w in words)
    return [
        CaptionFrame(
            frame=i,
            time=time,
            text=caption.text,
            visible_words=texts,
            active_word=active_word_index(words, time),
            scales=tuple(1.0 for _ in words),
            opacities=tuple(1.0 if time >= w.start_time else UNSPOKEN_OPACITY for w in words),
        )
        for i, time in enumerate(_frame_times(caption, fps))
    ]


def pop_frames(caption: Caption, fps: float) -> List[CaptionFrame]:
    """Each word scales in from 0.5, overshoots to 1.1 and settles at 1.0"""
    words = split_into_words(caption)
    frames = []
    for i, time in enumerate(_frame_times(caption, fps)):
        shown = [w for w in words if time >= w.start_time]
        frames.append(CaptionFrame(
            frame=i,
            time=time,
            text=" ".join(w.text for w in shown),
            visible_words=tuple(w.text for w in shown),
            active_word=active_word_index(words, time),
            scales=tuple(pop_scale(time - w.start_time) for w in words),
            opacities=tuple(pop_opacity(time - w.start_time) for w in words),
        ))
    return frames


def typewriter_frames(caption: Caption, fps: float) -> List[CaptionFrame]:
    """
    Character-by-character reveal

    At least one frame per character, so every character gets its own frame
    even when the caption is shorter than its text at the given frame rate.
    """
    text = caption.text
    times = _frame_times(caption, fps, minimum_frames=len(text))
    count = len(times)
    frames = []
    for i, time in enumerate(times):
        revealed = text[:min(len(text), math.ceil((i + 1) * len(text) / count))]
        frames.append(CaptionFrame(
            frame=i,
            time=time,
            text=revealed,
            visible_words=tuple(revealed.split()),
        ))
    return frames


FRAME_GENERATORS = {
    "karaoke": karaoke_frames,
    "pop": pop_frames,
    "typewriter": typewriter_frames,
}


def generate_caption_frames(caption: Caption, style: str, fps: float) -> List[CaptionFrame]:
    """Per-frame animation states for one caption; other styles animate like karaoke"""
    generator = FRAME_GENERATORS.get(style, karaoke_frames)
    return generator(caption, fps)


class CaptionOverlay(OverlayGenerator):
    """
    Drawtext primitives for a list of captions

    Every caption is drawn centred at its position anchor while it is on
    screen. Karaoke adds an accent copy of each word during its spoken
    window; pop and typewriter build the line word by word; fade ramps
    the caption's alpha in.
    """

    name = "captions"
    layer = Layer.TEXT

    def __init__(
        self,
        captions: Union[str, Sequence[Caption]],
        options: Optional[Union[CaptionOptions, Mapping[str, Any]]] = None,
        presets: Mapping[str, StylePreset] = CAPTION_STYLE_TABLE,
    ):
        self.captions = parse_srt(captions) if isinstance(captions, str) else list(captions)
        self.options = CaptionOptions.from_options(options)
        self.preset = resolve_preset(presets, self.options.style, DEFAULT_STYLE).with_overrides(
            font_size=self.options.font_size,
            color=self.options.color,
            accent_color=self.options.accent_color,
            background_color=self.options.background_color,
        )

    @property
    def font_size(self) -> int:
        return self.preset.font_size or 42

    def text_width(self, text: str) -> float:
        return len(text) * self.font_size * CHAR_WIDTH_RATIO

    def generate_frames(self, caption: Caption) -> List[CaptionFrame]:
        return generate_caption_frames(caption, self.options.style, self.options.fps)

    def _drawtext(
        self,
        context: OverlayContext,
        text: str,
        x: str,
        color: str,
        enable: str,
        boxed: bool = False,
        alpha: Optional[str] = None,
    ) -> Primitive:
        y = calculate_position_y(self.options.position, context.height)
        params = {
            "text": f"'{escape_drawtext(text)}'",
            "fontsize": self.font_size,
            "fontcolor": to_ffmpeg_color(color),
            "x": x,
            "y": f"{y}-text_h/2",
        }
        if self.preset.font_family:
            params["font"] = f"'{self.preset.font_family}'"
        if boxed and self.preset.background_color:
            params["box"] = 1
            params["boxcolor"] = to_ffmpeg_color(self.preset.background_color)
            params["boxborderw"] = 20
        if alpha is not None:
            params["alpha"] = alpha
        return self.primitive("drawtext", context, enable=enable, **params)

    def _caption_primitives(self, context: OverlayContext, caption: Caption) -> List[Primitive]:
        style = self.options.style
        color = self.preset.color or "#FFFFFF"
        accent = self.preset.accent_color or color
        window = between(caption.start_time, caption.end_time)
        line_x = (context.width - self.text_width(caption.text)) / 2

        if style in ("pop", "typewriter"):
            primitives = []
            words = split_into_words(caption)
            for i, word in enumerate(words):
                shown = " ".join(w.text for w in words[:i + 1])
                if style == "typewriter":
                    until = words[i + 1].start_time if i + 1 < len(words) else caption.end_time
                    primitives.append(self._drawtext(
                        context, shown, fmt(line_x), color,
                        between(word.start_time, until), boxed=True,
                    ))
                else:
                    offset = self.text_width(shown) - self.text_width(word.text)
                    fade_in = f"min(1,(t-{fmt(word.start_time)})/{fmt(POP_GROW_SECONDS)})"
                    primitives.append(self._drawtext(
                        context, word.text, fmt(line_x + offset), accent,
                        between(word.start_time, caption.end_time), alpha=fade_in,
                    ))
            return primitives

        alpha = None
        if style == "fade":
            duration = self.preset.animation_duration or FADE_SECONDS
            alpha = f"min(1,(t-{fmt(caption.start_time)})/{fmt(duration)})"
        line_expr = fmt(line_x) if style == "karaoke" else "(w-text_w)/2"
        primitives = [
            self._drawtext(context, caption.text, line_expr, color, window,
                           boxed=True, alpha=alpha)
        ]

        if style == "karaoke":
            consumed = ""
            for word in split_into_words(caption):
                # Words are joined by single spaces in the base line
                x = line_x + self.text_width(consumed)
                primitives.append(self._drawtext(
                    context, word.text, fmt(x), accent,
                    between(word.start_time, word.end_time),
                ))
                consumed += word.text + " "
        return primitives

    def generate(self, context: OverlayContext) -> List[Primitive]:
        primitives = []
        for caption in self.captions:
            if caption.end_time <= caption.start_time or not caption.text.strip():
                continue
            primitives.extend(self._caption_primitives(context, caption))
        logger.debug("Generated caption primitives", extra={
            "captions": len(self.captions),
            "primitives": len(primitives),
            "style": self.options.style,
        })
        return primitives
