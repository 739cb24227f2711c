"""
Zoom transforms from zoom keyframes

All keyframes are folded into a single zoompan primitive whose zoom and
focus expressions are piecewise over input time. Each keyframe eases in
over its duration and holds until the next keyframe takes over.

Keyframes are on the output timeline. In a multi-clip plan each clip gets
the keyframes that fall inside it, shifted to clip time, and starts
unzoomed.
"""

from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence, Union

from demoforge.models.markers import ZoomKeyframe
from demoforge.models.options import ZoomOptions
from demoforge.models.render import Layer, Primitive, fmt
from .base import OverlayContext, OverlayGenerator


def _piecewise(starts: Sequence[float], pieces: Sequence[str], before: str) -> str:
    """``before`` until the first start, then each piece until the next start"""
    expr = pieces[-1]
    for start, piece in zip(reversed(starts[1:]), reversed(pieces[:-1])):
        expr = f"if(lt(it,{fmt(start)}),{piece},{expr})"
    return f"if(lt(it,{fmt(starts[0])}),{before},{expr})"


class ZoomOverlay(OverlayGenerator):
    """Lowers zoom keyframes (ms) into a zoompan transform"""

    name = "zoom"
    layer = Layer.MOTION

    def __init__(
        self,
        keyframes: Sequence[ZoomKeyframe],
        options: Optional[Union[ZoomOptions, Mapping[str, Any]]] = None,
    ):
        self.keyframes = sorted(keyframes, key=lambda k: k.time)
        self.options = ZoomOptions.from_options(options)

    def keyframes_for(self, context: OverlayContext) -> List[ZoomKeyframe]:
        """Keyframes inside the context's clip, in clip time"""
        start = context.offset * 1000
        end = (context.offset + context.duration) * 1000
        return [
            replace(k, time=k.time - start)
            for k in self.keyframes
            if k.time >= start and (context.is_last_clip or k.time < end)
        ]

    def zoom_expression(self, keyframes: Sequence[ZoomKeyframe]) -> str:
        starts = [k.time / 1000 for k in keyframes]
        pieces = []
        previous = 1.0
        for start, keyframe in zip(starts, keyframes):
            ramp = max(keyframe.duration / 1000, 1e-3)
            delta = keyframe.zoom - previous
            pieces.append(
                f"{fmt(previous)}+{fmt(delta)}*min(1,(it-{fmt(start)})/{fmt(ramp)})"
            )
            previous = keyframe.zoom
        return _piecewise(starts, pieces, "1")

    def focus_expression(self, keyframes: Sequence[ZoomKeyframe], axis: str) -> str:
        size = "iw" if axis == "x" else "ih"
        starts = [k.time / 1000 for k in keyframes]
        pieces = [fmt(k.x if axis == "x" else k.y) for k in keyframes]
        focus = _piecewise(starts, pieces, "0.5")
        return f"max(0,min({size}-{size}/zoom,{focus}*{size}-{size}/zoom/2))"

    def generate(self, context: OverlayContext) -> List[Primitive]:
        keyframes = self.keyframes_for(context)
        if not keyframes:
            return []
        width = context.width or self.options.width
        height = context.height or self.options.height
        fps = context.fps or self.options.fps
        return [self.primitive(
            "zoompan", context,
            z=self.zoom_expression(keyframes),
            x=self.focus_expression(keyframes, "x"),
            y=self.focus_expression(keyframes, "y"),
            d=1,
            s=f"{width}x{height}",
            fps=fmt(fps),
        )]
