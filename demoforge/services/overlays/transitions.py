"""
Scene transitions between adjacent clips

Transitions act on whole clips, so they are emitted as join descriptors
rather than per-frame primitives. Offsets are in seconds on the running
joined timeline.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

from demoforge.config.presets import TRANSITION_PRESETS
from demoforge.core.logging import get_logger
from demoforge.models.options import (
    StylePreset,
    TransitionOptions,
    build_preset_table,
    resolve_preset,
)
from demoforge.models.render import Layer, TransitionDescriptor

logger = get_logger(__name__, component="transitions")

TRANSITION_STYLE_TABLE = build_preset_table(TRANSITION_PRESETS)

DEFAULT_KIND = "fade"
CUT = "none"


def calculate_offset(duration: float, transition_duration: float) -> float:
    """When the transition starts within the outgoing clip; never before 0"""
    return max(0.0, duration - transition_duration)


class SceneTransitions:
    """Plans the joins between a sequence of clips"""

    name = "transitions"
    layer = Layer.TRANSITION

    def __init__(
        self,
        options: Optional[Union[TransitionOptions, Mapping[str, Any]]] = None,
        presets: Mapping[str, StylePreset] = TRANSITION_STYLE_TABLE,
    ):
        self.options = TransitionOptions.from_options(options)
        self.kind = self.options.kind
        if self.kind == CUT:
            self.preset = None
        else:
            preset = resolve_preset(presets, self.kind, DEFAULT_KIND)
            self.kind = preset.name
            self.preset = preset.with_overrides(
                duration=self.options.duration,
                easing=self.options.easing,
            )

    @property
    def duration(self) -> float:
        if self.preset is None:
            return 0.0
        return self.preset.duration or 0.5

    def describe(
        self,
        from_clip: int,
        to_clip: int,
        clip_duration: float,
    ) -> TransitionDescriptor:
        """Join descriptor for one pair, ``clip_duration`` being the outgoing length"""
        if self.preset is None:
            return TransitionDescriptor(
                from_clip=from_clip, to_clip=to_clip, offset=clip_duration,
                kind=CUT, duration=0.0,
            )
        # Never longer than the outgoing clip
        duration = min(self.duration, clip_duration) if clip_duration > 0 else self.duration
        return TransitionDescriptor(
            from_clip=from_clip,
            to_clip=to_clip,
            offset=calculate_offset(clip_duration, duration),
            kind=self.kind,
            duration=duration,
            easing=self.preset.easing or "linear",
            animation=self.preset.animation or self.kind,
        )

    def plan(self, clip_durations: Sequence[float]) -> List[TransitionDescriptor]:
        """
        Descriptors for every adjacent pair of clips

        Offsets accumulate: each join is placed relative to the output of
        the previous join.
        """
        descriptors = []
        if len(clip_durations) < 2:
            return descriptors

        running = clip_durations[0]
        for i in range(1, len(clip_durations)):
            descriptor = self.describe(i - 1, i, running)
            descriptors.append(descriptor)
            running = descriptor.offset + clip_durations[i]

        logger.debug("Planned clip transitions", extra={
            "clips": len(clip_durations),
            "kind": self.kind,
            "joined_duration": running,
        })
        return descriptors
