"""
Filter-graph compositor - merges generator output into one RenderPlan

Layering is fixed (see Layer): primitives are ordered by layer, and within
a layer by generator registration order and then emission order. Enable
predicates are carried through untouched.

In a multi-clip plan every clip context is placed on the joined output
(its start offset and the total length) before generators run, so
overlays that track the whole video can be drawn on each clip.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Union

from demoforge.core.logging import get_logger
from demoforge.models.render import Primitive, RenderPlan, TransitionDescriptor
from demoforge.services.overlays.base import OverlayContext, OverlayGenerator
from demoforge.services.overlays.transitions import CUT, SceneTransitions

logger = get_logger(__name__, component="compositor")

Contexts = Union[OverlayContext, Sequence[OverlayContext], Mapping[int, OverlayContext]]


@dataclass(frozen=True)
class _Registration:
    generator: OverlayGenerator
    clip: int


def _cut_joins(clip_count: int) -> List[TransitionDescriptor]:
    return [
        TransitionDescriptor(from_clip=i - 1, to_clip=i, offset=0.0, kind=CUT, duration=0.0)
        for i in range(1, clip_count)
    ]


def clip_starts(joins: Sequence[TransitionDescriptor], durations: Sequence[float]) -> List[float]:
    """Where each clip starts on the joined output, in seconds"""
    starts = [0.0]
    for join in joins:
        if join.is_cut:
            starts.append(starts[-1] + durations[join.from_clip])
        else:
            starts.append(join.offset)
    return starts


class FilterGraphCompositor:
    """Collects overlay generators per clip and assembles the render plan"""

    def __init__(self):
        self._registrations: List[_Registration] = []
        self._transitions: Optional[SceneTransitions] = None
        self._clip_durations: List[float] = []

    def add(self, generator: OverlayGenerator, clip: int = 0) -> "FilterGraphCompositor":
        self._registrations.append(_Registration(generator, clip))
        return self

    def set_transitions(
        self,
        transitions: SceneTransitions,
        clip_durations: Sequence[float],
    ) -> "FilterGraphCompositor":
        self._transitions = transitions
        self._clip_durations = list(clip_durations)
        return self

    @staticmethod
    def _context_map(contexts: Contexts) -> Dict[int, OverlayContext]:
        if isinstance(contexts, OverlayContext):
            return {0: contexts}
        if isinstance(contexts, Mapping):
            return dict(contexts)
        return dict(enumerate(contexts))

    def build(self, contexts: Contexts) -> RenderPlan:
        """
        Run every registered generator and order the result

        Args:
            contexts: One context, a list indexed by clip, or a clip -> context map
        """
        context_map = self._context_map(contexts)
        default = context_map.get(0, OverlayContext())

        clip_count = max(
            [len(self._clip_durations), 1]
            + [r.clip + 1 for r in self._registrations]
            + [clip + 1 for clip in context_map]
        )
        durations = [context_map.get(clip, default).duration for clip in range(clip_count)]

        if self._transitions is not None and len(self._clip_durations) == clip_count:
            durations = list(self._clip_durations)
            joins = self._transitions.plan(durations)
        else:
            if self._transitions is not None:
                logger.warning("Clip durations do not match clip count, joining with cuts", extra={
                    "clip_durations": len(self._clip_durations),
                    "clips": clip_count,
                })
            joins = _cut_joins(clip_count)

        placed: Dict[int, OverlayContext] = {}
        for clip in range(clip_count):
            base = context_map.get(clip, default)
            placed[clip] = base if base.clip == clip else replace(base, clip=clip)
        if clip_count > 1:
            starts = clip_starts(joins, durations)
            total = starts[-1] + durations[-1]
            for clip, context in placed.items():
                placed[clip] = replace(context, offset=starts[clip], total_duration=total)

        emitted: List[Primitive] = []
        for registration in self._registrations:
            emitted.extend(registration.generator.generate(placed[registration.clip]))

        # Stable: equal layers keep registration then emission order
        ordered = tuple(sorted(emitted, key=lambda p: p.layer))

        plan = RenderPlan(primitives=ordered, transitions=tuple(joins), clip_count=clip_count)
        logger.debug("Assembled render plan", extra={
            "primitives": len(ordered),
            "transitions": len(joins),
            "clips": clip_count,
        })
        return plan
