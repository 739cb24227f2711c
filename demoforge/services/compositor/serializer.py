"""
RenderPlan -> filter_complex text

Per-clip chains are labelled ``[c<i>]``; joins are chained left to right
and the final output is always labelled ``[vout]``.
"""

from typing import List

from demoforge.models.render import RenderPlan

OUTPUT_LABEL = "vout"


def clip_chain(plan: RenderPlan, clip: int) -> str:
    """Comma-joined filters for one clip, ``null`` when the clip has none"""
    filters = [p.to_filter() for p in plan.primitives_for_clip(clip)]
    return ",".join(filters) if filters else "null"


def serialize_plan(plan: RenderPlan) -> str:
    """Single serialization step from the typed plan to graph text"""
    if plan.clip_count <= 1:
        return f"[0:v]{clip_chain(plan, 0)}[{OUTPUT_LABEL}]"

    segments: List[str] = [
        f"[{clip}:v]{clip_chain(plan, clip)}[c{clip}]"
        for clip in range(plan.clip_count)
    ]

    current = "c0"
    last = len(plan.transitions)
    for step, join in enumerate(plan.transitions, start=1):
        label = OUTPUT_LABEL if step == last else f"j{step}"
        segments.append(f"[{current}][c{join.to_clip}]{join.to_filter()}[{label}]")
        current = label

    return ";".join(segments)
