"""
Demo render orchestration
Wires pacing, marker translation, overlay generation, plan assembly and
rendering for one demo, and runs independent demos concurrently
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from demoforge import config
from demoforge.core import (
    ConfigurationError,
    LogTimer,
    clear_context,
    get_logger,
    probe_video_metadata,
    set_batch_id,
    set_render_id,
)
from demoforge.models.markers import Marker
from demoforge.models.options import ProgressBarOptions, TransitionOptions
from demoforge.models.render import RenderPlan
from demoforge.models.timeline import PacingResult, TimelineEntry, timeline_total_duration
from demoforge.services.compositor import FilterGraphCompositor, RenderEngine, RenderResult
from demoforge.services.markers import chapter_markers, generate_zoom_keyframes
from demoforge.services.overlays import (
    OverlayContext,
    OverlayGenerator,
    SceneTransitions,
    ZoomOverlay,
    create_progress_indicator,
)
from demoforge.services.pacing import (
    add_dramatic_pauses,
    generate_pacing_timeline,
    sync_with_voiceover,
)

logger = get_logger(__name__, component="render_pipeline")

OverlaySpec = Union[OverlayGenerator, Tuple[OverlayGenerator, int]]


@dataclass
class RenderJob:
    """One demo to render: its clips, its narrative input and its overlays"""
    inputs: List[str]
    output_path: str
    sections: Sequence[Any] = ()
    pacing: Optional[Mapping[str, Any]] = None
    voiceover: Optional[Sequence[Any]] = None
    key_moments: Optional[Sequence[Any]] = None
    markers: Sequence[Any] = ()
    overlays: Sequence[OverlaySpec] = ()
    transition: Optional[Union[TransitionOptions, Mapping[str, Any]]] = None
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])


class DemoRenderPipeline:
    """
    Runs the stages for a demo

    Responsibilities:
    - Build the paced timeline (pacing, voiceover sync, pauses)
    - Probe clips and build one overlay context per clip
    - Assemble the layered render plan
    - Materialize plans, several at a time for batch export
    """

    def __init__(
        self,
        engine: Optional[RenderEngine] = None,
        progress: Optional[Union[ProgressBarOptions, Mapping[str, Any]]] = None,
        max_concurrent: Optional[int] = None,
    ):
        """
        Args:
            engine: Render engine (defaults to one built from config)
            progress: Progress indicator options; None disables the indicator
            max_concurrent: Renders allowed at once (defaults to MAX_CONCURRENT_RENDERS)
        """
        self.engine = engine or RenderEngine()
        self.progress = progress
        self.max_concurrent = max_concurrent or config.MAX_CONCURRENT_RENDERS

    def build_timeline(
        self,
        sections: Sequence[Any],
        options: Optional[Mapping[str, Any]] = None,
        voiceover: Optional[Sequence[Any]] = None,
        key_moments: Optional[Sequence[Any]] = None,
    ) -> PacingResult:
        """
        Pace sections, fit narration, then place pauses

        Raises:
            ConfigurationError: If the sections cannot be paced
        """
        result = generate_pacing_timeline(sections, options)
        timeline = result.timeline

        if voiceover:
            sync_with_voiceover(timeline, voiceover, transition_gap=result.transition_gap)
        add_dramatic_pauses(timeline, key_moments)

        return PacingResult(
            timeline=timeline,
            total_duration=timeline_total_duration(timeline, result.transition_gap),
            sections=len(timeline),
            transition_gap=result.transition_gap,
        )

    async def probe_contexts(
        self,
        inputs: Sequence[str],
        timeline: Sequence[TimelineEntry] = (),
        chapters: Sequence[Marker] = (),
    ) -> List[OverlayContext]:
        """One context per input clip, each carrying the output timeline and chapters"""
        metadata = await asyncio.gather(*(probe_video_metadata(path) for path in inputs))
        return [
            OverlayContext.from_metadata(meta, timeline=timeline, chapters=chapters, clip=clip)
            for clip, meta in enumerate(metadata)
        ]

    async def build_plan(
        self,
        inputs: Sequence[str],
        timeline: Sequence[TimelineEntry] = (),
        markers: Sequence[Any] = (),
        overlays: Sequence[OverlaySpec] = (),
        transition: Optional[Union[TransitionOptions, Mapping[str, Any]]] = None,
    ) -> RenderPlan:
        """
        Probe the clips and assemble every overlay into one plan

        The progress indicator and the zoom transform from zoom markers are
        drawn on every clip against the joined output, so they span the
        whole video. Clips are joined with ``transition`` when given,
        otherwise with cuts.
        """
        chapters = chapter_markers(markers)
        contexts = await self.probe_contexts(inputs, timeline, chapters)

        compositor = FilterGraphCompositor()
        clips = range(len(contexts))
        if self.progress is not None:
            indicator = create_progress_indicator(self.progress)
            for clip in clips:
                compositor.add(indicator, clip=clip)

        keyframes = generate_zoom_keyframes(markers)
        if keyframes:
            zoom = ZoomOverlay(keyframes)
            for clip in clips:
                compositor.add(zoom, clip=clip)

        for spec in overlays:
            generator, clip = spec if isinstance(spec, tuple) else (spec, 0)
            compositor.add(generator, clip=clip)

        if transition is not None and len(contexts) > 1:
            compositor.set_transitions(
                SceneTransitions(transition),
                [context.duration for context in contexts],
            )

        return compositor.build(contexts)

    async def render(
        self,
        plan: RenderPlan,
        inputs: Sequence[str],
        output_path: str,
    ) -> RenderResult:
        return await self.engine.materialize(plan, inputs, output_path)

    async def run(self, job: RenderJob) -> RenderResult:
        """Timeline, plan and render for a single job"""
        set_render_id(job.job_id)
        timeline: Sequence[TimelineEntry] = ()
        if job.sections:
            timeline = self.build_timeline(
                job.sections, job.pacing, job.voiceover, job.key_moments
            ).timeline

        plan = await self.build_plan(
            job.inputs,
            timeline=timeline,
            markers=job.markers,
            overlays=job.overlays,
            transition=job.transition,
        )
        return await self.render(plan, job.inputs, job.output_path)

    async def render_batch(self, jobs: Sequence[RenderJob]) -> List[RenderResult]:
        """
        Render independent jobs, at most ``max_concurrent`` at once

        A failing job yields a result with no output and the error text;
        the other jobs are unaffected.
        """
        set_batch_id(uuid.uuid4().hex[:8])
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def run_job(job: RenderJob) -> RenderResult:
            async with semaphore:
                return await self.run(job)

        try:
            with LogTimer(logger, f"render_batch ({len(jobs)} jobs)"):
                results = await asyncio.gather(
                    *(run_job(job) for job in jobs), return_exceptions=True
                )

            final_results: List[RenderResult] = []
            for job, result in zip(jobs, results):
                if isinstance(result, Exception):
                    level = "Invalid" if isinstance(result, ConfigurationError) else "Failed"
                    logger.error(f"{level} render job {job.job_id}: {result}", extra={
                        "job_id": job.job_id,
                        "error": str(result),
                    })
                    final_results.append(RenderResult(output_path=None, error=str(result)))
                else:
                    final_results.append(result)

            logger.info("Batch render complete", extra={
                "jobs": len(final_results),
                "rendered": sum(1 for r in final_results if r.succeeded),
                "degraded": sum(1 for r in final_results if r.degraded),
                "failed": sum(1 for r in final_results if r.output_path is None),
            })
            return final_results
        finally:
            clear_context()
