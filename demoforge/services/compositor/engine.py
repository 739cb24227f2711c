"""
Render engine - materializes a RenderPlan with ffmpeg

The render call is bounded by a timeout. On failure or timeout the
process is killed and the first input is stream-copied to the output so
the pipeline can continue with degraded (overlay-free) video.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from demoforge import config
from demoforge.core.exceptions import CompositingEngineError
from demoforge.core.logging import LogTimer, get_logger
from demoforge.core.runtime import assert_runtime_tools_available
from demoforge.models.render import RenderPlan
from .serializer import OUTPUT_LABEL, serialize_plan

logger = get_logger(__name__, component="render_engine")

STDERR_TAIL_CHARS = 500


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one materialization"""
    output_path: Optional[str]
    degraded: bool = False
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.output_path is not None and not self.degraded


def build_render_command(
    filter_graph: str,
    inputs: Sequence[str],
    output_path: str,
    ffmpeg_binary: Optional[str] = None,
) -> List[str]:
    cmd = [ffmpeg_binary or config.FFMPEG_BINARY, "-y"]
    for path in inputs:
        cmd.extend(["-i", str(path)])
    cmd.extend([
        "-filter_complex", filter_graph,
        "-map", f"[{OUTPUT_LABEL}]",
        "-map", "0:a?",
        "-c:v", "libx264",
        "-preset", "fast",
        "-crf", "18",
        "-pix_fmt", "yuv420p",
        "-c:a", "copy",
        str(output_path),
    ])
    return cmd


def build_copy_command(
    input_path: str,
    output_path: str,
    ffmpeg_binary: Optional[str] = None,
) -> List[str]:
    return [
        ffmpeg_binary or config.FFMPEG_BINARY, "-y",
        "-i", str(input_path),
        "-c", "copy",
        str(output_path),
    ]


async def run_ffmpeg(cmd: List[str], timeout: float) -> None:
    """
    Run one ffmpeg invocation to completion

    Raises:
        CompositingEngineError: If the process cannot start, exits non-zero,
            or exceeds ``timeout`` seconds (the process is killed first)
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        raise CompositingEngineError(f"Could not start {cmd[0]}: {e}") from e

    try:
        _, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        process.kill()
        await process.wait()
        raise CompositingEngineError(f"{cmd[0]} timed out after {timeout}s") from e

    if process.returncode != 0:
        error_output = stderr.decode(errors="replace") if stderr else ""
        raise CompositingEngineError(
            f"{cmd[0]} exited with code {process.returncode}",
            returncode=process.returncode,
            stderr=error_output[-STDERR_TAIL_CHARS:],
        )


class RenderEngine:
    """Invokes the external compositor for one plan at a time"""

    def __init__(
        self,
        ffmpeg_binary: Optional[str] = None,
        timeout: Optional[float] = None,
        check_tools: bool = False,
    ):
        self.ffmpeg_binary = ffmpeg_binary or config.FFMPEG_BINARY
        self.timeout = config.RENDER_TIMEOUT_SECONDS if timeout is None else timeout
        if check_tools:
            assert_runtime_tools_available([self.ffmpeg_binary], context="rendering")

    async def materialize(
        self,
        plan: RenderPlan,
        inputs: Sequence[str],
        output_path: str,
    ) -> RenderResult:
        """
        Render ``plan`` over ``inputs`` into ``output_path``

        Never raises for engine failures; a degraded result is returned
        instead, carrying the error text.
        """
        if not inputs:
            raise ValueError("materialize() needs at least one input clip")

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        cmd = build_render_command(serialize_plan(plan), inputs, output_path, self.ffmpeg_binary)

        try:
            with LogTimer(logger, f"render {Path(output_path).name}"):
                await run_ffmpeg(cmd, self.timeout)
            return RenderResult(output_path=str(output_path))
        except CompositingEngineError as e:
            render_error = e

        logger.warning("Render failed, falling back to stream copy", extra={
            "output_path": str(output_path),
            "error": str(render_error),
            "stderr": render_error.stderr,
        })
        return await self._stream_copy(inputs[0], output_path, str(render_error))

    async def _stream_copy(self, input_path: str, output_path: str, reason: str) -> RenderResult:
        try:
            await run_ffmpeg(build_copy_command(input_path, output_path, self.ffmpeg_binary), self.timeout)
        except CompositingEngineError as e:
            logger.error("Stream copy fallback failed", extra={
                "input_path": str(input_path),
                "error": str(e),
            })
            return RenderResult(output_path=None, degraded=True, error=f"{reason}; stream copy failed: {e}")
        return RenderResult(output_path=str(output_path), degraded=True, error=reason)
