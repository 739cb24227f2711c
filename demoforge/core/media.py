"""
Media utilities - clip metadata probing via ffprobe
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from demoforge import config
from demoforge.config.constants import (
    FALLBACK_WIDTH,
    FALLBACK_HEIGHT,
    FALLBACK_DURATION,
    FALLBACK_FPS,
)
from .exceptions import MetadataProbeError
from .logging import get_logger

logger = get_logger(__name__, component="media_probe")


@dataclass(frozen=True)
class VideoMetadata:
    """Dimensions, duration and frame rate of a source clip."""
    width: int
    height: int
    duration: float
    fps: float = FALLBACK_FPS
    is_fallback: bool = False


FALLBACK_METADATA = VideoMetadata(
    width=FALLBACK_WIDTH,
    height=FALLBACK_HEIGHT,
    duration=FALLBACK_DURATION,
    fps=FALLBACK_FPS,
    is_fallback=True,
)


def _parse_frame_rate(raw: Optional[str]) -> float:
    """Parse ffprobe's ``num/den`` frame rate."""
    if not raw:
        return FALLBACK_FPS
    try:
        if "/" in raw:
            num, den = raw.split("/", 1)
            den_value = float(den)
            return float(num) / den_value if den_value else FALLBACK_FPS
        return float(raw)
    except ValueError:
        return FALLBACK_FPS


def parse_probe_output(payload: Dict[str, Any]) -> VideoMetadata:
    """
    Build VideoMetadata from ffprobe JSON output

    Missing fields fall back individually to the defaults.
    """
    streams = payload.get("streams") or []
    stream = streams[0] if streams else {}
    fmt = payload.get("format") or {}

    try:
        duration = float(fmt.get("duration") or FALLBACK_DURATION)
    except (TypeError, ValueError):
        duration = FALLBACK_DURATION

    return VideoMetadata(
        width=int(stream.get("width") or FALLBACK_WIDTH),
        height=int(stream.get("height") or FALLBACK_HEIGHT),
        duration=duration,
        fps=_parse_frame_rate(stream.get("r_frame_rate")),
    )


async def _run_probe(file_path: str, timeout: float) -> VideoMetadata:
    cmd = [
        config.FFPROBE_BINARY,
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height,r_frame_rate",
        "-show_entries", "format=duration",
        "-of", "json",
        file_path,
    ]

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        raise MetadataProbeError(f"Could not start ffprobe: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        process.kill()
        await process.wait()
        raise MetadataProbeError(f"ffprobe timed out after {timeout}s") from e

    if process.returncode != 0:
        error_output = stderr.decode(errors="replace") if stderr else "Unknown error"
        raise MetadataProbeError(f"ffprobe failed: {error_output.strip()}")

    try:
        payload = json.loads(stdout.decode() or "{}")
    except json.JSONDecodeError as e:
        raise MetadataProbeError(f"Unreadable ffprobe output: {e}") from e

    return parse_probe_output(payload)


async def probe_video_metadata(
    file_path: str,
    timeout: Optional[float] = None
) -> VideoMetadata:
    """
    Probe a clip's dimensions, duration and frame rate

    Never raises: on any probe failure a warning is logged and
    FALLBACK_METADATA (1920x1080, 10s) is returned.

    Args:
        file_path: Path to the source clip
        timeout: Seconds to wait for ffprobe (defaults to PROBE_TIMEOUT_SECONDS)
    """
    timeout = config.PROBE_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        metadata = await _run_probe(file_path, timeout)
    except MetadataProbeError as e:
        logger.warning("Could not get video metadata, using defaults", extra={
            "file_path": file_path,
            "error": str(e),
        })
        return FALLBACK_METADATA

    logger.debug("Probed clip metadata", extra={
        "file_path": file_path,
        "width": metadata.width,
        "height": metadata.height,
        "duration": metadata.duration,
    })
    return metadata
