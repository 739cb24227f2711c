"""
Compositor - render plan assembly, serialization and materialization
"""

from .graph import FilterGraphCompositor, clip_starts
from .serializer import OUTPUT_LABEL, clip_chain, serialize_plan
from .engine import (
    RenderEngine,
    RenderResult,
    build_render_command,
    build_copy_command,
    run_ffmpeg,
)

__all__ = [
    "FilterGraphCompositor",
    "clip_starts",
    "OUTPUT_LABEL",
    "clip_chain",
    "serialize_plan",
    "RenderEngine",
    "RenderResult",
    "build_render_command",
    "build_copy_command",
    "run_ffmpeg",
]
