"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy
    - runtime.py: External tool availability checks
    - media.py: Clip metadata probing

Usage:
    from demoforge.core import get_logger, ConfigurationError
"""

from .logging import (
    setup_logging,
    get_logger,
    set_render_id,
    set_batch_id,
    clear_context,
    LogTimer,
)

from .exceptions import (
    DemoForgeError,
    PipelineError,
    InfrastructureError,
    ConfigurationError,
    MetadataProbeError,
    CompositingEngineError,
)

from .runtime import (
    missing_runtime_tools,
    assert_runtime_tools_available,
)

from .media import (
    VideoMetadata,
    FALLBACK_METADATA,
    parse_probe_output,
    probe_video_metadata,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_render_id",
    "set_batch_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "DemoForgeError",
    "PipelineError",
    "InfrastructureError",
    "ConfigurationError",
    "MetadataProbeError",
    "CompositingEngineError",
    # Runtime
    "missing_runtime_tools",
    "assert_runtime_tools_available",
    # Media
    "VideoMetadata",
    "FALLBACK_METADATA",
    "parse_probe_output",
    "probe_video_metadata",
]
