"""
Core Exceptions
Standardized exception hierarchy for the render engine.
"""


class DemoForgeError(Exception):
    """Base exception for all engine errors."""
    pass


class PipelineError(DemoForgeError):
    """Base exception for timeline and plan construction errors."""
    pass


class InfrastructureError(DemoForgeError):
    """Base exception for external tool errors (ffprobe, ffmpeg)."""
    pass


class ConfigurationError(PipelineError):
    """Invalid scheduling input or option set. Fatal, never retried."""
    pass


class MetadataProbeError(InfrastructureError):
    """Clip metadata lookup failed. Recovered with fallback defaults."""
    pass


class CompositingEngineError(InfrastructureError):
    """External render invocation failed or timed out."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
