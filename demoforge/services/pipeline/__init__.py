"""
Pipeline - end-to-end demo rendering and batch export
"""

from .orchestrator import DemoRenderPipeline, RenderJob

__all__ = ["DemoRenderPipeline", "RenderJob"]
