"""
Services package - timeline computation and render plan compilation

Organized by stage:
    - pacing: Duration estimation, scheduling, voiceover sync, pauses
    - markers: Chapter lists, zoom keyframes, marker templates
    - motion: Easing, keyframe interpolation, scroll timing
    - overlays: Overlay primitive generators
    - compositor: Plan assembly, graph serialization, rendering
    - pipeline: End-to-end orchestration and batch export
"""
