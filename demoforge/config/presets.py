"""
Named style tables for every overlay kind.

Each table maps a style tag to a bundle of visual parameters. The tables are
read-only; generators resolve them once into StylePreset objects
(see demoforge.models.options.build_preset_table).
"""

from types import MappingProxyType

PROGRESS_PRESETS = MappingProxyType({
    "bar": {"color": "#3B82F6", "background_color": "#E5E7EB33", "size": 6},
    "line": {"color": "#3B82F6", "background_color": "#E5E7EB33", "size": 4},
    "dots": {"color": "#3B82F6", "background_color": "#E5E7EB55", "size": 10},
    "circular": {"color": "#3B82F6", "background_color": "#FFFFFF33", "size": 15},
    "chapter": {"color": "#3B82F6", "background_color": "#E5E7EB33", "size": 6},
})

CAPTION_PRESETS = MappingProxyType({
    "standard": {
        "font_family": "Inter",
        "font_size": 42,
        "color": "#FFFFFF",
        "background_color": "#000000B3",
    },
    "karaoke": {
        "font_family": "Inter",
        "font_size": 48,
        "color": "#FFFFFF",
        "accent_color": "#FFD700",
        "background_color": "#000000B3",
    },
    "pop": {
        "font_family": "Inter",
        "font_size": 52,
        "color": "#FFFFFF",
        "accent_color": "#FFD700",
        "background_color": "#00000000",
        "animation_duration": 0.25,
    },
    "typewriter": {
        "font_family": "JetBrains Mono",
        "font_size": 40,
        "color": "#F8FAFC",
        "background_color": "#0F172ACC",
    },
    "fade": {
        "font_family": "Inter",
        "font_size": 44,
        "color": "#FFFFFF",
        "background_color": "#00000099",
        "animation_duration": 0.2,
    },
})

# Vertical anchor as a fraction of frame height
CAPTION_POSITIONS = MappingProxyType({
    "top": 0.1,
    "center": 0.5,
    "lower-third": 0.75,
    "bottom": 0.85,
})

LOWER_THIRD_PRESETS = MappingProxyType({
    "modern": {
        "background_color": "#0F172AF2",
        "text_color": "#FFFFFF",
        "accent_color": "#3B82F6",
        "font_family": "Inter",
        "font_size": 32,
        "title_font_size": 20,
        "animation": "slide-in",
        "animation_duration": 0.5,
    },
    "classic": {
        "background_color": "#1F2937F2",
        "text_color": "#FFFFFF",
        "accent_color": "#10B981",
        "font_family": "Georgia",
        "font_size": 30,
        "title_font_size": 20,
        "animation": "fade-in",
        "animation_duration": 0.6,
    },
    "minimal": {
        "background_color": "#00000099",
        "text_color": "#FFFFFF",
        "accent_color": "#FFFFFF",
        "font_family": "Inter",
        "font_size": 28,
        "title_font_size": 18,
        "animation": "fade-in",
        "animation_duration": 0.4,
    },
    "gradient": {
        "background_color": "#5B21B6F2",
        "text_color": "#FFFFFF",
        "accent_color": "#F472B6",
        "font_family": "Inter",
        "font_size": 32,
        "title_font_size": 20,
        "animation": "scale-up",
        "animation_duration": 0.5,
    },
    "broadcast": {
        "background_color": "#082F49F2",
        "text_color": "#FFFFFF",
        "accent_color": "#22D3EE",
        "font_family": "Inter",
        "font_size": 34,
        "title_font_size": 22,
        "animation": "wipe",
        "animation_duration": 0.35,
    },
})

CLICK_EFFECT_PRESETS = MappingProxyType({
    "ripple": {"color": "#3B82F6", "size": 60, "duration": 0.4, "opacity": 0.6},
    "pulse": {"color": "#7C3AED", "size": 50, "duration": 0.5, "opacity": 0.7},
    "ring": {"color": "#10B981", "size": 55, "duration": 0.45, "opacity": 0.6},
})

TRANSITION_PRESETS = MappingProxyType({
    "fade": {"duration": 0.5, "easing": "ease-in-out", "animation": "fade"},
    "blur": {"duration": 0.4, "easing": "ease-out", "animation": "hblur"},
    "slide-left": {"duration": 0.3, "easing": "ease-out", "animation": "slideleft"},
    "slide-right": {"duration": 0.3, "easing": "ease-out", "animation": "slideright"},
    "zoom": {"duration": 0.6, "easing": "ease-in-out", "animation": "zoomin"},
    "wipe": {"duration": 0.5, "easing": "linear", "animation": "wipeleft"},
})

# (fractional offset, label) chapter layouts scaled to a demo duration
MARKER_TEMPLATES = MappingProxyType({
    "saas_demo": (
        (0.0, "Introduction"),
        (0.1, "Dashboard Overview"),
        (0.3, "Key Features"),
        (0.6, "Workflow Demo"),
        (0.85, "Pricing"),
        (0.95, "Call to Action"),
    ),
    "product_tour": (
        (0.0, "Welcome"),
        (0.15, "Getting Started"),
        (0.4, "Main Features"),
        (0.7, "Advanced Tips"),
        (0.9, "Next Steps"),
    ),
    "tutorial": (
        (0.0, "Overview"),
        (0.1, "Prerequisites"),
        (0.2, "Step 1"),
        (0.4, "Step 2"),
        (0.6, "Step 3"),
        (0.8, "Verification"),
        (0.95, "Summary"),
    ),
})
