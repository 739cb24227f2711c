"""
Per-component option structs and style presets

Every component takes one frozen options model with all fields defaulted.
Callers may pass a plain mapping (snake_case or camelCase keys); it is
validated once by ``from_options``. Unknown keys are ignored with a warning,
or rejected when STRICT_OPTIONS is enabled.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from demoforge import config
from demoforge.config.constants import (
    FALLBACK_FPS,
    FALLBACK_HEIGHT,
    FALLBACK_WIDTH,
    TRANSITION_GAP_MS,
)
from demoforge.core.exceptions import ConfigurationError
from demoforge.core.logging import get_logger

logger = get_logger(__name__, component="options")

T = TypeVar("T", bound="OptionsModel")


class OptionsModel(BaseModel):
    """Base for component option structs"""
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def known_keys(cls) -> set:
        keys = set()
        for name, field in cls.model_fields.items():
            keys.add(name)
            if field.alias:
                keys.add(field.alias)
        return keys

    @classmethod
    def from_options(
        cls: Type[T],
        options: Optional[Mapping[str, Any]] = None,
        strict: Optional[bool] = None,
    ) -> T:
        """
        Validate a raw option mapping into this struct

        Args:
            options: Raw mapping, an existing instance, or None for defaults
            strict: Reject unknown keys (defaults to config.STRICT_OPTIONS)

        Raises:
            ConfigurationError: Unknown keys in strict mode, or invalid values
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options

        strict = config.STRICT_OPTIONS if strict is None else strict
        known = cls.known_keys()
        unknown = sorted(key for key in options if key not in known)
        if unknown:
            if strict:
                raise ConfigurationError(
                    f"Unknown {cls.__name__} keys: {', '.join(unknown)}"
                )
            logger.warning("Ignoring unknown option keys", extra={
                "options_type": cls.__name__,
                "unknown_keys": unknown,
            })

        try:
            return cls.model_validate({k: v for k, v in options.items() if k in known})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {cls.__name__}: {e}") from e


class StylePreset(BaseModel):
    """A named, immutable bundle of visual parameters for one overlay kind"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    color: Optional[str] = None
    background_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    title_font_size: Optional[int] = None
    size: Optional[float] = None
    opacity: Optional[float] = None
    duration: Optional[float] = None  # seconds
    easing: Optional[str] = None
    animation: Optional[str] = None
    animation_duration: Optional[float] = None  # seconds

    def with_overrides(self, **overrides: Any) -> "StylePreset":
        """Copy with every non-None override applied"""
        update = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=update) if update else self


def build_preset_table(raw: Mapping[str, Mapping[str, Any]]) -> Mapping[str, StylePreset]:
    """Resolve a raw preset table into a read-only style-tag -> StylePreset mapping"""
    try:
        table = {
            name: StylePreset(name=name, **dict(values))
            for name, values in raw.items()
        }
    except ValidationError as e:
        raise ConfigurationError(f"Invalid preset table: {e}") from e
    return MappingProxyType(table)


def resolve_preset(
    table: Mapping[str, StylePreset],
    name: str,
    default: str,
) -> StylePreset:
    """Look up a style tag, falling back to ``default`` for unknown tags"""
    preset = table.get(name)
    if preset is None:
        logger.warning("Unknown style, using default", extra={
            "style": name,
            "default_style": default,
        })
        preset = table[default]
    return preset


# ---------------------------------------------------------------------------
# Component options
# ---------------------------------------------------------------------------

class PacingOptions(OptionsModel):
    target_duration: float = 60000  # ms
    style: str = "natural"  # fast, natural, slow, dramatic
    min_section_time: float = 2000
    max_section_time: float = 12000
    transition_gap: float = TRANSITION_GAP_MS


class ScrollOptions(OptionsModel):
    style: str = "smooth"  # fast, smooth, cinematic
    viewport_height: float = FALLBACK_HEIGHT


class ZoomOptions(OptionsModel):
    default_zoom: float = 1.4
    default_duration: float = 1000  # ms
    width: int = FALLBACK_WIDTH
    height: int = FALLBACK_HEIGHT
    fps: float = FALLBACK_FPS


class ProgressBarOptions(OptionsModel):
    style: str = "bar"  # bar, line, dots, circular, chapter
    position: str = "bottom"  # top, bottom
    color: Optional[str] = None
    background_color: Optional[str] = None
    height: Optional[float] = None
    padding: float = 0
    dot_count: int = 10
    segment_count: int = 12
    segment_gap: float = 4


class CaptionOptions(OptionsModel):
    style: str = "standard"  # standard, karaoke, pop, typewriter, fade
    position: str = "bottom"  # top, center, lower-third, bottom
    font_size: Optional[int] = None
    color: Optional[str] = None
    accent_color: Optional[str] = None
    background_color: Optional[str] = None
    fps: float = FALLBACK_FPS


class LowerThirdOptions(OptionsModel):
    style: str = "modern"  # modern, classic, minimal, gradient, broadcast
    position: str = "bottom-left"  # bottom-left, bottom-right, top-left, top-right
    animation: Optional[str] = None  # slide-in, fade-in, scale-up, wipe
    animation_duration: Optional[float] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    accent_color: Optional[str] = None
    font_size: Optional[int] = None
    start_time: float = 0.0
    end_time: Optional[float] = None


class ClickEffectOptions(OptionsModel):
    style: str = "ripple"  # ripple, pulse, ring
    color: Optional[str] = None
    size: Optional[float] = None
    duration: Optional[float] = None  # seconds
    opacity: Optional[float] = None


class TransitionOptions(OptionsModel):
    kind: str = "fade"  # fade, blur, slide-left, slide-right, zoom, wipe, none
    duration: Optional[float] = None  # seconds
    easing: Optional[str] = None

