"""
Caption data model. All times are in seconds.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Caption:
    text: str
    start_time: float
    end_time: float
    index: Optional[int] = None

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class Word:
    text: str
    start_time: float
    end_time: float


@dataclass(frozen=True)
class CaptionFrame:
    """Animation state of a caption at one output frame."""
    frame: int
    time: float
    text: str
    visible_words: Tuple[str, ...] = ()
    active_word: Optional[int] = None
    scales: Tuple[float, ...] = ()
    opacities: Tuple[float, ...] = ()


@dataclass(frozen=True)
class ClickEvent:
    """A recorded click at pixel (x, y), ``time`` in seconds."""
    x: float
    y: float
    time: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClickEvent":
        """Accepts ``time`` in seconds or a recorder-style ``t`` in milliseconds"""
        if "time" in data:
            time = float(data["time"])
        else:
            time = float(data.get("t", 0)) / 1000
        return cls(x=float(data["x"]), y=float(data["y"]), time=time)
