"""
Subtitle timing format - parsing and generation

Block format: index line, ``HH:MM:SS,mmm --> HH:MM:SS,mmm``, one or more
text lines, blank line separator. Hours are optional on input.
"""

import re
from typing import List, Optional

from demoforge.core.logging import get_logger
from demoforge.models.captions import Caption

logger = get_logger(__name__, component="subtitles")

_TIMESTAMP = r"(?:(\d+):)?(\d{1,2}):(\d{2})[,.](\d{1,3})"
TIMING_LINE = re.compile(rf"^\s*{_TIMESTAMP}\s*-->\s*{_TIMESTAMP}")
_BLOCK_SPLIT = re.compile(r"\n\s*\n")
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")

MAX_WORDS_PER_CHUNK = 10
MAX_CHARS_PER_CHUNK = 42
MIN_CHUNK_SECONDS = 1.5
MAX_CHUNK_SECONDS = 5.0
CHUNK_GAP_SECONDS = 0.1


def _to_seconds(hours: Optional[str], minutes: str, seconds: str, millis: str) -> float:
    return (
        int(hours or 0) * 3600
        + int(minutes) * 60
        + int(seconds)
        + int(millis.ljust(3, "0")) / 1000
    )


def parse_timestamp(value: str) -> float:
    """``[HH:]MM:SS,mmm`` to seconds"""
    match = re.fullmatch(_TIMESTAMP, value.strip())
    if match is None:
        raise ValueError(f"Not a subtitle timestamp: {value!r}")
    return _to_seconds(*match.groups())


def parse_srt(content: str) -> List[Caption]:
    """
    Parse subtitle blocks into captions ordered as they appear

    Blocks without a timing line are skipped. Multi-line text is kept with
    line breaks.
    """
    captions = []
    normalized = content.replace("\r\n", "\n").replace("\r", "\n").lstrip("\ufeff")

    for block in _BLOCK_SPLIT.split(normalized.strip()):
        lines = [line for line in block.split("\n") if line.strip()]
        timing_at = next((i for i, line in enumerate(lines) if TIMING_LINE.match(line)), None)
        if timing_at is None:
            if lines:
                logger.debug("Skipping subtitle block without timing", extra={"block": lines[0]})
            continue

        match = TIMING_LINE.match(lines[timing_at])
        groups = match.groups()
        index = None
        if timing_at > 0 and lines[timing_at - 1].strip().isdigit():
            index = int(lines[timing_at - 1].strip())

        captions.append(Caption(
            text="\n".join(line.strip() for line in lines[timing_at + 1:]),
            start_time=_to_seconds(*groups[:4]),
            end_time=_to_seconds(*groups[4:]),
            index=index,
        ))
    return captions


def format_srt_timestamp(seconds: float) -> str:
    """Seconds to ``HH:MM:SS,mmm``"""
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rem = divmod(total_ms, 3600 * 1000)
    minutes, rem = divmod(rem, 60 * 1000)
    secs, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def split_long_sentence(
    sentence: str,
    max_words: int = MAX_WORDS_PER_CHUNK,
    max_chars: int = MAX_CHARS_PER_CHUNK,
) -> List[str]:
    words = sentence.split()
    if len(words) <= max_words and len(sentence) <= max_chars:
        return [sentence]

    chunks = []
    current: List[str] = []
    length = 0
    for word in words:
        if current and (len(current) >= max_words or length + len(word) + 1 > max_chars):
            chunks.append(" ".join(current))
            current, length = [], 0
        current.append(word)
        length += len(word) + 1
    if current:
        chunks.append(" ".join(current))
    return chunks


def split_script(script: str, total_duration: float) -> List[Caption]:
    """
    Time narration text across ``total_duration`` seconds

    Chunks get time proportional to their word count, clamped to
    [MIN_CHUNK_SECONDS, MAX_CHUNK_SECONDS], separated by a short gap, and are
    rescaled when they overrun the duration.
    """
    text = " ".join((script or "").split())
    if not text or total_duration <= 0:
        return []

    seconds_per_word = total_duration / len(text.split())
    spans = []
    current = 0.0
    for sentence in _SENTENCE_SPLIT.split(text):
        for chunk in split_long_sentence(sentence):
            duration = len(chunk.split()) * seconds_per_word
            duration = max(MIN_CHUNK_SECONDS, min(MAX_CHUNK_SECONDS, duration))
            end = max(current, min(current + duration, total_duration))
            spans.append([chunk, current, end])
            current = end + CHUNK_GAP_SECONDS

    if current > total_duration:
        scale = max(0.0, total_duration - 0.5) / current
        adjusted = 0.0
        for span in spans:
            length = (span[2] - span[1]) * scale
            span[1], span[2] = adjusted, adjusted + length
            adjusted = span[2] + CHUNK_GAP_SECONDS

    return [
        Caption(text=chunk, start_time=start, end_time=end, index=i + 1)
        for i, (chunk, start, end) in enumerate(spans)
    ]


def generate_srt(script: str, duration: float) -> str:
    """Subtitle blocks for a narration script spread over ``duration`` seconds"""
    return "\n".join(
        f"{c.index}\n"
        f"{format_srt_timestamp(c.start_time)} --> {format_srt_timestamp(c.end_time)}\n"
        f"{c.text}\n"
        for c in split_script(script, duration)
    )
