"""
Tests for clip metadata probing
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from demoforge.core.media import (
    FALLBACK_METADATA,
    VideoMetadata,
    parse_probe_output,
    probe_video_metadata,
)

PROBE_JSON = {
    "streams": [{"width": 1280, "height": 720, "r_frame_rate": "30000/1001"}],
    "format": {"duration": "42.5"},
}


def _process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.wait = AsyncMock(return_value=returncode)
    return process


class TestParseProbeOutput:
    """Test suite for parse_probe_output"""

    def test_full_payload(self):
        metadata = parse_probe_output(PROBE_JSON)
        assert (metadata.width, metadata.height, metadata.duration) == (1280, 720, 42.5)
        assert metadata.fps == pytest.approx(29.97, abs=1e-2)
        assert metadata.is_fallback is False

    def test_missing_fields_fall_back(self):
        metadata = parse_probe_output({})
        assert metadata == VideoMetadata(width=1920, height=1080, duration=10.0, fps=30.0)

    def test_bad_duration(self):
        assert parse_probe_output({"format": {"duration": "N/A"}}).duration == 10.0


class TestProbeVideoMetadata:
    """Test suite for probe_video_metadata"""

    @pytest.mark.asyncio
    async def test_success(self):
        process = _process(stdout=json.dumps(PROBE_JSON).encode())
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            metadata = await probe_video_metadata("clip.mp4")

        assert metadata.width == 1280
        args = mock_exec.call_args[0]
        assert "clip.mp4" in args
        assert "json" in args

    @pytest.mark.asyncio
    async def test_nonzero_exit_uses_defaults(self):
        process = _process(returncode=1, stderr=b"No such file")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            metadata = await probe_video_metadata("missing.mp4")
        assert metadata is FALLBACK_METADATA
        assert (metadata.width, metadata.height, metadata.duration) == (1920, 1080, 10.0)

    @pytest.mark.asyncio
    async def test_missing_binary_uses_defaults(self):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=OSError("ffprobe missing"))):
            metadata = await probe_video_metadata("clip.mp4")
        assert metadata.is_fallback

    @pytest.mark.asyncio
    async def test_unreadable_output_uses_defaults(self):
        process = _process(stdout=b"not json")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            metadata = await probe_video_metadata("clip.mp4")
        assert metadata.is_fallback

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        async def hang():
            await asyncio.sleep(10)

        process = _process()
        process.communicate = hang
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            metadata = await probe_video_metadata("clip.mp4", timeout=0.01)

        assert metadata.is_fallback
        process.kill.assert_called_once()
        process.wait.assert_awaited_once()
