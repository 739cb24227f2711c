"""
Tests for the error taxonomy and runtime tool checks
"""

from unittest.mock import patch

import pytest

from demoforge.core.exceptions import (
    CompositingEngineError,
    ConfigurationError,
    DemoForgeError,
    InfrastructureError,
    MetadataProbeError,
    PipelineError,
)
from demoforge.core.runtime import assert_runtime_tools_available, missing_runtime_tools


class TestExceptions:
    """Test suite for the exception hierarchy"""

    def test_grouping(self):
        assert issubclass(ConfigurationError, PipelineError)
        assert issubclass(MetadataProbeError, InfrastructureError)
        assert issubclass(CompositingEngineError, InfrastructureError)
        assert issubclass(PipelineError, DemoForgeError)

    def test_engine_error_details(self):
        error = CompositingEngineError("ffmpeg exited with code 1", returncode=1, stderr="bad filter")
        assert str(error) == "ffmpeg exited with code 1"
        assert error.returncode == 1
        assert error.stderr == "bad filter"


class TestRuntimeTools:
    """Test suite for tool availability checks"""

    def test_missing_tools(self):
        with patch("shutil.which", side_effect=lambda tool: None if tool == "ffprobe" else "/usr/bin/" + tool):
            assert missing_runtime_tools(["ffmpeg", "ffprobe"]) == ["ffprobe"]

    def test_assert_raises(self):
        with patch("shutil.which", return_value=None):
            with pytest.raises(CompositingEngineError, match="rendering: ffmpeg"):
                assert_runtime_tools_available(["ffmpeg"], context="rendering")

    def test_assert_passes(self):
        with patch("shutil.which", return_value="/usr/bin/ffmpeg"):
            assert_runtime_tools_available(["ffmpeg"], context="rendering")
