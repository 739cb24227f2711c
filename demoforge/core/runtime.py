"""
Runtime environment guards and dependency checks.
"""

import shutil
from typing import Iterable, List

from .exceptions import CompositingEngineError


def missing_runtime_tools(tools: Iterable[str]) -> List[str]:
    return [tool for tool in tools if shutil.which(tool) is None]


def assert_runtime_tools_available(tools: Iterable[str], *, context: str) -> None:
    missing = missing_runtime_tools(tools)
    if missing:
        missing_list = ", ".join(sorted(set(missing)))
        raise CompositingEngineError(
            f"Missing required runtime tools for {context}: {missing_list}"
        )
