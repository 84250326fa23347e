"""Utilities module - file helpers and debug captures."""

from .file_utils import FileUtils
from .debug_utils import MatchDebugRecorder, build_comparison

__all__ = ["FileUtils", "MatchDebugRecorder", "build_comparison"]
