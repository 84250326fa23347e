"""Capture module - frame sequences from captured image folders."""

from .frame_source import FrameSequence, parse_timestamp

__all__ = ["FrameSequence", "parse_timestamp"]
