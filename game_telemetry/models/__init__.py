"""Data models module - Pydantic models for frame telemetry."""

from .schema import AxisStatistics, EntitySnapshot, FrameStatus

__all__ = ["AxisStatistics", "EntitySnapshot", "FrameStatus"]
