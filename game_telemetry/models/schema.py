"""Pydantic models for per-frame telemetry: unit snapshots, axis statistics and frame status."""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class EntitySnapshot(BaseModel):
    """Tracked unit as observed in one frame."""

    model_config = ConfigDict(frozen=True)

    identity: int = Field(ge=0, description="Stable tracker identity")
    position: Tuple[int, int] = Field(description="Anchor of the level icon digits (x, y)")
    level: int = Field(ge=1, le=15, description="Level shown on the unit icon")


class AxisStatistics(BaseModel):
    """Distance between the detected joystick knob and the configured axis point."""

    model_config = ConfigDict(frozen=True)

    sample_count: int = Field(ge=0, description="Number of frames with a detected knob")
    mean: float = Field(description="Mean knob-to-axis distance")
    std: Optional[float] = Field(default=None, description="Sample standard deviation (n-1), None below 2 samples")


class FrameStatus(BaseModel):
    """Everything read from one frame: joystick, icon numbers and visible units."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(ge=0, description="Frame timestamp in ms")
    joystick_angle: Optional[float] = Field(
        default=None, ge=-180.0, le=180.0, description="Joystick direction in degrees, None when undetected"
    )
    icon_readings: Dict[str, int] = Field(default_factory=dict, description="Cooldown and currency values by icon")
    entities: List[EntitySnapshot] = Field(default_factory=list, description="Units matched or created this frame")

    @property
    def joystick_detected(self) -> bool:
        return self.joystick_angle is not None

    @property
    def entity_ids(self) -> List[int]:
        return [entity.identity for entity in self.entities]

    def reading(self, icon_name: str, default: int = 0) -> int:
        """Value read for an icon, or default when the icon was not configured."""
        return self.icon_readings.get(icon_name, default)
