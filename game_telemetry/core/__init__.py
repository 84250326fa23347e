# Core data models, exceptions and the per-frame status log
from .exceptions import ConfigError, FrameReadError, TelemetryError, TemplateLoadError
from .models import (
    CandidateRegion,
    DigitMatch,
    DigitReading,
    ExclusionMask,
    NumericReading,
    Rect,
    TrackedEntity,
)
from .status_log import FrameStatusAggregator

__all__ = [
    "CandidateRegion",
    "ConfigError",
    "DigitMatch",
    "DigitReading",
    "ExclusionMask",
    "FrameReadError",
    "FrameStatusAggregator",
    "NumericReading",
    "Rect",
    "TelemetryError",
    "TemplateLoadError",
    "TrackedEntity",
]
