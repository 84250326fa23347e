# Run configuration
from .settings import (
    CANVAS_SIZE,
    ColorPurity,
    FixedSizeRatios,
    IconSpec,
    JoystickSettings,
    MatchingSettings,
    SizeRange,
    TelemetrySettings,
    UnitTrackingSettings,
    load_settings,
)

__all__ = [
    "CANVAS_SIZE",
    "ColorPurity",
    "FixedSizeRatios",
    "IconSpec",
    "JoystickSettings",
    "MatchingSettings",
    "SizeRange",
    "TelemetrySettings",
    "UnitTrackingSettings",
    "load_settings",
]
