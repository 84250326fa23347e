"""Game telemetry reconstruction from screen captures using template matching and identity tracking"""

__version__ = "1.0.0"

# Import main components for easy access
from .core import FrameStatusAggregator, Rect
from .core.analyzer import GameTelemetryAnalyzer
from .config import TelemetrySettings, load_settings
from .models import AxisStatistics, EntitySnapshot, FrameStatus
from .processing import JoystickEstimator, NumberComposer, RegionSegmenter
from .template_matching import DigitTemplateMatcher, TemplateSet
from .tracking import EntityTracker

__all__ = [
    "GameTelemetryAnalyzer",
    "FrameStatusAggregator",
    "Rect",
    "TelemetrySettings",
    "load_settings",
    "AxisStatistics",
    "EntitySnapshot",
    "FrameStatus",
    "JoystickEstimator",
    "NumberComposer",
    "RegionSegmenter",
    "DigitTemplateMatcher",
    "TemplateSet",
    "EntityTracker",
]
