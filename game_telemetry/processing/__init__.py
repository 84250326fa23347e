"""Processing module - region segmentation, digit composition, fixed icons and the joystick."""

from .region_segmenter import RegionSegmenter
from .number_composer import NumberComposer
from .fixed_icon_reader import FixedIconReader
from .joystick_estimator import DistanceAccumulator, JoystickEstimator

__all__ = ["RegionSegmenter", "NumberComposer", "FixedIconReader", "DistanceAccumulator", "JoystickEstimator"]
