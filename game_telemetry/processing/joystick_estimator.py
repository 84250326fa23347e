"""Virtual joystick direction from a detected knob circle relative to a fixed axis point."""

import math
import logging
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..core.models import Point, Rect
from ..imaging.primitives import Circle, detect_circles
from ..models.schema import AxisStatistics

logger = logging.getLogger(__name__)

CircleDetector = Callable[[np.ndarray], Sequence[Circle]]


class DistanceAccumulator:
    """Knob-to-axis distances collected over a run to sanity-check the axis calibration."""

    def __init__(self):
        self.samples: List[float] = []

    def add(self, distance: float) -> None:
        self.samples.append(float(distance))

    def __len__(self) -> int:
        return len(self.samples)

    def finalize(self) -> Optional[AxisStatistics]:
        """Mean and sample standard deviation; std is None below two samples."""
        if not self.samples:
            return None

        values = np.asarray(self.samples, dtype=np.float64)
        std = float(np.std(values, ddof=1)) if values.size >= 2 else None
        return AxisStatistics(sample_count=int(values.size), mean=float(values.mean()), std=std)


class JoystickEstimator:
    """Angle in degrees, counter-clockwise from screen-right, or None when no knob is found."""

    def __init__(self, circle_detector: Optional[CircleDetector] = None):
        self.circle_detector = circle_detector or detect_circles
        self.distances = DistanceAccumulator()

    def estimate(self, frame: np.ndarray, axis: Point, search_region: Rect) -> Optional[float]:
        crop = search_region.slice(frame)
        if crop.size == 0:
            logger.warning(f"Joystick search region {search_region} lies outside the frame")
            return None

        circles = self.circle_detector(crop)
        if not circles:
            return None

        (cx, cy), _radius = circles[0]
        # whole pixels, truncated
        center = (search_region.x + int(cx), search_region.y + int(cy))

        self.distances.add(math.hypot(center[0] - axis[0], center[1] - axis[1]))
        angle = math.degrees(math.atan2(axis[1] - center[1], center[0] - axis[0]))
        logger.debug(f"Joystick knob at {center}, angle {angle:.1f}")
        return angle

    def statistics(self) -> Optional[AxisStatistics]:
        return self.distances.finalize()
