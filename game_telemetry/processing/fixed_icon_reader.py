"""Numbers at fixed HUD coordinates: ability cooldowns and currency."""

import logging
from typing import Dict

import numpy as np

from ..config.settings import IconSpec
from ..core.models import Rect
from ..imaging.primitives import binarize
from ..template_matching.digit_matcher import DigitTemplateMatcher, TemplateSet
from .region_segmenter import RegionSegmenter

logger = logging.getLogger(__name__)


class FixedIconReader:
    """Crops each configured icon, recognises its digits and reads them left to right."""

    def __init__(self, matcher: DigitTemplateMatcher, segmenter: RegionSegmenter):
        self.matcher = matcher
        self.segmenter = segmenter

    def read_icon(self, frame: np.ndarray, icon: IconSpec, templates: TemplateSet) -> int:
        crop = self.crop(frame, icon.crop_rect())
        if crop.size == 0:
            logger.warning(f"Icon '{icon.name}' lies outside the frame")
            return 0
        return self.read_number(crop, templates, icon.error_threshold, icon.bw_threshold, icon)

    def read_number(
        self,
        crop: np.ndarray,
        templates: TemplateSet,
        error_threshold: float,
        bw_threshold: int,
        icon: IconSpec = None,
    ) -> int:
        """Digits sorted by x folded into one integer; 0 when nothing is recognised."""
        binary = binarize(crop, bw_threshold)
        size_range = icon.size_range if icon is not None else None

        digits_by_x: Dict[int, int] = {}
        for region in self.segmenter.segment(binary, size_range=size_range):
            match = self.matcher.classify(region.pixels, templates, error_threshold)
            if match is not None:
                # first reading wins when two regions share an x coordinate
                digits_by_x.setdefault(region.rect.x, match.digit)

        number = 0
        for x in sorted(digits_by_x):
            number = number * 10 + digits_by_x[x]
        return number

    def read_all(self, frame: np.ndarray, icons, template_sets: Dict[str, TemplateSet]) -> Dict[str, int]:
        readings = {}
        for icon in icons:
            readings[icon.name] = self.read_icon(frame, icon, template_sets[icon.template_set])
            logger.debug(f"{icon.name}: {readings[icon.name]}")
        return readings

    @staticmethod
    def crop(frame: np.ndarray, rect: Rect) -> np.ndarray:
        height, width = frame.shape[:2]
        x0 = max(0, rect.x)
        y0 = max(0, rect.y)
        x1 = min(width, rect.x + rect.width)
        y1 = min(height, rect.y + rect.height)
        if x1 <= x0 or y1 <= y0:
            return frame[0:0, 0:0]
        return frame[y0:y1, x0:x1]
