"""Pixel-disagreement matching of binary regions against the ten digit templates."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import cv2
import numpy as np

from ..core.exceptions import TemplateLoadError
from ..core.models import DigitMatch

logger = logging.getLogger(__name__)

# Region h/w ratio must stay within this factor of the template's
RATIO_TOLERANCE = 0.2

# Called for every template actually compared: (resized region, template, digit, score)
CompareObserver = Callable[[np.ndarray, np.ndarray, int, float], None]


@dataclass(frozen=True)
class DigitTemplate:
    """Reference bitmap for one digit, foreground 255 on background 0."""

    digit: int
    bitmap: np.ndarray

    @property
    def height(self) -> int:
        return self.bitmap.shape[0]

    @property
    def width(self) -> int:
        return self.bitmap.shape[1]

    @property
    def hw_ratio(self) -> float:
        return self.height / self.width


class TemplateSet:
    """Ten digit templates, index equals digit."""

    def __init__(self, bitmaps: Sequence[np.ndarray], name: str = "digits"):
        if len(bitmaps) != 10:
            raise TemplateLoadError(f"Template set '{name}' needs 10 digit bitmaps, got {len(bitmaps)}")

        templates = []
        for digit, bitmap in enumerate(bitmaps):
            if bitmap is None or bitmap.ndim != 2 or bitmap.size == 0:
                raise TemplateLoadError(f"Template set '{name}': digit {digit} is not a 2-D bitmap")
            frozen = np.where(bitmap > 0, 255, 0).astype(np.uint8)
            frozen.setflags(write=False)
            templates.append(DigitTemplate(digit=digit, bitmap=frozen))

        self.name = name
        self.templates = tuple(templates)

    def __len__(self) -> int:
        return len(self.templates)

    def __iter__(self):
        return iter(self.templates)

    def __getitem__(self, digit: int) -> DigitTemplate:
        return self.templates[digit]


class DigitTemplateMatcher:
    """Classifies single-digit regions; lowest disagreement below the threshold wins."""

    def __init__(self, observer: Optional[CompareObserver] = None):
        self.observer = observer

    def classify(
        self, region: np.ndarray, templates: TemplateSet, error_threshold: float
    ) -> Optional[DigitMatch]:
        if region is None or region.size == 0:
            return None

        region_ratio = region.shape[0] / region.shape[1]
        best_digit = None
        best_score = error_threshold

        for template in templates:
            ratio = region_ratio / template.hw_ratio
            if ratio > 1.0 + RATIO_TOLERANCE or ratio < 1.0 - RATIO_TOLERANCE:
                continue

            resized = cv2.resize(region, (template.width, template.height), interpolation=cv2.INTER_NEAREST)
            score = self.disagreement(resized, template.bitmap)

            if self.observer is not None:
                self.observer(resized, template.bitmap, template.digit, score)

            if score < best_score:
                best_score = score
                best_digit = template.digit

        if best_digit is None:
            return None

        logger.debug(f"Matched digit {best_digit} with error {best_score:.3f} ({templates.name})")
        return DigitMatch(digit=best_digit, score=best_score)

    @staticmethod
    def disagreement(region: np.ndarray, template: np.ndarray) -> float:
        """Fraction of pixels where exactly one of the two images is foreground."""
        mismatched = np.count_nonzero((region > 0) != (template > 0))
        return mismatched / float(template.size)
