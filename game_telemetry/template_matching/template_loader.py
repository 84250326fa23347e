"""Loading digit template sets and the unit-icon exclusion mask from disk."""

import os
import logging

import cv2

from ..core.exceptions import TemplateLoadError
from ..core.models import ExclusionMask
from ..imaging.primitives import binarize, find_all_contours
from .digit_matcher import TemplateSet

logger = logging.getLogger(__name__)

# File prefixes of the three template sets in the samples folder
TEMPLATE_PREFIXES = {"large": "", "money": "m", "level": "l"}


def load_template_set(folder: str, prefix: str = "", name: str = None) -> TemplateSet:
    """Load <prefix>0.bmp .. <prefix>9.bmp as one template set."""
    name = name or prefix or "digits"
    bitmaps = []

    for digit in range(10):
        path = os.path.join(folder, f"{prefix}{digit}.bmp")
        logger.debug(f"Loading number sample from file {path}")

        if not os.path.exists(path):
            raise TemplateLoadError(f"Template file not found: {path}")

        image = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
        if image is None:
            raise TemplateLoadError(f"Could not load template image: {path}")

        bitmaps.append(binarize(image, 127))

    logger.info(f"Loaded template set '{name}' from {folder}")
    return TemplateSet(bitmaps, name=name)


def load_all_template_sets(folder: str) -> dict:
    return {name: load_template_set(folder, prefix, name) for name, prefix in TEMPLATE_PREFIXES.items()}


def load_exclusion_mask(path: str) -> ExclusionMask:
    """Every contour of the mask image becomes an exclusion polygon."""
    if not os.path.exists(path):
        raise TemplateLoadError(f"Mask file not found: {path}")

    image = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise TemplateLoadError(f"Could not load mask image: {path}")

    polygons = find_all_contours(binarize(image, 127))
    logger.info(f"Loaded exclusion mask with {len(polygons)} polygons from {path}")
    return ExclusionMask(polygons=polygons)
