"""Candidate digit regions from a binarized image via external contours."""

import logging
from typing import List, Optional

import numpy as np

from ..config.settings import ColorPurity, FixedSizeRatios, SizeRange
from ..core.models import CandidateRegion, ExclusionMask, Rect
from ..imaging.primitives import bounding_box, find_external_contours, point_in_polygon, to_hsv

logger = logging.getLogger(__name__)


class RegionSegmenter:
    """Proposes glyph-sized regions.

    Without a size range, limits are ratios of the binary image size (fixed-coordinate
    icon crops). With a size range, limits are absolute pixels. Supplying an exclusion
    mask also enables the corner test against mask polygons and the colour-purity
    check on the source frame pixels.
    """

    def __init__(self, fixed_ratios: FixedSizeRatios = None, color_purity: ColorPurity = None):
        self.fixed_ratios = fixed_ratios or FixedSizeRatios()
        self.color_purity = color_purity or ColorPurity()

    def segment(
        self,
        binary: np.ndarray,
        size_range: Optional[SizeRange] = None,
        exclusion_mask: Optional[ExclusionMask] = None,
        color_source: Optional[np.ndarray] = None,
    ) -> List[CandidateRegion]:
        if exclusion_mask is not None and color_source is None:
            raise ValueError("Masked segmentation needs the colour frame for the purity check")

        frame_height, frame_width = binary.shape[:2]
        hsv = to_hsv(color_source) if exclusion_mask is not None else None
        regions = []

        for contour in find_external_contours(binary):
            rect = bounding_box(contour)

            if size_range is None:
                if not self.fixed_ratios.accepts(rect.width, rect.height, frame_width, frame_height):
                    continue
            elif not size_range.accepts(rect.width, rect.height):
                continue

            if exclusion_mask is not None:
                if self.is_masked(rect, exclusion_mask):
                    logger.debug(f"Region {rect} masked out")
                    continue
                if hsv is not None and not self.is_black_white(rect.slice(hsv)):
                    logger.debug(f"Region {rect} failed colour check")
                    continue

            regions.append(CandidateRegion(rect=rect, pixels=rect.slice(binary).copy()))

        return regions

    @staticmethod
    def is_masked(rect: Rect, exclusion_mask: ExclusionMask) -> bool:
        return any(
            point_in_polygon(polygon, corner) for polygon in exclusion_mask.polygons for corner in rect.corners()
        )

    def is_black_white(self, hsv_region: np.ndarray) -> bool:
        """Fewer saturated, non-dark pixels than the purity limit."""
        saturation = hsv_region[..., 1]
        value = hsv_region[..., 2]
        color_pixels = int(
            np.count_nonzero((saturation > self.color_purity.saturation_min) & (value > self.color_purity.value_min))
        )
        return color_pixels < self.color_purity.limit(hsv_region.shape[1])
