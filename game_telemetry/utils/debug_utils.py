"""Debug output for digit matching: side-by-side region/template/difference captures."""

import os
import logging
from typing import Optional

import cv2
import numpy as np

from .file_utils import FileUtils

logger = logging.getLogger(__name__)

# BGR colours of the difference panel
REGION_ONLY = (0, 0, 255)
TEMPLATE_ONLY = (0, 255, 0)
AGREEMENT = (255, 0, 0)


def build_comparison(region: np.ndarray, template: np.ndarray) -> np.ndarray:
    """Region | template | per-pixel difference, all at template size."""
    h, w = template.shape[:2]
    region_fg = region > 0
    template_fg = template > 0

    canvas = np.zeros((h, w * 3, 3), dtype=np.uint8)
    canvas[:, :w] = cv2.cvtColor(region.astype(np.uint8), cv2.COLOR_GRAY2BGR)
    canvas[:, w : 2 * w] = cv2.cvtColor(template.astype(np.uint8), cv2.COLOR_GRAY2BGR)

    diff = canvas[:, 2 * w :]
    diff[region_fg & ~template_fg] = REGION_ONLY
    diff[~region_fg & template_fg] = TEMPLATE_ONLY
    diff[region_fg == template_fg] = AGREEMENT
    return canvas


class MatchDebugRecorder:
    """Matcher observer that writes one comparison image per template comparison."""

    def __init__(self, debug_dir: str = "debug_captures", scale: int = 4, max_images: Optional[int] = 5000):
        self.debug_dir = debug_dir
        self.scale = max(1, scale)
        self.max_images = max_images
        self.saved = 0
        self.frame_tag = "frame"

        FileUtils.ensure_directory_exists(self.debug_dir)
        logger.debug(f"MatchDebugRecorder initialized with directory: {debug_dir}")

    def set_frame(self, timestamp: int) -> None:
        self.frame_tag = f"{timestamp:09d}"

    def __call__(self, region: np.ndarray, template: np.ndarray, digit: int, score: float) -> None:
        if self.max_images is not None and self.saved >= self.max_images:
            return

        comparison = build_comparison(region, template)
        if self.scale > 1:
            comparison = cv2.resize(
                comparison, None, fx=self.scale, fy=self.scale, interpolation=cv2.INTER_NEAREST
            )

        filename = f"{self.frame_tag}_{self.saved:05d}_d{digit}_{int(score * 1000):03d}.png"
        path = os.path.join(self.debug_dir, filename)
        if cv2.imwrite(path, comparison):
            self.saved += 1
            logger.debug(f"Saved match comparison: {path}")
        else:
            logger.warning(f"Failed to save match comparison: {path}")
