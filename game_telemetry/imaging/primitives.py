# OpenCV primitives used by the extraction stages
from typing import List, Tuple

import cv2
import numpy as np

from ..core.models import Point, Rect

Circle = Tuple[Tuple[float, float], float]  # (center x, center y), radius


def normalize_frame(frame: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """Resize to the canonical (width, height) when the frame is any other size."""
    width, height = size
    if frame.shape[1] == width and frame.shape[0] == height:
        return frame
    return cv2.resize(frame, (width, height), interpolation=cv2.INTER_LINEAR)


def to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def binarize(image: np.ndarray, threshold: int) -> np.ndarray:
    """Pixels strictly above threshold become 255, the rest 0."""
    gray = to_gray(image)
    _, binary = cv2.threshold(gray, threshold, 255, cv2.THRESH_BINARY)
    return binary


def find_external_contours(binary: np.ndarray) -> List[np.ndarray]:
    contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)
    return list(contours)


def find_all_contours(binary: np.ndarray) -> List[np.ndarray]:
    contours, _ = cv2.findContours(binary, cv2.RETR_LIST, cv2.CHAIN_APPROX_NONE)
    return list(contours)


def bounding_box(polygon: np.ndarray) -> Rect:
    x, y, w, h = cv2.boundingRect(polygon)
    return Rect(int(x), int(y), int(w), int(h))


def point_in_polygon(polygon: np.ndarray, point: Point) -> bool:
    """True only when the point lies strictly inside (edges do not count)."""
    return cv2.pointPolygonTest(polygon, (float(point[0]), float(point[1])), False) > 0


def to_hsv(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return cv2.cvtColor(image, cv2.COLOR_BGR2HSV)


def detect_circles(
    image: np.ndarray,
    min_dist: float = 100.0,
    canny_threshold: float = 50.0,
    accumulator_threshold: float = 20.0,
    min_radius: int = 40,
    max_radius: int = 50,
) -> List[Circle]:
    """Hough gradient circle detection, strongest circle first."""
    gray = to_gray(image)
    circles = cv2.HoughCircles(
        gray,
        cv2.HOUGH_GRADIENT,
        1,
        min_dist,
        param1=canny_threshold,
        param2=accumulator_threshold,
        minRadius=min_radius,
        maxRadius=max_radius,
    )
    if circles is None:
        return []
    return [((float(c[0]), float(c[1])), float(c[2])) for c in circles[0]]
