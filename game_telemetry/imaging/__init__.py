# Image primitives: thresholding, contours, polygons and circles
from .primitives import (
    binarize,
    bounding_box,
    detect_circles,
    find_all_contours,
    find_external_contours,
    normalize_frame,
    point_in_polygon,
    to_gray,
    to_hsv,
)

__all__ = [
    "binarize",
    "bounding_box",
    "detect_circles",
    "find_all_contours",
    "find_external_contours",
    "normalize_frame",
    "point_in_polygon",
    "to_gray",
    "to_hsv",
]
