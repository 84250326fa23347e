# Data models shared by the per-frame extraction and tracking stages
import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Point = Tuple[int, int]  # x, y (absolute pixels)


@dataclass(frozen=True)
class Rect:  # Axis-aligned rectangle in absolute pixels
    x: int
    y: int
    width: int
    height: int

    @property
    def top_left(self) -> Point:
        return (self.x, self.y)

    def corners(self) -> List[Point]:
        # Same corner convention as the bounding box: right/bottom edges are x+w, y+h
        return [
            (self.x, self.y),
            (self.x + self.width, self.y),
            (self.x, self.y + self.height),
            (self.x + self.width, self.y + self.height),
        ]

    def slice(self, image: np.ndarray) -> np.ndarray:
        return image[self.y : self.y + self.height, self.x : self.x + self.width]

    @staticmethod
    def from_circle(center: Point, radius: float) -> "Rect":
        """Digit area inside a round ability icon: 1.6r wide, 0.8r tall, centred."""
        cx, cy = center
        return Rect(
            x=int(cx - radius * 0.8),
            y=int(cy - radius * 0.4),
            width=int(radius * 1.6),
            height=int(radius * 0.8),
        )


@dataclass
class CandidateRegion:  # Rectangle proposed as containing a single glyph
    rect: Rect
    pixels: np.ndarray  # binary block bounded by rect


@dataclass(frozen=True)
class DigitMatch:  # Best template for one region
    digit: int
    score: float


@dataclass(frozen=True)
class DigitReading:  # Recognised digit at a region's top-left corner
    position: Point
    digit: int


@dataclass(frozen=True)
class NumericReading:  # Value assembled from one or two adjacent digit readings
    position: Point
    value: int
    digit_count: int = 1


@dataclass
class TrackedEntity:  # Persistent unit identity owned by EntityTracker
    identity: int
    position: Point
    level: int
    last_seen: int  # ms
    appearance_count: int = 1

    def distance_to(self, point: Point) -> float:
        return math.hypot(point[0] - self.position[0], point[1] - self.position[1])


@dataclass
class ExclusionMask:  # Polygons covering UI furniture that resembles digits
    polygons: List[np.ndarray] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.polygons)
