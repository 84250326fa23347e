"""Pytest configuration and shared fixtures for the game telemetry tests.

Digit templates are built from a 5x7 dot-matrix font so every test runs without
sample images on disk. ``small`` glyphs (2x scale, at most 10x14) fit the default
unit-level size range; ``tall`` glyphs (3x vertical, 2x horizontal) fit the
fixed-ratio limits of a 60x30 icon crop.
"""
import sys
import logging
from pathlib import Path

import cv2
import numpy as np
import pytest

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from game_telemetry.config import TelemetrySettings
from game_telemetry.core.models import ExclusionMask
from game_telemetry.template_matching import TemplateSet

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

FONT_5X7 = {
    0: [".###.", "#...#", "#..##", "#.#.#", "##..#", "#...#", ".###."],
    1: ["..#..", ".##..", "..#..", "..#..", "..#..", "..#..", ".###."],
    2: [".###.", "#...#", "....#", "...#.", "..#..", ".#...", "#####"],
    3: ["#####", "...#.", "..#..", "...#.", "....#", "#...#", ".###."],
    4: ["...#.", "..##.", ".#.#.", "#..#.", "#####", "...#.", "...#."],
    5: ["#####", "#....", "####.", "....#", "....#", "#...#", ".###."],
    6: ["..##.", ".#...", "#....", "####.", "#...#", "#...#", ".###."],
    7: ["#####", "....#", "...#.", "..#..", ".#...", ".#...", ".#..."],
    8: [".###.", "#...#", "#...#", ".###.", "#...#", "#...#", ".###."],
    9: [".###.", "#...#", "#...#", ".####", "....#", "...#.", ".##.."],
}


def glyph(digit: int, sy: int = 2, sx: int = 2) -> np.ndarray:
    """Digit bitmap (0/255) cropped to its foreground, as sampled templates are."""
    rows = FONT_5X7[digit]
    base = np.array([[255 if ch == "#" else 0 for ch in row] for row in rows], dtype=np.uint8)
    scaled = np.kron(base, np.ones((sy, sx), dtype=np.uint8))
    ys, xs = np.nonzero(scaled)
    return scaled[ys.min() : ys.max() + 1, xs.min() : xs.max() + 1].copy()


def paint(image: np.ndarray, bitmap: np.ndarray, x: int, y: int, color=(255, 255, 255)) -> None:
    """Draw a bitmap's foreground onto a gray or BGR image at (x, y)."""
    h, w = bitmap.shape
    target = image[y : y + h, x : x + w]
    target[bitmap > 0] = color if image.ndim == 3 else color[0]


def blank_frame(width: int = 1280, height: int = 720) -> np.ndarray:
    return np.zeros((height, width, 3), dtype=np.uint8)


@pytest.fixture(scope="session")
def small_templates():
    return TemplateSet([glyph(d) for d in range(10)], name="level")


@pytest.fixture(scope="session")
def tall_templates():
    return TemplateSet([glyph(d, sy=3, sx=2) for d in range(10)], name="large")


@pytest.fixture
def template_sets(small_templates, tall_templates):
    return {"level": small_templates, "large": tall_templates, "money": tall_templates}


@pytest.fixture
def empty_mask():
    return ExclusionMask(polygons=[])


@pytest.fixture
def settings():
    return TelemetrySettings()


def write_samples(folder: Path) -> Path:
    """Write the three template sets and an empty mask as .bmp files, as the samples folder holds them."""
    folder.mkdir(parents=True, exist_ok=True)
    for prefix, (sy, sx) in {"": (3, 2), "m": (3, 2), "l": (2, 2)}.items():
        for digit in range(10):
            cv2.imwrite(str(folder / f"{prefix}{digit}.bmp"), glyph(digit, sy=sy, sx=sx))
    cv2.imwrite(str(folder / "mask.bmp"), np.zeros((720, 1280), dtype=np.uint8))
    return folder
