"""Frame sequences read from a folder of timestamped captures."""

import os
import logging
from typing import Iterator, List, Optional, Tuple

import cv2
import numpy as np

from ..core.exceptions import FrameReadError
from ..utils.file_utils import FileUtils

logger = logging.getLogger(__name__)


def parse_timestamp(path: str) -> int:
    """Milliseconds from names like 'capture_12.345.png' (seconds after the last underscore)."""
    name = os.path.basename(path)
    stem = name[: name.rfind(".")] if "." in name else name
    underscore = stem.rfind("_")
    if underscore < 0:
        raise FrameReadError(f"No timestamp in frame name: {name}")

    try:
        seconds = float(stem[underscore + 1 :])
    except ValueError as e:
        raise FrameReadError(f"Invalid timestamp in frame name: {name}") from e

    if seconds < 0:
        raise FrameReadError(f"Negative timestamp in frame name: {name}")

    return int(round(seconds * 1000.0))


class FrameSequence:
    """Image files of a folder in timestamp order, optionally sliced by index."""

    def __init__(self, folder: str, start: Optional[int] = None, stop: Optional[int] = None):
        self.folder = folder
        paths = sorted(FileUtils.list_images(folder), key=lambda path: (parse_timestamp(path), path))
        self.paths: List[str] = paths[start:stop]

        if not self.paths:
            logger.warning(f"No frames found in {folder}")
        else:
            logger.info(f"FrameSequence initialized: {len(self.paths)} frames from {folder}")

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Tuple[int, np.ndarray]]:
        for path in self.paths:
            yield self.read(path)

    @staticmethod
    def read(path: str) -> Tuple[int, np.ndarray]:
        timestamp = parse_timestamp(path)
        logger.debug(f"Reading {path}")

        frame = cv2.imread(path, cv2.IMREAD_COLOR)
        if frame is None:
            raise FrameReadError(f"Failed reading image: {path}")

        return timestamp, frame
