# Append-only, in-memory log of per-frame telemetry
import logging
from typing import Optional, Tuple

from ..models.schema import FrameStatus

logger = logging.getLogger(__name__)


class FrameStatusAggregator:  # One FrameStatus per processed frame, in timestamp order

    def __init__(self):
        self._statuses = []

    def record(self, status: FrameStatus) -> None:
        latest = self.latest
        if latest is not None and status.timestamp < latest.timestamp:
            raise ValueError(f"Frame at {status.timestamp}ms recorded after frame at {latest.timestamp}ms")
        self._statuses.append(status)

    @property
    def statuses(self) -> Tuple[FrameStatus, ...]:
        return tuple(self._statuses)

    @property
    def latest(self) -> Optional[FrameStatus]:
        return self._statuses[-1] if self._statuses else None

    def __len__(self) -> int:
        return len(self._statuses)

    def __iter__(self):
        return iter(tuple(self._statuses))
