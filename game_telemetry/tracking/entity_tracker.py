"""Persistent unit identities reconciled from noisy per-frame level readings."""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from ..core.models import NumericReading, TrackedEntity

logger = logging.getLogger(__name__)

DEFAULT_MATCH_DISTANCE = 20.0
DEFAULT_STALE_AFTER_MS = 3000


class EntityTracker:
    """Matches each reading against the single nearest known entity.

    Only the nearest entity inside the distance threshold is considered, even when
    another entity within range would be a better level match. Every reading ends
    in either a merge or a new identity; wrong decisions are never revisited.
    Readings must arrive in timestamp order.
    """

    def __init__(self, match_distance: float = DEFAULT_MATCH_DISTANCE, stale_after_ms: int = DEFAULT_STALE_AFTER_MS):
        self.match_distance = match_distance
        self.stale_after_ms = stale_after_ms
        self.next_identity = 0
        self._entities: Dict[int, TrackedEntity] = {}
        self._last_timestamp: Optional[int] = None

    def reconcile(self, reading: NumericReading, timestamp: int) -> TrackedEntity:
        """Merge the reading into its nearest entity or create a new one; returns a snapshot."""
        self._check_time(timestamp)
        nearest = self.nearest(reading.position)

        if nearest is None:
            entity = self._create(reading, timestamp)
            reason = "no entity nearby"
        elif max(0, timestamp - nearest.last_seen) > self.stale_after_ms:
            entity = self._create(reading, timestamp)
            reason = f"entity {nearest.identity} stale since {nearest.last_seen}ms"
        elif reading.value == nearest.level:
            entity = self._merge(nearest, reading, timestamp)
            reason = "same level"
        elif reading.value == nearest.level + 1:
            entity = self._merge(nearest, reading, timestamp)
            reason = "level up"
        else:
            entity = self._create(reading, timestamp)
            reason = f"level {nearest.level} -> {reading.value} from entity {nearest.identity}"

        logger.debug(
            f"Level {reading.value} unit at {reading.position}: identity {entity.identity} ({reason})"
        )
        return replace(entity)

    def nearest(self, position) -> Optional[TrackedEntity]:
        best = None
        best_distance = self.match_distance
        for entity in self._entities.values():
            distance = entity.distance_to(position)
            if distance < best_distance:
                best_distance = distance
                best = entity
        return best

    def evict(self, timestamp: int, inactivity_window: int, min_appearances: int) -> List[int]:
        """Drop entities both inactive too long and seen too rarely; returns removed identities."""
        removed = [
            identity
            for identity, entity in self._entities.items()
            if timestamp - entity.last_seen > inactivity_window and entity.appearance_count < min_appearances
        ]
        for identity in removed:
            entity = self._entities.pop(identity)
            logger.debug(
                f"Deleted entity {identity}, last seen at {entity.last_seen}ms "
                f"with {entity.appearance_count} appearance(s)"
            )
        return removed

    def get(self, identity: int) -> Optional[TrackedEntity]:
        entity = self._entities.get(identity)
        return replace(entity) if entity is not None else None

    @property
    def entities(self) -> List[TrackedEntity]:
        return [replace(self._entities[identity]) for identity in sorted(self._entities)]

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, identity: int) -> bool:
        return identity in self._entities

    def _create(self, reading: NumericReading, timestamp: int) -> TrackedEntity:
        entity = TrackedEntity(
            identity=self.next_identity,
            position=reading.position,
            level=reading.value,
            last_seen=timestamp,
            appearance_count=1,
        )
        self._entities[entity.identity] = entity
        self.next_identity += 1
        return entity

    @staticmethod
    def _merge(entity: TrackedEntity, reading: NumericReading, timestamp: int) -> TrackedEntity:
        entity.position = reading.position
        entity.level = reading.value
        entity.last_seen = max(entity.last_seen, timestamp)
        entity.appearance_count += 1
        return entity

    def _check_time(self, timestamp: int) -> None:
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            logger.warning(f"Reading at {timestamp}ms is older than the last reconciled frame ({self._last_timestamp}ms)")
        else:
            self._last_timestamp = timestamp
