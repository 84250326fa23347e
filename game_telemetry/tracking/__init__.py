"""Tracking module - persistent unit identities across frames."""

from .entity_tracker import EntityTracker

__all__ = ["EntityTracker"]
