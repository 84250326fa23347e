"""Per-frame telemetry extraction: unit levels and identities, HUD numbers and joystick."""

import os
import time
import logging
from functools import partial
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from ..config.settings import TelemetrySettings
from ..imaging.primitives import binarize, detect_circles, normalize_frame
from ..models.schema import AxisStatistics, EntitySnapshot, FrameStatus
from ..processing.fixed_icon_reader import FixedIconReader
from ..processing.joystick_estimator import CircleDetector, JoystickEstimator
from ..processing.number_composer import NumberComposer
from ..processing.region_segmenter import RegionSegmenter
from ..template_matching.digit_matcher import CompareObserver, DigitTemplateMatcher, TemplateSet
from ..template_matching.template_loader import load_all_template_sets, load_exclusion_mask
from ..tracking.entity_tracker import EntityTracker
from .exceptions import TemplateLoadError
from .models import DigitReading, ExclusionMask, Rect
from .status_log import FrameStatusAggregator

logger = logging.getLogger(__name__)


class GameTelemetryAnalyzer:
    """Runs every extraction stage on a frame and records one FrameStatus per frame.

    Template sets and the exclusion mask are loaded by the caller (or by
    ``from_samples``) and never change during a run. Frames must be fed in
    timestamp order; an older frame is skipped.
    """

    def __init__(
        self,
        settings: TelemetrySettings,
        template_sets: Mapping[str, TemplateSet],
        exclusion_mask: ExclusionMask,
        circle_detector: Optional[CircleDetector] = None,
        observer: Optional[CompareObserver] = None,
    ):
        missing = {"level"} | {icon.template_set for icon in settings.icons}
        missing -= set(template_sets)
        if missing:
            raise TemplateLoadError(f"Missing template sets: {sorted(missing)}")

        self.settings = settings
        self.template_sets = dict(template_sets)
        self.exclusion_mask = exclusion_mask

        units = settings.units
        self.matcher = DigitTemplateMatcher(observer=observer)
        self.segmenter = RegionSegmenter(settings.fixed_size_ratios, units.color_purity)
        self.composer = NumberComposer(units.pair_max_dy, units.pair_min_dx, units.pair_max_dx, units.max_level)
        self.tracker = EntityTracker(units.match_distance, units.stale_after_ms)
        self.icon_reader = FixedIconReader(self.matcher, self.segmenter)

        if circle_detector is None:
            js = settings.joystick
            circle_detector = partial(
                detect_circles,
                min_dist=js.min_dist,
                canny_threshold=js.canny_threshold,
                accumulator_threshold=js.accumulator_threshold,
                min_radius=js.min_radius,
                max_radius=js.max_radius,
            )
        self.joystick = JoystickEstimator(circle_detector)
        self.status_log = FrameStatusAggregator()

        logger.info(
            f"Telemetry analyzer ready: {len(settings.icons)} icons, {len(exclusion_mask)} mask polygons"
        )

    @classmethod
    def from_samples(cls, settings: TelemetrySettings, **kwargs) -> "GameTelemetryAnalyzer":
        """Load the three template sets and the icon mask from the samples folder."""
        template_sets = load_all_template_sets(settings.samples_dir)
        mask = load_exclusion_mask(os.path.join(settings.samples_dir, settings.mask_file))
        return cls(settings, template_sets, mask, **kwargs)

    def process_frame(self, frame: np.ndarray, timestamp: int) -> Optional[FrameStatus]:
        """Extract everything from one frame; None when the frame is out of order."""
        if timestamp < 0:
            raise ValueError(f"Frame timestamp must be non-negative, got {timestamp}ms")

        latest = self.status_log.latest
        if latest is not None and timestamp < latest.timestamp:
            logger.warning(f"Skipping frame at {timestamp}ms, older than last frame at {latest.timestamp}ms")
            return None

        start_time = time.time()
        frame = normalize_frame(frame, self.settings.canvas_size)

        entities = self.track_units(frame, timestamp)
        units = self.settings.units
        self.tracker.evict(timestamp, units.inactivity_window_ms, units.min_appearances)

        icon_readings = self.icon_reader.read_all(frame, self.settings.icons, self.template_sets)

        js = self.settings.joystick
        angle = self.joystick.estimate(frame, js.axis, Rect(*js.search_region))

        status = FrameStatus(
            timestamp=timestamp,
            joystick_angle=angle,
            icon_readings=icon_readings,
            entities=entities,
        )
        self.status_log.record(status)

        logger.debug(f"Frame {timestamp}ms processed in {(time.time() - start_time) * 1000:.1f}ms")
        return status

    def track_units(self, frame: np.ndarray, timestamp: int) -> List[EntitySnapshot]:
        """Level digits anywhere on screen, composed into levels and reconciled into identities."""
        binary = binarize(frame, self.settings.matching.level_bw_threshold)
        regions = self.segmenter.segment(
            binary,
            size_range=self.settings.units.size_range,
            exclusion_mask=self.exclusion_mask,
            color_source=frame,
        )

        templates = self.template_sets["level"]
        threshold = self.settings.matching.level_error_threshold
        readings = []
        for region in regions:
            match = self.matcher.classify(region.pixels, templates, threshold)
            if match is not None:
                readings.append(DigitReading(position=region.rect.top_left, digit=match.digit))

        snapshots = []
        for reading in self.composer.compose(readings):
            entity = self.tracker.reconcile(reading, timestamp)
            snapshots.append(
                EntitySnapshot(identity=entity.identity, position=entity.position, level=entity.level)
            )
        return snapshots

    def axis_statistics(self) -> Optional[AxisStatistics]:
        return self.joystick.statistics()

    def summary(self) -> Dict[str, Any]:
        stats = self.axis_statistics()
        return {
            "frames_processed": len(self.status_log),
            "tracked_entities": len(self.tracker),
            "identities_assigned": self.tracker.next_identity,
            "joystick_detections": len(self.joystick.distances),
            "axis_statistics": stats.model_dump() if stats else None,
        }

    def print_summary(self) -> None:
        """Print concise end-of-run summary to console."""
        summary = self.summary()
        print("\n" + "=" * 50)
        print("TELEMETRY SUMMARY")
        print("=" * 50)
        print(f"Frames processed: {summary['frames_processed']}")
        print(f"Identities assigned: {summary['identities_assigned']} ({summary['tracked_entities']} still tracked)")
        print(f"Joystick detections: {summary['joystick_detections']}")

        stats = summary["axis_statistics"]
        if stats is None:
            print("Joystick to axis length: no samples")
        elif stats["std"] is None:
            print(f"Joystick to axis length mean: {stats['mean']:.4f}, std: n/a (single sample)")
        else:
            print(f"Joystick to axis length mean: {stats['mean']:.4f}, std: {stats['std']:.4f}")

        print("\nTRACKED UNITS:")
        print("Id\tLevel\tPosition\tLast seen\tAppearances")
        for entity in self.tracker.entities:
            print(
                f"{entity.identity}\t{entity.level}\t{entity.position}\t{entity.last_seen}ms\t\t{entity.appearance_count}"
            )
