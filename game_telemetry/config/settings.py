"""Tunable parameters for digit matching, region filtering, unit tracking and the joystick."""

import os
import logging
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..core.exceptions import ConfigError
from ..core.models import Rect
from ..utils.file_utils import FileUtils

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Canonical frame size every capture is resized to
CANVAS_SIZE = (1280, 720)


class SizeRange(BaseModel):
    """Inclusive bounding-box limits for explicit-range segmentation."""

    h_min: int = Field(ge=0)
    h_max: int = Field(ge=0)
    w_min: int = Field(ge=0)
    w_max: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "SizeRange":
        if self.h_min > self.h_max or self.w_min > self.w_max:
            raise ValueError(f"Empty size range: h {self.h_min}-{self.h_max}, w {self.w_min}-{self.w_max}")
        return self

    def accepts(self, width: int, height: int) -> bool:
        return self.h_min <= height <= self.h_max and self.w_min <= width <= self.w_max


class FixedSizeRatios(BaseModel):
    """Region size limits as divisors of the cropped icon size (one game's icon geometry)."""

    height_min_div: float = Field(default=1.6, gt=0)
    height_max_div: float = Field(default=1.3, gt=0)
    width_min_div: float = Field(default=9.3, gt=0)
    width_max_div: float = Field(default=4.1, gt=0)

    def accepts(self, width: int, height: int, frame_width: int, frame_height: int) -> bool:
        if height > frame_height / self.height_max_div or height < frame_height / self.height_min_div:
            return False
        if width > frame_width / self.width_max_div or width < frame_width / self.width_min_div:
            return False
        return True


class ColorPurity(BaseModel):
    """Rejects coloured glyphs that survive binarization."""

    saturation_min: int = Field(default=70, ge=0, le=255)
    value_min: int = Field(default=30, ge=0, le=255)
    min_count: int = Field(default=12, ge=0)
    width_factor: int = Field(default=2, ge=0)

    def limit(self, region_width: int) -> int:
        return max(self.min_count, self.width_factor * region_width)


class IconSpec(BaseModel):
    """Fixed-coordinate number on the HUD: a round ability icon or a plain rectangle."""

    name: str
    template_set: str = Field(default="large", description="large | money | level")
    center: Optional[Tuple[int, int]] = None
    radius: Optional[float] = Field(default=None, gt=0)
    rect: Optional[Tuple[int, int, int, int]] = None
    error_threshold: float = Field(default=0.3, gt=0, le=1.0)
    bw_threshold: int = Field(default=150, ge=0, le=255)
    size_range: Optional[SizeRange] = None

    @model_validator(mode="after")
    def _check_geometry(self) -> "IconSpec":
        has_circle = self.center is not None and self.radius is not None
        if has_circle == (self.rect is not None):
            raise ValueError(f"Icon '{self.name}' needs exactly one of center+radius or rect")
        return self

    def crop_rect(self) -> Rect:
        if self.rect is not None:
            return Rect(*self.rect)
        return Rect.from_circle(self.center, self.radius)


class MatchingSettings(BaseModel):
    level_error_threshold: float = Field(default=0.3, gt=0, le=1.0)
    level_bw_threshold: int = Field(default=180, ge=0, le=255)


class UnitTrackingSettings(BaseModel):
    size_range: SizeRange = Field(default_factory=lambda: SizeRange(h_min=12, h_max=15, w_min=4, w_max=10))
    color_purity: ColorPurity = Field(default_factory=ColorPurity)
    pair_max_dy: int = Field(default=3, ge=1, description="Exclusive vertical limit for two-digit levels")
    pair_min_dx: int = Field(default=8, ge=0, description="Exclusive lower horizontal limit")
    pair_max_dx: int = Field(default=15, ge=1, description="Exclusive upper horizontal limit")
    max_level: int = Field(default=15, ge=1)
    match_distance: float = Field(default=20.0, gt=0, description="Nearest-entity distance threshold (px)")
    stale_after_ms: int = Field(default=3000, ge=0, description="Do not resurrect identities unseen this long")
    inactivity_window_ms: int = Field(default=1000, ge=0)
    min_appearances: int = Field(default=5, ge=0)


class JoystickSettings(BaseModel):
    search_region: Tuple[int, int, int, int] = (58, 411, 294, 309)
    axis: Tuple[int, int] = (206, 559)
    min_dist: float = 100.0
    canny_threshold: float = 50.0
    accumulator_threshold: float = 20.0
    min_radius: int = 40
    max_radius: int = 50


def _default_icons() -> List[IconSpec]:
    money_range = SizeRange(h_min=10, h_max=16, w_min=3, w_max=11)
    icons = [
        IconSpec(
            name="money",
            template_set="money",
            rect=(18, 340, 64, 22),
            error_threshold=0.99,
            bw_threshold=210,
            size_range=money_range,
        )
    ]
    spell_radius = 52.0
    skill_radius = 40.0
    for name, center in (("spell1_cd", (1161, 420)), ("spell2_cd", (1028, 497)), ("spell3_cd", (949, 630))):
        icons.append(IconSpec(name=name, center=center, radius=spell_radius))
    for name, center in (
        ("skill1_cd", (643, 644)),
        ("skill2_cd", (738, 644)),
        ("skill3_cd", (837, 644)),
        ("skill4_cd", (1155, 279)),
    ):
        icons.append(IconSpec(name=name, center=center, radius=skill_radius))
    return icons


class TelemetrySettings(BaseModel):
    """Complete run configuration; defaults reproduce the reference game layout."""

    canvas_size: Tuple[int, int] = CANVAS_SIZE
    samples_dir: str = "samples"
    mask_file: str = "mask.bmp"
    debug_dir: str = "debug_captures"
    fixed_size_ratios: FixedSizeRatios = Field(default_factory=FixedSizeRatios)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    units: UnitTrackingSettings = Field(default_factory=UnitTrackingSettings)
    joystick: JoystickSettings = Field(default_factory=JoystickSettings)
    icons: List[IconSpec] = Field(default_factory=_default_icons)

    @model_validator(mode="after")
    def _check_icon_names(self) -> "TelemetrySettings":
        names = [icon.name for icon in self.icons]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate icon names: {names}")
        return self


def load_settings(config_path: Optional[str] = None) -> TelemetrySettings:
    """Load settings from an optional JSON file, then apply environment overrides."""
    data = {}
    if config_path:
        data = FileUtils.load_json(config_path)
        if data is None:
            raise ConfigError(f"Could not read config file {config_path}")
        logger.info(f"Loading telemetry settings from {config_path}")

    samples_dir = os.getenv("TELEMETRY_SAMPLES_DIR")
    if samples_dir:
        data["samples_dir"] = samples_dir
    debug_dir = os.getenv("TELEMETRY_DEBUG_DIR")
    if debug_dir:
        data["debug_dir"] = debug_dir

    try:
        settings = TelemetrySettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid telemetry settings: {e}") from e

    logger.debug(f"Settings: {len(settings.icons)} icons, samples_dir={settings.samples_dir}")
    return settings
