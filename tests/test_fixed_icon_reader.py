"""Tests for reading numbers at fixed HUD coordinates."""
import numpy as np
import pytest

from conftest import blank_frame, glyph, paint
from game_telemetry.config import IconSpec, SizeRange
from game_telemetry.processing import FixedIconReader, RegionSegmenter
from game_telemetry.template_matching import DigitTemplateMatcher


@pytest.fixture
def reader():
    return FixedIconReader(DigitTemplateMatcher(), RegionSegmenter())


def test_digits_are_read_left_to_right(reader, tall_templates):
    crop = np.zeros((30, 60, 3), dtype=np.uint8)
    paint(crop, tall_templates[4].bitmap, 15, 4)
    paint(crop, tall_templates[2].bitmap, 32, 4)

    assert reader.read_number(crop, tall_templates, 0.3, 150) == 42


def test_blank_crop_reads_zero(reader, tall_templates):
    crop = np.zeros((30, 60, 3), dtype=np.uint8)

    assert reader.read_number(crop, tall_templates, 0.3, 150) == 0


def test_dim_digits_below_bw_threshold_are_ignored(reader, tall_templates):
    crop = np.zeros((30, 60, 3), dtype=np.uint8)
    paint(crop, tall_templates[7].bitmap, 20, 4, color=(120, 120, 120))

    assert reader.read_number(crop, tall_templates, 0.3, 150) == 0


def test_rect_icon_is_cropped_from_frame(reader, tall_templates):
    frame = blank_frame()
    paint(frame, tall_templates[2].bitmap, 118, 104)
    paint(frame, tall_templates[5].bitmap, 132, 104)
    icon = IconSpec(name="spell", rect=(100, 100, 60, 30))

    assert reader.read_icon(frame, icon, tall_templates) == 25


def test_round_icon_uses_its_digit_area(reader, tall_templates):
    # radius 40 at (640, 400) crops (608, 384, 64, 32)
    frame = blank_frame()
    paint(frame, tall_templates[9].bitmap, 630, 389)
    icon = IconSpec(name="skill", center=(640, 400), radius=40)

    assert reader.read_icon(frame, icon, tall_templates) == 9


def test_money_icon_uses_explicit_size_range(reader, small_templates):
    frame = blank_frame()
    for i, digit in enumerate((1, 2, 0)):
        paint(frame, small_templates[digit].bitmap, 24 + i * 13, 344)
    icon = IconSpec(
        name="money",
        template_set="money",
        rect=(18, 340, 64, 22),
        error_threshold=0.99,
        bw_threshold=210,
        size_range=SizeRange(h_min=10, h_max=16, w_min=3, w_max=11),
    )

    assert reader.read_icon(frame, icon, small_templates) == 120


def test_icon_outside_frame_reads_zero(reader, tall_templates):
    icon = IconSpec(name="offscreen", rect=(2000, 2000, 60, 30))

    assert reader.read_icon(blank_frame(), icon, tall_templates) == 0


def test_read_all_reports_every_icon(reader, tall_templates, small_templates, settings):
    sets = {"large": tall_templates, "money": tall_templates, "level": small_templates}

    readings = reader.read_all(blank_frame(), settings.icons, sets)

    assert list(readings) == [icon.name for icon in settings.icons]
    assert set(readings.values()) == {0}
