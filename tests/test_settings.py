"""Tests for pydantic settings and the JSON/environment loader."""
import json

import pytest
from pydantic import ValidationError

from game_telemetry.config import IconSpec, SizeRange, TelemetrySettings, load_settings
from game_telemetry.core.exceptions import ConfigError
from game_telemetry.core.models import Rect


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TELEMETRY_SAMPLES_DIR", raising=False)
    monkeypatch.delenv("TELEMETRY_DEBUG_DIR", raising=False)


def write_config(tmp_path, data):
    path = tmp_path / "telemetry.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_describe_reference_layout(settings):
    names = [icon.name for icon in settings.icons]

    assert settings.canvas_size == (1280, 720)
    assert names[0] == "money"
    assert len(names) == 8
    assert settings.units.size_range.accepts(10, 14)
    assert settings.joystick.axis == (206, 559)


def test_round_icon_crop_rect():
    icon = IconSpec(name="skill1_cd", center=(643, 644), radius=40)

    assert icon.crop_rect() == Rect(611, 628, 64, 32)


@pytest.mark.parametrize(
    "geometry",
    [{}, {"center": (10, 10)}, {"center": (10, 10), "radius": 5, "rect": (0, 0, 5, 5)}],
)
def test_icon_needs_exactly_one_geometry(geometry):
    with pytest.raises(ValidationError):
        IconSpec(name="bad", **geometry)


def test_duplicate_icon_names_rejected():
    icon = IconSpec(name="dup", rect=(0, 0, 10, 10))

    with pytest.raises(ValidationError):
        TelemetrySettings(icons=[icon, icon])


def test_size_range_must_not_be_empty():
    with pytest.raises(ValidationError):
        SizeRange(h_min=15, h_max=12, w_min=4, w_max=10)


def test_json_overrides_nested_values(tmp_path):
    path = write_config(tmp_path, {"units": {"match_distance": 25.0}, "samples_dir": "assets"})

    settings = load_settings(path)

    assert settings.units.match_distance == 25.0
    assert settings.units.stale_after_ms == 3000
    assert settings.samples_dir == "assets"


def test_invalid_values_raise_config_error(tmp_path):
    path = write_config(tmp_path, {"units": {"size_range": {"h_min": 20, "h_max": 10, "w_min": 1, "w_max": 2}}})

    with pytest.raises(ConfigError):
        load_settings(path)


def test_unreadable_config_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "missing.json"))


def test_environment_overrides_directories(tmp_path, monkeypatch):
    monkeypatch.setenv("TELEMETRY_SAMPLES_DIR", "/data/samples")
    monkeypatch.setenv("TELEMETRY_DEBUG_DIR", "/tmp/captures")
    path = write_config(tmp_path, {"samples_dir": "assets"})

    settings = load_settings(path)

    assert settings.samples_dir == "/data/samples"
    assert settings.debug_dir == "/tmp/captures"
