"""Tests for timestamped frame sequences."""
import cv2
import numpy as np
import pytest

from game_telemetry.capture import FrameSequence, parse_timestamp
from game_telemetry.core.exceptions import FrameReadError


@pytest.mark.parametrize(
    "name,expected",
    [
        ("capture_1.5.png", 1500),
        ("frames/run_2_3.png", 3000),
        ("capture_0.png", 0),
        ("capture_10.25.jpg", 10250),
        ("frame_12.345.png", 12345),
    ],
)
def test_parse_timestamp(name, expected):
    assert parse_timestamp(name) == expected


@pytest.mark.parametrize("name", ["capture.png", "capture_abc.png"])
def test_parse_timestamp_rejects_unnamed_frames(name):
    with pytest.raises(FrameReadError):
        parse_timestamp(name)


@pytest.fixture
def frame_folder(tmp_path):
    for seconds in ("1.0", "2.0", "3.0"):
        cv2.imwrite(str(tmp_path / f"f_{seconds}.png"), np.full((36, 64, 3), 40, dtype=np.uint8))
    (tmp_path / "notes.txt").write_text("not a frame", encoding="utf-8")
    return tmp_path


def test_sequence_yields_sorted_frames(frame_folder):
    frames = list(FrameSequence(str(frame_folder)))

    assert [ts for ts, _ in frames] == [1000, 2000, 3000]
    assert frames[0][1].shape == (36, 64, 3)


def test_sequence_slicing(frame_folder):
    sequence = FrameSequence(str(frame_folder), start=1, stop=2)

    assert len(sequence) == 1
    assert [ts for ts, _ in sequence] == [2000]


def test_empty_folder_is_an_empty_sequence(tmp_path):
    assert len(FrameSequence(str(tmp_path / "nothing"))) == 0


def test_unreadable_frame_raises(tmp_path):
    (tmp_path / "f_1.0.png").write_bytes(b"not an image")

    with pytest.raises(FrameReadError):
        list(FrameSequence(str(tmp_path)))


def test_sequence_orders_by_timestamp_not_name(tmp_path):
    for seconds in ("9.5", "10.0", "2.0"):
        cv2.imwrite(str(tmp_path / f"cap_{seconds}.png"), np.zeros((8, 8, 3), dtype=np.uint8))

    assert [ts for ts, _ in FrameSequence(str(tmp_path))] == [2000, 9500, 10000]
    assert [ts for ts, _ in FrameSequence(str(tmp_path), start=1)] == [9500, 10000]


def test_negative_timestamp_is_rejected():
    with pytest.raises(FrameReadError):
        parse_timestamp("frame_-0.5.png")


def test_unnamed_frame_in_folder_raises(tmp_path):
    cv2.imwrite(str(tmp_path / "snapshot.png"), np.zeros((8, 8, 3), dtype=np.uint8))

    with pytest.raises(FrameReadError):
        FrameSequence(str(tmp_path))
