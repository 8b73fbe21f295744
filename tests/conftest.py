"""Shared fixtures for the overlay tests."""

from datetime import datetime, timezone
from pathlib import Path

import cv2
import numpy as np
import pytest

from workout_overlay.config.resource_config import ResourceLocator
from workout_overlay.models import ActivityRecord, round_half_up
from workout_overlay.services.fonts import FontProvider
from workout_overlay.services.observer import OverlayObserver
from workout_overlay.services.watermark import WatermarkAssetStore


class FakeFontProvider(FontProvider):
    """Deterministic font metrics: each character is half the scale wide.

    Draw calls are recorded and painted as solid rectangles so tests can
    check which pixels were touched.
    """

    def __init__(self):
        self.calls = []

    def measure_text(self, role, text, scale):
        return round_half_up(len(text) * scale * 0.5), round_half_up(scale)

    def draw_text(self, draw, role, text, position, scale, color):
        self.calls.append((role, text, position, scale, color))
        width, height = self.measure_text(role, text, scale)
        if width <= 0 or height <= 0:
            return
        x, y = position
        draw.rectangle([x, y, x + width - 1, y + height - 1], fill=tuple(color))


class RecordingObserver(OverlayObserver):
    """Keeps every hook call as (hook_name, args)."""

    def __init__(self):
        self.events = []

    def names(self):
        return [name for name, _ in self.events]

    def last(self, name):
        for event_name, args in reversed(self.events):
            if event_name == name:
                return args
        return None

    def layout_computed(self, layout):
        self.events.append(("layout_computed", (layout,)))

    def luminance_sampled(self, box, luminance):
        self.events.append(("luminance_sampled", (box, luminance)))

    def watermark_selected(self, variant, luminance):
        self.events.append(("watermark_selected", (variant, luminance)))

    def watermark_asset_missing(self, variants):
        self.events.append(("watermark_asset_missing", (tuple(variants),)))

    def watermark_composited(self, variant, box):
        self.events.append(("watermark_composited", (variant, box)))

    def text_rendered(self, drawn, skipped):
        self.events.append(("text_rendered", (drawn, skipped)))


def make_canvas(width, height, rgb=(0, 0, 0), alpha=255):
    """Solid RGBA canvas."""
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, :3] = rgb
    canvas[:, :, 3] = alpha
    return canvas


def write_watermark(path: Path, rgb, size=(200, 50)):
    """Write a solid, fully opaque PNG through OpenCV (BGRA order)."""
    width, height = size
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, 0] = rgb[2]
    image[:, :, 1] = rgb[1]
    image[:, :, 2] = rgb[0]
    image[:, :, 3] = 255
    assert cv2.imwrite(str(path), image)
    return path


@pytest.fixture
def fake_fonts():
    return FakeFontProvider()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def empty_assets_dir(tmp_path):
    assets = tmp_path / "empty_assets"
    assets.mkdir()
    return assets


@pytest.fixture
def assets_dir(tmp_path):
    """Directory with white and black 200x50 watermarks."""
    assets = tmp_path / "assets"
    assets.mkdir()
    write_watermark(assets / "garmin_white.png", (255, 255, 255))
    write_watermark(assets / "garmin_black.png", (0, 0, 0))
    return assets


@pytest.fixture
def make_store(tmp_path):
    """Build an asset store that only looks inside tmp_path."""
    def _make(assets):
        return WatermarkAssetStore(ResourceLocator(assets_dir=assets, working_dir=tmp_path))
    return _make


@pytest.fixture
def garmin_record():
    return ActivityRecord(
        duration_seconds=3661,
        calories=512,
        avg_hr=140,
        max_hr=172,
        start_time=datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc),
        device_name="Forerunner 255",
    )


SAMPLE_TCX = """<?xml version="1.0" encoding="UTF-8"?>
<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2">
  <Activities>
    <Activity Sport="Running">
      <Id>2024-05-01T06:30:00Z</Id>
      <Lap StartTime="2024-05-01T06:30:00Z">
        <TotalTimeSeconds>3661.0</TotalTimeSeconds>
        <DistanceMeters>10000.0</DistanceMeters>
        <Calories>512</Calories>
        <AverageHeartRateBpm><Value>140</Value></AverageHeartRateBpm>
        <MaximumHeartRateBpm><Value>172</Value></MaximumHeartRateBpm>
      </Lap>
      <Creator>
        <Name>Forerunner 255</Name>
      </Creator>
    </Activity>
  </Activities>
</TrainingCenterDatabase>
"""


@pytest.fixture
def tcx_file(tmp_path):
    path = tmp_path / "activity.tcx"
    path.write_text(SAMPLE_TCX, encoding="utf-8")
    return path
