"""Tests for luminance sampling, watermark selection and compositing."""

import logging

import numpy as np
import pytest

from workout_overlay.models import Box, WatermarkVariant
from workout_overlay.services.luminance import sample_luminance
from workout_overlay.services import watermark
from workout_overlay.services.observer import LoggingOverlayObserver
from workout_overlay.services.watermark import (
    WatermarkSelector,
    composite_watermark,
    select_watermark_variant,
)

from conftest import make_canvas, write_watermark


class TestSampleLuminance:

    def test_white(self):
        assert sample_luminance(make_canvas(100, 100, (255, 255, 255)), Box(10, 10, 20, 20)) == pytest.approx(255.0)

    def test_black(self):
        assert sample_luminance(make_canvas(100, 100), Box(10, 10, 20, 20)) == pytest.approx(0.0)

    def test_uses_rec709_weights(self):
        canvas = make_canvas(10, 10, (255, 0, 0))
        assert sample_luminance(canvas, Box(0, 0, 10, 10)) == pytest.approx(0.2126 * 255)

    def test_ignores_alpha(self):
        canvas = make_canvas(10, 10, (255, 255, 255), alpha=0)
        assert sample_luminance(canvas, Box(0, 0, 10, 10)) == pytest.approx(255.0)

    def test_out_of_bounds_is_neutral(self):
        canvas = make_canvas(100, 100)
        assert sample_luminance(canvas, Box(200, 200, 20, 20)) == 128.0
        assert sample_luminance(canvas, Box(-50, -50, 20, 20)) == 128.0

    def test_only_in_bounds_pixels_count(self):
        canvas = make_canvas(100, 100)
        canvas[:, 90:, :3] = 255
        # Box spans x=90..110; only the white columns 90..99 are inside
        assert sample_luminance(canvas, Box(90, 0, 20, 10)) == pytest.approx(255.0)

    def test_averages_region(self):
        canvas = make_canvas(10, 10)
        canvas[:5, :, :3] = 255
        assert sample_luminance(canvas, Box(0, 0, 10, 10)) == pytest.approx(127.5)


class TestSelectVariant:

    def test_dark_background_gets_light_mark(self):
        assert select_watermark_variant(0.0) is WatermarkVariant.LIGHT
        assert select_watermark_variant(127.9) is WatermarkVariant.LIGHT

    def test_light_background_gets_dark_mark(self):
        assert select_watermark_variant(255.0) is WatermarkVariant.DARK

    def test_neutral_value_is_not_dark(self):
        assert select_watermark_variant(128.0) is WatermarkVariant.DARK


class TestWatermarkSelector:

    def test_white_background_selects_dark(self, assets_dir, make_store, observer):
        selector = WatermarkSelector(make_store(assets_dir), observer)
        variant, asset = selector.select(make_canvas(100, 100, (255, 255, 255)), Box(10, 10, 40, 10))

        assert variant is WatermarkVariant.DARK
        assert asset.shape == (50, 200, 4)
        assert tuple(asset[0, 0]) == (0, 0, 0, 255)

    def test_black_background_selects_light(self, assets_dir, make_store, observer):
        selector = WatermarkSelector(make_store(assets_dir), observer)
        variant, asset = selector.select(make_canvas(100, 100), Box(10, 10, 40, 10))

        assert variant is WatermarkVariant.LIGHT
        assert tuple(asset[0, 0]) == (255, 255, 255, 255)
        assert observer.last("watermark_selected") == (WatermarkVariant.LIGHT, 0.0)

    def test_out_of_bounds_box_selects_dark(self, assets_dir, make_store, observer):
        selector = WatermarkSelector(make_store(assets_dir), observer)
        variant, _ = selector.select(make_canvas(100, 100), Box(500, 500, 40, 10))

        assert variant is WatermarkVariant.DARK
        assert observer.last("luminance_sampled")[1] == 128.0

    def test_missing_contrasting_variant_skips(self, tmp_path, make_store, observer):
        assets = tmp_path / "only_black"
        assets.mkdir()
        write_watermark(assets / "garmin_black.png", (0, 0, 0))

        selector = WatermarkSelector(make_store(assets), observer)
        canvas = make_canvas(100, 100, (20, 20, 20))

        # Black artwork exists but would vanish on a dark background
        assert selector.select(canvas, Box(10, 10, 40, 10)) is None
        assert observer.last("watermark_selected")[0] is WatermarkVariant.LIGHT
        assert observer.last("watermark_asset_missing") == ((WatermarkVariant.LIGHT,),)

    def test_assets_decoded_once_per_variant(self, assets_dir, make_store, monkeypatch):
        decoded = []
        real_decode = watermark.decode_image

        def counting_decode(path):
            decoded.append(path.name)
            return real_decode(path)

        monkeypatch.setattr(watermark, "decode_image", counting_decode)
        store = make_store(assets_dir)

        assert store.probe_size() == (200, 50)
        first = store.try_open(WatermarkVariant.LIGHT)
        second = store.try_open(WatermarkVariant.LIGHT)
        store.try_open(WatermarkVariant.DARK)
        store.try_open(WatermarkVariant.DARK)

        assert first is second
        assert sorted(decoded) == ["garmin_black.png", "garmin_white.png"]

    def test_missing_asset_lookup_cached(self, empty_assets_dir, make_store, monkeypatch):
        store = make_store(empty_assets_dir)
        lookups = []
        real_find = store.locator.find_asset

        def counting_find(filename):
            lookups.append(filename)
            return real_find(filename)

        monkeypatch.setattr(store.locator, "find_asset", counting_find)

        assert store.probe_size() is None
        assert store.try_open(WatermarkVariant.LIGHT) is None
        assert lookups == ["garmin_white.png", "garmin_black.png"]

    def test_no_assets_returns_none(self, empty_assets_dir, make_store, observer):
        selector = WatermarkSelector(make_store(empty_assets_dir), observer)

        assert selector.select(make_canvas(100, 100), Box(10, 10, 40, 10)) is None
        assert "watermark_asset_missing" in observer.names()

    def test_unreadable_asset_is_skipped(self, tmp_path, make_store):
        assets = tmp_path / "broken"
        assets.mkdir()
        (assets / "garmin_white.png").write_bytes(b"not a png")

        store = make_store(assets)
        assert store.try_open(WatermarkVariant.LIGHT) is None
        assert store.probe_size() is None

    def test_probe_size(self, assets_dir, make_store):
        assert make_store(assets_dir).probe_size() == (200, 50)


class TestCompositeWatermark:

    def test_opaque_asset_replaces_pixels(self):
        canvas = make_canvas(100, 100)
        asset = make_canvas(20, 10, (255, 255, 255))

        result = composite_watermark(canvas, asset, Box(10, 20, 20, 10))

        assert (result[20:30, 10:30] == 255).all()
        assert (result[:20, :, :3] == 0).all()
        assert (result[30:, :, :3] == 0).all()

    def test_does_not_modify_input(self):
        canvas = make_canvas(100, 100)
        composite_watermark(canvas, make_canvas(20, 10, (255, 255, 255)), Box(10, 20, 20, 10))
        assert (canvas[:, :, :3] == 0).all()

    def test_half_transparent_blend(self):
        canvas = make_canvas(50, 50)
        asset = make_canvas(10, 10, (255, 255, 255), alpha=128)

        result = composite_watermark(canvas, asset, Box(0, 0, 10, 10))

        assert tuple(result[5, 5]) == (128, 128, 128, 255)

    def test_transparent_asset_leaves_canvas(self):
        canvas = make_canvas(50, 50, (10, 20, 30))
        asset = make_canvas(10, 10, (255, 255, 255), alpha=0)

        result = composite_watermark(canvas, asset, Box(0, 0, 10, 10))

        assert np.array_equal(result, canvas)

    def test_resizes_to_box(self):
        canvas = make_canvas(100, 100)
        asset = make_canvas(200, 50, (255, 255, 255))

        result = composite_watermark(canvas, asset, Box(0, 0, 40, 10))

        assert (result[:10, :40] == 255).all()
        assert (result[10:, :, :3] == 0).all()
        assert (result[:, 40:, :3] == 0).all()

    def test_clipped_at_canvas_edge(self):
        canvas = make_canvas(100, 100)
        asset = make_canvas(20, 20, (255, 255, 255))

        result = composite_watermark(canvas, asset, Box(90, 90, 20, 20))

        assert result.shape == canvas.shape
        assert (result[90:, 90:] == 255).all()
        assert (result[:90, :, :3] == 0).all()

    @pytest.mark.parametrize("box", [
        Box(-5, 10, 20, 10),
        Box(10, 100, 20, 10),
        Box(10, 10, 0, 10),
    ])
    def test_skipped_boxes(self, box):
        canvas = make_canvas(100, 100)
        result = composite_watermark(canvas, make_canvas(20, 10, (255, 255, 255)), box)
        assert np.array_equal(result, canvas)


def test_logging_observer_warns_on_missing_asset(caplog):
    observer = LoggingOverlayObserver(logging.getLogger("test.observer"))

    with caplog.at_level(logging.WARNING, logger="test.observer"):
        observer.watermark_asset_missing([WatermarkVariant.LIGHT, WatermarkVariant.DARK])

    assert "No watermark asset available (light, dark)" in caplog.text
