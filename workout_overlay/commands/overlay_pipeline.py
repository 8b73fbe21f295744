#!/usr/bin/env python3
"""
Overlay Pipeline Command

End-to-end overlay workflow:
1. Decode the photo and parse the activity file
2. Build the stat lines
3. Compute the layout (reserving a watermark box for brand devices)
4. Sample the background and composite the watermark
5. Render the text
6. Encode the result

Each stage returns a new value; the input canvas is never modified.
"""

import logging
from datetime import tzinfo
from pathlib import Path
from typing import Optional

import numpy as np

from workout_overlay.config.overlay_config import BrandConfig, FormatConfig, GARMIN, OutputConfig
from workout_overlay.models import ActivityRecord, origin_in_bounds
from workout_overlay.services.activity_parser import parse_activity_file
from workout_overlay.services.device_classifier import DeviceClassifier
from workout_overlay.services.fonts import FontProvider
from workout_overlay.services.image_codec import decode_image, encode_image, resolve_output_path
from workout_overlay.services.layout_engine import LayoutEngine
from workout_overlay.services.observer import LoggingOverlayObserver, OverlayObserver
from workout_overlay.services.stat_lines import build_stat_lines
from workout_overlay.services.text_renderer import TextRenderer
from workout_overlay.services.watermark import (
    WatermarkAssetStore,
    WatermarkSelector,
    composite_watermark,
)


class OverlayPipeline:
    """Orchestrates the overlay stages for one photo"""

    def __init__(
        self,
        fonts: FontProvider,
        asset_store: WatermarkAssetStore,
        brand: BrandConfig = GARMIN,
        observer: Optional[OverlayObserver] = None,
        date_format: str = FormatConfig.DATE_FORMAT,
        tz: Optional[tzinfo] = None
    ):
        """
        Initialize overlay pipeline

        Args:
            fonts: Font provider for measuring and drawing text
            asset_store: Source of the watermark images
            brand: Brand table used for detection and name normalization
            observer: Receives stage events (defaults to logging)
            date_format: strftime format for the date subtext
            tz: Timezone for the start time (None = system local time)
        """
        self.logger = logging.getLogger(__name__)
        self.observer = observer or LoggingOverlayObserver()
        self.date_format = date_format
        self.tz = tz

        # Initialize components
        self.classifier = DeviceClassifier(brand)
        self.asset_store = asset_store
        self.layout_engine = LayoutEngine(fonts)
        self.selector = WatermarkSelector(asset_store, self.observer)
        self.renderer = TextRenderer(fonts, observer=self.observer)

    def compose(self, canvas: np.ndarray, record: ActivityRecord) -> np.ndarray:
        """
        Draw the overlay for a record

        Args:
            canvas: RGBA uint8 photo (not modified)
            record: Activity summary

        Returns:
            New RGBA canvas with watermark (if any) and stats drawn
        """
        height, width = canvas.shape[:2]

        lines = build_stat_lines(
            record,
            classifier=self.classifier,
            tz=self.tz,
            date_format=self.date_format
        )

        is_brand = self.classifier.is_brand_device(record.device_name)
        asset_size = self.asset_store.probe_size() if is_brand else None
        if is_brand:
            self.logger.info(f"Brand device detected: {record.device_name}")

        layout = self.layout_engine.compute(
            width,
            height,
            lines,
            include_watermark=is_brand,
            asset_size=asset_size
        )
        self.observer.layout_computed(layout)

        result = canvas
        box = layout.watermark_box
        if box is not None:
            # Luminance must be sampled before anything is drawn
            selection = self.selector.select(canvas, box)
            if selection is not None:
                variant, asset = selection
                result = composite_watermark(canvas, asset, box)
                if origin_in_bounds(box.x, box.y, width, height):
                    self.observer.watermark_composited(variant, box)
                else:
                    self.logger.debug(f"Watermark origin ({box.x}, {box.y}) outside canvas, skipped")

        return self.renderer.render(result, lines, layout)

    def run(
        self,
        image_path: Path,
        activity_path: Path,
        output_path: Optional[Path] = None
    ) -> Path:
        """
        Execute complete pipeline

        The output path is validated before any input is read, so a bad
        destination fails without side effects.

        Args:
            image_path: Photo to decorate
            activity_path: TCX or FIT activity file
            output_path: Destination file or directory (default: ./resultado_com_overlay.png)

        Returns:
            Path of the written image

        Raises:
            OverlayError: If any stage fails
        """
        destination = resolve_output_path(
            Path(output_path) if output_path else Path(OutputConfig.DEFAULT_OUTPUT_NAME)
        )

        canvas = decode_image(Path(image_path))
        self.logger.info(f"Loaded image {image_path}: {canvas.shape[1]}x{canvas.shape[0]}")

        record = parse_activity_file(Path(activity_path))
        self.logger.info(
            f"Activity: {record.format_duration()}, {record.calories} kcal, "
            f"device {record.device_name!r}"
        )

        result = self.compose(canvas, record)
        return encode_image(result, destination)
