#!/usr/bin/env python3
"""
Watermark Service

Finds the brand watermark images, picks the variant that contrasts with
the background and alpha-composites it onto the canvas.

Flow:
1. sample background luminance under the watermark box (untouched canvas)
2. luminance < 128 → light (white) artwork, otherwise dark (black) artwork
3. resize the asset to the box with area averaging
4. "over" blend with the asset's alpha, clipped to the canvas

A missing or unreadable asset is never fatal: the watermark is skipped.
The other variant is never drawn in its place.
"""

import logging
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from workout_overlay.config.overlay_config import WatermarkConfig, get_interpolation_method
from workout_overlay.config.resource_config import ResourceLocator
from workout_overlay.errors import ImageCodecError, InputFileError
from workout_overlay.models import Box, WatermarkVariant, clip_box, origin_in_bounds
from workout_overlay.services.image_codec import decode_image
from workout_overlay.services.luminance import sample_luminance
from workout_overlay.services.observer import OverlayObserver

ASSET_NAMES = {
    WatermarkVariant.LIGHT: WatermarkConfig.LIGHT_ASSET_NAME,
    WatermarkVariant.DARK: WatermarkConfig.DARK_ASSET_NAME,
}

# Lookup order for the native asset size
SIZE_LOOKUP_ORDER = (WatermarkVariant.LIGHT, WatermarkVariant.DARK)


def select_watermark_variant(
    luminance: float,
    threshold: float = WatermarkConfig.LUMINANCE_THRESHOLD
) -> WatermarkVariant:
    """
    Choose the variant with the best contrast for a background

    Args:
        luminance: Average background luminance (0-255)
        threshold: Values strictly below it count as dark backgrounds

    Returns:
        LIGHT for dark backgrounds, DARK otherwise
    """
    if luminance < threshold:
        return WatermarkVariant.LIGHT
    return WatermarkVariant.DARK


class WatermarkAssetStore:
    """Loads watermark images through a ResourceLocator, once per variant"""

    def __init__(self, locator: ResourceLocator):
        self.logger = logging.getLogger(__name__)
        self.locator = locator
        # Decoded assets (None for missing/unreadable ones)
        self._cache: Dict[WatermarkVariant, Optional[np.ndarray]] = {}

    def try_open(self, variant: WatermarkVariant) -> Optional[np.ndarray]:
        """
        Load a watermark variant

        Each variant is looked up and decoded at most once; later calls
        return the cached result. Callers must not modify the array.

        Args:
            variant: Variant to load

        Returns:
            RGBA array, or None if the file is missing or undecodable
        """
        if variant not in self._cache:
            self._cache[variant] = self._load(variant)
        return self._cache[variant]

    def _load(self, variant: WatermarkVariant) -> Optional[np.ndarray]:
        filename = ASSET_NAMES[variant]
        path = self.locator.find_asset(filename)
        if path is None:
            self.logger.debug(f"Watermark asset not found: {filename}")
            return None

        try:
            return decode_image(path)
        except (InputFileError, ImageCodecError) as e:
            self.logger.warning(f"Ignoring unreadable watermark {path}: {e}")
            return None

    def probe_size(self) -> Optional[Tuple[int, int]]:
        """
        Native (width, height) of the first loadable variant

        Only sizes the watermark box; which variant is drawn is decided
        later from the background.

        Returns:
            Asset size, or None when no variant can be loaded
        """
        for variant in SIZE_LOOKUP_ORDER:
            asset = self.try_open(variant)
            if asset is not None:
                height, width = asset.shape[:2]
                return width, height
        return None


class WatermarkSelector:
    """Combines background sampling with asset availability"""

    def __init__(self, store: WatermarkAssetStore, observer: Optional[OverlayObserver] = None):
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.observer = observer or OverlayObserver()

    def select(
        self,
        canvas: np.ndarray,
        box: Box
    ) -> Optional[Tuple[WatermarkVariant, np.ndarray]]:
        """
        Pick and load the watermark for a box

        Must be called before any overlay pixels are drawn on the canvas.
        Only the variant that contrasts with the background is used: if it
        cannot be loaded the watermark is skipped, even when the other
        variant exists.

        Args:
            canvas: Untouched RGBA canvas
            box: Watermark target box

        Returns:
            (variant, RGBA asset), or None when the contrasting variant is unavailable
        """
        luminance = sample_luminance(canvas, box)
        self.observer.luminance_sampled(box, luminance)

        variant = select_watermark_variant(luminance)
        self.observer.watermark_selected(variant, luminance)

        asset = self.store.try_open(variant)
        if asset is None:
            self.observer.watermark_asset_missing((variant,))
            return None

        return variant, asset


def composite_watermark(canvas: np.ndarray, asset: np.ndarray, box: Box) -> np.ndarray:
    """
    Resize an RGBA asset to box and blend it over the canvas

    Boxes with an empty size or an origin outside the canvas are skipped;
    otherwise whatever part overflows the right/bottom edge is clipped.

    Args:
        canvas: RGBA uint8 canvas (not modified)
        asset: RGBA uint8 watermark
        box: Target box in canvas coordinates

    Returns:
        New canvas with the watermark applied (an unchanged copy if skipped)
    """
    result = canvas.copy()
    canvas_height, canvas_width = canvas.shape[:2]

    if box.width <= 0 or box.height <= 0:
        return result
    if not origin_in_bounds(box.x, box.y, canvas_width, canvas_height):
        return result

    resized = cv2.resize(asset, (box.width, box.height), interpolation=get_interpolation_method())

    region = clip_box(box, canvas_width, canvas_height)
    src = resized[:region.height, :region.width].astype(np.float64) / 255.0
    dst = result[region.y:region.bottom, region.x:region.right].astype(np.float64) / 255.0

    src_alpha = src[:, :, 3:4]
    dst_alpha = dst[:, :, 3:4]
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)

    premultiplied = src[:, :, :3] * src_alpha + dst[:, :, :3] * dst_alpha * (1.0 - src_alpha)
    out_rgb = np.divide(
        premultiplied,
        out_alpha,
        out=np.zeros_like(premultiplied),
        where=out_alpha > 0
    )

    blended = np.concatenate([out_rgb, out_alpha], axis=2)
    result[region.y:region.bottom, region.x:region.right] = np.clip(
        np.rint(blended * 255.0), 0, 255
    ).astype(np.uint8)
    return result
