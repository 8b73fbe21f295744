#!/usr/bin/env python3
"""
Luminance Sampler

Average perceived brightness (Rec. 709 luma) of a canvas region. Used to
pick the watermark variant that stands out against the background, so it
must run before anything is drawn on the canvas.
"""

import numpy as np

from workout_overlay.config.overlay_config import WatermarkConfig
from workout_overlay.models import Box, clip_box


def sample_luminance(canvas: np.ndarray, box: Box) -> float:
    """
    Mean luminance of the canvas pixels inside box

    Alpha is ignored. Only pixels inside both the box and the canvas count.

    Args:
        canvas: RGBA (or RGB) uint8 array, shape (H, W, C)
        box: Rectangle to sample

    Returns:
        Average luminance in [0, 255], or 128 if no pixel is in bounds
    """
    height, width = canvas.shape[:2]
    region = clip_box(box, width, height)

    if region.width == 0 or region.height == 0:
        return WatermarkConfig.NEUTRAL_LUMINANCE

    pixels = canvas[region.y:region.bottom, region.x:region.right, :3].astype(np.float64)
    luma = pixels @ np.asarray(WatermarkConfig.LUMA_COEFFICIENTS, dtype=np.float64)
    return float(luma.mean())
