#!/usr/bin/env python3
"""
Overlay Observer

Hooks the engine calls at fixed points of a run. The default observer
writes them to the standard logging tree; tests inject a recorder.
"""

import logging
from typing import Iterable, Optional

from workout_overlay.models import Box, OverlayLayout, WatermarkVariant


class OverlayObserver:
    """No-op base observer; override the hooks you need"""

    def layout_computed(self, layout: OverlayLayout) -> None:
        pass

    def luminance_sampled(self, box: Box, luminance: float) -> None:
        pass

    def watermark_selected(self, variant: WatermarkVariant, luminance: float) -> None:
        pass

    def watermark_asset_missing(self, variants: Iterable[WatermarkVariant]) -> None:
        pass

    def watermark_composited(self, variant: WatermarkVariant, box: Box) -> None:
        pass

    def text_rendered(self, drawn: int, skipped: int) -> None:
        pass


class LoggingOverlayObserver(OverlayObserver):
    """Observer that reports every hook through logging"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def layout_computed(self, layout: OverlayLayout) -> None:
        stats = layout.stats_box
        self.logger.info(
            f"Layout: font_scale={layout.font_scale} "
            f"stats={stats.width}x{stats.height}+{stats.x}+{stats.y}"
        )
        if layout.watermark_box is not None:
            mark = layout.watermark_box
            self.logger.info(f"Watermark box: {mark.width}x{mark.height}+{mark.x}+{mark.y}")

    def luminance_sampled(self, box: Box, luminance: float) -> None:
        self.logger.debug(
            f"Background luminance under {box.width}x{box.height}+{box.x}+{box.y}: {luminance:.1f}"
        )

    def watermark_selected(self, variant: WatermarkVariant, luminance: float) -> None:
        background = "dark" if variant is WatermarkVariant.LIGHT else "light"
        self.logger.info(
            f"Luminance {luminance:.1f}: {background} background, using {variant.value} watermark"
        )

    def watermark_asset_missing(self, variants: Iterable[WatermarkVariant]) -> None:
        names = ", ".join(v.value for v in variants)
        self.logger.warning(f"No watermark asset available ({names}); continuing without watermark")

    def watermark_composited(self, variant: WatermarkVariant, box: Box) -> None:
        self.logger.info(f"Added {variant.value} watermark at ({box.x}, {box.y})")

    def text_rendered(self, drawn: int, skipped: int) -> None:
        if skipped:
            self.logger.warning(f"Skipped {skipped} out-of-bounds draws ({drawn} drawn)")
        else:
            self.logger.debug(f"Drew {drawn} text elements")
