#!/usr/bin/env python3
"""
Layout Engine

Computes absolute pixel geometry for the stats block and, when a
watermark is wanted, the watermark box below it.

Layout (bottom-right corner of the canvas):
┌──────────────────────────────────────┐
│                                      │
│                       (i) 1h 01m     │
│                     (i) 512 kcal     │  ← stats block (lines right-aligned)
│                       ...            │
│                  (i) Garmin Venu     │
│                                      │  ← BLOCK_GAP_PIXELS
│                       [ WATERMARK  ] │  ← same width as the stats block
│                                      │  ← BOTTOM_MARGIN_PIXELS
└──────────────────────────────────────┘
                                       ↑ RIGHT_MARGIN_PIXELS

Coordinates are not clamped: on canvases smaller than the content they
may be negative, and the renderers skip whatever falls outside.
"""

import logging
from typing import Optional, Sequence, Tuple

from workout_overlay.config.overlay_config import FontConfig, LayoutConfig
from workout_overlay.models import (
    Box,
    LineMetrics,
    OverlayLayout,
    StatLine,
    SubtextStatLine,
    round_half_up,
)
from workout_overlay.services.fonts import FontProvider


def compute_font_scale(canvas_width: int, canvas_height: int, config=LayoutConfig) -> int:
    """Main text size for a canvas: round(min side / 40), at least 12"""
    return max(
        config.MIN_FONT_SCALE,
        round_half_up(min(canvas_width, canvas_height) / config.FONT_SCALE_DIVISOR)
    )


def compute_shadow_offset(font_scale: int, config=LayoutConfig) -> int:
    """Drop-shadow offset in pixels for a font scale"""
    return max(
        config.MIN_SHADOW_OFFSET,
        round_half_up(font_scale / config.SHADOW_OFFSET_DIVISOR)
    )


class LayoutEngine:
    """Computes OverlayLayout values; holds no state between calls"""

    def __init__(self, fonts: FontProvider, config=LayoutConfig):
        """
        Args:
            fonts: Text measurement provider
            config: Layout constants (LayoutConfig or a subclass)
        """
        self.logger = logging.getLogger(__name__)
        self.fonts = fonts
        self.config = config

    def measure_line(
        self,
        line: StatLine,
        font_scale: int,
        padding: int,
        icon_padding: int
    ) -> LineMetrics:
        """
        Measure one stat line

        Width is icon + icon padding + the wider of label and subtext.
        Height is font_scale + padding // 2, plus the subtext row height
        for lines with subtext.

        Args:
            line: Stat line to measure
            font_scale: Main text size
            padding: Line padding
            icon_padding: Gap between icon and label

        Returns:
            LineMetrics for the line
        """
        subtext_scale = font_scale * self.config.SUBTEXT_SCALE_RATIO

        icon_width, _ = self.fonts.measure_text(FontConfig.ROLE_ICON, line.icon, font_scale)

        if isinstance(line, SubtextStatLine):
            main_width, _ = self.fonts.measure_text(FontConfig.ROLE_LABEL, line.main_label, font_scale)
            sub_width, _ = self.fonts.measure_text(FontConfig.ROLE_LABEL, line.sub_label, subtext_scale)
            text_width = max(main_width, sub_width)
            height = font_scale + round_half_up(subtext_scale) + padding // 2
        else:
            text_width, _ = self.fonts.measure_text(FontConfig.ROLE_LABEL, line.label, font_scale)
            height = font_scale + padding // 2

        return LineMetrics(
            icon_width=icon_width,
            text_width=text_width,
            width=icon_width + icon_padding + text_width,
            height=height,
        )

    def watermark_size(
        self,
        block_width: int,
        asset_size: Optional[Tuple[int, int]]
    ) -> Tuple[int, int]:
        """
        Target size of the watermark box

        Args:
            block_width: Stats block width (the watermark matches it)
            asset_size: Native (width, height) of the watermark asset, if known

        Returns:
            (width, height); height keeps the asset aspect ratio, or 4:1 if unknown
        """
        if asset_size is not None and asset_size[0] > 0:
            asset_width, asset_height = asset_size
            return block_width, block_width * asset_height // asset_width
        return block_width, block_width // self.config.FALLBACK_WATERMARK_ASPECT

    def compute(
        self,
        canvas_width: int,
        canvas_height: int,
        lines: Sequence[StatLine],
        include_watermark: bool = False,
        asset_size: Optional[Tuple[int, int]] = None
    ) -> OverlayLayout:
        """
        Compute the overlay geometry

        Args:
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            lines: Stat lines in render order
            include_watermark: Reserve a watermark box below the stats block
            asset_size: Native watermark size, None when unavailable

        Returns:
            OverlayLayout (pure function of the inputs)
        """
        cfg = self.config

        font_scale = compute_font_scale(canvas_width, canvas_height, cfg)
        padding = round_half_up(font_scale * cfg.PADDING_RATIO)
        icon_padding = round_half_up(padding * cfg.ICON_PADDING_RATIO)

        metrics = tuple(
            self.measure_line(line, font_scale, padding, icon_padding)
            for line in lines
        )
        block_width = max((m.width for m in metrics), default=0)
        block_height = sum(m.height for m in metrics)

        stats_x = canvas_width - block_width - cfg.RIGHT_MARGIN_PIXELS
        watermark_box = None

        if include_watermark:
            mark_width, mark_height = self.watermark_size(block_width, asset_size)
            watermark_box = Box(
                x=canvas_width - mark_width - cfg.RIGHT_MARGIN_PIXELS,
                y=canvas_height - mark_height - cfg.BOTTOM_MARGIN_PIXELS,
                width=mark_width,
                height=mark_height,
            )
            stats_y = watermark_box.y - cfg.BLOCK_GAP_PIXELS - block_height
        else:
            stats_y = canvas_height - block_height - cfg.BOTTOM_MARGIN_PIXELS

        layout = OverlayLayout(
            font_scale=font_scale,
            subtext_scale=font_scale * cfg.SUBTEXT_SCALE_RATIO,
            padding=padding,
            icon_padding=icon_padding,
            shadow_offset=compute_shadow_offset(font_scale, cfg),
            stats_box=Box(stats_x, stats_y, block_width, block_height),
            watermark_box=watermark_box,
            lines=metrics,
        )

        self.logger.debug(
            f"Computed layout for {canvas_width}x{canvas_height}: "
            f"scale={font_scale} padding={padding} icon_padding={icon_padding}"
        )
        return layout
