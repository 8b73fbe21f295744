#!/usr/bin/env python3
"""
Text Renderer

Draws the stat lines into the stats block computed by the layout engine.

Every line is right-aligned to the block's right edge. Per line the draw
order is: icon shadow, icon, label shadow, label, then (for lines with
subtext) subtext shadow and subtext one font_scale below the label.
Draws whose origin falls outside the canvas are skipped.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from workout_overlay.config.overlay_config import ColorConfig, FontConfig, RGBA
from workout_overlay.models import OverlayLayout, StatLine, SubtextStatLine, origin_in_bounds
from workout_overlay.services.fonts import FontProvider
from workout_overlay.services.observer import OverlayObserver


# (role, text, (x, y), scale, color)
DrawOp = Tuple[str, str, Tuple[int, int], float, RGBA]


class TextRenderer:
    """Renders stat lines with drop shadows"""

    def __init__(
        self,
        fonts: FontProvider,
        colors=ColorConfig,
        observer: Optional[OverlayObserver] = None
    ):
        """
        Args:
            fonts: Provider used to draw glyphs
            colors: Color constants (ColorConfig or a subclass)
            observer: Receives the drawn/skipped counts
        """
        self.logger = logging.getLogger(__name__)
        self.fonts = fonts
        self.colors = colors
        self.observer = observer or OverlayObserver()

    def _with_shadow(self, op: DrawOp, offset: int) -> List[DrawOp]:
        role, text, (x, y), scale, color = op
        shadow = (role, text, (x + offset, y + offset), scale, self.colors.SHADOW_COLOR)
        return [shadow, op]

    def plan(self, lines: Sequence[StatLine], layout: OverlayLayout) -> List[DrawOp]:
        """
        Build the ordered list of draw operations for all lines

        Args:
            lines: Stat lines, same order as layout.lines
            layout: Computed geometry

        Returns:
            Draw operations in paint order (shadows before foregrounds)
        """
        if len(lines) != len(layout.lines):
            raise ValueError(
                f"Layout has {len(layout.lines)} line metrics for {len(lines)} stat lines"
            )

        block = layout.stats_box
        offset = layout.shadow_offset
        ops: List[DrawOp] = []
        y = block.y

        for line, metrics in zip(lines, layout.lines):
            line_x = block.x + block.width - metrics.width
            text_x = line_x + metrics.icon_width + layout.icon_padding

            if isinstance(line, SubtextStatLine):
                icon_color, label = line.main_color, line.main_label
            else:
                icon_color, label = line.color, line.label

            ops += self._with_shadow(
                (FontConfig.ROLE_ICON, line.icon, (line_x, y), layout.font_scale, icon_color),
                offset
            )
            ops += self._with_shadow(
                (FontConfig.ROLE_LABEL, label, (text_x, y), layout.font_scale, self.colors.TEXT_COLOR),
                offset
            )

            if isinstance(line, SubtextStatLine):
                sub_y = y + layout.font_scale
                ops += self._with_shadow(
                    (FontConfig.ROLE_LABEL, line.sub_label, (text_x, sub_y), layout.subtext_scale, line.sub_color),
                    offset
                )

            y += metrics.height

        return ops

    def render(
        self,
        canvas: np.ndarray,
        lines: Sequence[StatLine],
        layout: OverlayLayout
    ) -> np.ndarray:
        """
        Draw all stat lines onto a copy of the canvas

        Args:
            canvas: RGBA uint8 canvas (not modified)
            lines: Stat lines in block order
            layout: Computed geometry

        Returns:
            New RGBA canvas with the text drawn
        """
        height, width = canvas.shape[:2]
        image = Image.fromarray(canvas)
        draw = ImageDraw.Draw(image)

        drawn = skipped = 0
        for role, text, (x, y), scale, color in self.plan(lines, layout):
            if not origin_in_bounds(x, y, width, height):
                self.logger.debug(f"Skipping {text!r} at ({x}, {y}): outside {width}x{height}")
                skipped += 1
                continue
            self.fonts.draw_text(draw, role, text, (x, y), scale, color)
            drawn += 1

        self.observer.text_rendered(drawn, skipped)
        return np.array(image)
