#!/usr/bin/env python3
"""
Font Service

Measures and draws text with Pillow TrueType fonts. Two font roles are
used by the overlay: "label" (DejaVu Sans) and "icon" (FontAwesome).

Usage:
    from workout_overlay.services.fonts import PillowFontProvider

    fonts = PillowFontProvider.from_locator(ResourceLocator())
    width, height = fonts.measure_text("label", "1h 01m", 25)
"""

import logging
from pathlib import Path
from typing import Dict, Tuple

from PIL import ImageDraw, ImageFont

from workout_overlay.config.overlay_config import FontConfig, LayoutConfig, RGBA
from workout_overlay.config.resource_config import ResourceLocator
from workout_overlay.errors import FontLoadError, FontMeasurementError
from workout_overlay.models import round_half_up


class FontProvider:
    """Interface used by the layout engine and the text renderer"""

    def measure_text(self, role: str, text: str, scale: float) -> Tuple[int, int]:
        """
        Measure text at a given scale

        Args:
            role: Font role ("label" or "icon")
            text: Text to measure
            scale: Font size in pixels

        Returns:
            (width, height) in pixels, measured from the draw origin
        """
        raise NotImplementedError

    def draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        role: str,
        text: str,
        position: Tuple[int, int],
        scale: float,
        color: RGBA
    ) -> None:
        """Draw text with its top-left at position"""
        raise NotImplementedError


class PillowFontProvider(FontProvider):
    """FontProvider backed by PIL.ImageFont.truetype"""

    def __init__(self, label_font_path: Path, icon_font_path: Path):
        """
        Load both fonts eagerly so a broken font fails the run at startup.

        Args:
            label_font_path: TrueType font for labels
            icon_font_path: TrueType icon font

        Raises:
            FontLoadError: If a font file is missing or unreadable
        """
        self.logger = logging.getLogger(__name__)
        self.font_paths: Dict[str, Path] = {
            FontConfig.ROLE_LABEL: Path(label_font_path),
            FontConfig.ROLE_ICON: Path(icon_font_path),
        }
        self._cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}

        for role in self.font_paths:
            self._font(role, LayoutConfig.MIN_FONT_SCALE)

    @classmethod
    def from_locator(cls, locator: ResourceLocator) -> "PillowFontProvider":
        """
        Build a provider from fonts found by a ResourceLocator

        Raises:
            FontLoadError: If either font cannot be found
        """
        label_path = locator.find_font(FontConfig.LABEL_FONT_NAME)
        icon_path = locator.find_font(FontConfig.ICON_FONT_NAME)

        missing = [
            name for name, path in (
                (FontConfig.LABEL_FONT_NAME, label_path),
                (FontConfig.ICON_FONT_NAME, icon_path),
            ) if path is None
        ]
        if missing:
            searched = ", ".join(str(d) for d in locator.font_search_dirs())
            raise FontLoadError(f"Font not found: {', '.join(missing)} (searched: {searched})")

        return cls(label_path, icon_path)

    def _font(self, role: str, scale: float) -> ImageFont.FreeTypeFont:
        if role not in self.font_paths:
            raise FontMeasurementError(f"Unknown font role: {role}")

        size = max(1, round_half_up(scale))
        key = (role, size)
        font = self._cache.get(key)
        if font is None:
            path = self.font_paths[role]
            try:
                font = ImageFont.truetype(str(path), size)
            except OSError as e:
                raise FontLoadError(f"Failed to load font {path}: {e}") from e
            self.logger.debug(f"Loaded {role} font {path.name} at {size}px")
            self._cache[key] = font
        return font

    def measure_text(self, role: str, text: str, scale: float) -> Tuple[int, int]:
        font = self._font(role, scale)
        try:
            _, _, right, bottom = font.getbbox(text)
        except (OSError, ValueError) as e:
            raise FontMeasurementError(f"Failed to measure {text!r} with {role} font: {e}") from e
        return int(right), int(bottom)

    def draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        role: str,
        text: str,
        position: Tuple[int, int],
        scale: float,
        color: RGBA
    ) -> None:
        draw.text(position, text, font=self._font(role, scale), fill=color)
