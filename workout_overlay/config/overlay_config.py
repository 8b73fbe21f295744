#!/usr/bin/env python3
"""
Overlay Configuration Constants

This module centralizes all magic numbers and configuration
constants used by the overlay layout and compositing engine.

The layout values were tuned by eye against real workout photos; keep
the exact numbers and rounding rules so output stays visually stable.

Usage:
    from workout_overlay.config.overlay_config import LayoutConfig

    min_scale = LayoutConfig.MIN_FONT_SCALE
"""

from dataclasses import dataclass
from typing import Tuple


RGBA = Tuple[int, int, int, int]


class LayoutConfig:
    """Configuration constants for stats block and watermark geometry"""

    # ==================================
    # FONT SCALE
    # ==================================

    # Font scale = round(min(width, height) / FONT_SCALE_DIVISOR)
    FONT_SCALE_DIVISOR = 40

    # Lower bound so small photos still get readable text (pixels)
    MIN_FONT_SCALE = 12

    # ==================================
    # PADDING
    # ==================================

    # Line padding as a fraction of the font scale
    PADDING_RATIO = 0.75

    # Space between icon and label as a fraction of the line padding
    ICON_PADDING_RATIO = 0.5

    # Subtext (e.g. the date under the start time) relative to font scale
    SUBTEXT_SCALE_RATIO = 0.75

    # ==================================
    # SHADOW
    # ==================================

    # Shadow offset = max(MIN_SHADOW_OFFSET, round(font_scale / SHADOW_OFFSET_DIVISOR))
    SHADOW_OFFSET_DIVISOR = 15
    MIN_SHADOW_OFFSET = 1

    # ==================================
    # MARGINS (pixels, independent of canvas size)
    # ==================================

    RIGHT_MARGIN_PIXELS = 4
    BOTTOM_MARGIN_PIXELS = 4

    # Vertical gap between the stats block and the watermark below it
    BLOCK_GAP_PIXELS = 8

    # ==================================
    # WATERMARK BOX
    # ==================================

    # Width:height used when the watermark asset size is unknown (4:1)
    FALLBACK_WATERMARK_ASPECT = 4


class ColorConfig:
    """RGBA colors used for icons, labels and shadows"""

    TEXT_COLOR: RGBA = (255, 255, 255, 255)
    SHADOW_COLOR: RGBA = (0, 0, 0, 255)

    TIME_COLOR: RGBA = (52, 152, 219, 255)
    CALORIES_COLOR: RGBA = (230, 126, 34, 255)
    HR_COLOR: RGBA = (231, 76, 60, 255)
    DATE_COLOR: RGBA = (46, 204, 113, 255)
    DEVICE_COLOR: RGBA = (149, 165, 166, 255)

    # Softer shade for subtext rows
    SUBTEXT_COLOR: RGBA = (200, 200, 200, 255)


class IconConfig:
    """FontAwesome code points for each stat line"""

    ICON_TIME = "\uf017"
    ICON_FIRE = "\uf06d"
    ICON_HEART = "\uf21e"
    ICON_CALENDAR = "\uf133"
    ICON_DEVICE = "\uf10b"


class FormatConfig:
    """Text formats for stat lines"""

    TIME_OF_DAY_FORMAT = "%H:%M"
    DATE_FORMAT = "%d/%m/%Y"

    # Device name used when a FIT file has no device_info product name
    UNKNOWN_DEVICE_NAME = "Unknown device"


class WatermarkConfig:
    """Watermark selection and resampling settings"""

    # Average luminance below this selects the light (white) watermark
    LUMINANCE_THRESHOLD = 128.0

    # Returned when the sampled rectangle has no pixel inside the canvas
    NEUTRAL_LUMINANCE = 128.0

    # Rec. 709 luma coefficients (R, G, B)
    LUMA_COEFFICIENTS = (0.2126, 0.7152, 0.0722)

    # Asset file names
    LIGHT_ASSET_NAME = "garmin_white.png"
    DARK_ASSET_NAME = "garmin_black.png"

    # OpenCV interpolation method (area averaging for downscaling)
    INTERPOLATION_METHOD = 'AREA'


class FontConfig:
    """Font files for labels and icons"""

    LABEL_FONT_NAME = "DejaVuSans.ttf"
    ICON_FONT_NAME = "FontAwesome.ttf"

    # Font roles understood by the font provider
    ROLE_LABEL = "label"
    ROLE_ICON = "icon"

    # System directories searched after the project fonts directory
    SYSTEM_FONT_DIRS = (
        "/usr/share/fonts/truetype/dejavu",
        "/usr/share/fonts/truetype/font-awesome",
        "/usr/share/fonts/TTF",
    )


class OutputConfig:
    """Output file settings"""

    # File name used when the destination is a directory
    DEFAULT_OUTPUT_NAME = "resultado_com_overlay.png"

    # PNG compression level (0-9, where 9 is highest compression)
    PNG_COMPRESSION_LEVEL = 9

    # JPEG quality (0-100, where 100 is highest quality)
    JPEG_QUALITY = 95

    # Extensions that keep the alpha channel when encoding
    ALPHA_EXTENSIONS = ('.png', '.webp', '.tif', '.tiff')


@dataclass(frozen=True)
class BrandConfig:
    """Brand detection table.

    Attributes:
        brand_name: Display name prefixed to recognized model names
        brand_token: Lower-case token identifying the brand itself
        series_tokens: Tokens that mark a device as belonging to the brand
        model_tokens: Known model substrings, checked in order (first match wins)
    """
    brand_name: str
    brand_token: str
    series_tokens: Tuple[str, ...]
    model_tokens: Tuple[str, ...]


_GARMIN_MODELS = (
    "forerunner", "fenix", "venu", "vivoactive", "instinct",
    "epix", "enduro", "approach", "marq", "lily", "tactix", "descent",
)

GARMIN = BrandConfig(
    brand_name="Garmin",
    brand_token="garmin",
    series_tokens=_GARMIN_MODELS + ("garmin",),
    model_tokens=_GARMIN_MODELS,
)


# Convenience function for getting OpenCV interpolation constant
def get_interpolation_method():
    """Returns OpenCV interpolation method constant"""
    import cv2
    method_name = WatermarkConfig.INTERPOLATION_METHOD
    return getattr(cv2, f'INTER_{method_name}')
