#!/usr/bin/env python3
"""
Overlay Data Model

Immutable values passed between the pipeline stages:

    ActivityRecord -> StatLine list -> OverlayLayout

Nothing here draws or reads files.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

from workout_overlay.config.overlay_config import RGBA


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)"""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ActivityRecord:
    """Normalized workout summary produced by the activity parsers.

    Attributes:
        duration_seconds: Elapsed time in seconds
        calories: Total calories (kcal)
        avg_hr: Average heart rate (bpm)
        max_hr: Maximum heart rate (bpm)
        start_time: Timezone-aware start timestamp
        device_name: Free-text device name as recorded in the file
    """
    duration_seconds: float
    calories: int
    avg_hr: int
    max_hr: int
    start_time: datetime
    device_name: str

    def format_duration(self) -> str:
        """Format duration as "<H>h <MM>m", discarding seconds"""
        total_seconds = int(self.duration_seconds)
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        return f"{hours}h {minutes:02d}m"


@dataclass(frozen=True)
class SimpleStatLine:
    """One overlay row: icon followed by a label"""
    icon: str
    label: str
    color: RGBA


@dataclass(frozen=True)
class SubtextStatLine:
    """One overlay row with a smaller second row under the label"""
    icon: str
    main_label: str
    sub_label: str
    main_color: RGBA
    sub_color: RGBA


StatLine = Union[SimpleStatLine, SubtextStatLine]


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in canvas pixels (origin may be negative)"""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class LineMetrics:
    """Measured widths and height of one stat line"""
    icon_width: int
    text_width: int
    width: int
    height: int


@dataclass(frozen=True)
class OverlayLayout:
    """Absolute geometry for the stats block and the optional watermark.

    Attributes:
        font_scale: Main text size in pixels
        subtext_scale: Subtext size in pixels (fractional)
        padding: Line padding
        icon_padding: Gap between icon and label
        shadow_offset: Drop-shadow offset, applied down and right
        stats_box: Stats block origin and size; width is the max line width
        watermark_box: Watermark target box, None when no watermark is wanted
        lines: Per-line metrics, same order as the stat lines
    """
    font_scale: int
    subtext_scale: float
    padding: int
    icon_padding: int
    shadow_offset: int
    stats_box: Box
    watermark_box: Optional[Box]
    lines: Tuple[LineMetrics, ...]

    @property
    def max_line_width(self) -> int:
        return self.stats_box.width


class WatermarkVariant(Enum):
    """Pre-rendered watermark images"""

    # White artwork, for dark backgrounds
    LIGHT = "light"
    # Black artwork, for light backgrounds
    DARK = "dark"


def origin_in_bounds(x: int, y: int, canvas_width: int, canvas_height: int) -> bool:
    """Whether a draw origin lies inside the canvas"""
    return 0 <= x < canvas_width and 0 <= y < canvas_height


def clip_box(box: Box, canvas_width: int, canvas_height: int) -> Box:
    """
    Intersect a box with the canvas

    Args:
        box: Requested rectangle (may extend outside the canvas)
        canvas_width: Canvas width
        canvas_height: Canvas height

    Returns:
        The in-bounds part; width or height is 0 when nothing overlaps
    """
    x0 = min(max(box.x, 0), canvas_width)
    y0 = min(max(box.y, 0), canvas_height)
    x1 = min(max(box.right, 0), canvas_width)
    y1 = min(max(box.bottom, 0), canvas_height)
    return Box(x0, y0, max(0, x1 - x0), max(0, y1 - y0))
