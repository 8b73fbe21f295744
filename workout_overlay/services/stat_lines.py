#!/usr/bin/env python3
"""
Stat Line Builder

Turns an ActivityRecord into the six overlay rows, always in this order:
elapsed time, calories, average HR, maximum HR, start time (with the date
as subtext) and device name.
"""

from datetime import tzinfo
from typing import List, Optional

from workout_overlay.config.overlay_config import ColorConfig, FormatConfig, IconConfig
from workout_overlay.models import ActivityRecord, SimpleStatLine, StatLine, SubtextStatLine
from workout_overlay.services.device_classifier import DeviceClassifier


def build_stat_lines(
    record: ActivityRecord,
    classifier: Optional[DeviceClassifier] = None,
    tz: Optional[tzinfo] = None,
    date_format: str = FormatConfig.DATE_FORMAT
) -> List[StatLine]:
    """
    Build the ordered stat lines for a record

    Args:
        record: Activity summary
        classifier: Device classifier used to normalize the device name
        tz: Timezone for the start time. Defaults to the system local timezone.
        date_format: strftime format for the date subtext

    Returns:
        Six stat lines; order and count must not be changed by consumers
    """
    classifier = classifier or DeviceClassifier()
    local_start = record.start_time.astimezone(tz)

    return [
        SimpleStatLine(IconConfig.ICON_TIME, record.format_duration(), ColorConfig.TIME_COLOR),
        SimpleStatLine(IconConfig.ICON_FIRE, f"{record.calories} kcal", ColorConfig.CALORIES_COLOR),
        SimpleStatLine(IconConfig.ICON_HEART, f"{record.avg_hr} avg", ColorConfig.HR_COLOR),
        SimpleStatLine(IconConfig.ICON_HEART, f"{record.max_hr} max", ColorConfig.HR_COLOR),
        SubtextStatLine(
            icon=IconConfig.ICON_CALENDAR,
            main_label=local_start.strftime(FormatConfig.TIME_OF_DAY_FORMAT),
            sub_label=local_start.strftime(date_format),
            main_color=ColorConfig.DATE_COLOR,
            sub_color=ColorConfig.SUBTEXT_COLOR,
        ),
        SimpleStatLine(
            IconConfig.ICON_DEVICE,
            classifier.normalize_device_name(record.device_name),
            ColorConfig.DEVICE_COLOR,
        ),
    ]
