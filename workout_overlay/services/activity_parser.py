#!/usr/bin/env python3
"""
Activity File Parser

Reads TCX (XML) and FIT (binary) workout files into an ActivityRecord.
The format is chosen by file extension.

Usage:
    from workout_overlay.services.activity_parser import parse_activity_file

    record = parse_activity_file(Path("morning_run.fit"))
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import fitparse
from lxml import etree

from workout_overlay.config.overlay_config import FormatConfig
from workout_overlay.errors import ActivityParseError, InputFileError
from workout_overlay.models import ActivityRecord

logger = logging.getLogger(__name__)

TCX_NAMESPACES = {"tcx": "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"}


def parse_activity_file(path: Path) -> ActivityRecord:
    """
    Parse a TCX or FIT file

    Args:
        path: Activity file (.tcx or .fit, any letter case)

    Returns:
        ActivityRecord with all fields populated

    Raises:
        InputFileError: If the file cannot be read
        ActivityParseError: If the format is unsupported or the content is invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()

    # Guard clause: unsupported format (checked before touching the file)
    if suffix not in ('.tcx', '.fit'):
        raise ActivityParseError(
            f"Unsupported activity format: {path.name}. Use .tcx or .fit files"
        )

    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputFileError(f"Cannot read activity file {path}: {e}") from e

    logger.info(f"Reading {suffix[1:].upper()} file: {path}")
    if suffix == '.tcx':
        return parse_tcx(data)
    return parse_fit(data)


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ActivityParseError(f"Invalid {name}: {value} (must be >= 0)")


# ==================================
# TCX
# ==================================

def _tcx_text(parent: Any, xpath: str, name: str) -> str:
    elem = parent.find(xpath, namespaces=TCX_NAMESPACES)
    if elem is None or elem.text is None or not elem.text.strip():
        raise ActivityParseError(f"TCX file missing {name}")
    return elem.text.strip()


def _tcx_number(parent: Any, xpath: str, name: str, convert=float):
    text = _tcx_text(parent, xpath, name)
    try:
        value = convert(float(text))
    except ValueError as e:
        raise ActivityParseError(f"TCX file has invalid {name}: {text!r}") from e
    _non_negative(name, value)
    return value


def parse_tcx(data: bytes) -> ActivityRecord:
    """
    Parse TCX content

    Uses the first Activity and its first Lap. StartTime, TotalTimeSeconds,
    Calories, average/maximum heart rate and the Creator name are required.

    Args:
        data: Raw TCX bytes

    Returns:
        ActivityRecord

    Raises:
        ActivityParseError: If the XML is malformed or a required field is missing
    """
    try:
        root = etree.fromstring(data)
    except etree.XMLSyntaxError as e:
        raise ActivityParseError(f"Failed to parse TCX file: {e}") from e

    activity = root.find(".//tcx:Activity", namespaces=TCX_NAMESPACES)
    if activity is None:
        raise ActivityParseError("TCX file missing Activity element")

    lap = activity.find("tcx:Lap", namespaces=TCX_NAMESPACES)
    if lap is None:
        raise ActivityParseError("TCX file missing Lap element")

    start_text = lap.get("StartTime")
    if not start_text:
        raise ActivityParseError("TCX file missing StartTime in Lap")
    try:
        start_time = _utc(datetime.fromisoformat(start_text.strip().replace("Z", "+00:00")))
    except ValueError as e:
        raise ActivityParseError(f"TCX file has invalid StartTime: {start_text!r}") from e

    return ActivityRecord(
        duration_seconds=_tcx_number(lap, "tcx:TotalTimeSeconds", "TotalTimeSeconds"),
        calories=_tcx_number(lap, "tcx:Calories", "Calories", int),
        avg_hr=_tcx_number(lap, "tcx:AverageHeartRateBpm/tcx:Value", "AverageHeartRateBpm", int),
        max_hr=_tcx_number(lap, "tcx:MaximumHeartRateBpm/tcx:Value", "MaximumHeartRateBpm", int),
        start_time=start_time,
        device_name=_tcx_text(activity, "tcx:Creator/tcx:Name", "Creator Name"),
    )


# ==================================
# FIT
# ==================================

def _fit_number(session: Dict[str, Any], name: str, convert=float):
    value = session.get(name)
    if value is None:
        return convert(0)
    try:
        value = convert(value)
    except (TypeError, ValueError) as e:
        raise ActivityParseError(f"FIT session has invalid {name}: {value!r}") from e
    _non_negative(name, value)
    return value


def parse_fit(data: bytes) -> ActivityRecord:
    """
    Parse FIT content

    The last session message is required and must carry start_time.
    Elapsed time, calories and heart rates default to 0 when absent.
    The device name comes from a device_info product_name field.

    Args:
        data: Raw FIT bytes

    Returns:
        ActivityRecord

    Raises:
        ActivityParseError: If the file is corrupt or has no usable session
    """
    session: Optional[Dict[str, Any]] = None
    device_name = FormatConfig.UNKNOWN_DEVICE_NAME

    try:
        fit_file = fitparse.FitFile(data)
        for message in fit_file.get_messages(["session", "device_info"]):
            values = message.get_values()
            if message.name == "session":
                session = values
            elif values.get("product_name"):
                device_name = str(values["product_name"])
    except fitparse.FitParseError as e:
        raise ActivityParseError(f"Failed to read FIT file: {e}") from e

    if session is None:
        raise ActivityParseError("FIT file has no session data")

    start_time = session.get("start_time")
    if not isinstance(start_time, datetime):
        raise ActivityParseError("FIT session missing start_time")

    return ActivityRecord(
        duration_seconds=_fit_number(session, "total_elapsed_time"),
        calories=_fit_number(session, "total_calories", int),
        avg_hr=_fit_number(session, "avg_heart_rate", int),
        max_hr=_fit_number(session, "max_heart_rate", int),
        start_time=_utc(start_time),
        device_name=device_name,
    )
