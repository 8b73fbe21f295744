#!/usr/bin/env python3
"""
Overlay Errors

Every failure that aborts a run derives from OverlayError so the CLI can
report it with a single handler. Optional assets never raise; they are
reported through logging instead.
"""


class OverlayError(Exception):
    """Base class for errors that abort an overlay run"""
    pass


class InputFileError(OverlayError):
    """Raised when a required input file is missing or unreadable"""
    pass


class ImageCodecError(OverlayError):
    """Raised when an image cannot be read, decoded or encoded"""
    pass


class ActivityParseError(OverlayError):
    """Raised when an activity file is unsupported, malformed or incomplete"""
    pass


class FontLoadError(OverlayError):
    """Raised when a font file is missing or cannot be loaded"""
    pass


class FontMeasurementError(OverlayError):
    """Raised when text cannot be measured or drawn with a loaded font"""
    pass


class OutputPathError(OverlayError):
    """Raised when the destination path cannot be used (e.g. no extension)"""
    pass
