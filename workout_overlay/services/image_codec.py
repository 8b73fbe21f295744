#!/usr/bin/env python3
"""
Image Codec Service

Reads and writes images with OpenCV. Inside the tool every image is an
RGBA uint8 numpy array of shape (H, W, 4); conversion to and from
OpenCV's BGR(A) order happens only here.

Usage:
    from workout_overlay.services.image_codec import decode_image, encode_image

    canvas = decode_image(Path("photo.jpg"))
    encode_image(canvas, Path("out/photo_overlay.png"))
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from workout_overlay.config.overlay_config import OutputConfig
from workout_overlay.errors import ImageCodecError, InputFileError, OutputPathError

logger = logging.getLogger(__name__)


def to_rgba(image: np.ndarray) -> np.ndarray:
    """
    Convert an OpenCV image (gray, BGR or BGRA; 8 or 16 bit) to RGBA uint8

    Args:
        image: Array as returned by cv2.imread(..., IMREAD_UNCHANGED)

    Returns:
        RGBA uint8 array

    Raises:
        ImageCodecError: If the channel layout is not supported
    """
    if image.dtype == np.uint16:
        image = (image // 257).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise ImageCodecError(f"Unsupported pixel type: {image.dtype}")

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)

    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

    raise ImageCodecError(f"Unsupported channel count: {channels}")


def decode_image(path: Path) -> np.ndarray:
    """
    Load an image file as RGBA

    Args:
        path: Image file

    Returns:
        RGBA uint8 array, shape (H, W, 4)

    Raises:
        InputFileError: If the file does not exist
        ImageCodecError: If the file cannot be decoded
    """
    path = Path(path)

    # Guard clause: missing file
    if not path.is_file():
        raise InputFileError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageCodecError(f"Could not decode image: {path}")

    rgba = to_rgba(image)
    logger.debug(f"Loaded {path.name}: {rgba.shape[1]}x{rgba.shape[0]}")
    return rgba


def resolve_output_path(path: Path) -> Path:
    """
    Validate and normalize the destination path

    A directory maps to <dir>/resultado_com_overlay.png. Nothing is
    created on disk.

    Args:
        path: Destination given by the user

    Returns:
        File path to write

    Raises:
        OutputPathError: If the path has no file extension
    """
    path = Path(path)
    if path.is_dir():
        return path / OutputConfig.DEFAULT_OUTPUT_NAME

    if not path.suffix:
        raise OutputPathError(
            f"Output path must include a file extension (e.g. .png, .jpg): {path}"
        )
    return path


def _encode_params(suffix: str) -> list:
    if suffix == '.png':
        return [cv2.IMWRITE_PNG_COMPRESSION, OutputConfig.PNG_COMPRESSION_LEVEL]
    if suffix in ('.jpg', '.jpeg'):
        return [cv2.IMWRITE_JPEG_QUALITY, OutputConfig.JPEG_QUALITY]
    return []


def encode_image(canvas: np.ndarray, path: Path) -> Path:
    """
    Write an RGBA canvas to disk, format chosen by the file extension

    Missing parent directories are created. Formats without alpha
    support get the color channels only.

    Args:
        canvas: RGBA uint8 array
        path: Destination file (or directory)

    Returns:
        Path actually written

    Raises:
        OutputPathError: If the path has no extension (checked before writing)
        ImageCodecError: If encoding or writing fails
    """
    output_path = resolve_output_path(path)
    suffix = output_path.suffix.lower()

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if suffix in OutputConfig.ALPHA_EXTENSIONS:
        image = cv2.cvtColor(canvas, cv2.COLOR_RGBA2BGRA)
    else:
        image = cv2.cvtColor(canvas, cv2.COLOR_RGBA2BGR)

    try:
        ok = cv2.imwrite(str(output_path), image, _encode_params(suffix))
    except cv2.error as e:
        raise ImageCodecError(f"Failed to encode {output_path}: {e}") from e

    if not ok:
        raise ImageCodecError(f"Failed to write image: {output_path}")

    logger.info(f"Saved {output_path} ({canvas.shape[1]}x{canvas.shape[0]})")
    return output_path
