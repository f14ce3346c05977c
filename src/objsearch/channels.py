"""Conversion of color images into aligned single-channel planes."""

from typing import Any

import cv2
import numpy as np
import numpy.typing as npt

from .config import ColorMode
from .errors import ImageFormatError, UnsupportedModeError

# Constants for magic values
_COLOR_CHANNELS = 3
_RGBA_CHANNELS = 4
_SUPPORTED_DTYPES = (np.uint8, np.uint16, np.float32, np.float64)

PlanePair = tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]


def check_color_image(img: npt.NDArray[Any], name: str) -> None:
    """Raise ImageFormatError unless img is (H, W, C) with C >= 3 and a supported dtype."""
    if img.ndim != 3 or img.shape[2] < _COLOR_CHANNELS:
        msg = f"{name} must have shape (H, W, C) with C >= 3, got {img.shape}"
        raise ImageFormatError(msg)
    if img.dtype not in _SUPPORTED_DTYPES:
        msg = f"{name} must be uint8, uint16, float32 or float64, got {img.dtype}"
        raise ImageFormatError(msg)


def normalize_plane(plane: npt.NDArray[Any]) -> npt.NDArray[np.float64]:
    """Scale a single-channel plane to float64 intensities in [0, 1].

    Args:
        plane: 2-D array. Integer planes are divided by their dtype maximum,
            float planes are assumed to be normalized already.

    Returns:
        New float64 array with the same shape.
    """
    if np.issubdtype(plane.dtype, np.integer):
        return plane.astype(np.float64) / float(np.iinfo(plane.dtype).max)
    return plane.astype(np.float64, copy=True)


def to_grayscale(img: npt.NDArray[Any]) -> npt.NDArray[Any]:
    """Luminance of an RGB or RGBA image.

    Args:
        img: Image array (H x W x 3 or H x W x 4), RGB channel order

    Returns:
        Grayscale plane (H x W) with the input dtype
    """
    check_color_image(img, "image")
    if img.dtype == np.float64:
        # cvtColor has no float64 path
        img = img.astype(np.float32)
    if img.shape[2] == _RGBA_CHANNELS:
        return cv2.cvtColor(np.ascontiguousarray(img), cv2.COLOR_RGBA2GRAY)
    return cv2.cvtColor(np.ascontiguousarray(img[:, :, :_COLOR_CHANNELS]), cv2.COLOR_RGB2GRAY)


def extract_planes(
    field: npt.NDArray[Any], obj: npt.NDArray[Any], color_mode: ColorMode
) -> list[PlanePair]:
    """Produce (field_plane, object_plane) pairs for a color mode.

    Pairs come out in a fixed channel order so that channel i of the field
    always lines up with channel i of the object.

    Args:
        field: Image being scanned (H x W x C, C >= 3)
        obj: Reference image (h x w x C, C >= 3)
        color_mode: "gray" for one luminance pair, "rgb" for R, G, B pairs

    Returns:
        List of normalized float64 plane pairs

    Raises:
        ImageFormatError: If either image is not a color image
        UnsupportedModeError: If color_mode is unknown
    """
    check_color_image(field, "field")
    check_color_image(obj, "object")

    if color_mode == "gray":
        pairs = [(normalize_plane(to_grayscale(field)), normalize_plane(to_grayscale(obj)))]
    elif color_mode == "rgb":
        pairs = [
            (normalize_plane(field[:, :, c]), normalize_plane(obj[:, :, c]))
            for c in range(_COLOR_CHANNELS)
        ]
    else:
        msg = f"Unknown color mode: {color_mode}"
        raise UnsupportedModeError(msg)

    return pairs
