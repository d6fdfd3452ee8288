"""Image preprocessing functions for the sticky note pipeline.

This module turns a color photograph into the single-channel binary masks
that contour extraction runs on. Notes are separated from the background
with a local (adaptive) threshold so that uneven lighting across the
photographed surface does not shift the cut-off.
"""

import cv2
import numpy as np

from sticky_notes.models.settings_models import ThresholdParams


def split_detection_channels(image: np.ndarray) -> dict[str, np.ndarray]:
    """Derive the three intensity channels used for detection.

    No single channel separates every note color from the background: the
    green plane catches bright notes while the two chroma planes of YUV
    catch saturated notes that have little luminance contrast.

    Args:
        image: Input BGR image as a 3-channel uint8 NumPy array.

    Returns:
        Mapping of channel name ("green", "u", "v") to a 2D uint8 array,
        in the order the channels are processed.
    """
    green = cv2.split(image)[1]
    yuv = cv2.cvtColor(image, cv2.COLOR_BGR2YUV)
    _, u, v = cv2.split(yuv)
    return {"green": green, "u": u, "v": v}


def generate_contrast_lut(lower: int = 49, upper: int = 205) -> np.ndarray:
    """Build a lookup table that stretches [lower, upper] onto [0, 255].

    Intensities below ``lower`` map to 0 and above ``upper`` to 255; values
    in between are scaled linearly and truncated to integers.

    Args:
        lower: Darkest intensity kept distinct.
        upper: Brightest intensity kept distinct.

    Returns:
        1D uint8 array with 256 entries suitable for ``cv2.LUT``.
    """
    if lower >= upper:
        raise ValueError("lower must be below upper")
    scale = 255.0 / (upper - lower)
    levels = np.arange(256, dtype=np.float64)
    stretched = np.trunc((levels - lower) * scale)
    stretched[levels < lower] = 0
    stretched[levels > upper] = 255
    return stretched.astype(np.uint8)


def apply_contrast_lut(channel: np.ndarray, lut: np.ndarray) -> np.ndarray:
    """Map every pixel of a single-channel image through ``lut``."""
    return cv2.LUT(channel, lut)


def binarize_channel(
    channel: np.ndarray, params: ThresholdParams | None = None
) -> np.ndarray:
    """Convert one intensity channel to an inverted adaptive binary mask.

    Each pixel is compared with the Gaussian-weighted mean of its
    ``block_size`` neighborhood minus ``offset``. The inverted output marks
    pixels darker than that local level, so the boundary band around a
    note forms a closed region whose outer contour hugs the note.

    Args:
        channel: Single-channel uint8 image.
        params: Threshold parameters; defaults reproduce the reference
            detector (51x51 neighborhood, offset 1).

    Returns:
        Binary image as a 2D uint8 array containing only 0 and 255.
    """
    params = params or ThresholdParams()

    if params.enhance_contrast:
        lut = generate_contrast_lut(params.contrast_lower, params.contrast_upper)
        channel = apply_contrast_lut(channel, lut)

    return cv2.adaptiveThreshold(
        channel,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY_INV,
        params.block_size,
        params.offset,
    )
