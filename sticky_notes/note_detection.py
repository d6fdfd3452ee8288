"""Note detection functions using contour analysis.

This module extracts raw contours from the binarized channels and decides
which of them look like sticky notes. A contour is admitted when its
bounding box is large relative to the image, does not span the whole
frame, and is close to square.
"""

import logging

import cv2
import numpy as np

from sticky_notes.image_processing import binarize_channel, split_detection_channels
from sticky_notes.models.core_models import BoundingBox, Candidate
from sticky_notes.models.pipeline_models import ChannelResult
from sticky_notes.models.settings_models import FilterParams, ThresholdParams

logger = logging.getLogger(__name__)


def find_channel_contours(binary: np.ndarray) -> list[np.ndarray]:
    """Find the outer boundaries of the foreground regions in a binary mask.

    Args:
        binary: 2D uint8 mask with foreground pixels set to 255.

    Returns:
        List of contours as returned by OpenCV, outer boundaries only.
    """
    # Find external contours only (no nested contours)
    contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    return list(contours)


def fuse_channel_contours(
    image: np.ndarray, params: ThresholdParams | None = None
) -> tuple[list[ChannelResult], list[np.ndarray]]:
    """Run binarization and contour extraction over every detection channel.

    The contours are concatenated in channel order (green, U, V). Nothing
    is deduplicated here; the same note usually appears once per channel
    and is collapsed later by the merge stage.

    Args:
        image: Input BGR image as a 3-channel uint8 array.
        params: Threshold parameters shared by all channels.

    Returns:
        Tuple of (per-channel results, concatenated contours).
    """
    channels: list[ChannelResult] = []
    contours: list[np.ndarray] = []

    for name, plane in split_detection_channels(image).items():
        binary = binarize_channel(plane, params)
        found = find_channel_contours(binary)
        logger.debug(f"Channel {name}: {len(found)} contours")

        channels.append(ChannelResult(name=name, binary_mask=binary))
        contours.extend(found)

    return channels, contours


def bounding_box(contour: np.ndarray) -> BoundingBox | None:
    """Compute the extreme-point bounding box of a contour.

    Args:
        contour: Contour points, shape (N, 1, 2) or (N, 2).

    Returns:
        The bounding box, or None when the contour has fewer than two
        points and therefore no usable geometry.
    """
    pts = np.asarray(contour).reshape(-1, 2)
    if len(pts) < 2:
        return None

    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)
    return BoundingBox(
        min_x=int(min_x), min_y=int(min_y), max_x=int(max_x), max_y=int(max_y)
    )


def min_side_length(width: int, height: int, params: FilterParams | None = None) -> int:
    """Smallest side length (exclusive) a note may have in a width x height image."""
    params = params or FilterParams()
    return min(width, height) // params.min_side_divisor


def is_enough_size(
    box: BoundingBox, width: int, height: int, params: FilterParams | None = None
) -> bool:
    """Check that both sides are above the minimum and below the frame size."""
    params = params or FilterParams()
    min_side = min_side_length(width, height, params)

    if box.width <= min_side or box.width >= width - params.edge_margin:
        return False
    if box.height <= min_side or box.height >= height - params.edge_margin:
        return False
    return True


def filter_contour(
    contour: np.ndarray,
    width: int,
    height: int,
    params: FilterParams | None = None,
) -> Candidate | None:
    """Admit or reject a single raw contour.

    Args:
        contour: Raw contour points.
        width: Source image width in pixels.
        height: Source image height in pixels.
        params: Filter parameters.

    Returns:
        A Candidate built from the contour's bounding box, or None when
        the contour is degenerate, too small, spans the frame, or is not
        close enough to square.
    """
    params = params or FilterParams()

    box = bounding_box(contour)
    if box is None:
        return None

    if not is_enough_size(box, width, height, params):
        return None

    if box.aspect_ratio > params.max_aspect_ratio:
        return None

    return Candidate(box=box)


def filter_contours(
    contours: list[np.ndarray],
    width: int,
    height: int,
    params: FilterParams | None = None,
) -> list[Candidate]:
    """Apply ``filter_contour`` to every contour, keeping input order."""
    candidates: list[Candidate] = []

    for contour in contours:
        candidate = filter_contour(contour, width, height, params)
        if candidate is not None:
            candidates.append(candidate)

    return candidates
