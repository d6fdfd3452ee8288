"""
Visualization functions for the sticky note pipeline.

This module draws the final detections onto the source image, cuts out the
detected regions, and prepares per-stage images for display in the user
interface.
"""

import cv2
import numpy as np
from collections.abc import Sequence

from sticky_notes.models.core_models import Candidate
from sticky_notes.models.pipeline_models import DetectionResult, FusionResult
from sticky_notes.models.settings_models import RenderParams
from sticky_notes.models.visualization_models import VisualizationSet


def draw_candidates(
    image: np.ndarray,
    candidates: Sequence[Candidate],
    params: RenderParams | None = None,
) -> np.ndarray:
    """Outline every candidate on a copy of the image.

    Args:
        image: Source BGR image. It is never modified.
        candidates: Candidates to draw, each as its closed 4-corner polygon.
        params: Stroke color (BGR) and thickness.

    Returns:
        A new array with the same shape as ``image``. With no candidates it
        is a plain copy.
    """
    params = params or RenderParams()
    drawn = image.copy()
    if not candidates:
        return drawn

    polygons = [c.to_contour() for c in candidates]
    cv2.drawContours(drawn, polygons, -1, params.color, params.thickness)
    return drawn


def crop_candidates(
    image: np.ndarray, candidates: Sequence[Candidate]
) -> list[np.ndarray]:
    """Cut the region of every candidate out of the image.

    The crops are views, not copies: they share memory with ``image`` and
    span ``[min_y, max_y) x [min_x, max_x)``.

    Args:
        image: Source image.
        candidates: Candidates in the order the crops should be returned.

    Returns:
        One array view per candidate.
    """
    crops = []
    for c in candidates:
        top_left, bottom_right = c.top_left, c.bottom_right
        crops.append(image[top_left.y : bottom_right.y, top_left.x : bottom_right.x])
    return crops


def create_binary_visualization(binary_mask: np.ndarray | None) -> np.ndarray | None:
    """Convert a binary mask to RGB format for display.

    Args:
        binary_mask: 2D binary image array, or None.

    Returns:
        3-channel RGB version of the binary mask, or None if input is None.
    """
    if binary_mask is None:
        return None
    return cv2.cvtColor(binary_mask, cv2.COLOR_GRAY2RGB)


def create_all_visualizations(
    fusion_result: FusionResult | None,
    detection_result: DetectionResult | None,
) -> VisualizationSet:
    """Create the complete set of display images from pipeline results.

    Args:
        fusion_result: Per-channel masks and contours, or None.
        detection_result: Final annotated image and crops (BGR), or None.

    Returns:
        VisualizationSet with RGB images. Fields are None when the
        corresponding input is missing.
    """
    masks: dict[str, np.ndarray | None] = {"green": None, "u": None, "v": None}
    if fusion_result is not None:
        for channel in fusion_result.channels:
            masks[channel.name] = create_binary_visualization(channel.binary_mask)

    annotated = None
    crops: list[np.ndarray] = []
    if detection_result is not None and detection_result.annotated is not None:
        annotated = cv2.cvtColor(detection_result.annotated, cv2.COLOR_BGR2RGB)
        crops = [
            cv2.cvtColor(np.ascontiguousarray(crop), cv2.COLOR_BGR2RGB)
            for crop in detection_result.crops
            if crop.size > 0
        ]

    return VisualizationSet(
        green_mask=masks["green"],
        u_mask=masks["u"],
        v_mask=masks["v"],
        annotated=annotated,
        crops=crops,
    )
