"""UI update functions for the Gradio interface.

This module sits between the Gradio components and the cached pipeline
stages. Each function returns display-ready RGB images plus a short status
text. Pipeline errors are logged and turned into a status message so that
a bad upload or parameter combination never breaks the interface.
"""

import logging

import cv2
import numpy as np
from pydantic import ValidationError

from sticky_notes.app_state import register_image
from sticky_notes.cache import cached_channel_processing, cached_detection
from sticky_notes.pipeline import PipelineError
from sticky_notes.visualization import create_all_visualizations

logger = logging.getLogger(__name__)


def register_upload(image_rgb: np.ndarray | None) -> str | None:
    """Register an image uploaded through Gradio.

    Gradio delivers RGB arrays while the pipeline works on OpenCV's BGR
    order, so the image is converted before registration.

    Args:
        image_rgb: Uploaded RGB image, or None when the upload was cleared.

    Returns:
        The registered image ID, or None if no image was given.
    """
    if image_rgb is None:
        return None
    if image_rgb.ndim == 3 and image_rgb.shape[2] == 4:
        bgr = cv2.cvtColor(image_rgb, cv2.COLOR_RGBA2BGR)
    elif image_rgb.ndim == 2:
        bgr = cv2.cvtColor(image_rgb, cv2.COLOR_GRAY2BGR)
    else:
        bgr = cv2.cvtColor(image_rgb, cv2.COLOR_RGB2BGR)
    return register_image(bgr)


def update_channel_view(
    image_id: str | None,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
) -> tuple:
    """Update the per-channel binary mask views.

    Args:
        image_id: Unique identifier for the registered image.
        block_size: Neighborhood size for the adaptive threshold.
        offset: Constant subtracted from the local mean.
        enhance_contrast: Whether to stretch channels before thresholding.

    Returns:
        Tuple of (green_mask, u_mask, v_mask) RGB arrays; entries are None
        when no image is available or processing failed.
    """
    if image_id is None:
        return None, None, None

    try:
        fusion_result = cached_channel_processing(
            image_id, int(block_size), float(offset), bool(enhance_contrast)
        )
    except (PipelineError, ValidationError) as e:
        logger.error(f"Error in channel view update: {str(e)}")
        return None, None, None

    vis = create_all_visualizations(fusion_result, None)
    return vis.green_mask, vis.u_mask, vis.v_mask


def update_detection_view(
    image_id: str | None,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
    max_aspect_ratio: float,
    coef: float,
    thickness: int,
) -> tuple:
    """Update the annotated image, crop gallery and note count.

    Args:
        image_id: Unique identifier for the registered image.
        block_size: Neighborhood size for the adaptive threshold.
        offset: Constant subtracted from the local mean.
        enhance_contrast: Whether to stretch channels before thresholding.
        max_aspect_ratio: Largest accepted long/short side ratio.
        coef: Merge tolerance.
        thickness: Stroke width of the drawn boxes.

    Returns:
        Tuple of (annotated_rgb, crops_rgb, status_text).
    """
    if image_id is None:
        return None, [], "No image loaded"

    try:
        detection_result = cached_detection(
            image_id,
            int(block_size),
            float(offset),
            bool(enhance_contrast),
            float(max_aspect_ratio),
            float(coef),
            int(thickness),
        )
    except (PipelineError, ValidationError) as e:
        logger.error(f"Error in detection view update: {str(e)}")
        return None, [], f"Detection failed: {e}"

    vis = create_all_visualizations(None, detection_result)
    count = len(detection_result.candidates)
    status = f"{count} sticky note{'s' if count != 1 else ''} detected"
    return vis.annotated, vis.crops, status
