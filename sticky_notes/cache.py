"""Caching mechanisms for the sticky note pipeline.

This module provides cached versions of the pipeline stages so that the
interactive demo stays responsive while parameters are adjusted. Each stage
builds upon the cached result of the previous one, so changing only a
later-stage parameter (for example the merge tolerance) reuses the channel
masks and contours computed earlier.

Images are referenced by the IDs handed out by ``app_state``; all other
arguments are plain scalars so they can serve as cache keys.
"""

from functools import lru_cache

from sticky_notes.app_state import get_image_by_id
from sticky_notes.models import (
    FilterParams,
    MergeParams,
    RenderParams,
    ThresholdParams,
)
from sticky_notes.pipeline import (
    InvalidImageError,
    filter_candidates,
    merge_detections,
    process_channels,
    render_detections,
    validate_image,
)

CHANNEL_CACHE_SIZE = 16
CANDIDATE_CACHE_SIZE = 32
DETECTION_CACHE_SIZE = 32


def _registered_image(image_id: str):
    image = get_image_by_id(image_id)
    if image is None:
        raise InvalidImageError(f"Unknown image id: {image_id}")
    validate_image(image)
    return image


# Stage 1: Channel processing
@lru_cache(maxsize=CHANNEL_CACHE_SIZE)
def cached_channel_processing(
    image_id: str,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
):
    """Cached version of channel binarization and contour extraction.

    Args:
        image_id: Unique identifier for the registered image.
        block_size: Neighborhood size for the adaptive threshold.
        offset: Constant subtracted from the local mean.
        enhance_contrast: Whether to stretch channels before thresholding.

    Returns:
        FusionResult with per-channel masks and concatenated contours.
    """
    image = _registered_image(image_id)
    params = ThresholdParams(
        block_size=block_size, offset=offset, enhance_contrast=enhance_contrast
    )
    return process_channels(image, params)


# Stage 2 and 3: Filtering and merging
@lru_cache(maxsize=CANDIDATE_CACHE_SIZE)
def cached_candidate_detection(
    image_id: str,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
    max_aspect_ratio: float,
    coef: float,
):
    """Cached version of candidate filtering followed by the merge.

    Builds upon the cached channel processing result.

    Args:
        image_id: Unique identifier for the registered image.
        block_size: Neighborhood size from the channel stage.
        offset: Threshold offset from the channel stage.
        enhance_contrast: Contrast option from the channel stage.
        max_aspect_ratio: Largest accepted long/short side ratio.
        coef: Merge tolerance.

    Returns:
        MergeResult with the merged candidates.
    """
    fusion_result = cached_channel_processing(
        image_id, block_size, offset, enhance_contrast
    )
    filter_result = filter_candidates(
        fusion_result, FilterParams(max_aspect_ratio=max_aspect_ratio)
    )
    return merge_detections(filter_result, MergeParams(coef=coef))


# Stage 4: Rendering
@lru_cache(maxsize=DETECTION_CACHE_SIZE)
def cached_detection(
    image_id: str,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
    max_aspect_ratio: float,
    coef: float,
    thickness: int,
):
    """Cached version of the full detection, including rendering.

    Args:
        image_id: Unique identifier for the registered image.
        block_size: Neighborhood size from the channel stage.
        offset: Threshold offset from the channel stage.
        enhance_contrast: Contrast option from the channel stage.
        max_aspect_ratio: Aspect limit from the filter stage.
        coef: Merge tolerance from the merge stage.
        thickness: Stroke width of the drawn boxes.

    Returns:
        DetectionResult with the annotated image and crops.
    """
    image = _registered_image(image_id)
    merge_result = cached_candidate_detection(
        image_id, block_size, offset, enhance_contrast, max_aspect_ratio, coef
    )
    return render_detections(image, merge_result, RenderParams(thickness=thickness))


def clear_all_caches() -> None:
    """Clear the LRU caches of every pipeline stage."""
    cached_channel_processing.cache_clear()
    cached_candidate_detection.cache_clear()
    cached_detection.cache_clear()
