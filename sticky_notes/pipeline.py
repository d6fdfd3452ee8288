"""
Pipeline processing functions for sticky note detection.

This module contains the stage functions of the detection pipeline and the
``detect_and_annotate`` entry point that chains them:

1. ``process_channels``: split the image into green/U/V channels,
   binarize each one and collect the outer contours.
2. ``filter_candidates``: keep contours whose bounding box is large and
   close to square.
3. ``merge_detections``: collapse the per-channel duplicates.
4. ``render_detections``: draw the boxes and cut out the crops.

Every stage runs to completion before the next one starts. Failures inside
OpenCV are reported as ``ProcessingFailure``; nothing is returned from a
call that failed part way.
"""

import logging

import cv2
import numpy as np

from sticky_notes.merging import merge_candidates
from sticky_notes.note_detection import filter_contours, fuse_channel_contours
from sticky_notes.models.pipeline_models import (
    DetectionResult,
    FilterResult,
    FusionResult,
    MergeResult,
)
from sticky_notes.models.settings_models import (
    FilterParams,
    MergeParams,
    ProcessingParameters,
    RenderParams,
    ThresholdParams,
)
from sticky_notes.visualization import crop_candidates, draw_candidates


logger = logging.getLogger(__name__)


# Custom exceptions
class PipelineError(Exception):
    """Base exception for pipeline processing errors."""

    pass


class InvalidImageError(PipelineError):
    """Exception raised when the input is not a non-empty 3-channel uint8 image."""

    pass


class ProcessingFailure(PipelineError):
    """Exception raised when the image-processing backend fails."""

    pass


def validate_image(image) -> None:
    """Check that ``image`` is something the pipeline can process.

    Args:
        image: Candidate input image.

    Raises:
        InvalidImageError: If the image is missing, not a uint8 NumPy
            array, has a zero dimension, or does not have exactly three
            channels.
    """
    if image is None:
        raise InvalidImageError("No image provided")
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Expected a NumPy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"Expected uint8 pixels, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise InvalidImageError(
            f"Expected a 3-channel color image, got shape {image.shape}"
        )
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImageError(f"Image has zero size: {image.shape}")


def process_channels(image: np.ndarray, params: ThresholdParams) -> FusionResult:
    """Binarize every detection channel and gather the raw contours.

    Args:
        image: BGR image as a NumPy array
        params: Threshold parameters

    Returns:
        FusionResult with per-channel masks and concatenated contours
    """
    try:
        channels, contours = fuse_channel_contours(image, params)
    except cv2.error as e:
        logger.error(f"Error in channel processing: {str(e)}")
        raise ProcessingFailure("Channel processing failed") from e

    height, width = image.shape[:2]
    return FusionResult(
        channels=channels, contours=contours, image_size=(int(width), int(height))
    )


def filter_candidates(fusion_result: FusionResult, params: FilterParams) -> FilterResult:
    """Turn raw contours into size- and aspect-checked candidates.

    Args:
        fusion_result: Contours from all channels
        params: Filter parameters

    Returns:
        FilterResult with the admitted candidates
    """
    width, height = fusion_result.image_size
    candidates = filter_contours(fusion_result.contours, width, height, params)
    rejected = len(fusion_result.contours) - len(candidates)
    logger.debug(f"Admitted {len(candidates)} candidates, rejected {rejected}")
    return FilterResult(candidates=candidates, rejected=rejected)


def merge_detections(filter_result: FilterResult, params: MergeParams) -> MergeResult:
    """Collapse duplicate candidates coming from different channels.

    Args:
        filter_result: Admitted candidates
        params: Merge parameters

    Returns:
        MergeResult with one candidate per detected note
    """
    merged = merge_candidates(filter_result.candidates, params.coef)
    return MergeResult(candidates=merged)


def render_detections(
    image: np.ndarray, merge_result: MergeResult, params: RenderParams
) -> DetectionResult:
    """Draw the merged candidates and crop their regions.

    Args:
        image: Source BGR image
        merge_result: Merged candidates
        params: Rendering parameters

    Returns:
        DetectionResult with annotated copy and crop views
    """
    try:
        annotated = draw_candidates(image, merge_result.candidates, params)
    except cv2.error as e:
        logger.error(f"Error in rendering: {str(e)}")
        raise ProcessingFailure("Rendering failed") from e

    crops = crop_candidates(image, merge_result.candidates)
    return DetectionResult(
        annotated=annotated, crops=crops, candidates=merge_result.candidates
    )


def detect_and_annotate(
    image: np.ndarray, params: ProcessingParameters | None = None
) -> DetectionResult:
    """Detect sticky notes and return the annotated image and the crops.

    Args:
        image: Input BGR image (3-channel uint8).
        params: Pipeline parameters; defaults reproduce the reference
            detector.

    Returns:
        DetectionResult. When nothing is detected, ``crops`` is empty and
        ``annotated`` is an unmodified copy of ``image``.

    Raises:
        InvalidImageError: If the input cannot be processed.
        ProcessingFailure: If OpenCV fails during processing.
    """
    params = params or ProcessingParameters()

    try:
        validate_image(image)
    except InvalidImageError as e:
        logger.warning(f"Rejected input image: {e}")
        raise

    # Step 1: Channel binarization and contour extraction
    fusion_result = process_channels(image, params.threshold)

    # Step 2: Size and aspect filtering
    filter_result = filter_candidates(fusion_result, params.filter)

    # Step 3: Containment merge
    merge_result = merge_detections(filter_result, params.merge)

    # Step 4: Drawing and cropping
    detection_result = render_detections(image, merge_result, params.render)

    logger.info(f"Detected {len(detection_result.candidates)} sticky notes")
    return detection_result
