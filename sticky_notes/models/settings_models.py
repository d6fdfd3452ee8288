"""Parameter models for pipeline configuration.

This module defines Pydantic models that encapsulate the configurable
parameters for each stage of the sticky note detection pipeline. The
defaults reproduce the reference detector exactly; changing them is only
meant for experimentation through the interactive demo.
"""

from pydantic import BaseModel, Field, field_validator, model_validator


class ThresholdParams(BaseModel):
    """Configuration parameters for per-channel binarization.

    Controls the adaptive Gaussian threshold applied to each intensity
    channel before contour extraction, plus the optional contrast stretch
    that can run ahead of it.

    Attributes:
        block_size: Side of the square neighborhood for the local mean (odd, default 51).
        offset: Constant subtracted from the local mean (default 1).
        enhance_contrast: Stretch each channel through a lookup table first.
        contrast_lower: Intensities below this map to 0 when stretching (default 49).
        contrast_upper: Intensities above this map to 255 when stretching (default 205).
    """

    block_size: int = Field(
        51, ge=3, le=255, description="Neighborhood size for the local mean"
    )
    offset: float = Field(1.0, description="Constant subtracted from the local mean")
    enhance_contrast: bool = Field(
        False, description="Apply the contrast lookup table before thresholding"
    )
    contrast_lower: int = Field(49, ge=0, le=255, description="Lower stretch bound")
    contrast_upper: int = Field(205, ge=0, le=255, description="Upper stretch bound")

    @field_validator("block_size")
    @classmethod
    def _block_size_odd(cls, v: int) -> int:
        if v % 2 == 0:
            raise ValueError("block_size must be odd")
        return v

    @model_validator(mode="after")
    def _bounds_ordered(self) -> "ThresholdParams":
        if self.contrast_lower >= self.contrast_upper:
            raise ValueError("contrast_lower must be below contrast_upper")
        return self


class FilterParams(BaseModel):
    """Configuration parameters for geometric candidate admission.

    A box is admitted when each side is longer than
    ``min(W, H) // min_side_divisor`` and shorter than the image side minus
    ``edge_margin``, and its long/short side ratio stays within
    ``max_aspect_ratio``.

    Attributes:
        min_side_divisor: Divisor of the shorter image side giving the minimum box side (default 5).
        edge_margin: Boxes this close to the full image size are treated as the frame (default 2).
        max_aspect_ratio: Largest accepted long/short side ratio (default 1.1).
    """

    min_side_divisor: int = Field(
        5, ge=1, description="Divisor for the minimum accepted side length"
    )
    edge_margin: int = Field(2, ge=0, description="Margin to the full image size")
    max_aspect_ratio: float = Field(
        1.1, ge=1.0, description="Largest accepted long/short side ratio"
    )


class MergeParams(BaseModel):
    """Configuration parameters for the containment merge.

    Attributes:
        coef: Fraction by which a representative box is grown before testing
            containment (default 0.2).
    """

    coef: float = Field(
        0.2, ge=0.0, lt=1.0, description="Tolerance used to expand boxes"
    )


class RenderParams(BaseModel):
    """Configuration parameters for drawing detections.

    Attributes:
        color: Stroke color in BGR order (default pure red).
        thickness: Stroke width in pixels (default 3).
    """

    color: tuple[int, int, int] = Field(
        (0, 0, 255), description="Stroke color in BGR order"
    )
    thickness: int = Field(3, ge=1, description="Stroke width in pixels")

    @field_validator("color")
    @classmethod
    def _color_in_range(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(c < 0 or c > 255 for c in v):
            raise ValueError("color components must be within 0-255")
        return v


class ProcessingParameters(BaseModel):
    """Complete configuration for the detection pipeline.

    Aggregates the parameter sets for every stage so a single object can be
    passed to ``detect_and_annotate``.

    Attributes:
        threshold: Parameters for channel binarization.
        filter: Parameters for candidate admission.
        merge: Parameters for the containment merge.
        render: Parameters for drawing the annotated image.
    """

    threshold: ThresholdParams = Field(
        default_factory=ThresholdParams, description="Binarization parameters"
    )
    filter: FilterParams = Field(
        default_factory=FilterParams, description="Candidate filter parameters"
    )
    merge: MergeParams = Field(
        default_factory=MergeParams, description="Merge parameters"
    )
    render: RenderParams = Field(
        default_factory=RenderParams, description="Rendering parameters"
    )
