"""Models for representing pipeline processing stages.

This module contains Pydantic models that encapsulate the results of each
stage in the sticky note detection pipeline. Each model holds the output of
one step so the stages can be cached, inspected and tested on their own.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from sticky_notes.models.core_models import Candidate


class ChannelResult(BaseModel):
    """Binarization result for a single intensity channel.

    Attributes:
        name: Channel label ("green", "u" or "v").
        binary_mask: 2D uint8 array with values 0 and 255.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., description="Channel label")
    binary_mask: np.ndarray = Field(..., description="Inverted adaptive threshold")


class FusionResult(BaseModel):
    """Raw contours gathered from every channel.

    The contour list is the plain concatenation of each channel's contours
    in channel order. Duplicates across channels are expected and are
    resolved by the merge stage.

    Attributes:
        channels: Per-channel binarization results.
        contours: Concatenated raw contours from all channels.
        image_size: Source image size as (width, height).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    channels: list[ChannelResult] = Field(
        default_factory=list, description="Per-channel results"
    )
    contours: list[np.ndarray] = Field(
        default_factory=list, description="Concatenated raw contours"
    )
    image_size: tuple[int, int] = Field((0, 0), description="Image (width, height)")


class FilterResult(BaseModel):
    """Candidates that passed the size and aspect ratio checks.

    Attributes:
        candidates: Surviving candidates in contour order.
        rejected: Number of contours that were discarded.
    """

    candidates: list[Candidate] = Field(
        default_factory=list, description="Admitted candidates"
    )
    rejected: int = Field(0, ge=0, description="Number of rejected contours")


class MergeResult(BaseModel):
    """Candidates after the containment merge, in scan order."""

    candidates: list[Candidate] = Field(
        default_factory=list, description="Merged candidates"
    )


class DetectionResult(BaseModel):
    """Final output of a detection call.

    The annotated image owns its pixels. The crops are NumPy views into the
    source image, so the source must stay alive and unmodified while they
    are used.

    Attributes:
        annotated: Copy of the source with every candidate outlined.
        crops: One view per candidate, in candidate order.
        candidates: The merged candidates the crops were cut from.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotated: np.ndarray | None = Field(None, description="Annotated image copy")
    crops: list[np.ndarray] = Field(
        default_factory=list, description="Views into the source image"
    )
    candidates: list[Candidate] = Field(
        default_factory=list, description="Merged candidates"
    )
