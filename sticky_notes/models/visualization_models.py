"""Models for visualization outputs.

This module defines the container used to hand per-stage images from the
detection pipeline to the user interface.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class VisualizationSet(BaseModel):
    """Complete set of visualizations for the user interface.

    Attributes:
        green_mask: RGB rendering of the green channel binary mask, or None.
        u_mask: RGB rendering of the U chroma channel binary mask, or None.
        v_mask: RGB rendering of the V chroma channel binary mask, or None.
        annotated: RGB annotated image with detection boxes, or None.
        crops: RGB crops of the detected notes.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    green_mask: np.ndarray | None = Field(None, description="Green channel mask")
    u_mask: np.ndarray | None = Field(None, description="U channel mask")
    v_mask: np.ndarray | None = Field(None, description="V channel mask")
    annotated: np.ndarray | None = Field(None, description="Annotated RGB image")
    crops: list[np.ndarray] = Field(default_factory=list, description="RGB crops")
