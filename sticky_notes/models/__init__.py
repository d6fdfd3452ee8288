"""Domain models for the sticky-notes package.

This module provides a centralized location for all data models used
throughout the detection pipeline. It includes:

- Core domain models (Point, BoundingBox, Candidate)
- Pipeline processing stage results (ChannelResult, FusionResult, etc.)
- Configuration parameters for each processing stage
- Visualization data containers

All models are built using Pydantic for data validation, ensuring type
safety and clear interfaces between pipeline components.
"""

# Re-export core models
from sticky_notes.models.core_models import Point, BoundingBox, Candidate

# Re-export pipeline models
from sticky_notes.models.pipeline_models import (
    ChannelResult,
    FusionResult,
    FilterResult,
    MergeResult,
    DetectionResult,
)

# Re-export setting models
from sticky_notes.models.settings_models import (
    ThresholdParams,
    FilterParams,
    MergeParams,
    RenderParams,
    ProcessingParameters,
)

# Re-export visualization models
from sticky_notes.models.visualization_models import VisualizationSet
