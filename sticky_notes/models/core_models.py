"""Core domain models for sticky note detection."""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Point(BaseModel):
    """Integer pixel coordinate with (0,0) at the top-left of the image."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Horizontal pixel position")
    y: int = Field(..., description="Vertical pixel position")


class BoundingBox(BaseModel):
    """Axis-aligned box spanning the extreme points of a contour.

    The box is stored as inclusive min/max corners rather than x/y/w/h so
    that the width and height match the extent of the contour points
    (``max - min``) instead of the pixel count OpenCV's ``boundingRect``
    reports.

    Attributes:
        min_x: Left edge in pixels.
        min_y: Top edge in pixels.
        max_x: Right edge in pixels.
        max_y: Bottom edge in pixels.
    """

    model_config = ConfigDict(frozen=True)

    min_x: int = Field(..., ge=0, description="Left edge in pixels")
    min_y: int = Field(..., ge=0, description="Top edge in pixels")
    max_x: int = Field(..., ge=0, description="Right edge in pixels")
    max_y: int = Field(..., ge=0, description="Bottom edge in pixels")

    @model_validator(mode="after")
    def _check_ordering(self) -> "BoundingBox":
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"box corners out of order: ({self.min_x},{self.min_y})-"
                f"({self.max_x},{self.max_y})"
            )
        return self

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def aspect_ratio(self) -> float:
        """Ratio of the longer side to the shorter side.

        Returns:
            ``max(width, height) / min(width, height)``; ``inf`` when the
            shorter side is zero.
        """
        longer = max(self.width, self.height)
        shorter = min(self.width, self.height)
        if shorter == 0:
            return float("inf")
        return longer / shorter


class Candidate(BaseModel):
    """A rectangle that survived size and aspect filtering.

    The corners always derive from a single BoundingBox and are ordered
    clockwise starting at the top-left, which is the order OpenCV expects
    when the rectangle is drawn as a closed polygon.

    Attributes:
        box: Bounding box the candidate was built from.
    """

    model_config = ConfigDict(frozen=True)

    box: BoundingBox

    @classmethod
    def from_corners(cls, min_x: int, min_y: int, max_x: int, max_y: int) -> "Candidate":
        return cls(box=BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y))

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        b = self.box
        return (
            Point(x=b.min_x, y=b.min_y),
            Point(x=b.max_x, y=b.min_y),
            Point(x=b.max_x, y=b.max_y),
            Point(x=b.min_x, y=b.max_y),
        )

    @property
    def top_left(self) -> Point:
        return self.corners[0]

    @property
    def bottom_right(self) -> Point:
        return self.corners[2]

    def to_contour(self) -> np.ndarray:
        """Return the corners as an OpenCV contour of shape (4, 1, 2)."""
        pts = [(p.x, p.y) for p in self.corners]
        return np.array(pts, dtype=np.int32).reshape(-1, 1, 2)
