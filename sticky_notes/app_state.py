"""Application state management for image registration and caching.

This module provides functionality for registering and retrieving images
by unique identifiers so that the cached pipeline stages can be keyed on a
short hashable string instead of the pixel array. Images are identified by
CRC32 checksums of their binary data.
"""

import zlib
import cv2
import numpy as np

# In-memory registry of images by ID
_image_registry: dict[str, np.ndarray] = {}


def load_fixed_image(path: str = "img/sticky_notes.jpg") -> np.ndarray | None:
    """Load an image file as a BGR NumPy array.

    Args:
        path: File path to the image (default "img/sticky_notes.jpg").

    Returns:
        BGR image as a NumPy array, or None if the file cannot be read.
    """
    return cv2.imread(path, cv2.IMREAD_COLOR)


def register_image(image: np.ndarray, image_id: str | None = None) -> str:
    """Register an image in the global registry with a unique identifier.

    If no ID is provided, generates one from the CRC32 hash of the image's
    binary data and shape, so the same pixels always get the same ID.

    Args:
        image: BGR image to store.
        image_id: Optional identifier to use instead of the generated one.

    Returns:
        The image identifier as a string.
    """
    if image_id is None:
        data = image.tobytes() + repr(image.shape).encode("ascii")
        crc = zlib.crc32(data) & 0xFFFFFFFF
        image_id = f"img_{crc:08x}"

    _image_registry[image_id] = image
    return image_id


def get_image_id(image: np.ndarray) -> str:
    """Register an image and return its identifier."""
    return register_image(image)


def get_image_by_id(image_id: str) -> np.ndarray | None:
    """Retrieve a registered image by its identifier.

    Args:
        image_id: Unique identifier for the image.

    Returns:
        The registered image as a NumPy array, or None if not found.
    """
    return _image_registry.get(image_id)


def clear_registry() -> None:
    """Forget every registered image."""
    _image_registry.clear()
